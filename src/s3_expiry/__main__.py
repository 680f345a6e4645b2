"""Command-line interface for s3-expiry.

Small operator tools built with Typer on top of the library:

- ``epoch VALUE``: print the absolute UTC instant a bare number stands for.
- ``expires-in VALUE``: print the signed seconds from now an expiration
  resolves to (numbers, date strings).
- ``url PATH``: print the public URL of an object.

``--now`` freezes the clock for ``epoch`` and ``expires-in`` so results can
be reproduced. Invalid input exits with code 1 and a message on stderr; an
unparsable ``--now`` is a usage error (exit code 2).
"""
from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

import typer

from .config import get_settings
from .errors import InvalidTimestamp, TimeInputError
from .paths import default_public_base, public_url
from .time_utils import Clock, coerce_number, epoch, expiration_in, fixed_clock, parse_instant

app = typer.Typer(help="Resolve ambiguous timestamps and expirations")


@app.callback()
def main() -> None:
    """Configure logging from settings before any command runs."""
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)


def _clock_from_option(now: Optional[str]) -> Optional[Clock]:
    """Build a frozen clock from ``--now``; a bad value is a usage error."""
    if now is None:
        return None
    try:
        return fixed_clock(parse_instant(now))
    except TimeInputError as exc:
        raise typer.BadParameter(f"not an ISO 8601 instant: {now!r}", param_hint="'--now'") from exc


def _format_instant(instant: datetime) -> str:
    return instant.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@app.command("epoch")
def epoch_command(
    value: str = typer.Argument(..., help="Seconds from now, or epoch s / ms / µs"),
    now: Optional[str] = typer.Option(None, help="Freeze the current time (ISO 8601)"),
) -> None:
    """Print the UTC instant a bare number represents."""
    clock = _clock_from_option(now)
    try:
        number = coerce_number(value)
        if number is None:
            raise InvalidTimestamp(value)
        instant = epoch(number, clock=clock)
    except TimeInputError as exc:
        typer.echo(f"error: {exc}: {value!r}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(_format_instant(instant))


@app.command("expires-in")
def expires_in_command(
    value: str = typer.Argument(..., help="Seconds, epoch s / ms, or a date string"),
    now: Optional[str] = typer.Option(None, help="Freeze the current time (ISO 8601)"),
) -> None:
    """Print the number of seconds until an expiration."""
    clock = _clock_from_option(now)
    try:
        seconds = expiration_in(value, clock=clock)
    except TimeInputError as exc:
        typer.echo(f"error: {exc}: {value!r}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(str(seconds))


@app.command("url")
def url_command(
    path: str = typer.Argument(..., help="Object path"),
    bucket: Optional[str] = typer.Option(None, help="Override S3_BUCKET"),
    public_base: Optional[str] = typer.Option(
        None, "--public-url", help="Override S3_PUBLIC_URL"
    ),
) -> None:
    """Print the public URL of an object."""
    settings = get_settings()
    base = public_base or settings.S3_PUBLIC_URL
    if not base:
        effective_bucket = bucket or settings.S3_BUCKET
        if not effective_bucket:
            typer.echo("error: provide --bucket, --public-url, S3_BUCKET or S3_PUBLIC_URL", err=True)
            raise typer.Exit(code=1)
        base = default_public_base(effective_bucket)
    typer.echo(public_url(base, path))


if __name__ == "__main__":  # pragma: no cover
    app()
