"""Timestamp classification and expiration normalization.

Callers hand us bare numbers whose unit is not tagged. The unit is inferred
from magnitude alone, using four disjoint buckets whose upper bound is
inclusive:

    0    < x <= 1e7   relative offset in seconds from now
    1e7  < x <= 1e10  UNIX epoch seconds
    1e10 < x <= 1e13  UNIX epoch milliseconds
    1e13 < x <= 1e16  UNIX epoch microseconds (timestamps only)

Public Functions:
    epoch: Convert a bare number into a UTC-aware datetime
    expiration_in: Convert a number, date string or datetime into signed
        seconds from now
    epoch_ms_to_dt / dt_to_epoch_ms: Millisecond <-> datetime conversion

Design Invariant:
    Every conversion goes through integer milliseconds since the epoch and
    truncates (floor), never rounds. Returned datetimes are UTC-aware with
    millisecond precision; naive datetimes received as input are read as UTC.
    The clock is read at most once per call.
"""
from __future__ import annotations

import logging
import math
import numbers
import re
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from fractions import Fraction
from typing import Any, Callable, Optional, Union

from pydantic import TypeAdapter, ValidationError

from .errors import InvalidExpiration, InvalidTimestamp

logger = logging.getLogger(__name__)

# Inclusive upper bounds of each magnitude bucket.
RELATIVE_MAX = 10_000_000
SECONDS_MAX = 10_000_000_000
MILLISECONDS_MAX = 10_000_000_000_000
MICROSECONDS_MAX = 10_000_000_000_000_000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)
_DATETIME_ADAPTER: TypeAdapter[datetime] = TypeAdapter(datetime)

_NUMERIC_STRING = re.compile(r"^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$")

Clock = Callable[[], datetime]
Number = Union[int, float, Decimal, Fraction]

# A number in seconds (3600 means one hour), an epoch timestamp, a date
# string, or a datetime.
Expiration = Union[int, float, Decimal, Fraction, str, datetime]
# Expiration that callers may leave unset; None is replaced by the caller's
# configured default before normalization.
DefaultExpiration = Optional[Expiration]


def utc_now() -> datetime:
    """Default clock: the current wall-clock instant in UTC."""
    return datetime.now(tz=timezone.utc)


def fixed_clock(instant: datetime) -> Clock:
    """Return a clock that always reports ``instant``.

    Naive datetimes are pinned to UTC so arithmetic never depends on the
    host timezone.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=timezone.utc)

    def _clock() -> datetime:
        return instant

    return _clock


def epoch_ms_to_dt(ms: int) -> datetime:
    """Convert integer epoch milliseconds to a timezone-aware UTC datetime."""
    return _EPOCH + timedelta(milliseconds=ms)


def dt_to_epoch_ms(dt: datetime) -> int:
    """Convert a datetime to integer epoch milliseconds, truncating.

    Naive datetimes are interpreted as UTC.
    """
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // _ONE_MS


def _as_number(value: Any) -> Optional[Number]:
    """Return ``value`` as a number, or None when it is not one.

    Any ``numbers.Real`` (numpy scalars, ``Fraction``) and ``Decimal`` are
    accepted; integral values are converted to ``int``.
    """
    # bool is an int subclass but never a meaningful timestamp
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, (numbers.Real, Decimal)):
        return value
    return None


def _is_finite(value: Number) -> bool:
    if isinstance(value, int):
        return True
    if isinstance(value, Decimal):
        return value.is_finite()
    return math.isfinite(value)


def _floor_div(value: Number, divisor: int) -> int:
    if isinstance(value, int):
        return value // divisor
    # Decimal // truncates toward zero, so divide then floor
    return math.floor(value / divisor)


def coerce_number(text: str) -> Optional[Number]:
    """Return ``text`` as an int or float when it is a plain decimal number."""
    stripped = text.strip()
    if not _NUMERIC_STRING.match(stripped):
        return None
    try:
        return int(stripped)
    except ValueError:
        return float(stripped)


def _now_ms(clock: Optional[Clock]) -> int:
    return dt_to_epoch_ms((clock or utc_now)())


def epoch(timestamp: Number, *, clock: Optional[Clock] = None) -> datetime:
    """Convert a bare number into an absolute instant.

    The unit is inferred from magnitude:

    - ``0 < x <= 1e7``: seconds from now. The current time is truncated to the
      second before ``x`` is added.
    - ``1e7 < x <= 1e10``: UNIX epoch **seconds**.
    - ``1e10 < x <= 1e13``: UNIX epoch **milliseconds**.
    - ``1e13 < x <= 1e16``: UNIX epoch **microseconds**.

    Args:
        timestamp: The number to classify.
        clock: Optional clock used for the relative bucket; defaults to the
            UTC wall clock.

    Returns:
        A UTC-aware datetime with millisecond precision.

    Raises:
        InvalidTimestamp: For non-numbers, NaN, infinities, ``x <= 0`` and
            ``x > 1e16``.
    """
    number = _as_number(timestamp)
    if number is None or not _is_finite(number):
        raise InvalidTimestamp(timestamp)
    timestamp = number
    if timestamp <= 0 or timestamp > MICROSECONDS_MAX:
        raise InvalidTimestamp(timestamp)

    if timestamp <= RELATIVE_MAX:
        now_seconds = _now_ms(clock) // 1000
        ms = now_seconds * 1000 + math.floor(timestamp * 1000)
        unit = "relative seconds"
    elif timestamp <= SECONDS_MAX:
        ms = math.floor(timestamp * 1000)
        unit = "epoch seconds"
    elif timestamp <= MILLISECONDS_MAX:
        ms = math.floor(timestamp)
        unit = "epoch milliseconds"
    else:
        ms = _floor_div(timestamp, 1000)
        unit = "epoch microseconds"

    logger.debug("timestamp %s classified as %s -> %d ms", timestamp, unit, ms)
    return epoch_ms_to_dt(ms)


def parse_instant(text: str) -> datetime:
    """Parse a date string into a datetime.

    Accepts the string forms pydantic validates as ``datetime`` (ISO 8601 /
    RFC 3339 with or without offset). Plain numbers are rejected: their unit
    is decided by the magnitude buckets, not by the date parser.

    Raises:
        InvalidExpiration: If the string is not a recognizable instant.
    """
    if coerce_number(text) is not None:
        raise InvalidExpiration(text)
    try:
        return _DATETIME_ADAPTER.validate_python(text.strip())
    except ValidationError as exc:
        raise InvalidExpiration(text, wrapped=exc) from exc


def _numeric_expiration_in(expiration: Number, clock: Optional[Clock]) -> int:
    if not _is_finite(expiration) or expiration < 0 or expiration > MILLISECONDS_MAX:
        # NaN, infinities, negatives and microsecond-scale values are ambiguous
        raise InvalidExpiration(expiration)

    if expiration <= RELATIVE_MAX:
        # zero is valid and means "expires now"
        return math.floor(expiration)

    now_ms = _now_ms(clock)
    if expiration <= SECONDS_MAX:
        # single floor, applied to the millisecond difference
        return _floor_div(expiration * 1000 - now_ms, 1000)
    return _floor_div(expiration - now_ms, 1000)


def expiration_in(expiration: Expiration, *, clock: Optional[Clock] = None) -> int:
    """Convert an expiration into a relative number of seconds from now.

    Numbers are checked first, as the most common case:

    - ``0 <= x <= 1e7``: already seconds from now, returned floored.
    - ``1e7 < x <= 1e10``: UNIX epoch **seconds**.
    - ``1e10 < x <= 1e13``: UNIX epoch **milliseconds**.

    Strings holding a plain number (``"3600"``) follow the same buckets;
    other strings are parsed with :func:`parse_instant`. Datetimes are
    measured against the clock directly.

    Example:
        >>> expiration_in(3600)  # one hour
        3600

    Args:
        expiration: Number, date string or datetime.
        clock: Optional clock; defaults to the UTC wall clock.

    Returns:
        Signed whole seconds until the expiration. Zero and negative results
        (an expiration in the past) are valid.

    Raises:
        InvalidExpiration: For numbers outside every bucket, unparsable strings
            and any other input type.
    """
    number = _as_number(expiration)
    if number is None and isinstance(expiration, str):
        number = coerce_number(expiration)
    if number is not None:
        seconds = _numeric_expiration_in(number, clock)
        logger.debug("numeric expiration %s resolved to %d seconds", expiration, seconds)
        return seconds

    if isinstance(expiration, str):
        expiration = parse_instant(expiration)

    if isinstance(expiration, datetime):
        seconds = (dt_to_epoch_ms(expiration) - _now_ms(clock)) // 1000
        logger.debug("instant %s resolved to %d seconds", expiration.isoformat(), seconds)
        return seconds

    raise InvalidExpiration(expiration)


__all__ = [
    "Clock",
    "DefaultExpiration",
    "Number",
    "Expiration",
    "MICROSECONDS_MAX",
    "MILLISECONDS_MAX",
    "RELATIVE_MAX",
    "SECONDS_MAX",
    "coerce_number",
    "dt_to_epoch_ms",
    "epoch",
    "epoch_ms_to_dt",
    "expiration_in",
    "fixed_clock",
    "parse_instant",
    "utc_now",
]
