"""Object key and public URL helpers."""
from __future__ import annotations


def normalize_s3_path(path: str) -> str:
    """Convert a path into an S3 key by dropping one leading slash."""
    if path.startswith("/"):
        return path[1:]
    return path


def default_public_base(bucket: str) -> str:
    """Virtual-hosted style base URL for ``bucket``."""
    return f"https://{bucket}.s3.amazonaws.com"


def public_url(base: str, path: str) -> str:
    """Join a public base URL and an object path.

    Duplicate slashes at the seam are collapsed, so ``"///file.txt"`` and
    ``"file.txt"`` resolve to the same URL.
    """
    base = base.rstrip("/")
    key = path.lstrip("/")
    if not key:
        return base
    return f"{base}/{key}"


__all__ = ["default_public_base", "normalize_s3_path", "public_url"]
