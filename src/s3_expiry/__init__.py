"""s3-expiry: resolve ambiguous timestamps and expirations for object storage.

Bare numbers are classified by magnitude into seconds-from-now, epoch
seconds, epoch milliseconds or epoch microseconds. See `time_utils` for the
bucket boundaries.
"""

from .drive import S3Drive
from .errors import InvalidExpiration, InvalidTimestamp, TimeInputError
from .paths import normalize_s3_path, public_url
from .signed_url import temporary_signed_upload_url, temporary_signed_url
from .time_utils import (
    Clock,
    DefaultExpiration,
    Expiration,
    epoch,
    expiration_in,
    fixed_clock,
    utc_now,
)

__all__ = [
    "Clock",
    "DefaultExpiration",
    "Expiration",
    "InvalidExpiration",
    "InvalidTimestamp",
    "S3Drive",
    "TimeInputError",
    "epoch",
    "expiration_in",
    "fixed_clock",
    "normalize_s3_path",
    "public_url",
    "temporary_signed_upload_url",
    "temporary_signed_url",
    "utc_now",
]
