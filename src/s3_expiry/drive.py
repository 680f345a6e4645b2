"""Bucket-bound facade over the URL helpers."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .config import Settings, get_settings
from .paths import default_public_base, public_url
from .signed_url import PresigningClient, temporary_signed_upload_url, temporary_signed_url
from .time_utils import DefaultExpiration


@dataclass
class S3Drive:
    """A client bound to one bucket, optionally served from a custom domain."""

    client: PresigningClient
    bucket: str
    public_url: Optional[str] = None

    @classmethod
    def from_settings(
        cls, client: PresigningClient, settings: Optional[Settings] = None
    ) -> "S3Drive":
        """Build a drive from ``S3_BUCKET`` / ``S3_PUBLIC_URL``."""
        settings = settings or get_settings()
        if not settings.S3_BUCKET:
            raise ValueError("S3_BUCKET is required to build a drive from settings")
        return cls(client=client, bucket=settings.S3_BUCKET, public_url=settings.S3_PUBLIC_URL)

    def url(self, path: str) -> str:
        """Public (unsigned) URL of an object."""
        return public_url(self.public_url or default_public_base(self.bucket), path)

    def temporary_url(self, path: str, expiration: DefaultExpiration = None, **options: Any) -> str:
        """Signed download URL; expires in one hour unless told otherwise."""
        return temporary_signed_url(self.client, self.bucket, path, expiration, **options)

    def temporary_upload_url(
        self, path: str, expiration: DefaultExpiration = None, **options: Any
    ) -> str:
        """Signed upload URL; expires in one hour unless told otherwise."""
        return temporary_signed_upload_url(self.client, self.bucket, path, expiration, **options)


__all__ = ["S3Drive"]
