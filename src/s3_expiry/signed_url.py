"""Presigned GET/PUT URL requests against an S3-compatible client.

Signing itself is delegated to the injected client (any object exposing the
boto3 ``generate_presigned_url(ClientMethod, Params=..., ExpiresIn=...)``
call). This module resolves the caller's expiration into the relative
seconds the signer expects:

1. An absent expiration (``None``) is replaced with
   ``Settings.DEFAULT_EXPIRATION`` (3600 seconds unless configured).
   ``0`` is a real value and means "expires immediately".
2. The result of :func:`expiration_in` is computed once per request and
   passed verbatim as ``ExpiresIn``.
3. Invalid expirations raise before the client is touched.
"""
from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

from .config import Settings, get_settings
from .paths import normalize_s3_path
from .time_utils import Clock, DefaultExpiration, Expiration, expiration_in

logger = logging.getLogger(__name__)


class PresigningClient(Protocol):
    """Subset of a boto3 S3 client used for presigning."""

    def generate_presigned_url(
        self,
        ClientMethod: str,
        Params: Optional[Dict[str, Any]] = None,
        ExpiresIn: int = 3600,
        HttpMethod: Optional[str] = None,
    ) -> str: ...


def resolve_expiration(
    expiration: DefaultExpiration, settings: Optional[Settings] = None
) -> Expiration:
    """Substitute the configured default for an absent expiration."""
    if expiration is None:
        return (settings or get_settings()).DEFAULT_EXPIRATION
    return expiration


def _presign(
    client: PresigningClient,
    client_method: str,
    params: Dict[str, Any],
    expiration: DefaultExpiration,
    *,
    clock: Optional[Clock],
    settings: Optional[Settings],
) -> str:
    expires_in = expiration_in(resolve_expiration(expiration, settings), clock=clock)
    logger.debug(
        "presigning %s bucket=%s key=%s expires_in=%d",
        client_method,
        params.get("Bucket"),
        params.get("Key"),
        expires_in,
    )
    return client.generate_presigned_url(
        ClientMethod=client_method,
        Params=params,
        ExpiresIn=expires_in,
    )


def temporary_signed_url(
    client: PresigningClient,
    bucket: str,
    path: str,
    expiration: DefaultExpiration = None,
    *,
    content_disposition: Optional[str] = None,
    params: Optional[Dict[str, Any]] = None,
    clock: Optional[Clock] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Create a temporary signed download URL.

    Args:
        client: S3-compatible client that performs the signing.
        bucket: Bucket containing the object.
        path: Object path; a leading slash is dropped.
        expiration: Seconds, epoch timestamp, date string or datetime.
            ``None`` uses the configured default (one hour).
        content_disposition: Sets ``ResponseContentDisposition``.
        params: Extra ``get_object`` parameters. Applied last, so they may
            override ``Bucket`` and ``Key``.
        clock: Optional clock used to resolve absolute expirations.
        settings: Optional settings; defaults to :func:`get_settings`.

    Returns:
        The signed URL produced by the client.

    Raises:
        InvalidExpiration: If the expiration cannot be resolved.
    """
    request: Dict[str, Any] = {"Bucket": bucket, "Key": normalize_s3_path(path)}
    if content_disposition is not None:
        request["ResponseContentDisposition"] = content_disposition
    request.update(params or {})
    return _presign(client, "get_object", request, expiration, clock=clock, settings=settings)


def temporary_signed_upload_url(
    client: PresigningClient,
    bucket: str,
    path: str,
    expiration: DefaultExpiration = None,
    *,
    content_length: Optional[int] = None,
    content_type: Optional[str] = None,
    params: Optional[Dict[str, Any]] = None,
    clock: Optional[Clock] = None,
    settings: Optional[Settings] = None,
) -> str:
    """Create a temporary signed upload (PUT) URL.

    ``content_length`` and ``content_type`` pin the exact size and type the
    upload must carry. Other arguments behave as in
    :func:`temporary_signed_url`.
    """
    request: Dict[str, Any] = {"Bucket": bucket, "Key": normalize_s3_path(path)}
    if content_length is not None:
        request["ContentLength"] = content_length
    if content_type is not None:
        request["ContentType"] = content_type
    request.update(params or {})
    return _presign(client, "put_object", request, expiration, clock=clock, settings=settings)


__all__ = [
    "PresigningClient",
    "resolve_expiration",
    "temporary_signed_upload_url",
    "temporary_signed_url",
]
