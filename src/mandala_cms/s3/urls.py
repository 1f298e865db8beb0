"""
Mapping between S3 object keys and the public URLs stored on documents.

This is the only module that knows the URL layout, so swapping the storage
provider or CDN only touches these two functions.
"""

from typing import Optional
from urllib.parse import quote, unquote


def public_base_url(
    bucket_name: str,
    region: str,
    endpoint_url: Optional[str] = None,
    override: Optional[str] = None,
) -> str:
    """Base URL objects in the bucket are publicly served from."""
    if override:
        return override.rstrip("/")
    if endpoint_url:
        # Path-style addressing for moto / localstack / S3-compatible stores
        return f"{endpoint_url.rstrip('/')}/{bucket_name}"
    return f"https://{bucket_name}.s3.{region}.amazonaws.com"


def object_key_to_url(base_url: str, object_key: str) -> str:
    """Public URL for an object key; each path segment is percent-encoded."""
    return f"{base_url.rstrip('/')}/{quote(object_key, safe='/')}"


def url_to_object_key(base_url: str, url: str) -> Optional[str]:
    """
    Recover the object key from a URL issued by ``object_key_to_url``.

    The query string is cut from the raw URL before decoding, so an encoded
    ``?`` inside the key survives. Returns None for empty URLs and for URLs
    that were not issued under ``base_url``.
    """
    if not url:
        return None
    marker = f"{base_url.rstrip('/')}/"
    raw_url = url.split("?", 1)[0]
    if not raw_url.startswith(marker):
        return None
    object_key = unquote(raw_url[len(marker):])
    return object_key or None
