"""
Utility functions for request signing

This module provides the primitives the signer is built from: timestamp
generation, the percent-encoding profile, body digests and the keyed
signature digest.
"""

import time
import hashlib
from typing import Optional, Union
from urllib.parse import quote

from cryptography.hazmat.primitives import hashes, hmac

from ..exceptions import EncodingError

# RFC 3986 unreserved characters besides ALPHA / DIGIT
UNRESERVED_SAFE_CHARS = "-._~"


def generate_timestamp() -> int:
    """
    Generate current Unix timestamp.

    Returns:
        int: Current Unix timestamp (seconds since epoch)
    """
    return int(time.time())


def percent_encode(value: str) -> str:
    """
    Percent-encode a query parameter value for signing.

    Unreserved characters (``A-Za-z0-9-._~``) are left intact, every other
    byte of the UTF-8 encoding becomes ``%XX`` with uppercase hex. Space is
    encoded as ``%20``, never ``+``.

    Args:
        value: Value to encode

    Returns:
        str: Encoded value

    Raises:
        EncodingError: If the value is not a string or has no UTF-8 form
    """
    if not isinstance(value, str):
        raise EncodingError(
            f"Query parameter values must be strings, got {type(value).__name__}",
            {"value_type": type(value).__name__}
        )

    try:
        return quote(value, safe=UNRESERVED_SAFE_CHARS, encoding='utf-8', errors='strict')
    except UnicodeEncodeError as e:
        raise EncodingError(
            f"Query parameter value cannot be encoded: {e}",
            {"original_error": str(e)}
        )


def to_bytes(content: Union[str, bytes]) -> bytes:
    """Return the UTF-8 bytes of ``content`` (bytes pass through unchanged)."""
    if isinstance(content, bytes):
        return content

    try:
        return content.encode('utf-8')
    except UnicodeEncodeError as e:
        raise EncodingError(
            f"Content cannot be encoded as UTF-8: {e}",
            {"original_error": str(e)}
        )


def calculate_body_md5(body: Optional[Union[str, bytes]]) -> str:
    """
    Calculate the lowercase hex MD5 digest of a request body.

    The digest covers exactly the bytes that go on the wire, so string bodies
    are hashed as UTF-8.

    Args:
        body: Request body

    Returns:
        str: 32 character lowercase hex digest
    """
    return hashlib.md5(to_bytes(body or b"")).hexdigest()


def compute_signature(secret: str, string_to_sign: str) -> str:
    """
    Compute the HMAC-SHA256 signature of a canonical string.

    The secret is used as configured: its UTF-8 bytes are the HMAC key
    material, the hex string is not decoded first.

    Args:
        secret: Application secret
        string_to_sign: Canonical string

    Returns:
        str: 64 character lowercase hex signature
    """
    mac = hmac.HMAC(to_bytes(secret), hashes.SHA256())
    mac.update(to_bytes(string_to_sign))
    return to_hex(mac.finalize())


def to_hex(data: bytes) -> str:
    """
    Convert bytes to lowercase hex string.

    Args:
        data: Bytes to convert

    Returns:
        str: Lowercase hex string
    """
    return data.hex()
