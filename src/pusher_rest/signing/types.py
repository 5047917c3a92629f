"""
Type definitions for request signing functionality

This module provides type definitions and data classes for the query-string
signing scheme used by the Pusher REST API.
"""

from typing import Dict, Callable
from dataclasses import dataclass, field
from enum import Enum

from ..exceptions import InvalidArgument
from ..validation import require_non_empty, validate_secret


AUTH_VERSION = "1.0"

# Parameter names added by the signer
AUTH_KEY_PARAM = "auth_key"
AUTH_TIMESTAMP_PARAM = "auth_timestamp"
AUTH_VERSION_PARAM = "auth_version"
AUTH_SIGNATURE_PARAM = "auth_signature"
BODY_MD5_PARAM = "body_md5"


class HttpMethod(str, Enum):
    """HTTP methods supported for signing"""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"
    PATCH = "PATCH"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"

    @classmethod
    def parse(cls, method) -> 'HttpMethod':
        """
        Coerce a method name or HttpMethod into an HttpMethod.

        Raises:
            InvalidArgument: If the method is not a known uppercase HTTP verb
        """
        if isinstance(method, cls):
            return method
        try:
            return cls(method)
        except ValueError:
            raise InvalidArgument(
                f"Unsupported HTTP method: {method!r}",
                {"method": method}
            )


class Scheme(str, Enum):
    """URL schemes accepted for the API endpoint"""
    HTTP = "http"
    HTTPS = "https"


@dataclass(frozen=True)
class Credentials:
    """
    Application credentials used to sign requests

    Attributes:
        app_id: ID of the application the client talks to
        key: Application key, sent in clear as ``auth_key``
        secret: Application secret, used as HMAC key material and never transmitted
    """
    app_id: str
    key: str
    secret: str = field(repr=False)

    def __post_init__(self):
        """Validate credentials after initialization"""
        require_non_empty("app_id", self.app_id)
        require_non_empty("key", self.key)
        require_non_empty("secret", self.secret)
        validate_secret(self.secret)


@dataclass(frozen=True)
class SignedRequest:
    """
    Result of signing a single request

    Attributes:
        method: HTTP method that was signed
        uri: Fully authenticated URI, ready to send
        query_params: Every query parameter on the URI, ``auth_signature`` included
        canonical_string: String the signature was computed over
        signature: Lowercase hex HMAC-SHA256 signature
    """
    method: HttpMethod
    uri: str
    query_params: Dict[str, str]
    canonical_string: str
    signature: str


# Type aliases for convenience
TimestampGenerator = Callable[[], int]
QueryParams = Dict[str, str]
