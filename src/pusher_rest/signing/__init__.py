"""
Pusher REST Python SDK - Request Signing Module

Query-string HMAC-SHA256 request signing for the Pusher REST API. Requests
are authenticated locally, with no round-trip to an authorization server.
"""

from .types import (
    AUTH_VERSION,
    Credentials,
    HttpMethod,
    Scheme,
    SignedRequest,
)

from .canonical_request import (
    CanonicalRequestBuilder,
    build_canonical_string,
    build_query_string,
    parse_query_string,
)

from .request_signer import (
    RequestSigner,
    sign_request,
)

from .utils import (
    generate_timestamp,
    percent_encode,
    calculate_body_md5,
    compute_signature,
)

# Public API exports
__all__ = [
    # Core signing functionality
    'RequestSigner',
    'sign_request',
    'CanonicalRequestBuilder',
    'build_canonical_string',
    'build_query_string',
    'parse_query_string',
    # Types
    'AUTH_VERSION',
    'Credentials',
    'HttpMethod',
    'Scheme',
    'SignedRequest',
    # Utilities
    'generate_timestamp',
    'percent_encode',
    'calculate_body_md5',
    'compute_signature',
]
