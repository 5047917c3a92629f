"""
Pusher REST Python SDK
Request signing and event publishing for the Pusher REST API
"""

from .version import __version__
from .exceptions import (
    PusherSDKError,
    ValidationError,
    InvalidCredentialFormat,
    InvalidArgument,
    EncodingError,
)
from .validation import (
    validate_secret,
    is_valid_secret,
)
from .result import (
    Result,
    ResultStatus,
    HttpResult,
    Success,
    ClientError,
    ServerError,
    OtherHttpError,
    NetworkFailure,
    classify,
)
from .events import (
    TriggerPayload,
    MAX_CHANNELS_PER_TRIGGER,
    default_serializer,
)
from .config import (
    ClientConfig,
    load_credentials_from_env,
)
from .client import (
    Pusher,
    create_client,
    create_session,
)
from .signing import (
    # Core signing functionality
    RequestSigner,
    sign_request,
    CanonicalRequestBuilder,
    build_canonical_string,
    build_query_string,
    parse_query_string,
    # Types
    AUTH_VERSION,
    Credentials,
    HttpMethod,
    Scheme,
    SignedRequest,
    # Utilities
    generate_timestamp,
    percent_encode,
    calculate_body_md5,
    compute_signature,
)


# Public API exports
__all__ = [
    '__version__',
    # Exceptions
    'PusherSDKError',
    'ValidationError',
    'InvalidCredentialFormat',
    'InvalidArgument',
    'EncodingError',
    # Validation
    'validate_secret',
    'is_valid_secret',
    # Results
    'Result',
    'ResultStatus',
    'HttpResult',
    'Success',
    'ClientError',
    'ServerError',
    'OtherHttpError',
    'NetworkFailure',
    'classify',
    # Events
    'TriggerPayload',
    'MAX_CHANNELS_PER_TRIGGER',
    'default_serializer',
    # Client
    'ClientConfig',
    'load_credentials_from_env',
    'Pusher',
    'create_client',
    'create_session',
    # Request Signing - Core
    'RequestSigner',
    'sign_request',
    'CanonicalRequestBuilder',
    'build_canonical_string',
    'build_query_string',
    'parse_query_string',
    # Request Signing - Types
    'AUTH_VERSION',
    'Credentials',
    'HttpMethod',
    'Scheme',
    'SignedRequest',
    # Request Signing - Utilities
    'generate_timestamp',
    'percent_encode',
    'calculate_body_md5',
    'compute_signature',
]
