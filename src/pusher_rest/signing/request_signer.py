"""
Query-string request signer

This module provides the signer for the Pusher REST API authentication
scheme. Each request carries ``auth_key``, ``auth_timestamp``,
``auth_version``, ``body_md5`` (when there is a body) and ``auth_signature``,
the HMAC-SHA256 of the canonical request keyed with the application secret.
"""

import re
from typing import Mapping, Optional, Union

from ..exceptions import InvalidArgument
from .types import (
    AUTH_KEY_PARAM,
    AUTH_SIGNATURE_PARAM,
    AUTH_TIMESTAMP_PARAM,
    AUTH_VERSION,
    AUTH_VERSION_PARAM,
    BODY_MD5_PARAM,
    Credentials,
    HttpMethod,
    QueryParams,
    Scheme,
    SignedRequest,
    TimestampGenerator,
)
from .utils import (
    calculate_body_md5,
    compute_signature,
    generate_timestamp,
)
from .canonical_request import CanonicalRequestBuilder, build_query_string

RESERVED_PARAMS = frozenset([
    AUTH_KEY_PARAM,
    AUTH_TIMESTAMP_PARAM,
    AUTH_VERSION_PARAM,
    AUTH_SIGNATURE_PARAM,
    BODY_MD5_PARAM,
])

# Names go into the URI unencoded, so they are limited to unreserved characters
PARAM_NAME_PATTERN = re.compile(r'[A-Za-z0-9_.~-]+')


class RequestSigner:
    """
    Signer that turns a method, path and body into an authenticated URI

    The signer only reads its configuration, so one instance can sign
    requests from many threads at once.
    """

    def __init__(
        self,
        key: str,
        secret: str,
        scheme: Union[Scheme, str],
        host: str,
        timestamp_generator: Optional[TimestampGenerator] = None
    ):
        """
        Initialize the signer.

        The secret's format is not checked here; Credentials does that once
        when a client is built.

        Args:
            key: Application key, sent as ``auth_key``
            secret: Application secret, HMAC key material
            scheme: ``http`` or ``https``
            host: API host, optionally with a port
            timestamp_generator: Optional clock returning whole Unix seconds

        Raises:
            InvalidArgument: If a required argument is missing
        """
        if not key:
            raise InvalidArgument("key cannot be empty", {"argument": "key"})
        if not secret:
            raise InvalidArgument("secret cannot be empty", {"argument": "secret"})
        if not host:
            raise InvalidArgument("host cannot be empty", {"argument": "host"})

        try:
            self.scheme = Scheme(scheme)
        except ValueError:
            raise InvalidArgument(f"Unsupported URL scheme: {scheme!r}", {"scheme": scheme})

        self.key = key
        self._secret = secret
        self.host = host
        self.timestamp_generator = timestamp_generator or generate_timestamp

    @classmethod
    def from_credentials(
        cls,
        credentials: Credentials,
        scheme: Union[Scheme, str],
        host: str,
        timestamp_generator: Optional[TimestampGenerator] = None
    ) -> 'RequestSigner':
        """Create a signer from validated application credentials."""
        return cls(credentials.key, credentials.secret, scheme, host, timestamp_generator)

    def sign(
        self,
        method: Union[HttpMethod, str],
        path: str,
        body: Optional[Union[str, bytes]] = None,
        extra_query_params: Optional[Mapping[str, str]] = None,
        timestamp: Optional[int] = None
    ) -> SignedRequest:
        """
        Sign a request.

        Args:
            method: Uppercase HTTP method
            path: Absolute API path including the app segment
            body: Exact body that will be transmitted, if any
            extra_query_params: Caller query parameters to sign and send
            timestamp: Explicit ``auth_timestamp``; the clock is read when omitted

        Returns:
            SignedRequest: Authenticated URI with signing artefacts

        Raises:
            InvalidArgument: If caller parameters use a reserved or malformed name
            EncodingError: If a parameter cannot be encoded
        """
        params = self._build_params(body, extra_query_params, timestamp)

        builder = CanonicalRequestBuilder(method, path, params)
        canonical_string = builder.build()
        signature = compute_signature(self._secret, canonical_string)

        params[AUTH_SIGNATURE_PARAM] = signature
        uri = f"{self.scheme.value}://{self.host}{builder.path}?{build_query_string(params)}"

        return SignedRequest(
            method=builder.method,
            uri=uri,
            query_params=params,
            canonical_string=canonical_string,
            signature=signature
        )

    def _build_params(
        self,
        body: Optional[Union[str, bytes]],
        extra_query_params: Optional[Mapping[str, str]],
        timestamp: Optional[int]
    ) -> QueryParams:
        """
        Build the parameter set to sign, excluding the signature.

        Raises:
            InvalidArgument: If caller parameters clash with auth parameters,
                have names outside the unreserved set, or the timestamp is
                not a non-negative integer
        """
        params = dict(extra_query_params or {})

        clashes = sorted(RESERVED_PARAMS.intersection(params))
        if clashes:
            raise InvalidArgument(
                f"Query parameters use reserved names: {', '.join(clashes)}",
                {"reserved": clashes}
            )

        invalid = [
            name for name in params
            if not isinstance(name, str) or not PARAM_NAME_PATTERN.fullmatch(name)
        ]
        if invalid:
            raise InvalidArgument(
                f"Query parameter names must match [A-Za-z0-9_.~-]: {invalid!r}",
                {"invalid": invalid}
            )

        if timestamp is None:
            timestamp = self.timestamp_generator()

        if isinstance(timestamp, bool) or not isinstance(timestamp, int) or timestamp < 0:
            raise InvalidArgument(f"Invalid timestamp: {timestamp!r}", {"timestamp": timestamp})

        params[AUTH_KEY_PARAM] = self.key
        params[AUTH_TIMESTAMP_PARAM] = str(timestamp)
        params[AUTH_VERSION_PARAM] = AUTH_VERSION

        if body:
            params[BODY_MD5_PARAM] = calculate_body_md5(body)

        return params


def sign_request(
    method: Union[HttpMethod, str],
    scheme: Union[Scheme, str],
    host: str,
    path: str,
    body: Optional[Union[str, bytes]],
    key: str,
    secret: str,
    extra_query_params: Optional[Mapping[str, str]] = None,
    timestamp: Optional[int] = None
) -> SignedRequest:
    """
    Sign a single request without keeping a signer around.

    Returns:
        SignedRequest: Signing result
    """
    signer = RequestSigner(key, secret, scheme, host)
    return signer.sign(method, path, body, extra_query_params, timestamp)
