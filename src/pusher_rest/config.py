"""
Client configuration

Settings that are handed to the transport untouched by the signing core:
host, scheme and request timeout. Values can be given directly or read from
``PUSHER_*`` environment variables.
"""

import os
import re
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .exceptions import InvalidArgument
from .signing.types import Credentials, Scheme
from .version import __version__

DEFAULT_HOST = "api.pusherapp.com"
DEFAULT_SCHEME = Scheme.HTTP.value
DEFAULT_REQUEST_TIMEOUT_MS = 4000
DEFAULT_USER_AGENT = f"Pusher-REST-Python-SDK/{__version__}"

ENV_APP_ID = "PUSHER_APP_ID"
ENV_KEY = "PUSHER_KEY"
ENV_SECRET = "PUSHER_SECRET"
ENV_HOST = "PUSHER_HOST"
ENV_SCHEME = "PUSHER_SCHEME"
ENV_REQUEST_TIMEOUT_MS = "PUSHER_REQUEST_TIMEOUT_MS"

# Anything that would end the authority part of the URI, or add userinfo to it
HOST_FORBIDDEN_PATTERN = re.compile(r'[/?#@\s]')


@dataclass(frozen=True)
class ClientConfig:
    """
    Configuration for the Pusher API connection.

    Attributes:
        host: API host, optionally with a port
        scheme: ``http`` or ``https``
        request_timeout_ms: Connect and read timeout in milliseconds
        user_agent: User-Agent header sent with each request
    """
    host: str = DEFAULT_HOST
    scheme: str = DEFAULT_SCHEME
    request_timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS
    user_agent: str = DEFAULT_USER_AGENT

    def __post_init__(self):
        """Validate client configuration."""
        if not self.host:
            raise InvalidArgument("host cannot be empty", {"argument": "host"})

        if HOST_FORBIDDEN_PATTERN.search(self.host):
            raise InvalidArgument(
                f"host must not contain a scheme or path: {self.host}",
                {"argument": "host"}
            )

        try:
            object.__setattr__(self, 'scheme', Scheme(self.scheme).value)
        except ValueError:
            raise InvalidArgument(
                f"scheme must be 'http' or 'https', got {self.scheme!r}",
                {"argument": "scheme"}
            )

        if isinstance(self.request_timeout_ms, bool) or not isinstance(self.request_timeout_ms, int):
            raise InvalidArgument("Request timeout must be an integer", {"argument": "request_timeout_ms"})

        if self.request_timeout_ms <= 0:
            raise InvalidArgument("Request timeout must be positive", {"argument": "request_timeout_ms"})

    @property
    def secure(self) -> bool:
        return self.scheme == Scheme.HTTPS.value

    @property
    def timeout_seconds(self) -> float:
        return self.request_timeout_ms / 1000.0

    def with_secure(self, secure: bool) -> 'ClientConfig':
        """
        Return a copy using https when ``secure`` is true, http otherwise.

        Signatures cannot be forged or replayed from a plain-text request,
        so https is only needed when payloads themselves are sensitive.
        """
        scheme = Scheme.HTTPS if secure else Scheme.HTTP
        return replace(self, scheme=scheme.value)

    def with_changes(self, **changes) -> 'ClientConfig':
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> 'ClientConfig':
        """
        Build a configuration from ``PUSHER_*`` environment variables.

        Unset variables fall back to the defaults.

        Raises:
            InvalidArgument: If a variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        kwargs = {}

        if environ.get(ENV_HOST):
            kwargs['host'] = environ[ENV_HOST]
        if environ.get(ENV_SCHEME):
            kwargs['scheme'] = environ[ENV_SCHEME].lower()
        if environ.get(ENV_REQUEST_TIMEOUT_MS):
            raw_timeout = environ[ENV_REQUEST_TIMEOUT_MS]
            try:
                kwargs['request_timeout_ms'] = int(raw_timeout)
            except ValueError:
                raise InvalidArgument(
                    f"{ENV_REQUEST_TIMEOUT_MS} must be an integer, got {raw_timeout!r}",
                    {"argument": ENV_REQUEST_TIMEOUT_MS}
                )

        return cls(**kwargs)


def load_credentials_from_env(environ: Optional[Mapping[str, str]] = None) -> Credentials:
    """
    Read application credentials from ``PUSHER_APP_ID``, ``PUSHER_KEY`` and
    ``PUSHER_SECRET``.

    Raises:
        InvalidArgument: If a variable is missing
        InvalidCredentialFormat: If the secret is malformed
    """
    environ = os.environ if environ is None else environ

    missing = [name for name in (ENV_APP_ID, ENV_KEY, ENV_SECRET) if not environ.get(name)]
    if missing:
        raise InvalidArgument(
            f"Missing environment variables: {', '.join(missing)}",
            {"missing": missing}
        )

    return Credentials(
        app_id=environ[ENV_APP_ID],
        key=environ[ENV_KEY],
        secret=environ[ENV_SECRET]
    )
