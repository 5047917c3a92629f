"""
HTTP client for the Pusher REST API

This module wires the request signer to a ``requests`` session and exposes
the trigger operation. Every call returns a Result; only argument and
credential problems are raised.
"""

import logging
from typing import Any, Optional, Sequence, Union

import requests
from requests.adapters import HTTPAdapter

from .config import DEFAULT_HOST, DEFAULT_REQUEST_TIMEOUT_MS, ClientConfig
from .events import Serializer, TriggerPayload, default_serializer, normalize_channels
from .exceptions import InvalidArgument
from .result import Result
from .signing.request_signer import RequestSigner
from .signing.types import Credentials, HttpMethod, TimestampGenerator
from .validation import require_non_empty

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 10


def create_session(config: ClientConfig) -> requests.Session:
    """
    Create the HTTP session used for API calls.

    Connections are pooled and kept alive. Retries are disabled: a failed
    call is reported to the caller as a Result.
    """
    session = requests.Session()

    adapter = HTTPAdapter(
        pool_connections=DEFAULT_POOL_SIZE,
        pool_maxsize=DEFAULT_POOL_SIZE,
        max_retries=0,
    )
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({
        'Accept': 'application/json',
        'User-Agent': config.user_agent,
    })

    return session


class Pusher:
    """
    Client for publishing events through the Pusher REST API.

    The client is immutable once built. Use with_config() to derive a client
    talking to another host or scheme.

    Example:
        with Pusher("3", "278d425bdf160c739803", secret) as pusher:
            result = pusher.trigger("project-3", "foo", {"some": "data"})
            if not result.is_success:
                ...
    """

    def __init__(
        self,
        app_id: str,
        key: str,
        secret: str,
        config: Optional[ClientConfig] = None,
        serializer: Optional[Serializer] = None,
        session: Optional[requests.Session] = None,
        timestamp_generator: Optional[TimestampGenerator] = None
    ):
        """
        Initialize the client.

        Args:
            app_id: ID of the application to publish to
            key: Application key
            secret: Application secret, 64 lowercase hex characters
            config: Connection settings, defaults to ClientConfig()
            serializer: Callable turning caller data into a string,
                defaults to compact JSON
            session: Optional requests session to send requests with. The
                client does not close sessions it did not create.
            timestamp_generator: Optional clock for ``auth_timestamp``

        Raises:
            InvalidArgument: If a required argument is missing
            InvalidCredentialFormat: If the secret is malformed
        """
        self._credentials = Credentials(app_id=app_id, key=key, secret=secret)
        self._config = config or ClientConfig()

        if serializer is not None and not callable(serializer):
            raise InvalidArgument("serializer must be callable", {"argument": "serializer"})
        self._serializer = serializer or default_serializer

        self._owns_session = session is None
        self._session = session if session is not None else create_session(self._config)
        self._timestamp_generator = timestamp_generator
        self._signer = RequestSigner.from_credentials(
            self._credentials,
            self._config.scheme,
            self._config.host,
            timestamp_generator
        )

        logger.info(
            f"Initialized Pusher client for app {app_id} at "
            f"{self._config.scheme}://{self._config.host}"
        )

    @property
    def app_id(self) -> str:
        return self._credentials.app_id

    @property
    def key(self) -> str:
        return self._credentials.key

    @property
    def config(self) -> ClientConfig:
        return self._config

    @property
    def session(self) -> requests.Session:
        return self._session

    def with_config(self, config: Optional[ClientConfig] = None, **changes) -> 'Pusher':
        """
        Return a new client with different connection settings.

        Args:
            config: Replacement configuration
            **changes: Fields to change on the current (or given) configuration

        Returns:
            Pusher: New client sharing credentials and serializer
        """
        new_config = config or self._config
        if changes:
            new_config = new_config.with_changes(**changes)

        return Pusher(
            self._credentials.app_id,
            self._credentials.key,
            self._credentials.secret,
            config=new_config,
            serializer=self._serializer,
            session=None if self._owns_session else self._session,
            timestamp_generator=self._timestamp_generator
        )

    def trigger(
        self,
        channels: Union[str, Sequence[str]],
        event_name: str,
        data: Any,
        socket_id: Optional[str] = None
    ) -> Result:
        """
        Publish an event to one or more channels.

        Args:
            channels: Channel name, or a list of 1 to 10 channel names
            event_name: Name of the event
            data: Event data, serialized with the client's serializer
            socket_id: Optional socket to exclude from receiving the event

        Returns:
            Result: Outcome of the call

        Raises:
            InvalidArgument: If an argument violates a precondition
        """
        channel_list = normalize_channels(channels)
        require_non_empty("event_name", event_name)
        if data is None:
            raise InvalidArgument("data cannot be None", {"argument": "data"})

        payload = TriggerPayload(
            channels=channel_list,
            name=event_name,
            data=self.serialize(data),
            socket_id=socket_id
        )

        path = f"/apps/{self._credentials.app_id}/events"
        return self.http_call(path, payload.to_json())

    def serialize(self, data: Any) -> str:
        """
        Serialize event data with the configured serializer.

        Raises:
            InvalidArgument: If the data cannot be serialized to a string
        """
        try:
            serialized = self._serializer(data)
        except (TypeError, ValueError) as e:
            raise InvalidArgument(
                f"data could not be serialized: {e}",
                {"argument": "data", "original_error": str(e)}
            )

        if not isinstance(serialized, str):
            raise InvalidArgument(
                f"serializer must return a string, got {type(serialized).__name__}",
                {"argument": "serializer"}
            )

        return serialized

    def http_call(self, path: str, body: str) -> Result:
        """
        Sign and POST a JSON body to an API path.

        Args:
            path: Absolute API path
            body: JSON body, sent as UTF-8

        Returns:
            Result: Outcome of the call. Transport failures become NetworkFailure.
        """
        signed = self._signer.sign(HttpMethod.POST, path, body)
        logger.debug(
            f"Sending signed POST {path} "
            f"(auth_timestamp={signed.query_params['auth_timestamp']})"
        )

        try:
            response = self._session.post(
                signed.uri,
                data=body.encode('utf-8'),
                headers={'Content-Type': 'application/json'},
                timeout=self._config.timeout_seconds,
                allow_redirects=False,
            )
        except requests.exceptions.RequestException as e:
            logger.warning(f"Request to {path} failed: {e}")
            return Result.from_exception(e)

        response_body = response.content.decode('utf-8', errors='replace')
        logger.debug(f"POST {path} returned HTTP {response.status_code}")
        return Result.from_http_code(response.status_code, response_body)

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self._session.close()
            logger.debug("HTTP session closed")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, *args):
        """Context manager exit."""
        self.close()


def create_client(
    app_id: str,
    key: str,
    secret: str,
    host: str = DEFAULT_HOST,
    secure: bool = False,
    request_timeout_ms: int = DEFAULT_REQUEST_TIMEOUT_MS,
    serializer: Optional[Serializer] = None
) -> Pusher:
    """
    Create a Pusher client with the given connection settings.

    Returns:
        Pusher: Configured client
    """
    config = ClientConfig(host=host, request_timeout_ms=request_timeout_ms).with_secure(secure)
    return Pusher(app_id, key, secret, config=config, serializer=serializer)
