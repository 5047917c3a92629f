"""
Result classification for API calls

Every call made through the client ends in exactly one Result variant.
Remote outcomes (any HTTP status) and transport failures are returned as
values, never raised, so callers can branch on the outcome directly.
"""

from dataclasses import dataclass
from enum import Enum
from typing import ClassVar, Tuple, Union

from .exceptions import InvalidArgument


class ResultStatus(str, Enum):
    """Outcome categories of an API call"""
    SUCCESS = "success"
    CLIENT_ERROR = "client_error"
    SERVER_ERROR = "server_error"
    NETWORK_FAILURE = "network_failure"
    OTHER_HTTP_ERROR = "other_http_error"


@dataclass(frozen=True)
class Result:
    """Base class of all call outcomes"""
    status: ClassVar[ResultStatus]

    @property
    def is_success(self) -> bool:
        return self.status is ResultStatus.SUCCESS

    @classmethod
    def from_http_code(cls, status_code: int, body: str) -> 'Result':
        """
        Classify a completed HTTP exchange.

        Args:
            status_code: HTTP status code
            body: Raw response body, passed through unparsed

        Returns:
            Result: Success, ClientError, ServerError or OtherHttpError
        """
        if isinstance(status_code, bool) or not isinstance(status_code, int):
            raise InvalidArgument(
                f"status_code must be an integer, got {type(status_code).__name__}",
                {"argument": "status_code"}
            )

        if 200 <= status_code < 300:
            return Success(status_code, body)
        if 400 <= status_code < 500:
            return ClientError(status_code, body)
        if 500 <= status_code < 600:
            return ServerError(status_code, body)
        return OtherHttpError(status_code, body)

    @classmethod
    def from_exception(cls, error: BaseException) -> 'NetworkFailure':
        """Classify a transport-level failure where no response was obtained."""
        return NetworkFailure(error)


@dataclass(frozen=True)
class HttpResult(Result):
    """
    Outcome of a completed HTTP exchange

    Attributes:
        status_code: HTTP status code returned by the API
        body: Response body exactly as received
    """
    status_code: int
    body: str


class Success(HttpResult):
    """2xx response"""
    status = ResultStatus.SUCCESS


class ClientError(HttpResult):
    """4xx response: bad signature, malformed payload, unknown app and so on"""
    status = ResultStatus.CLIENT_ERROR


class ServerError(HttpResult):
    """5xx response"""
    status = ResultStatus.SERVER_ERROR


class OtherHttpError(HttpResult):
    """Any status outside the 2xx, 4xx and 5xx ranges"""
    status = ResultStatus.OTHER_HTTP_ERROR


@dataclass(frozen=True)
class NetworkFailure(Result):
    """
    Transport failure: DNS, connect, timeout, I/O or a malformed response

    Attributes:
        cause: Exception raised by the transport
    """
    status = ResultStatus.NETWORK_FAILURE
    cause: BaseException

    @property
    def message(self) -> str:
        return str(self.cause) or type(self.cause).__name__


HttpOutcome = Tuple[int, str]


def classify(outcome: Union[HttpOutcome, BaseException]) -> Result:
    """
    Map the outcome of a call onto a Result.

    Args:
        outcome: ``(status_code, body)`` of a completed exchange, or the
            exception raised by the transport

    Returns:
        Result: Exactly one Result variant

    Raises:
        InvalidArgument: If the outcome is neither shape
    """
    if isinstance(outcome, BaseException):
        return Result.from_exception(outcome)

    if isinstance(outcome, tuple) and len(outcome) == 2:
        status_code, body = outcome
        return Result.from_http_code(status_code, body)

    raise InvalidArgument(
        f"Cannot classify outcome of type {type(outcome).__name__}",
        {"outcome_type": type(outcome).__name__}
    )
