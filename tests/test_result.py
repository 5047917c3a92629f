"""
Unit tests for result classification
"""

import pytest
import requests

from pusher_rest.result import (
    Result,
    ResultStatus,
    Success,
    ClientError,
    ServerError,
    OtherHttpError,
    NetworkFailure,
    classify,
)
from pusher_rest.exceptions import InvalidArgument

HTTP_VARIANTS = (Success, ClientError, ServerError, OtherHttpError)


def expected_variant(status_code):
    if 200 <= status_code < 300:
        return Success
    if 400 <= status_code < 500:
        return ClientError
    if 500 <= status_code < 600:
        return ServerError
    return OtherHttpError


class TestHttpClassification:
    """Test classification of completed HTTP exchanges"""

    def test_totality(self):
        """Every status in 100..599 maps to exactly one bucket"""
        for status_code in range(100, 600):
            result = Result.from_http_code(status_code, "body")
            matches = [variant for variant in HTTP_VARIANTS if type(result) is variant]
            assert matches == [expected_variant(status_code)], status_code
            assert result.status_code == status_code

    def test_bucket_edges(self):
        """Boundaries of each range are classified correctly"""
        assert isinstance(classify((199, "")), OtherHttpError)
        assert isinstance(classify((200, "")), Success)
        assert isinstance(classify((299, "")), Success)
        assert isinstance(classify((300, "")), OtherHttpError)
        assert isinstance(classify((399, "")), OtherHttpError)
        assert isinstance(classify((400, "")), ClientError)
        assert isinstance(classify((499, "")), ClientError)
        assert isinstance(classify((500, "")), ServerError)
        assert isinstance(classify((599, "")), ServerError)
        assert isinstance(classify((600, "")), OtherHttpError)
        assert isinstance(classify((0, "")), OtherHttpError)

    def test_not_found_preserves_body(self):
        """A 404 body is passed through unmodified"""
        body = '{"error":"Unable to find app by id"}'
        result = classify((404, body))

        assert result == ClientError(404, body)
        assert result.body is body
        assert result.status is ResultStatus.CLIENT_ERROR
        assert not result.is_success

    def test_success(self):
        """2xx responses are successes"""
        result = classify((200, "{}"))
        assert result.is_success
        assert result.status is ResultStatus.SUCCESS

    def test_variants_are_distinct(self):
        """Variants with the same fields do not compare equal"""
        assert ClientError(500, "x") != ServerError(500, "x")
        assert repr(ServerError(503, "down")) == "ServerError(status_code=503, body='down')"

    def test_invalid_status_code(self):
        """Non-integer status codes are rejected"""
        with pytest.raises(InvalidArgument):
            Result.from_http_code("200", "")

        with pytest.raises(InvalidArgument):
            Result.from_http_code(True, "")


class TestNetworkFailure:
    """Test classification of transport failures"""

    def test_from_exception(self):
        """Transport exceptions become NetworkFailure"""
        error = requests.exceptions.ConnectTimeout("connect timed out")
        result = classify(error)

        assert isinstance(result, NetworkFailure)
        assert result.cause is error
        assert result.message == "connect timed out"
        assert result.status is ResultStatus.NETWORK_FAILURE
        assert not result.is_success

    def test_message_falls_back_to_type(self):
        """Exceptions without a message are named by type"""
        assert Result.from_exception(ConnectionError()).message == "ConnectionError"

    def test_unknown_outcome(self):
        """Outcomes of any other shape are rejected"""
        with pytest.raises(InvalidArgument):
            classify("500")

        with pytest.raises(InvalidArgument):
            classify((500,))
