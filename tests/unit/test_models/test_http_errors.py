"""Unit tests for request errors and HTTP status classification."""

import pytest

from courier.models.errors import (
    HTTPError,
    HTTPErrorKind,
    MalformedRequestError,
    RequestError,
    RequestErrorClass,
    ResponseDecodingError,
    ResponseValidationError,
    SlaExceededError,
    TimedOutError,
    TransportFailedError,
    UnknownRequestError,
)


class TestHTTPErrorFromStatus:
    """Tests for HTTPError.from_status."""

    @pytest.mark.parametrize("status_code", [200, 201, 204, 299])
    def test_success_codes(self, status_code: int) -> None:
        """2xx codes are not errors."""
        assert HTTPError.from_status(status_code) is None

    @pytest.mark.parametrize(
        ("status_code", "kind"),
        [
            (400, HTTPErrorKind.BAD_REQUEST),
            (401, HTTPErrorKind.UNAUTHORIZED),
            (402, HTTPErrorKind.CLIENT_ERROR),
            (403, HTTPErrorKind.FORBIDDEN),
            (404, HTTPErrorKind.NOT_FOUND),
            (405, HTTPErrorKind.CLIENT_ERROR),
            (499, HTTPErrorKind.CLIENT_ERROR),
            (500, HTTPErrorKind.SERVER_ERROR),
            (501, HTTPErrorKind.SERVER_ERROR_5XX),
            (599, HTTPErrorKind.SERVER_ERROR_5XX),
            (100, HTTPErrorKind.UNKNOWN_CODE),
            (302, HTTPErrorKind.UNKNOWN_CODE),
            (600, HTTPErrorKind.UNKNOWN_CODE),
        ],
    )
    def test_error_codes(self, status_code: int, kind: HTTPErrorKind) -> None:
        """Status codes map onto their error kind."""
        error = HTTPError.from_status(status_code)

        assert error == HTTPError(kind, status_code)
        assert error.status_code == status_code

    def test_equality_and_hash(self) -> None:
        """Errors with the same kind and status compare equal."""
        assert HTTPError(HTTPErrorKind.NOT_FOUND, 404) == HTTPError(HTTPErrorKind.NOT_FOUND, 404)
        assert hash(HTTPError(HTTPErrorKind.NOT_FOUND, 404)) == hash(
            HTTPError(HTTPErrorKind.NOT_FOUND, 404)
        )
        assert HTTPError(HTTPErrorKind.NOT_FOUND, 404) != HTTPError(HTTPErrorKind.CLIENT_ERROR, 404)


class TestRequestErrors:
    """Tests for the RequestError hierarchy."""

    @pytest.mark.parametrize(
        ("error", "error_class"),
        [
            (MalformedRequestError(), RequestErrorClass.MALFORMED_REQUEST),
            (ResponseDecodingError(ValueError("x")), RequestErrorClass.DECODING_ERROR),
            (TransportFailedError(OSError("x")), RequestErrorClass.TRANSPORT_FAILED),
            (TimedOutError(), RequestErrorClass.TIMED_OUT),
            (SlaExceededError(), RequestErrorClass.SLA_EXCEEDED),
            (ResponseValidationError(ValueError("x")), RequestErrorClass.VALIDATION_ERROR),
            (UnknownRequestError(), RequestErrorClass.UNKNOWN),
        ],
    )
    def test_error_classes(self, error: RequestError, error_class: RequestErrorClass) -> None:
        """Every error carries its classification."""
        assert isinstance(error, RequestError)
        assert error.error_class == error_class
        assert str(error)

    def test_cause_kept(self) -> None:
        """Wrapped errors keep their cause."""
        cause = ValueError("bad json")

        assert ResponseDecodingError(cause).cause is cause
        assert ResponseValidationError(cause).cause is cause
