"""
Test suite for the error taxonomy and status classification
"""

import pytest

from httpsig_sdk.exceptions import (
    ErrorKind,
    HTTPSignatureError,
    ConfigurationError,
    RequestError,
    make_error,
    missing_header_error,
    status_for,
)


class TestErrorKinds:
    """Test the status carried by each error kind"""

    @pytest.mark.parametrize("kind", [
        ErrorKind.NO_KEY_ID_CONFIGURED,
        ErrorKind.NO_ALGORITHM_CONFIGURED,
        ErrorKind.ALGORITHM_UNSUPPORTED,
        ErrorKind.ALLOWED_CLOCK_SKEW_MISCONFIGURED,
    ])
    def test_configuration_kinds_are_server_errors(self, kind):
        assert status_for(kind) == 500
        assert isinstance(make_error(kind), ConfigurationError)

    @pytest.mark.parametrize("kind", [
        ErrorKind.NO_SIGNATURE_HEADER_FOUND,
        ErrorKind.MISSING_SIGNATURE_PARAMETER_KEY_ID,
        ErrorKind.MISSING_SIGNATURE_PARAMETER_ALGORITHM,
        ErrorKind.MISSING_SIGNATURE_PARAMETER_SIGNATURE,
        ErrorKind.MISSING_REQUIRED_HEADER,
        ErrorKind.METHOD_NOT_IN_REQUEST,
        ErrorKind.URL_NOT_IN_REQUEST,
        ErrorKind.INVALID_DATE_HEADER,
        ErrorKind.ALGORITHM_NOT_ALLOWED,
        ErrorKind.REQUIRED_HEADER_NOT_IN_HEADER_LIST,
        ErrorKind.ALLOWED_CLOCK_SKEW_EXCEEDED,
        ErrorKind.DATE_HEADER_MISSING_FOR_CLOCK_SKEW,
    ])
    def test_request_kinds_are_bad_requests(self, kind):
        assert status_for(kind) == 400
        assert isinstance(make_error(kind), RequestError)

    def test_kind_codes_are_unique(self):
        codes = [kind.code for kind in ErrorKind]
        assert len(codes) == len(set(codes))
        assert ErrorKind("ALGORITHM_NOT_ALLOWED") is ErrorKind.ALGORITHM_NOT_ALLOWED


class TestHTTPSignatureError:
    """Test exception attributes"""

    def test_default_message(self):
        error = make_error(ErrorKind.NO_KEY_ID_CONFIGURED)
        assert error.message == "No keyId configured"
        assert str(error) == "No keyId configured"
        assert error.error_code == "NO_KEY_ID_CONFIGURED"
        assert error.http_status == 500
        assert error.details == {}

    def test_custom_message_and_details(self):
        error = make_error(ErrorKind.ALGORITHM_NOT_ALLOWED, "nope", {"algorithm": "x"})
        assert error.message == "nope"
        assert error.details == {"algorithm": "x"}
        assert "ALGORITHM_NOT_ALLOWED" in repr(error)

    def test_missing_header_error_names_header(self):
        error = missing_header_error(ErrorKind.MISSING_REQUIRED_HEADER, "date")
        assert str(error) == "Missing required header 'date'"
        assert error.details["header"] == "date"
        assert status_for(error) == 400


class TestStatusFor:
    """Test classification of arbitrary exceptions"""

    def test_foreign_exceptions_are_not_classified(self):
        assert status_for(KeyError("unknown key")) is None

    def test_sdk_exception_subclasses(self):
        error = HTTPSignatureError(ErrorKind.ALLOWED_CLOCK_SKEW_EXCEEDED)
        assert status_for(error) == 400
