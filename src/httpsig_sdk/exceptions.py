"""
Exception classes for the HTTP Signatures SDK

Every failure raised by the signing and verification pipeline is an
``HTTPSignatureError`` tagged with an ``ErrorKind``. Each kind carries the
HTTP status a server should answer with when the failure surfaces while
handling a request.
"""

from enum import Enum
from http import HTTPStatus
from typing import Optional, Dict, Any, Union


class ErrorKind(Enum):
    """Closed set of failure conditions with their transport status"""

    # Configuration errors (server-side misconfiguration)
    NO_KEY_ID_CONFIGURED = ("NO_KEY_ID_CONFIGURED", HTTPStatus.INTERNAL_SERVER_ERROR,
                            "No keyId configured")
    NO_ALGORITHM_CONFIGURED = ("NO_ALGORITHM_CONFIGURED", HTTPStatus.INTERNAL_SERVER_ERROR,
                               "No algorithm configured")
    ALGORITHM_UNSUPPORTED = ("ALGORITHM_UNSUPPORTED", HTTPStatus.INTERNAL_SERVER_ERROR,
                             "Algorithm not supported")
    ALLOWED_CLOCK_SKEW_MISCONFIGURED = ("ALLOWED_CLOCK_SKEW_MISCONFIGURED",
                                        HTTPStatus.INTERNAL_SERVER_ERROR,
                                        "Allowed clock skew of 0 is probably a misconfiguration, "
                                        "use a negative value to disable the check")
    INVALID_KEY_ENCODING = ("INVALID_KEY_ENCODING", HTTPStatus.INTERNAL_SERVER_ERROR,
                            "Key is not valid base64")
    INVALID_KEY = ("INVALID_KEY", HTTPStatus.INTERNAL_SERVER_ERROR,
                   "Key material cannot be used with the algorithm")
    SIGNING_FAILED = ("SIGNING_FAILED", HTTPStatus.INTERNAL_SERVER_ERROR,
                      "Signature computation failed")

    # Malformed or incomplete requests
    NO_SIGNATURE_HEADER_FOUND = ("NO_SIGNATURE_HEADER_FOUND", HTTPStatus.BAD_REQUEST,
                                 "No Signature header found in request")
    MISSING_SIGNATURE_PARAMETER_KEY_ID = ("MISSING_SIGNATURE_PARAMETER_KEY_ID",
                                          HTTPStatus.BAD_REQUEST,
                                          "Missing keyId in signature parameters")
    MISSING_SIGNATURE_PARAMETER_ALGORITHM = ("MISSING_SIGNATURE_PARAMETER_ALGORITHM",
                                             HTTPStatus.BAD_REQUEST,
                                             "Missing algorithm in signature parameters")
    MISSING_SIGNATURE_PARAMETER_SIGNATURE = ("MISSING_SIGNATURE_PARAMETER_SIGNATURE",
                                             HTTPStatus.BAD_REQUEST,
                                             "Missing signature in signature parameters")
    MISSING_REQUIRED_HEADER = ("MISSING_REQUIRED_HEADER", HTTPStatus.BAD_REQUEST,
                               "Missing required header")
    METHOD_NOT_IN_REQUEST = ("METHOD_NOT_IN_REQUEST", HTTPStatus.BAD_REQUEST,
                             "Method not in request")
    URL_NOT_IN_REQUEST = ("URL_NOT_IN_REQUEST", HTTPStatus.BAD_REQUEST,
                          "URL not in request")
    INVALID_DATE_HEADER = ("INVALID_DATE_HEADER", HTTPStatus.BAD_REQUEST,
                           "Date header is not a valid HTTP date")
    INVALID_SIGNATURE_ENCODING = ("INVALID_SIGNATURE_ENCODING", HTTPStatus.BAD_REQUEST,
                                  "Signature is not valid base64")
    ALGORITHM_NOT_ALLOWED = ("ALGORITHM_NOT_ALLOWED", HTTPStatus.BAD_REQUEST,
                             "Algorithm not allowed")
    REQUIRED_HEADER_NOT_IN_HEADER_LIST = ("REQUIRED_HEADER_NOT_IN_HEADER_LIST",
                                          HTTPStatus.BAD_REQUEST,
                                          "Required header not in header list")
    DATE_HEADER_MISSING_FOR_CLOCK_SKEW = ("DATE_HEADER_MISSING_FOR_CLOCK_SKEW",
                                          HTTPStatus.BAD_REQUEST,
                                          "Date header is missing for clock skew comparison")
    ALLOWED_CLOCK_SKEW_EXCEEDED = ("ALLOWED_CLOCK_SKEW_EXCEEDED", HTTPStatus.BAD_REQUEST,
                                   "Allowed clock skew exceeded")

    def __new__(cls, code: str, http_status: HTTPStatus, default_message: str):
        member = object.__new__(cls)
        member._value_ = code
        member.code = code
        member.http_status = int(http_status)
        member.default_message = default_message
        return member

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.http_status < 500


class HTTPSignatureError(Exception):
    """
    Base exception for all signing and verification failures

    Attributes:
        kind: Tagged failure condition
        message: Human readable message
        error_code: Stable string code (the kind's value)
        http_status: Status code a server should respond with
        details: Optional additional error details
    """

    def __init__(
        self,
        kind: ErrorKind,
        message: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        self.kind = kind
        self.message = message or kind.default_message
        self.details = details or {}
        super().__init__(self.message)

    @property
    def error_code(self) -> str:
        return self.kind.code

    @property
    def http_status(self) -> int:
        return self.kind.http_status

    def __repr__(self) -> str:
        return f"{type(self).__name__}(kind={self.kind.code}, message='{self.message}', details={self.details})"


class ConfigurationError(HTTPSignatureError):
    """Raised when the signer or verifier is misconfigured"""
    pass


class RequestError(HTTPSignatureError):
    """Raised when a request is malformed or incomplete"""
    pass


def make_error(
    kind: ErrorKind,
    message: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None
) -> HTTPSignatureError:
    """
    Build the exception matching an error kind.

    Client error kinds produce a ``RequestError``, everything else a
    ``ConfigurationError``.
    """
    error_class = RequestError if kind.is_client_error else ConfigurationError
    return error_class(kind, message, details)


def missing_header_error(kind: ErrorKind, header_name: str) -> HTTPSignatureError:
    """Error naming the offending header, e.g. ``Missing required header 'date'``"""
    return make_error(
        kind,
        f"{kind.default_message} '{header_name}'",
        {"header": header_name}
    )


def status_for(error: Union[ErrorKind, BaseException]) -> Optional[int]:
    """
    Map an error kind or raised exception to an HTTP status code.

    Exceptions that did not originate from this SDK (for example errors
    raised by a caller supplied key lookup) are not classified and yield
    ``None``.
    """
    if isinstance(error, ErrorKind):
        return error.http_status
    if isinstance(error, HTTPSignatureError):
        return error.http_status
    return None
