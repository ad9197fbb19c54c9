"""
Signature parameter population

Signature parameters are populated in two ways:

* from signer configuration (``from_config``), followed by resolving the
  configured headers against the outgoing request;
* from the ``Authorization`` or ``Signature`` header of an incoming request
  (``from_request``), which parses the wire parameters and resolves the
  listed headers against that same request.

Both paths go through ``SignatureParametersBuilder`` and only hand out an
immutable ``SignatureParameters`` once every header has been resolved.
"""

import logging
import re
from typing import Any, Dict, Iterable, Optional, Sequence

from .algorithms import Algorithm, AlgorithmRegistry, DEFAULT_REGISTRY
from .canonical import resolve_header_values
from .exceptions import ErrorKind, make_error
from .types import (
    AUTHORIZATION_HEADER,
    AUTHORIZATION_SCHEME,
    DEFAULT_HEADER_LIST,
    SIGNATURE_HEADER,
    SignatureParameters,
)
from .utils import lowercase_headers, normalize_header_name

logger = logging.getLogger(__name__)

PARAM_KEY_ID = "keyId"
PARAM_ALGORITHM = "algorithm"
PARAM_HEADERS = "headers"
PARAM_SIGNATURE = "signature"
RECOGNIZED_PARAMS = (PARAM_KEY_ID, PARAM_ALGORITHM, PARAM_HEADERS, PARAM_SIGNATURE)

# Each pair starts the string or follows a comma, so keys such as x-keyId stay whole
_PARAM_PATTERN = re.compile(r'(?:^|,)\s*([\w-]+)\s*=\s*"([^"]*)"')
_SCHEME_PREFIX = re.compile(r'^\s*' + AUTHORIZATION_SCHEME + r'\s+', re.IGNORECASE)


def _normalize_header_list(headers: Optional[Iterable[str]]) -> tuple:
    names = tuple(normalize_header_name(h) for h in (headers or ()) if h and h.strip())
    return names or DEFAULT_HEADER_LIST


class SignatureParametersBuilder:
    """
    Staging object for signature parameters

    Holds the key id, algorithm and header list until the header values are
    resolved against a request with ``resolve``.
    """

    def __init__(
        self,
        key_id: str,
        algorithm_name: str,
        header_list: Optional[Sequence[str]] = None,
        algorithm: Optional[Algorithm] = None,
        signature: Optional[str] = None
    ):
        self.key_id = key_id
        self.algorithm_name = algorithm_name
        self.header_list = _normalize_header_list(header_list)
        self.algorithm = algorithm
        self.signature = signature

    def resolve(self, request: Any) -> SignatureParameters:
        """
        Resolve the header list against ``request``.

        Args:
            request: Object with ``method``, ``url`` and ``headers``

        Returns:
            SignatureParameters: Immutable resolved parameters

        Raises:
            RequestError: If a listed header, the method or the URL is missing
        """
        headers = resolve_header_values(self.header_list, request)
        return SignatureParameters(
            key_id=self.key_id,
            algorithm_name=self.algorithm_name,
            header_list=self.header_list,
            headers=headers,
            signature=self.signature,
            algorithm=self.algorithm,
        )

    def __repr__(self) -> str:
        return (f"SignatureParametersBuilder(key_id='{self.key_id}', "
                f"algorithm='{self.algorithm_name}', headers={list(self.header_list)})")


def from_config(
    key_id: str,
    algorithm: str,
    headers: Optional[Sequence[str]] = None,
    registry: Optional[AlgorithmRegistry] = None
) -> SignatureParametersBuilder:
    """
    Populate signature parameters from signer configuration.

    When no header list is given the signature covers the ``date`` header
    only, so every signature is time bound unless the caller explicitly
    lists headers without a date.

    Args:
        key_id: Identifier of the signing key
        algorithm: Algorithm wire name
        headers: Ordered header names to cover
        registry: Algorithm registry (default registry if None)

    Returns:
        SignatureParametersBuilder: Parameters awaiting header resolution

    Raises:
        ConfigurationError: If key id or algorithm is missing or unsupported
    """
    if not key_id:
        raise make_error(ErrorKind.NO_KEY_ID_CONFIGURED)
    if not algorithm:
        raise make_error(ErrorKind.NO_ALGORITHM_CONFIGURED)

    resolved = (registry or DEFAULT_REGISTRY).resolve(algorithm)
    return SignatureParametersBuilder(key_id, resolved.name, headers, algorithm=resolved)


def parse_signature_string(value: str) -> Dict[str, str]:
    """
    Parse a signature parameter string.

    The string is a comma separated list of ``key="value"`` pairs, optionally
    preceded by the ``Signature`` authorization scheme. Unknown keys are
    ignored and the last occurrence of a repeated key wins.

    Args:
        value: Raw header value

    Returns:
        dict: Recognized parameters found in ``value``
    """
    value = _SCHEME_PREFIX.sub('', value, count=1)
    params: Dict[str, str] = {}
    for match in _PARAM_PATTERN.finditer(value):
        key, param_value = match.group(1), match.group(2)
        if key in RECOGNIZED_PARAMS:
            params[key] = param_value
        else:
            logger.debug(f"Ignoring unknown signature parameter: {key}")
    return params


def extract_signature_string(request: Any) -> str:
    """
    Find the signature parameter string on a request.

    ``Authorization`` is used when it carries the ``Signature`` scheme or bare
    signature parameters; otherwise the ``Signature`` header is used.

    Raises:
        RequestError: If neither header carries signature parameters
    """
    headers = lowercase_headers(getattr(request, 'headers', None))

    authorization = headers.get(normalize_header_name(AUTHORIZATION_HEADER))
    if authorization and (_SCHEME_PREFIX.match(authorization) or _PARAM_PATTERN.match(authorization.strip())):
        return authorization

    signature = headers.get(normalize_header_name(SIGNATURE_HEADER))
    if signature:
        return signature

    raise make_error(ErrorKind.NO_SIGNATURE_HEADER_FOUND)


def from_request(request: Any) -> SignatureParameters:
    """
    Populate signature parameters from an incoming request.

    The algorithm is not resolved here; the verifier resolves it against its
    registry.

    Args:
        request: Incoming request

    Returns:
        SignatureParameters: Parsed and resolved parameters

    Raises:
        RequestError: If the signature header or a required parameter is
            missing, or a listed header cannot be resolved
    """
    params = parse_signature_string(extract_signature_string(request))

    if not params.get(PARAM_KEY_ID):
        raise make_error(ErrorKind.MISSING_SIGNATURE_PARAMETER_KEY_ID)
    if not params.get(PARAM_ALGORITHM):
        raise make_error(ErrorKind.MISSING_SIGNATURE_PARAMETER_ALGORITHM)
    if not params.get(PARAM_SIGNATURE):
        raise make_error(ErrorKind.MISSING_SIGNATURE_PARAMETER_SIGNATURE)

    header_list = params.get(PARAM_HEADERS, "").split()
    builder = SignatureParametersBuilder(
        params[PARAM_KEY_ID],
        params[PARAM_ALGORITHM],
        header_list,
        signature=params[PARAM_SIGNATURE],
    )
    return builder.resolve(request)


def format_signature_string(params: SignatureParameters) -> str:
    """
    Serialize signed parameters to the wire format.

    Returns:
        str: ``keyId="..",algorithm="..",headers="..",signature=".."``
    """
    if not params.signature:
        raise ValueError("Signature parameters have no signature")
    return (
        f'{PARAM_KEY_ID}="{params.key_id}",'
        f'{PARAM_ALGORITHM}="{params.algorithm_name}",'
        f'{PARAM_HEADERS}="{" ".join(params.header_list)}",'
        f'{PARAM_SIGNATURE}="{params.signature}"'
    )
