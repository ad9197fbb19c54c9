"""
Request verification

``verify_request`` runs the full verification sequence for an incoming
request: parse the signature parameters, enforce the algorithm allow-list
and the required headers, check clock skew, look up the key and check the
signature.
"""

import logging
from datetime import datetime
from typing import Any, Iterable, Optional

from .algorithms import AlgorithmRegistry
from .clock_skew import check_clock_skew
from .exceptions import ErrorKind, make_error, missing_header_error
from .parameters import from_request
from .signature import verify_signature
from .types import KeyLookup
from .utils import normalize_header_name

logger = logging.getLogger(__name__)


def verify_request(
    request: Any,
    key_lookup: KeyLookup,
    allowed_clock_skew: int,
    allowed_algorithms: Iterable[str],
    *required_headers: str,
    registry: Optional[AlgorithmRegistry] = None,
    now: Optional[datetime] = None
) -> bool:
    """
    Verify the signature of an incoming request.

    Args:
        request: Incoming request (``method``, ``url``, ``headers``)
        key_lookup: Resolves a key id to base64 key material; its
            exceptions propagate unchanged
        allowed_clock_skew: Allowed age of the date header in seconds, a
            negative value disables the check
        allowed_algorithms: Algorithm names accepted from the request
        *required_headers: Headers the signature must cover
        registry: Algorithm registry (default registry if None)
        now: Current time for the clock skew check

    Returns:
        bool: True if the signature is valid, False if it does not match

    Raises:
        HTTPSignatureError: If the request or configuration is invalid
    """
    params = from_request(request)

    if params.algorithm_name not in set(allowed_algorithms):
        raise make_error(
            ErrorKind.ALGORITHM_NOT_ALLOWED,
            f"Algorithm not allowed: '{params.algorithm_name}'",
            {"algorithm": params.algorithm_name}
        )

    for header in required_headers:
        name = normalize_header_name(header)
        if not params.headers.get(name):
            raise missing_header_error(ErrorKind.REQUIRED_HEADER_NOT_IN_HEADER_LIST, name)

    check_clock_skew(params.headers, allowed_clock_skew, now=now)

    key = key_lookup(params.key_id)
    valid = verify_signature(params, key, registry)
    logger.debug(f"Verified request signed with key ID: {params.key_id}, valid: {valid}")
    return valid


class Verifier:
    """
    Request verifier with a fixed key lookup and verification policy
    """

    def __init__(
        self,
        key_lookup: KeyLookup,
        allowed_algorithms: Iterable[str],
        allowed_clock_skew: int = 300,
        required_headers: Optional[Iterable[str]] = None,
        registry: Optional[AlgorithmRegistry] = None
    ):
        """
        Initialize the verifier.

        Args:
            key_lookup: Resolves a key id to base64 key material
            allowed_algorithms: Algorithm names accepted from requests
            allowed_clock_skew: Allowed age of the date header in seconds,
                negative to disable
            required_headers: Headers every signature must cover
            registry: Algorithm registry (default registry if None)
        """
        self.key_lookup = key_lookup
        self.allowed_algorithms = list(allowed_algorithms)
        self.allowed_clock_skew = allowed_clock_skew
        self.required_headers = list(required_headers or [])
        self.registry = registry

    def verify(self, request: Any, now: Optional[datetime] = None) -> bool:
        """Verify ``request``; see ``verify_request``."""
        return verify_request(
            request,
            self.key_lookup,
            self.allowed_clock_skew,
            self.allowed_algorithms,
            *self.required_headers,
            registry=self.registry,
            now=now
        )
