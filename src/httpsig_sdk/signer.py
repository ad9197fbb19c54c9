"""
Request signer

Signs outgoing requests and attaches the signature parameters either to a
dedicated ``Signature`` header or to ``Authorization`` with the
``Signature`` scheme.
"""

import logging
from typing import Any, Optional, Sequence

from .algorithms import AlgorithmRegistry
from .parameters import format_signature_string, from_config
from .signature import sign_parameters
from .types import AUTHORIZATION_HEADER, AUTHORIZATION_SCHEME, SIGNATURE_HEADER

logger = logging.getLogger(__name__)


def set_request_header(request: Any, name: str, value: str) -> None:
    """
    Set a header on a request object.

    Plain dictionaries hold lower-cased names; case-insensitive mappings
    such as ``requests.structures.CaseInsensitiveDict`` keep ``name``.
    """
    headers = request.headers
    if type(headers) is dict:
        name = name.lower()
    headers[name] = value


class Signer:
    """
    HTTP request signer for a fixed algorithm and header list
    """

    def __init__(
        self,
        algorithm: str,
        headers: Optional[Sequence[str]] = None,
        registry: Optional[AlgorithmRegistry] = None
    ):
        """
        Initialize the signer.

        Args:
            algorithm: Algorithm wire name, e.g. ``hmac-sha256``
            headers: Ordered header names to sign (``date`` if empty)
            registry: Algorithm registry (default registry if None)
        """
        self.algorithm = algorithm
        self.headers = list(headers or [])
        self.registry = registry

    def create_signature_string(self, request: Any, key_id: str, key_b64: str) -> str:
        """
        Compute the signature parameter string for a request.

        Args:
            request: Request to sign (not modified)
            key_id: Identifier of the signing key
            key_b64: Base64 key material

        Returns:
            str: ``keyId="..",algorithm="..",headers="..",signature=".."``

        Raises:
            HTTPSignatureError: If configuration, request or key is invalid
        """
        builder = from_config(key_id, self.algorithm, self.headers, self.registry)
        params = builder.resolve(request)
        signed = sign_parameters(params, key_b64, self.registry)
        return format_signature_string(signed)

    def sign_request(self, request: Any, key_id: str, key_b64: str) -> None:
        """Sign ``request`` and add the ``Signature`` header."""
        signature = self.create_signature_string(request, key_id, key_b64)
        set_request_header(request, SIGNATURE_HEADER, signature)
        logger.debug(f"Signed request with key ID: {key_id}")

    def auth_request(self, request: Any, key_id: str, key_b64: str) -> None:
        """Sign ``request`` and add ``Authorization: Signature ...``."""
        signature = self.create_signature_string(request, key_id, key_b64)
        set_request_header(request, AUTHORIZATION_HEADER, f"{AUTHORIZATION_SCHEME} {signature}")
        logger.debug(f"Added signature authorization with key ID: {key_id}")

    def __repr__(self) -> str:
        return f"Signer(algorithm='{self.algorithm}', headers={self.headers})"


def create_signer(algorithm: str, *headers: str) -> Signer:
    """
    Create a signer for ``algorithm`` covering ``headers``.

    Returns:
        Signer: Configured signer instance
    """
    return Signer(algorithm, headers)
