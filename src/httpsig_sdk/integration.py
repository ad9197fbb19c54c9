"""
HTTP client integration for request signing

This module plugs the signer into ``requests`` so outgoing requests are
signed automatically.
"""

import logging
from typing import Optional, Sequence

import requests
from requests.auth import AuthBase
from requests.models import PreparedRequest

from .algorithms import AlgorithmRegistry
from .config.settings import PLACEMENT_AUTHORIZATION, PLACEMENT_SIGNATURE, SigningSettings
from .signer import Signer, set_request_header
from .types import DATE_HEADER, DEFAULT_HEADER_LIST
from .utils import format_http_date, normalize_header_name

logger = logging.getLogger(__name__)


class HTTPSignatureAuth(AuthBase):
    """
    ``requests`` authentication handler that signs every request

    Example:
        >>> session = requests.Session()
        >>> session.auth = HTTPSignatureAuth("client-1", key_b64, headers=["(request-target)", "host", "date"])
    """

    def __init__(
        self,
        key_id: str,
        key_b64: str,
        algorithm: str = "hmac-sha256",
        headers: Optional[Sequence[str]] = None,
        placement: str = PLACEMENT_SIGNATURE,
        add_date_header: bool = True,
        registry: Optional[AlgorithmRegistry] = None
    ):
        """
        Initialize the handler.

        Args:
            key_id: Identifier of the signing key
            key_b64: Base64 key material
            algorithm: Algorithm wire name
            headers: Ordered header names to sign (``date`` if empty)
            placement: ``signature`` for a Signature header, ``authorization``
                for ``Authorization: Signature ...``
            add_date_header: Add a Date header when a signed date is missing
            registry: Algorithm registry (default registry if None)
        """
        if placement not in (PLACEMENT_SIGNATURE, PLACEMENT_AUTHORIZATION):
            raise ValueError(f"Unknown signature placement: {placement}")

        self.key_id = key_id
        self.key_b64 = key_b64
        self.signer = Signer(algorithm, headers, registry)
        self.placement = placement
        self.add_date_header = add_date_header

    @classmethod
    def from_settings(
        cls,
        settings: SigningSettings,
        key_b64: str,
        key_id: Optional[str] = None,
        registry: Optional[AlgorithmRegistry] = None
    ) -> 'HTTPSignatureAuth':
        """Create a handler from configured signing settings"""
        return cls(
            key_id or settings.key_id,
            key_b64,
            algorithm=settings.algorithm,
            headers=settings.headers,
            placement=settings.placement,
            add_date_header=settings.add_date_header,
            registry=registry,
        )

    def _signed_headers(self):
        names = [normalize_header_name(h) for h in self.signer.headers]
        return names or list(DEFAULT_HEADER_LIST)

    def __call__(self, request: PreparedRequest) -> PreparedRequest:
        if (self.add_date_header
                and DATE_HEADER in self._signed_headers()
                and 'Date' not in request.headers):
            set_request_header(request, 'Date', format_http_date())

        if self.placement == PLACEMENT_AUTHORIZATION:
            self.signer.auth_request(request, self.key_id, self.key_b64)
        else:
            self.signer.sign_request(request, self.key_id, self.key_b64)

        logger.debug(f"Signed {request.method} request to {request.url}")
        return request


def create_signing_session(
    key_id: str,
    key_b64: str,
    algorithm: str = "hmac-sha256",
    headers: Optional[Sequence[str]] = None,
    placement: str = PLACEMENT_SIGNATURE,
    session: Optional[requests.Session] = None
) -> requests.Session:
    """
    Create (or configure) a ``requests.Session`` that signs every request.

    Returns:
        requests.Session: Session with ``HTTPSignatureAuth`` attached
    """
    session = session or requests.Session()
    session.auth = HTTPSignatureAuth(key_id, key_b64, algorithm, headers, placement)
    logger.info(f"Configured request signing for key ID: {key_id}")
    return session
