"""
Type definitions for HTTP signatures

This module provides the request abstraction consumed by the signer and
verifier and the immutable signature parameter descriptor threaded through
the signing and verification pipeline.
"""

from dataclasses import dataclass, field, replace
from types import MappingProxyType
from typing import Callable, Dict, Mapping, Optional, Tuple

from .algorithms import Algorithm
from .utils import lowercase_headers, normalize_header_name

REQUEST_TARGET = "(request-target)"
DATE_HEADER = "date"
X_DATE_HEADER = "x-date"
HOST_HEADER = "host"
SIGNATURE_HEADER = "Signature"
AUTHORIZATION_HEADER = "Authorization"
AUTHORIZATION_SCHEME = "Signature"

DEFAULT_HEADER_LIST: Tuple[str, ...] = (DATE_HEADER,)


@dataclass
class SignableRequest:
    """
    Minimal HTTP request that can be signed or verified

    Any object exposing ``method``, ``url`` and a ``headers`` mapping (for
    instance ``requests.PreparedRequest``) can be used in its place.

    Attributes:
        method: HTTP method (GET, POST, etc.)
        url: Complete request URL
        headers: Request headers as key-value pairs
    """
    method: Optional[str]
    url: Optional[str]
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self):
        """Normalize headers to lowercase for consistent processing"""
        if not isinstance(self.headers, Mapping):
            raise ValueError("Headers must be a mapping")
        self.headers = lowercase_headers(self.headers)

    def add_header(self, name: str, value: str) -> None:
        self.headers[normalize_header_name(name)] = value


@dataclass(frozen=True)
class SignatureParameters:
    """
    Fully resolved signature parameters for a single request

    Instances are produced by ``SignatureParametersBuilder.resolve`` and are
    never modified afterwards.

    Attributes:
        key_id: Identifier of the key used to sign
        algorithm_name: Wire name of the signature algorithm
        header_list: Ordered, lower-cased names covered by the signature
        headers: Resolved value for every name in ``header_list``
        signature: Base64 signature, if computed or received
        algorithm: Registry entry, resolved on the signing path only
    """
    key_id: str
    algorithm_name: str
    header_list: Tuple[str, ...]
    headers: Mapping[str, str]
    signature: Optional[str] = None
    algorithm: Optional[Algorithm] = None

    def __post_init__(self):
        if not self.key_id:
            raise ValueError("Key ID cannot be empty")
        if not self.header_list:
            raise ValueError("Header list cannot be empty")
        if set(self.headers) != set(self.header_list):
            raise ValueError("Resolved headers must match the header list exactly")
        object.__setattr__(self, 'header_list', tuple(self.header_list))
        object.__setattr__(self, 'headers', MappingProxyType(dict(self.headers)))

    def with_signature(self, signature: str) -> 'SignatureParameters':
        """Copy of these parameters carrying ``signature``."""
        return replace(self, signature=signature)


# Resolves a key id to base64 key material; errors propagate to the caller.
KeyLookup = Callable[[str], str]
