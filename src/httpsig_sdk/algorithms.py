"""
Signature algorithm registry

Maps the wire name of an algorithm (``hmac-sha256``, ``rsa-sha256``, ...)
to a descriptor holding its hash primitive and whether it is a keyed MAC or
an asymmetric signature. The signer and verifier dispatch on the descriptor,
so new algorithms are added by registering them here.
"""

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Type

from cryptography.hazmat.primitives import hashes

from .exceptions import ErrorKind, make_error


class AlgorithmMode(str, Enum):
    """How the signing string is turned into a signature"""
    SYMMETRIC = "symmetric"
    ASYMMETRIC = "asymmetric"


class KeyType(str, Enum):
    """Key family for asymmetric algorithms"""
    SECRET = "secret"
    RSA = "rsa"
    EC = "ec"


@dataclass(frozen=True)
class Algorithm:
    """
    Registry entry for a signature algorithm

    Attributes:
        name: Canonical lower-case wire name
        hash_algorithm: cryptography hash class used for the digest
        mode: Keyed MAC or asymmetric signature
        key_type: Key family expected by the algorithm
    """
    name: str
    hash_algorithm: Type[hashes.HashAlgorithm]
    mode: AlgorithmMode
    key_type: KeyType = KeyType.SECRET

    def __post_init__(self):
        if not self.name:
            raise ValueError("Algorithm name cannot be empty")
        if self.name != self.name.lower():
            raise ValueError("Algorithm name must be lower-case")

    @property
    def is_symmetric(self) -> bool:
        return self.mode == AlgorithmMode.SYMMETRIC


HMAC_SHA256 = Algorithm("hmac-sha256", hashes.SHA256, AlgorithmMode.SYMMETRIC)
HMAC_SHA512 = Algorithm("hmac-sha512", hashes.SHA512, AlgorithmMode.SYMMETRIC)
RSA_SHA256 = Algorithm("rsa-sha256", hashes.SHA256, AlgorithmMode.ASYMMETRIC, KeyType.RSA)
RSA_SHA512 = Algorithm("rsa-sha512", hashes.SHA512, AlgorithmMode.ASYMMETRIC, KeyType.RSA)
ECDSA_SHA256 = Algorithm("ecdsa-sha256", hashes.SHA256, AlgorithmMode.ASYMMETRIC, KeyType.EC)

BUILTIN_ALGORITHMS = (HMAC_SHA256, HMAC_SHA512, RSA_SHA256, RSA_SHA512, ECDSA_SHA256)


class AlgorithmRegistry:
    """Name to ``Algorithm`` lookup table"""

    def __init__(self, algorithms=()):
        self._algorithms: Dict[str, Algorithm] = {}
        self._lock = threading.Lock()
        for algorithm in algorithms:
            self.register(algorithm)

    def register(self, algorithm: Algorithm) -> None:
        """
        Register an algorithm, replacing any entry with the same name.

        Args:
            algorithm: Descriptor to register
        """
        with self._lock:
            self._algorithms[algorithm.name] = algorithm

    def resolve(self, name: str) -> Algorithm:
        """
        Look up an algorithm by its canonical name.

        Args:
            name: Wire name, matched exactly

        Returns:
            Algorithm: Registered descriptor

        Raises:
            ConfigurationError: If no algorithm is registered under ``name``
        """
        algorithm = self._algorithms.get(name)
        if algorithm is None:
            raise make_error(
                ErrorKind.ALGORITHM_UNSUPPORTED,
                f"Algorithm not supported: '{name}'",
                {"algorithm": name, "supported_algorithms": self.names()}
            )
        return algorithm

    def names(self) -> List[str]:
        return sorted(self._algorithms)

    def __contains__(self, name: str) -> bool:
        return name in self._algorithms


DEFAULT_REGISTRY = AlgorithmRegistry(BUILTIN_ALGORITHMS)


def resolve_algorithm(name: str) -> Algorithm:
    """Resolve ``name`` against the default registry."""
    return DEFAULT_REGISTRY.resolve(name)


def register_algorithm(algorithm: Algorithm) -> None:
    """Add an algorithm to the default registry."""
    DEFAULT_REGISTRY.register(algorithm)
