"""
Test suite for the algorithm registry
"""

import pytest
from cryptography.hazmat.primitives import hashes

from httpsig_sdk.algorithms import (
    Algorithm,
    AlgorithmMode,
    AlgorithmRegistry,
    DEFAULT_REGISTRY,
    HMAC_SHA256,
    KeyType,
    RSA_SHA256,
    resolve_algorithm,
)
from httpsig_sdk.exceptions import ConfigurationError, ErrorKind


class TestAlgorithmRegistry:
    """Test algorithm lookup and registration"""

    def test_builtin_algorithms(self):
        assert DEFAULT_REGISTRY.names() == [
            "ecdsa-sha256", "hmac-sha256", "hmac-sha512", "rsa-sha256", "rsa-sha512"
        ]

    def test_resolve_symmetric(self):
        algorithm = resolve_algorithm("hmac-sha256")
        assert algorithm is HMAC_SHA256
        assert algorithm.mode == AlgorithmMode.SYMMETRIC
        assert algorithm.hash_algorithm is hashes.SHA256
        assert algorithm.is_symmetric

    def test_resolve_asymmetric(self):
        algorithm = resolve_algorithm("rsa-sha256")
        assert algorithm is RSA_SHA256
        assert algorithm.mode == AlgorithmMode.ASYMMETRIC
        assert algorithm.key_type == KeyType.RSA
        assert not algorithm.is_symmetric

    def test_lookup_is_exact(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_algorithm("HMAC-SHA256")
        assert exc_info.value.kind == ErrorKind.ALGORITHM_UNSUPPORTED

    def test_unknown_algorithm(self):
        with pytest.raises(ConfigurationError) as exc_info:
            resolve_algorithm("hmac-md5")
        assert exc_info.value.details["algorithm"] == "hmac-md5"
        assert "hmac-sha256" in exc_info.value.details["supported_algorithms"]

    def test_register_custom_algorithm(self):
        registry = AlgorithmRegistry([HMAC_SHA256])
        custom = Algorithm("hmac-sha384", hashes.SHA384, AlgorithmMode.SYMMETRIC)
        registry.register(custom)

        assert registry.resolve("hmac-sha384") is custom
        assert "hmac-sha384" in registry
        assert "hmac-sha384" not in DEFAULT_REGISTRY

    def test_algorithm_validation(self):
        with pytest.raises(ValueError):
            Algorithm("", hashes.SHA256, AlgorithmMode.SYMMETRIC)
        with pytest.raises(ValueError):
            Algorithm("HMAC-SHA1", hashes.SHA1, AlgorithmMode.SYMMETRIC)
