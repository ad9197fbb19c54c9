"""
Signature computation and verification

Dispatches on the algorithm mode: keyed MAC (HMAC) for symmetric
algorithms, private key signature / public key verification for asymmetric
ones. All key material is passed as base64; asymmetric keys are DER encoded
(PKCS#8 private keys, SubjectPublicKeyInfo public keys).
"""

import hmac as hmac_compare
import logging
from typing import Optional

from cryptography.exceptions import InvalidSignature, UnsupportedAlgorithm
from cryptography.hazmat.primitives import hmac, serialization
from cryptography.hazmat.primitives.asymmetric import ec, padding, rsa

from .algorithms import Algorithm, AlgorithmRegistry, DEFAULT_REGISTRY, KeyType
from .canonical import build_signing_string
from .exceptions import ErrorKind, make_error
from .types import SignatureParameters
from .utils import decode_base64, encode_base64

logger = logging.getLogger(__name__)
signing_string_logger = logging.getLogger("httpsig_sdk.signing_strings")

_KEY_CLASSES = {
    KeyType.RSA: (rsa.RSAPrivateKey, rsa.RSAPublicKey),
    KeyType.EC: (ec.EllipticCurvePrivateKey, ec.EllipticCurvePublicKey),
}


def _algorithm_for(params: SignatureParameters, registry: Optional[AlgorithmRegistry]) -> Algorithm:
    if params.algorithm is not None:
        return params.algorithm
    return (registry or DEFAULT_REGISTRY).resolve(params.algorithm_name)


def _keyed_hash(algorithm: Algorithm, key: bytes, message: bytes) -> bytes:
    mac = hmac.HMAC(key, algorithm.hash_algorithm())
    mac.update(message)
    return mac.finalize()


def _load_private_key(algorithm: Algorithm, key: bytes):
    try:
        private_key = serialization.load_der_private_key(key, password=None)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise make_error(
            ErrorKind.INVALID_KEY,
            f"Cannot load private key for {algorithm.name}: {e}",
            {"algorithm": algorithm.name, "original_error": str(e)}
        )
    _check_key_type(algorithm, private_key, 0)
    return private_key


def _load_public_key(algorithm: Algorithm, key: bytes):
    try:
        public_key = serialization.load_der_public_key(key)
    except (ValueError, TypeError, UnsupportedAlgorithm) as e:
        raise make_error(
            ErrorKind.INVALID_KEY,
            f"Cannot load public key for {algorithm.name}: {e}",
            {"algorithm": algorithm.name, "original_error": str(e)}
        )
    _check_key_type(algorithm, public_key, 1)
    return public_key


def _check_key_type(algorithm: Algorithm, key, index: int) -> None:
    expected = _KEY_CLASSES.get(algorithm.key_type)
    if expected is None or not isinstance(key, expected[index]):
        raise make_error(
            ErrorKind.INVALID_KEY,
            f"Key of type {type(key).__name__} cannot be used with {algorithm.name}",
            {"algorithm": algorithm.name}
        )


def _asymmetric_padding(algorithm: Algorithm):
    if algorithm.key_type == KeyType.RSA:
        return padding.PKCS1v15()
    return None


def compute_signature(
    params: SignatureParameters,
    key_b64: str,
    registry: Optional[AlgorithmRegistry] = None
) -> str:
    """
    Compute the signature for resolved parameters.

    Args:
        params: Resolved signature parameters
        key_b64: Base64 shared secret (symmetric) or DER private key
        registry: Algorithm registry used when ``params`` carries no
            resolved algorithm

    Returns:
        str: Base64 encoded signature

    Raises:
        HTTPSignatureError: If the key is malformed or signing fails
    """
    algorithm = _algorithm_for(params, registry)
    key = decode_base64(key_b64, ErrorKind.INVALID_KEY_ENCODING)
    signing_string = build_signing_string(params)
    signing_string_logger.debug(f"Signing string for key ID {params.key_id}:\n{signing_string}")
    message = signing_string.encode('utf-8')

    if algorithm.is_symmetric:
        signature = _keyed_hash(algorithm, key, message)
    else:
        private_key = _load_private_key(algorithm, key)
        try:
            if algorithm.key_type == KeyType.EC:
                signature = private_key.sign(message, ec.ECDSA(algorithm.hash_algorithm()))
            else:
                signature = private_key.sign(message, _asymmetric_padding(algorithm),
                                             algorithm.hash_algorithm())
        except (ValueError, TypeError, UnsupportedAlgorithm) as e:
            raise make_error(
                ErrorKind.SIGNING_FAILED,
                f"Signing with {algorithm.name} failed: {e}",
                {"algorithm": algorithm.name, "original_error": str(e)}
            )

    logger.debug(f"Computed {algorithm.name} signature for key ID: {params.key_id}")
    return encode_base64(signature)


def sign_parameters(
    params: SignatureParameters,
    key_b64: str,
    registry: Optional[AlgorithmRegistry] = None
) -> SignatureParameters:
    """Copy of ``params`` carrying its computed signature."""
    return params.with_signature(compute_signature(params, key_b64, registry))


def verify_signature(
    params: SignatureParameters,
    key_b64: str,
    registry: Optional[AlgorithmRegistry] = None
) -> bool:
    """
    Check the signature carried by ``params``.

    A signature that does not match is a ``False`` result; only malformed
    input raises.

    Args:
        params: Resolved parameters including the received signature
        key_b64: Base64 shared secret (symmetric) or DER public key
        registry: Algorithm registry used to resolve the algorithm name

    Returns:
        bool: True if the signature matches the signing string

    Raises:
        HTTPSignatureError: If the algorithm is unsupported, or the key or
            signature cannot be decoded
    """
    if not params.signature:
        raise make_error(ErrorKind.MISSING_SIGNATURE_PARAMETER_SIGNATURE)

    algorithm = _algorithm_for(params, registry)
    key = decode_base64(key_b64, ErrorKind.INVALID_KEY_ENCODING)
    provided = decode_base64(params.signature, ErrorKind.INVALID_SIGNATURE_ENCODING)
    signing_string = build_signing_string(params)
    signing_string_logger.debug(f"Signing string for key ID {params.key_id}:\n{signing_string}")
    message = signing_string.encode('utf-8')

    if algorithm.is_symmetric:
        expected = _keyed_hash(algorithm, key, message)
        valid = hmac_compare.compare_digest(expected, provided)
    else:
        public_key = _load_public_key(algorithm, key)
        try:
            if algorithm.key_type == KeyType.EC:
                public_key.verify(provided, message, ec.ECDSA(algorithm.hash_algorithm()))
            else:
                public_key.verify(provided, message, _asymmetric_padding(algorithm),
                                  algorithm.hash_algorithm())
            valid = True
        except InvalidSignature:
            valid = False

    if not valid:
        logger.info(f"Signature mismatch for key ID: {params.key_id} ({algorithm.name})")
    return valid
