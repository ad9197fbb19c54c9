"""
HTTP Signatures SDK
Signing and verification of HTTP requests with HTTP message signatures
"""

import logging

from .version import __version__
from .algorithms import (
    Algorithm,
    AlgorithmMode,
    AlgorithmRegistry,
    KeyType,
    DEFAULT_REGISTRY,
    HMAC_SHA256,
    HMAC_SHA512,
    RSA_SHA256,
    RSA_SHA512,
    ECDSA_SHA256,
    register_algorithm,
    resolve_algorithm,
)
from .exceptions import (
    ErrorKind,
    HTTPSignatureError,
    ConfigurationError,
    RequestError,
    status_for,
)
from .types import (
    SignableRequest,
    SignatureParameters,
    KeyLookup,
    REQUEST_TARGET,
)
from .canonical import (
    build_signing_string,
    request_target_line,
    resolve_header_values,
)
from .parameters import (
    SignatureParametersBuilder,
    from_config,
    from_request,
    parse_signature_string,
    format_signature_string,
)
from .signature import (
    compute_signature,
    sign_parameters,
    verify_signature,
)
from .clock_skew import check_clock_skew
from .signer import Signer, create_signer
from .verifier import Verifier, verify_request
from .utils import format_http_date, parse_http_date
from .config import (
    HTTPSignatureConfigManager,
    ConfigLoadError,
    load_config_from_dict,
    load_config_from_json,
    load_config_from_file,
)
from .integration import HTTPSignatureAuth, create_signing_session

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    '__version__',
    # Algorithms
    'Algorithm',
    'AlgorithmMode',
    'AlgorithmRegistry',
    'KeyType',
    'DEFAULT_REGISTRY',
    'HMAC_SHA256',
    'HMAC_SHA512',
    'RSA_SHA256',
    'RSA_SHA512',
    'ECDSA_SHA256',
    'register_algorithm',
    'resolve_algorithm',
    # Errors
    'ErrorKind',
    'HTTPSignatureError',
    'ConfigurationError',
    'RequestError',
    'status_for',
    # Types
    'SignableRequest',
    'SignatureParameters',
    'KeyLookup',
    'REQUEST_TARGET',
    # Signature parameters
    'SignatureParametersBuilder',
    'from_config',
    'from_request',
    'parse_signature_string',
    'format_signature_string',
    'build_signing_string',
    'request_target_line',
    'resolve_header_values',
    # Signing and verification
    'compute_signature',
    'sign_parameters',
    'verify_signature',
    'check_clock_skew',
    'Signer',
    'create_signer',
    'Verifier',
    'verify_request',
    'format_http_date',
    'parse_http_date',
    # Configuration
    'HTTPSignatureConfigManager',
    'ConfigLoadError',
    'load_config_from_dict',
    'load_config_from_json',
    'load_config_from_file',
    # HTTP Integration
    'HTTPSignatureAuth',
    'create_signing_session',
]
