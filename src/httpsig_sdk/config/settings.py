"""
Configuration management for signers and verifiers

Loads environment-specific signing, verification and logging settings from a
JSON document and turns them into ``Signer`` and ``Verifier`` instances.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..algorithms import AlgorithmRegistry, DEFAULT_REGISTRY
from ..signer import Signer
from ..types import KeyLookup
from ..verifier import Verifier

PACKAGE_LOGGER = "httpsig_sdk"
SIGNING_STRING_LOGGER = "httpsig_sdk.signing_strings"

PLACEMENT_SIGNATURE = "signature"
PLACEMENT_AUTHORIZATION = "authorization"


class ConfigLoadError(Exception):
    """Configuration loading and validation error"""

    def __init__(self, message: str, code: Optional[str] = None):
        super().__init__(message)
        self.code = code


@dataclass
class SigningSettings:
    """Signing configuration"""
    algorithm: str
    headers: List[str] = field(default_factory=list)
    key_id: Optional[str] = None
    placement: str = PLACEMENT_SIGNATURE
    add_date_header: bool = True


@dataclass
class VerificationSettings:
    """Verification configuration"""
    allowed_algorithms: List[str]
    allowed_clock_skew_seconds: int = 300
    required_headers: List[str] = field(default_factory=list)


@dataclass
class LoggingSettings:
    """Logging configuration"""
    level: str = "WARNING"
    log_signing_strings: bool = False


@dataclass
class EnvironmentConfig:
    """Environment-specific configuration"""
    signing: Optional[SigningSettings]
    verification: Optional[VerificationSettings]
    logging: LoggingSettings


@dataclass
class HTTPSignatureConfig:
    """Configuration document"""
    config_format_version: str
    default_environment: str
    environments: Dict[str, EnvironmentConfig]


class HTTPSignatureConfigManager:
    """Configuration manager selecting one environment at a time"""

    def __init__(
        self,
        config: HTTPSignatureConfig,
        environment: Optional[str] = None,
        registry: Optional[AlgorithmRegistry] = None
    ):
        self.config = config
        self.registry = registry or DEFAULT_REGISTRY
        self.current_environment = environment or config.default_environment
        self._validate()

    @classmethod
    def from_dict(cls, data: Dict[str, Any], environment: Optional[str] = None) -> 'HTTPSignatureConfigManager':
        """Load configuration from a parsed dictionary"""
        try:
            config = cls._parse_config_dict(data)
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigLoadError(f"Invalid configuration format: {e}", "INVALID_FORMAT")
        return cls(config, environment)

    @classmethod
    def from_json(cls, json_string: str, environment: Optional[str] = None) -> 'HTTPSignatureConfigManager':
        """Load configuration from JSON string"""
        try:
            data = json.loads(json_string)
        except json.JSONDecodeError as e:
            raise ConfigLoadError(f"Failed to parse configuration JSON: {e}", "PARSE_ERROR")
        return cls.from_dict(data, environment)

    @classmethod
    def from_file(cls, file_path: Union[str, Path], environment: Optional[str] = None) -> 'HTTPSignatureConfigManager':
        """Load configuration from file"""
        try:
            with open(Path(file_path), 'r', encoding='utf-8') as f:
                json_string = f.read()
        except OSError as e:
            raise ConfigLoadError(f"Failed to read configuration file: {e}", "FILE_ERROR")
        return cls.from_json(json_string, environment)

    def set_environment(self, environment: str) -> None:
        """Set current environment"""
        if environment not in self.config.environments:
            raise ConfigLoadError(f"Environment '{environment}' not found", "ENVIRONMENT_NOT_FOUND")
        self.current_environment = environment

    def get_current_environment_config(self) -> EnvironmentConfig:
        env_config = self.config.environments.get(self.current_environment)
        if not env_config:
            raise ConfigLoadError(f"Environment '{self.current_environment}' not found", "ENVIRONMENT_NOT_FOUND")
        return env_config

    def list_environments(self) -> List[str]:
        return list(self.config.environments.keys())

    def get_signing_settings(self) -> SigningSettings:
        settings = self.get_current_environment_config().signing
        if settings is None:
            raise ConfigLoadError(
                f"Environment '{self.current_environment}' has no signing section",
                "MISSING_SIGNING_CONFIG"
            )
        return settings

    def get_verification_settings(self) -> VerificationSettings:
        settings = self.get_current_environment_config().verification
        if settings is None:
            raise ConfigLoadError(
                f"Environment '{self.current_environment}' has no verification section",
                "MISSING_VERIFICATION_CONFIG"
            )
        return settings

    def get_logging_settings(self) -> LoggingSettings:
        return self.get_current_environment_config().logging

    def create_signer(self) -> Signer:
        """Signer for the current environment"""
        settings = self.get_signing_settings()
        return Signer(settings.algorithm, settings.headers, self.registry)

    def create_verifier(self, key_lookup: KeyLookup) -> Verifier:
        """Verifier for the current environment using ``key_lookup``"""
        settings = self.get_verification_settings()
        return Verifier(
            key_lookup,
            allowed_algorithms=settings.allowed_algorithms,
            allowed_clock_skew=settings.allowed_clock_skew_seconds,
            required_headers=settings.required_headers,
            registry=self.registry,
        )

    def configure_logging(self) -> None:
        """Apply the current environment's logging settings"""
        configure_logging(self.get_logging_settings())

    def _validate(self) -> None:
        if self.config.default_environment not in self.config.environments:
            raise ConfigLoadError(
                f"Default environment '{self.config.default_environment}' not found",
                "INVALID_DEFAULT_ENVIRONMENT"
            )

        for env_name, env_config in self.config.environments.items():
            signing = env_config.signing
            if signing is not None:
                if signing.algorithm not in self.registry:
                    raise ConfigLoadError(
                        f"Environment '{env_name}' uses unsupported algorithm '{signing.algorithm}'",
                        "INVALID_SIGNING_CONFIG"
                    )
                if signing.placement not in (PLACEMENT_SIGNATURE, PLACEMENT_AUTHORIZATION):
                    raise ConfigLoadError(
                        f"Environment '{env_name}' has invalid signature placement '{signing.placement}'",
                        "INVALID_SIGNING_CONFIG"
                    )

            verification = env_config.verification
            if verification is not None:
                if not verification.allowed_algorithms:
                    raise ConfigLoadError(
                        f"Environment '{env_name}' allows no algorithms",
                        "INVALID_VERIFICATION_CONFIG"
                    )
                if verification.allowed_clock_skew_seconds == 0:
                    raise ConfigLoadError(
                        f"Environment '{env_name}' sets allowed clock skew to 0, "
                        "use a negative value to disable the check",
                        "INVALID_VERIFICATION_CONFIG"
                    )

            if logging.getLevelName(env_config.logging.level.upper()) not in range(0, 51):
                raise ConfigLoadError(
                    f"Environment '{env_name}' has invalid log level '{env_config.logging.level}'",
                    "INVALID_LOGGING_CONFIG"
                )

    @staticmethod
    def _parse_config_dict(data: Dict[str, Any]) -> HTTPSignatureConfig:
        environments = {}
        for env_name, env_data in data['environments'].items():
            signing_data = env_data.get('signing')
            verification_data = env_data.get('verification')
            environments[env_name] = EnvironmentConfig(
                signing=SigningSettings(**signing_data) if signing_data is not None else None,
                verification=VerificationSettings(**verification_data) if verification_data is not None else None,
                logging=LoggingSettings(**env_data.get('logging', {})),
            )

        return HTTPSignatureConfig(
            config_format_version=data.get('config_format_version', '1.0'),
            default_environment=data['defaults']['environment'],
            environments=environments,
        )


def configure_logging(settings: LoggingSettings) -> None:
    """
    Apply logging settings to the package loggers.

    Signing strings are emitted on a dedicated logger that stays disabled
    unless ``log_signing_strings`` is set.
    """
    logging.getLogger(PACKAGE_LOGGER).setLevel(settings.level.upper())
    logging.getLogger(SIGNING_STRING_LOGGER).disabled = not settings.log_signing_strings


def load_config_from_dict(data: Dict[str, Any], environment: Optional[str] = None) -> HTTPSignatureConfigManager:
    """Load configuration from a dictionary"""
    return HTTPSignatureConfigManager.from_dict(data, environment)


def load_config_from_json(json_string: str, environment: Optional[str] = None) -> HTTPSignatureConfigManager:
    """Load configuration from JSON string"""
    return HTTPSignatureConfigManager.from_json(json_string, environment)


def load_config_from_file(file_path: Union[str, Path], environment: Optional[str] = None) -> HTTPSignatureConfigManager:
    """Load configuration from file"""
    return HTTPSignatureConfigManager.from_file(file_path, environment)
