"""
Configuration management for the HTTP Signatures SDK

This module provides environment-specific configuration for request signing,
request verification and logging.
"""

from .settings import (
    HTTPSignatureConfig,
    HTTPSignatureConfigManager,
    EnvironmentConfig,
    SigningSettings,
    VerificationSettings,
    LoggingSettings,
    ConfigLoadError,
    PLACEMENT_SIGNATURE,
    PLACEMENT_AUTHORIZATION,
    configure_logging,
    load_config_from_dict,
    load_config_from_json,
    load_config_from_file,
)

__all__ = [
    'HTTPSignatureConfig',
    'HTTPSignatureConfigManager',
    'EnvironmentConfig',
    'SigningSettings',
    'VerificationSettings',
    'LoggingSettings',
    'ConfigLoadError',
    'PLACEMENT_SIGNATURE',
    'PLACEMENT_AUTHORIZATION',
    'configure_logging',
    'load_config_from_dict',
    'load_config_from_json',
    'load_config_from_file',
]
