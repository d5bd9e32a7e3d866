"""
Configuration management for the message signatures SDK
"""

from .settings import (
    HttpSignatureConfig,
    SignerConfig,
    load_config_json,
    DEFAULT_MAX_AGE,
    DEFAULT_REQUIRED_COMPONENTS,
    DEFAULT_SIGNING_COMPONENTS,
    DEFAULT_SIGNING_ALGORITHM,
)

__all__ = [
    'HttpSignatureConfig',
    'SignerConfig',
    'load_config_json',
    'DEFAULT_MAX_AGE',
    'DEFAULT_REQUIRED_COMPONENTS',
    'DEFAULT_SIGNING_COMPONENTS',
    'DEFAULT_SIGNING_ALGORITHM',
]
