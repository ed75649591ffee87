"""
Configuration management for the fedisig SDK

This module provides the federation configuration used by the signed HTTP
client: instance URL, key id derivation, User-Agent and debug settings.
"""

from .federation_config import (
    FederationConfig,
    DebugConfig,
    DEFAULT_USER_AGENT,
    create_config,
    load_config_from_json,
    load_config_from_file,
    load_config_from_env,
)

__all__ = [
    'FederationConfig',
    'DebugConfig',
    'DEFAULT_USER_AGENT',
    'create_config',
    'load_config_from_json',
    'load_config_from_file',
    'load_config_from_env',
]
