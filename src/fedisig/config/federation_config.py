"""
Federation configuration for the fedisig SDK

Holds the settings of the local server that signs outbound requests: its
base URL (from which key ids are derived), the User-Agent sent with every
request, transport options and debug switches.
"""

import os
import json
from typing import Any, Dict, Mapping, Optional, Union
from dataclasses import dataclass, field, asdict
from pathlib import Path
from urllib.parse import urlparse

from ..exceptions import ConfigurationError

DEFAULT_USER_AGENT = "fedisig/0.1.0"
DEFAULT_ENV_PREFIX = "FEDISIG_"

_TRUE_VALUES = ('1', 'true', 'yes', 'on')
_FALSE_VALUES = ('0', 'false', 'no', 'off', '')


@dataclass
class DebugConfig:
    """Debug configuration"""
    log_signing_strings: bool = False
    log_timing: bool = True
    slow_signing_threshold_ms: float = 50.0

    def __post_init__(self):
        if self.slow_signing_threshold_ms <= 0:
            raise ConfigurationError(
                "slow_signing_threshold_ms must be positive",
                details={"slow_signing_threshold_ms": self.slow_signing_threshold_ms}
            )


@dataclass
class FederationConfig:
    """
    Configuration of the local federation server

    Attributes:
        instance_url: Base URL of the local server (e.g. ``https://example.social``)
        user_agent: User-Agent header sent with signed requests
        timeout: Request timeout in seconds
        verify_ssl: Whether to verify TLS certificates
        debug: Debug switches
    """
    instance_url: str
    user_agent: str = DEFAULT_USER_AGENT
    timeout: float = 30.0
    verify_ssl: bool = True
    debug: DebugConfig = field(default_factory=DebugConfig)

    def __post_init__(self):
        """Validate federation configuration."""
        if not self.instance_url:
            raise ConfigurationError("instance_url cannot be empty")

        self.instance_url = self.instance_url.rstrip('/')

        parsed = urlparse(self.instance_url)
        if parsed.scheme not in ('http', 'https') or not parsed.netloc:
            raise ConfigurationError(
                f"Invalid instance URL format: {self.instance_url}",
                details={"instance_url": self.instance_url}
            )

        if not self.user_agent:
            raise ConfigurationError("user_agent cannot be empty")

        if self.timeout <= 0:
            raise ConfigurationError("Timeout must be positive", details={"timeout": self.timeout})

        if self.debug is None:
            self.debug = DebugConfig()
        elif isinstance(self.debug, Mapping):
            self.debug = DebugConfig(**self.debug)

    def key_id_for(self, user_id: str) -> str:
        """
        Key id of a local user's main key.

        Args:
            user_id: Local user identifier

        Returns:
            str: ``{instance_url}/users/{user_id}#main-key``
        """
        if not user_id:
            raise ConfigurationError("user_id cannot be empty")
        return f"{self.instance_url}/users/{user_id}#main-key"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'FederationConfig':
        """Build configuration from a plain dictionary"""
        try:
            return cls(**dict(data))
        except TypeError as e:
            raise ConfigurationError(
                f"Invalid configuration format: {e}",
                details={"original_error": str(e)}
            ) from e


def create_config(instance_url: str, **overrides) -> FederationConfig:
    """Create federation configuration from keyword arguments"""
    return FederationConfig.from_dict({"instance_url": instance_url, **overrides})


def load_config_from_json(json_string: str) -> FederationConfig:
    """Load federation configuration from JSON string"""
    try:
        data = json.loads(json_string)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"Failed to parse configuration JSON: {e}",
            details={"original_error": str(e)}
        ) from e

    if not isinstance(data, dict):
        raise ConfigurationError("Configuration JSON must be an object")

    return FederationConfig.from_dict(data)


def load_config_from_file(file_path: Union[str, Path]) -> FederationConfig:
    """Load federation configuration from a JSON file"""
    try:
        with open(Path(file_path), 'r', encoding='utf-8') as f:
            json_string = f.read()
    except OSError as e:
        raise ConfigurationError(
            f"Failed to read configuration file: {e}",
            details={"path": str(file_path), "original_error": str(e)}
        ) from e
    return load_config_from_json(json_string)


def _parse_bool(name: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ConfigurationError(f"Invalid boolean for {name}: {value}", details={name: value})


def _parse_float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise ConfigurationError(f"Invalid number for {name}: {value}", details={name: value}) from e


def load_config_from_env(
    prefix: str = DEFAULT_ENV_PREFIX,
    environ: Optional[Mapping[str, str]] = None
) -> FederationConfig:
    """
    Load federation configuration from environment variables.

    Recognised variables (with the default prefix): ``FEDISIG_INSTANCE_URL``
    (required), ``FEDISIG_USER_AGENT``, ``FEDISIG_TIMEOUT``,
    ``FEDISIG_VERIFY_SSL``, ``FEDISIG_LOG_SIGNING_STRINGS``,
    ``FEDISIG_LOG_TIMING``, ``FEDISIG_SLOW_SIGNING_THRESHOLD_MS``.

    Raises:
        ConfigurationError: If a variable is missing or malformed
    """
    env = os.environ if environ is None else environ

    instance_url = env.get(f"{prefix}INSTANCE_URL")
    if not instance_url:
        raise ConfigurationError(f"{prefix}INSTANCE_URL is not set")

    values: Dict[str, Any] = {"instance_url": instance_url}
    if f"{prefix}USER_AGENT" in env:
        values["user_agent"] = env[f"{prefix}USER_AGENT"]
    if f"{prefix}TIMEOUT" in env:
        values["timeout"] = _parse_float(f"{prefix}TIMEOUT", env[f"{prefix}TIMEOUT"])
    if f"{prefix}VERIFY_SSL" in env:
        values["verify_ssl"] = _parse_bool(f"{prefix}VERIFY_SSL", env[f"{prefix}VERIFY_SSL"])

    debug: Dict[str, Any] = {}
    if f"{prefix}LOG_SIGNING_STRINGS" in env:
        debug["log_signing_strings"] = _parse_bool(
            f"{prefix}LOG_SIGNING_STRINGS", env[f"{prefix}LOG_SIGNING_STRINGS"]
        )
    if f"{prefix}LOG_TIMING" in env:
        debug["log_timing"] = _parse_bool(f"{prefix}LOG_TIMING", env[f"{prefix}LOG_TIMING"])
    if f"{prefix}SLOW_SIGNING_THRESHOLD_MS" in env:
        debug["slow_signing_threshold_ms"] = _parse_float(
            f"{prefix}SLOW_SIGNING_THRESHOLD_MS", env[f"{prefix}SLOW_SIGNING_THRESHOLD_MS"]
        )
    if debug:
        values["debug"] = debug

    return FederationConfig.from_dict(values)
