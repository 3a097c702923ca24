"""
Configuration management for the vCenter session client.

Settings are validated with Pydantic and merged from an optional JSON/YAML
file and environment variables, environment winning.
"""

import json
import os
from pathlib import Path
from typing import Optional, Union
from urllib.parse import urlsplit

import yaml
from pydantic import BaseModel, Field, SecretStr, field_validator

from vccli.utils.logging import get_logger

logger = get_logger(__name__)

# Environment variable -> configuration field
ENV_VARS = {
    "VCENTER_URL": "base_url",
    "VCENTER_USERNAME": "username",
    "VCENTER_PASSWORD": "password",
    "VCENTER_TIMEOUT": "timeout_seconds",
    "VCENTER_VERIFY_SSL": "verify_ssl",
    "LOG_LEVEL": "log_level",
}


class ClientConfig(BaseModel):
    """Connection settings for a vCenter client."""
    base_url: str = Field(description="vCenter base URL, e.g. https://vcenter.example.com")
    username: str = Field(description="Account used to create sessions")
    password: SecretStr = Field(default=SecretStr(""), description="Password for the account")
    timeout_seconds: float = Field(default=30.0, gt=0, description="Per-request timeout in seconds")
    verify_ssl: bool = Field(default=True, description="Whether to verify TLS certificates")
    pool_maxsize: int = Field(default=10, ge=1, description="Connections kept per host")
    log_level: str = Field(default="INFO", description="Default log level")

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v):
        """Validate base URL."""
        parts = urlsplit(v)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"base_url must be an absolute http(s) URL, got {v!r}")
        return v

    @field_validator("username")
    @classmethod
    def validate_username(cls, v):
        """Validate username."""
        if not v:
            raise ValueError("username must not be empty")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        allowed = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed:
            raise ValueError(f"Log level must be one of {allowed}")
        return v.upper()


# Global configuration instance
_config = None


def load_config_from_environment() -> dict:
    """Load configuration from environment variables."""
    config = {}

    for env_name, field_name in ENV_VARS.items():
        value = os.environ.get(env_name)
        if value:
            config[field_name] = value

    return config


def load_config_from_file(file_path: Union[str, Path]) -> dict:
    """Load configuration from a JSON or YAML file."""
    file_path = Path(file_path)
    if not file_path.exists():
        logger.warning(f"Config file not found: {file_path}")
        return {}

    with open(file_path, "r") as f:
        if file_path.suffix == ".json":
            data = json.load(f)
        elif file_path.suffix in [".yaml", ".yml"]:
            data = yaml.safe_load(f)
        else:
            logger.warning(f"Unsupported config file format: {file_path.suffix}")
            return {}

    return data or {}


def get_config(config_path: Optional[Union[str, Path]] = None, reload: bool = False) -> ClientConfig:
    """Get the global configuration instance.

    Args:
        config_path: Optional JSON/YAML file, falls back to ``VCENTER_CONFIG``.
        reload: Discard the cached configuration and load it again.

    Raises:
        ValueError: If the merged configuration is incomplete or invalid.
    """
    global _config

    if _config is None or reload:
        config_dict = {}

        config_path = config_path or os.environ.get("VCENTER_CONFIG")
        if config_path:
            config_dict.update(load_config_from_file(config_path))

        config_dict.update(load_config_from_environment())

        try:
            _config = ClientConfig(**config_dict)
        except ValueError as e:
            logger.error(f"Error creating configuration: {e}")
            raise

        logger.info(f"Configuration loaded for {_config.base_url}")

    return _config
