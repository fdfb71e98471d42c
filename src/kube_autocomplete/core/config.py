"""Application configuration with Pydantic validation.

Precedence, highest first: CLI flags, ``KUBE_AUTOCOMPLETE_*`` environment
variables, the YAML config file, defaults.
"""

from __future__ import annotations

import os
from datetime import timedelta
from pathlib import Path
from typing import Any

import structlog
import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from kube_autocomplete.core.cache import DEFAULT_CACHE_DIR, DEFAULT_TTL
from kube_autocomplete.core.exceptions import ConfigError
from kube_autocomplete.integrations.kubernetes.config import KubernetesPluginConfig

logger = structlog.get_logger()

# XDG-compliant config location
CONFIG_DIR = Path.home() / ".config" / "kube-autocomplete"
CONFIG_FILE = CONFIG_DIR / "config.yaml"

KUBERNETES_OVERRIDES = frozenset({"kubeconfig", "context", "request_timeout"})


class AppConfig(BaseModel):
    """Complete application configuration."""

    model_config = ConfigDict(extra="forbid")

    cache_dir: Path = DEFAULT_CACHE_DIR
    cache_ttl_seconds: int = int(DEFAULT_TTL.total_seconds())
    kubernetes: KubernetesPluginConfig = Field(default_factory=KubernetesPluginConfig)

    @field_validator("cache_dir")
    @classmethod
    def expand_cache_dir(cls, v: Path) -> Path:
        """Expand ~ in the cache directory."""
        return v.expanduser()

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_ttl(cls, v: int) -> int:
        """Validate TTL is not negative."""
        if v < 0:
            raise ValueError("cache_ttl_seconds must be non-negative")
        return v

    @property
    def cache_ttl(self) -> timedelta:
        """TTL as a timedelta."""
        return timedelta(seconds=self.cache_ttl_seconds)

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> AppConfig:
        """Create configuration with environment variable overrides.

        Supported environment variables:
            KUBE_AUTOCOMPLETE_CACHE_DIR: Cache directory
            KUBE_AUTOCOMPLETE_CACHE_TTL: Cache TTL in seconds
            plus those read by KubernetesPluginConfig.from_env
        """
        config_dict = base_config.copy() if base_config else {}

        if cache_dir := os.environ.get("KUBE_AUTOCOMPLETE_CACHE_DIR"):
            config_dict["cache_dir"] = cache_dir

        if ttl := os.environ.get("KUBE_AUTOCOMPLETE_CACHE_TTL"):
            config_dict["cache_ttl_seconds"] = int(ttl)

        config_dict["kubernetes"] = KubernetesPluginConfig.from_env(
            config_dict.get("kubernetes") or {}
        )
        return cls.model_validate(config_dict)


def read_config_file(path: Path = CONFIG_FILE) -> dict[str, Any]:
    """Read the YAML config file, returning an empty dict if it doesn't exist.

    Raises:
        ConfigError: If the file cannot be read or is not a YAML mapping.
    """
    if not path.exists():
        logger.debug("config_file_not_found", path=str(path))
        return {}

    try:
        data = yaml.safe_load(path.read_text())
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Cannot read config file '{path}': {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Config file '{path}' must contain a mapping")
    return data


def load_config(path: Path = CONFIG_FILE, **overrides: Any) -> AppConfig:
    """Load configuration from file and environment, then apply overrides.

    Args:
        path: YAML config file location.
        **overrides: Values given on the command line. ``None`` values are
            ignored. ``kubeconfig`` and ``context`` go to the Kubernetes
            section, everything else to the top level.

    Raises:
        ConfigError: If the file or the merged configuration is invalid.
    """
    try:
        data = AppConfig.from_env(read_config_file(path)).model_dump()
        for key, value in overrides.items():
            if value is None:
                continue
            if key in KUBERNETES_OVERRIDES:
                data["kubernetes"][key] = value
            else:
                data[key] = value
        config = AppConfig.model_validate(data)
    except (ValidationError, ValueError) as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

    logger.debug(
        "config_loaded",
        cache_dir=str(config.cache_dir),
        cache_ttl_seconds=config.cache_ttl_seconds,
        context=config.kubernetes.context,
    )
    return config
