"""Kubernetes integration configuration models."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator


class KubernetesPluginConfig(BaseModel):
    """Cluster connection settings.

    Every field is optional: with nothing set the client uses the default
    kubeconfig loading rules (``$KUBECONFIG`` or ``~/.kube/config``, current
    context), exactly like ``kubectl``.
    """

    model_config = ConfigDict(extra="forbid")

    kubeconfig: str | None = None
    context: str | None = None
    request_timeout: int | None = None

    @field_validator("kubeconfig")
    @classmethod
    def validate_kubeconfig(cls, v: str | None) -> str | None:
        """Expand ~ in kubeconfig path."""
        if v is None:
            return v
        return str(Path(v).expanduser())

    @field_validator("request_timeout")
    @classmethod
    def validate_request_timeout(cls, v: int | None) -> int | None:
        """Validate timeout is positive."""
        if v is not None and v <= 0:
            raise ValueError("request_timeout must be positive")
        return v

    @classmethod
    def from_env(cls, base_config: dict[str, Any] | None = None) -> KubernetesPluginConfig:
        """Create configuration with environment variable overrides.

        Environment variables take precedence over base_config values.

        Supported environment variables:
            KUBE_AUTOCOMPLETE_KUBECONFIG: Kubeconfig path
            KUBE_AUTOCOMPLETE_CONTEXT: Kubeconfig context name
            KUBE_AUTOCOMPLETE_TIMEOUT: Request timeout in seconds
        """
        config_dict = base_config.copy() if base_config else {}

        if kubeconfig := os.environ.get("KUBE_AUTOCOMPLETE_KUBECONFIG"):
            config_dict["kubeconfig"] = kubeconfig

        if context := os.environ.get("KUBE_AUTOCOMPLETE_CONTEXT"):
            config_dict["context"] = context

        if timeout := os.environ.get("KUBE_AUTOCOMPLETE_TIMEOUT"):
            config_dict["request_timeout"] = int(timeout)

        return cls.model_validate(config_dict)
