"""Kubernetes integration - API client and configuration models."""

from kube_autocomplete.integrations.kubernetes.client import (
    TABLE_ACCEPT_HEADER,
    KubernetesClient,
)
from kube_autocomplete.integrations.kubernetes.config import KubernetesPluginConfig
from kube_autocomplete.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
)

__all__ = [
    "TABLE_ACCEPT_HEADER",
    "KubernetesAuthError",
    "KubernetesClient",
    "KubernetesConnectionError",
    "KubernetesError",
    "KubernetesNotFoundError",
    "KubernetesPluginConfig",
]
