"""Kubernetes API client wrapper.

Wraps the official kubernetes Python client for raw, table-formatted reads:
kubeconfig/in-cluster loading, a lazily built ``ApiClient`` that asks for the
server-side Table representation on every request, and consistent error
translation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import structlog
import yaml

from kube_autocomplete.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
)

if TYPE_CHECKING:
    from kubernetes.client import ApiClient

    from kube_autocomplete.integrations.kubernetes.config import KubernetesPluginConfig

logger = structlog.get_logger()

TABLE_ACCEPT_HEADER = "application/json;as=Table;g=meta.k8s.io;v=v1"


class KubernetesClient:
    """Kubernetes API client for raw table reads.

    Example:
        ```python
        from kube_autocomplete.integrations.kubernetes import KubernetesClient
        from kube_autocomplete.integrations.kubernetes.config import (
            KubernetesPluginConfig,
        )

        config = KubernetesPluginConfig.from_env()
        with KubernetesClient(config) as client:
            body = client.fetch("/api/v1/namespaces/default/pods")
        ```
    """

    def __init__(self, plugin_config: KubernetesPluginConfig) -> None:
        """Initialize Kubernetes client from plugin config.

        Args:
            plugin_config: Cluster connection settings.

        Raises:
            KubernetesConnectionError: If neither kubeconfig nor in-cluster
                configuration can be loaded.
        """
        self._config = plugin_config
        self._current_context: str | None = None
        self._api_client: ApiClient | None = None

        self._load_config()

        logger.info("Kubernetes client initialized", context=self._current_context)

    def _load_config(self) -> None:
        """Load Kubernetes configuration from kubeconfig or in-cluster."""
        from kubernetes import config
        from kubernetes.config import ConfigException

        try:
            config.load_kube_config(
                config_file=self._config.kubeconfig,
                context=self._config.context,
            )
            self._current_context = self._config.context or "current-context"
            logger.debug(
                "loaded_kubeconfig",
                context=self._config.context,
                kubeconfig=self._config.kubeconfig,
            )
        except ConfigException:
            try:
                config.load_incluster_config()
                self._current_context = "in-cluster"
                logger.debug("loaded_incluster_config")
            except ConfigException as e:
                raise KubernetesConnectionError(
                    message="Cannot load Kubernetes configuration. "
                    "Ensure kubeconfig exists or running inside a cluster.",
                    original_error=e,
                ) from e
        except (yaml.YAMLError, OSError) as e:
            # a kubeconfig that exists but is broken; no in-cluster fallback
            raise KubernetesConnectionError(
                message=f"Cannot read kubeconfig {self._config.kubeconfig or '(default location)'}",
                original_error=e,
            ) from e

        self._api_client = None

    @property
    def api_client(self) -> ApiClient:
        """Get the ApiClient instance, sending the Table accept header by default."""
        if self._api_client is None:
            from kubernetes.client import ApiClient

            self._api_client = ApiClient()
            self._api_client.set_default_header("Accept", TABLE_ACCEPT_HEADER)
        return self._api_client

    def fetch(self, path: str) -> bytes:
        """GET a request URI and return the raw response body.

        Args:
            path: Request URI relative to the API server, e.g.
                ``/api/v1/namespaces/default/pods``.

        Returns:
            The undecoded response body.

        Raises:
            KubernetesAuthError: On 401/403 responses.
            KubernetesNotFoundError: On 404 responses.
            KubernetesConnectionError: When the API server cannot be reached.
            KubernetesError: On any other API error.
        """
        from kubernetes.client import ApiException
        from urllib3.exceptions import HTTPError

        logger.debug("fetching_table", path=path)
        try:
            response = self.api_client.call_api(
                path,
                "GET",
                auth_settings=["BearerToken"],
                _return_http_data_only=True,
                _preload_content=False,
                _request_timeout=self._config.request_timeout,
            )
        except ApiException as e:
            raise self.translate_api_exception(e, path=path) from e
        except HTTPError as e:
            raise KubernetesConnectionError(
                message="Request to the Kubernetes API server failed",
                original_error=e,
                path=path,
            ) from e

        body: bytes = response.data
        logger.debug("fetched_table", path=path, size=len(body))
        return body

    def get_current_context(self) -> str:
        """Get the current active context name.

        Returns:
            The context name, 'in-cluster' if running inside a pod, or
            'current-context' when the kubeconfig default was used.
        """
        return self._current_context or "unknown"

    @staticmethod
    def translate_api_exception(e: Exception, path: str | None = None) -> KubernetesError:
        """Translate a kubernetes ApiException to a custom exception.

        Args:
            e: The original ApiException.
            path: Request URI that failed.

        Returns:
            An appropriate KubernetesError subclass.
        """
        from kubernetes.client import ApiException

        if not isinstance(e, ApiException):
            return KubernetesError(message=str(e), path=path)

        status = e.status

        if status in (401, 403):
            return KubernetesAuthError(
                message=e.reason or "Authentication/authorization failed",
                status_code=status,
                reason=e.reason,
                path=path,
            )

        if status == 404:
            return KubernetesNotFoundError(path=path)

        return KubernetesError(
            message=e.reason or f"Kubernetes API error: {status}",
            status_code=status,
            path=path,
        )

    def close(self) -> None:
        """Close the client and release pooled connections."""
        if self._api_client is not None:
            self._api_client.close()
            self._api_client = None
        logger.debug("Kubernetes client closed")

    def __enter__(self) -> KubernetesClient:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit."""
        self.close()
