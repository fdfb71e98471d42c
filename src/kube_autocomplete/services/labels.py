"""Label lookup service.

Ties the pipeline together: request URI from the resource alias, cached or
fresh Table response, flattened label pairs.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from kube_autocomplete.core.cache import CacheStatus
from kube_autocomplete.core.paths import build_path, resolve_namespace
from kube_autocomplete.core.table import flatten

if TYPE_CHECKING:
    from kube_autocomplete.core.cache import FileCache
    from kube_autocomplete.integrations.kubernetes.client import KubernetesClient

logger = structlog.get_logger()


class LabelService:
    """Lists the labels of a resource collection, through the file cache.

    Example:
        >>> service = LabelService(client, FileCache(Path(".cache")))
        >>> service.list_labels("deploy", "all")
        [('app', 'web'), ('tier', 'frontend')]
    """

    def __init__(self, client: KubernetesClient, cache: FileCache) -> None:
        """Initialize the service.

        Args:
            client: Kubernetes API client used on cache misses.
            cache: File cache of raw responses.
        """
        self._client = client
        self._cache = cache
        self._log = logger.bind(entity="labels")

    def fetch_table(self, path: str) -> bytes:
        """Return the response body for ``path``, from cache when fresh.

        Cache read and write problems are logged and otherwise ignored.

        Raises:
            KubernetesError: If the request fails on a cache miss.
        """
        lookup = self._cache.get(path)
        if lookup.found and lookup.body is not None:
            self._log.debug("cache_hit", path=path)
            return lookup.body

        if lookup.status in (CacheStatus.UNREADABLE, CacheStatus.CORRUPT):
            self._log.warning(
                "cache_entry_ignored",
                path=path,
                status=str(lookup.status),
                error=lookup.error,
            )
        else:
            self._log.debug("cache_miss", path=path, status=str(lookup.status))

        body = self._client.fetch(path)

        write = self._cache.set(path, body)
        if not write.ok:
            self._log.warning("cache_write_failed", path=path, file=str(write.path), error=write.error)
        return body

    def list_labels(self, resource: str, namespace: str) -> list[tuple[str, str]]:
        """List label pairs of every ``resource`` object in ``namespace``.

        Args:
            resource: Resource alias (``pods``, ``deploy``, ``cm``, ...).
            namespace: Namespace name, or ``all`` for every namespace.

        Raises:
            KubernetesError: If the request fails on a cache miss.
            TableParseError: If the response is not a list/Table document.
        """
        path = build_path(resource, resolve_namespace(namespace))
        self._log.debug("listing_labels", resource=resource, namespace=namespace, path=path)
        pairs = flatten(self.fetch_table(path))
        self._log.info("labels_listed", path=path, count=len(pairs))
        return pairs
