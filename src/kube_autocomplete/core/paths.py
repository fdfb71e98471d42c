"""Resource alias to API request URI mapping."""

from __future__ import annotations

ALL_NAMESPACES = "all"

NODES_PATH = "/api/v1/nodes"

# alias -> path template, formatted with the namespace by format_path
RESOURCE_ALIASES: dict[str, str] = {
    "pods": "/pods",
    "pod": "/pods",
    "po": "/pods",
    "deployments": "/apis/apps/v1/deployments",
    "deployment": "/apis/apps/v1/deployments",
    "deploy": "/apis/apps/v1/deployments",
    "statefulsets": "/apis/apps/v1/statefulsets",
    "statefulset": "/apis/apps/v1/statefulsets",
    "sts": "/apis/apps/v1/statefulsets",
    "configmaps": "/configmaps",
    "configmap": "/configmaps",
    "cm": "/configmaps",
    "services": "/services",
    "service": "/services",
    "svc": "/services",
}

# Cluster-scoped aliases: namespace is ignored
CLUSTER_SCOPED: dict[str, str] = {
    "nodes": NODES_PATH,
    "node": NODES_PATH,
}


def resolve_namespace(value: str) -> str:
    """Translate the CLI namespace value; ``all`` means no namespace filter."""
    return "" if value == ALL_NAMESPACES else value


def build_path(alias: str, namespace: str) -> str:
    """Build the request URI listing ``alias`` resources.

    Unknown aliases are treated as core API resources named by the alias.

    Args:
        alias: Resource type or its short name (``po``, ``deploy``, ...).
        namespace: Namespace to scope to, or ``""`` for all namespaces.
            Interpolated verbatim.

    Returns:
        The request URI, e.g. ``/api/v1/namespaces/default/pods``.
    """
    if alias in CLUSTER_SCOPED:
        return CLUSTER_SCOPED[alias]
    template = RESOURCE_ALIASES.get(alias, f"/{alias}")
    return format_path(namespace, template)


def format_path(namespace: str, path: str) -> str:
    """Scope a path template to a namespace.

    Grouped templates (``/apis/<group>/<version>/<resource>``) get
    ``/namespaces/<ns>`` spliced in before the resource segment. Core
    templates (``/<resource>``) are prefixed with ``/api/v1``.
    """
    if path.startswith("/apis"):
        if not namespace:
            return path
        parts = path.split("/")
        if len(parts) < 5:
            return path
        prefix = "/".join(parts[1:4])
        return f"/{prefix}/namespaces/{namespace}/{parts[4]}"

    if not namespace:
        return f"/api/v1{path}"
    return f"/api/v1/namespaces/{namespace}{path}"
