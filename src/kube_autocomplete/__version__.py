"""Version information for kube_autocomplete."""

__version__ = "0.1.0"
