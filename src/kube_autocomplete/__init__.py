"""kube-autocomplete - Kubernetes label completion for the shell."""

from kube_autocomplete.__version__ import __version__

__all__ = ["__version__"]
