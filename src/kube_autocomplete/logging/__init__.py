"""Logging configuration for kube_autocomplete."""

from kube_autocomplete.logging.config import configure_logging

__all__ = ["configure_logging"]
