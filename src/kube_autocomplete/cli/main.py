"""Main CLI entry point using Typer."""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, NoReturn

import structlog
import typer
from rich.console import Console
from rich.markup import escape

from kube_autocomplete import __version__
from kube_autocomplete.core.cache import FileCache
from kube_autocomplete.core.config import CONFIG_FILE, load_config
from kube_autocomplete.core.exceptions import AutocompleteError
from kube_autocomplete.core.paths import CLUSTER_SCOPED, RESOURCE_ALIASES
from kube_autocomplete.core.table import format_pairs
from kube_autocomplete.integrations.kubernetes.client import KubernetesClient
from kube_autocomplete.integrations.kubernetes.exceptions import (
    KubernetesAuthError,
    KubernetesConnectionError,
    KubernetesError,
    KubernetesNotFoundError,
)
from kube_autocomplete.logging.config import configure_logging
from kube_autocomplete.services.labels import LabelService

app = typer.Typer(
    name="kube-autocomplete",
    help="Print Kubernetes labels as key=value lines for shell completion.",
    add_completion=False,
)

# stdout carries completion candidates only; everything else goes to stderr
err_console = Console(stderr=True)
logger = structlog.get_logger()

KNOWN_RESOURCES = ", ".join(sorted({*RESOURCE_ALIASES, *CLUSTER_SCOPED}))


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"kube-autocomplete version {__version__}")
        raise typer.Exit()


def handle_error(error: KubernetesError | AutocompleteError) -> NoReturn:
    """Report a fatal error on stderr.

    Raises:
        typer.Exit: Always exits with code 1.
    """
    if isinstance(error, KubernetesConnectionError):
        err_console.print("[red]Error:[/red] Cannot connect to Kubernetes cluster")
        err_console.print(f"  {escape(error.message)}")
        if error.original_error:
            err_console.print(f"  Cause: {escape(str(error.original_error))}")
    elif isinstance(error, KubernetesAuthError):
        err_console.print("[red]Error:[/red] Authentication/authorization failed")
        err_console.print(f"  {escape(str(error))}")
    elif isinstance(error, KubernetesNotFoundError):
        err_console.print("[red]Error:[/red] Resource not found")
        err_console.print(f"  {escape(str(error))}")
        err_console.print(f"\n[dim]Known resources: {KNOWN_RESOURCES}[/dim]")
    else:
        err_console.print(f"[red]Error:[/red] {escape(str(error))}")

    logger.debug("fatal_error", error_type=type(error).__name__, error=str(error))
    raise typer.Exit(code=1)


@app.command()
def main(
    resource: Annotated[
        str,
        typer.Option(
            "--resource",
            "-r",
            help=f"Resource type ({KNOWN_RESOURCES}, or any other plural name)",
        ),
    ] = "pods",
    namespace: Annotated[
        str,
        typer.Option(
            "--namespace",
            "-n",
            help="Namespace to query, or 'all' for all namespaces",
        ),
    ] = "default",
    cache_dir: Annotated[
        Path | None,
        typer.Option(
            "--cache-dir",
            help="Directory for cached responses (default: .cache)",
        ),
    ] = None,
    context: Annotated[
        str | None,
        typer.Option("--context", help="Kubeconfig context to use"),
    ] = None,
    kubeconfig: Annotated[
        str | None,
        typer.Option("--kubeconfig", help="Path to the kubeconfig file"),
    ] = None,
    config_file: Annotated[
        Path,
        typer.Option("--config", help="Path to the YAML configuration file"),
    ] = CONFIG_FILE,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging on stderr."),
    ] = False,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Enable debug logging on stderr."),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Print the labels of every RESOURCE in NAMESPACE, one key=value per line."""
    configure_logging(verbose=verbose, debug=debug)

    try:
        config = load_config(
            config_file,
            cache_dir=cache_dir,
            context=context,
            kubeconfig=kubeconfig,
        )
        with KubernetesClient(config.kubernetes) as client:
            cache = FileCache(config.cache_dir, ttl=config.cache_ttl)
            cache.ensure_directory()
            pairs = LabelService(client, cache).list_labels(resource, namespace)
    except (KubernetesError, AutocompleteError) as e:
        handle_error(e)

    for line in format_pairs(pairs):
        typer.echo(line)


if __name__ == "__main__":
    app()
