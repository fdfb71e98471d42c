"""Shared pytest fixtures for kube_autocomplete tests."""

from __future__ import annotations

import logging
import os
import threading
from collections.abc import Generator
from dataclasses import dataclass, field
from datetime import UTC, datetime
from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path

import pytest
import structlog
from typer.testing import CliRunner

PODS_TABLE = (
    b'{"kind":"Table","apiVersion":"meta.k8s.io/v1",'
    b'"items":[{"metadata":{"name":"web-1","labels":{"app":"web","tier":"frontend"}}},'
    b'{"metadata":{"name":"db-0","labels":{"app":"db"}}},'
    b'{"metadata":{"name":"bare"}}]}'
)


@pytest.fixture
def cli_runner() -> CliRunner:
    """Create a Typer CLI test runner."""
    return CliRunner()


@pytest.fixture
def fixed_now() -> datetime:
    """A fixed point in time for cache tests."""
    return datetime(2024, 5, 1, 12, 0, 0, tzinfo=UTC)


@pytest.fixture
def pods_table() -> bytes:
    """A list response with three pods, one without labels."""
    return PODS_TABLE


@dataclass
class FakeApiServer:
    """A local HTTP server answering every GET with a fixed body."""

    url: str
    kubeconfig: Path
    body: bytes
    status: int = 200
    requests: list[dict[str, str]] = field(default_factory=list)


@pytest.fixture
def api_server(tmp_path: Path, pods_table: bytes) -> Generator[FakeApiServer]:
    """Serve pods_table on 127.0.0.1 and write a kubeconfig pointing at it."""
    state: FakeApiServer

    class Handler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:
            state.requests.append(
                {
                    "path": self.path,
                    "accept": self.headers.get("Accept", ""),
                    "authorization": self.headers.get("Authorization", ""),
                }
            )
            self.send_response(state.status)
            self.send_header("Content-Type", "application/json")
            self.send_header("Content-Length", str(len(state.body)))
            self.end_headers()
            self.wfile.write(state.body)

        def log_message(self, format: str, *args: object) -> None:
            pass

    server = HTTPServer(("127.0.0.1", 0), Handler)
    url = f"http://127.0.0.1:{server.server_port}"
    kubeconfig = tmp_path / "kubeconfig"
    kubeconfig.write_text(
        f"""\
apiVersion: v1
kind: Config
clusters:
- name: local
  cluster:
    server: {url}
users:
- name: tester
  user:
    token: test-token
contexts:
- name: local
  context:
    cluster: local
    user: tester
current-context: local
"""
    )
    state = FakeApiServer(url=url, kubeconfig=kubeconfig, body=pods_table)

    thread = threading.Thread(target=server.serve_forever, daemon=True)
    thread.start()
    yield state
    server.shutdown()
    server.server_close()
    thread.join(timeout=5)


@pytest.fixture(autouse=True)
def reset_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Reset environment variables for each test."""
    for key in list(os.environ.keys()):
        if key.startswith("KUBE_AUTOCOMPLETE_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture(autouse=True)
def quiet_structlog() -> Generator[None]:
    """Silence structlog's default stdout printer; restore defaults afterwards."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(logging.CRITICAL),
        cache_logger_on_first_use=False,
    )
    yield
    structlog.reset_defaults()


