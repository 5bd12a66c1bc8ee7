"""Shared pytest fixtures for the netgen test suite.

Provides reusable fixtures for:
- Service documents as dicts and as YAML files on disk
- Validated configs and built template contexts
- A mocked TemplateRenderer that records render calls
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable
from unittest.mock import MagicMock

import pytest
import yaml

from netgen.config import EchoConfig, HttpConfig, WorkerConfig
from netgen.scaffolder.context import (
    EchoContext,
    HttpContext,
    WorkerContext,
    build_echo_context,
    build_http_context,
    build_worker_context,
)
from netgen.scaffolder.templates import TemplateRenderer


# ---------------------------------------------------------------------------
# Service documents
# ---------------------------------------------------------------------------


@pytest.fixture
def echo_document() -> dict[str, Any]:
    """Echo server framed by lines of at most 8192 bytes."""
    return {
        "project_name": "line-echo",
        "port": 4000,
        "tracing": True,
        "read_mode": {"type": "lines", "max_line_len": 8192},
    }


@pytest.fixture
def worker_document() -> dict[str, Any]:
    """Worker-pool server with fixed 512 byte frames."""
    return {
        "project_name": "frame-worker",
        "port": 5001,
        "tracing": False,
        "workers": 4,
        "event_buffer": 1024,
        "read_mode": {"type": "fixed_size", "frame_size": 512},
    }


@pytest.fixture
def http_document() -> dict[str, Any]:
    """HTTP service with two GET routes, CI on, no database, no docker."""
    return {
        "project_name": "hello-api",
        "port": 3000,
        "tracing": True,
        "github_actions": True,
        "routes": [
            {"path": "/", "method": "GET", "handler": "root", "response": "Hello from FastAPI!"},
            {"path": "/health", "method": "GET", "handler": "health", "response": "OK"},
        ],
    }


@pytest.fixture
def write_yaml(tmp_path: Path) -> Callable[[str, dict[str, Any]], Path]:
    """Factory writing a document to ``tmp_path/<name>`` and returning the path."""

    def _write(name: str, document: dict[str, Any]) -> Path:
        path = tmp_path / name
        path.write_text(yaml.safe_dump(document, sort_keys=False), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Configs & contexts
# ---------------------------------------------------------------------------


@pytest.fixture
def echo_context(echo_document) -> EchoContext:
    return build_echo_context(EchoConfig.model_validate(echo_document))


@pytest.fixture
def worker_context(worker_document) -> WorkerContext:
    return build_worker_context(WorkerConfig.model_validate(worker_document))


@pytest.fixture
def http_context(http_document) -> HttpContext:
    return build_http_context(HttpConfig.model_validate(http_document))


@pytest.fixture
def full_http_context(http_document) -> HttpContext:
    """HTTP context with database, docker, compose and CI all enabled."""
    document = {
        **http_document,
        "database": {
            "enabled": True,
            "url_env": "DATABASE_URL",
            "max_connections": 10,
        },
        "infra": {"docker": True, "docker_compose": True, "github_actions": True},
    }
    return build_http_context(HttpConfig.model_validate(document))


# ---------------------------------------------------------------------------
# Renderer
# ---------------------------------------------------------------------------


@pytest.fixture
def mock_renderer() -> MagicMock:
    """A mock TemplateRenderer that writes a stub file for every render call."""
    renderer = MagicMock(spec=TemplateRenderer)

    def mock_render_to_file(template_path: str, output_path, context):
        out = Path(output_path)
        out.write_text(f"# Rendered from {template_path}\n", encoding="utf-8")
        return out

    renderer.render_to_file.side_effect = mock_render_to_file
    return renderer
