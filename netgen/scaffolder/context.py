"""Template context building.

Each service kind has a pure builder that merges its validated configuration
with defaults and the resolved read mode into one frozen, flat context.  The
context is the only thing templates ever see.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict

from netgen.config import (
    Database,
    EchoConfig,
    EchoParams,
    HttpConfig,
    Infra,
    LinesMode,
    ServiceConfig,
    WorkerConfig,
)
from netgen.errors import ConfigError

from .frame_mode import FrameFields, resolve_frame_mode


class ServiceKind(str, Enum):
    """Service kinds; the value is the template directory of the kind."""
    ECHO = "tcp_echo"
    WORKER = "tcp_worker"
    HTTP = "http_fastapi"


# ---------------------------------------------------------------------------
# Context models
# ---------------------------------------------------------------------------


class ServiceContext(BaseModel):
    """Fields every service template can rely on."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[ServiceKind]

    project_name: str
    package_name: str
    port: int
    tracing_enabled: bool
    github_actions: bool

    def template_vars(self) -> dict[str, Any]:
        """Return the flat mapping handed to the renderer."""
        return self.model_dump()


class EchoContext(ServiceContext, FrameFields):
    """Context for the TCP echo server templates."""

    kind: ClassVar[ServiceKind] = ServiceKind.ECHO


class WorkerContext(ServiceContext, FrameFields):
    """Context for the TCP worker-pool server templates."""

    kind: ClassVar[ServiceKind] = ServiceKind.WORKER

    workers: int
    event_buffer: int


class RouteContext(BaseModel):
    """A route as the HTTP templates consume it."""

    model_config = ConfigDict(frozen=True)

    path: str
    method_fn: str
    handler_name: str
    response: str


class HttpContext(ServiceContext):
    """Context for the FastAPI service templates."""

    kind: ClassVar[ServiceKind] = ServiceKind.HTTP

    routes: list[RouteContext]

    db_enabled: bool
    db_url_env: Optional[str]
    db_max_connections: Optional[int]

    docker_enabled: bool
    docker_compose_enabled: bool


TemplateContext = Union[EchoContext, WorkerContext, HttpContext]


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def build_echo_context(config: EchoConfig | EchoParams) -> EchoContext:
    """Build the echo context from a service document or from CLI parameters.

    The parameter form always frames by lines.
    """
    if isinstance(config, EchoParams):
        frame = resolve_frame_mode(LinesMode(max_line_len=config.max_line_len))
        return EchoContext(
            **_base_fields(config.name, config.port, config.tracing, config.github_actions),
            **frame.model_dump(),
        )

    frame = resolve_frame_mode(config.read_mode)
    return EchoContext(
        **_base_fields(config.project_name, config.port, config.tracing, config.github_actions),
        **frame.model_dump(),
    )


def build_worker_context(config: WorkerConfig) -> WorkerContext:
    """Build the worker-pool context from a service document."""
    frame = resolve_frame_mode(config.read_mode)
    return WorkerContext(
        **_base_fields(config.project_name, config.port, config.tracing, config.github_actions),
        workers=config.workers,
        event_buffer=config.event_buffer,
        **frame.model_dump(),
    )


def build_http_context(config: HttpConfig) -> HttpContext:
    """Build the HTTP context from a service document.

    Routes keep their order, duplicates included.  The database and infra
    blocks only reach the context through :func:`project_database` and
    :func:`project_infra`.
    """
    routes = [
        RouteContext(
            path=route.path,
            method_fn=route.method.value.lower(),
            handler_name=route.handler,
            response=route.response,
        )
        for route in config.routes
    ]
    db_enabled, db_url_env, db_max_connections = project_database(config.database)
    docker, docker_compose, infra_ci = project_infra(config.infra)

    return HttpContext(
        **_base_fields(
            config.project_name,
            config.port,
            config.tracing,
            config.github_actions or infra_ci,
        ),
        routes=routes,
        db_enabled=db_enabled,
        db_url_env=db_url_env,
        db_max_connections=db_max_connections,
        docker_enabled=docker,
        docker_compose_enabled=docker_compose,
    )


def build_context(config: ServiceConfig | EchoParams) -> TemplateContext:
    """Dispatch to the builder matching the type of *config*."""
    if isinstance(config, (EchoConfig, EchoParams)):
        return build_echo_context(config)
    if isinstance(config, WorkerConfig):
        return build_worker_context(config)
    if isinstance(config, HttpConfig):
        return build_http_context(config)
    raise ConfigError(f"No service kind for {type(config).__name__}")


# ---------------------------------------------------------------------------
# Gate-then-project helpers
# ---------------------------------------------------------------------------


def project_database(
    database: Optional[Database],
) -> tuple[bool, Optional[str], Optional[int]]:
    """Return ``(db_enabled, db_url_env, db_max_connections)``.

    A missing or disabled block collapses to ``(False, None, None)`` whatever
    else it specifies.  ``kind`` is never projected.
    """
    if database is None or not database.enabled:
        return False, None, None
    return True, database.url_env, database.max_connections


def project_infra(infra: Optional[Infra]) -> tuple[bool, bool, bool]:
    """Return ``(docker, docker_compose, github_actions)``; absent means all off."""
    if infra is None:
        return False, False, False
    return infra.docker, infra.docker_compose, infra.github_actions


def _base_fields(name: str, port: int, tracing: bool, github_actions: bool) -> dict[str, Any]:
    return {
        "project_name": name,
        "package_name": name.replace("-", "_"),
        "port": port,
        "tracing_enabled": tracing,
        "github_actions": github_actions,
    }
