"""netgen configuration models.

Typed descriptions of the services netgen can scaffold, plus the generator's
own settings.  All models use Pydantic v2 so that a service document is fully
validated when it is loaded, before any output is produced.

A service document is YAML, for example::

    project_name: frame-echo
    port: 4000
    tracing: true
    read_mode:
      type: length_prefixed
      len_bytes: 2
      big_endian: true
      max_len: 65535
"""

from __future__ import annotations

import os
from enum import Enum
from pathlib import Path
from typing import Annotated, Literal, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StrictBool,
    StrictInt,
    ValidationError,
    field_validator,
    model_validator,
)

from netgen.errors import ConfigError
from netgen.utils import load_yaml


PROJECT_NAME_PATTERN = r"^[A-Za-z][A-Za-z0-9_-]*$"

LENGTH_PREFIX_WIDTHS: tuple[int, ...] = (1, 2, 4)

HANDLER_NAME_PATTERN = r"^[A-Za-z_][A-Za-z0-9_]*$"

# Numbers and flags must already have the right YAML type; nothing is coerced.
StrictPositiveInt = Annotated[int, Field(strict=True, gt=0)]


# ---------------------------------------------------------------------------
# Read modes (stream framing)
# ---------------------------------------------------------------------------


class LinesMode(BaseModel):
    """Newline-terminated frames."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["lines"] = "lines"
    max_line_len: Optional[StrictPositiveInt] = Field(
        default=None, description="Longest accepted line in bytes"
    )


class FixedSizeMode(BaseModel):
    """Frames of a constant byte length."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["fixed_size"] = "fixed_size"
    frame_size: StrictPositiveInt


class DelimitedMode(BaseModel):
    """Frames terminated by an arbitrary delimiter byte (10 == '\\n')."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["delimited"] = "delimited"
    delim: StrictInt = Field(..., ge=0, le=255)
    max_len: Optional[StrictPositiveInt] = None


class LengthPrefixedMode(BaseModel):
    """Frames preceded by an unsigned 1, 2 or 4 byte length header."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    type: Literal["length_prefixed"] = "length_prefixed"
    len_bytes: StrictInt
    big_endian: StrictBool
    max_len: Optional[StrictPositiveInt] = None

    @field_validator("len_bytes")
    @classmethod
    def _check_len_bytes(cls, value: int) -> int:
        if value not in LENGTH_PREFIX_WIDTHS:
            raise ValueError(f"len_bytes must be 1, 2 or 4 (got {value})")
        return value


FrameMode = Annotated[
    Union[LinesMode, FixedSizeMode, DelimitedMode, LengthPrefixedMode],
    Field(discriminator="type"),
]


# ---------------------------------------------------------------------------
# HTTP building blocks
# ---------------------------------------------------------------------------


class HTTPMethod(str, Enum):
    """HTTP methods a generated route may answer."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    DELETE = "DELETE"


class Route(BaseModel):
    """A single route of the generated HTTP service."""

    model_config = ConfigDict(extra="forbid")

    path: str = Field(..., description="URL path, e.g. '/health'")
    method: HTTPMethod
    handler: str = Field(
        ..., pattern=HANDLER_NAME_PATTERN, description="Name of the generated handler function"
    )
    response: str = Field(..., description="Plain-text response body")


class Database(BaseModel):
    """Optional connection pool wiring for the HTTP service."""

    model_config = ConfigDict(extra="forbid")

    enabled: StrictBool
    kind: str = Field(default="postgres", description="Informational only")
    url_env: str = Field(..., description="Env var holding the database URL at runtime")
    max_connections: Optional[StrictPositiveInt] = None


class Infra(BaseModel):
    """Independent switches for container and CI artifacts."""

    model_config = ConfigDict(extra="forbid")

    docker: StrictBool = False
    docker_compose: StrictBool = False
    github_actions: StrictBool = False


# ---------------------------------------------------------------------------
# Service documents
# ---------------------------------------------------------------------------


class ServiceConfig(BaseModel):
    """Fields shared by every service document."""

    model_config = ConfigDict(extra="forbid")

    project_name: str = Field(..., min_length=1, pattern=PROJECT_NAME_PATTERN)
    port: StrictInt = Field(..., ge=1, le=65535)
    tracing: StrictBool
    github_actions: StrictBool = False
    out_dir: Optional[str] = Field(
        default=None, description="Output directory used when none is given on the CLI"
    )

    @classmethod
    def from_yaml(cls, path: str | Path) -> "ServiceConfig":
        """Load and validate a service document.

        Raises:
            ConfigError: If the file cannot be read or parsed, or if its
                contents do not match this model.
        """
        data = load_yaml(path)
        try:
            return cls.model_validate(data)
        except ValidationError as exc:
            raise ConfigError(f"Invalid {cls.__name__} in {path}:\n{exc}") from exc


class EchoConfig(ServiceConfig):
    """``tcp-echo`` service document."""

    read_mode: FrameMode


class WorkerConfig(ServiceConfig):
    """``tcp-worker`` service document."""

    workers: StrictPositiveInt
    event_buffer: StrictPositiveInt = Field(..., description="Capacity of the frame queue")
    read_mode: FrameMode


class HttpConfig(ServiceConfig):
    """``http-fastapi`` service document."""

    routes: list[Route]
    database: Optional[Database] = None
    infra: Optional[Infra] = None

    @model_validator(mode="after")
    def _check_handlers(self) -> "HttpConfig":
        # One generated function per handler name, so a reused name must
        # keep the same response body.
        responses: dict[str, str] = {}
        for route in self.routes:
            seen = responses.setdefault(route.handler, route.response)
            if seen != route.response:
                raise ValueError(
                    f"handler {route.handler!r} is reused with a different response"
                )
        return self


class EchoParams(BaseModel):
    """Reduced, flag-driven form of the echo service (always line framed)."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(default="tcp-echo-server", pattern=PROJECT_NAME_PATTERN)
    port: StrictInt = Field(default=4000, ge=1, le=65535)
    tracing: StrictBool = False
    github_actions: StrictBool = False
    max_line_len: Optional[StrictPositiveInt] = None


# ---------------------------------------------------------------------------
# Generator settings
# ---------------------------------------------------------------------------


class GeneratorSettings(BaseModel):
    """Settings of the generator itself, independent of any service."""

    template_dir: Optional[Path] = Field(
        default=None, description="Directory overriding the packaged templates"
    )
    verbose: bool = Field(default=False, description="List every emitted file")

    @classmethod
    def from_env(cls) -> "GeneratorSettings":
        """Build settings from environment variables.

        Recognised variables (all optional):
            NETGEN_TEMPLATE_DIR, NETGEN_VERBOSE.
        """
        template_dir = os.environ.get("NETGEN_TEMPLATE_DIR")
        verbose = os.environ.get("NETGEN_VERBOSE", "").strip().lower() in ("1", "true", "yes")
        return cls(
            template_dir=Path(template_dir) if template_dir else None,
            verbose=verbose,
        )
