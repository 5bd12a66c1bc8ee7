"""netgen scaffolder -- turns service contexts into project trees.

Quick usage::

    from netgen.config import EchoConfig
    from netgen.scaffolder import ProjectGenerator, build_echo_context

    config = EchoConfig.from_yaml("echo.yaml")
    context = build_echo_context(config)
    ProjectGenerator().generate(context, "frame-echo")
"""

from netgen.scaffolder.artifacts import Artifact
from netgen.scaffolder.context import (
    EchoContext,
    HttpContext,
    WorkerContext,
    build_context,
    build_echo_context,
    build_http_context,
    build_worker_context,
)
from netgen.scaffolder.frame_mode import FrameFields, resolve_frame_mode
from netgen.scaffolder.generator import GenerationResult, ProjectGenerator, plan_artifacts
from netgen.scaffolder.templates import TemplateRenderer

__all__ = [
    "Artifact",
    "EchoContext",
    "FrameFields",
    "GenerationResult",
    "HttpContext",
    "ProjectGenerator",
    "TemplateRenderer",
    "WorkerContext",
    "build_context",
    "build_echo_context",
    "build_http_context",
    "build_worker_context",
    "plan_artifacts",
    "resolve_frame_mode",
]
