"""Main scaffolding orchestrator.

Takes a service context (or a validated service document) and writes the
generated project: manifest and entry point for every kind, handlers for
HTTP services, and the optional container and CI artifacts.

Emission is sequential and stops at the first failure.  Files written before
the failure are left in place.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from netgen.config import EchoParams, ServiceConfig
from netgen.utils import ensure_dir, resolve_out_dir

from .artifacts import Artifact
from .context import HttpContext, TemplateContext, build_context
from .docker_gen import DockerGenerator
from .templates import TemplateRenderer


MANIFEST = "pyproject.toml"
ENTRY_POINT = "src/main.py"
HANDLERS = "src/handlers.py"
WORKFLOWS_DIR = ".github/workflows"
CI_WORKFLOW = Artifact("common/ci.yml.j2", f"{WORKFLOWS_DIR}/ci.yml")


@dataclass
class GenerationResult:
    """Outcome of one generator run."""

    destination: Path
    files: list[Path] = field(default_factory=list)


def plan_artifacts(context: TemplateContext) -> list[Artifact]:
    """Return every artifact *context* produces, in emission order.

    Always the manifest and the entry point (plus handlers for HTTP), then
    ``Dockerfile`` and ``docker-compose.yml`` when enabled (HTTP only), then
    the CI workflow when ``github_actions`` is set.
    """
    return [
        *_core_artifacts(context),
        *DockerGenerator.artifacts_for(context),
        *([CI_WORKFLOW] if context.github_actions else []),
    ]


class ProjectGenerator:
    """Main scaffolding orchestrator.

    Given a service context, writes every artifact of
    :func:`plan_artifacts`, one render pass each:
    - ``pyproject.toml`` and ``src/main.py``
    - ``src/handlers.py`` for HTTP services
    - ``Dockerfile`` / ``docker-compose.yml`` when the HTTP infra block asks
    - ``.github/workflows/ci.yml`` when GitHub Actions is enabled
    """

    def __init__(self, renderer: Optional[TemplateRenderer] = None) -> None:
        self.renderer = renderer or TemplateRenderer()

    # -- Public API --------------------------------------------------------

    def generate(self, context: TemplateContext, output_dir: str | Path) -> list[Path]:
        """Generate the project for *context* directly into *output_dir*.

        Args:
            context: Fully built service context.
            output_dir: Project root.  Created if missing; existing files
                with the same names are overwritten.

        Returns:
            Written file paths, in emission order.
        """
        project_root = ensure_dir(output_dir)
        ensure_dir(project_root / "src")
        variables = context.template_vars()
        written: list[Path] = []

        for artifact in plan_artifacts(context):
            target = project_root / artifact.output
            # .github/workflows for CI; src/ already exists
            ensure_dir(target.parent)
            written.append(self.renderer.render_to_file(artifact.template, target, variables))

        return written

    def generate_from_config(
        self,
        config: ServiceConfig | EchoParams,
        out_dir: Optional[str] = None,
    ) -> GenerationResult:
        """Build the context for *config*, pick the destination and generate.

        Args:
            config: Validated service document, or echo CLI parameters.
            out_dir: Directory given on the command line; takes precedence
                over the document's ``out_dir`` and the project name.
        """
        context = build_context(config)
        cfg_out_dir = getattr(config, "out_dir", None)
        destination = Path(resolve_out_dir(out_dir, cfg_out_dir, context.project_name))
        files = self.generate(context, destination)
        return GenerationResult(destination=destination, files=files)


def _core_artifacts(context: TemplateContext) -> list[Artifact]:
    prefix = context.kind.value
    artifacts = [
        Artifact(f"{prefix}/pyproject.toml.j2", MANIFEST),
        Artifact(f"{prefix}/main.py.j2", ENTRY_POINT),
    ]
    if isinstance(context, HttpContext):
        artifacts.append(Artifact(f"{prefix}/handlers.py.j2", HANDLERS))
    return artifacts
