"""Container artifacts for HTTP services.

Plans ``Dockerfile`` and ``docker-compose.yml`` at the project root, each
behind its own infra switch.  Stream services (echo, worker-pool) never get
container artifacts.
"""

from __future__ import annotations

from .artifacts import Artifact
from .context import HttpContext, TemplateContext


class DockerGenerator:
    """Decides which container files an HTTP service gets."""

    DOCKERFILE = Artifact("http_fastapi/Dockerfile.j2", "Dockerfile")
    COMPOSE_FILE = Artifact("http_fastapi/docker-compose.yml.j2", "docker-compose.yml")

    @classmethod
    def artifacts_for(cls, context: TemplateContext) -> list[Artifact]:
        """Return the container artifacts *context* asks for, in emission order."""
        if not isinstance(context, HttpContext):
            return []
        artifacts: list[Artifact] = []
        if context.docker_enabled:
            artifacts.append(cls.DOCKERFILE)
        if context.docker_compose_enabled:
            artifacts.append(cls.COMPOSE_FILE)
        return artifacts
