"""Tests for container artifact planning.

Covers:
- Dockerfile / docker-compose.yml gated independently by the infra block
- No container artifacts for stream services
- Files written at the project root
"""

from __future__ import annotations

import pytest

from netgen.config import HttpConfig
from netgen.scaffolder.context import build_http_context
from netgen.scaffolder.docker_gen import DockerGenerator
from netgen.scaffolder.generator import ProjectGenerator


# ---------------------------------------------------------------------------
# Markers
# ---------------------------------------------------------------------------

pytestmark = pytest.mark.unit


def _http_context(http_document, **infra):
    return build_http_context(HttpConfig.model_validate({**http_document, "infra": infra}))


# ---------------------------------------------------------------------------
# artifacts_for
# ---------------------------------------------------------------------------


class TestArtifactsFor:
    def test_stream_services_have_none(self, echo_context, worker_context):
        assert DockerGenerator.artifacts_for(echo_context) == []
        assert DockerGenerator.artifacts_for(worker_context) == []

    def test_http_without_infra(self, http_context):
        assert DockerGenerator.artifacts_for(http_context) == []

    @pytest.mark.parametrize(
        "infra, expected",
        [
            ({"docker": True}, ["Dockerfile"]),
            ({"docker_compose": True}, ["docker-compose.yml"]),
            ({"docker": True, "docker_compose": True}, ["Dockerfile", "docker-compose.yml"]),
            ({"github_actions": True}, []),
        ],
    )
    def test_switches(self, http_document, infra, expected):
        ctx = _http_context(http_document, **infra)
        assert [a.output for a in DockerGenerator.artifacts_for(ctx)] == expected

    def test_templates_live_with_http_kind(self):
        assert DockerGenerator.DOCKERFILE.template.startswith("http_fastapi/")
        assert DockerGenerator.COMPOSE_FILE.template.startswith("http_fastapi/")


# ---------------------------------------------------------------------------
# Emission
# ---------------------------------------------------------------------------


class TestContainerEmission:
    def test_written_at_root(self, mock_renderer, full_http_context, tmp_path):
        written = ProjectGenerator(mock_renderer).generate(full_http_context, tmp_path)
        assert tmp_path / "Dockerfile" in written
        assert tmp_path / "docker-compose.yml" in written
        assert (tmp_path / "Dockerfile").exists()

    def test_nothing_for_echo(self, mock_renderer, echo_context, tmp_path):
        ProjectGenerator(mock_renderer).generate(echo_context, tmp_path)
        templates = [c.args[0] for c in mock_renderer.render_to_file.call_args_list]
        assert not any(t.startswith("http_fastapi/") for t in templates)
        assert not (tmp_path / "Dockerfile").exists()

    def test_passes_variables_through(self, mock_renderer, http_document, tmp_path):
        ctx = _http_context(http_document, docker=True)
        ProjectGenerator(mock_renderer).generate(ctx, tmp_path)
        mock_renderer.render_to_file.assert_any_call(
            "http_fastapi/Dockerfile.j2", tmp_path / "Dockerfile", ctx.template_vars()
        )
