"""Jinja2 template rendering for service scaffolding.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``netgen/scaffolder/templates/`` directory and renders them with a service
context.  Output is source code, so nothing is escaped, and a template that
references a name missing from the context is an error rather than an empty
string.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from netgen.errors import RenderError


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for service scaffolding.

    Templates are grouped in one directory per service kind (``tcp_echo/``,
    ``tcp_worker/``, ``http_fastapi/``) plus ``common/`` for files shared by
    every kind.  Names starting with an underscore are partials meant to be
    included, not rendered on their own.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["py_literal"] = _py_literal_filter
        self.env.filters["pascal_case"] = _pascal_case_filter

    # -- Rendering ---------------------------------------------------------

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory (e.g.
                ``"tcp_echo/main.py.j2"``).
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.

        Raises:
            RenderError: If the template is missing, malformed, or uses a
                variable the context does not define.
        """
        try:
            template = self.env.get_template(template_path)
            return template.render(**context)
        except TemplateError as exc:
            raise RenderError(template_path, str(exc)) from exc

    def render_to_file(
        self,
        template_path: str,
        output_path: str | Path,
        context: dict[str, Any],
    ) -> Path:
        """Render a template and write the result to *output_path*.

        The file is replaced if it exists.  Its parent directory must already
        exist.  Returns the output path.
        """
        content = self.render(template_path, context)
        out = Path(output_path)
        out.write_text(content, encoding="utf-8")
        return out


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _py_literal_filter(value: Any) -> str:
    """Render *value* as a Python literal (``'a"b'`` -> ``'a"b'`` quoted safely)."""
    return repr(value)


def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_\s]+", value)
    return "".join(word.capitalize() for word in parts if word)
