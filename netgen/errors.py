"""Exception hierarchy for netgen.

Every failure aborts the whole run.  Filesystem problems are not wrapped and
surface as the ``OSError`` raised by :mod:`pathlib`.
"""

from __future__ import annotations


class NetgenError(Exception):
    """Base class for all generator errors."""


class ConfigError(NetgenError):
    """Raised when a service description cannot be loaded or is invalid."""


class FrameModeError(ConfigError):
    """Raised when a read mode cannot be turned into template fields."""


class RenderError(NetgenError):
    """Raised when a template fails to render against a context."""

    def __init__(self, template: str, message: str) -> None:
        self.template = template
        super().__init__(f"Template {template}: {message}")
