"""Shared utility functions for netgen.

Provides YAML loading, output directory selection, file-system helpers and
Rich-based status reporting.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from netgen.errors import ConfigError

console = Console()


# ---------------------------------------------------------------------------
# YAML I/O
# ---------------------------------------------------------------------------


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML document whose top level is a mapping.

    Args:
        path: Path to the YAML file.

    Returns:
        Parsed dictionary.

    Raises:
        ConfigError: If the file cannot be read, is not valid YAML, or does
            not contain a mapping.
    """
    file_path = Path(path)
    try:
        raw = file_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Cannot read config file {file_path}: {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {file_path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {file_path} must contain a mapping at the top level")
    return data


# ---------------------------------------------------------------------------
# Output directory helpers
# ---------------------------------------------------------------------------


def resolve_out_dir(
    cli_out_dir: Optional[str],
    cfg_out_dir: Optional[str],
    default_name: str,
) -> str:
    """Pick the output directory.

    The first value that is not ``None`` wins:

    1. *cli_out_dir* -- given directly on the command line,
    2. *cfg_out_dir* -- the ``out_dir`` key of the service document,
    3. *default_name* -- usually the project name.

    Examples::

        resolve_out_dir("a", "b", "c") -> "a"
        resolve_out_dir(None, "b", "c") -> "b"
        resolve_out_dir(None, None, "c") -> "c"
    """
    if cli_out_dir is not None:
        return cli_out_dir
    if cfg_out_dir is not None:
        return cfg_out_dir
    return default_name


def ensure_dir(path: str | Path) -> Path:
    """Create a directory (and parents) if it does not exist.

    Args:
        path: Directory path.

    Returns:
        The ``Path`` object for the directory.
    """
    dir_path = Path(path)
    dir_path.mkdir(parents=True, exist_ok=True)
    return dir_path


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table.

    Args:
        data: Mapping of label -> value.
        title: Table title.
    """
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{escape(message)}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{escape(message)}[/bold red]")
