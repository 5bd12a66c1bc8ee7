"""Output artifacts: which template produces which file of a generated project."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Artifact:
    """One emitted file.

    Attributes:
        template: Template path relative to the template directory.
        output: POSIX path of the file relative to the project root.
    """

    template: str
    output: str
