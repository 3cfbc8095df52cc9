from __future__ import annotations

from enum import StrEnum
from pathlib import Path

from pydantic import BaseModel


class LineKind(StrEnum):
    DOCUMENTATION = "documentation"
    CODE = "code"
    BLANK = "blank"


class Segment(BaseModel):
    """One documentation/code unit, closed by a blank line or end of input."""

    documentation: str = ""  # At most one line, comment marker stripped
    code: str = ""  # Trimmed code lines joined by "\n"

    @property
    def is_empty(self) -> bool:
        return not self.documentation and not self.code


class Example(BaseModel):
    """One literate program, rebuilt from its source on every build."""

    id: str
    display_name: str
    description: str = ""
    source_path: Path
    segments: list[Segment] = []
    digest: str | None = None  # Filled in by the cache after ensure_fresh
    previous_id: str | None = None
    next_id: str | None = None
