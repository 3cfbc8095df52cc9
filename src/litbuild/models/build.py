from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel


class ExampleOutcome(BaseModel):
    id: str
    cache_hit: bool
    page_path: Path


class BuildReport(BaseModel):
    """Summary returned by build_site after every example has been written."""

    examples: list[ExampleOutcome] = []
    stylesheet_path: Path | None = None
    index_path: Path | None = None

    @property
    def executed(self) -> list[str]:
        return [outcome.id for outcome in self.examples if not outcome.cache_hit]

    @property
    def cached(self) -> list[str]:
        return [outcome.id for outcome in self.examples if outcome.cache_hit]
