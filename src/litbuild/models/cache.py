from __future__ import annotations

from pydantic import BaseModel


class Transcript(BaseModel):
    """Prompt line plus the captured combined output of running an example."""

    example_id: str
    text: str
    digest: str  # Hex SHA-256 of prompt line + source bytes
    cache_hit: bool = False
