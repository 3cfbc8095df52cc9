from __future__ import annotations

from pydantic import BaseModel


class PageRow(BaseModel):
    markdown: str = ""  # HTML fragment rendered from documentation text
    code_block: str = ""  # Highlighted HTML markup


class PageData(BaseModel):
    """Everything the example template receives."""

    name: str
    description: str = ""
    previous_id: str | None = None
    next_id: str | None = None
    rows: list[PageRow] = []
    stylesheet: str = "code.css"


class IndexEntry(BaseModel):
    id: str
    name: str
    description: str = ""
