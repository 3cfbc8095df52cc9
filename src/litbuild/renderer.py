"""Page rendering: rows of documentation and code composed through Jinja2.

Templates are looked up in ``output.templates_dir`` when configured and fall
back to the ones bundled in ``litbuild/templates``. A custom directory must
provide both ``example.html.j2`` and ``index.html.j2``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import markdown
from jinja2 import (
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
    TemplateError,
    select_autoescape,
)

from litbuild.errors import RenderError
from litbuild.models.page import IndexEntry, PageData, PageRow

if TYPE_CHECKING:
    from pathlib import Path

    from litbuild.highlight import Highlighter
    from litbuild.models.cache import Transcript
    from litbuild.models.example import Example

EXAMPLE_TEMPLATE = "example.html.j2"
INDEX_TEMPLATE = "index.html.j2"


def render_markdown(text: str) -> str:
    return markdown.markdown(text) if text else ""


class PageRenderer:
    """Builds page rows for an example and renders them to HTML bytes."""

    def __init__(
        self,
        highlighter: Highlighter,
        *,
        language: str,
        templates_dir: Path | None = None,
        stylesheet: str = "code.css",
    ) -> None:
        self._highlighter = highlighter
        self._language = language
        self._stylesheet = stylesheet

        loader = (
            FileSystemLoader(str(templates_dir))
            if templates_dir is not None
            else PackageLoader("litbuild", "templates")
        )
        self._env = Environment(
            loader=loader,
            autoescape=select_autoescape(["html", "xml", "j2"]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
        )

    def build_rows(self, example: Example, transcript: Transcript) -> list[PageRow]:
        """Description row, one row per segment, then the transcript row."""
        rows = [PageRow(markdown=render_markdown(example.description))]
        for segment in example.segments:
            rows.append(
                PageRow(
                    markdown=render_markdown(segment.documentation),
                    code_block=(
                        self._highlighter.highlight_code(segment.code, self._language)
                        if segment.code
                        else ""
                    ),
                )
            )
        rows.append(PageRow(code_block=self._highlighter.highlight_transcript(transcript.text)))
        return rows

    def render_example(self, example: Example, transcript: Transcript) -> bytes:
        page = PageData(
            name=example.display_name,
            description=example.description,
            previous_id=example.previous_id,
            next_id=example.next_id,
            rows=self.build_rows(example, transcript),
            stylesheet=self._stylesheet,
        )
        return self._render(EXAMPLE_TEMPLATE, page.model_dump())

    def render_index(self, examples: list[Example]) -> bytes:
        entries = [
            IndexEntry(id=example.id, name=example.display_name, description=example.description)
            for example in examples
        ]
        return self._render(
            INDEX_TEMPLATE,
            {
                "examples": [entry.model_dump() for entry in entries],
                "stylesheet": self._stylesheet,
            },
        )

    def _render(self, template_name: str, data: dict) -> bytes:
        try:
            template = self._env.get_template(template_name)
            return template.render(**data).encode("utf-8")
        except TemplateError as exc:
            raise RenderError(
                f"Rendering {template_name} failed: {exc}",
                suggestion="Check the template syntax and the variables it uses.",
            ) from exc
