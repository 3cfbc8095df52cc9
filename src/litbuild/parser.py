"""Segment parser for annotated example sources.

Single-pass algorithm that splits a source into documentation/code segments
on blank lines. Classification of individual lines lives in
``classify_line`` so it can be checked against a table of cases on its own.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from litbuild.models.example import LineKind, Segment

if TYPE_CHECKING:
    from collections.abc import Iterable

# Optional indent, "//" or "#", then whitespace or end of line
_DOC_RE = re.compile(r"^\s*(//|#)(\s|$)")
_DOC_MARKER_RE = re.compile(r"^\s*(//|#)")


def classify_line(line: str) -> LineKind:
    """Return the kind of a single source line. Total over all strings."""
    if not line.strip():
        return LineKind.BLANK
    if _DOC_RE.match(line):
        return LineKind.DOCUMENTATION
    return LineKind.CODE


def strip_comment(line: str) -> str:
    """Remove the comment marker, stray slashes and surrounding whitespace."""
    text = _DOC_MARKER_RE.sub("", line, count=1)
    return text.strip().strip("/").strip()


def parse_segments(lines: Iterable[str]) -> list[Segment]:
    """Split source lines into an ordered list of segments.

    A blank line always closes the in-progress segment, even an empty one.
    End of input closes it only when it holds documentation or code.
    """
    segments: list[Segment] = []

    documentation = ""
    code_lines: list[str] = []

    for line in lines:
        kind = classify_line(line)

        if kind is LineKind.BLANK:
            segments.append(_make_segment(documentation, code_lines))
            documentation = ""
            code_lines = []
        elif kind is LineKind.DOCUMENTATION:
            # Only the last documentation line of a block survives
            documentation = strip_comment(line)
        else:
            code_lines.append(line.rstrip())

    last = _make_segment(documentation, code_lines)
    if not last.is_empty:
        segments.append(last)

    return segments


def _make_segment(documentation: str, code_lines: list[str]) -> Segment:
    # Inner indentation is kept; only the edges of the block are trimmed
    return Segment(documentation=documentation, code="\n".join(code_lines).strip())


def split_source(text: str, header_lines: int = 0) -> tuple[list[str], list[str]]:
    """Split source text into (header, body) lines.

    The first ``header_lines`` lines are reserved for the example's header and
    excluded from segmentation.
    """
    lines = text.splitlines()
    return lines[:header_lines], lines[header_lines:]


def extract_description(lines: Iterable[str]) -> str:
    """Return the first documentation line, marker stripped, or ``""``."""
    for line in lines:
        if classify_line(line) is LineKind.DOCUMENTATION:
            return strip_comment(line)
    return ""
