from __future__ import annotations

from litbuild.models.build import BuildReport, ExampleOutcome
from litbuild.models.cache import Transcript
from litbuild.models.example import Example, LineKind, Segment
from litbuild.models.page import IndexEntry, PageData, PageRow

__all__ = [
    # example
    "LineKind",
    "Segment",
    "Example",
    # cache
    "Transcript",
    # page
    "PageRow",
    "PageData",
    "IndexEntry",
    # build
    "ExampleOutcome",
    "BuildReport",
]
