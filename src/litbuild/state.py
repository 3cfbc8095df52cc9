"""Build state container.

BuildState is created once per build by ``pipeline.create_state`` and passed
to every stage. It replaces process-wide globals: two builds with different
settings or themes can run in the same process.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from litbuild.cache import TranscriptCache
    from litbuild.config import Settings
    from litbuild.highlight import Highlighter
    from litbuild.renderer import PageRenderer


@dataclass
class BuildState:
    """Holds the collaborators for one build."""

    settings: Settings
    highlighter: Highlighter
    renderer: PageRenderer
    cache: TranscriptCache
