"""Protocol interfaces for swappable components.

The cache and pipeline reference these protocols, not the concrete
implementations. This allows:
- Tests to use a deterministic fake runner instead of the real runtime
- Other runtimes (node, python, a container) to be swapped in without
  touching the cache
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from pathlib import Path


class RunnerProtocol(Protocol):
    """Interface for the external runtime that executes an example."""

    def run(self, source_path: Path) -> bytes: ...
