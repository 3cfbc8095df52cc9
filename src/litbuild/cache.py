"""Content-addressed transcript cache.

Each example keeps two sidecar files next to its source:

  {id}.hash        hex SHA-256 of the prompt line + source bytes
  {id}.transcript  prompt line + combined output of the last run

A build re-runs an example only when the freshly computed digest differs from
the persisted one, or when either sidecar is missing. Unlike a best-effort
cache, every read/write failure here is fatal: a page cannot be rendered
without its transcript, so errors propagate as ``BuildIOError`` (see files.py).

Write order is transcript first, hash second. An interrupted write therefore
leaves a hash that no longer matches, which the next build treats as a miss.
"""

from __future__ import annotations

import hashlib
from typing import TYPE_CHECKING

import structlog

from litbuild.files import read_bytes, write_atomic
from litbuild.models.cache import Transcript

if TYPE_CHECKING:
    from pathlib import Path

    from litbuild.models.example import Example
    from litbuild.protocols import RunnerProtocol

log = structlog.get_logger()

HASH_EXTENSION = "hash"


def compute_digest(prompt: bytes, source: bytes) -> str:
    return hashlib.sha256(prompt + source).hexdigest()


class TranscriptCache:
    """File-backed cache deciding hit or miss for one example at a time."""

    def __init__(
        self,
        runner: RunnerProtocol,
        *,
        prompt_template: str = "$ run {id}",
        transcript_extension: str = "transcript",
    ) -> None:
        self._runner = runner
        self._prompt_template = prompt_template
        self._transcript_extension = transcript_extension

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    def hash_path(self, example: Example) -> Path:
        return example.source_path.with_name(f"{example.id}.{HASH_EXTENSION}")

    def transcript_path(self, example: Example) -> Path:
        return example.source_path.with_name(f"{example.id}.{self._transcript_extension}")

    def prompt_line(self, example: Example) -> bytes:
        prompt = self._prompt_template.format(
            id=example.id,
            filename=example.source_path.name,
        )
        return (prompt + "\n").encode("utf-8")

    # ------------------------------------------------------------------
    # Hit / miss
    # ------------------------------------------------------------------

    def ensure_fresh(self, example: Example) -> Transcript:
        """Return an up-to-date transcript, running the example only on a miss.

        On return the persisted hash equals the digest computed for this
        build and the paired transcript file exists.
        """
        prompt = self.prompt_line(example)
        source = read_bytes(example.source_path)
        digest = compute_digest(prompt, source)

        hash_path = self.hash_path(example)
        transcript_path = self.transcript_path(example)

        reason = self._miss_reason(digest, hash_path, transcript_path)
        if reason is None:
            log.info("cache_hit", example=example.id, digest=digest)
            content = read_bytes(transcript_path)
            return Transcript(
                example_id=example.id,
                text=content.decode("utf-8", errors="replace"),
                digest=digest,
                cache_hit=True,
            )

        log.info("cache_miss", example=example.id, reason=reason, digest=digest)
        output = self._runner.run(example.source_path)
        content = prompt + output

        write_atomic(transcript_path, content)
        write_atomic(hash_path, digest.encode("ascii"))

        return Transcript(
            example_id=example.id,
            text=content.decode("utf-8", errors="replace"),
            digest=digest,
            cache_hit=False,
        )

    def _miss_reason(self, digest: str, hash_path: Path, transcript_path: Path) -> str | None:
        """Return why the cache entry is unusable, or None on a hit."""
        if not hash_path.is_file():
            return "no_hash"
        previous = read_bytes(hash_path).decode("ascii", errors="replace").strip()
        if previous != digest:
            return "digest_mismatch"
        if not transcript_path.is_file():
            # Interrupted earlier build: hash survived but transcript did not
            return "transcript_missing"
        return None

