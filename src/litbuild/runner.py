"""Subprocess runner for example sources.

Runs one example through the configured external runtime and returns its
combined stdout/stderr. The call blocks until the process exits; the only
bound on wall-clock time is the optional ``timeout_seconds``.
"""

from __future__ import annotations

import subprocess
from typing import TYPE_CHECKING

import structlog

from litbuild.errors import ExecutionError

if TYPE_CHECKING:
    from pathlib import Path

    from litbuild.config import RunnerSettings

log = structlog.get_logger()

_OUTPUT_TAIL_CHARS = 500


class SubprocessRunner:
    """Runs ``command + [filename]`` inside the example's directory."""

    def __init__(self, command: list[str], timeout_seconds: float | None = None) -> None:
        if not command:
            raise ValueError("runner command must not be empty")
        self._command = list(command)
        self._timeout_seconds = timeout_seconds

    @classmethod
    def from_settings(cls, settings: RunnerSettings) -> SubprocessRunner:
        return cls(settings.command, timeout_seconds=settings.timeout_seconds)

    def run(self, source_path: Path) -> bytes:
        argv = [*self._command, source_path.name]
        log.info("runner_started", argv=argv, cwd=str(source_path.parent))
        try:
            completed = subprocess.run(
                argv,
                cwd=source_path.parent,
                stdout=subprocess.PIPE,
                stderr=subprocess.STDOUT,
                timeout=self._timeout_seconds,
                check=False,
            )
        except FileNotFoundError as exc:
            raise ExecutionError(
                f"Runtime executable {self._command[0]!r} was not found.",
                suggestion="Install the runtime or set runner.command in litbuild.yaml.",
            ) from exc
        except subprocess.TimeoutExpired as exc:
            raise ExecutionError(
                f"Running {source_path.name} timed out after {exc.timeout}s.",
                suggestion="Raise runner.timeout_seconds or fix the example.",
            ) from exc
        except OSError as exc:
            raise ExecutionError(f"Could not start {argv!r}: {exc}") from exc

        if completed.returncode != 0:
            tail = completed.stdout.decode("utf-8", errors="replace")[-_OUTPUT_TAIL_CHARS:]
            raise ExecutionError(
                f"Running {source_path.name} exited with status {completed.returncode}: {tail}",
                suggestion="Fix the example so it runs cleanly, then rebuild.",
            )

        log.debug("runner_finished", path=str(source_path), output_bytes=len(completed.stdout))
        return completed.stdout
