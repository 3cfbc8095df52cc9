from __future__ import annotations

from enum import StrEnum


class ErrorCode(StrEnum):
    CONFIG_ERROR = "CONFIG_ERROR"
    IO_ERROR = "IO_ERROR"
    EXECUTION_ERROR = "EXECUTION_ERROR"
    RENDER_ERROR = "RENDER_ERROR"
    HIGHLIGHT_ERROR = "HIGHLIGHT_ERROR"


class BuildError(Exception):
    """Raised by every pipeline stage for all fatal failure conditions.

    Caught only by cli.py, which reports it and exits non-zero. Never catch
    this inside a stage. A build either completes or aborts on the first
    error, and the caller must treat the output directory as undefined.
    """

    code: ErrorCode = ErrorCode.CONFIG_ERROR

    def __init__(self, message: str, suggestion: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.suggestion = suggestion

    def to_dict(self) -> dict:
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "suggestion": self.suggestion,
            }
        }


class ConfigError(BuildError):
    """Examples root missing, or manifest/directory count mismatch."""

    code = ErrorCode.CONFIG_ERROR


class BuildIOError(BuildError):
    """Read/write failure against a source, cache, or output file."""

    code = ErrorCode.IO_ERROR


class ExecutionError(BuildError):
    """The external runtime failed to run an example to completion."""

    code = ErrorCode.EXECUTION_ERROR


class RenderError(BuildError):
    """Template lookup or composition failed."""

    code = ErrorCode.RENDER_ERROR


class HighlightError(BuildError):
    """Unknown language or theme, or the formatter failed."""

    code = ErrorCode.HIGHLIGHT_ERROR
