"""Filesystem helpers shared by the cache and the pipeline.

Every OSError is translated into ``BuildIOError`` here so callers never see
raw filesystem exceptions.
"""

from __future__ import annotations

import os
import sys
from contextlib import suppress
from typing import TYPE_CHECKING

from litbuild.errors import BuildIOError

if TYPE_CHECKING:
    from pathlib import Path


def read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise BuildIOError(f"Could not read {path}: {exc}") from exc


def read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise BuildIOError(f"Could not read {path}: {exc}") from exc


def write_atomic(path: Path, data: bytes) -> None:
    """Write via a temp file and ``os.replace`` so readers never see a partial file."""
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    try:
        _write_bytes_fsync(tmp_path, data)
        os.replace(tmp_path, path)
        _fsync_directory(path.parent)
    except OSError as exc:
        raise BuildIOError(f"Could not write {path}: {exc}") from exc
    finally:
        with suppress(OSError):
            tmp_path.unlink(missing_ok=True)


def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise BuildIOError(f"Could not create directory {path}: {exc}") from exc


def _write_bytes_fsync(path: Path, data: bytes) -> None:
    with path.open("wb") as file_obj:
        file_obj.write(data)
        file_obj.flush()
        os.fsync(file_obj.fileno())


def _fsync_directory(path: Path) -> None:
    if sys.platform == "win32":
        return  # Windows does not support fsync on directory handles
    directory_fd = os.open(path, os.O_RDONLY)
    try:
        os.fsync(directory_fd)
    finally:
        os.close(directory_fd)
