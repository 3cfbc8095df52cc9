"""Example registry: enumeration, ordering, and navigation links."""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from litbuild.errors import BuildIOError, ConfigError
from litbuild.files import read_text
from litbuild.models.example import Example
from litbuild.parser import extract_description, parse_segments, split_source

if TYPE_CHECKING:
    from pathlib import Path

    from litbuild.config import ExamplesSettings

log = structlog.get_logger()


def display_name(example_id: str) -> str:
    """``'strings'`` → ``'Strings'``, ``'HTTP'`` → ``'Http'``."""
    return example_id[:1].upper() + example_id[1:].lower()


def list_example_dirs(examples_dir: Path) -> list[str]:
    """Return example subdirectory names in filesystem listing order.

    The order is whatever the host filesystem yields and is deliberately not
    sorted. Use a manifest when page order matters.
    """
    if not examples_dir.is_dir():
        raise ConfigError(
            f"Examples root {examples_dir} does not exist or is not a directory.",
            suggestion="Set examples.dir in litbuild.yaml or LITBUILD__EXAMPLES__DIR.",
        )
    try:
        return [entry.name for entry in examples_dir.iterdir() if entry.is_dir()]
    except OSError as exc:
        raise BuildIOError(f"Could not list {examples_dir}: {exc}") from exc


def read_manifest(manifest_path: Path) -> list[str]:
    """Read one example id per line; trailing blank lines are dropped."""
    if not manifest_path.is_file():
        raise ConfigError(
            f"Manifest {manifest_path} does not exist.",
            suggestion="Create the manifest or unset examples.manifest.",
        )
    try:
        text = manifest_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigError(f"Could not read manifest {manifest_path}: {exc}") from exc

    ids = [line.strip() for line in text.splitlines()]
    while ids and not ids[-1]:
        ids.pop()
    return ids


def list_example_ids(examples_dir: Path, manifest_path: Path | None = None) -> list[str]:
    """Return example ids in page order.

    With a manifest, its line count must equal the number of example
    subdirectories; anything else is a ``ConfigError``.
    """
    dir_ids = list_example_dirs(examples_dir)
    if manifest_path is None:
        return dir_ids

    manifest_ids = read_manifest(manifest_path)
    if len(manifest_ids) != len(dir_ids):
        raise ConfigError(
            f"Manifest {manifest_path} lists {len(manifest_ids)} examples but "
            f"{examples_dir} contains {len(dir_ids)}.",
            suggestion="Add or remove manifest lines so every example appears exactly once.",
        )
    return manifest_ids


def navigation(ids: list[str], index: int) -> tuple[str | None, str | None]:
    """Return ``(previous_id, next_id)`` for the example at ``index``."""
    previous_id = ids[index - 1] if index > 0 else None
    next_id = ids[index + 1] if index < len(ids) - 1 else None
    return previous_id, next_id


def source_path_for(examples_dir: Path, example_id: str, extension: str) -> Path:
    return examples_dir / example_id / f"{example_id}.{extension}"


def load_example(
    example_id: str,
    settings: ExamplesSettings,
    *,
    previous_id: str | None = None,
    next_id: str | None = None,
) -> Example:
    """Read and parse one example's source."""
    source_path = source_path_for(settings.dir, example_id, settings.source_extension)
    if not source_path.is_file():
        raise BuildIOError(
            f"Example {example_id!r} has no source file {source_path.name}.",
            suggestion=f"Add {source_path} or remove the directory.",
        )

    text = read_text(source_path)
    _header, body = split_source(text, settings.header_lines)

    return Example(
        id=example_id,
        display_name=display_name(example_id),
        description=extract_description(text.splitlines()),
        source_path=source_path,
        segments=parse_segments(body),
        previous_id=previous_id,
        next_id=next_id,
    )


def load_examples(settings: ExamplesSettings) -> list[Example]:
    """Enumerate, read, and link every example.

    All sources are read here, so configuration and missing-source errors
    surface before the pipeline writes any output.
    """
    ids = list_example_ids(settings.dir, settings.manifest)

    examples: list[Example] = []
    for index, example_id in enumerate(ids):
        previous_id, next_id = navigation(ids, index)
        examples.append(
            load_example(example_id, settings, previous_id=previous_id, next_id=next_id)
        )

    log.info(
        "examples_loaded",
        count=len(examples),
        source="manifest" if settings.manifest is not None else "directory",
        path=str(settings.dir),
    )
    return examples
