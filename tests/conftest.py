"""Shared test fixtures for the litbuild test suite."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
import structlog

from litbuild.config import Settings

STRINGS_SOURCE = """\
// "name" is a _string_
const name = "Jose"
console.log("name", name)

// Strings can be concatenated
const fullName = name + " Martinez"
console.log("fullName", fullName)
"""

NUMBERS_SOURCE = """\
// _numbers_ are numbers

// You can sum _numbers_
const summed = 4 + 2
console.log("four plus two is", summed)
"""


class FakeRunner:
    """Deterministic RunnerProtocol implementation that records every call."""

    def __init__(self) -> None:
        self.calls: list[Path] = []

    def run(self, source_path: Path) -> bytes:
        self.calls.append(source_path)
        return f"output of {source_path.name}\n".encode()

    @property
    def called_ids(self) -> list[str]:
        return [path.stem for path in self.calls]


@pytest.fixture()
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture()
def examples_dir(tmp_path: Path) -> Path:
    path = tmp_path / "examples"
    path.mkdir()
    return path


@pytest.fixture()
def output_dir(tmp_path: Path) -> Path:
    return tmp_path / "public"


@pytest.fixture()
def write_example(examples_dir: Path) -> Callable[..., Path]:
    """Create ``examples/<id>/<id>.<ext>`` and return the source path."""

    def _write(example_id: str, source: str, extension: str = "js") -> Path:
        directory = examples_dir / example_id
        directory.mkdir(exist_ok=True)
        path = directory / f"{example_id}.{extension}"
        path.write_text(source, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def settings(examples_dir: Path, output_dir: Path) -> Settings:
    """Settings pointing at isolated tmp directories."""
    return Settings(
        examples={"dir": examples_dir},
        output={"dir": output_dir},
    )


@pytest.fixture()
def sample_examples(write_example: Callable[..., Path]) -> list[str]:
    """Two JavaScript examples modelled on a real site's sources."""
    write_example("strings", STRINGS_SOURCE)
    write_example("numbers", NUMBERS_SOURCE)
    return ["strings", "numbers"]


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo any structlog.configure() done by cli.main during a test."""
    yield
    structlog.reset_defaults()
