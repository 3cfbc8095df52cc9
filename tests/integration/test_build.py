"""End-to-end builds over a temporary examples tree with a fake runner."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from litbuild.config import Settings
from litbuild.errors import ConfigError, ExecutionError, HighlightError
from litbuild.pipeline import build_site

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path


def _snapshot(directory: Path, pattern: str) -> dict[str, bytes]:
    return {str(path.relative_to(directory)): path.read_bytes() for path in directory.rglob(pattern)}


def _with_manifest(settings: Settings, tmp_path: Path, ids: list[str]) -> Settings:
    manifest = tmp_path / "order.txt"
    manifest.write_text("\n".join(ids) + "\n", encoding="utf-8")
    return settings.model_copy(
        update={"examples": settings.examples.model_copy(update={"manifest": manifest})}
    )


class _ExplodingRunner:
    """Succeeds for every example except ``fail_id``."""

    def __init__(self, fail_id: str) -> None:
        self.fail_id = fail_id
        self.calls: list[str] = []

    def run(self, source_path: Path) -> bytes:
        self.calls.append(source_path.stem)
        if source_path.stem == self.fail_id:
            raise ExecutionError(f"{source_path.name} crashed")
        return b"ok\n"


class TestFullBuild:
    def test_writes_pages_stylesheet_and_index(
        self, settings: Settings, sample_examples: list[str], output_dir: Path, runner
    ) -> None:
        report = build_site(settings, runner=runner)

        assert sorted(outcome.id for outcome in report.examples) == ["numbers", "strings"]
        assert (output_dir / "strings.html").is_file()
        assert (output_dir / "numbers.html").is_file()
        assert ".highlight .k " in (output_dir / "code.css").read_text()
        assert report.stylesheet_path == output_dir / "code.css"
        assert report.index_path == output_dir / "index.html"
        assert sorted(report.executed) == ["numbers", "strings"]
        assert report.cached == []

    def test_page_content(
        self, tmp_path: Path, settings: Settings, sample_examples: list[str], output_dir, runner
    ) -> None:
        settings = _with_manifest(settings, tmp_path, ["strings", "numbers"])
        build_site(settings, runner=runner)

        html = (output_dir / "strings.html").read_text(encoding="utf-8")
        assert "<title>Strings</title>" in html
        assert "<p>Strings can be concatenated</p>" in html
        assert '<span class="gp">$ run strings</span>' in html
        assert "output of strings.js" in html
        assert 'href="numbers.html"' in html
        assert 'class="previous"' not in html

    def test_index_in_manifest_order(
        self, tmp_path: Path, settings: Settings, sample_examples: list[str], output_dir, runner
    ) -> None:
        settings = _with_manifest(settings, tmp_path, ["numbers", "strings"])
        build_site(settings, runner=runner)

        index = (output_dir / "index.html").read_text(encoding="utf-8")
        assert index.index("numbers.html") < index.index("strings.html")
        assert "_numbers_ are numbers" in index

    def test_examples_processed_in_registry_order(
        self, tmp_path: Path, settings: Settings, sample_examples: list[str], runner
    ) -> None:
        settings = _with_manifest(settings, tmp_path, ["numbers", "strings"])
        report = build_site(settings, runner=runner)

        assert runner.called_ids == ["numbers", "strings"]
        assert [outcome.id for outcome in report.examples] == ["numbers", "strings"]


class TestIncrementalBuild:
    def test_second_build_is_all_cache_hits(
        self,
        settings: Settings,
        sample_examples: list[str],
        examples_dir: Path,
        output_dir: Path,
        runner,
    ) -> None:
        build_site(settings, runner=runner)
        cache_before = _snapshot(examples_dir, "*.hash") | _snapshot(examples_dir, "*.transcript")
        pages_before = _snapshot(output_dir, "*.html")

        report = build_site(settings, runner=runner)

        assert len(runner.calls) == 2  # only the first build executed
        assert report.executed == []
        assert sorted(report.cached) == ["numbers", "strings"]
        cache_after = _snapshot(examples_dir, "*.hash") | _snapshot(examples_dir, "*.transcript")
        assert cache_after == cache_before
        assert _snapshot(output_dir, "*.html") == pages_before

    def test_edit_invalidates_only_that_example(
        self,
        settings: Settings,
        sample_examples: list[str],
        examples_dir: Path,
        write_example: Callable[..., Path],
        runner,
    ) -> None:
        build_site(settings, runner=runner)
        numbers_before = _snapshot(examples_dir / "numbers", "numbers.*")
        strings_hash_before = (examples_dir / "strings" / "strings.hash").read_bytes()

        write_example("strings", "// Rewritten\nconsole.log('new')\n")
        report = build_site(settings, runner=runner)

        assert report.executed == ["strings"]
        assert runner.called_ids[2:] == ["strings"]
        assert _snapshot(examples_dir / "numbers", "numbers.*") == numbers_before
        assert (examples_dir / "strings" / "strings.hash").read_bytes() != strings_hash_before

    def test_missing_transcript_is_regenerated(
        self, settings: Settings, sample_examples: list[str], examples_dir: Path, runner
    ) -> None:
        build_site(settings, runner=runner)
        (examples_dir / "numbers" / "numbers.transcript").unlink()

        report = build_site(settings, runner=runner)

        assert report.executed == ["numbers"]
        assert (examples_dir / "numbers" / "numbers.transcript").is_file()


class TestFatalErrors:
    def test_manifest_mismatch_writes_nothing(
        self,
        tmp_path: Path,
        settings: Settings,
        sample_examples: list[str],
        examples_dir: Path,
        output_dir: Path,
        runner,
    ) -> None:
        settings = _with_manifest(settings, tmp_path, ["strings"])

        with pytest.raises(ConfigError):
            build_site(settings, runner=runner)

        assert not output_dir.exists()
        assert runner.calls == []
        assert list(examples_dir.rglob("*.hash")) == []

    def test_missing_examples_root(self, tmp_path: Path, runner) -> None:
        settings = Settings(
            examples={"dir": tmp_path / "missing"},
            output={"dir": tmp_path / "public"},
        )
        with pytest.raises(ConfigError):
            build_site(settings, runner=runner)
        assert not (tmp_path / "public").exists()

    def test_runner_failure_aborts_build(
        self, tmp_path: Path, settings: Settings, sample_examples: list[str], output_dir: Path
    ) -> None:
        settings = _with_manifest(settings, tmp_path, ["numbers", "strings"])
        exploding = _ExplodingRunner(fail_id="numbers")

        with pytest.raises(ExecutionError, match="numbers.js crashed"):
            build_site(settings, runner=exploding)

        # Nothing after the failing example is attempted
        assert exploding.calls == ["numbers"]
        assert not (output_dir / "numbers.html").exists()
        assert not (output_dir / "strings.html").exists()
        assert not (output_dir / "index.html").exists()

    def test_pages_before_failure_remain(
        self, tmp_path: Path, settings: Settings, sample_examples: list[str], output_dir: Path
    ) -> None:
        settings = _with_manifest(settings, tmp_path, ["strings", "numbers"])

        with pytest.raises(ExecutionError):
            build_site(settings, runner=_ExplodingRunner(fail_id="numbers"))

        assert (output_dir / "strings.html").is_file()
        assert not (output_dir / "numbers.html").exists()

    def test_unknown_language(
        self, settings: Settings, sample_examples: list[str], runner
    ) -> None:
        settings = settings.model_copy(
            update={"examples": settings.examples.model_copy(update={"language": "nope-lang"})}
        )
        with pytest.raises(HighlightError):
            build_site(settings, runner=runner)
