"""Pipeline driver.

Processes every example strictly in registry order: cache check, possible
execution, highlighting, rendering, write. One example is finished before the
next starts. The first ``BuildError`` from any stage propagates unchanged;
files written before it stay on disk.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from litbuild.cache import TranscriptCache
from litbuild.files import ensure_dir, write_atomic
from litbuild.highlight import Highlighter
from litbuild.models.build import BuildReport, ExampleOutcome
from litbuild.registry import load_examples
from litbuild.renderer import PageRenderer
from litbuild.runner import SubprocessRunner
from litbuild.state import BuildState

if TYPE_CHECKING:
    from pathlib import Path

    from litbuild.config import Settings
    from litbuild.models.example import Example
    from litbuild.protocols import RunnerProtocol

log = structlog.get_logger()

INDEX_PAGE = "index.html"


def create_state(settings: Settings, runner: RunnerProtocol | None = None) -> BuildState:
    """Wire the build collaborators from settings."""
    if runner is None:
        runner = SubprocessRunner.from_settings(settings.runner)

    highlighter = Highlighter(settings.highlight.theme)
    renderer = PageRenderer(
        highlighter,
        language=settings.examples.language,
        templates_dir=settings.output.templates_dir,
        stylesheet=settings.output.stylesheet_name,
    )
    cache = TranscriptCache(
        runner,
        prompt_template=settings.cache.prompt_template,
        transcript_extension=settings.cache.transcript_extension,
    )
    return BuildState(settings=settings, highlighter=highlighter, renderer=renderer, cache=cache)


def build_example(example: Example, state: BuildState) -> ExampleOutcome:
    """Bring one example's transcript up to date and write its page."""
    transcript = state.cache.ensure_fresh(example)
    example.digest = transcript.digest

    html = state.renderer.render_example(example, transcript)
    page_path = state.settings.output.dir / f"{example.id}.html"
    write_atomic(page_path, html)
    log.info("page_written", example=example.id, path=str(page_path), cached=transcript.cache_hit)

    return ExampleOutcome(id=example.id, cache_hit=transcript.cache_hit, page_path=page_path)


def build_site(settings: Settings, *, runner: RunnerProtocol | None = None) -> BuildReport:
    """Build every example page, the shared stylesheet, and the index."""
    state = create_state(settings, runner)

    # Enumerate and parse everything first: config errors abort before any write
    examples = load_examples(settings.examples)

    output_dir = settings.output.dir
    ensure_dir(output_dir)

    stylesheet_path = _write_stylesheet(state, output_dir)

    report = BuildReport(stylesheet_path=stylesheet_path)
    for example in examples:
        report.examples.append(build_example(example, state))

    index_path = output_dir / INDEX_PAGE
    write_atomic(index_path, state.renderer.render_index(examples))
    report.index_path = index_path

    log.info(
        "build_complete",
        examples=len(report.examples),
        executed=len(report.executed),
        cached=len(report.cached),
        output=str(output_dir),
    )
    return report


def _write_stylesheet(state: BuildState, output_dir: Path) -> Path:
    path = output_dir / state.settings.output.stylesheet_name
    write_atomic(path, state.highlighter.stylesheet().encode("utf-8"))
    return path
