"""Command-line entrypoint.

Responsibilities (and nothing more):
- Load settings
- Configure structlog
- Run the pipeline
- Turn the first fatal error into a diagnostic and a non-zero exit status
"""

from __future__ import annotations

import logging
import sys

import structlog
from pydantic import ValidationError

from litbuild import __version__
from litbuild.config import Settings
from litbuild.errors import BuildError, ErrorCode
from litbuild.pipeline import build_site

log = structlog.get_logger()


def _setup_logging(settings: Settings) -> None:
    """Configure structlog. Called once at startup before any log statements."""
    log_level = logging.getLevelNamesMapping()[settings.logging.level]

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if settings.logging.format == "json":
        processors = [*shared_processors, structlog.processors.JSONRenderer()]
    else:
        processors = [*shared_processors, structlog.dev.ConsoleRenderer()]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        # Logs go to stderr so stdout stays free for the summary line
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def run(settings: Settings) -> int:
    """Run one build and return the process exit status."""
    log.info(
        "build_starting",
        version=__version__,
        examples=str(settings.examples.dir),
        output=str(settings.output.dir),
    )
    try:
        report = build_site(settings)
    except BuildError as exc:
        log.error("build_failed", code=exc.code, message=exc.message, suggestion=exc.suggestion)
        print(f"litbuild: {exc.code}: {exc.message}", file=sys.stderr)
        return 1

    print(
        f"Built {len(report.examples)} pages "
        f"({len(report.executed)} executed, {len(report.cached)} cached)"
    )
    return 0


def main() -> None:
    try:
        settings = Settings()
    except ValidationError as exc:
        print(f"litbuild: {ErrorCode.CONFIG_ERROR}: invalid configuration\n{exc}", file=sys.stderr)
        sys.exit(1)
    _setup_logging(settings)
    sys.exit(run(settings))


if __name__ == "__main__":
    main()
