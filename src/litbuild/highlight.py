"""Syntax highlighting via Pygments.

Code blocks use the Pygments lexer registered for the configured language.
Transcripts use ``TranscriptLexer``: the first ``$`` line is the prompt and
everything after it is output. All markup uses CSS classes, so one stylesheet
from ``Highlighter.stylesheet`` serves every page.
"""

from __future__ import annotations

import re

from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexer import RegexLexer, bygroups
from pygments.lexers import get_lexer_by_name
from pygments.styles import get_style_by_name
from pygments.token import Generic, Text
from pygments.util import ClassNotFound

from litbuild.errors import HighlightError

CSS_SCOPE = ".highlight"


class TranscriptLexer(RegexLexer):
    """Lexer for a prompt line followed by captured program output."""

    name = "Transcript"
    aliases = ["transcript"]
    filenames = ["*.transcript"]
    flags = re.MULTILINE | re.DOTALL

    tokens = {
        "root": [
            (r"(\$[^\n]*)(\n)", bygroups(Generic.Prompt, Text.Whitespace), "output"),
            (r"\$[^\n]*", Generic.Prompt),
            # Anything before the prompt is shown as output as well
            (r"[^\n]*\n", Generic.Output),
            (r"[^\n]+", Generic.Output),
        ],
        "output": [
            (r".+", Generic.Output),
        ],
    }

    def __init__(self, **options) -> None:
        # Keep output verbatim: no stripping of leading/trailing newlines
        options.setdefault("stripnl", False)
        options.setdefault("ensurenl", False)
        super().__init__(**options)


class Highlighter:
    """Turns code and transcripts into styled HTML for one theme."""

    def __init__(self, theme: str) -> None:
        try:
            get_style_by_name(theme)
        except ClassNotFound as exc:
            raise HighlightError(
                f"Unknown highlighting theme {theme!r}.",
                suggestion="Pick a Pygments style name, e.g. 'monokai' or 'github-dark'.",
            ) from exc
        self.theme = theme
        self._formatter = HtmlFormatter(style=theme, cssclass=CSS_SCOPE.lstrip("."))
        self._transcript_lexer = TranscriptLexer()

    def highlight_code(self, code: str, language: str) -> str:
        try:
            lexer = get_lexer_by_name(language)
        except ClassNotFound as exc:
            raise HighlightError(
                f"No lexer for language {language!r}.",
                suggestion="Set examples.language to a Pygments lexer alias.",
            ) from exc
        return self._format(code, lexer)

    def highlight_transcript(self, text: str) -> str:
        return self._format(text, self._transcript_lexer)

    def stylesheet(self) -> str:
        """Background and token rules, every one scoped under ``.highlight``."""
        lines = [
            *self._formatter.get_background_style_defs(CSS_SCOPE),
            *self._formatter.get_token_style_defs(CSS_SCOPE),
        ]
        return "\n".join(lines) + "\n"

    def _format(self, text: str, lexer) -> str:
        return highlight(text, lexer, self._formatter)
