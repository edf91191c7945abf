"""Error types with formatted source context."""

from __future__ import annotations

from glyphfx.tokens import Span


class GlyphFxError(Exception):
    """Base error. Carries an optional span and the source it points into."""

    def __init__(self, message: str, span: Span | None = None, source: str = "") -> None:
        self.message = message
        self.span = span
        self.source = source
        super().__init__(self.format())

    def format(self, filename: str = "input.fx") -> str:
        if self.span is None:
            return f"error: {self.message}"

        lines = self.source.splitlines(keepends=True)
        line_idx = self.span.start.line - 1
        col = self.span.start.column

        if 0 <= line_idx < len(lines):
            source_line = lines[line_idx].rstrip("\n").rstrip("\r")
        else:
            source_line = ""

        # Underline the full span when on one line, otherwise to end of line
        if self.span.end.line == self.span.start.line:
            underline_len = max(1, self.span.end.column - col)
        else:
            underline_len = max(1, len(source_line) - col + 1)

        pad = " " * (col - 1)
        carets = "^" * underline_len

        line_num = str(self.span.start.line)
        gutter_width = len(line_num) + 1

        blank_gutter = " " * gutter_width + "|"
        line_gutter = f"{line_num:>{gutter_width - 1}} |"

        return (
            f"error: {self.message}\n"
            f"{' ' * gutter_width}--> {filename}:{self.span.start.line}:{col}\n"
            f"{blank_gutter}\n"
            f"{line_gutter} {source_line}\n"
            f"{blank_gutter} {pad}{carets}"
        )


# ---------------------------------------------------------------------------
# Markup (parse-time) errors
# ---------------------------------------------------------------------------


class MarkupError(GlyphFxError):
    """Raised by the parser on malformed markup."""


class TagSyntaxError(MarkupError):
    """Unterminated tag or tag without an effect name."""


class InvalidArgumentError(MarkupError):
    """A tag argument whose value is not a number."""

    def __init__(self, key: str, value: str, span: Span | None = None, source: str = "") -> None:
        self.key = key
        self.value = value
        super().__init__(
            f"invalid effect arg '{key}={value}': numbers are the only supported type",
            span,
            source,
        )


# ---------------------------------------------------------------------------
# Effect (registry / application) errors
# ---------------------------------------------------------------------------


class EffectError(GlyphFxError):
    """Raised by the registry, the engine, and effect loading."""


class DuplicateEffectError(EffectError):
    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"effect '{name}' already exists")


class UnknownEffectError(EffectError):
    def __init__(self, name: str, span: Span | None = None, source: str = "") -> None:
        self.name = name
        super().__init__(f"effect '{name}' does not exist", span, source)


class UnmatchedCloseTagError(EffectError):
    def __init__(self, name: str, span: Span | None = None, source: str = "") -> None:
        self.name = name
        super().__init__(
            f"effect '{name}' does not have a matching opening tag", span, source
        )


class EffectLoadError(EffectError):
    """An effect module could not be found or does not define register()."""
