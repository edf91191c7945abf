"""glyphfx parser — converts a format string into a flat token list."""

from __future__ import annotations

import math
import re
from collections.abc import Sequence

from glyphfx.errors import InvalidArgumentError, TagSyntaxError
from glyphfx.tokens import Position, Span, TagClose, TagOpen, TextRun, Token, is_token

_NAME_RE = re.compile(r"/?[A-Za-z]+")
_ARG_RE = re.compile(r"(\w+)=([\w.\-]+)")
_INT_RE = re.compile(r"-?\d+")
_NUMBER_RE = re.compile(r"-?(?:\d+(?:\.\d*)?|\.\d+)")


class Parser:
    """Scan a format string into TextRun / TagOpen / TagClose tokens."""

    def __init__(self, source: str, filename: str = "input.fx") -> None:
        self._source = source
        self._filename = filename
        self._pos = 0
        self._line = 1
        self._col = 1
        self._tokens: list[Token] = []

    def parse(self) -> list[Token]:
        """Parse the full source and return the token list."""
        while self._pos < len(self._source):
            if self._peek() == "{":
                self._parse_tag()
            else:
                self._parse_text()
        return self._tokens

    # ------------------------------------------------------------------
    # Position helpers
    # ------------------------------------------------------------------

    def _current_pos(self) -> Position:
        return Position(self._line, self._col, self._pos)

    def _peek(self) -> str:
        if self._pos < len(self._source):
            return self._source[self._pos]
        return ""

    def _advance(self) -> str:
        ch = self._source[self._pos]
        self._pos += 1
        if ch == "\n":
            self._line += 1
            self._col = 1
        else:
            self._col += 1
        return ch

    def _position_at(self, start: Position, offset: int) -> Position:
        """Position of *offset*, walking forward from a known earlier position."""
        line, col = start.line, start.column
        for ch in self._source[start.offset : offset]:
            if ch == "\n":
                line += 1
                col = 1
            else:
                col += 1
        return Position(line, col, offset)

    # ------------------------------------------------------------------
    # Text and tags
    # ------------------------------------------------------------------

    def _parse_text(self) -> None:
        start = self._current_pos()
        chars = []
        while self._pos < len(self._source) and self._peek() != "{":
            chars.append(self._advance())
        self._tokens.append(TextRun("".join(chars), Span(start, self._current_pos())))

    def _parse_tag(self) -> None:
        start = self._current_pos()
        self._advance()  # {
        chars = []
        while self._pos < len(self._source) and self._peek() != "}":
            chars.append(self._advance())
        if self._pos >= len(self._source):
            raise TagSyntaxError("unterminated tag", Span(start, self._current_pos()), self._source)
        self._advance()  # }
        span = Span(start, self._current_pos())
        inner = "".join(chars)

        m = _NAME_RE.match(inner)
        if m is None:
            raise TagSyntaxError("expected effect name", span, self._source)
        name = m.group()

        if name.startswith("/"):
            self._tokens.append(TagClose(name[1:], span))
            return

        args: dict[str, int | float] = {}
        inner_offset = start.offset + 1
        for arg in _ARG_RE.finditer(inner):
            key, raw = arg.group(1), arg.group(2)
            value = _to_number(raw)
            if value is None:
                arg_start = self._position_at(start, inner_offset + arg.start())
                arg_end = self._position_at(start, inner_offset + arg.end())
                raise InvalidArgumentError(key, raw, Span(arg_start, arg_end), self._source)
            args[key] = value

        self._tokens.append(TagOpen(name, args, span))


def _to_number(raw: str) -> int | float | None:
    """Convert a numeric literal, or return None if it is not a finite number."""
    if not _NUMBER_RE.fullmatch(raw):
        return None
    try:
        value = int(raw) if _INT_RE.fullmatch(raw) else float(raw)
    except ValueError:
        # int() refuses literals past the interpreter's digit limit
        return None
    if not math.isfinite(value):
        return None
    return value


def parse(format: str | Sequence[Token], filename: str = "input.fx") -> list[Token]:
    """Parse a format string into tokens.

    A pre-built token sequence is accepted as-is and returned as a list,
    bypassing tokenization.
    """
    if isinstance(format, str):
        return Parser(format, filename).parse()
    tokens = list(format)
    for tok in tokens:
        if not is_token(tok):
            raise TypeError(f"expected TextRun, TagOpen or TagClose, got {type(tok).__name__}")
    return tokens
