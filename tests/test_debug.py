"""--debug dumps."""

from __future__ import annotations

import io

import pytest

from glyphfx.debug import dump_glyphs, dump_tokens
from glyphfx.engine import apply
from glyphfx.font import MonospaceFont
from glyphfx.parser import parse


class TestDumpTokens:
    def test_writes_to_current_stderr(self, capsys: pytest.CaptureFixture[str]) -> None:
        dump_tokens(parse("{wave=2}a{/wave}"))
        err = capsys.readouterr().err
        assert err.startswith("Tokens\n")
        assert "TagOpen wave wave=2" in err
        assert "TextRun('a')" in err
        assert "TagClose wave" in err

    def test_explicit_file(self) -> None:
        out = io.StringIO()
        dump_tokens(parse("plain"), file=out)
        assert out.getvalue() == "Tokens\n  TextRun('plain')\n"


class TestDumpGlyphs:
    def test_writes_to_current_stderr(
        self, registry, capsys: pytest.CaptureFixture[str]
    ) -> None:
        layout = apply(parse("{red}a{/red}b"), registry, MonospaceFont(4.0))
        dump_glyphs(layout.glyphs)
        err = capsys.readouterr().err
        assert "'a' @ 0 color=(1, 0, 0, 1)" in err
        assert "'b' @ 4\n" in err
