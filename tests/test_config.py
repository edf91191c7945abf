"""Tests for TOML config file loading."""

from __future__ import annotations

from pathlib import Path

from glyphfx.cli import build_parser, load_config, resolve_options


def _options(tmp_path: Path, *argv: str):
    doc = tmp_path / "doc.fx"
    doc.write_text("")
    ns = build_parser().parse_args([str(doc), *argv])
    return resolve_options(ns)


class TestLoadConfig:
    def test_missing_config_returns_empty(self, tmp_path: Path) -> None:
        assert load_config(None, tmp_path) == {}

    def test_explicit_path(self, tmp_path: Path) -> None:
        cfg = tmp_path / "custom.toml"
        cfg.write_text("[font]\nadvance = 6\n")
        assert load_config(cfg, tmp_path)["font"] == {"advance": 6}

    def test_auto_discover_glyphfx_toml(self, tmp_path: Path) -> None:
        (tmp_path / "glyphfx.toml").write_text("[render]\nscale = 2\n")
        assert load_config(None, tmp_path)["render"] == {"scale": 2}


class TestDefaults:
    def test_no_config(self, tmp_path: Path) -> None:
        opts = _options(tmp_path)
        assert opts.advance == 8.0
        assert opts.font_size == 16.0
        assert opts.builtins is True
        assert opts.effect_modules == []
        assert opts.widths == {}
        assert (opts.x, opts.y, opts.scale) == (0.0, 0.0, 1.0)
        assert opts.background is None


class TestConfigMerge:
    def test_font_section(self, tmp_path: Path) -> None:
        (tmp_path / "glyphfx.toml").write_text(
            "[font]\nadvance = 6\nsize = 12\n[font.widths]\ni = 3\n"
        )
        opts = _options(tmp_path)
        assert opts.advance == 6.0
        assert opts.font_size == 12.0
        assert opts.widths == {"i": 3.0}

    def test_cli_overrides_font(self, tmp_path: Path) -> None:
        (tmp_path / "glyphfx.toml").write_text("[font]\nadvance = 6\n")
        opts = _options(tmp_path, "--advance", "9")
        assert opts.advance == 9.0

    def test_effects_modules_config_then_cli(self, tmp_path: Path) -> None:
        (tmp_path / "glyphfx.toml").write_text('[effects]\nmodules = ["base"]\n')
        opts = _options(tmp_path, "--effects", "extra")
        assert opts.effect_modules == ["base", "extra"]

    def test_effects_paths_relative_to_document(self, tmp_path: Path) -> None:
        (tmp_path / "glyphfx.toml").write_text('[effects]\npaths = ["fx"]\n')
        opts = _options(tmp_path, "--effects-path", "/opt/fx")
        assert opts.effect_paths == [tmp_path / "fx", Path("/opt/fx")]

    def test_builtins_disabled_in_config(self, tmp_path: Path) -> None:
        (tmp_path / "glyphfx.toml").write_text("[effects]\nbuiltins = false\n")
        assert _options(tmp_path).builtins is False

    def test_no_builtins_flag(self, tmp_path: Path) -> None:
        assert _options(tmp_path, "--no-builtins").builtins is False

    def test_render_section(self, tmp_path: Path) -> None:
        (tmp_path / "glyphfx.toml").write_text(
            '[render]\nx = 4\ny = 5.5\nscale = 2\nbackground = "#101010"\n'
        )
        opts = _options(tmp_path)
        assert (opts.x, opts.y, opts.scale) == (4.0, 5.5, 2.0)
        assert opts.background == "#101010"

    def test_cli_overrides_render(self, tmp_path: Path) -> None:
        (tmp_path / "glyphfx.toml").write_text('[render]\nscale = 2\nbackground = "#101010"\n')
        opts = _options(tmp_path, "--scale", "3", "--background", "white")
        assert opts.scale == 3.0
        assert opts.background == "white"

    def test_non_numeric_config_value_ignored(self, tmp_path: Path) -> None:
        (tmp_path / "glyphfx.toml").write_text('[font]\nadvance = "wide"\n')
        assert _options(tmp_path).advance == 8.0

    def test_explicit_config_flag(self, tmp_path: Path) -> None:
        cfg = tmp_path / "alt.toml"
        cfg.write_text("[font]\nsize = 20\n")
        opts = _options(tmp_path, "--config", str(cfg))
        assert opts.font_size == 20.0
