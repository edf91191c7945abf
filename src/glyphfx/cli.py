"""Command-line interface for glyphfx."""

from __future__ import annotations

import argparse
import logging
import sys
import time
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from glyphfx.errors import EffectError, GlyphFxError, MarkupError


@dataclass(frozen=True, slots=True)
class CliOptions:
    """Parsed CLI options."""

    input_file: Path
    output_file: Path | None
    advance: float
    widths: dict[str, float]
    font_size: float
    builtins: bool
    effect_modules: list[str]
    effect_paths: list[Path]
    x: float
    y: float
    scale: float
    background: str | None
    watch: bool
    debug: bool


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (separate function for testability)."""
    p = argparse.ArgumentParser(
        prog="glyphfx",
        description="Render effect-annotated text markup to SVG",
    )
    p.add_argument("input", help="Input markup file")
    p.add_argument("-o", "--output", help="Output file (default: stdout)")
    p.add_argument(
        "--config",
        metavar="FILE",
        help="Config file (default: auto-discover glyphfx.toml)",
    )
    p.add_argument(
        "--effects",
        action="append",
        default=[],
        metavar="MODULE",
        help="Effect module to load (repeatable)",
    )
    p.add_argument(
        "--effects-path",
        action="append",
        default=[],
        metavar="DIR",
        help="Extra effect module search directory (repeatable)",
    )
    p.add_argument(
        "--no-builtins",
        action="store_true",
        help="Do not register the built-in effects",
    )
    p.add_argument(
        "--advance",
        type=float,
        default=None,
        metavar="PX",
        help="Horizontal advance per character (default: 8.0)",
    )
    p.add_argument(
        "--font-size",
        type=float,
        default=None,
        metavar="PX",
        help="SVG font size (default: 16.0)",
    )
    p.add_argument("--x", type=float, default=None, help="Draw position x")
    p.add_argument("--y", type=float, default=None, help="Draw position y")
    p.add_argument("--scale", type=float, default=None, help="Uniform draw scale")
    p.add_argument("--background", metavar="COLOR", help="SVG background fill")
    p.add_argument("--watch", action="store_true", help="Watch for changes and re-render")
    p.add_argument("--debug", action="store_true", help="Dump tokens and glyphs to stderr")
    return p


def load_config(config_path: Path | None, input_dir: Path) -> dict[str, Any]:
    """Load a TOML config file, returning an empty dict on missing/absent file."""
    path = config_path if config_path is not None else input_dir / "glyphfx.toml"

    if not path.is_file():
        return {}

    with open(path, "rb") as f:
        return tomllib.load(f)


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    value = config.get(name)
    return value if isinstance(value, dict) else {}


def _number(section: dict[str, Any], key: str, default: float) -> float:
    value = section.get(key)
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return default


def resolve_options(args: argparse.Namespace) -> CliOptions:
    """Merge config file and CLI args into CliOptions.

    Precedence: config file < CLI flags.
    """
    input_file = Path(args.input)
    input_dir = input_file.parent
    if not input_dir.parts:
        input_dir = Path(".")

    config_path = Path(args.config) if args.config else None
    config = load_config(config_path, input_dir)

    # Font: config < CLI
    cfg_font = _section(config, "font")
    advance = _number(cfg_font, "advance", 8.0)
    if args.advance is not None:
        advance = args.advance
    font_size = _number(cfg_font, "size", 16.0)
    if args.font_size is not None:
        font_size = args.font_size
    widths: dict[str, float] = {}
    cfg_widths = cfg_font.get("widths")
    if isinstance(cfg_widths, dict):
        for k, v in cfg_widths.items():
            if len(k) != 1 or not isinstance(v, (int, float)):
                raise argparse.ArgumentTypeError(
                    f"invalid [font.widths] entry (expected single character = number): {k}"
                )
            widths[k] = float(v)

    # Effects: config < CLI
    cfg_effects = _section(config, "effects")
    builtins = cfg_effects.get("builtins", True) is not False
    if args.no_builtins:
        builtins = False
    effect_modules: list[str] = []
    cfg_modules = cfg_effects.get("modules")
    if isinstance(cfg_modules, list):
        effect_modules.extend(str(m) for m in cfg_modules)
    effect_modules.extend(args.effects)
    effect_paths: list[Path] = []
    cfg_paths = cfg_effects.get("paths")
    if isinstance(cfg_paths, list):
        effect_paths.extend(input_dir / str(p) for p in cfg_paths)
    effect_paths.extend(Path(p) for p in args.effects_path)

    # Render: config < CLI
    cfg_render = _section(config, "render")
    x = _number(cfg_render, "x", 0.0)
    if args.x is not None:
        x = args.x
    y = _number(cfg_render, "y", 0.0)
    if args.y is not None:
        y = args.y
    scale = _number(cfg_render, "scale", 1.0)
    if args.scale is not None:
        scale = args.scale
    background = cfg_render.get("background")
    if not isinstance(background, str):
        background = None
    if args.background is not None:
        background = args.background

    output_file = Path(args.output) if args.output else None

    return CliOptions(
        input_file=input_file,
        output_file=output_file,
        advance=advance,
        widths=widths,
        font_size=font_size,
        builtins=builtins,
        effect_modules=effect_modules,
        effect_paths=effect_paths,
        x=x,
        y=y,
        scale=scale,
        background=background,
        watch=args.watch,
        debug=args.debug,
    )


def render_file(options: CliOptions) -> str:
    """Read, parse, apply effects, and render a markup file to SVG."""
    from glyphfx.debug import dump_glyphs, dump_tokens
    from glyphfx.effects import register_builtins
    from glyphfx.font import MonospaceFont, TableFont
    from glyphfx.plugins import EffectLoader
    from glyphfx.registry import EffectRegistry
    from glyphfx.richtext import RichText
    from glyphfx.sink import GlyphBatch
    from glyphfx.svg import SvgBackend

    source = options.input_file.read_text(encoding="utf-8")

    doc_dir = options.input_file.parent
    if not doc_dir.parts:
        doc_dir = Path(".")

    registry = EffectRegistry()
    if options.builtins:
        register_builtins(registry)
    loader = EffectLoader(document_dir=doc_dir, extra_paths=list(options.effect_paths))
    loader.load_all(options.effect_modules, registry)

    font = (
        TableFont(options.widths, options.advance)
        if options.widths
        else MonospaceFont(options.advance)
    )
    backend = SvgBackend(font_size=options.font_size, background=options.background)
    text = RichText(font, source, registry, GlyphBatch(backend), filename=str(options.input_file))

    if options.debug:
        dump_tokens(text.tokens)
        dump_glyphs(text.glyphs)

    return text.draw(options.x, options.y, 0.0, options.scale)


def _report(exc: GlyphFxError, options: CliOptions) -> None:
    print(exc.format(str(options.input_file)), file=sys.stderr)


def watch_loop(options: CliOptions) -> None:
    """Poll input file for changes, re-render on each modification."""
    last_mtime = 0.0
    print(f"Watching {options.input_file} for changes...", file=sys.stderr)
    try:
        while True:
            try:
                mtime = options.input_file.stat().st_mtime
            except OSError:
                time.sleep(0.5)
                continue
            if mtime != last_mtime:
                last_mtime = mtime
                try:
                    svg = render_file(options)
                    if options.output_file:
                        options.output_file.write_text(svg, encoding="utf-8")
                    else:
                        sys.stdout.write(svg)
                        sys.stdout.flush()
                    print(f"Rendered {options.input_file}", file=sys.stderr)
                except GlyphFxError as exc:
                    _report(exc, options)
            time.sleep(0.5)
    except KeyboardInterrupt:
        pass


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns exit code (0/1/2). Does not call sys.exit()."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        options = resolve_options(args)
    except argparse.ArgumentTypeError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    if options.debug:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    if options.watch:
        watch_loop(options)
        return 0

    try:
        svg = render_file(options)
    except MarkupError as exc:
        _report(exc, options)
        return 1
    except EffectError as exc:
        _report(exc, options)
        return 2

    if options.output_file:
        options.output_file.write_text(svg, encoding="utf-8")
    else:
        sys.stdout.write(svg)

    return 0


def run() -> None:
    """Console-script entry point."""
    sys.exit(main())
