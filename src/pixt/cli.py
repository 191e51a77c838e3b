import argparse
import logging
import os
import sys
from pathlib import Path
from typing import BinaryIO

from pixt.config import RenderConfig, Style
from pixt.converter import ImageLoadError, fit_image, load_image, render
from pixt.logging_conf import setup_logging
from pixt.output import ColourMode, OutputFormat, Sink, UnsupportedFormatError, make_sink
from pixt.palette import PaletteError

log = logging.getLogger(__name__)


def _terminal_columns(default: int = 80) -> int:
    if not sys.stdout.isatty():
        return default
    try:
        return os.get_terminal_size(sys.stdout.fileno()).columns
    except OSError:
        return default


def _positive_int(value: str) -> int:
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1: {value}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pixt", description="Render images as character art")
    parser.add_argument("images", nargs="+", type=Path, help="Paths to input images")
    parser.add_argument("-w", "--width", type=_positive_int, default=None, help="Output width in columns")
    parser.add_argument(
        "-H", "--height", type=_positive_int, default=None, help="Image height in pixels (two per output line)"
    )
    parser.add_argument("-c", "--colour", action="store_true", default=False, help="Enable coloured output")
    parser.add_argument(
        "-s",
        "--style",
        default=Style.PIXEL.value,
        choices=[s.value for s in Style],
        help="Glyph style (default: pixel)",
    )
    parser.add_argument("--chars", default=None, help="Characters for the custom style, dark to light")
    parser.add_argument(
        "--palette-file", type=Path, default=None, help="File with one palette row per line for the custom style"
    )
    parser.add_argument(
        "-m",
        "--colour-mode",
        default=None,
        choices=[m.value for m in ColourMode],
        help="Override how pixel colours are applied (implies --colour)",
    )
    parser.add_argument(
        "-f",
        "--format",
        default=None,
        choices=[f.value for f in OutputFormat],
        help="Output format (default: from the output file extension, else terminal)",
    )
    parser.add_argument("-o", "--output", type=Path, default=None, help="Write to a new file instead of stdout")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More log output")
    parser.add_argument("-q", "--quiet", action="count", default=0, help="Less log output")
    return parser


def _render_all(images: list[Path], config: RenderConfig, sink: Sink, out: BinaryIO) -> None:
    columns = _terminal_columns() if config.width is None else None
    for path in images:
        log.info("rendering %s", path)
        image = fit_image(load_image(path), config.width, config.height, columns)
        render(image, config.palette, sink, out)


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose - args.quiet)

    for path in args.images:
        if not path.exists():
            print(f"File not found: {path}", file=sys.stderr)
            sys.exit(1)

    try:
        config = RenderConfig.from_args(args)
        sink = make_sink(config.output_format, config.colour_mode)
        if args.output is None:
            _render_all(args.images, config, sink, sys.stdout.buffer)
            sys.stdout.buffer.flush()
        else:
            with args.output.open("xb") as out:
                _render_all(args.images, config, sink, out)
    except FileExistsError:
        print(f"Output file already exists: {args.output}", file=sys.stderr)
        sys.exit(1)
    except (PaletteError, UnsupportedFormatError, ImageLoadError) as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
