import argparse
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pixt import charsets
from pixt.output import ColourMode, OutputFormat, format_for_path
from pixt.palette import Palette, PaletteError

log = logging.getLogger(__name__)


class Style(str, Enum):
    PIXEL = "pixel"
    ASCII = "ascii"
    BLOCK = "block"
    BRAILLS = "braills"
    DOTS = "dots"
    CUSTOM = "custom"


PRESETS: dict[Style, Palette] = {
    Style.PIXEL: Palette.from_chars(charsets.PIXEL),
    Style.ASCII: Palette.from_chars(charsets.ASCII),
    Style.BLOCK: Palette.from_chars(charsets.BLOCK),
    Style.BRAILLS: Palette.from_grid(charsets.BRAILLS),
    Style.DOTS: Palette.from_chars(charsets.DOTS),
}


def _custom_palette(chars: str | None, palette_file: str | Path | None) -> Palette:
    if palette_file is not None:
        return Palette.load(palette_file)
    if chars is not None:
        return Palette.from_chars(chars)
    raise PaletteError("The custom style needs --chars or --palette-file")


def resolve_style(
    style: Style | str,
    coloured: bool,
    chars: str | None = None,
    palette_file: str | Path | None = None,
) -> tuple[Palette, ColourMode]:
    """Palette and default colour mode for a named style."""
    style = Style(style)
    if style is not Style.CUSTOM and (chars is not None or palette_file is not None):
        log.warning("--chars and --palette-file only apply to the custom style; using %s", style.value)
    if style is Style.CUSTOM:
        palette = _custom_palette(chars, palette_file)
    elif style is Style.PIXEL and coloured:
        palette = Palette.from_chars(charsets.PIXEL_COLOUR)
    else:
        palette = PRESETS[style]

    if not coloured:
        return palette, ColourMode.NONE
    if style is Style.PIXEL:
        return palette, ColourMode.FG_TOP_BG_BOTTOM
    return palette, ColourMode.AVG_FG


@dataclass(frozen=True)
class RenderConfig:
    palette: Palette
    colour_mode: ColourMode = ColourMode.NONE
    output_format: OutputFormat = OutputFormat.TERMINAL
    width: int | None = None
    height: int | None = None

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "RenderConfig":
        # An explicit colour mode implies colour
        coloured = args.colour or args.colour_mode is not None
        palette, colour_mode = resolve_style(args.style, coloured, args.chars, args.palette_file)
        if args.colour_mode is not None:
            colour_mode = ColourMode(args.colour_mode)
        if args.format is not None:
            output_format = OutputFormat(args.format)
        else:
            output_format = format_for_path(args.output)
        return cls(
            palette=palette,
            colour_mode=colour_mode,
            output_format=output_format,
            width=args.width,
            height=args.height,
        )
