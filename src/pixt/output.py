"""Output sinks: document framing and per-glyph markup for each output format.

A sink is resolved once per render from a static table keyed by
(OutputFormat, ColourMode), so the per-cell loop never branches on either.
"""

from __future__ import annotations

import html
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from pixt.colour import ANSI_RESET, Colour, ansi_bg, ansi_fg, average, to_hex


class UnsupportedFormatError(NotImplementedError):
    pass


class OutputFormat(str, Enum):
    TEXT = "text"
    TERMINAL = "terminal"
    HTML = "html"
    SVG = "svg"


class ColourMode(str, Enum):
    NONE = "none"
    AVG_FG = "avg-fg"
    AVG_BG = "avg-bg"
    FG_TOP_BG_BOTTOM = "fg-top-bg-bottom"
    BG_TOP_FG_BOTTOM = "bg-top-fg-bottom"


CellWriter = Callable[[str, Colour, Colour], str]

HTML_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
  <head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <style>
    * {{
        color: #fff;
        background-color: #191919;
        font-family: monospace;
    }}
    pre {{
        line-height: {line_height};
        margin: {margin};
        padding: {padding};
        font-size: {font_size}px;
    }}
    </style>
  </head>
  <body>
    <pre>"""

HTML_FOOTER = "    </pre>\n  </body>\n</html>\n"


def _plain(glyph, top, bottom):
    return glyph


def _term_avg_fg(glyph, top, bottom):
    return ansi_fg(average(top, bottom)) + glyph


def _term_avg_bg(glyph, top, bottom):
    return ansi_bg(average(top, bottom)) + glyph


def _term_fg_top_bg_bottom(glyph, top, bottom):
    return ansi_bg(bottom) + ansi_fg(top) + glyph


def _term_bg_top_fg_bottom(glyph, top, bottom):
    return ansi_bg(top) + ansi_fg(bottom) + glyph


def _span(style: str, glyph: str) -> str:
    return f'<span style="{style}">{html.escape(glyph)}</span>'


def _html_plain(glyph, top, bottom):
    return html.escape(glyph)


def _html_avg_fg(glyph, top, bottom):
    return _span(f"color:{to_hex(average(top, bottom))};", glyph)


def _html_avg_bg(glyph, top, bottom):
    return _span(f"background-color:{to_hex(average(top, bottom))};", glyph)


def _html_fg_top_bg_bottom(glyph, top, bottom):
    return _span(f"color:{to_hex(top)};background-color:{to_hex(bottom)};", glyph)


def _html_bg_top_fg_bottom(glyph, top, bottom):
    return _span(f"color:{to_hex(bottom)};background-color:{to_hex(top)};", glyph)


_CELL_WRITERS: dict[tuple[OutputFormat, ColourMode], CellWriter] = {
    **{(OutputFormat.TEXT, mode): _plain for mode in ColourMode},
    (OutputFormat.TERMINAL, ColourMode.NONE): _plain,
    (OutputFormat.TERMINAL, ColourMode.AVG_FG): _term_avg_fg,
    (OutputFormat.TERMINAL, ColourMode.AVG_BG): _term_avg_bg,
    (OutputFormat.TERMINAL, ColourMode.FG_TOP_BG_BOTTOM): _term_fg_top_bg_bottom,
    (OutputFormat.TERMINAL, ColourMode.BG_TOP_FG_BOTTOM): _term_bg_top_fg_bottom,
    (OutputFormat.HTML, ColourMode.NONE): _html_plain,
    (OutputFormat.HTML, ColourMode.AVG_FG): _html_avg_fg,
    (OutputFormat.HTML, ColourMode.AVG_BG): _html_avg_bg,
    (OutputFormat.HTML, ColourMode.FG_TOP_BG_BOTTOM): _html_fg_top_bg_bottom,
    (OutputFormat.HTML, ColourMode.BG_TOP_FG_BOTTOM): _html_bg_top_fg_bottom,
}


def _line_end(output_format: OutputFormat, colour_mode: ColourMode) -> str:
    if output_format is OutputFormat.TERMINAL and colour_mode is not ColourMode.NONE:
        return ANSI_RESET + "\n"
    if output_format is OutputFormat.HTML and colour_mode is not ColourMode.NONE:
        return "<br />\n"
    return "\n"


@dataclass(frozen=True)
class Sink:
    output_format: OutputFormat
    colour_mode: ColourMode
    cell_writer: CellWriter
    line_end: bytes

    def write_header(self, width: int, height: int) -> bytes:
        if self.output_format is not OutputFormat.HTML:
            return b""
        line_height = 1.2 if self.colour_mode is ColourMode.NONE else 0.6
        header = HTML_TEMPLATE.format(line_height=line_height, margin=0, padding=0, font_size=10)
        return header.encode("utf-8")

    def write_cell(self, glyph: str, top: Colour, bottom: Colour) -> bytes:
        return self.cell_writer(glyph, top, bottom).encode("utf-8")

    def write_line_end(self) -> bytes:
        return self.line_end

    def write_footer(self) -> bytes:
        if self.output_format is OutputFormat.HTML:
            return HTML_FOOTER.encode("utf-8")
        return b""


def make_sink(output_format: OutputFormat, colour_mode: ColourMode = ColourMode.NONE) -> Sink:
    """Resolve the sink for a format and colour mode.

    Raises UnsupportedFormatError for combinations with no writer (all SVG).
    """
    output_format = OutputFormat(output_format)
    colour_mode = ColourMode(colour_mode)
    try:
        writer = _CELL_WRITERS[output_format, colour_mode]
    except KeyError:
        raise UnsupportedFormatError(
            f"{output_format.value} output is not supported (colour mode {colour_mode.value})"
        ) from None
    return Sink(
        output_format=output_format,
        colour_mode=colour_mode,
        cell_writer=writer,
        line_end=_line_end(output_format, colour_mode).encode("utf-8"),
    )


def format_for_path(path: str | Path | None) -> OutputFormat:
    if path is None:
        return OutputFormat.TERMINAL
    suffix = Path(path).suffix.lower()
    if suffix in (".html", ".htm"):
        return OutputFormat.HTML
    if suffix == ".svg":
        return OutputFormat.SVG
    return OutputFormat.TERMINAL
