from collections.abc import Iterator
from typing import NamedTuple

import numpy as np
from PIL import Image

from pixt.colour import Colour
from pixt.palette import Palette


class GlyphCell(NamedTuple):
    glyph: str
    top: Colour
    bottom: Colour


def _sample_row(top_row: np.ndarray, bottom_row: np.ndarray, palette: Palette) -> Iterator[GlyphCell]:
    glyphs = palette.glyphs_for_row(top_row, bottom_row)
    for glyph, top, bottom in zip(glyphs, top_row.tolist(), bottom_row.tolist()):
        yield GlyphCell(glyph, tuple(top), tuple(bottom))


def sample_pairs(image: Image.Image, palette: Palette) -> Iterator[Iterator[GlyphCell]]:
    """Walk an image two pixel rows at a time, yielding one row of cells per pair.

    Row y is the top pixel and row y + 1 the bottom one. A trailing unpaired
    row (odd height) is never rendered, so the total is width * (height // 2).
    """
    pixels = np.asarray(image.convert("RGB"), dtype=np.uint8)
    height = pixels.shape[0]
    for y in range(0, height - 1, 2):
        yield _sample_row(pixels[y], pixels[y + 1], palette)


def count_cells(size: tuple[int, int]) -> int:
    """Number of glyph cells an image of (width, height) renders to."""
    width, height = size
    return width * (height // 2)
