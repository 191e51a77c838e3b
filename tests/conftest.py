import pytest
from PIL import Image

from pixt.palette import Palette


@pytest.fixture
def make_image():
    """Build an RGB image from a list of pixel rows (top row first)."""

    def _make(rows):
        height = len(rows)
        width = len(rows[0]) if rows else 0
        img = Image.new("RGB", (width, height))
        pixels = img.load()
        for y, row in enumerate(rows):
            for x, colour in enumerate(row):
                pixels[x, y] = colour
        return img

    return _make


@pytest.fixture
def braille_grid():
    """5x5 grid whose cells are easy to tell apart at the corners and centre."""
    return Palette.from_grid(
        [
            " ⠁⠉⠓⠛",
            "⠄⠅⠩⠝⠟",
            "⠤⠥⠭⠯⠿",
            "⠴⠵⠽⠿⠿",
            "⠶⠾⠿⠿⠿",
        ]
    )
