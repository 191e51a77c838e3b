import dataclasses

import numpy as np
import pytest

from pixt import charsets
from pixt.palette import Palette, PaletteError

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)
NEAR_WHITE = (254, 254, 254)
MID = (127, 127, 127)


@pytest.mark.parametrize(
    "top, bottom, expected",
    [
        (BLACK, BLACK, " "),
        (WHITE, BLACK, "⠛"),
        (NEAR_WHITE, BLACK, "⠛"),
        (MID, BLACK, "⠉"),
        (BLACK, WHITE, "⠶"),
        (BLACK, NEAR_WHITE, "⠶"),
        (BLACK, MID, "⠤"),
        (WHITE, WHITE, "⠿"),
        (NEAR_WHITE, NEAR_WHITE, "⠿"),
        (MID, MID, "⠭"),
    ],
)
def test_grid_lookup_reference_table(braille_grid, top, bottom, expected):
    assert braille_grid.glyph_for(top, bottom) == expected


def test_grid_top_picks_column_bottom_picks_row():
    grid = Palette.from_grid(["ab", "cd"])
    assert grid.glyph_for(WHITE, BLACK) == "b"
    assert grid.glyph_for(BLACK, WHITE) == "c"


def test_ramp_extremes():
    ramp = Palette.from_chars(charsets.ASCII)
    assert ramp.glyph_for(BLACK, BLACK) == " "
    assert ramp.glyph_for(WHITE, WHITE) == "@"


def test_ramp_uses_combined_intensity():
    ramp = Palette.from_chars(" #")
    # (255 + 0) // 2 = 127 stays in the lower half, (255 + 1) // 2 = 128 does not
    assert ramp.glyph_for(WHITE, BLACK) == " "
    assert ramp.glyph_for(WHITE, (1, 1, 1)) == "#"
    assert ramp.glyph_for(BLACK, WHITE) == " "


def test_ramp_bucket_boundaries():
    ramp = Palette.from_chars("0123")
    # 64 intensity levels per bucket
    assert ramp.glyph_for((63, 63, 63), (63, 63, 63)) == "0"
    assert ramp.glyph_for((64, 64, 64), (64, 64, 64)) == "1"
    assert ramp.glyph_for((191, 191, 191), (191, 191, 191)) == "2"
    assert ramp.glyph_for((192, 192, 192), (192, 192, 192)) == "3"


def test_intensity_truncates():
    ramp = Palette.from_chars(" #")
    # (128 + 128 + 129) // 3 = 128 but (127 + 128 + 128) // 3 = 127
    assert ramp.glyph_for((128, 128, 129), (128, 128, 129)) == "#"
    assert ramp.glyph_for((127, 128, 128), (127, 128, 128)) == " "


def test_single_glyph_ramp_always_returns_it():
    ramp = Palette.from_chars(charsets.PIXEL_COLOUR)
    assert ramp.glyph_for(BLACK, WHITE) == "▀"
    assert ramp.glyph_for(WHITE, WHITE) == "▀"


def test_row_lookup_matches_single_lookup(braille_grid):
    rng = np.random.default_rng(7)
    top = rng.integers(0, 256, size=(32, 3), dtype=np.uint8)
    bottom = rng.integers(0, 256, size=(32, 3), dtype=np.uint8)
    for palette in (braille_grid, Palette.from_chars(charsets.ASCII)):
        row = palette.glyphs_for_row(top, bottom)
        singles = [palette.glyph_for(tuple(t), tuple(b)) for t, b in zip(top.tolist(), bottom.tolist())]
        assert row == singles


def test_uneven_rows_use_selected_row_width():
    palette = Palette.from_lines("ab\nwxyz")
    assert palette.glyph_for(WHITE, BLACK) == "b"
    assert palette.glyph_for(WHITE, WHITE) == "z"
    assert palette.glyph_for(MID, WHITE) == "x"


def test_from_lines_trims_and_drops_blank_lines():
    palette = Palette.from_lines("  ab  \n\n\tcd\n   \n")
    assert palette.rows == ("ab", "cd")
    assert not palette.is_ramp


def test_from_chars_is_ramp():
    palette = Palette.from_chars([" ", ".", "#"])
    assert palette.rows == (" .#",)
    assert palette.is_ramp


def test_load(tmp_path):
    path = tmp_path / "palette.txt"
    path.write_text(" ⠁\n⠄⠅\n", encoding="utf-8")
    assert Palette.load(path).rows == ("⠁", "⠄⠅")


def test_load_keeps_interior_spaces(tmp_path):
    path = tmp_path / "palette.txt"
    path.write_text("a b\n", encoding="utf-8")
    assert Palette.load(path).rows == ("a b",)


def test_load_rejects_non_utf8(tmp_path):
    path = tmp_path / "palette.txt"
    path.write_bytes(b"\xff\xfe\x00abc")
    with pytest.raises(PaletteError, match="not UTF-8"):
        Palette.load(path)


@pytest.mark.parametrize(
    "build",
    [
        lambda: Palette.from_chars(""),
        lambda: Palette.from_grid([]),
        lambda: Palette.from_grid(["ab", ""]),
        lambda: Palette.from_lines("\n   \n"),
    ],
)
def test_empty_palettes_rejected(build):
    with pytest.raises(PaletteError):
        build()


def test_undecodable_chars_rejected():
    # Lone surrogates are what undecodable argv bytes turn into
    with pytest.raises(PaletteError, match="not valid text"):
        Palette.from_chars("a\udcff")


def test_palette_error_is_value_error():
    with pytest.raises(ValueError):
        Palette.from_chars("")


def test_palette_is_immutable():
    palette = Palette.from_chars("ab")
    with pytest.raises(dataclasses.FrozenInstanceError):
        palette.rows = ("cd",)


def test_load_missing_file(tmp_path):
    with pytest.raises(PaletteError, match="Cannot read palette file"):
        Palette.load(tmp_path / "missing.txt")


def test_load_directory(tmp_path):
    with pytest.raises(PaletteError, match="Cannot read palette file"):
        Palette.load(tmp_path)
