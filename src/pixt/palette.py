from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import numpy as np

from pixt.colour import Colour, intensities


class PaletteError(ValueError):
    pass


def _bucket(values: np.ndarray, size: int | np.ndarray) -> np.ndarray:
    """Map 0-255 intensities onto `size` equal-width buckets."""
    return np.minimum(values * size // 256, size - 1)


@dataclass(frozen=True)
class Palette:
    """Characters to pick glyphs from, one string per row.

    A single row is a ramp indexed by the combined intensity of both pixels.
    Several rows form a grid: the top pixel picks the column and the bottom
    pixel picks the row.
    """

    rows: tuple[str, ...]

    def __post_init__(self):
        if not self.rows:
            raise PaletteError("Palette has no rows")
        for i, row in enumerate(self.rows):
            if not row:
                raise PaletteError(f"Palette row {i} is empty")
            try:
                row.encode("utf-8")
            except UnicodeEncodeError as exc:
                raise PaletteError(f"Palette row {i} is not valid text: {row!r}") from exc

    @property
    def is_ramp(self) -> bool:
        return len(self.rows) == 1

    @classmethod
    def from_chars(cls, chars: Iterable[str]) -> "Palette":
        return cls(rows=("".join(chars),))

    @classmethod
    def from_grid(cls, rows: Iterable[Iterable[str]]) -> "Palette":
        return cls(rows=tuple("".join(row) for row in rows))

    @classmethod
    def from_lines(cls, text: str) -> "Palette":
        """One row per line, surrounding whitespace trimmed, blank lines dropped."""
        lines = (line.strip() for line in text.splitlines())
        return cls(rows=tuple(line for line in lines if line))

    @classmethod
    def load(cls, path: str | Path) -> "Palette":
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except UnicodeDecodeError as exc:
            raise PaletteError(f"Palette file is not UTF-8: {path}") from exc
        except OSError as exc:
            raise PaletteError(f"Cannot read palette file {path}: {exc}") from exc
        return cls.from_lines(text)

    def glyphs_for_row(self, top_row: np.ndarray, bottom_row: np.ndarray) -> list[str]:
        """Pick one glyph per column for two (width, 3) RGB pixel rows."""
        top = intensities(top_row)
        bottom = intensities(bottom_row)

        if self.is_ramp:
            ramp = self.rows[0]
            combined = (top.astype(np.intp) + bottom) // 2
            return [ramp[i] for i in _bucket(combined, len(ramp)).tolist()]

        # Grid lookups work on the grey level narrowed to 8 bits
        top = top.astype(np.uint8).astype(np.intp)
        bottom = bottom.astype(np.uint8).astype(np.intp)
        row_indices = _bucket(bottom, len(self.rows))
        widths = np.array([len(row) for row in self.rows])[row_indices]
        col_indices = _bucket(top, widths)
        return [self.rows[r][c] for r, c in zip(row_indices.tolist(), col_indices.tolist())]

    def glyph_for(self, top: Colour, bottom: Colour) -> str:
        return self.glyphs_for_row(np.array([top]), np.array([bottom]))[0]
