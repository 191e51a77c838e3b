import numpy as np

Colour = tuple[int, int, int]

ANSI_RESET = "\033[0m"


def intensity(colour: Colour) -> int:
    """Unweighted grey level of one pixel."""
    r, g, b = colour
    return (r + g + b) // 3


def intensities(pixels: np.ndarray) -> np.ndarray:
    """Grey level of every pixel in an (..., 3) array, as uint16."""
    return pixels.astype(np.uint16).sum(axis=-1, dtype=np.uint16) // 3


def average(c1: Colour, c2: Colour) -> Colour:
    return ((c1[0] + c2[0]) // 2, (c1[1] + c2[1]) // 2, (c1[2] + c2[2]) // 2)


def to_hex(colour: Colour) -> str:
    r, g, b = colour
    return f"#{r:02X}{g:02X}{b:02X}"


def ansi_fg(colour: Colour) -> str:
    r, g, b = colour
    return f"\033[38;2;{r};{g};{b}m"


def ansi_bg(colour: Colour) -> str:
    r, g, b = colour
    return f"\033[48;2;{r};{g};{b}m"
