import io
import logging
from pathlib import Path
from typing import BinaryIO

from PIL import Image

from pixt.output import ColourMode, OutputFormat, Sink, make_sink
from pixt.palette import Palette
from pixt.sampling import count_cells, sample_pairs

log = logging.getLogger(__name__)


class ImageLoadError(OSError):
    pass


def load_image(path: str | Path) -> Image.Image:
    """Open and fully decode an image, dropping any alpha channel."""
    path = Path(path)
    try:
        with Image.open(path) as image:
            image.load()
            return image.convert("RGB")
    except OSError as exc:
        raise ImageLoadError(f"Cannot decode image {path}: {exc}") from exc


def target_size(
    size: tuple[int, int],
    width: int | None = None,
    height: int | None = None,
    columns: int | None = None,
) -> tuple[int, int]:
    """Pixel size to resize to. One output column per pixel, two pixel rows per line."""
    src_width, src_height = size
    if width is not None and height is not None:
        new_width, new_height = width, height
    elif width is not None:
        new_width, new_height = width, width * src_height // src_width
    elif height is not None:
        new_width, new_height = height * src_width // src_height, height
        if columns is not None and new_width > columns:
            new_width, new_height = columns, columns * src_height // src_width
    elif columns is not None:
        new_width, new_height = columns, columns * src_height // src_width
    else:
        new_width, new_height = src_width, src_height
    return max(new_width, 1), max(new_height, 1)


def fit_image(
    image: Image.Image,
    width: int | None = None,
    height: int | None = None,
    columns: int | None = None,
) -> Image.Image:
    size = target_size(image.size, width, height, columns)
    if size == image.size:
        return image
    log.debug("resizing %dx%d -> %dx%d", *image.size, *size)
    # Pillow's bicubic filter is Catmull-Rom (a = -0.5)
    return image.resize(size, Image.BICUBIC)


def render(image: Image.Image, palette: Palette, sink: Sink, out: BinaryIO) -> int:
    """Stream one image through a sink into a binary writer. Returns the cell count."""
    width, height = image.size
    log.debug("rendering %dx%d image into %d cells", width, height, count_cells(image.size))
    out.write(sink.write_header(width, height))
    cells = 0
    for row in sample_pairs(image, palette):
        for glyph, top, bottom in row:
            out.write(sink.write_cell(glyph, top, bottom))
            cells += 1
        out.write(sink.write_line_end())
    out.write(sink.write_footer())
    return cells


def image_to_text(
    image: Image.Image | str | Path,
    palette: Palette,
    output_format: OutputFormat = OutputFormat.TERMINAL,
    colour_mode: ColourMode = ColourMode.NONE,
    width: int | None = None,
    height: int | None = None,
) -> str:
    if not isinstance(image, Image.Image):
        image = load_image(image)
    image = fit_image(image, width, height)
    sink = make_sink(output_format, colour_mode)
    buffer = io.BytesIO()
    render(image, palette, sink, buffer)
    return buffer.getvalue().decode("utf-8")
