from __future__ import annotations

from pathlib import Path
from typing import Protocol, Union

import numpy as np
from PIL import Image

from glyphgrid.errors import RenderSurfaceUnavailable, check_dimensions

ImageSource = Union[Image.Image, np.ndarray, str, Path]


class Rasterizer(Protocol):
    def load(self, source: ImageSource) -> Image.Image:
        """Open a source as an RGB or RGBA image."""
        ...

    def resize(self, image: Image.Image, width: int, height: int) -> Image.Image:
        """Resample an image to exactly width x height pixels."""
        ...

    def draw(
        self,
        dest: Image.Image,
        src: Image.Image,
        box: tuple[int, int, int, int],
        position: tuple[int, int],
        size: tuple[int, int] | None = None,
    ) -> None:
        """Copy the (x, y, w, h) box of src onto dest at position, scaled to size if given."""
        ...


class PixelAccess(Protocol):
    def to_array(self, image: Image.Image) -> np.ndarray:
        """Return a writable (h, w, channels) uint8 copy of the image."""
        ...

    def from_array(self, array: np.ndarray) -> Image.Image:
        """Build an image from an (h, w, 3|4) uint8 array."""
        ...


class Backend(Rasterizer, PixelAccess, Protocol):
    """Both capabilities, as needed by the scrambler."""


class PillowRasterizer:
    """Rasterizer and pixel access backed by Pillow."""

    def __init__(self, resample: int = Image.BILINEAR):
        self.resample = resample

    def load(self, source: ImageSource) -> Image.Image:
        try:
            if isinstance(source, np.ndarray):
                image = Image.fromarray(np.ascontiguousarray(source, dtype=np.uint8))
            elif isinstance(source, Image.Image):
                image = source
            else:
                image = Image.open(source)
            if image.mode not in ("RGB", "RGBA"):
                image = image.convert("RGBA" if "A" in image.getbands() else "RGB")
            else:
                image.load()
        except (OSError, ValueError, TypeError) as e:
            raise RenderSurfaceUnavailable(f"Cannot read image: {e}") from e
        check_dimensions(width=image.width, height=image.height)
        return image

    def resize(self, image: Image.Image, width: int, height: int) -> Image.Image:
        if image.size == (width, height):
            return image.copy()
        try:
            return image.resize((width, height), self.resample)
        except (OSError, ValueError) as e:
            raise RenderSurfaceUnavailable(f"Cannot resample image to {width}x{height}: {e}") from e

    def draw(self, dest, src, box, position, size=None):
        x, y, w, h = box
        if w < 1 or h < 1:
            return
        tile = src.crop((x, y, x + w, y + h))
        if size is not None and size != (w, h):
            if size[0] < 1 or size[1] < 1:
                return
            tile = tile.resize(size, self.resample)
        dest.paste(tile, position)

    def to_array(self, image: Image.Image) -> np.ndarray:
        return np.array(image, dtype=np.uint8)

    def from_array(self, array: np.ndarray) -> Image.Image:
        return Image.fromarray(np.ascontiguousarray(array, dtype=np.uint8))
