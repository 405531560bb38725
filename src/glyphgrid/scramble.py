from __future__ import annotations

import logging
import math
from typing import NamedTuple

import numpy as np
from PIL import Image

from glyphgrid.errors import check_dimensions
from glyphgrid.raster import Backend, ImageSource, PillowRasterizer

logger = logging.getLogger(__name__)

MIN_CELLS = 8
BASE_CELLS = 12
CELL_RANGE = 22
SWAP_PROBABILITY = 0.4
MAX_ROW_SHIFT = 2
NOISE_AMPLITUDE = 18


class Block(NamedTuple):
    sx: int
    sy: int
    sw: int
    sh: int


def cells_for_intensity(intensity: float) -> int:
    """Tiles per side for an intensity in [0, 100]: 12 at 0 up to 34 at 100."""
    intensity = min(100.0, max(0.0, intensity))
    # Round half up, not to even
    return max(MIN_CELLS, math.floor(BASE_CELLS + intensity / 100 * CELL_RANGE + 0.5))


def block_grid(width: int, height: int, cells: int) -> list[Block]:
    """Row-major cells x cells tiling; the last column and row take the remainder."""
    check_dimensions(width=width, height=height, cells=cells)
    cw = width // cells
    ch = height // cells
    blocks = []
    for y in range(cells):
        for x in range(cells):
            blocks.append(
                Block(
                    sx=x * cw,
                    sy=y * ch,
                    sw=width - x * cw if x == cells - 1 else cw,
                    sh=height - y * ch if y == cells - 1 else ch,
                )
            )
    return blocks


def shuffle_blocks(blocks: list[Block], rng: np.random.Generator) -> list[Block]:
    """Partial Fisher-Yates: each position from the end swaps only with probability 0.4.

    Leaves most of the grid in place, so the result reads as "mostly shuffled"
    rather than a uniform permutation.
    """
    out = list(blocks)
    n = len(out)
    for i in range(n - 1, 0, -1):
        j = int(rng.integers(n)) if rng.random() < SWAP_PROBABILITY else i
        out[i], out[j] = out[j], out[i]
    return out


def row_offset(rng: np.random.Generator) -> int:
    shift = min(MAX_ROW_SHIFT, max(-MAX_ROW_SHIFT, (rng.random() * 2 - 1) * MAX_ROW_SHIFT))
    return int(shift)


def jitter_rows(pixels: np.ndarray, rng: np.random.Generator) -> None:
    """Redraw every even row at a small horizontal offset, in place.

    Pixels pushed past the edge are dropped; the uncovered edge keeps whatever
    the row held before.
    """
    width = pixels.shape[1]
    for y in range(0, pixels.shape[0], 2):
        offset = row_offset(rng)
        if offset == 0 or abs(offset) >= width:
            continue
        row = pixels[y].copy()
        if offset > 0:
            pixels[y, offset:] = row[: width - offset]
        else:
            pixels[y, : width + offset] = row[-offset:]


def add_noise(pixels: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """Add one uniform offset in [-9, 9) per pixel to its R, G and B channels."""
    h, w = pixels.shape[:2]
    noise = (rng.random((h, w, 1)) - 0.5) * NOISE_AMPLITUDE
    out = pixels.copy()
    rgb = pixels[:, :, :3].astype(np.float64) + noise
    out[:, :, :3] = np.clip(np.rint(rgb), 0, 255).astype(np.uint8)
    return out


def scramble(
    image: ImageSource,
    intensity: float,
    rng: np.random.Generator,
    rasterizer: Backend | None = None,
) -> Image.Image:
    """Block-shuffle an image, jitter its even rows and add colour noise.

    Returns a new image with the same size and mode as the (RGB/RGBA) source.
    """
    rasterizer = rasterizer or PillowRasterizer()
    source = rasterizer.load(image)
    width, height = source.size
    cells = cells_for_intensity(intensity)
    logger.debug("Scrambling %dx%d image into %dx%d blocks", width, height, cells, cells)

    slots = block_grid(width, height, cells)
    shuffled = shuffle_blocks(slots, rng)

    canvas = source.copy()
    for slot, block in zip(slots, shuffled):
        rasterizer.draw(canvas, source, block, (slot.sx, slot.sy), size=(slot.sw, slot.sh))

    pixels = rasterizer.to_array(canvas)
    jitter_rows(pixels, rng)
    return rasterizer.from_array(add_noise(pixels, rng))
