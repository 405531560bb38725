from __future__ import annotations

import logging
import re

import numpy as np

from glyphgrid.charsets import DEFAULT_MODE, edge_palette, palette_for
from glyphgrid.errors import RenderSurfaceUnavailable, check_dimensions
from glyphgrid.raster import Backend, ImageSource, PillowRasterizer, Rasterizer
from glyphgrid.sampling import gradient_grid, grayscale, quantize, threshold
from glyphgrid.scramble import scramble
from glyphgrid.settings import EDGE_MODE, RenderSettings
from glyphgrid.text import apply_effects, hard_wrap

logger = logging.getLogger(__name__)

RENDER_UNAVAILABLE = "[Error: render surface unavailable]"

_HEX_COLOUR = re.compile(r"#?([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})([0-9A-Fa-f]{2})")


def parse_ink(value: str) -> tuple[int, int, int]:
    """Parse '#RRGGBB' (or 'RRGGBB') into an RGB tuple."""
    match = _HEX_COLOUR.fullmatch(value.strip())
    if match is None:
        raise ValueError(f"Not a hex colour: {value!r}")
    r, g, b = (int(part, 16) for part in match.groups())
    return r, g, b


def colourize(text: str, ink: tuple[int, int, int]) -> str:
    """Wrap each line in an ANSI truecolor foreground escape."""
    r, g, b = ink
    return "\n".join(f"\033[38;2;{r};{g};{b}m{line}\033[0m" for line in text.split("\n"))


def _render_lines(pixels: np.ndarray, mode: str, invert: bool) -> list[str]:
    gray = grayscale(pixels)
    if mode == EDGE_MODE:
        magnitude = gradient_grid(gray)
        values = 255 - magnitude if invert else magnitude
        return quantize(values, edge_palette(invert))

    # Dark pixels carry the most ink unless inverted
    values = np.clip(gray if invert else 255 - gray, 0.0, 255.0)
    if mode == "binary":
        return threshold(values)
    return quantize(values, palette_for(mode))


def render(
    image: ImageSource,
    cols: int,
    rows: int,
    mode: str = DEFAULT_MODE,
    invert: bool = False,
    rasterizer: Rasterizer | None = None,
) -> str:
    """Render an image as a cols x rows character grid.

    Returns RENDER_UNAVAILABLE instead of a grid when the image cannot be
    read or resampled.
    """
    check_dimensions(cols=cols, rows=rows)
    rasterizer = rasterizer or PillowRasterizer()
    try:
        source = rasterizer.load(image)
        # Resampling RGBA premultiplies alpha, which would shift the colour channels
        opaque = source.convert("RGB") if source.mode == "RGBA" else source
        small = rasterizer.resize(opaque, cols, rows)
    except RenderSurfaceUnavailable as e:
        logger.error("Render failed: %s", e)
        return RENDER_UNAVAILABLE

    logger.debug("Rendering %dx%d image as %dx%d %s grid", source.width, source.height, cols, rows, mode)
    return "\n".join(_render_lines(np.asarray(small), mode, invert))


def convert(
    image: ImageSource,
    settings: RenderSettings,
    cols: int,
    rows: int,
    wrap: int | None = None,
    rng: np.random.Generator | None = None,
    rasterizer: Backend | None = None,
) -> str:
    """Full pipeline: optional scramble, render, wrap, effects and ink colour."""
    check_dimensions(cols=cols, rows=rows)
    rasterizer = rasterizer or PillowRasterizer()
    if rng is None:
        rng = np.random.default_rng()

    if settings.scramble:
        try:
            image = scramble(image, settings.intensity, rng, rasterizer)
        except RenderSurfaceUnavailable as e:
            logger.error("Scramble failed: %s", e)
            return RENDER_UNAVAILABLE

    text = render(image, cols, rows, settings.mode, settings.invert, rasterizer)
    if text == RENDER_UNAVAILABLE:
        return text
    if wrap is not None:
        text = hard_wrap(text, wrap)
    text = apply_effects(text, settings.effects, rng)
    if settings.ink is not None:
        text = colourize(text, settings.ink)
    return text
