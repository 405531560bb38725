import logging

logger = logging.getLogger(__name__)

# Brightness ramps, densest glyph first
ASCII_DENSE = "@#S%?*+;:,."
ASCII_SPARSE = "@%#*+=-:. "

# Block elements: full, dark/medium/light shade, blank
BLOCKS = "█▓▒░ "

BINARY = "01"

# Gradient ramps for edge mode, one per invert setting
EDGES = "@%#*+=-:. "
EDGES_INVERTED = " .:-=+*#%@"

PALETTES = {
    "ascii-dense": ASCII_DENSE,
    "ascii-sparse": ASCII_SPARSE,
    "blocks": BLOCKS,
    "binary": BINARY,
}

DEFAULT_MODE = "ascii-dense"


def palette_for(mode: str) -> str:
    """Return the palette for a mode name, falling back to the dense ramp."""
    palette = PALETTES.get(mode)
    if palette is None:
        logger.debug("Unknown mode %r, using %s palette", mode, DEFAULT_MODE)
        return PALETTES[DEFAULT_MODE]
    return palette


def edge_palette(invert: bool) -> str:
    return EDGES_INVERTED if invert else EDGES
