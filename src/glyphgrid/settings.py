from dataclasses import dataclass, field

from glyphgrid.charsets import DEFAULT_MODE, PALETTES
from glyphgrid.text import Effects

EDGE_MODE = "edges"
MODES = (*PALETTES, EDGE_MODE)

DEFAULT_INTENSITY = 45


@dataclass(frozen=True)
class RenderSettings:
    mode: str = DEFAULT_MODE
    invert: bool = False
    effects: Effects = field(default_factory=Effects)
    scramble: bool = False
    intensity: float = DEFAULT_INTENSITY
    ink: tuple[int, int, int] | None = None  # truecolor foreground, None leaves the terminal default
