class GlyphGridError(Exception):
    """Base class for rendering and scrambling failures."""


class RenderSurfaceUnavailable(GlyphGridError):
    """The image could not be opened, decoded or resampled."""


class InvalidDimensions(GlyphGridError, ValueError):
    """A grid size, image size or wrap width is not positive."""


def check_dimensions(**sizes: int) -> None:
    for name, value in sizes.items():
        if value < 1:
            raise InvalidDimensions(f"{name} must be >= 1, got {value}")
