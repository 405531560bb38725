import os
import sys

MIN_COLS = 20
MIN_FIT = 30

# Terminal cells are roughly twice as tall as they are wide
CHAR_ASPECT = 2.0


def terminal_size(stream=None, fallback: tuple[int, int] = (80, 24)) -> tuple[int, int]:
    """(columns, lines) of the terminal behind stream (stdout by default).

    Pipes, captured streams and detached terminals report the fallback.
    """
    stream = stream or sys.stdout
    if not stream.isatty():
        return fallback
    try:
        size = os.get_terminal_size(stream.fileno())
    except (OSError, ValueError):
        return fallback
    return size.columns, size.lines


def allowed_cols(max_columns: int) -> int:
    """Widest line that fits an area max_columns wide, keeping one spare column."""
    return max(MIN_COLS, max_columns - 1)


def fit_dims(
    image_width: int,
    image_height: int,
    max_columns: int,
    max_lines: int,
    char_aspect: float = CHAR_ASPECT,
) -> tuple[int, int]:
    """Pick (cols, rows) that keep the image's aspect ratio inside the given area.

    Both dimensions are kept at or above MIN_FIT, so very small areas still
    produce a readable grid (the caller wraps or scrolls the overflow).
    """
    max_cols = allowed_cols(max_columns)
    max_rows = max(MIN_COLS, max_lines - 1)

    img_aspect = image_height / image_width
    desired_rows = max(MIN_FIT, round(max_cols * img_aspect / char_aspect))

    rows = min(desired_rows, max_rows)
    cols = min(max_cols, max(MIN_FIT, round(rows / img_aspect * char_aspect)))

    cols = max(MIN_FIT, min(cols, max_cols - 1))
    rows = max(MIN_FIT, min(rows, max_rows - 1))
    return cols, rows
