from __future__ import annotations

import re
from dataclasses import dataclass

import numpy as np

from glyphgrid.errors import check_dimensions

MAX_JITTER = 2

_INK = re.compile(r"[^ ]")


@dataclass(frozen=True)
class Effects:
    scanlines: bool = False
    jitter: bool = False


def hard_wrap(text: str, max_cols: int) -> str:
    """Cut every line longer than max_cols into max_cols-wide chunks."""
    check_dimensions(max_cols=max_cols)
    out = []
    for line in text.split("\n"):
        if len(line) <= max_cols:
            out.append(line)
            continue
        out.extend(line[i : i + max_cols] for i in range(0, len(line), max_cols))
    return "\n".join(out)


def scanline(line: str) -> str:
    return _INK.sub(".", line)


def jitter_line(line: str, shift: int) -> str:
    """Shift a line horizontally by shift columns, keeping its length."""
    if shift > 0:
        return (" " * shift + line)[: len(line)]
    if shift < 0:
        return line[-shift:].ljust(len(line))
    return line


def apply_effects(text: str, effects: Effects, rng: np.random.Generator | None = None) -> str:
    """Apply scanline thinning, then row jitter.

    Scanlines replace every non-space glyph on odd rows with '.'. Jitter moves
    each row by a random shift in [-MAX_JITTER, MAX_JITTER] and needs rng.
    """
    lines = text.split("\n")
    if effects.scanlines:
        lines = [scanline(line) if i % 2 == 1 else line for i, line in enumerate(lines)]
    if effects.jitter:
        if rng is None:
            raise ValueError("jitter effect needs a random generator")
        shifts = rng.integers(-MAX_JITTER, MAX_JITTER + 1, size=len(lines))
        lines = [jitter_line(line, int(shift)) for line, shift in zip(lines, shifts)]
    return "\n".join(lines)
