import argparse
import logging
import sys
from pathlib import Path

import numpy as np
from PIL import Image

from glyphgrid.charsets import DEFAULT_MODE
from glyphgrid.converter import RENDER_UNAVAILABLE, convert, parse_ink
from glyphgrid.errors import InvalidDimensions
from glyphgrid.layout import CHAR_ASPECT, allowed_cols, fit_dims, terminal_size
from glyphgrid.settings import DEFAULT_INTENSITY, MODES, RenderSettings
from glyphgrid.text import Effects

logger = logging.getLogger("glyphgrid")


def setup_logging(debug: bool) -> None:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.handlers[:] = [handler]
    logger.setLevel(logging.DEBUG if debug else logging.WARNING)
    logger.propagate = False


def _ink(value: str) -> tuple[int, int, int]:
    try:
        return parse_ink(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Render an image as a grid of text characters")
    parser.add_argument("image", help="Path to input image")
    parser.add_argument("-W", "--cols", type=int, default=None, help="Grid width in characters (default: fit terminal)")
    parser.add_argument("-H", "--rows", type=int, default=None, help="Grid height in characters (default: keep aspect)")
    parser.add_argument(
        "-m", "--mode", default=DEFAULT_MODE, choices=MODES, help=f"Palette or edge mode (default: {DEFAULT_MODE})"
    )
    parser.add_argument("-i", "--invert", action="store_true", default=False, help="Invert the brightness mapping")
    parser.add_argument("--scanlines", action="store_true", default=False, help="Thin every other row to dots")
    parser.add_argument("--jitter", action="store_true", default=False, help="Shift rows randomly by up to 2 columns")
    parser.add_argument(
        "--scramble", action="store_true", default=False, help="Block-shuffle the image before rendering"
    )
    parser.add_argument(
        "--intensity",
        type=float,
        default=DEFAULT_INTENSITY,
        help=f"Scramble intensity, 0-100 (default: {DEFAULT_INTENSITY})",
    )
    parser.add_argument("--wrap", type=int, default=None, help="Hard-wrap lines to this many columns")
    parser.add_argument("--ink", type=_ink, default=None, help="Foreground colour as #RRGGBB (truecolor ANSI)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for scramble and jitter randomness")
    parser.add_argument("--debug", action="store_true", default=False, help="Log debug messages to stderr")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.debug)

    image_path = Path(args.image)
    if not image_path.exists():
        print(f"File not found: {image_path}", file=sys.stderr)
        sys.exit(1)

    term_cols, term_lines = terminal_size()
    cols, rows = args.cols, args.rows
    if cols is None or rows is None:
        try:
            with Image.open(image_path) as img:
                width, height = img.size
        except OSError as e:
            print(f"Cannot read image: {e}", file=sys.stderr)
            sys.exit(1)
        if cols is None and rows is None:
            cols, rows = fit_dims(width, height, term_cols, term_lines)
        elif rows is None:
            rows = max(1, round(cols * height / width / CHAR_ASPECT))
        else:
            cols = max(1, round(rows * width / height * CHAR_ASPECT))

    settings = RenderSettings(
        mode=args.mode,
        invert=args.invert,
        effects=Effects(scanlines=args.scanlines, jitter=args.jitter),
        scramble=args.scramble,
        intensity=args.intensity,
        ink=args.ink,
    )
    wrap = args.wrap
    if wrap is None and args.cols is None:
        wrap = allowed_cols(term_cols)
    logger.debug("Grid %dx%d, wrap=%s, settings=%s", cols, rows, wrap, settings)

    try:
        text = convert(image_path, settings, cols, rows, wrap=wrap, rng=np.random.default_rng(args.seed))
    except InvalidDimensions as e:
        print(f"Invalid size: {e}", file=sys.stderr)
        sys.exit(1)
    if text == RENDER_UNAVAILABLE:
        print(text, file=sys.stderr)
        sys.exit(1)
    print(text)
