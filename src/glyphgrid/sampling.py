import math

import numpy as np

# ITU-R BT.601 luma weights
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

# Sobel kernels, row-major over the 3x3 neighbourhood
SOBEL_X = np.array([[-1, 0, 1], [-2, 0, 2], [-1, 0, 1]], dtype=np.float64)
SOBEL_Y = np.array([[-1, -2, -1], [0, 0, 0], [1, 2, 1]], dtype=np.float64)

BINARY_THRESHOLD = 128


def to_gray(r: float, g: float, b: float) -> float:
    """Luminance of a single RGB triple."""
    return LUMA_WEIGHTS[0] * r + LUMA_WEIGHTS[1] * g + LUMA_WEIGHTS[2] * b


def grayscale(pixels: np.ndarray) -> np.ndarray:
    """Luminance of every pixel in an (h, w, channels) array. Alpha is ignored.

    Values are stored at float32 precision, so whole grey levels land exactly
    on their integer luma instead of just below it.
    """
    arr = np.asarray(pixels, dtype=np.float64)
    gray = LUMA_WEIGHTS[0] * arr[:, :, 0] + LUMA_WEIGHTS[1] * arr[:, :, 1] + LUMA_WEIGHTS[2] * arr[:, :, 2]
    return gray.astype(np.float32).astype(np.float64)


def gradient_magnitude(gray: np.ndarray, x: int, y: int) -> float:
    """Sobel magnitude at (x, y), clamped to 255.

    Neighbours outside the buffer repeat the nearest edge pixel, so a flat
    region has zero gradient right up to the border.
    """
    h, w = gray.shape
    sx = 0.0
    sy = 0.0
    for j in range(3):
        yy = min(h - 1, max(0, y + j - 1))
        for i in range(3):
            xx = min(w - 1, max(0, x + i - 1))
            value = float(gray[yy, xx])
            sx += value * SOBEL_X[j, i]
            sy += value * SOBEL_Y[j, i]
    return min(255.0, math.hypot(sx, sy))


def gradient_grid(gray: np.ndarray) -> np.ndarray:
    """Sobel magnitude for every pixel at once. Returns an array shaped like gray."""
    h, w = gray.shape
    padded = np.pad(np.asarray(gray, dtype=np.float64), 1, mode="edge")
    sx = np.zeros((h, w))
    sy = np.zeros((h, w))
    for j in range(3):
        for i in range(3):
            window = padded[j : j + h, i : i + w]
            sx += window * SOBEL_X[j, i]
            sy += window * SOBEL_Y[j, i]
    return np.minimum(255.0, np.hypot(sx, sy))


def pick_char(value: float, palette: str) -> str:
    """Map a value in [0, 255] linearly onto the palette."""
    value = min(255.0, max(0.0, value))
    index = math.floor(value / 255 * (len(palette) - 1))
    return palette[max(0, min(len(palette) - 1, index))]


def quantize(values: np.ndarray, palette: str) -> list[str]:
    """Vectorised pick_char over a (rows, cols) array. Returns one string per row."""
    n = len(palette)
    clamped = np.clip(values, 0.0, 255.0)
    indices = np.clip(np.floor(clamped / 255 * (n - 1)).astype(np.intp), 0, n - 1)
    glyphs = np.array(list(palette))
    return ["".join(row) for row in glyphs[indices]]


def threshold(values: np.ndarray) -> list[str]:
    """Two-way split at the midpoint: '1' above BINARY_THRESHOLD, '0' otherwise."""
    bits = np.where(values > BINARY_THRESHOLD, "1", "0")
    return ["".join(row) for row in bits]
