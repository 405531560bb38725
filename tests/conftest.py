import numpy as np
import pytest
from PIL import Image


@pytest.fixture
def rng():
    return np.random.default_rng(42)


@pytest.fixture
def noise_image():
    gen = np.random.default_rng(7)
    return Image.fromarray(gen.integers(0, 256, size=(60, 90, 3), dtype=np.uint8))
