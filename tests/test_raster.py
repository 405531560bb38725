import numpy as np
import pytest
from PIL import Image

from glyphgrid.errors import InvalidDimensions, RenderSurfaceUnavailable
from glyphgrid.raster import PillowRasterizer


def test_load_normalises_modes():
    raster = PillowRasterizer()
    assert raster.load(Image.new("L", (3, 3))).mode == "RGB"
    assert raster.load(Image.new("LA", (3, 3))).mode == "RGBA"
    assert raster.load(Image.new("P", (3, 3))).mode == "RGB"
    assert raster.load(np.zeros((2, 5, 4), dtype=np.uint8)).size == (5, 2)


def test_load_rejects_empty_image():
    with pytest.raises(InvalidDimensions):
        PillowRasterizer().load(Image.new("RGB", (0, 4)))


def test_load_unreadable_path(tmp_path):
    path = tmp_path / "x.png"
    path.write_text("hello")
    with pytest.raises(RenderSurfaceUnavailable):
        PillowRasterizer().load(path)


def test_resize_exact_size():
    raster = PillowRasterizer()
    image = Image.new("RGB", (40, 30), (1, 2, 3))
    assert raster.resize(image, 7, 3).size == (7, 3)
    same = raster.resize(image, 40, 30)
    assert same is not image
    assert same.tobytes() == image.tobytes()


def test_draw_copies_and_scales_box():
    raster = PillowRasterizer(resample=Image.NEAREST)
    src = Image.new("RGB", (4, 4), (0, 0, 0))
    src.paste((255, 0, 0), (0, 0, 2, 2))
    dest = Image.new("RGB", (6, 6), (0, 0, 255))
    raster.draw(dest, src, (0, 0, 2, 2), (3, 3), size=(3, 3))
    arr = np.asarray(dest)
    assert np.all(arr[3:6, 3:6] == (255, 0, 0))
    assert np.all(arr[0:3, :] == (0, 0, 255))


def test_draw_skips_empty_box():
    raster = PillowRasterizer()
    dest = Image.new("RGB", (2, 2), (9, 9, 9))
    raster.draw(dest, Image.new("RGB", (2, 2)), (0, 0, 0, 2), (0, 0))
    assert np.all(np.asarray(dest) == 9)


def test_array_round_trip_is_writable():
    raster = PillowRasterizer()
    image = Image.new("RGBA", (3, 2), (5, 6, 7, 8))
    arr = raster.to_array(image)
    arr[0, 0] = (1, 1, 1, 1)
    back = raster.from_array(arr)
    assert back.mode == "RGBA"
    assert back.getpixel((0, 0)) == (1, 1, 1, 1)
    assert image.getpixel((0, 0)) == (5, 6, 7, 8)
