import cv2
import numpy as np

from modules.scratch_layers import (
    create_cover_layer,
    create_fallback_background,
    fit_fill,
    load_background,
)


def test_fit_fill_covers_and_crops_center():
    image = np.zeros((100, 100, 3), dtype=np.uint8)
    image[:, 40:60] = 255
    out = fit_fill(image, (200, 100))
    assert out.shape == (100, 200, 3)
    # scaled x2 -> 200x200, center 100 rows kept, stripe now at 80..120
    assert out[50, 100].tolist() == [255, 255, 255]
    assert out[50, 10].tolist() == [0, 0, 0]


def test_fit_fill_downscales_large_image():
    image = np.full((1000, 3000, 3), 7, dtype=np.uint8)
    out = fit_fill(image, (320, 240))
    assert out.shape == (240, 320, 3)
    assert int(out[120, 160, 0]) == 7


def test_cover_gradient_runs_top_left_to_bottom_right():
    cover = create_cover_layer((64, 32), (0, 0, 0), (30, 30, 30))
    assert cover.shape == (32, 64, 3)
    assert cover.dtype == np.uint8
    assert cover[0, 0].tolist() == [0, 0, 0]
    assert cover[31, 63].tolist() == [30, 30, 30]
    assert cover[0, 0, 0] < cover[16, 32, 0] < cover[31, 63, 0]


def test_missing_background_falls_back(tmp_path, caplog):
    out = load_background(str(tmp_path / "nope.jpg"), (160, 90))
    assert out.shape == (90, 160, 3)
    assert out.any()
    assert "not readable" in caplog.text


def test_background_loaded_from_disk(tmp_path):
    path = tmp_path / "bg.png"
    image = np.full((50, 80, 3), (10, 20, 30), dtype=np.uint8)
    assert cv2.imwrite(str(path), image)
    out = load_background(str(path), (160, 100))
    assert out.shape == (100, 160, 3)
    assert out[50, 80].tolist() == [10, 20, 30]


def test_fallback_background_shape():
    bg = create_fallback_background(100, 60)
    assert bg.shape == (60, 100, 3)
    assert bg.dtype == np.uint8
