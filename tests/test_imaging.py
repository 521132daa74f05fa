import numpy as np
import pytest

from yoloview.geometry import Box
from yoloview.imaging import (
    blob_from_image,
    draw_box,
    draw_label,
    pad_to_square,
    resize_bilinear,
)


def _frame(rows, cols, value=0):
    return np.full((rows, cols, 3), value, dtype=np.uint8)


def test_pad_wide_frame():
    frame = _frame(4, 6, 7)
    square = pad_to_square(frame)
    assert square.shape == (6, 6, 3)
    assert np.array_equal(square[:4, :6], frame)
    assert not square[4:].any()


def test_pad_tall_frame():
    frame = _frame(5, 2, 9)
    square = pad_to_square(frame)
    assert square.shape == (5, 5, 3)
    assert np.array_equal(square[:, :2], frame)
    assert not square[:, 2:].any()


def test_resize_same_size_is_identity():
    rng = np.random.default_rng(0)
    image = rng.integers(0, 256, size=(5, 7, 3), dtype=np.uint8)
    assert np.array_equal(resize_bilinear(image, 7, 5), image)


def test_resize_constant_image_stays_constant():
    image = _frame(3, 4, 42)
    out = resize_bilinear(image, 10, 8)
    assert out.shape == (8, 10, 3)
    assert out.dtype == np.uint8
    assert (out == 42).all()


def test_resize_float_range_preserved():
    image = np.array([[0.0, 1.0], [1.0, 0.0]], dtype=np.float32)
    out = resize_bilinear(image, 6, 6)
    assert out.shape == (6, 6)
    assert out.min() >= 0.0 and out.max() <= 1.0


def test_resize_rejects_bad_size():
    with pytest.raises(ValueError):
        resize_bilinear(_frame(2, 2), 0, 3)


def test_blob_layout_and_channel_swap():
    frame = _frame(4, 4)
    frame[..., 0] = 255
    blob = blob_from_image(frame, 1 / 255.0, 4, 4, True)
    assert blob.shape == (1, 3, 4, 4)
    assert blob.dtype == np.float32
    assert np.allclose(blob[0, 2], 1.0)
    assert np.allclose(blob[0, :2], 0.0)


def test_blob_without_swap_and_resize():
    frame = _frame(2, 2)
    frame[..., 0] = 255
    blob = blob_from_image(frame, 1 / 255.0, 8, 6, False)
    assert blob.shape == (1, 3, 6, 8)
    assert np.allclose(blob[0, 0], 1.0)


def test_draw_box_filled():
    frame = _frame(10, 10)
    draw_box(frame, Box(2, 3, 4, 5), (1, 2, 3), -1)
    assert (frame[3:8, 2:6] == (1, 2, 3)).all()
    assert not frame[:3].any()
    assert not frame[:, 6:].any()


def test_draw_box_outline():
    frame = _frame(10, 10)
    draw_box(frame, Box(2, 2, 5, 5), (0, 0, 200), 1)
    assert tuple(frame[2, 2]) == (0, 0, 200)
    assert tuple(frame[6, 6]) == (0, 0, 200)
    assert not frame[3:6, 3:6].any()
    assert not frame[7:].any()


def test_draw_box_clipped_to_frame():
    frame = _frame(5, 5)
    draw_box(frame, Box(-3, -3, 20, 20), (9, 9, 9), -1)
    assert (frame == 9).all()


def test_draw_box_zero_thickness_rejected():
    with pytest.raises(ValueError):
        draw_box(_frame(5, 5), Box(0, 0, 2, 2), (1, 1, 1), 0)


def test_draw_label_bar_and_text():
    frame = _frame(60, 80)
    color = (0, 0, 200)
    draw_label(frame, Box(5, 30, 60, 20), "cat", color)
    bar = frame[10:31, 5:66]
    is_color = (bar == color).all(axis=2)
    is_white = (bar == 255).all(axis=2)
    assert is_color.any()
    assert is_white.any()
    assert not frame[35:].any()
    assert not frame[:10].any()


def test_draw_label_requires_color_frame():
    with pytest.raises(ValueError):
        draw_label(np.zeros((10, 10), dtype=np.uint8), Box(0, 5, 3, 3), "x", (1, 1, 1))