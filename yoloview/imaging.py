"""Image helpers: padding, resizing, network blobs and drawing."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from .geometry import Box

LABEL_BAR_HEIGHT = 20
TEXT_COLOR = (255, 255, 255)


def pad_to_square(frame: np.ndarray) -> np.ndarray:
    """Place ``frame`` in the top-left corner of a black square image."""
    frame = np.asarray(frame)
    if frame.ndim < 2:
        raise ValueError("frame must have at least two dimensions")
    rows, cols = frame.shape[:2]
    side = max(rows, cols)
    square = np.zeros((side, side) + frame.shape[2:], dtype=frame.dtype)
    square[:rows, :cols] = frame
    return square


def _axis_weights(src_len: int, dst_len: int):
    coords = (np.arange(dst_len) + 0.5) * (src_len / dst_len) - 0.5
    i0 = np.floor(coords).astype(np.intp)
    frac = coords - i0
    below = i0 < 0
    frac[below] = 0.0
    i0[below] = 0
    above = i0 >= src_len - 1
    frac[above] = 0.0
    i0[above] = src_len - 1
    i1 = np.minimum(i0 + 1, src_len - 1)
    return i0, i1, frac


def resize_bilinear(image: np.ndarray, width: int, height: int) -> np.ndarray:
    """Resize with half-pixel-centred bilinear interpolation."""
    if width <= 0 or height <= 0:
        raise ValueError("target size must be positive")
    image = np.asarray(image)
    if image.ndim < 2 or image.shape[0] == 0 or image.shape[1] == 0:
        raise ValueError("image must be a non-empty 2-D or 3-D array")
    src = image.astype(np.float64)
    y0, y1, fy = _axis_weights(image.shape[0], height)
    x0, x1, fx = _axis_weights(image.shape[1], width)
    extra = (1,) * (image.ndim - 2)
    fy = fy.reshape((-1, 1) + extra)
    fx = fx.reshape((1, -1) + extra)

    top = src[y0][:, x0] * (1 - fx) + src[y0][:, x1] * fx
    bottom = src[y1][:, x0] * (1 - fx) + src[y1][:, x1] * fx
    out = top * (1 - fy) + bottom * fy

    if np.issubdtype(image.dtype, np.integer):
        info = np.iinfo(image.dtype)
        return np.clip(np.rint(out), info.min, info.max).astype(image.dtype)
    return out.astype(image.dtype)


def blob_from_image(
    image: np.ndarray, scale: float, width: int, height: int, swap_rb: bool
) -> np.ndarray:
    """Turn an HxWx3 image into a scaled 1x3xHxW float32 tensor."""
    image = np.asarray(image)
    if image.ndim != 3 or image.shape[2] != 3:
        raise ValueError("image must be H x W x 3")
    if image.shape[:2] != (height, width):
        image = resize_bilinear(image, width, height)
    data = image.astype(np.float32)
    if swap_rb:
        data = data[:, :, ::-1]
    data = data * np.float32(scale)
    return np.ascontiguousarray(data.transpose(2, 0, 1)[np.newaxis])


def _fill(frame: np.ndarray, x0: int, y0: int, x1: int, y1: int, color) -> None:
    rows, cols = frame.shape[:2]
    xa, xb = max(x0, 0), min(x1, cols - 1)
    ya, yb = max(y0, 0), min(y1, rows - 1)
    if xa > xb or ya > yb:
        return
    channels = frame.shape[2] if frame.ndim == 3 else 1
    value = color[:channels] if channels > 1 else color[0]
    frame[ya : yb + 1, xa : xb + 1] = value


def _draw_rect(
    frame: np.ndarray, x1: int, y1: int, x2: int, y2: int, color, thickness: int
) -> None:
    if thickness == 0:
        raise ValueError("thickness must not be zero")
    x1, x2 = min(x1, x2), max(x1, x2)
    y1, y2 = min(y1, y2), max(y1, y2)
    if thickness < 0:
        _fill(frame, x1, y1, x2, y2, color)
        return
    lo = -(thickness // 2)
    hi = (thickness - 1) // 2
    _fill(frame, x1 + lo, y1 + lo, x2 + hi, y1 + hi, color)
    _fill(frame, x1 + lo, y2 + lo, x2 + hi, y2 + hi, color)
    _fill(frame, x1 + lo, y1 + lo, x1 + hi, y2 + hi, color)
    _fill(frame, x2 + lo, y1 + lo, x2 + hi, y2 + hi, color)


def draw_box(frame: np.ndarray, box: Box, color: Sequence[int], thickness: int) -> None:
    """Draw ``box`` onto ``frame`` in place; negative thickness fills it."""
    _draw_rect(
        frame,
        box.x,
        box.y,
        box.x + box.width - 1,
        box.y + box.height - 1,
        tuple(color),
        thickness,
    )


def draw_label(frame: np.ndarray, box: Box, text: str, color: Sequence[int]) -> None:
    """Draw a filled bar above ``box`` and write ``text`` on it in white."""
    if frame.ndim != 3 or frame.shape[2] != 3 or frame.dtype != np.uint8:
        raise ValueError("frame must be an H x W x 3 uint8 image")
    x, y = box.top_left()
    right = box.bottom_right()[0]
    _draw_rect(frame, x, y - LABEL_BAR_HEIGHT, right, y, tuple(color), -1)

    image = Image.fromarray(np.ascontiguousarray(frame))
    draw = ImageDraw.Draw(image)
    font = ImageFont.load_default()
    left, _, _, bottom = draw.textbbox((0, 0), text, font=font)
    draw.text((x - left, y - bottom), text, fill=TEXT_COLOR, font=font)
    frame[...] = np.asarray(image)