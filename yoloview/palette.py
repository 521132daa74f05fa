"""Per-class colour palette used when drawing detections."""

from __future__ import annotations

import numpy as np

Color = tuple[int, int, int]


def get_color(index: int, num_labels: int) -> Color:
    """Return the BGR colour for class ``index`` out of ``num_labels`` classes.

    The class index is mapped onto a 0..255 ramp that runs from dark blue
    through cyan, yellow and red to dark red.
    """
    if num_labels <= 0:
        raise ValueError("num_labels must be positive")
    ramp = np.float32(index) / np.float32(num_labels) * np.float32(255)
    i = int(ramp)

    if i < 32:
        return (128 + 4 * i, 0, 0)
    if i == 32:
        return (255, 0, 0)
    if i < 96:
        return (255, 4 + 4 * (i - 33), 0)
    if i == 96:
        return (254, 255, 2)
    if i < 159:
        return (250 - 4 * (i - 97), 255, 6 + 4 * (i - 97))
    if i == 159:
        return (1, 255, 254)
    if i < 224:
        return (0, 252 - (i - 160) * 4, 255)
    return (0, 0, 252 - (i - 224) * 4)