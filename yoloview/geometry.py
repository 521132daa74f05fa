"""Axis-aligned boxes and non-maximum suppression."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Box:
    """Integer rectangle given by its top-left corner and size."""

    x: int
    y: int
    width: int
    height: int

    def top_left(self) -> tuple[int, int]:
        return (self.x, self.y)

    def bottom_right(self) -> tuple[int, int]:
        return (self.x + self.width, self.y + self.height)

    def area(self) -> int:
        return self.width * self.height


def iou(a: Box, b: Box) -> float:
    """Intersection over union of two boxes."""
    x1 = max(a.x, b.x)
    y1 = max(a.y, b.y)
    w = min(a.x + a.width, b.x + b.width) - x1
    h = min(a.y + a.height, b.y + b.height) - y1
    if w <= 0 or h <= 0:
        return 0.0
    inter = w * h
    union = a.area() + b.area() - inter
    if union <= 0:
        return 0.0
    return inter / union


def nms_boxes(
    boxes: Sequence[Box],
    scores: Sequence[float],
    score_threshold: float,
    nms_threshold: float,
) -> list[int]:
    """Return indices of boxes kept by greedy non-maximum suppression.

    Boxes scoring no more than ``score_threshold`` are dropped; the rest are
    visited by descending score (ties keep input order) and kept unless they
    overlap an already kept box by more than ``nms_threshold``.
    """
    if len(boxes) != len(scores):
        raise ValueError("boxes and scores must have the same length")
    candidates = [i for i, s in enumerate(scores) if s > score_threshold]
    candidates.sort(key=lambda i: scores[i], reverse=True)

    kept: list[int] = []
    for idx in candidates:
        if all(iou(boxes[idx], boxes[k]) <= nms_threshold for k in kept):
            kept.append(idx)
    return kept