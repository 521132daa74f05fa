"""Shared YOLOv8 model plumbing: preprocessing, inference and decoding."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

import numpy as np

from .geometry import Box, nms_boxes
from .imaging import blob_from_image, pad_to_square
from .palette import Color, get_color

SCORE_THRESHOLD = 0.25
NMS_THRESHOLD = 0.45
BOX_FIELDS = 4

Runner = Callable[[np.ndarray], Sequence[np.ndarray]]

COCO_LABELS: tuple[str, ...] = (
    "person", "bicycle", "car", "motorcycle", "airplane", "bus", "train", "truck",
    "boat", "traffic light", "fire hydrant", "stop sign", "parking meter", "bench",
    "bird", "cat", "dog", "horse", "sheep", "cow", "elephant", "bear", "zebra",
    "giraffe", "backpack", "umbrella", "handbag", "tie", "suitcase", "frisbee",
    "skis", "snowboard", "sports ball", "kite", "baseball bat", "baseball glove",
    "skateboard", "surfboard", "tennis racket", "bottle", "wine glass", "cup",
    "fork", "knife", "spoon", "bowl", "banana", "apple", "sandwich", "orange",
    "broccoli", "carrot", "hot dog", "pizza", "donut", "cake", "chair", "couch",
    "potted plant", "bed", "dining table", "toilet", "tv", "laptop", "mouse",
    "remote", "keyboard", "cell phone", "microwave", "oven", "toaster", "sink",
    "refrigerator", "book", "clock", "vase", "scissors", "teddy bear",
    "hair drier", "toothbrush",
)


@dataclass(frozen=True)
class Detection:
    """One detection that survived suppression.

    ``row`` is the index of the prediction it came from, so per-prediction
    data such as mask coefficients can be looked up later.
    """

    box: Box
    class_id: int
    confidence: float
    row: int


class YoloModel:
    """A YOLOv8 network wrapped around an inference callable.

    ``runner`` takes a 1x3xHxW float32 blob and returns the network outputs.
    """

    def __init__(
        self,
        runner: Runner,
        labels: Sequence[str],
        input_height: int = 640,
        input_width: int = 640,
    ) -> None:
        if not labels:
            raise ValueError("labels must not be empty")
        if input_height <= 0 or input_width <= 0:
            raise ValueError("input size must be positive")
        self._runner = runner
        self.labels = tuple(labels)
        self.input_height = input_height
        self.input_width = input_width
        self.scale_x = 1.0
        self.scale_y = 1.0

    def preprocess(self, frame: np.ndarray) -> np.ndarray:
        """Pad ``frame`` to a square and record the scale back to it."""
        padded = pad_to_square(frame)
        self.scale_x = padded.shape[1] / float(self.input_width)
        self.scale_y = padded.shape[0] / float(self.input_height)
        return padded

    def run(self, frame_resample: np.ndarray) -> list[np.ndarray]:
        """Run the network on a preprocessed frame."""
        blob = blob_from_image(
            frame_resample, 1 / 255.0, self.input_width, self.input_height, True
        )
        return [np.asarray(out, dtype=np.float32) for out in self._runner(blob)]

    def color(self, class_id: int) -> Color:
        return get_color(class_id, len(self.labels))

    def decode(self, predictions: np.ndarray) -> list[Detection]:
        """Turn raw box predictions into suppressed detections in frame pixels."""
        data = np.asarray(predictions, dtype=np.float32)
        if data.ndim == 3:
            data = data[0]
        if data.ndim != 2:
            raise ValueError("predictions must be a (1,) C x N array")
        rows = data.T
        num_classes = len(self.labels)
        if rows.shape[1] < BOX_FIELDS + num_classes:
            raise ValueError("predictions have fewer channels than box fields and classes")

        class_scores = rows[:, BOX_FIELDS : BOX_FIELDS + num_classes]
        class_ids = np.argmax(class_scores, axis=1)
        best = class_scores.max(axis=1) if len(rows) else np.empty(0, np.float32)

        candidates: list[tuple[Box, int, float, int]] = []
        for row in np.flatnonzero(best > SCORE_THRESHOLD):
            cx, cy, ow, oh = (float(v) for v in rows[row, :BOX_FIELDS])
            box = Box(
                int((cx - 0.5 * ow) * self.scale_x),
                int((cy - 0.5 * oh) * self.scale_y),
                int(ow * self.scale_x),
                int(oh * self.scale_y),
            )
            candidates.append((box, int(class_ids[row]), float(best[row]), int(row)))

        keep = nms_boxes(
            [c[0] for c in candidates],
            [c[2] for c in candidates],
            SCORE_THRESHOLD,
            NMS_THRESHOLD,
        )
        return [Detection(*candidates[k]) for k in keep]