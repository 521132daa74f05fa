"""Instance segmentation: masks, boxes and labels drawn onto the frame."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .geometry import Box
from .imaging import draw_box, draw_label, resize_bilinear
from .model import BOX_FIELDS, Detection, YoloModel

BOX_THICKNESS = 2
MASK_ALPHA = 0.5
MASK_THRESHOLD = 0.5


def sigmoid(x):
    """Logistic function, applied element-wise to arrays."""
    with np.errstate(over="ignore"):
        return 1.0 / (1.0 + np.exp(-np.asarray(x, dtype=np.float32)))


def process_mask(
    frame_width: int, frame_height: int, mask_in: np.ndarray, box: Box
) -> np.ndarray:
    """Turn mask logits into a binary frame-sized mask limited to ``box``.

    Logits outside the box (scaled down to mask resolution) are zeroed, the
    rest pass through a sigmoid; the result is upsampled to the padded square
    frame, thresholded at 0.5 and cropped back to the frame size.
    """
    if frame_width <= 0 or frame_height <= 0:
        raise ValueError("frame size must be positive")
    mask = np.asarray(mask_in, dtype=np.float32)
    if mask.ndim != 2 or mask.size == 0:
        raise ValueError("mask must be a non-empty 2-D array")

    side = max(frame_height, frame_width)
    rows, cols = mask.shape
    scale_x = np.float32(side) / np.float32(cols)
    scale_y = np.float32(side) / np.float32(rows)

    ow = int(np.float32(box.width) / scale_x)
    oh = int(np.float32(box.height) / scale_y)
    cy = int(np.float32(box.y) / scale_y)
    cx = int(np.float32(box.x) / scale_x)

    r = np.arange(rows)[:, np.newaxis]
    c = np.arange(cols)[np.newaxis, :]
    inside = (r >= cy) & (r <= cy + oh) & (c >= cx) & (c <= cx + ow)
    probabilities = np.where(inside, sigmoid(mask), 0.0).astype(np.float32)

    resized = resize_bilinear(probabilities, side, side)
    binary = (resized > MASK_THRESHOLD).astype(np.float32)

    if frame_height < frame_width:
        return binary[:frame_height]
    return binary[:, :frame_width]


def color_merge(
    frame: np.ndarray, alpha: float, mask: np.ndarray, color: Sequence[float]
) -> None:
    """Blend ``color`` into ``frame`` in place wherever ``mask`` is non-zero."""
    selected = np.asarray(mask) != 0
    if selected.shape != frame.shape[:2]:
        raise ValueError("mask must have the same height and width as the frame")
    channels = frame.shape[2] if frame.ndim == 3 else 1
    tint = np.asarray(tuple(color)[:channels], dtype=np.float64)
    pixels = frame[selected].astype(np.float64)
    blended = alpha * pixels + (1.0 - alpha) * tint
    frame[selected] = np.clip(np.trunc(blended), 0, 255).astype(frame.dtype)


def _prediction_rows(predictions: np.ndarray) -> np.ndarray:
    data = np.asarray(predictions, dtype=np.float32)
    if data.ndim == 3:
        data = data[0]
    if data.ndim != 2:
        raise ValueError("predictions must be a (1,) C x N array")
    return data.T


class Segmenter(YoloModel):
    """YOLOv8 segmentation model that paints instance masks onto frames."""

    def segment(self, frame: np.ndarray) -> np.ndarray:
        """Return a copy of ``frame`` with masks, boxes and labels drawn on it."""
        frame_out = np.array(frame, copy=True)
        padded = self.preprocess(frame)
        outputs = self.run(padded)
        self.postprocess(outputs, frame_out)
        return frame_out

    def postprocess(
        self, outputs: Sequence[np.ndarray], frame: np.ndarray
    ) -> list[Detection]:
        """Decode detections and masks and draw them onto ``frame`` in place."""
        if len(outputs) < 2:
            raise ValueError("segmentation needs box predictions and mask prototypes")
        protos = np.asarray(outputs[1], dtype=np.float32)
        if protos.ndim == 4:
            protos = protos[0]
        if protos.ndim != 3:
            raise ValueError("mask prototypes must be a (1,) M x H x W array")
        num_masks, proto_h, proto_w = protos.shape

        rows = _prediction_rows(outputs[0])
        offset = BOX_FIELDS + len(self.labels)
        if rows.shape[1] < offset + num_masks:
            raise ValueError("predictions have fewer channels than mask coefficients")
        coefficients = rows[:, offset : offset + num_masks]
        flat_protos = protos.reshape(num_masks, proto_h * proto_w)

        detections = self.decode(outputs[0])
        frame_height, frame_width = frame.shape[:2]
        masks = [
            process_mask(
                frame_width,
                frame_height,
                (coefficients[det.row] @ flat_protos).reshape(proto_h, proto_w),
                det.box,
            )
            for det in detections
        ]

        for det, mask in zip(detections, masks):
            color = self.color(det.class_id)
            color_merge(frame, MASK_ALPHA, mask, color)
            draw_box(frame, det.box, color, BOX_THICKNESS)
            draw_label(frame, det.box, self.labels[det.class_id], color)
        return detections