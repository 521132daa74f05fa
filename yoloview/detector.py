"""Object detection: boxes and labels drawn onto the input frame."""

from __future__ import annotations

from collections.abc import Sequence

import numpy as np

from .imaging import draw_box, draw_label
from .model import Detection, YoloModel

BOX_THICKNESS = 2


class Detector(YoloModel):
    """YOLOv8 detector that annotates frames with boxes and class labels."""

    def detect(self, frame: np.ndarray) -> np.ndarray:
        """Return a copy of ``frame`` with the detected objects drawn on it."""
        frame_out = np.array(frame, copy=True)
        padded = self.preprocess(frame)
        outputs = self.run(padded)
        self.postprocess(outputs, frame_out)
        return frame_out

    def postprocess(
        self, outputs: Sequence[np.ndarray], frame: np.ndarray
    ) -> list[Detection]:
        """Decode the network outputs and draw them onto ``frame`` in place."""
        if not outputs:
            raise ValueError("the network returned no outputs")
        detections = self.decode(outputs[0])
        for det in detections:
            color = self.color(det.class_id)
            draw_box(frame, det.box, color, BOX_THICKNESS)
            draw_label(frame, det.box, self.labels[det.class_id], color)
        return detections