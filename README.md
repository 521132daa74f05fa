# yoloview

`yoloview` turns raw YOLOv8 model outputs into annotated frames. It handles
the work around inference: square padding, blob creation, box decoding,
non-maximum suppression, instance-mask reconstruction and drawing. It can
annotate frames with bounding boxes and with segmentation masks.

The package does not bundle an inference engine. You provide a *runner*: a
callable that takes the input blob and returns the model's output arrays. The
runner can wrap any backend.

## Installation

```
pip install .
pip install ".[test]"   # with pytest, to run the tests
```

## Frames

Frames are `numpy` arrays of shape `(height, width, 3)` with `uint8` BGR
pixels. Colours are `(b, g, r)` tuples.

## Detection

```python
import numpy as np
from yoloview.detector import Detector

labels = ["person", "bicycle", "car"]  # your class names, in model order

def runner(blob):
    # blob: float32 array of shape (1, 3, input_height, input_width), RGB, scaled to [0, 1]
    # return a sequence of output arrays; detection uses the first,
    # shaped (1, 4 + classes, anchors) or (4 + classes, anchors)
    ...

detector = Detector(runner, labels, 640, 640)
annotated = detector.detect(frame)
```

`input_height` and `input_width` default to 640. `yoloview.model.COCO_LABELS`
holds the 80 COCO class names for the stock YOLOv8 models.

`detect` works in these steps:

1. It pads the frame to a square by placing it in the top-left corner of a black canvas.
2. It resizes the square to the input size, swaps it to RGB and scales it by 1/255 (`blob_from_image`).
3. It calls the runner with the blob.
4. It keeps candidates whose best class score is above 0.25 and scales their boxes back to frame pixels.
5. It applies NMS with an IoU threshold of 0.45.
6. It returns a copy of the frame with the results drawn on it. Each kept box gets a 2-pixel class-coloured outline, a filled 20-pixel label bar above it and the class name in white, written with Pillow's default font.

`Detector.postprocess(outputs, frame)` does steps 4 to 6 on outputs you
already have. It draws onto `frame` in place and returns the list of
`Detection` objects (`box`, `class_id`, `confidence`, `row`).

## Segmentation

```python
from yoloview.segment import Segmenter

segmenter = Segmenter(runner, labels, 640, 640)
annotated = segmenter.segment(frame)
```

For segmentation the runner returns two outputs:

* The detection tensor. It carries the mask coefficients for each anchor after the class scores.
* The prototype masks, shaped `(1, M, H, W)` or `(M, H, W)`. For YOLOv8 this is 32 maps of 160×160.

Each kept detection's mask is built in these steps:

1. The detection's coefficients are combined with the prototypes.
2. The logits outside the detection's box are zeroed.
3. The remaining logits pass through a sigmoid.
4. The mask is upsampled to the padded square and thresholded at 0.5.
5. It is cropped to the frame.
6. It is blended into the frame at 50% opacity, before the box and label are drawn.

`Segmenter.postprocess(outputs, frame)` draws onto `frame` in place and
returns the detections.

## Building blocks

The pieces used by the two pipelines are available on their own:

| Module | Names |
| --- | --- |
| `yoloview.palette` | `get_color(index, num_labels)`: the class colour ramp, from dark blue through cyan and yellow to dark red |
| `yoloview.geometry` | `Box` (with `top_left`, `bottom_right`, `area`), `iou(a, b)`, `nms_boxes(boxes, scores, score_threshold, nms_threshold)` |
| `yoloview.imaging` | `pad_to_square`, `resize_bilinear`, `blob_from_image`, `draw_box`, `draw_label` |
| `yoloview.model` | `YoloModel`, the shared base with `preprocess`, `run`, `color` and `decode`; `Detection`, a detection that survived suppression; `COCO_LABELS` |
| `yoloview.segment` | `sigmoid`, `process_mask`, `color_merge` |

```python
from yoloview.geometry import Box, nms_boxes

boxes = [Box(0, 0, 10, 10), Box(1, 1, 10, 10), Box(50, 50, 5, 5)]
keep = nms_boxes(boxes, [0.9, 0.8, 0.7], 0.25, 0.45)  # [0, 2]
```

## What it does not do

`yoloview` is a library only. It has no command and does not open a camera
or show frames in a window. Grabbing frames, running the network and
displaying the annotated result are up to the caller.

## Tests

```
pytest
```