import pytest

from yoloview.geometry import Box, iou, nms_boxes


def test_corners_and_area():
    box = Box(2, 3, 4, 5)
    assert box.top_left() == (2, 3)
    assert box.bottom_right() == (2 + 4, 3 + 5)
    assert box.area() == 4 * 5


def test_iou_identical_is_one():
    box = Box(0, 0, 10, 10)
    assert iou(box, box) == pytest.approx(1.0)


def test_iou_disjoint_is_zero():
    assert iou(Box(0, 0, 5, 5), Box(10, 10, 5, 5)) == 0.0


def test_iou_touching_edges_is_zero():
    assert iou(Box(0, 0, 5, 5), Box(5, 0, 5, 5)) == 0.0


def test_iou_half_overlap():
    a = Box(0, 0, 10, 10)
    b = Box(5, 0, 10, 10)
    assert iou(a, b) == pytest.approx(1 / 3)
    assert iou(a, b) == pytest.approx(iou(b, a))


def test_nms_suppresses_lower_scoring_overlap():
    boxes = [Box(0, 0, 10, 10), Box(1, 1, 10, 10)]
    assert nms_boxes(boxes, [0.6, 0.9], 0.25, 0.45) == [1]


def test_nms_keeps_disjoint_boxes_by_score():
    boxes = [Box(0, 0, 10, 10), Box(50, 50, 10, 10), Box(100, 0, 5, 5)]
    assert nms_boxes(boxes, [0.3, 0.8, 0.5], 0.25, 0.45) == [1, 2, 0]


def test_nms_score_threshold_is_strict():
    boxes = [Box(0, 0, 10, 10), Box(50, 50, 10, 10)]
    assert nms_boxes(boxes, [0.25, 0.26], 0.25, 0.45) == [1]


def test_nms_equal_scores_keep_input_order():
    boxes = [Box(0, 0, 10, 10), Box(50, 50, 10, 10)]
    assert nms_boxes(boxes, [0.5, 0.5], 0.25, 0.45) == [0, 1]


def test_nms_empty():
    assert nms_boxes([], [], 0.25, 0.45) == []


def test_nms_length_mismatch():
    with pytest.raises(ValueError):
        nms_boxes([Box(0, 0, 1, 1)], [], 0.25, 0.45)