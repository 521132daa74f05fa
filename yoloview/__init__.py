"""YOLOv8 output decoding, non-maximum suppression and frame annotation."""

__version__ = "0.1.0"

__all__ = ["__version__"]