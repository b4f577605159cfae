"""Services module for the Image Service."""

from .image_processor import ImageProcessor, parse_dimension
from .image_source import ImageSource
from .renderer import ResultRenderer, format_confidence
from .vision_service import (
    AnalysisResult,
    BoundingRectangle,
    Caption,
    DetectedObject,
    Tag,
    VisionService,
)

__all__ = [
    "ImageProcessor",
    "parse_dimension",
    "ImageSource",
    "ResultRenderer",
    "format_confidence",
    "AnalysisResult",
    "BoundingRectangle",
    "Caption",
    "DetectedObject",
    "Tag",
    "VisionService",
]
