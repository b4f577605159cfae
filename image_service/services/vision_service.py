"""Azure Computer Vision Service

Analyzes images with the Azure Computer Vision API to get captions,
tags and localized objects.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from azure.cognitiveservices.vision.computervision import ComputerVisionClient
from azure.cognitiveservices.vision.computervision.models import VisualFeatureTypes
from azure.core.exceptions import AzureError, DeserializationError, SerializationError
from msrest.authentication import CognitiveServicesCredentials
from msrest.exceptions import ClientException

from ..exceptions import AnalysisError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Caption:
    """A caption describing the whole image."""

    text: str
    confidence: float


@dataclass(frozen=True)
class Tag:
    """A tag detected in the image."""

    name: str
    confidence: float


@dataclass(frozen=True)
class BoundingRectangle:
    """Object location in pixels, origin at the top-left corner."""

    x: int
    y: int
    w: int
    h: int


@dataclass(frozen=True)
class DetectedObject:
    """A localized object detected in the image."""

    label: str
    confidence: float
    rectangle: BoundingRectangle


@dataclass(frozen=True)
class AnalysisResult:
    """Complete analysis result from the Computer Vision API."""

    captions: tuple[Caption, ...] = field(default_factory=tuple)
    tags: tuple[Tag, ...] = field(default_factory=tuple)
    objects: tuple[DetectedObject, ...] = field(default_factory=tuple)


class VisionService:
    """Service for analyzing images with Azure Computer Vision."""

    FEATURES = [
        VisualFeatureTypes.description,
        VisualFeatureTypes.tags,
        VisualFeatureTypes.objects,
    ]

    def __init__(
        self,
        endpoint: str,
        key: str,
        client: Optional[ComputerVisionClient] = None,
    ):
        """Initialize the Vision service.

        Args:
            endpoint: Cognitive Services endpoint URL.
            key: Cognitive Services API key.
            client: Optional pre-built client.
        """
        self.endpoint = endpoint
        self._key = key
        self._client = client

    @property
    def client(self) -> ComputerVisionClient:
        """Get or create the Computer Vision client.

        Returns:
            Computer Vision client instance.
        """
        if self._client is None:
            credentials = CognitiveServicesCredentials(self._key)
            self._client = ComputerVisionClient(self.endpoint, credentials)
        return self._client

    def analyze_image(self, image_path: Path) -> AnalysisResult:
        """Analyze an image using the Computer Vision API.

        Args:
            image_path: Path to the image file.

        Returns:
            AnalysisResult with captions, tags and objects.

        Raises:
            AnalysisError: If the file cannot be read or the service call fails.
        """
        print(f"Analyzing {image_path}")

        try:
            with open(image_path, "rb") as image_data:
                analysis = self.client.analyze_image_in_stream(
                    image_data, visual_features=self.FEATURES
                )
        except (
            ClientException, AzureError, DeserializationError, SerializationError
        ) as e:
            logger.info(f"Vision API error for {image_path}: {e}")
            raise AnalysisError(f"Image analysis failed: {e}") from e
        except OSError as e:
            raise AnalysisError(f"Could not read {image_path}: {e}") from e

        result = self._build_result(analysis)

        logger.info(
            f"Analyzed {image_path}: "
            f"{len(result.captions)} captions, "
            f"{len(result.tags)} tags, "
            f"{len(result.objects)} objects"
        )
        return result

    @staticmethod
    def _build_result(analysis) -> AnalysisResult:
        """Convert the SDK response model into an AnalysisResult."""
        captions = ()
        if analysis.description is not None:
            captions = tuple(
                Caption(text=c.text, confidence=c.confidence)
                for c in analysis.description.captions or []
            )

        tags = tuple(
            Tag(name=t.name, confidence=t.confidence) for t in analysis.tags or []
        )

        objects = tuple(
            DetectedObject(
                label=o.object_property,
                confidence=o.confidence,
                rectangle=BoundingRectangle(
                    x=o.rectangle.x,
                    y=o.rectangle.y,
                    w=o.rectangle.w,
                    h=o.rectangle.h,
                ),
            )
            for o in analysis.objects or []
        )

        return AnalysisResult(captions=captions, tags=tags, objects=objects)
