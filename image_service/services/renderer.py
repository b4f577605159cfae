"""Result Renderer

Prints analysis results and draws detected objects onto the source image.
"""

import logging
from pathlib import Path
from typing import Optional

from PIL import Image, ImageDraw, ImageFont

from ..exceptions import RenderError
from .vision_service import AnalysisResult, DetectedObject

logger = logging.getLogger(__name__)


def format_confidence(confidence: float) -> str:
    """Format a 0-1 confidence score as a percentage with two decimals."""
    return f"{confidence:.2%}"


class ResultRenderer:
    """Prints analysis results and writes the bounding box image."""

    OUTPUT_FILENAME = "output_with_bounding_boxes.jpg"
    BOX_COLOR = "red"
    BOX_WIDTH = 3
    TEXT_COLOR = "black"
    FONT_NAME = "arial.ttf"
    FONT_SIZE = 16

    def __init__(self, output_folder: Optional[Path] = None):
        """Initialize the renderer.

        Args:
            output_folder: Folder that receives the annotated image.
        """
        self.output_folder = Path(output_folder or "BoundingBoxes")

    @property
    def output_path(self) -> Path:
        return self.output_folder / self.OUTPUT_FILENAME

    def render(self, result: AnalysisResult, image_path: Path) -> Optional[Path]:
        """Print a result and draw its objects.

        Args:
            result: Analysis result to render.
            image_path: The image that was analyzed.

        Returns:
            Path to the annotated image, or None when nothing was detected.
        """
        print("Description:")
        for caption in result.captions:
            print(f" - {caption.text} (Confidence: {format_confidence(caption.confidence)})")

        print("Tags:")
        for tag in result.tags:
            print(f" - {tag.name} (Confidence: {format_confidence(tag.confidence)})")

        if not result.objects:
            return None

        output = None
        print("Objects detected:")
        for detected in result.objects:
            print(f" - {detected.label} (Confidence: {format_confidence(detected.confidence)})")
            # Each object is drawn on a clean copy and saved to the same file,
            # so the file ends up showing the last object only.
            output = self.draw_bounding_box(image_path, detected)
        return output

    def _load_font(self) -> ImageFont.ImageFont:
        try:
            return ImageFont.truetype(self.FONT_NAME, self.FONT_SIZE)
        except OSError:
            logger.debug(f"{self.FONT_NAME} not available, using Pillow default font")
            return ImageFont.load_default()

    def draw_bounding_box(self, image_path: Path, detected: DetectedObject) -> Path:
        """Draw one object's box and label on the image and save it.

        Args:
            image_path: Source image.
            detected: Object whose rectangle and label are drawn.

        Returns:
            Path to the saved image.

        Raises:
            RenderError: If the image cannot be opened, drawn or saved.
        """
        rect = detected.rectangle
        output_path = self.output_path

        try:
            with Image.open(image_path) as img:
                # JPEG output cannot hold alpha or palette data
                if img.mode != "RGB":
                    img = img.convert("RGB")

                draw = ImageDraw.Draw(img)
                draw.rectangle(
                    [rect.x, rect.y, rect.x + rect.w, rect.y + rect.h],
                    outline=self.BOX_COLOR,
                    width=self.BOX_WIDTH,
                )
                draw.text(
                    (rect.x, rect.y),
                    detected.label,
                    fill=self.TEXT_COLOR,
                    font=self._load_font(),
                )

                self.output_folder.mkdir(parents=True, exist_ok=True)
                img.save(output_path)
        except (OSError, ValueError) as e:
            logger.info(f"Failed to draw bounding box on {image_path}: {e}")
            raise RenderError(f"Could not draw bounding box: {e}") from e

        logger.info(f"Drew '{detected.label}' at {rect} on {image_path}")
        print(f"Output image saved as {output_path}")
        return output_path
