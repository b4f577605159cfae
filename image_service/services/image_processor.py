"""Image Processing Service

Creates thumbnails at caller-specified dimensions.
"""

import logging
from pathlib import Path
from typing import Optional

from PIL import Image

from ..exceptions import ParseError, RenderError

logger = logging.getLogger(__name__)


def parse_dimension(text: str, name: str = "dimension") -> int:
    """Parse a thumbnail dimension entered by the user.

    Args:
        text: Raw user input.
        name: Dimension name used in the error message.

    Returns:
        Positive integer value.

    Raises:
        ParseError: If the input is not a positive integer.
    """
    try:
        value = int(text.strip())
    except ValueError as e:
        raise ParseError(f"Thumbnail {name} must be a whole number, got {text!r}") from e

    if value <= 0:
        raise ParseError(f"Thumbnail {name} must be greater than zero, got {value}")
    return value


class ImageProcessor:
    """Resizes images into thumbnails."""

    JPEG_EXTENSIONS = {".jpg", ".jpeg"}
    # Modes every common output format can store
    PORTABLE_MODES = {"1", "L", "P", "RGB", "RGBA"}

    def __init__(self, thumbnail_folder: Optional[Path] = None):
        """Initialize the image processor.

        Args:
            thumbnail_folder: Folder to store thumbnails.
        """
        self.thumbnail_folder = Path(thumbnail_folder or "Thumbnails")

    def get_thumbnail_path(self, name: str) -> Path:
        """Generate the thumbnail path for a user-supplied file name.

        Only the final path component is used, so thumbnails always
        land in the thumbnail folder.
        """
        return self.thumbnail_folder / Path(name.strip()).name

    def _convert_for_output(self, image: Image.Image, path: Path) -> Image.Image:
        """Convert to a mode the target file format can store."""
        if path.suffix.lower() in self.JPEG_EXTENSIONS:
            if image.mode not in ("L", "RGB"):
                return image.convert("RGB")
            return image

        if image.mode not in self.PORTABLE_MODES:
            has_alpha = "A" in image.getbands()
            return image.convert("RGBA" if has_alpha else "RGB")
        return image

    def create_thumbnail(
        self, image_path: Path, width: int, height: int, name: str
    ) -> Path:
        """Resize an image to exactly width x height and save it.

        The aspect ratio is not preserved.

        Args:
            image_path: Source image.
            width: Target width in pixels.
            height: Target height in pixels.
            name: File name of the thumbnail, including its extension.

        Returns:
            Path to the thumbnail.

        Raises:
            RenderError: If the image cannot be opened, resized or saved.
        """
        thumbnail_path = self.get_thumbnail_path(name)

        try:
            self.thumbnail_folder.mkdir(parents=True, exist_ok=True)

            with Image.open(image_path) as img:
                resized = img.resize((width, height), Image.Resampling.LANCZOS)
                resized = self._convert_for_output(resized, thumbnail_path)

                resized.save(thumbnail_path)

                logger.info(
                    f"Created thumbnail: {thumbnail_path} "
                    f"({img.width}x{img.height} -> {width}x{height})"
                )
        except (OSError, ValueError) as e:
            logger.info(f"Failed to create thumbnail for {image_path}: {e}")
            raise RenderError(f"Could not create thumbnail: {e}") from e

        print(f"Thumbnail created and saved in {thumbnail_path}")
        return thumbnail_path
