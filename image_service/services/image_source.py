"""Image Source Service

Turns user input (a local path or a URL) into a readable local image file.
"""

import logging
from pathlib import Path
from typing import Optional

import requests

from ..exceptions import NetworkError, NotFoundError

logger = logging.getLogger(__name__)


class ImageSource:
    """Resolves local files and downloads remote images."""

    DOWNLOAD_FILENAME = "downloaded_image.jpg"

    def __init__(
        self,
        download_folder: Optional[Path] = None,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the image source.

        Args:
            download_folder: Folder that receives downloaded images.
            session: Optional requests session to reuse for downloads.
        """
        self.download_folder = Path(download_folder or ".")
        self.session = session or requests.Session()

    @property
    def download_path(self) -> Path:
        """Fixed location of the most recent download."""
        return self.download_folder.resolve() / self.DOWNLOAD_FILENAME

    def resolve_file(self, file_path: str) -> Path:
        """Check that a local image file exists.

        Args:
            file_path: Path entered by the user.

        Returns:
            Path to the image.

        Raises:
            NotFoundError: If the file does not exist.
        """
        path = Path(file_path.strip()).expanduser()
        if not path.is_file():
            logger.info(f"File not found: {path}")
            raise NotFoundError(
                "File not found. Please check the path and try again."
            )
        return path

    def download(self, url: str) -> Path:
        """Download an image to the fixed download location.

        Any previous download is overwritten.

        Args:
            url: URL of the image.

        Returns:
            Path to the downloaded image.

        Raises:
            NetworkError: If the request fails or returns an error status.
        """
        url = url.strip()
        logger.info(f"Downloading {url}")

        try:
            response = self.session.get(url)
            response.raise_for_status()
        except requests.RequestException as e:
            logger.info(f"Failed to download {url}: {e}")
            raise NetworkError(f"Could not download image from {url}: {e}") from e

        save_path = self.download_path
        try:
            save_path.parent.mkdir(parents=True, exist_ok=True)
            save_path.write_bytes(response.content)
        except OSError as e:
            raise NetworkError(f"Could not save downloaded image to {save_path}: {e}") from e

        logger.info(f"Saved {len(response.content)} bytes to {save_path}")
        print(f"Image downloaded and saved as {save_path}")
        return save_path
