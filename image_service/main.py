#!/usr/bin/env python3
"""Image Service - Main Application

An interactive console tool that analyzes images with Azure Computer
Vision, prints captions, tags and detected objects, draws bounding
boxes and creates thumbnails.

Usage:
    python -m image_service.main [--config CONFIG] [--debug]

Options:
    --config CONFIG    Path to appsettings.json
    --debug            Enable debug logging
    --help             Show this help message
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Callable, Optional

from .exceptions import ConfigurationError, ImageServiceError
from .services import (
    ImageProcessor,
    ImageSource,
    ResultRenderer,
    VisionService,
    parse_dimension,
)
from .utils import Config, setup_logging

logger = logging.getLogger(__name__)

MENU = (
    "Please choose an option:\n"
    "1: Analyze image from file path\n"
    "2: Analyze image from URL\n"
    "0: Exit"
)


class ImageServiceApp:
    """Main application orchestrator and console loop."""

    def __init__(
        self,
        vision_service: VisionService,
        image_source: ImageSource,
        renderer: ResultRenderer,
        image_processor: ImageProcessor,
        prompt: Optional[Callable[[], str]] = None,
    ):
        """Initialize the application.

        Args:
            vision_service: Client wrapper used for every analysis.
            image_source: Resolves paths and downloads URLs.
            renderer: Prints results and draws bounding boxes.
            image_processor: Creates thumbnails.
            prompt: Reads one line of user input. Defaults to input().
        """
        self.vision_service = vision_service
        self.image_source = image_source
        self.renderer = renderer
        self.image_processor = image_processor
        self.prompt = prompt or input

    @classmethod
    def from_config(cls, config: Config) -> "ImageServiceApp":
        """Build the application and its services from configuration."""
        return cls(
            vision_service=VisionService(endpoint=config.endpoint, key=config.key),
            image_source=ImageSource(download_folder=config.download_folder),
            renderer=ResultRenderer(output_folder=config.bounding_box_folder),
            image_processor=ImageProcessor(thumbnail_folder=config.thumbnail_folder),
        )

    def ask(self, message: str) -> str:
        print(message)
        return self.prompt()

    def run(self) -> int:
        """Show the menu until the user exits.

        Returns:
            Process exit code.
        """
        actions = {
            "1": self.analyze_from_file,
            "2": self.analyze_from_url,
        }

        while True:
            try:
                choice = self.ask(MENU).strip()
            except (EOFError, KeyboardInterrupt):
                logger.info("Input closed, exiting")
                return 0

            if choice == "0":
                logger.info("Exit selected")
                return 0

            action = actions.get(choice)
            if action is None:
                print("Invalid choice, please try again.")
                continue

            try:
                action()
            except ImageServiceError as e:
                logger.info(f"{type(e).__name__}: {e}")
                print(e)
            except (EOFError, KeyboardInterrupt):
                logger.info("Input closed, exiting")
                return 0

    def analyze_from_file(self):
        """Analyze an image from a local path."""
        file_path = self.ask("Please enter the file path of the image:")
        image_path = self.image_source.resolve_file(file_path)
        self.analyze_image(image_path)

    def analyze_from_url(self):
        """Download an image and analyze it."""
        url = self.ask("Please enter the URL of the image:")
        image_path = self.image_source.download(url)
        self.analyze_image(image_path)

    def analyze_image(self, image_path: Path):
        """Analyze, render and optionally thumbnail one image."""
        result = self.vision_service.analyze_image(image_path)
        self.renderer.render(result, image_path)

        answer = self.ask("Do you want to create a thumbnail? (y/n)")
        if answer.strip().lower() == "y":
            self.create_thumbnail(image_path)

    def create_thumbnail(self, image_path: Path) -> Path:
        """Prompt for dimensions and name, then write the thumbnail."""
        width = parse_dimension(self.ask("Enter the width of the thumbnail:"), "width")
        height = parse_dimension(
            self.ask("Enter the height of the thumbnail:"), "height"
        )
        name = self.ask(
            "Enter the name of the thumbnail (remember to put .jpg at the end)"
        )
        return self.image_processor.create_thumbnail(image_path, width, height, name)


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Image Service",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to appsettings.json",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )

    args = parser.parse_args(argv)

    try:
        config = Config(args.config)
        log_level = "DEBUG" if args.debug else config.log_level
        setup_logging(level=log_level, log_file=config.log_file)
        app = ImageServiceApp.from_config(config)
    except ConfigurationError as e:
        setup_logging(level="DEBUG" if args.debug else "WARNING")
        logger.error(f"Configuration error: {e}")
        return 1

    logger.info("Image Service started")
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
