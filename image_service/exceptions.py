"""Exception hierarchy for the Image Service."""


class ImageServiceError(Exception):
    """Base exception class for the Image Service."""
    pass


class ConfigurationError(ImageServiceError):
    """Raised when appsettings.json is missing, malformed or incomplete."""
    pass


class NotFoundError(ImageServiceError):
    """Raised when a local image file does not exist."""
    pass


class NetworkError(ImageServiceError):
    """Raised when downloading an image from a URL fails."""
    pass


class AnalysisError(ImageServiceError):
    """Raised when the Computer Vision service call fails."""
    pass


class RenderError(ImageServiceError):
    """Raised when an image cannot be decoded, drawn on or saved."""
    pass


class ParseError(ImageServiceError):
    """Raised when a thumbnail dimension is not a positive integer."""
    pass
