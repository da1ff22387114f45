"""Errors surfaced to the GUI collaborator. Nothing here is ever silently defaulted."""


class BlurDetectionError(Exception):
    """Base class for every error raised by blur_roi."""


class UnreadableImageError(BlurDetectionError, FileNotFoundError):
    """Path is missing or does not decode to a raster image. Re-prompt the user."""


class InvalidDimensionError(BlurDetectionError, ValueError):
    """Zero-sized canvas/image, or a region that does not fit inside its image."""


class SelectionOutOfBoundsError(BlurDetectionError, ValueError):
    """The user dragged outside the area where the image is rendered."""

    USER_MESSAGE = "Selection is out of bounds. Please make selection within image."

    def __init__(self, message: str = USER_MESSAGE):
        super().__init__(message)
