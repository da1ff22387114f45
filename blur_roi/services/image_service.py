from pathlib import Path
from typing import Union
import logging
import cv2
import numpy as np
from PIL import Image as PILImage
from ..models.image import Image
from ..models.geometry import Rectangle
from ..repositories.image_repository import ImageRepository

logger = logging.getLogger(__name__)


class ImageService:
    """I/O and buffer helpers. No focus-measure logic here."""
    def __init__(self):
        self.image_repository = ImageRepository()

    def create_image(self, pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        return self.image_repository.create_image(pixels, path)

    def load(self, path: Union[str, Path]) -> Image:
        """Load a single image from disk into an Image object."""
        img = self.image_repository.load(path)
        logger.info(f"Loaded {img.path.name}: {img.width}x{img.height}")
        return img

    def save(self, image: Image) -> None:
        self.image_repository.save(image)

    def extract_region(self, img: Image, region: Rectangle) -> Image:
        """
        Standalone copy of *region* (source pixel coordinates) as a new Image.

        Raises:
            InvalidDimensionError: if *region* is empty or does not fit inside *img*.
        """
        pixels = self.image_repository.retrieve_region(img, region)
        logger.debug(f"Extracted region {region} from {img.width}x{img.height}")
        return self.create_image(pixels)

    @staticmethod
    def to_grayscale(img_pixels: np.ndarray) -> np.ndarray:
        return cv2.cvtColor(img_pixels, cv2.COLOR_BGR2GRAY)

    def gray_to_image(self, gray_pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        """Wrap a single-channel uint8 buffer as a 3-channel Image for display."""
        return self.create_image(cv2.cvtColor(gray_pixels, cv2.COLOR_GRAY2BGR), path)

    def to_pil_image(self, img: Image) -> PILImage.Image:
        """
        Convert Image.pixels → RGB PIL Image object, ready for GUI toolkits.
        """
        rgb = cv2.cvtColor(img.pixels, cv2.COLOR_BGR2RGB)
        return PILImage.fromarray(np.ascontiguousarray(rgb))
