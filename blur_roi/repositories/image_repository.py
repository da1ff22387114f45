from pathlib import Path
from typing import Union
import logging
import numpy as np
import cv2
from PIL import Image as PILImage
from ..models.image import Image
from ..models.geometry import Rectangle
from ..exceptions import UnreadableImageError, InvalidDimensionError

logger = logging.getLogger(__name__)


class ImageRepository:
    """
    Handles file I/O and raw pixel access for Image entities.
    """
    @staticmethod
    def create_image(pixels: np.ndarray, path: Union[str, Path] = None) -> Image:
        # Images are immutable: private, read-only copy
        pixels = np.ascontiguousarray(pixels).copy()
        pixels.flags.writeable = False
        if path is None:
            return Image(pixels)
        return Image(pixels=pixels, path=Path(path))

    def load(self, path: Union[str, Path]) -> Image:
        path = Path(path)
        if not path.is_file():
            raise UnreadableImageError(f"Image not found: {path}")

        # cv2.imread returns None for anything it cannot decode instead of raising
        arr_bgr = cv2.imread(str(path), cv2.IMREAD_COLOR)
        if arr_bgr is None or arr_bgr.size == 0:
            raise UnreadableImageError(f"Image unreadable: {path}")
        logger.debug(f"Decoded {path.name}: {arr_bgr.shape}")

        return self.create_image(arr_bgr, path)

    @staticmethod
    def save(image: Image) -> None:
        if image.path is None:
            raise ValueError("Cannot save an image without a path")
        # Pillow expects RGB
        PILImage.fromarray(cv2.cvtColor(image.pixels, cv2.COLOR_BGR2RGB)).save(image.path)

    @staticmethod
    def retrieve_region(image: Image, region: Rectangle) -> np.ndarray:
        """
        Copy of the pixels under *region*. Raises if *region* is empty or leaves the image.
        """
        height_img, width_img = image.pixels.shape[:2]
        if region.is_empty:
            raise InvalidDimensionError(
                f"Region {region.width}x{region.height} is degenerate"
            )
        if region.x < 0 or region.y < 0 or region.right > width_img or region.bottom > height_img:
            raise InvalidDimensionError(
                f"Region ({region.x},{region.y},{region.right},{region.bottom}) "
                f"outside image {width_img}x{height_img}"
            )
        return image.pixels[region.y:region.bottom, region.x:region.right].copy()
