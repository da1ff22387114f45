from __future__ import annotations

import logging
import os

import cv2
from dotenv import load_dotenv

from ..models.image import Image
from .image_service import ImageService

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class ContrastService:
    """
    Local contrast equalization so that focus estimation is not confounded by
    uneven exposure.
    *   Works on the luminance channel only (CIE Lab), chroma is left alone.
    *   Pure: returns a new Image, never touches the input.
    """

    def __init__(self,
                 clip_limit: float = None,
                 tile_grid: int = None):
        """
        Args:
            clip_limit: CLAHE clip limit (defaults to env var)
            tile_grid: number of CLAHE tiles per axis (defaults to env var)
        """
        self.clip_limit = clip_limit if clip_limit is not None else float(os.getenv("CLAHE_CLIP_LIMIT", "2.0"))
        self.tile_grid = tile_grid if tile_grid is not None else int(os.getenv("CLAHE_TILE_GRID", "16"))
        self.img_svc = ImageService()

    def equalize_histogram(self, img: Image) -> Image:
        lab = cv2.cvtColor(img.pixels, cv2.COLOR_BGR2LAB)
        l, a, b = cv2.split(lab)

        # CLAHE objects keep internal buffers, build a fresh one per call
        clahe = cv2.createCLAHE(clipLimit=self.clip_limit,
                                tileGridSize=(self.tile_grid, self.tile_grid))
        l_clahe = clahe.apply(l)

        equalized = cv2.cvtColor(cv2.merge((l_clahe, a, b)), cv2.COLOR_LAB2BGR)
        logger.debug(f"Equalized {img.width}x{img.height} "
                     f"(clip={self.clip_limit}, grid={self.tile_grid})")
        return self.img_svc.create_image(equalized, img.path)
