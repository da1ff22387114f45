from __future__ import annotations

import logging
import os

import cv2
import numpy as np
from dotenv import load_dotenv

from ..models.image import Image
from ..models.analysis_result import SharpnessMeasurement
from .image_service import ImageService

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


class SharpnessService:
    """
    Variance-of-Laplacian focus measure.

    A sharply focused region has strong, well-defined edges and so a wide spread
    of Laplacian values; a blurry one has smeared edges and a narrow spread.
    Expects the contrast-equalized ROI produced by ContrastService.
    """

    def __init__(self,
                 bilateral_diameter: int = None,
                 sigma_color: float = None,
                 sigma_space: float = None,
                 laplacian_ksize: int = None):
        self.bilateral_diameter = bilateral_diameter if bilateral_diameter is not None else int(os.getenv("BILATERAL_DIAMETER", "9"))
        self.sigma_color = sigma_color if sigma_color is not None else float(os.getenv("BILATERAL_SIGMA_COLOR", "50"))
        self.sigma_space = sigma_space if sigma_space is not None else float(os.getenv("BILATERAL_SIGMA_SPACE", "50"))
        self.laplacian_ksize = laplacian_ksize if laplacian_ksize is not None else int(os.getenv("LAPLACIAN_KSIZE", "3"))
        self.img_svc = ImageService()

    # ─── Public API ────────────────────────────────────────────────
    def measure(self, img: Image) -> SharpnessMeasurement:
        """
        Args:
            img (Image): the normalized region of interest.

        Returns:
            (SharpnessMeasurement): the Laplacian variance and the signed
            Laplacian response it was computed from.
        """
        gray = self.img_svc.to_grayscale(img.pixels)
        smoothed = self._suppress_noise(gray)
        edge_response = self._edge_response(smoothed)
        score = self._variance(edge_response)
        logger.debug(f"Laplacian variance {score:.2f} over {img.width}x{img.height}")
        return SharpnessMeasurement(score=score, edge_response=edge_response)

    def edge_visualization(self, edge_response: np.ndarray) -> Image:
        """|Laplacian| saturated to 8 bit, as a displayable Image."""
        edges_u8 = cv2.convertScaleAbs(edge_response, alpha=1.0, beta=0.0)
        return self.img_svc.gray_to_image(edges_u8)

    # ─── Internal helpers ──────────────────────────────────────────
    def _suppress_noise(self, gray: np.ndarray) -> np.ndarray:
        # High-ISO sensor noise would otherwise inflate the score of blurry images
        return cv2.bilateralFilter(gray, self.bilateral_diameter,
                                   self.sigma_color, self.sigma_space)

    def _edge_response(self, gray: np.ndarray) -> np.ndarray:
        return cv2.Laplacian(gray, cv2.CV_64F, ksize=self.laplacian_ksize)

    @staticmethod
    def _variance(edge_response: np.ndarray) -> float:
        _, std_dev = cv2.meanStdDev(edge_response)
        return float(std_dev[0][0] ** 2)
