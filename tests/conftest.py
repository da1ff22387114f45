from __future__ import annotations

import pathlib
import sys

import cv2
import numpy as np
import pytest

REPO_ROOT = pathlib.Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from blur_roi.repositories.image_repository import ImageRepository


def make_checkerboard(size: int = 256, square: int = 16) -> np.ndarray:
    ys, xs = np.indices((size, size))
    board = (((ys // square) + (xs // square)) % 2 * 255).astype(np.uint8)
    return cv2.cvtColor(board, cv2.COLOR_GRAY2BGR)


@pytest.fixture
def checkerboard():
    return ImageRepository.create_image(make_checkerboard())


@pytest.fixture
def blurred_checkerboard():
    pixels = cv2.GaussianBlur(make_checkerboard(), (0, 0), sigmaX=7, sigmaY=7)
    return ImageRepository.create_image(pixels)


@pytest.fixture
def flat_gray():
    return ImageRepository.create_image(np.full((256, 256, 3), 128, dtype=np.uint8))


@pytest.fixture
def photo_file(tmp_path):
    """800x200 BGR file: left half checkerboard, right half flat gray."""
    left = make_checkerboard(size=200, square=10)
    right = np.full((200, 400, 3), 127, dtype=np.uint8)
    pixels = np.hstack([left, left, right])
    path = tmp_path / "photo.png"
    cv2.imwrite(str(path), pixels)
    return path
