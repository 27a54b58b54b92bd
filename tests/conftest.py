import sys
from pathlib import Path

import cv2
import numpy as np
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from create_test_image import draw_shapes


# Shapes drawn by draw_shapes(): square, circle, triangle, ellipse and a ring
# (outer boundary plus hole).
SHAPES_TREE_CONTOURS = 6
SHAPES_EXTERNAL_CONTOURS = 5


@pytest.fixture
def shapes_image():
    """Five filled shapes on a black 512x512 canvas."""
    return draw_shapes()


@pytest.fixture
def shapes_path(tmp_path, shapes_image):
    path = tmp_path / "shapes.png"
    cv2.imwrite(str(path), shapes_image)
    return path


@pytest.fixture
def square_image():
    """A single white 101x101 square with corners at (50, 50) and (150, 150)."""
    img = np.zeros((200, 200, 3), dtype=np.uint8)
    cv2.rectangle(img, (50, 50), (150, 150), (255, 255, 255), -1)
    return img


@pytest.fixture
def square_contour():
    return np.array([[[50, 50]], [[50, 150]], [[150, 150]], [[150, 50]]], dtype=np.int32)


@pytest.fixture
def blank_image():
    return np.zeros((64, 64, 3), dtype=np.uint8)
