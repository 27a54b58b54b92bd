import sys
from pathlib import Path

import cv2
import numpy as np


def draw_shapes(size=512):
    """Black canvas with a square, a circle, a triangle, an ellipse and a ring."""
    img = np.zeros((size, size, 3), np.uint8)

    # White square
    cv2.rectangle(img, (50, 50), (150, 150), (255, 255, 255), -1)

    # Green circle
    cv2.circle(img, (330, 100), 60, (0, 255, 0), -1)

    # Blue triangle
    pts = np.array([[100, 230], [40, 360], [180, 360]], np.int32)
    pts = pts.reshape((-1, 1, 2))
    cv2.fillPoly(img, [pts], (255, 0, 0))

    # Red ellipse, tilted 30 degrees
    cv2.ellipse(img, (340, 300), (110, 45), 30, 0, 360, (0, 0, 255), -1)

    # Yellow ring
    cv2.circle(img, (150, 440), 50, (0, 255, 255), 15)

    return img


def main(path="Images/test.png"):
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    cv2.imwrite(str(path), draw_shapes())
    print(f"Created {path}")


if __name__ == "__main__":
    main(*sys.argv[1:2])
