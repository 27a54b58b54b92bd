"""
Momentlab Annotation Rendering.

Draws the analysis on a copy of the source image and shows or saves it.

Layers (see AnalysisConfig.draw_*):
- bounding rectangle of each contour
- orientation ray from the centroid along the fitted ellipse angle
- contour outline, fitted ellipse, centroid cross and orientation label
"""

import logging
import math
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np

from .config import (
    AXES_COLOR,
    BBOX_COLOR,
    CONTOUR_COLOR,
    DEFAULT_WINDOW_NAME,
    ELLIPSE_COLOR,
    LABEL_COLOR,
    ORIENTATION_COLOR,
    AnalysisConfig,
)
from .errors import ImageWriteError
from .features import ContourFeatures, MIN_ELLIPSE_POINTS
from .pipeline import AnalysisResult

logger = logging.getLogger(__name__)


def _point(x: float, y: float):
    return (int(round(x)), int(round(y)))


def orientation_endpoint(feat: ContourFeatures, length: int):
    """End of the orientation ray, or None when the contour has no ellipse."""
    theta = feat.orientation_radians
    if theta is None:
        return None
    return _point(feat.cx + length * math.cos(theta), feat.cy + length * math.sin(theta))


def annotate(
    image: np.ndarray,
    result: AnalysisResult,
    config: Optional[AnalysisConfig] = None,
) -> np.ndarray:
    """
    Draw the configured annotation layers.

    Args:
        image: Source image (BGR or grayscale); left untouched
        result: Analysis of that image
        config: Drawing settings (default: the config used for the analysis)

    Returns:
        Annotated BGR copy of the image
    """
    config = config or result.config
    canvas = image.copy()
    if canvas.ndim == 2:
        canvas = cv2.cvtColor(canvas, cv2.COLOR_GRAY2BGR)
    elif canvas.shape[2] == 4:
        canvas = cv2.cvtColor(canvas, cv2.COLOR_BGRA2BGR)

    drawn = 0
    for contour, feat in zip(result.contours, result.features):
        if feat.area < config.min_area:
            continue
        drawn += 1

        if config.draw_contours:
            cv2.drawContours(canvas, [contour], -1, CONTOUR_COLOR)

        if config.draw_ellipse and len(contour) >= MIN_ELLIPSE_POINTS and feat.has_ellipse:
            cv2.ellipse(canvas, cv2.fitEllipse(contour), ELLIPSE_COLOR)

        if config.draw_bbox:
            x, y, w, h = feat.bounding_rect
            # boundingRect is exclusive on the far edges
            cv2.rectangle(canvas, (x, y), (x + w - 1, y + h - 1), BBOX_COLOR)

        center = _point(feat.cx, feat.cy)

        if config.draw_axes:
            n = config.axes_length
            cv2.line(canvas, (center[0] - n, center[1]), (center[0] + n, center[1]), AXES_COLOR)
            cv2.line(canvas, (center[0], center[1] - n), (center[0], center[1] + n), AXES_COLOR)

        if config.draw_orientation:
            end = orientation_endpoint(feat, config.orientation_length)
            if end is not None:
                cv2.line(canvas, center, end, ORIENTATION_COLOR, 1)

        if config.draw_labels and feat.orientation is not None:
            cv2.putText(
                canvas,
                f"Ori: {feat.orientation:.0f}",
                center,
                cv2.FONT_HERSHEY_SIMPLEX,
                0.4,
                LABEL_COLOR,
            )

    logger.debug("Annotated %d of %d contours", drawn, result.contour_count)
    return canvas


def show(image: np.ndarray, window: str = DEFAULT_WINDOW_NAME) -> int:
    """
    Display an image and block until a key is pressed.

    Returns:
        The key code returned by cv2.waitKey
    """
    cv2.imshow(window, image)
    key = cv2.waitKey(0)
    cv2.destroyAllWindows()
    return key


def save(image: np.ndarray, path: Union[str, Path]) -> Path:
    """
    Write an image, creating the parent directory if needed.

    Raises:
        ImageWriteError: if OpenCV cannot encode or write the file
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    try:
        ok = cv2.imwrite(str(path), image)
    except cv2.error as e:
        raise ImageWriteError(path) from e
    if not ok:
        raise ImageWriteError(path)
    logger.debug("Saved annotated image to %s", path)
    return path
