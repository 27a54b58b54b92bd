"""
Momentlab Analysis Pipeline.

One linear pass over a single image:

    load -> Gaussian blur -> grayscale -> findContours -> moments -> features

Usage:
    from momentlab.pipeline import analyze_path

    image, result = analyze_path("shapes.png")
    print(result.contour_count)
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import cv2
import numpy as np

from .config import AnalysisConfig
from .errors import ImageLoadError
from .features import ContourFeatures, compute_all_features

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


@dataclass
class AnalysisResult:
    """Everything produced by one analysis pass."""

    image_shape: Tuple[int, ...]
    contours: List[np.ndarray]
    hierarchy: np.ndarray
    features: List[ContourFeatures]
    config: AnalysisConfig
    image_path: Optional[str] = None
    moments: List[Dict[str, float]] = field(default_factory=list, repr=False)

    @property
    def contour_count(self) -> int:
        return len(self.contours)

    def to_dict(self) -> Dict[str, Any]:
        h, w = self.image_shape[:2]
        return {
            'image': self.image_path,
            'width': w,
            'height': h,
            'preset': self.config.preset,
            'config': self.config.as_dict(),
            'contour_count': self.contour_count,
            'contours': [f.to_dict() for f in self.features],
        }


# ============================================================================
# STAGES
# ============================================================================

def load_image(path: PathLike) -> np.ndarray:
    """
    Load a BGR image from disk.

    Raises:
        ImageLoadError: if the file is missing or cannot be decoded
    """
    image = cv2.imread(str(path))
    if image is None:
        raise ImageLoadError(path)
    logger.debug("Loaded %s (%dx%d)", path, image.shape[1], image.shape[0])
    return image


def to_grayscale(image: np.ndarray) -> np.ndarray:
    if image.ndim == 2:
        return image
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def preprocess(image: np.ndarray, config: AnalysisConfig) -> np.ndarray:
    """
    Denoise and reduce to a single channel ready for contour extraction.

    Gaussian blur with the configured kernel, grayscale conversion and,
    when configured, a binary threshold (fixed level or Otsu).
    """
    blurred = cv2.GaussianBlur(
        image,
        tuple(config.blur_kernel),
        config.blur_sigma_x,
        sigmaY=config.blur_sigma_y,
        borderType=cv2.BORDER_DEFAULT,
    )
    gray = to_grayscale(blurred)

    if config.threshold is None:
        return gray
    if config.threshold == 'otsu':
        level, binary = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
        logger.debug("Otsu threshold level: %.1f", level)
        return binary
    _, binary = cv2.threshold(gray, int(config.threshold), 255, cv2.THRESH_BINARY)
    return binary


def find_contours(gray: np.ndarray, config: AnalysisConfig) -> Tuple[List[np.ndarray], np.ndarray]:
    """
    Extract contours and their hierarchy.

    Every non-zero pixel counts as foreground.

    Returns:
        (contours, hierarchy) where hierarchy is an (N, 4) int array of
        [next, previous, first_child, parent]; (0, 4) when nothing was found.
    """
    contours, hierarchy = cv2.findContours(
        gray,
        config.retrieval_flag,
        config.approximation_flag,
        offset=(0, 0),
    )
    contours = list(contours)
    if hierarchy is None:
        hierarchy = np.empty((0, 4), dtype=np.int32)
    else:
        hierarchy = hierarchy.reshape(-1, 4)
    return contours, hierarchy


def compute_moments(contours: List[np.ndarray]) -> List[Dict[str, float]]:
    return [cv2.moments(c, binaryImage=False) for c in contours]


# ============================================================================
# FULL PASS
# ============================================================================

def analyze_image(
    image: np.ndarray,
    config: Optional[AnalysisConfig] = None,
    image_path: Optional[PathLike] = None,
) -> AnalysisResult:
    """
    Run the full analysis on an already loaded image.

    Args:
        image: BGR (or grayscale) image; it is not modified
        config: Analysis settings (default: classic preset)
        image_path: Source path, recorded in the result

    Returns:
        AnalysisResult
    """
    config = config or AnalysisConfig()

    gray = preprocess(image, config)
    contours, hierarchy = find_contours(gray, config)
    logger.info("Number of contours: %d", len(contours))

    moments = compute_moments(contours)
    features = compute_all_features(
        contours,
        moments,
        hierarchy,
        integer_measurements=config.integer_measurements,
    )

    return AnalysisResult(
        image_shape=image.shape,
        contours=contours,
        hierarchy=hierarchy,
        features=features,
        config=config,
        image_path=str(image_path) if image_path is not None else None,
        moments=moments,
    )


def analyze_path(path: PathLike, config: Optional[AnalysisConfig] = None) -> Tuple[np.ndarray, AnalysisResult]:
    """
    Load an image from disk and analyze it.

    Returns:
        (image, result); the image is returned so it can be annotated

    Raises:
        ImageLoadError: if the image cannot be read
    """
    image = load_image(path)
    return image, analyze_image(image, config, image_path=path)
