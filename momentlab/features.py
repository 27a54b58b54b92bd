"""
Momentlab Shape Features.

Per-contour shape descriptors derived from raw image moments, the contour's
arc length and a least-squares fitted ellipse:

- area, centroid          from moments m00, m10, m01
- perimeter               closed arc length
- orientation, axes       from cv2.fitEllipse
- roundness               perimeter^2 / (2 * pi * area)
- eccentricity            sqrt(1 - (minor / major)^2)
- ratio                   minor / major * 100
- diameter                equivalent circle diameter sqrt(4 * area / pi)

Usage:
    from momentlab.features import compute_features

    feats = compute_features(contour, cv2.moments(contour))
"""

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import cv2
import numpy as np

logger = logging.getLogger(__name__)

# cv2.fitEllipse needs at least this many points
MIN_ELLIPSE_POINTS = 5

# Largest double below 1.0; eccentricity of a non-degenerate ellipse stays under it
_ECCENTRICITY_MAX = math.nextafter(1.0, 0.0)


@dataclass
class ContourFeatures:
    """Shape descriptors for one contour. ``None`` marks an undefined value."""

    index: int
    area: float
    cx: float
    cy: float
    perimeter: float
    orientation: Optional[float]
    major_axis: Optional[float]
    minor_axis: Optional[float]
    roundness: Optional[float]
    eccentricity: Optional[float]
    ratio: Optional[float]
    diameter: float
    bounding_rect: Tuple[int, int, int, int]
    point_count: int
    parent: int = -1
    depth: int = 0

    @property
    def centroid(self) -> Tuple[float, float]:
        return (self.cx, self.cy)

    @property
    def has_ellipse(self) -> bool:
        return self.major_axis is not None

    @property
    def orientation_radians(self) -> Optional[float]:
        if self.orientation is None:
            return None
        return math.radians(self.orientation)

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['bounding_rect'] = list(self.bounding_rect)
        return data


# ============================================================================
# ELEMENTARY MEASUREMENTS
# ============================================================================

def centroid_from_moments(moments: Dict[str, float], contour: np.ndarray) -> Tuple[float, float]:
    """
    Centroid (m10/m00, m01/m00).

    A zero-area contour (a line or a single pixel) has no moment centroid;
    the mean of its boundary points is used instead.
    """
    m00 = moments['m00']
    if m00 != 0:
        return moments['m10'] / m00, moments['m01'] / m00
    pts = contour.reshape(-1, 2).astype(np.float64)
    return float(pts[:, 0].mean()), float(pts[:, 1].mean())


def fit_ellipse(contour: np.ndarray) -> Optional[Tuple[float, float, float]]:
    """
    Fit an ellipse to a contour.

    Args:
        contour: OpenCV contour (N x 1 x 2)

    Returns:
        (orientation_degrees, major_axis, minor_axis), or None when the contour
        has too few points or the fit is not finite.
    """
    if len(contour) < MIN_ELLIPSE_POINTS:
        return None

    (_, _), (width, height), angle = cv2.fitEllipse(contour)
    if not all(math.isfinite(v) for v in (width, height, angle)):
        logger.debug("Ellipse fit is not finite (%s, %s, %s)", width, height, angle)
        return None

    major_axis = height if height > width else width
    minor_axis = width if height > width else height
    return float(angle), float(major_axis), float(minor_axis)


def roundness(perimeter: float, area: float) -> Optional[float]:
    if area <= 0:
        return None
    return perimeter ** 2 / (2 * math.pi * area)


def eccentricity(major_axis: float, minor_axis: float) -> Optional[float]:
    """sqrt(1 - (minor/major)^2), defined for a non-degenerate ellipse only."""
    if major_axis <= 0 or minor_axis <= 0:
        return None
    r = minor_axis / major_axis
    return min(math.sqrt(max(0.0, 1.0 - r * r)), _ECCENTRICITY_MAX)


def axis_ratio(major_axis: float, minor_axis: float) -> Optional[float]:
    if major_axis <= 0:
        return None
    return (minor_axis / major_axis) * 100


def equivalent_diameter(area: float) -> float:
    return math.sqrt(4 * max(area, 0.0) / math.pi)


# ============================================================================
# HIERARCHY
# ============================================================================

def contour_depths(hierarchy: np.ndarray) -> List[int]:
    """
    Nesting depth of each contour (0 for outermost).

    Args:
        hierarchy: (N, 4) array of [next, previous, first_child, parent]
    """
    n = len(hierarchy)
    depths = [-1] * n
    for i in range(n):
        chain = []
        j = i
        while j != -1 and depths[j] == -1:
            chain.append(j)
            j = int(hierarchy[j][3])
        base = depths[j] if j != -1 else -1
        for k in reversed(chain):
            base += 1
            depths[k] = base
    return depths


# ============================================================================
# PER-CONTOUR FEATURES
# ============================================================================

def compute_features(
    contour: np.ndarray,
    moments: Dict[str, float],
    index: int = 0,
    parent: int = -1,
    depth: int = 0,
    integer_measurements: bool = False,
) -> ContourFeatures:
    """
    Compute shape descriptors for a single contour.

    Args:
        contour: OpenCV contour (N x 1 x 2)
        moments: Raw moments of the contour (cv2.moments)
        index: Position of the contour in the extraction order
        parent: Parent contour index from the hierarchy (-1 for none)
        depth: Nesting depth from the hierarchy
        integer_measurements: Truncate area, centroid and perimeter toward zero

    Returns:
        ContourFeatures
    """
    area = moments['m00']
    cx, cy = centroid_from_moments(moments, contour)
    perimeter = cv2.arcLength(contour, True)

    if integer_measurements:
        area, cx, cy, perimeter = int(area), int(cx), int(cy), int(perimeter)
    else:
        area, cx, cy, perimeter = float(area), float(cx), float(cy), float(perimeter)

    ellipse = fit_ellipse(contour)
    if ellipse is None:
        logger.debug("Contour %d: no ellipse (%d points)", index, len(contour))
        orientation = major_axis = minor_axis = None
        ecc = ratio = None
    else:
        orientation, major_axis, minor_axis = ellipse
        ecc = eccentricity(major_axis, minor_axis)
        ratio = axis_ratio(major_axis, minor_axis)

    x, y, w, h = cv2.boundingRect(contour)

    return ContourFeatures(
        index=index,
        area=area,
        cx=cx,
        cy=cy,
        perimeter=perimeter,
        orientation=orientation,
        major_axis=major_axis,
        minor_axis=minor_axis,
        roundness=roundness(perimeter, area),
        eccentricity=ecc,
        ratio=ratio,
        diameter=equivalent_diameter(area),
        bounding_rect=(int(x), int(y), int(w), int(h)),
        point_count=len(contour),
        parent=parent,
        depth=depth,
    )


def compute_all_features(
    contours: Sequence[np.ndarray],
    moments: Sequence[Dict[str, float]],
    hierarchy: np.ndarray,
    integer_measurements: bool = False,
) -> List[ContourFeatures]:
    """Features for every contour, in extraction order."""
    depths = contour_depths(hierarchy)
    return [
        compute_features(
            contour,
            mu,
            index=i,
            parent=int(hierarchy[i][3]),
            depth=depths[i],
            integer_measurements=integer_measurements,
        )
        for i, (contour, mu) in enumerate(zip(contours, moments))
    ]
