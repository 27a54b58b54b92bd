"""
Momentlab configuration.

Analysis settings live in a single ``AnalysisConfig`` dataclass. Named presets
bundle the settings for common use cases:

- classic:  blur + grayscale + full contour tree, bounding boxes and orientation
- binary:   Otsu threshold, outer contours only
- detailed: every point kept, all overlays drawn

Usage:
    from momentlab.config import AnalysisConfig

    config = AnalysisConfig.from_preset("binary", integer_measurements=True)
"""

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, Optional, Tuple, Union

import cv2


# Path used by the original single-image demo when no image is given.
DEFAULT_IMAGE_PATH = "../Images/test.png"

DEFAULT_WINDOW_NAME = "Original"

# BGR colors
BBOX_COLOR = (0, 255, 0)
ELLIPSE_COLOR = (0, 255, 0)
ORIENTATION_COLOR = (255, 0, 0)
CONTOUR_COLOR = (0, 0, 255)
AXES_COLOR = (0, 0, 255)
LABEL_COLOR = (255, 255, 255)

RETRIEVAL_MODES = {
    'tree': cv2.RETR_TREE,
    'external': cv2.RETR_EXTERNAL,
    'list': cv2.RETR_LIST,
    'ccomp': cv2.RETR_CCOMP,
}

APPROXIMATION_MODES = {
    'simple': cv2.CHAIN_APPROX_SIMPLE,
    'none': cv2.CHAIN_APPROX_NONE,
}


@dataclass(frozen=True)
class AnalysisConfig:
    """Settings for one analysis run."""

    # Preprocessing
    blur_kernel: Tuple[int, int] = (3, 3)
    blur_sigma_x: float = 0.1
    blur_sigma_y: float = 0.0
    threshold: Optional[Union[int, str]] = None

    # Contour extraction
    retrieval: str = 'tree'
    approximation: str = 'simple'

    # Measurements
    integer_measurements: bool = False
    min_area: float = 0.0

    # Annotation
    orientation_length: int = 30
    axes_length: int = 30
    draw_bbox: bool = True
    draw_orientation: bool = True
    draw_ellipse: bool = False
    draw_contours: bool = False
    draw_axes: bool = False
    draw_labels: bool = False

    # Presentation only, not used by the pipeline
    preset: str = field(default='classic', compare=False)

    def __post_init__(self):
        if self.retrieval not in RETRIEVAL_MODES:
            raise ValueError(
                f"Unknown retrieval mode '{self.retrieval}'. "
                f"Available: {', '.join(RETRIEVAL_MODES)}"
            )
        if self.approximation not in APPROXIMATION_MODES:
            raise ValueError(
                f"Unknown approximation mode '{self.approximation}'. "
                f"Available: {', '.join(APPROXIMATION_MODES)}"
            )
        kw, kh = self.blur_kernel
        if kw <= 0 or kh <= 0 or kw % 2 == 0 or kh % 2 == 0:
            raise ValueError(f"Blur kernel must be positive and odd, got {self.blur_kernel}")
        if isinstance(self.threshold, str) and self.threshold != 'otsu':
            raise ValueError(f"Threshold must be an integer or 'otsu', got '{self.threshold}'")
        if isinstance(self.threshold, int) and not 0 <= self.threshold <= 255:
            raise ValueError(f"Threshold level must be between 0 and 255, got {self.threshold}")

    @property
    def retrieval_flag(self) -> int:
        return RETRIEVAL_MODES[self.retrieval]

    @property
    def approximation_flag(self) -> int:
        return APPROXIMATION_MODES[self.approximation]

    @classmethod
    def from_preset(cls, name: str = 'classic', **overrides) -> 'AnalysisConfig':
        """
        Build a config from a named preset.

        Args:
            name: Preset name (see ``list_presets()``)
            **overrides: Fields to override; ``None`` values are ignored

        Returns:
            AnalysisConfig
        """
        if name not in ANALYSIS_PRESETS:
            raise ValueError(
                f"Unknown preset '{name}'. Available: {', '.join(ANALYSIS_PRESETS)}"
            )
        return cls(preset=name, **ANALYSIS_PRESETS[name]['settings']).with_overrides(**overrides)

    def with_overrides(self, **overrides) -> 'AnalysisConfig':
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})

    def as_dict(self) -> Dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


ANALYSIS_PRESETS: Dict[str, Dict[str, Any]] = {
    'classic': {
        'description': 'Blur, grayscale and full contour tree; boxes and orientation rays',
        'settings': {},
    },
    'binary': {
        'description': 'Otsu threshold before extraction, outer contours only',
        'settings': {
            'threshold': 'otsu',
            'retrieval': 'external',
        },
    },
    'detailed': {
        'description': 'Every boundary point kept, all overlays drawn',
        'settings': {
            'approximation': 'none',
            'draw_ellipse': True,
            'draw_contours': True,
            'draw_axes': True,
            'draw_labels': True,
        },
    },
}


def list_presets() -> Dict[str, str]:
    """
    List available analysis presets.

    Returns:
        Dictionary of preset names and descriptions
    """
    return {name: preset['description'] for name, preset in ANALYSIS_PRESETS.items()}
