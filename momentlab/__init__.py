"""
Momentlab - Contour Moment Features

Momentlab finds the contours of an image and measures each one: area,
centroid, perimeter, fitted-ellipse orientation and axes, roundness,
eccentricity, axis ratio and equivalent diameter.
"""

from .config import (
    AnalysisConfig,
    ANALYSIS_PRESETS,
    DEFAULT_IMAGE_PATH,
    list_presets,
)
from .errors import MomentlabError, ImageLoadError, ImageWriteError
from .features import (
    ContourFeatures,
    compute_features,
    compute_all_features,
)
from .pipeline import (
    AnalysisResult,
    load_image,
    preprocess,
    find_contours,
    compute_moments,
    analyze_image,
    analyze_path,
)
from .render import annotate, show, save
from .report import format_text, features_table, write_json

__version__ = "0.1.0"
__author__ = "Momentlab Contributors"

__all__ = [
    # Configuration
    'AnalysisConfig',
    'ANALYSIS_PRESETS',
    'DEFAULT_IMAGE_PATH',
    'list_presets',
    # Errors
    'MomentlabError',
    'ImageLoadError',
    'ImageWriteError',
    # Features
    'ContourFeatures',
    'compute_features',
    'compute_all_features',
    # Pipeline
    'AnalysisResult',
    'load_image',
    'preprocess',
    'find_contours',
    'compute_moments',
    'analyze_image',
    'analyze_path',
    # Output
    'annotate',
    'show',
    'save',
    'format_text',
    'features_table',
    'write_json',
]
