"""
Tests for annotation drawing, display and saving.
"""

import cv2
import numpy as np
import pytest

from momentlab import render
from momentlab.config import BBOX_COLOR, ORIENTATION_COLOR, AnalysisConfig
from momentlab.errors import ImageWriteError
from momentlab.features import ContourFeatures
from momentlab.pipeline import analyze_image
from momentlab.render import annotate, orientation_endpoint, save, show


def _features(**overrides):
    values = dict(
        index=0, area=100.0, cx=10.0, cy=10.0, perimeter=40.0,
        orientation=0.0, major_axis=20.0, minor_axis=10.0, roundness=1.3,
        eccentricity=0.87, ratio=50.0, diameter=11.3,
        bounding_rect=(0, 0, 20, 20), point_count=40,
    )
    values.update(overrides)
    return ContourFeatures(**values)


class TestOrientationEndpoint:
    """Orientation ray geometry."""

    def test_zero_degrees_points_right(self):
        """Test that 0 degrees points along +x."""
        assert orientation_endpoint(_features(orientation=0.0), 30) == (40, 10)

    def test_ninety_degrees_points_down(self):
        """Test that 90 degrees points along +y."""
        assert orientation_endpoint(_features(orientation=90.0), 30) == (10, 40)

    def test_no_ellipse(self):
        """Test that there is no ray without an ellipse."""
        assert orientation_endpoint(_features(orientation=None), 30) is None


class TestAnnotate:
    """Annotation layers."""

    def test_returns_copy(self, square_image):
        """Test that annotation draws on a copy."""
        original = square_image.copy()
        annotated = annotate(square_image, analyze_image(square_image))

        assert annotated.shape == square_image.shape
        assert np.array_equal(original, square_image)
        assert not np.array_equal(annotated, square_image)

    def test_bounding_box_drawn(self, square_image):
        """Test that the bounding box is drawn on the square's edges."""
        annotated = annotate(square_image, analyze_image(square_image))
        assert tuple(annotated[100, 50]) == BBOX_COLOR
        assert tuple(annotated[150, 100]) == BBOX_COLOR
        # interior untouched; the square has no ellipse so no orientation ray
        assert tuple(annotated[100, 100]) == (255, 255, 255)

    def test_orientation_ray_drawn(self):
        """Test that the orientation ray ends where expected."""
        image = np.zeros((300, 300, 3), dtype=np.uint8)
        cv2.ellipse(image, (150, 150), (100, 40), 0, 0, 360, (255, 255, 255), -1)
        config = AnalysisConfig(draw_bbox=False)
        result = analyze_image(image, config)
        annotated = annotate(image, result, config)

        feat = result.features[0]
        end = orientation_endpoint(feat, config.orientation_length)
        assert end is not None
        assert tuple(annotated[end[1], end[0]]) == ORIENTATION_COLOR

    def test_min_area_skips_drawing(self, square_image):
        """Test that small contours are not drawn."""
        config = AnalysisConfig(min_area=1e9)
        annotated = annotate(square_image, analyze_image(square_image, config), config)
        assert np.array_equal(annotated, square_image)

    def test_all_layers(self, shapes_image):
        """Test drawing every overlay layer."""
        config = AnalysisConfig.from_preset('detailed')
        annotated = annotate(shapes_image, analyze_image(shapes_image, config))
        assert annotated.shape == shapes_image.shape
        assert not np.array_equal(annotated, shapes_image)

    def test_grayscale_input_becomes_bgr(self):
        """Test that grayscale input is annotated in color."""
        gray = np.zeros((100, 100), dtype=np.uint8)
        gray[20:80, 20:80] = 255
        annotated = annotate(gray, analyze_image(gray))
        assert annotated.shape == (100, 100, 3)

    def test_no_contours(self, blank_image):
        """Test annotating an image without contours."""
        annotated = annotate(blank_image, analyze_image(blank_image))
        assert np.array_equal(annotated, blank_image)


class TestOutput:
    """Display and file output."""

    def test_show_blocks_on_key_and_closes(self, monkeypatch, square_image):
        """Test that show waits for a key and closes the window."""
        calls = []
        monkeypatch.setattr(render.cv2, "imshow", lambda name, img: calls.append(("imshow", name)))
        monkeypatch.setattr(render.cv2, "waitKey", lambda delay: calls.append(("waitKey", delay)) or 27)
        monkeypatch.setattr(render.cv2, "destroyAllWindows", lambda: calls.append(("destroy",)))

        assert show(square_image) == 27
        assert calls == [("imshow", "Original"), ("waitKey", 0), ("destroy",)]

    def test_save(self, tmp_path, square_image):
        """Test writing the annotated image."""
        path = save(square_image, tmp_path / "out" / "annotated.png")
        assert path.exists()
        assert np.array_equal(cv2.imread(str(path)), square_image)

    def test_save_unsupported_format(self, tmp_path, square_image):
        """Test writing to an unsupported extension."""
        with pytest.raises(ImageWriteError):
            save(square_image, tmp_path / "annotated.unknown")
