"""
Tests for text, table and JSON reports.
"""

import json

from momentlab.config import AnalysisConfig
from momentlab.pipeline import analyze_image
from momentlab.report import features_table, format_text, format_value, write_json


class TestFormatValue:
    """Value formatting."""

    def test_values(self):
        """Test formatting of int, float and undefined values."""
        assert format_value(None) == "n/a"
        assert format_value(12) == "12"
        assert format_value(12.345) == "12.3"


class TestTextReport:
    """Plain text report."""

    def test_square_report(self, square_image):
        """Test the plain report for a square."""
        text = format_text(analyze_image(square_image))
        lines = text.splitlines()

        assert lines[0] == "Number of contours: 1"
        assert lines[1:10] == [
            "Area: 10000.0",
            "Perimeter: 400.0",
            "Major Axis: n/a",
            "Minor Axis: n/a",
            "Orientation: n/a",
            "Roundness: 2.5",
            "Eccentricity: n/a",
            "Ratio: n/a",
            "Diameter: 112.8",
        ]
        assert text.endswith("\n\n")

    def test_legacy_integers(self, square_image):
        """Test integer values in the plain report."""
        result = analyze_image(square_image, AnalysisConfig(integer_measurements=True))
        text = format_text(result)
        assert "Area: 10000\n" in text
        assert "Perimeter: 400\n" in text

    def test_empty(self, blank_image):
        """Test the plain report for a blank image."""
        assert format_text(analyze_image(blank_image)) == "Number of contours: 0\n"

    def test_block_per_contour(self, shapes_image):
        """Test one block per contour."""
        result = analyze_image(shapes_image)
        text = format_text(result)
        assert text.count("Area: ") == result.contour_count
        assert text.count("Eccentricity: ") == result.contour_count


class TestTable:
    """Rich table."""

    def test_one_row_per_contour(self, shapes_image):
        """Test one table row per contour."""
        result = analyze_image(shapes_image)
        table = features_table(result)
        assert table.row_count == result.contour_count

    def test_custom_title(self, square_image):
        """Test a custom table title."""
        assert features_table(analyze_image(square_image), title="Square").title == "Square"


class TestJson:
    """JSON export."""

    def test_write_json(self, tmp_path, shapes_path):
        """Test JSON export."""
        from momentlab.pipeline import analyze_path

        _, result = analyze_path(shapes_path)
        path = write_json(result, tmp_path / "out" / "features.json")

        with open(path) as f:
            data = json.load(f)
        assert data['contour_count'] == result.contour_count
        assert data['image'] == str(shapes_path)
        assert data['preset'] == 'classic'
        assert data['config']['retrieval'] == 'tree'
        assert data['config']['blur_kernel'] == [3, 3]
        assert len(data['contours']) == result.contour_count
        assert data['contours'][0]['index'] == 0
