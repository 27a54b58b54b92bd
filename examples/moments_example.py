#!/usr/bin/env python3
"""
Example: contour moment features with momentlab.

Draws a few shapes, measures every contour and saves the annotated image
next to this script.
"""

import sys
from pathlib import Path

# Add parent to path for development
sys.path.insert(0, str(Path(__file__).parent.parent))

from create_test_image import draw_shapes
from momentlab import AnalysisConfig, analyze_image, annotate, format_text, save


def main():
    """Run the example."""
    image = draw_shapes()
    config = AnalysisConfig.from_preset("detailed")

    result = analyze_image(image, config)
    print(format_text(result), end="")

    output_path = Path(__file__).parent / "output_annotated.png"
    save(annotate(image, result), output_path)

    print("=" * 50)
    print(f"Contours: {result.contour_count}")
    print(f"Output: {output_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
