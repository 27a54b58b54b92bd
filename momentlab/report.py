"""
Momentlab Reports.

Plain text, Rich table and JSON renderings of an AnalysisResult.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from rich import box
from rich.table import Table

from .features import ContourFeatures
from .pipeline import AnalysisResult

NOT_AVAILABLE = "n/a"


def format_value(value: Optional[float]) -> str:
    """Integers as-is, floats with one decimal, None as n/a."""
    if value is None:
        return NOT_AVAILABLE
    if isinstance(value, int):
        return str(value)
    return f"{value:.1f}"


def feature_lines(feat: ContourFeatures) -> List[str]:
    return [
        f"Area: {format_value(feat.area)}",
        f"Perimeter: {format_value(feat.perimeter)}",
        f"Major Axis: {format_value(feat.major_axis)}",
        f"Minor Axis: {format_value(feat.minor_axis)}",
        f"Orientation: {format_value(feat.orientation)}",
        f"Roundness: {format_value(feat.roundness)}",
        f"Eccentricity: {format_value(feat.eccentricity)}",
        f"Ratio: {format_value(feat.ratio)}",
        f"Diameter: {format_value(feat.diameter)}",
    ]


def format_text(result: AnalysisResult) -> str:
    """
    Plain report: the contour count, then one block per contour
    followed by a blank line.
    """
    lines = [f"Number of contours: {result.contour_count}"]
    for feat in result.features:
        lines.extend(feature_lines(feat))
        lines.append("")
    return "\n".join(lines) + "\n"


def features_table(result: AnalysisResult, title: Optional[str] = None) -> Table:
    """Build a Rich table with one row per contour."""
    if title is None:
        name = Path(result.image_path).name if result.image_path else "image"
        title = f"📐 {name}: {result.contour_count} contours"

    table = Table(title=title, box=box.ROUNDED, border_style="cyan")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Area", justify="right")
    table.add_column("Centroid", justify="right")
    table.add_column("Perimeter", justify="right")
    table.add_column("Major", justify="right")
    table.add_column("Minor", justify="right")
    table.add_column("Orient.", justify="right")
    table.add_column("Round.", justify="right")
    table.add_column("Ecc.", justify="right")
    table.add_column("Ratio %", justify="right")
    table.add_column("Diam.", justify="right")
    table.add_column("Depth", style="dim", justify="right")

    for feat in result.features:
        table.add_row(
            str(feat.index),
            format_value(feat.area),
            f"({format_value(feat.cx)}, {format_value(feat.cy)})",
            format_value(feat.perimeter),
            format_value(feat.major_axis),
            format_value(feat.minor_axis),
            format_value(feat.orientation),
            format_value(feat.roundness),
            f"{feat.eccentricity:.3f}" if feat.eccentricity is not None else NOT_AVAILABLE,
            format_value(feat.ratio),
            format_value(feat.diameter),
            str(feat.depth),
        )
    return table


def to_dict(result: AnalysisResult) -> Dict[str, Any]:
    return result.to_dict()


def write_json(result: AnalysisResult, path: Union[str, Path]) -> Path:
    """Save the features as indented JSON."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        json.dump(to_dict(result), f, indent=2)
    return path
