"""Smoothed SVG paths through each series' aligned screen points."""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .processing import SeriesRecord
from .scales import ScaleSet


def series_coords(record: SeriesRecord, scales: ScaleSet) -> np.ndarray:
    """
    Screen coordinates of a record's samples, oldest first, as an (n, 2) array.

    The latest sample always lands on ``x(domain_max)``; shorter histories
    simply start further right.
    """
    n = record.length
    alignment = np.arange(n - 1, -1, -1)
    xs = [scales.screen_x(a) for a in alignment]
    ys = [scales.screen_y(v) for v in record.samples]
    return np.column_stack([xs, ys]).astype(float) if n else np.empty((0, 2))


def cardinal_segments(coords: np.ndarray, tension: float = 0.0) -> np.ndarray:
    """
    Cubic Bézier segments of a cardinal spline through ``coords``.

    Returns an (n - 1, 4, 2) array of (start, control1, control2, end) per
    segment. End tangents are zero, so the first control point coincides with
    the first point and the last control point with the last point.
    """
    coords = np.asarray(coords, dtype=float)
    n = len(coords)
    if n < 3:
        raise ValueError("cardinal spline needs at least 3 points")

    k = (1 - tension) / 6
    # Reflect the neighbours at both ends so the end tangents vanish
    ext = np.vstack([coords[1], coords, coords[-2]])
    p_prev = ext[:-3]
    p0 = ext[1:-2]
    p1 = ext[2:-1]
    p_next = ext[3:]

    c1 = p0 + k * (p1 - p_prev)
    c2 = p1 - k * (p_next - p0)
    return np.stack([p0, c1, c2, p1], axis=1)


def _fmt(value: float) -> str:
    # Adding 0.0 turns -0.0 into 0.0
    return f"{value + 0.0:.3f}".rstrip('0').rstrip('.')


def _pt(p) -> str:
    return f"{_fmt(p[0])},{_fmt(p[1])}"


def cardinal_path(coords: np.ndarray, tension: float = 0.0) -> str:
    """
    SVG path data for a cardinal spline through ``coords``.

    One point yields ``M…Z``, two points a straight ``L`` segment, more
    points a chain of ``C`` segments.
    """
    coords = np.asarray(coords, dtype=float)
    n = len(coords)
    if n == 0:
        return ''
    if n == 1:
        return f"M{_pt(coords[0])}Z"
    if n == 2:
        return f"M{_pt(coords[0])}L{_pt(coords[1])}"

    parts = [f"M{_pt(coords[0])}"]
    for _, c1, c2, end in cardinal_segments(coords, tension):
        parts.append(f"C{_pt(c1)},{_pt(c2)},{_pt(end)}")
    return ''.join(parts)


def series_path(record: SeriesRecord, scales: ScaleSet, tension: float = 0.0) -> str:
    return cardinal_path(series_coords(record, scales), tension)


def build_paths(records: Sequence[SeriesRecord], scales: ScaleSet, tension: float = 0.0) -> dict[str, str]:
    """Path data keyed by country code, in record order."""
    return {record.code: series_path(record, scales, tension) for record in records}
