"""The geometry of one draw pass: records, layout, scales, paths and point index."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Sequence

from .config import ChartConfig
from .index import NearestPointIndex, build_index
from .layout import LayoutConfig, layout_for, validate_layout
from .metadata import MetadataClient
from .paths import build_paths
from .processing import PlotPoint, SeriesRecord, flatten_points, normalize_series_map
from .scales import ScaleSet, build_scales

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Scene:
    """Immutable draw-pass geometry. Rebuilt from scratch on every draw."""
    records: tuple[SeriesRecord, ...]
    points: tuple[PlotPoint, ...]
    layout: LayoutConfig
    scales: ScaleSet
    paths: dict[str, str]
    index: NearestPointIndex

    def record_for_point(self, point_index: int) -> SeriesRecord:
        return self.records[self.points[point_index].record_index]

    def record_for_code(self, code: str) -> SeriesRecord | None:
        for record in self.records:
            if record.code == code:
                return record
        return None


def build_scene(
    raw: Mapping[str, Sequence[float]],
    config: ChartConfig,
    container_width: float,
    metadata: MetadataClient,
) -> Scene:
    """
    Run the geometry half of a draw: normalize, lay out, scale, path and index.

    Raises:
        ConfigurationError: if the layout cannot be resolved or is negative
    """
    layout = validate_layout(layout_for(container_width, config))
    records = normalize_series_map(
        raw,
        metadata,
        population_threshold=config.population_threshold,
        peak_threshold=config.peak_threshold,
    )
    scales = build_scales(records, layout, max_opacity=config.max_opacity)
    paths = build_paths(records, scales, tension=config.curve_tension)
    points = flatten_points(records)
    index = build_index(points, scales)

    logger.info(
        f"Scene: {len(records)} series, {len(points)} points, "
        f"{layout.width:g}x{layout.height:g} px ({'mobile' if layout.is_mobile else 'desktop'})"
    )
    return Scene(
        records=records,
        points=points,
        layout=layout,
        scales=scales,
        paths=paths,
        index=index,
    )
