"""Draw pass: turn raw series into a Plotly figure with a live highlight."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping, Protocol, Sequence

import plotly.graph_objects as go

from pace_charts import PaceChart, move_tooltip, restyle_path
from pace_charts.chart import OVERLAY_NAME
from .config import CHART_COLORS, ChartConfig, load_chart_config
from .highlight import (
    EmphasizeStroke,
    HighlightController,
    HighlightState,
    ResetStrokes,
    ShowTooltip,
    VisualCommand,
    default_highlight,
    tooltip_position,
    tooltip_text,
)
from .metadata import JsonMetadataClient, MetadataClient
from .processing import SeriesRecord
from .scales import ScaleSet
from .scene import Scene, build_scene

logger = logging.getLogger(__name__)

DEFAULT_CONTAINER_WIDTH = 800


class RenderTarget(Protocol):
    def width(self) -> float: ...
    def draw(self, figure: go.Figure) -> None: ...
    def apply(self, commands: Sequence[VisualCommand]) -> None: ...


def series_color(record: SeriesRecord, scales: ScaleSet, colors=None) -> str:
    """Base stroke color: more opaque for series with a higher latest value."""
    colors = colors or CHART_COLORS
    alpha = scales.alpha(record.latest)
    return f"rgba({colors['series']}, {alpha:.3f})"


class FigureTarget:
    """
    Render target holding a Plotly figure (or FigureWidget) at a fixed width.

    Visual commands restyle the named series shapes and move the tooltip
    annotation. The base style of each series and the highlight style (from
    the figure's layout meta) are read at draw time.
    """

    def __init__(self, width: float) -> None:
        self._width = float(width)
        self.figure: go.Figure | None = None
        self._base_styles: dict[str, tuple[str, float]] = {}
        self._highlight_style: tuple[str, float] = (CHART_COLORS['tooltip'], 2)

    def width(self) -> float:
        return self._width

    def resize(self, width: float) -> None:
        self._width = float(width)

    def draw(self, figure: go.Figure) -> None:
        self.figure = figure
        self._base_styles = {
            shape.name: (shape.line.color, shape.line.width)
            for shape in figure.layout.shapes
            if shape.name is not None
        }
        meta = figure.layout.meta or {}
        self._highlight_style = (
            meta.get('highlight_color', self._highlight_style[0]),
            meta.get('highlight_stroke_width', self._highlight_style[1]),
        )

    def apply(self, commands: Sequence[VisualCommand]) -> None:
        if self.figure is None:
            raise RuntimeError("Nothing drawn yet")
        for command in commands:
            if isinstance(command, ResetStrokes):
                for name, (color, width) in self._base_styles.items():
                    restyle_path(self.figure, name, color, width)
            elif isinstance(command, EmphasizeStroke):
                color, width = self._highlight_style
                restyle_path(self.figure, command.country_code, color, width)
            elif isinstance(command, ShowTooltip):
                move_tooltip(self.figure, command.text, command.x, command.y)


@dataclass(frozen=True)
class RenderedState:
    scene: Scene
    figure: go.Figure
    highlight: HighlightState


def _format_value(value: float) -> str:
    return f"{value:,.0f}" if abs(value) >= 1 or value == 0 else f"{value:g}"


def build_figure(scene: Scene, config: ChartConfig, colors=None) -> go.Figure:
    """Build the chart figure for a scene (series paths, ticks, overlay, tooltip)."""
    colors = colors or CHART_COLORS
    layout = scene.layout
    scales = scene.scales

    chart = PaceChart(
        width=layout.width,
        height=layout.height,
        container_width=layout.container_width,
        container_height=layout.outer_height,
        colors=colors,
    )
    chart.set_margins(
        top=layout.margin.top,
        left=layout.margin.left,
        right=layout.margin.right,
        bottom=layout.margin.bottom,
    )

    base_styles = {}
    for record in scene.records:
        color = series_color(record, scales, colors)
        chart.add_path(record.code, scene.paths[record.code], color=color, width=config.stroke_width)
        base_styles[record.code] = [color, config.stroke_width]

    y_ticks = scales.y.ticks(config.minor_tick_counts.get('y', 4))
    chart.set_yaxis_ticks(
        [scales.screen_y(t) for t in y_ticks],
        [_format_value(t) for t in y_ticks],
    )
    x_ticks = scales.x.ticks(config.minor_tick_counts.get('x', 4))
    chart.set_xaxis_ticks(
        [scales.screen_x(t) for t in x_ticks],
        ['Today' if t == 0 else f"{t:g} days ago" for t in x_ticks],
    )

    coords = scene.index.coords
    chart.add_point_overlay(
        coords[:, 0],
        coords[:, 1],
        customdata=[p.country_code for p in scene.points],
    )
    chart.add_tooltip(color=config.highlight_color)

    fig = chart.build()
    fig.update_layout(meta=dict(
        highlight_color=config.highlight_color,
        highlight_stroke_width=config.highlight_stroke_width,
        # Read by the exported page's hover script
        base_styles=base_styles,
        tooltips={
            record.code: [tooltip_text(record), *tooltip_position(record, scene)]
            for record in scene.records
        },
    ))
    return fig


def render(
    data: Mapping[str, Sequence[float]],
    config: ChartConfig | Mapping[str, Any] | None = None,
    container: RenderTarget | None = None,
    metadata: MetadataClient | None = None,
    colors=None,
) -> RenderedState:
    """
    Draw the chart from scratch and apply the default highlight.

    Every call builds a new scene; nothing carries over from earlier draws.

    Args:
        data: Country code -> samples, most recent first
        config: ChartConfig, or an overrides dict merged onto the defaults
        container: Render target reporting the width and receiving the figure
        metadata: Country metadata client (defaults to the bundled countries)
        colors: Theme colors dict (defaults to CHART_COLORS)

    Returns:
        RenderedState

    Raises:
        ConfigurationError: if the configuration cannot produce a plot area
    """
    if not isinstance(config, ChartConfig):
        config = load_chart_config(dict(config) if config else None)
    container = container or FigureTarget(DEFAULT_CONTAINER_WIDTH)
    metadata = metadata or JsonMetadataClient()

    scene = build_scene(data, config, container.width(), metadata)
    figure = build_figure(scene, config, colors)
    container.draw(figure)

    highlight, commands = default_highlight(scene)
    container.apply(commands)
    if highlight.active_country is not None:
        logger.info(f"Default highlight: {highlight.active_country}")
    return RenderedState(scene=scene, figure=figure, highlight=highlight)


def bind_figure_widget(widget: Any, rendered: RenderedState, target: RenderTarget) -> HighlightController:
    """
    Wire hover events of a Plotly FigureWidget to a highlight controller.

    The widget must show ``rendered.figure`` (e.g. ``go.FigureWidget(rendered.figure)``)
    and ``target`` must restyle that widget. Hover positions arrive in plot
    pixels and are shifted by the margins into container coordinates.
    """
    controller = HighlightController(rendered.scene, target)
    margin = rendered.scene.layout.margin

    def on_hover(trace, points, state):
        if not points.xs:
            return
        controller.pointer_move(points.xs[0] + margin.left, points.ys[0] + margin.top)

    for trace in widget.data:
        if trace.name == OVERLAY_NAME:
            trace.on_hover(on_hover)
    return controller
