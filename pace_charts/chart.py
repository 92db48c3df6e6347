"""Reusable pixel-space line chart builder with dark theme support."""

from __future__ import annotations

import logging
from typing import Any, Sequence

import plotly.graph_objects as go

logger = logging.getLogger(__name__)


# Default color scheme for dark theme charts
DEFAULT_COLORS = {
    'background': '#1a1a2e',
    'paper': '#16213e',
    'grid': '#2a2a4a',
    'text': '#e8e8e8',
    'tooltip': '#74c476',
}

TOOLTIP_NAME = 'tooltip'
OVERLAY_NAME = 'pointer-overlay'

# Runs in the exported page. Hovering the overlay emphasizes the hovered
# point's series and moves the tooltip; styles and tooltip text come from
# layout.meta, which the draw pass fills in.
HOVER_SCRIPT = """
var gd = document.getElementById('{plot_id}');
gd.on('plotly_hover', function (event) {
    var point = event.points[0];
    if (!point || point.data.name !== '%(overlay)s') { return; }
    var meta = gd.layout.meta || {};
    var code = point.customdata;
    var base = meta.base_styles || {};
    var tip = (meta.tooltips || {})[code];
    var update = {};
    (gd.layout.shapes || []).forEach(function (shape, i) {
        var style = shape.name === code
            ? [meta.highlight_color, meta.highlight_stroke_width]
            : base[shape.name];
        if (!style) { return; }
        update['shapes[' + i + '].line.color'] = style[0];
        update['shapes[' + i + '].line.width'] = style[1];
    });
    (gd.layout.annotations || []).forEach(function (annotation, i) {
        if (annotation.name !== '%(tooltip)s' || !tip) { return; }
        update['annotations[' + i + '].text'] = tip[0];
        update['annotations[' + i + '].x'] = tip[1];
        update['annotations[' + i + '].y'] = tip[2];
        update['annotations[' + i + '].visible'] = true;
    });
    Plotly.relayout(gd, update);
});
""" % {'overlay': OVERLAY_NAME, 'tooltip': TOOLTIP_NAME}


class PaceChart:
    """
    A chart builder whose axes are measured in plot-area pixels.

    Both axes run over the plot area's pixel extent, with the y axis pointing
    down as on screen, so geometry computed in screen space (SVG path data,
    tooltip anchors) can be placed on the figure without conversion. Tick
    positions are pixels too; their labels carry the data values.

    Example usage:
        chart = PaceChart(width=600, height=300, container_width=750, container_height=365)
        chart.add_path('US', 'M0,10C...', color='rgba(255,255,255,0.4)')
        chart.set_margins(top=30, left=0, right=150, bottom=35)
        fig = chart.build()
        write_html(fig, "chart.html")
    """

    def __init__(
        self,
        width: float,
        height: float,
        container_width: float,
        container_height: float,
        colors: dict[str, str] | None = None,
    ) -> None:
        """
        Initialize a PaceChart.

        Args:
            width: Plot-area width in pixels
            height: Plot-area height in pixels
            container_width: Full figure width in pixels
            container_height: Full figure height in pixels
            colors: Theme colors dict (defaults to DEFAULT_COLORS)
        """
        self.width = width
        self.height = height
        self.colors = colors or DEFAULT_COLORS.copy()

        self.fig = go.Figure()

        # Apply default dark theme layout
        self.fig.update_layout(
            width=container_width,
            height=container_height,
            autosize=False,
            hovermode='closest',
            hoverdistance=-1,
            showlegend=False,
            dragmode=False,
            paper_bgcolor=self.colors.get('paper', DEFAULT_COLORS['paper']),
            plot_bgcolor=self.colors.get('background', DEFAULT_COLORS['background']),
            font=dict(color=self.colors.get('text', DEFAULT_COLORS['text']), size=10),
        )

        grid_color = self.colors.get('grid', DEFAULT_COLORS['grid'])
        # y runs downward, as in screen space
        self.fig.update_layout(
            xaxis=dict(
                range=[0, width],
                fixedrange=True,
                showgrid=False,
                zeroline=False,
                showticklabels=False,
                gridcolor=grid_color,
            ),
            yaxis=dict(
                range=[height, 0],
                fixedrange=True,
                showgrid=False,
                zeroline=False,
                showticklabels=False,
                gridcolor=grid_color,
            ),
        )

    def add_path(
        self,
        name: str,
        path: str,
        color: str,
        width: float = 1,
    ) -> PaceChart:
        """
        Add an SVG path (in plot pixels) as a named, unfilled shape.

        Args:
            name: Shape name, used to restyle it later
            path: SVG path data
            color: Stroke color
            width: Stroke width

        Returns:
            Self for method chaining
        """
        if not path:
            return self
        self.fig.add_shape(
            type='path',
            path=path,
            name=name,
            xref='x',
            yref='y',
            line=dict(color=color, width=width),
            fillcolor='rgba(0,0,0,0)',
            layer='above',
        )
        return self

    def add_point_overlay(self, x: Sequence[float], y: Sequence[float], customdata: Any = None) -> PaceChart:
        """
        Add an invisible marker trace covering every plotted point.

        It receives hover events for interactive figures; it draws nothing.

        Returns:
            Self for method chaining
        """
        self.fig.add_trace(go.Scatter(
            x=list(x),
            y=list(y),
            name=OVERLAY_NAME,
            mode='markers',
            marker=dict(opacity=0, size=6),
            customdata=customdata,
            hoverinfo='none',
            showlegend=False,
        ))
        return self

    def add_tooltip(self, color: str | None = None, font_size: int = 12) -> PaceChart:
        """
        Add the (initially hidden) tooltip annotation.

        Returns:
            Self for method chaining
        """
        self.fig.add_annotation(
            name=TOOLTIP_NAME,
            text='',
            x=0,
            y=0,
            xref='x',
            yref='y',
            xanchor='left',
            yanchor='middle',
            showarrow=False,
            visible=False,
            font=dict(size=font_size, color=color or self.colors.get('tooltip', DEFAULT_COLORS['tooltip'])),
        )
        return self

    def set_yaxis_ticks(self, tickvals: Sequence[float], ticktext: Sequence[str], side: str = 'right') -> PaceChart:
        """
        Show y tick labels at pixel positions.

        Args:
            tickvals: Tick positions in plot pixels
            ticktext: Tick labels
            side: 'left' or 'right'

        Returns:
            Self for method chaining
        """
        self.fig.update_layout(yaxis=dict(
            tickmode='array',
            tickvals=list(tickvals),
            ticktext=list(ticktext),
            showticklabels=True,
            showgrid=True,
            side=side,
        ))
        return self

    def set_xaxis_ticks(self, tickvals: Sequence[float], ticktext: Sequence[str]) -> PaceChart:
        """
        Show x tick labels at pixel positions.

        Returns:
            Self for method chaining
        """
        self.fig.update_layout(xaxis=dict(
            tickmode='array',
            tickvals=list(tickvals),
            ticktext=list(ticktext),
            showticklabels=True,
        ))
        return self

    def set_margins(
        self,
        top: float = 30,
        left: float = 0,
        right: float = 150,
        bottom: float = 35,
    ) -> PaceChart:
        """
        Set chart margins.

        Args:
            top: Top margin in pixels
            left: Left margin in pixels
            right: Right margin in pixels
            bottom: Bottom margin in pixels

        Returns:
            Self for method chaining
        """
        self.fig.update_layout(margin=dict(t=top, l=left, r=right, b=bottom, pad=0, autoexpand=False))
        return self

    def build(self) -> go.Figure:
        """Return the Plotly figure."""
        return self.fig


def restyle_path(fig: go.Figure, name: str, color: str, width: float) -> None:
    """Change the stroke of the named path shape."""
    fig.update_shapes(selector=dict(name=name), line=dict(color=color, width=width))


def move_tooltip(fig: go.Figure, text: str, x: float, y: float) -> None:
    """Show the tooltip annotation with new text at (x, y) in plot pixels."""
    fig.update_annotations(selector=dict(name=TOOLTIP_NAME), text=text, x=x, y=y, visible=True)


def write_html(fig: go.Figure, path, include_plotlyjs: bool | str = True) -> None:
    """
    Save the figure as a standalone HTML page with hover highlighting.

    Args:
        fig: Figure built by PaceChart
        path: Output file path
        include_plotlyjs: True to embed plotly.js, 'cdn' to link it
    """
    fig.write_html(path, include_plotlyjs=include_plotlyjs, post_script=HOVER_SCRIPT)
    logger.debug(f"Wrote {path}")
