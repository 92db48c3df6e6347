"""Responsive layout resolution: margins and aspect ratio from the container width."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .config import AspectBreakpoint, ChartConfig, ConfigurationError, Margin


@dataclass(frozen=True)
class LayoutConfig:
    """Plot-area dimensions for one draw. ``width``/``height`` exclude margins."""
    width: float
    height: float
    margin: Margin
    is_mobile: bool
    container_width: float
    aspect_ratio: float

    @property
    def outer_height(self) -> float:
        return self.height + self.margin.top + self.margin.bottom

    def contains(self, x: float, y: float) -> bool:
        """Whether a plot-local position lies inside the plot area."""
        return 0 <= x <= self.width and 0 <= y <= self.height


def select_aspect_ratio(container_width: float, aspect_table: Sequence[AspectBreakpoint]) -> float:
    """
    Pick the ratio of the first entry whose breakpoint is strictly below the width.

    The table is expected in descending breakpoint order and must end with a
    zero-threshold fallback entry.
    """
    for entry in aspect_table:
        if entry.breakpoint < container_width:
            return entry.ratio
    raise ConfigurationError(
        f"No aspect ratio entry matches container width {container_width:g}; "
        "the table needs a zero-breakpoint fallback"
    )


def resolve_layout(
    container_width: float,
    aspect_table: Sequence[AspectBreakpoint],
    mobile_breakpoint: float,
    margin: Margin,
    mobile_margin: Margin,
) -> LayoutConfig:
    """
    Resolve margins and plot dimensions for a container width.

    Dimensions are not clamped; use validate_layout before drawing.

    Args:
        container_width: Container width in pixels
        aspect_table: (breakpoint, ratio) entries, widest breakpoint first
        mobile_breakpoint: Widths at or below this use the mobile preset
        margin: Desktop margin preset
        mobile_margin: Mobile margin preset

    Returns:
        LayoutConfig
    """
    is_mobile = container_width <= mobile_breakpoint
    chosen = mobile_margin if is_mobile else margin
    ratio = select_aspect_ratio(container_width, aspect_table)

    return LayoutConfig(
        width=container_width - chosen.left - chosen.right,
        height=container_width * ratio - chosen.top - chosen.bottom,
        margin=chosen,
        is_mobile=is_mobile,
        container_width=container_width,
        aspect_ratio=ratio,
    )


def layout_for(container_width: float, config: ChartConfig) -> LayoutConfig:
    """Resolve the layout using the breakpoint and margin options of a ChartConfig."""
    return resolve_layout(
        container_width,
        config.aspect_height,
        config.mobile_breakpoint,
        config.margin,
        config.mobile_margin,
    )


def validate_layout(layout: LayoutConfig) -> LayoutConfig:
    """Raise ConfigurationError if the plot area has negative dimensions."""
    if layout.width < 0 or layout.height < 0:
        raise ConfigurationError(
            f"Plot area is {layout.width:g}x{layout.height:g} px at container width "
            f"{layout.container_width:g}; margins exceed the available space"
        )
    return layout
