"""Vaccine pace chart library.

This package contains series normalization, layout and scale building, path
generation, nearest-series lookup, hover highlighting, and the draw pass that
assembles them into a Plotly figure.
"""

from .config import (
    CHART_COLORS,
    DEFAULT_CHART_CONFIG,
    ChartConfig,
    ConfigurationError,
    load_chart_config,
)
from .metadata import (
    CountryMeta,
    JsonMetadataClient,
)
from .loaders import (
    load_series,
    load_series_csv,
    load_series_json,
)
from .processing import (
    normalize_series_map,
    flatten_points,
    records_to_frame,
    print_series_summary,
)
from .highlight import (
    HighlightController,
    HighlightState,
    PointerEvent,
    default_highlight,
    handle_pointer_event,
)
from .render import (
    FigureTarget,
    RenderedState,
    bind_figure_widget,
    render,
)

__all__ = [
    'CHART_COLORS',
    'DEFAULT_CHART_CONFIG',
    'ChartConfig',
    'ConfigurationError',
    'load_chart_config',
    'CountryMeta',
    'JsonMetadataClient',
    'load_series',
    'load_series_csv',
    'load_series_json',
    'normalize_series_map',
    'flatten_points',
    'records_to_frame',
    'print_series_summary',
    'HighlightController',
    'HighlightState',
    'PointerEvent',
    'default_highlight',
    'handle_pointer_event',
    'FigureTarget',
    'RenderedState',
    'bind_figure_widget',
    'render',
]
