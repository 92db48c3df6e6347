"""Configuration loading and constants for the vaccine pace chart."""

from __future__ import annotations

import copy
import json
import os
from dataclasses import dataclass
from typing import Any


class ConfigurationError(ValueError):
    """Raised when chart configuration cannot produce a valid draw."""


def _load_config_data():
    """Load configuration data from JSON file."""
    config_path = os.path.join(os.path.dirname(__file__), 'config_data.json')
    with open(config_path, 'r') as f:
        return json.load(f)


_CONFIG_DATA = _load_config_data()

# Default chart options (loaded from config_data.json)
DEFAULT_CHART_CONFIG = _CONFIG_DATA['chart']

# Default color scheme for charts (loaded from config_data.json)
CHART_COLORS = _CONFIG_DATA['chart_colors']


@dataclass(frozen=True)
class Margin:
    top: float
    right: float
    bottom: float
    left: float

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Margin:
        try:
            return cls(
                top=float(data['top']),
                right=float(data['right']),
                bottom=float(data['bottom']),
                left=float(data['left']),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid margin {data!r}: {e}") from e


@dataclass(frozen=True)
class AspectBreakpoint:
    """Aspect ratio applied when the container is wider than ``breakpoint``."""
    breakpoint: float
    ratio: float


@dataclass(frozen=True)
class ChartConfig:
    """Validated, immutable options for a single draw pass."""
    population_threshold: float
    peak_threshold: float
    margin: Margin
    mobile_margin: Margin
    mobile_breakpoint: float
    aspect_height: tuple[AspectBreakpoint, ...]
    highlight_color: str
    minor_tick_counts: dict[str, int]
    stroke_width: float = 1
    highlight_stroke_width: float = 2
    max_opacity: float = 0.6
    curve_tension: float = 0

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ChartConfig:
        """Build a config from a plain options dict (as stored in config_data.json)."""
        try:
            table = tuple(
                AspectBreakpoint(breakpoint=float(entry['breakpoint']), ratio=float(entry['ratio']))
                for entry in data['aspect_height']
            )
            # Table is matched first-to-last, widest breakpoint first
            table = tuple(sorted(table, key=lambda entry: entry.breakpoint, reverse=True))
            tick_counts = {axis: int(count) for axis, count in data['minor_tick_counts'].items()}
            return cls(
                population_threshold=float(data['population_threshold']),
                peak_threshold=float(data['peak_threshold']),
                margin=Margin.from_dict(data['margin']),
                mobile_margin=Margin.from_dict(data['mobile_margin']),
                mobile_breakpoint=float(data['mobile_breakpoint']),
                aspect_height=table,
                highlight_color=str(data['highlight_color']),
                minor_tick_counts=tick_counts,
                stroke_width=float(data.get('stroke_width', 1)),
                highlight_stroke_width=float(data.get('highlight_stroke_width', 2)),
                max_opacity=float(data.get('max_opacity', 0.6)),
                curve_tension=float(data.get('curve_tension', 0)),
            )
        except ConfigurationError:
            raise
        except (KeyError, TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid chart configuration: {e}") from e


def merge_options(base: dict[str, Any], overrides: dict[str, Any]) -> dict[str, Any]:
    """
    Recursively merge ``overrides`` onto a copy of ``base``.

    Nested dicts merge key by key; any other value (including lists such as
    the aspect table) replaces the base value wholesale.
    """
    merged = copy.deepcopy(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = merge_options(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def load_chart_config(overrides: dict[str, Any] | None = None) -> ChartConfig:
    """
    Get the chart config, with optional overrides merged onto the defaults.

    Args:
        overrides: Partial options dict, e.g. ``{'margin': {'right': 80}}``

    Returns:
        ChartConfig instance
    """
    options = merge_options(DEFAULT_CHART_CONFIG, overrides or {})
    return ChartConfig.from_dict(options)
