"""PaceChart - Pixel-space line chart builder with dark theme support."""

from .chart import PaceChart, DEFAULT_COLORS, restyle_path, move_tooltip, write_html

__all__ = ['PaceChart', 'DEFAULT_COLORS', 'restyle_path', 'move_tooltip', 'write_html']
