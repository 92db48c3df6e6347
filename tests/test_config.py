"""
Unit tests for chart configuration loading.
"""

import pytest

from vaxpace.config import (
    DEFAULT_CHART_CONFIG,
    AspectBreakpoint,
    ChartConfig,
    ConfigurationError,
    load_chart_config,
    merge_options,
)


class TestLoadChartConfig:

    def test_defaults(self):
        config = load_chart_config()

        assert config.population_threshold == 1_000_000
        assert config.peak_threshold == 100
        assert config.margin.right == 150
        assert config.mobile_breakpoint == 600
        assert config.highlight_color == '#74c476'
        assert config.aspect_height[-1].breakpoint == 0

    def test_nested_override_keeps_siblings(self):
        config = load_chart_config({'margin': {'right': 80}})

        assert config.margin.right == 80
        assert config.margin.top == DEFAULT_CHART_CONFIG['margin']['top']

    def test_aspect_table_is_sorted_widest_first(self):
        config = load_chart_config({'aspect_height': [
            {'breakpoint': 0, 'ratio': 1},
            {'breakpoint': 600, 'ratio': 0.5},
            {'breakpoint': 500, 'ratio': 0.75},
        ]})

        assert config.aspect_height == (
            AspectBreakpoint(600, 0.5),
            AspectBreakpoint(500, 0.75),
            AspectBreakpoint(0, 1),
        )

    def test_defaults_are_not_mutated(self):
        load_chart_config({'margin': {'right': 1}})

        assert DEFAULT_CHART_CONFIG['margin']['right'] == 150

    def test_missing_option_raises(self):
        options = dict(DEFAULT_CHART_CONFIG)
        del options['margin']

        with pytest.raises(ConfigurationError):
            ChartConfig.from_dict(options)

    def test_bad_margin_raises(self):
        with pytest.raises(ConfigurationError):
            load_chart_config({'mobile_margin': {'top': 'wide'}})


class TestMergeOptions:

    def test_lists_are_replaced(self):
        merged = merge_options({'a': [1, 2], 'b': {'c': 1, 'd': 2}}, {'a': [3], 'b': {'d': 4}})

        assert merged == {'a': [3], 'b': {'c': 1, 'd': 4}}
