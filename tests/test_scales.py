"""
Unit tests for linear scales and the per-draw scale set.
"""

import pytest

from vaxpace.config import Margin
from vaxpace.layout import LayoutConfig
from vaxpace.metadata import CountryMeta
from vaxpace.processing import SeriesRecord
from vaxpace.scales import LinearScale, build_scales, tick_increment


def make_record(code, samples):
    return SeriesRecord(
        country=CountryMeta(code=code, name=code, population=10_000_000),
        samples=tuple(samples),
        peak=max(samples),
        latest=samples[-1],
        length=len(samples),
    )


LAYOUT = LayoutConfig(
    width=600,
    height=300,
    margin=Margin(0, 0, 0, 0),
    is_mobile=False,
    container_width=600,
    aspect_ratio=0.5,
)


class TestLinearScale:

    def test_maps_domain_to_range(self):
        scale = LinearScale(domain=(0, 100), range=(200, 0))

        assert scale(0) == 200
        assert scale(50) == 100
        assert scale(100) == 0

    def test_invert(self):
        scale = LinearScale(domain=(0, 100), range=(0, 400))

        assert scale.invert(100) == 25

    def test_degenerate_domain_maps_to_range_midpoint(self):
        scale = LinearScale(domain=(0, 0), range=(0, 300))

        assert scale(0) == 150
        assert scale(42) == 150

    @pytest.mark.parametrize('stop, expected', [
        (97, 100),
        (1234, 1300),
        (300, 300),
        (4, 4),
        (3, 3),
    ])
    def test_nice_extends_upper_bound(self, stop, expected):
        scale = LinearScale(domain=(0, stop), range=(0, 1)).nice()

        assert scale.domain[0] == 0
        assert scale.domain[1] == expected

    def test_nice_keeps_range(self):
        scale = LinearScale(domain=(0, 97), range=(300, 0)).nice()

        assert scale.range == (300, 0)

    def test_nice_degenerate_domain_is_unchanged(self):
        scale = LinearScale(domain=(0, 0), range=(0, 1))

        assert scale.nice() == scale

    def test_ticks(self):
        scale = LinearScale(domain=(0, 100), range=(0, 1))

        assert scale.ticks(4) == [0, 20, 40, 60, 80, 100]

    def test_fractional_ticks(self):
        scale = LinearScale(domain=(0, 1), range=(0, 1))

        assert scale.ticks(5) == [0.0, 0.2, 0.4, 0.6, 0.8, 1.0]


class TestTickIncrement:

    def test_one_two_five_steps(self):
        assert tick_increment(0, 100, 10) == 10
        assert tick_increment(0, 100, 4) == 20
        assert tick_increment(0, 100, 20) == 5

    def test_sub_unit_steps_are_inverted(self):
        assert tick_increment(0, 1, 10) == -10

    def test_zero_count(self):
        assert tick_increment(0, 100, 0) == 0


class TestBuildScales:

    def test_domains_from_dataset(self):
        records = [make_record('A', [10, 300, 250]), make_record('B', [50, 90])]

        scales = build_scales(records, LAYOUT)

        assert scales.x.domain == (0, 3)
        assert scales.x.range == (0, 600)
        assert scales.y.domain == (0, 300)
        assert scales.y.range == (300, 0)
        assert scales.alpha.domain == (0, 250)
        assert scales.alpha.range == (0, 0.6)

    def test_alpha_is_not_niced(self):
        records = [make_record('A', [10, 97])]

        scales = build_scales(records, LAYOUT)

        assert scales.alpha.domain == (0, 97)
        assert scales.y.domain == (0, 100)
        assert scales.alpha(97) == pytest.approx(0.6)

    def test_latest_sample_lands_on_right_edge(self):
        scales = build_scales([make_record('A', [10, 300, 250])], LAYOUT)

        assert scales.screen_x(0) == 600

    def test_empty_dataset_does_not_crash(self):
        scales = build_scales([], LAYOUT)

        assert scales.x.domain == (0, 0)
        assert scales.screen_x(0) == 300
