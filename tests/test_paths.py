"""
Unit tests for the cardinal spline path generator.
"""

import numpy as np
import pytest

from vaxpace.paths import build_paths, cardinal_path, cardinal_segments, series_coords
from vaxpace.processing import normalize_series_map
from vaxpace.scales import build_scales


class TestCardinalPath:

    def test_empty(self):
        assert cardinal_path(np.empty((0, 2))) == ''

    def test_single_point(self):
        assert cardinal_path([(1, 2)]) == 'M1,2Z'

    def test_two_points_are_a_straight_line(self):
        assert cardinal_path([(0, 0), (10, 5)]) == 'M0,0L10,5'

    def test_three_points(self):
        path = cardinal_path([(0, 0), (10, 10), (20, 0)])

        assert path == 'M0,0C0,0,6.667,10,10,10C13.333,10,20,0,20,0'

    def test_no_negative_zero(self):
        assert '-0,' not in cardinal_path([(-0.0, -0.0), (1, 1)])


class TestCardinalSegments:

    def test_passes_through_every_point(self):
        coords = np.array([(0, 5), (3, 1), (7, 8), (9, 2), (12, 4)], dtype=float)

        segments = cardinal_segments(coords)

        assert len(segments) == len(coords) - 1
        np.testing.assert_allclose(segments[:, 0], coords[:-1])
        np.testing.assert_allclose(segments[:, 3], coords[1:])

    def test_tangent_continuity_at_interior_points(self):
        coords = np.array([(0, 5), (3, 1), (7, 8), (9, 2), (12, 4)], dtype=float)

        segments = cardinal_segments(coords)

        incoming = segments[:-1, 3] - segments[:-1, 2]
        outgoing = segments[1:, 1] - segments[1:, 0]
        np.testing.assert_allclose(incoming, outgoing)

    def test_full_tension_is_straight(self):
        coords = np.array([(0, 0), (1, 3), (2, 1)], dtype=float)

        segments = cardinal_segments(coords, tension=1)

        np.testing.assert_allclose(segments[:, 1], segments[:, 0])
        np.testing.assert_allclose(segments[:, 2], segments[:, 3])

    def test_needs_three_points(self):
        with pytest.raises(ValueError):
            cardinal_segments(np.array([(0, 0), (1, 1)]))


class TestSeriesPaths:

    def test_most_recent_samples_share_the_right_edge(self, scene):
        """Series of different lengths end on the same x coordinate."""
        ends = [series_coords(r, scene.scales)[-1] for r in scene.records]

        assert len({r.length for r in scene.records}) > 1
        assert all(end[0] == scene.layout.width for end in ends)

    def test_shorter_series_start_further_right(self, scene):
        us, gb = scene.records

        assert series_coords(gb, scene.scales)[0][0] > series_coords(us, scene.scales)[0][0]

    def test_paths_keyed_by_code(self, raw_series, metadata, scene):
        records = normalize_series_map(raw_series, metadata)

        paths = build_paths(records, scene.scales)

        assert list(paths) == ['US', 'GB']
        assert paths['US'].startswith('M')
        assert paths['US'].count('C') == 3
        assert paths['US'].endswith('650,0')
