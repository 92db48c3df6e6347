"""Nearest-point lookup over the screen-space point cloud of all series."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
from scipy.spatial import cKDTree

from .processing import PlotPoint
from .scales import ScaleSet

logger = logging.getLogger(__name__)


class NearestPointIndex:
    """
    Planar nearest-neighbour index answering ``nearest(x, y)`` queries.

    Points keep their construction order; ``nearest`` returns an index into
    that order. Built on a KD-tree partition of the plane (O(n log n) build,
    expected O(log n) query). Small clouds are answered by a linear scan.

    Tie policy: points with identical coordinates collapse onto the first one
    inserted, and among equidistant candidates the lowest construction index
    wins.
    """

    # Below this many points the tree is skipped in favour of a linear scan
    MIN_TREE_POINTS = 3
    # Neighbours fetched per query to settle distance ties
    TIE_CANDIDATES = 4

    def __init__(self, coords) -> None:
        coords = np.asarray(coords, dtype=float).reshape(-1, 2)
        self._coords = coords
        self._tree = None
        self._owners = None

        if len(coords) >= self.MIN_TREE_POINTS:
            unique, first = np.unique(coords, axis=0, return_index=True)
            if len(unique) < len(coords):
                logger.debug(f"Collapsed {len(coords) - len(unique)} duplicate points")
            self._owners = first
            self._tree = cKDTree(unique)

    def __len__(self) -> int:
        return len(self._coords)

    @property
    def coords(self) -> np.ndarray:
        return self._coords

    def nearest(self, x: float, y: float) -> int | None:
        """Index of the point closest to (x, y), or None for an empty index."""
        n = len(self._coords)
        if n == 0:
            return None
        if self._tree is None:
            return self._scan(x, y)

        k = min(self.TIE_CANDIDATES, len(self._owners))
        dist, slots = self._tree.query([x, y], k=k)
        dist = np.atleast_1d(dist)
        slots = np.atleast_1d(slots)
        if k > 1 and dist[-1] <= dist[0]:
            # Every candidate fetched is tied; there may be more on the same circle
            slots = np.asarray(self._tree.query_ball_point([x, y], dist[0]), dtype=int)
            return int(self._owners[slots].min())
        tied = slots[dist <= dist[0]]
        return int(self._owners[tied].min())

    def _scan(self, x: float, y: float) -> int:
        d = np.hypot(self._coords[:, 0] - x, self._coords[:, 1] - y)
        # argmin returns the first minimum, i.e. construction order wins ties
        return int(np.argmin(d))


def point_coords(points: Sequence[PlotPoint], scales: ScaleSet) -> np.ndarray:
    """Screen coordinates of each point, aligned on the latest sample."""
    if not points:
        return np.empty((0, 2))
    return np.array(
        [(scales.screen_x(p.alignment_index), scales.screen_y(p.sample_value)) for p in points],
        dtype=float,
    )


def build_index(points: Sequence[PlotPoint], scales: ScaleSet) -> NearestPointIndex:
    index = NearestPointIndex(point_coords(points, scales))
    logger.debug(f"Built nearest-point index over {len(index)} points")
    return index
