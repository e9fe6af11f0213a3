"""Handling geometries"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

import numpy as np
from numpy.typing import NDArray

from vpe.common import Point


###############################################################################
# GeomMath
###############################################################################
class GeomMath:
    """Class to provide various static methods related to geometry handling."""

    @staticmethod
    def distance(p1: Point, p2: Point) -> float:
        """Euclidean distance between two points."""
        return math.hypot(p2[0] - p1[0], p2[1] - p1[1])

    @staticmethod
    def distance_to_segment(point: Point, seg_start: Point, seg_end: Point) -> float:
        """
        Distance from _point_ to the line segment _seg_start_ .. _seg_end_.

        The point is projected onto the supporting line and the projection
        parameter is clamped to [0, 1]. A zero-length segment degenerates to
        the distance to its start point.

        Args:
            point (Tuple[float, float]): the query point
            seg_start (Tuple[float, float]): start of the segment
            seg_end (Tuple[float, float]): end of the segment

        Returns:
            float: the minimum distance
        """
        a = point[0] - seg_start[0]
        b = point[1] - seg_start[1]
        c = seg_end[0] - seg_start[0]
        d = seg_end[1] - seg_start[1]

        len_sq = c * c + d * d
        if len_sq == 0.0:
            return math.sqrt(a * a + b * b)

        param = (a * c + b * d) / len_sq
        if param < 0.0:
            xx, yy = seg_start
        elif param > 1.0:
            xx, yy = seg_end
        else:
            xx = seg_start[0] + param * c
            yy = seg_start[1] + param * d

        dx = point[0] - xx
        dy = point[1] - yy
        return math.sqrt(dx * dx + dy * dy)

    @staticmethod
    def reflect_point(point: Point, center: Point) -> Point:
        """Reflect _point_ about _center_ (point mirroring)."""
        return (2.0 * center[0] - point[0], 2.0 * center[1] - point[1])


###############################################################################
# VpBox
###############################################################################
@dataclass(frozen=True)
class VpBox:
    """Axis aligned bounds of rendered geometry, xmin <= xmax and ymin <= ymax."""

    xmin: float
    ymin: float
    xmax: float
    ymax: float

    @classmethod
    def from_points(cls, points: NDArray[np.float64]) -> Optional[VpBox]:
        """Bounds of an (N, 2) point array, None if it holds no point."""
        if points.shape[0] == 0:
            return None
        x_min, y_min = points.min(axis=0)
        x_max, y_max = points.max(axis=0)
        return cls(float(x_min), float(y_min), float(x_max), float(y_max))

    @property
    def extent(self) -> Tuple[float, float, float, float]:
        """The extent of the box as Tuple (xmin, ymin, xmax, ymax)."""
        return self.xmin, self.ymin, self.xmax, self.ymax

    def union(self, other: VpBox) -> VpBox:
        """Return the smallest box enclosing this box and _other_."""
        return VpBox(
            min(self.xmin, other.xmin),
            min(self.ymin, other.ymin),
            max(self.xmax, other.xmax),
            max(self.ymax, other.ymax),
        )
