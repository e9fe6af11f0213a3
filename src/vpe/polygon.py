"""Point-in-polygon classification under nonzero and even-odd fill rules."""

from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from vpe.common import FillRule, Point, check_fill_rule

Ring = Union[Sequence[Tuple[float, float]], NDArray[np.float64]]


class VpPolygon:
    """Static methods on polygon rings.

    A ring is a sequence of (x, y) points; the closing edge from the last to
    the first point is implicit.
    """

    @staticmethod
    def _as_array(ring: Ring) -> NDArray[np.float64]:
        arr = np.asarray(ring, dtype=np.float64)
        if arr.size == 0:
            return np.empty((0, 2), dtype=np.float64)
        return arr[:, :2]

    @staticmethod
    def _edges(pts: NDArray[np.float64]):
        xi = pts[:, 0]
        yi = pts[:, 1]
        xj = np.roll(xi, -1)
        yj = np.roll(yi, -1)
        return xi, yi, xj, yj

    @staticmethod
    def crossings(point: Point, ring: Ring) -> int:
        """Number of ring edges crossed by the ray from _point_ towards +x."""
        pts = VpPolygon._as_array(ring)
        if pts.shape[0] < 3:
            return 0
        px, py = point
        xi, yi, xj, yj = VpPolygon._edges(pts)
        straddles = (yi > py) != (yj > py)
        with np.errstate(divide="ignore", invalid="ignore"):
            x_intersect = (xj - xi) * (py - yi) / (yj - yi) + xi
        return int(np.count_nonzero(straddles & (px < x_intersect)))

    @staticmethod
    def winding_number(point: Point, ring: Ring) -> int:
        """
        Signed number of times the ring winds around _point_.

        Upward edges crossing the horizontal through the point with the point
        left of the edge count +1, downward edges with the point right of the
        edge count -1.
        """
        pts = VpPolygon._as_array(ring)
        if pts.shape[0] < 3:
            return 0
        px, py = point
        xi, yi, xj, yj = VpPolygon._edges(pts)
        # > 0: point left of edge, < 0: right of edge
        is_left = (xj - xi) * (py - yi) - (px - xi) * (yj - yi)
        upward = (yi <= py) & (yj > py) & (is_left > 0)
        downward = (yi > py) & (yj <= py) & (is_left < 0)
        return int(np.count_nonzero(upward)) - int(np.count_nonzero(downward))

    @staticmethod
    def point_in_polygon(point: Point, ring: Ring, rule: FillRule = "nonzero") -> bool:
        """
        Return True if _point_ is inside _ring_ under the given fill _rule_.

        Rings with fewer than 3 points never contain anything.

        Raises:
            ValueError: If _rule_ is not a supported fill rule.
        """
        if check_fill_rule(rule) == "evenodd":
            return VpPolygon.crossings(point, ring) % 2 == 1
        return VpPolygon.winding_number(point, ring) != 0

    @staticmethod
    def point_in_rings(point: Point, rings: Sequence[Ring], rule: FillRule = "nonzero") -> bool:
        """Return True if _point_ is inside the area filled by all _rings_ together."""
        if check_fill_rule(rule) == "evenodd":
            return sum(VpPolygon.crossings(point, ring) for ring in rings) % 2 == 1
        return sum(VpPolygon.winding_number(point, ring) for ring in rings) != 0

    @staticmethod
    def signed_area(ring: Ring) -> float:
        """Shoelace area; positive for counter-clockwise rings (y-axis up)."""
        pts = VpPolygon._as_array(ring)
        if pts.shape[0] < 3:
            return 0.0
        xi, yi, xj, yj = VpPolygon._edges(pts)
        cross_sum = float((xi * yj - xj * yi).sum())
        if np.isclose(cross_sum, 0.0):
            return 0.0
        return 0.5 * cross_sum

    @staticmethod
    def area(ring: Ring) -> float:
        """Absolute area of the ring, 0.0 for fewer than 3 points."""
        return abs(VpPolygon.signed_area(ring))

    @staticmethod
    def is_ccw(ring: Ring) -> bool:
        """Return True if the ring runs counter-clockwise (in a y-up system)."""
        return VpPolygon.signed_area(ring) > 0.0
