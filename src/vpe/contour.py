"""Distance from a point to the rendered outline (contour) of a sub-path."""

from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from vpe.arc import EllipticalArc
from vpe.bezier import BezierCurve
from vpe.command import VpSubPath
from vpe.common import DEFAULT_POLICY, GeometryPolicy, Point
from vpe.geom import GeomMath
from vpe.path_resolver import PathPositionResolver, ResolvedCommand


class ContourDistance:
    """Static methods measuring point-to-contour distances.

    Straight segments are measured exactly, curves and arcs as the minimum
    over uniformly spaced samples (start and end point included).
    """

    @staticmethod
    def distance_to_samples(point: Point, samples: NDArray[np.float64]) -> float:
        """Minimum distance from _point_ to any of the _samples_ (shape (n, 2))."""
        if samples.shape[0] == 0:
            return math.inf
        return float(np.hypot(samples[:, 0] - point[0], samples[:, 1] - point[1]).min())

    @staticmethod
    def distance_to_cubic(point: Point, p0: Point, p1: Point, p2: Point, p3: Point, steps: int) -> float:
        """Sampled distance from _point_ to a cubic Bezier curve."""
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        samples = BezierCurve.polygonize_cubic_curve([p0, p1, p2, p3], steps)
        return ContourDistance.distance_to_samples(point, samples)

    @staticmethod
    def distance_to_quadratic(point: Point, p0: Point, p1: Point, p2: Point, steps: int) -> float:
        """Sampled distance from _point_ to a quadratic Bezier curve."""
        samples = BezierCurve.polygonize_quadratic_curve([p0, p1, p2], steps)
        return ContourDistance.distance_to_samples(point, samples)

    @staticmethod
    def distance_to_arc(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        point: Point,
        start: Point,
        end: Point,
        rx: float,
        ry: float,
        x_axis_rotation: float,
        large_arc_flag: bool,
        sweep_flag: bool,
        steps: int,
    ) -> float:
        """Sampled distance from _point_ to an elliptical arc; degenerate arcs are measured as a straight segment."""
        center = EllipticalArc.to_center(start, end, rx, ry, x_axis_rotation, large_arc_flag, sweep_flag)
        if center is None:
            return GeomMath.distance_to_segment(point, start, end)
        return ContourDistance.distance_to_samples(point, center.sample(steps))

    @staticmethod
    def segment_distance(point: Point, rc: ResolvedCommand, steps: int) -> Optional[float]:
        """
        Distance from _point_ to the segment drawn by one resolved command.

        Returns:
            Optional[float]: None if the command draws nothing (moves,
                commands with missing coordinates)
        """
        letter = rc.letter
        start = rc.start

        if letter == "Z":
            return GeomMath.distance_to_segment(point, start, rc.contour_start)
        if rc.anchor is None or letter == "M":
            return None

        anchor = rc.anchor
        if letter in "LHV":
            return GeomMath.distance_to_segment(point, start, anchor)
        if letter == "C":
            if len(rc.controls) < 2:
                return None
            return ContourDistance.distance_to_cubic(point, start, rc.controls[0], rc.controls[1], anchor, steps)
        if letter == "S":
            if not rc.controls or rc.reflected is None:
                return None
            return ContourDistance.distance_to_cubic(point, start, rc.reflected, rc.controls[0], anchor, steps)
        if letter == "Q":
            if not rc.controls:
                return None
            return ContourDistance.distance_to_quadratic(point, start, rc.controls[0], anchor, steps)
        if letter == "T":
            if rc.reflected is None:
                return None
            return ContourDistance.distance_to_quadratic(point, start, rc.reflected, anchor, steps)
        if letter == "A":
            cmd = rc.command
            if cmd.rx is None or cmd.ry is None:
                return None
            return ContourDistance.distance_to_arc(
                point,
                start,
                anchor,
                cmd.rx,
                cmd.ry,
                cmd.x_axis_rotation or 0.0,
                bool(cmd.large_arc_flag),
                bool(cmd.sweep_flag),
                steps,
            )
        return None

    @staticmethod
    def distance_to_resolved(point: Point, resolved: Sequence[ResolvedCommand], steps: int) -> float:
        """Minimum distance from _point_ to the contour of resolved commands; inf below 2 anchors."""
        if len(PathPositionResolver.anchors(resolved)) < 2:
            return math.inf

        min_distance = math.inf
        for i, rc in enumerate(resolved):
            # A leading command has no preceding point to draw from
            if i == 0:
                continue
            dist = ContourDistance.segment_distance(point, rc, steps)
            if dist is not None and dist < min_distance:
                min_distance = dist
        return min_distance

    @staticmethod
    def distance_to_contour(
        point: Point,
        subpath: VpSubPath,
        all_subpaths: Optional[Sequence[VpSubPath]] = None,
        policy: GeometryPolicy = DEFAULT_POLICY,
    ) -> float:
        """
        Minimum distance from _point_ to any rendered segment of _subpath_, ignoring fill.

        Args:
            point (Tuple[float, float]): query point in path-space
            subpath (VpSubPath): the sub-path
            all_subpaths (Optional[Sequence[VpSubPath]]): all sub-paths of the path
            policy (GeometryPolicy): supplies the curve sample count

        Returns:
            float: the distance, inf if the sub-path has fewer than 2
                resolvable points or is not among _all_subpaths_
        """
        resolved = PathPositionResolver.resolve_subpath(subpath, all_subpaths)
        if resolved is None:
            return math.inf
        return ContourDistance.distance_to_resolved(point, resolved, policy.distance_steps)
