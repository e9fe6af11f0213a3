"""Path polygonization utilities for converting sub-paths to polygon rings."""

from __future__ import annotations

from typing import List, Optional, Sequence

import numpy as np
from numpy.typing import NDArray

from vpe.arc import EllipticalArc
from vpe.bezier import BezierCurve
from vpe.command import VpPath, VpSubPath
from vpe.common import DEFAULT_POLICY, GeometryPolicy
from vpe.geom import VpBox
from vpe.path_closure import PathClosureDetector
from vpe.path_resolver import PathPositionResolver, ResolvedCommand
from vpe.polygon import VpPolygon


class PathPolygonizer:
    """Utility class for polygonizing sub-paths with curves into point rings."""

    @staticmethod
    def segment_points(rc: ResolvedCommand, steps: int) -> Optional[NDArray[np.float64]]:
        """
        Sample the segment drawn by one resolved command, without its start point.

        Moves, lines and horizontal/vertical lines yield their anchor only,
        curves and arcs _steps_ samples ending at the anchor.

        Returns:
            Optional[NDArray[np.float64]]: points of shape (n, 2), None for
                close commands and commands with missing coordinates
        """
        if rc.anchor is None:
            return None

        letter = rc.letter
        start = rc.start
        anchor = rc.anchor

        if letter in "MLHV":
            return np.array([anchor], dtype=np.float64)

        if letter == "C":
            if len(rc.controls) < 2:
                return None
            return BezierCurve.polygonize_cubic_curve(
                [start, rc.controls[0], rc.controls[1], anchor], steps, skip_first=True
            )

        if letter == "S":
            if not rc.controls or rc.reflected is None:
                return None
            return BezierCurve.polygonize_cubic_curve([start, rc.reflected, rc.controls[0], anchor], steps, skip_first=True)

        if letter == "Q":
            if not rc.controls:
                return None
            return BezierCurve.polygonize_quadratic_curve([start, rc.controls[0], anchor], steps, skip_first=True)

        if letter == "T":
            if rc.reflected is None:
                return None
            return BezierCurve.polygonize_quadratic_curve([start, rc.reflected, anchor], steps, skip_first=True)

        if letter == "A":
            cmd = rc.command
            if cmd.rx is None or cmd.ry is None:
                return None
            return EllipticalArc.polygonize_arc(
                start,
                anchor,
                cmd.rx,
                cmd.ry,
                cmd.x_axis_rotation or 0.0,
                bool(cmd.large_arc_flag),
                bool(cmd.sweep_flag),
                steps,
                skip_first=True,
            )

        return None

    @staticmethod
    def polygonize_resolved(resolved: Sequence[ResolvedCommand], steps: int) -> NDArray[np.float64]:
        """
        Convert resolved commands to a polygon ring.

        Args:
            resolved: Resolved commands of one sub-path
            steps: Number of segments to use for curve approximation

        Returns:
            NDArray[np.float64] of shape (n_points, 2); the closing edge is implicit
        """
        parts: List[NDArray[np.float64]] = []
        for rc in resolved:
            pts = PathPolygonizer.segment_points(rc, steps)
            if pts is not None:
                parts.append(pts)
        if not parts:
            return np.empty((0, 2), dtype=np.float64)
        return np.concatenate(parts, axis=0)

    @staticmethod
    def subpath_polygon(
        subpath: VpSubPath,
        all_subpaths: Optional[Sequence[VpSubPath]] = None,
        steps: Optional[int] = None,
        policy: GeometryPolicy = DEFAULT_POLICY,
    ) -> NDArray[np.float64]:
        """Polygon ring of _subpath_ (empty if it is not among _all_subpaths_)."""
        resolved = PathPositionResolver.resolve_subpath(subpath, all_subpaths)
        if resolved is None:
            return np.empty((0, 2), dtype=np.float64)
        return PathPolygonizer.polygonize_resolved(resolved, policy.polygon_steps if steps is None else steps)

    @staticmethod
    def resolved_area(resolved: Sequence[ResolvedCommand], policy: GeometryPolicy = DEFAULT_POLICY) -> float:
        """Approximate enclosed area; 0.0 for open sub-paths and rings below 3 points."""
        if not PathClosureDetector.is_resolved_closed(resolved, policy):
            return 0.0
        return VpPolygon.area(PathPolygonizer.polygonize_resolved(resolved, policy.polygon_steps))

    @staticmethod
    def subpath_area(
        subpath: VpSubPath,
        all_subpaths: Optional[Sequence[VpSubPath]] = None,
        policy: GeometryPolicy = DEFAULT_POLICY,
    ) -> float:
        """Approximate enclosed area of _subpath_ (shoelace over its polygon ring)."""
        resolved = PathPositionResolver.resolve_subpath(subpath, all_subpaths)
        if resolved is None:
            return 0.0
        return PathPolygonizer.resolved_area(resolved, policy)

    @staticmethod
    def subpath_bounds(
        subpath: VpSubPath,
        all_subpaths: Optional[Sequence[VpSubPath]] = None,
        policy: GeometryPolicy = DEFAULT_POLICY,
    ) -> Optional[VpBox]:
        """
        Bounding box of the rendered outline of _subpath_.

        Curves are polygonized with the fine distance sample count, so the box
        follows the curve rather than its control polygon.

        Returns:
            Optional[VpBox]: None if the sub-path has no resolvable point
        """
        ring = PathPolygonizer.subpath_polygon(subpath, all_subpaths, policy.distance_steps, policy)
        return VpBox.from_points(ring)

    @staticmethod
    def path_bounds(path: VpPath, policy: GeometryPolicy = DEFAULT_POLICY) -> Optional[VpBox]:
        """Bounding box over all sub-paths of _path_, None if nothing is resolvable."""
        box: Optional[VpBox] = None
        for subpath in path.subpaths:
            sub_box = PathPolygonizer.subpath_bounds(subpath, path.subpaths, policy)
            if sub_box is None:
                continue
            box = sub_box if box is None else box.union(sub_box)
        return box
