"""Bezier curve evaluation and sampling for path flattening and distance queries."""

from __future__ import annotations

from typing import Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

from vpe.common import Point

ControlPoints = Union[Sequence[Tuple[float, float]], NDArray[np.float64]]


class BezierCurve:
    """Class to handle quadratic and cubic Bezier curve operations.

    All curves are evaluated in the explicit Bernstein form at uniform
    parameter steps, so sampling a curve with _steps_ segments yields
    _steps_ + 1 points (or _steps_ points when the start point is skipped).
    """

    @staticmethod
    def cubic_point(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
        """Point on a cubic Bezier curve at parameter _t_."""
        mt = 1.0 - t
        mt2 = mt * mt
        mt3 = mt2 * mt
        t2 = t * t
        t3 = t2 * t
        return (
            mt3 * p0[0] + 3.0 * mt2 * t * p1[0] + 3.0 * mt * t2 * p2[0] + t3 * p3[0],
            mt3 * p0[1] + 3.0 * mt2 * t * p1[1] + 3.0 * mt * t2 * p2[1] + t3 * p3[1],
        )

    @staticmethod
    def quadratic_point(p0: Point, p1: Point, p2: Point, t: float) -> Point:
        """Point on a quadratic Bezier curve at parameter _t_."""
        mt = 1.0 - t
        return (
            mt * mt * p0[0] + 2.0 * mt * t * p1[0] + t * t * p2[0],
            mt * mt * p0[1] + 2.0 * mt * t * p1[1] + t * t * p2[1],
        )

    @staticmethod
    def _parameters(steps: int, skip_first: bool) -> NDArray[np.float64]:
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")
        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)
        if skip_first:
            t = t[1:]  # Skip t=0, but keep t=1.0
        return t

    @classmethod
    def polygonize_cubic_curve(cls, points: ControlPoints, steps: int, skip_first: bool = False) -> NDArray[np.float64]:
        """
        Polygonize a cubic Bezier curve into line segments.

        Args:
            points: Control points - exactly 4 points: start, control1, control2, end
            steps: Number of segments to divide the curve into
            skip_first: If True, skip the start point (to avoid duplication when chaining)

        Returns:
            NDArray[np.float64] of shape (steps+1, 2), or (steps, 2) with skip_first
        """
        points_array = np.asarray(points, dtype=np.float64)
        if points_array.shape != (4, 2):
            raise ValueError(f"Cubic Bezier curve needs 4 points of shape (4, 2), got {points_array.shape}")
        t = cls._parameters(steps, skip_first)

        # Cubic Bezier basis functions
        omt = 1 - t
        omt2 = omt**2
        omt3 = omt2 * omt
        t2 = t**2
        t3 = t2 * t

        basis = np.column_stack([omt3, 3 * omt2 * t, 3 * omt * t2, t3])
        return basis @ points_array

    @classmethod
    def polygonize_quadratic_curve(
        cls, points: ControlPoints, steps: int, skip_first: bool = False
    ) -> NDArray[np.float64]:
        """
        Polygonize a quadratic Bezier curve into line segments.

        Args:
            points: Control points - exactly 3 points: start, control, end
            steps: Number of segments to divide the curve into
            skip_first: If True, skip the start point (to avoid duplication when chaining)

        Returns:
            NDArray[np.float64] of shape (steps+1, 2), or (steps, 2) with skip_first
        """
        points_array = np.asarray(points, dtype=np.float64)
        if points_array.shape != (3, 2):
            raise ValueError(f"Quadratic Bezier curve needs 3 points of shape (3, 2), got {points_array.shape}")
        t = cls._parameters(steps, skip_first)

        # Quadratic Bezier basis functions
        omt = 1 - t
        basis = np.column_stack([omt**2, 2 * omt * t, t**2])
        return basis @ points_array
