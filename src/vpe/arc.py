"""Elliptical arc handling: endpoint to center parameterization and sampling."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np
from numpy.typing import NDArray

from vpe.common import Point


###############################################################################
# ArcCenter
###############################################################################
@dataclass(frozen=True)
class ArcCenter:
    """Center parameterization of an elliptical arc.

    Attributes:
        cx, cy: Center of the ellipse
        rx, ry: Radii, already scaled up if the given radii were too small
        phi: Rotation of the ellipse x-axis in radians
        theta_start: Angle of the start point in radians
        theta_delta: Signed angular span in radians (positive = sweep-flag 1)
    """

    cx: float
    cy: float
    rx: float
    ry: float
    phi: float
    theta_start: float
    theta_delta: float

    def point_at(self, angle: float) -> Point:
        """Point on the ellipse at the given parametric _angle_ (radians)."""
        cos_phi = math.cos(self.phi)
        sin_phi = math.sin(self.phi)
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        return (
            self.cx + self.rx * cos_a * cos_phi - self.ry * sin_a * sin_phi,
            self.cy + self.rx * cos_a * sin_phi + self.ry * sin_a * cos_phi,
        )

    def sample(self, steps: int, skip_first: bool = False) -> NDArray[np.float64]:
        """Sample the arc at _steps_ uniform angular steps, shape (steps+1, 2)."""
        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)
        if skip_first:
            t = t[1:]
        angles = self.theta_start + t * self.theta_delta
        cos_phi = math.cos(self.phi)
        sin_phi = math.sin(self.phi)
        cos_a = np.cos(angles)
        sin_a = np.sin(angles)
        x = self.cx + self.rx * cos_a * cos_phi - self.ry * sin_a * sin_phi
        y = self.cy + self.rx * cos_a * sin_phi + self.ry * sin_a * cos_phi
        return np.column_stack([x, y])


###############################################################################
# EllipticalArc
###############################################################################
class EllipticalArc:
    """Static helpers for SVG elliptical arcs."""

    @staticmethod
    def to_center(
        # pylint: disable=too-many-arguments,too-many-positional-arguments,too-many-locals
        start: Point,
        end: Point,
        rx: float,
        ry: float,
        x_axis_rotation: float,
        large_arc_flag: bool,
        sweep_flag: bool,
    ) -> Optional[ArcCenter]:
        """
        Convert the endpoint parameterization of an arc to its center parameterization.

        Follows the conversion of the SVG implementation notes:
            1. compute the rotated midpoint (x1', y1')
            2. scale the radii up if no ellipse fits the chord
            3. solve for the center (cx', cy'), the flags select the sign
            4. transform the center back and derive start angle and sweep

        Args:
            start (Tuple[float, float]): absolute start point
            end (Tuple[float, float]): absolute end point
            rx (float): x radius (sign is ignored)
            ry (float): y radius (sign is ignored)
            x_axis_rotation (float): rotation of the ellipse in degrees
            large_arc_flag (bool): choose the arc spanning more than 180 degrees
            sweep_flag (bool): choose the arc drawn in positive angle direction

        Returns:
            Optional[ArcCenter]: None for degenerate arcs (zero radius or
                coincident endpoints), to be drawn as a straight line.
        """
        rx = abs(rx)
        ry = abs(ry)
        if rx == 0.0 or ry == 0.0:
            return None
        if start[0] == end[0] and start[1] == end[1]:
            return None

        phi = math.radians(x_axis_rotation)
        cos_phi = math.cos(phi)
        sin_phi = math.sin(phi)

        # Step 1: Compute (x1', y1')
        dx = (start[0] - end[0]) / 2.0
        dy = (start[1] - end[1]) / 2.0
        x1p = cos_phi * dx + sin_phi * dy
        y1p = -sin_phi * dx + cos_phi * dy

        # Ensure radii are large enough
        lam = (x1p * x1p) / (rx * rx) + (y1p * y1p) / (ry * ry)
        if lam > 1.0:
            sqrt_lam = math.sqrt(lam)
            rx *= sqrt_lam
            ry *= sqrt_lam

        # Step 2: Compute (cx', cy')
        rx_sq = rx * rx
        ry_sq = ry * ry
        x1p_sq = x1p * x1p
        y1p_sq = y1p * y1p
        num = rx_sq * ry_sq - rx_sq * y1p_sq - ry_sq * x1p_sq
        den = rx_sq * y1p_sq + ry_sq * x1p_sq
        sign = -1.0 if bool(large_arc_flag) == bool(sweep_flag) else 1.0
        coeff = sign * math.sqrt(max(0.0, num / den))
        cxp = coeff * (rx * y1p / ry)
        cyp = coeff * -(ry * x1p / rx)

        # Step 3: Compute (cx, cy)
        cx = cos_phi * cxp - sin_phi * cyp + (start[0] + end[0]) / 2.0
        cy = sin_phi * cxp + cos_phi * cyp + (start[1] + end[1]) / 2.0

        # Step 4: Compute angles
        theta_start = math.atan2((y1p - cyp) / ry, (x1p - cxp) / rx)
        theta_end = math.atan2((-y1p - cyp) / ry, (-x1p - cxp) / rx)
        theta_delta = theta_end - theta_start
        if sweep_flag and theta_delta < 0.0:
            theta_delta += 2.0 * math.pi
        elif not sweep_flag and theta_delta > 0.0:
            theta_delta -= 2.0 * math.pi

        return ArcCenter(cx, cy, rx, ry, phi, theta_start, theta_delta)

    @staticmethod
    def polygonize_arc(
        # pylint: disable=too-many-arguments,too-many-positional-arguments
        start: Point,
        end: Point,
        rx: float,
        ry: float,
        x_axis_rotation: float,
        large_arc_flag: bool,
        sweep_flag: bool,
        steps: int,
        skip_first: bool = False,
    ) -> NDArray[np.float64]:
        """
        Sample an arc into _steps_ segments.

        Degenerate arcs are sampled as a straight line from start to end.

        Returns:
            NDArray[np.float64] of shape (steps+1, 2), or (steps, 2) with skip_first
        """
        if steps < 1:
            raise ValueError(f"steps must be at least 1, got {steps}")
        center = EllipticalArc.to_center(start, end, rx, ry, x_axis_rotation, large_arc_flag, sweep_flag)
        if center is not None:
            return center.sample(steps, skip_first)

        # Fallback to linear interpolation
        t = np.linspace(0.0, 1.0, steps + 1, dtype=np.float64)
        if skip_first:
            t = t[1:]
        x = start[0] + (end[0] - start[0]) * t
        y = start[1] + (end[1] - start[1]) * t
        return np.column_stack([x, y])
