"""Central module containing types, fill rules and the geometry policy."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Tuple

###############################################################################
# Types
###############################################################################

# A point in path-space (not screen-space)
Point = Tuple[float, float]

VpCmds = Literal[  # Type-Definition for SvgPath-Commands; uppercase = absolute, lowercase = relative
    # MoveTo (2) - start a new contour and move the current point to (x,y)
    "M",
    "m",
    # LineTo (2) - draw a straight line from the current point to (x,y)
    "L",
    "l",
    # Horizontal LineTo (1) - draw a horizontal line to the given x coordinate (y stays unchanged)
    "H",
    "h",
    # Vertical LineTo (1) - draw a vertical line to the given y coordinate (x stays unchanged)
    "V",
    "v",
    # Cubic Bezier To (6) - draw a cubic Bezier curve with two control points and an endpoint (x,y)
    "C",
    "c",
    # Smooth cubic Bezier To (4) - first control point is the reflection of the previous one
    "S",
    "s",
    # Quadratic Bezier To (4) - draw a quadratic Bezier curve with one control point and an endpoint (x,y)
    "Q",
    "q",
    # Smooth quadratic Bezier To (2) - control point is the reflection of the previous one
    "T",
    "t",
    # Arc (7) - elliptical arc (rx ry x-axis-rotation large-arc-flag sweep-flag x y)
    "A",
    "a",
    # ClosePath (0) - close the contour by drawing a line back to its start point
    "Z",
    "z",
]

FillRule = Literal["nonzero", "evenodd"]

FILL_RULES: Tuple[str, ...] = ("nonzero", "evenodd")

# Default maximum contour distance for a hit
DEFAULT_TOLERANCE: float = 15.0


def check_fill_rule(fill_rule: str) -> FillRule:
    """Return _fill_rule_ unchanged if it is a supported fill rule.

    Raises:
        ValueError: If the fill rule is neither "nonzero" nor "evenodd".
    """
    if fill_rule not in FILL_RULES:
        raise ValueError(f"Unknown fill rule '{fill_rule}' (expected one of {', '.join(FILL_RULES)})")
    return fill_rule  # type: ignore[return-value]


###############################################################################
# GeometryPolicy
###############################################################################


@dataclass(frozen=True)
class GeometryPolicy:
    """Tunable constants of the resolution and hit-testing algorithms.

    Attributes:
        closure_tolerance: Max distance between first and last anchor of an
            open-ended sub-path that still counts as closed.
        polygon_steps: Samples per curve when building fill polygons.
        distance_steps: Samples per curve when measuring contour distance.
        fill_bias: Multiplier applied to the contour distance of a sub-path
            whose fill contains the query point (< 1 prefers filled hits).
        area_tie_threshold: Contour distances closer than this are considered
            equal when choosing the innermost sub-path; area decides then.
        edge_snap_distance: Legacy scoring - contour distances below this
            count as "on the edge".
        edge_priority_factor: Legacy scoring - multiplier for edge hits.
        inside_score: Legacy scoring - fixed score of an inside hit.
    """

    closure_tolerance: float = 1.0
    polygon_steps: int = 10
    distance_steps: int = 50
    fill_bias: float = 0.8
    area_tie_threshold: float = 1.0
    edge_snap_distance: float = 5.0
    edge_priority_factor: float = 0.5
    inside_score: float = 10.0

    def __post_init__(self):
        if self.polygon_steps < 1 or self.distance_steps < 1:
            raise ValueError(
                f"Sample counts must be positive (polygon_steps={self.polygon_steps}, "
                f"distance_steps={self.distance_steps})"
            )

    def to_dict(self) -> dict:
        """Convert the policy to a dictionary for serialization."""
        return {
            "closure_tolerance": self.closure_tolerance,
            "polygon_steps": self.polygon_steps,
            "distance_steps": self.distance_steps,
            "fill_bias": self.fill_bias,
            "area_tie_threshold": self.area_tie_threshold,
            "edge_snap_distance": self.edge_snap_distance,
            "edge_priority_factor": self.edge_priority_factor,
            "inside_score": self.inside_score,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GeometryPolicy:
        """Create a GeometryPolicy from a dictionary; missing keys use the defaults."""
        defaults = cls()
        return cls(
            closure_tolerance=data.get("closure_tolerance", defaults.closure_tolerance),
            polygon_steps=data.get("polygon_steps", defaults.polygon_steps),
            distance_steps=data.get("distance_steps", defaults.distance_steps),
            fill_bias=data.get("fill_bias", defaults.fill_bias),
            area_tie_threshold=data.get("area_tie_threshold", defaults.area_tie_threshold),
            edge_snap_distance=data.get("edge_snap_distance", defaults.edge_snap_distance),
            edge_priority_factor=data.get("edge_priority_factor", defaults.edge_priority_factor),
            inside_score=data.get("inside_score", defaults.inside_score),
        )


DEFAULT_POLICY = GeometryPolicy()
