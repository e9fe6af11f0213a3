"""Hit-testing: which sub-path of a path does a query point hit."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cached_property
from typing import List, Optional, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from vpe.command import VpPath, VpSubPath
from vpe.common import DEFAULT_POLICY, DEFAULT_TOLERANCE, FillRule, GeometryPolicy, Point, check_fill_rule
from vpe.contour import ContourDistance
from vpe.path_closure import PathClosureDetector
from vpe.path_polygonizer import PathPolygonizer
from vpe.path_resolver import PathPositionResolver, ResolvedCommand
from vpe.polygon import VpPolygon

logger = logging.getLogger(__name__)


###############################################################################
# HitTestOptions
###############################################################################
@dataclass(frozen=True)
class HitTestOptions:
    """Options of an advanced hit-test query.

    Attributes:
        tolerance: Recorded distances must be strictly below this value
        fill_rule: Fill rule for the containment test ("nonzero" or "evenodd")
        include_fill: Whether closed sub-paths containing the point count as fill hits
        include_stroke: Whether sub-paths near the point count as stroke hits
    """

    tolerance: float = DEFAULT_TOLERANCE
    fill_rule: FillRule = "nonzero"
    include_fill: bool = True
    include_stroke: bool = True

    def __post_init__(self):
        check_fill_rule(self.fill_rule)

    def to_dict(self) -> dict:
        """Convert the options to a dictionary for serialization."""
        return {
            "tolerance": self.tolerance,
            "fill_rule": self.fill_rule,
            "include_fill": self.include_fill,
            "include_stroke": self.include_stroke,
        }

    @classmethod
    def from_dict(cls, data: dict) -> HitTestOptions:
        """Create HitTestOptions from a dictionary; missing keys use the defaults."""
        return cls(
            tolerance=data.get("tolerance", DEFAULT_TOLERANCE),
            fill_rule=data.get("fill_rule", "nonzero"),
            include_fill=data.get("include_fill", True),
            include_stroke=data.get("include_stroke", True),
        )


###############################################################################
# HitCandidate
###############################################################################
@dataclass
class HitCandidate:
    """A sub-path qualifying for one hit-test query.

    Attributes:
        subpath: The caller's sub-path object
        distance: Distance recorded for ranking (biased or scored)
        contour_distance: Unbiased distance to the contour
        is_inside: Whether the point lies in the fill of the sub-path
        area: Approximate enclosed area (0.0 if not needed or open)
    """

    subpath: VpSubPath
    distance: float
    contour_distance: float
    is_inside: bool
    area: float = 0.0


###############################################################################
# SubPathGeometry
###############################################################################
class SubPathGeometry:
    """Lazily computed geometry of one sub-path within a path snapshot.

    The carried start _offset_ is passed in, so a hit-test folds the start
    offsets of all sub-paths once and every quantity is computed at most once
    per query.
    """

    def __init__(
        self,
        subpath: VpSubPath,
        offset: Point,
        policy: GeometryPolicy = DEFAULT_POLICY,
    ):
        self.subpath = subpath
        self.offset = offset
        self.policy = policy

    @cached_property
    def resolved(self) -> Tuple[ResolvedCommand, ...]:
        """Resolved commands, walked from the carried offset."""
        return PathPositionResolver.resolve_subpath_at(self.subpath, self.offset)

    @cached_property
    def closed(self) -> bool:
        """Whether the sub-path encloses an area."""
        return PathClosureDetector.is_resolved_closed(self.resolved, self.policy)

    @cached_property
    def polygon(self) -> NDArray[np.float64]:
        """Fill polygon ring, sampled with the polygon sample count."""
        return PathPolygonizer.polygonize_resolved(self.resolved, self.policy.polygon_steps)

    @cached_property
    def area(self) -> float:
        """Approximate enclosed area, 0.0 for open sub-paths."""
        if not self.closed:
            return 0.0
        return VpPolygon.area(self.polygon)

    def contour_distance(self, point: Point) -> float:
        """Distance from _point_ to the rendered outline."""
        return ContourDistance.distance_to_resolved(point, self.resolved, self.policy.distance_steps)

    def contains(self, point: Point, rule: FillRule = "nonzero") -> bool:
        """Whether _point_ lies in the fill; open sub-paths contain nothing."""
        if not self.closed:
            return False
        return VpPolygon.point_in_polygon(point, self.polygon, rule)


###############################################################################
# PathHitTester
###############################################################################
class PathHitTester:
    """Static methods deciding which sub-path of a path a point hits.

    All finders return the caller's own VpSubPath object, or None when no
    sub-path qualifies.
    """

    @staticmethod
    def _geometries(path: VpPath, policy: GeometryPolicy) -> List[SubPathGeometry]:
        if path is None:
            raise ValueError("Hit-test needs a path, got None")
        offsets = PathPositionResolver.subpath_start_offsets(path.subpaths)
        return [SubPathGeometry(sp, offset, policy) for sp, offset in zip(path.subpaths, offsets)]

    @staticmethod
    def is_point_inside_subpath(
        subpath: VpSubPath,
        point: Point,
        rule: FillRule = "nonzero",
        all_subpaths: Optional[Sequence[VpSubPath]] = None,
        policy: GeometryPolicy = DEFAULT_POLICY,
    ) -> bool:
        """
        Return True if _point_ lies in the fill of _subpath_.

        Args:
            subpath (VpSubPath): the sub-path to test
            point (Tuple[float, float]): query point in path-space
            rule (str): "nonzero" or "evenodd"
            all_subpaths (Optional[Sequence[VpSubPath]]): all sub-paths of the path
            policy (GeometryPolicy): closure tolerance and polygon sample count

        Returns:
            bool: False for open sub-paths and sub-paths not among _all_subpaths_

        Raises:
            ValueError: If _rule_ is not a supported fill rule.
        """
        check_fill_rule(rule)
        offset = PathPositionResolver.start_offset(subpath, all_subpaths)
        if offset is None:
            return False
        return SubPathGeometry(subpath, offset, policy).contains(point, rule)

    @staticmethod
    def find_subpath_at_point(
        path: VpPath,
        point: Point,
        tolerance: float = DEFAULT_TOLERANCE,
        policy: GeometryPolicy = DEFAULT_POLICY,
    ) -> Optional[VpSubPath]:
        """
        Unified stroke and fill scoring.

        A contour distance below the edge snap distance scores as an edge hit
        (distance times the edge priority factor), otherwise a point in the
        nonzero fill scores the fixed inside score, otherwise the contour
        distance is the score. Sub-paths qualify with a score below
        _tolerance_ or when they contain the point. Edge hits rank first
        (nearest edge wins), then inside hits (nearest contour wins), then
        the rest by score.
        """
        candidates: List[HitCandidate] = []
        for geometry in PathHitTester._geometries(path, policy):
            contour = geometry.contour_distance(point)
            inside = geometry.contains(point)
            if contour < policy.edge_snap_distance:
                score = contour * policy.edge_priority_factor
            elif inside:
                score = policy.inside_score
            else:
                score = contour
            if score < tolerance or inside:
                candidates.append(HitCandidate(geometry.subpath, score, contour, inside))

        if not candidates:
            logger.debug("find_subpath_at_point %s: no candidate", point)
            return None

        def rank(candidate: HitCandidate) -> Tuple[int, float]:
            if candidate.contour_distance < policy.edge_snap_distance:
                return (0, candidate.contour_distance)
            if candidate.is_inside:
                return (1, candidate.contour_distance)
            return (2, candidate.distance)

        best = min(candidates, key=rank)
        logger.debug("find_subpath_at_point %s: %d candidates, hit %s", point, len(candidates), best.subpath.id)
        return best.subpath

    @staticmethod
    def find_subpath_at_point_advanced(
        path: VpPath,
        point: Point,
        options: Optional[HitTestOptions] = None,
        policy: GeometryPolicy = DEFAULT_POLICY,
    ) -> Optional[VpSubPath]:
        """
        Hit-test with explicit fill and stroke options.

        A closed sub-path containing the point under the fill rule records its
        contour distance times the fill bias, so fill hits win over stroke
        hits at the same distance. Otherwise (if strokes are included) the
        plain contour distance is recorded. Only distances strictly below the
        tolerance qualify; the minimum wins, exact ties between two fill hits
        go to the smaller area.

        Args:
            path (VpPath): the path to test
            point (Tuple[float, float]): query point in path-space
            options (Optional[HitTestOptions]): query options, defaults if None
            policy (GeometryPolicy): tunable constants

        Returns:
            Optional[VpSubPath]: the hit sub-path or None
        """
        if options is None:
            options = HitTestOptions()

        best: Optional[HitCandidate] = None
        count = 0
        for geometry in PathHitTester._geometries(path, policy):
            contour = geometry.contour_distance(point)
            if options.include_fill and geometry.contains(point, options.fill_rule):
                candidate = HitCandidate(geometry.subpath, contour * policy.fill_bias, contour, True, geometry.area)
            elif options.include_stroke:
                candidate = HitCandidate(geometry.subpath, contour, contour, False)
            else:
                continue

            if not candidate.distance < options.tolerance:
                continue
            count += 1
            if best is None or candidate.distance < best.distance:
                best = candidate
            elif (
                candidate.distance == best.distance
                and candidate.is_inside
                and best.is_inside
                and candidate.area < best.area
            ):
                best = candidate

        if best is None:
            logger.debug("find_subpath_at_point_advanced %s: no candidate", point)
            return None
        logger.debug("find_subpath_at_point_advanced %s: %d candidates, hit %s", point, count, best.subpath.id)
        return best.subpath

    @staticmethod
    def find_innermost_subpath_at_point(
        path: VpPath,
        point: Point,
        tolerance: float = DEFAULT_TOLERANCE,
        policy: GeometryPolicy = DEFAULT_POLICY,
    ) -> Optional[VpSubPath]:
        """
        Pick the innermost of nested sub-paths.

        Candidates contain the point (nonzero rule) or have a contour distance
        below _tolerance_. With several containing sub-paths the one with the
        nearest contour wins; containing sub-paths whose contour distance is
        within the area tie threshold of that minimum are decided by smaller
        area. With a single containing sub-path it wins, otherwise the
        nearest contour wins.
        """
        candidates: List[HitCandidate] = []
        for geometry in PathHitTester._geometries(path, policy):
            contour = geometry.contour_distance(point)
            inside = geometry.contains(point)
            if inside or contour < tolerance:
                candidates.append(HitCandidate(geometry.subpath, contour, contour, inside, geometry.area))

        if not candidates:
            logger.debug("find_innermost_subpath_at_point %s: no candidate", point)
            return None

        inside = [c for c in candidates if c.is_inside]
        if len(inside) > 1:
            nearest = min(c.contour_distance for c in inside)
            near = [c for c in inside if c.contour_distance - nearest < policy.area_tie_threshold]
            best = min(near, key=lambda c: (c.area, c.contour_distance))
        elif inside:
            best = inside[0]
        else:
            best = min(candidates, key=lambda c: c.contour_distance)

        logger.debug(
            "find_innermost_subpath_at_point %s: %d candidates (%d inside), hit %s",
            point,
            len(candidates),
            len(inside),
            best.subpath.id,
        )
        return best.subpath

    @staticmethod
    def is_point_in_path_fill(
        path: VpPath,
        point: Point,
        rule: FillRule = "nonzero",
        policy: GeometryPolicy = DEFAULT_POLICY,
    ) -> bool:
        """
        Return True if _point_ lies in the fill of the whole path.

        The rings of all closed sub-paths are combined the way a renderer
        fills a multi-contour path, so under "evenodd" a hole punched by a
        nested sub-path is outside, while under "nonzero" it depends on the
        winding directions.
        """
        check_fill_rule(rule)
        rings = [g.polygon for g in PathHitTester._geometries(path, policy) if g.closed]
        return VpPolygon.point_in_rings(point, rings, rule)
