"""Query surface of the path geometry engine.

Thin module-level functions over the resolver, closure detector,
polygonizer and hit-tester, for collaborators such as selection logic,
handle editors and overlays. All functions are read-only over the given
model; hit-test functions return the caller's own VpSubPath object.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from vpe.command import VpCommand, VpPath, VpSubPath
from vpe.common import DEFAULT_POLICY, DEFAULT_TOLERANCE, FillRule, GeometryPolicy, Point
from vpe.geom import VpBox
from vpe.path_closure import PathClosureDetector
from vpe.path_hittest import HitTestOptions, PathHitTester
from vpe.path_polygonizer import PathPolygonizer
from vpe.path_resolver import PathPositionResolver
from vpe.svgpath import VpSvgPath


def resolve_absolute_position(
    command: VpCommand, subpath: VpSubPath, all_subpaths: Optional[Sequence[VpSubPath]] = None
) -> Optional[Point]:
    """Absolute anchor of _command_, None for close commands and unresolvable references."""
    return PathPositionResolver.resolve_absolute_position(command, subpath, all_subpaths)


def resolve_absolute_control_points(
    command: VpCommand, subpath: VpSubPath, all_subpaths: Optional[Sequence[VpSubPath]] = None
) -> List[Point]:
    """Absolute explicit control points of _command_ (0, 1 or 2)."""
    return PathPositionResolver.resolve_absolute_control_points(command, subpath, all_subpaths)


def is_subpath_closed(
    subpath: VpSubPath,
    all_subpaths: Optional[Sequence[VpSubPath]] = None,
    policy: GeometryPolicy = DEFAULT_POLICY,
) -> bool:
    """Whether _subpath_ ends in a close command or returns to its first anchor."""
    return PathClosureDetector.is_subpath_closed(subpath, all_subpaths, policy)


def find_subpath_at_point(
    path: VpPath,
    point: Point,
    tolerance: float = DEFAULT_TOLERANCE,
    policy: GeometryPolicy = DEFAULT_POLICY,
) -> Optional[VpSubPath]:
    """Sub-path hit by _point_ under unified stroke and fill scoring."""
    return PathHitTester.find_subpath_at_point(path, point, tolerance, policy)


def find_subpath_at_point_advanced(
    path: VpPath,
    point: Point,
    options: Optional[HitTestOptions] = None,
    policy: GeometryPolicy = DEFAULT_POLICY,
    **overrides,
) -> Optional[VpSubPath]:
    """
    Sub-path hit by _point_ under explicit fill and stroke options.

    Keyword _overrides_ (tolerance, fill_rule, include_fill, include_stroke)
    replace the matching fields of _options_.

    Example:
        find_subpath_at_point_advanced(path, (10, 10), fill_rule="evenodd", include_stroke=False)

    Raises:
        ValueError: If an override names an unknown option or an unknown fill rule.
    """
    if options is None:
        options = HitTestOptions()
    if overrides:
        data = options.to_dict()
        unknown = sorted(set(overrides) - set(data))
        if unknown:
            raise ValueError(f"Unknown hit-test option(s): {', '.join(unknown)}")
        data.update(overrides)
        options = HitTestOptions.from_dict(data)
    return PathHitTester.find_subpath_at_point_advanced(path, point, options, policy)


def find_innermost_subpath_at_point(
    path: VpPath,
    point: Point,
    tolerance: float = DEFAULT_TOLERANCE,
    policy: GeometryPolicy = DEFAULT_POLICY,
) -> Optional[VpSubPath]:
    """Innermost of the nested sub-paths containing _point_ (or nearest within _tolerance_)."""
    return PathHitTester.find_innermost_subpath_at_point(path, point, tolerance, policy)


def is_point_in_path_fill(
    path: VpPath, point: Point, rule: FillRule = "nonzero", policy: GeometryPolicy = DEFAULT_POLICY
) -> bool:
    """Whether _point_ lies in the combined fill of all closed sub-paths of _path_."""
    return PathHitTester.is_point_in_path_fill(path, point, rule, policy)


def subpath_bounds(
    subpath: VpSubPath,
    all_subpaths: Optional[Sequence[VpSubPath]] = None,
    policy: GeometryPolicy = DEFAULT_POLICY,
) -> Optional[VpBox]:
    """Bounding box of the rendered outline of _subpath_."""
    return PathPolygonizer.subpath_bounds(subpath, all_subpaths, policy)


def path_bounds(path: VpPath, policy: GeometryPolicy = DEFAULT_POLICY) -> Optional[VpBox]:
    """Bounding box of all sub-paths of _path_."""
    return PathPolygonizer.path_bounds(path, policy)


def parse_path_string(path_string: str, path_id: Optional[str] = None) -> VpPath:
    """Parse SVG path data into a VpPath, one sub-path per move command."""
    return VpSvgPath.parse_path_string(path_string, path_id)
