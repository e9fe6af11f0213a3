"""Closure detection of sub-paths."""

from __future__ import annotations

from typing import Optional, Sequence

from vpe.command import VpSubPath
from vpe.common import DEFAULT_POLICY, GeometryPolicy
from vpe.geom import GeomMath
from vpe.path_resolver import PathPositionResolver, ResolvedCommand


class PathClosureDetector:
    """Decides whether a sub-path encloses an area."""

    @staticmethod
    def is_resolved_closed(resolved: Sequence[ResolvedCommand], policy: GeometryPolicy = DEFAULT_POLICY) -> bool:
        """
        Return True if the resolved commands form a closed sub-path.

        Closed means an explicit trailing close command, or first and last
        resolvable anchors closer than the closure tolerance.
        """
        if not resolved:
            return False
        if resolved[-1].command.is_close:
            return True

        anchors = PathPositionResolver.anchors(resolved)
        if not anchors:
            return False
        return GeomMath.distance(anchors[0], anchors[-1]) < policy.closure_tolerance

    @staticmethod
    def is_subpath_closed(
        subpath: VpSubPath,
        all_subpaths: Optional[Sequence[VpSubPath]] = None,
        policy: GeometryPolicy = DEFAULT_POLICY,
    ) -> bool:
        """Return True if _subpath_ is closed; False if it is not among _all_subpaths_."""
        resolved = PathPositionResolver.resolve_subpath(subpath, all_subpaths)
        if resolved is None:
            return False
        return PathClosureDetector.is_resolved_closed(resolved, policy)
