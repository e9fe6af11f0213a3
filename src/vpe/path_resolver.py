"""Resolution of absolute command positions within a multi sub-path path.

Every sub-path starts at the final cursor of the previous sub-path (the
first one at the origin). Inside a sub-path the cursor is walked command by
command; relative commands add to it, absolute commands replace it.

The walk of one sub-path is memoized on (command tuple, start offset) and the
carry fold over all sub-paths on the tuple of command tuples. Every query reads its
offset from the fold over the complete sub-path list, so a path has one fold
entry no matter which of its sub-paths is asked for. Commands are
frozen and hashable, so the cache key is the content itself: a model edited
between two calls gets a new key instead of a stale answer.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from vpe.command import VpCommand, VpSubPath, id_index
from vpe.common import Point
from vpe.geom import GeomMath

ORIGIN: Point = (0.0, 0.0)

_CONTROL_FIELDS = {
    "C": (("x1", "y1"), ("x2", "y2")),
    "S": (("x2", "y2"),),
    "Q": (("x1", "y1"),),
}

# Previous command letters whose trailing control point a smooth command reflects
_REFLECTABLE = {"S": "CS", "T": "QT"}


###############################################################################
# ResolvedCommand
###############################################################################
@dataclass(frozen=True)
class ResolvedCommand:
    """Absolute geometry of one command.

    Attributes:
        command: The source command
        index: Index of the command in its sub-path
        start: Cursor before the command (start point of the drawn segment)
        anchor: Absolute end point, None if the command defines none
        controls: Absolute explicit control points (0, 1 or 2)
        reflected: Implicit first control point of S/T commands
        contour_start: Start point of the contour a close command returns to
    """

    command: VpCommand
    index: int
    start: Point
    anchor: Optional[Point]
    controls: Tuple[Point, ...] = ()
    reflected: Optional[Point] = None
    contour_start: Point = ORIGIN

    @property
    def letter(self) -> str:
        """Upper case command letter."""
        return self.command.letter

    @property
    def end(self) -> Point:
        """Cursor after the command."""
        return self.anchor if self.anchor is not None else self.start

    @property
    def trailing_control(self) -> Optional[Point]:
        """Control point adjacent to the anchor, the one a following smooth command reflects."""
        letter = self.letter
        if letter == "C":
            return self.controls[1] if len(self.controls) == 2 else None
        if letter in "SQ":
            return self.controls[0] if self.controls else None
        if letter == "T":
            return self.reflected
        return None


def _reflected_control(prev: Optional[ResolvedCommand], letter: str, current: Point) -> Point:
    """Implicit first control point of a smooth command; the current point if nothing to reflect."""
    if prev is None or prev.anchor is None or prev.letter not in _REFLECTABLE[letter]:
        return current
    control = prev.trailing_control
    if control is None:
        return current
    return GeomMath.reflect_point(control, prev.anchor)


def _resolve_anchor(cmd: VpCommand, cursor: Point) -> Optional[Point]:
    letter = cmd.letter
    rel = cmd.is_relative
    if letter == "Z":
        return None
    if letter == "H":
        if cmd.x is None:
            return None
        return (cursor[0] + cmd.x if rel else cmd.x, cursor[1])
    if letter == "V":
        if cmd.y is None:
            return None
        return (cursor[0], cursor[1] + cmd.y if rel else cmd.y)
    if cmd.x is None or cmd.y is None:
        return None
    if rel:
        return (cursor[0] + cmd.x, cursor[1] + cmd.y)
    return (cmd.x, cmd.y)


def _resolve_controls(cmd: VpCommand, start: Point) -> Tuple[Point, ...]:
    controls = []
    for x_name, y_name in _CONTROL_FIELDS.get(cmd.letter, ()):
        cx = getattr(cmd, x_name)
        cy = getattr(cmd, y_name)
        if cx is None or cy is None:
            continue
        if cmd.is_relative:
            controls.append((start[0] + cx, start[1] + cy))
        else:
            controls.append((cx, cy))
    return tuple(controls)


@lru_cache(maxsize=4096)
def _walk_subpath(commands: Tuple[VpCommand, ...], offset: Point) -> Tuple[Tuple[ResolvedCommand, ...], Point]:
    """Resolve all commands of a sub-path starting at _offset_; returns (resolved, final cursor)."""
    cursor = offset
    contour_start = offset
    prev: Optional[ResolvedCommand] = None
    resolved: List[ResolvedCommand] = []

    for i, cmd in enumerate(commands):
        start = cursor
        anchor = _resolve_anchor(cmd, cursor)
        controls = _resolve_controls(cmd, start)
        reflected = _reflected_control(prev, cmd.letter, start) if cmd.letter in _REFLECTABLE else None

        if anchor is not None:
            cursor = anchor
            if cmd.is_move:
                contour_start = anchor

        current = ResolvedCommand(cmd, i, start, anchor, controls, reflected, contour_start)
        resolved.append(current)
        prev = current

    return tuple(resolved), cursor


@lru_cache(maxsize=1024)
def _start_offsets(keys: Tuple[Tuple[VpCommand, ...], ...]) -> Tuple[Point, ...]:
    """Carried start offset of every sub-path (fold over the final positions)."""
    offsets: List[Point] = []
    position = ORIGIN
    for key in keys:
        offsets.append(position)
        position = _walk_subpath(key, position)[1]
    return tuple(offsets)


###############################################################################
# PathPositionResolver
###############################################################################
class PathPositionResolver:
    """Static methods resolving absolute positions of commands."""

    @staticmethod
    def subpath_start_offsets(all_subpaths: Sequence[VpSubPath]) -> Tuple[Point, ...]:
        """Return the carried start offset of each sub-path in _all_subpaths_."""
        return _start_offsets(tuple(sp.key for sp in all_subpaths))

    @staticmethod
    def start_offset(subpath: VpSubPath, all_subpaths: Optional[Sequence[VpSubPath]] = None) -> Optional[Point]:
        """
        Return the carried start offset of _subpath_.

        Without sibling list the sub-path starts at the origin.
        Returns None if _subpath_ is not among _all_subpaths_ (looked up by id).
        """
        if all_subpaths is None:
            return ORIGIN
        idx = id_index(tuple(sp.id for sp in all_subpaths)).get(subpath.id)
        if idx is None:
            return None
        return PathPositionResolver.subpath_start_offsets(all_subpaths)[idx]

    @staticmethod
    def subpath_final_position(subpath: VpSubPath, start: Point = ORIGIN) -> Point:
        """Cursor after walking all commands of _subpath_ from _start_."""
        return _walk_subpath(subpath.key, (float(start[0]), float(start[1])))[1]

    @staticmethod
    def resolve_subpath_at(subpath: VpSubPath, offset: Point) -> Tuple[ResolvedCommand, ...]:
        """Resolve every command of _subpath_ starting at a known carried _offset_."""
        return _walk_subpath(subpath.key, (float(offset[0]), float(offset[1])))[0]

    @staticmethod
    def resolve_subpath(
        subpath: VpSubPath, all_subpaths: Optional[Sequence[VpSubPath]] = None
    ) -> Optional[Tuple[ResolvedCommand, ...]]:
        """Resolve every command of _subpath_; None if it is not among _all_subpaths_."""
        offset = PathPositionResolver.start_offset(subpath, all_subpaths)
        if offset is None:
            return None
        return _walk_subpath(subpath.key, offset)[0]

    @staticmethod
    def resolve_command(
        command: VpCommand, subpath: VpSubPath, all_subpaths: Optional[Sequence[VpSubPath]] = None
    ) -> Optional[ResolvedCommand]:
        """Resolve a single command, looked up by id; None for unknown commands or sub-paths."""
        idx = subpath.index_of(command.id)
        if idx is None:
            return None
        resolved = PathPositionResolver.resolve_subpath(subpath, all_subpaths)
        if resolved is None:
            return None
        return resolved[idx]

    @staticmethod
    def resolve_absolute_position(
        command: VpCommand, subpath: VpSubPath, all_subpaths: Optional[Sequence[VpSubPath]] = None
    ) -> Optional[Point]:
        """
        Return the absolute anchor of _command_ within _subpath_.

        Args:
            command (VpCommand): the command, matched by id within _subpath_
            subpath (VpSubPath): the sub-path owning the command
            all_subpaths (Optional[Sequence[VpSubPath]]): all sub-paths of the
                path, required to carry the start offset of later sub-paths

        Returns:
            Optional[Tuple[float, float]]: the anchor, None for close commands,
                commands missing coordinates and unknown commands/sub-paths
        """
        resolved = PathPositionResolver.resolve_command(command, subpath, all_subpaths)
        return None if resolved is None else resolved.anchor

    @staticmethod
    def resolve_absolute_control_points(
        command: VpCommand, subpath: VpSubPath, all_subpaths: Optional[Sequence[VpSubPath]] = None
    ) -> List[Point]:
        """Return the absolute explicit control points of _command_ (2 for C, 1 for S and Q, else none)."""
        resolved = PathPositionResolver.resolve_command(command, subpath, all_subpaths)
        return [] if resolved is None else list(resolved.controls)

    @staticmethod
    def anchors(resolved: Sequence[ResolvedCommand]) -> List[Point]:
        """All resolvable anchors in command order."""
        return [rc.anchor for rc in resolved if rc.anchor is not None]
