"""Command model of a vector path: commands, sub-paths and paths.

A path owns 0..n sub-paths, a sub-path owns an ordered list of commands.
The model is created and mutated by external collaborators (parser, editing
operations); the geometry modules only read it.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Dict, List, Optional, Sequence, Tuple

from vpe.common import VpCmds

###############################################################################
# PathCommandInfo
###############################################################################


@dataclass(frozen=True)
class PathCommandInfo:
    """Metadata for SVG path commands.

    Attributes:
        kind: Name of the command variant (e.g. "CubicRel")
        args: Names of the positional arguments in SVG order
        control_points: Number of explicit control points carried
        is_curve: Whether this command draws a curve
        is_relative: Whether coordinates are relative to the current point
    """

    kind: str
    args: Tuple[str, ...]
    control_points: int = 0
    is_curve: bool = False
    is_relative: bool = False


_XY = ("x", "y")

# Command registry with metadata
COMMAND_INFO: Dict[str, PathCommandInfo] = {
    "M": PathCommandInfo("MoveAbs", _XY),
    "m": PathCommandInfo("MoveRel", _XY, is_relative=True),
    "L": PathCommandInfo("LineAbs", _XY),
    "l": PathCommandInfo("LineRel", _XY, is_relative=True),
    "H": PathCommandInfo("HLineAbs", ("x",)),
    "h": PathCommandInfo("HLineRel", ("x",), is_relative=True),
    "V": PathCommandInfo("VLineAbs", ("y",)),
    "v": PathCommandInfo("VLineRel", ("y",), is_relative=True),
    "C": PathCommandInfo("CubicAbs", ("x1", "y1", "x2", "y2", "x", "y"), 2, True),
    "c": PathCommandInfo("CubicRel", ("x1", "y1", "x2", "y2", "x", "y"), 2, True, True),
    "S": PathCommandInfo("SmoothCubicAbs", ("x2", "y2", "x", "y"), 1, True),
    "s": PathCommandInfo("SmoothCubicRel", ("x2", "y2", "x", "y"), 1, True, True),
    "Q": PathCommandInfo("QuadAbs", ("x1", "y1", "x", "y"), 1, True),
    "q": PathCommandInfo("QuadRel", ("x1", "y1", "x", "y"), 1, True, True),
    "T": PathCommandInfo("SmoothQuadAbs", _XY, 0, True),
    "t": PathCommandInfo("SmoothQuadRel", _XY, 0, True, True),
    "A": PathCommandInfo("ArcAbs", ("rx", "ry", "x_axis_rotation", "large_arc_flag", "sweep_flag", "x", "y"), 0, True),
    "a": PathCommandInfo(
        "ArcRel", ("rx", "ry", "x_axis_rotation", "large_arc_flag", "sweep_flag", "x", "y"), 0, True, True
    ),
    "Z": PathCommandInfo("Close", ()),
    "z": PathCommandInfo("Close", ()),
}

_COORDINATE_FIELDS = ("x", "y", "x1", "y1", "x2", "y2", "rx", "ry", "x_axis_rotation", "large_arc_flag", "sweep_flag")


def new_id(prefix: str) -> str:
    """Return a new opaque identifier with the given _prefix_."""
    return f"{prefix}-{uuid.uuid4().hex[:12]}"


###############################################################################
# VpCommand
###############################################################################


@dataclass(frozen=True)
class VpCommand:
    """A single path instruction.

    Fields present depend on the command letter, see COMMAND_INFO. A field
    that is None is treated as missing; commands lacking a required anchor
    field resolve to no coordinate.
    """

    id: str
    command: VpCmds
    x: Optional[float] = None
    y: Optional[float] = None
    x1: Optional[float] = None
    y1: Optional[float] = None
    x2: Optional[float] = None
    y2: Optional[float] = None
    rx: Optional[float] = None
    ry: Optional[float] = None
    x_axis_rotation: Optional[float] = None
    large_arc_flag: Optional[bool] = None
    sweep_flag: Optional[bool] = None

    def __post_init__(self):
        if self.command not in COMMAND_INFO:
            raise ValueError(f"Unknown command '{self.command}'")
        if self.is_close:
            present = [name for name in _COORDINATE_FIELDS if getattr(self, name) is not None]
            if present:
                raise ValueError(f"ClosePath command must not carry coordinates (got {', '.join(present)})")

    @classmethod
    def create(cls, command: VpCmds, *args: float, id: Optional[str] = None) -> VpCommand:  # pylint: disable=redefined-builtin
        """Create a command from its positional SVG arguments.

        Example: VpCommand.create("C", 10, 0, 20, 10, 30, 30)

        Raises:
            ValueError: If the number of arguments does not match the command.
        """
        info = COMMAND_INFO.get(command)
        if info is None:
            raise ValueError(f"Unknown command '{command}'")
        if len(args) != len(info.args):
            raise ValueError(f"Command '{command}' needs {len(info.args)} arguments, got {len(args)}")

        values = {}
        for name, value in zip(info.args, args):
            if name in ("large_arc_flag", "sweep_flag"):
                values[name] = bool(value)
            else:
                values[name] = float(value)
        return cls(id=id if id is not None else new_id("cmd"), command=command, **values)

    @property
    def info(self) -> PathCommandInfo:
        """The registry entry of this command."""
        return COMMAND_INFO[self.command]

    @property
    def letter(self) -> str:
        """The upper case command letter (absolute/relative folded)."""
        return self.command.upper()

    @property
    def is_relative(self) -> bool:
        """True for lower case commands (except close)."""
        return COMMAND_INFO[self.command].is_relative

    @property
    def is_close(self) -> bool:
        """True for Z/z."""
        return self.command in ("Z", "z")

    @property
    def is_move(self) -> bool:
        """True for M/m."""
        return self.command in ("M", "m")


###############################################################################
# VpSubPath
###############################################################################


@lru_cache(maxsize=1024)
def id_index(ids: Tuple[str, ...]) -> Dict[str, int]:
    """Map each id to the index of its first occurrence."""
    index: Dict[str, int] = {}
    for i, item_id in enumerate(ids):
        index.setdefault(item_id, i)
    return index


@dataclass(eq=False)
class VpSubPath:
    """One contiguous drawing instruction sequence, conventionally starting with a move.

    Identity (not value) equality is used, sub-paths are referenced by the
    hit-tester as opaque handles.
    """

    commands: List[VpCommand] = field(default_factory=list)
    id: str = field(default_factory=lambda: new_id("subpath"))
    locked: bool = False

    def index_of(self, command_id: str) -> Optional[int]:
        """Return the index of the command with the given id, None if not present."""
        return id_index(tuple(cmd.id for cmd in self.commands)).get(command_id)

    def command_by_id(self, command_id: str) -> Optional[VpCommand]:
        """Return the command with the given id, None if not present."""
        idx = self.index_of(command_id)
        return None if idx is None else self.commands[idx]

    @property
    def key(self) -> Tuple[VpCommand, ...]:
        """Hashable snapshot of the current command sequence."""
        return tuple(self.commands)


###############################################################################
# VpPath
###############################################################################


@dataclass(eq=False)
class VpPath:
    """Ordered collection of sub-paths sharing one coordinate space."""

    subpaths: List[VpSubPath] = field(default_factory=list)
    id: str = field(default_factory=lambda: new_id("path"))

    def index_of(self, subpath_id: str) -> Optional[int]:
        """Return the index of the sub-path with the given id, None if not present."""
        return id_index(tuple(sp.id for sp in self.subpaths)).get(subpath_id)

    def subpath_by_id(self, subpath_id: str) -> Optional[VpSubPath]:
        """Return the sub-path with the given id, None if not present."""
        idx = self.index_of(subpath_id)
        return None if idx is None else self.subpaths[idx]

    @classmethod
    def from_subpaths(cls, subpaths: Sequence[VpSubPath], path_id: Optional[str] = None) -> VpPath:
        """Create a path from a sequence of sub-paths (the list is copied, the sub-paths are not)."""
        if path_id is None:
            return cls(list(subpaths))
        return cls(list(subpaths), path_id)
