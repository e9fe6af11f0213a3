"""Parsing SVG path data into the command model"""

from __future__ import annotations

import logging
import re
from typing import ClassVar, List, Optional

from vpe.command import COMMAND_INFO, VpCommand, VpPath, VpSubPath, new_id

logger = logging.getLogger(__name__)


class VpSvgPath:
    """
    This class provides static methods to turn SVG path data into VpPath objects.
    A SVG-path is characterized by a string describing a sequence of points.
    The points' connection types are according to their commands.
    Commands (command : number of values : command-character):
        MoveTo:           2: Mm
        LineTo:           2: Ll   1: Hh(x)   1:Vv(y)
        CubicBezier:      6: Cc   4: Ss
        QuadraticBezier:  4: Qq   2: Tt
        ArcCurve:         7: Aa
        ClosePath:        0: Zz
    Coordinates are kept exactly as written (relative commands stay relative),
    resolution to absolute positions is done by the PathPositionResolver.
    """

    # Command letters:
    SVG_CMDS: ClassVar[str] = "MmLlHhVvCcSsQqTtAaZz"
    # Definition of a number:
    SVG_ARGS: ClassVar[str] = r"[-+]?[0-9]*\.?[0-9]+(?:[eE][-+]?[0-9]+)?"
    # Arc flags are single digits and may be written without separators
    SVG_FLAG: ClassVar[str] = r"[01]"
    SVG_SEPARATOR: ClassVar[str] = r"[\s,]*"
    ARC_FLAG_POSITIONS: ClassVar[tuple] = (3, 4)

    @staticmethod
    def parse_arc_args(arg_string: str) -> List[float]:
        """
        Scan the arguments of an arc command position by position.

        The large-arc and sweep flags are read as one character each, so
        compact data like "10 10 0 1120 0" splits into 10, 10, 0, 1, 1, 20, 0.

        Raises:
            ValueError: If a flag is not 0 or 1 or a number is malformed.
        """
        args: List[float] = []
        pos = 0
        while True:
            pos = re.compile(VpSvgPath.SVG_SEPARATOR).match(arg_string, pos).end()
            if pos == len(arg_string):
                return args
            is_flag = len(args) % 7 in VpSvgPath.ARC_FLAG_POSITIONS
            match = re.compile(VpSvgPath.SVG_FLAG if is_flag else VpSvgPath.SVG_ARGS).match(arg_string, pos)
            if match is None:
                kind = "flag" if is_flag else "number"
                raise ValueError(f"Invalid arc {kind} at '{arg_string[pos:].strip()}'")
            args.append(float(match.group()))
            pos = match.end()

    @staticmethod
    def parse_commands(path_string: str) -> List[VpCommand]:
        """
        Parse the given SVG _path_string_ into a flat list of commands.

        Repeated argument batches after a command letter are expanded into
        separate commands; additional pairs after a MoveTo become LineTo
        (relative if the MoveTo was relative).

        Args:
            path_string (str): a SVG path string

        Returns:
            List[VpCommand]: the parsed commands

        Raises:
            ValueError: If the string contains text outside commands or a
                command has a wrong number of arguments.
        """
        leading = re.split(f"[{VpSvgPath.SVG_CMDS}]", path_string, maxsplit=1)[0]
        if leading.strip(" \t\r\n,"):
            raise ValueError(f"Path data must start with a command, got '{leading.strip()}'")

        org_commands = re.findall(f"[{VpSvgPath.SVG_CMDS}][^{VpSvgPath.SVG_CMDS}]*", path_string)
        commands: List[VpCommand] = []

        for command in org_commands:
            command_letter = command[0]
            if command_letter in "Aa":
                args = VpSvgPath.parse_arc_args(command[1:])
            else:
                args = [float(arg) for arg in re.findall(VpSvgPath.SVG_ARGS, command[1:])]
            batch_size = len(COMMAND_INFO[command_letter].args)

            if batch_size == 0:
                if args:
                    raise ValueError(f"Command '{command_letter}' takes no arguments, got {len(args)}")
                commands.append(VpCommand.create(command_letter))
                continue

            if not args or len(args) % batch_size:
                raise ValueError(
                    f"Command '{command_letter}' needs a multiple of {batch_size} arguments, got {len(args)}"
                )

            for i in range(0, len(args), batch_size):
                letter = command_letter
                # Implicit LineTo after the first pair of a MoveTo
                if i > 0 and command_letter in "Mm":
                    letter = "L" if command_letter == "M" else "l"
                commands.append(VpCommand.create(letter, *args[i : i + batch_size]))

        return commands

    @staticmethod
    def parse_path_string(path_string: str, path_id: Optional[str] = None) -> VpPath:
        """
        Parse the given SVG _path_string_ into a VpPath.

        Every MoveTo starts a new sub-path.

        Args:
            path_string (str): a SVG path string
            path_id (Optional[str]): id of the created path, generated if None

        Returns:
            VpPath: the parsed path
        """
        subpaths: List[VpSubPath] = []
        current: List[VpCommand] = []

        for cmd in VpSvgPath.parse_commands(path_string):
            if cmd.is_move and current:
                subpaths.append(VpSubPath(current, f"subpath-{len(subpaths)}"))
                current = []
            current.append(cmd)

        if current:
            subpaths.append(VpSubPath(current, f"subpath-{len(subpaths)}"))

        logger.debug("Parsed path data into %d sub-paths", len(subpaths))
        return VpPath(subpaths, path_id if path_id is not None else new_id("path"))
