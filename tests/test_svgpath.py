"""Test module for the vpe.svgpath module.

The tests check how SVG path data is split into commands and sub-paths.
"""

import pytest

from vpe.svgpath import VpSvgPath


def test_parse_simple_path():
    """Test that a simple path yields one sub-path with its commands."""
    path = VpSvgPath.parse_path_string("M 10 20 L 30 40", "p")
    assert path.id == "p"
    assert len(path.subpaths) == 1
    cmds = path.subpaths[0].commands
    assert [c.command for c in cmds] == ["M", "L"]
    assert (cmds[1].x, cmds[1].y) == (30.0, 40.0)


def test_every_move_starts_a_subpath():
    """Test that each MoveTo opens a new sub-path with a positional id."""
    path = VpSvgPath.parse_path_string("M0 0 L10 0 Z M20 20 L30 30 m 5 5 l 1 1")
    assert [sp.id for sp in path.subpaths] == ["subpath-0", "subpath-1", "subpath-2"]
    assert [c.command for c in path.subpaths[0].commands] == ["M", "L", "Z"]
    assert path.subpaths[2].commands[0].command == "m"


def test_implicit_lineto_after_move():
    """Test that extra pairs after a MoveTo become LineTo commands."""
    cmds = VpSvgPath.parse_commands("M 0 0 10 10 20 0")
    assert [c.command for c in cmds] == ["M", "L", "L"]
    cmds = VpSvgPath.parse_commands("m 0 0 10 10")
    assert [c.command for c in cmds] == ["m", "l"]


def test_repeated_argument_batches():
    """Test that repeated batches expand into separate commands."""
    cmds = VpSvgPath.parse_commands("Q 1 2 3 4 5 6 7 8")
    assert [c.command for c in cmds] == ["Q", "Q"]
    assert (cmds[1].x1, cmds[1].y1, cmds[1].x, cmds[1].y) == (5.0, 6.0, 7.0, 8.0)


def test_compact_number_notation():
    """Test numbers without separators, signs and exponents."""
    cmds = VpSvgPath.parse_commands("M10-20L.5,1e1")
    assert (cmds[0].x, cmds[0].y) == (10.0, -20.0)
    assert (cmds[1].x, cmds[1].y) == (0.5, 10.0)


def test_arc_arguments():
    """Test that arc arguments map to radii, rotation and flags."""
    cmd = VpSvgPath.parse_commands("M0 0 A 10 20 30 1 0 50 60")[1]
    assert (cmd.rx, cmd.ry, cmd.x_axis_rotation) == (10.0, 20.0, 30.0)
    assert cmd.large_arc_flag is True
    assert cmd.sweep_flag is False
    assert (cmd.x, cmd.y) == (50.0, 60.0)


def test_compact_arc_flags():
    """Test that arc flags written without separators split into single digits."""
    path = VpSvgPath.parse_path_string("M0 0 A10 10 0 1120 0")
    cmd = path.subpaths[0].commands[1]
    assert (cmd.rx, cmd.ry, cmd.x_axis_rotation) == (10.0, 10.0, 0.0)
    assert cmd.large_arc_flag is True
    assert cmd.sweep_flag is True
    assert (cmd.x, cmd.y) == (20.0, 0.0)


def test_compact_arc_flags_repeated_batches():
    """Test compact flags in repeated arc batches with mixed separators."""
    cmds = VpSvgPath.parse_commands("M0 0 a5 5 0 01 10 0 5 5 0 1,0 -10 0")
    assert [c.command for c in cmds] == ["M", "a", "a"]
    assert (cmds[1].large_arc_flag, cmds[1].sweep_flag, cmds[1].x) == (False, True, 10.0)
    assert (cmds[2].large_arc_flag, cmds[2].sweep_flag, cmds[2].x) == (True, False, -10.0)


def test_invalid_arc_flag():
    """Test that an arc flag other than 0 or 1 raises ValueError."""
    with pytest.raises(ValueError):
        VpSvgPath.parse_commands("M0 0 A10 10 0 2 0 20 0")


def test_empty_string():
    """Test that empty path data yields a path without sub-paths."""
    assert not VpSvgPath.parse_path_string("").subpaths


def test_wrong_argument_count():
    """Test that a truncated argument list raises ValueError."""
    with pytest.raises(ValueError):
        VpSvgPath.parse_commands("M 0 0 C 1 2 3")
    with pytest.raises(ValueError):
        VpSvgPath.parse_commands("M 0 0 L")


def test_close_with_arguments():
    """Test that arguments after a close command raise ValueError."""
    with pytest.raises(ValueError):
        VpSvgPath.parse_commands("M 0 0 L 1 1 Z 5")


def test_leading_garbage():
    """Test that text before the first command raises ValueError."""
    with pytest.raises(ValueError):
        VpSvgPath.parse_commands("foo M 0 0")
