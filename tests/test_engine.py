"""Tests for the module-level query functions of vpe.engine."""

import pytest

from vpe import engine
from vpe.path_hittest import HitTestOptions

PATH_DATA = "M 10 10 L 190 10 L 190 190 L 10 190 Z M 50 50 L 150 50 L 150 150 L 50 150 Z m 0 20 l 10 0"


@pytest.fixture(name="path")
def fixture_path():
    """Two nested closed rectangles followed by an open relative sub-path."""
    return engine.parse_path_string(PATH_DATA, "p")


def test_resolve_absolute_position(path):
    """Test that the open sub-path starts at the carried cursor."""
    tail = path.subpaths[2]
    positions = [engine.resolve_absolute_position(c, tail, path.subpaths) for c in tail.commands]
    assert positions == [(50.0, 170.0), (60.0, 170.0)]


def test_resolve_absolute_control_points(path):
    """Test that non-curve commands have no control points."""
    outer = path.subpaths[0]
    assert engine.resolve_absolute_control_points(outer.commands[1], outer, path.subpaths) == []


def test_is_subpath_closed(path):
    """Test closure of each sub-path."""
    assert [engine.is_subpath_closed(sp, path.subpaths) for sp in path.subpaths] == [True, True, False]


def test_find_subpath_at_point(path):
    """Test the unified scoring entry point."""
    assert engine.find_subpath_at_point(path, (100.0, 100.0)) is path.subpaths[1]


def test_find_subpath_at_point_advanced_overrides(path):
    """Test that keyword overrides replace option fields."""
    assert engine.find_subpath_at_point_advanced(path, (55.0, 175.0)) is path.subpaths[2]
    assert engine.find_subpath_at_point_advanced(path, (55.0, 175.0), include_stroke=False) is path.subpaths[0]
    options = HitTestOptions(include_stroke=False)
    assert engine.find_subpath_at_point_advanced(path, (55.0, 175.0), options, include_stroke=True) is path.subpaths[2]


def test_find_subpath_at_point_advanced_unknown_override(path):
    """Test that an unknown override raises ValueError."""
    with pytest.raises(ValueError):
        engine.find_subpath_at_point_advanced(path, (0.0, 0.0), radius=3)
    with pytest.raises(ValueError):
        engine.find_subpath_at_point_advanced(path, (0.0, 0.0), fill_rule="winding")


def test_find_innermost_subpath_at_point(path):
    """Test the nesting entry point."""
    assert engine.find_innermost_subpath_at_point(path, (100.0, 100.0)) is path.subpaths[1]
    assert engine.find_innermost_subpath_at_point(path, (30.0, 100.0)) is path.subpaths[0]


def test_is_point_in_path_fill(path):
    """Test the whole-path fill under both rules."""
    assert engine.is_point_in_path_fill(path, (100.0, 100.0), "nonzero")
    assert not engine.is_point_in_path_fill(path, (100.0, 100.0), "evenodd")


def test_bounds(path):
    """Test sub-path and path bounds."""
    assert engine.subpath_bounds(path.subpaths[2], path.subpaths).extent == (50.0, 170.0, 60.0, 170.0)
    assert engine.path_bounds(path).extent == (10.0, 10.0, 190.0, 190.0)
