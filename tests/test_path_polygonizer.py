"""Tests for PathPolygonizer: rings, area and bounds of sub-paths."""

import math

import numpy as np

from vpe.command import VpCommand, VpSubPath
from vpe.common import GeometryPolicy
from vpe.path_polygonizer import PathPolygonizer
from vpe.svgpath import VpSvgPath


def single(path_string):
    """Parse a path string and return its only sub-path."""
    return VpSvgPath.parse_path_string(path_string).subpaths[0]


class TestSubPathPolygon:
    """Test class for building polygon rings."""

    def test_rectangle_has_four_vertices(self):
        """Test that a closed rectangle yields its four corners."""
        ring = PathPolygonizer.subpath_polygon(single("M 50 50 L 150 50 L 150 150 L 50 150 Z"))
        assert ring.shape == (4, 2)
        assert np.allclose(ring, [(50, 50), (150, 50), (150, 150), (50, 150)])

    def test_curves_are_sampled(self):
        """Test that each curve adds its sample count of points."""
        sp = single("M 0 0 C 0 10 10 10 10 0 Q 15 -10 20 0 A 5 5 0 0 1 30 0")
        ring = PathPolygonizer.subpath_polygon(sp, steps=4)
        assert ring.shape == (1 + 4 + 4 + 4, 2)
        assert np.allclose(ring[-1], (30.0, 0.0))

    def test_default_steps_from_policy(self):
        """Test that the polygon sample count comes from the policy."""
        sp = single("M 0 0 C 0 10 10 10 10 0")
        assert PathPolygonizer.subpath_polygon(sp).shape == (11, 2)
        assert PathPolygonizer.subpath_polygon(sp, policy=GeometryPolicy(polygon_steps=3)).shape == (4, 2)

    def test_smooth_curves(self):
        """Test that smooth curves are sampled with their reflected control point."""
        sp = single("M 0 0 C 0 10 10 10 10 0 S 20 -10 20 0 T 30 0")
        ring = PathPolygonizer.subpath_polygon(sp, steps=2)
        assert ring.shape == (7, 2)
        # midpoint of the S segment: start (10,0), controls (10,-10) (20,-10), end (20,0)
        assert np.allclose(ring[3], (15.0, -7.5))

    def test_horizontal_vertical_and_relative(self):
        """Test that H, V and relative commands contribute their resolved anchors."""
        ring = PathPolygonizer.subpath_polygon(single("M 10 10 h 20 v 20 H 10 z"))
        assert np.allclose(ring, [(10, 10), (30, 10), (30, 30), (10, 30)])

    def test_missing_coordinates_are_excluded(self):
        """Test that commands lacking coordinates add no point."""
        sp = VpSubPath(
            [
                VpCommand.create("M", 0, 0),
                VpCommand(id="bad", command="C", x1=1.0, y1=1.0, x=5.0, y=5.0),
                VpCommand.create("L", 10, 0),
            ]
        )
        ring = PathPolygonizer.subpath_polygon(sp)
        assert np.allclose(ring, [(0, 0), (10, 0)])

    def test_empty_subpath(self):
        """Test that an empty sub-path yields an empty ring."""
        assert PathPolygonizer.subpath_polygon(VpSubPath()).shape == (0, 2)

    def test_carried_offset(self):
        """Test that a relative sub-path is placed at the carried offset."""
        path = VpSvgPath.parse_path_string("M 100 100 m 0 0 l 10 0 l 0 10 z")
        ring = PathPolygonizer.subpath_polygon(path.subpaths[1], path.subpaths)
        assert np.allclose(ring, [(100, 100), (110, 100), (110, 110)])


class TestArea:
    """Test class for sub-path area."""

    def test_rectangle_area(self):
        """Test the area of a closed rectangle."""
        assert PathPolygonizer.subpath_area(single("M 50 50 L 150 50 L 150 150 L 50 150 Z")) == 10000.0

    def test_open_subpath_has_no_area(self):
        """Test that open sub-paths have zero area."""
        assert PathPolygonizer.subpath_area(single("M 50 50 L 150 50 L 150 150 L 50 150")) == 0.0

    def test_circle_area_approximation(self):
        """Test that a circle built from two arcs approximates pi r^2."""
        sp = single("M 0 0 A 50 50 0 0 1 100 0 A 50 50 0 0 1 0 0 Z")
        area = PathPolygonizer.subpath_area(sp, policy=GeometryPolicy(polygon_steps=50))
        assert math.isclose(area, math.pi * 2500.0, rel_tol=0.01)


class TestBounds:
    """Test class for sub-path and path bounding boxes."""

    def test_subpath_bounds(self):
        """Test the bounding box of a rectangle."""
        box = PathPolygonizer.subpath_bounds(single("M 50 50 L 150 50 L 150 150 L 50 150 Z"))
        assert box.extent == (50.0, 50.0, 150.0, 150.0)

    def test_bounds_follow_curve(self):
        """Test that curve bounds follow the curve, not the control points."""
        box = PathPolygonizer.subpath_bounds(single("M 0 0 C 0 10 10 10 10 0"))
        assert np.isclose(box.ymax, 7.5)
        assert np.isclose(box.xmax, 10.0)

    def test_path_bounds(self):
        """Test the union of all sub-path boxes."""
        path = VpSvgPath.parse_path_string("M 0 0 L 10 10 M 50 -5 L 60 20")
        box = PathPolygonizer.path_bounds(path)
        assert box.extent == (0.0, -5.0, 60.0, 20.0)

    def test_empty_bounds(self):
        """Test that nothing resolvable has no bounds."""
        assert PathPolygonizer.subpath_bounds(VpSubPath()) is None
        assert PathPolygonizer.path_bounds(VpSvgPath.parse_path_string("")) is None
