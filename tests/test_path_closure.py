"""Tests for PathClosureDetector."""

from vpe.command import VpCommand, VpSubPath
from vpe.common import GeometryPolicy
from vpe.path_closure import PathClosureDetector
from vpe.svgpath import VpSvgPath


def single(path_string):
    """Parse a path string and return its only sub-path."""
    return VpSvgPath.parse_path_string(path_string).subpaths[0]


class TestPathClosureDetector:
    """Test class for closure detection."""

    def test_explicit_close(self):
        """Test that a trailing close command closes the sub-path."""
        assert PathClosureDetector.is_subpath_closed(single("M 0 0 L 100 0 L 100 100 Z"))

    def test_open_subpath(self):
        """Test that distant end points leave the sub-path open."""
        assert not PathClosureDetector.is_subpath_closed(single("M 0 0 L 100 0 L 100 100"))

    def test_coincident_end_points(self):
        """Test that returning to the start point closes the sub-path."""
        assert PathClosureDetector.is_subpath_closed(single("M 0 0 L 100 0 L 100 100 L 0.5 0.5"))

    def test_tolerance_is_strict(self):
        """Test that an end point exactly at the closure tolerance is open."""
        assert not PathClosureDetector.is_subpath_closed(single("M 0 0 L 100 0 L 100 100 L 1 0"))

    def test_custom_tolerance(self):
        """Test the closure tolerance taken from the policy."""
        sp = single("M 0 0 L 100 0 L 100 100 L 3 0")
        assert PathClosureDetector.is_subpath_closed(sp, policy=GeometryPolicy(closure_tolerance=5.0))

    def test_empty_and_anchorless(self):
        """Test that sub-paths without resolvable anchors are never closed."""
        assert not PathClosureDetector.is_subpath_closed(VpSubPath())
        assert not PathClosureDetector.is_subpath_closed(VpSubPath([VpCommand(id="bad", command="L", y=3.0)]))

    def test_single_move_is_closed(self):
        """Test that a lone anchor coincides with itself."""
        assert PathClosureDetector.is_subpath_closed(single("M 5 5"))

    def test_close_not_last(self):
        """Test that a close command followed by more drawing does not count."""
        assert not PathClosureDetector.is_subpath_closed(single("M 0 0 L 100 0 L 100 100 Z L 200 200"))

    def test_closure_uses_carried_offset(self):
        """Test closure of a relative sub-path resolved with its siblings."""
        path = VpSvgPath.parse_path_string("M 50 50 L 60 60 m 0 0 l 10 0 l -10 0")
        first, second = path.subpaths
        assert PathClosureDetector.is_subpath_closed(second, path.subpaths)
        assert not PathClosureDetector.is_subpath_closed(first, path.subpaths)

    def test_subpath_not_among_siblings(self):
        """Test that an unknown sub-path is reported open."""
        path = VpSvgPath.parse_path_string("M 0 0 L 1 1 Z")
        stranger = single("M 0 0 L 1 1 Z")
        stranger.id = "stranger"
        assert not PathClosureDetector.is_subpath_closed(stranger, path.subpaths)
