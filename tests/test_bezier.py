"""Tests for BezierCurve evaluation and sampling."""

import numpy as np
import pytest

from vpe.bezier import BezierCurve

CUBIC = [(0.0, 0.0), (0.0, 10.0), (10.0, 10.0), (10.0, 0.0)]
QUAD = [(0.0, 0.0), (5.0, 10.0), (10.0, 0.0)]


class TestBezierPoints:
    """Test class for scalar curve evaluation."""

    def test_cubic_endpoints(self):
        """Test that t=0 and t=1 give start and end point."""
        assert BezierCurve.cubic_point(*CUBIC, 0.0) == (0.0, 0.0)
        assert BezierCurve.cubic_point(*CUBIC, 1.0) == (10.0, 0.0)

    def test_cubic_midpoint(self):
        """Test the cubic curve at t=0.5."""
        x, y = BezierCurve.cubic_point(*CUBIC, 0.5)
        assert np.isclose(x, 5.0)
        assert np.isclose(y, 7.5)

    def test_quadratic_midpoint(self):
        """Test the quadratic curve at t=0.5."""
        x, y = BezierCurve.quadratic_point(*QUAD, 0.5)
        assert np.isclose(x, 5.0)
        assert np.isclose(y, 5.0)


class TestBezierPolygonize:
    """Test class for vectorized sampling."""

    def test_cubic_shape_and_endpoints(self):
        """Test number of samples and end points of a sampled cubic."""
        pts = BezierCurve.polygonize_cubic_curve(CUBIC, 10)
        assert pts.shape == (11, 2)
        assert np.allclose(pts[0], CUBIC[0])
        assert np.allclose(pts[-1], CUBIC[-1])

    def test_cubic_skip_first(self):
        """Test that skip_first drops the start point only."""
        pts = BezierCurve.polygonize_cubic_curve(CUBIC, 10, skip_first=True)
        assert pts.shape == (10, 2)
        assert np.allclose(pts[-1], CUBIC[-1])
        assert not np.allclose(pts[0], CUBIC[0])

    def test_cubic_matches_scalar_form(self):
        """Test that sampled points equal the scalar evaluation."""
        steps = 8
        pts = BezierCurve.polygonize_cubic_curve(CUBIC, steps)
        for i, t in enumerate(np.linspace(0.0, 1.0, steps + 1)):
            assert np.allclose(pts[i], BezierCurve.cubic_point(*CUBIC, float(t)))

    def test_quadratic_matches_scalar_form(self):
        """Test that sampled quadratic points equal the scalar evaluation."""
        steps = 5
        pts = BezierCurve.polygonize_quadratic_curve(QUAD, steps)
        assert pts.shape == (6, 2)
        for i, t in enumerate(np.linspace(0.0, 1.0, steps + 1)):
            assert np.allclose(pts[i], BezierCurve.quadratic_point(*QUAD, float(t)))

    def test_invalid_steps(self):
        """Test that fewer than one step raises ValueError."""
        with pytest.raises(ValueError):
            BezierCurve.polygonize_cubic_curve(CUBIC, 0)

    def test_invalid_point_count(self):
        """Test that a wrong number of control points raises ValueError."""
        with pytest.raises(ValueError):
            BezierCurve.polygonize_cubic_curve(QUAD, 10)
        with pytest.raises(ValueError):
            BezierCurve.polygonize_quadratic_curve(CUBIC, 10)
