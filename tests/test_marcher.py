"""Tests for the sphere tracing loop."""

import logging

import numpy as np
import numpy.testing as npt
import pytest

from sweepmarch.geometry import Circle, ViewportBounds
from sweepmarch.raymarch.config import MarchConfig
from sweepmarch.raymarch.marcher import SphereMarcher, march
from sweepmarch.scene import SceneField

EPS = 0.01
EAST = np.array([1.0, 0.0])


def _assert_step_consistency(result):
    pts = result.points
    steps = np.linalg.norm(np.diff(pts, axis=0), axis=-1)
    npt.assert_allclose(steps, result.clearances[:-1], rtol=1e-9, atol=1e-9)


class TestEmptyScene:
    def test_single_step_to_wall(self, empty_field):
        result = march([50.0, 50.0], EAST, empty_field, epsilon=EPS, max_steps=100)
        assert len(result) == 1
        assert result.termination == "blocked"
        assert result.end[0] == pytest.approx(100.0, abs=EPS)

    def test_clearance_strictly_decreases(self, empty_field):
        result = march([50.0, 30.0], EAST, empty_field, epsilon=EPS, max_steps=100)
        npt.assert_allclose(result.clearances, [30.0, 20.0])
        assert np.all(np.diff(result.clearances) < 0.0)
        assert result.end[0] == pytest.approx(100.0, abs=EPS)

    def test_corner_march_stays_inside(self, empty_field):
        d = np.array([1.0, 1.0]) / np.sqrt(2.0)
        result = march([50.0, 50.0], d, empty_field, epsilon=EPS, max_steps=100)
        assert result.termination == "blocked"
        assert np.all(result.points <= 100.0)
        assert np.all(np.diff(result.clearances) < 0.0)
        _assert_step_consistency(result)


class TestSingleObstacle:
    def test_stops_at_near_edge(self, single_obstacle_field):
        result = march([10.0, 50.0], EAST, single_obstacle_field, epsilon=EPS, max_steps=100)
        assert result.termination == "blocked"
        npt.assert_allclose(result.points[:, 0], [10.0, 20.0, 40.0])
        npt.assert_allclose(result.clearances, [10.0, 20.0, 10.0])
        assert result.end[0] == pytest.approx(50.0, abs=EPS)

    def test_never_enters_circle(self, single_obstacle_field):
        result = march([10.0, 50.0], EAST, single_obstacle_field, epsilon=EPS, max_steps=100)
        assert np.all(result.points[:, 0] <= 50.0)
        circle = single_obstacle_field.circles[0]
        assert np.all(circle.sdf(result.points) >= 0.0)

    def test_clearances_match_field(self, single_obstacle_field):
        result = march([10.0, 50.0], EAST, single_obstacle_field, epsilon=EPS, max_steps=100)
        for sample in result:
            assert sample.clearance == pytest.approx(single_obstacle_field.nearest_distance(sample.point))

    def test_grazing_ray_approaches_surface(self, single_obstacle_field):
        # tangent to the top of the circle at (60, 60)
        result = march([10.0, 60.0], EAST, single_obstacle_field, epsilon=EPS, max_steps=1000)
        assert result.termination == "blocked"
        assert len(result) > 10
        assert result.end[0] < 60.0
        assert result.clearances[-1] >= EPS
        assert single_obstacle_field.nearest_distance(result.end) < EPS
        _assert_step_consistency(result)


class TestTermination:
    def test_blocked_at_origin(self, empty_field):
        result = march([0.001, 50.0], EAST, empty_field, epsilon=EPS, max_steps=100)
        assert len(result) == 0
        assert result.termination == "blocked"
        assert result.points.shape == (0, 2)
        assert result.end is None

    def test_origin_inside_obstacle(self, single_obstacle_field):
        result = march([60.0, 50.0], EAST, single_obstacle_field, epsilon=EPS, max_steps=100)
        assert len(result) == 0

    def test_zero_size_viewport(self, xp):
        field = SceneField(xp, [], ViewportBounds(xp=xp, min=np.zeros(2), max=np.zeros(2)))
        assert len(march([0.0, 0.0], EAST, field)) == 0

    def test_max_steps_truncates(self, single_obstacle_field):
        result = march([10.0, 50.0], EAST, single_obstacle_field, epsilon=EPS, max_steps=2)
        assert len(result) == 2
        assert result.termination == "max_steps"
        assert result.truncated

    def test_blocked_exactly_at_bound(self, single_obstacle_field):
        result = march([10.0, 50.0], EAST, single_obstacle_field, epsilon=EPS, max_steps=3)
        assert len(result) == 3
        assert result.termination == "blocked"
        assert not result.truncated

    @pytest.mark.parametrize("angle_deg", [0.0, 17.0, 45.0, 90.0, 133.0, 200.0, 271.0, 330.0])
    def test_finite_and_bounded(self, xp, viewport, angle_deg):
        circles = [
            Circle(xp=xp, center=np.array([60.0, 50.0]), radius=10.0),
            Circle(xp=xp, center=np.array([30.0, 75.0]), radius=4.0),
            Circle(xp=xp, center=np.array([75.0, 15.0]), radius=8.0),
        ]
        field = SceneField(xp, circles, viewport)
        a = np.deg2rad(angle_deg)
        d = np.array([np.cos(a), np.sin(a)])
        result = march([35.0, 40.0], d, field, epsilon=EPS, max_steps=500)
        assert 0 < len(result) <= 500
        assert result.clearances[-1] >= EPS
        assert np.all(result.clearances >= EPS)
        _assert_step_consistency(result)


class TestSphereMarcher:
    def test_trace_matches_march(self, xp, single_obstacle_field):
        marcher = SphereMarcher(xp=xp, config=MarchConfig(eps=EPS, max_steps=100), field=single_obstacle_field)
        a = marcher.trace([10.0, 50.0], EAST)
        b = march([10.0, 50.0], EAST, single_obstacle_field, epsilon=EPS, max_steps=100)
        npt.assert_array_equal(a.points, b.points)
        npt.assert_array_equal(a.clearances, b.clearances)

    def test_origin_not_mutated(self, xp, empty_field):
        origin = np.array([50.0, 30.0])
        march(origin, EAST, empty_field)
        npt.assert_array_equal(origin, [50.0, 30.0])

    def test_result_keeps_direction(self, empty_field):
        result = march([50.0, 30.0], EAST, empty_field)
        npt.assert_array_equal(result.direction, EAST)

    def test_non_unit_direction_rejected(self, empty_field):
        with pytest.raises(ValueError, match="unit length"):
            march([50.0, 50.0], [2.0, 0.0], empty_field)

    def test_bad_direction_shape_rejected(self, empty_field):
        with pytest.raises(ValueError, match="direction"):
            march([50.0, 50.0], [1.0, 0.0, 0.0], empty_field)

    def test_bad_origin_shape_rejected(self, empty_field):
        with pytest.raises(ValueError, match="origin"):
            march([50.0], EAST, empty_field)

    @pytest.mark.parametrize("origin", [[np.nan, 50.0], [50.0, np.inf]])
    def test_non_finite_origin_rejected(self, empty_field, origin):
        with pytest.raises(ValueError, match="origin must be finite"):
            march(origin, EAST, empty_field, max_steps=5)

    def test_non_finite_direction_rejected(self, empty_field):
        with pytest.raises(ValueError, match="direction must be finite"):
            march([50.0, 50.0], [np.nan, 0.0], empty_field)

    @pytest.mark.parametrize("eps", [0.0, -1.0])
    def test_non_positive_epsilon_rejected(self, empty_field, eps):
        with pytest.raises(ValueError, match="eps"):
            march([50.0, 50.0], EAST, empty_field, epsilon=eps)

    def test_zero_max_steps_rejected(self, empty_field):
        with pytest.raises(ValueError, match="max_steps"):
            march([50.0, 50.0], EAST, empty_field, max_steps=0)

    def test_logs_termination(self, empty_field, caplog):
        caplog.set_level(logging.DEBUG, logger="sweepmarch.raymarch")
        march([50.0, 30.0], EAST, empty_field)
        assert "blocked after 2 samples" in caplog.text
