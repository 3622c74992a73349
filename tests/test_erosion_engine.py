"""
Tests for the erosion engine and its parameters.
"""

import numpy as np
import pytest
from pydantic import ValidationError

from py_erosion.core.droplet import DROPLET_LIFETIME, DropletResult
from py_erosion.core.erosion import ErosionEngine
from py_erosion.core.height_grid import HeightGrid
from py_erosion.core.parameters import ErosionParameters
from py_erosion.core.random_stream import RandomStream
from py_erosion.core.terrain_generator import TerrainGenerator


@pytest.fixture
def terrain():
    """Small bump terrain."""
    return TerrainGenerator(RandomStream(11)).generate_gaussian_bumps(
        32, 24, 6, 10, (3.0, 8.0), (1.0, 15.0)
    )


class TestErosionParameters:
    """Test parameter validation."""

    def test_defaults(self):
        params = ErosionParameters()
        assert params.inertia == 0.1
        assert params.min_slope == 0.001
        assert params.capacity == 32
        assert params.deposition_rate == 0.001
        assert params.erosion_rate == 0.1
        assert params.gravity == 9.81
        assert params.evaporation == 0.002
        assert params.radius == 4

    @pytest.mark.parametrize(
        "field,value",
        [
            ("inertia", 1.5),
            ("min_slope", 0.0),
            ("capacity", 0.0),
            ("deposition_rate", -0.1),
            ("erosion_rate", 2.0),
            ("gravity", 0.0),
            ("evaporation", 0.6),
            ("radius", 0),
        ],
    )
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(ValidationError):
            ErosionParameters(**{field: value})

    def test_frozen(self):
        params = ErosionParameters()
        with pytest.raises(ValidationError):
            params.inertia = 0.5


class TestErosionEngine:
    """Test the simulation driver."""

    def test_simulate_drop(self, terrain):
        engine = ErosionEngine(RandomStream(1))
        result = engine.simulate_drop(terrain, ErosionParameters())
        assert isinstance(result, DropletResult)
        assert 0 <= result.steps <= DROPLET_LIFETIME

    def test_run_mutates_grid(self, terrain):
        before = terrain.heights.copy()
        ErosionEngine(RandomStream(5)).run(terrain, ErosionParameters(), 200)
        assert not np.array_equal(terrain.heights, before)
        assert np.all(np.isfinite(terrain.heights))

    def test_zero_drops_is_noop(self, terrain):
        before = terrain.heights.copy()
        ErosionEngine(RandomStream(5)).run(terrain, ErosionParameters(), 0)
        assert np.array_equal(terrain.heights, before)

    def test_snapshot_cadence(self, terrain):
        calls = []
        ErosionEngine(RandomStream(5)).run(
            terrain, ErosionParameters(), 10, snapshot_every=3,
            on_snapshot=lambda grid, i: calls.append(i),
        )
        assert calls == [3, 6, 9]

    def test_snapshot_taken_before_drop(self, terrain):
        original = terrain.heights.copy()
        snapshots = []
        ErosionEngine(RandomStream(5)).run(
            terrain, ErosionParameters(), 1, snapshot_every=1,
            on_snapshot=lambda grid, i: snapshots.append((i, grid.heights.copy())),
        )
        assert len(snapshots) == 1
        assert snapshots[0][0] == 1
        assert np.array_equal(snapshots[0][1], original)

    def test_snapshot_receives_working_grid(self, terrain):
        seen = []
        ErosionEngine(RandomStream(5)).run(
            terrain, ErosionParameters(), 4, snapshot_every=2,
            on_snapshot=lambda grid, i: seen.append(grid),
        )
        assert all(grid is terrain for grid in seen)

    def test_reproducible_with_same_seed(self, terrain):
        a = terrain.copy()
        b = terrain.copy()
        ErosionEngine(RandomStream(99)).run(a, ErosionParameters(), 100)
        ErosionEngine(RandomStream(99)).run(b, ErosionParameters(), 100)
        assert np.array_equal(a.heights, b.heights)

    def test_repeated_runs_share_no_state(self, terrain):
        """A reused engine behaves like a fresh one given the same stream state."""
        params = ErosionParameters(radius=2)
        first = terrain.copy()
        ErosionEngine(RandomStream(3)).run(first, params, 50)

        engine = ErosionEngine(RandomStream(3))
        engine.run(terrain.copy(), ErosionParameters(), 0)
        second = terrain.copy()
        engine.run(second, params, 50)
        assert np.array_equal(first.heights, second.heights)

    def test_precondition_errors(self, terrain):
        engine = ErosionEngine(RandomStream(1))
        params = ErosionParameters()
        with pytest.raises(ValueError):
            engine.run(terrain, params, -1)
        with pytest.raises(ValueError):
            engine.run(HeightGrid(2, 10), params, 1)
        with pytest.raises(ValueError):
            engine.run(terrain, params, 5, snapshot_every=0, on_snapshot=lambda g, i: None)
        with pytest.raises(ValueError):
            engine.run(terrain, params, 5, snapshot_every=2)
