"""
Tests for bump terrain generation.
"""

import numpy as np
import pytest

from py_erosion.core.random_stream import RandomStream
from py_erosion.core.terrain_generator import TerrainConfig, TerrainGenerator


class TestTerrainGenerator:
    """Test Gaussian bump terrain."""

    @pytest.fixture
    def generator(self):
        return TerrainGenerator(RandomStream(42))

    def test_dimensions(self, generator):
        grid = generator.generate_gaussian_bumps(30, 20, 4, 10, (3.0, 6.0), (1.0, 5.0))
        assert grid.width == 30
        assert grid.height == 20

    def test_normalized_range(self, generator):
        grid = generator.generate_gaussian_bumps(32, 24, 8, 10, (3.0, 8.0), (1.0, 15.0))
        assert grid.min() >= 0.0
        assert grid.max() <= 255.0
        assert grid.min() == pytest.approx(0.0)
        assert grid.max() == pytest.approx(255.0)

    def test_zero_bumps_is_all_zero(self, generator):
        grid = generator.generate_gaussian_bumps(16, 16, 0, 10, (5.0, 20.0), (1.0, 15.0))
        assert np.all(grid.heights == 0.0)
        assert np.all(np.isfinite(grid.heights))

    def test_same_seed_same_terrain(self):
        a = TerrainGenerator(RandomStream(7)).generate_gaussian_bumps(20, 20, 5, 10, (3.0, 6.0), (1.0, 9.0))
        b = TerrainGenerator(RandomStream(7)).generate_gaussian_bumps(20, 20, 5, 10, (3.0, 6.0), (1.0, 9.0))
        assert np.array_equal(a.heights, b.heights)

    def test_four_draws_per_bump(self):
        stream = RandomStream(1)
        TerrainGenerator(stream).generate_gaussian_bumps(10, 10, 6, 1, (2.0, 4.0), (1.0, 2.0))
        assert stream.call_count == 24

    def test_single_bump_uses_base_two_falloff(self):
        """One bump reproduces A * 2^(-d^2 / (2 sigma^2)) after normalization."""
        twin = RandomStream(13)
        cx, cy = twin.random_position(24, 18)
        sigma = twin.uniform_range(3.0, 6.0)
        amplitude = twin.uniform_range(1.0, 15.0)

        grid = TerrainGenerator(RandomStream(13)).generate_gaussian_bumps(
            24, 18, 1, 10, (3.0, 6.0), (1.0, 15.0)
        )

        ys, xs = np.mgrid[0:18, 0:24].astype(float)
        raw = amplitude * np.exp2(-((xs - cx) ** 2 + (ys - cy) ** 2) / (2 * sigma ** 2)) * 10
        expected = (raw - raw.min()) / (raw.max() - raw.min()) * 255.0
        assert np.allclose(grid.heights, expected)

    def test_peak_near_bump_centre(self):
        twin = RandomStream(21)
        cx, cy = twin.random_position(40, 40)
        grid = TerrainGenerator(RandomStream(21)).generate_gaussian_bumps(
            40, 40, 1, 10, (4.0, 8.0), (1.0, 15.0)
        )
        py, px = np.unravel_index(np.argmax(grid.heights), grid.heights.shape)
        assert abs(px - min(cx, 39)) <= 1.0
        assert abs(py - min(cy, 39)) <= 1.0

    def test_generate_from_config(self):
        config = TerrainConfig(width=16, height=12, num_bumps=3, width_range=(2.0, 4.0))
        grid = TerrainGenerator(RandomStream(2)).generate(config)
        assert (grid.width, grid.height) == (16, 12)
        assert grid.max() == pytest.approx(255.0)

    def test_default_config(self):
        config = TerrainConfig()
        assert (config.width, config.height) == (512, 512)
        assert config.num_bumps == 500
        assert config.scale == 10
        assert config.width_range == (5.0, 20.0)
        assert config.amplitude_range == (1.0, 15.0)

    @pytest.mark.parametrize(
        "num_bumps,width_range,amplitude_range",
        [(-1, (5.0, 20.0), (1.0, 15.0)), (3, (0.0, 20.0), (1.0, 15.0)), (3, (5.0, 2.0), (1.0, 15.0)),
         (3, (5.0, 20.0), (15.0, 1.0))],
    )
    def test_invalid_arguments(self, generator, num_bumps, width_range, amplitude_range):
        with pytest.raises(ValueError):
            generator.generate_gaussian_bumps(10, 10, num_bumps, 10, width_range, amplitude_range)
