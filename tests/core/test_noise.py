"""seed 付き Perlin ノイズのテスト。"""

from __future__ import annotations

import numpy as np
import pytest

from noisesketch.core.noise import (
    NOISE_GRADIENTS_3D,
    PerlinNoise,
    noise_bank,
    perlin_noise_3d,
    permutation_table,
    sample_grid,
)


def test_permutation_table_is_doubled_permutation() -> None:
    perm = permutation_table(5)
    assert perm.shape == (512,)
    assert sorted(perm[:256].tolist()) == list(range(256))
    np.testing.assert_array_equal(perm[:256], perm[256:])


def test_noise_is_deterministic_for_seed() -> None:
    a = sample_grid((PerlinNoise(10),), 8, factor_x=5.0, factor_y=3.0, t=0.7)
    b = sample_grid((PerlinNoise(10),), 8, factor_x=5.0, factor_y=3.0, t=0.7)
    np.testing.assert_array_equal(a, b)


def test_noise_bank_uses_consecutive_seeds() -> None:
    assert [nz.seed for nz in noise_bank(7, 4)] == [7, 8, 9, 10]


def test_different_seeds_give_different_fields() -> None:
    grid = sample_grid(noise_bank(1, 2), 8, factor_x=7.9, factor_y=3.9, t=0.25)
    assert not np.allclose(grid[0], grid[1])


def test_noise_is_zero_on_integer_lattice() -> None:
    grid = sample_grid((PerlinNoise(3),), 4, factor_x=4.0, factor_y=4.0, t=1.0)
    np.testing.assert_allclose(grid, 0.0, atol=1e-12)


def test_noise_is_bounded() -> None:
    grid = sample_grid(noise_bank(4, 4), 48, factor_x=37.3, factor_y=51.7, t=3.3)
    assert grid.shape == (4, 48 * 48)
    assert np.all(np.abs(grid) <= 1.1)
    assert np.ptp(grid) > 0.5


def test_sample_grid_matches_pointwise_evaluation() -> None:
    noises = noise_bank(9, 2)
    grid = sample_grid(noises, 4, factor_x=8.0, factor_y=3.0, t=0.6)
    assert grid.shape == (2, 16)
    row, col = 2, 3
    expected = perlin_noise_3d(
        col / 4 * 8.0, row / 4 * 3.0, 0.6, noises[1].perm_table, NOISE_GRADIENTS_3D
    )
    assert grid[1, row * 4 + col] == pytest.approx(expected)


def test_sample_grid_rejects_non_positive_size() -> None:
    with pytest.raises(ValueError):
        sample_grid(noise_bank(0, 1), 0, factor_x=1.0, factor_y=1.0, t=0.0)
