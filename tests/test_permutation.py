"""
Tests for the permutation table and lattice hashes.
"""
import numpy as np
import pytest

from procnoise.modules.permutation import (
    GRADIENTS_2D, GRADIENTS_3D, PERMUTATION, fade, hash_2d, hash_3d, lattice, wrap_seed,
)


def test_table_is_a_doubled_permutation():
    assert PERMUTATION.shape == (512,)
    np.testing.assert_array_equal(PERMUTATION[:256], PERMUTATION[256:])
    np.testing.assert_array_equal(np.sort(PERMUTATION[:256]), np.arange(256))


def test_table_is_read_only():
    with pytest.raises(ValueError):
        PERMUTATION[0] = 0


def test_gradient_sets():
    assert GRADIENTS_2D.shape == (8, 2)
    assert GRADIENTS_3D.shape == (12, 3)
    # 3D gradients are the cube edge midpoints: two non-zero components each
    np.testing.assert_array_equal(np.count_nonzero(GRADIENTS_3D, axis=1), 2)


def test_hash_2d_chains_lookups():
    x, y, seed = 17, 203, 42
    expected = PERMUTATION[PERMUTATION[(x + seed) % 256] + y % 256]
    assert int(hash_2d(x, y, seed)) == expected


def test_hash_3d_chains_lookups():
    x, y, z, seed = 5, 250, 99, 7
    h = PERMUTATION[(x + seed) % 256]
    h = PERMUTATION[h + y % 256]
    expected = PERMUTATION[h + z % 256]
    assert int(hash_3d(x, y, z, seed)) == expected


def test_hash_range_and_wrapping():
    xs = np.arange(-600, 600)
    h = np.asarray(hash_2d(xs, xs[::-1], 3))
    assert h.min() >= 0 and h.max() <= 255

    # Period of 256 on every axis, negative coordinates included
    np.testing.assert_array_equal(
        np.asarray(hash_3d(xs, 2 * xs, -xs, 11)),
        np.asarray(hash_3d(xs + 256, 2 * xs - 512, -xs + 256, 11)),
    )


def test_hash_is_deterministic():
    xs = np.arange(100)
    np.testing.assert_array_equal(np.asarray(hash_2d(xs, 3, 1)), np.asarray(hash_2d(xs, 3, 1)))


def test_fade_endpoints():
    t = np.array([0.0, 0.5, 1.0], dtype=np.float32)
    np.testing.assert_allclose(np.asarray(fade(t)), [0.0, 0.5, 1.0], atol=1e-7)


def test_hash_accepts_large_seeds():
    xs = np.arange(32)
    np.testing.assert_array_equal(np.asarray(hash_2d(xs, 5, 2 ** 31 + 6)), np.asarray(hash_2d(xs, 5, 6)))
    np.testing.assert_array_equal(np.asarray(hash_3d(xs, 5, 9, -250)), np.asarray(hash_3d(xs, 5, 9, 6)))


def test_lattice_past_int32_range():
    index, fraction = lattice(np.array([1e10, -5e9, 2.75], dtype=np.float32))
    assert np.asarray(index).min() >= 0 and np.asarray(index).max() <= 255
    assert np.asarray(index)[2] == 2
    np.testing.assert_allclose(np.asarray(fraction), [0.0, 0.0, 0.75])


def test_wrap_seed():
    assert wrap_seed(2 ** 31 + 3) == 3
    assert wrap_seed(-1) == 255
    assert wrap_seed(np.int64(2 ** 40 + 1)) == 1
