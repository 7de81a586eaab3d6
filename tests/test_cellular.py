"""
Tests for Worley and Voronoi cellular noise.
"""
import logging

import numpy as np
import pytest

from procnoise.modules.cellular import (
    CellSample2D, CellSample3D, feature_point, voronoi_2d, voronoi_2d_full,
    voronoi_3d, voronoi_3d_full, worley_2d, worley_2d_full, worley_3d, worley_3d_full,
)
from procnoise.modules.permutation import hash_2d, hash_3d


def test_centred_feature_point_has_zero_distance():
    cfg = {"jitter": 0.0}
    assert float(worley_2d(0.5, 0.5, 0, cfg)) == 0.0
    assert float(worley_3d(3.5, -2.5, 7.5, 0, cfg)) == 0.0


def test_feature_point_stays_in_cell():
    cells = np.arange(-50, 50)
    for jitter in (0.0, 0.5, 1.0):
        px, py = feature_point((cells, cells * 3), 4, jitter)
        assert np.all(np.asarray(px) >= cells)
        assert np.all(np.asarray(px) <= cells + 1)
        assert np.all(np.asarray(py) >= cells * 3)
        assert np.all(np.asarray(py) <= cells * 3 + 1)


def test_f1_not_greater_than_f2(grid_2d):
    f1 = np.asarray(worley_2d(*grid_2d, 5, {"returnType": "F1"}))
    f2 = np.asarray(worley_2d(*grid_2d, 5, {"returnType": "F2"}))
    assert np.all(f1 <= f2)


def test_return_type_ranges(grid_2d, grid_3d):
    for return_type in ("F1", "F2", "F2MinusF1", "F1PlusF2"):
        for values in (worley_2d(*grid_2d, 5, {"returnType": return_type}),
                       worley_3d(*grid_3d, 5, {"returnType": return_type})):
            values = np.asarray(values)
            assert values.min() >= 0.0
            assert values.max() <= 1.0


def test_f1_plus_f2_is_mean(grid_2d):
    x, y = grid_2d
    # Small distances only, so neither F1 nor F2 is clamped
    cfg = {"jitter": 0.0}
    sample = worley_2d_full(x, y, 5, {**cfg, "returnType": "F1PlusF2"})
    f2 = np.asarray(worley_2d(x, y, 5, {**cfg, "returnType": "F2"}))
    f1 = np.asarray(sample.distance)
    mask = f2 < 1.0
    np.testing.assert_allclose(np.asarray(sample.value)[mask], ((f1 + f2) / 2)[mask], atol=1e-6)


def test_distance_metrics_are_ordered(grid_2d):
    values = {
        metric: np.asarray(worley_2d_full(*grid_2d, 5, {"distanceFunction": metric}).distance)
        for metric in ("Chebyshev", "Euclidean", "Manhattan")
    }
    assert np.all(values["Chebyshev"] <= values["Euclidean"] + 1e-6)
    assert np.all(values["Euclidean"] <= values["Manhattan"] + 1e-6)


def test_frequency_scales_domain(grid_2d):
    x, y = grid_2d
    a = np.asarray(worley_2d(x, y, 2, {"frequency": 2.0}))
    b = np.asarray(worley_2d(x * 2.0, y * 2.0, 2))
    np.testing.assert_allclose(a, b, atol=1e-6)


def test_worley_full_query(grid_2d):
    sample = worley_2d_full(*grid_2d, 8)
    assert isinstance(sample, CellSample2D)
    np.testing.assert_array_equal(np.asarray(sample.value), np.clip(np.asarray(sample.distance), 0, 1))
    assert np.asarray(sample.cell_x).dtype.kind == "i"


def test_worley_3d_full_query(grid_3d):
    sample = worley_3d_full(*grid_3d, 8)
    assert isinstance(sample, CellSample3D)
    assert sample.cell_z.shape == grid_3d[0].shape


def test_unjittered_owner_is_containing_cell():
    x = np.array([2.3, -4.6, 10.5, 0.1], dtype=np.float32)
    y = np.array([4.7, 1.2, -7.5, 0.9], dtype=np.float32)
    sample = voronoi_2d_full(x, y, 3, {"jitter": 0.0})
    np.testing.assert_array_equal(np.asarray(sample.cell_x), np.floor(x))
    np.testing.assert_array_equal(np.asarray(sample.cell_y), np.floor(y))


def test_voronoi_cell_value_is_owner_hash(grid_2d):
    seed = 13
    sample = voronoi_2d_full(*grid_2d, seed)
    expected = np.asarray(hash_2d(sample.cell_x, sample.cell_y, seed)) / 255.0
    np.testing.assert_allclose(np.asarray(sample.value), expected, atol=1e-6)
    np.testing.assert_allclose(np.asarray(voronoi_2d(*grid_2d, seed)), expected, atol=1e-6)


def test_voronoi_3d_cell_value_is_owner_hash(grid_3d):
    sample = voronoi_3d_full(*grid_3d, 13)
    expected = np.asarray(hash_3d(sample.cell_x, sample.cell_y, sample.cell_z, 13)) / 255.0
    np.testing.assert_allclose(np.asarray(sample.value), expected, atol=1e-6)


def test_voronoi_return_types(grid_2d):
    sample = voronoi_2d_full(*grid_2d, 1)
    distance = np.asarray(voronoi_2d(*grid_2d, 1, {"returnType": "Distance"}))
    both = np.asarray(voronoi_2d(*grid_2d, 1, {"returnType": "Both"}))

    np.testing.assert_allclose(distance, np.clip(np.asarray(sample.distance), 0, 1), atol=1e-6)
    np.testing.assert_allclose(both, (np.asarray(sample.value) + distance) / 2, atol=1e-6)
    assert both.min() >= 0.0 and both.max() <= 1.0


def test_voronoi_regions_are_piecewise_constant():
    xs = np.linspace(0.0, 4.0, 400, dtype=np.float32)
    values = np.asarray(voronoi_3d(xs, 0.3, 0.7, 6))
    # A line through a few cells crosses only a handful of region borders
    assert np.count_nonzero(np.diff(values)) < 20


def test_unknown_return_type_falls_back(grid_2d, caplog):
    with caplog.at_level(logging.WARNING, logger="procnoise.config"):
        values = np.asarray(worley_2d(*grid_2d, 5, {"returnType": "F3"}))
    np.testing.assert_array_equal(values, np.asarray(worley_2d(*grid_2d, 5)))
    assert "F3" in caplog.text


@pytest.mark.parametrize("seed", [0, 1, 999])
def test_deterministic(seed, grid_2d):
    a = np.asarray(worley_2d(*grid_2d, seed))
    b = np.asarray(worley_2d(*grid_2d, seed))
    np.testing.assert_array_equal(a, b)


def test_huge_coordinates_stay_finite():
    xs = np.array([1e10, -5e9, 7.3e11], dtype=np.float32)
    ys = np.array([3.0, 0.25, -2.2e9], dtype=np.float32)
    for return_type in ("F1", "F2", "F2MinusF1", "F1PlusF2"):
        values = np.asarray(worley_2d(xs, ys, 1, {"returnType": return_type}))
        assert np.isfinite(values).all()
        assert values.min() >= 0.0 and values.max() <= 1.0

    sample = voronoi_2d_full(xs, ys, 1)
    assert np.isfinite(np.asarray(sample.value)).all()
    assert np.isfinite(np.asarray(sample.distance)).all()
    assert np.isfinite(np.asarray(worley_3d(xs, ys, xs, 1))).all()


def test_large_seeds_reduce_mod_256(grid_2d, grid_3d):
    np.testing.assert_array_equal(
        np.asarray(worley_2d(*grid_2d, 2 ** 31 + 17)),
        np.asarray(worley_2d(*grid_2d, 17)),
    )
    big = voronoi_2d_full(*grid_2d, 2 ** 35 + 200)
    small = voronoi_2d_full(*grid_2d, 200)
    for a, b in zip(big, small):
        np.testing.assert_array_equal(np.asarray(a), np.asarray(b))
    np.testing.assert_array_equal(
        np.asarray(voronoi_3d(*grid_3d, 2 ** 31)),
        np.asarray(voronoi_3d(*grid_3d, 0)),
    )
