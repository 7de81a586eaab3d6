"""
Pytest configuration and fixtures for the procnoise test suite.
"""
import numpy as np
import pytest


@pytest.fixture(scope="session")
def grid_2d():
    """Dense, off-lattice 2D sample grid."""
    coords = np.arange(64) * 0.173 + 0.031
    X, Y = np.meshgrid(coords, coords, indexing="xy")
    return X.astype(np.float32), Y.astype(np.float32)


@pytest.fixture(scope="session")
def grid_3d():
    """Coarser 3D sample grid."""
    coords = np.arange(16) * 0.291 + 0.017
    X, Y, Z = np.meshgrid(coords, coords, coords, indexing="ij")
    return X.astype(np.float32), Y.astype(np.float32), Z.astype(np.float32)


@pytest.fixture(scope="session")
def wide_grid_2d():
    """Grid spanning many lattice cells, for statistical checks."""
    coords = np.arange(128) * 0.31 + 0.05
    X, Y = np.meshgrid(coords, coords, indexing="xy")
    return X.astype(np.float32), Y.astype(np.float32)
