# conftest.py

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from datastructures import VPNSinfo
from meshing import create_structured_grid_2d


@pytest.fixture
def small_grid():
    """5x5 unit cavity: 4 corners, 12 edge points, 9 interior points."""
    return create_structured_grid_2d(5, 5)


@pytest.fixture
def unit_config():
    """Unit density and viscosity with a unit lid speed on a 5x5 grid."""
    return VPNSinfo(
        nx=5,
        ny=5,
        rho=1.0,
        mu=1.0,
        lid_velocity=1.0,
        dt=0.001,
        n_steps=20,
        save_interval=10,
        print_interval=10,
        pinv_rtol=1e-10,
    )


@pytest.fixture
def rng():
    return np.random.default_rng(2689)
