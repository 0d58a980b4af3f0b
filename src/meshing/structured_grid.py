"""Structured grid builder for the VPNS cavity solver.

This is a minimal implementation for uniform Cartesian grids of unknown
velocity nodes, using pure numpy arrays and a numba kernel for the
neighbour tables.
"""

import logging

import numpy as np
from numba import njit

from datastructures.config import ConfigurationError
from .categories import PointCategory, WALL_SIDES, WEST, EAST, SOUTH, NORTH, classify_points
from .grid_data import StructuredGrid2D

log = logging.getLogger(__name__)


@njit(cache=True)
def _build_neighbour_tables(nx, category, wall_sides):
    """Build west/east/south/north neighbour indices.

    Returns four int64 arrays where a wall neighbour is marked with -1.
    """
    n_points = category.shape[0]
    west = np.full(n_points, -1, dtype=np.int64)
    east = np.full(n_points, -1, dtype=np.int64)
    south = np.full(n_points, -1, dtype=np.int64)
    north = np.full(n_points, -1, dtype=np.int64)

    for m in range(n_points):
        c = category[m]
        if not wall_sides[c, WEST]:
            west[m] = m - 1
        if not wall_sides[c, EAST]:
            east[m] = m + 1
        if not wall_sides[c, SOUTH]:
            south[m] = m - nx
        if not wall_sides[c, NORTH]:
            north[m] = m + nx

    return west, east, south, north


def create_structured_grid_2d(nx: int, ny: int, Lx: float = 1.0, Ly: float = 1.0) -> StructuredGrid2D:
    """Create the structured grid of unknown velocity nodes.

    This implementation:
    - Places nx * ny nodes strictly inside the cavity, walls at x = 0, Lx
      and y = 0, Ly
    - Classifies nodes into corners, edges and interior
    - Builds neighbour tables with -1 marking wall neighbours

    Parameters
    ----------
    nx, ny : int
        Number of nodes in x and y directions (P and Q), at least 3 each
    Lx, Ly : float
        Domain size in x and y directions

    Returns
    -------
    StructuredGrid2D
        Grid data structure ready for the stencil assemblers
    """
    if nx < 3 or ny < 3:
        raise ConfigurationError(
            f"Grid {nx}x{ny} is too small: need at least 3x3 points "
            "to separate corners, edges and interior"
        )
    if not (Lx > 0 and Ly > 0):
        raise ConfigurationError(f"Domain size must be positive, got Lx={Lx}, Ly={Ly}")

    # 1. Uniform spacing, walls one spacing outside the outer nodes
    dx = Lx / (nx + 1)
    dy = Ly / (ny + 1)

    x_nodes = dx * np.arange(1, nx + 1)
    y_nodes = dy * np.arange(1, ny + 1)
    X, Y = np.meshgrid(x_nodes, y_nodes, indexing='xy')

    # 2. Classification
    category = classify_points(nx, ny)

    # 3. Neighbour tables
    west, east, south, north = _build_neighbour_tables(nx, category, WALL_SIDES.copy())

    # 4. Index sets
    corners = np.array([0, nx - 1, nx * (ny - 1), nx * ny - 1], dtype=np.int64)

    def _members(cat):
        return np.flatnonzero(category == cat).astype(np.int64)

    grid = StructuredGrid2D(
        nx,
        ny,
        dx,
        dy,
        np.ascontiguousarray(X.ravel(), dtype=np.float64),
        np.ascontiguousarray(Y.ravel(), dtype=np.float64),
        category,
        west,
        east,
        south,
        north,
        corners,
        _members(PointCategory.LEFT),
        _members(PointCategory.RIGHT),
        _members(PointCategory.BOTTOM),
        _members(PointCategory.TOP),
        _members(PointCategory.INTERIOR),
    )

    log.info(
        f"Grid {nx}x{ny}: dx = {dx:.6f}, dy = {dy:.6f}, "
        f"{grid.interior.shape[0]} interior / {nx * ny - grid.interior.shape[0]} boundary points"
    )
    return grid
