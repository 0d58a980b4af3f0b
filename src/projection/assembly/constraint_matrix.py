import logging

import numpy as np
from numba import njit
from scipy.sparse import coo_matrix

from projection.discretization.stencils import CONSISTENT, divergence_coefficients

log = logging.getLogger(__name__)


@njit()
def assemble_constraint_matrix(grid, coeff_x, coeff_y):
    """Assemble COO triplets of the discrete divergence operator A (N x 2N).

    One row per grid point m, in the four-slot pattern
        v(south) = -c_y, u(west) = -c_x, u(east) = +c_x, v(north) = +c_y
    Slots whose neighbour is a wall are left out of the sparsity pattern,
    since the wall velocity is a known constant and not an unknown.
    """

    n_points = grid.n_points

    # ––– at most four entries per row ––––––––––––––––––––––––––––––––––––––
    max_nnz = 4 * n_points
    row = np.zeros(max_nnz, dtype=np.int64)
    col = np.zeros(max_nnz, dtype=np.int64)
    data = np.zeros(max_nnz, dtype=np.float64)

    idx = 0  # running write position

    west = grid.west
    east = grid.east
    south = grid.south
    north = grid.north

    for m in range(n_points):
        cx = coeff_x[m]
        cy = coeff_y[m]

        s = south[m]
        if s >= 0:
            row[idx] = m
            col[idx] = 2 * s + 1
            data[idx] = -cy
            idx += 1

        w = west[m]
        if w >= 0:
            row[idx] = m
            col[idx] = 2 * w
            data[idx] = -cx
            idx += 1

        e = east[m]
        if e >= 0:
            row[idx] = m
            col[idx] = 2 * e
            data[idx] = cx
            idx += 1

        n = north[m]
        if n >= 0:
            row[idx] = m
            col[idx] = 2 * n + 1
            data[idx] = cy
            idx += 1

    # ––– trim overallocation –––––––––––––––––––––––––––––––––––––––––––––––
    return row[:idx], col[:idx], data[:idx]


def build_constraint_matrix(grid, edge_coefficients=CONSISTENT):
    """Sparse CSR constraint matrix A of shape (N, 2N)."""
    coeff_x, coeff_y = divergence_coefficients(grid, edge_coefficients)
    row, col, data = assemble_constraint_matrix(grid, coeff_x, coeff_y)
    A = coo_matrix((data, (row, col)), shape=(grid.n_points, grid.n_dof)).tocsr()

    sparsity = 100.0 * (1.0 - A.nnz / (A.shape[0] * A.shape[1]))
    log.info(
        f"Constraint matrix A: {A.shape[0]} x {A.shape[1]}, "
        f"{A.nnz} non-zeros ({sparsity:.2f}% sparse), {edge_coefficients} edge coefficients"
    )
    return A
