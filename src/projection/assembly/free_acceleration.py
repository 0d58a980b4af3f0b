import numpy as np
from numba import njit

from projection.discretization.stencils import WEST, EAST, SOUTH, NORTH, wall_velocity_table


@njit()
def _neighbour_velocity(U, neighbour, wall_values, side):
    """(u, v) at a neighbour slot, or the wall constant if it is a wall."""
    if neighbour >= 0:
        return U[2 * neighbour], U[2 * neighbour + 1]
    return wall_values[side, 0], wall_values[side, 1]


@njit()
def assemble_free_acceleration(grid, U, rho, nu, wall_values, out):
    """Free (unconstrained) mass-weighted acceleration C for every point.

    Central differences for convection and diffusion, with wall neighbours
    replaced from ``wall_values`` (rows west, east, south, north).
    ``out`` must not alias ``U``.
    """
    n_points = grid.n_points
    dx = grid.dx
    dy = grid.dy
    inv_dx2 = 1.0 / (dx * dx)
    inv_dy2 = 1.0 / (dy * dy)
    dm = rho * dx * dy

    west = grid.west
    east = grid.east
    south = grid.south
    north = grid.north

    for m in range(n_points):
        u0 = U[2 * m]
        v0 = U[2 * m + 1]

        u1, v1 = _neighbour_velocity(U, west[m], wall_values, WEST)
        u2, v2 = _neighbour_velocity(U, east[m], wall_values, EAST)
        ua, va = _neighbour_velocity(U, south[m], wall_values, SOUTH)
        ub, vb = _neighbour_velocity(U, north[m], wall_values, NORTH)

        # ––– convection –––––––––––––––––––––––––––––––––––––––––––––––––––––––
        conv_u = 0.5 * u0 * (u2 - u1) / dx + 0.5 * v0 * (ub - ua) / dy
        conv_v = 0.5 * u0 * (v2 - v1) / dx + 0.5 * v0 * (vb - va) / dy

        # ––– diffusion ––––––––––––––––––––––––––––––––––––––––––––––––––––––––
        visc_u = nu * ((u2 - 2.0 * u0 + u1) * inv_dx2 + (ub - 2.0 * u0 + ua) * inv_dy2)
        visc_v = nu * ((v2 - 2.0 * v0 + v1) * inv_dx2 + (vb - 2.0 * v0 + va) * inv_dy2)

        out[2 * m] = dm * (conv_u - visc_u)
        out[2 * m + 1] = dm * (conv_v - visc_v)

    return out


def compute_free_acceleration(grid, U, rho, nu, lid_velocity, out=None):
    """Free acceleration vector C (length 2N) for the velocity field U.

    Parameters
    ----------
    grid : StructuredGrid2D
        Grid topology and spacing
    U : ndarray
        Interleaved velocity field, shape (2N,)
    rho, nu : float
        Density and kinematic viscosity
    lid_velocity : float
        Tangential velocity of the top wall
    out : ndarray, optional
        Pre-allocated float64 buffer of shape (2N,), overwritten

    Returns
    -------
    out : ndarray
        Free acceleration C
    """
    n_dof = grid.n_dof
    U = np.ascontiguousarray(U, dtype=np.float64)
    if U.shape != (n_dof,):
        raise ValueError(f"Velocity vector has shape {U.shape}, expected ({n_dof},)")

    if out is None:
        out = np.zeros(n_dof, dtype=np.float64)
    elif out.shape != (n_dof,):
        raise ValueError(f"Output buffer has shape {out.shape}, expected ({n_dof},)")
    elif out.dtype != np.float64:
        raise ValueError(f"Output buffer has dtype {out.dtype}, expected float64")
    elif np.shares_memory(out, U):
        raise ValueError("Output buffer must not share memory with the velocity field")

    return assemble_free_acceleration(grid, U, rho, nu, wall_velocity_table(lid_velocity), out)
