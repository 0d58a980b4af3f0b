import numpy as np

from meshing.categories import EDGE_CATEGORIES, WEST, EAST, SOUTH, NORTH

# ──────────────────────────────────────────────────────────────────────────────
# Divergence stencil coefficients
# ──────────────────────────────────────────────────────────────────────────────
CONSISTENT = "consistent"
LEGACY = "legacy"


def divergence_coefficients(grid, edge_coefficients=CONSISTENT):
    """
    Per-point (c_x, c_y) for the divergence row of every grid point.

    'consistent' uses 1/dx, 1/dy everywhere. 'legacy' uses dx, dy on the
    four non-corner edge categories, matching earlier published results.
    """
    n_points = grid.n_points
    coeff_x = np.full(n_points, 1.0 / grid.dx)
    coeff_y = np.full(n_points, 1.0 / grid.dy)

    if edge_coefficients == LEGACY:
        on_edge = np.isin(grid.category, EDGE_CATEGORIES)
        coeff_x[on_edge] = grid.dx
        coeff_y[on_edge] = grid.dy
    elif edge_coefficients != CONSISTENT:
        raise ValueError(
            f"Unknown edge_coefficients: {edge_coefficients}. Use '{CONSISTENT}' or '{LEGACY}'"
        )

    return coeff_x, coeff_y


# ──────────────────────────────────────────────────────────────────────────────
# Wall substitution table
# ──────────────────────────────────────────────────────────────────────────────
def wall_velocity_table(lid_velocity):
    """
    Known (u, v) substituted for a neighbour slot that lies across a wall.

    Row order follows the stencil slots (west, east, south, north). All
    walls are no-slip except the lid, which moves with u = U_lid.
    """
    table = np.zeros((4, 2), dtype=np.float64)
    table[NORTH, 0] = lid_velocity
    return table


__all__ = [
    "CONSISTENT",
    "LEGACY",
    "divergence_coefficients",
    "wall_velocity_table",
    "WEST",
    "EAST",
    "SOUTH",
    "NORTH",
]
