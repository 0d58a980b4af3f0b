"""
StructuredGrid2D: Core data layout for the VPNS cavity grid (2D, collocated).

This class holds the static topology, spacing and neighbour tables of the
P x Q grid of unknown velocity nodes. The cavity walls sit one spacing
outside the outermost row/column of nodes.

Indexing Conventions:
- Point index m = j * nx + i (row-major, 0-based), i along x, j along y.
- Degree of freedom layout is interleaved: u(m) at 2m, v(m) at 2m + 1.
- Neighbour tables (west, east, south, north) hold the neighbour point index,
  or -1 where the neighbour lies across a wall.

Index Sets:
- corners = [bottom-left, bottom-right, top-left, top-right]
- left/right/bottom/top = edge points excluding corners, in increasing order
- interior = remaining points in row-major order
"""

from numba import types
from numba.experimental import jitclass

grid_data_spec = [
    # --- Sizes ---
    ("nx", types.int64),                  # P, points along x
    ("ny", types.int64),                  # Q, points along y
    ("n_points", types.int64),            # N = P * Q
    ("n_dof", types.int64),               # 2N

    # --- Geometry ---
    ("dx", types.float64),
    ("dy", types.float64),
    ("x", types.float64[:]),              # Point x-coordinates
    ("y", types.float64[:]),              # Point y-coordinates

    # --- Classification ---
    ("category", types.int64[:]),         # PointCategory code per point

    # --- Connectivity ---
    ("west", types.int64[:]),
    ("east", types.int64[:]),
    ("south", types.int64[:]),
    ("north", types.int64[:]),

    # --- Index Sets ---
    ("corners", types.int64[:]),
    ("left", types.int64[:]),
    ("right", types.int64[:]),
    ("bottom", types.int64[:]),
    ("top", types.int64[:]),
    ("interior", types.int64[:]),
]


@jitclass(grid_data_spec)
class StructuredGrid2D:
    def __init__(
        self,
        nx,
        ny,
        dx,
        dy,
        x,
        y,
        category,
        west,
        east,
        south,
        north,
        corners,
        left,
        right,
        bottom,
        top,
        interior,
    ):
        # --- Sizes ---
        self.nx = nx
        self.ny = ny
        self.n_points = nx * ny
        self.n_dof = 2 * nx * ny

        # --- Geometry ---
        self.dx = dx
        self.dy = dy
        self.x = x
        self.y = y

        # --- Classification ---
        self.category = category

        # --- Connectivity ---
        self.west = west
        self.east = east
        self.south = south
        self.north = north

        # --- Index Sets ---
        self.corners = corners
        self.left = left
        self.right = right
        self.bottom = bottom
        self.top = top
        self.interior = interior
