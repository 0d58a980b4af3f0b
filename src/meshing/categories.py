"""Grid point categories and the wall table shared by all stencils.

Every grid point belongs to exactly one category. A category is fully
described by which of its four neighbour slots lie across a wall; the
stencil builders consult ``WALL_SIDES`` instead of special-casing
corners and edges.
"""

from enum import IntEnum

import numpy as np

# Neighbour slots, in stencil order
WEST = 0
EAST = 1
SOUTH = 2
NORTH = 3


class PointCategory(IntEnum):
    INTERIOR = 0
    LEFT = 1
    RIGHT = 2
    BOTTOM = 3
    TOP = 4
    CORNER_BL = 5
    CORNER_BR = 6
    CORNER_TL = 7
    CORNER_TR = 8

    @property
    def is_corner(self):
        return self in CORNER_CATEGORIES

    @property
    def is_edge(self):
        return self in EDGE_CATEGORIES


# Non-corner boundary points and corner points
EDGE_CATEGORIES = (PointCategory.LEFT, PointCategory.RIGHT, PointCategory.BOTTOM, PointCategory.TOP)
CORNER_CATEGORIES = (
    PointCategory.CORNER_BL,
    PointCategory.CORNER_BR,
    PointCategory.CORNER_TL,
    PointCategory.CORNER_TR,
)


# WALL_SIDES[category, side] is True when that neighbour is a wall
WALL_SIDES = np.zeros((len(PointCategory), 4), dtype=np.bool_)
WALL_SIDES[PointCategory.LEFT, WEST] = True
WALL_SIDES[PointCategory.RIGHT, EAST] = True
WALL_SIDES[PointCategory.BOTTOM, SOUTH] = True
WALL_SIDES[PointCategory.TOP, NORTH] = True
WALL_SIDES[PointCategory.CORNER_BL, [WEST, SOUTH]] = True
WALL_SIDES[PointCategory.CORNER_BR, [EAST, SOUTH]] = True
WALL_SIDES[PointCategory.CORNER_TL, [WEST, NORTH]] = True
WALL_SIDES[PointCategory.CORNER_TR, [EAST, NORTH]] = True
WALL_SIDES.setflags(write=False)


def classify_points(nx, ny):
    """Category code of every point of an nx-by-ny row-major grid.

    Parameters
    ----------
    nx, ny : int
        Grid counts in x and y (both at least 3).

    Returns
    -------
    np.ndarray
        int64 array of length nx*ny holding ``PointCategory`` values.
    """
    i = np.tile(np.arange(nx), ny)
    j = np.repeat(np.arange(ny), nx)

    west = i == 0
    east = i == nx - 1
    south = j == 0
    north = j == ny - 1

    category = np.full(nx * ny, PointCategory.INTERIOR, dtype=np.int64)
    category[west] = PointCategory.LEFT
    category[east] = PointCategory.RIGHT
    category[south] = PointCategory.BOTTOM
    category[north] = PointCategory.TOP
    category[south & west] = PointCategory.CORNER_BL
    category[south & east] = PointCategory.CORNER_BR
    category[north & west] = PointCategory.CORNER_TL
    category[north & east] = PointCategory.CORNER_TR
    return category
