"""Structured grid topology for the cavity solver."""

from .categories import (
    PointCategory,
    EDGE_CATEGORIES,
    CORNER_CATEGORIES,
    WALL_SIDES,
    WEST,
    EAST,
    SOUTH,
    NORTH,
    classify_points,
)
from .grid_data import StructuredGrid2D
from .structured_grid import create_structured_grid_2d

__all__ = [
    "PointCategory",
    "EDGE_CATEGORIES",
    "CORNER_CATEGORIES",
    "WALL_SIDES",
    "WEST",
    "EAST",
    "SOUTH",
    "NORTH",
    "classify_points",
    "StructuredGrid2D",
    "create_structured_grid_2d",
]
