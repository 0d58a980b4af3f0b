"""Constrained-acceleration projection package.

This package contains the stencil assembly of the divergence constraint and
the free acceleration, and the Udwadia-Kalaba projection built from a dense
pseudoinverse of the mass-scaled constraint operator.
"""

from .assembly.constraint_matrix import assemble_constraint_matrix, build_constraint_matrix
from .assembly.free_acceleration import assemble_free_acceleration, compute_free_acceleration
from .core.mass_scaling import MassScaling
from .core.projection_operators import (
    NumericalRankError,
    ProjectionOperators,
    build_projection_operators,
)
from .core.constrained_acceleration import ConstrainedAcceleration, solve_constrained_acceleration

__all__ = [
    "assemble_constraint_matrix",
    "build_constraint_matrix",
    "assemble_free_acceleration",
    "compute_free_acceleration",
    "MassScaling",
    "NumericalRankError",
    "ProjectionOperators",
    "build_projection_operators",
    "ConstrainedAcceleration",
    "solve_constrained_acceleration",
]
