"""Udwadia-Kalaba constrained acceleration at one instant.

In mass-scaled coordinates the constrained acceleration is the orthogonal
projection of the (negated) scaled free acceleration onto the null space of
the scaled constraint operator:

    C~   = M^(-1/2) C
    a~*  = -N C~          constraint-satisfying acceleration
    Q~   = -P C~          constraint-violating part of the free acceleration
    S*   = 0.5 |Q~|^2     optimum Appellian
    a*   = M^(-1/2) a~*   physical acceleration
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ConstrainedAcceleration:
    """Result of one projection; all vectors have shape (2N,)."""

    acceleration: np.ndarray
    acceleration_tilde: np.ndarray
    constraint_force_tilde: np.ndarray
    appellian: float


def solve_constrained_acceleration(C, mass, operators) -> ConstrainedAcceleration:
    """Project the free acceleration C onto the divergence-free subspace.

    Parameters
    ----------
    C : ndarray
        Free acceleration, shape (2N,)
    mass : MassScaling
        Supplies the scalar M^(-1/2)
    operators : ProjectionOperators
        Range and null-space projectors of the same grid

    Returns
    -------
    ConstrainedAcceleration
    """
    C = np.asarray(C, dtype=np.float64)
    n_dof = operators.n_dof
    if C.shape != (n_dof,):
        raise ValueError(f"Free acceleration has shape {C.shape}, expected ({n_dof},)")

    C_tilde = mass.scale(C)

    acceleration_tilde = -(operators.null_projector @ C_tilde)
    constraint_force_tilde = -(operators.range_projector @ C_tilde)
    appellian = 0.5 * float(np.dot(constraint_force_tilde, constraint_force_tilde))

    return ConstrainedAcceleration(
        acceleration=mass.scale(acceleration_tilde),
        acceleration_tilde=acceleration_tilde,
        constraint_force_tilde=constraint_force_tilde,
        appellian=appellian,
    )
