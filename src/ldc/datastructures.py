"""Internal solver arrays for the VPNS marching loop."""

from dataclasses import dataclass

import numpy as np


@dataclass
class VPNSSolverFields:
    """Internal VPNS solver arrays - current state and work buffers.

    All vectors are interleaved (u, v) per grid point, shape (2N,).
    """
    # Current solution state
    U: np.ndarray

    # Free acceleration at the current state
    C: np.ndarray

    # Physical constrained acceleration of the last step
    U_dot: np.ndarray

    @classmethod
    def allocate(cls, n_dof: int):
        """Allocate all arrays with proper sizes (velocity starts at rest)."""
        return cls(
            U=np.zeros(n_dof),
            C=np.zeros(n_dof),
            U_dot=np.zeros(n_dof),
        )
