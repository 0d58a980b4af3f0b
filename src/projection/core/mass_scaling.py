"""Uniform lumped mass of the velocity nodes."""

import numpy as np
from scipy.sparse import identity


class MassScaling:
    """Mass matrix M = rho*dx*dy*I over all 2N degrees of freedom.

    Every node carries the same mass on a uniform grid, so M^(-1/2) is kept
    as a scalar multiplier and only materialised on request.

    Parameters
    ----------
    rho : float
        Fluid density.
    dx, dy : float
        Grid spacing.
    """

    def __init__(self, rho, dx, dy):
        if not (rho > 0 and dx > 0 and dy > 0):
            raise ValueError(f"Mass scaling needs positive rho, dx, dy; got {rho}, {dx}, {dy}")
        self.node_mass = float(rho * dx * dy)
        self.inv_sqrt = self.node_mass ** -0.5

    def scale(self, vec, out=None):
        """Multiply ``vec`` by M^(-1/2)."""
        return np.multiply(vec, self.inv_sqrt, out=out)

    def as_sparse(self, n_dof):
        """M^(-1/2) as an explicit sparse diagonal matrix."""
        return identity(n_dof, format="csr") * self.inv_sqrt

    def __repr__(self):
        return f"MassScaling(node_mass={self.node_mass:.6e}, inv_sqrt={self.inv_sqrt:.6e})"
