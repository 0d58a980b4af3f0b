"""Variational projection (VPNS) solver for lid-driven cavity.

This module implements an incompressible solver based on the Udwadia-Kalaba
formulation of constrained motion: the divergence-free condition is a linear
constraint on the nodal accelerations, enforced by projecting the free
acceleration with an SVD-based pseudoinverse, then marching with explicit
Euler.
"""

import logging

import numpy as np

from datastructures import VPNSinfo, Fields
from meshing.structured_grid import create_structured_grid_2d
from projection.assembly.constraint_matrix import build_constraint_matrix
from projection.assembly.free_acceleration import compute_free_acceleration
from projection.core.mass_scaling import MassScaling
from projection.core.projection_operators import build_projection_operators
from projection.core.constrained_acceleration import solve_constrained_acceleration

from .base_solver import LidDrivenCavitySolver
from .datastructures import VPNSSolverFields

log = logging.getLogger(__name__)


class VPNSSolver(LidDrivenCavitySolver):
    """Udwadia-Kalaba projection solver for the lid-driven cavity problem.

    Setup builds the grid, the constraint matrix A, the mass scaling and the
    dense projectors once. Every step then costs one free-acceleration
    assembly and two dense matrix-vector products.

    Explicit Euler has no built-in stability control: a time step violating
    the convective or viscous limit diverges to NaN/Inf without being
    detected. The relevant numbers are logged at setup.

    Parameters
    ----------
    config : VPNSinfo
        Configuration with grid, physics, marching and projection settings.
    snapshot_writer : SnapshotWriter, optional
        Collaborator receiving decimated velocity snapshots.
    """

    Config = VPNSinfo

    def __init__(self, config=None, snapshot_writer=None, **kwargs):
        """Initialize VPNS solver.

        Parameters
        ----------
        config : VPNSinfo, optional
            Configuration object.
        snapshot_writer : SnapshotWriter, optional
            Receives velocity snapshots during solve().
        **kwargs
            Configuration parameters passed to VPNSinfo.
        """
        super().__init__(config=config, snapshot_writer=snapshot_writer, **kwargs)
        cfg = self.config

        # Create grid
        self.grid = create_structured_grid_2d(nx=cfg.nx, ny=cfg.ny, Lx=cfg.Lx, Ly=cfg.Ly)

        # Fluid properties
        self.rho = cfg.rho
        self.nu = cfg.nu

        # Constant operators
        self.mass = MassScaling(self.rho, self.grid.dx, self.grid.dy)
        self.A = build_constraint_matrix(self.grid, cfg.edge_coefficients)
        self.operators = build_projection_operators(self.A, self.mass, rtol=cfg.pinv_rtol)

        idem = self.operators.validate(atol=cfg.projector_atol)
        log.info(f"Projector check: max|P@P - P| = {idem:.3e}")

        self.projector_spectrum = None
        if cfg.spectrum_analysis:
            self.projector_spectrum = self.operators.eigenvalues()
            n_unit = int(np.count_nonzero(self.projector_spectrum > 0.5))
            log.info(
                f"Eigenvalues of N: {n_unit} near 1, "
                f"{self.projector_spectrum.shape[0] - n_unit} near 0"
            )

        # Allocate all solver arrays
        self.arrays = VPNSSolverFields.allocate(self.grid.n_dof)

        # Initial free acceleration
        compute_free_acceleration(
            self.grid, self.arrays.U, self.rho, self.nu, cfg.lid_velocity, out=self.arrays.C
        )

        h_min = min(self.grid.dx, self.grid.dy)
        log.info(
            f"Re = {cfg.Re:.2f}, lid CFL = {abs(cfg.lid_velocity) * cfg.dt / self.grid.dx:.4f}, "
            f"viscous number = {self.nu * cfg.dt / h_min ** 2:.4f}"
        )

    @property
    def velocity(self):
        return self.arrays.U

    @property
    def free_acceleration(self):
        return self.arrays.C

    def step(self):
        """Perform one explicit Euler step.

        Returns
        -------
        float
            Appellian S* evaluated at the start of the step.
        """
        a = self.arrays  # Shorthand for readability

        # Constrained acceleration from the state at the start of the step
        result = solve_constrained_acceleration(a.C, self.mass, self.operators)
        a.U_dot[:] = result.acceleration

        # Explicit Euler update, in place
        a.U += self.config.dt * a.U_dot

        # Free acceleration for the next step
        compute_free_acceleration(
            self.grid, a.U, self.rho, self.nu, self.config.lid_velocity, out=a.C
        )

        return result.appellian

    def _create_result_fields(self):
        """Create result fields with grid coordinates."""
        return Fields.from_velocity(self.arrays.U, self.grid.x, self.grid.y)
