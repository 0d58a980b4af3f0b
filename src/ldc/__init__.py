"""Lid-driven cavity solver framework.

This module provides the variational projection (VPNS) solver.

Solver Hierarchy:
-----------------
LidDrivenCavitySolver (abstract base - fixed-count marching loop, results, save)
└── VPNSSolver (Udwadia-Kalaba projection with explicit Euler)
"""

from .base_solver import LidDrivenCavitySolver, SolverState
from .datastructures import VPNSSolverFields
from .snapshots import SnapshotWriter, MemorySnapshotWriter, HDF5SnapshotWriter, load_snapshots
from .vpns_solver import VPNSSolver

__all__ = [
    # Base classes
    "LidDrivenCavitySolver",
    "SolverState",
    # Data structures
    "VPNSSolverFields",
    # Snapshot collaborators
    "SnapshotWriter",
    "MemorySnapshotWriter",
    "HDF5SnapshotWriter",
    "load_snapshots",
    # Concrete solvers
    "VPNSSolver",
]
