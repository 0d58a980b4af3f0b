"""Range/null-space projectors of the mass-scaled constraint operator.

Given the constraint matrix A and the mass scaling M, this module forms
A~ = A M^(-1/2), its Moore-Penrose pseudoinverse A~^+ from a dense SVD, and
the orthogonal projectors

    P = A~^+ A~        (range of A~^T, constraint-violating directions)
    N = I - P          (null space of A~, constraint-satisfying directions)

Both projectors are dense 2N x 2N matrices: O(N^2) memory and O(N^3) setup.
This is the scalability ceiling of the method; it is only practical while
2N stays in the low thousands.
"""

import logging
import time
from dataclasses import dataclass

import numpy as np
from scipy.linalg import svd, eigvalsh
from scipy.sparse import csr_matrix

log = logging.getLogger(__name__)


class NumericalRankError(ArithmeticError):
    """Raised when the computed projectors violate P @ P = P or P + N = I."""


@dataclass(frozen=True)
class ProjectionOperators:
    """Read-only projection operators of one fixed grid."""

    A_tilde: csr_matrix
    pinv: np.ndarray
    range_projector: np.ndarray
    null_projector: np.ndarray
    singular_values: np.ndarray
    rank: int
    cutoff: float

    @property
    def n_dof(self) -> int:
        return self.range_projector.shape[0]

    def idempotency_error(self) -> float:
        """max |P @ P - P|"""
        P = self.range_projector
        return float(np.max(np.abs(P @ P - P)))

    def complement_error(self) -> float:
        """max |P + N - I|"""
        total = self.range_projector + self.null_projector
        return float(np.max(np.abs(total - np.eye(self.n_dof))))

    def validate(self, atol=1e-8) -> float:
        """Check the projector identities, raising NumericalRankError on failure.

        Returns
        -------
        float
            The idempotency error max |P @ P - P|.
        """
        idem = self.idempotency_error()
        compl = self.complement_error()
        if not (idem <= atol and compl <= atol):
            raise NumericalRankError(
                f"Projector check failed: max|P@P - P| = {idem:.3e}, "
                f"max|P + N - I| = {compl:.3e} (atol = {atol:.1e}, rank = {self.rank}). "
                "Adjust the pseudoinverse tolerance."
            )
        return idem

    def eigenvalues(self) -> np.ndarray:
        """Ascending eigenvalues of the symmetric null-space projector N.

        For an exact projector these are 0 (multiplicity rank) and 1.
        """
        N = self.null_projector
        return eigvalsh(0.5 * (N + N.T))


def default_rtol(shape) -> float:
    """Relative singular value cutoff max(m, n) * eps."""
    return max(shape) * np.finfo(np.float64).eps


def build_projection_operators(A, mass, rtol=None) -> ProjectionOperators:
    """Build P and N for constraint matrix A and mass scaling ``mass``.

    Parameters
    ----------
    A : scipy.sparse matrix
        Constraint matrix, shape (N, 2N)
    mass : MassScaling
        Supplies the scalar M^(-1/2)
    rtol : float, optional
        Singular values below ``rtol * sigma_max`` are treated as zero.
        Defaults to ``max(N, 2N) * eps``.

    Returns
    -------
    ProjectionOperators
    """
    A_tilde = csr_matrix(A * mass.inv_sqrt)
    n_rows, n_dof = A_tilde.shape

    est_mb = (n_rows * n_dof + 3 * n_dof * n_dof) * 8 / 1e6
    log.info(
        f"Computing projection matrices (SVD-based) for {n_rows} x {n_dof} operator, "
        f"~{est_mb:.1f} MB dense storage"
    )

    time_start = time.time()

    A_dense = A_tilde.toarray()
    U_svd, s, Vt = svd(A_dense, full_matrices=False)

    if rtol is None:
        rtol = default_rtol(A_dense.shape)
    cutoff = float(rtol * s[0]) if s.size else 0.0

    keep = s > cutoff
    rank = int(np.count_nonzero(keep))
    s_inv = np.zeros_like(s)
    s_inv[keep] = 1.0 / s[keep]

    # A~^+ = V diag(1/s) U^T
    pinv = (Vt.T * s_inv) @ U_svd.T
    range_projector = pinv @ A_dense
    null_projector = np.eye(n_dof) - range_projector

    time_end = time.time()
    log.info(
        f"SVD projection built in {time_end - time_start:.2f} seconds: "
        f"rank {rank} of {n_rows}, cutoff {cutoff:.3e}"
    )

    return ProjectionOperators(
        A_tilde=A_tilde,
        pinv=pinv,
        range_projector=range_projector,
        null_projector=null_projector,
        singular_values=s,
        rank=rank,
        cutoff=cutoff,
    )
