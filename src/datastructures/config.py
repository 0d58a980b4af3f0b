"""Configuration and metadata data structures."""
from dataclasses import dataclass, asdict
import pandas as pd


EDGE_COEFFICIENT_CONVENTIONS = ("consistent", "legacy")


class ConfigurationError(ValueError):
    """Raised when a run configuration cannot describe a valid cavity problem."""


@dataclass
class VPNSinfo:
    """VPNS solver metadata, config and run info.

    Parameters
    ----------
    nx : int, optional
        Number of unknown grid points in x-direction (P). Default is 21.
    ny : int, optional
        Number of unknown grid points in y-direction (Q). Default is 21.
    Lx : float, optional
        Domain length in x-direction. Default is 1.
    Ly : float, optional
        Domain length in y-direction. Default is 1.
    rho : float, optional
        Fluid density. Default is 999.8 (water).
    mu : float, optional
        Dynamic viscosity. Default is 0.9.
    lid_velocity : float, optional
        Velocity of the lid. Default is 0.02.
    dt : float, optional
        Explicit Euler time step. Default is 0.01.
    n_steps : int, optional
        Number of time steps. Default is 1000.
    save_interval : int, optional
        Snapshot every ``save_interval`` steps (and at step 1). Default is 10.
    print_interval : int, optional
        Log progress every ``print_interval`` steps. Default is 50.
    pinv_rtol : float, optional
        Relative singular value cutoff for the pseudoinverse. None selects
        ``max(A.shape) * eps``. Default is None.
    projector_atol : float, optional
        Tolerance used when validating P @ P = P. Default is 1e-8.
    edge_coefficients : str, optional
        Divergence stencil coefficients on non-corner edges, 'consistent'
        (1/dx, 1/dy everywhere) or 'legacy' (dx, dy on edges). Default is
        'consistent'.
    spectrum_analysis : bool, optional
        Compute the eigenvalues of the null-space projector at setup.
        Default is False.
    method : str, optional
        Solver method name. Default is 'VPNS'.
    steps_completed : int, optional
        Number of steps actually performed. Default is None.
    final_appellian : float, optional
        Appellian of the last step. Default is None.
    wall_time : float, optional
        Wall clock time of the marching loop in seconds. Default is None.
    """
    # Grid parameters
    nx: int = 21
    ny: int = 21
    Lx: float = 1
    Ly: float = 1

    # Physics parameters
    rho: float = 999.8
    mu: float = 0.9
    lid_velocity: float = 0.02

    # Time marching
    dt: float = 0.01
    n_steps: int = 1000
    save_interval: int = 10
    print_interval: int = 50

    # Projection
    pinv_rtol: float = None
    projector_atol: float = 1e-8
    edge_coefficients: str = "consistent"
    spectrum_analysis: bool = False
    method: str = "VPNS"

    # Run info
    steps_completed: int = None
    final_appellian: float = None
    wall_time: float = None

    def __post_init__(self):
        if self.nx < 3 or self.ny < 3:
            raise ConfigurationError(
                f"Grid {self.nx}x{self.ny} is too small: need at least 3x3 points "
                "to separate corners, edges and interior"
            )
        for name in ("Lx", "Ly", "rho", "mu", "dt"):
            if not getattr(self, name) > 0:
                raise ConfigurationError(f"{name} must be positive, got {getattr(self, name)}")
        if self.n_steps < 0:
            raise ConfigurationError(f"n_steps must be non-negative, got {self.n_steps}")
        if self.save_interval < 1 or self.print_interval < 1:
            raise ConfigurationError("save_interval and print_interval must be at least 1")
        if self.pinv_rtol is not None and self.pinv_rtol < 0:
            raise ConfigurationError(f"pinv_rtol must be non-negative, got {self.pinv_rtol}")
        if self.edge_coefficients not in EDGE_COEFFICIENT_CONVENTIONS:
            raise ConfigurationError(
                f"Unknown edge_coefficients: {self.edge_coefficients}. "
                f"Use one of {EDGE_COEFFICIENT_CONVENTIONS}"
            )

    @property
    def nu(self) -> float:
        """Kinematic viscosity."""
        return self.mu / self.rho

    @property
    def Re(self) -> float:
        """Reynolds number based on lid velocity and cavity width."""
        return self.lid_velocity * self.Lx / self.nu

    @property
    def dx(self) -> float:
        return self.Lx / (self.nx + 1)

    @property
    def dy(self) -> float:
        return self.Ly / (self.ny + 1)

    @property
    def n_points(self) -> int:
        return self.nx * self.ny

    @property
    def n_dof(self) -> int:
        return 2 * self.n_points

    def to_dataframe(self) -> pd.DataFrame:
        """Convert config/metadata to single-row DataFrame.

        Returns
        -------
        pd.DataFrame
            Single-row DataFrame with all configuration and metadata fields,
            plus the derived ``nu`` and ``Re``.
        """
        data = asdict(self)
        data["nu"] = self.nu
        data["Re"] = self.Re
        return pd.DataFrame([data])
