"""Field data structures for solver results."""
from dataclasses import dataclass, asdict
import numpy as np
import pandas as pd


@dataclass
class Fields:
    """Velocity solution on the unknown grid points.

    Parameters
    ----------
    u : np.ndarray
        x-velocity component per grid point.
    v : np.ndarray
        y-velocity component per grid point.
    x : np.ndarray
        x-coordinates of grid points.
    y : np.ndarray
        y-coordinates of grid points.
    grid_points : np.ndarray
        Flattened array of grid point coordinates, shape (N, 2).
    velocity : np.ndarray
        Interleaved (u, v) state vector, shape (2N,).
    """
    u: np.ndarray
    v: np.ndarray
    x: np.ndarray
    y: np.ndarray
    grid_points: np.ndarray
    velocity: np.ndarray

    @classmethod
    def from_velocity(cls, velocity, x, y):
        """Split an interleaved state vector into per-point components."""
        velocity = np.asarray(velocity, dtype=np.float64)
        if velocity.shape != (2 * x.shape[0],):
            raise ValueError(
                f"Velocity vector of shape {velocity.shape} does not match "
                f"{x.shape[0]} grid points"
            )
        return cls(
            u=velocity[0::2].copy(),
            v=velocity[1::2].copy(),
            x=np.asarray(x),
            y=np.asarray(y),
            grid_points=np.column_stack([x, y]),
            velocity=velocity.copy(),
        )

    @property
    def velocity_magnitude(self) -> np.ndarray:
        return np.sqrt(self.u ** 2 + self.v ** 2)

    def to_dataframe(self) -> pd.DataFrame:
        """Convert fields to DataFrame for analysis and plotting.

        Returns
        -------
        pd.DataFrame
            Wide-format DataFrame with columns: x, y, u, v.
            Each row represents one grid point.
        """
        data = asdict(self)
        # Per-point columns only
        data.pop('grid_points')
        data.pop('velocity')
        return pd.DataFrame(data)
