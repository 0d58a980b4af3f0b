"""Time series data structures."""
from dataclasses import dataclass, asdict
from typing import List
import numpy as np
import pandas as pd


@dataclass
class TimeSeries:
    """Per-step diagnostics of a marching run.

    Parameters
    ----------
    appellian : List[float]
        Optimum Appellian S* for steps 1..n.
    step : List[int], optional
        Step numbers (1-based). Default is None.
    time : List[float], optional
        Simulated time at the end of each step. Default is None.
    normalized_appellian : List[float], optional
        S* / (rho * U_lid**4). NaN when the lid is at rest. Default is None.
    appellian_rate : List[float], optional
        Time derivative of the normalized Appellian. Default is None.
    """
    appellian: List[float]
    step: List[int] = None
    time: List[float] = None
    normalized_appellian: List[float] = None
    appellian_rate: List[float] = None

    @classmethod
    def from_appellian(cls, appellian, dt, rho, lid_velocity):
        """Build the full time series from the raw Appellian history."""
        s = np.asarray(appellian, dtype=np.float64)
        n = s.shape[0]
        steps = np.arange(1, n + 1)

        scale = rho * lid_velocity ** 4
        if scale > 0:
            normalized = s / scale
        else:
            normalized = np.full(n, np.nan)

        # np.gradient needs two samples
        if n >= 2:
            rate = np.gradient(normalized, dt)
        else:
            rate = np.zeros(n)

        return cls(
            appellian=s.tolist(),
            step=steps.tolist(),
            time=(steps * dt).tolist(),
            normalized_appellian=normalized.tolist(),
            appellian_rate=rate.tolist(),
        )

    def to_dataframe(self) -> pd.DataFrame:
        """Convert time series to DataFrame for analysis and plotting.

        Returns
        -------
        pd.DataFrame
            DataFrame with one row per step.
        """
        data = {key: val for key, val in asdict(self).items() if val is not None}
        return pd.DataFrame(data)
