"""Read saved VPNS runs into DataFrames."""

from pathlib import Path

import h5py
import numpy as np
import pandas as pd


def load_run(h5_path):
    """Load a file written by ``LidDrivenCavitySolver.save``.

    Parameters
    ----------
    h5_path : str or Path
        Path to the HDF5 record.

    Returns
    -------
    metadata : pd.DataFrame
        Single-row DataFrame of configuration and run info.
    fields : pd.DataFrame
        One row per grid point with x, y, u, v and velocity_magnitude.
    time_series : pd.DataFrame
        One row per step.
    spectrum : np.ndarray or None
        Eigenvalues of the null-space projector, if they were saved.
    """
    h5_path = Path(h5_path)
    if not h5_path.exists():
        raise FileNotFoundError(f"HDF5 file not found: {h5_path}")

    with h5py.File(h5_path, "r") as f:
        metadata = {}
        for key, val in f.attrs.items():
            # Scalars come back as numpy types
            metadata[key] = val.item() if isinstance(val, np.generic) else val

        fields = {
            key: f["fields"][key][()]
            for key in ("x", "y", "u", "v", "velocity_magnitude")
        }
        time_series = {key: dset[()] for key, dset in f["time_series"].items()}
        spectrum = f["projector_spectrum"][()] if "projector_spectrum" in f else None

    return (
        pd.DataFrame([metadata]),
        pd.DataFrame(fields),
        pd.DataFrame(time_series),
        spectrum,
    )
