"""Velocity snapshot collaborators used by the marching loop."""

import logging
from abc import ABC, abstractmethod
from pathlib import Path

import h5py
import numpy as np

log = logging.getLogger(__name__)


class SnapshotWriter(ABC):
    """Receives the velocity field at selected steps.

    The solver hands over its live state vector; implementations must copy
    or persist it before returning.
    """

    @abstractmethod
    def write(self, step, velocity):
        """Persist ``velocity`` (shape (2N,)) for 1-based ``step``."""

    def close(self):
        """Release resources after the run."""


class MemorySnapshotWriter(SnapshotWriter):
    """Keeps snapshots in a dict keyed by step number."""

    def __init__(self):
        self.snapshots = {}

    def write(self, step, velocity):
        self.snapshots[int(step)] = np.array(velocity, dtype=np.float64, copy=True)

    @property
    def steps(self):
        return sorted(self.snapshots)


class HDF5SnapshotWriter(SnapshotWriter):
    """Writes each snapshot as dataset ``snapshots/<step>`` of one HDF5 file.

    Parameters
    ----------
    filepath : str or Path
        Output file path. The file is created on the first write, together
        with its parent directories; an existing file is overwritten.
    """

    def __init__(self, filepath):
        self.filepath = Path(filepath)
        self._file = None
        self._group = None
        self._closed = False

    def _open(self):
        self.filepath.parent.mkdir(parents=True, exist_ok=True)
        self._file = h5py.File(self.filepath, "w")
        self._group = self._file.create_group("snapshots")

    def write(self, step, velocity):
        if self._closed:
            raise ValueError(f"Snapshot writer for {self.filepath} is closed")
        if self._file is None:
            self._open()
        dset = self._group.create_dataset(f"{int(step):08d}", data=np.asarray(velocity, dtype=np.float64))
        dset.attrs["step"] = int(step)

    def close(self):
        self._closed = True
        if self._file is not None and self._file.id.valid:
            self._file.close()
            log.info(f"Snapshots saved to: {self.filepath}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def load_snapshots(filepath):
    """Read snapshots written by ``HDF5SnapshotWriter``.

    Returns
    -------
    dict
        Step number -> velocity vector, ordered by step.
    """
    snapshots = {}
    with h5py.File(filepath, "r") as f:
        for name in sorted(f["snapshots"]):
            dset = f["snapshots"][name]
            snapshots[int(dset.attrs["step"])] = dset[()]
    return snapshots
