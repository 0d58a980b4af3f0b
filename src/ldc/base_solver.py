"""Abstract base solver for lid-driven cavity problem."""

import logging
import time
from abc import ABC, abstractmethod
from dataclasses import asdict, replace
from enum import Enum
from pathlib import Path

import h5py
import numpy as np

from datastructures import TimeSeries

log = logging.getLogger(__name__)


class SolverState(Enum):
    INITIALIZED = "initialized"
    STEPPING = "stepping"
    TERMINATED = "terminated"
    FAILED = "failed"


class LidDrivenCavitySolver(ABC):
    """Abstract base solver for lid-driven cavity problem.

    Handles:
    - Configuration management
    - Fixed-count time marching loop with Appellian tracking
    - Snapshot hand-off and result storage

    Subclasses must:
    - Set the Config class attribute
    - Implement step() - advance one time step and return its Appellian
    - Implement _create_result_fields() - create result dataclass
    - Implement the velocity property
    - Extend __init__() for solver-specific setup
    """

    Config = None

    def __init__(self, config=None, snapshot_writer=None, **kwargs):
        """Initialize solver with configuration.

        Parameters
        ----------
        config : Config, optional
            Configuration object. If not provided, kwargs are used to create config.
        snapshot_writer : SnapshotWriter, optional
            Receives the velocity field at step 1 and every save_interval steps.
        **kwargs
            Configuration parameters passed to Config class if config is None.
        """
        # Create config from kwargs if not provided
        if config is None:
            if self.Config is None:
                raise ValueError("Subclass must define Config class attribute")
            config = self.Config(**kwargs)
        elif kwargs:
            config = replace(config, **kwargs)

        self.config = config
        self.snapshot_writer = snapshot_writer
        self.state = SolverState.INITIALIZED
        self.appellian = []

    @abstractmethod
    def step(self):
        """Perform one time step of the solver.

        The acceleration must be evaluated from the state at the start of the
        step before the state is updated.

        Returns
        -------
        float
            Appellian S* of this step.
        """
        pass

    @property
    @abstractmethod
    def velocity(self):
        """Current interleaved velocity field, shape (2N,)."""
        pass

    @abstractmethod
    def _create_result_fields(self):
        """Create the result fields dataclass from the current state."""
        pass

    def _store_results(self, steps_completed, wall_time):
        """Store solve results in self.fields, self.time_series, and self.metadata."""
        self.fields = self._create_result_fields()

        self.time_series = TimeSeries.from_appellian(
            self.appellian,
            dt=self.config.dt,
            rho=self.config.rho,
            lid_velocity=self.config.lid_velocity,
        )

        self.metadata = replace(
            self.config,
            steps_completed=steps_completed,
            final_appellian=self.appellian[-1] if self.appellian else None,
            wall_time=wall_time,
        )

    def solve(self, n_steps=None):
        """March the configured number of explicit time steps.

        There is no convergence criterion: the loop always runs all steps.

        Stores results in solver attributes:
        - self.fields : Fields dataclass with the final velocity
        - self.time_series : TimeSeries dataclass with the Appellian history
        - self.metadata : Config dataclass with run info filled in

        Parameters
        ----------
        n_steps : int, optional
            Number of steps. If None, uses config.n_steps.
        """
        if self.state is not SolverState.INITIALIZED:
            raise RuntimeError(
                f"Solver is {self.state.value}; create a new solver to run again"
            )

        if n_steps is None:
            n_steps = self.config.n_steps

        save_interval = self.config.save_interval
        print_interval = self.config.print_interval
        dt = self.config.dt

        log.info(f"Starting time integration: {n_steps} steps, dt = {dt:.4g} s, final time {n_steps * dt:.4g} s")

        self.state = SolverState.STEPPING
        time_start = time.time()

        try:
            for t in range(1, n_steps + 1):
                s_star = self.step()
                self.appellian.append(s_star)

                if self.snapshot_writer is not None and (t == 1 or t % save_interval == 0):
                    self.snapshot_writer.write(t, self.velocity)

                if t == 1 or t % print_interval == 0:
                    log.info(f"Step {t:4d}/{n_steps} | t = {t * dt:.3f} s | S* = {s_star:12.6e}")
        except Exception:
            self.state = SolverState.FAILED
            log.error(f"Time integration failed at step {t}/{n_steps}")
            raise
        finally:
            if self.snapshot_writer is not None:
                self.snapshot_writer.close()

        time_end = time.time()
        wall_time = time_end - time_start
        self.state = SolverState.TERMINATED

        log.info(f"Time integration complete in {wall_time:.2f} seconds.")
        if n_steps > 0:
            log.info(f"Average time per step: {wall_time / n_steps:.4f} seconds")

        # Store results
        self._store_results(n_steps, wall_time)

    def save(self, filepath):
        """Save the final consolidated record to an HDF5 file.

        Parameters
        ----------
        filepath : str or Path
            Output file path.
        """
        if self.state is not SolverState.TERMINATED:
            raise RuntimeError("Nothing to save: call solve() first")

        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        # Convert dataclasses to dicts
        fields_dict = asdict(self.fields)
        time_series_dict = asdict(self.time_series)
        metadata_dict = asdict(self.metadata)
        metadata_dict["nu"] = self.metadata.nu
        metadata_dict["Re"] = self.metadata.Re

        with h5py.File(filepath, "w") as f:
            # Save metadata as root-level attributes
            for key, val in metadata_dict.items():
                # HDF5 attributes cannot hold None
                if val is None:
                    continue
                f.attrs[key] = val

            # Save fields in a fields group
            fields_grp = f.create_group("fields")
            for key, val in fields_dict.items():
                fields_grp.create_dataset(key, data=val)
            fields_grp.create_dataset("velocity_magnitude", data=self.fields.velocity_magnitude)

            # Save time series in a group
            ts_grp = f.create_group("time_series")
            for key, val in time_series_dict.items():
                if val is not None:
                    ts_grp.create_dataset(key, data=np.asarray(val))

            spectrum = getattr(self, "projector_spectrum", None)
            if spectrum is not None:
                f.create_dataset("projector_spectrum", data=spectrum)

        log.info(f"Final state saved to: {filepath}")
