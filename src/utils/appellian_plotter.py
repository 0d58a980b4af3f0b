"""VPNS results plotter for single and multiple runs."""

import logging
from pathlib import Path

import matplotlib.pyplot as plt
import seaborn as sns
import pandas as pd
import numpy as np

from .results_io import load_run

log = logging.getLogger(__name__)


class AppellianPlotter:
    """Plotter for VPNS lid-driven cavity results.

    DataFrame-native plotting of the Appellian history, the final velocity
    field and the projector spectrum.

    Parameters
    ----------
    runs : dict, str, Path, or list
        Single run or list of runs. Can be:
        - str/Path: Path to HDF5 file
        - dict: Dictionary with 'h5_path' (and optionally 'label')
        - list: List of any of the above

    Attributes
    ----------
    fields : pd.DataFrame
        Spatial fields (x, y, u, v, velocity_magnitude) for all runs
    time_series : pd.DataFrame
        Appellian time series for all runs
    metadata : pd.DataFrame
        Configuration and run info for all runs
    spectra : dict
        Run label -> eigenvalues of N, for runs that saved them

    Examples
    --------
    >>> plotter = AppellianPlotter('run.h5')
    >>> plotter.plot_appellian()

    >>> plotter = AppellianPlotter([
    ...     {'h5_path': 'run1.h5', 'label': '21x21'},
    ...     {'h5_path': 'run2.h5', 'label': '31x31'}
    ... ])
    """

    def __init__(self, runs):
        # Normalize to list
        if not isinstance(runs, list):
            runs = [runs]

        fields_list = []
        time_series_list = []
        metadata_list = []
        self.spectra = {}

        for run in runs:
            # Normalize run to dict
            if isinstance(run, (str, Path)):
                run = {"h5_path": run, "label": Path(run).stem}

            h5_path = Path(run["h5_path"])
            label = run.get("label", h5_path.stem)

            metadata_df, fields_df, time_series_df, spectrum = load_run(h5_path)

            metadata_list.append(metadata_df.assign(run=label))
            fields_list.append(fields_df.assign(run=label))
            time_series_list.append(time_series_df.assign(run=label))
            if spectrum is not None:
                self.spectra[label] = spectrum

        # Concatenate all runs
        self.fields = pd.concat(fields_list, ignore_index=True)
        self.time_series = pd.concat(time_series_list, ignore_index=True)
        self.metadata = pd.concat(metadata_list, ignore_index=True)

    def _require_single_run(self):
        """Check that only single run is loaded (for field plotting)."""
        if self.metadata['run'].nunique() > 1:
            raise ValueError("Field plotting only available for single run.")

    def _line_plot(self, y, ylabel, title, output_path=None, log_scale=False):
        n_runs = self.metadata['run'].nunique()

        g = sns.relplot(
            data=self.time_series,
            x="time",
            y=y,
            hue="run" if n_runs > 1 else None,
            kind="line",
            height=5,
            aspect=1.6,
            linewidth=2,
            legend="auto" if n_runs > 1 else False,
        )

        if log_scale:
            g.ax.set_yscale("log")
        g.ax.grid(True, alpha=0.3)
        g.ax.set_xlabel("Time [s]")
        g.ax.set_ylabel(ylabel)
        g.ax.set_title(title, fontweight="bold")

        if output_path:
            g.savefig(output_path, bbox_inches="tight", dpi=300)
            log.info(f"Plot saved to: {output_path}")
        return g

    def plot_appellian(self, output_path=None, normalized=True):
        """Plot the evolution of the optimum Appellian.

        Parameters
        ----------
        output_path : str or Path, optional
            Path to save figure. If None, figure is not saved.
        normalized : bool, optional
            Plot S* / (rho U_lid^4) instead of S*. Falls back to the raw
            series when the normalized one is undefined (lid at rest).
        """
        column = "normalized_appellian"
        if not normalized or self.time_series[column].isna().all():
            column = "appellian"
        ylabel = r"$S^* / (\rho U_{lid}^4)$" if column == "normalized_appellian" else r"$S^*$"
        return self._line_plot(column, ylabel, "Evolution of Optimum Appellian", output_path)

    def plot_appellian_rate(self, output_path=None):
        """Plot the time rate of change of the normalized Appellian."""
        return self._line_plot(
            "appellian_rate", r"$dS^*/dt$", "Rate of Change of Normalized Appellian", output_path
        )

    def plot_velocity_magnitude(self, output_path=None):
        """Plot velocity magnitude with velocity vectors.

        Only available for single-run plotting.

        Parameters
        ----------
        output_path : str or Path, optional
            Path to save figure. If None, figure is not saved.
        """
        self._require_single_run()

        Re = self.metadata['Re'].iloc[0]
        fig, ax = plt.subplots(figsize=(8, 7))

        cf = ax.tricontourf(
            self.fields['x'], self.fields['y'], self.fields['velocity_magnitude'],
            levels=20, cmap="coolwarm"
        )
        ax.quiver(
            self.fields['x'], self.fields['y'], self.fields['u'], self.fields['v'],
            color='white', alpha=0.7
        )

        ax.set_xlabel("x")
        ax.set_ylabel("y")
        ax.set_title(f"Velocity Magnitude (Re = {Re:.2f})", fontweight="bold")
        ax.set_aspect("equal")
        plt.colorbar(cf, ax=ax, label="Velocity magnitude")
        plt.tight_layout()

        if output_path:
            plt.savefig(output_path, bbox_inches="tight", dpi=300)
            log.info(f"Velocity magnitude plot saved to: {output_path}")
        return fig

    def plot_projector_spectrum(self, output_path=None):
        """Plot the eigenvalues of the null-space projector on the real axis."""
        if not self.spectra:
            raise ValueError("No projector spectrum saved; run with spectrum_analysis=True.")

        fig, ax = plt.subplots(figsize=(8, 3))
        for offset, (label, eigenvalues) in enumerate(self.spectra.items()):
            ax.plot(
                eigenvalues, np.full_like(eigenvalues, offset), 'o',
                markersize=5, label=label
            )

        ax.set_xlabel("Real Axis")
        ax.set_yticks([])
        ax.set_xlim(-0.1, 1.1)
        ax.set_title("Eigenvalues of Projection Matrix N", fontweight="bold")
        ax.grid(True, alpha=0.3)
        if len(self.spectra) > 1:
            ax.legend()
        plt.tight_layout()

        if output_path:
            plt.savefig(output_path, bbox_inches="tight", dpi=300)
            log.info(f"Spectrum plot saved to: {output_path}")
        return fig
