"""Post-processing helpers for saved VPNS runs."""

from .results_io import load_run
from .appellian_plotter import AppellianPlotter

__all__ = ["load_run", "AppellianPlotter"]
