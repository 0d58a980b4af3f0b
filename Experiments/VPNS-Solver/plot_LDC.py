"""
Lid-Driven Cavity Flow Visualization (VPNS)
===========================================

This script visualizes the VPNS run: the Appellian history, its rate of change,
the final velocity field and the eigenvalues of the null-space projector.
"""

# %%
# Setup and Load Data
# -------------------

from pathlib import Path

from utils import AppellianPlotter

project_root = Path(__file__).resolve().parents[2]
data_dir = project_root / "data" / "VPNS-Solver"
fig_dir = project_root / "figures" / "VPNS-Solver"
fig_dir.mkdir(parents=True, exist_ok=True)

plotter = AppellianPlotter(data_dir / "LDC_VPNS.h5")
print(f"Loaded solution from: {data_dir / 'LDC_VPNS.h5'}")

# %%
# Appellian History
# -----------------

plotter.plot_appellian(output_path=fig_dir / "LDC_VPNS_appellian.pdf")
plotter.plot_appellian_rate(output_path=fig_dir / "LDC_VPNS_appellian_rate.pdf")
print("  ✓ Appellian plots saved")

# %%
# Velocity Field
# --------------

plotter.plot_velocity_magnitude(output_path=fig_dir / "LDC_VPNS_velocity.pdf")
print("  ✓ Velocity field plot saved")

# %%
# Projector Spectrum
# ------------------

plotter.plot_projector_spectrum(output_path=fig_dir / "LDC_VPNS_spectrum.pdf")
print("  ✓ Spectrum plot saved")

print(f"\nAll figures saved to: {fig_dir}")
