from dataclasses import replace

import matplotlib.pyplot as plt
import pytest

from ldc import VPNSSolver
from utils import AppellianPlotter


@pytest.fixture
def saved_run(unit_config, tmp_path):
    solver = VPNSSolver(config=replace(unit_config, spectrum_analysis=True))
    solver.solve()
    path = tmp_path / "run.h5"
    solver.save(path)
    return path


def test_single_run_plots(saved_run, tmp_path, subtests):
    plotter = AppellianPlotter(saved_run)

    with subtests.test("loaded"):
        assert plotter.metadata["run"].iloc[0] == "run"
        assert len(plotter.time_series) == 20
        assert len(plotter.fields) == 25
        assert "run" in plotter.spectra

    for name in ("appellian", "appellian_rate", "velocity_magnitude", "projector_spectrum"):
        with subtests.test(name):
            out = tmp_path / f"{name}.png"
            getattr(plotter, f"plot_{name}")(output_path=out)
            assert out.exists()
            plt.close("all")


def test_multiple_runs(saved_run, tmp_path):
    plotter = AppellianPlotter([
        {"h5_path": saved_run, "label": "a"},
        {"h5_path": saved_run, "label": "b"},
    ])
    assert set(plotter.time_series["run"]) == {"a", "b"}

    out = tmp_path / "appellian.png"
    plotter.plot_appellian(output_path=out)
    assert out.exists()
    plt.close("all")

    with pytest.raises(ValueError):
        plotter.plot_velocity_magnitude()


def test_missing_spectrum(unit_config, tmp_path):
    solver = VPNSSolver(config=unit_config)
    solver.solve()
    path = tmp_path / "plain.h5"
    solver.save(path)

    plotter = AppellianPlotter(path)
    with pytest.raises(ValueError):
        plotter.plot_projector_spectrum()


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        AppellianPlotter(tmp_path / "absent.h5")
