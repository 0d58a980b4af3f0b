import pytest

from datastructures import VPNSinfo, ConfigurationError


def test_defaults_and_derived_quantities(subtests):
    cfg = VPNSinfo()

    with subtests.test("defaults"):
        assert (cfg.nx, cfg.ny) == (21, 21)
        assert cfg.rho == 999.8
        assert cfg.mu == 0.9
        assert cfg.lid_velocity == 0.02
        assert cfg.dt == 0.01
        assert cfg.n_steps == 1000
        assert cfg.save_interval == 10
        assert cfg.edge_coefficients == "consistent"

    with subtests.test("kinematic_viscosity"):
        assert cfg.nu == pytest.approx(0.9 / 999.8)

    with subtests.test("reynolds_number"):
        assert cfg.Re == pytest.approx(0.02 * 1.0 / (0.9 / 999.8))

    with subtests.test("spacing"):
        assert cfg.dx == pytest.approx(1.0 / 22)
        assert cfg.dy == pytest.approx(1.0 / 22)

    with subtests.test("sizes"):
        assert cfg.n_points == 441
        assert cfg.n_dof == 882


@pytest.mark.parametrize(
    "kwargs",
    [
        {"nx": 2},
        {"ny": 1},
        {"rho": 0.0},
        {"mu": -1.0},
        {"dt": 0.0},
        {"Lx": -1.0},
        {"n_steps": -1},
        {"save_interval": 0},
        {"print_interval": 0},
        {"pinv_rtol": -1e-3},
        {"edge_coefficients": "inverted"},
    ],
)
def test_invalid_configuration_is_rejected(kwargs):
    with pytest.raises(ConfigurationError):
        VPNSinfo(**kwargs)


def test_configuration_error_is_value_error():
    with pytest.raises(ValueError):
        VPNSinfo(nx=0)


def test_to_dataframe_includes_derived_columns():
    df = VPNSinfo(nx=5, ny=7).to_dataframe()
    assert len(df) == 1
    assert df["nx"].iloc[0] == 5
    assert df["ny"].iloc[0] == 7
    assert "nu" in df.columns
    assert "Re" in df.columns
