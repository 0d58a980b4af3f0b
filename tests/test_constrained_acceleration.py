import numpy as np
import pytest

from meshing import create_structured_grid_2d
from projection import (
    MassScaling,
    build_constraint_matrix,
    build_projection_operators,
    compute_free_acceleration,
    solve_constrained_acceleration,
)


@pytest.fixture
def setup():
    grid = create_structured_grid_2d(6, 5)
    mass = MassScaling(2.0, grid.dx, grid.dy)
    A = build_constraint_matrix(grid)
    operators = build_projection_operators(A, mass)
    return grid, mass, A, operators


def test_projected_acceleration_is_divergence_free(setup, rng, subtests):
    grid, mass, A, operators = setup
    U = 0.1 * rng.standard_normal(grid.n_dof)
    C = compute_free_acceleration(grid, U, rho=2.0, nu=0.05, lid_velocity=1.0)
    result = solve_constrained_acceleration(C, mass, operators)

    with subtests.test("scaled"):
        assert np.allclose(operators.A_tilde @ result.acceleration_tilde, 0.0, atol=1e-9)

    with subtests.test("physical"):
        assert np.allclose(A @ result.acceleration, 0.0, atol=1e-9)

    with subtests.test("decomposition"):
        # a~* - Q~ = -C~
        assert np.allclose(
            result.acceleration_tilde + result.constraint_force_tilde, -mass.scale(C)
        )

    with subtests.test("orthogonal_parts"):
        assert np.dot(result.acceleration_tilde, result.constraint_force_tilde) == pytest.approx(
            0.0, abs=1e-10
        )

    with subtests.test("appellian"):
        Q = result.constraint_force_tilde
        assert result.appellian == pytest.approx(0.5 * np.dot(Q, Q))
        assert result.appellian >= 0.0


def test_divergence_free_forcing_has_zero_appellian(setup):
    """A free acceleration already in the null space needs no constraint force."""
    grid, mass, _, operators = setup
    C_tilde = operators.null_projector @ np.linspace(-1.0, 1.0, grid.n_dof)
    C = C_tilde / mass.inv_sqrt
    result = solve_constrained_acceleration(C, mass, operators)
    assert result.appellian == pytest.approx(0.0, abs=1e-20)
    assert np.allclose(result.acceleration_tilde, -C_tilde)


def test_zero_forcing(setup):
    grid, mass, _, operators = setup
    result = solve_constrained_acceleration(np.zeros(grid.n_dof), mass, operators)
    assert result.appellian == 0.0
    assert np.all(result.acceleration == 0.0)


def test_shape_mismatch_raises(setup):
    _, mass, _, operators = setup
    with pytest.raises(ValueError):
        solve_constrained_acceleration(np.zeros(7), mass, operators)
