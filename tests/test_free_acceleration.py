import numpy as np
import pytest

from meshing import create_structured_grid_2d
from projection import compute_free_acceleration


def test_rest_state_with_moving_lid(small_grid, subtests):
    """Only the lid constant is nonzero, so only top-row u entries are forced."""
    U = np.zeros(small_grid.n_dof)
    C = compute_free_acceleration(small_grid, U, rho=1.0, nu=1.0, lid_velocity=1.0)
    top_row = np.concatenate([small_grid.top, [20, 24]])

    with subtests.test("top_row_u_forced"):
        # rho*dx*dy * (-nu * U_lid / dy^2)
        expected = -small_grid.dx * small_grid.dy / small_grid.dy ** 2
        assert np.allclose(C[2 * top_row], expected)

    with subtests.test("everything_else_zero"):
        mask = np.ones(small_grid.n_dof, dtype=bool)
        mask[2 * top_row] = False
        assert np.all(C[mask] == 0.0)


def test_rest_state_with_lid_at_rest(small_grid):
    C = compute_free_acceleration(small_grid, np.zeros(50), rho=1.0, nu=1.0, lid_velocity=0.0)
    assert np.all(C == 0.0)


def test_interior_stencil_matches_hand_formula(rng):
    grid = create_structured_grid_2d(5, 5, Lx=1.0, Ly=2.0)
    U = rng.standard_normal(grid.n_dof)
    rho, nu = 2.0, 0.3
    C = compute_free_acceleration(grid, U, rho, nu, lid_velocity=0.7)

    dx, dy = grid.dx, grid.dy
    m = 12
    u = lambda k: U[2 * k]
    v = lambda k: U[2 * k + 1]
    w, e, s, n = m - 1, m + 1, m - 5, m + 5

    conv_u = 0.5 * u(m) * (u(e) - u(w)) / dx + 0.5 * v(m) * (u(n) - u(s)) / dy
    visc_u = nu * ((u(e) - 2 * u(m) + u(w)) / dx ** 2 + (u(n) - 2 * u(m) + u(s)) / dy ** 2)
    conv_v = 0.5 * u(m) * (v(e) - v(w)) / dx + 0.5 * v(m) * (v(n) - v(s)) / dy
    visc_v = nu * ((v(e) - 2 * v(m) + v(w)) / dx ** 2 + (v(n) - 2 * v(m) + v(s)) / dy ** 2)

    dm = rho * dx * dy
    assert C[2 * m] == pytest.approx(dm * (conv_u - visc_u))
    assert C[2 * m + 1] == pytest.approx(dm * (conv_v - visc_v))


def test_top_corner_uses_lid_and_wall_constants(small_grid, rng):
    U = rng.standard_normal(small_grid.n_dof)
    lid = 0.4
    C = compute_free_acceleration(small_grid, U, rho=1.0, nu=0.5, lid_velocity=lid)

    dx, dy = small_grid.dx, small_grid.dy
    m = 24  # top-right corner: east and north are walls
    u0, v0 = U[2 * m], U[2 * m + 1]
    uw, vw = U[2 * (m - 1)], U[2 * (m - 1) + 1]
    us, vs = U[2 * (m - 5)], U[2 * (m - 5) + 1]

    conv_u = 0.5 * u0 * (0.0 - uw) / dx + 0.5 * v0 * (lid - us) / dy
    visc_u = 0.5 * ((0.0 - 2 * u0 + uw) / dx ** 2 + (lid - 2 * u0 + us) / dy ** 2)
    conv_v = 0.5 * u0 * (0.0 - vw) / dx + 0.5 * v0 * (0.0 - vs) / dy
    visc_v = 0.5 * ((0.0 - 2 * v0 + vw) / dx ** 2 + (0.0 - 2 * v0 + vs) / dy ** 2)

    assert C[2 * m] == pytest.approx(dx * dy * (conv_u - visc_u))
    assert C[2 * m + 1] == pytest.approx(dx * dy * (conv_v - visc_v))


def test_output_buffer_is_reused(small_grid, rng):
    U = rng.standard_normal(small_grid.n_dof)
    out = np.empty(small_grid.n_dof)
    result = compute_free_acceleration(small_grid, U, 1.0, 1.0, 1.0, out=out)
    assert result is out
    assert np.allclose(out, compute_free_acceleration(small_grid, U, 1.0, 1.0, 1.0))


def test_invalid_buffers_raise(small_grid, subtests):
    U = np.zeros(small_grid.n_dof)

    with subtests.test("wrong_velocity_shape"):
        with pytest.raises(ValueError):
            compute_free_acceleration(small_grid, np.zeros(10), 1.0, 1.0, 1.0)

    with subtests.test("wrong_output_shape"):
        with pytest.raises(ValueError):
            compute_free_acceleration(small_grid, U, 1.0, 1.0, 1.0, out=np.zeros(10))

    with subtests.test("aliased_output"):
        with pytest.raises(ValueError):
            compute_free_acceleration(small_grid, U, 1.0, 1.0, 1.0, out=U)

    with subtests.test("integer_output"):
        with pytest.raises(ValueError):
            compute_free_acceleration(
                small_grid, U, 0.5, 1.0, 1.0, out=np.zeros(small_grid.n_dof, dtype=np.int64)
            )

    with subtests.test("single_precision_output"):
        with pytest.raises(ValueError):
            compute_free_acceleration(
                small_grid, U, 0.5, 1.0, 1.0, out=np.zeros(small_grid.n_dof, dtype=np.float32)
            )
