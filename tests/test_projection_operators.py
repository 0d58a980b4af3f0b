from dataclasses import replace

import numpy as np
import pytest

from meshing import create_structured_grid_2d
from projection import (
    MassScaling,
    NumericalRankError,
    build_constraint_matrix,
    build_projection_operators,
)
from projection.core.projection_operators import default_rtol


@pytest.fixture(params=["consistent", "legacy"])
def operators(request):
    grid = create_structured_grid_2d(5, 4)
    mass = MassScaling(1.5, grid.dx, grid.dy)
    A = build_constraint_matrix(grid, request.param)
    return build_projection_operators(A, mass)


def test_mass_scaling(subtests):
    mass = MassScaling(4.0, 0.5, 0.5)

    with subtests.test("node_mass"):
        assert mass.node_mass == pytest.approx(1.0)
        assert mass.inv_sqrt == pytest.approx(1.0)

    with subtests.test("scale"):
        mass = MassScaling(1.0, 0.5, 0.5)
        assert np.allclose(mass.scale(np.ones(3)), 2.0)

    with subtests.test("as_sparse"):
        D = mass.as_sparse(4)
        assert D.shape == (4, 4)
        assert np.allclose(D.diagonal(), 2.0)

    with subtests.test("rejects_non_positive"):
        with pytest.raises(ValueError):
            MassScaling(0.0, 0.5, 0.5)


def test_projector_identities(operators, subtests):
    P = operators.range_projector
    N = operators.null_projector

    with subtests.test("shapes"):
        assert P.shape == (40, 40)
        assert operators.n_dof == 40
        assert operators.pinv.shape == (40, 20)

    with subtests.test("idempotent"):
        assert np.allclose(P @ P, P, atol=1e-10)
        assert np.allclose(N @ N, N, atol=1e-10)

    with subtests.test("complementary"):
        assert np.allclose(P + N, np.eye(40), atol=1e-12)

    with subtests.test("symmetric"):
        assert np.allclose(P, P.T, atol=1e-10)

    with subtests.test("trace_equals_rank"):
        assert np.trace(P) == pytest.approx(operators.rank, abs=1e-8)
        assert 0 < operators.rank <= 20

    with subtests.test("null_space_is_annihilated"):
        assert np.allclose(operators.A_tilde @ N, 0.0, atol=1e-9)

    with subtests.test("validate_returns_idempotency_error"):
        assert operators.validate() <= 1e-8


def test_pseudoinverse_matches_numpy(operators):
    expected = np.linalg.pinv(operators.A_tilde.toarray())
    assert np.allclose(operators.pinv, expected, atol=1e-10)


def test_eigenvalues_are_zero_or_one(operators):
    eigenvalues = operators.eigenvalues()
    assert eigenvalues.shape == (40,)
    near_zero = np.isclose(eigenvalues, 0.0, atol=1e-8)
    near_one = np.isclose(eigenvalues, 1.0, atol=1e-8)
    assert np.all(near_zero | near_one)
    assert np.count_nonzero(near_zero) == operators.rank


def test_corrupted_projector_fails_validation(operators):
    broken = replace(operators, range_projector=2.0 * operators.range_projector)
    with pytest.raises(NumericalRankError):
        broken.validate()


def test_default_rtol():
    assert default_rtol((20, 40)) == pytest.approx(40 * np.finfo(np.float64).eps)


def test_large_rtol_truncates_rank():
    grid = create_structured_grid_2d(4, 4)
    mass = MassScaling(1.0, grid.dx, grid.dy)
    A = build_constraint_matrix(grid)
    full = build_projection_operators(A, mass)
    truncated = build_projection_operators(A, mass, rtol=0.5)
    assert truncated.rank < full.rank
    assert truncated.cutoff == pytest.approx(0.5 * truncated.singular_values[0])
    # Truncated projectors are still exact projectors
    assert truncated.validate() <= 1e-8
