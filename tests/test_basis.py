import math
from types import SimpleNamespace

import numpy as np
import pytest
from numpy.polynomial import Polynomial
from numpy.polynomial import chebyshev, hermite, laguerre, legendre

from smoothlie.basis import (
    PolynomialBasis,
    bernstein_basis,
    bspline_basis,
    colwise_norm,
    fpow,
    hermite_basis,
    integrate_absolute_polynomial,
    jacobi_basis,
    lagrange_basis,
    laguerre_basis,
    monomial_derivative,
    monomial_derivatives,
    monomial_integral,
    polynomial_basis,
    polynomial_basis_derivatives,
    polynomial_cumulative_basis,
)


def _evaluate(b, x):
    return monomial_derivative(x, b.shape[0] - 1) @ b


def _unit(j, n):
    return np.eye(n)[j]


class _FakeSparse:
    def __init__(self, dense):
        self._dense = np.asarray(dense, dtype=float)

    def tocoo(self):
        rows, cols = np.nonzero(self._dense)
        return SimpleNamespace(
            row=rows, col=cols, data=self._dense[rows, cols], shape=self._dense.shape
        )


def test_fpow_matches_power():
    assert fpow(3, 4) == 3**4
    assert fpow(1.5, 3) == pytest.approx(1.5**3)
    assert fpow(2.5, 0) == 1.0


def test_fpow_array():
    arr = np.array([1.0, 2.0, 3.0])
    assert np.allclose(fpow(arr, 2), arr * arr)


def test_fpow_negative_exponent():
    with pytest.raises(ValueError):
        fpow(2.0, -1)


def test_colwise_norm_rotation_columns_are_unit():
    th = 0.7
    rot = np.array([[math.cos(th), -math.sin(th)], [math.sin(th), math.cos(th)]])
    assert np.allclose(colwise_norm(rot), np.ones(2))


def test_colwise_norm_sparse_matches_dense():
    dense = np.array([[1.0, 0.0, 2.0], [0.0, 0.0, -1.0], [3.0, 0.0, 0.5]])
    assert np.allclose(colwise_norm(_FakeSparse(dense)), colwise_norm(dense))
    assert colwise_norm(_FakeSparse(dense))[1] == 0.0


def test_monomial_derivative_top_order_is_factorial():
    k = 5
    for p in range(k + 1):
        row = monomial_derivative(1.7, k, p)
        assert np.all(row[:p] == 0)
        assert row[p] == math.factorial(p)


def test_monomial_derivative_beyond_degree_is_zero():
    assert np.all(monomial_derivative(2.0, 3, 4) == 0)
    assert monomial_derivative(2.0, 3, 4).shape == (4,)


def test_monomial_derivative_finite_difference():
    k, u, h = 6, 0.8, 1e-6
    for p in range(k):
        fd = (monomial_derivative(u + h, k, p) - monomial_derivative(u - h, k, p)) / (2 * h)
        assert np.allclose(fd, monomial_derivative(u, k, p + 1), rtol=1e-5, atol=1e-4)


def test_monomial_derivative_negative_order():
    with pytest.raises(ValueError):
        monomial_derivative(1.0, 3, -1)


def test_monomial_derivatives_rows():
    mat = monomial_derivatives(0.3, 4, 2)
    assert mat.shape == (3, 5)
    for q in range(3):
        assert np.array_equal(mat[q], monomial_derivative(0.3, 4, q))


def test_bernstein_degree_one():
    assert np.allclose(bernstein_basis(1), [[1.0, 0.0], [-1.0, 1.0]])


@pytest.mark.parametrize("basis", [PolynomialBasis.BERNSTEIN, PolynomialBasis.BSPLINE])
@pytest.mark.parametrize("k", [0, 1, 2, 3, 5])
def test_partition_of_unity(basis, k):
    b = polynomial_basis(basis, k)
    for x in np.linspace(0.0, 1.0, 11):
        values = _evaluate(b, x)
        assert values.sum() == pytest.approx(1.0)
        assert np.all(values >= -1e-12)


def test_bspline_matches_direct_function():
    assert np.array_equal(polynomial_basis(PolynomialBasis.BSPLINE, 3), bspline_basis(3))


@pytest.mark.parametrize("k", range(7))
def test_hermite_matches_numpy(k):
    b = hermite_basis(k)
    for x in (-1.3, 0.0, 0.4, 2.1):
        expected = [hermite.hermval(x, _unit(j, k + 1)) for j in range(k + 1)]
        assert np.allclose(_evaluate(b, x), expected)


@pytest.mark.parametrize("k", range(7))
def test_laguerre_matches_numpy(k):
    b = laguerre_basis(k)
    for x in (0.0, 0.5, 1.7, 4.0):
        expected = [laguerre.lagval(x, _unit(j, k + 1)) for j in range(k + 1)]
        assert np.allclose(_evaluate(b, x), expected)


@pytest.mark.parametrize("k", range(7))
def test_legendre_matches_numpy(k):
    b = polynomial_basis(PolynomialBasis.LEGENDRE, k)
    for x in (-0.9, -0.2, 0.3, 1.0):
        expected = [legendre.legval(x, _unit(j, k + 1)) for j in range(k + 1)]
        assert np.allclose(_evaluate(b, x), expected)


def test_legendre_is_jacobi_zero():
    assert np.allclose(polynomial_basis(PolynomialBasis.LEGENDRE, 4), jacobi_basis(4, 0.0, 0.0))


@pytest.mark.parametrize("k", range(7))
def test_chebyshev_first_kind(k):
    b = polynomial_basis(PolynomialBasis.CHEBYSHEV_1ST, k)
    for theta in (0.3, 1.1, 2.0):
        values = _evaluate(b, math.cos(theta))
        assert np.allclose(values, [math.cos(j * theta) for j in range(k + 1)])
        assert np.allclose(
            values, [chebyshev.chebval(math.cos(theta), _unit(j, k + 1)) for j in range(k + 1)]
        )


@pytest.mark.parametrize("k", range(7))
def test_chebyshev_second_kind(k):
    b = polynomial_basis(PolynomialBasis.CHEBYSHEV_2ND, k)
    for theta in (0.3, 1.1, 2.0):
        expected = [math.sin((j + 1) * theta) / math.sin(theta) for j in range(k + 1)]
        assert np.allclose(_evaluate(b, math.cos(theta)), expected)
    assert np.allclose(_evaluate(b, 1.0), np.arange(k + 1) + 1.0)


@pytest.mark.parametrize(
    "basis, quadrature",
    [
        (PolynomialBasis.HERMITE, hermite.hermgauss),
        (PolynomialBasis.LAGUERRE, laguerre.laggauss),
        (PolynomialBasis.LEGENDRE, legendre.leggauss),
        (PolynomialBasis.CHEBYSHEV_1ST, chebyshev.chebgauss),
    ],
)
def test_orthogonality(basis, quadrature):
    k = 5
    b = polynomial_basis(basis, k)
    nodes, weights = quadrature(k + 2)
    values = np.vstack([_evaluate(b, x) for x in nodes])
    gram = values.T @ (weights[:, None] * values)
    off_diagonal = gram - np.diag(np.diag(gram))
    assert np.allclose(off_diagonal, 0.0, atol=1e-8 * np.abs(gram).max())
    assert np.all(np.diag(gram) > 0)


def test_monomial_basis_is_identity():
    assert np.array_equal(polynomial_basis(PolynomialBasis.MONOMIAL, 3), np.eye(4))


def test_negative_degree_rejected():
    with pytest.raises(ValueError):
        polynomial_basis(PolynomialBasis.BERNSTEIN, -1)


def test_lagrange_interpolates_kronecker_delta():
    ts = [0.0, 0.5, 1.3, 2.0, 3.5]
    b = lagrange_basis(ts)
    values = np.vstack([_evaluate(b, t) for t in ts])
    assert np.allclose(values, np.eye(len(ts)))


def test_lagrange_partition_of_unity():
    ts = [-1.0, 0.2, 0.9, 4.0]
    b = lagrange_basis(ts)
    for x in (-3.0, 0.0, 2.5):
        assert _evaluate(b, x).sum() == pytest.approx(1.0)


def test_lagrange_duplicate_points():
    with pytest.raises(ValueError):
        lagrange_basis([0.0, 1.0, 1.0])


def test_basis_derivatives_monomial():
    ts = [0.0, 0.4, 1.2]
    d = polynomial_basis_derivatives(np.eye(4), ts)
    assert d.shape == (4, 3)
    for j, t in enumerate(ts):
        assert np.allclose(d[:, j], monomial_derivative(t, 3, 1))


def test_basis_derivatives_finite_difference():
    b = bernstein_basis(4)
    ts = [0.0, 0.25, 0.9]
    h = 1e-6
    d = polynomial_basis_derivatives(b, ts)
    for j, t in enumerate(ts):
        fd = (_evaluate(b, t + h) - _evaluate(b, t - h)) / (2 * h)
        assert np.allclose(d[:, j], fd, atol=1e-5)


def test_basis_derivatives_requires_square():
    with pytest.raises(ValueError):
        polynomial_basis_derivatives(np.zeros((2, 3)), [0.0])


@pytest.mark.parametrize("basis", [PolynomialBasis.BERNSTEIN, PolynomialBasis.BSPLINE])
def test_cumulative_basis(basis):
    k = 3
    cumulative = polynomial_cumulative_basis(basis, k)
    plain = polynomial_basis(basis, k)
    assert np.allclose(cumulative[:, -1], plain[:, -1])
    assert np.allclose(cumulative[:, :-1] - cumulative[:, 1:], plain[:, :-1])
    for x in np.linspace(0.0, 1.0, 5):
        assert _evaluate(cumulative, x)[0] == pytest.approx(1.0)


@pytest.mark.parametrize("p", [0, 1, 2, 3])
def test_monomial_integral_matches_quadrature(p):
    k = 5
    mat = monomial_integral(k, p)
    assert np.allclose(mat, mat.T)
    for i in range(k + 1):
        for j in range(k + 1):
            product = Polynomial.basis(i).deriv(p) * Polynomial.basis(j).deriv(p)
            expected = product.integ(lbnd=0)(1.0)
            assert mat[i, j] == pytest.approx(expected)


def test_integrate_absolute_linear_exact():
    assert integrate_absolute_polynomial(-1.0, 1.0, 0.0, 1.0, 0.0) == pytest.approx(1.0)


@pytest.mark.parametrize(
    "t0, t1, a, b, c",
    [
        (0.0, 2.0, 1.0, -2.0, 0.5),
        (-1.0, 3.0, 0.0, 1.0, -0.5),
        (0.0, 1.0, 0.0, 0.0, -2.0),
        (-2.0, 2.0, 1.0, 0.0, -1.0),
        (0.0, 1.0, 1.0, 0.0, 1.0),
        (-1.0, 1.5, -2.0, 0.5, 0.3),
    ],
)
def test_integrate_absolute_matches_midpoint_rule(t0, t1, a, b, c):
    n = 200_000
    h = (t1 - t0) / n
    x = t0 + (np.arange(n) + 0.5) * h
    reference = float(np.abs(a * x * x + b * x + c).sum() * h)
    assert integrate_absolute_polynomial(t0, t1, a, b, c) == pytest.approx(reference, abs=1e-5)