"""Polynomial bases expressed as coefficient matrices over the monomials.

A basis matrix ``B`` of degree ``k`` is a ``(k + 1, k + 1)`` array such that
the basis functions evaluated at ``x`` are ``[1, x, ..., x**k] @ B``.
"""

from __future__ import annotations

import enum
import functools
import itertools
import math
import operator
from collections.abc import Iterable
from typing import Any

import numpy as np

__all__ = [
    "PolynomialBasis",
    "fpow",
    "colwise_norm",
    "monomial_derivative",
    "monomial_derivatives",
    "bspline_basis",
    "bernstein_basis",
    "hermite_basis",
    "laguerre_basis",
    "jacobi_basis",
    "polynomial_basis",
    "lagrange_basis",
    "polynomial_basis_derivatives",
    "polynomial_cumulative_basis",
    "monomial_integral",
    "integrate_absolute_polynomial",
]


class PolynomialBasis(enum.Enum):
    """Polynomial basis types."""

    BERNSTEIN = "bernstein"
    """Basis on [0, 1] with left to right ordering."""
    BSPLINE = "bspline"
    """Basis on [0, 1] with left to right ordering."""
    CHEBYSHEV_1ST = "chebyshev1st"
    """Orthogonal basis on [-1, 1] w.r.t. the weight 1 / sqrt(1 - x^2)."""
    CHEBYSHEV_2ND = "chebyshev2nd"
    """Orthogonal basis on [-1, 1] w.r.t. the weight sqrt(1 - x^2)."""
    HERMITE = "hermite"
    """Orthogonal basis on (-inf, inf) w.r.t. the weight exp(-x^2)."""
    LAGUERRE = "laguerre"
    """Orthogonal basis on [0, inf) w.r.t. the weight exp(-x)."""
    LEGENDRE = "legendre"
    """Orthogonal basis on [-1, 1]."""
    MONOMIAL = "monomial"
    """The standard monomial basis (1, x, x^2, ...)."""


def _check_degree(k: int) -> None:
    if k < 0:
        raise ValueError(f"polynomial degree must be non-negative, got {k}")


def fpow(x: Any, e: int) -> Any:
    """Raise ``x`` to the non-negative integer power ``e`` by repeated multiplication."""
    if e < 0:
        raise ValueError(f"exponent must be non-negative, got {e}")
    if e == 0:
        return x**0
    return functools.reduce(operator.mul, itertools.repeat(x, e - 1), x)


def colwise_norm(m: Any) -> np.ndarray:
    """Euclidean norm of each column of a dense or sparse (``tocoo``) matrix."""
    if hasattr(m, "tocoo"):
        coo = m.tocoo()
        squares = np.zeros(coo.shape[1])
        np.add.at(squares, np.asarray(coo.col), np.asarray(coo.data, dtype=float) ** 2)
        return np.sqrt(squares)
    return np.linalg.norm(np.asarray(m, dtype=float), axis=0)


def monomial_derivative(u: float, k: int, p: int = 0) -> np.ndarray:
    """Vector ``U`` of length ``k + 1`` with ``U[i] = d^p/du^p u^i``."""
    _check_degree(k)
    if p < 0:
        raise ValueError(f"differentiation order must be non-negative, got {p}")
    ret = np.zeros(k + 1)
    if p > k:
        return ret
    power = 1.0
    factor = math.factorial(p)
    ret[p] = power * factor
    for i in range(p + 1, k + 1):
        power *= u
        factor = factor * i // (i - p)
        ret[i] = power * factor
    return ret


def monomial_derivatives(u: float, k: int, p: int) -> np.ndarray:
    """Matrix of shape ``(p + 1, k + 1)`` whose row ``q`` is ``monomial_derivative(u, k, q)``."""
    if p < 0:
        raise ValueError(f"differentiation order must be non-negative, got {p}")
    return np.vstack([monomial_derivative(u, k, q) for q in range(p + 1)])


def _elevate(coeffs: np.ndarray, left: np.ndarray, right: np.ndarray) -> np.ndarray:
    degree = coeffs.shape[0]
    low = np.zeros((degree + 1, degree))
    high = np.zeros((degree + 1, degree))
    low[:degree] = coeffs
    high[1:] = coeffs
    return low @ left + high @ right


def bspline_basis(k: int) -> np.ndarray:
    """B-spline basis coefficient matrix of degree ``k``."""
    _check_degree(k)
    coeffs = np.ones((1, 1))
    for degree in range(1, k + 1):
        idx = np.arange(degree)
        left = np.zeros((degree, degree + 1))
        right = np.zeros((degree, degree + 1))
        left[idx, idx + 1] = (degree - (idx + 1)) / degree
        left[idx, idx] = 1.0 - left[idx, idx + 1]
        right[idx, idx + 1] = 1.0 / degree
        right[idx, idx] = -1.0 / degree
        coeffs = _elevate(coeffs, left, right)
    return coeffs


def bernstein_basis(k: int) -> np.ndarray:
    """Bernstein basis coefficient matrix of degree ``k``."""
    _check_degree(k)
    coeffs = np.ones((1, 1))
    for degree in range(1, k + 1):
        idx = np.arange(degree)
        left = np.zeros((degree, degree + 1))
        right = np.zeros((degree, degree + 1))
        left[idx, idx] = 1.0
        right[idx, idx] = -1.0
        right[idx, idx + 1] = 1.0
        coeffs = _elevate(coeffs, left, right)
    return coeffs


def hermite_basis(k: int) -> np.ndarray:
    """Hermite (physicists') basis coefficient matrix of degree ``k``."""
    _check_degree(k)
    ret = np.zeros((k + 1, k + 1))
    ret[0, 0] = 1.0
    if k > 0:
        ret[1, 1] = 2.0
    for n in range(2, k + 1):
        ret[1 : n + 1, n] += 2.0 * ret[:n, n - 1]
        ret[: n - 1, n] -= 2.0 * (n - 1) * ret[: n - 1, n - 2]
    return ret


def laguerre_basis(k: int) -> np.ndarray:
    """Laguerre basis coefficient matrix of degree ``k``."""
    _check_degree(k)
    ret = np.zeros((k + 1, k + 1))
    ret[0, 0] = 1.0
    if k > 0:
        ret[0, 1] = 1.0
        ret[1, 1] = -1.0
    for n in range(2, k + 1):
        ret[:n, n] += (2 * n - 1) * ret[:n, n - 1] / n
        ret[1 : n + 1, n] -= ret[:n, n - 1] / n
        ret[: n - 1, n] -= (n - 1) * ret[: n - 1, n - 2] / n
    return ret


def jacobi_basis(k: int, alpha: float, beta: float) -> np.ndarray:
    """Jacobi basis coefficient matrix of degree ``k`` with parameters ``alpha`` and ``beta``.

    Legendre polynomials are ``alpha = beta = 0``; Chebyshev polynomials of the
    first and second kind correspond (up to scaling) to ``-1/2`` and ``1/2``.
    """
    _check_degree(k)
    ret = np.zeros((k + 1, k + 1))
    ret[0, 0] = 1.0
    ab = alpha + beta
    if k > 0:
        ret[0, 1] = alpha + 1.0 - (ab + 2.0) / 2.0
        ret[1, 1] = (ab + 2.0) / 2.0
    for n in range(2, k + 1):
        frac = 1.0 / ((2 * n) * (n + ab) * (2 * n + ab - 2))
        c1 = (2 * n + ab - 1) * (alpha * alpha - beta * beta)
        c2 = (2 * n + ab - 1) * (2 * n + ab) * (2 * n + ab - 2)
        c3 = 2 * (n + alpha - 1) * (n + beta - 1) * (2 * n + ab)
        ret[:n, n] += c1 * ret[:n, n - 1] * frac
        ret[1 : n + 1, n] += c2 * ret[:n, n - 1] * frac
        ret[: n - 1, n] -= c3 * ret[: n - 1, n - 2] * frac
    return ret


def polynomial_basis(basis: PolynomialBasis, k: int) -> np.ndarray:
    """Coefficient matrix ``B`` of degree ``k`` for the given basis.

    A polynomial ``p(x) = sum_v beta_v b_v(x)`` evaluates as ``[1, x, ..., x^k] @ B @ beta``.
    """
    basis = PolynomialBasis(basis)
    _check_degree(k)
    if basis is PolynomialBasis.MONOMIAL:
        return np.eye(k + 1)
    if basis is PolynomialBasis.BERNSTEIN:
        return bernstein_basis(k)
    if basis is PolynomialBasis.LAGUERRE:
        return laguerre_basis(k)
    if basis is PolynomialBasis.HERMITE:
        return hermite_basis(k)
    if basis is PolynomialBasis.LEGENDRE:
        return jacobi_basis(k, 0.0, 0.0)
    if basis is PolynomialBasis.CHEBYSHEV_1ST:
        ret = jacobi_basis(k, -0.5, -0.5)
        return ret / (monomial_derivative(1.0, k) @ ret)
    if basis is PolynomialBasis.CHEBYSHEV_2ND:
        ret = jacobi_basis(k, 0.5, 0.5)
        return ret * (np.arange(k + 1) + 1.0) / (monomial_derivative(1.0, k) @ ret)
    return bspline_basis(k)


def lagrange_basis(ts: Iterable[float]) -> np.ndarray:
    """Coefficient matrix of the Lagrange polynomials through the points ``ts``.

    With ``K + 1`` points, column ``i`` holds the monomial coefficients of
    ``p_i(t) = prod_{j != i} (t - t_j) / (t_i - t_j)``.
    """
    points = [float(t) for t in ts]
    if not points:
        raise ValueError("at least one control point is required")
    size = len(points)
    ret = np.zeros((size, size))
    for row, t_row in enumerate(points):
        coeffs = np.zeros(size)
        coeffs[0] = 1.0
        for col, t_col in enumerate(points):
            if col == row:
                continue
            try:
                scale = 1.0 / (t_row - t_col)
            except ZeroDivisionError:
                raise ValueError("control points must be distinct") from None
            shifted = np.zeros(size)
            shifted[1:] = coeffs[:-1]
            coeffs = (shifted - t_col * coeffs) * scale
        ret[:, row] = coeffs
    return ret


def polynomial_basis_derivatives(b: Any, ts: Iterable[float]) -> np.ndarray:
    """Matrix ``D`` with ``D[i, j]`` the derivative of basis polynomial ``i`` at ``ts[j]``."""
    matrix = np.asarray(b, dtype=float)
    if matrix.ndim != 2 or matrix.shape[0] != matrix.shape[1]:
        raise ValueError("basis matrix must be square")
    k = matrix.shape[0] - 1
    columns = [monomial_derivative(float(t), k, 1) @ matrix for t in ts]
    if not columns:
        return np.zeros((k + 1, 0))
    return np.column_stack(columns)


def polynomial_cumulative_basis(basis: PolynomialBasis, k: int) -> np.ndarray:
    """Cumulative coefficient matrix: column ``j`` is the sum of basis columns ``j..k``."""
    matrix = polynomial_basis(basis, k)
    return np.cumsum(matrix[:, ::-1], axis=1)[:, ::-1].copy()


def monomial_integral(k: int, p: int) -> np.ndarray:
    """Matrix ``M`` with ``M[i, j] = int_0^1 (d^p u^i)(d^p u^j) du``."""
    _check_degree(k)
    if p < 0:
        raise ValueError(f"differentiation order must be non-negative, got {p}")
    ret = np.zeros((k + 1, k + 1))
    for i in range(p, k + 1):
        for j in range(i, k + 1):
            c = math.prod(range(i - p + 1, i + 1)) * math.prod(range(j - p + 1, j + 1))
            ret[i, j] = c / (i + j - 2 * p + 1)
            ret[j, i] = ret[i, j]
    return ret


def _clamp(value: float, low: float, high: float) -> float:
    if value < low:
        return low
    if high < value:
        return high
    return value


def integrate_absolute_polynomial(t0: float, t1: float, a: float, b: float, c: float) -> float:
    """Integral of ``|a t^2 + b t + c|`` over ``[t0, t1]``."""
    mid1 = math.inf
    mid2 = math.inf

    if abs(a) < 1e-9 and abs(b) > 1e-9:
        mid1 = _clamp(-c / b, t0, t1)
    elif abs(a) > 1e-9:
        res = b * b / (4 * a * a) - c / a
        if res > 0:
            mid1 = -b / (2 * a) - math.sqrt(res)
            mid2 = -b / (2 * a) + math.sqrt(res)

    def integ(u: float) -> float:
        return a * u * u * u / 3 + b * u * u / 2 + c * u

    mid1cl = _clamp(mid1, t0, t1)
    mid2cl = _clamp(mid2, t0, t1)

    return abs(integ(t1) - integ(t0) + 2 * integ(mid1cl) - 2 * integ(mid2cl))