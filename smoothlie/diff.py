"""Differentiation of functions between manifolds.

Derivatives are right derivatives: column ``j`` of the Jacobian is the
tangent-space change of ``f`` when the arguments are moved along tangent
direction ``j``. Arguments are passed as a tuple; their tangent spaces are
concatenated in order.
"""

from __future__ import annotations

import enum
import math
from collections.abc import Callable, Iterable
from itertools import accumulate
from typing import Any

import numpy as np

from smoothlie.manifold import dof, rminus, rplus

__all__ = ["DiffType", "EPS2", "dr_numerical", "dr"]

EPS2 = 1e-8
"""Squared-norm threshold below which small-angle expansions are used."""

_EPS = math.sqrt(float(np.finfo(float).eps))


class DiffType(enum.Enum):
    """Differentiation method."""

    DEFAULT = "default"
    """Analytic if the function provides derivatives, numerical otherwise."""
    NUMERICAL = "numerical"
    """Forward finite differences."""
    ANALYTIC = "analytic"
    """Use the function's ``jacobian`` and ``hessian`` methods."""


def _as_args(x: Any) -> tuple:
    return x if isinstance(x, tuple) else (x,)


def _step_size(w: Any, k: int, base: float) -> float:
    if isinstance(w, np.ndarray):
        scaled = base * abs(float(w.flat[k]))
        return scaled if scaled != 0.0 else base
    return base


def _perturbed(w: Any, k: int, n: int, size: float) -> Any:
    step = np.zeros(n)
    step[k] = size
    return rplus(w, step)


def dr_numerical(f: Callable[..., Any], x: Any, order: int = 1) -> tuple:
    """Finite-difference derivatives of ``f`` at the arguments ``x``.

    Returns ``(f(*x), J)`` for ``order == 1`` and ``(f(*x), J, H)`` for
    ``order == 2``, where ``J`` has shape ``(ny, nx)`` and ``H`` has shape
    ``(nx, nx * ny)`` with block ``H[:, j * nx:(j + 1) * nx]`` the Hessian of
    output component ``j``.
    """
    if order not in (1, 2):
        raise ValueError(f"numerical differentiation supports order 1 or 2, got {order}")

    originals = _as_args(x)
    args = list(originals)
    fval = f(*args)

    sizes = [dof(w) for w in originals]
    offsets = [0, *accumulate(sizes)][:-1]
    layout = list(zip(range(len(originals)), originals, sizes, offsets))
    nx = sum(sizes)
    ny = dof(fval)

    jac = np.zeros((ny, nx))

    if order == 1:
        for i, w, n, off in layout:
            for k in range(n):
                h = _step_size(w, k, _EPS)
                args[i] = _perturbed(w, k, n, h)
                jac[:, off + k] = rminus(f(*args), fval) / h
                args[i] = w
        return fval, jac

    sqrteps = math.sqrt(_EPS)
    hess = np.zeros((nx, nx * ny))
    out_cols = np.arange(ny) * nx

    for i0, w0, n0, off0 in layout:
        for i1, w1, n1, off1 in layout:
            for k0 in range(n0):
                h0 = _step_size(w0, k0, sqrteps)
                args[i0] = _perturbed(w0, k0, n0, h0)
                f10 = f(*args)
                args[i0] = w0

                d1 = rminus(f10, fval)
                jac[:, off0 + k0] = d1 / h0

                for k1 in range(n1):
                    h1 = _step_size(w1, k1, sqrteps)
                    args[i1] = _perturbed(w1, k1, n1, h1)
                    f01 = f(*args)
                    args[i0] = _perturbed(args[i0], k0, n0, h0)
                    f11 = f(*args)
                    args[i0] = w0
                    args[i1] = w1

                    d2 = (rminus(f11, f01) - d1) / h0 / h1
                    hess[off0 + k0, out_cols + off1 + k1] = d2

    return fval, jac, hess


def _has_analytic(f: Any, order: int) -> bool:
    if not callable(getattr(f, "jacobian", None)):
        return False
    return order < 2 or callable(getattr(f, "hessian", None))


def _dr_analytic(f: Any, args: tuple, order: int) -> tuple:
    if not _has_analytic(f, order):
        needed = "jacobian and hessian methods" if order == 2 else "a jacobian method"
        raise TypeError(f"analytic differentiation requires {needed}")
    if order == 1:
        return f(*args), f.jacobian(*args)
    return f(*args), f.jacobian(*args), f.hessian(*args)


def dr(
    f: Callable[..., Any],
    x: Any,
    order: int = 1,
    kind: DiffType = DiffType.DEFAULT,
    indices: Iterable[int] | None = None,
) -> tuple:
    """Right derivatives of ``f`` up to ``order`` (0, 1 or 2) at the arguments ``x``.

    If ``indices`` is given, only those arguments are differentiated; the
    others are held at their values in ``x``.
    """
    kind = DiffType(kind)
    if order not in (0, 1, 2):
        raise ValueError(f"differentiation order must be 0, 1 or 2, got {order}")
    args = _as_args(x)

    if indices is not None:
        idx = tuple(int(i) for i in indices)
        if any(i < 0 or i >= len(args) for i in idx):
            raise IndexError(f"argument indices must lie in [0, {len(args)})")

        def reduced(*reduced_args: Any) -> Any:
            full = list(args)
            for i, value in zip(idx, reduced_args):
                full[i] = value
            return f(*full)

        return dr(reduced, tuple(args[i] for i in idx), order, kind)

    if order == 0:
        return (f(*args),)
    if kind is DiffType.NUMERICAL:
        return dr_numerical(f, args, order)
    if kind is DiffType.ANALYTIC:
        return _dr_analytic(f, args, order)
    if _has_analytic(f, order):
        return _dr_analytic(f, args, order)
    return dr_numerical(f, args, order)