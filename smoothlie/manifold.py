"""Generic manifold operations and the sub-manifold wrapper.

Supported manifolds are:

* real scalars (one degree of freedom),
* numpy arrays (Euclidean space, one degree of freedom per element),
* lists of manifolds (the product manifold, tangent vectors concatenated),
* any object providing ``dof()``, ``rplus(a)`` and ``rminus(other)``.
"""

from __future__ import annotations

from collections.abc import Iterable
from itertools import accumulate
from typing import Any

import numpy as np

__all__ = ["SubManifold", "dof", "rplus", "rminus"]


def _is_scalar(m: Any) -> bool:
    return isinstance(m, (int, float, np.integer, np.floating)) and not isinstance(m, bool)


def _tangent(a: Any, size: int) -> np.ndarray:
    vec = np.asarray(a, dtype=float).ravel()
    if vec.size != size:
        raise ValueError(f"tangent vector has size {vec.size}, expected {size}")
    return vec


def dof(m: Any) -> int:
    """Degrees of freedom of the manifold element ``m``."""
    if _is_scalar(m):
        return 1
    if isinstance(m, np.ndarray):
        return int(m.size)
    if isinstance(m, list):
        return sum(dof(item) for item in m)
    method = getattr(m, "dof", None)
    if callable(method):
        return int(method())
    raise TypeError(f"{type(m).__name__} is not a manifold")


def rplus(m: Any, a: Any) -> Any:
    """Right-plus: move ``m`` along the tangent vector ``a``."""
    step = _tangent(a, dof(m))
    if _is_scalar(m):
        return float(m + step[0])
    if isinstance(m, np.ndarray):
        return m + step.reshape(m.shape)
    if isinstance(m, list):
        sizes = [dof(item) for item in m]
        starts = [0, *accumulate(sizes)]
        return [rplus(item, step[start : start + size]) for item, start, size in zip(m, starts, sizes)]
    return m.rplus(step)


def rminus(m1: Any, m2: Any) -> np.ndarray:
    """Right-minus: tangent vector ``a`` such that ``rplus(m2, a) == m1``."""
    if _is_scalar(m1):
        return np.array([float(m1 - m2)])
    if isinstance(m1, np.ndarray):
        other = np.asarray(m2, dtype=float)
        if other.shape != m1.shape:
            raise ValueError(f"shape mismatch: {m1.shape} and {other.shape}")
        return np.ravel(m1 - other).astype(float)
    if isinstance(m1, list):
        if not isinstance(m2, list) or len(m1) != len(m2):
            raise ValueError("product manifold elements must have the same number of parts")
        if not m1:
            return np.zeros(0)
        return np.concatenate([rminus(x, y) for x, y in zip(m1, m2)])
    if callable(getattr(m1, "rminus", None)):
        return np.asarray(m1.rminus(m2), dtype=float).ravel()
    raise TypeError(f"{type(m1).__name__} is not a manifold")


class SubManifold:
    """Subspace of a manifold through ``m0`` where some tangent directions are held fixed.

    Elements are ``m0 (+) sum_k alpha_k e_k`` where ``k`` runs over the tangent
    dimensions that are not listed in ``fixed_dims``. Binary operations require
    both operands to share the reference point and the fixed dimensions.
    """

    def __init__(self, m0: Any, m: Any = None, fixed_dims: Iterable[int] = ()) -> None:
        self._m0 = m0
        self._m = m0 if m is None else m
        full = dof(m0)
        if dof(self._m) != full:
            raise ValueError("value and reference point must have the same degrees of freedom")
        dims = sorted(int(d) for d in fixed_dims)
        if any(d < 0 or d >= full for d in dims):
            raise ValueError(f"fixed dimensions must lie in [0, {full})")
        if len(set(dims)) != len(dims):
            raise ValueError("fixed dimensions must be unique")
        self._fixed_dims = tuple(dims)
        fixed = set(dims)
        self._free = np.array([i for i in range(full) if i not in fixed], dtype=int)
        self._full_dof = full

    @property
    def m(self) -> Any:
        """Current value in the embedding manifold."""
        return self._m

    @property
    def m0(self) -> Any:
        """Reference point in the embedding manifold."""
        return self._m0

    @property
    def fixed_dims(self) -> tuple[int, ...]:
        """Sorted tangent dimensions that are held fixed."""
        return self._fixed_dims

    def dof(self) -> int:
        """Degrees of freedom of the sub-manifold."""
        return self._full_dof - len(self._fixed_dims)

    def rplus(self, a: Any) -> SubManifold:
        """Move along the free tangent directions."""
        step = _tangent(a, self.dof())
        full = np.zeros(self._full_dof)
        full[self._free] = step
        return SubManifold(self._m0, rplus(self._m, full), self._fixed_dims)

    def rminus(self, other: SubManifold) -> np.ndarray:
        """Difference in the free tangent directions."""
        if not isinstance(other, SubManifold):
            raise TypeError("right-minus requires another SubManifold")
        if self._fixed_dims != other.fixed_dims:
            raise ValueError("sub-manifolds have different fixed dimensions")
        if not np.allclose(rminus(self._m0, other.m0), 0.0, atol=1e-8):
            raise ValueError("sub-manifolds have different reference points")
        return rminus(self._m, other.m)[self._free]

    def __repr__(self) -> str:
        return f"SubManifold(m0={self._m0!r}, m={self._m!r}, fixed_dims={self._fixed_dims!r})"