"""The C1 Lie group: non-zero complex numbers under multiplication.

An element is a rotation combined with a positive scaling of the plane.

* Group coefficients: ``[a, b]``, the complex number ``b + i a``.
* Tangent vector: ``[s, w]``, a log-scaling ``s`` and a rotation angle ``w``.
* Matrix form: ``[[b, -a], [a, b]]``.
* Lie algebra matrix form: ``[[s, -w], [w, s]]``.
"""

from __future__ import annotations

import cmath
import math
from typing import Any

import numpy as np

__all__ = ["C1"]


def _checked(c: complex) -> complex:
    if c == 0:
        raise ValueError("a C1 element must be a non-zero complex number")
    return c


def _tangent(a: Any) -> np.ndarray:
    vec = np.asarray(a, dtype=float).ravel()
    if vec.size != 2:
        raise ValueError(f"C1 tangent vectors have 2 elements, got {vec.size}")
    return vec


class C1:
    """Rotation and scaling of the plane, stored as a non-zero complex number."""

    __slots__ = ("_c",)

    DOF = 2
    """Degrees of freedom of the group."""

    def __init__(self, scaling: float = 1.0, angle: float = 0.0) -> None:
        self._c = _checked(complex(scaling * math.cos(angle), scaling * math.sin(angle)))

    @classmethod
    def from_complex(cls, c: complex) -> C1:
        """Element represented by the non-zero complex number ``c``."""
        obj = cls.__new__(cls)
        obj._c = _checked(complex(c))
        return obj

    @classmethod
    def identity(cls) -> C1:
        """The identity element (no rotation, unit scaling)."""
        return cls.from_complex(1.0)

    @classmethod
    def random(cls, rng: np.random.Generator | None = None) -> C1:
        """Random element with coefficients drawn uniformly from ``[-1, 1]``."""
        generator = np.random.default_rng() if rng is None else rng
        while True:
            a, b = generator.uniform(-1.0, 1.0, size=2)
            if math.hypot(a, b) > 1e-6:
                return cls.from_complex(complex(b, a))

    @classmethod
    def exp(cls, a: Any) -> C1:
        """Group exponential of the tangent vector ``[s, w]``."""
        s, w = _tangent(a)
        return cls.from_complex(cmath.exp(complex(s, w)))

    @staticmethod
    def hat(a: Any) -> np.ndarray:
        """Lie algebra matrix of the tangent vector ``a``."""
        s, w = _tangent(a)
        return np.array([[s, -w], [w, s]])

    @staticmethod
    def vee(m: Any) -> np.ndarray:
        """Tangent vector of the Lie algebra matrix ``m``."""
        mat = np.asarray(m, dtype=float)
        if mat.shape != (2, 2):
            raise ValueError(f"expected a 2x2 matrix, got shape {mat.shape}")
        return np.array([mat[0, 0], mat[1, 0]])

    @staticmethod
    def ad(a: Any) -> np.ndarray:
        """Lie algebra adjoint; zero since the group is commutative."""
        _tangent(a)
        return np.zeros((2, 2))

    @property
    def coeffs(self) -> np.ndarray:
        """Group coefficients ``[a, b]``."""
        return np.array([self._c.imag, self._c.real])

    def angle(self) -> float:
        """Rotation angle in ``(-pi, pi]``."""
        return math.atan2(self._c.imag, self._c.real)

    def scaling(self) -> float:
        """Scaling factor."""
        return abs(self._c)

    def as_complex(self) -> complex:
        """Complex number representation."""
        return self._c

    def matrix(self) -> np.ndarray:
        """2x2 matrix form."""
        a, b = self._c.imag, self._c.real
        return np.array([[b, -a], [a, b]])

    def inverse(self) -> C1:
        """Group inverse."""
        return C1.from_complex(1.0 / self._c)

    def log(self) -> np.ndarray:
        """Group logarithm ``[log(scaling), angle]``."""
        return np.array([math.log(self.scaling()), self.angle()])

    def Ad(self) -> np.ndarray:  # noqa: N802
        """Group adjoint; the identity since the group is commutative."""
        return np.eye(2)

    def act(self, v: Any) -> np.ndarray:
        """Rotate and scale the 2D vector ``v``."""
        vec = np.asarray(v, dtype=float)
        if vec.shape != (2,):
            raise ValueError(f"expected a 2D vector, got shape {vec.shape}")
        return self.matrix() @ vec

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, C1):
            return C1.from_complex(self._c * other._c)
        return self.act(other)

    def __add__(self, a: Any) -> C1:
        return self.rplus(a)

    def __sub__(self, other: C1) -> np.ndarray:
        if not isinstance(other, C1):
            return NotImplemented
        return self.rminus(other)

    def is_approx(self, other: C1, tol: float = 1e-10) -> bool:
        """Relative closeness of the coefficients."""
        diff = abs(self._c - other._c)
        return diff <= tol * min(abs(self._c), abs(other._c))

    def dof(self) -> int:
        """Degrees of freedom."""
        return self.DOF

    def rplus(self, a: Any) -> C1:
        """Right-plus: ``self * exp(a)``."""
        return self * C1.exp(a)

    def rminus(self, other: C1) -> np.ndarray:
        """Right-minus: ``log(other^-1 * self)``."""
        return (other.inverse() * self).log()

    def __repr__(self) -> str:
        return f"C1(scaling={self.scaling()!r}, angle={self.angle()!r})"