# smoothlie

Numerical tools for smooth manifolds and Lie groups, built on numpy.

## Modules

- `smoothlie.basis`: polynomial bases as coefficient matrices over the monomials.
  `PolynomialBasis` names the bases (Bernstein, B-spline, Chebyshev of the first
  and second kind, Hermite, Laguerre, Legendre, monomial); `polynomial_basis(basis, k)`
  returns the `(k + 1, k + 1)` matrix `B` such that the basis functions at `x` are
  `[1, x, ..., x**k] @ B`. Also `polynomial_cumulative_basis`, `lagrange_basis`,
  `polynomial_basis_derivatives`, the individual builders (`bspline_basis`,
  `bernstein_basis`, `hermite_basis`, `laguerre_basis`, `jacobi_basis`),
  `monomial_derivative`, `monomial_derivatives`, `monomial_integral`,
  `integrate_absolute_polynomial`, `fpow` and `colwise_norm`.
- `smoothlie.manifold`: generic `dof`, `rplus` and `rminus` for real scalars,
  numpy arrays, lists of manifold elements (product manifolds) and any object with
  `dof()`, `rplus(a)` and `rminus(other)` methods. `SubManifold` restricts a
  manifold to the tangent directions that are not listed in `fixed_dims`.
- `smoothlie.diff`: right derivatives of functions of manifold arguments.
  `dr(f, x, order, kind, indices)` returns `(f(*x),)`, `(f(*x), J)` or
  `(f(*x), J, H)` for order 0, 1 or 2. `DiffType.NUMERICAL` uses forward finite
  differences (`dr_numerical`), `DiffType.ANALYTIC` calls the function's
  `jacobian` and `hessian` methods, and `DiffType.DEFAULT` picks analytic when
  those methods exist. `indices` limits differentiation to some arguments.
- `smoothlie.c1`: the `C1` Lie group of rotations combined with positive
  scalings of the plane, stored as a non-zero complex number. It has `exp`,
  `log`, `hat`, `vee`, `ad`, `Ad`, `inverse`, `matrix`, `angle`, `scaling`,
  `as_complex`, composition and vector action through `*`, `rplus`/`rminus`
  (also as `+` and `-`) and `is_approx`.
- `smoothlie.dubins`: shortest paths from the origin to a pose `(x, y, yaw)` for
  a forward-moving vehicle with a given turning radius. `dubins(target, radius)`
  returns three `(DubinsSegment, value)` pairs, where turns carry an angle and the
  straight segment a length; `dubins_csc`, `dubins_ccc` and `dubins_angle` give
  the individual path families.

## Install

```
pip install .
```

## Example

```python
import numpy as np
from smoothlie.basis import PolynomialBasis, polynomial_basis
from smoothlie.c1 import C1
from smoothlie.diff import dr
from smoothlie.dubins import dubins

g = C1(2.0, 0.5)
h = C1.exp(np.array([0.1, 0.2]))
print((g * h).angle(), (g * h).scaling())

B = polynomial_basis(PolynomialBasis.BERNSTEIN, 3)

value, jac = dr(lambda x: np.array([x[0] * x[1]]), (np.array([1.0, 2.0]),), 1)

path = dubins((3.0, 1.0, 0.5), 1.0)
```

## What it does not do

There are no other Lie groups (such as planar or spatial rotations and rigid
motions) and no spline types: `dubins` describes a path as segment types and
lengths but does not build a trajectory from them. There is no command-line
program.

## Tests

```
pip install .[test]
pytest
```