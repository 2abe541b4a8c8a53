"""Polynomial bases, manifold operations, numerical derivatives, the C1 Lie group and Dubins paths."""

__version__ = "0.1.0"
__all__ = ["basis", "manifold", "diff", "c1", "dubins"]