"""Shortest paths for a forward-moving vehicle with bounded turning radius.

Poses are ``(x, y, yaw)`` triples; paths start at the origin facing along the
x axis. A path is three segments, each a turn (measured as an angle) or a
straight line (measured as a length).
"""

from __future__ import annotations

import enum
import math
import sys
from collections.abc import Sequence

__all__ = ["DubinsSegment", "dubins_angle", "dubins_ccc", "dubins_csc", "dubins"]

_INF = math.inf
_EPS = sys.float_info.epsilon


class DubinsSegment(enum.Enum):
    """Segment classes."""

    LEFT = "left"
    STRAIGHT = "straight"
    RIGHT = "right"


def _pose(target: Sequence[float]) -> tuple[float, float, float]:
    values = tuple(float(v) for v in target)
    if len(values) != 3:
        raise ValueError(f"a pose is (x, y, yaw), got {len(values)} values")
    return values  # type: ignore[return-value]


def _check_radius(radius: float) -> float:
    if not radius > 0:
        raise ValueError(f"turning radius must be positive, got {radius}")
    return float(radius)


def _transform(pose: tuple[float, float, float], px: float, py: float) -> tuple[float, float]:
    x, y, yaw = pose
    c, s = math.cos(yaw), math.sin(yaw)
    return c * px - s * py + x, s * px + c * py + y


def _center_offset(segment: DubinsSegment, radius: float) -> float:
    return -radius if segment is DubinsSegment.RIGHT else radius


def dubins_angle(yaw1: float, yaw2: float, segment: DubinsSegment) -> float:
    """Positive angle turned from heading ``yaw1`` to ``yaw2`` in the direction of ``segment``."""
    delta = yaw2 - yaw1
    d = math.atan2(math.sin(delta), math.cos(delta))
    if segment is DubinsSegment.RIGHT:
        d = -d
    return d if d >= 0 else 2 * math.pi + d


def dubins_ccc(
    target: Sequence[float], radius: float, c13: DubinsSegment, c2: DubinsSegment
) -> tuple[float, float, float]:
    """Segment angles of a turn-turn-turn path, or infinities if it does not exist."""
    pose = _pose(target)
    radius = _check_radius(radius)

    c1x, c1y = 0.0, _center_offset(c13, radius)
    c3x, c3y = _transform(pose, c1x, c1y)
    dx, dy = c3x - c1x, c3y - c1y
    d13 = math.hypot(dx, dy)

    if d13 < _EPS:
        return dubins_angle(0.0, pose[2], c13), 0.0, 0.0

    if 4 * radius <= d13:
        return _INF, _INF, _INF

    # angle between lines C1-C3 and C1-C2
    a_13_12 = math.atan2(math.sqrt(1.0 - d13 * d13 / (16 * radius * radius)), d13 / (4 * radius))
    # angle between lines C1-C2 and C3-C2
    a_12_32 = math.pi - 2 * a_13_12
    alpha0 = -math.pi / 2 if c13 is DubinsSegment.RIGHT else math.pi / 2
    direction = math.atan2(dy, dx)

    if c13 is DubinsSegment.RIGHT:
        theta1 = alpha0 + direction - a_13_12
        theta2 = theta1 - a_12_32
    else:
        theta1 = alpha0 + direction + a_13_12
        theta2 = theta1 + a_12_32

    return (
        dubins_angle(0.0, theta1, c13),
        dubins_angle(theta1, theta2, c2),
        dubins_angle(theta2, pose[2], c13),
    )


def dubins_csc(
    target: Sequence[float], radius: float, c1: DubinsSegment, c3: DubinsSegment
) -> tuple[float, float, float]:
    """Turn angle, straight length and turn angle of a turn-straight-turn path.

    Returns infinities if the path does not exist.
    """
    pose = _pose(target)
    radius = _check_radius(radius)

    c1x, c1y = 0.0, _center_offset(c1, radius)
    c3x, c3y = _transform(pose, 0.0, _center_offset(c3, radius))
    dx, dy = c3x - c1x, c3y - c1y
    d13 = math.hypot(dx, dy)

    if d13 < _EPS:
        if c1 is c3:
            return dubins_angle(0.0, pose[2], c1), 0.0, 0.0
        return _INF, _INF, _INF

    theta = math.atan2(dy, dx)

    if c1 is not c3:
        if d13 <= 2 * radius:
            return _INF, _INF, _INF
        diff = math.atan2(2 * radius / d13, math.sqrt(1.0 - 4 * radius * radius / (d13 * d13)))
        if c1 is DubinsSegment.RIGHT and c3 is DubinsSegment.LEFT:
            theta -= diff
        else:
            theta += diff

    return (
        dubins_angle(0.0, theta, c1),
        dx * math.cos(theta) + dy * math.sin(theta),
        dubins_angle(theta, pose[2], c3),
    )


def dubins(
    target: Sequence[float], radius: float
) -> tuple[tuple[DubinsSegment, float], tuple[DubinsSegment, float], tuple[DubinsSegment, float]]:
    """Shortest path from the origin to ``target`` with turning radius ``radius``.

    Turn segments carry an angle, straight segments a length.
    """
    pose = _pose(target)
    radius = _check_radius(radius)

    left, straight, right = DubinsSegment.LEFT, DubinsSegment.STRAIGHT, DubinsSegment.RIGHT
    best = ((left, 0.0), (left, 0.0), (left, 0.0))
    min_length = _INF

    for first, last in ((left, left), (left, right), (right, left), (right, right)):
        a1, d2, a3 = dubins_csc(pose, radius, first, last)
        length = d2 + radius * (a1 + a3)
        if length < min_length:
            min_length = length
            best = ((first, a1), (straight, d2), (last, a3))

    for outer, middle in ((right, left), (left, right)):
        a1, a2, a3 = dubins_ccc(pose, radius, outer, middle)
        length = radius * (a1 + a2 + a3)
        if length < min_length:
            min_length = length
            best = ((outer, a1), (middle, a2), (outer, a3))

    return best