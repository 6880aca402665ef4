"""
Line geometry in Hesse normal form.

A line is stored as (theta, rho) where theta is the angle of its normal and
rho the distance from the origin:

    x * cos(theta) + y * sin(theta) = rho

Angles live on the circle [0, 2*pi), so differences and means must account
for wraparound.
"""

from __future__ import annotations

import math
from typing import Iterable, NamedTuple, Optional

TWO_PI = 2.0 * math.pi


class Line(NamedTuple):
    theta: float
    rho: float


class Point(NamedTuple):
    x: float
    y: float


def normalize_theta(theta):
    """Map an angle into [0, 2*pi)."""
    theta = math.fmod(theta, TWO_PI)
    if theta < 0.0:
        theta += TWO_PI
    # fmod of a value just below zero can round up to exactly 2*pi
    if theta >= TWO_PI:
        theta = 0.0
    return theta


def difference_theta(a, b):
    """Shortest distance between two angles around the circle, in [0, pi]."""
    diff = abs(normalize_theta(a) - normalize_theta(b))
    return min(diff, TWO_PI - diff)


def mean_theta(lines: Iterable[Line]) -> float:
    """
    Circular mean of the angles of the given lines.

    Averages the unit vectors rather than the raw angles so that lines on
    either side of zero (e.g. 0.1 and 2*pi - 0.1) average to zero, not pi.
    """
    count = 0
    sin_sum = 0.0
    cos_sum = 0.0
    for line in lines:
        sin_sum += math.sin(line.theta)
        cos_sum += math.cos(line.theta)
        count += 1
    if count == 0:
        raise ValueError("mean_theta needs at least one line")
    angle = math.atan2(sin_sum, cos_sum)
    return normalize_theta(angle)


def alternate_line(line):
    """The same geometric line with its normal flipped by pi."""
    return Line(normalize_theta(line.theta + math.pi), -line.rho)


def intersect_lines(a: Line, b: Line, eps: float = 1e-9) -> Optional[Point]:
    """
    Intersect two lines given in Hesse normal form.

    Solves the 2x2 system
        cos(ta) * x + sin(ta) * y = ra
        cos(tb) * x + sin(tb) * y = rb

    Returns:
        Point, or None when the lines are (nearly) parallel
    """
    cos_a, sin_a = math.cos(a.theta), math.sin(a.theta)
    cos_b, sin_b = math.cos(b.theta), math.sin(b.theta)

    det = cos_a * sin_b - sin_a * cos_b
    if abs(det) < eps:
        return None

    x = (a.rho * sin_b - b.rho * sin_a) / det
    y = (cos_a * b.rho - cos_b * a.rho) / det
    return Point(x, y)
