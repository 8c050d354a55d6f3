"""Closest points and distances between points and simple 2D shapes.

Points are ``(x, y)`` pairs. Angles are in degrees, counter-clockwise.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Sequence

__all__ = [
    "RotatedRect",
    "distance_point_ellipse",
    "closest_point_on_ray",
    "closest_point_on_line",
    "closest_point_on_rect",
    "closest_point_on_circle",
    "closest_point_on_ellipse",
    "distance_to_ellipse",
    "distance_to_rect",
    "distance_to_ray",
    "distance_to_line",
]

Point = tuple[float, float]


@dataclass(frozen=True)
class RotatedRect:
    """A rectangle, or the box of an ellipse, rotated about its centre.

    ``size`` holds the full width and height; ``angle`` is the rotation of the
    width axis in degrees.
    """

    center: Point = (0.0, 0.0)
    size: tuple[float, float] = (0.0, 0.0)
    angle: float = 0.0

    @property
    def width(self) -> float:
        return self.size[0]

    @property
    def height(self) -> float:
        return self.size[1]


def _div(a: float, b: float) -> float:
    """Floating division that yields inf or nan instead of raising."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _rotate(p: Sequence[float], degrees: float) -> Point:
    r = math.radians(degrees)
    c, s = math.cos(r), math.sin(r)
    return (p[0] * c - p[1] * s, p[0] * s + p[1] * c)


def _distance_first_quadrant(e: Point, y: Point) -> tuple[float, Point]:
    """Distance from ``y`` (both coordinates >= 0) to the ellipse with ``e[0] >= e[1]``."""
    e0, e1 = e
    y0, y1 = y
    if y1 > 0:
        if y0 > 0:
            esqr0, esqr1 = e0 * e0, e1 * e1
            ey0, ey1 = e0 * y0, e1 * y1
            t0 = -esqr1 + ey1
            t1 = -esqr1 + math.sqrt(ey0 * ey0 + ey1 * ey1)
            t = t0
            # Bisect for the root of F(t) with t >= -e1*e1.
            for _ in range(2 * sys.float_info.max_exp):
                t = 0.5 * (t0 + t1)
                if t == t0 or t == t1:
                    break
                r0 = _div(ey0, t + esqr0)
                r1 = _div(ey1, t + esqr1)
                f = r0 * r0 + r1 * r1 - 1.0
                if f > 0:
                    t0 = t
                elif f < 0:
                    t1 = t
                else:
                    break
            x0 = _div(esqr0 * y0, t + esqr0)
            x1 = _div(esqr1 * y1, t + esqr1)
            return math.hypot(x0 - y0, x1 - y1), (x0, x1)
        return abs(y1 - e1), (0.0, e1)
    denom0 = e0 * e0 - e1 * e1
    e0y0 = e0 * y0
    if e0y0 < denom0:
        x0de0 = _div(e0y0, denom0)
        x0 = e0 * x0de0
        x1 = e1 * math.sqrt(abs(1.0 - x0de0 * x0de0))
        return math.hypot(x0 - y0, x1), (x0, x1)
    return abs(y0 - e0), (e0, 0.0)


def distance_point_ellipse(e: Sequence[float], y: Sequence[float]) -> tuple[float, Point]:
    """Distance from ``y`` to the ellipse ``(x0/e0)^2 + (x1/e1)^2 = 1``.

    Returns the distance and the closest point on the ellipse.
    """
    reflect = (y[0] < 0, y[1] < 0)
    permute = (1, 0) if e[0] < e[1] else (0, 1)
    loc_e = (float(e[permute[0]]), float(e[permute[1]]))
    loc_y = tuple(abs(float(y[j])) for j in permute)
    distance, loc_x = _distance_first_quadrant(loc_e, loc_y)  # type: ignore[arg-type]
    inverse = {axis: i for i, axis in enumerate(permute)}
    x = tuple(
        -loc_x[inverse[axis]] if reflect[axis] else loc_x[inverse[axis]] for axis in (0, 1)
    )
    return distance, (x[0], x[1])


def _projection(p1: Sequence[float], p2: Sequence[float], p3: Sequence[float]) -> float:
    dx, dy = p2[0] - p1[0], p2[1] - p1[1]
    u = (p3[0] - p1[0]) * dx + (p3[1] - p1[1]) * dy
    return u / (dx * dx + dy * dy)


def _interpolate(p1: Sequence[float], p2: Sequence[float], u: float) -> Point:
    return (p1[0] + (p2[0] - p1[0]) * u, p1[1] + (p2[1] - p1[1]) * u)


def closest_point_on_ray(p1: Sequence[float], p2: Sequence[float], p3: Sequence[float]) -> Point:
    """Closest point to ``p3`` on the infinite line through ``p1`` and ``p2``."""
    if tuple(p1) == tuple(p2):
        return (float(p1[0]), float(p1[1]))
    return _interpolate(p1, p2, _projection(p1, p2, p3))


def closest_point_on_line(p1: Sequence[float], p2: Sequence[float], p3: Sequence[float]) -> Point:
    """Closest point to ``p3`` on the segment from ``p1`` to ``p2``."""
    if tuple(p1) == tuple(p2):
        return (float(p1[0]), float(p1[1]))
    u = min(max(_projection(p1, p2, p3), 0.0), 1.0)
    return _interpolate(p1, p2, u)


def closest_point_on_rect(rect: RotatedRect, point: Sequence[float]) -> Point:
    """Closest point to ``point`` on the outline of a rotated rectangle."""
    cx, cy = rect.center
    nx, ny = _rotate((point[0] - cx, point[1] - cy), -rect.angle)
    w, h = rect.size[0] / 2, rect.size[1] / 2
    if nx > w or nx < -w or ny < -h or ny > h:
        nearest = (min(max(nx, -w), w), min(max(ny, -h), h))
    elif abs(abs(nx) - w) < abs(abs(ny) - h):
        nearest = (w * (1 if nx > 0 else -1), ny)
    else:
        nearest = (nx, h * (1 if ny > 0 else -1))
    rx, ry = _rotate(nearest, rect.angle)
    return (rx + cx, ry + cy)


def closest_point_on_circle(center: Sequence[float], radius: float, point: Sequence[float]) -> Point:
    """Closest point to ``point`` on a circle."""
    dx, dy = point[0] - center[0], point[1] - center[1]
    scale = _div(radius, math.hypot(dx, dy))
    return (dx * scale + center[0], dy * scale + center[1])


def closest_point_on_ellipse(ellipse: RotatedRect, point: Sequence[float]) -> Point:
    """Closest point to ``point`` on the ellipse inscribed in a rotated rectangle."""
    cx, cy = ellipse.center
    nx, ny = _rotate((point[0] - cx, point[1] - cy), -ellipse.angle)
    flip_x, flip_y = nx < 0, ny < 0
    e = (ellipse.size[0] / 2, ellipse.size[1] / 2)
    _, (x0, x1) = distance_point_ellipse(e, (abs(nx), abs(ny)))
    if flip_x:
        x0 = -x0
    if flip_y:
        x1 = -x1
    rx, ry = _rotate((x0, x1), ellipse.angle)
    return (rx + cx, ry + cy)


def _dist(a: Sequence[float], b: Sequence[float]) -> float:
    return math.hypot(a[0] - b[0], a[1] - b[1])


def distance_to_ellipse(point: Sequence[float], ellipse: RotatedRect) -> float:
    return _dist(closest_point_on_ellipse(ellipse, point), point)


def distance_to_rect(point: Sequence[float], rect: RotatedRect) -> float:
    return _dist(closest_point_on_rect(rect, point), point)


def distance_to_ray(point: Sequence[float], start: Sequence[float], end: Sequence[float]) -> float:
    return _dist(closest_point_on_ray(start, end, point), point)


def distance_to_line(point: Sequence[float], start: Sequence[float], end: Sequence[float]) -> float:
    return _dist(closest_point_on_line(start, end, point), point)