"""Classifies a hand-drawn stroke as a straight line or an elliptical arc."""

from __future__ import annotations

import math
from enum import Enum
from typing import Iterable, Sequence

from cvtoolkit.geometry import (
    RotatedRect,
    closest_point_on_ray,
    distance_to_ellipse,
    distance_to_ray,
)
from cvtoolkit.shapes import fit_ellipse, fit_line, min_area_rect, perimeter

__all__ = ["GestureType", "Recognizer"]

Point = tuple[float, float]


class GestureType(Enum):
    LINE = 0
    ARC = 1


def _div(a: float, b: float) -> float:
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


class Recognizer:
    """Fits a line and an ellipse to a stroke and keeps whichever fits better.

    After ``update``, ``gesture_type`` holds the verdict, ``fit_error`` the mean
    distance of the stroke from the chosen shape per unit of stroke length,
    and ``idealized`` the stroke redrawn on that shape.
    """

    def __init__(self, line_ratio: float = 6.0) -> None:
        self.line_ratio = line_ratio
        self.gesture_type = GestureType.LINE
        self.fit_error = 0.0
        self.ellipse = RotatedRect()
        self.rect = RotatedRect()
        self.line_point: Point = (0.0, 0.0)
        self.line_direction: Point = (0.0, 0.0)
        self.idealized: list[Point] = []

    def update(self, polyline: Iterable[Sequence[float]]) -> GestureType:
        """Classify the stroke and return the gesture type."""
        points = [(float(p[0]), float(p[1])) for p in polyline]
        if not points:
            raise ValueError("cannot recognise an empty stroke")
        if len(points) > 5:
            try:
                self.ellipse = fit_ellipse(points)
            except ValueError:
                # A degenerate ellipse yields NaN distances, so the stroke reads as a line.
                self.ellipse = RotatedRect()
        self.rect = min_area_rect(points)
        self.line_point, self.line_direction = fit_line(points)
        ray_end = (
            self.line_point[0] + self.line_direction[0],
            self.line_point[1] + self.line_direction[1],
        )

        line_sum = sum(distance_to_ray(p, self.line_point, ray_end) for p in points)
        ellipse_sum = sum(distance_to_ellipse(p, self.ellipse) for p in points)
        length = perimeter(points)
        line_sum, ellipse_sum = _div(line_sum, length), _div(ellipse_sum, length)

        width, height = self.rect.size
        is_line = (
            _div(width, height) > self.line_ratio
            or _div(height, width) > self.line_ratio
            or line_sum < ellipse_sum
            or math.isnan(ellipse_sum)
        )
        if is_line:
            self.gesture_type = GestureType.LINE
            self.fit_error = line_sum
            self.idealized = [
                closest_point_on_ray(self.line_point, ray_end, points[0]),
                closest_point_on_ray(self.line_point, ray_end, points[-1]),
            ]
        else:
            self.gesture_type = GestureType.ARC
            self.fit_error = ellipse_sum
            cx, cy = self.ellipse.center
            angle = self.ellipse.angle
            a, b = self.ellipse.size[0] / 2, self.ellipse.size[1] / 2
            idealized = []
            for px, py in points:
                x0, y0 = _rotate((px - cx, py - cy), -angle)
                scale = _div(a * b, math.sqrt(a * a * y0 * y0 + b * b * x0 * x0))
                rx, ry = _rotate((x0 * scale, y0 * scale), angle)
                idealized.append((rx + cx, ry + cy))
            self.idealized = idealized
        return self.gesture_type