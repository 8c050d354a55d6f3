"""Point-set measurements: hulls, defects, bounding boxes and fitted curves."""

from __future__ import annotations

import math
from typing import Iterable, Sequence

import numpy as np

from cvtoolkit.geometry import RotatedRect

__all__ = [
    "convex_hull",
    "convexity_defects",
    "min_area_rect",
    "fit_ellipse",
    "fit_line",
    "perimeter",
]

Point = tuple[float, float]


def _points(points: Iterable[Sequence[float]]) -> list[Point]:
    return [(float(p[0]), float(p[1])) for p in points]


def _cross(o: Point, a: Point, b: Point) -> float:
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def _hull_indices(pts: list[Point]) -> list[int]:
    order = sorted(range(len(pts)), key=lambda i: pts[i])
    seen: set[Point] = set()
    unique = []
    for i in order:
        if pts[i] not in seen:
            seen.add(pts[i])
            unique.append(i)
    if len(unique) < 3:
        return unique

    def chain(indices: list[int]) -> list[int]:
        result: list[int] = []
        for i in indices:
            while len(result) >= 2 and _cross(pts[result[-2]], pts[result[-1]], pts[i]) <= 0:
                result.pop()
            result.append(i)
        return result

    lower = chain(unique)
    upper = chain(unique[::-1])
    return lower[:-1] + upper[:-1]


def convex_hull(points: Iterable[Sequence[float]]) -> list[Point]:
    """Vertices of the convex hull, counter-clockwise in x-right/y-up axes.

    Collinear and repeated points are dropped.
    """
    pts = _points(points)
    return [pts[i] for i in _hull_indices(pts)]


def convexity_defects(points: Iterable[Sequence[float]]) -> list[tuple[int, int, int, float]]:
    """Deepest contour point between each pair of neighbouring hull points.

    Each defect is ``(start, end, farthest, depth)``: indices into ``points``
    and the distance of the farthest point from the hull edge.
    """
    pts = _points(points)
    n = len(pts)
    hull = sorted(_hull_indices(pts))
    if n < 4 or len(hull) < 3:
        return []
    defects = []
    for start, end in zip(hull, hull[1:] + hull[:1]):
        (sx, sy), (ex, ey) = pts[start], pts[end]
        length = math.hypot(ex - sx, ey - sy)
        if length == 0:
            continue
        deepest, depth = -1, 0.0
        i = (start + 1) % n
        while i != end:
            d = abs(_cross(pts[start], pts[end], pts[i])) / length
            if d > depth:
                deepest, depth = i, d
            i = (i + 1) % n
        if depth > 0:
            defects.append((start, end, deepest, depth))
    return defects


def min_area_rect(points: Iterable[Sequence[float]]) -> RotatedRect:
    """Rotated rectangle of minimum area enclosing the points."""
    hull = convex_hull(points)
    if not hull:
        raise ValueError("need at least one point")
    if len(hull) == 1:
        return RotatedRect(hull[0], (0.0, 0.0), 0.0)
    best = None
    for (ax, ay), (bx, by) in zip(hull, hull[1:] + hull[:1]):
        length = math.hypot(bx - ax, by - ay)
        if length == 0:
            continue
        ux, uy = (bx - ax) / length, (by - ay) / length
        vx, vy = -uy, ux
        us = [px * ux + py * uy for px, py in hull]
        vs = [px * vx + py * vy for px, py in hull]
        u_lo, u_hi, v_lo, v_hi = min(us), max(us), min(vs), max(vs)
        area = (u_hi - u_lo) * (v_hi - v_lo)
        if best is None or area < best[0]:
            mu, mv = (u_lo + u_hi) / 2, (v_lo + v_hi) / 2
            center = (ux * mu + vx * mv, uy * mu + vy * mv)
            angle = math.degrees(math.atan2(uy, ux))
            best = (area, RotatedRect(center, (u_hi - u_lo, v_hi - v_lo), angle))
    assert best is not None
    return best[1]


def fit_ellipse(points: Iterable[Sequence[float]]) -> RotatedRect:
    """Least-squares ellipse through at least five points.

    Raises ``ValueError`` when the points do not determine an ellipse.
    """
    pts = np.asarray(_points(points), dtype=float).reshape(-1, 2)
    if len(pts) < 5:
        raise ValueError("fitting an ellipse needs at least 5 points")
    mean = pts.mean(axis=0)
    scale = float(np.abs(pts - mean).max())
    if scale == 0:
        raise ValueError("points are all equal")
    x, y = ((pts - mean) / scale).T
    d1 = np.column_stack([x * x, x * y, y * y])
    d2 = np.column_stack([x, y, np.ones_like(x)])
    if np.linalg.matrix_rank(d2) < 3:
        raise ValueError("points are collinear")
    try:
        s1, s2, s3 = d1.T @ d1, d1.T @ d2, d2.T @ d2
        t = -np.linalg.solve(s3, s2.T)
        m = s1 + s2 @ t
        m = np.array([m[2] / 2, -m[1], m[0] / 2])
        _, vecs = np.linalg.eig(m)
        vecs = np.real(vecs)
        cond = 4 * vecs[0] * vecs[2] - vecs[1] ** 2
        if not np.any(cond > 0):
            raise ValueError("points do not lie on an ellipse")
        a1 = vecs[:, int(np.argmax(cond))]
        a, b, c = a1
        d, e, f = t @ a1
        x0, y0 = np.linalg.solve([[2 * a, b], [b, 2 * c]], [-d, -e])
    except np.linalg.LinAlgError as exc:
        raise ValueError("points do not determine an ellipse") from exc
    f0 = a * x0 * x0 + b * x0 * y0 + c * y0 * y0 + d * x0 + e * y0 + f
    lam, vec = np.linalg.eigh(np.array([[a, b / 2], [b / 2, c]]))
    with np.errstate(divide="ignore", invalid="ignore"):
        axes_sq = -f0 / lam
    if not np.all(np.isfinite(axes_sq)) or np.any(axes_sq <= 0):
        raise ValueError("points do not lie on an ellipse")
    semi = np.sqrt(axes_sq) * scale
    angle = math.degrees(math.atan2(vec[1, 0], vec[0, 0])) % 180.0
    center = (float(x0 * scale + mean[0]), float(y0 * scale + mean[1]))
    return RotatedRect(center, (float(2 * semi[0]), float(2 * semi[1])), angle)


def fit_line(points: Iterable[Sequence[float]]) -> tuple[Point, Point]:
    """Least-squares line: a point on it (the centroid) and a unit direction."""
    pts = _points(points)
    if not pts:
        raise ValueError("need at least one point")
    n = len(pts)
    mx = sum(p[0] for p in pts) / n
    my = sum(p[1] for p in pts) / n
    dx2 = sum((p[0] - mx) ** 2 for p in pts) / n
    dy2 = sum((p[1] - my) ** 2 for p in pts) / n
    dxy = sum((p[0] - mx) * (p[1] - my) for p in pts) / n
    t = math.atan2(2 * dxy, dx2 - dy2) / 2
    return (mx, my), (math.cos(t), math.sin(t))


def perimeter(points: Iterable[Sequence[float]]) -> float:
    """Length of the open polyline through the points."""
    pts = _points(points)
    return sum(math.dist(a, b) for a, b in zip(pts, pts[1:]))