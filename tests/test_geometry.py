import math

import pytest
from hypothesis import assume, given
from hypothesis import strategies as st

from cvtoolkit.geometry import (
    RotatedRect,
    closest_point_on_circle,
    closest_point_on_ellipse,
    closest_point_on_line,
    closest_point_on_ray,
    closest_point_on_rect,
    distance_point_ellipse,
    distance_to_ellipse,
    distance_to_line,
    distance_to_ray,
    distance_to_rect,
)

coord = st.floats(min_value=-100, max_value=100, allow_nan=False)


def _rot(p, degrees):
    r = math.radians(degrees)
    return (p[0] * math.cos(r) - p[1] * math.sin(r), p[0] * math.sin(r) + p[1] * math.cos(r))


def _brute_ellipse_distance(e, y, steps=20000):
    return min(
        math.hypot(e[0] * math.cos(t) - y[0], e[1] * math.sin(t) - y[1])
        for t in (2 * math.pi * k / steps for k in range(steps))
    )


def test_ray_with_equal_endpoints_returns_start():
    assert closest_point_on_ray((2.0, 3.0), (2.0, 3.0), (9.0, 9.0)) == (2.0, 3.0)


@given(coord, coord, coord, coord, coord, coord)
def test_ray_projection_is_perpendicular(x1, y1, x2, y2, x3, y3):
    assume(math.hypot(x2 - x1, y2 - y1) > 1)
    px, py = closest_point_on_ray((x1, y1), (x2, y2), (x3, y3))
    dot = (x3 - px) * (x2 - x1) + (y3 - py) * (y2 - y1)
    assert abs(dot) < 1e-6 * (1 + abs(x3) + abs(y3)) * 1000
    cross = (px - x1) * (y2 - y1) - (py - y1) * (x2 - x1)
    assert abs(cross) < 1e-6 * 1e4


def test_line_clamps_to_endpoints():
    assert closest_point_on_line((0.0, 0.0), (10.0, 0.0), (15.0, 5.0)) == (10.0, 0.0)
    assert closest_point_on_line((0.0, 0.0), (10.0, 0.0), (-4.0, 2.0)) == (0.0, 0.0)


@given(coord, coord, coord, coord, coord, coord)
def test_ray_never_farther_than_segment(x1, y1, x2, y2, x3, y3):
    assume(math.hypot(x2 - x1, y2 - y1) > 1e-3)
    start, end, point = (x1, y1), (x2, y2), (x3, y3)
    assert distance_to_ray(point, start, end) <= distance_to_line(point, start, end) + 1e-9


def test_point_on_segment_has_zero_distance():
    assert distance_to_line((5.0, 5.0), (0.0, 0.0), (10.0, 10.0)) == pytest.approx(0.0, abs=1e-12)


def test_circle_point_already_on_circle():
    assert closest_point_on_circle((0.0, 0.0), 5.0, (3.0, 4.0)) == pytest.approx((3.0, 4.0))


@given(coord, coord, st.floats(min_value=0.1, max_value=50), coord, coord)
def test_circle_result_lies_on_circle(cx, cy, radius, px, py):
    assume(math.hypot(px - cx, py - cy) > 1e-3)
    qx, qy = closest_point_on_circle((cx, cy), radius, (px, py))
    assert math.hypot(qx - cx, qy - cy) == pytest.approx(radius, rel=1e-9)


@pytest.mark.parametrize("point", [(10.0, 1.0), (-7.0, -9.0), (0.5, 0.2), (-1.0, 2.5), (3.0, -20.0)])
def test_rect_result_on_boundary(point):
    rect = RotatedRect((0.0, 0.0), (4.0, 6.0), 0.0)
    x, y = closest_point_on_rect(rect, point)
    assert -2 <= x <= 2 and -3 <= y <= 3
    assert math.isclose(abs(x), 2) or math.isclose(abs(y), 3)


@pytest.mark.parametrize("angle", [30.0, 90.0, 145.0])
@pytest.mark.parametrize("point", [(10.0, 1.0), (-7.0, -9.0), (3.0, -20.0)])
def test_rect_is_rotation_equivariant(angle, point):
    rect = RotatedRect((1.0, 2.0), (4.0, 6.0), 0.0)
    base = closest_point_on_rect(rect, point)
    rotated = RotatedRect(_rot(rect.center, angle), rect.size, angle)
    result = closest_point_on_rect(rotated, _rot(point, angle))
    assert result == pytest.approx(_rot(base, angle), abs=1e-9)
    assert distance_to_rect(_rot(point, angle), rotated) == pytest.approx(
        math.dist(base, point), abs=1e-9
    )


@pytest.mark.parametrize("query", [(5.0, 0.0), (4.0, 3.0), (0.5, 0.3), (0.0, 7.0), (1.0, 0.0)])
def test_distance_point_ellipse_matches_sampling(query):
    e = (3.0, 2.0)
    distance, (x0, x1) = distance_point_ellipse(e, query)
    assert (x0 / e[0]) ** 2 + (x1 / e[1]) ** 2 == pytest.approx(1.0, abs=1e-9)
    assert distance == pytest.approx(math.dist((x0, x1), query), abs=1e-9)
    assert distance == pytest.approx(_brute_ellipse_distance(e, query), abs=1e-3)


def test_distance_point_ellipse_mirrors_quadrants():
    e = (2.0, 5.0)
    d1, p1 = distance_point_ellipse(e, (1.5, 4.0))
    d2, p2 = distance_point_ellipse(e, (-1.5, -4.0))
    assert d1 == pytest.approx(d2)
    assert p2 == pytest.approx((-p1[0], -p1[1]))


@pytest.mark.parametrize("t", [0.3, 1.2, 2.5, 4.0, 5.5])
def test_point_on_rotated_ellipse_has_zero_distance(t):
    ellipse = RotatedRect((10.0, -5.0), (8.0, 4.0), 35.0)
    local = (4.0 * math.cos(t), 2.0 * math.sin(t))
    rx, ry = _rot(local, 35.0)
    point = (rx + 10.0, ry - 5.0)
    assert distance_to_ellipse(point, ellipse) == pytest.approx(0.0, abs=1e-6)
    assert closest_point_on_ellipse(ellipse, point) == pytest.approx(point, abs=1e-6)