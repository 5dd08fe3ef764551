from __future__ import annotations
import math

import pytest

from c4scan.geometry.primitives import Circle, Line, Point, average_points


def test_intersection_of_vertical_and_horizontal_lines():
    vertical = Line(rho=80.0, theta=0.0)
    horizontal = Line(rho=60.0, theta=math.pi / 2)
    p = vertical.intersection(horizontal)
    assert p is not None
    assert p.x == pytest.approx(80.0)
    assert p.y == pytest.approx(60.0)


def test_parallel_lines_have_no_intersection():
    assert Line(10.0, 0.3).intersection(Line(50.0, 0.3)) is None


def test_coincident_lines_have_no_intersection():
    ln = Line(42.0, 1.0)
    assert ln.intersection(Line(42.0, 1.0)) is None


def test_through_recovers_normal_form():
    ln = Line.through(Point(80, 10), Point(80, 500))
    assert ln.theta == pytest.approx(0.0)
    assert ln.rho == pytest.approx(80.0)

    ln = Line.through(Point(0, 60), Point(300, 60))
    assert ln.theta == pytest.approx(math.pi / 2)
    assert ln.rho == pytest.approx(60.0)


def test_through_point_lies_on_line():
    p, q = Point(12.5, 300.0), Point(410.0, 42.0)
    ln = Line.through(p, q)
    assert 0.0 <= ln.theta < math.pi
    for pt in (p, q):
        assert pt.x * math.cos(ln.theta) + pt.y * math.sin(ln.theta) == pytest.approx(ln.rho)


def test_through_rejects_identical_points():
    with pytest.raises(ValueError):
        Line.through(Point(1, 1), Point(1, 1))


def test_similar_theta_wraps_around_pi():
    tol = math.radians(5)
    a = Line(100.0, math.radians(1))
    b = Line(-300.0, math.radians(179))
    assert a.similar_theta(b, tol)
    assert not a.similar_theta(Line(0.0, math.radians(90)), tol)


def test_similar_theta_zero_tolerance_never_matches():
    assert not Line(1.0, 0.5).similar_theta(Line(2.0, 0.5), 0.0)


def test_clip_inside_and_outside_frame():
    seg = Line(80.0, 0.0).clip(700, 600)
    assert seg is not None
    a, b = seg
    assert a.x == pytest.approx(80, abs=1) and b.x == pytest.approx(80, abs=1)
    assert {round(a.y), round(b.y)} <= set(range(0, 600))

    assert Line(5000.0, 0.0).clip(700, 600) is None


def test_circle_containment_includes_boundary():
    c = Circle(Point(10, 10), 5)
    assert c.contains(Point(10, 10))
    assert c.contains(Point(15, 10))
    assert not c.contains(Point(15.01, 10))
    assert c.padded(1).contains(Point(15.5, 10))


def test_average_points():
    avg = average_points([Point(0, 0), Point(2, 4), Point(4, 2)])
    assert (avg.x, avg.y) == pytest.approx((2.0, 2.0))
    with pytest.raises(ValueError):
        average_points([])
