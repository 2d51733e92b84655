"""Tests for free vectors."""

import pytest
from math import pi, sqrt

from analytic3d.errors import DegenerateInputError
from analytic3d.frame import Frame
from analytic3d.linear import Line, Ray, Segment
from analytic3d.plane import Plane
from analytic3d.point import Point
from analytic3d.rotation import Rotation
from analytic3d.vector import Vector
from analytic3d.xform import rotation_matrix


def close(a, b, tol=1e-12):
    return all(abs(x - y) < tol for x, y in zip(a, b))


class TestVectorAlgebra:

    def test_basic(self):
        u = Vector(1, 2, 3)
        v = Vector(-2, 0, 1)
        assert u.dot(v) == 1.0
        assert u * v == 1.0
        assert u.cross(v) == Vector(2, -7, 4)
        assert (u + v) == Vector(-1, 2, 4)
        assert (u - v) == Vector(3, 2, 2)
        assert 2 * u == Vector(2, 4, 6)
        assert u * 2 == u.scale(2)
        assert u / 2 == Vector(0.5, 1, 1.5)
        assert -u == Vector(-1, -2, -3)
        assert Vector(3, 4, 0).norm == 5.0
        assert Vector(0, 0, 5).normalized() == Vector(0, 0, 1)

    def test_from_points(self):
        v = Vector.from_points(Point(1, 1, 1), Point(2, 3, 4))
        assert v == Vector(1, 2, 3)
        assert (Point(2, 3, 4) - Point(1, 1, 1)) == v
        assert v.to_point() == Point(1, 2, 3)

    def test_zero(self):
        z = Vector(0, 0, 0)
        assert z.is_zero()
        assert Vector(1e-13, 0, 0).is_zero()
        with pytest.raises(DegenerateInputError):
            z.normalized()
        with pytest.raises(DegenerateInputError):
            z.angle_to(Vector(1, 0, 0))
        with pytest.raises(DegenerateInputError):
            z.angle_to(Plane(0, 0, 1, 0))

    def test_bad_operands(self):
        with pytest.raises(ValueError):
            Vector("a", 0, 0)
        with pytest.raises(TypeError):
            Vector(1, 0, 0).dot(Point(1, 0, 0))
        with pytest.raises(TypeError):
            Vector(1, 0, 0).angle_to(3.0)

    def test_frames(self):
        f = Frame([10, 10, 10], rotation_matrix([0, 0, 1], pi / 2))
        u = Vector(1, 0, 0, f)
        assert close(u.global_xyz(), [0, 1, 0])
        assert u == Vector(0, 1, 0)
        # mixed frame arithmetic lands in the receiver's frame
        w = u.add(Vector(1, 0, 0))
        assert w.frame is f
        assert close(w.xyz(), [1, -1, 0])
        assert u.dot(Vector(0, 1, 0)) == pytest.approx(1.0, abs=1e-12)


class TestVectorAngles:

    def test_angles(self):
        x = Vector(1, 0, 0)
        assert x.angle_to(Vector(0, 1, 0)) == pytest.approx(pi / 2)
        assert x.angle_to(Vector(-1, 0, 0)) == pytest.approx(pi)
        assert x.angle_to_deg(Vector(1, 1, 0)) == pytest.approx(45.0)
        assert x.angle_to(Line(Point(5, 5, 5), Vector(0, 0, 1))) == pytest.approx(pi / 2)
        assert Vector(1, 0, 1).angle_to(Plane(0, 0, 1, -3)) == pytest.approx(pi / 4)
        assert Vector(1, 0, -1).angle_to(Plane(0, 0, 1, -3)) == pytest.approx(pi / 4)

    def test_parallel_orthogonal(self):
        x = Vector(1, 0, 0)
        assert x.is_parallel_to(Vector(-3, 0, 0))
        assert x.is_not_parallel_to(Vector(1, 1e-6, 0))
        assert x.is_orthogonal_to(Vector(0, 2, 5))
        assert x.is_parallel_to(Segment(Point(0, 0, 0), Point(2, 0, 0)))
        assert x.is_orthogonal_to(Ray(Point(0, 0, 0), Vector(0, 0, 1)))
        # for a plane: parallel means lying in it, orthogonal means along the normal
        xy = Plane(0, 0, 1, 0)
        assert x.is_parallel_to(xy)
        assert Vector(0, 0, 2).is_orthogonal_to(xy)
        assert not x.is_orthogonal_to(xy)

    def test_projection(self):
        v = Vector(3, 4, 5)
        assert v.projection_to(Vector(0, 0, 2)) == Vector(0, 0, 5)
        assert v.projection_to(Line(Point(0, 0, 0), Vector(1, 0, 0))) == Vector(3, 0, 0)
        o = v.ortho_vector()
        assert o.is_orthogonal_to(v)
        assert o.norm == pytest.approx(v.norm)


class TestVectorTransforms:

    def test_rotate(self):
        r = Rotation.from_axis_angle(Vector(0, 0, 1), pi / 2)
        assert Vector(1, 0, 0).rotate(r) == Vector(0, 1, 0)
        # pivot does not matter for a free vector
        assert Vector(1, 0, 0).rotate(r, Point(5, 5, 5)) == Vector(0, 1, 0)
        assert Vector(1, 2, 3).translate(Vector(9, 9, 9)) == Vector(1, 2, 3)

    def test_reflect(self):
        v = Vector(1, 2, 3)
        assert v.reflect_in(Point(4, 4, 4)) == Vector(-1, -2, -3)
        assert v.reflect_in(Line(Point(0, 0, 0), Vector(1, 0, 0))) == Vector(1, -2, -3)
        assert v.reflect_in(Plane(0, 0, 1, -7)) == Vector(1, 2, -3)
        tilted = Plane.from_point_normal(Point(1, 1, 1), Vector(1, 1, 1))
        assert v.reflect_in(tilted).reflect_in(tilted) == v

    def test_text(self):
        v = Vector(1, 2, 3)
        assert repr(v) == "Vector(1.0, 2.0, 3.0)"
        assert str(v).startswith("Vector:")
