"""Tests for coordinate frames and conversion between them."""

import pytest
from math import pi

from analytic3d.errors import DegenerateInputError
from analytic3d.frame import GLOBAL_FRAME, Frame, resolve
from analytic3d.point import Point
from analytic3d.rotation import Rotation
from analytic3d.vector import Vector
from analytic3d.xform import Matrix, rotation_matrix


def close(a, b, tol=1e-12):
    return all(abs(x - y) < tol for x, y in zip(a, b))


@pytest.fixture
def turned():
    """origin at (1, 2, 3), axes turned 90 degrees about global z"""
    return Frame([1, 2, 3], rotation_matrix([0, 0, 1], pi / 2))


class TestFrameBasics:

    def test_global(self):
        assert resolve(None) is GLOBAL_FRAME
        assert Frame.global_frame() is GLOBAL_FRAME
        assert GLOBAL_FRAME.is_global()
        assert Frame() == GLOBAL_FRAME
        assert not Frame().is_global()
        assert repr(GLOBAL_FRAME) == "GLOBAL_FRAME"
        with pytest.raises(TypeError):
            resolve("global")

    def test_axes(self, turned):
        assert close(turned.xaxis.xyz(), [0, 1, 0])
        assert close(turned.yaxis.xyz(), [-1, 0, 0])
        assert close(turned.zaxis.xyz(), [0, 0, 1])
        assert turned.origin == Point(1, 2, 3)
        # accessors hand out copies
        axes = turned.axes
        axes.set(0, 0, 5.0)
        assert turned.axes.get(0, 0) != 5.0

    def test_bad_axes(self):
        with pytest.raises(DegenerateInputError):
            Frame([0, 0, 0], Matrix([[1, 0, 0], [0, 1, 0], [0, 0, -1]]))
        with pytest.raises(DegenerateInputError):
            Frame([0, 0, 0], Matrix([[2, 0, 0], [0, 1, 0], [0, 0, 1]]))

    def test_from_vectors(self):
        f = Frame.from_vectors(Point(1, 1, 1), Vector(2, 0, 0), Vector(1, 1, 0))
        assert f.axes.isclose(Matrix(), 1e-12)
        g = Frame.from_vectors([0, 0, 0], [0, 0, 3], [1, 0, 1])
        assert close(g.yaxis.xyz(), [1, 0, 0])
        assert close(g.zaxis.xyz(), [0, 1, 0])
        with pytest.raises(DegenerateInputError):
            Frame.from_vectors([0, 0, 0], [1, 0, 0], [-2, 0, 0])
        with pytest.raises(DegenerateInputError):
            Frame.from_vectors([0, 0, 0], [0, 0, 0], [1, 0, 0])


class TestConversion:

    def test_point_round_trip(self, turned):
        assert close(turned.to_global_point([1, 0, 0]), [1, 3, 3])
        assert close(turned.from_global_point([1, 3, 3]), [1, 0, 0])
        p = Point(1, 0, 0, turned)
        assert close(p.coords_in(None), [1, 3, 3])
        assert p == Point(1, 3, 3)

    def test_vectors_ignore_origin(self, turned):
        assert close(turned.to_global_vector([1, 0, 0]), [0, 1, 0])
        v = Vector(0, 1, 0).convert_to(turned)
        assert close(v.xyz(), [1, 0, 0])
        assert v.frame is turned

    def test_between_frames(self, turned):
        other = Frame([-4, 0, 7], rotation_matrix([1, 1, 0], 0.3))
        xyz = [0.25, -3.0, 8.0]
        there = turned.convert_point(xyz, other)
        back = other.convert_point(there, turned)
        assert close(back, xyz)
        q = Point(*xyz, turned)
        assert q.convert_to(other) == q
        assert q.distance_to(q.convert_to(other)) < 1e-12

    def test_translate_and_rotate(self, turned):
        moved = turned.translate(Vector(1, 1, 1))
        assert moved.origin == Point(2, 3, 4)
        assert moved.axes.isclose(turned.axes, 1e-12)
        spun = GLOBAL_FRAME.rotate(Rotation.from_axis_angle(Vector(0, 0, 1), pi / 2))
        assert spun.axes.isclose(turned.axes, 1e-12)
        assert spun.origin == Point(0, 0, 0)
        swung = turned.rotate(Rotation.from_axis_angle(Vector(0, 0, 1), pi), Point(0, 0, 0))
        assert swung.origin == Point(-1, -2, 3)

    def test_equality(self, turned):
        same = Frame(Point(1, 2, 3), rotation_matrix([0, 0, 1], pi / 2))
        assert same == turned
        assert turned != GLOBAL_FRAME
        assert turned != Frame([1, 2, 3.001], rotation_matrix([0, 0, 1], pi / 2))
        assert "Origin" in turned.to_string()
