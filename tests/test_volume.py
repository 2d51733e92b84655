"""Tests for spheres, ellipsoids and boxes."""

import pytest
from math import cos, pi, sin, sqrt

from analytic3d import tolerance
from analytic3d.curves import Circle, Ellipse
from analytic3d.errors import DegenerateInputError
from analytic3d.frame import Frame
from analytic3d.linear import Line, Ray, Segment
from analytic3d.plane import Plane
from analytic3d.point import Point
from analytic3d.result import ResultKind
from analytic3d.rotation import Rotation
from analytic3d.vector import Vector
from analytic3d.volume import Box, Ellipsoid, Sphere

TOL = 1e-12


def box_face_planes(b):
    """the six face planes named by corner triples"""
    return [
        Plane.from_points(b.p1, b.p2, b.p3),
        Plane.from_points(b.p8, b.p7, b.p6),
        Plane.from_points(b.p1, b.p2, b.p5),
        Plane.from_points(b.p2, b.p3, b.p6),
        Plane.from_points(b.p3, b.p4, b.p7),
        Plane.from_points(b.p1, b.p4, b.p8),
    ]


class TestBoundingBoxTangency:
    """The faces of a bounding box touch the solid in single points."""

    def test_rotated_ellipsoid(self):
        p = Point(0, 0, 0)
        e = Ellipsoid(p, Vector(3, 0, 0), Vector(0, 2, 0), Vector(0, 0, 4))
        r = Rotation.from_axis_angle(Vector(1, 2, 3), pi / 4)
        e = e.rotate(r, p)
        b = e.bounding_box()
        for s in box_face_planes(b):
            assert e.intersection_with(s).kind is ResultKind.POINT

    def test_sphere_in_rotated_frame(self):
        p = Point(0, 0, 0)
        e = Sphere(p, 5)
        r = Rotation.from_axis_angle(Vector(1, 2, 3), pi / 4)
        cs = Frame(Point(1, 2, 4), r.to_rotation_matrix().transpose())
        b = e.bounding_box(cs)
        assert b.is_axis_aligned(cs)
        assert not b.is_axis_aligned()
        for s in box_face_planes(b):
            assert e.intersection_with(s).kind is ResultKind.POINT

    def test_rotated_box(self):
        b = Box(Point(1, 1, 1), 2, 2, 2, Rotation.from_axis_angle(Vector(0, 0, 1), pi / 4))
        bb = b.bounding_box()
        assert bb.is_axis_aligned()
        assert bb.lx == pytest.approx(2 * sqrt(2))
        assert bb.ly == pytest.approx(2 * sqrt(2))
        assert bb.lz == pytest.approx(2.0)
        assert bb.center == Point(1, 1, 1)
        for v in b.vertices:
            assert bb.contains(v)


class TestSphere:

    def test_measures(self):
        s = Sphere(Point(1, 2, 3), 2.0)
        assert s.area == pytest.approx(16 * pi)
        assert s.volume == pytest.approx(32 * pi / 3)
        assert s.contains(Point(1, 2, 5))
        assert s.on_boundary(Point(1, 2, 5))
        assert s.contains(Point(1, 2, 4))
        assert not s.on_boundary(Point(1, 2, 4))
        assert not s.contains(Point(1, 2, 5.001))
        with pytest.raises(DegenerateInputError):
            Sphere(Point(0, 0, 0), 0.0)

    def test_distance(self):
        s = Sphere(Point(0, 0, 0), 1.0)
        assert s.distance_to(Point(0, 0, 3)) == 2.0
        assert s.distance_to(Line(Point(0, 5, 0), Vector(1, 0, 0))) == 4.0
        assert s.distance_to(Sphere(Point(5, 0, 0), 1.0)) == 3.0
        assert s.distance_to(Sphere(Point(1, 0, 0), 1.0)) == 0.0
        assert s.distance_to(Plane(0, 0, 1, -3)) == 2.0

    def test_linear_intersection(self):
        s = Sphere(Point(0, 0, 0), 5.0)
        chord = s.intersection_with(Line(Point(0, 3, 0), Vector(1, 0, 0)))
        assert chord.expect(ResultKind.SEGMENT) == Segment(Point(-4, 3, 0), Point(4, 3, 0))
        touch = s.intersection_with(Line(Point(0, 5, 0), Vector(1, 0, 0)))
        assert touch.expect(ResultKind.POINT) == Point(0, 5, 0)
        assert s.intersection_with(Line(Point(0, 6, 0), Vector(1, 0, 0))).is_none
        half = s.intersection_with(Ray(Point(0, 3, 0), Vector(1, 0, 0)))
        assert half.expect(ResultKind.SEGMENT) == Segment(Point(0, 3, 0), Point(4, 3, 0))
        assert s.intersection_with(Ray(Point(6, 0, 0), Vector(1, 0, 0))).is_none
        inside = Segment(Point(-1, 0, 0), Point(1, 0, 0))
        assert s.intersection_with(inside).expect(ResultKind.SEGMENT) == inside
        end = Segment(Point(5, 0, 0), Point(9, 0, 0))
        assert s.intersection_with(end).expect(ResultKind.POINT) == Point(5, 0, 0)
        # the linear primitives delegate
        assert Line(Point(0, 3, 0), Vector(1, 0, 0)).intersection_with(s) == chord

    def test_plane_intersection(self):
        s = Sphere(Point(0, 0, 0), 5.0)
        circle = s.intersection_with(Plane(0, 0, 1, -3)).expect(ResultKind.CIRCLE)
        assert circle == Circle(Point(0, 0, 3), 4.0, Vector(0, 0, 1))
        touch = s.intersection_with(Plane(0, 0, 1, -5)).expect(ResultKind.POINT)
        assert touch == Point(0, 0, 5)
        assert s.intersection_with(Plane(0, 0, 1, -6)).is_none

    def test_sphere_intersection(self):
        s = Sphere(Point(0, 0, 0), 5.0)
        circle = s.intersection_with(Sphere(Point(8, 0, 0), 5.0)).expect(ResultKind.CIRCLE)
        assert circle == Circle(Point(4, 0, 0), 3.0, Vector(1, 0, 0))
        outer = s.intersection_with(Sphere(Point(10, 0, 0), 5.0))
        assert outer.expect(ResultKind.POINT) == Point(5, 0, 0)
        inner = s.intersection_with(Sphere(Point(2, 0, 0), 3.0))
        assert inner.expect(ResultKind.POINT) == Point(5, 0, 0)
        assert s.intersection_with(Sphere(Point(1, 0, 0), 1.0)).is_none
        assert s.intersection_with(Sphere(Point(20, 0, 0), 1.0)).is_none
        assert s.intersection_with(Sphere(Point(0, 0, 0), 4.0)).is_none
        assert s.intersection_with(s.copy()).expect(ResultKind.SPHERE) == s

    def test_projection(self):
        s = Sphere(Point(1, 2, 3), 2.0)
        res = s.projection_to(Plane(0, 0, 1, 0))
        assert res.expect(ResultKind.CIRCLE) == Circle(Point(1, 2, 0), 2.0, Vector(0, 0, 1))

    def test_bounding_box(self):
        b = Sphere(Point(1, 2, 3), 2.0).bounding_box()
        assert b.p1 == Point(-1, 0, 1)
        assert b.p7 == Point(3, 4, 5)

    def test_motion(self):
        s = Sphere(Point(1, 0, 0), 1.0)
        quarter = Rotation.from_axis_angle(Vector(0, 0, 1), pi / 2)
        assert s.rotate(quarter) == Sphere(Point(0, 1, 0), 1.0)
        assert s.rotate(quarter, Point(1, 0, 0)) == s
        assert s.translate(Vector(1, 1, 1)) == Sphere(Point(2, 1, 1), 1.0)
        assert s.reflect_in(Plane(1, 0, 0, 0)) == Sphere(Point(-1, 0, 0), 1.0)
        assert s != Sphere(Point(1, 0, 0), 1.1)
        assert s.to_string().startswith("Sphere:")


class TestEllipsoid:

    @pytest.fixture
    def egg(self):
        return Ellipsoid(Point(0, 0, 0), Vector(4, 0, 0), Vector(0, 2, 0), Vector(0, 0, 1))

    def test_measures(self, egg):
        assert (egg.a, egg.b, egg.c) == (4.0, 2.0, 1.0)
        assert egg.volume == pytest.approx(32 * pi / 3)
        assert egg.on_boundary(Point(0, 0, 1))
        assert egg.on_boundary(Point(4 * 0.6, 2 * 0.8, 0))
        assert egg.contains(Point(3, 1, 0.2))
        assert not egg.contains(Point(3, 1.5, 0))
        with pytest.raises(DegenerateInputError):
            Ellipsoid(Point(0, 0, 0), Vector(1, 0, 0), Vector(0, 1, 0), Vector(1, 1, 0))

    def test_equality(self, egg):
        same = Ellipsoid(Point(0, 0, 0), Vector(0, -2, 0), Vector(4, 0, 0), Vector(0, 0, -1))
        assert egg == same
        flipped = egg.rotate(Rotation.from_axis_angle(Vector(1, 0, 0), pi))
        assert flipped == egg
        turned = egg.rotate(Rotation.from_axis_angle(Vector(0, 0, 1), pi / 2))
        assert turned != egg
        assert turned.contains(Point(0, 3.9, 0))
        assert not turned.contains(Point(3.9, 0, 0))
        assert egg.reflect_in(Point(0, 0, 0)) == egg
        assert egg.translate(Vector(1, 0, 0)).center == Point(1, 0, 0)

    def test_linear_intersection(self, egg):
        axis = egg.intersection_with(Line(Point(0, 0, 0), Vector(1, 0, 0)))
        assert axis.expect(ResultKind.SEGMENT) == Segment(Point(-4, 0, 0), Point(4, 0, 0))
        touch = egg.intersection_with(Line(Point(0, 2, 0), Vector(1, 0, 0)))
        assert touch.expect(ResultKind.POINT) == Point(0, 2, 0)
        ray = egg.intersection_with(Ray(Point(0, 0, 0), Vector(1, 0, 0)))
        assert ray.expect(ResultKind.SEGMENT) == Segment(Point(0, 0, 0), Point(4, 0, 0))
        assert egg.intersection_with(Segment(Point(5, 0, 0), Point(6, 0, 0))).is_none
        assert egg.intersection_with(Line(Point(0, 0, 1.5), Vector(1, 1, 0))).is_none

    def test_plane_intersection(self, egg):
        section = egg.intersection_with(Plane(0, 0, 1, -0.5)).expect(ResultKind.ELLIPSE)
        assert section.center == Point(0, 0, 0.5)
        assert section.a == pytest.approx(4 * sqrt(0.75))
        assert section.b == pytest.approx(2 * sqrt(0.75))
        assert section.v1.is_parallel_to(Vector(1, 0, 0))
        touch = egg.intersection_with(Plane(0, 0, 1, -1)).expect(ResultKind.POINT)
        assert touch == Point(0, 0, 1)
        assert egg.intersection_with(Plane(0, 0, 1, -1.5)).is_none

    def test_oblique_section(self):
        e = Ellipsoid(Point(1, -1, 2), Vector(3, 0, 0), Vector(0, 2, 0), Vector(0, 0, 1))
        e = e.rotate(Rotation.from_axis_angle(Vector(1, 1, 0), 0.6), Point(1, -1, 2))
        cut = Plane.from_point_normal(Point(1.2, -0.8, 2.1), Vector(1, -2, 4))
        section = e.intersection_with(cut).expect(ResultKind.ELLIPSE)
        assert section.to_plane() == cut
        with tolerance.override(1e-10):
            for k in range(8):
                t = k * pi / 4
                q = section.center.add(section.v1.scale(cos(t)).add(section.v2.scale(sin(t))))
                assert q.belongs_to(cut)
                assert e.on_boundary(q)

    def test_bounding_box(self, egg):
        b = egg.bounding_box()
        assert (b.lx, b.ly, b.lz) == (8.0, 4.0, 2.0)
        assert b.center == Point(0, 0, 0)

    def test_text(self, egg):
        assert egg.to_string().splitlines()[0] == "Ellipsoid:"


class TestBox:

    @pytest.fixture
    def brick(self):
        return Box(Point(0, 0, 0), 2, 4, 6)

    def test_corners(self, brick):
        assert brick.p1 == Point(-1, -2, -3)
        assert brick.p2 == Point(1, -2, -3)
        assert brick.p3 == Point(1, 2, -3)
        assert brick.p4 == Point(-1, 2, -3)
        assert brick.p5 == Point(-1, -2, 3)
        assert brick.p7 == Point(1, 2, 3)
        assert len(brick.vertices) == 8
        assert len(brick.edges) == 12
        assert all(e.length in (2.0, 4.0, 6.0) for e in brick.edges)

    def test_faces(self, brick):
        faces = brick.faces
        assert len(faces) == 6
        assert faces[0] == Plane(0, 0, 1, 3)
        assert faces[1] == Plane(0, 0, 1, -3)
        assert faces[3] == Plane(1, 0, 0, -1)
        assert brick.p4.belongs_to(faces[0])

    def test_measures(self, brick):
        assert brick.volume == 48.0
        assert brick.area == 88.0
        assert brick.diagonal == pytest.approx(sqrt(56))
        assert brick.v2 == Vector(0, 2, 0)
        assert brick.is_axis_aligned()
        with pytest.raises(DegenerateInputError):
            Box(Point(0, 0, 0), 1, -1, 1)

    def test_membership(self, brick):
        assert brick.contains(Point(0.5, -1, 2))
        assert brick.contains(Point(1, 2, 3))
        assert not brick.contains(Point(1.1, 0, 0))
        assert brick.on_boundary(Point(1, 0, 0))
        assert brick.on_boundary(brick.p6)
        assert not brick.on_boundary(Point(0, 0, 0))
        assert not brick.on_boundary(Point(2, 0, 0))
        assert Point(0, 2, 0).belongs_to(brick)

    def test_rotated(self):
        b = Box(Point(0, 0, 0), 2, 2, 2, Rotation.from_axis_angle(Vector(0, 0, 1), pi / 4))
        assert not b.is_axis_aligned()
        assert b.contains(Point(1.3, 0, 0))
        assert not Box(Point(0, 0, 0), 2, 2, 2).contains(Point(1.3, 0, 0))
        assert b.distance_to(Point(3, 0, 0)) == pytest.approx(3 - sqrt(2))
        assert b.p2 == Point(sqrt(2), 0, -1)

    def test_distance(self, brick):
        assert brick.distance_to(Point(4, 6, 3)) == 5.0
        assert brick.distance_to(Point(0, 0, 0)) == 0.0
        assert brick.distance_to(Plane(0, 0, 1, -5)) == 2.0
        assert brick.distance_to(Plane(1, 1, 1, 0)) == 0.0
        assert Plane(0, 0, 1, -5).distance_to(brick) == 2.0
        assert brick.intersects(Plane(0, 0, 1, -3))
        assert not brick.intersects(Plane(0, 0, 1, -3.5))

    def test_plane_sections(self):
        cube = Box(Point(0, 0, 0), 2, 2, 2)
        assert cube.intersection_with(Plane(0, 0, 1, -5)).is_none
        corner = cube.intersection_with(Plane(1, 1, 1, -3))
        assert corner.expect(ResultKind.POINT) == Point(1, 1, 1)
        edge = cube.intersection_with(Plane(1, 1, 0, -2))
        assert edge.expect(ResultKind.SEGMENT) == Segment(Point(1, 1, -1), Point(1, 1, 1))
        face = cube.intersection_with(Plane(0, 0, 1, -1)).expect(ResultKind.POLYGON)
        assert len(face) == 4
        middle = cube.intersection_with(Plane(0, 0, 1, 0)).expect(ResultKind.POLYGON)
        assert len(middle) == 4
        assert all(abs(p.z) < TOL for p in middle)

    def test_hexagonal_section(self):
        cube = Box(Point(0, 0, 0), 2, 2, 2)
        cut = Plane(1, 1, 1, 0)
        hexagon = cube.intersection_with(cut).expect(ResultKind.POLYGON)
        assert len(hexagon) == 6
        for i, p in enumerate(hexagon):
            assert p.belongs_to(cut)
            # boundary order: neighbours are one side apart
            assert p.distance_to(hexagon[i - 1]) == pytest.approx(sqrt(2))

    def test_from_points(self):
        b = Box.from_points(Point(0, 0, 0), Point(2, 4, 6))
        assert b.center == Point(1, 2, 3)
        assert (b.lx, b.ly, b.lz) == (2.0, 4.0, 6.0)
        assert b.p1 == Point(0, 0, 0)
        assert b.p7 == Point(2, 4, 6)

    def test_motion(self):
        b = Box(Point(2, 0, 0), 2, 4, 6)
        quarter = Rotation.from_axis_angle(Vector(0, 0, 1), pi / 2)
        assert b.rotate(quarter) == Box(Point(0, 2, 0), 4, 2, 6)
        assert b.translate(Vector(0, 0, 1)) == Box(Point(2, 0, 1), 2, 4, 6)
        assert b.reflect_in(Plane(1, 0, 0, 0)) == Box(Point(-2, 0, 0), 2, 4, 6)
        tilted = Box(Point(1, 2, 3), 1, 2, 3, Rotation.from_axis_angle(Vector(1, 2, 2), 0.4))
        mirror = Plane.from_point_normal(Point(0, 1, 0), Vector(1, 0, 1))
        assert tilted.reflect_in(mirror).reflect_in(mirror) == tilted
        assert tilted.reflect_in(mirror) != tilted
        assert b.to_string().startswith("Box:")

    def test_in_frame(self):
        f = Frame([5, 5, 5], Rotation.from_axis_angle(Vector(0, 0, 1), pi / 2).to_rotation_matrix())
        b = Box(Point(0, 0, 0, f), 2, 4, 6, Rotation(f.axes))
        # the box axes follow the frame: ly runs along global x, lx along global y
        assert b.contains(Point(5, 5, 7.9))
        assert b.contains(Point(3.1, 5, 5))
        assert not b.contains(Point(5, 3.1, 5))
        assert b.is_axis_aligned(f)

    def test_default_orientation_follows_frame(self):
        f = Frame([0, 0, 0], Rotation.from_axis_angle(Vector(0, 0, 1), pi / 4).to_rotation_matrix())
        b = Box(Point(0, 0, 0, f), 2, 4, 6)
        assert b.is_axis_aligned(f)
        assert not b.is_axis_aligned()
        assert b == Box(Point(0, 0, 0, f), 2, 4, 6, Rotation(f.axes))
        assert b.p7 == Point(1, 2, 3, f)
        h = sqrt(0.5)
        assert b.p7 == Point(h - 2 * h, h + 2 * h, 3)
