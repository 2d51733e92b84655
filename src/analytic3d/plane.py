"""Planes in 3D, ``a*x + b*y + c*z + d = 0`` in a given frame.

Planes can be built from coefficients, from a point and a normal, from
three non-collinear points, or from a point and two in-plane vectors.
Internally the coefficients are kept in the frame the plane was created
in; ``coefficients(frame)`` reads them back in any other frame.
"""

from __future__ import annotations

from math import pi
from typing import Tuple

from analytic3d import tolerance
from analytic3d.errors import degenerate, unsupported
from analytic3d.frame import GLOBAL_FRAME, resolve
from analytic3d.point import Point
from analytic3d.result import NOTHING, GeometryResult, point_result, shape_result
from analytic3d.vector import Vector
from analytic3d.xform import isgoodnum


class Plane:
    """Infinite plane ``a*x + b*y + c*z + d = 0``."""

    def __init__(self, a, b, c, d, frame=None):
        for v in (a, b, c, d):
            if not isgoodnum(v):
                raise ValueError(f"bad plane coefficient: {v!r}")
        if a == 0 and b == 0 and c == 0:
            raise degenerate("plane normal must be non-zero")
        self._a = float(a)
        self._b = float(b)
        self._c = float(c)
        self._d = float(d)
        self._frame = resolve(frame)

    @classmethod
    def from_point_normal(cls, point: Point, normal: Vector) -> "Plane":
        n = normal.convert_to(point.frame)
        if n.is_zero():
            raise degenerate("plane normal must be non-zero")
        return cls(n.x, n.y, n.z, -n.dot(point.to_vector()), point.frame)

    @classmethod
    def from_points(cls, p1: Point, p2: Point, p3: Point) -> "Plane":
        """plane through three points; collinear points are degenerate"""
        v1 = Vector.from_points(p1, p2)
        v2 = Vector.from_points(p1, p3)
        n = v1.cross(v2)
        if n.norm == 0.0 or v1.is_parallel_to(v2):
            raise degenerate("plane through collinear points")
        return cls.from_point_normal(p1, n)

    @classmethod
    def from_point_vectors(cls, point: Point, v1: Vector, v2: Vector) -> "Plane":
        """plane through ``point`` containing directions ``v1`` and ``v2``"""
        if v1.is_parallel_to(v2):
            raise degenerate("plane vectors must not be parallel")
        return cls.from_point_normal(point, v1.cross(v2))

    ## accessors

    @property
    def frame(self):
        return self._frame

    @property
    def normal(self) -> Vector:
        return Vector(self._a, self._b, self._c, self._frame)

    @property
    def point(self) -> Point:
        """foot of the perpendicular from the origin of the plane's frame"""
        nn = self._a * self._a + self._b * self._b + self._c * self._c
        k = -self._d / nn
        return Point(k * self._a, k * self._b, k * self._c, self._frame)

    def coefficients(self, frame=None) -> Tuple[float, float, float, float]:
        """(a, b, c, d) in ``frame``"""
        target = resolve(frame)
        if target is self._frame:
            return self._a, self._b, self._c, self._d
        n = self.normal.convert_to(target)
        p = self.point.convert_to(target)
        return n.x, n.y, n.z, -n.dot(p.to_vector())

    @property
    def a(self) -> float:
        return self._a

    @property
    def b(self) -> float:
        return self._b

    @property
    def c(self) -> float:
        return self._c

    @property
    def d(self) -> float:
        return self._d

    def copy(self) -> "Plane":
        return Plane(self._a, self._b, self._c, self._d, self._frame)

    def convert_to(self, frame) -> "Plane":
        return Plane(*self.coefficients(frame), resolve(frame))

    ## distance

    def signed_distance_to(self, p: Point) -> float:
        """positive on the side the normal points to"""
        q = p.coords_in(self._frame)
        n = self.normal
        return (self._a * q[0] + self._b * q[1] + self._c * q[2] + self._d) / n.norm

    def projection_of(self, p: Point) -> Point:
        """orthogonal projection of ``p`` onto the plane"""
        return p.projection_to(self)

    def distance_to(self, obj) -> float:
        from analytic3d.linear import Line, Ray, Segment
        from analytic3d.volume import Box, Sphere

        if isinstance(obj, Point):
            return abs(self.signed_distance_to(obj))
        if isinstance(obj, (Line, Ray, Segment, Box)):
            return obj.distance_to(self)
        if isinstance(obj, Plane):
            if self.is_parallel_to(obj):
                return abs(self.signed_distance_to(obj.point))
            return 0.0
        if isinstance(obj, Sphere):
            return max(0.0, abs(self.signed_distance_to(obj.center)) - obj.radius)
        raise unsupported("distance_to", obj)

    ## intersection

    def intersection_with(self, obj) -> GeometryResult:
        """LINE / PLANE / NONE with another plane; delegates to the other
        operand for linear primitives and solids"""
        from analytic3d.linear import Line, Ray, Segment
        from analytic3d.volume import Box, Ellipsoid, Sphere

        if isinstance(obj, (Line, Ray, Segment, Sphere, Ellipsoid, Box)):
            return obj.intersection_with(self)
        if isinstance(obj, Plane):
            return self._intersect_plane(obj)
        raise unsupported("intersection_with", obj)

    def _intersect_plane(self, other: "Plane") -> GeometryResult:
        if self.is_parallel_to(other):
            if self.equals(other):
                return shape_result(self.copy())
            return NOTHING
        n1 = self.normal
        n2 = other.normal.convert_to(self._frame)
        a2, b2, c2, d2 = other.coefficients(self._frame)
        h1 = -self._d
        h2 = -d2
        n11 = n1.dot(n1)
        n22 = n2.dot(n2)
        n12 = n1.dot(n2)
        det = n11 * n22 - n12 * n12
        k1 = (h1 * n22 - h2 * n12) / det
        k2 = (h2 * n11 - h1 * n12) / det
        p = n1.scale(k1).add(n2.scale(k2)).to_point()
        from analytic3d.linear import Line
        return shape_result(Line(p, n1.cross(n2)))

    ## angles and predicates

    def angle_to(self, obj) -> float:
        """angle in radians in [0, pi/2] to a plane, vector or linear
        primitive"""
        if isinstance(obj, Plane):
            a = self.normal.angle_to(obj.normal)
            return min(a, pi - a)
        from analytic3d.linear import Line, Ray, Segment
        if isinstance(obj, (Vector, Line, Ray, Segment)):
            return obj.angle_to(self)
        raise unsupported("angle_to", obj)

    def angle_to_deg(self, obj) -> float:
        return self.angle_to(obj) * 180.0 / pi

    def is_parallel_to(self, obj) -> bool:
        if isinstance(obj, Plane):
            return self.normal.is_parallel_to(obj.normal)
        return obj.is_parallel_to(self)

    def is_orthogonal_to(self, obj) -> bool:
        if isinstance(obj, Plane):
            return self.normal.is_orthogonal_to(obj.normal)
        return obj.is_orthogonal_to(self)

    def is_coplanar_to(self, obj) -> bool:
        return self.equals(obj)

    ## rigid transforms

    def translate(self, v: Vector) -> "Plane":
        return Plane.from_point_normal(self.point.translate(v), self.normal)

    def rotate(self, rotation, pivot=None) -> "Plane":
        return Plane.from_point_normal(self.point.rotate(rotation, pivot),
                                       self.normal.rotate(rotation))

    def reflect_in(self, obj) -> "Plane":
        return Plane.from_point_normal(self.point.reflect_in(obj), self.normal.reflect_in(obj))

    ## equality

    def equals(self, other) -> bool:
        if not isinstance(other, Plane):
            return False
        return self.is_parallel_to(other) and other.point.belongs_to(self)

    def __eq__(self, other):
        if not isinstance(other, Plane):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self):
        if self._frame is GLOBAL_FRAME:
            return f"Plane({self._a}, {self._b}, {self._c}, {self._d})"
        return f"Plane({self._a}, {self._b}, {self._c}, {self._d}, {self._frame!r})"

    def to_string(self, frame=None) -> str:
        a, b, c, d = self.coefficients(frame)
        p = self.point.coords_in(frame)
        return "Plane:\n" + \
            "Point -> ({:10.5g}, {:10.5g}, {:10.5g})\n".format(*p) + \
            "Normal -> ({:10.5g}, {:10.5g}, {:10.5g})".format(a, b, c)

    def __str__(self):
        return self.to_string()


__all__ = ["Plane"]
