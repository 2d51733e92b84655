"""Planar curves produced by sectioning spheres and ellipsoids."""

from __future__ import annotations

from math import pi, sqrt

from analytic3d import tolerance
from analytic3d.errors import degenerate
from analytic3d.point import Point
from analytic3d.vector import Vector


class Circle:
    """Circle of ``radius`` about ``center`` in the plane with ``normal``."""

    def __init__(self, center: Point, radius: float, normal: Vector):
        if radius <= 0.0:
            raise degenerate("circle radius must be positive")
        if normal.is_zero():
            raise degenerate("circle normal must be non-zero")
        self._center = center.copy()
        self._r = float(radius)
        self._normal = normal.convert_to(center.frame).normalized()

    @property
    def center(self) -> Point:
        return self._center.copy()

    @property
    def radius(self) -> float:
        return self._r

    @property
    def normal(self) -> Vector:
        return self._normal.copy()

    @property
    def area(self) -> float:
        return pi * self._r * self._r

    @property
    def perimeter(self) -> float:
        return 2.0 * pi * self._r

    def to_plane(self):
        from analytic3d.plane import Plane
        return Plane.from_point_normal(self._center, self._normal)

    def on_boundary(self, p: Point) -> bool:
        scale = max(p._scale(), self._r)
        if not tolerance.negligible(self.to_plane().distance_to(p), scale):
            return False
        return tolerance.close(p.distance_to(self._center), self._r, scale)

    def translate(self, v: Vector) -> "Circle":
        return Circle(self._center.translate(v), self._r, self._normal)

    def rotate(self, rotation, pivot=None) -> "Circle":
        return Circle(self._center.rotate(rotation, pivot), self._r, self._normal.rotate(rotation))

    def reflect_in(self, obj) -> "Circle":
        return Circle(self._center.reflect_in(obj), self._r, self._normal.reflect_in(obj))

    def equals(self, other) -> bool:
        if not isinstance(other, Circle):
            return False
        return self._center.equals(other.center) and \
            tolerance.close(self._r, other.radius) and \
            self._normal.is_parallel_to(other.normal)

    def __eq__(self, other):
        if not isinstance(other, Circle):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self):
        return f"Circle({self._center!r}, {self._r}, {self._normal!r})"

    def to_string(self, frame=None) -> str:
        c = self._center.coords_in(frame)
        n = self._normal.coords_in(frame)
        return "Circle:\n" + \
            "Center -> ({:10.5g}, {:10.5g}, {:10.5g})\n".format(*c) + \
            "Radius -> {:10.5g}\n".format(self._r) + \
            "Normal -> ({:10.5g}, {:10.5g}, {:10.5g})".format(*n)


class Ellipse:
    """Ellipse about ``center`` with orthogonal semi-axis vectors ``v1``
    (major) and ``v2``."""

    def __init__(self, center: Point, v1: Vector, v2: Vector):
        if v1.is_zero() or v2.is_zero():
            raise degenerate("ellipse semi-axes must be non-zero")
        if not v1.is_orthogonal_to(v2):
            raise degenerate("ellipse semi-axes must be orthogonal")
        v1 = v1.convert_to(center.frame)
        v2 = v2.convert_to(center.frame)
        if v2.norm > v1.norm:
            v1, v2 = v2, v1
        self._center = center.copy()
        self._v1 = v1
        self._v2 = v2

    @property
    def center(self) -> Point:
        return self._center.copy()

    @property
    def v1(self) -> Vector:
        return self._v1.copy()

    @property
    def v2(self) -> Vector:
        return self._v2.copy()

    @property
    def a(self) -> float:
        """semi-major axis length"""
        return self._v1.norm

    @property
    def b(self) -> float:
        """semi-minor axis length"""
        return self._v2.norm

    @property
    def normal(self) -> Vector:
        return self._v1.cross(self._v2).normalized()

    @property
    def area(self) -> float:
        return pi * self.a * self.b

    @property
    def perimeter(self) -> float:
        """Ramanujan's second approximation"""
        a, b = self.a, self.b
        h = ((a - b) / (a + b)) ** 2
        return pi * (a + b) * (1.0 + 3.0 * h / (10.0 + sqrt(4.0 - 3.0 * h)))

    def to_plane(self):
        from analytic3d.plane import Plane
        return Plane.from_point_normal(self._center, self.normal)

    def on_boundary(self, p: Point) -> bool:
        scale = max(p._scale(), self.a)
        if not tolerance.negligible(self.to_plane().distance_to(p), scale):
            return False
        w = Vector.from_points(self._center, p)
        x = w.dot(self._v1) / self.a
        y = w.dot(self._v2) / self.b
        r = sqrt((x / self.a) ** 2 + (y / self.b) ** 2)
        # |r - 1| * b never exceeds the true distance to the curve
        return tolerance.negligible(abs(r - 1.0) * self.b, scale)

    def translate(self, v: Vector) -> "Ellipse":
        return Ellipse(self._center.translate(v), self._v1, self._v2)

    def rotate(self, rotation, pivot=None) -> "Ellipse":
        return Ellipse(self._center.rotate(rotation, pivot), self._v1.rotate(rotation),
                       self._v2.rotate(rotation))

    def reflect_in(self, obj) -> "Ellipse":
        return Ellipse(self._center.reflect_in(obj), self._v1.reflect_in(obj),
                       self._v2.reflect_in(obj))

    def equals(self, other) -> bool:
        if not isinstance(other, Ellipse):
            return False
        if not self._center.equals(other.center):
            return False
        if not (tolerance.close(self.a, other.a) and tolerance.close(self.b, other.b)):
            return False
        return self._v1.is_parallel_to(other.v1) and self.normal.is_parallel_to(other.normal)

    def __eq__(self, other):
        if not isinstance(other, Ellipse):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self):
        return f"Ellipse({self._center!r}, {self._v1!r}, {self._v2!r})"

    def to_string(self, frame=None) -> str:
        c = self._center.coords_in(frame)
        v1 = self._v1.coords_in(frame)
        v2 = self._v2.coords_in(frame)
        return "Ellipse:\n" + \
            "Center -> ({:10.5g}, {:10.5g}, {:10.5g})\n".format(*c) + \
            "Semiaxis 1 -> ({:10.5g}, {:10.5g}, {:10.5g})\n".format(*v1) + \
            "Semiaxis 2 -> ({:10.5g}, {:10.5g}, {:10.5g})".format(*v2)


__all__ = ["Circle", "Ellipse"]
