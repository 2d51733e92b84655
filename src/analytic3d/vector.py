"""3D free vectors attached to a coordinate frame.

Vectors are immutable values.  Binary operations convert the argument
into the receiver's frame before doing arithmetic, so ``u.dot(v)`` is
valid whatever frames ``u`` and ``v`` were expressed in; results are in
the receiver's frame.

Parallel and orthogonal tests compare normalized quantities against the
tolerance, which makes them independent of vector magnitude::

    |u x v| <= tol * |u| * |v|      parallel
    |u . v| <= tol * |u| * |v|      orthogonal
"""

from __future__ import annotations

from math import acos, asin, pi, sqrt
from typing import List

from analytic3d import tolerance
from analytic3d.errors import degenerate, unsupported
from analytic3d.frame import GLOBAL_FRAME, resolve
from analytic3d.xform import isgoodnum


class Vector:
    """Free vector with x, y, z components in ``frame``."""

    __slots__ = ("_x", "_y", "_z", "_frame")

    def __init__(self, x=0.0, y=0.0, z=0.0, frame=None):
        for c in (x, y, z):
            if not isgoodnum(c):
                raise ValueError(f"bad vector component: {c!r}")
        self._x = float(x)
        self._y = float(y)
        self._z = float(z)
        self._frame = resolve(frame)

    @classmethod
    def from_points(cls, p1, p2) -> "Vector":
        """vector from ``p1`` to ``p2``, in the frame of ``p1``"""
        a = p1.xyz()
        b = p2.coords_in(p1.frame)
        return cls(b[0] - a[0], b[1] - a[1], b[2] - a[2], p1.frame)

    @classmethod
    def _from_global(cls, xyz, frame) -> "Vector":
        return cls(*frame.from_global_vector(xyz), frame)

    ## accessors

    @property
    def x(self) -> float:
        return self._x

    @property
    def y(self) -> float:
        return self._y

    @property
    def z(self) -> float:
        return self._z

    @property
    def frame(self):
        return self._frame

    def xyz(self) -> List[float]:
        return [self._x, self._y, self._z]

    def global_xyz(self) -> List[float]:
        return self._frame.to_global_vector(self.xyz())

    def coords_in(self, frame) -> List[float]:
        """components of this vector in ``frame``"""
        return self._frame.convert_vector(self.xyz(), resolve(frame))

    def copy(self) -> "Vector":
        return Vector(self._x, self._y, self._z, self._frame)

    def convert_to(self, frame) -> "Vector":
        return Vector(*self.coords_in(frame), resolve(frame))

    def to_point(self):
        from analytic3d.point import Point
        return Point(self._x, self._y, self._z, self._frame)

    ## algebra

    @property
    def norm(self) -> float:
        return sqrt(self._x * self._x + self._y * self._y + self._z * self._z)

    def is_zero(self) -> bool:
        return tolerance.negligible(self.norm)

    def normalized(self) -> "Vector":
        n = self.norm
        if n == 0.0:
            raise degenerate("cannot normalize a zero vector")
        return Vector(self._x / n, self._y / n, self._z / n, self._frame)

    def dot(self, v: "Vector") -> float:
        o = _as_vector(v, "dot").coords_in(self._frame)
        return self._x * o[0] + self._y * o[1] + self._z * o[2]

    def cross(self, v: "Vector") -> "Vector":
        o = _as_vector(v, "cross").coords_in(self._frame)
        return Vector(self._y * o[2] - self._z * o[1],
                      self._z * o[0] - self._x * o[2],
                      self._x * o[1] - self._y * o[0],
                      self._frame)

    def add(self, v: "Vector") -> "Vector":
        o = _as_vector(v, "add").coords_in(self._frame)
        return Vector(self._x + o[0], self._y + o[1], self._z + o[2], self._frame)

    def sub(self, v: "Vector") -> "Vector":
        o = _as_vector(v, "sub").coords_in(self._frame)
        return Vector(self._x - o[0], self._y - o[1], self._z - o[2], self._frame)

    def scale(self, c: float) -> "Vector":
        return Vector(self._x * c, self._y * c, self._z * c, self._frame)

    def neg(self) -> "Vector":
        return self.scale(-1.0)

    ## operator sugar; ``u * v`` is the dot product

    def __add__(self, other):
        if isinstance(other, Vector):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Vector):
            return self.sub(other)
        return NotImplemented

    def __mul__(self, other):
        if isinstance(other, Vector):
            return self.dot(other)
        if isgoodnum(other):
            return self.scale(other)
        return NotImplemented

    def __rmul__(self, other):
        if isgoodnum(other):
            return self.scale(other)
        return NotImplemented

    def __truediv__(self, other):
        if isgoodnum(other):
            return self.scale(1.0 / other)
        return NotImplemented

    def __neg__(self):
        return self.neg()

    ## angles and direction predicates

    def angle_to(self, obj) -> float:
        """angle in radians to a vector or linear primitive, in [0, pi],
        or to a plane, in [0, pi/2]"""
        from analytic3d.plane import Plane

        if isinstance(obj, Plane):
            n = obj.normal
            if self.norm == 0.0:
                raise degenerate("angle with a zero vector is undefined")
            return abs(asin(tolerance.clamp_unit(self.dot(n) / (self.norm * n.norm))))
        v = direction_of(obj, "angle_to")
        denom = self.norm * v.norm
        if denom == 0.0:
            raise degenerate("angle with a zero vector is undefined")
        return acos(tolerance.clamp_unit(self.dot(v) / denom))

    def angle_to_deg(self, obj) -> float:
        return self.angle_to(obj) * 180.0 / pi

    def is_parallel_to(self, obj) -> bool:
        """parallel to a vector or linear primitive; for a plane, lies
        in the plane"""
        from analytic3d.plane import Plane

        if isinstance(obj, Plane):
            return self.is_orthogonal_to(obj.normal)
        v = direction_of(obj, "is_parallel_to")
        denom = self.norm * v.norm
        if denom == 0.0:
            return True
        return tolerance.negligible_ratio(self.cross(v).norm / denom)

    def is_not_parallel_to(self, obj) -> bool:
        return not self.is_parallel_to(obj)

    def is_orthogonal_to(self, obj) -> bool:
        """orthogonal to a vector or linear primitive; for a plane, along
        its normal"""
        from analytic3d.plane import Plane

        if isinstance(obj, Plane):
            return self.is_parallel_to(obj.normal)
        v = direction_of(obj, "is_orthogonal_to")
        denom = self.norm * v.norm
        if denom == 0.0:
            return True
        return tolerance.negligible_ratio(self.dot(v) / denom)

    def projection_to(self, obj) -> "Vector":
        """orthogonal projection onto a vector or a line's direction"""
        v = direction_of(obj, "projection_to").convert_to(self._frame)
        vv = v.dot(v)
        if vv == 0.0:
            raise degenerate("projection onto a zero vector")
        return v.scale(self.dot(v) / vv)

    def ortho_vector(self) -> "Vector":
        """some vector orthogonal to this one, of the same length"""
        x, y, z = abs(self._x), abs(self._y), abs(self._z)
        if x <= y and x <= z:
            v = Vector(0.0, self._z, -self._y, self._frame)
        elif y <= z:
            v = Vector(-self._z, 0.0, self._x, self._frame)
        else:
            v = Vector(self._y, -self._x, 0.0, self._frame)
        n = v.norm
        if n == 0.0:
            return v
        return v.scale(self.norm / n)

    ## rigid transforms

    def translate(self, vector) -> "Vector":
        """free vectors are unchanged by translation"""
        return self.copy()

    def rotate(self, rotation, pivot=None) -> "Vector":
        """rotate by ``rotation``; the pivot does not affect a free vector"""
        r = rotation.to_rotation_matrix(self._frame)
        return Vector(*r.mul(self.xyz()), self._frame)

    def reflect_in(self, obj) -> "Vector":
        """reflect the direction in a point (reverses it), a line, or a
        plane"""
        from analytic3d.linear import Line
        from analytic3d.plane import Plane
        from analytic3d.point import Point

        if isinstance(obj, Point):
            return self.neg()
        if isinstance(obj, Line):
            return self.projection_to(obj).scale(2.0).sub(self)
        if isinstance(obj, Plane):
            return self.sub(self.projection_to(obj.normal).scale(2.0))
        raise unsupported("reflect_in", obj)

    ## equality

    def equals(self, other: "Vector") -> bool:
        if not isinstance(other, Vector):
            return False
        d = self.sub(other).norm
        return tolerance.negligible(d, max(self.norm, other.norm))

    def __eq__(self, other):
        if not isinstance(other, Vector):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self):
        if self._frame is GLOBAL_FRAME:
            return f"Vector({self._x}, {self._y}, {self._z})"
        return f"Vector({self._x}, {self._y}, {self._z}, {self._frame!r})"

    def to_string(self, frame=None) -> str:
        v = self.coords_in(frame)
        return "Vector: ({:10.5g}, {:10.5g}, {:10.5g})".format(*v)

    def __str__(self):
        return self.to_string()


def _as_vector(v, operation) -> Vector:
    if not isinstance(v, Vector):
        raise unsupported(operation, v)
    return v


def direction_of(obj, operation="operation") -> Vector:
    """direction vector of a vector or linear primitive"""
    if isinstance(obj, Vector):
        return obj
    direction = getattr(obj, "direction", None)
    if isinstance(direction, Vector):
        return direction
    raise unsupported(operation, obj)


__all__ = ["Vector", "direction_of"]
