"""3D points attached to a coordinate frame.

Points are immutable values.  ``distance_to``, ``projection_to`` and
``belongs_to`` accept any primitive of the library; the argument is
expressed in this point's frame before any arithmetic.
"""

from __future__ import annotations

from math import inf, sqrt
from typing import List, Sequence, Tuple

from analytic3d import tolerance
from analytic3d.errors import degenerate, unsupported
from analytic3d.frame import GLOBAL_FRAME, resolve
from analytic3d.vector import Vector
from analytic3d.xform import isgoodnum


## parameter domains of the linear primitives
LINE_DOMAIN = (-inf, inf)
RAY_DOMAIN = (0.0, inf)
SEGMENT_DOMAIN = (0.0, 1.0)


def foot_param(p: Sequence[float], p0: Sequence[float], d: Sequence[float],
               domain: Tuple[float, float] = LINE_DOMAIN) -> float:
    """parameter ``t`` of the point of ``p0 + t*d`` (t clamped into
    ``domain``) closest to ``p``"""
    dd = d[0] * d[0] + d[1] * d[1] + d[2] * d[2]
    if dd == 0.0:
        return 0.0
    t = ((p[0] - p0[0]) * d[0] + (p[1] - p0[1]) * d[1] + (p[2] - p0[2]) * d[2]) / dd
    return min(max(t, domain[0]), domain[1])


def along(p0: Sequence[float], d: Sequence[float], t: float) -> List[float]:
    return [p0[0] + t * d[0], p0[1] + t * d[1], p0[2] + t * d[2]]


def dist3(a: Sequence[float], b: Sequence[float]) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    dz = a[2] - b[2]
    return sqrt(dx * dx + dy * dy + dz * dz)


def mag3(a: Sequence[float]) -> float:
    return sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


class Point:
    """Point with x, y, z coordinates in ``frame``."""

    __slots__ = ("_x", "_y", "_z", "_frame")

    def __init__(self, x=0.0, y=0.0, z=0.0, frame=None):
        for c in (x, y, z):
            if not isgoodnum(c):
                raise ValueError(f"bad point coordinate: {c!r}")
        self._x = float(x)
        self._y = float(y)
        self._z = float(z)
        self._frame = resolve(frame)

    @classmethod
    def _from_global(cls, xyz, frame) -> "Point":
        return cls(*frame.from_global_point(xyz), frame)

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
        return self._frame.to_global_point(self.xyz())

    def coords_in(self, frame) -> List[float]:
        return self._frame.convert_point(self.xyz(), resolve(frame))

    def copy(self) -> "Point":
        return Point(self._x, self._y, self._z, self._frame)

    def convert_to(self, frame) -> "Point":
        return Point(*self.coords_in(frame), resolve(frame))

    def to_vector(self) -> Vector:
        """radius vector from the origin of the point's frame"""
        return Vector(self._x, self._y, self._z, self._frame)

    def _scale(self) -> float:
        return mag3(self.global_xyz())

    ## arithmetic sugar

    def add(self, v: Vector) -> "Point":
        d = v.coords_in(self._frame)
        return Point(self._x + d[0], self._y + d[1], self._z + d[2], self._frame)

    def __add__(self, other):
        if isinstance(other, Vector):
            return self.add(other)
        return NotImplemented

    def __sub__(self, other):
        if isinstance(other, Point):
            return Vector.from_points(other, self)
        if isinstance(other, Vector):
            return self.add(other.neg())
        return NotImplemented

    ## distance

    def distance_to(self, obj) -> float:
        """shortest distance to any primitive"""
        from analytic3d.linear import Line, Ray, Segment
        from analytic3d.plane import Plane
        from analytic3d.volume import Box, Sphere

        p = self.xyz()
        if isinstance(obj, Point):
            return dist3(p, obj.coords_in(self._frame))
        if isinstance(obj, (Line, Ray, Segment)):
            p0, d, domain = obj._param_in(self._frame)
            return dist3(p, along(p0, d, foot_param(p, p0, d, domain)))
        if isinstance(obj, Plane):
            return abs(obj.signed_distance_to(self))
        if isinstance(obj, Sphere):
            return max(0.0, dist3(p, obj.center.coords_in(self._frame)) - obj.radius)
        if isinstance(obj, Box):
            return obj.distance_to(self)
        raise unsupported("distance_to", obj)

    ## projection

    def projection_to(self, obj) -> "Point":
        """orthogonal projection onto a line, ray, segment, plane or
        sphere surface; for rays and segments the closest point"""
        from analytic3d.linear import Line, Ray, Segment
        from analytic3d.plane import Plane
        from analytic3d.volume import Sphere

        p = self.xyz()
        if isinstance(obj, (Line, Ray, Segment)):
            p0, d, domain = obj._param_in(self._frame)
            return Point(*along(p0, d, foot_param(p, p0, d, domain)), self._frame)
        if isinstance(obj, Plane):
            n = obj.normal.coords_in(self._frame)
            s = obj.signed_distance_to(self) / mag3(n)
            return Point(p[0] - s * n[0], p[1] - s * n[1], p[2] - s * n[2], self._frame)
        if isinstance(obj, Sphere):
            c = obj.center.coords_in(self._frame)
            v = [p[0] - c[0], p[1] - c[1], p[2] - c[2]]
            m = mag3(v)
            if m == 0.0:
                raise degenerate("projection of a sphere's center onto its surface is undefined")
            k = obj.radius / m
            return Point(c[0] + k * v[0], c[1] + k * v[1], c[2] + k * v[2], self._frame)
        raise unsupported("projection_to", obj)

    ## containment

    def belongs_to(self, obj) -> bool:
        """does the point lie on ``obj`` within tolerance; for solids,
        on their surface"""
        from analytic3d.curves import Circle
        from analytic3d.volume import Box, Ellipsoid, Sphere

        if isinstance(obj, Sphere):
            c = obj.center.coords_in(self._frame)
            return tolerance.close(dist3(self.xyz(), c), obj.radius, max(self._scale(), obj.radius))
        if isinstance(obj, (Box, Ellipsoid, Circle)):
            return obj.on_boundary(self)
        return tolerance.negligible(self.distance_to(obj), self._scale())

    def is_inside(self, obj) -> bool:
        """is the point inside (or on the boundary of) a solid"""
        from analytic3d.volume import Box, Ellipsoid, Sphere

        if isinstance(obj, (Box, Ellipsoid, Sphere)):
            return obj.contains(self)
        raise unsupported("is_inside", obj)

    ## rigid transforms

    def translate(self, v: Vector) -> "Point":
        return self.add(v)

    def rotate(self, rotation, pivot=None) -> "Point":
        """rotate about the origin of the global frame, or about ``pivot``"""
        r = rotation.to_rotation_matrix()
        g = self.global_xyz()
        c = [0.0, 0.0, 0.0] if pivot is None else pivot.global_xyz()
        q = r.mul([g[0] - c[0], g[1] - c[1], g[2] - c[2]])
        return Point._from_global([q[0] + c[0], q[1] + c[1], q[2] + c[2]], self._frame)

    def reflect_in(self, obj) -> "Point":
        """mirror image in a point, line or plane: 2*projection - self"""
        from analytic3d.linear import Line
        from analytic3d.plane import Plane

        if isinstance(obj, Point):
            q = obj.coords_in(self._frame)
        elif isinstance(obj, (Line, Plane)):
            q = self.projection_to(obj).xyz()
        else:
            raise unsupported("reflect_in", obj)
        return Point(2.0 * q[0] - self._x, 2.0 * q[1] - self._y, 2.0 * q[2] - self._z, self._frame)

    ## equality

    def equals(self, other: "Point") -> bool:
        if not isinstance(other, Point):
            return False
        d = dist3(self.xyz(), other.coords_in(self._frame))
        return tolerance.negligible(d, max(self._scale(), other._scale()))

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self):
        if self._frame is GLOBAL_FRAME:
            return f"Point({self._x}, {self._y}, {self._z})"
        return f"Point({self._x}, {self._y}, {self._z}, {self._frame!r})"

    def to_string(self, frame=None) -> str:
        return "Point: ({:10.5g}, {:10.5g}, {:10.5g})".format(*self.coords_in(frame))

    def __str__(self):
        return self.to_string()


__all__ = [
    "Point",
    "LINE_DOMAIN",
    "RAY_DOMAIN",
    "SEGMENT_DOMAIN",
    "foot_param",
    "along",
    "dist3",
    "mag3",
]
