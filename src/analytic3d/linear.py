"""Linear primitives: infinite lines, rays and segments.

All three are parametrized as ``P(t) = P0 + t*D`` and differ only in the
domain of ``t``:

=========  ==============
Line       (-inf, inf)
Ray        [0, inf)
Segment    [0, 1]
=========  ==============

Distances between any two of them go through one closest point routine,
``closest_params()``, after Dan Sunday
(http://geomalgorithms.com/a07-_distance.html), generalized to these
domains.  Parallel pairs are handled before the general routine:
unbounded pairs use the perpendicular offset, bounded pairs the
distances from their end points.  When the directions are well apart
and the common perpendicular of the two supporting lines falls inside
both domains the exact line-line distance is returned; otherwise the
bounded solve is checked against the end point distances.
"""

from __future__ import annotations

import logging
from math import inf, pi, sqrt
from typing import List, Sequence, Tuple

from analytic3d import tolerance
from analytic3d.errors import degenerate, unsupported
from analytic3d.point import (LINE_DOMAIN, RAY_DOMAIN, SEGMENT_DOMAIN, Point,
                              along, dist3, foot_param, mag3)
from analytic3d.result import NOTHING, GeometryResult, ResultKind, point_result, shape_result
from analytic3d.vector import Vector

logger = logging.getLogger(__name__)

Domain = Tuple[float, float]


def _dot(a, b):
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def _cross(a, b):
    return [a[1] * b[2] - a[2] * b[1],
            a[2] * b[0] - a[0] * b[2],
            a[0] * b[1] - a[1] * b[0]]


def _clamp(x: float, domain: Domain) -> float:
    return min(max(x, domain[0]), domain[1])


def closest_params(p0: Sequence[float], u: Sequence[float], sdom: Domain,
                   q0: Sequence[float], v: Sequence[float], tdom: Domain):
    """Closest point of approach between ``p0 + s*u`` (s in ``sdom``) and
    ``q0 + t*v`` (t in ``tdom``).

    Returns ``(sc, tc, distance)``.
    """
    w = [p0[0] - q0[0], p0[1] - q0[1], p0[2] - q0[2]]
    a = _dot(u, u)
    b = _dot(u, v)
    c = _dot(v, v)
    d = _dot(u, w)
    e = _dot(v, w)
    # |u x v|^2 equals a*c - b*b without the cancellation
    uxv = _cross(u, v)
    DD = _dot(uxv, uxv)

    if _parallel(a, c, DD):
        # parallel: fix s at the start of the first primitive, the t
        # clamp below moves it back onto the overlap when needed
        logger.debug("closest_params: parallel directions, DD=%g", DD)
        sc = 0.0
        tc = e / c if c > 0.0 else 0.0
    else:
        # closest points on the infinite lines
        sc = (b * e - c * d) / DD
        tc = (a * e - b * d) / DD
        if sc < sdom[0] or sc > sdom[1]:
            # s edge is visible, recompute t for that edge
            sc = _clamp(sc, sdom)
            tc = (e + b * sc) / c

    if tc < tdom[0] or tc > tdom[1]:
        # t edge is visible, recompute s for that edge
        tc = _clamp(tc, tdom)
        sc = _clamp((b * tc - d) / a, sdom) if a > 0.0 else 0.0

    sc = 0.0 if abs(sc) < tolerance.SMALL else sc
    tc = 0.0 if abs(tc) < tolerance.SMALL else tc

    dP = [w[i] + sc * u[i] - tc * v[i] for i in range(3)]
    return sc, tc, mag3(dP)


def _parallel(a: float, c: float, DD: float) -> bool:
    """directions parallel by the same relative test as
    ``Vector.is_parallel_to``"""
    if a == 0.0 or c == 0.0 or DD <= 0.0:
        return True
    return tolerance.negligible_ratio(sqrt(DD / (a * c)))


def _in_domain(t: float, domain: Domain) -> bool:
    return domain[0] <= t <= domain[1]


def _bound_points(p0, d, domain) -> List[List[float]]:
    """points at the finite ends of a parameter domain"""
    return [along(p0, d, t) for t in domain if t not in (inf, -inf)]


def linear_distance(first, second) -> float:
    """shortest distance between two linear primitives, computed in the
    frame of ``first``"""
    frame = first.frame
    p0, u, sdom = first._param_in(frame)
    q0, v, tdom = second._param_in(frame)
    uxv = _cross(u, v)
    nu = mag3(u)
    nv = mag3(v)

    # zero-length segments behave as points
    if nu == 0.0:
        return Point(*p0, frame).distance_to(second)
    if nv == 0.0:
        return Point(*q0, frame).distance_to(first)

    if tolerance.negligible_ratio(mag3(uxv) / (nu * nv)):
        ends = [(p, q0, v, tdom) for p in _bound_points(p0, u, sdom)] + \
               [(q, p0, u, sdom) for q in _bound_points(q0, v, tdom)]
        if not ends:
            # two unbounded parallel lines: perpendicular offset
            return dist3(q0, along(p0, u, foot_param(q0, p0, u)))
        return min(dist3(p, along(o, dd, foot_param(p, o, dd, dom)))
                   for p, o, dd, dom in ends)

    # common perpendicular of the supporting lines, trusted only while
    # the line-line solve is well conditioned
    nn = _dot(uxv, uxv)
    if nn > tolerance.SMALL * nu * nu * nv * nv:
        sc, tc, _ = closest_params(p0, u, LINE_DOMAIN, q0, v, LINE_DOMAIN)
        if _in_domain(sc, sdom) and _in_domain(tc, tdom):
            w = [q0[i] - p0[i] for i in range(3)]
            return abs(_dot(w, uxv)) / sqrt(nn)
    # the minimum is at the bounded solve or at an end point
    best = closest_params(p0, u, sdom, q0, v, tdom)[2]
    for p in _bound_points(p0, u, sdom):
        best = min(best, dist3(p, along(q0, v, foot_param(p, q0, v, tdom))))
    for q in _bound_points(q0, v, tdom):
        best = min(best, dist3(q, along(p0, u, foot_param(q, p0, u, sdom))))
    return best


class _Linear:
    """shared machinery of Line, Ray and Segment"""

    _domain: Domain = LINE_DOMAIN

    @property
    def frame(self):
        return self._point.frame

    def _param_in(self, frame):
        """(start, direction, domain) as triples in ``frame``"""
        return (self._point.coords_in(frame), self._direction.coords_in(frame),
                self._domain)

    def _at(self, t: float) -> Point:
        p0, d, _ = self._param_in(self.frame)
        return Point(*along(p0, d, t), self.frame)

    ## distance

    def distance_to(self, obj) -> float:
        from analytic3d.plane import Plane
        from analytic3d.volume import Sphere

        if isinstance(obj, Point):
            return obj.distance_to(self)
        if isinstance(obj, _Linear):
            return linear_distance(self, obj)
        if isinstance(obj, Plane):
            if self.intersection_with(obj):
                return 0.0
            p0, d, domain = self._param_in(self.frame)
            # no crossing: a line is parallel, so any point will do
            ends = _bound_points(p0, d, domain) or [p0]
            return min(abs(obj.signed_distance_to(Point(*p, self.frame))) for p in ends)
        if isinstance(obj, Sphere):
            return max(0.0, self.distance_to(obj.center) - obj.radius)
        raise unsupported("distance_to", obj)

    def closest_points(self, other: "_Linear") -> Tuple[Point, Point]:
        """a pair of closest points, the first on this primitive"""
        if not isinstance(other, _Linear):
            raise unsupported("closest_points", other)
        frame = self.frame
        p0, u, sdom = self._param_in(frame)
        q0, v, tdom = other._param_in(frame)
        sc, tc, _ = closest_params(p0, u, sdom, q0, v, tdom)
        return Point(*along(p0, u, sc), frame), Point(*along(q0, v, tc), frame)

    ## plane crossing

    def _plane_param(self, plane):
        """classify the crossing with ``plane``: ('none'|'inside'|'point', t)"""
        n = plane.normal.normalized()
        rate = self._direction.dot(n)
        s0 = plane.signed_distance_to(self._point)
        if self._direction.is_parallel_to(plane):
            if tolerance.negligible(s0, self._point._scale()):
                return "inside", None
            return "none", None
        t = -s0 / rate
        lo, hi = self._domain
        slack = tolerance.threshold(self._point._scale()) / self._direction.norm
        if t < lo - slack or t > hi + slack:
            return "none", None
        return "point", _clamp(t, self._domain)

    def _intersect_plane(self, plane) -> GeometryResult:
        kind, t = self._plane_param(plane)
        if kind == "none":
            return NOTHING
        if kind == "inside":
            return shape_result(self.copy())
        return point_result(self._at(t))

    ## predicates

    @property
    def direction(self) -> Vector:
        return self._direction.copy()

    def is_parallel_to(self, obj) -> bool:
        return self._direction.is_parallel_to(obj)

    def is_not_parallel_to(self, obj) -> bool:
        return not self._direction.is_parallel_to(obj)

    def is_orthogonal_to(self, obj) -> bool:
        return self._direction.is_orthogonal_to(obj)

    def angle_to(self, obj) -> float:
        """angle in radians to a vector, linear primitive or plane"""
        return self._direction.angle_to(obj)

    def angle_to_deg(self, obj) -> float:
        return self.angle_to(obj) * 180.0 / pi

    def to_line(self) -> "Line":
        return Line(self._point, self._direction)

    def _project_to_plane(self, plane, rebuild) -> GeometryResult:
        if self._direction.is_parallel_to(plane.normal):
            return point_result(self._point.projection_to(plane))
        n = plane.normal
        d = self._direction.sub(self._direction.projection_to(n))
        return shape_result(rebuild(self._point.projection_to(plane), d))

    def _equal_type(self, other) -> bool:
        return type(other) is type(self)

    __hash__ = None

    def __eq__(self, other):
        if not isinstance(other, _Linear):
            return NotImplemented
        return self.equals(other)


class Line(_Linear):
    """Infinite line through ``point`` along ``direction``.  ``direction``
    may also be given as a second point."""

    _domain = LINE_DOMAIN

    def __init__(self, point: Point, direction):
        self.point = point
        self.direction = direction

    @property
    def point(self) -> Point:
        return self._point.copy()

    @point.setter
    def point(self, value: Point):
        if not isinstance(value, Point):
            raise unsupported("Line point", value)
        old = getattr(self, "_direction", None)
        self._point = value.copy()
        if old is not None:
            self._direction = old.convert_to(self._point.frame)

    @property
    def direction(self) -> Vector:
        return self._direction.copy()

    @direction.setter
    def direction(self, value):
        if isinstance(value, Point):
            value = Vector.from_points(self._point, value)
        if not isinstance(value, Vector):
            raise unsupported("Line direction", value)
        if value.norm == 0.0 or value.is_zero():
            raise degenerate("line direction must be non-zero")
        self._direction = value.convert_to(self._point.frame)

    def copy(self) -> "Line":
        return Line(self._point, self._direction)

    def convert_to(self, frame) -> "Line":
        return Line(self._point.convert_to(frame), self._direction.convert_to(frame))

    def angle_to(self, obj) -> float:
        """angle to a vector, linear primitive or plane, folded into
        [0, pi/2] since a line has no orientation"""
        a = self._direction.angle_to(obj)
        return min(a, pi - a)

    def closest_point(self, obj) -> Point:
        """point of this line closest to a point or another line"""
        if isinstance(obj, Point):
            return obj.projection_to(self)
        return self.closest_points(obj)[0]

    def is_coplanar_to(self, other: "_Linear") -> bool:
        if self.is_parallel_to(other):
            return True
        n = self._direction.cross(other.direction).normalized()
        w = Vector.from_points(self._point, other.point)
        return tolerance.negligible(w.dot(n), max(self._point._scale(), other.point._scale()))

    def intersection_with(self, obj) -> GeometryResult:
        """NONE / POINT / LINE with a plane or line; NONE / POINT / SEGMENT
        with a sphere or ellipsoid"""
        from analytic3d.plane import Plane
        from analytic3d.volume import Ellipsoid, Sphere

        if isinstance(obj, Plane):
            return self._intersect_plane(obj)
        if isinstance(obj, Line):
            if self.is_parallel_to(obj):
                if obj.point.belongs_to(self):
                    return shape_result(self.copy())
                return NOTHING
            p, q = self.closest_points(obj)
            if p.equals(q):
                return point_result(p)
            return NOTHING
        if isinstance(obj, (Sphere, Ellipsoid)):
            return obj.intersection_with(self)
        raise unsupported("intersection_with", obj)

    def projection_to(self, plane) -> GeometryResult:
        """POINT if the line is perpendicular to the plane, else LINE"""
        return self._project_to_plane(plane, Line)

    def translate(self, v: Vector) -> "Line":
        return Line(self._point.translate(v), self._direction)

    def rotate(self, rotation, pivot=None) -> "Line":
        return Line(self._point.rotate(rotation, pivot), self._direction.rotate(rotation))

    def reflect_in(self, obj) -> "Line":
        p = self._point
        return Line(p.reflect_in(obj), (p + self._direction).reflect_in(obj))

    def equals(self, other) -> bool:
        return self._equal_type(other) and self.is_parallel_to(other) and \
            other.point.belongs_to(self)

    def __repr__(self):
        return f"Line({self._point!r}, {self._direction!r})"

    def to_string(self, frame=None) -> str:
        p = self._point.coords_in(frame)
        d = self._direction.coords_in(frame)
        return "Line:\n" + \
            "Point -> ({:10.5g}, {:10.5g}, {:10.5g})\n".format(*p) + \
            "Direction -> ({:10.5g}, {:10.5g}, {:10.5g})".format(*d)

    def __str__(self):
        return self.to_string()


class Ray(_Linear):
    """Half line starting at ``point`` in the sense of ``direction``."""

    _domain = RAY_DOMAIN

    def __init__(self, point: Point, direction: Vector):
        self.point = point
        self.direction = direction

    @property
    def point(self) -> Point:
        return self._point.copy()

    @point.setter
    def point(self, value: Point):
        if not isinstance(value, Point):
            raise unsupported("Ray point", value)
        old = getattr(self, "_direction", None)
        self._point = value.copy()
        if old is not None:
            self._direction = old.convert_to(self._point.frame)

    @property
    def direction(self) -> Vector:
        return self._direction.copy()

    @direction.setter
    def direction(self, value: Vector):
        if not isinstance(value, Vector):
            raise unsupported("Ray direction", value)
        if value.norm == 0.0 or value.is_zero():
            raise degenerate("ray direction must be non-zero")
        self._direction = value.convert_to(self._point.frame)

    def copy(self) -> "Ray":
        return Ray(self._point, self._direction)

    def convert_to(self, frame) -> "Ray":
        return Ray(self._point.convert_to(frame), self._direction.convert_to(frame))

    def to_ray(self) -> "Ray":
        return self.copy()

    def intersection_with(self, obj) -> GeometryResult:
        """NONE / POINT / RAY (ray lies in the plane) with a plane;
        NONE / POINT / SEGMENT with a sphere"""
        from analytic3d.plane import Plane
        from analytic3d.volume import Ellipsoid, Sphere

        if isinstance(obj, Plane):
            return self._intersect_plane(obj)
        if isinstance(obj, (Sphere, Ellipsoid)):
            return obj.intersection_with(self)
        raise unsupported("intersection_with", obj)

    def projection_to(self, obj) -> GeometryResult:
        """POINT or RAY on a line or plane"""
        from analytic3d.plane import Plane

        if isinstance(obj, Line):
            if self._direction.is_orthogonal_to(obj):
                return point_result(self._point.projection_to(obj))
            return shape_result(Ray(self._point.projection_to(obj),
                                    self._direction.projection_to(obj)))
        if isinstance(obj, Plane):
            return self._project_to_plane(obj, Ray)
        raise unsupported("projection_to", obj)

    def translate(self, v: Vector) -> "Ray":
        return Ray(self._point.translate(v), self._direction)

    def rotate(self, rotation, pivot=None) -> "Ray":
        return Ray(self._point.rotate(rotation, pivot), self._direction.rotate(rotation))

    def reflect_in(self, obj) -> "Ray":
        p = self._point
        q = p.reflect_in(obj)
        return Ray(q, Vector.from_points(q, (p + self._direction).reflect_in(obj)))

    def equals(self, other) -> bool:
        return self._equal_type(other) and self._point.equals(other.point) and \
            self.is_parallel_to(other) and self._direction.dot(other.direction) > 0.0

    def __repr__(self):
        return f"Ray({self._point!r}, {self._direction!r})"

    def to_string(self, frame=None) -> str:
        p = self._point.coords_in(frame)
        d = self._direction.coords_in(frame)
        return "Ray:\n" + \
            "Point -> ({:10.5g}, {:10.5g}, {:10.5g})\n".format(*p) + \
            "Direction -> ({:10.5g}, {:10.5g}, {:10.5g})".format(*d)

    def __str__(self):
        return self.to_string()


class Segment(_Linear):
    """Line segment between ``p1`` and ``p2``.  ``p2`` is stored in the
    frame of ``p1``.  Equality ignores end point order."""

    _domain = SEGMENT_DOMAIN

    def __init__(self, p1: Point, p2: Point):
        if not isinstance(p1, Point) or not isinstance(p2, Point):
            raise TypeError("Segment needs two points")
        self._p1 = p1.copy()
        self._p2 = p2.convert_to(p1.frame)

    ## _Linear uses _point and _direction
    @property
    def _point(self) -> Point:
        return self._p1

    @property
    def _direction(self) -> Vector:
        return Vector.from_points(self._p1, self._p2)

    @property
    def p1(self) -> Point:
        return self._p1.copy()

    @p1.setter
    def p1(self, value: Point):
        if not isinstance(value, Point):
            raise unsupported("Segment p1", value)
        self._p1 = value.copy()
        self._p2 = self._p2.convert_to(self._p1.frame)

    @property
    def p2(self) -> Point:
        return self._p2.copy()

    @p2.setter
    def p2(self, value: Point):
        if not isinstance(value, Point):
            raise unsupported("Segment p2", value)
        self._p2 = value.convert_to(self._p1.frame)

    def _param_in(self, frame):
        a = self._p1.coords_in(frame)
        b = self._p2.coords_in(frame)
        return a, [b[0] - a[0], b[1] - a[1], b[2] - a[2]], self._domain

    def copy(self) -> "Segment":
        return Segment(self._p1, self._p2)

    def convert_to(self, frame) -> "Segment":
        return Segment(self._p1.convert_to(frame), self._p2.convert_to(frame))

    @property
    def length(self) -> float:
        return self._p1.distance_to(self._p2)

    @property
    def center(self) -> Point:
        a = self._p1.xyz()
        b = self._p2.coords_in(self._p1.frame)
        return Point((a[0] + b[0]) / 2.0, (a[1] + b[1]) / 2.0, (a[2] + b[2]) / 2.0, self._p1.frame)

    def to_vector(self) -> Vector:
        return self._direction

    def to_ray(self) -> Ray:
        return Ray(self._p1, self._direction)

    def to_line(self) -> Line:
        return Line(self._p1, self._p2)

    def _is_zero_length(self) -> bool:
        return tolerance.negligible(self.length, self._p1._scale())

    def distance_to(self, obj) -> float:
        from analytic3d.plane import Plane

        if self._is_zero_length():
            return self._p1.distance_to(obj)
        if isinstance(obj, Plane):
            if self.intersection_with(obj):
                return 0.0
            return min(self._p1.distance_to(obj), self._p2.distance_to(obj))
        return super().distance_to(obj)

    def intersection_with(self, obj) -> GeometryResult:
        """NONE / POINT / SEGMENT with a plane or sphere"""
        from analytic3d.plane import Plane
        from analytic3d.volume import Ellipsoid, Sphere

        if isinstance(obj, Plane):
            if self._is_zero_length():
                return point_result(self.p1) if self._p1.belongs_to(obj) else NOTHING
            res = self.to_ray().intersection_with(obj)
            if res.is_none:
                return NOTHING
            if res.kind is ResultKind.RAY:
                return shape_result(self.copy())
            # plane is ahead of p1; make sure it is not past p2
            back = Ray(self._p2, Vector.from_points(self._p2, self._p1))
            res2 = back.intersection_with(obj)
            if res2.is_none:
                return NOTHING
            return res2
        if isinstance(obj, (Sphere, Ellipsoid)):
            return obj.intersection_with(self)
        raise unsupported("intersection_with", obj)

    def projection_to(self, obj) -> GeometryResult:
        """POINT or SEGMENT on a line or plane"""
        from analytic3d.plane import Plane

        if isinstance(obj, Line):
            if self._direction.is_orthogonal_to(obj):
                return point_result(self._p1.projection_to(obj))
            return shape_result(Segment(self._p1.projection_to(obj), self._p2.projection_to(obj)))
        if isinstance(obj, Plane):
            if self._direction.is_parallel_to(obj.normal):
                return point_result(self._p1.projection_to(obj))
            return shape_result(Segment(self._p1.projection_to(obj), self._p2.projection_to(obj)))
        raise unsupported("projection_to", obj)

    def translate(self, v: Vector) -> "Segment":
        return Segment(self._p1.translate(v), self._p2.translate(v))

    def rotate(self, rotation, pivot=None) -> "Segment":
        return Segment(self._p1.rotate(rotation, pivot), self._p2.rotate(rotation, pivot))

    def reflect_in(self, obj) -> "Segment":
        return Segment(self._p1.reflect_in(obj), self._p2.reflect_in(obj))

    def equals(self, other) -> bool:
        if not self._equal_type(other):
            return False
        return (self._p1.equals(other.p1) and self._p2.equals(other.p2)) or \
            (self._p1.equals(other.p2) and self._p2.equals(other.p1))

    def __repr__(self):
        return f"Segment({self._p1!r}, {self._p2!r})"

    def to_string(self, frame=None) -> str:
        p1 = self._p1.coords_in(frame)
        p2 = self._p2.coords_in(frame)
        return "Segment:\n" + \
            "Point 1 -> ({:10.5g}, {:10.5g}, {:10.5g})\n".format(*p1) + \
            "Point 2 -> ({:10.5g}, {:10.5g}, {:10.5g})".format(*p2)

    def __str__(self):
        return self.to_string()


__all__ = ["Line", "Ray", "Segment", "closest_params", "linear_distance"]
