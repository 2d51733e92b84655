"""Bounded solids: oriented boxes, spheres and ellipsoids.

Box corners are numbered ``p1`` .. ``p8`` by the signs of the half
extents along the box axes ``v1``, ``v2``, ``v3``:

======  ====  ====  ====
corner   v1    v2    v3
======  ====  ====  ====
p1        -     -     -
p2        +     -     -
p3        +     +     -
p4        -     +     -
p5        -     -     +
p6        +     -     +
p7        +     +     +
p8        -     +     +
======  ====  ====  ====

so ``(p1, p2, p3)`` spans the bottom face, ``(p5, p6, p7)`` the top,
``(p1, p2, p5)`` the -v2 face, ``(p2, p3, p6)`` the +v1 face,
``(p3, p4, p7)`` the +v2 face and ``(p1, p4, p8)`` the -v1 face.

``bounding_box(frame)`` returns the box aligned with the axes of
``frame`` that exactly contains the solid.  For an ellipsoid with
semi-axis vectors ``a_i`` the half extent along the unit axis ``e_k`` is
the support function ``sqrt(sum_i (a_i . e_k)**2)``.

Tangency tests compute the chord or section radius with ``mpmath`` at
extended precision, since ``r*r - h*h`` cancels badly near tangency.
"""

from __future__ import annotations

import logging
from math import atan2, cos, pi, sin, sqrt
from typing import List

import mpmath as mpm

from analytic3d import tolerance
from analytic3d.curves import Circle, Ellipse
from analytic3d.errors import degenerate, unsupported
from analytic3d.frame import resolve
from analytic3d.point import Point, along, dist3, foot_param, mag3
from analytic3d.result import (NOTHING, GeometryResult, ResultKind, point_result,
                               shape_result)
from analytic3d.rotation import Rotation
from analytic3d.vector import Vector
from analytic3d.xform import Matrix, dot3, isgoodnum

logger = logging.getLogger(__name__)

_CORNER_SIGNS = [(-1, -1, -1), (1, -1, -1), (1, 1, -1), (-1, 1, -1),
                 (-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1)]

## corner index pairs of the twelve box edges
_EDGES = [(0, 1), (1, 2), (2, 3), (3, 0),
          (4, 5), (5, 6), (6, 7), (7, 4),
          (0, 4), (1, 5), (2, 6), (3, 7)]

## three corners naming each face: bottom, top, -v2, +v1, +v2, -v1
_FACES = [(0, 1, 2), (7, 6, 5), (0, 1, 4), (1, 2, 5), (2, 3, 6), (0, 3, 7)]

_EXTRA_DPS = 30


def _half_chord(r: float, h: float) -> float:
    """sqrt(r*r - h*h), evaluated at extended precision"""
    with mpm.workdps(_EXTRA_DPS):
        q = mpm.mpf(r) ** 2 - mpm.mpf(h) ** 2
        if q <= 0:
            return 0.0
        return float(mpm.sqrt(q))


def _chord_result(linear, t1: float, t2: float) -> GeometryResult:
    """clip the chord ``[t1, t2]`` of a line parameter to the domain of
    ``linear``"""
    from analytic3d.linear import Segment

    lo, hi = linear._domain
    p0, d, _ = linear._param_in(linear.frame)
    slack = tolerance.threshold(linear._point._scale()) / mag3(d)
    if t2 < lo - slack or t1 > hi + slack:
        return NOTHING
    a = max(t1, lo)
    b = min(t2, hi)
    if b - a <= slack:
        return point_result(Point(*along(p0, d, min(max((a + b) / 2.0, lo), hi)), linear.frame))
    return shape_result(Segment(Point(*along(p0, d, a), linear.frame),
                                Point(*along(p0, d, b), linear.frame)))


def _frame_rotation(frame) -> Rotation:
    """rotation taking the global axes onto the axes of ``frame``"""
    return Rotation(resolve(frame).axes)


class Sphere:
    """Sphere (and the ball it bounds) of ``radius`` about ``center``."""

    def __init__(self, center: Point, radius: float):
        if not isgoodnum(radius) or radius <= 0.0:
            raise degenerate("sphere radius must be positive")
        self._center = center.copy()
        self._r = float(radius)

    @property
    def center(self) -> Point:
        return self._center.copy()

    @center.setter
    def center(self, value: Point):
        self._center = value.copy()

    @property
    def radius(self) -> float:
        return self._r

    @property
    def frame(self):
        return self._center.frame

    @property
    def area(self) -> float:
        return 4.0 * pi * self._r * self._r

    @property
    def volume(self) -> float:
        return 4.0 / 3.0 * pi * self._r ** 3

    def copy(self) -> "Sphere":
        return Sphere(self._center, self._r)

    def _scale(self) -> float:
        return max(self._center._scale(), self._r)

    def contains(self, p: Point) -> bool:
        d = p.distance_to(self._center)
        return d <= self._r + tolerance.threshold(self._scale())

    def on_boundary(self, p: Point) -> bool:
        return p.belongs_to(self)

    def bounding_box(self, frame=None) -> "Box":
        target = resolve(frame)
        size = 2.0 * self._r
        return Box(self._center.convert_to(target), size, size, size, _frame_rotation(target))

    ## distance

    def distance_to(self, obj) -> float:
        from analytic3d.linear import Line, Ray, Segment
        from analytic3d.plane import Plane

        if isinstance(obj, Point):
            return obj.distance_to(self)
        if isinstance(obj, (Line, Ray, Segment, Plane)):
            return obj.distance_to(self)
        if isinstance(obj, Sphere):
            return max(0.0, self._center.distance_to(obj.center) - self._r - obj.radius)
        raise unsupported("distance_to", obj)

    ## intersection

    def intersection_with(self, obj) -> GeometryResult:
        """NONE / POINT / SEGMENT with a linear primitive, NONE / POINT /
        CIRCLE with a plane, NONE / POINT / CIRCLE / SPHERE with a sphere"""
        from analytic3d.linear import _Linear
        from analytic3d.plane import Plane

        if isinstance(obj, _Linear):
            return self._intersect_linear(obj)
        if isinstance(obj, Plane):
            return self._intersect_plane(obj)
        if isinstance(obj, Sphere):
            return self._intersect_sphere(obj)
        raise unsupported("intersection_with", obj)

    def _intersect_linear(self, linear) -> GeometryResult:
        frame = linear.frame
        p0, d, _ = linear._param_in(frame)
        c = self._center.coords_in(frame)
        tf = foot_param(c, p0, d)
        h = dist3(c, along(p0, d, tf))
        thr = tolerance.threshold(self._scale())
        if h > self._r + thr:
            return NOTHING
        if abs(h - self._r) <= thr:
            # tangent: a single touching point at the foot
            return _chord_result(linear, tf, tf)
        dt = _half_chord(self._r, h) / mag3(d)
        return _chord_result(linear, tf - dt, tf + dt)

    def _intersect_plane(self, plane) -> GeometryResult:
        h = plane.signed_distance_to(self._center)
        thr = tolerance.threshold(self._scale())
        if abs(h) > self._r + thr:
            return NOTHING
        n = plane.normal.convert_to(self.frame).normalized()
        foot = self._center.add(n.scale(-h))
        if abs(abs(h) - self._r) <= thr:
            return point_result(foot)
        return shape_result(Circle(foot, _half_chord(self._r, h), n))

    def _intersect_sphere(self, other: "Sphere") -> GeometryResult:
        r1, r2 = self._r, other.radius
        d = self._center.distance_to(other.center)
        thr = tolerance.threshold(max(self._scale(), other._scale()))
        if d <= thr:
            if abs(r1 - r2) <= thr:
                return shape_result(self.copy())
            return NOTHING
        if d > r1 + r2 + thr or d < abs(r1 - r2) - thr:
            return NOTHING
        u = Vector.from_points(self._center, other.center).normalized()
        x = (d * d + r1 * r1 - r2 * r2) / (2.0 * d)
        foot = self._center.add(u.scale(x))
        if abs(d - (r1 + r2)) <= thr or abs(d - abs(r1 - r2)) <= thr:
            return point_result(foot)
        return shape_result(Circle(foot, _half_chord(r1, x), u))

    def projection_to(self, plane) -> GeometryResult:
        """orthogonal projection onto a plane, always a CIRCLE"""
        return shape_result(Circle(self._center.projection_to(plane), self._r, plane.normal))

    ## rigid transforms

    def translate(self, v: Vector) -> "Sphere":
        return Sphere(self._center.translate(v), self._r)

    def rotate(self, rotation, pivot=None) -> "Sphere":
        return Sphere(self._center.rotate(rotation, pivot), self._r)

    def reflect_in(self, obj) -> "Sphere":
        return Sphere(self._center.reflect_in(obj), self._r)

    def equals(self, other) -> bool:
        if not isinstance(other, Sphere):
            return False
        return self._center.equals(other.center) and \
            tolerance.close(self._r, other.radius)

    def __eq__(self, other):
        if not isinstance(other, Sphere):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self):
        return f"Sphere({self._center!r}, {self._r})"

    def to_string(self, frame=None) -> str:
        c = self._center.coords_in(frame)
        return "Sphere:\n" + \
            "Center -> ({:10.5g}, {:10.5g}, {:10.5g})\n".format(*c) + \
            "Radius -> {:10.5g}".format(self._r)

    def __str__(self):
        return self.to_string()


class Ellipsoid:
    """Ellipsoid ``center + M*u, |u| <= 1`` where the columns of ``M`` are
    the semi-axis vectors ``v1``, ``v2``, ``v3``.  The vectors need not be
    orthogonal, only linearly independent."""

    def __init__(self, center: Point, v1: Vector, v2: Vector, v3: Vector):
        frame = center.frame
        vs = [v.convert_to(frame) for v in (v1, v2, v3)]
        if any(v.norm == 0.0 or v.is_zero() for v in vs):
            raise degenerate("ellipsoid semi-axes must be non-zero")
        triple = vs[0].dot(vs[1].cross(vs[2]))
        if tolerance.negligible_ratio(triple / (vs[0].norm * vs[1].norm * vs[2].norm)):
            raise degenerate("ellipsoid semi-axes must be linearly independent")
        self._center = center.copy()
        self._v = vs

    @property
    def center(self) -> Point:
        return self._center.copy()

    @property
    def frame(self):
        return self._center.frame

    @property
    def v1(self) -> Vector:
        return self._v[0].copy()

    @property
    def v2(self) -> Vector:
        return self._v[1].copy()

    @property
    def v3(self) -> Vector:
        return self._v[2].copy()

    @property
    def a(self) -> float:
        return self._v[0].norm

    @property
    def b(self) -> float:
        return self._v[1].norm

    @property
    def c(self) -> float:
        return self._v[2].norm

    def _matrix(self) -> Matrix:
        return Matrix.from_columns(*(v.xyz() for v in self._v))

    @property
    def volume(self) -> float:
        return 4.0 / 3.0 * pi * abs(self._matrix().det())

    def copy(self) -> "Ellipsoid":
        return Ellipsoid(self._center, *self._v)

    def _scale(self) -> float:
        return max(self._center._scale(), self.a, self.b, self.c)

    def _unit_coords(self, p: Point) -> List[float]:
        """pre-image of ``p`` in the unit-sphere space"""
        q = p.coords_in(self.frame)
        c = self._center.xyz()
        return self._matrix().inverse().mul([q[0] - c[0], q[1] - c[1], q[2] - c[2]])

    def _radial_gap(self, p: Point) -> float:
        """(|u| - 1) scaled back to a length along the smallest axis"""
        return (mag3(self._unit_coords(p)) - 1.0) * min(self.a, self.b, self.c)

    def contains(self, p: Point) -> bool:
        return self._radial_gap(p) <= tolerance.threshold(self._scale())

    def on_boundary(self, p: Point) -> bool:
        return tolerance.negligible(self._radial_gap(p), self._scale())

    def bounding_box(self, frame=None) -> "Box":
        target = resolve(frame)
        axes = [v.coords_in(target) for v in self._v]
        half = [sqrt(sum(a[k] * a[k] for a in axes)) for k in range(3)]
        return Box(self._center.convert_to(target), 2.0 * half[0], 2.0 * half[1],
                   2.0 * half[2], _frame_rotation(target))

    ## intersection

    def intersection_with(self, obj) -> GeometryResult:
        """NONE / POINT / SEGMENT with a linear primitive, NONE / POINT /
        ELLIPSE with a plane"""
        from analytic3d.linear import _Linear
        from analytic3d.plane import Plane

        if isinstance(obj, _Linear):
            return self._intersect_linear(obj)
        if isinstance(obj, Plane):
            return self._intersect_plane(obj)
        raise unsupported("intersection_with", obj)

    def _intersect_linear(self, linear) -> GeometryResult:
        # affine maps keep line parameters, so solve in unit-sphere space
        minv = self._matrix().inverse()
        p0, d, _ = linear._param_in(self.frame)
        c = self._center.xyz()
        q0 = minv.mul([p0[0] - c[0], p0[1] - c[1], p0[2] - c[2]])
        e = minv.mul(d)
        tf = foot_param([0.0, 0.0, 0.0], q0, e)
        h = mag3(along(q0, e, tf))
        gap = (h - 1.0) * min(self.a, self.b, self.c)
        thr = tolerance.threshold(self._scale())
        if gap > thr:
            return NOTHING
        if abs(gap) <= thr:
            return _chord_result(linear, tf, tf)
        dt = _half_chord(1.0, h) / mag3(e)
        # parameters are shared with the original line, but the chord is
        # built in the linear primitive's own frame
        return _chord_result(linear, tf - dt, tf + dt)

    def _intersect_plane(self, plane) -> GeometryResult:
        frame = self.frame
        a, b, cc, d = plane.coefficients(frame)
        n = [a, b, cc]
        nn = mag3(n)
        M = self._matrix()
        m = M.transpose().mul(n)
        mm = mag3(m)
        k = dot3(n, self._center.xyz()) + d
        gap = (abs(k) - mm) / nn
        thr = tolerance.threshold(self._scale())
        if gap > thr:
            return NOTHING
        if abs(gap) <= thr:
            s = -1.0 if k > 0 else 1.0
            x = M.mul([s * m[0] / mm, s * m[1] / mm, s * m[2] / mm])
            return point_result(self._center.add(Vector(*x, frame)))

        u0 = [-k * c / (mm * mm) for c in m]
        rho = _half_chord(1.0, abs(k) / mm)
        mv = Vector(*m, frame)
        e1 = mv.ortho_vector().normalized()
        e2 = mv.normalized().cross(e1)
        # conjugate semi-diameters of the section
        p = Vector(*M.mul(e1.scale(rho).xyz()), frame)
        q = Vector(*M.mul(e2.scale(rho).xyz()), frame)
        th = 0.5 * atan2(2.0 * p.dot(q), p.dot(p) - q.dot(q))
        major = p.scale(cos(th)).add(q.scale(sin(th)))
        minor = q.scale(cos(th)).sub(p.scale(sin(th)))
        center = self._center.add(Vector(*M.mul(u0), frame))
        logger.debug("ellipsoid section: center %s, axes %.6g, %.6g",
                     center.xyz(), major.norm, minor.norm)
        return shape_result(Ellipse(center, major, minor))

    ## rigid transforms

    def translate(self, v: Vector) -> "Ellipsoid":
        return Ellipsoid(self._center.translate(v), *self._v)

    def rotate(self, rotation, pivot=None) -> "Ellipsoid":
        return Ellipsoid(self._center.rotate(rotation, pivot),
                         *(v.rotate(rotation) for v in self._v))

    def reflect_in(self, obj) -> "Ellipsoid":
        return Ellipsoid(self._center.reflect_in(obj), *(v.reflect_in(obj) for v in self._v))

    def equals(self, other) -> bool:
        """same center and same shape matrix ``M * M^T``"""
        if not isinstance(other, Ellipsoid):
            return False
        if not self._center.equals(other.center):
            return False
        m1 = self._matrix()
        m2 = Matrix.from_columns(*(v.coords_in(self.frame) for v in (other.v1, other.v2, other.v3)))
        q1 = m1.mul(m1.transpose())
        q2 = m2.mul(m2.transpose())
        return q1.isclose(q2, tolerance.threshold(self._scale() ** 2))

    def __eq__(self, other):
        if not isinstance(other, Ellipsoid):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self):
        return "Ellipsoid({!r}, {!r}, {!r}, {!r})".format(self._center, *self._v)

    def to_string(self, frame=None) -> str:
        c = self._center.coords_in(frame)
        lines = ["Ellipsoid:", "Center -> ({:10.5g}, {:10.5g}, {:10.5g})".format(*c)]
        for i, v in enumerate(self._v, 1):
            lines.append("Semiaxis {} -> ({:10.5g}, {:10.5g}, {:10.5g})".format(i, *v.coords_in(frame)))
        return "\n".join(lines)

    def __str__(self):
        return self.to_string()


class Box:
    """Oriented box with full side lengths ``lx``, ``ly``, ``lz`` about
    ``center``.  ``rotation`` turns the global axes onto the box axes;
    without one the box is aligned with the axes of the center's frame."""

    def __init__(self, center: Point, lx: float, ly: float, lz: float, rotation: Rotation = None):
        for size in (lx, ly, lz):
            if not isgoodnum(size) or size < 0.0:
                raise degenerate("box side lengths must be non-negative")
        self._center = center.copy()
        self._l = [float(lx), float(ly), float(lz)]
        self._rot = _frame_rotation(center.frame) if rotation is None else rotation.copy()

    @classmethod
    def from_points(cls, p1: Point, p2: Point) -> "Box":
        """box aligned with the frame of ``p1`` spanning two opposite corners"""
        a = p1.xyz()
        b = p2.coords_in(p1.frame)
        center = Point(*[(a[i] + b[i]) / 2.0 for i in range(3)], p1.frame)
        return cls(center, *[abs(b[i] - a[i]) for i in range(3)], _frame_rotation(p1.frame))

    @property
    def center(self) -> Point:
        return self._center.copy()

    @property
    def frame(self):
        return self._center.frame

    @property
    def lx(self) -> float:
        return self._l[0]

    @property
    def ly(self) -> float:
        return self._l[1]

    @property
    def lz(self) -> float:
        return self._l[2]

    @property
    def rotation(self) -> Rotation:
        return self._rot.copy()

    def _axes(self) -> List[Vector]:
        """unit box axes in the center's frame"""
        m = self._rot.to_rotation_matrix()
        return [Vector(*m.getcol(i)).convert_to(self.frame) for i in range(3)]

    def _half(self) -> List[Vector]:
        return [ax.scale(0.5 * l) for ax, l in zip(self._axes(), self._l)]

    @property
    def v1(self) -> Vector:
        """half-extent vector along the first box axis"""
        return self._half()[0]

    @property
    def v2(self) -> Vector:
        return self._half()[1]

    @property
    def v3(self) -> Vector:
        return self._half()[2]

    def _corner(self, i: int) -> Point:
        h = self._half()
        sx, sy, sz = _CORNER_SIGNS[i]
        return self._center.add(h[0].scale(sx).add(h[1].scale(sy)).add(h[2].scale(sz)))

    p1 = property(lambda self: self._corner(0))
    p2 = property(lambda self: self._corner(1))
    p3 = property(lambda self: self._corner(2))
    p4 = property(lambda self: self._corner(3))
    p5 = property(lambda self: self._corner(4))
    p6 = property(lambda self: self._corner(5))
    p7 = property(lambda self: self._corner(6))
    p8 = property(lambda self: self._corner(7))

    @property
    def vertices(self) -> List[Point]:
        return [self._corner(i) for i in range(8)]

    @property
    def edges(self):
        from analytic3d.linear import Segment
        v = self.vertices
        return [Segment(v[i], v[j]) for i, j in _EDGES]

    @property
    def faces(self):
        """face planes: bottom, top, -v2, +v1, +v2, -v1 (not oriented)"""
        from analytic3d.plane import Plane
        v = self.vertices
        return [Plane.from_points(v[i], v[j], v[k]) for i, j, k in _FACES]

    @property
    def volume(self) -> float:
        return self._l[0] * self._l[1] * self._l[2]

    @property
    def area(self) -> float:
        lx, ly, lz = self._l
        return 2.0 * (lx * ly + ly * lz + lx * lz)

    @property
    def diagonal(self) -> float:
        return sqrt(sum(l * l for l in self._l))

    def is_axis_aligned(self, frame=None) -> bool:
        """are the box axes parallel to the axes of ``frame``"""
        target = resolve(frame)
        refs = [target.xaxis, target.yaxis, target.zaxis]
        return all(any(ax.is_parallel_to(r) for r in refs) for ax in self._axes())

    def copy(self) -> "Box":
        return Box(self._center, *self._l, self._rot)

    def _scale(self) -> float:
        return max(self._center._scale(), self.diagonal)

    def _local(self, p: Point) -> List[float]:
        w = Vector.from_points(self._center, p)
        return [w.dot(ax) for ax in self._axes()]

    def contains(self, p: Point) -> bool:
        thr = tolerance.threshold(self._scale())
        return all(abs(q) <= 0.5 * l + thr for q, l in zip(self._local(p), self._l))

    def on_boundary(self, p: Point) -> bool:
        thr = tolerance.threshold(self._scale())
        q = self._local(p)
        return self.contains(p) and \
            any(abs(abs(qi) - 0.5 * l) <= thr for qi, l in zip(q, self._l))

    def bounding_box(self, frame=None) -> "Box":
        target = resolve(frame)
        half = [h.coords_in(target) for h in self._half()]
        size = [2.0 * sum(abs(h[k]) for h in half) for k in range(3)]
        return Box(self._center.convert_to(target), *size, _frame_rotation(target))

    ## distance and intersection

    def distance_to(self, obj) -> float:
        from analytic3d.plane import Plane

        if isinstance(obj, Point):
            excess = [max(0.0, abs(q) - 0.5 * l) for q, l in zip(self._local(obj), self._l)]
            return sqrt(sum(e * e for e in excess))
        if isinstance(obj, Plane):
            if self.intersects(obj):
                return 0.0
            return min(abs(obj.signed_distance_to(v)) for v in self.vertices)
        raise unsupported("distance_to", obj)

    def intersects(self, plane) -> bool:
        s = [plane.signed_distance_to(v) for v in self.vertices]
        thr = tolerance.threshold(self._scale())
        return min(s) <= thr and max(s) >= -thr

    def intersection_with(self, plane) -> GeometryResult:
        """cross section with a plane: NONE, POINT (touching corner),
        SEGMENT (touching edge) or POLYGON (list of points in boundary
        order)"""
        from analytic3d.linear import Segment
        from analytic3d.plane import Plane

        if not isinstance(plane, Plane):
            raise unsupported("intersection_with", plane)
        if not self.intersects(plane):
            return NOTHING
        verts = self.vertices
        s = [plane.signed_distance_to(v) for v in verts]
        thr = tolerance.threshold(self._scale())
        pts: List[Point] = [v for v, sv in zip(verts, s) if abs(sv) <= thr]
        for i, j in _EDGES:
            if (s[i] < -thr and s[j] > thr) or (s[i] > thr and s[j] < -thr):
                t = s[i] / (s[i] - s[j])
                a, b = verts[i].xyz(), verts[j].xyz()
                pts.append(Point(*[a[k] + t * (b[k] - a[k]) for k in range(3)], self.frame))
        unique: List[Point] = []
        for p in pts:
            if not any(p.equals(q) for q in unique):
                unique.append(p)
        if len(unique) == 1:
            return point_result(unique[0])
        if len(unique) == 2:
            return shape_result(Segment(unique[0], unique[1]))
        return GeometryResult(ResultKind.POLYGON, _order_in_plane(unique, plane))

    ## rigid transforms

    def translate(self, v: Vector) -> "Box":
        return Box(self._center.translate(v), *self._l, self._rot)

    def rotate(self, rotation, pivot=None) -> "Box":
        return Box(self._center.rotate(rotation, pivot), *self._l, rotation.mult(self._rot))

    def reflect_in(self, obj) -> "Box":
        # a box is symmetric in its own axes, so flipping the third axis
        # back to a right-handed set describes the same solid
        ax = [a.reflect_in(obj).convert_to(None) for a in self._axes()[:2]]
        ax.append(ax[0].cross(ax[1]))
        m = Matrix.from_columns(*(a.xyz() for a in ax))
        return Box(self._center.reflect_in(obj), *self._l, Rotation(m))

    def equals(self, other) -> bool:
        """same solid: every corner matches a corner of ``other``"""
        if not isinstance(other, Box):
            return False
        theirs = other.vertices
        return all(any(v.equals(w) for w in theirs) for v in self.vertices)

    def __eq__(self, other):
        if not isinstance(other, Box):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self):
        return "Box({!r}, {}, {}, {}, {!r})".format(self._center, *self._l, self._rot)

    def to_string(self, frame=None) -> str:
        c = self._center.coords_in(frame)
        lines = ["Box:", "Center -> ({:10.5g}, {:10.5g}, {:10.5g})".format(*c),
                 "Lengths -> ({:10.5g}, {:10.5g}, {:10.5g})".format(*self._l)]
        for i, h in enumerate(self._half(), 1):
            lines.append("Axis {} -> ({:10.5g}, {:10.5g}, {:10.5g})".format(i, *h.coords_in(frame)))
        return "\n".join(lines)

    def __str__(self):
        return self.to_string()


def _order_in_plane(points: List[Point], plane) -> List[Point]:
    """sort coplanar points by angle about their centroid"""
    frame = points[0].frame
    xyz = [p.coords_in(frame) for p in points]
    c = [sum(p[k] for p in xyz) / len(xyz) for k in range(3)]
    n = plane.normal.convert_to(frame).normalized()
    e1 = n.ortho_vector().normalized()
    e2 = n.cross(e1)

    def angle(p):
        w = Vector(p[0] - c[0], p[1] - c[1], p[2] - c[2], frame)
        return atan2(w.dot(e2), w.dot(e1))

    order = sorted(range(len(points)), key=lambda i: angle(xyz[i]))
    return [Point(*xyz[i], frame) for i in order]


__all__ = ["Box", "Sphere", "Ellipsoid"]
