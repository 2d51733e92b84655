"""Right-handed coordinate frames and the conversion math between them.

A ``Frame`` is an origin, given in global coordinates, plus a 3x3
orientation matrix whose *columns* are the frame's x, y and z axes
expressed in the global frame.  Conversion always passes through the
global frame::

    global = axes_src * local_src + origin_src
    local_tgt = transpose(axes_tgt) * (global - origin_tgt)

``GLOBAL_FRAME`` is the distinguished frame used whenever no frame is
supplied.  Frames are immutable.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from analytic3d import tolerance
from analytic3d.errors import degenerate
from analytic3d.xform import Matrix, istriple

logger = logging.getLogger(__name__)

Triple = List[float]


def _as_triple(obj) -> Triple:
    """Return global XYZ for a triple or a Point/Vector instance."""
    if istriple(obj):
        return [float(obj[0]), float(obj[1]), float(obj[2])]
    if hasattr(obj, "global_xyz"):
        return obj.global_xyz()
    raise TypeError(f"cannot interpret {type(obj).__name__} as coordinates")


class Frame:
    """Right-handed orthonormal reference frame."""

    def __init__(self, origin=None, axes: Optional[Matrix] = None):
        self._origin = [0.0, 0.0, 0.0] if origin is None else _as_triple(origin)
        if axes is None:
            self._axes = Matrix()
        else:
            if not isinstance(axes, Matrix):
                axes = Matrix(axes)
            if not axes.isrotation():
                raise degenerate("frame orientation must be orthonormal and right-handed")
            self._axes = Matrix(axes)
        self._axes_t = self._axes.transpose()

    @classmethod
    def from_vectors(cls, origin, v1, v2) -> "Frame":
        """Frame with x along ``v1`` and y in the plane of ``v1`` and ``v2``
        (Gram-Schmidt); z completes the right-handed set."""
        a = _as_triple(v1)
        b = _as_triple(v2)
        na = sum(c * c for c in a) ** 0.5
        if na < tolerance.SMALL:
            raise degenerate("zero-length frame axis")
        x = [c / na for c in a]
        z = [x[1]*b[2] - x[2]*b[1], x[2]*b[0] - x[0]*b[2], x[0]*b[1] - x[1]*b[0]]
        nz = sum(c * c for c in z) ** 0.5
        nb = sum(c * c for c in b) ** 0.5
        if nb < tolerance.SMALL or nz <= tolerance.SMALL * nb:
            raise degenerate("frame axes must not be parallel")
        z = [c / nz for c in z]
        y = [z[1]*x[2] - z[2]*x[1], z[2]*x[0] - z[0]*x[2], z[0]*x[1] - z[1]*x[0]]
        return cls(origin, Matrix.from_columns(x, y, z))

    @staticmethod
    def global_frame() -> "Frame":
        return GLOBAL_FRAME

    ## accessors return copies

    @property
    def origin(self):
        from analytic3d.point import Point
        return Point(*self._origin)

    @property
    def axes(self) -> Matrix:
        return Matrix(self._axes)

    @property
    def xaxis(self):
        from analytic3d.vector import Vector
        return Vector(*self._axes.getcol(0))

    @property
    def yaxis(self):
        from analytic3d.vector import Vector
        return Vector(*self._axes.getcol(1))

    @property
    def zaxis(self):
        from analytic3d.vector import Vector
        return Vector(*self._axes.getcol(2))

    def is_global(self) -> bool:
        return self is GLOBAL_FRAME

    ## raw conversion on triples

    def to_global_point(self, xyz: Sequence[float]) -> Triple:
        if self is GLOBAL_FRAME:
            return [xyz[0], xyz[1], xyz[2]]
        g = self._axes.mul(list(xyz))
        o = self._origin
        return [g[0] + o[0], g[1] + o[1], g[2] + o[2]]

    def from_global_point(self, xyz: Sequence[float]) -> Triple:
        if self is GLOBAL_FRAME:
            return [xyz[0], xyz[1], xyz[2]]
        o = self._origin
        return self._axes_t.mul([xyz[0] - o[0], xyz[1] - o[1], xyz[2] - o[2]])

    def to_global_vector(self, xyz: Sequence[float]) -> Triple:
        if self is GLOBAL_FRAME:
            return [xyz[0], xyz[1], xyz[2]]
        return self._axes.mul(list(xyz))

    def from_global_vector(self, xyz: Sequence[float]) -> Triple:
        if self is GLOBAL_FRAME:
            return [xyz[0], xyz[1], xyz[2]]
        return self._axes_t.mul(list(xyz))

    def convert_point(self, xyz: Sequence[float], target: "Frame") -> Triple:
        """coordinates of the point ``xyz`` (local to this frame) in ``target``"""
        if target is self:
            return [xyz[0], xyz[1], xyz[2]]
        return target.from_global_point(self.to_global_point(xyz))

    def convert_vector(self, xyz: Sequence[float], target: "Frame") -> Triple:
        if target is self:
            return [xyz[0], xyz[1], xyz[2]]
        return target.from_global_vector(self.to_global_vector(xyz))

    ## rigid motions of the frame itself

    def translate(self, vector) -> "Frame":
        d = vector.global_xyz()
        o = self._origin
        return Frame([o[0] + d[0], o[1] + d[1], o[2] + d[2]], self._axes)

    def rotate(self, rotation, pivot=None) -> "Frame":
        """rotate the axes (and the origin about ``pivot`` if given)"""
        r = rotation.to_rotation_matrix()
        origin = self._origin
        if pivot is not None:
            from analytic3d.point import Point
            origin = Point(*origin).rotate(rotation, pivot).global_xyz()
        return Frame(origin, r.mul(self._axes))

    def equals(self, other: "Frame") -> bool:
        if not isinstance(other, Frame):
            return False
        if other is self:
            return True
        o1, o2 = self._origin, other._origin
        d = sum((o1[i] - o2[i]) ** 2 for i in range(3)) ** 0.5
        scale = max(sum(c * c for c in o1), sum(c * c for c in o2)) ** 0.5
        return tolerance.negligible(d, scale) and \
            self._axes.isclose(other._axes, max(tolerance.get_tolerance(), tolerance.SMALL))

    def __eq__(self, other):
        if not isinstance(other, Frame):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __repr__(self):
        if self is GLOBAL_FRAME:
            return "GLOBAL_FRAME"
        return f"Frame({self._origin}, {self._axes!r})"

    def to_string(self) -> str:
        o = self._origin
        lines = ["Frame:",
                 "Origin -> ({:10.5g}, {:10.5g}, {:10.5g})".format(*o)]
        for name, i in (("X", 0), ("Y", 1), ("Z", 2)):
            lines.append("{} axis -> ({:10.5g}, {:10.5g}, {:10.5g})".format(name, *self._axes.getcol(i)))
        return "\n".join(lines)


GLOBAL_FRAME = Frame()


def resolve(frame: Optional[Frame]) -> Frame:
    """``frame`` or the global frame when ``None``"""
    if frame is None:
        return GLOBAL_FRAME
    if not isinstance(frame, Frame):
        raise TypeError(f"expected Frame, got {type(frame).__name__}")
    return frame


__all__ = ["Frame", "GLOBAL_FRAME", "resolve"]
