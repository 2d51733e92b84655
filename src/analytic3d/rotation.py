"""Rotations in 3D, given as an orthonormal matrix or an axis and angle.

A ``Rotation`` remembers the frame its matrix was expressed in, so the
same physical rotation can be read back in any other frame with
``to_rotation_matrix(frame)``.
"""

from __future__ import annotations

from math import acos, pi, sqrt

from analytic3d import tolerance
from analytic3d.errors import degenerate
from analytic3d.frame import GLOBAL_FRAME, resolve
from analytic3d.xform import Matrix, rotation_matrix


class Rotation:
    """Rigid rotation whose matrix is expressed in ``frame``.  The frame
    only orients the axis: points turn about the global origin, or about
    the pivot passed to ``rotate``."""

    def __init__(self, matrix=None, frame=None):
        self._frame = resolve(frame)
        if matrix is None:
            self._m = Matrix()
        else:
            m = matrix if isinstance(matrix, Matrix) else Matrix(matrix)
            if not m.isrotation():
                raise degenerate("rotation matrix must be orthonormal with determinant +1")
            self._m = Matrix(m)

    @classmethod
    def from_axis_angle(cls, axis, angle: float) -> "Rotation":
        """Right-handed rotation by ``angle`` radians about the ``Vector``
        ``axis``, expressed in the axis' frame."""
        if axis.is_zero():
            raise degenerate("zero-length rotation axis not allowed")
        return cls(rotation_matrix(axis.xyz(), angle), axis.frame)

    @classmethod
    def from_axis_angle_deg(cls, axis, angle: float) -> "Rotation":
        return cls.from_axis_angle(axis, angle * pi / 180.0)

    @property
    def frame(self):
        return self._frame

    def copy(self) -> "Rotation":
        return Rotation(self._m, self._frame)

    def to_rotation_matrix(self, frame=None) -> Matrix:
        """Matrix of this rotation expressed in ``frame`` (global if
        ``None``)."""
        target = resolve(frame)
        m = self._m
        if self._frame is not GLOBAL_FRAME:
            f = self._frame.axes
            m = f.mul(m).mul(f.transpose())
        if target is not GLOBAL_FRAME:
            t = target.axes
            m = t.transpose().mul(m).mul(t)
        return Matrix(m)

    @property
    def angle(self) -> float:
        """rotation angle in radians, in [0, pi]"""
        m = self._m
        trace = m.get(0, 0) + m.get(1, 1) + m.get(2, 2)
        return acos(tolerance.clamp_unit((trace - 1.0) / 2.0))

    @property
    def axis(self):
        """unit rotation axis as a ``Vector`` in the rotation's frame.
        The x axis is returned for the identity."""
        from analytic3d.vector import Vector

        m = self._m
        g = m.get
        x = g(2, 1) - g(1, 2)
        y = g(0, 2) - g(2, 0)
        z = g(1, 0) - g(0, 1)
        n = sqrt(x * x + y * y + z * z)
        if n > tolerance.SMALL:
            return Vector(x / n, y / n, z / n, self._frame)
        if self.angle < pi / 2.0:
            return Vector(1.0, 0.0, 0.0, self._frame)
        ## angle near pi: the axis is the dominant column of (R + I) / 2
        cols = [[(g(i, j) + (1.0 if i == j else 0.0)) / 2.0 for i in range(3)] for j in range(3)]
        best = max(cols, key=lambda c: c[0] * c[0] + c[1] * c[1] + c[2] * c[2])
        nb = sqrt(sum(c * c for c in best))
        return Vector(best[0] / nb, best[1] / nb, best[2] / nb, self._frame)

    def mult(self, other: "Rotation") -> "Rotation":
        """composition: apply ``other`` first, then this rotation"""
        m = self._m.mul(other.to_rotation_matrix(self._frame))
        return Rotation(m, self._frame)

    def inverse(self) -> "Rotation":
        return Rotation(self._m.transpose(), self._frame)

    def apply(self, obj):
        """rotate a point or vector about the global origin"""
        return obj.rotate(self)

    def equals(self, other: "Rotation") -> bool:
        if not isinstance(other, Rotation):
            return False
        tol = max(tolerance.get_tolerance(), tolerance.SMALL)
        return self.to_rotation_matrix().isclose(other.to_rotation_matrix(), tol)

    def __eq__(self, other):
        if not isinstance(other, Rotation):
            return NotImplemented
        return self.equals(other)

    __hash__ = None

    def __mul__(self, other):
        if isinstance(other, Rotation):
            return self.mult(other)
        return NotImplemented

    def __repr__(self):
        return f"Rotation({self._m!r}, {self._frame!r})"

    def to_string(self, frame=None) -> str:
        m = self.to_rotation_matrix(frame)
        rows = ["({:10.5g}, {:10.5g}, {:10.5g})".format(*m.getrow(i)) for i in range(3)]
        return "Rotation:\n" + "\n".join(rows)


__all__ = ["Rotation"]
