"""Tagged results for intersection and projection queries.

Queries whose answer can be "nothing", a point, or a whole shape return a
``GeometryResult``.  Branch on ``kind`` before using ``value``::

    res = ray.intersection_with(plane)
    if res.kind is ResultKind.POINT:
        p = res.value
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any


class ResultKind(Enum):
    """Possible geometric outcomes of a query."""
    NONE = "none"
    POINT = "point"
    LINE = "line"
    RAY = "ray"
    SEGMENT = "segment"
    PLANE = "plane"
    CIRCLE = "circle"
    ELLIPSE = "ellipse"
    SPHERE = "sphere"
    POLYGON = "polygon"   # list of coplanar points in boundary order


@dataclass(frozen=True)
class GeometryResult:
    kind: ResultKind
    value: Any = None

    def __bool__(self) -> bool:
        return self.kind is not ResultKind.NONE

    @property
    def is_none(self) -> bool:
        return self.kind is ResultKind.NONE

    def expect(self, kind: ResultKind):
        """Return ``value`` if the result is of ``kind``, else raise
        ``TypeError``."""
        if self.kind is not kind:
            raise TypeError(f"expected {kind.value} result, got {self.kind.value}")
        return self.value


NOTHING = GeometryResult(ResultKind.NONE)


def point_result(p) -> GeometryResult:
    return GeometryResult(ResultKind.POINT, p)


def shape_result(shape) -> GeometryResult:
    """wrap a primitive, picking the kind from its type"""
    return GeometryResult(ResultKind[type(shape).__name__.upper()], shape)


__all__ = ["ResultKind", "GeometryResult", "NOTHING", "point_result", "shape_result"]
