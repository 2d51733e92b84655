# -*- coding: utf-8 -*-
"""analytic3d: exact analytic geometry of points, lines, planes and
simple solids in 3D, with explicit coordinate frames and a global
tolerance policy."""

import logging

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("analytic3d")
except PackageNotFoundError:  # pragma: no cover - handled when package not installed
    __version__ = "unknown"

logging.getLogger(__name__).addHandler(logging.NullHandler())

from analytic3d.errors import DegenerateInputError  # noqa: E402
from analytic3d.frame import GLOBAL_FRAME, Frame  # noqa: E402
from analytic3d.result import GeometryResult, ResultKind  # noqa: E402
from analytic3d.rotation import Rotation  # noqa: E402
from analytic3d.vector import Vector  # noqa: E402
from analytic3d.point import Point  # noqa: E402
from analytic3d.linear import Line, Ray, Segment  # noqa: E402
from analytic3d.plane import Plane  # noqa: E402
from analytic3d.curves import Circle, Ellipse  # noqa: E402
from analytic3d.volume import Box, Ellipsoid, Sphere  # noqa: E402

__all__ = [
    "Box",
    "Circle",
    "DegenerateInputError",
    "Ellipse",
    "Ellipsoid",
    "Frame",
    "GLOBAL_FRAME",
    "GeometryResult",
    "Line",
    "Plane",
    "Point",
    "Ray",
    "ResultKind",
    "Rotation",
    "Segment",
    "Sphere",
    "Vector",
    "__version__",
]
