## process-wide tolerance policy for analytic3d

## Copyright (c) 2026 analytic3d contributors
## All rights reserved

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""process-wide tolerance policy for **analytic3d**

Every "is this effectively zero / equal / parallel / on the boundary"
decision in the library goes through this module.  The active
configuration is a frozen ``ToleranceConfig`` held in a module global.
It is replaced wholesale, never mutated, so a caller can always put the
previous value back with ``restore()`` or use the ``override()``
context manager.

Two comparison modes are supported:

- absolute (default): a distance ``d`` is negligible when ``d < value``.
  Coordinates are assumed to be of order unity.
- relative: ``value`` is scaled by the magnitude of the operands, so
  geometrically identical configurations give the same answer at any
  coordinate scale.

Direction predicates (parallel, orthogonal) are always relative since
they compare normalized quantities.

**NOTE:** there is no locking.  Changing the tolerance from one thread
while another thread runs queries is undefined behavior; synchronize
externally if you need that.

The initial value can be set with the ``ANALYTIC3D_TOLERANCE``
environment variable.
"""

from __future__ import annotations

import logging
import math
import os
from contextlib import contextmanager
from dataclasses import dataclass, replace
from typing import Iterator, Optional

logger = logging.getLogger(__name__)

DEFAULT_TOLERANCE = 1e-12

## algorithm-internal epsilon guarding divisions in the closest point
## routines.  Not user tunable and independent of the public tolerance.
SMALL = 1e-9

ENV_VAR = "ANALYTIC3D_TOLERANCE"


@dataclass(frozen=True)
class ToleranceConfig:
    """Immutable tolerance settings."""

    value: float = DEFAULT_TOLERANCE
    absolute: bool = True

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise ValueError(f"tolerance must be a number, got {self.value!r}")
        if not math.isfinite(self.value) or self.value <= 0.0:
            raise ValueError(f"tolerance must be positive and finite, got {self.value}")


def _initial_config() -> ToleranceConfig:
    raw = os.environ.get(ENV_VAR)
    if raw is None:
        return ToleranceConfig()
    try:
        return ToleranceConfig(float(raw))
    except ValueError:
        logger.warning("ignoring bad %s value %r", ENV_VAR, raw)
        return ToleranceConfig()


_config = _initial_config()


def get_config() -> ToleranceConfig:
    """Return the active tolerance configuration."""
    return _config


def get_tolerance() -> float:
    """Return the active tolerance value."""
    return _config.value


def is_absolute() -> bool:
    return _config.absolute


def set_tolerance(value: float, absolute: Optional[bool] = None) -> ToleranceConfig:
    """Install a new tolerance and return the previous configuration.

    ``absolute`` keeps its current setting when not given.
    """
    global _config
    previous = _config
    if absolute is None:
        absolute = previous.absolute
    _config = replace(previous, value=value, absolute=absolute)
    logger.info("tolerance set to %g (%s)", _config.value,
                "absolute" if _config.absolute else "relative")
    return previous


def restore(config: ToleranceConfig) -> None:
    """Reinstall a configuration returned by ``set_tolerance()``."""
    global _config
    if not isinstance(config, ToleranceConfig):
        raise TypeError(f"expected ToleranceConfig, got {type(config).__name__}")
    _config = config


@contextmanager
def override(value: float, absolute: Optional[bool] = None) -> Iterator[ToleranceConfig]:
    """Temporarily use a different tolerance::

        with override(1e-6):
            assert p1 == p2
    """
    previous = set_tolerance(value, absolute)
    try:
        yield _config
    finally:
        restore(previous)


## comparison helpers
## ------------------

def threshold(scale: float = 1.0) -> float:
    """Return the distance below which two things of magnitude ``scale``
    are considered coincident."""
    if _config.absolute:
        return _config.value
    return _config.value * abs(scale)


def negligible(x: float, scale: float = 1.0) -> bool:
    """is ``x`` zero within tolerance"""
    return abs(x) <= threshold(scale)


def close(a: float, b: float, scale: Optional[float] = None) -> bool:
    """are two scalars the same within tolerance"""
    if scale is None:
        scale = max(abs(a), abs(b))
    return abs(a - b) <= threshold(scale)


def negligible_ratio(x: float) -> bool:
    """is the dimensionless quantity ``x`` zero within tolerance.  Used by
    the direction predicates, which are always relative."""
    return abs(x) <= _config.value


def clamp_unit(x: float) -> float:
    """clamp ``x`` into [-1, 1] before an inverse trig call"""
    return max(-1.0, min(1.0, x))


__all__ = [
    "DEFAULT_TOLERANCE",
    "SMALL",
    "ToleranceConfig",
    "get_config",
    "get_tolerance",
    "is_absolute",
    "set_tolerance",
    "restore",
    "override",
    "threshold",
    "negligible",
    "close",
    "negligible_ratio",
    "clamp_unit",
]
