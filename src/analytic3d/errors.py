"""Exceptions raised by analytic3d."""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


class DegenerateInputError(ValueError):
    """The supplied data cannot define a valid primitive, e.g. three
    collinear points for a plane or a zero-length direction vector."""


def degenerate(message: str) -> DegenerateInputError:
    """Log and build a ``DegenerateInputError`` for the caller to raise."""
    logger.debug("degenerate input: %s", message)
    return DegenerateInputError(message)


def unsupported(operation: str, obj) -> TypeError:
    return TypeError(f"{operation} is not defined for {type(obj).__name__}")


__all__ = ["DegenerateInputError", "degenerate", "unsupported"]
