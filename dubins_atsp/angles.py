"""
Angle Utilities
===============

Conversions between the vehicle heading convention and the standard
mathematical angle, plus wrapping helpers.

Headings are measured from the +y axis and increase counter-clockwise, so
``heading_to_angle(0.0) == pi/2`` points along +y.

Every function accepts python floats, numpy arrays and CasADi expressions,
which lets the same code build the symbolic path-length graph and serve
numeric callers.
"""

import enum

import casadi as ca
import numpy as np
from beartype.typing import Sequence, Union

__all__ = [
    "ANGLE_EPS",
    "TWO_PI",
    "TurnDirection",
    "angle_to_heading",
    "arc_sweep",
    "heading_between",
    "heading_to_angle",
    "wrap_angle",
]

TWO_PI = 2.0 * np.pi
HEADING_OFFSET = np.pi / 2.0
ANGLE_EPS = 1e-9  # sweeps this close to a full turn are round-off

ANGLE_TYPE = Union[float, np.ndarray, ca.SX, ca.MX, ca.DM]
POINT_TYPE = Union[Sequence[float], np.ndarray, ca.SX, ca.MX, ca.DM]


class TurnDirection(enum.Enum):
    """Rotational sense of an arc."""

    LEFT = 1  # counter-clockwise
    RIGHT = -1  # clockwise


def _is_symbolic(x) -> bool:
    return isinstance(x, (ca.SX, ca.MX, ca.DM))


def _as_float(x):
    if isinstance(x, np.ndarray) and x.ndim == 0:
        return float(x)
    return x


def _select(cond, if_true, if_false):
    """Branch-free select for both CasADi and numpy operands."""
    if _is_symbolic(cond):
        return ca.if_else(cond, if_true, if_false)
    return _as_float(np.where(cond, if_true, if_false))


def heading_to_angle(heading: ANGLE_TYPE) -> ANGLE_TYPE:
    """Heading (0 along +y, CCW positive) to standard angle (0 along +x)."""
    return heading + HEADING_OFFSET


def angle_to_heading(angle: ANGLE_TYPE) -> ANGLE_TYPE:
    """Inverse of :func:`heading_to_angle`."""
    return angle - HEADING_OFFSET


def wrap_angle(angle: ANGLE_TYPE) -> ANGLE_TYPE:
    """
    Wrap angle to [0, 2*pi).

    The result is idempotent and invariant to adding whole turns. A value
    that rounds up to exactly 2*pi is folded back to 0. NaN propagates.
    """
    if _is_symbolic(angle):
        wrapped = angle - TWO_PI * ca.floor(angle / TWO_PI)
    else:
        wrapped = np.mod(angle, TWO_PI)
    return _select(wrapped >= TWO_PI, wrapped - TWO_PI, wrapped)


def heading_between(point_a: POINT_TYPE, point_b: POINT_TYPE) -> ANGLE_TYPE:
    """Heading of the vector from point_a to point_b, wrapped to [0, 2*pi)."""
    dx = point_b[0] - point_a[0]
    dy = point_b[1] - point_a[1]
    if _is_symbolic(dx) or _is_symbolic(dy):
        bearing = ca.atan2(dy, dx)
    else:
        bearing = np.arctan2(dy, dx)
    return wrap_angle(angle_to_heading(bearing))


def arc_sweep(
    angle_from: ANGLE_TYPE, angle_to: ANGLE_TYPE, direction: TurnDirection
) -> ANGLE_TYPE:
    """
    Non-negative angle swept turning from angle_from to angle_to.

    Args:
        angle_from: Direction of travel entering the arc
        angle_to: Direction of travel leaving the arc
        direction: LEFT for a counter-clockwise arc, RIGHT for clockwise

    Returns:
        Sweep in [0, 2*pi). Both angles are wrapped and a full turn is added
        before the difference is wrapped again, so the result never goes
        negative; a sweep within ANGLE_EPS of 2*pi is reported as 0.
    """
    if direction is TurnDirection.RIGHT:
        angle_from, angle_to = angle_to, angle_from
    sweep = wrap_angle(TWO_PI + wrap_angle(angle_to) - wrap_angle(angle_from))
    return _select(sweep > TWO_PI - ANGLE_EPS, 0.0 * sweep, sweep)
