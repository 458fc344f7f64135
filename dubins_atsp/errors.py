"""
Domain errors raised when the input geometry admits no supported Dubins path.

These describe the input, not a transient condition: callers must change the
turning radius or the node placement rather than retry.
"""

import enum

from beartype.typing import Hashable, Optional, Tuple

__all__ = [
    "DubinsErrorKind",
    "DubinsDomainError",
    "DistanceTooShortError",
    "GeometryInfeasibleError",
]


class DubinsErrorKind(enum.Enum):
    DISTANCE_TOO_SHORT = "distance-too-short"
    GEOMETRY_INFEASIBLE = "geometry-infeasible"


class DubinsDomainError(ValueError):
    """Base class for input-geometry errors of the path-length core."""

    kind: DubinsErrorKind

    def __init__(self, message: str, pair: Optional[Tuple[Hashable, Hashable]] = None):
        self.pair = pair
        if pair is not None:
            message = f"{message} (edge {pair[0]!r} -> {pair[1]!r})"
        super().__init__(message)


class DistanceTooShortError(DubinsDomainError):
    """Start and end are closer than the minimum separation (3 r)."""

    kind = DubinsErrorKind.DISTANCE_TOO_SHORT

    def __init__(
        self,
        distance: float,
        radius: float,
        pair: Optional[Tuple[Hashable, Hashable]] = None,
    ):
        self.distance = distance
        self.radius = radius
        super().__init__(
            f"distance {distance:g} is shorter than 3*r = {3.0 * radius:g}",
            pair=pair,
        )


class GeometryInfeasibleError(DubinsDomainError):
    """The inverse-trig argument 2r/d of a crossing family left [-1, 1]."""

    kind = DubinsErrorKind.GEOMETRY_INFEASIBLE

    def __init__(
        self,
        family: str,
        ratio: float,
        pair: Optional[Tuple[Hashable, Hashable]] = None,
    ):
        self.family = family
        self.ratio = ratio
        super().__init__(
            f"{family}: 2r/d = {ratio:g} is outside [-1, 1], circle centers too close",
            pair=pair,
        )
