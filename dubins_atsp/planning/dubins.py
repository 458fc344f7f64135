"""
Dubins Path Length
==================

Shortest forward-only path length between two oriented points for a vehicle
with a fixed minimum turn radius R, over the four Curve-Straight-Curve
families (RSR, RSL, LSR, LSL).

Usage:
    >>> from dubins_atsp import Configuration
    >>> from dubins_atsp.planning import dubins_path_length
    >>> start = Configuration(0.0, 0.0, 0.0)  # heading 0 points along +y
    >>> end = Configuration(0.0, 10.0, 0.0)
    >>> round(dubins_path_length(start, end, 1.0), 6)
    10.0

Start and end must be at least 3 R apart. Closer pairs would need the
Curve-Curve-Curve families, which are not computed; they raise
DistanceTooShortError instead of returning a misleading length.

Functions:
    - derive_dubins_length() -> CasADi function for all four families
    - dubins_path_candidates() -> length of each family
    - shortest_dubins_path() -> (length, family)
    - dubins_path_length() -> minimum length
    - evaluate_dubins_edges() -> batched lengths for many pairs
"""

import enum
import logging
import math

import casadi as ca
import numpy as np
from beartype.typing import Dict, Hashable, Optional, Sequence, Tuple, Union

from ..angles import TurnDirection, arc_sweep, heading_between, heading_to_angle
from ..configuration import Configuration
from ..errors import DistanceTooShortError, DubinsDomainError, GeometryInfeasibleError

__all__ = [
    "MIN_SEPARATION_FACTOR",
    "DubinsPathType",
    "check_dubins_domain",
    "derive_dubins_length",
    "dubins_length_function",
    "dubins_path_candidates",
    "dubins_path_length",
    "evaluate_dubins_edges",
    "shortest_dubins_path",
]

_logger = logging.getLogger(__name__)

MIN_SEPARATION_FACTOR = 3.0

# ==============================================================================
# Geometry
# ==============================================================================


class DubinsPathType(enum.IntEnum):
    """Path type enumeration, in the row order of the ``lengths`` output."""

    RSR = 0  # Right-Straight-Right
    RSL = 1  # Right-Straight-Left
    LSR = 2  # Left-Straight-Right
    LSL = 3  # Left-Straight-Left


# Families whose tangent needs asin/acos of 2R/d, in ``ratios`` row order
CROSSING_TYPES = (DubinsPathType.RSL, DubinsPathType.LSR)


def rotation_matrix(theta):
    """2D rotation matrix."""
    return ca.vertcat(
        ca.horzcat(ca.cos(theta), -ca.sin(theta)),
        ca.horzcat(ca.sin(theta), ca.cos(theta)),
    )


def compute_turn_centers(p, theta, R):
    """Right and left turn centers for direction of travel theta (math angle) at p."""
    rot = rotation_matrix(theta)
    c_right = p + rot @ ca.vertcat(0, -R)
    c_left = p + rot @ ca.vertcat(0, R)
    return c_right, c_left


def bearing(c0, c1):
    """Math angle of the vector c0 -> c1."""
    return heading_to_angle(heading_between(c0, c1))


def compute_rsr_length(alpha, beta, cr0, cr1, R):
    """
    Right-Straight-Right.
    Outer tangent: the straight segment is parallel to cr0 -> cr1.
    """
    psi = bearing(cr0, cr1)
    straight = ca.norm_2(cr1 - cr0)
    arc0 = R * arc_sweep(alpha, psi, TurnDirection.RIGHT)
    arc1 = R * arc_sweep(psi, beta, TurnDirection.RIGHT)
    return arc0 + straight + arc1


def compute_lsl_length(alpha, beta, cl0, cl1, R):
    """
    Left-Straight-Left.
    Outer tangent: the straight segment is parallel to cl0 -> cl1.
    """
    psi = bearing(cl0, cl1)
    straight = ca.norm_2(cl1 - cl0)
    arc0 = R * arc_sweep(alpha, psi, TurnDirection.LEFT)
    arc1 = R * arc_sweep(psi, beta, TurnDirection.LEFT)
    return arc0 + straight + arc1


def compute_rsl_length(alpha, beta, cr0, cl1, R):
    """
    Right-Straight-Left.

    Inner tangent: the segment is rotated clockwise from cr0 -> cl1 by
    asin(2R / d), d being the center separation.

    Returns:
        length: Path length (NaN when 2R/d > 1)
        ratio: 2R/d, must lie in [-1, 1]
    """
    d = ca.norm_2(cl1 - cr0)
    ratio = 2 * R / d
    psi = bearing(cr0, cl1) - ca.asin(ratio)
    straight = ca.sqrt(d**2 - (2 * R) ** 2)
    arc0 = R * arc_sweep(alpha, psi, TurnDirection.RIGHT)
    arc1 = R * arc_sweep(psi, beta, TurnDirection.LEFT)
    return arc0 + straight + arc1, ratio


def compute_lsr_length(alpha, beta, cl0, cr1, R):
    """
    Left-Straight-Right.

    Inner tangent: the tangent point on the first circle lies at bearing
    theta - acos(2R / d) from cl0, theta being the bearing of cl0 -> cr1. The
    segment leaves it a quarter turn further counter-clockwise.

    Returns:
        length: Path length (NaN when 2R/d > 1)
        ratio: 2R/d, must lie in [-1, 1]
    """
    d = ca.norm_2(cr1 - cl0)
    ratio = 2 * R / d
    tangent_bearing = bearing(cl0, cr1) - ca.acos(ratio)
    psi = tangent_bearing + ca.pi / 2
    straight = ca.sqrt(d**2 - (2 * R) ** 2)
    arc0 = R * arc_sweep(alpha, psi, TurnDirection.LEFT)
    arc1 = R * arc_sweep(psi, beta, TurnDirection.RIGHT)
    return arc0 + straight + arc1, ratio


# ==============================================================================
# Main API
# ==============================================================================


def derive_dubins_length() -> ca.Function:
    """
    Create the CasADi function evaluating all four CSC families.

    Returns:
        dubins_length: Function
            Inputs: p0[2], psi0, p1[2], psi1, R (headings, not math angles)
            Outputs: distance, lengths[4] (DubinsPathType order),
                     ratios[2] (RSL, LSR), centers[2x4] (cr0, cl0, cr1, cl1)
    """
    p0 = ca.SX.sym("p0", 2)
    psi0 = ca.SX.sym("psi0")
    p1 = ca.SX.sym("p1", 2)
    psi1 = ca.SX.sym("psi1")
    R = ca.SX.sym("R")

    alpha = heading_to_angle(psi0)
    beta = heading_to_angle(psi1)

    cr0, cl0 = compute_turn_centers(p0, alpha, R)
    cr1, cl1 = compute_turn_centers(p1, beta, R)

    cost_rsr = compute_rsr_length(alpha, beta, cr0, cr1, R)
    cost_rsl, ratio_rsl = compute_rsl_length(alpha, beta, cr0, cl1, R)
    cost_lsr, ratio_lsr = compute_lsr_length(alpha, beta, cl0, cr1, R)
    cost_lsl = compute_lsl_length(alpha, beta, cl0, cl1, R)

    return ca.Function(
        "dubins_length",
        [p0, psi0, p1, psi1, R],
        [
            ca.norm_2(p1 - p0),
            ca.vertcat(cost_rsr, cost_rsl, cost_lsr, cost_lsl),
            ca.vertcat(ratio_rsl, ratio_lsr),
            ca.horzcat(cr0, cl0, cr1, cl1),
        ],
        ["p0", "psi0", "p1", "psi1", "R"],
        ["distance", "lengths", "ratios", "centers"],
    )


_dubins_length = None


def dubins_length_function() -> ca.Function:
    """derive_dubins_length(), built on first use and shared afterwards."""
    global _dubins_length
    if _dubins_length is None:
        _dubins_length = derive_dubins_length()
    return _dubins_length


def _check_radius(r: float) -> None:
    if not (math.isfinite(r) and r > 0):
        raise ValueError(f"turn radius must be finite and positive, got {r}")


def check_dubins_domain(
    distance: float,
    ratios: Union[Sequence[float], np.ndarray],
    r: float,
    pair: Optional[Tuple[Hashable, Hashable]] = None,
) -> None:
    """
    Raise if the geometry admits no supported CSC path.

    Raises:
        DistanceTooShortError: distance < 3 r
        GeometryInfeasibleError: an RSL/LSR inverse-trig argument is outside [-1, 1]
    """
    if distance < MIN_SEPARATION_FACTOR * r:
        raise DistanceTooShortError(float(distance), r, pair=pair)
    for path_type, ratio in zip(CROSSING_TYPES, ratios):
        if not -1.0 <= ratio <= 1.0:
            raise GeometryInfeasibleError(path_type.name, float(ratio), pair=pair)


def dubins_path_candidates(
    start: Configuration,
    end: Configuration,
    r: float,
    logger: Optional[logging.Logger] = None,
) -> Dict[DubinsPathType, float]:
    """
    Length of each CSC family from start to end.

    Args:
        start, end: Configurations, heading 0 along +y, CCW positive
        r: Turn radius
        logger: Receives DEBUG traces of circle centers and candidates;
            defaults to this module's logger

    Raises:
        ValueError: r is not finite and positive, or a coordinate is not finite
        DistanceTooShortError, GeometryInfeasibleError: see check_dubins_domain
    """
    log = logger if logger is not None else _logger
    _check_radius(r)
    values = (start.x, start.y, start.heading, end.x, end.y, end.heading)
    if not all(math.isfinite(v) for v in values):
        raise ValueError(f"configurations must be finite, got {start} and {end}")

    distance, lengths, ratios, centers = dubins_length_function()(
        start.position, start.heading, end.position, end.heading, r
    )
    distance = float(distance)
    ratios = np.array(ratios).flatten()

    if log.isEnabledFor(logging.DEBUG):
        centers = np.array(centers)
        log.debug("Given start=%s, end=%s, r=%g, dist=%g", start, end, r, distance)
        for name, c in zip(("cr0", "cl0", "cr1", "cl1"), centers.T):
            log.debug("  %s = (%g, %g)", name, c[0], c[1])

    check_dubins_domain(distance, ratios, r)

    candidates = {path_type: float(v) for path_type, v in zip(DubinsPathType, np.array(lengths).flatten())}
    if log.isEnabledFor(logging.DEBUG):
        log.debug(
            "  ratios RSL=%g LSR=%g, center separations RSL=%g LSR=%g; %s",
            ratios[0],
            ratios[1],
            2 * r / ratios[0],
            2 * r / ratios[1],
            " ".join(f"{t.name}={v:g}" for t, v in candidates.items()),
        )
    return candidates


def shortest_dubins_path(
    start: Configuration,
    end: Configuration,
    r: float,
    logger: Optional[logging.Logger] = None,
) -> Tuple[float, DubinsPathType]:
    """Shortest CSC length and the family achieving it (first in enum order on ties)."""
    candidates = dubins_path_candidates(start, end, r, logger=logger)
    best = min(candidates, key=candidates.get)
    return candidates[best], best


def dubins_path_length(
    start: Configuration,
    end: Configuration,
    r: float,
    logger: Optional[logging.Logger] = None,
) -> float:
    """
    Shortest Dubins (CSC) path length from start to end with turn radius r.

    Never returns a sentinel: infeasible geometry raises a DubinsDomainError.
    """
    return shortest_dubins_path(start, end, r, logger=logger)[0]


def evaluate_dubins_edges(
    edges: Sequence[Tuple[Hashable, Hashable]],
    configurations: Dict[Hashable, Configuration],
    r: float,
    parallelization: str = "serial",
    n_threads: int = 1,
    logger: Optional[logging.Logger] = None,
) -> np.ndarray:
    """
    Shortest path length of every edge with a single mapped CasADi call.

    Each edge is independent, so the evaluation is mapped over the edges,
    serially or on worker threads. Domain errors are raised for the first
    failing edge in the given order, carrying that edge as ``pair``.

    Args:
        edges: (u, v) node pairs
        configurations: node -> Configuration, for every node in edges
        r: Turn radius
        parallelization: "serial", "thread" or "openmp"
        n_threads: Threads for the "thread" mode

    Returns:
        lengths: Array of shape (len(edges),), in edge order
    """
    log = logger if logger is not None else _logger
    _check_radius(r)
    n = len(edges)
    if n == 0:
        return np.zeros(0)

    starts = [configurations[u] for u, _ in edges]
    ends = [configurations[v] for _, v in edges]
    p0 = np.array([[c.x, c.y] for c in starts]).T
    psi0 = np.array([[c.heading for c in starts]])
    p1 = np.array([[c.x, c.y] for c in ends]).T
    psi1 = np.array([[c.heading for c in ends]])
    if not all(np.all(np.isfinite(a)) for a in (p0, psi0, p1, psi1)):
        raise ValueError("configurations must be finite")

    fn = dubins_length_function()
    if parallelization == "thread":
        mapped = fn.map(n, "thread", n_threads)
    else:
        mapped = fn.map(n, parallelization)

    distance, lengths, ratios, _ = mapped(p0, psi0, p1, psi1, np.full((1, n), r))
    distance = np.array(distance).reshape(-1)
    lengths = np.array(lengths).reshape(len(DubinsPathType), n)
    ratios = np.array(ratios).reshape(len(CROSSING_TYPES), n)

    for k, pair in enumerate(edges):
        try:
            check_dubins_domain(distance[k], ratios[:, k], r, pair=pair)
        except DubinsDomainError as e:
            log.warning("Dubins edge rejected: %s", e)
            raise

    best = lengths.min(axis=0)
    log.debug("Evaluated %d Dubins edges (%s)", n, parallelization)
    return best
