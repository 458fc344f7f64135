"""
Dubins cost of an ordered tour.
"""

import logging

from beartype.typing import Callable, Hashable, List, Optional, Sequence, Tuple

from ..config import DubinsConfig, resolve_config
from ..configuration import ConfigurationLookup
from .dubins import evaluate_dubins_edges

__all__ = ["tour_cost", "tour_edges"]

_logger = logging.getLogger(__name__)


def tour_edges(nodes: Sequence[Hashable], close_loop: bool = False) -> List[Tuple[Hashable, Hashable]]:
    """Consecutive (u, v) pairs of a tour, plus (last, first) if close_loop."""
    nodes = list(nodes)
    if len(nodes) < 2:
        return []
    edges = list(zip(nodes[:-1], nodes[1:]))
    if close_loop:
        edges.append((nodes[-1], nodes[0]))
    return edges


def tour_cost(
    nodes: Sequence[Hashable],
    position_of: Callable[[Hashable], Sequence[float]],
    heading_of: Callable[[Hashable], float],
    r: Optional[float] = None,
    close_loop: Optional[bool] = None,
    *,
    config: Optional[DubinsConfig] = None,
    parallelization: Optional[str] = None,
    n_threads: Optional[int] = None,
    logger: Optional[logging.Logger] = None,
) -> float:
    """
    Sum of shortest Dubins path lengths along a tour.

    Args:
        nodes: Tour order; a node may appear more than once
        position_of: node -> (x, y)
        heading_of: node -> heading assigned to the node
        r: Turn radius (or config.turn_radius)
        close_loop: Include the edge from the last node back to the first
            (config.close_loop, False by default)
        config: Defaults for the settings
        parallelization, n_threads: CasADi map mode for the edge evaluations
        logger: Receives progress and rejected-edge messages

    Returns:
        Total length, 0.0 for tours of fewer than two nodes. Edge lengths are
        added left to right in tour order.

    Raises:
        DistanceTooShortError, GeometryInfeasibleError: for the first failing
            edge, which aborts the sum.
    """
    log = logger if logger is not None else _logger
    cfg = resolve_config(
        r,
        config,
        close_loop=close_loop,
        parallelization=parallelization,
        n_threads=n_threads,
    )
    edges = tour_edges(nodes, cfg.close_loop)
    if not edges:
        return 0.0

    lookup = ConfigurationLookup(position_of, heading_of)
    configurations = lookup.many(nodes)
    lengths = evaluate_dubins_edges(
        edges,
        configurations,
        cfg.turn_radius,
        parallelization=cfg.parallelization,
        n_threads=cfg.n_threads,
        logger=log,
    )

    cost = 0.0
    for length in lengths:
        cost += float(length)
    log.debug("Tour of %d edges costs %g", len(edges), cost)
    return cost
