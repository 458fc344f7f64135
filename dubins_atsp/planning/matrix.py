"""
Dubins cost matrix for asymmetric TSP solvers.
"""

import logging
from collections.abc import Mapping

import numpy as np
from beartype.typing import Callable, Dict, Hashable, Iterator, Optional, Sequence, Tuple

from ..config import DubinsConfig, resolve_config
from ..configuration import ConfigurationLookup
from .dubins import evaluate_dubins_edges

__all__ = ["CostMatrix", "build_adjacency_matrix"]

_logger = logging.getLogger(__name__)


class CostMatrix(Mapping):
    """
    Dense, read-only (node, node) -> cost mapping.

    Rows are departures and columns arrivals; the matrix is generally
    asymmetric. Iteration yields every (u, v) key in row-major node order.
    """

    def __init__(self, nodes: Sequence[Hashable], values: np.ndarray):
        nodes = tuple(nodes)
        if values.shape != (len(nodes), len(nodes)):
            raise ValueError(f"values shape {values.shape} does not match {len(nodes)} nodes")
        self._nodes = nodes
        self._index = {node: i for i, node in enumerate(nodes)}
        self._values = np.array(values, dtype=float)
        self._values.setflags(write=False)

    @property
    def nodes(self) -> Tuple[Hashable, ...]:
        return self._nodes

    @property
    def values(self) -> np.ndarray:
        """Copy of the dense matrix, in ``nodes`` order."""
        return self._values.copy()

    def index(self, node: Hashable) -> int:
        return self._index[node]

    def row(self, node: Hashable) -> Dict[Hashable, float]:
        """Costs of leaving node, keyed by destination."""
        i = self._index[node]
        return {v: float(self._values[i, j]) for j, v in enumerate(self._nodes)}

    def __getitem__(self, key) -> float:
        try:
            u, v = key
            return float(self._values[self._index[u], self._index[v]])
        except (TypeError, ValueError):
            raise KeyError(key) from None

    def __iter__(self) -> Iterator[Tuple[Hashable, Hashable]]:
        for u in self._nodes:
            for v in self._nodes:
                yield (u, v)

    def __len__(self) -> int:
        return len(self._nodes) ** 2

    def __repr__(self) -> str:
        return f"CostMatrix(n={len(self._nodes)})"


def build_adjacency_matrix(
    nodes: Sequence[Hashable],
    position_of: Callable[[Hashable], Sequence[float]],
    heading_of: Callable[[Hashable], float],
    r: Optional[float] = None,
    *,
    config: Optional[DubinsConfig] = None,
    self_loop_cost: Optional[float] = None,
    parallelization: Optional[str] = None,
    n_threads: Optional[int] = None,
    logger: Optional[logging.Logger] = None,
) -> CostMatrix:
    """
    Shortest Dubins path length for every ordered pair of nodes.

    Args:
        nodes: Node identifiers, unique; fixes the row/column order
        position_of: node -> (x, y)
        heading_of: node -> heading assigned to the node
        r: Turn radius (or config.turn_radius)
        config: Defaults for the settings below
        self_loop_cost: Diagonal value, MAX_EDGE_COST by default
        parallelization: CasADi map mode for the pair evaluations
        n_threads: Threads for the "thread" mode
        logger: Receives progress and rejected-edge messages

    Returns:
        CostMatrix with cell (u, v) the length from u to v

    Raises:
        DistanceTooShortError, GeometryInfeasibleError: for the first failing
            pair in row-major order, with ``pair`` set. Nothing is substituted.
        ValueError: self_loop_cost is not above every computed edge length
    """
    log = logger if logger is not None else _logger
    cfg = resolve_config(
        r,
        config,
        self_loop_cost=self_loop_cost,
        parallelization=parallelization,
        n_threads=n_threads,
    )
    nodes = tuple(nodes)
    if len(set(nodes)) != len(nodes):
        raise ValueError("node identifiers must be unique")

    lookup = ConfigurationLookup(position_of, heading_of)
    configurations = lookup.many(nodes)

    n = len(nodes)
    cells = [(i, j) for i in range(n) for j in range(n) if i != j]
    edges = [(nodes[i], nodes[j]) for i, j in cells]
    log.info("Building %dx%d Dubins cost matrix (r=%g)", n, n, cfg.turn_radius)

    lengths = evaluate_dubins_edges(
        edges,
        configurations,
        cfg.turn_radius,
        parallelization=cfg.parallelization,
        n_threads=cfg.n_threads,
        logger=log,
    )

    if lengths.size and lengths.max() >= cfg.self_loop_cost:
        raise ValueError(
            f"self_loop_cost {cfg.self_loop_cost:g} does not exceed the longest edge {lengths.max():g}"
        )

    values = np.full((n, n), cfg.self_loop_cost, dtype=float)
    for (i, j), length in zip(cells, lengths):
        values[i, j] = length
    return CostMatrix(nodes, values)
