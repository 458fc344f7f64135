"""
Planning Module
===============

Dubins path lengths and the costs built from them.

- dubins: shortest CSC path length between two configurations
- matrix: all-pairs cost matrix for asymmetric TSP solvers
- tour: cost of an ordered tour
"""

from .dubins import (
    MIN_SEPARATION_FACTOR,
    DubinsPathType,
    check_dubins_domain,
    derive_dubins_length,
    dubins_length_function,
    dubins_path_candidates,
    dubins_path_length,
    evaluate_dubins_edges,
    shortest_dubins_path,
)
from .matrix import CostMatrix, build_adjacency_matrix
from .tour import tour_cost, tour_edges

__all__ = [
    "MIN_SEPARATION_FACTOR",
    "CostMatrix",
    "DubinsPathType",
    "build_adjacency_matrix",
    "check_dubins_domain",
    "derive_dubins_length",
    "dubins_length_function",
    "dubins_path_candidates",
    "dubins_path_length",
    "evaluate_dubins_edges",
    "shortest_dubins_path",
    "tour_cost",
    "tour_edges",
]
