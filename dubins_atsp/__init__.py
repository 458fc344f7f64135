"""
dubins_atsp - Dubins path costs for asymmetric TSP route planning

Shortest Curve-Straight-Curve path lengths for fixed-wing or car-like
vehicles with a minimum turn radius, aggregated into cost matrices and tour
costs for an external route optimizer.
"""

from beartype import BeartypeConf
from beartype.claw import beartype_package

beartype_package(__name__, conf=BeartypeConf(is_pep484_tower=True))

__version__ = "0.1.0"

from . import angles
from . import planning
from .config import MAX_EDGE_COST, DubinsConfig
from .configuration import Configuration, ConfigurationLookup
from .errors import (
    DistanceTooShortError,
    DubinsDomainError,
    DubinsErrorKind,
    GeometryInfeasibleError,
)
from .planning import (
    CostMatrix,
    DubinsPathType,
    build_adjacency_matrix,
    dubins_path_length,
    tour_cost,
)

__all__ = [
    "MAX_EDGE_COST",
    "Configuration",
    "ConfigurationLookup",
    "CostMatrix",
    "DistanceTooShortError",
    "DubinsConfig",
    "DubinsDomainError",
    "DubinsErrorKind",
    "DubinsPathType",
    "GeometryInfeasibleError",
    "__version__",
    "angles",
    "build_adjacency_matrix",
    "dubins_path_length",
    "planning",
    "tour_cost",
]
