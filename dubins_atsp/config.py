"""
Configuration
=============

Settings shared by the cost-matrix and tour-cost builders.

Values can be given directly or read from the environment::

    DUBINS_ATSP_TURN_RADIUS=25.0
    DUBINS_ATSP_SELF_LOOP_COST=999999.0
    DUBINS_ATSP_CLOSE_LOOP=true
    DUBINS_ATSP_PARALLELIZATION=thread
    DUBINS_ATSP_N_THREADS=8
"""

import dataclasses
import math
import os
from dataclasses import dataclass

from beartype.typing import Mapping, Optional

__all__ = ["MAX_EDGE_COST", "PARALLELIZATIONS", "DubinsConfig", "resolve_config"]

MAX_EDGE_COST = 999999.0

# CasADi map() evaluation modes
PARALLELIZATIONS = ("serial", "thread", "openmp")

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


def _parse_bool(name: str, value: str) -> bool:
    value = value.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"{name}: expected a boolean, got {value!r}")


@dataclass(frozen=True)
class DubinsConfig:
    """
    Parameters of a matrix build or tour evaluation.

    Attributes
    ----------
    turn_radius : float
        Minimum turning radius, shared by every pair
    self_loop_cost : float
        Cost written on the matrix diagonal; positive, and above every
        edge length of the matrices it is used for
    close_loop : bool
        Whether tour costs include the edge back to the first node
    parallelization : str
        CasADi map mode, one of "serial", "thread", "openmp"
    n_threads : int
        Worker threads for the "thread" mode
    """

    turn_radius: float
    self_loop_cost: float = MAX_EDGE_COST
    close_loop: bool = False
    parallelization: str = "serial"
    n_threads: int = 1

    def __post_init__(self):
        if not (math.isfinite(self.turn_radius) and self.turn_radius > 0):
            raise ValueError(f"turn_radius must be finite and positive, got {self.turn_radius}")
        if not self.self_loop_cost > 0:
            raise ValueError(f"self_loop_cost must be positive, got {self.self_loop_cost}")
        if self.parallelization not in PARALLELIZATIONS:
            raise ValueError(
                f"Unknown parallelization: {self.parallelization!r}, expected one of {PARALLELIZATIONS}"
            )
        if self.n_threads < 1:
            raise ValueError(f"n_threads must be at least 1, got {self.n_threads}")

    @classmethod
    def from_env(
        cls,
        prefix: str = "DUBINS_ATSP_",
        environ: Optional[Mapping[str, str]] = None,
        **overrides,
    ) -> "DubinsConfig":
        """
        Build a config from environment variables.

        Keyword overrides take precedence over the environment. TURN_RADIUS
        is required unless given as an override.
        """
        env = os.environ if environ is None else environ
        kwargs = {}
        if prefix + "TURN_RADIUS" in env:
            kwargs["turn_radius"] = float(env[prefix + "TURN_RADIUS"])
        if prefix + "SELF_LOOP_COST" in env:
            kwargs["self_loop_cost"] = float(env[prefix + "SELF_LOOP_COST"])
        if prefix + "CLOSE_LOOP" in env:
            kwargs["close_loop"] = _parse_bool(prefix + "CLOSE_LOOP", env[prefix + "CLOSE_LOOP"])
        if prefix + "PARALLELIZATION" in env:
            kwargs["parallelization"] = env[prefix + "PARALLELIZATION"].strip().lower()
        if prefix + "N_THREADS" in env:
            kwargs["n_threads"] = int(env[prefix + "N_THREADS"])
        kwargs.update(overrides)
        if "turn_radius" not in kwargs:
            raise ValueError(f"{prefix}TURN_RADIUS is not set")
        return cls(**kwargs)


def resolve_config(
    turn_radius: Optional[float] = None,
    config: Optional[DubinsConfig] = None,
    **explicit,
) -> DubinsConfig:
    """
    Merge explicit keyword arguments into a config.

    Arguments left as None fall back to ``config``, then to the defaults.
    """
    explicit = {k: v for k, v in explicit.items() if v is not None}
    if turn_radius is not None:
        explicit["turn_radius"] = turn_radius
    if config is None:
        if "turn_radius" not in explicit:
            raise ValueError("a turn radius or a DubinsConfig is required")
        return DubinsConfig(**explicit)
    return dataclasses.replace(config, **explicit)
