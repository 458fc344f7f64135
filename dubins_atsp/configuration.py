"""
Vehicle configuration (position + heading) and node lookup.
"""

import math
from dataclasses import dataclass

import numpy as np
from beartype.typing import Callable, Dict, Hashable, Sequence

from .angles import angle_to_heading, heading_to_angle

__all__ = ["Configuration", "ConfigurationLookup"]


@dataclass(frozen=True)
class Configuration:
    """
    Oriented 2D vehicle state.

    Attributes
    ----------
    x, y : float
        Position
    heading : float
        Heading in radians, 0 along +y, counter-clockwise positive
    """

    x: float
    y: float
    heading: float

    @classmethod
    def from_angle(cls, x: float, y: float, angle: float) -> "Configuration":
        """Create from a standard math angle (0 along +x)."""
        return cls(x, y, float(angle_to_heading(angle)))

    @property
    def position(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=float)

    @property
    def angle(self) -> float:
        """Heading as a standard math angle."""
        return float(heading_to_angle(self.heading))

    def distance_to(self, other: "Configuration") -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def __repr__(self) -> str:
        return f"Configuration(x={self.x:g}, y={self.y:g}, heading={self.heading:g})"


class ConfigurationLookup:
    """
    Resolves node identifiers to configurations.

    The graph store stays external: it only has to answer two questions per
    node, where is it and which heading was assigned to it.

    Args:
        position_of: node -> (x, y)
        heading_of: node -> heading
    """

    def __init__(
        self,
        position_of: Callable[[Hashable], Sequence[float]],
        heading_of: Callable[[Hashable], float],
    ):
        self.position_of = position_of
        self.heading_of = heading_of

    def __call__(self, node: Hashable) -> Configuration:
        x, y = self.position_of(node)
        return Configuration(float(x), float(y), float(self.heading_of(node)))

    def many(self, nodes: Sequence[Hashable]) -> Dict[Hashable, Configuration]:
        """Configuration of each distinct node, in first-seen order."""
        return {node: self(node) for node in dict.fromkeys(nodes)}
