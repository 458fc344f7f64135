"""
Dubins Cost Matrix Example
==========================

This example builds the asymmetric cost matrix an ATSP solver would consume
for a handful of survey waypoints flown by a fixed-wing aircraft.
"""

import logging

import numpy as np

from dubins_atsp import Configuration, DubinsConfig, build_adjacency_matrix, tour_cost
from dubins_atsp.logging_config import setup_logging
from dubins_atsp.planning import shortest_dubins_path

setup_logging(logging.INFO)

# Waypoints (x, y) in meters and the heading assigned to each (radians,
# 0 along +y, counter-clockwise positive)
positions = {
    "home": (0.0, 0.0),
    "wp1": (120.0, 40.0),
    "wp2": (160.0, 220.0),
    "wp3": (-60.0, 180.0),
}
headings = {"home": 0.0, "wp1": -np.pi / 2, "wp2": np.pi, "wp3": np.pi / 2}

config = DubinsConfig(turn_radius=25.0, close_loop=True)

# Single pair
start = Configuration(*positions["home"], headings["home"])
end = Configuration(*positions["wp1"], headings["wp1"])
length, path_type = shortest_dubins_path(start, end, config.turn_radius)
print(f"home -> wp1: {length:.2f} m ({path_type.name})")

# All pairs
matrix = build_adjacency_matrix(list(positions), positions.__getitem__, headings.__getitem__, config=config)
print("\nCost matrix (rows: from, columns: to)")
print("       " + "".join(f"{v:>10}" for v in matrix.nodes))
for u in matrix.nodes:
    print(f"{u:>6} " + "".join(f"{matrix[u, v]:10.1f}" for v in matrix.nodes))

# A tour in the order a solver might return it
tour = ["home", "wp1", "wp2", "wp3"]
cost = tour_cost(tour, positions.__getitem__, headings.__getitem__, config=config)
print(f"\nTour {' -> '.join(tour)} -> home: {cost:.2f} m")
