"""
Pytest unit tests for the Dubins path-length core
Run with: pytest test_planning.py -v
"""

import logging

import numpy as np
import pytest

from dubins_atsp import Configuration
from dubins_atsp.errors import (
    DistanceTooShortError,
    DubinsDomainError,
    DubinsErrorKind,
    GeometryInfeasibleError,
)
from dubins_atsp.planning import (
    DubinsPathType,
    derive_dubins_length,
    dubins_path_candidates,
    dubins_path_length,
    shortest_dubins_path,
)


@pytest.fixture(scope="module")
def dubins_function():
    """Create the CasADi function once for all tests."""
    return derive_dubins_length()


@pytest.fixture
def random_path_configs():
    """Random configurations at least 3 R apart with a feasible CSC geometry."""
    np.random.seed(42)
    R = 1.0
    configs = []
    while len(configs) < 20:
        p0 = np.random.rand(2) * 10
        p1 = np.random.rand(2) * 10
        psi0 = np.random.rand() * 2 * np.pi - np.pi
        psi1 = np.random.rand() * 2 * np.pi - np.pi
        start = Configuration(float(p0[0]), float(p0[1]), float(psi0))
        end = Configuration(float(p1[0]), float(p1[1]), float(psi1))
        try:
            dubins_path_candidates(start, end, R)
        except DubinsDomainError:
            continue
        configs.append((start, end, R))
    return configs


class TestConcreteScenarios:
    """Hand-checked geometries."""

    def test_aligned_headings_straight_ahead(self):
        start = Configuration(0.0, 0.0, 0.0)
        end = Configuration(0.0, 10.0, 0.0)

        length = dubins_path_length(start, end, 1.0)

        assert np.isfinite(length)
        assert length == pytest.approx(10.0, abs=1e-9)

    def test_quarter_turn_right_is_rsr(self):
        # North at the origin, east at (5, 5): quarter turn on each circle
        start = Configuration(0.0, 0.0, 0.0)
        end = Configuration(5.0, 5.0, -np.pi / 2)

        length, path_type = shortest_dubins_path(start, end, 1.0)

        assert path_type == DubinsPathType.RSR
        assert length == pytest.approx(4 * np.sqrt(2) + np.pi / 2, rel=1e-9)

    def test_quarter_turn_left_is_lsl(self):
        start = Configuration(0.0, 0.0, 0.0)
        end = Configuration(-5.0, 5.0, np.pi / 2)

        length, path_type = shortest_dubins_path(start, end, 1.0)

        assert path_type == DubinsPathType.LSL
        assert length == pytest.approx(4 * np.sqrt(2) + np.pi / 2, rel=1e-9)

    def test_offset_parallel_goal_right_is_rsl(self):
        start = Configuration(0.0, 0.0, 0.0)
        end = Configuration(4.0, 10.0, 0.0)
        d = np.hypot(2.0, 10.0)  # separation of the right-start / left-end circles
        psi = np.arctan2(10.0, 2.0) - np.arcsin(2.0 / d)
        expected = np.sqrt(d**2 - 4.0) + 2 * (np.pi / 2 - psi)

        length, path_type = shortest_dubins_path(start, end, 1.0)

        assert path_type == DubinsPathType.RSL
        assert length == pytest.approx(expected, rel=1e-9)

    def test_offset_parallel_goal_left_is_lsr(self):
        start = Configuration(0.0, 0.0, 0.0)
        end = Configuration(-4.0, 10.0, 0.0)
        d = np.hypot(2.0, 10.0)
        sweep = np.arctan2(2.0, 10.0) + np.arcsin(2.0 / d)
        expected = np.sqrt(d**2 - 4.0) + 2 * sweep

        length, path_type = shortest_dubins_path(start, end, 1.0)

        assert path_type == DubinsPathType.LSR
        assert length == pytest.approx(expected, rel=1e-9)

    def test_length_scales_with_geometry(self):
        start = Configuration(0.0, 0.0, 0.0)
        end = Configuration(5.0, 5.0, -np.pi / 2)
        big_start = Configuration(0.0, 0.0, 0.0)
        big_end = Configuration(15.0, 15.0, -np.pi / 2)

        assert dubins_path_length(big_start, big_end, 3.0) == pytest.approx(
            3 * dubins_path_length(start, end, 1.0), rel=1e-9
        )


class TestAsymmetry:
    """Heading constraints make the length direction dependent, which is expected."""

    def test_reverse_direction_differs(self):
        a = Configuration(0.0, 0.0, 0.0)
        b = Configuration(5.0, 5.0, -np.pi / 2)

        forward = dubins_path_length(a, b, 1.0)
        backward = dubins_path_length(b, a, 1.0)

        assert forward != pytest.approx(backward)
        assert backward > forward


class TestDomainErrors:
    """Input geometries without a supported CSC path."""

    def test_separation_of_exactly_three_radii_is_accepted(self):
        start = Configuration(0.0, 0.0, 0.0)
        end = Configuration(0.0, 3.0, 0.0)

        assert dubins_path_length(start, end, 1.0) == pytest.approx(3.0, abs=1e-9)

    def test_just_below_three_radii_is_rejected(self):
        start = Configuration(0.0, 0.0, 0.0)
        end = Configuration(0.0, 3.0 - 1e-9, 0.0)

        with pytest.raises(DistanceTooShortError):
            dubins_path_length(start, end, 1.0)

    def test_two_radii_apart_signals_distance_too_short(self):
        start = Configuration(0.0, 0.0, 0.0)
        end = Configuration(2.0, 0.0, np.pi / 4)

        with pytest.raises(DistanceTooShortError) as excinfo:
            dubins_path_length(start, end, 1.0)

        err = excinfo.value
        assert err.kind == DubinsErrorKind.DISTANCE_TOO_SHORT
        assert err.distance == pytest.approx(2.0)
        assert err.radius == 1.0
        assert err.pair is None
        assert isinstance(err, ValueError)

    def test_overlapping_crossing_circles_signal_geometry_infeasible(self):
        # 3 R apart, but the right-start and left-end circles are only R apart
        start = Configuration(0.0, 0.0, 0.0)
        end = Configuration(3.0, 0.0, 0.0)

        with pytest.raises(GeometryInfeasibleError) as excinfo:
            dubins_path_length(start, end, 1.0)

        err = excinfo.value
        assert err.kind == DubinsErrorKind.GEOMETRY_INFEASIBLE
        assert err.family == "RSL"
        assert err.ratio == pytest.approx(2.0)

    @pytest.mark.parametrize("r", [0.0, -1.0, np.inf, np.nan])
    def test_invalid_radius(self, r):
        with pytest.raises(ValueError):
            dubins_path_length(Configuration(0.0, 0.0, 0.0), Configuration(0.0, 10.0, 0.0), r)

    def test_nan_configuration(self):
        with pytest.raises(ValueError):
            dubins_path_length(Configuration(0.0, 0.0, np.nan), Configuration(0.0, 10.0, 0.0), 1.0)


class TestPathLengthProperties:
    """Properties over random feasible configurations."""

    def test_never_shorter_than_straight_line(self, random_path_configs):
        for i, (start, end, R) in enumerate(random_path_configs):
            length = dubins_path_length(start, end, R)
            dist = start.distance_to(end)

            assert length >= dist - 1e-9, f"Path {i}: length {length:.6f} < distance {dist:.6f}"

    def test_every_family_at_least_straight_line(self, random_path_configs):
        for i, (start, end, R) in enumerate(random_path_configs):
            dist = start.distance_to(end)
            for path_type, length in dubins_path_candidates(start, end, R).items():
                assert length >= dist - 1e-9, f"Path {i}: {path_type.name} {length:.6f} < {dist:.6f}"

    def test_length_is_minimum_of_families(self, random_path_configs):
        for start, end, R in random_path_configs:
            candidates = dubins_path_candidates(start, end, R)
            length, path_type = shortest_dubins_path(start, end, R)

            assert set(candidates) == set(DubinsPathType)
            assert length == min(candidates.values())
            assert candidates[path_type] == length
            assert dubins_path_length(start, end, R) == length

    def test_arcs_bounded_by_full_turns(self, random_path_configs):
        # Two arcs of at most one turn each plus the straight segment
        for start, end, R in random_path_configs:
            for length in dubins_path_candidates(start, end, R).values():
                assert length <= start.distance_to(end) + 2 * R + 4 * np.pi * R + 1e-9

    def test_heading_periodicity(self, random_path_configs):
        for start, end, R in random_path_configs:
            turned = Configuration(start.x, start.y, start.heading + 2 * np.pi)
            assert dubins_path_length(turned, end, R) == pytest.approx(
                dubins_path_length(start, end, R), abs=1e-6
            )


class TestCasadiFunction:
    """The derived function exposes the intermediate quantities."""

    def test_outputs(self, dubins_function):
        distance, lengths, ratios, centers = dubins_function([0, 0], 0.0, [0, 10], 0.0, 1.0)
        centers = np.array(centers)

        assert float(distance) == pytest.approx(10.0)
        assert np.array(lengths).shape == (4, 1)
        assert np.array(ratios).flatten() == pytest.approx([2 / np.hypot(2, 10)] * 2)
        # right circle to the east, left circle to the west when heading north
        assert centers[:, 0] == pytest.approx([1.0, 0.0], abs=1e-12)
        assert centers[:, 1] == pytest.approx([-1.0, 0.0], abs=1e-12)
        assert centers[:, 2] == pytest.approx([1.0, 10.0], abs=1e-12)
        assert centers[:, 3] == pytest.approx([-1.0, 10.0], abs=1e-12)


class TestTracing:
    """Intermediate values go to the injected logger."""

    def test_debug_trace(self, caplog):
        log = logging.getLogger("dubins_atsp.trace_test")
        caplog.set_level(logging.DEBUG, logger="dubins_atsp")

        dubins_path_length(Configuration(0.0, 0.0, 0.0), Configuration(0.0, 10.0, 0.0), 1.0, logger=log)

        messages = [rec.getMessage() for rec in caplog.records if rec.name == "dubins_atsp.trace_test"]
        assert any("cr0" in m for m in messages)
        assert any("RSR=" in m and "LSL=" in m for m in messages)
        # crossing circles (1, 0)/(-1, 10) and (-1, 0)/(1, 10)
        assert any("center separations RSL=10.198 LSR=10.198" in m for m in messages)

    def test_silent_above_debug(self, caplog):
        log = logging.getLogger("dubins_atsp.trace_test")
        caplog.set_level(logging.INFO, logger="dubins_atsp")

        dubins_path_length(Configuration(0.0, 0.0, 0.0), Configuration(0.0, 10.0, 0.0), 1.0, logger=log)

        assert not [rec for rec in caplog.records if rec.name == "dubins_atsp.trace_test"]


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
