"""
Multirotor Performance Validation Tests
=======================================

Validates the operating point solvers, flight envelope, performance curves
and assembled result against reference aircraft.

Reference Aircraft:
- 5" freestyle quad (4S 1500 mAh, 2400 kv, 5x4.5x3)
- Heavy lift X8 (12S 16000 mAh, 180 kv, 22x8)
- Overweight quad (the 5" quad on a 2000 g frame)
- The calculator's default aircraft

Test Methodology:
- Verify each operating point against hand-checked reference values
- Verify physical invariants over a set of typical aircraft
- Verify degenerate input produces a finite result instead of an error
"""

import math
import sys
from dataclasses import asdict
from pathlib import Path
import unittest
from unittest import mock

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.multirotor_analyzer import (
    AircraftConfig,
    DEFAULT_AIRCRAFT,
    CalculationDebugger,
    MultirotorCalculator,
    MultirotorPlotter,
    OperatingState,
    PerformanceSolver,
    RangeCurveGenerator,
    MotorCurveGenerator,
    estimate_flight_envelope,
    calculate_performance,
)


QUAD_5IN = {
    "frame": {"weight": 450, "numMotors": 4},
    "environment": {"temp": 25, "elevation": 0},
    "battery": {"cells": 4, "capacity": 1500, "resistance": 0.005, "weight": 180},
    "esc": {"resistance": 0.005, "weight": 10},
    "motor": {"kv": 2400, "noLoadCurrent": 1.0, "resistance": 0.05, "weight": 30},
    "prop": {"diameter": 5, "pitch": 4.5, "blades": 3, "tConst": 1.0, "pConst": 1.1},
}

HEAVY_X8 = {
    "frame": {"weight": 4000, "numMotors": 8},
    "environment": {"temp": 25, "elevation": 0},
    "battery": {"cells": 12, "capacity": 16000, "resistance": 0.002, "weight": 4000},
    "esc": {"resistance": 0.002, "weight": 50},
    "motor": {"kv": 180, "noLoadCurrent": 0.8, "resistance": 0.15, "weight": 200},
    "prop": {"diameter": 22, "pitch": 8, "blades": 2, "tConst": 1.0, "pConst": 1.1},
}


def _aircraft(frame, battery, esc, motor, prop, temp=25, elevation=0):
    return {
        "frame": frame,
        "environment": {"temp": temp, "elevation": elevation},
        "battery": battery,
        "esc": esc,
        "motor": motor,
        "prop": prop,
    }


# Typical aircraft across the hobby range
REFERENCE_AIRCRAFT = {
    "5in racing 6S": _aircraft(
        {"weight": 320, "numMotors": 4},
        {"cells": 6, "capacity": 1300, "resistance": 0.004, "weight": 220},
        {"resistance": 0.003, "weight": 10},
        {"kv": 1950, "noLoadCurrent": 1.5, "resistance": 0.04, "weight": 35},
        {"diameter": 5.1, "pitch": 4.8, "blades": 3, "pConst": 1.1, "tConst": 1.0},
    ),
    "3in cinewhoop": _aircraft(
        {"weight": 250, "numMotors": 4},
        {"cells": 4, "capacity": 850, "resistance": 0.01, "weight": 100},
        {"resistance": 0.005, "weight": 5},
        {"kv": 3600, "noLoadCurrent": 0.8, "resistance": 0.1, "weight": 15},
        {"diameter": 3, "pitch": 3, "blades": 5, "pConst": 1.2, "tConst": 1.0},
    ),
    "7in long range": _aircraft(
        {"weight": 500, "numMotors": 4},
        {"cells": 6, "capacity": 3000, "resistance": 0.03, "weight": 300},
        {"resistance": 0.005, "weight": 10},
        {"kv": 1300, "noLoadCurrent": 0.8, "resistance": 0.06, "weight": 40},
        {"diameter": 7, "pitch": 4, "blades": 2, "pConst": 1.1, "tConst": 1.0},
    ),
    "10in macro": _aircraft(
        {"weight": 900, "numMotors": 4},
        {"cells": 4, "capacity": 5000, "resistance": 0.005, "weight": 500},
        {"resistance": 0.005, "weight": 20},
        {"kv": 800, "noLoadCurrent": 0.6, "resistance": 0.08, "weight": 80},
        {"diameter": 10, "pitch": 4.5, "blades": 2, "pConst": 1.1, "tConst": 1.0},
    ),
    "micro whoop 1S": _aircraft(
        {"weight": 22, "numMotors": 4},
        {"cells": 1, "capacity": 300, "resistance": 0.05, "weight": 8},
        {"resistance": 0.01, "weight": 1},
        {"kv": 19000, "noLoadCurrent": 0.2, "resistance": 0.3, "weight": 2},
        {"diameter": 1.2, "pitch": 1, "blades": 4, "pConst": 1.1, "tConst": 1.0},
    ),
    "15in endurance": _aircraft(
        {"weight": 1200, "numMotors": 4},
        {"cells": 6, "capacity": 22000, "resistance": 0.002, "weight": 2500},
        {"resistance": 0.005, "weight": 20},
        {"kv": 380, "noLoadCurrent": 0.4, "resistance": 0.12, "weight": 100},
        {"diameter": 15, "pitch": 5, "blades": 2, "pConst": 1.0, "tConst": 1.0},
    ),
    "5in at 3000 m": _aircraft(
        {"weight": 350, "numMotors": 4},
        {"cells": 4, "capacity": 1500, "resistance": 0.005, "weight": 180},
        {"resistance": 0.005, "weight": 10},
        {"kv": 2400, "noLoadCurrent": 1.0, "resistance": 0.05, "weight": 30},
        {"diameter": 5, "pitch": 4.5, "blades": 3, "pConst": 1.1, "tConst": 1.0},
        temp=10, elevation=3000,
    ),
    "7in speed 8S": _aircraft(
        {"weight": 400, "numMotors": 4},
        {"cells": 8, "capacity": 1100, "resistance": 0.005, "weight": 250},
        {"resistance": 0.003, "weight": 15},
        {"kv": 1300, "noLoadCurrent": 1.2, "resistance": 0.04, "weight": 40},
        {"diameter": 7, "pitch": 5, "blades": 2, "pConst": 1.1, "tConst": 1.0},
    ),
    "5in freestyle": QUAD_5IN,
    "heavy lift X8": HEAVY_X8,
}


def quad_5in(overrides=None) -> AircraftConfig:
    aircraft = AircraftConfig.from_dict(QUAD_5IN)
    for (section, key), value in (overrides or {}).items():
        aircraft = aircraft.with_value(section, key, value)
    return aircraft


def result_numbers(result):
    """Every number of a result, for finiteness checks."""
    for point in (result.hover, result.max, result.opt):
        for value in asdict(point).values():
            if value is not None:
                yield value
    yield result.mixed.flight_time
    yield from asdict(result.stats).values()
    for sample in result.graphs.range + result.graphs.motor:
        yield from asdict(sample).values()


class TestEquilibriumState(unittest.TestCase):
    """Test the state at a commanded rotational speed."""

    def setUp(self):
        self.solver = PerformanceSolver(quad_5in())

    def test_zero_speed_draws_no_load_current(self):
        state = self.solver.state_at_rpm(0.0)

        self.assertEqual(state.torque, 0.0)
        self.assertEqual(state.thrust, 0.0)
        self.assertAlmostEqual(state.motor_current, 1.0)
        self.assertAlmostEqual(state.current, 4.0)
        self.assertAlmostEqual(state.voltage, 14.8 - 4.0 * 0.02)
        self.assertEqual(state.efficiency, 0.0)

    def test_totals_sum_over_rotors(self):
        state = self.solver.state_at_rpm(12000.0)

        self.assertEqual(state.rotor_count, 4)
        self.assertAlmostEqual(state.current, state.motor_current * 4)
        self.assertAlmostEqual(state.electrical_power, state.voltage * state.current)
        self.assertAlmostEqual(state.current_per_rotor, state.motor_current)

    def test_misc_current_added_once(self):
        solver = PerformanceSolver(quad_5in({("frame", "miscCurrent"): 2.0}))
        state = solver.state_at_rpm(12000.0)
        self.assertAlmostEqual(state.current, state.motor_current * 4 + 2.0)

    def test_voltage_floor(self):
        state = self.solver.state_at_rpm(1e6)
        self.assertAlmostEqual(state.voltage, 12.0)
        self.assertLessEqual(state.efficiency, 1.0)

    def test_current_grows_with_speed(self):
        currents = [self.solver.state_at_rpm(rpm).current for rpm in (5000, 10000, 20000)]
        self.assertEqual(currents, sorted(currents))


class TestHoverSolver(unittest.TestCase):
    """Test the hover operating point."""

    def setUp(self):
        self.solver = PerformanceSolver(quad_5in())
        self.hover = self.solver.solve_hover()

    def test_thrust_equals_weight(self):
        self.assertAlmostEqual(self.hover.thrust, self.solver.total_weight_kg, places=9)

    def test_reference_values(self):
        self.assertAlmostEqual(self.hover.rpm, 9523.4, delta=1.0)
        self.assertAlmostEqual(self.hover.current, 20.906, delta=0.01)
        self.assertAlmostEqual(self.hover.motor_current, 5.2265, delta=0.005)
        self.assertAlmostEqual(self.hover.voltage, 14.382, delta=0.001)
        self.assertAlmostEqual(self.hover.electrical_power, 300.67, delta=0.1)
        self.assertAlmostEqual(self.hover.mechanical_power, 67.09, delta=0.05)
        self.assertAlmostEqual(self.hover.efficiency, 0.2231, delta=0.001)

    def test_mixed_mission(self):
        """25% hover plus 75% cruise at 0.85 × hover current."""
        hover_time = self.solver.flight_time_min(self.hover.current)
        expected = 0.25 * hover_time + 0.75 * hover_time / 0.85

        mixed = self.solver.mixed_flight_time_min(self.hover.current)
        self.assertAlmostEqual(mixed, expected)
        self.assertGreater(mixed, hover_time)


class TestMaxThrottleSolver(unittest.TestCase):
    """Test the damped max-throttle iteration."""

    def test_reference_values(self):
        max_state = PerformanceSolver(quad_5in()).solve_max_throttle()

        self.assertAlmostEqual(max_state.rpm, 24173.6, delta=1.0)
        self.assertAlmostEqual(max_state.current, 112.93, delta=0.05)
        self.assertAlmostEqual(max_state.motor_current, 28.23, delta=0.02)
        self.assertAlmostEqual(max_state.voltage, 12.54, delta=0.01)

    def test_below_no_load_speed(self):
        solver = PerformanceSolver(quad_5in())
        max_state = solver.solve_max_throttle()
        self.assertLess(max_state.rpm, 2400 * 14.8)

    def test_esc_limit_reduces_speed(self):
        unlimited = PerformanceSolver(quad_5in()).solve_max_throttle()
        limited = PerformanceSolver(
            quad_5in({("esc", "currentMax"): 10})
        ).solve_max_throttle()

        self.assertLess(limited.rpm, unlimited.rpm)
        self.assertLess(limited.motor_current, unlimited.motor_current)

    def test_power_limit_reduces_speed(self):
        unlimited = PerformanceSolver(quad_5in()).solve_max_throttle()
        limited = PerformanceSolver(
            quad_5in({("motor", "limitPower"): 100})
        ).solve_max_throttle()

        self.assertLess(limited.rpm, unlimited.rpm)

    def test_current_limit_ignores_unset_ratings(self):
        solver = PerformanceSolver(quad_5in())
        state = solver.state_at_rpm(20000.0)
        self.assertEqual(solver.current_limit(state), state.motor_current)

    def test_fixed_pass_count(self):
        debugger = CalculationDebugger()
        PerformanceSolver(quad_5in(), debugger=debugger).solve_max_throttle()
        self.assertEqual(len(debugger.find_steps_by_category("Max Throttle")), 5)


class TestOptimumEfficiency(unittest.TestCase):
    """Test the optimum efficiency scan."""

    def setUp(self):
        self.solver = PerformanceSolver(quad_5in())
        self.max_rpm = self.solver.solve_max_throttle().rpm

    def test_efficiency_is_fraction(self):
        opt = self.solver.solve_optimum_efficiency(self.max_rpm)

        self.assertGreater(opt.efficiency, 0.0)
        self.assertLessEqual(opt.efficiency, 1.0)
        self.assertAlmostEqual(opt.efficiency, 0.7747, delta=0.001)
        self.assertLessEqual(opt.rpm, self.max_rpm)

    def test_best_of_scanned_speeds(self):
        opt = self.solver.solve_optimum_efficiency(self.max_rpm)

        for fraction in (0.1, 0.3, 0.5, 0.75, 1.0):
            state = self.solver.state_at_rpm(fraction * self.max_rpm)
            self.assertLessEqual(
                self.solver.motor_efficiency(state), opt.efficiency + 1e-12
            )

    def test_first_sample_wins_ties(self):
        with mock.patch.object(self.solver, "motor_efficiency", return_value=0.5):
            opt = self.solver.solve_optimum_efficiency(self.max_rpm)

        self.assertAlmostEqual(opt.rpm, 0.1 * self.max_rpm)
        self.assertEqual(opt.efficiency, 0.5)

    def test_falls_back_to_max_state(self):
        with mock.patch.object(self.solver, "motor_efficiency", return_value=0.0):
            opt = self.solver.solve_optimum_efficiency(self.max_rpm)

        self.assertAlmostEqual(opt.rpm, self.max_rpm)
        self.assertEqual(opt.efficiency, 0.0)


class TestFlightEnvelope(unittest.TestCase):
    """Test thrust-to-weight, tilt, top speed and climb rate."""

    @staticmethod
    def _state(thrust, mechanical_power=0.0):
        return OperatingState(
            rpm=0.0, current=0.0, motor_current=0.0, voltage=0.0,
            electrical_power=0.0, mechanical_power=mechanical_power,
            thrust=thrust, efficiency=0.0, torque=0.0,
        )

    def test_twr_two(self):
        """TWR 2 allows 60° of tilt."""
        envelope = estimate_flight_envelope(
            1.0, 1.225, self._state(1.0, 10.0), self._state(2.0, 59.05)
        )

        self.assertAlmostEqual(envelope.thrust_to_weight, 2.0)
        self.assertAlmostEqual(envelope.max_tilt_deg, 60.0)
        self.assertAlmostEqual(envelope.drag_area_m2, 0.02)
        self.assertAlmostEqual(envelope.rate_of_climb, 49.05 / 9.81)

        expected_ms = math.sqrt(2.0 * 9.81 * math.sin(math.radians(60)) / (0.5 * 1.225 * 0.02))
        self.assertAlmostEqual(envelope.max_speed_kmh, expected_ms * 3.6)

    def test_drag_at_top_speed_balances_thrust(self):
        envelope = estimate_flight_envelope(
            1.0, 1.225, self._state(1.0), self._state(3.0)
        )
        drag = envelope.drag_n(1.225, envelope.max_speed_kmh / 3.6)
        horizontal = 3.0 * 9.81 * math.sin(math.radians(envelope.max_tilt_deg))
        self.assertAlmostEqual(drag, horizontal)

    def test_cannot_hover(self):
        envelope = estimate_flight_envelope(
            2.0, 1.225, self._state(2.0), self._state(1.5)
        )

        self.assertAlmostEqual(envelope.thrust_to_weight, 0.75)
        self.assertEqual(envelope.max_tilt_deg, 0.0)
        self.assertEqual(envelope.max_speed_kmh, 0.0)

    def test_zero_weight(self):
        envelope = estimate_flight_envelope(
            0.0, 1.225, self._state(0.0), self._state(1.0)
        )

        self.assertEqual(envelope.thrust_to_weight, 0.0)
        self.assertEqual(envelope.max_speed_kmh, 0.0)
        self.assertEqual(envelope.rate_of_climb, 0.0)


class TestRangeCurve(unittest.TestCase):
    """Test the range estimator samples."""

    def setUp(self):
        self.result = calculate_performance(quad_5in())
        self.samples = self.result.graphs.range

    def test_sample_count_and_speeds(self):
        self.assertEqual(len(self.samples), 21)
        self.assertEqual(self.samples[0].speed, 0.0)
        self.assertAlmostEqual(
            self.samples[-1].speed, 1.1 * self.result.stats.max_speed, places=6
        )

        speeds = [s.speed for s in self.samples]
        self.assertEqual(speeds, sorted(speeds))

    def test_hover_sample(self):
        first = self.samples[0]

        self.assertEqual(first.range_no_drag, 0.0)
        self.assertEqual(first.range_incl_drag, 0.0)
        self.assertAlmostEqual(first.flight_time_incl_drag, self.result.hover.flight_time)

    def test_no_drag_time_is_hover_time(self):
        for sample in self.samples:
            self.assertEqual(sample.flight_time_no_drag, self.result.hover.flight_time)

    def test_drag_shortens_range_at_speed(self):
        last = self.samples[-1]

        self.assertAlmostEqual(last.range_no_drag, 16.51, delta=0.05)
        self.assertLess(last.range_incl_drag, last.range_no_drag)

    def test_translational_lift_at_moderate_speed(self):
        """Forward flight at low speed draws less than hover current."""
        self.assertLess(self.samples[2].current, self.result.hover.current)

    def test_stops_at_unreachable_speed(self):
        solver = PerformanceSolver(quad_5in())
        hover = solver.solve_hover()
        max_state = solver.solve_max_throttle()
        envelope = estimate_flight_envelope(
            solver.total_weight_kg, solver.air_density, hover, max_state
        )

        # Pretend the hover speed is all the drive train can give
        curve = RangeCurveGenerator(
            solver, envelope, solver.flight_time_min(hover.current), hover.rpm
        )
        samples = curve.samples()

        self.assertGreaterEqual(len(samples), 1)
        self.assertLess(len(samples), 21)
        self.assertEqual(samples, tuple(curve))

    def test_only_hover_without_top_speed(self):
        """TWR below 1 leaves no airspeed at all to sample."""
        result = calculate_performance(quad_5in({("frame", "weight"): 7000}))

        self.assertEqual(result.stats.max_speed, 0.0)
        self.assertEqual(result.graphs.range, ())


class TestMotorCurve(unittest.TestCase):
    """Test the motor characteristics samples."""

    def setUp(self):
        self.result = calculate_performance(quad_5in())
        self.samples = self.result.graphs.motor

    def test_sample_count_and_currents(self):
        self.assertEqual(len(self.samples), 20)
        self.assertAlmostEqual(self.samples[0].current, 0.5)
        self.assertLessEqual(self.samples[-1].current, 1.2 * self.result.max.motor_current)

    def test_first_sample(self):
        first = self.samples[0]

        self.assertAlmostEqual(first.input_power, 7.38)
        self.assertAlmostEqual(first.waste_power, 14.7725)
        self.assertEqual(first.output_power, 0.0)
        self.assertEqual(first.efficiency, 0.0)
        self.assertAlmostEqual(first.temperature, 29.43175)
        self.assertEqual(first.temperature_over_limit, 0.0)

    def test_power_balance(self):
        for sample in self.samples:
            self.assertGreaterEqual(sample.output_power, 0.0)
            self.assertLessEqual(sample.output_power, sample.input_power)
            self.assertGreaterEqual(sample.efficiency, 0.0)
            self.assertLessEqual(sample.efficiency, 100.0)

    def test_temperature_over_limit(self):
        """The X8 motors overheat near full load."""
        samples = calculate_performance(AircraftConfig.from_dict(HEAVY_X8)).graphs.motor

        self.assertGreater(samples[-1].temperature, 80.0)
        self.assertAlmostEqual(
            samples[-1].temperature_over_limit, samples[-1].temperature - 80.0
        )

    def test_restartable(self):
        solver = PerformanceSolver(quad_5in())
        curve = MotorCurveGenerator(solver, 28.0)
        self.assertEqual(tuple(curve), tuple(curve))

    def test_no_current_no_samples(self):
        solver = PerformanceSolver(quad_5in())
        self.assertEqual(MotorCurveGenerator(solver, 0.0).samples(), ())


class TestPerformanceResult(unittest.TestCase):
    """Test the assembled result for the 5" quad."""

    def setUp(self):
        self.result = calculate_performance(quad_5in())

    def test_hover_point(self):
        hover = self.result.hover

        self.assertAlmostEqual(hover.flight_time, 3.444, delta=0.005)
        self.assertAlmostEqual(hover.throttle, 39.40, delta=0.05)
        self.assertAlmostEqual(hover.specific_thrust, 2.6275, delta=0.005)
        self.assertAlmostEqual(hover.temperature, 25 + hover.electrical_power * 0.05)

    def test_max_point(self):
        top = self.result.max

        self.assertEqual(top.throttle, 100.0)
        self.assertAlmostEqual(top.flight_time, 0.6376, delta=0.001)
        self.assertAlmostEqual(top.temperature, 25 + top.electrical_power * 0.1)

    def test_opt_point(self):
        opt = self.result.opt

        self.assertAlmostEqual(opt.rpm, self.result.max.rpm, delta=1.0)
        self.assertAlmostEqual(opt.efficiency, 0.7747, delta=0.001)
        self.assertIsNone(opt.temperature)

    def test_stats(self):
        stats = self.result.stats

        self.assertAlmostEqual(stats.weight, 0.79)
        self.assertAlmostEqual(stats.drive_weight, 0.34)
        self.assertAlmostEqual(stats.twr, 6.443, delta=0.005)
        self.assertAlmostEqual(stats.payload, 6.443 * 0.79 - 0.79, delta=0.01)
        self.assertAlmostEqual(stats.max_tilt, 81.07, delta=0.05)
        self.assertAlmostEqual(stats.max_speed, 261.44, delta=0.2)
        self.assertAlmostEqual(stats.rate_of_climb, 132.9, delta=0.2)
        self.assertAlmostEqual(stats.disc_area, 5.067, delta=0.001)
        self.assertAlmostEqual(stats.battery_energy, 22.2)
        self.assertAlmostEqual(stats.battery_load, 13.94, delta=0.01)

    def test_mixed(self):
        self.assertAlmostEqual(self.result.mixed.flight_time, 3.8998, delta=0.002)

    def test_no_warnings(self):
        self.assertEqual(self.result.warnings, ())

    def test_gauges(self):
        gauges = self.result.gauges()

        self.assertEqual(gauges["thrust_weight"], self.result.stats.twr)
        self.assertEqual(gauges["hover_time"], self.result.hover.flight_time)
        self.assertEqual(gauges["max_current"], self.result.max.current)
        self.assertAlmostEqual(
            gauges["specific_thrust"], 790.0 / self.result.hover.electrical_power
        )

    def test_summary(self):
        summary = self.result.summary()

        self.assertIn("Multirotor Performance", summary)
        self.assertIn("Hover Flight Time: 3.4 min", summary)
        self.assertIn("All-up Weight: 790 g", summary)
        self.assertNotIn("Warning:", summary)

    def test_dataframes(self):
        range_df = self.result.range_dataframe()
        motor_df = self.result.motor_dataframe()

        self.assertEqual(range_df.shape, (21, 6))
        self.assertEqual(motor_df.shape, (20, 9))
        self.assertAlmostEqual(range_df["speed"].iloc[0], 0.0)
        self.assertAlmostEqual(motor_df["current"].iloc[0], 0.5)


class TestReferenceScenarios(unittest.TestCase):
    """Test the reference aircraft end to end."""

    def test_5in_quad(self):
        """Per-motor hover current 5-20 A, hover time 3-15 min."""
        result = calculate_performance(QUAD_5IN)

        self.assertGreaterEqual(result.hover.motor_current, 5.0)
        self.assertLessEqual(result.hover.motor_current, 20.0)
        self.assertAlmostEqual(result.hover.current, 20.9, delta=0.05)
        self.assertGreaterEqual(result.hover.flight_time, 3.0)
        self.assertLessEqual(result.hover.flight_time, 15.0)

    def test_heavy_lift(self):
        """Hover current 20-60 A, hover time 15-45 min."""
        result = calculate_performance(HEAVY_X8)

        self.assertAlmostEqual(result.hover.current, 32.71, delta=0.05)
        self.assertAlmostEqual(result.hover.flight_time, 23.48, delta=0.05)
        self.assertAlmostEqual(result.hover.motor_current, 4.09, delta=0.01)
        self.assertAlmostEqual(result.stats.twr, 9.79, delta=0.02)
        self.assertAlmostEqual(result.max.current, 263.9, delta=0.5)
        self.assertAlmostEqual(result.mixed.flight_time, 26.59, delta=0.05)

        self.assertTrue(any("temperature" in w for w in result.warnings))

    def test_overweight(self):
        """Hover current above 50 A, hover time under 2 min."""
        result = calculate_performance(quad_5in({("frame", "weight"): 2000}))

        self.assertGreater(result.hover.current, 50.0)
        self.assertAlmostEqual(result.hover.current, 54.08, delta=0.05)
        self.assertGreaterEqual(result.hover.flight_time, 0.0)
        self.assertLessEqual(result.hover.flight_time, 2.0)
        self.assertAlmostEqual(result.mixed.flight_time, 1.51, delta=0.01)
        self.assertAlmostEqual(result.stats.twr, 2.175, delta=0.005)

    def test_default_aircraft(self):
        result = calculate_performance(DEFAULT_AIRCRAFT)

        self.assertAlmostEqual(result.hover.current, 24.36, delta=0.05)
        self.assertAlmostEqual(result.hover.flight_time, 11.82, delta=0.02)
        self.assertAlmostEqual(result.max.rpm, 14959.6, delta=1.0)
        self.assertAlmostEqual(result.stats.twr, 1.603, delta=0.005)
        self.assertAlmostEqual(result.stats.max_speed, 118.8, delta=0.2)
        self.assertAlmostEqual(result.mixed.flight_time, 13.39, delta=0.02)
        self.assertEqual(result.warnings, ())

    def test_cannot_hover_warnings(self):
        result = calculate_performance(quad_5in({("frame", "weight"): 7000}))

        self.assertLess(result.stats.twr, 1.0)
        self.assertEqual(len(result.warnings), 2)
        self.assertIn("Warning: Thrust-to-weight", result.summary())


class TestPhysicalInvariants(unittest.TestCase):
    """Test invariants that hold for every aircraft."""

    def test_reference_aircraft(self):
        for name, data in REFERENCE_AIRCRAFT.items():
            with self.subTest(aircraft=name):
                aircraft = AircraftConfig.from_dict(data)
                result = calculate_performance(aircraft)
                v_floor = 3.0 * aircraft.battery.cells

                for point in (result.hover, result.max, result.opt):
                    self.assertGreaterEqual(point.efficiency, 0.0)
                    self.assertLessEqual(point.efficiency, 1.0)
                    self.assertGreaterEqual(point.voltage, v_floor - 1e-9)
                    self.assertGreaterEqual(point.thrust, 0.0)
                    self.assertGreaterEqual(point.flight_time, 0.0)

                self.assertLessEqual(result.opt.rpm, result.max.rpm * (1 + 1e-12))
                self.assertGreater(result.mixed.flight_time, result.hover.flight_time)
                self.assertAlmostEqual(
                    result.hover.thrust, result.stats.weight, places=9
                )

                self.assertLessEqual(len(result.graphs.range), 21)
                self.assertLessEqual(len(result.graphs.motor), 20)
                self.assertGreater(len(result.graphs.motor), 0)
                for sample in result.graphs.motor:
                    self.assertGreaterEqual(sample.voltage, v_floor - 1e-9)

                for value in result_numbers(result):
                    self.assertTrue(math.isfinite(value))

    def test_idempotent(self):
        calculator = MultirotorCalculator()
        self.assertEqual(calculator.calculate(QUAD_5IN), calculator.calculate(QUAD_5IN))

    def test_mapping_and_config_agree(self):
        self.assertEqual(
            calculate_performance(QUAD_5IN),
            calculate_performance(AircraftConfig.from_dict(QUAD_5IN)),
        )

    def test_capacity_extends_hover_time(self):
        times = [
            calculate_performance(
                quad_5in({("battery", "capacity"): capacity})
            ).hover.flight_time
            for capacity in (1000, 1500, 2200, 3000)
        ]
        self.assertEqual(times, sorted(times))
        self.assertLess(times[0], times[-1])

    def test_input_not_modified(self):
        aircraft = quad_5in()
        snapshot = aircraft.to_dict()
        calculate_performance(aircraft)
        self.assertEqual(aircraft.to_dict(), snapshot)


class TestDegenerateInput(unittest.TestCase):
    """Test that degenerate configurations yield finite results."""

    CASES = {
        "all defaults": AircraftConfig(),
        "all zero text": AircraftConfig.from_dict({
            section: {"weight": "", "kv": "", "diameter": "x"}
            for section in ("frame", "battery", "esc", "motor", "prop")
        }),
        "zero kv": quad_5in({("motor", "kv"): 0}),
        "zero diameter": quad_5in({("prop", "diameter"): 0}),
        "zero blades": quad_5in({("prop", "blades"): 0}),
        "zero weight": quad_5in({
            ("frame", "weight"): 0, ("battery", "weight"): 0,
            ("esc", "weight"): 0, ("motor", "weight"): 0,
        }),
        "zero cells": quad_5in({("battery", "cells"): 0}),
        "zero capacity": quad_5in({("battery", "capacity"): 0}),
        "zero rotors": quad_5in({("frame", "numMotors"): 0}),
        "beyond ceiling": quad_5in({("environment", "elevation"): 50000}),
        "below sea level": quad_5in({("environment", "elevation"): -400}),
    }

    def test_finite_results(self):
        for name, aircraft in self.CASES.items():
            with self.subTest(case=name):
                result = calculate_performance(aircraft)

                for value in result_numbers(result):
                    self.assertTrue(math.isfinite(value), f"{name}: {value}")
                self.assertIsInstance(result.summary(), str)

    def test_zero_rotors_falls_back_to_quad(self):
        solver = PerformanceSolver(self.CASES["zero rotors"])
        self.assertEqual(solver.rotor_count, 4)

    def test_zero_capacity_zero_time(self):
        result = calculate_performance(self.CASES["zero capacity"])

        self.assertEqual(result.hover.flight_time, 0.0)
        self.assertEqual(result.stats.battery_load, 0.0)

    def test_zero_temperature_respected(self):
        solver = PerformanceSolver(quad_5in({("environment", "temp"): 0}))
        self.assertAlmostEqual(solver.air_density, 1.225 * 288.15 / 273.15)
        self.assertEqual(solver.ambient_temp, 0.0)


class TestCalculationTrace(unittest.TestCase):
    """Test the calculation debugger."""

    def setUp(self):
        self.debugger = CalculationDebugger()
        calculate_performance(quad_5in(), debugger=self.debugger)

    def test_steps_recorded(self):
        self.assertGreater(self.debugger.get_step_count(), 10)
        self.assertEqual(len(self.debugger.find_steps_by_category("Max Throttle")), 5)

        rho = self.debugger.find_step_by_result("rho")
        self.assertIsNotNone(rho)
        self.assertAlmostEqual(rho.result, 1.225 * 288.15 / 298.15)

    def test_report(self):
        report = self.debugger.get_report()

        self.assertIn("PERFORMANCE CALCULATION TRACE", report)
        self.assertIn(">>> Operating Points", report)
        self.assertIn(f"Total Steps: {self.debugger.get_step_count()}", report)

    def test_restart_clears_steps(self):
        count = self.debugger.get_step_count()
        calculate_performance(quad_5in(), debugger=self.debugger)
        self.assertEqual(self.debugger.get_step_count(), count)

    def test_no_debugger_same_result(self):
        self.assertEqual(
            calculate_performance(quad_5in()),
            calculate_performance(quad_5in(), debugger=CalculationDebugger()),
        )


class TestPlotting(unittest.TestCase):
    """Test chart generation."""

    def setUp(self):
        self.plotter = MultirotorPlotter()

    def tearDown(self):
        plt.close("all")

    def test_performance_figure(self):
        fig = self.plotter.plot_performance(calculate_performance(quad_5in()))

        self.assertEqual(len(fig.axes), 2)
        self.assertEqual(len(fig.axes[0].lines), 4)
        self.assertEqual(len(fig.axes[1].lines), 5)

    def test_empty_range_curve(self):
        result = calculate_performance(quad_5in({("frame", "weight"): 7000}))
        fig = self.plotter.plot_range_curve(result)
        self.assertEqual(len(fig.axes), 1)


def run_validation():
    """Run validation tests and print summary."""
    print("=" * 60)
    print("Multirotor Performance Validation")
    print("=" * 60)
    print()

    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    suite.addTests(loader.loadTestsFromTestCase(TestEquilibriumState))
    suite.addTests(loader.loadTestsFromTestCase(TestHoverSolver))
    suite.addTests(loader.loadTestsFromTestCase(TestMaxThrottleSolver))
    suite.addTests(loader.loadTestsFromTestCase(TestOptimumEfficiency))
    suite.addTests(loader.loadTestsFromTestCase(TestFlightEnvelope))
    suite.addTests(loader.loadTestsFromTestCase(TestRangeCurve))
    suite.addTests(loader.loadTestsFromTestCase(TestMotorCurve))
    suite.addTests(loader.loadTestsFromTestCase(TestPerformanceResult))
    suite.addTests(loader.loadTestsFromTestCase(TestReferenceScenarios))
    suite.addTests(loader.loadTestsFromTestCase(TestPhysicalInvariants))
    suite.addTests(loader.loadTestsFromTestCase(TestDegenerateInput))
    suite.addTests(loader.loadTestsFromTestCase(TestCalculationTrace))
    suite.addTests(loader.loadTestsFromTestCase(TestPlotting))

    runner = unittest.TextTestRunner(verbosity=2)
    result = runner.run(suite)

    print()
    print("=" * 60)
    if result.wasSuccessful():
        print("All validation tests PASSED")
    else:
        print(f"FAILED: {len(result.failures)} failures, {len(result.errors)} errors")
    print("=" * 60)

    return result.wasSuccessful()


if __name__ == "__main__":
    success = run_validation()
    sys.exit(0 if success else 1)
