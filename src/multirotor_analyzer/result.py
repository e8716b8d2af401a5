"""
Performance Result Module
=========================

Result structure of one performance calculation and its assembly from the
solver outputs. Assembly computes nothing new beyond presentation figures
(flight times, throttle, specific thrust, temperature estimates).

Classes:
--------
- OperatingPoint: OperatingState plus the figures shown with it
- MixedMission, PerformanceStats, PerformanceGraphs: Result sections
- PerformanceResult: Complete result with report and export helpers

Usage:
------
    result = calculate_performance(aircraft)

    print(result.summary())
    df = result.range_dataframe()
"""

from dataclasses import dataclass, asdict, field
from typing import Dict, Optional, Tuple

import pandas as pd

from .config import (
    MultirotorAnalyzerConfig,
    DEFAULT_CONFIG,
    HOVER_TEMP_RISE,
    MAX_TEMP_RISE,
    MOTOR_TEMP_LIMIT,
    SCAN_STEPS,
)
from .solver import OperatingState, PerformanceSolver
from .envelope import FlightEnvelope
from .curves import RangeSample, MotorSample


@dataclass(frozen=True)
class OperatingPoint(OperatingState):
    """
    Operating state annotated with display figures.

    Attributes:
    ----------
    flight_time : float
        Endurance at this state's current (min)

    throttle : float or None
        Speed as a percentage of max-throttle speed (%)

    specific_thrust : float or None
        Thrust per electrical watt (g/W)

    temperature : float or None
        Estimated motor temperature (°C)
    """
    flight_time: float = 0.0
    throttle: Optional[float] = None
    specific_thrust: Optional[float] = None
    temperature: Optional[float] = None

    @classmethod
    def from_state(cls, state: OperatingState, **figures) -> "OperatingPoint":
        return cls(**asdict(state), **figures)


@dataclass(frozen=True)
class MixedMission:
    """Mixed mission endurance (25% hover, 75% cruise)."""
    flight_time: float


@dataclass(frozen=True)
class PerformanceStats:
    """
    Summary statistics.

    Attributes:
    ----------
    weight : float
        All-up weight (kg)

    drive_weight : float
        Motors + ESCs + battery (kg)

    twr : float
        Thrust-to-weight ratio

    payload : float
        Additional payload before TWR drops to 1 (kg)

    max_tilt : float
        Maximum tilt (deg)

    max_speed : float
        Top speed (km/h)

    rate_of_climb : float
        Climb rate (m/s)

    disc_area : float
        Total rotor disc area (dm²)

    battery_energy : float
        Nominal pack energy (Wh)

    battery_load : float
        Hover discharge rate (C)
    """
    weight: float
    drive_weight: float
    twr: float
    payload: float
    max_tilt: float
    max_speed: float
    rate_of_climb: float
    disc_area: float
    battery_energy: float
    battery_load: float


@dataclass(frozen=True)
class PerformanceGraphs:
    """Curve samples of the range estimator and motor characteristics."""
    range: Tuple[RangeSample, ...]
    motor: Tuple[MotorSample, ...]


@dataclass(frozen=True)
class PerformanceResult:
    """
    Complete result of one performance calculation.

    Attributes:
    ----------
    hover : OperatingPoint
        Hover state with flight time, throttle, specific thrust, temperature

    max : OperatingPoint
        Max-throttle state with minimum flight time, specific thrust,
        temperature

    opt : OperatingPoint
        Best motor efficiency state; efficiency is the motor efficiency

    mixed : MixedMission
        Mixed mission flight time

    stats : PerformanceStats
        Summary statistics

    graphs : PerformanceGraphs
        Range and motor curves

    warnings : tuple of str
        Operationally concerning findings. The numbers are still valid.
    """
    hover: OperatingPoint
    max: OperatingPoint
    opt: OperatingPoint
    mixed: MixedMission
    stats: PerformanceStats
    graphs: PerformanceGraphs
    warnings: Tuple[str, ...] = field(default_factory=tuple)

    def gauges(self) -> Dict[str, float]:
        """Headline values of the calculator gauges."""
        hover_power = self.hover.electrical_power
        return {
            "thrust_weight": self.stats.twr,
            "hover_time": self.hover.flight_time,
            "hover_power": hover_power,
            "max_current": self.max.current,
            "specific_thrust": (
                self.stats.weight * 1000 / hover_power
                if self.stats.twr > 0 and hover_power > 0 else 0.0
            ),
        }

    def range_dataframe(self) -> pd.DataFrame:
        """Range estimator samples as a DataFrame."""
        return pd.DataFrame(
            [asdict(s) for s in self.graphs.range],
            columns=[
                "speed", "flight_time_no_drag", "range_no_drag",
                "flight_time_incl_drag", "range_incl_drag", "current",
            ],
        )

    def motor_dataframe(self) -> pd.DataFrame:
        """Motor characteristics samples as a DataFrame."""
        return pd.DataFrame(
            [asdict(s) for s in self.graphs.motor],
            columns=[
                "current", "voltage", "input_power", "waste_power",
                "output_power", "efficiency", "rpm", "temperature",
                "temperature_over_limit",
            ],
        )

    def summary(self) -> str:
        """Generate the formatted remarks report."""
        hover, top, opt, stats = self.hover, self.max, self.opt, self.stats

        lines = [
            "Multirotor Performance",
            "=" * 50,
            "Battery",
            f"  Load: {stats.battery_load:.2f} C",
            f"  Voltage: {hover.voltage:.2f} V",
            f"  Energy: {stats.battery_energy:.1f} Wh",
            f"  Mixed Flight Time: {self.mixed.flight_time:.1f} min",
            f"  Hover Flight Time: {hover.flight_time:.1f} min",
            "Motor @ Optimum Efficiency",
            f"  Current: {opt.motor_current:.2f} A",
            f"  Voltage: {opt.voltage:.2f} V",
            f"  Revolutions: {opt.rpm:.0f} rpm",
            f"  Electric Power: {opt.electrical_power_per_rotor:.1f} W",
            f"  Mech. Power: {opt.mechanical_power_per_rotor:.1f} W",
            f"  Efficiency: {opt.efficiency * 100:.1f} %",
            "Motor @ Maximum",
            f"  Current: {top.current_per_rotor:.2f} A",
            f"  Voltage: {top.voltage:.2f} V",
            f"  Revolutions: {top.rpm:.0f} rpm",
            f"  Electric Power: {top.electrical_power_per_rotor:.1f} W",
            f"  Mech. Power: {top.mechanical_power_per_rotor:.1f} W",
            f"  Est. Temp: {top.temperature:.0f} °C",
            "Motor @ Hover",
            f"  Current: {hover.current_per_rotor:.2f} A",
            f"  Voltage: {hover.voltage:.2f} V",
            f"  Revolutions: {hover.rpm:.0f} rpm",
            f"  Throttle: {hover.throttle:.0f} %",
            f"  Electric Power: {hover.electrical_power_per_rotor:.1f} W",
            f"  Mech. Power: {hover.mechanical_power_per_rotor:.1f} W",
            f"  Spec. Thrust: {hover.specific_thrust:.2f} g/W",
            "Total Drive",
            f"  Drive Weight: {stats.drive_weight * 1000:.0f} g",
            f"  Thrust-Weight: {stats.twr:.1f} : 1",
            f"  Current @ Hover: {hover.current:.2f} A",
            f"  P(in) @ Hover: {hover.electrical_power:.1f} W",
            f"  Current @ Max: {top.current:.2f} A",
            f"  P(in) @ Max: {top.electrical_power:.1f} W",
            "Multicopter",
            f"  All-up Weight: {stats.weight * 1000:.0f} g",
            f"  Add. Payload: {stats.payload * 1000:.0f} g",
            f"  Max Tilt: {stats.max_tilt:.0f} °",
            f"  Max Speed: {stats.max_speed:.0f} km/h",
            f"  Rate of Climb: {stats.rate_of_climb:.1f} m/s",
            f"  Total Disc Area: {stats.disc_area:.2f} dm²",
        ]

        if self.warnings:
            lines.append("=" * 50)
            lines.extend(f"Warning: {w}" for w in self.warnings)

        return "\n".join(lines)


# =============================================================================
# Assembly
# =============================================================================

def _specific_thrust(state: OperatingState) -> float:
    """Thrust per electrical watt (g/W)."""
    if state.electrical_power <= 0:
        return 0.0
    return state.thrust * 1000.0 / state.electrical_power


def _collect_warnings(
    solver: PerformanceSolver,
    config: MultirotorAnalyzerConfig,
    hover: OperatingPoint,
    max_point: OperatingPoint,
    stats: PerformanceStats,
    graphs: PerformanceGraphs
) -> Tuple[str, ...]:
    warnings = []
    aircraft = solver.aircraft

    if stats.twr < config.min_thrust_to_weight:
        warnings.append(
            f"Thrust-to-weight ratio {stats.twr:.2f} is below "
            f"{config.min_thrust_to_weight:.1f}; the aircraft cannot hover"
        )
    elif hover.throttle is not None and hover.throttle > config.hover_throttle_warning:
        warnings.append(
            f"Hover throttle {hover.throttle:.0f}% leaves little control reserve"
        )

    c_rating = aircraft.battery.c_rating
    if c_rating and stats.battery_load > c_rating:
        warnings.append(
            f"Battery load {stats.battery_load:.1f} C exceeds the "
            f"continuous rating of {c_rating:.0f} C"
        )

    esc_cont = aircraft.esc.current_cont
    if esc_cont and max_point.motor_current > esc_cont:
        warnings.append(
            f"Max-throttle motor current {max_point.motor_current:.1f} A exceeds "
            f"the ESC continuous rating of {esc_cont:.0f} A"
        )

    if any(s.temperature_over_limit > 0 for s in graphs.motor):
        warnings.append(
            f"Motor case temperature exceeds {MOTOR_TEMP_LIMIT:.0f} °C "
            "within the motor current range"
        )

    expected_samples = SCAN_STEPS + 1 if stats.max_speed > 0 else 1
    if not graphs.range:
        warnings.append("Level flight is not sustainable at any airspeed")
    elif len(graphs.range) < expected_samples:
        warnings.append(
            f"Range curve ends at {graphs.range[-1].speed:.0f} km/h; "
            "faster flight is not sustainable"
        )

    return tuple(warnings)


def assemble_result(
    solver: PerformanceSolver,
    hover_state: OperatingState,
    max_state: OperatingState,
    opt_state: OperatingState,
    envelope: FlightEnvelope,
    range_curve: Tuple[RangeSample, ...],
    motor_curve: Tuple[MotorSample, ...],
    config: Optional[MultirotorAnalyzerConfig] = None
) -> PerformanceResult:
    """
    Assemble the result structure from the solver outputs.

    Parameters:
    ----------
    solver : PerformanceSolver
        Solver the states were computed with

    hover_state, max_state, opt_state : OperatingState
        Operating points

    envelope : FlightEnvelope
        Flight envelope statistics

    range_curve, motor_curve : tuple
        Curve samples

    config : MultirotorAnalyzerConfig, optional
        Warning thresholds. Uses the default configuration if None.

    Returns:
    -------
    PerformanceResult
    """
    config = config if config is not None else DEFAULT_CONFIG
    ambient = solver.ambient_temp

    hover_time = solver.flight_time_min(hover_state.current)
    throttle = hover_state.rpm / max_state.rpm * 100.0 if max_state.rpm > 0 else 0.0

    hover = OperatingPoint.from_state(
        hover_state,
        flight_time=hover_time,
        throttle=throttle,
        specific_thrust=_specific_thrust(hover_state),
        temperature=ambient + hover_state.electrical_power * HOVER_TEMP_RISE,
    )
    max_point = OperatingPoint.from_state(
        max_state,
        flight_time=solver.flight_time_min(max_state.current),
        throttle=100.0,
        specific_thrust=_specific_thrust(max_state),
        temperature=ambient + max_state.electrical_power * MAX_TEMP_RISE,
    )
    opt = OperatingPoint.from_state(
        opt_state,
        flight_time=solver.flight_time_min(opt_state.current),
        throttle=opt_state.rpm / max_state.rpm * 100.0 if max_state.rpm > 0 else 0.0,
    )

    battery_load = (
        hover_state.current / solver.capacity_ah if solver.capacity_ah > 0 else 0.0
    )

    stats = PerformanceStats(
        weight=solver.total_weight_kg,
        drive_weight=solver.drive_weight_g / 1000.0,
        twr=envelope.thrust_to_weight,
        payload=max(0.0, max_state.thrust - solver.total_weight_kg),
        max_tilt=envelope.max_tilt_deg,
        max_speed=envelope.max_speed_kmh,
        rate_of_climb=envelope.rate_of_climb,
        disc_area=solver.disc_area_m2 * 100.0,
        battery_energy=solver.battery_energy_wh,
        battery_load=battery_load,
    )

    graphs = PerformanceGraphs(range=tuple(range_curve), motor=tuple(motor_curve))

    return PerformanceResult(
        hover=hover,
        max=max_point,
        opt=opt,
        mixed=MixedMission(flight_time=solver.mixed_flight_time_min(hover_state.current)),
        stats=stats,
        graphs=graphs,
        warnings=_collect_warnings(solver, config, hover, max_point, stats, graphs),
    )
