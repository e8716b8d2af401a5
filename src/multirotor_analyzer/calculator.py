"""
Multirotor Calculator Module
============================

Entry point of the performance prediction: runs the full pipeline from a
configuration to a PerformanceResult.

    environment / mass / battery / propeller constants
        -> hover, max throttle, optimum efficiency
        -> flight envelope
        -> range and motor curves
        -> result

The calculation is a pure function of its input. It never raises for
numeric input; degenerate configurations produce a defined, if poor,
result.

Usage:
------
    from src.multirotor_analyzer import calculate_performance, DEFAULT_AIRCRAFT

    result = calculate_performance(DEFAULT_AIRCRAFT)
    print(f"Hover: {result.hover.current:.1f} A, {result.hover.flight_time:.1f} min")
"""

from typing import Any, Mapping, Optional, Union

from .config import MultirotorAnalyzerConfig, DEFAULT_CONFIG
from .models import AircraftConfig
from .debugger import CalculationDebugger
from .solver import PerformanceSolver
from .envelope import estimate_flight_envelope
from .curves import RangeCurveGenerator, MotorCurveGenerator
from .result import PerformanceResult, assemble_result


class MultirotorCalculator:
    """
    Multirotor performance calculator.

    Attributes:
    ----------
    config : MultirotorAnalyzerConfig
        Analyzer settings shared by all calculations

    Example:
    -------
        calculator = MultirotorCalculator()

        result = calculator.calculate(aircraft)
        heavier = calculator.calculate(aircraft.with_value("frame", "weight", 600))
    """

    def __init__(self, config: Optional[MultirotorAnalyzerConfig] = None):
        """
        Initialize the calculator.

        Parameters:
        ----------
        config : MultirotorAnalyzerConfig, optional
            Analyzer settings. Uses the default configuration if None.
        """
        self.config = config if config is not None else DEFAULT_CONFIG

    def calculate(
        self,
        aircraft: Union[AircraftConfig, Mapping[str, Mapping[str, Any]]],
        debugger: Optional[CalculationDebugger] = None
    ) -> PerformanceResult:
        """
        Predict the performance of one aircraft.

        Parameters:
        ----------
        aircraft : AircraftConfig or mapping
            Configuration, or six named sections of field mappings

        debugger : CalculationDebugger, optional
            Records every calculation step when given

        Returns:
        -------
        PerformanceResult
        """
        if not isinstance(aircraft, AircraftConfig):
            aircraft = AircraftConfig.from_dict(aircraft)

        if debugger is not None:
            debugger.start(
                rotors=aircraft.frame.rotor_count,
                battery=f"{aircraft.battery.cells:g}S{aircraft.battery.parallel:g}P "
                        f"{aircraft.battery.capacity:g} mAh",
                motor=f"{aircraft.motor.kv:g} kv",
                prop=f"{aircraft.prop.diameter:g}x{aircraft.prop.pitch:g}"
                     f"x{aircraft.prop.blades:g}",
            )
            debugger.start_section("Configuration Constants")

        solver = PerformanceSolver(aircraft, self.config, debugger)

        if debugger is not None:
            debugger.start_section("Operating Points")

        hover_state = solver.solve_hover()
        max_state = solver.solve_max_throttle()
        opt_state = solver.solve_optimum_efficiency(max_state.rpm)

        envelope = estimate_flight_envelope(
            solver.total_weight_kg, solver.air_density, hover_state, max_state
        )

        if debugger is not None:
            debugger.start_section("Flight Envelope")
            debugger.add_step(
                "Envelope", "Thrust-to-weight ratio", "TWR = T_max / W",
                {"T_max": max_state.thrust, "W": solver.total_weight_kg},
                envelope.thrust_to_weight, "TWR",
            )
            debugger.add_step(
                "Envelope", "Drag-limited top speed",
                "V = sqrt(T_max·g·sin(tilt) / (0.5·rho·CdA))",
                {"tilt": envelope.max_tilt_deg, "CdA": envelope.drag_area_m2},
                envelope.max_speed_kmh, "V_max", "km/h",
            )

        hover_time = solver.flight_time_min(hover_state.current)
        range_curve = RangeCurveGenerator(
            solver, envelope, hover_time, max_state.rpm
        ).samples()
        motor_curve = MotorCurveGenerator(solver, max_state.motor_current).samples()

        result = assemble_result(
            solver, hover_state, max_state, opt_state, envelope,
            range_curve, motor_curve, self.config,
        )

        if debugger is not None:
            debugger.finish()

        return result


def calculate_performance(
    aircraft: Union[AircraftConfig, Mapping[str, Mapping[str, Any]]],
    config: Optional[MultirotorAnalyzerConfig] = None,
    debugger: Optional[CalculationDebugger] = None
) -> PerformanceResult:
    """
    Predict the performance of one aircraft (convenience function).

    See MultirotorCalculator.calculate().
    """
    return MultirotorCalculator(config).calculate(aircraft, debugger)
