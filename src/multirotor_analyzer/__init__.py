"""
Multirotor Analyzer Module
==========================

This module predicts the steady-state flight performance of a multirotor
from its physical configuration: airframe, battery, speed controllers,
motors, propellers and ambient conditions.

The calculation produces:
- Hover, max-throttle and optimum-efficiency operating points
- Hover, minimum and mixed-mission flight times
- Flight envelope: thrust-to-weight, max tilt, top speed, climb rate
- Range-vs-airspeed and motor characteristics curves

Key Classes:
------------
- AircraftConfig: Immutable aircraft configuration (six sections)
- PerformanceSolver: Operating point solvers
- MultirotorCalculator: Full calculation pipeline
- PerformanceResult: Result structure with report and DataFrame export
- MultirotorPlotter: Range and motor charts

Example Usage:
-------------
    from src.multirotor_analyzer import AircraftConfig, calculate_performance

    aircraft = AircraftConfig.from_dict({
        "frame": {"weight": 450, "numMotors": 4},
        "battery": {"cells": 4, "capacity": 1500, "resistance": 0.005, "weight": 180},
        "esc": {"resistance": 0.005, "weight": 10},
        "motor": {"kv": 2400, "noLoadCurrent": 1.0, "resistance": 0.05, "weight": 30},
        "prop": {"diameter": 5, "pitch": 4.5, "blades": 3, "pConst": 1.1, "tConst": 1.0},
        "environment": {"temp": 25, "elevation": 0},
    })

    result = calculate_performance(aircraft)
    print(f"Hover: {result.hover.current:.1f} A, {result.hover.flight_time:.1f} min")

Units Convention:
----------------
- Weight: grams in the configuration, kg in results
- Thrust: kg-force
- Speed: km/h (curves), m/s (climb rate)
- Propeller dimensions: inches
- Power: Watts
- Flight time: minutes
"""

from .config import MultirotorAnalyzerConfig, DEFAULT_CONFIG, GRAVITY
from .models import (
    AircraftConfig,
    Environment,
    Frame,
    Battery,
    Esc,
    Motor,
    Propeller,
    DEFAULT_AIRCRAFT,
    parse_number,
    parse_section,
)
from .debugger import CalculationDebugger
from .solver import OperatingState, PerformanceSolver
from .envelope import FlightEnvelope, estimate_flight_envelope
from .curves import RangeSample, MotorSample, RangeCurveGenerator, MotorCurveGenerator
from .result import (
    OperatingPoint,
    MixedMission,
    PerformanceStats,
    PerformanceGraphs,
    PerformanceResult,
    assemble_result,
)
from .calculator import MultirotorCalculator, calculate_performance
from .plotting import MultirotorPlotter

__all__ = [
    # Configuration
    "MultirotorAnalyzerConfig",
    "DEFAULT_CONFIG",
    "GRAVITY",
    "AircraftConfig",
    "Environment",
    "Frame",
    "Battery",
    "Esc",
    "Motor",
    "Propeller",
    "DEFAULT_AIRCRAFT",
    "parse_number",
    "parse_section",
    # Solvers
    "OperatingState",
    "PerformanceSolver",
    "FlightEnvelope",
    "estimate_flight_envelope",
    "RangeSample",
    "MotorSample",
    "RangeCurveGenerator",
    "MotorCurveGenerator",
    # Results
    "OperatingPoint",
    "MixedMission",
    "PerformanceStats",
    "PerformanceGraphs",
    "PerformanceResult",
    "assemble_result",
    "MultirotorCalculator",
    "calculate_performance",
    # Diagnostics and plots
    "CalculationDebugger",
    "MultirotorPlotter",
]
