"""
Multirotor Analyzer Configuration Module
========================================

This module contains configuration settings, physical constants and the
empirical tuning values used by the multirotor performance calculator.

The tuning values are empirical fits to measured flight data of common
hobby multirotors.

Physical Constants:
------------------
- GRAVITY: Gravitational acceleration (9.81 m/s²)
- AIR_DENSITY_SEA_LEVEL: Standard air density at sea level (1.225 kg/m³)
- ISA_TEMPERATURE_SEA_LEVEL: 288.15 K

Usage:
------
    from src.multirotor_analyzer.config import MultirotorAnalyzerConfig

    config = MultirotorAnalyzerConfig()
    print(config.default_rotor_count)
"""

import math
from dataclasses import dataclass


# =============================================================================
# Physical Constants
# =============================================================================

# Gravitational acceleration (m/s²)
GRAVITY = 9.81

# Standard air density at sea level (kg/m³)
AIR_DENSITY_SEA_LEVEL = 1.225

# ISA temperature lapse rate (K/m), used as a positive decrement
ISA_TEMPERATURE_LAPSE = 0.0065

# ISA sea level temperature (K)
ISA_TEMPERATURE_SEA_LEVEL = 288.15

# Density altitude exponent of the simplified ISA formula
ISA_DENSITY_EXPONENT = 4.25

# Celsius to Kelvin offset
KELVIN_OFFSET = 273.15

# Inches to meters
INCH_TO_METER = 0.0254

# Torque constant numerator: Kt [Nm/A] = 9.55 / Kv [RPM/V]
KT_FROM_KV_FACTOR = 9.55

# m/s to km/h
MS_TO_KMH = 3.6


# =============================================================================
# Battery Model
# =============================================================================

# Nominal LiPo cell voltage (V)
CELL_NOMINAL_VOLTAGE = 3.7

# Loaded voltage never drops below this per cell (V) - pack is empty here
CELL_CUTOFF_VOLTAGE = 3.0

# Fraction of rated capacity used for endurance (depth of discharge)
USABLE_CAPACITY_FRACTION = 0.80


# =============================================================================
# Propeller Coefficient Model
# =============================================================================

# Ct = (CT_BASE + CT_PITCH_SLOPE × P/D) × tConst × (blades/2)^CT_BLADE_EXPONENT
CT_BASE = 0.08
CT_PITCH_SLOPE = 0.12
CT_BLADE_EXPONENT = 0.7

# Cp = Ct × P/D × CP_RATIO × pConst × (blades/2)^CP_BLADE_EXPONENT
CP_RATIO = 0.40
CP_BLADE_EXPONENT = 0.9


# =============================================================================
# Mission and Solver Heuristics
# =============================================================================

# Cruise current as a fraction of hover current
CRUISE_CURRENT_FACTOR = 0.85

# Mixed mission: 25% hovering, 75% cruising
MISSION_HOVER_SHARE = 0.25
MISSION_CRUISE_SHARE = 0.75

# Max-throttle fixed-point iteration (pass count changes the result)
MAX_THROTTLE_PASSES = 5

# Max rpm is capped at this fraction of Kv × loaded voltage
VOLTAGE_HEADROOM = 0.80

# Number of steps of the optimum scan and of both curve generators
SCAN_STEPS = 20

# Optimum scan starts at this fraction of max rpm
OPTIMUM_SCAN_START = 0.1


# =============================================================================
# Flight Envelope
# =============================================================================

# Parasitic drag area per kg of all-up weight (m²/kg)
DRAG_AREA_PER_KG = 0.02

# Range curve extends to this multiple of max speed
RANGE_SPEED_MARGIN = 1.1

# Range samples stop once required rpm exceeds this multiple of max rpm
RANGE_RPM_MARGIN = 1.1

# Forward flight current = base × (ETL_BASE_SHARE + ETL_RECOVERED_SHARE × etl)
ETL_BASE_SHARE = 0.6
ETL_RECOVERED_SHARE = 0.4


# =============================================================================
# Thermal Heuristics
# =============================================================================

# Motor case temperature rise per watt of waste power (°C/W)
MOTOR_THERMAL_RISE = 0.3

# Motor case temperature limit (°C)
MOTOR_TEMP_LIMIT = 80.0

# Hover / max-throttle temperature estimate per watt of electrical power
HOVER_TEMP_RISE = 0.05
MAX_TEMP_RISE = 0.1

# Motor curve starts at this test current (A)
MOTOR_CURVE_START_CURRENT = 0.5

# Motor curve extends to this multiple of max-throttle motor current
MOTOR_CURVE_CURRENT_MARGIN = 1.2


@dataclass
class MultirotorAnalyzerConfig:
    """
    Configuration settings for the Multirotor Analyzer module.

    Attributes:
    ----------
    default_rotor_count : int
        Rotor count used when the frame reports zero rotors.

    default_cell_resistance : float
        Battery resistance per cell used when the battery reports zero (Ω).

    default_tuning_constant : float
        Propeller thrust/power tuning constant used when zero is given.

    hover_throttle_warning : float
        Hover throttle (%) above which the result carries a warning.
    """

    # -------------------------------------------------------------------------
    # Input Fallbacks
    # -------------------------------------------------------------------------

    default_rotor_count: int = 4

    default_cell_resistance: float = 0.005

    default_tuning_constant: float = 1.0

    # -------------------------------------------------------------------------
    # Warning Thresholds
    # -------------------------------------------------------------------------

    # Hover above this leaves little control authority
    hover_throttle_warning: float = 85.0

    # Minimum thrust-to-weight for a flyable aircraft
    min_thrust_to_weight: float = 1.0

    # -------------------------------------------------------------------------
    # Plot Styling
    # -------------------------------------------------------------------------

    figure_size: tuple = (11, 5)

    def effective_rotor_count(self, rotor_count: float) -> int:
        """Rotor count with the zero fallback applied."""
        if not math.isfinite(rotor_count):
            return self.default_rotor_count
        count = int(rotor_count)
        return count if count else self.default_rotor_count

    def effective_parallel_count(self, parallel: float) -> float:
        """Parallel group count, a zero count meaning a single group."""
        return parallel if parallel else 1

    def effective_cell_resistance(self, resistance: float) -> float:
        """Per-cell resistance with the zero fallback applied."""
        return resistance if resistance else self.default_cell_resistance

    def effective_tuning_constant(self, value: float) -> float:
        """Propeller tuning constant with the zero fallback applied."""
        return value if value else self.default_tuning_constant


# =============================================================================
# Default Configuration Instance
# =============================================================================

DEFAULT_CONFIG = MultirotorAnalyzerConfig()
