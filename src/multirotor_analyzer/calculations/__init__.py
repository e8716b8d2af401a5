"""
Multirotor Analyzer Calculations Module
=======================================

Pure functions for the leaf models of the performance calculator:
environment, mass, battery and propeller coefficients.
"""

from .environment import calculate_air_density

from .mass import (
    calculate_drive_weight_g,
    calculate_total_weight_kg,
)

from .battery import (
    calculate_nominal_voltage,
    calculate_pack_resistance,
    calculate_capacity_ah,
    calculate_pack_energy_wh,
    calculate_usable_charge_ah,
    calculate_loaded_voltage,
    calculate_flight_time_min,
)

from .propulsion import (
    PropulsionCoefficients,
    calculate_propulsion_coefficients,
    calculate_disc_area_m2,
)

__all__ = [
    # Environment
    "calculate_air_density",
    # Mass
    "calculate_drive_weight_g",
    "calculate_total_weight_kg",
    # Battery
    "calculate_nominal_voltage",
    "calculate_pack_resistance",
    "calculate_capacity_ah",
    "calculate_pack_energy_wh",
    "calculate_usable_charge_ah",
    "calculate_loaded_voltage",
    "calculate_flight_time_min",
    # Propulsion
    "PropulsionCoefficients",
    "calculate_propulsion_coefficients",
    "calculate_disc_area_m2",
]
