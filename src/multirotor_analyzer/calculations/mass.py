"""
Mass Calculations
=================

All-up weight and drive weight of the aircraft. Motor and ESC weights are
given per unit and scale with the rotor count.
"""

from ..models import AircraftConfig


def calculate_drive_weight_g(config: AircraftConfig, rotor_count: int) -> float:
    """
    Weight of the drive train: motors + ESCs + battery (g).
    """
    motors = config.motor.weight * rotor_count
    escs = config.esc.weight * rotor_count
    return motors + escs + config.battery.weight


def calculate_total_weight_kg(config: AircraftConfig, rotor_count: int) -> float:
    """
    All-up weight: frame + drive train + miscellaneous payload (kg).
    """
    drive = calculate_drive_weight_g(config, rotor_count)
    return (config.frame.weight + drive + config.frame.misc_weight) / 1000.0
