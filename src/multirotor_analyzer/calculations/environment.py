"""
Environment Calculations
========================

Air density at the flying field from temperature and elevation.
"""

from ..config import (
    AIR_DENSITY_SEA_LEVEL,
    ISA_TEMPERATURE_LAPSE,
    ISA_TEMPERATURE_SEA_LEVEL,
    ISA_DENSITY_EXPONENT,
    KELVIN_OFFSET,
)


def calculate_air_density(temperature_c: float = 25.0, elevation_m: float = 0.0) -> float:
    """
    Calculate air density with the simplified ISA approximation.

    ρ = 1.225 × (1 − 0.0065 × h / 288.15)^4.25 × (288.15 / (T + 273.15))

    The elevation term gives the standard-atmosphere density ratio, the
    temperature term corrects it for the actual field temperature.

    Parameters:
    ----------
    temperature_c : float
        Air temperature (°C)

    elevation_m : float
        Field elevation above sea level (m)

    Returns:
    -------
    float
        Air density (kg/m³). Above the model's ceiling (~44 km) or at or
        below absolute zero the density is reported as 0.
    """
    altitude_ratio = 1.0 - ISA_TEMPERATURE_LAPSE * elevation_m / ISA_TEMPERATURE_SEA_LEVEL
    temperature_k = temperature_c + KELVIN_OFFSET

    if altitude_ratio <= 0 or temperature_k <= 0:
        return 0.0

    return (
        AIR_DENSITY_SEA_LEVEL
        * altitude_ratio ** ISA_DENSITY_EXPONENT
        * (ISA_TEMPERATURE_SEA_LEVEL / temperature_k)
    )
