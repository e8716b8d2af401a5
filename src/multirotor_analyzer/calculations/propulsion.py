"""
Propulsion Coefficient Calculations
===================================

Empirical thrust and power coefficients of a fixed-pitch propeller and the
static thrust/power constants derived from them:

    T [N] = k_thrust × n²       k_thrust = Ct × ρ × D⁴
    P [W] = k_power × n³        k_power  = Cp × ρ × D⁵

with n in revolutions per second and D in meters.

Ct grows with pitch ratio and blade count. Cp is built from the untuned
base Ct (pitch term only) scaled by the pitch ratio, so the thrust tuning
constant and the thrust blade factor do not leak into power. Each
coefficient carries its own tuning constant to match measured data.
"""

import math
from dataclasses import dataclass

from ..config import (
    INCH_TO_METER,
    CT_BASE,
    CT_PITCH_SLOPE,
    CT_BLADE_EXPONENT,
    CP_RATIO,
    CP_BLADE_EXPONENT,
)


@dataclass(frozen=True)
class PropulsionCoefficients:
    """
    Coefficients of one propeller at one air density.

    Attributes:
    ----------
    ct, cp : float
        Dimensionless thrust and power coefficients

    k_thrust : float
        Thrust constant (N per rps²)

    k_power : float
        Power constant (W per rps³)

    diameter_m : float
        Propeller diameter (m)
    """
    ct: float
    cp: float
    k_thrust: float
    k_power: float
    diameter_m: float

    def thrust_n(self, rps: float) -> float:
        """Static thrust of one propeller (N)."""
        return self.k_thrust * rps ** 2

    def power_w(self, rps: float) -> float:
        """Shaft power of one propeller (W)."""
        return self.k_power * rps ** 3

    def rps_for_thrust(self, thrust_n: float) -> float:
        """
        Rotational speed (rps) that produces the given thrust.

        Returns 0 when the propeller produces no thrust at all.
        """
        if self.k_thrust <= 0 or thrust_n <= 0:
            return 0.0
        return math.sqrt(thrust_n / self.k_thrust)


def calculate_propulsion_coefficients(
    diameter_in: float,
    pitch_in: float,
    blades: float,
    air_density: float,
    t_const: float = 1.0,
    p_const: float = 1.0
) -> PropulsionCoefficients:
    """
    Calculate thrust and power coefficients for a propeller.

    Parameters:
    ----------
    diameter_in, pitch_in : float
        Propeller diameter and pitch (in)

    blades : float
        Blade count

    air_density : float
        Air density (kg/m³)

    t_const, p_const : float
        Thrust and power tuning constants

    Returns:
    -------
    PropulsionCoefficients
        A zero diameter or blade count yields zero coefficients.
    """
    diameter_m = diameter_in * INCH_TO_METER

    if diameter_in <= 0 or blades <= 0:
        return PropulsionCoefficients(0.0, 0.0, 0.0, 0.0, max(diameter_m, 0.0))

    ratio_pd = pitch_in / diameter_in
    blade_ratio = blades / 2.0

    base_ct = CT_BASE + CT_PITCH_SLOPE * ratio_pd
    ct = base_ct * t_const * blade_ratio ** CT_BLADE_EXPONENT

    cp = base_ct * ratio_pd * CP_RATIO * p_const * blade_ratio ** CP_BLADE_EXPONENT

    return PropulsionCoefficients(
        ct=ct,
        cp=cp,
        k_thrust=ct * air_density * diameter_m ** 4,
        k_power=cp * air_density * diameter_m ** 5,
        diameter_m=diameter_m,
    )


def calculate_disc_area_m2(diameter_in: float, rotor_count: int) -> float:
    """Total rotor disc area of all rotors (m²)."""
    radius_m = diameter_in * INCH_TO_METER / 2.0
    return math.pi * radius_m ** 2 * rotor_count
