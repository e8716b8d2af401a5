"""
Flight Envelope Module
======================

Derives the flight envelope from the hover and max-throttle operating
points: thrust-to-weight ratio, maximum tilt, drag-limited top speed and
climb rate.

Drag uses a parasitic drag area that scales with weight
(CdA = 0.02 m²/kg × W), which fits typical open-frame multirotors without
needing a frontal-area input:

    D = 0.5 × ρ × CdA × V²

Top speed is reached at the tilt where the vertical thrust component just
balances weight; the horizontal component then equals drag.
"""

import math
from dataclasses import dataclass

from .config import GRAVITY, DRAG_AREA_PER_KG, MS_TO_KMH
from .solver import OperatingState


@dataclass(frozen=True)
class FlightEnvelope:
    """
    Flight envelope statistics.

    Attributes:
    ----------
    thrust_to_weight : float
        Max-throttle thrust / all-up weight

    max_tilt_deg : float
        Tilt at which level flight is still held at full throttle (deg)

    drag_area_m2 : float
        Parasitic drag area CdA (m²)

    max_speed_kmh : float
        Drag-limited top speed (km/h)

    rate_of_climb : float
        Climb rate from excess shaft power (m/s)
    """
    thrust_to_weight: float
    max_tilt_deg: float
    drag_area_m2: float
    max_speed_kmh: float
    rate_of_climb: float

    def drag_n(self, air_density: float, speed_ms: float) -> float:
        """Parasitic drag at an airspeed (N)."""
        return 0.5 * air_density * self.drag_area_m2 * speed_ms ** 2


def calculate_drag_area(total_weight_kg: float) -> float:
    """Parasitic drag area CdA (m²) from all-up weight."""
    return DRAG_AREA_PER_KG * total_weight_kg


def estimate_flight_envelope(
    total_weight_kg: float,
    air_density: float,
    hover_state: OperatingState,
    max_state: OperatingState
) -> FlightEnvelope:
    """
    Estimate the flight envelope.

    Parameters:
    ----------
    total_weight_kg : float
        All-up weight (kg)

    air_density : float
        Air density (kg/m³)

    hover_state : OperatingState
        Hover operating point

    max_state : OperatingState
        Max-throttle operating point

    Returns:
    -------
    FlightEnvelope
        Zero weight or zero drag area give zero ratios and speeds.
    """
    twr = max_state.thrust / total_weight_kg if total_weight_kg > 0 else 0.0

    # Below TWR 1 there is no tilt margin at all
    max_tilt_deg = math.degrees(math.acos(1.0 / twr)) if twr > 1 else 0.0

    cda = calculate_drag_area(total_weight_kg)

    horizontal_thrust_n = max_state.thrust * GRAVITY * math.sin(math.radians(max_tilt_deg))
    drag_factor = 0.5 * air_density * cda
    if drag_factor > 0 and horizontal_thrust_n > 0:
        max_speed_kmh = math.sqrt(horizontal_thrust_n / drag_factor) * MS_TO_KMH
    else:
        max_speed_kmh = 0.0

    weight_n = total_weight_kg * GRAVITY
    excess_power = max_state.mechanical_power - hover_state.mechanical_power
    rate_of_climb = excess_power / weight_n if weight_n > 0 else 0.0

    return FlightEnvelope(
        thrust_to_weight=twr,
        max_tilt_deg=max_tilt_deg,
        drag_area_m2=cda,
        max_speed_kmh=max_speed_kmh,
        rate_of_climb=rate_of_climb,
    )
