"""
Performance Curves Module
=========================

Sampled curves of the calculator's two charts.

Range Estimator (vs airspeed):
-----------------------------
For each airspeed the rotors must carry weight and overcome drag:

    T_req = sqrt(W² + D²)

The speed for that thrust comes from inverting the static thrust model.
Forward flight improves rotor efficiency (translational lift); with the
hover induced velocity v_h = sqrt(T / (2 ρ A)) the momentum-theory factor
is 1 / sqrt(1 + (V / v_h)²), of which 40% is credited to the current:

    I_fwd = I_static × (0.6 + 0.4 × etl)

Sampling stops at the first airspeed the drive train cannot reach.

Motor Characteristics (vs current):
----------------------------------
Per-motor power balance at a test current with the pack sagging under the
load of all rotors:

    P_in    = V × I
    P_waste = I² × Rm + I0 × V
    RPM     = Kv × (V − I × Rm)

Case temperature rises 0.3 °C per watt of waste power above ambient.

Classes:
--------
- RangeSample, MotorSample: One curve point
- RangeCurveGenerator, MotorCurveGenerator: Restartable sample sequences
"""

import math
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np

from .config import (
    GRAVITY,
    MS_TO_KMH,
    SCAN_STEPS,
    RANGE_SPEED_MARGIN,
    RANGE_RPM_MARGIN,
    ETL_BASE_SHARE,
    ETL_RECOVERED_SHARE,
    MOTOR_THERMAL_RISE,
    MOTOR_TEMP_LIMIT,
    MOTOR_CURVE_START_CURRENT,
    MOTOR_CURVE_CURRENT_MARGIN,
)
from .envelope import FlightEnvelope
from .solver import PerformanceSolver


@dataclass(frozen=True)
class RangeSample:
    """
    One point of the range estimator.

    Attributes:
    ----------
    speed : float
        Airspeed (km/h)

    flight_time_no_drag : float
        Flight time ignoring drag (min) - the hover flight time

    range_no_drag : float
        Distance at this speed ignoring drag (km)

    flight_time_incl_drag : float
        Flight time including drag and translational lift (min)

    range_incl_drag : float
        Distance including drag and translational lift (km)

    current : float
        Battery current including the translational-lift correction (A)
    """
    speed: float
    flight_time_no_drag: float
    range_no_drag: float
    flight_time_incl_drag: float
    range_incl_drag: float
    current: float


@dataclass(frozen=True)
class MotorSample:
    """
    One point of the motor characteristics, for a single motor.

    Attributes:
    ----------
    current : float
        Motor test current (A)

    voltage : float
        Battery voltage with all rotors at this current (V)

    input_power, waste_power, output_power : float
        Electrical input, losses and shaft output (W)

    efficiency : float
        Output / input (%)

    rpm : float
        Rotational speed (RPM)

    temperature : float
        Estimated case temperature (°C)

    temperature_over_limit : float
        Case temperature above the 80 °C limit (°C), 0 when within it
    """
    current: float
    voltage: float
    input_power: float
    waste_power: float
    output_power: float
    efficiency: float
    rpm: float
    temperature: float
    temperature_over_limit: float


class RangeCurveGenerator:
    """
    Range and flight time versus airspeed.

    Iterating the generator computes the samples afresh each time, so the
    sequence can be restarted. Airspeeds run from 0 to 1.1 × max speed in
    20 steps.

    Example:
    -------
        curve = RangeCurveGenerator(solver, envelope, hover_time, max_rpm)
        for sample in curve:
            print(sample.speed, sample.range_incl_drag)
    """

    def __init__(
        self,
        solver: PerformanceSolver,
        envelope: FlightEnvelope,
        hover_time_min: float,
        max_rpm: float
    ):
        self.solver = solver
        self.envelope = envelope
        self.hover_time_min = hover_time_min
        self.max_rpm = max_rpm

    def speeds_kmh(self) -> np.ndarray:
        """Airspeeds to sample (km/h); only hover when there is no top speed."""
        max_speed = self.envelope.max_speed_kmh
        if max_speed <= 0:
            return np.zeros(1)
        return np.linspace(0.0, RANGE_SPEED_MARGIN * max_speed, SCAN_STEPS + 1)

    def sample_at(self, speed_kmh: float):
        """
        Evaluate one airspeed.

        Returns:
        -------
        RangeSample or None
            None when the required speed exceeds 1.1 × max rpm.
        """
        solver = self.solver
        rho = solver.air_density
        n = solver.rotor_count

        v_ms = speed_kmh / MS_TO_KMH
        drag_n = self.envelope.drag_n(rho, v_ms)
        weight_n = solver.total_weight_kg * GRAVITY
        thrust_req_n = math.hypot(weight_n, drag_n)

        thrust_per_rotor = thrust_req_n / n
        rpm_req = solver.props.rps_for_thrust(thrust_per_rotor) * 60.0

        if rpm_req > self.max_rpm * RANGE_RPM_MARGIN:
            return None

        state = solver.state_at_rpm(rpm_req)

        # Hover induced velocity of one rotor
        disc_area_per_rotor = solver.disc_area_m2 / n
        induced_denominator = 2 * rho * disc_area_per_rotor
        if induced_denominator > 0 and thrust_per_rotor > 0:
            v_h = math.sqrt(thrust_per_rotor / induced_denominator)
        else:
            v_h = 0.0

        etl_factor = 1.0 / math.sqrt(1 + (v_ms / v_h) ** 2) if v_h > 0 else 1.0
        current = state.current * (ETL_BASE_SHARE + ETL_RECOVERED_SHARE * etl_factor)

        time_incl_drag = solver.flight_time_min(current)

        return RangeSample(
            speed=speed_kmh,
            flight_time_no_drag=self.hover_time_min,
            range_no_drag=speed_kmh * self.hover_time_min / 60.0,
            flight_time_incl_drag=time_incl_drag,
            range_incl_drag=speed_kmh * time_incl_drag / 60.0,
            current=current,
        )

    def __iter__(self) -> Iterator[RangeSample]:
        for speed in self.speeds_kmh():
            sample = self.sample_at(float(speed))
            if sample is None:
                # Cannot sustain this airspeed or any faster one
                return
            yield sample

    def samples(self) -> Tuple[RangeSample, ...]:
        return tuple(self)


class MotorCurveGenerator:
    """
    Motor characteristics versus motor current.

    Test currents start at 0.5 A and step by 1.2 × I_max / 20 up to
    1.2 × the max-throttle motor current, giving at most 20 samples.
    """

    def __init__(self, solver: PerformanceSolver, max_motor_current: float):
        self.solver = solver
        self.max_current = max_motor_current * MOTOR_CURVE_CURRENT_MARGIN

    def currents(self) -> np.ndarray:
        """Test currents (A)."""
        step = self.max_current / SCAN_STEPS
        currents = MOTOR_CURVE_START_CURRENT + step * np.arange(SCAN_STEPS)
        return currents[currents <= self.max_current]

    def sample_at(self, current: float) -> MotorSample:
        """Evaluate one motor test current."""
        solver = self.solver

        v = solver.loaded_voltage(current * solver.rotor_count)
        rm = solver.motor_resistance

        p_in = v * current
        p_waste = current ** 2 * rm + solver.no_load_current * v
        p_out = max(0.0, p_in - p_waste)
        efficiency = p_out / p_in * 100.0 if p_in > 0 else 0.0

        temperature = solver.ambient_temp + p_waste * MOTOR_THERMAL_RISE

        return MotorSample(
            current=current,
            voltage=v,
            input_power=p_in,
            waste_power=p_waste,
            output_power=p_out,
            efficiency=efficiency,
            rpm=solver.kv * (v - current * rm),
            temperature=temperature,
            temperature_over_limit=max(0.0, temperature - MOTOR_TEMP_LIMIT),
        )

    def __iter__(self) -> Iterator[MotorSample]:
        for current in self.currents():
            yield self.sample_at(float(current))

    def samples(self) -> Tuple[MotorSample, ...]:
        return tuple(self)
