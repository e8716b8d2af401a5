"""
Multirotor Performance Solver Module
====================================

This module finds the steady-state operating points of a multirotor drive
train: battery, speed controllers, motors and propellers working against
the aircraft's weight.

Every operating point is derived from a single mapping, rotational speed ->
electrical/mechanical state (state_at_rpm). The solvers only choose which
speed to evaluate:

- Hover: closed-form inversion of thrust = weight
- Max throttle: damped fixed-point iteration against the voltage, ESC
  current and motor power limits
- Optimum efficiency: discrete scan of the reachable speed range

Classes:
--------
- OperatingState: Electrical and mechanical state at one rotational speed
- PerformanceSolver: Solver bound to one aircraft configuration

Theory Background:
-----------------
    P_mech = k_power × n³                (per rotor, n in rps)
    Q      = P_mech / (2π × n)
    I_m    = Q / Kt + I0                 Kt = 9.55 / Kv
    I_bat  = I_m × rotors + I_misc
    V      = max(3.0 × cells, V_nom − I_bat × R_pack)
    T      = k_thrust × n² × rotors / g  (kg-force)

Usage:
------
    from src.multirotor_analyzer.solver import PerformanceSolver

    solver = PerformanceSolver(aircraft)
    hover = solver.solve_hover()
    print(f"Hover current: {hover.current:.1f} A")
"""

import math
from dataclasses import dataclass, replace
from typing import Optional

import numpy as np

from .config import (
    MultirotorAnalyzerConfig,
    DEFAULT_CONFIG,
    GRAVITY,
    KT_FROM_KV_FACTOR,
    CRUISE_CURRENT_FACTOR,
    MISSION_HOVER_SHARE,
    MISSION_CRUISE_SHARE,
    MAX_THROTTLE_PASSES,
    VOLTAGE_HEADROOM,
    SCAN_STEPS,
    OPTIMUM_SCAN_START,
)
from .models import AircraftConfig
from .debugger import CalculationDebugger
from .calculations import (
    calculate_air_density,
    calculate_drive_weight_g,
    calculate_total_weight_kg,
    calculate_nominal_voltage,
    calculate_pack_resistance,
    calculate_capacity_ah,
    calculate_pack_energy_wh,
    calculate_usable_charge_ah,
    calculate_loaded_voltage,
    calculate_flight_time_min,
    calculate_propulsion_coefficients,
    calculate_disc_area_m2,
)


@dataclass(frozen=True)
class OperatingState:
    """
    Drive train state at one commanded rotational speed.

    Attributes:
    ----------
    rpm : float
        Rotational speed (RPM)

    current : float
        Total battery current, all rotors plus miscellaneous load (A)

    motor_current : float
        Current of one motor (A)

    voltage : float
        Loaded battery voltage (V)

    electrical_power : float
        Battery output power (W)

    mechanical_power : float
        Shaft power of all rotors (W)

    thrust : float
        Static thrust of all rotors (kg-force)

    efficiency : float
        Shaft power / battery power (0-1)

    torque : float
        Torque of one motor (Nm)

    rotor_count : int
        Number of rotors the totals are summed over
    """
    rpm: float
    current: float
    motor_current: float
    voltage: float
    electrical_power: float
    mechanical_power: float
    thrust: float
    efficiency: float
    torque: float
    rotor_count: int = 1

    @property
    def current_per_rotor(self) -> float:
        return self.current / self.rotor_count

    @property
    def electrical_power_per_rotor(self) -> float:
        return self.electrical_power / self.rotor_count

    @property
    def mechanical_power_per_rotor(self) -> float:
        return self.mechanical_power / self.rotor_count


class PerformanceSolver:
    """
    Operating point solver for one aircraft configuration.

    All derived quantities of the configuration (air density, weights,
    pack values, propeller constants) are computed once on construction.
    The solver holds no other state; every method is a pure function of
    the configuration and its arguments.

    Attributes:
    ----------
    aircraft : AircraftConfig
        Aircraft being analyzed

    config : MultirotorAnalyzerConfig
        Analyzer settings (input fallbacks)

    air_density : float
        Air density at the field (kg/m³)

    rotor_count : int
        Effective rotor count

    total_weight_kg : float
        All-up weight (kg)

    props : PropulsionCoefficients
        Propeller constants at the field air density

    Example:
    -------
        solver = PerformanceSolver(aircraft)

        max_state = solver.solve_max_throttle()
        opt_state = solver.solve_optimum_efficiency(max_state.rpm)
    """

    def __init__(
        self,
        aircraft: AircraftConfig,
        config: Optional[MultirotorAnalyzerConfig] = None,
        debugger: Optional[CalculationDebugger] = None
    ):
        """
        Initialize the solver and derive the configuration constants.

        Parameters:
        ----------
        aircraft : AircraftConfig
            Aircraft configuration (already numeric)

        config : MultirotorAnalyzerConfig, optional
            Analyzer settings. Uses the default configuration if None.

        debugger : CalculationDebugger, optional
            Receives every intermediate value when given.
        """
        self.aircraft = aircraft
        self.config = config if config is not None else DEFAULT_CONFIG
        self.debugger = debugger

        env = aircraft.environment
        battery = aircraft.battery
        motor = aircraft.motor
        prop = aircraft.prop

        self.rotor_count = self.config.effective_rotor_count(aircraft.frame.rotor_count)
        self.ambient_temp = env.temperature

        # Environment
        self.air_density = calculate_air_density(env.temperature, env.elevation)
        self._trace(
            "Environment", "Air density (ISA approximation)",
            "rho = 1.225 × (1 − 0.0065h/288.15)^4.25 × 288.15/(T+273.15)",
            {"T": env.temperature, "h": env.elevation},
            self.air_density, "rho", "kg/m³",
        )

        # Weights
        self.drive_weight_g = calculate_drive_weight_g(aircraft, self.rotor_count)
        self.total_weight_kg = calculate_total_weight_kg(aircraft, self.rotor_count)
        self._trace(
            "Mass", "All-up weight",
            "W = frame + n×(motor + esc) + battery + misc",
            {"frame_g": aircraft.frame.weight, "drive_g": self.drive_weight_g,
             "misc_g": aircraft.frame.misc_weight},
            self.total_weight_kg, "W", "kg",
        )

        # Battery
        self.cells = battery.cells
        parallel = self.config.effective_parallel_count(battery.parallel)
        cell_resistance = self.config.effective_cell_resistance(battery.resistance)
        self.nominal_voltage = calculate_nominal_voltage(battery.cells)
        self.pack_resistance = calculate_pack_resistance(
            cell_resistance, battery.cells, parallel
        )
        self.capacity_ah = calculate_capacity_ah(battery.capacity, parallel)
        self.usable_charge_ah = calculate_usable_charge_ah(self.capacity_ah)
        self.battery_energy_wh = calculate_pack_energy_wh(
            battery.capacity, battery.cells, parallel
        )
        self._trace(
            "Battery", "Pack resistance",
            "R_pack = R_cell × S / P",
            {"R_cell": cell_resistance, "S": battery.cells, "P": parallel},
            self.pack_resistance, "R_pack", "Ω",
        )
        self._trace(
            "Battery", "Usable charge",
            "C_usable = 0.80 × capacity × P",
            {"capacity_mAh": battery.capacity, "P": parallel},
            self.usable_charge_ah, "C_usable", "Ah",
        )

        # Propeller
        self.props = calculate_propulsion_coefficients(
            prop.diameter,
            prop.pitch,
            prop.blades,
            self.air_density,
            self.config.effective_tuning_constant(prop.t_const),
            self.config.effective_tuning_constant(prop.p_const),
        )
        self.disc_area_m2 = calculate_disc_area_m2(prop.diameter, self.rotor_count)
        self._trace(
            "Propeller", "Thrust and power constants",
            "k_T = Ct·rho·D⁴, k_P = Cp·rho·D⁵",
            {"Ct": self.props.ct, "Cp": self.props.cp, "D_m": self.props.diameter_m},
            self.props.k_thrust, "k_T", "N/rps²",
            comment=f"k_P = {self.props.k_power:.6g} W/rps³",
        )

        self.kv = motor.kv
        self.no_load_current = motor.no_load_current
        self.motor_resistance = motor.resistance

    # =========================================================================
    # Tracing
    # =========================================================================

    def _trace(self, category, description, formula, variables, result,
               result_name, result_unit="", comment=""):
        if self.debugger is not None:
            self.debugger.add_step(
                category, description, formula, variables, result,
                result_name, result_unit, comment,
            )

    # =========================================================================
    # Equilibrium State
    # =========================================================================

    def loaded_voltage(self, total_current: float) -> float:
        """Battery voltage at a total current draw, with the cutoff floor."""
        return calculate_loaded_voltage(total_current, self.cells, self.pack_resistance)

    def flight_time_min(self, total_current: float) -> float:
        """Endurance on the usable charge at a constant current (min)."""
        return calculate_flight_time_min(self.usable_charge_ah, total_current)

    def state_at_rpm(self, rpm: float) -> OperatingState:
        """
        Calculate the self-consistent drive train state at a rotational speed.

        Closed form, no iteration. At zero speed torque is 0 and the motors
        draw their no-load current.

        Parameters:
        ----------
        rpm : float
            Propeller rotational speed (RPM)

        Returns:
        -------
        OperatingState
        """
        n = self.rotor_count
        rps = rpm / 60.0

        p_mech = self.props.power_w(rps)
        torque = p_mech / (rps * 2 * math.pi) if rps != 0 else 0.0

        # Q / Kt with Kt = 9.55 / Kv
        i_motor = torque * self.kv / KT_FROM_KV_FACTOR + self.no_load_current
        i_total = i_motor * n + self.aircraft.frame.misc_current

        v_loaded = self.loaded_voltage(i_total)
        p_elec = v_loaded * i_total

        efficiency = (p_mech * n) / p_elec if p_elec > 0 else 0.0
        efficiency = min(1.0, max(0.0, efficiency))

        thrust_kg = self.props.thrust_n(rps) * n / GRAVITY

        return OperatingState(
            rpm=rpm,
            current=i_total,
            motor_current=i_motor,
            voltage=v_loaded,
            electrical_power=p_elec,
            mechanical_power=p_mech * n,
            thrust=thrust_kg,
            efficiency=efficiency,
            torque=torque,
            rotor_count=n,
        )

    # =========================================================================
    # Hover
    # =========================================================================

    def hover_rpm(self) -> float:
        """
        Rotational speed at which total thrust equals weight (RPM).
        """
        thrust_per_rotor = self.total_weight_kg * GRAVITY / self.rotor_count
        return self.props.rps_for_thrust(thrust_per_rotor) * 60.0

    def solve_hover(self) -> OperatingState:
        """
        Solve the hover operating point.

        Returns:
        -------
        OperatingState
            State at the speed where thrust = weight
        """
        rpm = self.hover_rpm()
        state = self.state_at_rpm(rpm)
        self._trace(
            "Hover", "Hover speed from thrust = weight",
            "n = sqrt(W·g / rotors / k_T)",
            {"W": self.total_weight_kg, "rotors": self.rotor_count},
            rpm, "rpm_hover", "RPM",
        )
        self._trace(
            "Hover", "Hover current",
            "I = I_m × rotors + I_misc",
            {"I_m": state.motor_current, "V": state.voltage},
            state.current, "I_hover", "A",
        )
        return state

    def mixed_flight_time_min(self, hover_current: float) -> float:
        """
        Endurance of a mixed mission: 25% hovering, 75% cruising.

        Cruise current is taken as 0.85 × hover current.

        Parameters:
        ----------
        hover_current : float
            Total hover current (A)

        Returns:
        -------
        float
            Mixed-mission flight time (min)
        """
        hover_time = self.flight_time_min(hover_current)
        cruise_time = self.flight_time_min(hover_current * CRUISE_CURRENT_FACTOR)
        return MISSION_HOVER_SHARE * hover_time + MISSION_CRUISE_SHARE * cruise_time

    # =========================================================================
    # Max Throttle
    # =========================================================================

    def current_limit(self, state: OperatingState) -> float:
        """
        Highest motor current allowed at a state (A).

        The smallest of the state's own motor current, the motor power
        limit at the state's voltage and the ESC peak rating. Unset limits
        (0) do not constrain.
        """
        limit_power = self.aircraft.motor.limit_power
        esc_max = self.aircraft.esc.current_max

        power_limit = (
            limit_power / state.voltage
            if limit_power and state.voltage > 0
            else math.inf
        )
        esc_limit = esc_max if esc_max else math.inf

        return min(state.motor_current, power_limit, esc_limit)

    def solve_max_throttle(self) -> OperatingState:
        """
        Solve the full-throttle operating point.

        Damped fixed-point iteration with a fixed pass count:

        1. Start at the no-load speed Kv × V_nominal
        2. Evaluate the state; if a current limit is exceeded scale the
           speed down by I_limit / I_motor
        3. Ceiling from the sagged voltage: Kv × V_loaded × 0.80
        4. Average speed and ceiling, repeat

        Returns:
        -------
        OperatingState
            State at the final speed
        """
        rpm = self.kv * self.nominal_voltage

        for i in range(MAX_THROTTLE_PASSES):
            state = self.state_at_rpm(rpm)
            i_limit = self.current_limit(state)

            if i_limit < state.motor_current:
                rpm = rpm * (i_limit / state.motor_current)

            ceiling = self.kv * state.voltage * VOLTAGE_HEADROOM
            rpm = (rpm + ceiling) / 2.0

            self._trace(
                "Max Throttle", f"Pass {i + 1}",
                "rpm = (rpm × min(1, I_lim/I_m) + Kv·V·0.80) / 2",
                {"I_m": state.motor_current, "I_lim": i_limit, "V": state.voltage},
                rpm, "rpm_max", "RPM",
            )

        return self.state_at_rpm(rpm)

    # =========================================================================
    # Optimum Efficiency
    # =========================================================================

    def motor_efficiency(self, state: OperatingState) -> float:
        """Shaft power of one motor / its electrical input (0-1)."""
        p_in = state.voltage * state.motor_current
        if p_in <= 0:
            return 0.0
        return min(1.0, max(0.0, state.mechanical_power_per_rotor / p_in))

    def solve_optimum_efficiency(self, max_rpm: float) -> OperatingState:
        """
        Find the speed of best motor efficiency by a discrete scan.

        Samples from 0.1 × max_rpm up to max_rpm in steps of max_rpm / 20.
        The first sample with the highest efficiency wins; later equal
        values do not replace it.

        Parameters:
        ----------
        max_rpm : float
            Maximum throttle speed (RPM)

        Returns:
        -------
        OperatingState
            State at the optimum with efficiency replaced by the motor
            efficiency (0-1). Falls back to the max-throttle state with zero
            efficiency when no sample is efficient at all.
        """
        best_state = self.state_at_rpm(max_rpm)
        best_efficiency = 0.0

        num_samples = int(round((1.0 - OPTIMUM_SCAN_START) * SCAN_STEPS)) + 1
        for rpm in np.linspace(OPTIMUM_SCAN_START * max_rpm, max_rpm, num_samples):
            state = self.state_at_rpm(float(rpm))
            efficiency = self.motor_efficiency(state)
            if efficiency > best_efficiency:
                best_efficiency = efficiency
                best_state = state

        self._trace(
            "Optimum", "Best motor efficiency",
            "eta = P_mech_rotor / (V × I_m)",
            {"samples": num_samples, "rpm": best_state.rpm},
            best_efficiency, "eta_opt",
        )

        return replace(best_state, efficiency=best_efficiency)
