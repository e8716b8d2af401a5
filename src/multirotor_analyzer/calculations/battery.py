"""
Battery Calculations
====================

Pack-level electrical quantities:
- Nominal voltage and internal resistance
- Energy and usable charge
- Loaded voltage with the cutoff floor
- Endurance at a constant current

Pack IR = Cell IR × Series / Parallel, the same scaling the battery
calculator uses, with the cell voltage fixed at the LiPo nominal value.
"""

from ..config import (
    CELL_NOMINAL_VOLTAGE,
    CELL_CUTOFF_VOLTAGE,
    USABLE_CAPACITY_FRACTION,
)


def calculate_nominal_voltage(cells: float) -> float:
    """Nominal pack voltage (V) = cells × 3.7 V."""
    return cells * CELL_NOMINAL_VOLTAGE


def calculate_pack_resistance(cell_resistance: float, cells: float, parallel: float) -> float:
    """
    Total pack internal resistance (Ω).

    Parameters:
    ----------
    cell_resistance : float
        Internal resistance of one cell (Ω)

    cells : float
        Cells in series

    parallel : float
        Parallel groups (must be non-zero)
    """
    return cell_resistance * cells / parallel


def calculate_capacity_ah(capacity_mah: float, parallel: float) -> float:
    """Rated pack charge (Ah)."""
    return capacity_mah / 1000.0 * parallel


def calculate_pack_energy_wh(capacity_mah: float, cells: float, parallel: float) -> float:
    """Nominal pack energy (Wh) = capacity × nominal voltage."""
    return calculate_capacity_ah(capacity_mah, parallel) * calculate_nominal_voltage(cells)


def calculate_usable_charge_ah(capacity_ah: float) -> float:
    """Charge available before the pack counts as empty (Ah)."""
    return capacity_ah * USABLE_CAPACITY_FRACTION


def calculate_loaded_voltage(
    current_a: float,
    cells: float,
    pack_resistance: float
) -> float:
    """
    Pack voltage under load.

    V = max(3.0 × cells, V_nominal − I × R_pack)

    The floor is the cutoff voltage: below it the pack is treated as empty
    rather than allowed to sag further.

    Parameters:
    ----------
    current_a : float
        Total battery current (A)

    cells : float
        Cells in series

    pack_resistance : float
        Pack internal resistance (Ω)

    Returns:
    -------
    float
        Loaded pack voltage (V)
    """
    v_sag = current_a * pack_resistance
    return max(CELL_CUTOFF_VOLTAGE * cells, calculate_nominal_voltage(cells) - v_sag)


def calculate_flight_time_min(usable_charge_ah: float, current_a: float) -> float:
    """
    Endurance at a constant current (minutes).

    Returns 0 when the current is not positive.
    """
    if current_a <= 0:
        return 0.0
    return usable_charge_ah / current_a * 60.0
