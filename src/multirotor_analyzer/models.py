"""
Aircraft Configuration Models
=============================

Immutable records describing one multirotor: airframe, environment,
battery, speed controller, motor and propeller. All values are plain
numbers in the units the calculator form uses (grams, inches, mAh, °C).

The records are frozen. A new configuration with one field changed is
derived with AircraftConfig.with_value(); nothing mutates a configuration
in place.

Usage:
------
    from src.multirotor_analyzer.models import AircraftConfig, DEFAULT_AIRCRAFT

    config = AircraftConfig.from_dict({
        "frame": {"weight": "450", "numMotors": 4},
        "battery": {"cells": 4, "capacity": 1500},
        ...
    })

    heavier = config.with_value("frame", "weight", 600)
"""

import dataclasses
import re
from dataclasses import dataclass, field, fields
from typing import Any, Dict, Mapping


def parse_number(value: Any) -> float:
    """
    Parse a form value into a number, substituting 0 when it cannot be read.

    Mirrors the form's lenient parsing: leading numeric text is accepted
    ("12.5 A" -> 12.5), anything else (empty text, None, words) becomes 0.
    """
    if isinstance(value, bool):
        return float(value)
    if isinstance(value, (int, float)):
        return float(value) if value == value else 0.0
    if value is None:
        return 0.0

    match = re.match(r"\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?", str(value))
    if match is None:
        return 0.0
    return float(match.group(0))


def parse_section(section: Mapping[str, Any]) -> Dict[str, float]:
    """Parse every field of one configuration section with parse_number()."""
    return {key: parse_number(value) for key, value in section.items()}


def _camel_to_snake(name: str) -> str:
    return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()


class _SectionMixin:
    """Shared dict conversion for the configuration records."""

    # Form field name -> attribute name, where the two differ beyond casing
    ALIASES: Dict[str, str] = {}

    @classmethod
    def field_name(cls, key: str) -> str:
        """
        Resolve a form or attribute field name to the attribute name.

        Raises:
        ------
        KeyError
            If the name does not belong to this section.
        """
        names = [f.name for f in fields(cls)]
        if key in names:
            return key
        if key in cls.ALIASES:
            return cls.ALIASES[key]
        snake = _camel_to_snake(key)
        if snake in names:
            return snake
        raise KeyError(
            f"Unknown field '{key}' for {cls.__name__}. "
            f"Available fields: {names}"
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]):
        """Build the record from a flat mapping; unknown keys are ignored."""
        values = {}
        for key, value in data.items():
            try:
                name = cls.field_name(key)
            except KeyError:
                continue
            if name == "charge_state":
                values[name] = str(value)
            else:
                values[name] = parse_number(value)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class Environment(_SectionMixin):
    """Ambient conditions at the flying field."""

    # Air temperature (°C)
    temperature: float = 25.0

    # Field elevation above sea level (m)
    elevation: float = 0.0

    # Pressure (hPa) - informational, density uses the ISA approximation
    pressure: float = 1013.0

    ALIASES = {"temp": "temperature"}


@dataclass(frozen=True)
class Frame(_SectionMixin):
    """Airframe without drive components."""

    # Model weight excluding motors, ESCs and battery (g)
    weight: float = 0.0

    # Rotor count (3, 4, 6 or 8)
    rotor_count: float = 4

    # Diagonal motor-to-motor size (mm)
    size: float = 0.0

    # Flight controller tilt limit (deg), 0 = no limit
    tilt_limit: float = 0.0

    # Additional payload / accessories
    misc_weight: float = 0.0
    misc_current: float = 0.0

    ALIASES = {"numMotors": "rotor_count"}


@dataclass(frozen=True)
class Battery(_SectionMixin):
    """
    Battery pack built from identical cells.

    resistance is per cell; the pack resistance scales with
    cells / parallel. Nominal cell voltage is fixed by the model, the
    voltage field is kept for display only.
    """

    cells: float = 4
    parallel: float = 1

    # Capacity of one parallel group (mAh)
    capacity: float = 0.0

    # Continuous / peak C-rating
    c_rating: float = 0.0
    c_rating_max: float = 0.0

    # Internal resistance per cell (Ω)
    resistance: float = 0.005

    voltage: float = 3.7

    # Pack weight (g)
    weight: float = 0.0

    charge_state: str = "normal"


@dataclass(frozen=True)
class Esc(_SectionMixin):
    """Electronic speed controller, one per rotor."""

    # Continuous / peak current rating (A), 0 = not set
    current_cont: float = 0.0
    current_max: float = 0.0

    resistance: float = 0.0

    # Weight per unit (g)
    weight: float = 0.0


@dataclass(frozen=True)
class Motor(_SectionMixin):
    """Brushless outrunner, one per rotor."""

    # Velocity constant (RPM/V)
    kv: float = 0.0

    # No-load current (A) and the voltage it was measured at (V)
    no_load_current: float = 0.0
    no_load_voltage: float = 0.0

    # Power limit (W), 0 = no limit
    limit_power: float = 0.0

    # Winding resistance (Ω)
    resistance: float = 0.0

    # Case length (mm) and magnet pole count - informational
    length: float = 0.0
    poles: float = 14

    # Weight per unit (g)
    weight: float = 0.0


@dataclass(frozen=True)
class Propeller(_SectionMixin):
    """Propeller geometry and empirical tuning constants."""

    # Diameter and pitch (in)
    diameter: float = 0.0
    pitch: float = 0.0

    blades: float = 2

    # Thrust / power tuning constants (dimensionless)
    t_const: float = 1.0
    p_const: float = 1.0

    gear_ratio: float = 1.0

    ALIASES = {"tConst": "t_const", "pConst": "p_const"}


SECTIONS = {
    "frame": Frame,
    "environment": Environment,
    "battery": Battery,
    "esc": Esc,
    "motor": Motor,
    "prop": Propeller,
}


@dataclass(frozen=True)
class AircraftConfig:
    """
    Complete calculator input: six configuration sections.

    Attributes:
    ----------
    frame : Frame
    environment : Environment
    battery : Battery
    esc : Esc
    motor : Motor
    prop : Propeller
    """

    frame: Frame = field(default_factory=Frame)
    environment: Environment = field(default_factory=Environment)
    battery: Battery = field(default_factory=Battery)
    esc: Esc = field(default_factory=Esc)
    motor: Motor = field(default_factory=Motor)
    prop: Propeller = field(default_factory=Propeller)

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any]]) -> "AircraftConfig":
        """
        Build a configuration from named sections of flat field mappings.

        Field values are parsed leniently (see parse_number); sections that
        are missing take their record defaults.

        Parameters:
        ----------
        data : mapping
            Keys among "frame", "environment", "battery", "esc", "motor",
            "prop". Field names may use the form's camelCase spelling.

        Returns:
        -------
        AircraftConfig
        """
        sections = {}
        for name, record in SECTIONS.items():
            if name in data:
                sections[name] = record.from_dict(data[name])
        return cls(**sections)

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {name: getattr(self, name).to_dict() for name in SECTIONS}

    def with_value(self, section: str, key: str, value: Any) -> "AircraftConfig":
        """
        Derive a new configuration with one field of one section changed.

        Raises:
        ------
        KeyError
            If the section or field does not exist.
        """
        if section not in SECTIONS:
            raise KeyError(
                f"Unknown section '{section}'. "
                f"Available sections: {list(SECTIONS)}"
            )
        record = getattr(self, section)
        name = record.field_name(key)
        if name != "charge_state":
            value = parse_number(value)
        return dataclasses.replace(
            self, **{section: dataclasses.replace(record, **{name: value})}
        )


# =============================================================================
# Default Aircraft (initial calculator form values)
# =============================================================================

DEFAULT_AIRCRAFT = AircraftConfig(
    frame=Frame(weight=1900, rotor_count=4, size=300),
    environment=Environment(temperature=25, elevation=500, pressure=1013),
    battery=Battery(
        cells=4,
        parallel=1,
        capacity=6000,
        c_rating=25,
        c_rating_max=35,
        resistance=0.0035,
        voltage=3.7,
        weight=148,
    ),
    esc=Esc(current_cont=50, current_max=50, resistance=0.005, weight=65),
    motor=Motor(
        kv=1300,
        no_load_current=0.95,
        no_load_voltage=10,
        limit_power=1050,
        resistance=0.076,
        length=19.7,
        poles=14,
        weight=47,
    ),
    prop=Propeller(diameter=7, pitch=3.5, blades=2, t_const=1.0, p_const=1.09),
)
