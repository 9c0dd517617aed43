"""
Unit System

Canonical length and area conversion tables. Every conversion goes through
meters; factors are fixed positive constants.
"""

from __future__ import annotations

from enum import Enum


class Unit(str, Enum):
    """Length unit selectable for a project."""
    METERS = "m"
    FEET = "ft"
    INCHES = "in"

    @property
    def factor(self) -> float:
        """Multiplier taking one of this unit to meters."""
        return CONVERSION_FACTORS[self]

    @property
    def label(self) -> str:
        return UNIT_LABELS[self]


# To meters
CONVERSION_FACTORS: dict[Unit, float] = {
    Unit.METERS: 1.0,
    Unit.FEET: 0.3048,
    Unit.INCHES: 0.0254,
}

# One acre expressed in square units of each unit
ACRE_CONVERSION: dict[Unit, float] = {
    Unit.METERS: 4046.856,
    Unit.FEET: 43560.0,
    Unit.INCHES: 6272640.0,
}

UNIT_LABELS: dict[Unit, str] = {
    Unit.FEET: "Feet",
    Unit.INCHES: "Inches",
    Unit.METERS: "Meters",
}


def to_meters(value: float, unit: Unit) -> float:
    """Convert a length in ``unit`` to meters."""
    return value * CONVERSION_FACTORS[Unit(unit)]


def convert_area(area: float, from_unit: Unit, to_unit: Unit) -> float:
    """Convert an area between square units.

    Area scales with the square of the linear factor. Identical units return
    the input untouched so repeated conversions never drift.
    """
    from_unit = Unit(from_unit)
    to_unit = Unit(to_unit)
    if from_unit == to_unit:
        return area
    ratio = CONVERSION_FACTORS[from_unit] / CONVERSION_FACTORS[to_unit]
    return area * ratio * ratio


def area_to_acres(area: float, unit: Unit) -> float:
    """Express an area given in square ``unit`` as acres."""
    return area / ACRE_CONVERSION[Unit(unit)]


__all__ = [
    "Unit",
    "CONVERSION_FACTORS",
    "ACRE_CONVERSION",
    "UNIT_LABELS",
    "to_meters",
    "convert_area",
    "area_to_acres",
]
