"""
Triangle Specification Methods

One immutable inputs type per calculation method. Each knows how to validate
its numbers, compute an area in the caller's unit, and compute the same area
in square meters given the unit's linear factor.
"""

from __future__ import annotations

import math
import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, fields
from typing import ClassVar, Mapping, Optional

from core.geometry.contract import DEGENERACY_EPSILON, STRAIGHT_ANGLE_DEG
from core.schema import METHOD_FIELDS, CalculationMethod, TriangleSpec

_DECIMAL_PREFIX = re.compile(r"^\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?")


def parse_decimal(raw: Optional[str]) -> float:
    """Parse the leading decimal number of ``raw``.

    Blank, missing, unparsable and non-finite values all read as 0 so that
    partially entered triangles simply fail validation.
    """
    if raw is None:
        return 0.0
    match = _DECIMAL_PREFIX.match(str(raw))
    if not match:
        return 0.0
    value = float(match.group(0))
    if not math.isfinite(value):
        return 0.0
    return value


def _radians(degrees: float) -> float:
    return degrees * (math.pi / 180.0)


def heron_area(a: float, b: float, c: float) -> float:
    s = (a + b + c) / 2.0
    # Rounding can push the product fractionally below zero for slivers
    return math.sqrt(max(s * (s - a) * (s - b) * (s - c), 0.0))


def shoelace_area(p1x: float, p1y: float, p2x: float, p2y: float, p3x: float, p3y: float) -> float:
    return 0.5 * abs(p1x * (p2y - p3y) + p2x * (p3y - p1y) + p3x * (p1y - p2y))


class TriangleInputs(ABC):
    """Parsed, typed inputs for one calculation method."""

    method: ClassVar[CalculationMethod]

    @classmethod
    def from_fields(cls, inputs: Mapping[str, Optional[str]]) -> "TriangleInputs":
        names = METHOD_FIELDS[cls.method]
        values = [parse_decimal(inputs.get(name)) for name in names]
        return cls(*values)

    @abstractmethod
    def is_valid(self) -> bool:
        """Whether the numbers describe a real, non-degenerate triangle."""

    @abstractmethod
    def area(self) -> float:
        """Area in square units of the inputs; assumes :meth:`is_valid`."""

    def area_in_meters(self, factor: float) -> float:
        """Area in square meters for inputs expressed in a unit of ``factor`` meters.

        Every formula is homogeneous of degree two in its lengths, so scaling
        the finished area by the squared factor is exact.
        """
        return self.area() * factor * factor

    def as_dict(self) -> dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


@dataclass(frozen=True)
class SSSInputs(TriangleInputs):
    method: ClassVar[CalculationMethod] = CalculationMethod.SSS

    a: float
    b: float
    c: float

    def is_valid(self) -> bool:
        a, b, c = self.a, self.b, self.c
        if a <= 0 or b <= 0 or c <= 0:
            return False
        return a + b > c and a + c > b and b + c > a

    def area(self) -> float:
        return heron_area(self.a, self.b, self.c)

    def area_in_meters(self, factor: float) -> float:
        return heron_area(self.a * factor, self.b * factor, self.c * factor)


@dataclass(frozen=True)
class SASInputs(TriangleInputs):
    method: ClassVar[CalculationMethod] = CalculationMethod.SAS

    side_a: float
    side_b: float
    angle_c: float

    def is_valid(self) -> bool:
        return self.side_a > 0 and self.side_b > 0 and 0 < self.angle_c < STRAIGHT_ANGLE_DEG

    def area(self) -> float:
        return 0.5 * self.side_a * self.side_b * math.sin(_radians(self.angle_c))


@dataclass(frozen=True)
class ASAInputs(TriangleInputs):
    method: ClassVar[CalculationMethod] = CalculationMethod.ASA

    angle_a: float
    angle_b: float
    side_c: float

    def is_valid(self) -> bool:
        return (
            self.angle_a > 0
            and self.angle_b > 0
            and self.side_c > 0
            and self.angle_a + self.angle_b < STRAIGHT_ANGLE_DEG
        )

    def area(self) -> float:
        angle_c = STRAIGHT_ANGLE_DEG - self.angle_a - self.angle_b
        # law of sines
        side_a = self.side_c * math.sin(_radians(self.angle_a)) / math.sin(_radians(angle_c))
        return 0.5 * side_a * self.side_c * math.sin(_radians(self.angle_b))


@dataclass(frozen=True)
class BaseHeightInputs(TriangleInputs):
    method: ClassVar[CalculationMethod] = CalculationMethod.BASE_HEIGHT

    base: float
    height: float

    def is_valid(self) -> bool:
        return self.base > 0 and self.height > 0

    def area(self) -> float:
        return 0.5 * self.base * self.height


@dataclass(frozen=True)
class CoordinatesInputs(TriangleInputs):
    method: ClassVar[CalculationMethod] = CalculationMethod.COORDINATES

    p1x: float
    p1y: float
    p2x: float
    p2y: float
    p3x: float
    p3y: float

    def is_valid(self) -> bool:
        return self.area() > DEGENERACY_EPSILON

    def area(self) -> float:
        return shoelace_area(self.p1x, self.p1y, self.p2x, self.p2y, self.p3x, self.p3y)

    def area_in_meters(self, factor: float) -> float:
        scaled = [value * factor for value in (self.p1x, self.p1y, self.p2x, self.p2y, self.p3x, self.p3y)]
        return shoelace_area(*scaled)


INPUT_TYPES: dict[CalculationMethod, type[TriangleInputs]] = {
    CalculationMethod.SSS: SSSInputs,
    CalculationMethod.SAS: SASInputs,
    CalculationMethod.ASA: ASAInputs,
    CalculationMethod.BASE_HEIGHT: BaseHeightInputs,
    CalculationMethod.COORDINATES: CoordinatesInputs,
}

_missing = set(CalculationMethod) - set(INPUT_TYPES)
if _missing:
    raise RuntimeError(f"No inputs type registered for {sorted(m.value for m in _missing)}")


FORMULA_DETAILS: dict[CalculationMethod, dict[str, str]] = {
    CalculationMethod.SSS: {
        "name": "Sides (Heron's)",
        "formula": "√s(s-a)(s-b)(s-c)",
    },
    CalculationMethod.SAS: {
        "name": "Side-Angle-Side",
        "formula": "½ ab sin(C)",
    },
    CalculationMethod.ASA: {
        "name": "Angle-Side-Angle",
        "formula": "a² sin(B)sin(C) / 2sin(B+C)",
    },
    CalculationMethod.BASE_HEIGHT: {
        "name": "Base & Height",
        "formula": "½ × base × height",
    },
    CalculationMethod.COORDINATES: {
        "name": "Coordinates (Shoelace)",
        "formula": "½ |x₁(y₂-y₃) + x₂(y₃-y₁) + x₃(y₁-y₂)|",
    },
}


def parse_inputs(spec: TriangleSpec) -> TriangleInputs:
    """Turn a spec's raw strings into the typed inputs of its method."""
    return INPUT_TYPES[spec.method].from_fields(spec.inputs)


__all__ = [
    "TriangleInputs",
    "SSSInputs",
    "SASInputs",
    "ASAInputs",
    "BaseHeightInputs",
    "CoordinatesInputs",
    "INPUT_TYPES",
    "FORMULA_DETAILS",
    "parse_decimal",
    "parse_inputs",
    "heron_area",
    "shoelace_area",
]
