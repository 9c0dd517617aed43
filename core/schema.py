"""Canonical data model shared by the kernel, the API and project files.

Field aliases follow the camelCase keys of the persisted project shape so a
project exported by the UI can be loaded and written back unchanged.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from core.exceptions import ScaleError
from core.units import Unit


class CalculationMethod(str, Enum):
    """How a triangle is specified."""
    SSS = "SSS"  # 3 sides (Heron's)
    SAS = "SAS"  # 2 sides, 1 included angle
    ASA = "ASA"  # 2 angles, 1 included side
    BASE_HEIGHT = "BaseHeight"
    COORDINATES = "Coordinates"  # shoelace


# Exact input field set per method
METHOD_FIELDS: dict[CalculationMethod, tuple[str, ...]] = {
    CalculationMethod.SSS: ("a", "b", "c"),
    CalculationMethod.SAS: ("sideA", "sideB", "angleC"),
    CalculationMethod.ASA: ("angleA", "angleB", "sideC"),
    CalculationMethod.BASE_HEIGHT: ("base", "height"),
    CalculationMethod.COORDINATES: ("p1x", "p1y", "p2x", "p2y", "p3x", "p3y"),
}


class FrozenInputs(dict):
    """Read-only input mapping held by a TriangleSpec."""

    def _readonly(self, *args, **kwargs):
        raise TypeError("Triangle inputs are read-only; use update_triangle_input() to change them")

    __setitem__ = __delitem__ = __ior__ = _readonly
    clear = pop = popitem = setdefault = update = _readonly

    def __reduce__(self):
        return (type(self), (dict(self),))


class Point(BaseModel):
    """Planar coordinate; pixels or real-world length depending on context."""
    model_config = ConfigDict(frozen=True)

    x: float
    y: float


class TriangleSpec(BaseModel):
    """One user-entered triangle: a method plus its raw numeric strings."""
    model_config = ConfigDict(frozen=True)

    id: int
    method: CalculationMethod = CalculationMethod.SSS
    inputs: dict[str, Optional[str]] = Field(default_factory=dict, validate_default=True)

    @field_validator("inputs", mode="after")
    @classmethod
    def _freeze_inputs(cls, value: dict[str, Optional[str]]) -> FrozenInputs:
        return FrozenInputs(value)

    @model_validator(mode="after")
    def _check_fields(self) -> "TriangleSpec":
        allowed = METHOD_FIELDS[self.method]
        unknown = sorted(key for key in self.inputs if key not in allowed)
        if unknown:
            raise ValueError(
                f"Fields {unknown} do not belong to method {self.method.value} "
                f"(expected a subset of {list(allowed)})"
            )
        return self


class CalculationResult(BaseModel):
    """Evaluated triangle; area fields are 0 whenever the input is invalid."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: int
    index: int
    method: CalculationMethod
    inputs: dict[str, Optional[str]] = Field(default_factory=dict)
    area: float = 0.0
    is_valid: bool = Field(False, alias="isValid")
    area_in_meters: float = Field(0.0, alias="areaInMeters")


class ScaleReference(BaseModel):
    """Pixel to real-length calibration captured from two clicked points."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    pixel_length: float = Field(..., alias="pixelLength")
    real_length: float = Field(..., alias="realLength")
    unit: Unit

    def ensure_usable(self) -> "ScaleReference":
        """Raise ScaleError unless both lengths are finite and positive."""
        for name, value in (("pixelLength", self.pixel_length), ("realLength", self.real_length)):
            if not math.isfinite(value) or value <= 0:
                raise ScaleError(
                    f"Scale {name} must be a positive number, got {value}",
                    {"field": name, "value": value},
                )
        return self

    @property
    def conversion_factor(self) -> float:
        """Real-world length per pixel."""
        self.ensure_usable()
        return self.real_length / self.pixel_length


class ProjectDetails(BaseModel):
    name: str = ""
    notes: str = ""


class ProjectData(BaseModel):
    """Serializable project as exchanged with the persistence collaborator."""
    model_config = ConfigDict(populate_by_name=True)

    project_details: ProjectDetails = Field(default_factory=ProjectDetails, alias="projectDetails")
    unit: Unit = Unit.FEET
    triangles: list[TriangleSpec] = Field(default_factory=list)
    image_data_url: Optional[str] = Field(None, alias="imageDataUrl")
    boundary_points: list[Point] = Field(default_factory=list, alias="boundaryPoints")
    scale: Optional[ScaleReference] = None

    @model_validator(mode="after")
    def _check_unique_ids(self) -> "ProjectData":
        seen: set[int] = set()
        for triangle in self.triangles:
            if triangle.id in seen:
                raise ValueError(f"Duplicate triangle id {triangle.id}")
            seen.add(triangle.id)
        return self


__all__ = [
    "CalculationMethod",
    "METHOD_FIELDS",
    "Point",
    "TriangleSpec",
    "CalculationResult",
    "ScaleReference",
    "ProjectDetails",
    "ProjectData",
]
