"""Custom exception hierarchy for the plot area service."""

from __future__ import annotations

from typing import Any


class PlotAreaError(Exception):
    """Base exception for all plot-area-specific errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConfigurationError(PlotAreaError):
    """Raised when configuration is invalid or missing."""
    pass


class ValidationError(PlotAreaError):
    """Base class for validation errors."""
    pass


class ProjectImportError(ValidationError):
    """Raised when an imported project payload is malformed."""
    pass


class ScaleError(ValidationError):
    """Raised when a scale reference cannot convert pixels to real lengths."""
    pass


class GeometryError(PlotAreaError):
    """Raised when geometry operations fail."""
    pass


class BoundaryError(GeometryError):
    """Raised when a traced boundary cannot be turned into triangles."""
    pass
