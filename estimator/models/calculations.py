"""Calculation and validation result models."""

from __future__ import annotations
from typing import Literal, Optional
from pydantic import BaseModel

from .solar import Location


Severity = Literal["error", "warning"]


class ValidationIssue(BaseModel):
    field: str
    message: str
    severity: Severity = "error"


class BuildingValidationResult(BaseModel):
    is_valid: bool = True
    errors: list[ValidationIssue] = []
    warnings: list[ValidationIssue] = []

    @classmethod
    def from_messages(
        cls, field: str, errors: list[str], warnings: list[str] | None = None,
    ) -> BuildingValidationResult:
        return cls(
            is_valid=not errors,
            errors=[ValidationIssue(field=field, message=m) for m in errors],
            warnings=[
                ValidationIssue(field=field, message=m, severity="warning")
                for m in (warnings or [])
            ],
        )

    def merge(self, other: BuildingValidationResult) -> BuildingValidationResult:
        errors = self.errors + other.errors
        return BuildingValidationResult(
            is_valid=not errors,
            errors=errors,
            warnings=self.warnings + other.warnings,
        )

    def error_messages(self) -> list[str]:
        return [e.message for e in self.errors]


class CalculationOptions(BaseModel):
    design_code: Literal["eurocode", "custom"] = "eurocode"
    safety_factor: Optional[float] = None
    location: Optional[Location] = None
    optimize_profiles: bool = False


class FrameCalculations(BaseModel):
    """Frame quantities, areas and masses of a building."""
    # Counts
    post_count: int
    rafter_count: int
    purlin_count: int
    rail_count: int
    beam_count: int = 0

    # Derived dimensions (mm)
    height_ridge: float
    rafter_length: float
    purlin_length: float

    # Areas (m²)
    total_roofing_area: float
    net_roofing_area: float
    total_cladding_area: float
    net_cladding_area: float

    # Masses (kg)
    total_steel_weight: float
    post_weight: float
    rafter_weight: float
    purlin_weight: float
    rail_weight: float
    beam_weight: float = 0.0

    warnings: list[str] = []


class OmbriereCalculations(FrameCalculations):
    """Frame calculations plus photovoltaic, parking and climatic metrics."""
    # Solar
    total_solar_panels: int
    total_solar_power: float        # kWc
    total_solar_area: float         # m²
    annual_production: float        # kWh/year
    specific_production: float      # kWh/kWc/year

    # Parking
    number_of_parking_spaces: int
    parking_area: float             # m²
    covered_ratio: float            # %

    # Loads
    solar_panel_weight: float       # kg
    additional_snow_load: float     # kN/m²
    wind_load: float                # kN/m²
