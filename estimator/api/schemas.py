"""API request/response schemas."""

from __future__ import annotations
from typing import Any, Optional, Union
from pydantic import BaseModel

from estimator.core.layout import LayoutOptions
from estimator.models import (
    Building, BuildingValidationResult, CalculationOptions, FrameCalculations,
    MountingSystemConfig, OmbriereCalculations, SolarPanelSpec,
)


class BuildingResponse(BaseModel):
    """A generated building with its validation report."""
    building: Building
    validation: BuildingValidationResult
    element_count: int


class TemplateRequest(BaseModel):
    """Request body for the /buildings/template/{name} endpoint."""
    overrides: dict[str, Any] = {}


class BuildingRequest(BaseModel):
    """A previously generated building sent back for a report."""
    building: Building


class CalculateRequest(BaseModel):
    building: Building
    options: CalculationOptions = CalculationOptions()


class CalculateResponse(BaseModel):
    calculations: Union[OmbriereCalculations, FrameCalculations]


class LayoutRequest(BaseModel):
    """
    Request body for the /solar/layout endpoint.

    Panel and mounting system may be given inline or by catalogue key.
    """
    available_length: float
    available_width: float
    panel: Optional[SolarPanelSpec] = None
    panel_key: str = "longi-540w"
    mounting_system: Optional[MountingSystemConfig] = None
    mounting_system_key: str = "double-rail-standard"
    options: LayoutOptions = LayoutOptions()


class BuildingTypeInfo(BaseModel):
    type: str
    engine: str
    strategy: str
