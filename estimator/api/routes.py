"""FastAPI route definitions."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from estimator.models import (
    BuildingConfig, BuildingValidationResult, COMMON_SOLAR_PANELS,
    MOUNTING_SYSTEMS, Nomenclature, PanelLayoutResult,
)
from estimator.services.building_service import BuildingService
from estimator.api.schemas import (
    BuildingRequest, BuildingResponse, BuildingTypeInfo, CalculateRequest,
    CalculateResponse, LayoutRequest, TemplateRequest,
)

router = APIRouter()

# Shared service instance
_service = BuildingService()


def _respond(building) -> BuildingResponse:
    return BuildingResponse(
        building=building,
        validation=_service.validate(building),
        element_count=sum(1 for _ in building.structure.elements()),
    )


@router.post("/buildings", response_model=BuildingResponse)
async def create_building(config: BuildingConfig) -> BuildingResponse:
    """Generate a building from a full configuration."""
    return _respond(_service.create(config))


@router.post("/buildings/template/{name}", response_model=BuildingResponse)
async def create_from_template(
    name: str, request: TemplateRequest | None = None,
) -> BuildingResponse:
    """Generate a building from a named preset, with optional overrides."""
    overrides = request.overrides if request is not None else {}
    return _respond(_service.create_from_template(name, overrides))


@router.post("/buildings/validate", response_model=BuildingValidationResult)
async def validate_building(request: BuildingRequest) -> BuildingValidationResult:
    return _service.validate(request.building)


@router.post("/buildings/calculate", response_model=CalculateResponse)
async def calculate_building(request: CalculateRequest) -> CalculateResponse:
    """Frame quantities, areas and masses (plus solar metrics for canopies)."""
    return CalculateResponse(
        calculations=_service.calculate(request.building, request.options),
    )


@router.post("/buildings/nomenclature", response_model=Nomenclature)
async def building_nomenclature(request: BuildingRequest) -> Nomenclature:
    return _service.nomenclature(request.building)


@router.post("/solar/layout", response_model=PanelLayoutResult)
async def solar_layout(request: LayoutRequest) -> PanelLayoutResult:
    """Best panel grid for a rectangle under a mounting system's constraints."""
    panel = request.panel or COMMON_SOLAR_PANELS.get(request.panel_key)
    if panel is None:
        raise HTTPException(status_code=404, detail=f"Unknown panel: {request.panel_key}")
    mounting = request.mounting_system or MOUNTING_SYSTEMS.get(request.mounting_system_key)
    if mounting is None:
        raise HTTPException(
            status_code=404,
            detail=f"Unknown mounting system: {request.mounting_system_key}",
        )
    return _service.solar_layout(
        request.available_length, request.available_width, panel, mounting, request.options,
    )


@router.get("/building-types", response_model=list[BuildingTypeInfo])
async def list_building_types() -> list[BuildingTypeInfo]:
    """List all registered building types."""
    return [BuildingTypeInfo(**t) for t in _service.list_building_types()]


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}
