"""Building service — single entry point used by the HTTP routes."""

from __future__ import annotations
from typing import Any, Mapping, Optional

from estimator.core.factory import BuildingFactory, ConfigInput
from estimator.core.layout import LayoutOptions, optimal_layout
from estimator.core.registry import EngineRegistry
from estimator.engines.base import AnyBuilding
from estimator.models import (
    BuildingValidationResult, CalculationOptions, FrameCalculations,
    MountingSystemConfig, Nomenclature, PanelLayoutResult, SolarPanelSpec,
)
from estimator.services.nomenclature import build_nomenclature


class BuildingService:
    """Creates buildings through the factory and produces their reports."""

    def __init__(self, registry: EngineRegistry | None = None) -> None:
        self.factory = BuildingFactory(registry)

    def create(self, config: ConfigInput) -> AnyBuilding:
        return self.factory.create(config)

    def create_from_template(
        self, name: str, overrides: Optional[Mapping[str, Any]] = None,
    ) -> AnyBuilding:
        return self.factory.create_from_template(name, overrides)

    def validate(self, building: AnyBuilding) -> BuildingValidationResult:
        return self.factory.engine_for(building.type).validate(building)

    def calculate(
        self, building: AnyBuilding, options: CalculationOptions | None = None,
    ) -> FrameCalculations:
        return self.factory.engine_for(building.type).calculate(building, options)

    def nomenclature(self, building: AnyBuilding) -> Nomenclature:
        engine = self.factory.engine_for(building.type)
        return build_nomenclature(building, clock=engine.clock)

    def solar_layout(
        self,
        available_length: float,
        available_width: float,
        panel: SolarPanelSpec,
        mounting_system: MountingSystemConfig,
        options: LayoutOptions | None = None,
    ) -> PanelLayoutResult:
        return optimal_layout(available_length, available_width, panel, mounting_system, options)

    def list_building_types(self) -> list[dict[str, str]]:
        types = []
        for building_type in self.factory.get_supported_types():
            engine = self.factory.engine_for(building_type)
            types.append({
                "type": building_type,
                "engine": type(engine).__name__,
                "strategy": engine.strategy.get_name() if engine.strategy else "",
            })
        return types

    def list_templates(self) -> list[str]:
        return self.factory.template_names()
