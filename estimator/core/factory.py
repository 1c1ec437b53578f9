"""Building factory — resolves engines by type and builds from presets."""

from __future__ import annotations
import copy
import logging
from typing import Any, Mapping, Optional, Union

from estimator.core.errors import TemplateNotFoundError
from estimator.core.registry import EngineRegistry, create_default_registry
from estimator.engines.base import AnyBuilding, BuildingEngine
from estimator.models import BuildingConfig, BuildingType, MonoPenteBuilding
from estimator.strategies.base import CalculationStrategy

logger = logging.getLogger(__name__)

ConfigInput = Union[BuildingConfig, Mapping[str, Any]]


def _template(name: str, dimensions: dict, parameters: dict) -> dict[str, Any]:
    return {
        "name": name,
        "type": BuildingType.MONO_PENTE.value,
        "dimensions": {"slope": 10, **dimensions},
        "parameters": {
            "purlin_spacing": 1500,
            "rail_spacing": 1200,
            "steel_grade": "S235",
            "include_gutters": True,
            "include_downspouts": True,
            **parameters,
        },
    }


TEMPLATES: dict[str, dict[str, Any]] = {
    "default": _template(
        "Bâtiment Standard",
        {"length": 20000, "width": 12000, "height_wall": 6000},
        {"post_spacing": 5000, "post_profile": "IPE 240", "rafter_profile": "IPE 200",
         "purlin_profile": "IPE 140", "rail_profile": "UAP 80"},
    ),
    "small": _template(
        "Petit Bâtiment",
        {"length": 10000, "width": 8000, "height_wall": 4000},
        {"post_spacing": 4000, "post_profile": "IPE 180", "rafter_profile": "IPE 160",
         "purlin_profile": "IPE 120", "rail_profile": "UAP 65"},
    ),
    "medium": _template(
        "Bâtiment Moyen",
        {"length": 30000, "width": 15000, "height_wall": 7000},
        {"post_spacing": 5000, "post_profile": "IPE 270", "rafter_profile": "IPE 220",
         "purlin_profile": "IPE 160", "rail_profile": "UAP 100"},
    ),
    "large": _template(
        "Grand Bâtiment",
        {"length": 50000, "width": 20000, "height_wall": 8000},
        {"post_spacing": 6000, "post_profile": "IPE 330", "rafter_profile": "IPE 270",
         "purlin_profile": "IPE 180", "rail_profile": "UAP 120", "steel_grade": "S355"},
    ),
}


def _as_config(config: ConfigInput) -> BuildingConfig:
    if isinstance(config, BuildingConfig):
        return config
    return BuildingConfig.model_validate(config)


class BuildingFactory:
    """
    Entry point for building creation.

    Looks up the engine registered for a config's type and runs it. A
    caller-supplied strategy is honoured by a fresh engine of the same
    class; registered engines are never modified.
    """

    def __init__(self, registry: EngineRegistry | None = None) -> None:
        self.registry = registry if registry is not None else create_default_registry()

    def engine_for(
        self, building_type: str, strategy: CalculationStrategy | None = None,
    ) -> BuildingEngine:
        engine = self.registry.get(building_type)
        if strategy is not None and strategy is not engine.strategy:
            logger.debug("Binding %r to a fresh %s", strategy, type(engine).__name__)
            engine = engine.with_strategy(strategy)
        return engine

    def create(
        self, config: ConfigInput, strategy: CalculationStrategy | None = None,
    ) -> AnyBuilding:
        """Build a complete building; raises UnsupportedTypeError for unknown types."""
        config = _as_config(config)
        return self.engine_for(config.type, strategy).create(config)

    def create_mono_pente(
        self, config: Mapping[str, Any], strategy: CalculationStrategy | None = None,
    ) -> MonoPenteBuilding:
        data = {**config, "type": BuildingType.MONO_PENTE.value}
        return self.create(data, strategy)

    def create_from_template(
        self, name: str, overrides: Optional[Mapping[str, Any]] = None,
    ) -> AnyBuilding:
        """
        Build from a named preset.

        `dimensions` and `parameters` overrides merge field by field into
        the preset; any other key replaces the preset value.
        """
        template = TEMPLATES.get(name)
        if template is None:
            raise TemplateNotFoundError(name, list(TEMPLATES))

        data = copy.deepcopy(template)
        for key, value in (overrides or {}).items():
            if key in ("dimensions", "parameters") and isinstance(value, Mapping):
                data[key] = {**data[key], **value}
            else:
                data[key] = value
        return self.create(data)

    def is_type_supported(self, building_type: str) -> bool:
        return self.registry.has(building_type)

    def get_supported_types(self) -> list[str]:
        return self.registry.supported_types()

    @staticmethod
    def template_names() -> list[str]:
        return list(TEMPLATES)
