"""Abstract base class for building engines.

An engine turns a BuildingConfig into a complete Building in five fixed
steps (the `create` template method):

1. validate_config           reject unusable input before generating anything
2. apply_default_parameters  fill unset parameters from the engine defaults
3. create_base_building      type-specific entity without structure
4. generate_structure        type-specific structural elements
5. post_process              optional hook, no-op by default

Metric computation is delegated to the bound CalculationStrategy.
"""

from __future__ import annotations
import logging
import math
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Callable, Mapping, Optional, Union

from estimator.core import profiles
from estimator.core.errors import InvalidConfigError, StrategyMissingError
from estimator.core.geometry import (
    calculate_height_ridge, calculate_rafter_length,
)
from estimator.core.validation import validate_opening, validate_parameters
from estimator.models import (
    BuildingConfig, BuildingParameters, BuildingValidationResult,
    CalculationOptions, DEFAULT_PARAMETERS, DEFAULT_SETTINGS, EstimatorSettings,
    FrameCalculations, MonoPenteBuilding, OmbriereBuilding, ParameterOverrides,
    StructuralElement, StructuralElementType, Vector3,
)
from estimator.models.building import Dimensions
from estimator.strategies.base import CalculationStrategy

logger = logging.getLogger(__name__)

IdFactory = Callable[[], str]
Clock = Callable[[], datetime]
AnyBuilding = Union[MonoPenteBuilding, OmbriereBuilding]


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ----------------------------------------------------------------------
# Shared utilities


def calculate_profile_weight(
    profile: str, length: float, default: float = profiles.DEFAULT_LINEAR_WEIGHT,
) -> float:
    """Mass in kg of one `profile` member of `length` mm."""
    return profiles.profile_weight(profile, length, default=default)


def generate_posts(
    length: float,
    height_low: float,
    height_high: float,
    spacing: float,
    profile: str,
    id_factory: IdFactory = new_id,
    width: float = 0.0,
    default_weight: float = profiles.DEFAULT_LINEAR_WEIGHT,
) -> list[StructuralElement]:
    """
    Post pairs at `floor(length/spacing)+1` stations from x=0.

    Each station emits a low post at y=0 then a high post at y=width,
    referenced POT-1, POT-2, ... in that order.
    """
    posts: list[StructuralElement] = []
    stations = math.floor(length / spacing) + 1

    for i in range(stations):
        x = i * spacing
        for n, (height, y) in enumerate(((height_low, 0.0), (height_high, width))):
            posts.append(StructuralElement(
                id=id_factory(),
                type=StructuralElementType.POST,
                profile=profile,
                length=height,
                position=Vector3(x=x, y=y, z=0),
                weight=calculate_profile_weight(profile, height, default_weight),
                reference=f"POT-{i * 2 + n + 1}",
            ))

    logger.debug("Generated %d posts over %d stations", len(posts), stations)
    return posts


# ----------------------------------------------------------------------


class BuildingEngine(ABC):
    """
    Base class for all building engines.

    Subclasses set `building_type`, `dimensions_model` and
    `strategy_class`, and implement `create_base_building()`,
    `generate_structure()` and `validate_structure()`.
    Engines are stateless between calls and never keep a reference to the
    buildings they produce.
    """

    building_type: str
    dimensions_model: type
    strategy_class: Optional[type[CalculationStrategy]] = None
    default_parameters: BuildingParameters = DEFAULT_PARAMETERS

    def __init__(
        self,
        strategy: CalculationStrategy | None = None,
        id_factory: IdFactory | None = None,
        clock: Clock | None = None,
        settings: EstimatorSettings | None = None,
    ) -> None:
        self.settings = settings or DEFAULT_SETTINGS
        if strategy is None and self.strategy_class is not None:
            strategy = self.strategy_class(self.settings)
        self.strategy = strategy
        self.id_factory = id_factory or new_id
        self.clock = clock or utcnow

    def __repr__(self) -> str:
        return f"{type(self).__name__}(strategy={self.strategy!r})"

    # ------------------------------------------------------------------
    # Template method

    def create(self, config: BuildingConfig) -> AnyBuilding:
        self.validate_config(config)
        parameters = self.apply_default_parameters(config.parameters)
        building = self.create_base_building(config, parameters)
        building.structure = self.generate_structure(building)
        building = self.post_process(building)

        logger.info(
            "Created %s building %r (%s) with %d elements",
            self.building_type, building.name, building.id,
            sum(1 for _ in building.structure.elements()),
        )
        return building

    def validate_config(self, config: BuildingConfig) -> None:
        """Raise InvalidConfigError for input no building can be made from."""
        if not config.name or not config.name.strip():
            raise InvalidConfigError("Building name is required")
        if config.dimensions is None:
            raise InvalidConfigError("Dimensions are required")
        if not isinstance(config.dimensions, self.dimensions_model):
            raise InvalidConfigError(
                f"{self.building_type} buildings need "
                f"{self.dimensions_model.__name__}, got {type(config.dimensions).__name__}"
            )
        self.validate_config_dimensions(config.dimensions)

    def validate_config_dimensions(self, dimensions: Dimensions) -> None:
        if dimensions.length <= 0:
            raise InvalidConfigError("Length must be positive")
        if dimensions.width <= 0:
            raise InvalidConfigError("Width must be positive")

    def apply_default_parameters(
        self, overrides: Optional[ParameterOverrides],
    ) -> BuildingParameters:
        """Engine defaults with every explicitly set override applied."""
        return self.default_parameters.merged(overrides)

    @abstractmethod
    def create_base_building(
        self, config: BuildingConfig, parameters: BuildingParameters,
    ) -> AnyBuilding:
        """Building entity with an empty structure."""
        ...

    @abstractmethod
    def generate_structure(self, building: AnyBuilding) -> Any:
        ...

    def post_process(self, building: AnyBuilding) -> AnyBuilding:
        return building

    # ------------------------------------------------------------------
    # Reports

    @abstractmethod
    def validate_structure(self, building: AnyBuilding) -> tuple[list[str], list[str]]:
        """(errors, warnings) about the generated structure itself."""
        ...

    def validate(self, building: AnyBuilding) -> BuildingValidationResult:
        """Dimension, parameter, opening and structure checks combined."""
        result = BuildingValidationResult()
        if self.strategy is not None:
            result = result.merge(self.strategy.validate_dimensions(building.dimensions))
        result = result.merge(validate_parameters(building.parameters, building.dimensions))
        for opening in building.openings:
            result = result.merge(validate_opening(opening, building.dimensions))

        errors, warnings = self.validate_structure(building)
        result = result.merge(
            BuildingValidationResult.from_messages("building", errors, warnings)
        )

        if not result.is_valid:
            logger.warning(
                "Building %s failed validation: %s",
                building.id, "; ".join(result.error_messages()),
                extra={"building_id": building.id},
            )
        return result

    def calculate(
        self, building: AnyBuilding, options: CalculationOptions | None = None,
    ) -> FrameCalculations:
        if self.strategy is None:
            raise StrategyMissingError(
                f"No calculation strategy bound to {type(self).__name__}"
            )
        return self.strategy.calculate_frame(
            building.dimensions, building.parameters, building.openings, options,
        )

    # ------------------------------------------------------------------
    # Lifecycle

    def update(self, building: AnyBuilding, changes: dict[str, Any]) -> AnyBuilding:
        """
        Copy of `building` with `changes` applied.

        Parameter changes given as `ParameterOverrides` or as a mapping are
        merged onto the building's current parameters. The structure is
        regenerated only when dimensions or parameters change; otherwise
        only `updated_at` moves.
        """
        changes = dict(changes)
        overrides = changes.get("parameters")
        if isinstance(overrides, Mapping):
            overrides = ParameterOverrides.model_validate(overrides)
        if isinstance(overrides, ParameterOverrides):
            changes["parameters"] = building.parameters.merged(overrides)

        data = building.model_dump()
        data.update(changes)
        data["updated_at"] = self.clock()
        updated = type(building).model_validate(data)

        if "dimensions" in changes or "parameters" in changes:
            updated.structure = self.generate_structure(updated)
            updated = self.post_process(updated)
            logger.debug("Regenerated structure of building %s", updated.id)
        return updated

    def clone(self, building: AnyBuilding, new_name: str | None = None) -> AnyBuilding:
        now = self.clock()
        return building.model_copy(deep=True, update={
            "id": self.id_factory(),
            "name": new_name or f"{building.name} (copie)",
            "created_at": now,
            "updated_at": now,
        })

    def with_strategy(self, strategy: CalculationStrategy) -> BuildingEngine:
        """A fresh engine of the same class bound to `strategy`."""
        return type(self)(
            strategy, id_factory=self.id_factory, clock=self.clock, settings=self.settings,
        )

    # ------------------------------------------------------------------

    def profile_weight(self, profile: str, length: float) -> float:
        return calculate_profile_weight(profile, length, self.settings.default_linear_weight)
