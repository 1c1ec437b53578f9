"""Engine for sloped single-pitch (mono-pente) buildings."""

from __future__ import annotations
import logging
import math

from estimator.core.errors import InvalidConfigError
from estimator.engines.base import (
    BuildingEngine, calculate_height_ridge, calculate_rafter_length, generate_posts,
)
from estimator.models import (
    BuildingConfig, BuildingParameters, BuildingType, Finishes, MonoPenteBuilding,
    MonoPenteDimensions, MonoPenteStructure, StructuralElement,
    StructuralElementType, Vector3,
)
from estimator.strategies.monopente import MonoPenteCalculationStrategy

logger = logging.getLogger(__name__)


class MonoPenteEngine(BuildingEngine):
    """
    Generates the frame of a single-pitch building.

    Posts of two heights carry inclined rafters; purlins are laid along the
    rafter, and rails run along both long walls and both gables.
    """

    building_type = BuildingType.MONO_PENTE.value
    dimensions_model = MonoPenteDimensions
    strategy_class = MonoPenteCalculationStrategy

    def validate_config_dimensions(self, dimensions: MonoPenteDimensions) -> None:
        super().validate_config_dimensions(dimensions)
        if dimensions.height_wall <= 0:
            raise InvalidConfigError("Wall height must be positive")

    def create_base_building(
        self, config: BuildingConfig, parameters: BuildingParameters,
    ) -> MonoPenteBuilding:
        now = self.clock()
        return MonoPenteBuilding(
            id=self.id_factory(),
            name=config.name,
            created_at=now,
            updated_at=now,
            dimensions=config.dimensions,
            parameters=parameters,
            openings=list(config.openings),
            finishes=config.finishes or Finishes(),
            metadata=config.metadata,
        )

    def generate_structure(self, building: MonoPenteBuilding) -> MonoPenteStructure:
        dims = building.dimensions
        params = building.parameters

        height_ridge = calculate_height_ridge(dims.height_wall, dims.width, dims.slope)
        rafter_length = calculate_rafter_length(dims.width, dims.slope)

        posts = generate_posts(
            dims.length, dims.height_wall, height_ridge,
            params.post_spacing, params.post_profile,
            id_factory=self.id_factory,
            width=dims.width,
            default_weight=self.settings.default_linear_weight,
        )
        rafters = self._generate_rafters(dims, params, rafter_length, height_ridge)
        purlins = self._generate_purlins(dims, params, rafter_length)
        rails = self._generate_rails(dims, params, height_ridge)

        logger.debug(
            "Mono-pente structure: %d posts, %d rafters, %d purlins, %d rails",
            len(posts), len(rafters), len(purlins), len(rails),
        )
        return MonoPenteStructure(posts=posts, rafters=rafters, purlins=purlins, rails=rails)

    def _generate_rafters(
        self,
        dims: MonoPenteDimensions,
        params: BuildingParameters,
        rafter_length: float,
        height_ridge: float,
    ) -> list[StructuralElement]:
        count = math.floor(dims.length / params.post_spacing) + 1
        # Inclination measured against the building length
        angle = math.atan((height_ridge - dims.height_wall) / dims.length)
        weight = self.profile_weight(params.rafter_profile, rafter_length)

        return [
            StructuralElement(
                id=self.id_factory(),
                type=StructuralElementType.RAFTER,
                profile=params.rafter_profile,
                length=rafter_length,
                position=Vector3(x=i * params.post_spacing, y=0, z=dims.height_wall),
                rotation=Vector3(y=angle),
                weight=weight,
                reference=f"ARB-{i + 1}",
            )
            for i in range(count)
        ]

    def _generate_purlins(
        self,
        dims: MonoPenteDimensions,
        params: BuildingParameters,
        rafter_length: float,
    ) -> list[StructuralElement]:
        count = math.floor(rafter_length / params.purlin_spacing) + 1
        rise_factor = math.sin(math.atan(rafter_length / dims.length))
        weight = self.profile_weight(params.purlin_profile, dims.length)

        purlins = []
        for i in range(count):
            along = i * params.purlin_spacing
            purlins.append(StructuralElement(
                id=self.id_factory(),
                type=StructuralElementType.PURLIN,
                profile=params.purlin_profile,
                length=dims.length,
                position=Vector3(x=0, y=along, z=dims.height_wall + along * rise_factor),
                weight=weight,
                reference=f"PAN-{i + 1}",
            ))
        return purlins

    def _generate_rails(
        self,
        dims: MonoPenteDimensions,
        params: BuildingParameters,
        height_ridge: float,
    ) -> list[StructuralElement]:
        rails: list[StructuralElement] = []
        spacing = params.rail_spacing

        def add(length: float, x: float, y: float, z: float, rotation: Vector3) -> None:
            rails.append(StructuralElement(
                id=self.id_factory(),
                type=StructuralElementType.RAIL,
                profile=params.rail_profile,
                length=length,
                position=Vector3(x=x, y=y, z=z),
                rotation=rotation,
                weight=self.profile_weight(params.rail_profile, length),
                reference=f"LIS-{len(rails) + 1}",
            ))

        # Low long wall, then high long wall
        for i in range(math.floor(dims.height_wall / spacing) + 1):
            add(dims.length, 0, 0, i * spacing, Vector3())
        for i in range(math.floor(height_ridge / spacing) + 1):
            add(dims.length, 0, dims.width, i * spacing, Vector3())

        # Gables use the average eave height for their course count
        gable_courses = math.floor((dims.height_wall + height_ridge) / 2 / spacing) + 1
        for x in (0, dims.length):
            for i in range(gable_courses):
                add(dims.width, x, 0, i * spacing, Vector3(y=math.pi / 2))

        return rails

    def validate_structure(self, building: MonoPenteBuilding) -> tuple[list[str], list[str]]:
        errors: list[str] = []
        warnings: list[str] = []
        if not building.structure.posts:
            errors.append("No posts defined")
        if not building.structure.rafters:
            errors.append("No rafters defined")
        if not building.openings:
            warnings.append("No openings defined")
        return errors, warnings
