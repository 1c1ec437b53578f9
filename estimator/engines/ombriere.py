"""Engine for photovoltaic parking canopies (ombrières).

The canopy is a flat frame at vehicle clearance height:
- posts at clear height on both long sides
- longitudinal and transverse beams, purlins across the width
- one Saint-Andrew's cross per bay
- a panel grid with aluminium mounting rails, inverters and cable trays
"""

from __future__ import annotations
import logging
import math

from estimator.core.errors import InvalidConfigError
from estimator.core.layout import apply_solar_array_layout
from estimator.engines.base import BuildingEngine, generate_posts
from estimator.models import (
    BuildingConfig, BuildingParameters, BuildingType, CableTrayConfig,
    CalculationOptions, CladdingType, ElectricalDesign, Finishes,
    FrameCalculations, InverterConfig, OmbriereBuilding, OmbriereDimensions,
    OmbriereStructure, ParkingLayout, RoofingType, SolarArrayConfig, SolarPanel,
    SolarPerformance, StructuralElement, StructuralElementType, Vector3,
)
from estimator.models.building import CladdingFinish, RoofingFinish
from estimator.strategies.ombriere import (
    CANOPY_PURLIN_SPACING, OmbriereCalculationStrategy,
)

logger = logging.getLogger(__name__)

BRACING_PROFILE = "L 50x50x5"
SOLAR_RAIL_PROFILE = "Rail Alu 40x40"
SOLAR_RAIL_LINEAR_WEIGHT = 2.5      # kg/m

DEFAULT_ROW_SPACING = 100.0
DEFAULT_COLUMN_SPACING = 50.0

# Vertical offsets above clear height (mm)
PURLIN_OFFSET = 200.0
SOLAR_RAIL_OFFSET = 250.0
PANEL_OFFSET = 300.0


class OmbriereEngine(BuildingEngine):
    """Generates the frame and photovoltaic equipment of a parking canopy."""

    building_type = BuildingType.OMBRIERE.value
    dimensions_model = OmbriereDimensions
    strategy_class = OmbriereCalculationStrategy
    default_parameters = BuildingParameters(purlin_spacing=CANOPY_PURLIN_SPACING)

    def validate_config(self, config: BuildingConfig) -> None:
        super().validate_config(config)
        if config.solar_array is None:
            raise InvalidConfigError("A solar array is required for a canopy")

    def validate_config_dimensions(self, dimensions: OmbriereDimensions) -> None:
        super().validate_config_dimensions(dimensions)
        if dimensions.clear_height <= 0:
            raise InvalidConfigError("Clear height must be positive")
        if dimensions.parking_space_width <= 0 or dimensions.parking_space_length <= 0:
            raise InvalidConfigError("Parking space size must be positive")

    def _solar_strategy(self) -> OmbriereCalculationStrategy:
        if isinstance(self.strategy, OmbriereCalculationStrategy):
            return self.strategy
        return OmbriereCalculationStrategy(self.settings)

    def _resolve_array(
        self, solar_array: SolarArrayConfig, dims: OmbriereDimensions,
    ) -> SolarArrayConfig:
        """Run the layout optimizer if requested and fill the array totals."""
        solar_array = apply_solar_array_layout(solar_array, dims.length, dims.width)
        if solar_array.layout is None:
            solar_array = solar_array.model_copy(update={
                "total_panels": solar_array.panel_count,
                "total_power": solar_array.power_kwc,
                "total_area": solar_array.panel_count * solar_array.panel.area,
            })
        return solar_array

    def create_base_building(
        self, config: BuildingConfig, parameters: BuildingParameters,
    ) -> OmbriereBuilding:
        dims: OmbriereDimensions = config.dimensions
        solar_array = self._resolve_array(config.solar_array, dims)
        strategy = self._solar_strategy()

        power = solar_array.power_kwc
        annual, specific = strategy.estimate_production(power, dims.tilt, config.location)

        now = self.clock()
        return OmbriereBuilding(
            id=self.id_factory(),
            name=config.name,
            created_at=now,
            updated_at=now,
            dimensions=dims,
            parameters=parameters,
            finishes=Finishes(
                cladding=CladdingFinish(type=CladdingType.NONE, color="", thickness=0),
                roofing=RoofingFinish(type=RoofingType.NONE, color="", thickness=0),
            ),
            metadata=config.metadata,
            solar_array=solar_array,
            electrical_design=ElectricalDesign(
                total_power=power,
                total_panels=solar_array.panel_count,
                annual_production=annual,
                specific_production=specific,
            ),
            parking_layout=ParkingLayout(
                number_of_spaces=strategy.parking_capacity(dims),
                space_width=dims.parking_space_width,
                space_length=dims.parking_space_length,
                total_area=dims.length * dims.width / 1e6,
            ),
            performance=SolarPerformance(
                annual_production=annual,
                specific_production=specific,
                performance_ratio=self.settings.performance_ratio,
                carbon_offset=annual * self.settings.carbon_factor / 1000,
            ),
            location=config.location,
        )

    def generate_structure(self, building: OmbriereBuilding) -> OmbriereStructure:
        dims = building.dimensions
        params = building.parameters
        solar_array = building.solar_array

        posts = generate_posts(
            dims.length, dims.clear_height, dims.clear_height,
            params.post_spacing, params.post_profile,
            id_factory=self.id_factory,
            width=dims.width,
            default_weight=self.settings.default_linear_weight,
        )
        structure = OmbriereStructure(
            posts=posts,
            beams=self._generate_beams(dims, params),
            purlins=self._generate_purlins(dims, params),
            bracing=self._generate_bracing(dims, params),
            solar_panels=self._generate_solar_panels(dims, solar_array),
            solar_framing=self._generate_solar_framing(dims, solar_array),
            inverters=self._generate_inverters(dims, solar_array),
            cable_trays=self._generate_cable_trays(dims, solar_array),
        )

        logger.debug(
            "Canopy structure: %d posts, %d beams, %d purlins, %d panels, %d inverters",
            len(structure.posts), len(structure.beams), len(structure.purlins),
            len(structure.solar_panels), len(structure.inverters),
        )
        return structure

    def post_process(self, building: OmbriereBuilding) -> OmbriereBuilding:
        """Copy generated inverters and cable trays into the electrical design."""
        electrical = building.electrical_design.model_copy(update={
            "inverters": list(building.structure.inverters),
            "cable_trays": list(building.structure.cable_trays),
        })
        return building.model_copy(update={"electrical_design": electrical})

    # ------------------------------------------------------------------
    # Frame

    def _generate_beams(
        self, dims: OmbriereDimensions, params: BuildingParameters,
    ) -> list[StructuralElement]:
        beams: list[StructuralElement] = []
        spacing = params.post_spacing
        profile = params.rafter_profile
        bays = math.floor(dims.length / spacing)

        # Longitudinal beams, front row then back row
        for row, y in enumerate((0.0, dims.width)):
            for i in range(bays):
                beams.append(StructuralElement(
                    id=self.id_factory(),
                    type=StructuralElementType.BEAM,
                    profile=profile,
                    length=spacing,
                    position=Vector3(x=i * spacing, y=y, z=dims.clear_height),
                    weight=self.profile_weight(profile, spacing),
                    reference=f"POU-L-{row}-{i + 1}",
                ))

        # One transverse beam per station
        for i in range(bays + 1):
            beams.append(StructuralElement(
                id=self.id_factory(),
                type=StructuralElementType.BEAM,
                profile=profile,
                length=dims.width,
                position=Vector3(x=i * spacing, y=0, z=dims.clear_height),
                rotation=Vector3(y=math.pi / 2),
                weight=self.profile_weight(profile, dims.width),
                reference=f"POU-T-{i + 1}",
            ))
        return beams

    def _generate_purlins(
        self, dims: OmbriereDimensions, params: BuildingParameters,
    ) -> list[StructuralElement]:
        count = math.floor(dims.width / params.purlin_spacing) + 1
        weight = self.profile_weight(params.purlin_profile, dims.length)
        return [
            StructuralElement(
                id=self.id_factory(),
                type=StructuralElementType.PURLIN,
                profile=params.purlin_profile,
                length=dims.length,
                position=Vector3(
                    x=0, y=i * params.purlin_spacing, z=dims.clear_height + PURLIN_OFFSET,
                ),
                weight=weight,
                reference=f"PAN-{i + 1}",
            )
            for i in range(count)
        ]

    def _generate_bracing(
        self, dims: OmbriereDimensions, params: BuildingParameters,
    ) -> list[StructuralElement]:
        bracing: list[StructuralElement] = []
        spacing = params.post_spacing
        diagonal = math.sqrt(spacing ** 2 + dims.width ** 2)
        angle = math.atan(dims.width / spacing)
        weight = self.profile_weight(BRACING_PROFILE, diagonal)

        for bay in range(math.floor(dims.length / spacing)):
            x = bay * spacing
            for suffix, start, sign in (("A", x, 1), ("B", x + spacing, -1)):
                bracing.append(StructuralElement(
                    id=self.id_factory(),
                    type=StructuralElementType.BRACING,
                    profile=BRACING_PROFILE,
                    length=diagonal,
                    position=Vector3(x=start, y=0, z=dims.clear_height),
                    rotation=Vector3(y=sign * angle),
                    weight=weight,
                    reference=f"CV-{bay + 1}-{suffix}",
                ))
        return bracing

    # ------------------------------------------------------------------
    # Photovoltaic equipment

    @staticmethod
    def _grid(dims: OmbriereDimensions, solar_array: SolarArrayConfig):
        """Panel footprint, spacings and origin of the centred grid."""
        panel_length, panel_width = solar_array.panel.footprint(solar_array.orientation)
        row_spacing = solar_array.row_spacing or DEFAULT_ROW_SPACING
        column_spacing = solar_array.column_spacing or DEFAULT_COLUMN_SPACING

        columns, rows = solar_array.columns, solar_array.rows
        grid_length = columns * panel_length + max(columns - 1, 0) * column_spacing
        grid_width = rows * panel_width + max(rows - 1, 0) * row_spacing
        start_x = (dims.length - grid_length) / 2
        start_y = (dims.width - grid_width) / 2
        return (panel_length, panel_width, row_spacing, column_spacing,
                grid_length, start_x, start_y)

    def _generate_solar_panels(
        self, dims: OmbriereDimensions, solar_array: SolarArrayConfig,
    ) -> list[SolarPanel]:
        (panel_length, panel_width, row_spacing, column_spacing,
         _, start_x, start_y) = self._grid(dims, solar_array)
        z = dims.clear_height + PANEL_OFFSET

        return [
            SolarPanel(
                id=self.id_factory(),
                spec=solar_array.panel,
                row=row,
                column=col,
                position=Vector3(
                    x=start_x + col * (panel_length + column_spacing),
                    y=start_y + row * (panel_width + row_spacing),
                    z=z,
                ),
                orientation=solar_array.orientation,
                tilt=solar_array.tilt,
                azimuth=solar_array.azimuth,
            )
            for row in range(solar_array.rows)
            for col in range(solar_array.columns)
        ]

    def _generate_solar_framing(
        self, dims: OmbriereDimensions, solar_array: SolarArrayConfig,
    ) -> list[StructuralElement]:
        (_, panel_width, row_spacing, _,
         grid_length, start_x, start_y) = self._grid(dims, solar_array)
        z = dims.clear_height + SOLAR_RAIL_OFFSET
        weight = SOLAR_RAIL_LINEAR_WEIGHT * grid_length / 1000

        framing: list[StructuralElement] = []
        # Two rails per panel row, at a quarter of the panel depth from each edge
        for row in range(solar_array.rows):
            row_y = start_y + row * (panel_width + row_spacing)
            for i, fraction in enumerate((0.25, 0.75)):
                framing.append(StructuralElement(
                    id=self.id_factory(),
                    type=StructuralElementType.SOLAR_RAIL,
                    profile=SOLAR_RAIL_PROFILE,
                    length=grid_length,
                    position=Vector3(x=start_x, y=row_y + fraction * panel_width, z=z),
                    weight=weight,
                    reference=f"RAIL-SOL-{row}-{i}",
                ))
        return framing

    def _generate_inverters(
        self, dims: OmbriereDimensions, solar_array: SolarArrayConfig,
    ) -> list[InverterConfig]:
        rated = self.settings.inverter_rated_power
        count = math.ceil(
            solar_array.power_kwc / (rated * self.settings.inverter_oversizing_ratio)
        )
        return [
            InverterConfig(
                manufacturer=self.settings.inverter_manufacturer,
                model=f"SUN2000-{rated:g}KTL",
                power=rated,
                efficiency=self.settings.inverter_efficiency,
                number_of_mppt=self.settings.inverter_mppt,
                position=Vector3(
                    x=1000 + i * 2000, y=dims.width - 1000, z=dims.clear_height - 500,
                ),
            )
            for i in range(count)
        ]

    def _generate_cable_trays(
        self, dims: OmbriereDimensions, solar_array: SolarArrayConfig,
    ) -> list[CableTrayConfig]:
        trays = [CableTrayConfig(
            width=300, height=100, length=dims.length,
            material="galvanized_steel", elevation=dims.clear_height - 300,
        )]
        for _ in range(solar_array.rows):
            trays.append(CableTrayConfig(
                width=200, height=75, length=dims.width,
                material="aluminum", elevation=dims.clear_height + PURLIN_OFFSET,
            ))
        return trays

    # ------------------------------------------------------------------
    # Reports

    def calculate(
        self, building: OmbriereBuilding, options: CalculationOptions | None = None,
    ) -> FrameCalculations:
        """Frame calculations, extended with solar metrics when the strategy provides them."""
        if isinstance(self.strategy, OmbriereCalculationStrategy):
            return self.strategy.calculate_solar_metrics(
                building.dimensions, building.solar_array,
                building.location, building.parameters,
            )
        return super().calculate(building, options)

    def validate_structure(self, building: OmbriereBuilding) -> tuple[list[str], list[str]]:
        errors: list[str] = []
        warnings: list[str] = []
        structure = building.structure
        solar_array = building.solar_array

        if not structure.posts:
            errors.append("No posts defined")
        if not structure.solar_panels:
            errors.append("No solar panels defined")
        minimum = self.settings.minimum_canopy_power
        if building.electrical_design.total_power < minimum:
            errors.append(f"Installed power too low (<{minimum:g} kWc)")

        mounting = solar_array.mounting_system
        if mounting is not None and solar_array.panel.weight > mounting.max_panel_weight:
            warnings.append(
                f"Panel weight {solar_array.panel.weight:g} kg exceeds mounting system "
                f"limit of {mounting.max_panel_weight:g} kg"
            )
        return errors, warnings
