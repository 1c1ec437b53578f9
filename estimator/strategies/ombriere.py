"""Calculation strategy for photovoltaic canopies (ombrières).

On top of the frame quantities this strategy estimates:
- annual energy yield from installed power, latitude band and panel tilt
- parking capacity and how much of it the panels cover
- snow and wind load corrections for tilted panels
"""

from __future__ import annotations
import logging
import math
from typing import Optional, cast

from estimator.core.errors import InvalidDimensionsError
from estimator.models import (
    BuildingParameters, BuildingValidationResult, CalculationOptions,
    FrameCalculations, Location, OmbriereCalculations, OmbriereDimensions,
    Opening, SolarArrayConfig,
)
from estimator.models.building import Dimensions
from estimator.strategies.base import CalculationStrategy

logger = logging.getLogger(__name__)

# Frame parameters of a canopy when the caller sets none
CANOPY_PURLIN_SPACING = 2500.0


def tilt_factor(tilt: float) -> float:
    """Yield correction for panel tilt, peaking between 30° and 35°."""
    if tilt <= 0:
        return 0.85
    if tilt <= 15:
        return 0.90 + (tilt / 15) * 0.05
    if tilt <= 30:
        return 0.95 + (tilt - 15) / 15 * 0.05
    if tilt <= 35:
        return 1.0
    if tilt <= 45:
        return 1.0 - (tilt - 35) / 10 * 0.05
    return 0.90


class OmbriereCalculationStrategy(CalculationStrategy):
    """Sizing and yield estimation for flat photovoltaic parking canopies."""

    MIN_LENGTH, MAX_LENGTH = 5000, 100000
    MIN_WIDTH, MAX_WIDTH = 5000, 40000
    MIN_CLEAR_HEIGHT, MAX_CLEAR_HEIGHT = 2000, 4000
    MAX_TILT = 30

    def get_name(self) -> str:
        return "Ombrière Photovoltaïque"

    def get_description(self) -> str:
        return "Calculations for photovoltaic canopies with solar yield estimation"

    def calculate_frame(
        self,
        dimensions: Dimensions,
        parameters: BuildingParameters,
        openings: Optional[list[Opening]] = None,
        options: Optional[CalculationOptions] = None,
    ) -> FrameCalculations:
        validation = self.validate_dimensions(dimensions)
        if not validation.is_valid:
            raise InvalidDimensionsError(validation.error_messages())
        dimensions = cast(OmbriereDimensions, dimensions)

        length, width = dimensions.length, dimensions.width
        height = dimensions.clear_height

        post_count = self.element_count(length, parameters.post_spacing)
        purlin_count = self.element_count(width, parameters.purlin_spacing)
        beam_count = post_count - 1
        bays = post_count - 1

        # Two posts per station, all at clear height
        post_weight = self.profile_weight(parameters.post_profile, height, 2 * post_count)
        purlin_weight = self.profile_weight(parameters.purlin_profile, length, purlin_count)
        beam_weight = (
            self.profile_weight(parameters.rafter_profile, parameters.post_spacing, 2 * bays)
            + self.profile_weight(parameters.rafter_profile, width, post_count)
        )
        total_steel_weight = post_weight + purlin_weight + beam_weight

        total_roofing_area = length * width / 1e6

        warnings = [w.message for w in validation.warnings]
        warnings.extend(self._collect_warnings(dimensions, parameters))

        logger.debug(
            "Canopy frame: %d stations, %d purlins, %d beams, %.0f kg",
            post_count, purlin_count, beam_count, total_steel_weight,
        )

        return FrameCalculations(
            post_count=post_count,
            rafter_count=0,
            purlin_count=purlin_count,
            rail_count=0,
            beam_count=beam_count,
            height_ridge=height,
            rafter_length=0.0,
            purlin_length=length,
            total_roofing_area=total_roofing_area,
            net_roofing_area=total_roofing_area,
            total_cladding_area=0.0,
            net_cladding_area=0.0,
            total_steel_weight=total_steel_weight,
            post_weight=post_weight,
            rafter_weight=0.0,
            purlin_weight=purlin_weight,
            rail_weight=0.0,
            beam_weight=beam_weight,
            warnings=warnings,
        )

    def calculate_solar_metrics(
        self,
        dimensions: OmbriereDimensions,
        solar_array: SolarArrayConfig,
        location: Optional[Location] = None,
        parameters: Optional[BuildingParameters] = None,
    ) -> OmbriereCalculations:
        """
        Frame calculations extended with yield, parking and load figures.

        Without explicit parameters the canopy defaults are used, with posts
        spaced one parking space length apart.
        """
        if parameters is None:
            parameters = BuildingParameters(
                post_spacing=dimensions.parking_space_length,
                purlin_spacing=CANOPY_PURLIN_SPACING,
                include_gutters=False,
                include_downspouts=False,
            )
        frame = self.calculate_frame(dimensions, parameters)

        total_panels = solar_array.panel_count
        total_power = solar_array.power_kwc
        total_solar_area = total_panels * solar_array.panel.area

        annual_production, specific_production = self.estimate_production(
            total_power, dimensions.tilt, location,
        )

        number_of_spaces = self.parking_capacity(dimensions)
        parking_area = dimensions.length * dimensions.width / 1e6
        covered_ratio = total_solar_area / parking_area * 100 if parking_area > 0 else 0.0

        return OmbriereCalculations(
            **frame.model_dump(),
            total_solar_panels=total_panels,
            total_solar_power=total_power,
            total_solar_area=total_solar_area,
            annual_production=annual_production,
            specific_production=specific_production,
            number_of_parking_spaces=number_of_spaces,
            parking_area=parking_area,
            covered_ratio=covered_ratio,
            solar_panel_weight=total_panels * solar_array.panel.weight,
            additional_snow_load=self.snow_load(dimensions.tilt),
            wind_load=self.wind_load(dimensions.tilt),
        )

    def validate_dimensions(self, dimensions: Dimensions) -> BuildingValidationResult:
        if not isinstance(dimensions, OmbriereDimensions):
            return BuildingValidationResult.from_messages(
                "dimensions", ["Canopy dimensions are required"],
            )

        errors: list[str] = []
        warnings: list[str] = []

        if dimensions.length < self.MIN_LENGTH:
            errors.append("Minimum length is 5 m (one parking space)")
        if dimensions.length > self.MAX_LENGTH:
            errors.append("Maximum length is 100 m")

        if dimensions.width < self.MIN_WIDTH:
            errors.append("Minimum width is 5 m (one parking row)")
        if dimensions.width > self.MAX_WIDTH:
            errors.append("Maximum width is 40 m")

        if dimensions.clear_height < self.MIN_CLEAR_HEIGHT:
            errors.append("Minimum clear height is 2 m")
        if dimensions.clear_height > self.MAX_CLEAR_HEIGHT:
            errors.append("Maximum clear height is 4 m")

        if dimensions.tilt < 0:
            errors.append("Tilt cannot be negative")
        if dimensions.tilt > self.MAX_TILT:
            errors.append("Maximum tilt is 30°")
        if dimensions.tilt < 10:
            warnings.append("Tilt below 10°: sub-optimal production")

        spaces_sized = dimensions.parking_space_width > 0 and dimensions.parking_space_length > 0
        if not spaces_sized:
            errors.append("Parking space size must be positive")

        requested = dimensions.number_of_parking_spaces
        if requested and spaces_sized:
            capacity = self.parking_capacity(dimensions)
            if requested > capacity:
                errors.append(
                    f"Not enough room for {requested} parking spaces (capacity {capacity})"
                )

        return BuildingValidationResult.from_messages("dimensions", errors, warnings)

    @staticmethod
    def parking_capacity(dimensions: OmbriereDimensions) -> int:
        return (
            math.floor(dimensions.length / dimensions.parking_space_length)
            * math.floor(dimensions.width / dimensions.parking_space_width)
        )

    def specific_yield(self, location: Optional[Location]) -> float:
        """Base kWh/kWc/year for the latitude band of `location`."""
        if location is not None:
            if location.latitude < 40:
                return self.settings.southern_specific_yield
            if location.latitude > 50:
                return self.settings.northern_specific_yield
        return self.settings.base_specific_yield

    def estimate_production(
        self, power_kwc: float, tilt: float, location: Optional[Location] = None,
    ) -> tuple[float, float]:
        """(annual kWh, specific kWh/kWc) for an array of `power_kwc`."""
        specific = self.specific_yield(location) * tilt_factor(tilt)
        return power_kwc * specific, specific

    def snow_load(self, tilt: float) -> float:
        """Snow load on tilted panels (kN/m²), halved beyond 30°."""
        base = self.settings.base_snow_load
        if tilt < 15:
            return base
        if tilt < 30:
            return base * (1 - (tilt - 15) / 30)
        return base * 0.5

    def wind_load(self, tilt: float) -> float:
        return self.settings.base_wind_pressure * (1 + tilt / 90)

    def _collect_warnings(
        self, dimensions: OmbriereDimensions, parameters: BuildingParameters,
    ) -> list[str]:
        warnings: list[str] = []
        if parameters.post_spacing > 6000:
            warnings.append("Large post spacing (>6 m): check beam sizing")
        if dimensions.clear_height > 3000:
            warnings.append("High clearance: reinforced bracing required")
        if dimensions.tilt < 10:
            warnings.append("Low tilt: solar production reduced by about 5-10%")
        if dimensions.length * dimensions.width / 1e6 > 2000:
            warnings.append("Large area: soil survey and adapted foundations required")
        return warnings
