"""Calculation strategy for single-pitch (mono-pente) buildings."""

from __future__ import annotations
import logging
from typing import Optional, cast

from estimator.core.errors import InvalidDimensionsError
from estimator.models import (
    BuildingParameters, BuildingValidationResult, CalculationOptions,
    FrameCalculations, MonoPenteDimensions, Opening,
)
from estimator.models.building import Dimensions
from estimator.strategies.base import CalculationStrategy

logger = logging.getLogger(__name__)


class MonoPenteCalculationStrategy(CalculationStrategy):
    """Standard sizing rules for sloped single-pitch steel buildings."""

    MIN_LENGTH, MAX_LENGTH = 3000, 100000
    MIN_WIDTH, MAX_WIDTH = 3000, 40000
    MIN_HEIGHT, MAX_HEIGHT = 2000, 15000

    def get_name(self) -> str:
        return "MonoPente Standard"

    def get_description(self) -> str:
        return "Standard calculations for single-pitch steel buildings"

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
        dimensions = cast(MonoPenteDimensions, dimensions)
        openings = openings or []

        length, width = dimensions.length, dimensions.width
        hw = dimensions.height_wall
        hr = self.height_ridge(hw, width, dimensions.slope)
        rafter_length = self.rafter_length(width, dimensions.slope)

        post_count = self.element_count(length, parameters.post_spacing)
        rafter_count = post_count
        purlin_count = self.element_count(rafter_length, parameters.purlin_spacing)

        rails_low = self.element_count(hw, parameters.rail_spacing)
        rails_high = self.element_count(hr, parameters.rail_spacing)
        rails_gable = self.element_count((hw + hr) / 2, parameters.rail_spacing)
        rail_count = rails_low + rails_high + 2 * rails_gable

        # Each station carries one eave-side and one ridge-side post
        post_weight = (
            self.profile_weight(parameters.post_profile, hw, post_count)
            + self.profile_weight(parameters.post_profile, hr, post_count)
        )
        rafter_weight = self.profile_weight(parameters.rafter_profile, rafter_length, rafter_count)
        purlin_weight = self.profile_weight(parameters.purlin_profile, length, purlin_count)
        rail_weight = (
            self.profile_weight(parameters.rail_profile, length, rails_low + rails_high)
            + self.profile_weight(parameters.rail_profile, width, 2 * rails_gable)
        )
        total_steel_weight = post_weight + rafter_weight + purlin_weight + rail_weight

        total_roofing_area = self.roof_area(length, rafter_length)
        gable_area = width * (hw + hr) / 2 / 1e6
        total_cladding_area = (
            self.wall_area(length, hw) + self.wall_area(length, hr) + 2 * gable_area
        )

        warnings = [w.message for w in validation.warnings]
        warnings.extend(self._collect_warnings(dimensions, parameters, total_roofing_area, options))

        logger.debug(
            "Mono-pente frame: %d stations, %d purlins, %d rails, %.0f kg",
            post_count, purlin_count, rail_count, total_steel_weight,
        )

        return FrameCalculations(
            post_count=post_count,
            rafter_count=rafter_count,
            purlin_count=purlin_count,
            rail_count=rail_count,
            height_ridge=hr,
            rafter_length=rafter_length,
            purlin_length=length,
            total_roofing_area=total_roofing_area,
            net_roofing_area=total_roofing_area,
            total_cladding_area=total_cladding_area,
            net_cladding_area=self.deduct_openings_area(total_cladding_area, openings),
            total_steel_weight=total_steel_weight,
            post_weight=post_weight,
            rafter_weight=rafter_weight,
            purlin_weight=purlin_weight,
            rail_weight=rail_weight,
            warnings=warnings,
        )

    def validate_dimensions(self, dimensions: Dimensions) -> BuildingValidationResult:
        if not isinstance(dimensions, MonoPenteDimensions):
            return BuildingValidationResult.from_messages(
                "dimensions", ["Mono-pente dimensions are required"],
            )

        errors: list[str] = []
        warnings: list[str] = []

        if dimensions.length < self.MIN_LENGTH:
            errors.append("Minimum length is 3 m")
        if dimensions.length > self.MAX_LENGTH:
            errors.append("Maximum length is 100 m")
        if dimensions.length > 50000:
            warnings.append("Long building: check structural calculations")

        if dimensions.width < self.MIN_WIDTH:
            errors.append("Minimum width is 3 m")
        if dimensions.width > self.MAX_WIDTH:
            errors.append("Maximum width is 40 m")
        if dimensions.width > 25000:
            warnings.append("Wide span: reinforced profiles recommended")

        if dimensions.height_wall < self.MIN_HEIGHT:
            errors.append("Minimum wall height is 2 m")
        if dimensions.height_wall > self.MAX_HEIGHT:
            errors.append("Maximum wall height is 15 m")

        if dimensions.slope < 3:
            warnings.append("Low slope: risk of water ponding")
        if dimensions.slope > 50:
            warnings.append("Steep slope: check stability and fixings")

        if dimensions.length > 0 and dimensions.width / dimensions.length > 2:
            warnings.append("Unusual proportions: width greater than twice the length")

        return BuildingValidationResult.from_messages("dimensions", errors, warnings)

    def _collect_warnings(
        self,
        dimensions: MonoPenteDimensions,
        parameters: BuildingParameters,
        roofing_area: float,
        options: Optional[CalculationOptions],
    ) -> list[str]:
        warnings: list[str] = []
        if parameters.post_spacing > 8000:
            warnings.append("Large post spacing (>8 m): check member sizing")
        if parameters.purlin_spacing > 2000:
            warnings.append("Large purlin spacing (>2 m): check roofing span")
        if dimensions.slope < 5:
            warnings.append("Low slope: reinforced waterproofing required")
        if roofing_area > 2000:
            warnings.append("Large roof area: snow and wind calculations required")
        if options is not None and options.optimize_profiles:
            warnings.append("Profiles to be optimised against Eurocode calculations")
        return warnings
