"""Design-rule checks on construction parameters and openings.

Results are returned as data; nothing here raises.
"""

from __future__ import annotations
from typing import Optional

from estimator.models import (
    BuildingParameters, BuildingValidationResult, MonoPenteDimensions,
    Opening, OmbriereDimensions, WallType,
)
from estimator.models.building import Dimensions


def validate_parameters(
    parameters: BuildingParameters,
    dimensions: Optional[Dimensions] = None,
) -> BuildingValidationResult:
    errors: list[str] = []
    warnings: list[str] = []

    if not parameters.post_spacing or parameters.post_spacing <= 0:
        errors.append("Post spacing is required")
    else:
        if parameters.post_spacing < 3000:
            warnings.append("Small post spacing (<3 m): dense structure")
        if parameters.post_spacing > 8000:
            warnings.append("Large post spacing (>8 m): check member sizing")

    if not parameters.purlin_spacing or parameters.purlin_spacing <= 0:
        errors.append("Purlin spacing is required")
    elif parameters.purlin_spacing > 2000:
        warnings.append("Large purlin spacing (>2 m): check roofing span")

    if not parameters.rail_spacing or parameters.rail_spacing <= 0:
        errors.append("Rail spacing is required")
    elif parameters.rail_spacing > 1500:
        warnings.append("Large rail spacing (>1.5 m): check cladding span")

    for label, profile in (
        ("post", parameters.post_profile),
        ("rafter", parameters.rafter_profile),
        ("purlin", parameters.purlin_profile),
        ("rail", parameters.rail_profile),
    ):
        if not profile or not profile.strip():
            errors.append(f"The {label} profile is required")

    if not parameters.steel_grade or not parameters.steel_grade.strip():
        errors.append("Steel grade is required")

    if (
        dimensions is not None
        and parameters.post_spacing > 0
        and dimensions.length < parameters.post_spacing * 2
    ):
        warnings.append("Very short building: at least two bays recommended")

    return BuildingValidationResult.from_messages("parameters", errors, warnings)


def _wall_height(dimensions: Dimensions) -> float:
    if isinstance(dimensions, MonoPenteDimensions):
        return dimensions.height_wall
    if isinstance(dimensions, OmbriereDimensions):
        return dimensions.clear_height
    return 0.0


def validate_opening(
    opening: Opening,
    dimensions: Optional[Dimensions] = None,
) -> BuildingValidationResult:
    """Check an opening's size, and that it fits its wall when dimensions are given."""
    errors: list[str] = []
    warnings: list[str] = []

    if opening.width <= 0:
        errors.append("Opening width is required")
    elif opening.width > 10000:
        warnings.append("Very wide opening (>10 m): check structure")

    if opening.height <= 0:
        errors.append("Opening height is required")
    elif opening.height > 8000:
        warnings.append("Very tall opening (>8 m): check structure")

    if opening.position.z < 0:
        errors.append("Sill height cannot be negative")
    if opening.position.x < 0:
        errors.append("Opening offset cannot be negative")

    if dimensions is not None:
        if opening.position.z + opening.height > _wall_height(dimensions):
            errors.append("Opening exceeds the wall height")

        if opening.wall in (WallType.FRONT, WallType.BACK):
            wall_length, label = dimensions.length, "length"
        else:
            wall_length, label = dimensions.width, "width"
        if opening.position.x + opening.width > wall_length:
            errors.append(f"Opening exceeds the building {label}")

    return BuildingValidationResult.from_messages(f"opening-{opening.id}", errors, warnings)
