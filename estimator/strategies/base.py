"""Abstract base class for calculation strategies.

A strategy sizes a building from its dimensions and parameters:
- counts the structural elements an engine will generate
- derives lengths, areas and masses
- checks dimensions against the domain ranges of its building type

Engines hold a strategy and delegate `calculate()` and dimension checks
to it, so alternate design codes can be injected without touching them.
"""

from __future__ import annotations
import math
from abc import ABC, abstractmethod
from typing import Optional

from estimator.core import profiles
from estimator.core.geometry import calculate_height_ridge, calculate_rafter_length
from estimator.models import (
    BuildingParameters, BuildingValidationResult, CalculationOptions,
    EstimatorSettings, DEFAULT_SETTINGS, FrameCalculations, Opening,
)
from estimator.models.building import Dimensions


class CalculationStrategy(ABC):
    """Base class for all calculation strategies."""

    def __init__(self, settings: EstimatorSettings | None = None) -> None:
        self.settings = settings or DEFAULT_SETTINGS

    @abstractmethod
    def get_name(self) -> str:
        """Short identifier, e.g. 'MonoPente Standard'."""
        ...

    @abstractmethod
    def get_description(self) -> str:
        ...

    @abstractmethod
    def calculate_frame(
        self,
        dimensions: Dimensions,
        parameters: BuildingParameters,
        openings: Optional[list[Opening]] = None,
        options: Optional[CalculationOptions] = None,
    ) -> FrameCalculations:
        """
        Compute counts, lengths, areas and masses.

        Raises InvalidDimensionsError when `validate_dimensions` rejects
        the input.
        """
        ...

    @abstractmethod
    def validate_dimensions(self, dimensions: Dimensions) -> BuildingValidationResult:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.get_name()!r})"

    # ------------------------------------------------------------------
    # Shared helpers

    @staticmethod
    def element_count(total_length: float, spacing: float) -> int:
        """Members at `spacing` along `total_length`, both ends included."""
        return math.floor(total_length / spacing) + 1

    rafter_length = staticmethod(calculate_rafter_length)
    height_ridge = staticmethod(calculate_height_ridge)

    @staticmethod
    def roof_area(length: float, rafter_length: float) -> float:
        return length * rafter_length / 1e6

    @staticmethod
    def wall_area(length: float, height: float) -> float:
        return length * height / 1e6

    @staticmethod
    def deduct_openings_area(total_area: float, openings: list[Opening]) -> float:
        """Gross area minus openings, never below zero."""
        openings_area = sum(o.area for o in openings)
        return max(0.0, total_area - openings_area)

    def profile_weight(self, profile: str, length: float, count: int = 1) -> float:
        return profiles.profile_weight(
            profile, length, count, default=self.settings.default_linear_weight,
        )
