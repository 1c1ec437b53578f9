"""Exceptions raised by the estimator.

Configuration errors abort generation before any element is produced.
Out-of-range designs are reported as validation data instead.
"""

from __future__ import annotations


class EstimatorError(Exception):
    """Base class for all estimator errors."""


class InvalidConfigError(EstimatorError, ValueError):
    """The submitted BuildingConfig cannot be turned into a building."""


class UnsupportedTypeError(EstimatorError):
    """No engine is registered for the requested building type."""

    def __init__(self, building_type: str, supported: list[str]) -> None:
        self.building_type = building_type
        self.supported = supported
        super().__init__(
            f"Unsupported building type: {building_type}. "
            f"Supported types: {', '.join(supported) or '(none)'}"
        )


class TemplateNotFoundError(EstimatorError, KeyError):
    """Unknown built-in template name."""

    def __init__(self, name: str, available: list[str]) -> None:
        self.name = name
        self.available = available
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown template: {self.name}. Available: {', '.join(self.available)}"


class StrategyMissingError(EstimatorError):
    """An engine was asked to calculate without a bound calculation strategy."""


class InvalidDimensionsError(EstimatorError, ValueError):
    """A calculation strategy rejected the dimensions it was given."""

    def __init__(self, errors: list[str]) -> None:
        self.errors = errors
        super().__init__(f"Invalid dimensions: {', '.join(errors)}")


class RegistryFrozenError(EstimatorError):
    """Engines may only be registered during initialisation."""
