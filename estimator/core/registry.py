"""Engine registry — maps building type tags to engines."""

from __future__ import annotations
import logging

from estimator.core.errors import RegistryFrozenError, UnsupportedTypeError
from estimator.engines.base import BuildingEngine, Clock, IdFactory
from estimator.models import EstimatorSettings

logger = logging.getLogger(__name__)


class EngineRegistry:
    """
    Central registry of building engines.

    Engines are registered at startup, then the registry is frozen and
    only read. Registering into a frozen registry is a configuration error.
    """

    def __init__(self) -> None:
        self._engines: dict[str, BuildingEngine] = {}
        self._frozen = False

    def register(self, building_type: str, engine: BuildingEngine) -> None:
        """Register an engine for a type tag. The last registration wins."""
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot register {building_type!r}: registry is frozen"
            )
        if building_type in self._engines:
            logger.debug("Replacing engine for %r", building_type)
        self._engines[building_type] = engine

    def unregister(self, building_type: str) -> None:
        if self._frozen:
            raise RegistryFrozenError(
                f"Cannot unregister {building_type!r}: registry is frozen"
            )
        self._engines.pop(building_type, None)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def has(self, building_type: str) -> bool:
        return building_type in self._engines

    def get(self, building_type: str) -> BuildingEngine:
        """Return the engine for `building_type` or raise UnsupportedTypeError."""
        engine = self._engines.get(building_type)
        if engine is None:
            raise UnsupportedTypeError(building_type, self.supported_types())
        return engine

    def supported_types(self) -> list[str]:
        return list(self._engines)

    def __contains__(self, building_type: object) -> bool:
        return building_type in self._engines

    def __len__(self) -> int:
        return len(self._engines)


def create_default_registry(
    id_factory: IdFactory | None = None,
    clock: Clock | None = None,
    settings: EstimatorSettings | None = None,
) -> EngineRegistry:
    """Create a frozen registry with the standard engines."""
    from estimator.engines.monopente import MonoPenteEngine
    from estimator.engines.ombriere import OmbriereEngine

    registry = EngineRegistry()
    for engine_class in (MonoPenteEngine, OmbriereEngine):
        registry.register(
            engine_class.building_type,
            engine_class(id_factory=id_factory, clock=clock, settings=settings),
        )
    registry.freeze()
    return registry
