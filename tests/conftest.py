# tests/conftest.py
import itertools
from datetime import datetime, timedelta, timezone

import pytest

from estimator.core.factory import BuildingFactory
from estimator.core.registry import create_default_registry
from estimator.engines.monopente import MonoPenteEngine
from estimator.engines.ombriere import OmbriereEngine
from estimator.models import COMMON_SOLAR_PANELS, BuildingConfig

BASE_TIME = datetime(2025, 1, 1, 8, 0, tzinfo=timezone.utc)


class SequentialIds:
    """Deterministic id source that also counts how often it was called."""

    def __init__(self, prefix: str = "id") -> None:
        self.prefix = prefix
        self._counter = itertools.count(1)
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        return f"{self.prefix}-{next(self._counter)}"


class TickingClock:
    """Clock that advances one second per call."""

    def __init__(self, start: datetime = BASE_TIME) -> None:
        self._ticks = itertools.count()
        self.start = start

    def __call__(self) -> datetime:
        return self.start + timedelta(seconds=next(self._ticks))


@pytest.fixture
def id_factory():
    return SequentialIds()


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def factory(id_factory, clock):
    return BuildingFactory(create_default_registry(id_factory=id_factory, clock=clock))


@pytest.fixture
def make_factory():
    """Build independent factories, each with its own id and clock sources."""
    def make():
        return BuildingFactory(
            create_default_registry(id_factory=SequentialIds(), clock=TickingClock())
        )
    return make


@pytest.fixture
def mono_pente_engine(id_factory, clock):
    return MonoPenteEngine(id_factory=id_factory, clock=clock)


@pytest.fixture
def ombriere_engine(id_factory, clock):
    return OmbriereEngine(id_factory=id_factory, clock=clock)


@pytest.fixture
def mono_pente_data():
    """Raw configuration of the reference sloped building."""
    return {
        "name": "Hangar",
        "type": "monopente",
        "dimensions": {"length": 20000, "width": 12000, "height_wall": 6000, "slope": 10},
    }


@pytest.fixture
def mono_pente_config(mono_pente_data):
    return BuildingConfig.model_validate(mono_pente_data)


@pytest.fixture
def ombriere_data():
    """Raw configuration of the reference parking canopy: 4 x 20 panels of 540 Wc."""
    return {
        "name": "Parking P1",
        "type": "ombriere",
        "dimensions": {"length": 50000, "width": 20000, "clear_height": 2500, "tilt": 15},
        "solar_array": {
            "panel": COMMON_SOLAR_PANELS["longi-540w"].model_dump(),
            "orientation": "landscape",
            "rows": 4,
            "columns": 20,
        },
    }


@pytest.fixture
def ombriere_config(ombriere_data):
    return BuildingConfig.model_validate(ombriere_data)
