# tests/test_factory.py
import pytest

from estimator.core.errors import (
    RegistryFrozenError, TemplateNotFoundError, UnsupportedTypeError,
)
from estimator.core.factory import TEMPLATES, BuildingFactory
from estimator.core.registry import EngineRegistry, create_default_registry
from estimator.engines.monopente import MonoPenteEngine
from estimator.models import MonoPenteBuilding, OmbriereBuilding
from estimator.strategies.monopente import MonoPenteCalculationStrategy


class TestRegistry:
    def test_default_registry(self):
        registry = create_default_registry()

        assert registry.frozen
        assert len(registry) == 2
        assert registry.supported_types() == ["monopente", "ombriere"]
        assert "ombriere" in registry
        assert isinstance(registry.get("monopente"), MonoPenteEngine)

    def test_frozen_registry_rejects_registration(self):
        registry = create_default_registry()
        with pytest.raises(RegistryFrozenError):
            registry.register("duo-pente", MonoPenteEngine())
        with pytest.raises(RegistryFrozenError):
            registry.unregister("monopente")

    def test_last_registration_wins(self):
        registry = EngineRegistry()
        first, second = MonoPenteEngine(), MonoPenteEngine()
        registry.register("monopente", first)
        registry.register("monopente", second)

        assert registry.get("monopente") is second
        assert len(registry) == 1

    def test_unregister(self):
        registry = EngineRegistry()
        registry.register("monopente", MonoPenteEngine())
        registry.unregister("monopente")
        assert not registry.has("monopente")

    def test_unknown_type(self):
        with pytest.raises(UnsupportedTypeError) as excinfo:
            create_default_registry().get("igloo")
        assert excinfo.value.supported == ["monopente", "ombriere"]


class TestBuildingFactory:
    def test_create_from_mapping(self, factory, mono_pente_data):
        building = factory.create(mono_pente_data)
        assert isinstance(building, MonoPenteBuilding)
        assert len(building.structure.posts) == 10

    def test_create_canopy(self, factory, ombriere_config):
        building = factory.create(ombriere_config)
        assert isinstance(building, OmbriereBuilding)
        assert len(building.structure.solar_panels) == 80

    def test_unsupported_type_message(self, factory, mono_pente_data):
        with pytest.raises(UnsupportedTypeError) as excinfo:
            factory.create({**mono_pente_data, "type": "duopente"})
        assert "Unsupported building type: duopente" in str(excinfo.value)
        assert "monopente, ombriere" in str(excinfo.value)

    def test_create_mono_pente_forces_type(self, factory, mono_pente_data):
        data = {k: v for k, v in mono_pente_data.items() if k != "type"}
        assert factory.create_mono_pente(data).type == "monopente"

    def test_supported_types(self, factory):
        assert factory.get_supported_types() == ["monopente", "ombriere"]
        assert factory.is_type_supported("ombriere")
        assert not factory.is_type_supported("igloo")

    def test_default_factory_uses_default_registry(self):
        assert BuildingFactory().get_supported_types() == ["monopente", "ombriere"]

    def test_strategy_injection_leaves_registered_engine_untouched(
        self, factory, mono_pente_data,
    ):
        registered = factory.registry.get("monopente")
        original = registered.strategy
        custom = MonoPenteCalculationStrategy()

        engine = factory.engine_for("monopente", custom)
        factory.create(mono_pente_data, strategy=custom)

        assert engine is not registered
        assert engine.strategy is custom
        assert registered.strategy is original

    def test_same_strategy_reuses_engine(self, factory):
        registered = factory.registry.get("monopente")
        assert factory.engine_for("monopente", registered.strategy) is registered

    def test_deterministic_with_injected_sources(self, make_factory, mono_pente_data):
        first = make_factory().create(mono_pente_data)
        second = make_factory().create(mono_pente_data)
        assert first == second


class TestTemplates:
    def test_template_names(self):
        assert BuildingFactory.template_names() == ["default", "small", "medium", "large"]

    @pytest.mark.parametrize("name", list(TEMPLATES))
    def test_every_template_builds(self, factory, name):
        building = factory.create_from_template(name)
        assert building.name == TEMPLATES[name]["name"]
        assert building.structure.posts

    def test_large_template(self, factory):
        building = factory.create_from_template("large")

        assert building.parameters.steel_grade == "S355"
        assert building.parameters.post_profile == "IPE 330"
        # floor(50000 / 6000) + 1 stations
        assert len(building.structure.rafters) == 9
        assert len(building.structure.posts) == 18

    def test_overrides_merge_into_template(self, factory):
        building = factory.create_from_template("default", {
            "name": "Atelier",
            "dimensions": {"length": 30000},
            "parameters": {"post_profile": "HEA 200"},
        })

        assert building.name == "Atelier"
        assert building.dimensions.length == 30000
        assert building.dimensions.width == 12000
        assert building.parameters.post_profile == "HEA 200"
        assert building.parameters.rafter_profile == "IPE 200"
        assert len(building.structure.posts) == 14

    def test_template_is_not_mutated(self, factory):
        factory.create_from_template("small", {"dimensions": {"length": 99000}})
        assert TEMPLATES["small"]["dimensions"]["length"] == 10000

    def test_unknown_template(self, factory):
        with pytest.raises(TemplateNotFoundError) as excinfo:
            factory.create_from_template("cathedral")
        assert isinstance(excinfo.value, KeyError)
        assert "Unknown template: cathedral" in str(excinfo.value)
