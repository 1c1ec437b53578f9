# tests/test_nomenclature.py
import pytest

from estimator.models import (
    BuildingMetadata, NomenclatureCategory, Opening,
)
from estimator.services.nomenclature import build_nomenclature

MAIN = NomenclatureCategory.MAIN_FRAME
SECONDARY = NomenclatureCategory.SECONDARY_FRAME
SOLAR = NomenclatureCategory.SOLAR


class TestSlopedBuildingNomenclature:
    @pytest.fixture
    def hangar(self, factory, mono_pente_config):
        return factory.create(mono_pente_config)

    def test_main_frame_groups(self, hangar, clock):
        nomenclature = build_nomenclature(hangar, clock)
        main = nomenclature.section(MAIN)

        assert main.title == "OSSATURE PRINCIPALE"
        assert [i.ref for i in main.items] == ["POT-01", "POT-02", "ARB-01", "PAN-01"]
        low_posts, high_posts = main.items[:2]
        assert (low_posts.quantity, low_posts.unit_length) == (5, 6000)
        assert (high_posts.quantity, high_posts.unit_length) == (5, 7200)
        assert main.items[3].quantity == 9

    def test_rails_grouped_by_length(self, hangar):
        secondary = build_nomenclature(hangar).section(SECONDARY)

        assert [(i.ref, i.quantity) for i in secondary.items] == [("LIS-01", 13), ("LIS-02", 12)]
        assert secondary.items[1].unit_length == 12000

    def test_item_totals(self, hangar):
        item = build_nomenclature(hangar).section(MAIN).items[0]
        assert item.total_length == pytest.approx(5 * 6000)
        assert item.total_weight == pytest.approx(5 * item.unit_weight)

    def test_totals(self, hangar):
        nomenclature = build_nomenclature(hangar)
        totals = nomenclature.totals

        assert nomenclature.section(SOLAR) is None
        assert totals.total_elements == 49
        assert totals.total_steel_weight == pytest.approx(
            sum(e.weight for e in hangar.structure.elements())
        )
        assert totals.roofing_area == pytest.approx(20 * 12.05985, rel=1e-5)
        assert totals.cladding_area == pytest.approx(120 + 144 + 158.4)
        assert totals.solar_panels == 0

    def test_openings_reduce_cladding(self, factory, mono_pente_data):
        data = {**mono_pente_data, "openings": [{"id": "d1", "width": 4000, "height": 4000}]}
        totals = build_nomenclature(factory.create(data)).totals
        assert totals.cladding_area == pytest.approx(422.4 - 16)

    def test_header(self, factory, mono_pente_config, clock):
        config = mono_pente_config.model_copy(
            update={"metadata": BuildingMetadata(notes="Phase 1")},
        )
        building = factory.create(config)
        nomenclature = build_nomenclature(building, lambda: clock.start)

        assert nomenclature.building_id == building.id
        assert nomenclature.building_name == "Hangar"
        assert nomenclature.generated_at == clock.start
        assert nomenclature.notes == "Phase 1"

    def test_deterministic(self, hangar, clock):
        fixed = lambda: clock.start  # noqa: E731
        assert build_nomenclature(hangar, fixed) == build_nomenclature(hangar, fixed)

    def test_openings_do_not_change_members(self, factory, mono_pente_config):
        config = mono_pente_config.model_copy(
            update={"openings": [Opening(id="d1", width=4000, height=4000)]},
        )
        main = build_nomenclature(factory.create(config)).section(MAIN)
        assert sum(i.quantity for i in main.items) == 10 + 5 + 9


class TestCanopyNomenclature:
    @pytest.fixture
    def canopy(self, factory, ombriere_config):
        return factory.create(ombriere_config)

    def test_frame_sections(self, canopy):
        nomenclature = build_nomenclature(canopy)
        main = nomenclature.section(MAIN)
        secondary = nomenclature.section(SECONDARY)

        assert [(i.ref, i.quantity) for i in main.items] == [
            ("POT-01", 22), ("POU-01", 20), ("POU-02", 11), ("PAN-01", 9),
        ]
        assert [(i.ref, i.quantity) for i in secondary.items] == [("CV-01", 20)]

    def test_solar_section(self, canopy):
        solar = build_nomenclature(canopy).section(SOLAR)
        items = {i.ref: i for i in solar.items}

        assert solar.title == "CENTRALE PHOTOVOLTAÏQUE"
        assert items["RAIL-01"].quantity == 8
        assert items["PV-01"].quantity == 80
        assert items["PV-01"].total_weight == pytest.approx(80 * 28.6)
        assert items["OND-01"].quantity == 1
        assert solar.total_length == pytest.approx(items["RAIL-01"].total_length)

    def test_totals(self, canopy):
        totals = build_nomenclature(canopy).totals

        assert totals.solar_panels == 80
        assert totals.solar_power == pytest.approx(43.2)
        assert totals.roofing_area == pytest.approx(1000)
        assert totals.cladding_area == 0
        # Posts, beams, purlins, bracing and mounting rails
        assert totals.total_elements == 22 + 31 + 9 + 20 + 8
