# tests/test_strategies.py
import math

import pytest

from estimator.core.errors import InvalidDimensionsError
from estimator.engines.base import calculate_height_ridge, calculate_rafter_length
from estimator.models import (
    BuildingParameters, CalculationOptions, COMMON_SOLAR_PANELS, Location,
    MonoPenteDimensions, OmbriereDimensions, Opening, SolarArrayConfig,
)
from estimator.strategies.base import CalculationStrategy
from estimator.strategies.monopente import MonoPenteCalculationStrategy
from estimator.strategies.ombriere import OmbriereCalculationStrategy, tilt_factor

REFERENCE_HALL = MonoPenteDimensions(length=20000, width=12000, height_wall=6000, slope=10)
REFERENCE_CANOPY = OmbriereDimensions(length=50000, width=20000, clear_height=2500, tilt=15)


class TestSharedHelpers:
    def test_element_count_includes_both_ends(self):
        assert CalculationStrategy.element_count(20000, 5000) == 5
        assert CalculationStrategy.element_count(21000, 5000) == 5

    def test_rafter_length(self):
        assert CalculationStrategy.rafter_length(10000, 20) == pytest.approx(10198.04, abs=0.01)

    def test_height_ridge(self):
        assert CalculationStrategy.height_ridge(6000, 12000, 10) == pytest.approx(7200)

    def test_roof_geometry_matches_engines(self):
        assert CalculationStrategy.rafter_length is calculate_rafter_length
        assert CalculationStrategy.height_ridge is calculate_height_ridge

    def test_deduct_openings_never_negative(self):
        huge = Opening(id="o1", width=100000, height=100000)
        assert CalculationStrategy.deduct_openings_area(50.0, [huge]) == 0.0


class TestMonoPenteStrategy:
    strategy = MonoPenteCalculationStrategy()

    def test_name(self):
        assert self.strategy.get_name() == "MonoPente Standard"

    def test_reference_building(self):
        calc = self.strategy.calculate_frame(REFERENCE_HALL, BuildingParameters())

        assert calc.post_count == 5
        assert calc.rafter_count == 5
        assert calc.height_ridge == pytest.approx(7200)
        assert calc.rafter_length == pytest.approx(12059.85, abs=0.01)
        assert calc.purlin_count == 9
        # 6 low courses, 7 high courses, 2 gables of 6
        assert calc.rail_count == 25

    def test_areas(self):
        calc = self.strategy.calculate_frame(REFERENCE_HALL, BuildingParameters())

        assert calc.total_roofing_area == pytest.approx(20 * 12.05985, rel=1e-5)
        assert calc.total_cladding_area == pytest.approx(20 * 6 + 20 * 7.2 + 12 * 13.2)
        assert calc.net_roofing_area == calc.total_roofing_area

    def test_openings_reduce_cladding(self):
        door = Opening(id="d1", width=4000, height=4000)
        calc = self.strategy.calculate_frame(REFERENCE_HALL, BuildingParameters(), [door])
        assert calc.net_cladding_area == pytest.approx(calc.total_cladding_area - 16)

    def test_net_area_floored_at_zero(self):
        huge = Opening(id="o1", width=100000, height=100000)
        calc = self.strategy.calculate_frame(REFERENCE_HALL, BuildingParameters(), [huge])
        assert calc.net_cladding_area == 0.0

    def test_masses(self):
        params = BuildingParameters()
        calc = self.strategy.calculate_frame(REFERENCE_HALL, params)

        assert calc.post_weight == pytest.approx(30.7 * (6.0 + 7.2) * 5)
        assert calc.purlin_weight == pytest.approx(12.9 * 20 * 9)
        assert calc.total_steel_weight == pytest.approx(
            calc.post_weight + calc.rafter_weight + calc.purlin_weight + calc.rail_weight
        )

    def test_calculation_warnings(self):
        params = BuildingParameters(post_spacing=9000, purlin_spacing=2500)
        dims = REFERENCE_HALL.model_copy(update={"slope": 4})
        calc = self.strategy.calculate_frame(
            dims, params, options=CalculationOptions(optimize_profiles=True),
        )
        text = " ".join(calc.warnings)
        assert ">8 m" in text
        assert ">2 m" in text
        assert "waterproofing" in text
        assert "Eurocode" in text

    @pytest.mark.parametrize("field,value,message", [
        ("length", 2000, "Minimum length is 3 m"),
        ("length", 120000, "Maximum length is 100 m"),
        ("width", 45000, "Maximum width is 40 m"),
        ("height_wall", 1500, "Minimum wall height is 2 m"),
        ("height_wall", 16000, "Maximum wall height is 15 m"),
    ])
    def test_range_errors(self, field, value, message):
        dims = REFERENCE_HALL.model_copy(update={field: value})
        result = self.strategy.validate_dimensions(dims)
        assert not result.is_valid
        assert message in result.error_messages()

    def test_range_warnings(self):
        dims = MonoPenteDimensions(length=60000, width=30000, height_wall=6000, slope=2)
        result = self.strategy.validate_dimensions(dims)

        assert result.is_valid
        assert len(result.warnings) == 3

    def test_invalid_dimensions_raise(self):
        dims = REFERENCE_HALL.model_copy(update={"length": 1000})
        with pytest.raises(InvalidDimensionsError, match="Minimum length"):
            self.strategy.calculate_frame(dims, BuildingParameters())

    def test_rejects_canopy_dimensions(self):
        result = self.strategy.validate_dimensions(REFERENCE_CANOPY)
        assert not result.is_valid


class TestOmbriereStrategy:
    strategy = OmbriereCalculationStrategy()
    array = SolarArrayConfig(panel=COMMON_SOLAR_PANELS["longi-540w"], rows=4, columns=20)

    def test_frame(self):
        params = BuildingParameters(purlin_spacing=2500)
        calc = self.strategy.calculate_frame(REFERENCE_CANOPY, params)

        assert calc.post_count == 11
        assert calc.beam_count == 10
        assert calc.purlin_count == 9
        assert calc.rafter_count == 0
        assert calc.rail_count == 0
        assert calc.total_cladding_area == 0
        assert calc.total_roofing_area == pytest.approx(1000)

    def test_solar_metrics(self):
        calc = self.strategy.calculate_solar_metrics(REFERENCE_CANOPY, self.array)

        assert calc.total_solar_panels == 80
        assert calc.total_solar_power == pytest.approx(43.2)
        assert calc.number_of_parking_spaces == math.floor(50000 / 5000) * math.floor(20000 / 2500)
        assert calc.parking_area == pytest.approx(1000)
        assert calc.specific_production == pytest.approx(950)
        assert calc.annual_production == pytest.approx(43.2 * 950)
        assert calc.covered_ratio == pytest.approx(80 * 2.583252 / 1000 * 100)
        assert calc.solar_panel_weight == pytest.approx(80 * 28.6)

    def test_latitude_bands(self):
        south = self.strategy.calculate_solar_metrics(
            REFERENCE_CANOPY, self.array, Location(latitude=37, longitude=-5),
        )
        north = self.strategy.calculate_solar_metrics(
            REFERENCE_CANOPY, self.array, Location(latitude=52, longitude=4),
        )
        assert south.specific_production == pytest.approx(1300 * 0.95)
        assert north.specific_production == pytest.approx(900 * 0.95)

    @pytest.mark.parametrize("tilt,expected", [
        (-5, 0.85), (0, 0.85), (7.5, 0.925), (15, 0.95), (30, 1.0),
        (33, 1.0), (35, 1.0), (40, 0.975), (45, 0.95), (60, 0.90),
    ])
    def test_tilt_factor(self, tilt, expected):
        assert tilt_factor(tilt) == pytest.approx(expected)

    @pytest.mark.parametrize("tilt,expected", [
        (0, 0.45), (14.9, 0.45), (15, 0.45), (20, 0.375), (30, 0.225), (40, 0.225),
    ])
    def test_snow_load(self, tilt, expected):
        assert self.strategy.snow_load(tilt) == pytest.approx(expected)

    def test_wind_load(self):
        assert self.strategy.wind_load(0) == pytest.approx(0.8)
        assert self.strategy.wind_load(15) == pytest.approx(0.8 * (1 + 15 / 90))

    @pytest.mark.parametrize("field", ["parking_space_width", "parking_space_length"])
    def test_zero_parking_space_is_an_error(self, field):
        dims = REFERENCE_CANOPY.model_copy(
            update={field: 0, "number_of_parking_spaces": 10},
        )
        result = self.strategy.validate_dimensions(dims)

        assert result.error_messages() == ["Parking space size must be positive"]
        with pytest.raises(InvalidDimensionsError):
            self.strategy.calculate_solar_metrics(dims, self.array)

    def test_parking_capacity_check(self):
        enough = REFERENCE_CANOPY.model_copy(update={"number_of_parking_spaces": 80})
        too_many = REFERENCE_CANOPY.model_copy(update={"number_of_parking_spaces": 81})

        assert self.strategy.validate_dimensions(enough).is_valid
        result = self.strategy.validate_dimensions(too_many)
        assert not result.is_valid
        assert "81" in result.error_messages()[0]

    @pytest.mark.parametrize("field,value", [
        ("length", 4000), ("width", 41000), ("clear_height", 1800),
        ("clear_height", 4500), ("tilt", 35), ("tilt", -1),
    ])
    def test_range_errors(self, field, value):
        dims = REFERENCE_CANOPY.model_copy(update={field: value})
        assert not self.strategy.validate_dimensions(dims).is_valid

    def test_low_tilt_warns(self):
        dims = REFERENCE_CANOPY.model_copy(update={"tilt": 5})
        result = self.strategy.validate_dimensions(dims)
        assert result.is_valid
        assert result.warnings

    def test_large_canopy_warnings(self):
        dims = OmbriereDimensions(length=100000, width=25000, clear_height=3500, tilt=5)
        calc = self.strategy.calculate_frame(dims, BuildingParameters(post_spacing=7000))
        text = " ".join(calc.warnings)
        assert ">6 m" in text
        assert "bracing" in text
        assert "foundations" in text
