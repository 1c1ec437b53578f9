# tests/test_layout.py
import pytest

from estimator.core.layout import LayoutOptions, apply_solar_array_layout, optimal_layout
from estimator.models import COMMON_SOLAR_PANELS, MOUNTING_SYSTEMS, SolarArrayConfig

PANEL = COMMON_SOLAR_PANELS["longi-540w"]
DOUBLE_RAIL = MOUNTING_SYSTEMS["double-rail-standard"]


class TestOptimalLayout:
    def test_best_orientation_for_quantity(self):
        layout = optimal_layout(50000, 20000, PANEL, DOUBLE_RAIL)

        # Landscape: 21 columns x 16 rows beats portrait 41 x 8
        assert layout.orientation == "landscape"
        assert layout.columns == 21
        assert layout.rows == 16
        assert layout.total_panels == 336
        assert layout.total_power == pytest.approx(336 * 540)

    def test_rows_times_columns_is_total(self):
        layout = optimal_layout(32000, 11000, PANEL, DOUBLE_RAIL)
        assert layout.rows * layout.columns == layout.total_panels

    def test_used_size_and_residual_margins(self):
        layout = optimal_layout(50000, 20000, PANEL, DOUBLE_RAIL)

        assert layout.used_length == pytest.approx(21 * 2278 + 20 * 50)
        assert layout.used_width == pytest.approx(16 * 1134 + 15 * 80)
        assert layout.margin_front == 250
        assert layout.margin_left == 200
        assert layout.margin_back == pytest.approx(50000 - 250 - layout.used_length)
        assert layout.margin_right == pytest.approx(20000 - 200 - layout.used_width)

    def test_forced_orientation(self):
        layout = optimal_layout(
            50000, 20000, PANEL, DOUBLE_RAIL, LayoutOptions(orientation="portrait"),
        )
        assert layout.orientation == "portrait"
        assert (layout.columns, layout.rows) == (41, 8)

    def test_minimum_spacing(self):
        recommended = optimal_layout(50000, 20000, PANEL, DOUBLE_RAIL)
        minimum = optimal_layout(
            50000, 20000, PANEL, DOUBLE_RAIL, LayoutOptions(use_recommended_spacing=False),
        )
        assert minimum.row_spacing == DOUBLE_RAIL.min_row_spacing
        assert minimum.total_panels >= recommended.total_panels

    def test_coverage_ratio(self):
        layout = optimal_layout(50000, 20000, PANEL, DOUBLE_RAIL, LayoutOptions(optimize_for="coverage"))
        expected = layout.total_panels * PANEL.area / (50000 * 20000 / 1e6) * 100
        assert layout.coverage_ratio == pytest.approx(expected)

    def test_area_too_small_returns_zero_layout(self):
        layout = optimal_layout(1000, 1000, PANEL, DOUBLE_RAIL)

        assert layout.total_panels == 0
        assert layout.rows == 0
        assert layout.columns == 0
        assert layout.total_power == 0
        assert layout.margin_front == DOUBLE_RAIL.edge_margin_longitudinal
        assert layout.margin_back == DOUBLE_RAIL.edge_margin_longitudinal
        assert layout.margin_left == DOUBLE_RAIL.edge_margin_transverse
        assert layout.margin_right == DOUBLE_RAIL.edge_margin_transverse

    def test_custom_margins_are_reported_when_nothing_fits(self):
        layout = optimal_layout(
            3000, 3000, PANEL, DOUBLE_RAIL,
            LayoutOptions(edge_margin_longitudinal=1400, edge_margin_transverse=1000),
        )
        assert layout.total_panels == 0
        assert layout.margin_front == 1400
        assert layout.margin_right == 1000


class TestApplySolarArrayLayout:
    def test_auto_layout_fills_array(self):
        config = SolarArrayConfig(panel=PANEL, mounting_system=DOUBLE_RAIL, auto_layout=True)
        resolved = apply_solar_array_layout(config, 50000, 20000)

        assert (resolved.rows, resolved.columns) == (16, 21)
        assert resolved.total_panels == 336
        assert resolved.total_power == pytest.approx(181.44)
        assert resolved.total_area == pytest.approx(336 * PANEL.area)
        assert resolved.layout is not None
        assert config.rows == 0

    def test_manual_array_is_unchanged(self):
        config = SolarArrayConfig(panel=PANEL, rows=4, columns=20, mounting_system=DOUBLE_RAIL)
        assert apply_solar_array_layout(config, 50000, 20000) is config
