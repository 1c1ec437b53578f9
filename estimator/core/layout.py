"""Solar panel layout optimizer.

Searches orientation x rows x columns for the grid that best fills a
rectangle under a mounting system's spacing and edge-margin constraints.
"""

from __future__ import annotations
import logging
import math
from typing import Literal, Optional
from pydantic import BaseModel

from estimator.models import (
    SolarPanelSpec, MountingSystemConfig, PanelLayoutResult, SolarArrayConfig,
)
from estimator.models.solar import PanelOrientation, LayoutObjective

logger = logging.getLogger(__name__)


class LayoutOptions(BaseModel):
    """Caller controls for `optimal_layout`."""
    orientation: Literal["landscape", "portrait", "auto"] = "auto"
    optimize_for: LayoutObjective = "quantity"
    use_recommended_spacing: bool = True
    row_spacing: Optional[float] = None
    column_spacing: Optional[float] = None
    edge_margin_longitudinal: Optional[float] = None
    edge_margin_transverse: Optional[float] = None


def _fit_count(available: float, size: float, gap: float) -> int:
    """How many items of `size` separated by `gap` fit in `available`."""
    if available <= 0 or size <= 0:
        return 0
    return max(0, math.floor((available + gap) / (size + gap)))


def _score(objective: LayoutObjective, total_panels: int, coverage: float) -> float:
    if objective == "coverage":
        return coverage
    if objective == "balanced":
        return total_panels * (1 + coverage / 200)
    return float(total_panels)


def optimal_layout(
    available_length: float,
    available_width: float,
    panel: SolarPanelSpec,
    mounting_system: MountingSystemConfig,
    options: LayoutOptions | None = None,
) -> PanelLayoutResult:
    """
    Return the highest-scoring panel grid for the available rectangle.

    Columns run along the length, rows across the width. When no orientation
    fits, a zero-panel result carrying the input margins is returned.
    """
    if options is None:
        options = LayoutOptions()

    margin_long = (
        options.edge_margin_longitudinal
        if options.edge_margin_longitudinal is not None
        else mounting_system.edge_margin_longitudinal
    )
    margin_trans = (
        options.edge_margin_transverse
        if options.edge_margin_transverse is not None
        else mounting_system.edge_margin_transverse
    )

    if options.row_spacing is not None:
        row_spacing = options.row_spacing
    elif options.use_recommended_spacing:
        row_spacing = mounting_system.recommended_row_spacing
    else:
        row_spacing = mounting_system.min_row_spacing

    if options.column_spacing is not None:
        column_spacing = options.column_spacing
    elif options.use_recommended_spacing:
        column_spacing = mounting_system.recommended_column_spacing
    else:
        column_spacing = mounting_system.min_column_spacing

    usable_length = available_length - 2 * margin_long
    usable_width = available_width - 2 * margin_trans

    orientations: list[PanelOrientation]
    if options.orientation == "auto":
        orientations = mounting_system.supported_orientations()
    else:
        orientations = [options.orientation]

    total_area = available_length * available_width / 1e6
    best: PanelLayoutResult | None = None
    best_score = -1.0

    for orientation in orientations:
        panel_length, panel_width = panel.footprint(orientation)

        columns = _fit_count(usable_length, panel_length, column_spacing)
        rows = _fit_count(usable_width, panel_width, row_spacing)
        if columns <= 0 or rows <= 0:
            logger.debug("Orientation %s does not fit %.0fx%.0f", orientation,
                         usable_length, usable_width)
            continue

        total_panels = rows * columns
        used_length = columns * panel_length + (columns - 1) * column_spacing
        used_width = rows * panel_width + (rows - 1) * row_spacing
        coverage = (total_panels * panel.area / total_area) * 100 if total_area > 0 else 0.0

        score = _score(options.optimize_for, total_panels, coverage)
        if score > best_score:
            best_score = score
            best = PanelLayoutResult(
                rows=rows,
                columns=columns,
                orientation=orientation,
                row_spacing=row_spacing,
                column_spacing=column_spacing,
                total_panels=total_panels,
                total_power=total_panels * panel.power,
                coverage_ratio=coverage,
                used_length=used_length,
                used_width=used_width,
                margin_front=margin_long,
                margin_back=available_length - margin_long - used_length,
                margin_left=margin_trans,
                margin_right=available_width - margin_trans - used_width,
            )

    if best is None:
        return PanelLayoutResult(
            rows=0,
            columns=0,
            orientation="landscape",
            row_spacing=row_spacing,
            column_spacing=column_spacing,
            total_panels=0,
            total_power=0.0,
            coverage_ratio=0.0,
            used_length=0.0,
            used_width=0.0,
            margin_front=margin_long,
            margin_back=margin_long,
            margin_left=margin_trans,
            margin_right=margin_trans,
        )
    return best


def apply_solar_array_layout(
    config: SolarArrayConfig,
    available_length: float,
    available_width: float,
) -> SolarArrayConfig:
    """Resolve rows/columns of an auto-layout array; other arrays are returned as is."""
    if config.mounting_system is None or not config.auto_layout:
        return config

    layout = optimal_layout(
        available_length,
        available_width,
        config.panel,
        config.mounting_system,
        LayoutOptions(
            orientation=config.orientation,
            optimize_for=config.optimize_for,
            row_spacing=config.row_spacing,
            column_spacing=config.column_spacing,
            edge_margin_longitudinal=config.custom_edge_margin_longitudinal,
            edge_margin_transverse=config.custom_edge_margin_transverse,
        ),
    )
    logger.debug("Auto layout: %d x %d %s", layout.rows, layout.columns, layout.orientation)

    return config.model_copy(update={
        "orientation": layout.orientation,
        "rows": layout.rows,
        "columns": layout.columns,
        "row_spacing": layout.row_spacing,
        "column_spacing": layout.column_spacing,
        "layout": layout,
        "total_panels": layout.total_panels,
        "total_power": layout.total_power / 1000,
        "total_area": layout.total_panels * config.panel.area,
    })
