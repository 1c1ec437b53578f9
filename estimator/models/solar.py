"""Photovoltaic models: panel datasheets, arrays, mounting systems, electrical design."""

from __future__ import annotations
from enum import Enum
from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field

from .geometry import Vector3


PanelOrientation = Literal["landscape", "portrait"]
LayoutObjective = Literal["quantity", "coverage", "balanced"]


class SolarPanelSpec(BaseModel):
    """Manufacturer datasheet of a photovoltaic module."""
    model_config = ConfigDict(frozen=True)

    manufacturer: str
    model: str
    width: float            # Long side (mm)
    height: float           # Short side (mm)
    thickness: float = 35
    weight: float           # kg
    power: float            # Wc
    voltage: float = 0.0
    current: float = 0.0
    efficiency: float = 0.0  # %
    cell_type: Literal["monocrystalline", "polycrystalline", "thin-film"] = "monocrystalline"
    number_of_cells: int = 0
    power_warranty: Optional[int] = None
    product_warranty: Optional[int] = None

    @property
    def area(self) -> float:
        """Module area in m²."""
        return self.width * self.height / 1e6

    def footprint(self, orientation: PanelOrientation) -> tuple[float, float]:
        """(along length, across width) footprint in mm for an orientation."""
        if orientation == "landscape":
            return self.width, self.height
        return self.height, self.width


class MountingSystemType(str, Enum):
    SINGLE_RAIL = "single_rail"
    DOUBLE_RAIL = "double_rail"
    TRIPLE_RAIL = "triple_rail"
    DIRECT_CLAMP = "direct_clamp"
    BEAM_SYSTEM = "beam_system"
    BALLASTED = "ballasted"


class MountingSystemConfig(BaseModel):
    """Spacing and margin constraints of a mounting system."""
    model_config = ConfigDict(frozen=True)

    type: MountingSystemType
    min_row_spacing: float
    min_column_spacing: float
    recommended_row_spacing: float
    recommended_column_spacing: float
    edge_margin_longitudinal: float
    edge_margin_transverse: float
    supports_portrait: bool = True
    supports_landscape: bool = True
    max_panel_weight: float = 50.0

    def supported_orientations(self) -> list[PanelOrientation]:
        orientations: list[PanelOrientation] = []
        if self.supports_landscape:
            orientations.append("landscape")
        if self.supports_portrait:
            orientations.append("portrait")
        return orientations


class PanelLayoutResult(BaseModel):
    """Best grid found by the layout optimizer."""
    rows: int
    columns: int
    orientation: PanelOrientation
    row_spacing: float
    column_spacing: float
    total_panels: int
    total_power: float      # Wc
    coverage_ratio: float   # %
    used_length: float
    used_width: float
    margin_front: float
    margin_back: float
    margin_left: float
    margin_right: float


class SolarArrayConfig(BaseModel):
    """Requested photovoltaic array on top of a canopy."""
    panel: SolarPanelSpec
    orientation: PanelOrientation = "landscape"
    mounting_system: Optional[MountingSystemConfig] = None

    rows: int = 0
    columns: int = 0
    row_spacing: Optional[float] = None
    column_spacing: Optional[float] = None

    auto_layout: bool = False
    optimize_for: LayoutObjective = "quantity"
    custom_edge_margin_longitudinal: Optional[float] = None
    custom_edge_margin_transverse: Optional[float] = None

    tilt: float = 15.0
    azimuth: float = 180.0
    anti_reflective_coating: bool = True
    hail_resistance: bool = True

    # Filled once a layout is resolved
    layout: Optional[PanelLayoutResult] = None
    total_panels: Optional[int] = None
    total_power: Optional[float] = None   # kWc
    total_area: Optional[float] = None    # m²

    @property
    def panel_count(self) -> int:
        return self.rows * self.columns

    @property
    def power_kwc(self) -> float:
        return self.panel_count * self.panel.power / 1000


class Location(BaseModel):
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    altitude: float = 0.0


class SolarPanel(BaseModel):
    """A placed module of the array."""
    model_config = ConfigDict(frozen=True)

    id: str
    spec: SolarPanelSpec
    row: int
    column: int
    position: Vector3
    orientation: PanelOrientation
    tilt: float
    azimuth: float
    status: Literal["active", "inactive", "defective"] = "active"
    string_id: Optional[str] = None
    inverter_id: Optional[str] = None


class InverterConfig(BaseModel):
    manufacturer: str
    model: str
    power: float            # kW AC
    efficiency: float       # %
    number_of_mppt: int
    quantity: int = 1
    position: Vector3


class CableTrayConfig(BaseModel):
    width: float
    height: float
    length: float
    material: Literal["aluminum", "galvanized_steel", "stainless_steel"]
    elevation: float
    cover_type: Literal["none", "perforated", "solid"] = "perforated"


class ElectricalDesign(BaseModel):
    total_power: float      # kWc
    total_panels: int
    inverters: list[InverterConfig] = []
    cable_trays: list[CableTrayConfig] = []
    dc_cable_length: float = 0.0   # m
    ac_cable_length: float = 0.0   # m
    earthing_system: Literal["TT", "TN", "IT"] = "TT"
    surge_protection: bool = True
    annual_production: Optional[float] = None
    specific_production: Optional[float] = None


COMMON_SOLAR_PANELS: dict[str, SolarPanelSpec] = {
    "longi-540w": SolarPanelSpec(
        manufacturer="LONGi", model="LR5-72HPH-540M",
        width=2278, height=1134, thickness=35, weight=28.6,
        power=540, voltage=49.5, current=10.91, efficiency=20.9,
        number_of_cells=144, power_warranty=30, product_warranty=15,
    ),
    "ja-solar-550w": SolarPanelSpec(
        manufacturer="JA Solar", model="JAM72S30-550/MR",
        width=2278, height=1134, thickness=35, weight=28.5,
        power=550, voltage=49.8, current=11.04, efficiency=21.3,
        number_of_cells=144, power_warranty=30, product_warranty=12,
    ),
    "trina-600w": SolarPanelSpec(
        manufacturer="Trina Solar", model="TSM-DEG21C.20",
        width=2384, height=1303, thickness=35, weight=33.2,
        power=600, voltage=45.7, current=13.13, efficiency=21.5,
        number_of_cells=156, power_warranty=30, product_warranty=15,
    ),
}


def _mounting(kind: MountingSystemType, min_row: float, min_col: float,
              rec_row: float, rec_col: float, margin_long: float,
              margin_trans: float, max_weight: float) -> MountingSystemConfig:
    return MountingSystemConfig(
        type=kind,
        min_row_spacing=min_row, min_column_spacing=min_col,
        recommended_row_spacing=rec_row, recommended_column_spacing=rec_col,
        edge_margin_longitudinal=margin_long, edge_margin_transverse=margin_trans,
        max_panel_weight=max_weight,
    )


MOUNTING_SYSTEMS: dict[str, MountingSystemConfig] = {
    "single-rail-standard": _mounting(MountingSystemType.SINGLE_RAIL, 30, 20, 50, 30, 200, 150, 35),
    "double-rail-standard": _mounting(MountingSystemType.DOUBLE_RAIL, 40, 25, 80, 50, 250, 200, 40),
    "double-rail-heavy": _mounting(MountingSystemType.DOUBLE_RAIL, 50, 30, 100, 60, 300, 250, 45),
    "triple-rail-snow": _mounting(MountingSystemType.TRIPLE_RAIL, 60, 35, 120, 70, 350, 300, 50),
    "direct-clamp-minimal": _mounting(MountingSystemType.DIRECT_CLAMP, 20, 15, 30, 20, 150, 100, 30),
    "beam-system-optimized": _mounting(MountingSystemType.BEAM_SYSTEM, 50, 30, 100, 50, 300, 250, 50),
}
