"""Building models — configuration input, dimensions, openings and building entities."""

from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Annotated, Any, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field, model_validator

from .geometry import Position2D
from .parameters import BuildingParameters, ParameterOverrides
from .solar import SolarArrayConfig, ElectricalDesign, Location
from .structure import MonoPenteStructure, OmbriereStructure


class BuildingType(str, Enum):
    MONO_PENTE = "monopente"
    OMBRIERE = "ombriere"


class WallType(str, Enum):
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"


class OpeningType(str, Enum):
    DOOR = "door"
    WINDOW = "window"
    SECTIONAL_DOOR = "sectional_door"
    CURTAIN = "curtain"


class Opening(BaseModel):
    """An opening (door/window) in a wall face."""
    model_config = ConfigDict(frozen=True)

    id: str
    type: OpeningType = OpeningType.DOOR
    wall: WallType = WallType.FRONT
    position: Position2D = Position2D()
    width: float        # mm
    height: float       # mm
    reference: Optional[str] = None

    @property
    def area(self) -> float:
        """Opening area in m²."""
        return self.width * self.height / 1e6


class CladdingType(str, Enum):
    SANDWICH_80MM = "sandwich_80mm"
    SANDWICH_100MM = "sandwich_100mm"
    SANDWICH_120MM = "sandwich_120mm"
    STEEL_PANEL_SINGLE = "steel_panel_single"
    CUSTOM = "custom"
    NONE = "none"


class RoofingType(str, Enum):
    STEEL_PANEL_075MM = "steel_panel_0.75mm"
    STEEL_PANEL_100MM = "steel_panel_1.00mm"
    SANDWICH_80MM = "sandwich_80mm"
    SANDWICH_100MM = "sandwich_100mm"
    CUSTOM = "custom"
    NONE = "none"


class CladdingFinish(BaseModel):
    type: CladdingType = CladdingType.SANDWICH_80MM
    color: str = "RAL 9002"
    thickness: float = 80


class RoofingFinish(BaseModel):
    type: RoofingType = RoofingType.SANDWICH_80MM
    color: str = "RAL 7016"
    thickness: float = 80


class TrimFinish(BaseModel):
    color: str = "RAL 9006"


class Finishes(BaseModel):
    cladding: CladdingFinish = CladdingFinish()
    roofing: RoofingFinish = RoofingFinish()
    trim: TrimFinish = TrimFinish()


class BuildingMetadata(BaseModel):
    author: Optional[str] = None
    project: Optional[str] = None
    notes: Optional[str] = None


class MonoPenteDimensions(BaseModel):
    """Single-pitch building envelope."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["monopente"] = "monopente"
    length: float       # Along the ridge (mm)
    width: float        # Span (mm)
    height_wall: float  # Eave height, low side (mm)
    slope: float        # Percent


class OmbriereStructuralVariant(str, Enum):
    CENTERED_POST = "centered_post"
    DOUBLE_CENTERED_POST = "double_centered_post"
    Y_SHAPED = "y_shaped"
    OFFSET_POST = "offset_post"


class OmbriereDimensions(BaseModel):
    """Flat photovoltaic canopy envelope."""
    model_config = ConfigDict(frozen=True)

    kind: Literal["ombriere"] = "ombriere"
    length: float
    width: float
    clear_height: float         # Vehicle clearance (mm)
    tilt: float = 0.0           # Panel tilt (degrees)
    slope: float = 0.0          # Always flat
    number_of_parking_spaces: Optional[int] = None
    parking_space_width: float = 2500
    parking_space_length: float = 5000
    structural_variant: OmbriereStructuralVariant = OmbriereStructuralVariant.CENTERED_POST


Dimensions = Annotated[
    Union[MonoPenteDimensions, OmbriereDimensions],
    Field(discriminator="kind"),
]


def _infer_dimension_kind(building_type: Any, dimensions: dict) -> str:
    if building_type in (BuildingType.MONO_PENTE.value, BuildingType.OMBRIERE.value):
        return str(building_type)
    if isinstance(building_type, BuildingType):
        return building_type.value
    return "ombriere" if "clear_height" in dimensions else "monopente"


class BuildingConfig(BaseModel):
    """Everything a caller submits to create a building."""
    model_config = ConfigDict(frozen=True)

    name: str = ""
    type: str
    dimensions: Optional[Dimensions] = None
    parameters: Optional[ParameterOverrides] = None
    openings: list[Opening] = []
    finishes: Optional[Finishes] = None
    metadata: Optional[BuildingMetadata] = None

    # Canopy only
    solar_array: Optional[SolarArrayConfig] = None
    location: Optional[Location] = None

    @model_validator(mode="before")
    @classmethod
    def _tag_dimensions(cls, data: Any) -> Any:
        if isinstance(data, dict):
            dims = data.get("dimensions")
            if isinstance(dims, dict) and "kind" not in dims:
                data = dict(data)
                kind = _infer_dimension_kind(data.get("type"), dims)
                data["dimensions"] = {**dims, "kind": kind}
        return data


class ParkingLayout(BaseModel):
    number_of_spaces: int
    space_width: float
    space_length: float
    total_area: float       # m²


class SolarPerformance(BaseModel):
    annual_production: float        # kWh/year
    specific_production: float      # kWh/kWc/year
    performance_ratio: float
    carbon_offset: float            # tonnes CO2/year


class _BuildingBase(BaseModel):
    id: str
    name: str
    created_at: datetime
    updated_at: datetime
    parameters: BuildingParameters
    openings: list[Opening] = []
    finishes: Finishes = Finishes()
    metadata: Optional[BuildingMetadata] = None


class MonoPenteBuilding(_BuildingBase):
    type: Literal["monopente"] = "monopente"
    dimensions: MonoPenteDimensions
    structure: MonoPenteStructure = MonoPenteStructure()


class OmbriereBuilding(_BuildingBase):
    type: Literal["ombriere"] = "ombriere"
    dimensions: OmbriereDimensions
    structure: OmbriereStructure = OmbriereStructure()
    solar_array: SolarArrayConfig
    electrical_design: ElectricalDesign
    parking_layout: Optional[ParkingLayout] = None
    performance: Optional[SolarPerformance] = None
    location: Optional[Location] = None


Building = Annotated[
    Union[MonoPenteBuilding, OmbriereBuilding],
    Field(discriminator="type"),
]
