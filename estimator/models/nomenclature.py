"""Bill of materials models."""

from __future__ import annotations
from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel


class NomenclatureCategory(str, Enum):
    MAIN_FRAME = "main_frame"
    SECONDARY_FRAME = "secondary_frame"
    SOLAR = "solar"


class Unit(str, Enum):
    PIECES = "pcs"
    METERS = "m"
    SQUARE_METERS = "m2"


class NomenclatureItem(BaseModel):
    ref: str
    designation: str
    profile: str
    quantity: int
    unit: Unit = Unit.PIECES
    unit_length: float      # mm
    total_length: float     # mm
    unit_weight: float      # kg
    total_weight: float     # kg


class NomenclatureSection(BaseModel):
    title: str
    category: NomenclatureCategory
    items: list[NomenclatureItem] = []
    total_weight: float = 0.0
    total_length: float = 0.0


class NomenclatureTotals(BaseModel):
    total_steel_weight: float = 0.0
    total_elements: int = 0
    roofing_area: float = 0.0       # m²
    cladding_area: float = 0.0      # m²
    solar_panels: int = 0
    solar_power: float = 0.0        # kWc


class Nomenclature(BaseModel):
    building_id: str
    building_name: str
    generated_at: datetime
    version: str = "1.0"
    sections: list[NomenclatureSection] = []
    totals: NomenclatureTotals = NomenclatureTotals()
    notes: Optional[str] = None

    def section(self, category: NomenclatureCategory) -> Optional[NomenclatureSection]:
        for s in self.sections:
            if s.category == category:
                return s
        return None
