"""Structural output models — generated elements and per-type aggregates."""

from __future__ import annotations
from enum import Enum
from typing import Iterator
from pydantic import BaseModel, ConfigDict

from .geometry import Vector3, ORIGIN
from .solar import SolarPanel, InverterConfig, CableTrayConfig


class StructuralElementType(str, Enum):
    POST = "post"
    RAFTER = "rafter"
    PURLIN = "purlin"
    RAIL = "rail"
    BEAM = "beam"
    BRACING = "bracing"
    SOLAR_RAIL = "solar_rail"


class StructuralElement(BaseModel):
    """A single steel member positioned in building space."""
    model_config = ConfigDict(frozen=True)

    id: str
    type: StructuralElementType
    profile: str        # Designation, e.g. 'IPE 240'
    length: float       # mm
    position: Vector3 = ORIGIN
    rotation: Vector3 = ORIGIN   # radians
    weight: float       # kg
    reference: str = ""  # e.g. 'POT-3'


class MonoPenteStructure(BaseModel):
    """Frame of a single-pitch building."""
    posts: list[StructuralElement] = []
    rafters: list[StructuralElement] = []
    purlins: list[StructuralElement] = []
    rails: list[StructuralElement] = []

    def elements(self) -> Iterator[StructuralElement]:
        yield from self.posts
        yield from self.rafters
        yield from self.purlins
        yield from self.rails


class OmbriereStructure(BaseModel):
    """Frame and equipment of a photovoltaic canopy."""
    posts: list[StructuralElement] = []
    beams: list[StructuralElement] = []
    purlins: list[StructuralElement] = []
    rails: list[StructuralElement] = []
    bracing: list[StructuralElement] = []
    solar_panels: list[SolarPanel] = []
    solar_framing: list[StructuralElement] = []
    inverters: list[InverterConfig] = []
    cable_trays: list[CableTrayConfig] = []

    def elements(self) -> Iterator[StructuralElement]:
        yield from self.posts
        yield from self.beams
        yield from self.purlins
        yield from self.rails
        yield from self.bracing
        yield from self.solar_framing
