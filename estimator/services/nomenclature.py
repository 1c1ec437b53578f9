"""Bill of materials for generated buildings."""

from __future__ import annotations
import logging
from collections import defaultdict
from typing import Iterable

from estimator.engines.base import (
    AnyBuilding, Clock, calculate_height_ridge, calculate_rafter_length, utcnow,
)
from estimator.models import (
    MonoPenteBuilding, Nomenclature, NomenclatureCategory, NomenclatureItem,
    NomenclatureSection, NomenclatureTotals, OmbriereBuilding, StructuralElement,
)
from estimator.strategies.base import CalculationStrategy

logger = logging.getLogger(__name__)

# Reference prefix and designation per element group
_LABELS = {
    "posts": ("POT", "Post"),
    "rafters": ("ARB", "Rafter"),
    "beams": ("POU", "Beam"),
    "purlins": ("PAN", "Purlin"),
    "rails": ("LIS", "Cladding rail"),
    "bracing": ("CV", "Bracing"),
    "solar_framing": ("RAIL", "Mounting rail"),
}

_MAIN_FRAME = ("posts", "rafters", "beams", "purlins")
_SECONDARY_FRAME = ("rails", "bracing")


def _group_items(group: str, elements: Iterable[StructuralElement]) -> list[NomenclatureItem]:
    """One item per (profile, cut length) pair, in first-seen order."""
    prefix, designation = _LABELS[group]
    buckets: dict[tuple[str, float], list[StructuralElement]] = defaultdict(list)
    for element in elements:
        buckets[(element.profile, round(element.length, 1))].append(element)

    items = []
    for n, ((profile, length), members) in enumerate(buckets.items(), start=1):
        items.append(NomenclatureItem(
            ref=f"{prefix}-{n:02d}",
            designation=f"{designation} {profile}",
            profile=profile,
            quantity=len(members),
            unit_length=length,
            total_length=sum(m.length for m in members),
            unit_weight=members[0].weight,
            total_weight=sum(m.weight for m in members),
        ))
    return items


def _section(
    title: str, category: NomenclatureCategory, items: list[NomenclatureItem],
) -> NomenclatureSection:
    return NomenclatureSection(
        title=title,
        category=category,
        items=items,
        total_weight=sum(i.total_weight for i in items),
        total_length=sum(i.total_length for i in items),
    )


def _frame_items(building: AnyBuilding, groups: tuple[str, ...]) -> list[NomenclatureItem]:
    items: list[NomenclatureItem] = []
    for group in groups:
        elements = getattr(building.structure, group, [])
        items.extend(_group_items(group, elements))
    return items


def _solar_section(building: OmbriereBuilding) -> NomenclatureSection:
    structure = building.structure
    items = _group_items("solar_framing", structure.solar_framing)

    if structure.solar_panels:
        spec = building.solar_array.panel
        count = len(structure.solar_panels)
        items.append(NomenclatureItem(
            ref="PV-01",
            designation=f"PV module {spec.manufacturer} {spec.power:g} Wc",
            profile=spec.model,
            quantity=count,
            unit_length=spec.width,
            total_length=0.0,
            unit_weight=spec.weight,
            total_weight=count * spec.weight,
        ))
    if structure.inverters:
        inverter = structure.inverters[0]
        items.append(NomenclatureItem(
            ref="OND-01",
            designation=f"Inverter {inverter.manufacturer} {inverter.power:g} kW",
            profile=inverter.model,
            quantity=sum(i.quantity for i in structure.inverters),
            unit_length=0.0,
            total_length=0.0,
            unit_weight=0.0,
            total_weight=0.0,
        ))

    section = _section("CENTRALE PHOTOVOLTAÏQUE", NomenclatureCategory.SOLAR, items)
    # Panels are not linear members
    section.total_length = sum(i.total_length for i in items if i.ref != "PV-01")
    return section


def _envelope_areas(building: MonoPenteBuilding) -> tuple[float, float]:
    """(roofing, net cladding) areas in m² of a sloped building."""
    dims = building.dimensions
    height_ridge = calculate_height_ridge(dims.height_wall, dims.width, dims.slope)
    rafter_length = calculate_rafter_length(dims.width, dims.slope)

    roofing = CalculationStrategy.roof_area(dims.length, rafter_length)
    cladding = (
        CalculationStrategy.wall_area(dims.length, dims.height_wall)
        + CalculationStrategy.wall_area(dims.length, height_ridge)
        + dims.width * (dims.height_wall + height_ridge) / 1e6
    )
    return roofing, CalculationStrategy.deduct_openings_area(cladding, building.openings)


def build_nomenclature(building: AnyBuilding, clock: Clock = utcnow) -> Nomenclature:
    """
    Group a building's members into a bill of materials.

    Main frame carries posts, rafters, beams and purlins; secondary frame
    carries rails and bracing. Canopies add a photovoltaic section.
    """
    sections = [
        _section("OSSATURE PRINCIPALE", NomenclatureCategory.MAIN_FRAME,
                 _frame_items(building, _MAIN_FRAME)),
        _section("OSSATURE SECONDAIRE", NomenclatureCategory.SECONDARY_FRAME,
                 _frame_items(building, _SECONDARY_FRAME)),
    ]
    steel_weight = sum(s.total_weight for s in sections)
    total_elements = sum(1 for _ in building.structure.elements())

    totals = NomenclatureTotals(total_steel_weight=steel_weight, total_elements=total_elements)
    if isinstance(building, OmbriereBuilding):
        sections.append(_solar_section(building))
        totals.roofing_area = building.dimensions.length * building.dimensions.width / 1e6
        totals.solar_panels = len(building.structure.solar_panels)
        totals.solar_power = building.electrical_design.total_power
    else:
        totals.roofing_area, totals.cladding_area = _envelope_areas(building)

    logger.debug(
        "Nomenclature for %s: %d sections, %.0f kg steel",
        building.id, len(sections), steel_weight,
    )
    return Nomenclature(
        building_id=building.id,
        building_name=building.name,
        generated_at=clock(),
        sections=sections,
        totals=totals,
        notes=building.metadata.notes if building.metadata else None,
    )
