"""
Conduit fill per NEC Chapter 9 Table 1 (in2) and IEC 61386 / IEC 60364-5-52 (mm2).

Wires entered in the other standard's gauge system are converted to the
nearest equivalent size first. AWG and mm2 sizes do not map one to one, so
the converted area is an approximation and each converted entry is marked.
"""
import logging
from typing import Dict, List, Optional, Tuple

from core import compliance
from core.converters import awg_to_mm2, find_minimum_metric_size, format_metric_size, mm2_to_awg, normalize_awg
from core.errors import InputValidationError, NoSuitableConduitError
from core.models import (
    ConduitAlternative, ConduitCatalogEntry, ConduitFillInput, ConduitResult, ConduitWireArea, StandardId, WireEntry,
)
from standards.iec_tables import IEC_CONDUITS, IEC_INSULATION_TABLES
from standards.nec_tables import NEC_CONDUITS, NEC_INSULATIONS, NEC_WIRE_AREAS_IN2

logger = logging.getLogger(__name__)

# NEC Chapter 9 Table 1
FILL_LIMITS = {1: 53.0, 2: 31.0}
FILL_LIMIT_OVER_2 = 40.0

NEC_TO_IEC_INSULATION = {
    "THHN": "PVC", "THWN": "PVC", "THWN-2": "PVC", "THHW": "PVC",
    "XHHW": "XLPE", "RHH": "XLPE", "RHW": "XLPE", "USE": "XLPE",
}
IEC_TO_NEC_INSULATION = {"PVC": "THHN", "LSOH": "THHN", "XLPE": "XHHW", "EPR": "XHHW"}

# Ambient range (C) expected for each application
NEC_APPLICATION_TEMPS = {
    "residential": (10, 40), "commercial": (0, 50), "industrial": (-20, 70),
    "hazardous": (-40, 85), "data_center": (18, 25), "healthcare": (20, 26),
    "educational": (18, 24), "outdoor": (-30, 50), "underground": (0, 30), "marine": (-10, 40),
}
IEC_APPLICATION_TEMPS = dict(NEC_APPLICATION_TEMPS, residential=(-5, 35), commercial=(-10, 40), industrial=(-20, 60))

INSTALLATION_METHODS = (
    "indoor", "outdoor", "underground", "hazardous", "wet_location",
    "concrete_slab", "overhead", "dry_location", "cable_tray", "free_air",
)

AREA_UNITS = {StandardId.NEC: "in²", StandardId.IEC: "mm²"}

def get_fill_limit(conductor_count: int) -> Tuple[float, str]:
    limit = FILL_LIMITS.get(conductor_count, FILL_LIMIT_OVER_2)
    if conductor_count == 1:
        rule = "1 conductor: 53%"
    elif conductor_count == 2:
        rule = "2 conductors: 31%"
    else:
        rule = "Over 2 conductors: 40%"
    return limit, rule

def get_conduit_catalog(standard: StandardId) -> Dict:
    return NEC_CONDUITS if standard == StandardId.NEC else IEC_CONDUITS

def get_application_temps(standard: StandardId) -> Dict:
    return NEC_APPLICATION_TEMPS if standard == StandardId.NEC else IEC_APPLICATION_TEMPS

def get_insulations(standard: StandardId):
    return NEC_INSULATIONS if standard == StandardId.NEC else tuple(IEC_INSULATION_TABLES)

def normalize_metric(gauge: str) -> str:
    # "2.50" -> "2.5", "16mm2" -> "16"
    text = gauge.strip().lower().replace("mm²", "").replace("mm2", "").strip()
    return format_metric_size(float(text))

def convert_wire(entry: WireEntry, standard: StandardId) -> Tuple[str, str, bool]:
    """(gauge, insulation, converted) of the entry expressed in `standard`."""
    source = entry.gauge_standard or standard
    if source == standard:
        if standard == StandardId.NEC:
            return normalize_awg(entry.gauge), entry.insulation, False
        return normalize_metric(entry.gauge), entry.insulation, False

    if standard == StandardId.IEC:
        metric = find_minimum_metric_size(awg_to_mm2(entry.gauge))
        insulation = NEC_TO_IEC_INSULATION.get(entry.insulation, entry.insulation)
        return format_metric_size(metric), insulation, True

    awg = mm2_to_awg(float(normalize_metric(entry.gauge)))
    insulation = IEC_TO_NEC_INSULATION.get(entry.insulation, entry.insulation)
    return awg, insulation, True

def get_wire_area(gauge: str, insulation: str, standard: StandardId) -> float:
    if standard == StandardId.NEC:
        # Table 5 THHN/THWN dimensions cover every NEC insulation offered
        return NEC_WIRE_AREAS_IN2[gauge]
    return IEC_INSULATION_TABLES[insulation][gauge]

def find_conduit(catalog: List[ConduitCatalogEntry], trade_size: str) -> Optional[ConduitCatalogEntry]:
    wanted = trade_size.strip()
    return next((c for c in catalog if c.trade_size == wanted), None)

def calculate_conduit_fill(inp: ConduitFillInput, standard: StandardId) -> ConduitResult:
    wires: List[ConduitWireArea] = []
    for entry in inp.wires:
        gauge, insulation, converted = convert_wire(entry, standard)
        unit_area = get_wire_area(gauge, insulation, standard)
        wires.append(ConduitWireArea(
            gauge=gauge,
            original_gauge=entry.gauge,
            quantity=entry.quantity,
            insulation=insulation,
            unit_area=unit_area,
            total_area=unit_area * entry.quantity,
            converted=converted,
        ))
        if converted:
            logger.debug("Converted %s %s -> %s %s", entry.gauge, entry.insulation, gauge, insulation)

    total_area = sum(w.total_area for w in wires)
    required_area = total_area * (1 + inp.future_fill_reserve / 100.0)
    conductor_count = sum(w.quantity for w in wires)
    max_fill, rule = get_fill_limit(conductor_count)
    unit = AREA_UNITS[standard]

    catalog = get_conduit_catalog(standard)[inp.conduit_type]
    alternatives: List[ConduitAlternative] = []
    for conduit in catalog:
        percent = required_area / conduit.internal_area * 100.0
        alternatives.append(ConduitAlternative(conduit.trade_size, conduit.internal_area, percent, percent <= max_fill))

    if inp.conduit_size is not None:
        selected = find_conduit(catalog, inp.conduit_size)
        if selected is None:
            raise InputValidationError([f"Conduit size {inp.conduit_size} not found for type {inp.conduit_type}"])
    else:
        selected = next((c for c, alt in zip(catalog, alternatives) if alt.compliant), None)
        if selected is None:
            raise NoSuitableConduitError(required_area, catalog[-1].trade_size, max_fill, unit)

    # Reported fill includes the future reserve, the same area the limit is checked against
    fill_percent = required_area / selected.internal_area * 100.0
    low, high = get_application_temps(standard).get(inp.application, (-40, 150))
    flags = compliance.evaluate(
        fill=fill_percent <= max_fill,
        temperature=compliance.within(inp.ambient_temperature, low, high),
        installation=inp.installation_method in INSTALLATION_METHODS,
    )
    logger.debug("%s %s: %.1f%% of %.0f%% allowed", inp.conduit_type, selected.trade_size, fill_percent, max_fill)

    reference = "NEC Chapter 9 Table 1/4/5" if standard == StandardId.NEC else "IEC 61386 / IEC 60364-5-52"
    return ConduitResult(
        standard=standard,
        conduit_type=inp.conduit_type,
        trade_size=selected.trade_size,
        total_wire_area=total_area,
        required_wire_area=required_area,
        conduit_internal_area=selected.internal_area,
        fill_percent=fill_percent,
        max_fill_percent=max_fill,
        fill_rule=rule,
        area_unit=unit,
        wires=wires,
        compliance=flags,
        alternatives=alternatives,
        reference=reference,
    )
