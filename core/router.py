"""
Entry points of the sizing engine.

Each function resolves the standard, validates the whole input, normalizes
units and defaults, then hands off to the per-standard logic class.
"""
import logging
from dataclasses import replace
from typing import List, Sequence

from core.config import STANDARD_DEFAULTS, resolve_units
from core.converters import convert_length_unit, convert_temperature
from core.errors import InputValidationError, UnsupportedStandardError
from core.models import (
    BreakerInput, BreakerResult, ConductorInput, ConductorResult, ConduitFillInput, ConduitResult,
    LengthUnit, StandardId, TemperatureUnit, WireEntry,
)
from core.validation import validate_breaker_input, validate_conductor_input, validate_conduit_input
from standards import automotive_fuses, conduit_fill
from standards.bs7671_logic import BS7671Logic
from standards.dc_logic import DCLogic
from standards.iec_logic import IECLogic
from standards.nec_logic import NECLogic

logger = logging.getLogger(__name__)

# Breaker and conduit catalogs exist for these two only
AC_STANDARDS = (StandardId.NEC, StandardId.IEC)

def resolve_standard(value) -> StandardId:
    if isinstance(value, StandardId):
        return value
    if isinstance(value, str):
        key = value.strip().upper().replace("-", "_")
        for std in StandardId:
            if std.value == key:
                return std
    raise UnsupportedStandardError(value, [s.value for s in StandardId])

def resolve_ac_standard(value) -> StandardId:
    """Breaker and conduit sizing: NEC or IEC, None means IEC (metric first)."""
    if value is None:
        return StandardId.IEC
    std = resolve_standard(value)
    if std not in AC_STANDARDS:
        raise UnsupportedStandardError(value, [s.value for s in AC_STANDARDS])
    return std

def validate_input(inp) -> List[str]:
    try:
        if isinstance(inp, ConductorInput):
            return validate_conductor_input(inp, resolve_standard(inp.standard))
        if isinstance(inp, BreakerInput):
            return validate_breaker_input(inp, resolve_ac_standard(inp.standard))
        if isinstance(inp, ConduitFillInput):
            return validate_conduit_input(inp, resolve_ac_standard(inp.standard))
    except UnsupportedStandardError as e:
        return [str(e)]
    return [f"Unsupported input type: {type(inp).__name__}"]

def _raise_if_invalid(inp):
    errors = validate_input(inp)
    if errors:
        raise InputValidationError(errors)

def normalize_conductor_input(inp: ConductorInput, standard: StandardId) -> ConductorInput:
    """Copy of the input in metres and Celsius with the standard's defaults filled in."""
    length_unit, temp_unit = resolve_units(standard, inp.length_unit, inp.temperature_unit)
    defaults = STANDARD_DEFAULTS[standard]

    changes = {
        "standard": standard,
        "circuit_length": convert_length_unit(inp.circuit_length, length_unit.value),
        "length_unit": LengthUnit.METERS,
        "temperature_unit": TemperatureUnit.CELSIUS,
    }
    if inp.ambient_temperature is not None:
        changes["ambient_temperature"] = convert_temperature(inp.ambient_temperature, temp_unit.value)
    for name, value in defaults.items():
        if getattr(inp, name) is None and name not in changes:
            changes[name] = value
    return replace(inp, **changes)

def size_conductor(inp: ConductorInput) -> ConductorResult:
    standard = resolve_standard(inp.standard)
    _raise_if_invalid(inp)
    norm = normalize_conductor_input(inp, standard)
    logger.debug("Conductor sizing routed to %s (%.2f m, %.1f°C)", standard.value,
                 norm.circuit_length, norm.ambient_temperature)

    if standard == StandardId.NEC:
        return NECLogic.size_conductor(norm)
    elif standard == StandardId.IEC:
        return IECLogic.size_conductor(norm)
    elif standard == StandardId.BS7671:
        return BS7671Logic.size_conductor(norm)
    else:
        return DCLogic.size_conductor(norm, standard)

def size_breaker(inp: BreakerInput) -> BreakerResult:
    standard = resolve_ac_standard(inp.standard)
    _raise_if_invalid(inp)

    if automotive_fuses.should_use_automotive_fuse(inp):
        logger.debug("Breaker request for %s routed to ISO 8820-3 fuses", inp.application.value)
        return automotive_fuses.size_fuse(inp)

    logger.debug("Breaker sizing routed to %s", standard.value)
    if standard == StandardId.NEC:
        return NECLogic.size_breaker(inp)
    return IECLogic.size_breaker(inp)

def size_conduit_fill(inp: ConduitFillInput) -> ConduitResult:
    standard = resolve_ac_standard(inp.standard)
    _raise_if_invalid(inp)
    logger.debug("Conduit fill routed to %s (%d wire entries)", standard.value, len(inp.wires))
    return conduit_fill.calculate_conduit_fill(inp, standard)

def convert_wire_entries(wires: Sequence[WireEntry], source, target) -> List[WireEntry]:
    """
    Re-expresses wire entries in the target standard's gauges and insulations,
    e.g. when the user switches a conduit form from NEC to IEC. Entries without
    a gauge_standard are taken to be written in `source`.
    """
    source_std = resolve_ac_standard(source)
    target_std = resolve_ac_standard(target)
    converted = []
    for entry in wires:
        tagged = replace(entry, gauge_standard=entry.gauge_standard or source_std)
        gauge, insulation, _ = conduit_fill.convert_wire(tagged, target_std)
        converted.append(WireEntry(gauge, entry.quantity, insulation, target_std))
    return converted
