"""
Input checks run before any sizing. Every rule is evaluated and all messages
are returned together so a form can show them at once.
"""
from typing import List

from core.config import resolve_units
from core.converters import convert_temperature
from core.models import (
    ApplicationType, BreakerInput, ConductorInput, ConduitFillInput, StandardId, VoltageSystem,
)
from standards import conduit_fill
from standards import bs7671_tables, dc_tables, iec_tables, nec_tables

MAX_CONDUCTOR_CURRENT = 10000.0
MAX_CIRCUIT_LENGTH = 10000.0
MAX_CONDUCTOR_VOLTAGE = 50000.0
MAX_BREAKER_CURRENT = 1000.0
MAX_BREAKER_POWER = 100000.0
MAX_BREAKER_VOLTAGE = 1000.0
FUSE_APPLICATIONS = ("automotive", "marine", "led")

def _check_load(errors: List[str], current, power):
    if current is None and power is None:
        errors.append("Provide either load current or load power")
    elif current is not None and power is not None:
        errors.append("Load current and load power are mutually exclusive; provide only one")

def _check_power_factor(errors: List[str], pf):
    if pf is None or not 0 < pf <= 1:
        errors.append("Power factor must be greater than 0 and at most 1")

def validate_conductor_input(inp: ConductorInput, standard: StandardId) -> List[str]:
    errors: List[str] = []

    _check_load(errors, inp.load_current, inp.load_power)
    if inp.load_current is not None and not 0 < inp.load_current <= MAX_CONDUCTOR_CURRENT:
        errors.append(f"Load current must be greater than 0 and at most {MAX_CONDUCTOR_CURRENT:g}A")
    if inp.load_power is not None and inp.load_power <= 0:
        errors.append("Load power must be greater than 0")

    if inp.circuit_length is None or not 0 < inp.circuit_length <= MAX_CIRCUIT_LENGTH:
        errors.append(f"Circuit length must be greater than 0 and at most {MAX_CIRCUIT_LENGTH:g}")
    if inp.voltage is None or not 0 < inp.voltage <= MAX_CONDUCTOR_VOLTAGE:
        errors.append(f"Voltage must be greater than 0 and at most {MAX_CONDUCTOR_VOLTAGE:g}V")

    if inp.ambient_temperature is not None:
        _, temp_unit = resolve_units(standard, inp.length_unit, inp.temperature_unit)
        ambient_c = convert_temperature(inp.ambient_temperature, temp_unit.value)
        if not -50 <= ambient_c <= 200:
            errors.append("Ambient temperature must be between -50°C and 200°C")

    if inp.number_of_conductors is not None and not 1 <= inp.number_of_conductors <= 100:
        errors.append("Number of conductors must be between 1 and 100")
    _check_power_factor(errors, inp.power_factor)
    if inp.application is not None and not isinstance(inp.application, ApplicationType):
        errors.append(f"Unknown application: {inp.application}")

    if inp.allowable_voltage_drop_percent is not None and not 0 < inp.allowable_voltage_drop_percent <= 25:
        errors.append("Allowable voltage drop must be greater than 0% and at most 25%")

    method = inp.installation_method
    if standard == StandardId.NEC:
        if inp.voltage_system == VoltageSystem.DC:
            errors.append("NEC AC sizing does not accept DC systems; use a DC standard")
        if method is not None and method not in nec_tables.INSTALLATION_FACTORS:
            errors.append(f"Unknown NEC installation method: {method}")
        if inp.temperature_rating is not None and inp.temperature_rating not in nec_tables.TEMPERATURE_RATINGS:
            errors.append("NEC temperature rating must be 60, 75 or 90°C")

    elif standard in (StandardId.IEC, StandardId.BS7671):
        tables, label = (iec_tables, "IEC") if standard == StandardId.IEC else (bs7671_tables, "BS 7671")
        if inp.voltage_system == VoltageSystem.DC:
            errors.append(f"{label} AC sizing does not accept DC systems; use a DC standard")
        if method is not None and method not in tables.INSTALLATION_FACTORS:
            errors.append(f"Unknown {label} installation method: {method}")
        if inp.grouping_factor is not None and not 0 < inp.grouping_factor <= 1:
            errors.append("Grouping factor must be greater than 0 and at most 1")
        if inp.soil_thermal_resistivity is not None and inp.soil_thermal_resistivity <= 0:
            errors.append("Soil thermal resistivity must be greater than 0")
        if standard == StandardId.BS7671:
            if inp.temperature_rating is not None and inp.temperature_rating not in bs7671_tables.TEMPERATURE_RATINGS:
                errors.append("BS 7671 temperature rating must be 70 or 90°C")
            if inp.load_type is not None and inp.load_type not in bs7671_tables.LOAD_TYPES:
                errors.append(f"Unknown UK load type: {inp.load_type}")

    else:
        if inp.voltage not in dc_tables.DC_VOLTAGES:
            errors.append("DC systems must be 12, 24 or 48V")
        if inp.voltage_system not in (None, VoltageSystem.DC):
            errors.append("DC standards only accept DC systems")
        if method is not None and method not in dc_tables.DC_INSTALLATION_METHODS:
            errors.append(f"Unknown DC installation method: {method}")
        if isinstance(inp.application, ApplicationType) and inp.application.value not in dc_tables.DC_WIRE_TABLES:
            errors.append(f"No DC wire table for application: {inp.application.value}")

    return errors

def validate_breaker_input(inp: BreakerInput, standard: StandardId) -> List[str]:
    errors: List[str] = []

    if not isinstance(inp.application, ApplicationType):
        errors.append(f"Unknown application: {inp.application}")
        return errors
    app = inp.application.value

    if app == "solar":
        has_isc = bool(inp.short_circuit_current) or bool(inp.panel_isc and inp.number_of_panels)
        has_panel_power = bool(inp.panel_power and inp.number_of_panels and inp.system_voltage)
        if not (has_isc or has_panel_power):
            errors.append("Solar applications require short circuit current, or panel ISC and number of panels")
        for name in ("short_circuit_current", "panel_isc", "panel_power"):
            value = getattr(inp, name)
            if value is not None and value <= 0:
                errors.append(f"{name.replace('_', ' ').capitalize()} must be greater than 0")
        if inp.number_of_panels is not None and inp.number_of_panels < 1:
            errors.append("Number of panels must be at least 1")
    else:
        _check_load(errors, inp.load_current, inp.load_power)

    if inp.load_current is not None:
        if inp.load_current <= 0:
            errors.append("Load current must be greater than 0")
        elif inp.load_current > MAX_BREAKER_CURRENT:
            errors.append("Load current exceeds maximum supported range (1000A)")

    if inp.load_power is not None:
        if inp.load_power <= 0:
            errors.append("Load power must be greater than 0")
        elif inp.load_power > MAX_BREAKER_POWER:
            errors.append("Load power exceeds maximum supported range (100kW)")
        if inp.system_voltage is None:
            errors.append("System voltage is required when sizing from power")

    if inp.system_voltage is not None:
        if inp.system_voltage <= 0:
            errors.append("System voltage must be greater than 0")
        elif inp.system_voltage > MAX_BREAKER_VOLTAGE:
            errors.append("System voltage exceeds maximum supported range (1000V DC)")
        elif inp.load_power and inp.load_power / inp.system_voltage > MAX_BREAKER_CURRENT:
            errors.append("Calculated current exceeds 1000A - check power and voltage values")

    low, high = (-40, 85) if app in FUSE_APPLICATIONS else (-40, 150)
    if not low <= inp.ambient_temperature <= high:
        errors.append(f"Ambient temperature must be between {low}°C and {high}°C for {app} applications")

    if inp.efficiency_factor is not None and not 0 < inp.efficiency_factor <= 1:
        errors.append("Efficiency factor must be greater than 0 and at most 1")
    _check_power_factor(errors, inp.power_factor)

    return errors

def validate_conduit_input(inp: ConduitFillInput, standard: StandardId) -> List[str]:
    errors: List[str] = []

    if not inp.wires:
        errors.append("At least one wire entry is required")

    insulations = conduit_fill.get_insulations(standard)
    for n, entry in enumerate(inp.wires or [], start=1):
        if not entry.gauge or not str(entry.gauge).strip():
            errors.append(f"Wire {n}: gauge is required")
        if entry.quantity is None or not 0 < entry.quantity <= 1000:
            errors.append(f"Wire {n}: quantity must be between 1 and 1000")
        if not entry.insulation:
            errors.append(f"Wire {n}: insulation is required")
        if not entry.gauge or not entry.insulation:
            continue

        try:
            gauge, insulation, _ = conduit_fill.convert_wire(entry, standard)
        except ValueError:
            errors.append(f"Wire {n}: unknown gauge {entry.gauge}")
            continue
        if insulation not in insulations:
            errors.append(f"Wire {n}: unknown {standard.value} insulation {entry.insulation}")
            continue
        try:
            conduit_fill.get_wire_area(gauge, insulation, standard)
        except KeyError:
            errors.append(f"Wire {n}: no {insulation} dimensions for size {gauge}")

    if not 0 <= inp.future_fill_reserve <= 50:
        errors.append("Future fill reserve must be between 0% and 50%")
    if not -40 <= inp.ambient_temperature <= 150:
        errors.append("Ambient temperature must be between -40°C and 150°C")
    if inp.application not in conduit_fill.get_application_temps(standard):
        errors.append(f"Unknown application: {inp.application}")
    if inp.installation_method not in conduit_fill.INSTALLATION_METHODS:
        errors.append(f"Unknown installation method: {inp.installation_method}")
    catalog = conduit_fill.get_conduit_catalog(standard)
    if inp.conduit_type not in catalog:
        errors.append(f"Unknown {standard.value} conduit type: {inp.conduit_type}")
    elif inp.conduit_size is not None and conduit_fill.find_conduit(catalog[inp.conduit_type], inp.conduit_size) is None:
        errors.append(f"Conduit size {inp.conduit_size} not found for type {inp.conduit_type}")

    return errors
