import logging

from core import compliance
from core.config import get_voltage_drop_limit
from core.converters import current_from_power
from core.derating import compose_derating, get_material_factor
from core.models import (
    ConductorInput, ConductorMaterial, ConductorResult, DutyCycle, StandardId, VoltageSystem,
)
from core.selector import efficiency_percent, power_loss, select_conductor, voltage_drop
from standards.dc_tables import (
    ALUMINUM_RESISTANCE_MULTIPLIER, AMPACITY_SAFETY_FACTORS, CONTINUOUS, DC_INSTALLATION_METHODS,
    DC_WIRE_TABLES, DEFAULT_APPLICATIONS, INTERMITTENT, TABLE_TEMPERATURE_RATINGS,
    TEMPERATURE_RANGES, WIRE_APPLICATIONS, get_temp_correction,
)

logger = logging.getLogger(__name__)

class DCLogic:
    """Low-voltage DC wiring: automotive, marine, solar, telecom, battery and LED runs."""

    @staticmethod
    def resolve_application(inp: ConductorInput, standard: StandardId) -> str:
        if inp.application is not None:
            return inp.application.value
        return DEFAULT_APPLICATIONS[standard]

    @staticmethod
    def calculate_load_current(inp: ConductorInput) -> float:
        if inp.load_current is not None:
            return inp.load_current
        return current_from_power(inp.load_power, inp.voltage)

    @staticmethod
    def _resistance(spec, material: ConductorMaterial) -> float:
        r = spec.resistance_ohm_per_km
        return r * ALUMINUM_RESISTANCE_MULTIPLIER if material == ConductorMaterial.ALUMINUM else r

    @staticmethod
    def size_conductor(inp: ConductorInput, standard: StandardId) -> ConductorResult:
        """Expects a normalized input: metres, Celsius, defaults filled."""
        app = DCLogic.resolve_application(inp, standard)
        table = DC_WIRE_TABLES[app]
        load_amps = DCLogic.calculate_load_current(inp)

        # Current with the application ampacity margin applied
        safety_amps = load_amps * AMPACITY_SAFETY_FACTORS[app]

        factors = compose_derating(
            temperature=get_temp_correction(app, inp.ambient_temperature),
            material=get_material_factor(inp.conductor_material),
        )
        limit = inp.allowable_voltage_drop_percent or get_voltage_drop_limit(standard, inp.voltage_drop_category)
        column = CONTINUOUS if inp.duty_cycle == DutyCycle.CONTINUOUS else INTERMITTENT

        def drop(spec):
            # Round trip through the positive and negative leads
            return voltage_drop(load_amps, inp.circuit_length, DCLogic._resistance(spec, inp.conductor_material),
                                inp.voltage, VoltageSystem.DC)

        selection = select_conductor(table, safety_amps, factors.total, column, drop, limit)
        spec = selection.conductor
        loss = power_loss(load_amps, inp.circuit_length, DCLogic._resistance(spec, inp.conductor_material),
                          VoltageSystem.DC)

        low, high = TEMPERATURE_RANGES[app]
        flags = compliance.evaluate(
            ampacity=selection.adjusted_ampacity >= safety_amps,
            voltage_drop=selection.voltage_drop_percent <= limit,
            temperature=(compliance.within(inp.ambient_temperature, low, high)
                         and inp.ambient_temperature <= TABLE_TEMPERATURE_RATINGS[app]),
            installation=inp.installation_method in DC_INSTALLATION_METHODS,
            application=app in WIRE_APPLICATIONS.get(spec.size, ()),
        )
        logger.debug("DC %s (%s): %s AWG", standard.value, app, spec.size)

        return ConductorResult(
            standard=standard,
            size=spec.size,
            area_mm2=spec.area_mm2,
            design_current=safety_amps,
            required_ampacity=safety_amps / factors.total if factors.total > 0 else float("inf"),
            base_ampacity=selection.base_ampacity,
            adjusted_ampacity=selection.adjusted_ampacity,
            voltage_drop_volts=selection.voltage_drop_volts,
            voltage_drop_percent=selection.voltage_drop_percent,
            voltage_drop_limit=limit,
            power_loss_watts=loss,
            efficiency_percent=efficiency_percent(load_amps, inp.voltage, VoltageSystem.DC, 1.0, loss),
            factors=factors,
            compliance=flags,
            length_m=inp.circuit_length,
            ambient_c=inp.ambient_temperature,
            alternatives=selection.alternatives,
            reference=f"DC {app} table ({TABLE_TEMPERATURE_RATINGS[app]}°C) | Safety x{AMPACITY_SAFETY_FACTORS[app]}",
        )
