import logging
import math

from core import compliance
from core.config import get_voltage_drop_limit
from core.converters import current_from_power
from core.derating import compose_derating, get_material_factor
from core.models import ConductorInput, ConductorMaterial, ConductorResult, StandardId, VoltageSystem
from core.selector import efficiency_percent, power_loss, select_conductor, voltage_drop
from standards.bs7671_tables import (
    ALUMINUM_RESISTANCE_MULTIPLIER, BS7671_CONDUCTORS, INSTALLATION_FACTORS, VALID_TEMP_RANGE_C,
    apply_diversity, get_installation_factor,
)
from standards.iec_tables import get_grouping_factor, get_temp_correction, get_thermal_resistivity_factor

logger = logging.getLogger(__name__)

DEPRECATED_UK_VOLTAGE = 240

class BS7671Logic:
    """BS 7671 cable sizing: IEC style derating plus UK diversity by load type."""

    @staticmethod
    def calculate_load_current(inp: ConductorInput) -> float:
        if inp.load_current is not None:
            return inp.load_current
        if inp.voltage_system == VoltageSystem.THREE_PHASE:
            return current_from_power(inp.load_power, math.sqrt(3) * inp.voltage, pf=inp.power_factor)
        return current_from_power(inp.load_power, inp.voltage, pf=inp.power_factor)

    @staticmethod
    def calculate_design_current(inp: ConductorInput) -> float:
        # No continuous-load multiplier; diversity only when a load type is given
        return apply_diversity(BS7671Logic.calculate_load_current(inp), inp.load_type)

    @staticmethod
    def _resistance(spec, material: ConductorMaterial) -> float:
        r = spec.resistance_ohm_per_km
        return r * ALUMINUM_RESISTANCE_MULTIPLIER if material == ConductorMaterial.ALUMINUM else r

    @staticmethod
    def size_conductor(inp: ConductorInput) -> ConductorResult:
        """Expects a normalized input: metres, Celsius, defaults filled."""
        if inp.voltage == DEPRECATED_UK_VOLTAGE:
            logger.info("240V is a legacy UK nominal voltage; BS 7671 designs use 230V")

        i_design = BS7671Logic.calculate_design_current(inp)
        method = inp.installation_method

        if inp.grouping_factor is not None:
            grouping = inp.grouping_factor
        else:
            grouping = get_grouping_factor(inp.number_of_conductors)

        factors = compose_derating(
            temperature=get_temp_correction(inp.ambient_temperature, inp.temperature_rating),
            grouping=grouping,
            installation=get_installation_factor(method),
            material=get_material_factor(inp.conductor_material),
            thermal_resistivity=get_thermal_resistivity_factor(method, inp.soil_thermal_resistivity),
        )
        limit = inp.allowable_voltage_drop_percent or get_voltage_drop_limit(StandardId.BS7671, inp.voltage_drop_category)

        def drop(spec):
            return voltage_drop(
                i_design, inp.circuit_length, BS7671Logic._resistance(spec, inp.conductor_material),
                inp.voltage, inp.voltage_system, inp.power_factor, spec.reactance_ohm_per_km,
            )

        selection = select_conductor(BS7671_CONDUCTORS, i_design, factors.total, inp.temperature_rating, drop, limit)
        spec = selection.conductor
        loss = power_loss(i_design, inp.circuit_length, BS7671Logic._resistance(spec, inp.conductor_material),
                          inp.voltage_system)

        flags = compliance.evaluate(
            ampacity=selection.adjusted_ampacity >= i_design,
            voltage_drop=selection.voltage_drop_percent <= limit,
            temperature=compliance.within(inp.ambient_temperature, *VALID_TEMP_RANGE_C),
            installation=method in INSTALLATION_FACTORS,
        )

        reference = f"BS 7671:2018+A2:2022 Method {method}"
        if inp.load_type:
            reference += f" | Diversity: {inp.load_type}"
        logger.debug("BS 7671 (%s): %s mm2 for %.2f A", method, spec.size, i_design)

        return ConductorResult(
            standard=StandardId.BS7671,
            size=spec.size,
            area_mm2=spec.area_mm2,
            design_current=i_design,
            required_ampacity=i_design / factors.total if factors.total > 0 else math.inf,
            base_ampacity=selection.base_ampacity,
            adjusted_ampacity=selection.adjusted_ampacity,
            voltage_drop_volts=selection.voltage_drop_volts,
            voltage_drop_percent=selection.voltage_drop_percent,
            voltage_drop_limit=limit,
            power_loss_watts=loss,
            efficiency_percent=efficiency_percent(i_design, inp.voltage, inp.voltage_system, inp.power_factor, loss),
            factors=factors,
            compliance=flags,
            length_m=inp.circuit_length,
            ambient_c=inp.ambient_temperature,
            alternatives=selection.alternatives,
            reference=f"{reference} | Derating: {factors.describe()}",
        )
