import logging
import math

from core import compliance
from core.config import get_voltage_drop_limit
from core.converters import current_from_power
from core.derating import compose_derating, get_material_factor
from core.models import (
    BreakerInput, BreakerResult, ConductorInput, ConductorMaterial, ConductorResult,
    DutyCycle, StandardId, VoltageSystem,
)
from core.selector import efficiency_percent, power_loss, select_conductor, voltage_drop
from standards.breaker_rules import base_current, select_device, solar_total_isc
from standards.iec_tables import (
    ALUMINUM_RESISTANCE_MULTIPLIER, IEC_BATTERY_CONTINUOUS_FACTOR, IEC_BATTERY_INTERMITTENT_FACTOR,
    IEC_BIFACIAL_FACTOR, IEC_BREAKER_CATALOG, IEC_CONDUCTORS, IEC_MARINE_FACTOR, IEC_RATING_CEILINGS,
    IEC_SAFETY_FACTORS, INSTALLATION_FACTORS, METRIC_WIRE_AMPACITY, VALID_TEMP_RANGE_C,
    get_breaker_temp_derating, get_grouping_factor, get_installation_factor,
    get_temp_correction, get_thermal_resistivity_factor,
)

logger = logging.getLogger(__name__)

# Monofacial modules: 1.25 x Isc (IEC 62548)
IEC_MONOFACIAL_FACTOR = 1.25

class IECLogic:
    """IEC 60364-5-52 cable sizing and IEC 60947/60898/62619 DC breaker sizing."""

    @staticmethod
    def calculate_design_current(inp: ConductorInput) -> float:
        # No continuous-load multiplier under IEC 60364
        if inp.load_current is not None:
            return inp.load_current
        if inp.voltage_system == VoltageSystem.THREE_PHASE:
            return current_from_power(inp.load_power, math.sqrt(3) * inp.voltage, pf=inp.power_factor)
        return current_from_power(inp.load_power, inp.voltage, pf=inp.power_factor)

    @staticmethod
    def _resistance(spec, material: ConductorMaterial) -> float:
        r = spec.resistance_ohm_per_km
        return r * ALUMINUM_RESISTANCE_MULTIPLIER if material == ConductorMaterial.ALUMINUM else r

    @staticmethod
    def calculate_voltage_drop(current: float, spec, inp: ConductorInput):
        return voltage_drop(
            current, inp.circuit_length, IECLogic._resistance(spec, inp.conductor_material),
            inp.voltage, inp.voltage_system, inp.power_factor, spec.reactance_ohm_per_km,
        )

    @staticmethod
    def size_conductor(inp: ConductorInput) -> ConductorResult:
        """Expects a normalized input: metres, Celsius, defaults filled."""
        i_design = IECLogic.calculate_design_current(inp)
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
        limit = inp.allowable_voltage_drop_percent or get_voltage_drop_limit(StandardId.IEC, inp.voltage_drop_category)

        selection = select_conductor(
            IEC_CONDUCTORS, i_design, factors.total, inp.temperature_rating,
            lambda spec: IECLogic.calculate_voltage_drop(i_design, spec, inp),
            limit,
        )
        spec = selection.conductor
        loss = power_loss(i_design, inp.circuit_length, IECLogic._resistance(spec, inp.conductor_material),
                          inp.voltage_system)

        flags = compliance.evaluate(
            ampacity=selection.adjusted_ampacity >= i_design,
            voltage_drop=selection.voltage_drop_percent <= limit,
            temperature=compliance.within(inp.ambient_temperature, *VALID_TEMP_RANGE_C),
            installation=method in INSTALLATION_FACTORS,
        )

        return ConductorResult(
            standard=StandardId.IEC,
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
            reference=f"IEC 60364-5-52 Method {method} | Derating: {factors.describe()}",
        )

    # --- DC breakers ---

    @staticmethod
    def get_safety_factor(application: str, duty: DutyCycle) -> float:
        cont, inter, _ref = IEC_SAFETY_FACTORS.get(application, IEC_SAFETY_FACTORS["industrial"])
        return cont if duty == DutyCycle.CONTINUOUS else inter

    @staticmethod
    def preferred_standards(application: str):
        if application == "battery":
            return ["IEC62619", "IEC60947", "IEC60898-3", "IEC60898-1"]
        if application == "solar":
            return ["IEC60947", "IEC60898-3", "IEC60898-1"]
        if application == "industrial":
            return ["IEC60947", "IEC60898-3"]
        return ["IEC60947", "IEC60898-1"]

    @staticmethod
    def size_breaker(inp: BreakerInput) -> BreakerResult:
        app = inp.application.value
        safety = IECLogic.get_safety_factor(app, inp.duty_cycle)

        solar = solar_total_isc(inp) if app == "solar" else None
        if solar is not None:
            i_base, method = solar
            solar_factor = IEC_BIFACIAL_FACTOR if inp.bifacial else IEC_MONOFACIAL_FACTOR
            adjusted = i_base * solar_factor
            method += f" x IEC 62548-1 factor ({solar_factor:g})"
        else:
            i_base, method = base_current(inp)
            adjusted = i_base * safety
            method += f" x IEC safety factor ({safety})"

        t_derate = get_breaker_temp_derating(inp.ambient_temperature)
        if t_derate < 1.0:
            adjusted /= t_derate
            method += f" / IEC temperature derating ({t_derate:.2f})"

        if app == "marine" and inp.environment == "marine":
            adjusted *= IEC_MARINE_FACTOR
            method += f" x IEC marine environment factor ({IEC_MARINE_FACTOR})"

        if app == "battery":
            if inp.duty_cycle == DutyCycle.CONTINUOUS:
                adjusted *= IEC_BATTERY_CONTINUOUS_FACTOR
                method += f" x IEC 62619 thermal runaway factor ({IEC_BATTERY_CONTINUOUS_FACTOR})"
            else:
                adjusted *= IEC_BATTERY_INTERMITTENT_FACTOR
                method += f" x Battery inrush factor ({IEC_BATTERY_INTERMITTENT_FACTOR})"

        device, alternatives = select_device(
            IEC_BREAKER_CATALOG, app, adjusted, IECLogic.preferred_standards(app), "IEC DC breaker"
        )
        logger.debug("IEC breaker: %s", method)

        ceiling = IEC_RATING_CEILINGS.get(app)
        wire_ok = None
        if inp.wire_gauge:
            wire_ok = METRIC_WIRE_AMPACITY.get(inp.wire_gauge.strip(), math.inf) >= device.rating

        flags = compliance.evaluate(
            ampacity=device.rating >= adjusted,
            temperature=inp.ambient_temperature <= device.temperature_rating,
            application=app in device.applications,
            wire_compatible=wire_ok,
            rating_ceiling=device.rating <= adjusted * ceiling if ceiling else None,
        )

        return BreakerResult(
            standard="IEC",
            rating=device.rating,
            device=device,
            is_automotive_fuse=False,
            base_current=i_base,
            adjusted_current=round(adjusted, 2),
            safety_factor=solar_factor if solar is not None else safety,
            temperature_derating=t_derate,
            calculation_method=method,
            compliance=flags,
            alternatives=alternatives,
            reference=f"{IEC_SAFETY_FACTORS.get(app, IEC_SAFETY_FACTORS['industrial'])[2]} | {device.standard}",
        )
