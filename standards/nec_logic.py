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
from standards.nec_tables import (
    ALUMINUM_RESISTANCE_MULTIPLIER, AMPACITY_75C, INSTALLATION_FACTORS, NEC_BATTERY_INRUSH_FACTOR,
    NEC_BREAKER_CATALOG, NEC_CONDUCTORS, NEC_MARINE_ENVIRONMENT_FACTOR, NEC_RATING_CEILINGS,
    NEC_SAFETY_FACTORS, NEC_SOLAR_FACTOR, VALID_TEMP_RANGE_C,
    get_grouping_factor, get_installation_factor, get_temp_correction,
)

logger = logging.getLogger(__name__)

class NECLogic:
    """NEC Article 310 conductor sizing and UL489/ABYC/SAE DC breaker sizing."""

    @staticmethod
    def calculate_load_current(inp: ConductorInput) -> float:
        if inp.load_current is not None:
            return inp.load_current
        if inp.voltage_system == VoltageSystem.THREE_PHASE:
            return current_from_power(inp.load_power, math.sqrt(3) * inp.voltage, pf=inp.power_factor)
        return current_from_power(inp.load_power, inp.voltage, pf=inp.power_factor)

    @staticmethod
    def calculate_design_current(inp: ConductorInput) -> float:
        i_base = NECLogic.calculate_load_current(inp)
        # Continuous Load Rule, NEC 210.19(A)(1)
        continuous = inp.duty_cycle == DutyCycle.CONTINUOUS and inp.include_continuous_multiplier
        return i_base * (1.25 if continuous else 1.0)

    @staticmethod
    def calculate_voltage_drop(current: float, spec, inp: ConductorInput):
        r = spec.resistance_ohm_per_km
        if inp.conductor_material == ConductorMaterial.ALUMINUM:
            r *= ALUMINUM_RESISTANCE_MULTIPLIER
        # Reactance ignored: DC resistance x pf
        return voltage_drop(current, inp.circuit_length, r, inp.voltage, inp.voltage_system, inp.power_factor)

    @staticmethod
    def size_conductor(inp: ConductorInput) -> ConductorResult:
        """Expects a normalized input: metres, Celsius, defaults filled."""
        load_amps = NECLogic.calculate_load_current(inp)
        i_design = NECLogic.calculate_design_current(inp)

        # Temperature Correction: NEC 310.15(B)(1)
        # Grouping Adjustment: NEC 310.15(C)(1)
        factors = compose_derating(
            temperature=get_temp_correction(inp.ambient_temperature, inp.temperature_rating),
            grouping=get_grouping_factor(inp.number_of_conductors),
            installation=get_installation_factor(inp.installation_method),
            material=get_material_factor(inp.conductor_material),
        )
        limit = inp.allowable_voltage_drop_percent or get_voltage_drop_limit(StandardId.NEC, inp.voltage_drop_category)

        selection = select_conductor(
            NEC_CONDUCTORS, i_design, factors.total, inp.temperature_rating,
            lambda spec: NECLogic.calculate_voltage_drop(load_amps, spec, inp),
            limit,
        )
        spec = selection.conductor

        r = spec.resistance_ohm_per_km
        if inp.conductor_material == ConductorMaterial.ALUMINUM:
            r *= ALUMINUM_RESISTANCE_MULTIPLIER
        loss = power_loss(load_amps, inp.circuit_length, r, inp.voltage_system)

        flags = compliance.evaluate(
            ampacity=selection.adjusted_ampacity >= i_design,
            voltage_drop=selection.voltage_drop_percent <= limit,
            temperature=compliance.within(inp.ambient_temperature, *VALID_TEMP_RANGE_C),
            installation=inp.installation_method in INSTALLATION_FACTORS,
        )

        cable_type_str = "THHN/THWN-2 (90°C)" if inp.temperature_rating == 90 else f"THWN ({inp.temperature_rating}°C)"
        return ConductorResult(
            standard=StandardId.NEC,
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
            efficiency_percent=efficiency_percent(load_amps, inp.voltage, inp.voltage_system, inp.power_factor, loss),
            factors=factors,
            compliance=flags,
            length_m=inp.circuit_length,
            ambient_c=inp.ambient_temperature,
            alternatives=selection.alternatives,
            reference=f"NEC 310.16 | Type: {cable_type_str} | Derating: {factors.describe()}",
        )

    # --- DC breakers ---

    @staticmethod
    def get_safety_factor(application: str, duty: DutyCycle) -> float:
        cont, inter, _ref = NEC_SAFETY_FACTORS.get(application, NEC_SAFETY_FACTORS["industrial"])
        return cont if duty == DutyCycle.CONTINUOUS else inter

    @staticmethod
    def get_temperature_derating(temp_c: float) -> float:
        # Simplified NEC derating, only above 40°C
        if temp_c <= 40:
            return 1.0
        return max(0.58, 1 - (temp_c - 40) * 0.01)

    @staticmethod
    def preferred_standards(application: str):
        if application == "marine":
            return ["ABYC", "UL489"]
        if application == "automotive":
            return ["SAE", "UL489"]
        return ["UL489"]

    @staticmethod
    def size_breaker(inp: BreakerInput) -> BreakerResult:
        app = inp.application.value
        safety = NECLogic.get_safety_factor(app, inp.duty_cycle)

        solar = solar_total_isc(inp) if app == "solar" else None
        if solar is not None:
            i_base, method = solar
            adjusted = i_base * NEC_SOLAR_FACTOR
            method += f" x NEC 690.8(A) factor ({NEC_SOLAR_FACTOR})"
        else:
            i_base, method = base_current(inp)
            adjusted = i_base * safety
            method += f" x NEC safety factor ({safety})"

        t_derate = NECLogic.get_temperature_derating(inp.ambient_temperature)
        if t_derate < 1.0:
            adjusted /= t_derate
            method += f" / NEC temperature derating ({t_derate:.2f})"

        if app == "marine" and inp.environment == "marine":
            adjusted *= NEC_MARINE_ENVIRONMENT_FACTOR
            method += f" x ABYC marine factor ({NEC_MARINE_ENVIRONMENT_FACTOR})"

        if app == "battery" and inp.duty_cycle == DutyCycle.CONTINUOUS:
            adjusted *= NEC_BATTERY_INRUSH_FACTOR
            method += f" x NEC battery inrush factor ({NEC_BATTERY_INRUSH_FACTOR})"

        device, alternatives = select_device(
            NEC_BREAKER_CATALOG, app, adjusted, NECLogic.preferred_standards(app), "NEC DC breaker"
        )
        logger.debug("NEC breaker: %s", method)

        ceiling = NEC_RATING_CEILINGS.get(app)
        wire_ok = None
        if inp.wire_gauge:
            # Unknown gauges are not held against the breaker
            wire_ok = AMPACITY_75C.get(inp.wire_gauge.strip(), math.inf) >= device.rating

        flags = compliance.evaluate(
            ampacity=device.rating >= adjusted,
            temperature=inp.ambient_temperature <= device.temperature_rating,
            application=app in device.applications,
            wire_compatible=wire_ok,
            rating_ceiling=device.rating <= adjusted * ceiling if ceiling else None,
        )

        return BreakerResult(
            standard="NEC",
            rating=device.rating,
            device=device,
            is_automotive_fuse=False,
            base_current=i_base,
            adjusted_current=round(adjusted, 2),
            safety_factor=NEC_SOLAR_FACTOR if solar is not None else safety,
            temperature_derating=t_derate,
            calculation_method=method,
            compliance=flags,
            alternatives=alternatives,
            reference=f"{NEC_SAFETY_FACTORS.get(app, NEC_SAFETY_FACTORS['industrial'])[2]} | {device.standard}",
        )
