"""
ISO 8820-3 blade fuses for 12/24/32/48 V vehicle and vessel circuits.

The router calls should_use_automotive_fuse() before dispatching a breaker
request; when it returns True the circuit gets a blade fuse instead of a DC
breaker.
"""
import logging
import math
from typing import List, Optional, Tuple

from core import compliance
from core.errors import InputValidationError, NoSuitableBreakerError
from core.models import BreakerInput, BreakerResult, DutyCycle, FuseSpec

logger = logging.getLogger(__name__)

AUTOMOTIVE_VOLTAGES = (12, 24, 32, 48)
FUSE_APPLICATIONS = ("automotive", "marine", "led")
MAX_FUSE_CURRENT = 120.0
DEFAULT_SYSTEM_VOLTAGE = 12

# Conversion efficiency by system voltage (alternator/DC-DC losses)
AUTOMOTIVE_EFFICIENCY = {12: 0.85, 24: 0.90, 32: 0.92, 48: 0.95}

# (continuous, intermittent) per system voltage
ISO_8820_SAFETY_FACTORS = {
    12: (1.25, 1.15),
    24: (1.30, 1.20),
    32: (1.25, 1.15),
    48: (1.20, 1.10),
}

ENVIRONMENT_FACTOR = 1.05
FUSE_TEMP_RANGE_C = (-40.0, 85.0)

_A, _M, _L, _I = "automotive", "marine", "led", "industrial"

def _fuses(fuse_type, rows):
    return [FuseSpec(rating, fuse_type, color, AUTOMOTIVE_VOLTAGES, apps, *FUSE_TEMP_RANGE_C) for rating, color, apps in rows]

FUSE_CATALOG: List[FuseSpec] = (
    _fuses("regular", [
        (0.5, "black", (_A, _L)), (1, "black", (_A, _L)), (2, "grey", (_A, _L)),
        (3, "violet", (_A, _L)), (5, "tan", (_A, _L)), (7.5, "brown", (_A, _L)),
        (10, "red", (_A, _M, _L)), (15, "blue", (_A, _M, _L)),
        (20, "yellow", (_A, _M)), (25, "white", (_A, _M)), (30, "green", (_A, _M)),
        (35, "light green", (_A, _M)), (40, "orange", (_A, _M)),
    ])
    + _fuses("mini", [
        (2, "grey", (_A, _L)), (5, "tan", (_A, _L)), (10, "red", (_A, _L)), (15, "blue", (_A, _L)),
        (20, "yellow", (_A,)), (25, "white", (_A,)), (30, "green", (_A,)),
    ])
    + _fuses("maxi", [
        (20, "yellow", (_A, _M, _I)), (30, "green", (_A, _M, _I)), (40, "orange", (_A, _M, _I)),
        (50, "red", (_A, _M, _I)), (60, "blue", (_A, _M, _I)), (70, "brown", (_A, _M, _I)),
        (80, "clear", (_A, _M, _I)), (100, "clear", (_A, _M, _I)), (120, "clear", (_A, _M, _I)),
    ])
    + _fuses("micro2", [
        (5, "tan", (_A, _L)), (10, "red", (_A, _L)), (15, "blue", (_A, _L)),
        (20, "yellow", (_A,)), (25, "white", (_A,)), (30, "green", (_A,)),
    ])
)

# SAE J1128 AWG ampacity used to check the fuse protects the wire
AUTOMOTIVE_AWG_AMPACITY = {
    "20": 11, "18": 16, "16": 22, "14": 32, "12": 41, "10": 55, "8": 73, "6": 101,
    "4": 135, "2": 181, "1": 211, "1/0": 245, "2/0": 283, "3/0": 328, "4/0": 380,
}

def preferred_fuse_type(rating: float) -> str:
    if rating <= 10:
        return "micro2"
    if rating <= 40:
        return "regular"
    return "maxi"

def get_temperature_derating(temp_c: float) -> float:
    if temp_c <= 40:
        return 1.0
    return max(0.5, 1 - (temp_c - 40) * 0.005)

def fuse_current(inp: BreakerInput) -> Optional[Tuple[float, float, float, float, str]]:
    """
    (base, safety factor, temperature derating, adjusted current, method) under
    ISO 8820-3, or None when the input has no load or a non-automotive voltage.
    """
    voltage = int(inp.system_voltage or DEFAULT_SYSTEM_VOLTAGE)
    if voltage not in ISO_8820_SAFETY_FACTORS:
        return None

    if inp.load_current is not None:
        i_base = inp.load_current
        method = f"Base current: {i_base:.1f}A"
    elif inp.load_power and inp.system_voltage:
        eff = inp.efficiency_factor or AUTOMOTIVE_EFFICIENCY[voltage]
        i_base = inp.load_power / (voltage * eff)
        method = f"Power: {inp.load_power:g}W / {voltage}V / {eff:.2f} efficiency = {i_base:.1f}A"
    else:
        return None

    cont, inter = ISO_8820_SAFETY_FACTORS[voltage]
    safety = cont if inp.duty_cycle == DutyCycle.CONTINUOUS else inter
    adjusted = i_base * safety
    method += f" | Safety factor: {safety}x ({inp.duty_cycle.value} duty)"

    t_derate = get_temperature_derating(inp.ambient_temperature)
    if t_derate < 1.0:
        adjusted /= t_derate
        method += f" | Temperature derating: {t_derate * 100:.0f}% at {inp.ambient_temperature:g}°C"

    if inp.environment in ("automotive", "marine"):
        adjusted *= ENVIRONMENT_FACTOR
        method += f" | Environment factor: {ENVIRONMENT_FACTOR}x ({inp.environment})"

    return i_base, safety, t_derate, adjusted, method

def should_use_automotive_fuse(inp: BreakerInput) -> bool:
    """Blade fuse only when the fully adjusted current stays within MAX_FUSE_CURRENT."""
    if inp.application.value not in FUSE_APPLICATIONS:
        return False
    voltage = inp.system_voltage or DEFAULT_SYSTEM_VOLTAGE
    if voltage not in AUTOMOTIVE_VOLTAGES:
        return False
    current = fuse_current(inp)
    if current is None:
        return False
    adjusted = current[3]
    if adjusted > MAX_FUSE_CURRENT:
        logger.debug("Adjusted fuse current %.2f A above %.0f A, using a DC breaker", adjusted, MAX_FUSE_CURRENT)
        return False
    return True

def size_fuse(inp: BreakerInput) -> BreakerResult:
    app = inp.application.value
    voltage = int(inp.system_voltage or DEFAULT_SYSTEM_VOLTAGE)

    current = fuse_current(inp)
    if current is None:
        raise InputValidationError([f"ISO 8820-3 fuses need a load on a 12/24/32/48V system, got {inp.system_voltage}V"])
    i_base, safety, t_derate, adjusted, method = current

    if adjusted > MAX_FUSE_CURRENT:
        raise NoSuitableBreakerError(adjusted, MAX_FUSE_CURRENT, "ISO 8820-3 fuse")

    usable = [f for f in FUSE_CATALOG if voltage in f.voltages and app in f.applications]
    fitting = [f for f in usable if f.rating >= adjusted]
    if not fitting:
        raise NoSuitableBreakerError(adjusted, max((f.rating for f in usable), default=None), "ISO 8820-3 fuse")

    rating = min(f.rating for f in fitting)
    same_rating = [f for f in fitting if f.rating == rating]
    wanted = preferred_fuse_type(rating)
    primary = next((f for f in same_rating if f.fuse_type == wanted), same_rating[0])
    alternatives = [f for f in same_rating if f is not primary]
    method += f" | Adjusted current: {adjusted:.1f}A -> {rating:g}A {primary.fuse_type} fuse ({primary.color})"
    logger.debug("Automotive fuse: %s", method)

    wire_ok = None
    if inp.wire_gauge:
        wire_ok = AUTOMOTIVE_AWG_AMPACITY.get(inp.wire_gauge.strip(), math.inf) >= rating

    flags = compliance.evaluate(
        ampacity=rating >= adjusted,
        application=app in primary.applications,
        wire_compatible=wire_ok,
        temperature=compliance.within(inp.ambient_temperature, primary.min_temp_c, primary.max_temp_c),
    )

    return BreakerResult(
        standard="ISO 8820-3",
        rating=rating,
        device=primary,
        is_automotive_fuse=True,
        base_current=i_base,
        adjusted_current=adjusted,
        safety_factor=safety,
        temperature_derating=t_derate,
        calculation_method=method,
        compliance=flags,
        alternatives=alternatives,
        reference=f"ISO 8820-3 {voltage}V system",
    )
