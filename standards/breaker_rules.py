"""
Rules shared by the NEC and IEC DC breaker sizers: base current from the
load, solar short-circuit current and the catalog pick.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from core.converters import current_from_power
from core.errors import NoSuitableBreakerError
from core.models import BreakerCatalogEntry, BreakerInput, SolarConfiguration

logger = logging.getLogger(__name__)

# Load efficiency used to turn watts into amps (power input mode)
APPLICATION_EFFICIENCY = {
    "solar": 0.95,
    "automotive": 0.98,
    "marine": 0.97,
    "telecom": 0.99,
    "battery": 0.93,
    "led": 0.90,
    "industrial": 0.96,
}

SOLAR_POWER_EFFICIENCY = 0.95

def base_current(inp: BreakerInput) -> Tuple[float, str]:
    if inp.load_current is not None:
        return inp.load_current, f"Load current ({inp.load_current:g}A)"

    eff = inp.efficiency_factor or APPLICATION_EFFICIENCY.get(inp.application.value, 1.0)
    amps = current_from_power(inp.load_power, inp.system_voltage, eff, inp.power_factor)
    return amps, (f"Power ({inp.load_power:g}W) / Voltage ({inp.system_voltage:g}V)"
                  f" x Efficiency ({eff}) x PF ({inp.power_factor})")

def solar_total_isc(inp: BreakerInput) -> Optional[Tuple[float, str]]:
    """Array short-circuit current, or None when no solar data was given."""
    if inp.short_circuit_current:
        return inp.short_circuit_current, f"Short circuit current ({inp.short_circuit_current:g}A)"

    if inp.panel_isc and inp.number_of_panels:
        if inp.solar_configuration == SolarConfiguration.SERIES:
            # Series strings: current stays that of one panel
            return inp.panel_isc, f"Panel ISC ({inp.panel_isc:g}A), {inp.number_of_panels} in series"
        total = inp.panel_isc * inp.number_of_panels
        return total, f"Panel ISC ({inp.panel_isc:g}A) x Panels ({inp.number_of_panels})"

    if inp.panel_power and inp.number_of_panels and inp.system_voltage:
        total_power = inp.panel_power * inp.number_of_panels
        amps = current_from_power(total_power, inp.system_voltage, SOLAR_POWER_EFFICIENCY)
        return amps, (f"Panel Power ({inp.panel_power:g}W) x Panels ({inp.number_of_panels})"
                      f" / Voltage ({inp.system_voltage:g}V) x Solar efficiency ({SOLAR_POWER_EFFICIENCY})")
    return None

def select_device(
    catalog: Sequence[BreakerCatalogEntry],
    application: str,
    adjusted_current: float,
    preferred_standards: Sequence[str],
    catalog_name: str,
    max_alternatives: int = 3,
) -> Tuple[BreakerCatalogEntry, List[BreakerCatalogEntry]]:
    """
    Smallest rating >= adjusted_current among entries listed for the application.
    Entries sharing that rating are ordered by preferred_standards, then catalog order.
    """
    usable = [e for e in catalog if application in e.applications]

    def rank(entry: BreakerCatalogEntry):
        pref = preferred_standards.index(entry.standard) if entry.standard in preferred_standards else len(preferred_standards)
        return (entry.rating, pref)

    fitting = sorted((e for e in usable if e.rating >= adjusted_current), key=rank)
    if not fitting:
        largest = max((e.rating for e in usable), default=None)
        raise NoSuitableBreakerError(adjusted_current, largest, catalog_name)

    primary = fitting[0]
    logger.debug("%s pick for %.2f A (%s): %s %s A", catalog_name, adjusted_current,
                 application, primary.standard, primary.rating)
    return primary, fitting[1:1 + max_alternatives]
