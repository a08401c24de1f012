"""
Derating composer.

Each table lookup lives next to its table (standards/*_tables.py) and follows
the policy documented there. This module only composes the looked-up
factors into one CorrectionFactorSet so callers can audit every term.
"""
import logging
from typing import Mapping, Optional, TypeVar

from core.models import CorrectionFactorSet, ConductorMaterial

logger = logging.getLogger(__name__)

K = TypeVar("K")

# Aluminium carries roughly 78% of the copper ampacity (NEC 310.16 Al/Cu columns)
MATERIAL_AMPACITY_FACTORS = {
    ConductorMaterial.COPPER: 1.0,
    ConductorMaterial.ALUMINUM: 0.78,
}

def lookup_or_neutral(table: Mapping[K, float], key: K, table_name: str) -> float:
    """Exact-key lookup that fails open to 1.0 for keys outside the table."""
    if key in table:
        return table[key]
    logger.debug("No %s entry for %r, using neutral factor 1.0", table_name, key)
    return 1.0

def get_material_factor(material: ConductorMaterial) -> float:
    return lookup_or_neutral(MATERIAL_AMPACITY_FACTORS, material, "material")

def compose_derating(
    temperature: float = 1.0,
    grouping: float = 1.0,
    installation: float = 1.0,
    material: float = 1.0,
    thermal_resistivity: Optional[float] = None,
) -> CorrectionFactorSet:
    factors = CorrectionFactorSet(
        temperature=temperature,
        grouping=grouping,
        installation=installation,
        material=material,
        thermal_resistivity=1.0 if thermal_resistivity is None else thermal_resistivity,
    )
    logger.debug("Derating composed: %s", factors.describe())
    return factors
