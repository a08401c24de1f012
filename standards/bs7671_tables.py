"""
BS 7671:2018+A2:2022 (IET Wiring Regulations) cable data and UK diversity.

Appendix 4 Tables 4B1 (ambient) and 4C1 (grouping) carry the same values as
IEC 60364-5-52 B.52.14 and B.52.17, so those lookups live in iec_tables.
"""
from typing import List, Optional

from core.derating import lookup_or_neutral
from core.models import ConductorSpec

# Appendix 4 Table 4D5A style data, copper, BS 6004 cables
# (Size mm2, R ohm/km, X ohm/km, Amps 60C, 70C, 90C, overall diameter mm)
BS7671_COPPER = [
    ("1", 18.1, 0.08, 11, 13, 16, 5.6),
    ("1.5", 12.1, 0.08, 14.5, 17.5, 20, 6.1),
    ("2.5", 7.41, 0.08, 20, 24, 27, 6.8),
    ("4", 4.61, 0.075, 26, 32, 36, 7.5),
    ("6", 3.08, 0.075, 34, 41, 46, 8.2),
    ("10", 1.83, 0.075, 46, 57, 64, 9.5),
    ("16", 1.15, 0.07, 61, 76, 85, 10.5),
    ("25", 0.727, 0.07, 80, 101, 112, 12.2),
    ("35", 0.524, 0.065, 99, 125, 138, 13.4),
    ("50", 0.387, 0.065, 119, 151, 167, 15.0),
    ("70", 0.268, 0.065, 151, 192, 213, 17.0),
    ("95", 0.193, 0.06, 182, 232, 258, 19.2),
    ("120", 0.153, 0.06, 210, 269, 299, 21.0),
    ("150", 0.124, 0.055, 240, 309, 344, 22.8),
    ("185", 0.099, 0.055, 273, 353, 392, 24.8),
    ("240", 0.077, 0.05, 320, 415, 461, 27.3),
    ("300", 0.061, 0.05, 367, 477, 530, 29.8),
    ("400", 0.047, 0.045, 419, 546, 607, 33.0),
    ("500", 0.037, 0.045, 467, 609, 677, 35.8),
    ("630", 0.030, 0.04, 525, 686, 763, 39.5),
]

BS7671_CONDUCTORS: List[ConductorSpec] = [
    ConductorSpec(
        size=size,
        area_mm2=float(size),
        ampacity={60: a60, 70: a70, 90: a90},
        resistance_ohm_per_km=r,
        reactance_ohm_per_km=x,
        diameter_mm=d,
    )
    for size, r, x, a60, a70, a90, d in BS7671_COPPER
]

# 70°C thermoplastic is the usual UK reference column
TEMPERATURE_RATINGS = (70, 90)
DEFAULT_TEMPERATURE_RATING = 70
ALUMINUM_RESISTANCE_MULTIPLIER = 1.64
VALID_TEMP_RANGE_C = (-10.0, 70.0)

# Appendix 4 Table 4A2 reference methods: (factor, description)
INSTALLATION_METHODS = {
    "A1": (1.0, "Insulated conductors in conduit in a thermally insulating wall"),
    "A2": (1.0, "Multicore cable in conduit in a thermally insulating wall"),
    "B1": (1.0, "Insulated conductors in conduit on a wall or in trunking"),
    "B2": (1.0, "Multicore cable in conduit on a wall or in trunking"),
    "C": (1.0, "Multicore cable clipped direct to a wall or ceiling"),
    "D1": (1.0, "Multicore cable in an underground duct"),
    "D2": (1.0, "Multicore cable buried direct in the ground"),
    "E": (1.2, "Multicore cable in free air on a perforated tray"),
    "F": (1.1, "Single core cables in free air"),
    "G": (1.0, "Single core cables spaced in free air"),
}
INSTALLATION_FACTORS = {method: factor for method, (factor, _desc) in INSTALLATION_METHODS.items()}

def get_installation_factor(method: str) -> float:
    return lookup_or_neutral(INSTALLATION_FACTORS, method, "BS 7671 installation method")

# IET On-Site Guide Appendix A, applied to the circuit current
UK_DIVERSITY_FACTORS = {
    "socket_outlets": 0.4,
    "lighting": 0.66,
    "water_heating": 1.0,
    "space_heating": 1.0,
    "motor_loads": 1.0,
    "other_loads": 0.75,
}

# Cooking appliances: first 10A in full plus 30% of the remainder
COOKING_FULL_AMPS = 10.0
COOKING_REMAINDER_FACTOR = 0.3

LOAD_TYPES = tuple(UK_DIVERSITY_FACTORS) + ("cooking",)

def apply_diversity(current: float, load_type: Optional[str]) -> float:
    if load_type is None:
        return current
    if load_type == "cooking":
        if current <= COOKING_FULL_AMPS:
            return current
        return COOKING_FULL_AMPS + COOKING_REMAINDER_FACTOR * (current - COOKING_FULL_AMPS)
    return current * lookup_or_neutral(UK_DIVERSITY_FACTORS, load_type, "UK diversity")
