from typing import Dict, List

from core.derating import lookup_or_neutral
from core.models import BreakerCatalogEntry, ConductorSpec, ConduitCatalogEntry

IN2_TO_MM2 = 645.16
FT_PER_KM = 1000.0 / 0.3048

# NEC Table 310.15(B)(1) - Ambient Temperature Correction Factors
# Based on 30°C base ambient
# Format: {Temp_Range_Tuple: {Insulation_Rating: Factor}}
TEMP_CORRECTION_FACTORS = {
    (-40, 10): {60: 1.29, 75: 1.20, 90: 1.15},
    (11, 15): {60: 1.22, 75: 1.15, 90: 1.12},
    (16, 20): {60: 1.15, 75: 1.11, 90: 1.08},
    (21, 25): {60: 1.08, 75: 1.05, 90: 1.04},
    (26, 30): {60: 1.00, 75: 1.00, 90: 1.00},
    (31, 35): {60: 0.91, 75: 0.94, 90: 0.96},
    (36, 40): {60: 0.82, 75: 0.88, 90: 0.91},
    (41, 45): {60: 0.71, 75: 0.82, 90: 0.87},
    (46, 50): {60: 0.58, 75: 0.75, 90: 0.82},
    (51, 55): {60: 0.41, 75: 0.67, 90: 0.76},
    (56, 60): {60: 0.00, 75: 0.58, 90: 0.71},
    (61, 65): {60: 0.00, 75: 0.47, 90: 0.65},
    (66, 70): {60: 0.00, 75: 0.33, 90: 0.58},
    (71, 75): {60: 0.00, 75: 0.00, 90: 0.50},
    (76, 80): {60: 0.00, 75: 0.00, 90: 0.41},
    (81, 85): {60: 0.00, 75: 0.00, 90: 0.29},
}

# NEC Table 310.15(C)(1) - Adjustment Factors for More Than Three Current-Carrying Conductors
# Format: {Max_Conductors: Factor}
GROUPING_FACTORS = {
    3: 1.0,
    6: 0.80,   # 4-6 conductors
    9: 0.70,   # 7-9
    20: 0.50,  # 10-20
    30: 0.45,  # 21-30
    40: 0.40,  # 31-40
}
GROUPING_FACTOR_ABOVE_40 = 0.35

INSTALLATION_FACTORS = {
    "conduit": 1.0,
    "cable_tray": 1.0,
    "direct_burial": 0.8,
    "free_air": 1.2,  # NEC 310.17 single conductors in free air
}

TEMPERATURE_RATINGS = (60, 75, 90)
VALID_TEMP_RANGE_C = (-40.0, 90.0)
ALUMINUM_RESISTANCE_MULTIPLIER = 1.63

# NEC Table 310.16 + Chapter 9 Table 8 (uncoated copper DC resistance)
# (SizeAWG, Area in2, R ohm/1000ft, Amps 60C, 75C, 90C)
NEC_310_16_COPPER = [
    ("14", 0.0097, 3.07, 15, 20, 25),
    ("12", 0.0133, 1.93, 20, 25, 30),
    ("10", 0.0211, 1.21, 30, 35, 40),
    ("8", 0.0366, 0.764, 40, 50, 55),
    ("6", 0.0507, 0.491, 55, 65, 75),
    ("4", 0.0824, 0.308, 70, 85, 95),
    ("3", 0.1040, 0.245, 85, 100, 115),
    ("2", 0.1318, 0.194, 95, 115, 130),
    ("1", 0.1662, 0.154, 110, 130, 145),
    ("1/0", 0.2109, 0.122, 125, 150, 170),
    ("2/0", 0.2642, 0.097, 145, 175, 195),
    ("3/0", 0.3355, 0.077, 165, 200, 225),
    ("4/0", 0.4202, 0.061, 195, 230, 260),
    ("250", 0.4963, 0.052, 215, 255, 290),
    ("300", 0.5958, 0.043, 240, 285, 320),
    ("350", 0.6837, 0.037, 260, 310, 350),
    ("400", 0.7901, 0.032, 280, 335, 380),
    ("500", 0.9887, 0.026, 320, 380, 430),
    ("600", 1.1705, 0.022, 355, 420, 475),
    ("750", 1.4784, 0.017, 400, 475, 535),
    ("1000", 1.9635, 0.013, 455, 545, 615),
]

NEC_CONDUCTORS: List[ConductorSpec] = [
    ConductorSpec(
        size=size,
        area_mm2=area * IN2_TO_MM2,
        ampacity={60: a60, 75: a75, 90: a90},
        resistance_ohm_per_km=r_kft * FT_PER_KM / 1000.0,
    )
    for size, area, r_kft, a60, a75, a90 in NEC_310_16_COPPER
]

AMPACITY_75C: Dict[str, float] = {c.size: c.ampacity[75] for c in NEC_CONDUCTORS}

def get_temp_correction(temp_c: float, insulation_rating: int) -> float:
    """
    Bucket at or above the ambient: 30.5°C reads the 31-35 row.
    Below the table uses the coldest row, above it reads 0.0 (not permitted).
    """
    for (min_t, max_t), distinct_ratings in TEMP_CORRECTION_FACTORS.items():
        if temp_c <= max_t:
            return lookup_or_neutral(distinct_ratings, insulation_rating, "NEC temperature rating")
    return 0.0

def get_grouping_factor(count: int) -> float:
    for limit in sorted(GROUPING_FACTORS.keys()):
        if count <= limit:
            return GROUPING_FACTORS[limit]
    return GROUPING_FACTOR_ABOVE_40

def get_installation_factor(method: str) -> float:
    return lookup_or_neutral(INSTALLATION_FACTORS, method, "NEC installation method")

# --- DC breakers (UL489 / ABYC E-11 / SAE J1128) ---

def _ul489(rating, voltage, ic, apps, frame="Standard"):
    return BreakerCatalogEntry(rating, "thermal-magnetic", voltage, "UL489", tuple(apps), ic, "C", frame)

# SAE J1128 breakers are rated for engine bay ambients
def _sae(rating, ic):
    return BreakerCatalogEntry(rating, "thermal-magnetic", 32, "SAE", ("automotive",), ic, "C", "Automotive",
                               temperature_rating=125)

NEC_BREAKER_CATALOG: List[BreakerCatalogEntry] = [
    _ul489(1, 80, 10000, ["automotive", "led"]),
    _ul489(5, 80, 10000, ["automotive", "marine", "led"]),
    _ul489(10, 80, 10000, ["automotive", "marine", "telecom", "led"]),
    _ul489(15, 80, 10000, ["automotive", "marine", "telecom"]),
    _ul489(20, 125, 15000, ["automotive", "marine", "solar", "telecom"]),
    _ul489(25, 125, 15000, ["automotive", "marine", "solar", "battery"]),
    _ul489(30, 125, 15000, ["automotive", "marine", "solar", "battery"]),
    _ul489(32, 125, 20000, ["solar", "battery", "industrial"]),
    _ul489(35, 125, 20000, ["automotive", "marine", "solar", "battery"]),
    _ul489(40, 125, 20000, ["marine", "solar", "battery", "industrial"]),
    _ul489(45, 125, 20000, ["automotive", "marine", "solar", "battery"]),
    _ul489(50, 125, 20000, ["marine", "solar", "battery", "industrial"]),
    _ul489(60, 125, 25000, ["solar", "battery", "industrial"]),
    _ul489(80, 125, 25000, ["solar", "battery", "industrial"]),
    _ul489(100, 125, 25000, ["solar", "battery", "industrial"]),
    _ul489(125, 125, 35000, ["automotive", "marine", "solar", "battery", "industrial"]),
    _ul489(150, 125, 35000, ["automotive", "marine", "solar", "battery", "industrial"]),
    _ul489(200, 125, 42000, ["automotive", "solar", "battery", "industrial"], "Large"),
    _ul489(225, 125, 42000, ["automotive", "solar", "battery", "industrial"], "Large"),
    BreakerCatalogEntry(15, "thermal-magnetic", 50, "ABYC", ("marine",), 5000, "C", "Marine"),
    BreakerCatalogEntry(20, "thermal-magnetic", 50, "ABYC", ("marine",), 5000, "C", "Marine"),
    BreakerCatalogEntry(30, "thermal-magnetic", 50, "ABYC", ("marine",), 10000, "C", "Marine"),
    _sae(7.5, 1000),
    _sae(10, 1000),
    _sae(15, 1000),
    _sae(20, 2000),
    _sae(25, 2000),
    _sae(30, 2000),
]

# (continuous, intermittent, reference)
NEC_SAFETY_FACTORS = {
    "solar": (1.56, 1.25, "NEC 690.8(A)"),
    "automotive": (1.25, 1.15, "SAE J1128"),
    "marine": (1.30, 1.20, "ABYC E-11"),
    "telecom": (1.15, 1.10, "NECA/BICSI"),
    "battery": (1.40, 1.25, "UL 1973"),
    "led": (1.20, 1.15, "UL 8750"),
    "industrial": (1.25, 1.15, "NEC 430"),
}

NEC_SOLAR_FACTOR = 1.56  # 125% continuous x 125% irradiance
NEC_MARINE_ENVIRONMENT_FACTOR = 1.05
NEC_BATTERY_INRUSH_FACTOR = 1.1

# Max breaker rating / adjusted current per application
NEC_RATING_CEILINGS = {"marine": 1.5, "automotive": 1.3, "telecom": 1.2}

# --- Conduit fill (NEC Chapter 9 Tables 4 and 5) ---

NEC_CONDUIT_SIZES = ["1/2", "3/4", "1", "1-1/4", "1-1/2", "2", "2-1/2", "3", "3-1/2", "4"]

_EMT_AREAS = [0.304, 0.533, 0.864, 1.496, 2.036, 3.356, 5.858, 8.846, 11.545, 14.753]
_PVC_AREAS = [0.285, 0.508, 0.832, 1.453, 1.986, 3.291, 5.793, 8.688, 11.427, 14.519]
_IMC_AREAS = [0.342, 0.586, 0.959, 1.647, 2.225, 3.630, 6.135, 9.180, 11.990, 15.279]

NEC_CONDUITS: Dict[str, List[ConduitCatalogEntry]] = {
    conduit_type: [ConduitCatalogEntry(size, conduit_type, area) for size, area in zip(NEC_CONDUIT_SIZES, areas)]
    for conduit_type, areas in {
        "EMT": _EMT_AREAS,
        "Steel": _EMT_AREAS,
        "RMC": _EMT_AREAS,
        "PVC": _PVC_AREAS,
        "IMC": _IMC_AREAS,
    }.items()
}

# Approximate insulated area, in2 (THHN/THWN family)
NEC_WIRE_AREAS_IN2 = {
    "18": 0.0055, "16": 0.0072, "14": 0.0097, "12": 0.0133, "10": 0.0211, "8": 0.0366,
    "6": 0.0507, "4": 0.0824, "3": 0.1039, "2": 0.1313, "1": 0.1562, "1/0": 0.1963,
    "2/0": 0.2463, "3/0": 0.3117, "4/0": 0.3904, "250": 0.4596, "300": 0.5281,
    "350": 0.5958, "400": 0.6619, "500": 0.7901, "600": 0.8676, "700": 0.9887,
    "750": 1.0496, "800": 1.1085, "900": 1.2311, "1000": 1.3478,
}

NEC_INSULATIONS = ("THWN", "THHN", "THWN-2", "THHW", "XHHW", "USE", "RHH", "RHW")
