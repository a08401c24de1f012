from typing import Dict, List

from core.derating import lookup_or_neutral
from core.models import BreakerCatalogEntry, ConductorSpec, ConduitCatalogEntry

# IEC 60364-5-52 Table B.52.x, copper, reference method values
# (Size mm2, R ohm/km, X ohm/km, Amps 60C, 70C (PVC), 90C (XLPE), overall diameter mm)
IEC_60364_COPPER = [
    ("0.75", 24.5, 0.08, 11, 13, 16, 5.2),
    ("1", 18.1, 0.08, 13, 16, 19, 5.6),
    ("1.5", 12.1, 0.08, 17.5, 21, 24, 6.1),
    ("2.5", 7.41, 0.08, 24, 28, 32, 6.8),
    ("4", 4.61, 0.075, 32, 37, 43, 7.5),
    ("6", 3.08, 0.075, 41, 47, 54, 8.2),
    ("10", 1.83, 0.075, 57, 66, 75, 9.5),
    ("16", 1.15, 0.07, 76, 87, 100, 10.5),
    ("25", 0.727, 0.07, 101, 115, 132, 12.2),
    ("35", 0.524, 0.065, 125, 144, 165, 13.4),
    ("50", 0.387, 0.065, 151, 173, 196, 15.0),
    ("70", 0.268, 0.065, 192, 218, 246, 17.0),
    ("95", 0.193, 0.06, 232, 263, 297, 19.2),
    ("120", 0.153, 0.06, 269, 305, 344, 21.0),
    ("150", 0.124, 0.055, 309, 350, 394, 22.8),
    ("185", 0.099, 0.055, 353, 400, 450, 24.8),
    ("240", 0.077, 0.05, 415, 469, 527, 27.3),
    ("300", 0.061, 0.05, 477, 539, 606, 29.8),
    ("400", 0.047, 0.045, 546, 618, 695, 33.0),
    ("500", 0.037, 0.045, 609, 689, 775, 35.8),
    ("630", 0.030, 0.04, 686, 776, 873, 39.5),
]

IEC_CONDUCTORS: List[ConductorSpec] = [
    ConductorSpec(
        size=size,
        area_mm2=float(size),
        ampacity={60: a60, 70: a70, 90: a90},
        resistance_ohm_per_km=r,
        reactance_ohm_per_km=x,
        diameter_mm=d,
    )
    for size, r, x, a60, a70, a90, d in IEC_60364_COPPER
]

DEFAULT_TEMPERATURE_RATING = 90  # XLPE
ALUMINUM_RESISTANCE_MULTIPLIER = 1.64
VALID_TEMP_RANGE_C = (-40.0, 90.0)

# IEC 60364-5-52 Table B.52.14 - Ambient air temperature correction
TEMP_CORRECTION_FACTORS = {
    70: {10: 1.15, 15: 1.12, 20: 1.08, 25: 1.04, 30: 1.00, 35: 0.96, 40: 0.91, 45: 0.87,
         50: 0.82, 55: 0.76, 60: 0.71, 65: 0.65, 70: 0.58},
    90: {10: 1.10, 15: 1.08, 20: 1.05, 25: 1.03, 30: 1.00, 35: 0.98, 40: 0.95, 45: 0.93,
         50: 0.90, 55: 0.87, 60: 0.84, 65: 0.81, 70: 0.77, 75: 0.74, 80: 0.70, 85: 0.67, 90: 0.63},
}

# IEC 60364-5-52 Table B.52.17 - Grouping (number of circuits)
GROUPING_FACTORS = {
    1: 1.00, 2: 0.80, 3: 0.70, 4: 0.65, 5: 0.60, 6: 0.57, 7: 0.54, 8: 0.52, 9: 0.50,
    10: 0.48, 11: 0.46, 12: 0.45, 13: 0.44, 14: 0.43, 15: 0.42, 16: 0.41, 17: 0.40,
    18: 0.39, 19: 0.38, 20: 0.38,
}

# Reference installation methods (IEC 60364-5-52 Table B.52.1)
INSTALLATION_FACTORS = {
    "A1": 1.0, "A2": 1.0, "B1": 1.0, "B2": 1.0, "C": 1.0,
    "D1": 1.0, "D2": 1.0, "E": 1.2, "F": 1.1, "G": 1.0,
}
BURIED_METHODS = ("D1", "D2")
REFERENCE_SOIL_RESISTIVITY = 2.5  # K.m/W

def get_temp_correction(temp_c: float, insulation_rating: int = DEFAULT_TEMPERATURE_RATING) -> float:
    """First tabulated ambient at or above temp_c; hotter than the table reads the last row."""
    table = TEMP_CORRECTION_FACTORS.get(insulation_rating)
    if table is None:
        return lookup_or_neutral({}, insulation_rating, "IEC temperature rating")
    for t in sorted(table):
        if temp_c <= t:
            return table[t]
    return table[max(table)]

def get_grouping_factor(count: int) -> float:
    if count in GROUPING_FACTORS:
        return GROUPING_FACTORS[count]
    if count > max(GROUPING_FACTORS):
        return GROUPING_FACTORS[max(GROUPING_FACTORS)]
    return lookup_or_neutral(GROUPING_FACTORS, count, "IEC grouping")

def get_installation_factor(method: str) -> float:
    return lookup_or_neutral(INSTALLATION_FACTORS, method, "IEC installation method")

def get_thermal_resistivity_factor(method: str, resistivity: float) -> float:
    # Only buried methods are affected by soil resistivity
    if method in BURIED_METHODS and resistivity and resistivity > REFERENCE_SOIL_RESISTIVITY:
        return REFERENCE_SOIL_RESISTIVITY / resistivity
    return 1.0

# --- DC breakers (IEC 60947-2 / 60898-1 / 60898-3 / 62619) ---

# Max ambient (C) per device family; ESS breakers are limited to 60C
BREAKER_TEMPERATURE_RATINGS = {"IEC62619": 60.0}
DEFAULT_BREAKER_TEMPERATURE_RATING = 85.0

def _entry(rating, standard, voltage, ic, apps, curve="C", frame="Industrial", device="thermal-magnetic"):
    t_max = BREAKER_TEMPERATURE_RATINGS.get(standard, DEFAULT_BREAKER_TEMPERATURE_RATING)
    return BreakerCatalogEntry(rating, device, voltage, standard, tuple(apps), ic, curve, frame,
                               temperature_rating=t_max)

IEC_BREAKER_CATALOG: List[BreakerCatalogEntry] = [
    _entry(6, "IEC60947", 250, 10000, ["automotive", "marine", "telecom", "led"]),
    _entry(10, "IEC60947", 250, 10000, ["automotive", "marine", "telecom", "led"]),
    _entry(16, "IEC60947", 250, 15000, ["automotive", "marine", "solar", "battery"]),
    _entry(20, "IEC60947", 250, 15000, ["marine", "solar", "battery", "industrial"]),
    _entry(25, "IEC60947", 250, 15000, ["automotive", "marine", "solar", "battery", "industrial"]),
    _entry(32, "IEC60947", 250, 20000, ["automotive", "marine", "solar", "battery", "industrial"]),
    _entry(35, "IEC60947", 250, 20000, ["automotive", "marine", "solar", "battery"]),
    _entry(40, "IEC60947", 250, 20000, ["solar", "battery", "industrial"]),
    _entry(50, "IEC60947", 250, 25000, ["marine", "solar", "battery", "industrial"]),
    _entry(63, "IEC60947", 250, 25000, ["automotive", "solar", "battery", "industrial"]),
    _entry(80, "IEC60947", 250, 25000, ["marine", "solar", "battery", "industrial"]),
    _entry(100, "IEC60947", 250, 35000, ["solar", "battery", "industrial"]),
    _entry(125, "IEC60947", 250, 35000, ["marine", "solar", "battery", "industrial"]),
    _entry(150, "IEC60947", 250, 50000, ["marine", "solar", "battery", "industrial"], frame="Large"),
    _entry(160, "IEC60947", 250, 50000, ["marine", "solar", "battery", "industrial"], frame="Large"),
    _entry(200, "IEC60947", 250, 50000, ["solar", "battery", "industrial"], frame="Large"),
    _entry(16, "IEC62619", 120, 15000, ["battery"], frame="ESS", device="electronic"),
    _entry(25, "IEC62619", 120, 20000, ["battery"], frame="ESS", device="electronic"),
    _entry(32, "IEC62619", 120, 20000, ["battery"], frame="ESS", device="electronic"),
    _entry(50, "IEC62619", 120, 25000, ["battery"], frame="ESS", device="electronic"),
    _entry(60, "IEC62619", 120, 30000, ["battery"], frame="ESS", device="electronic"),
    _entry(63, "IEC62619", 120, 25000, ["battery"], frame="ESS", device="electronic"),
    _entry(80, "IEC62619", 120, 30000, ["battery"], frame="ESS", device="electronic"),
    _entry(90, "IEC62619", 120, 35000, ["battery"], frame="ESS", device="electronic"),
    _entry(100, "IEC62619", 120, 35000, ["battery"], frame="ESS", device="electronic"),
    _entry(1, "IEC60898-1", 48, 6000, ["automotive", "led"], "B", "MCB"),
    _entry(2, "IEC60898-1", 48, 6000, ["automotive", "led"], "B", "MCB"),
    _entry(6, "IEC60898-1", 48, 6000, ["automotive", "marine", "telecom", "led"], "B", "MCB"),
    _entry(10, "IEC60898-1", 48, 6000, ["automotive", "marine", "telecom", "led"], "B", "MCB"),
    _entry(15, "IEC60898-1", 48, 6000, ["automotive", "marine", "telecom"], "C", "MCB"),
    _entry(16, "IEC60898-1", 48, 6000, ["automotive", "marine", "telecom", "battery"], "C", "MCB"),
    _entry(20, "IEC60898-1", 48, 10000, ["automotive", "marine", "solar"], "C", "MCB"),
    _entry(25, "IEC60898-1", 48, 10000, ["automotive", "marine", "solar", "battery"], "C", "MCB"),
    _entry(30, "IEC60898-1", 48, 10000, ["automotive", "marine", "solar", "battery"], "C", "MCB"),
    _entry(32, "IEC60898-1", 48, 10000, ["automotive", "marine", "solar", "battery"], "C", "MCB"),
    _entry(6, "IEC60898-3", 440, 10000, ["solar", "industrial"], "B", "DC-MCB"),
    _entry(10, "IEC60898-3", 440, 10000, ["solar", "industrial"], "C", "DC-MCB"),
    _entry(16, "IEC60898-3", 440, 10000, ["solar", "battery", "industrial"], "C", "DC-MCB"),
    _entry(20, "IEC60898-3", 440, 15000, ["solar", "battery", "industrial"], "C", "DC-MCB"),
    _entry(25, "IEC60898-3", 440, 15000, ["solar", "battery", "industrial"], "C", "DC-MCB"),
    _entry(30, "IEC60898-3", 440, 15000, ["marine", "solar", "battery", "industrial"], "C", "DC-MCB"),
    _entry(32, "IEC60898-3", 440, 15000, ["solar", "battery", "industrial"], "C", "DC-MCB"),
    _entry(40, "IEC60898-3", 440, 20000, ["solar", "battery", "industrial"], "C", "DC-MCB"),
    _entry(50, "IEC60898-3", 440, 20000, ["solar", "battery", "industrial"], "C", "DC-MCB"),
    _entry(63, "IEC60898-3", 440, 25000, ["solar", "battery", "industrial"], "C", "DC-MCB"),
]

# (continuous, intermittent, reference)
IEC_SAFETY_FACTORS = {
    "solar": (1.375, 1.25, "IEC 62548"),
    "automotive": (1.25, 1.15, "ISO 8820"),
    "marine": (1.30, 1.20, "ISO 13297"),
    "telecom": (1.15, 1.10, "IEC 60950"),
    "battery": (1.40, 1.25, "IEC 62619"),
    "led": (1.20, 1.15, "IEC 61347"),
    "industrial": (1.25, 1.15, "IEC 60947-2"),
}

IEC_BIFACIAL_FACTOR = 1.25 * 1.1
IEC_MARINE_FACTOR = 1.05
IEC_BATTERY_CONTINUOUS_FACTOR = 1.2
IEC_BATTERY_INTERMITTENT_FACTOR = 1.1

# Breaker derating above 25°C (IEC 60947-2 calibration temperature)
IEC_BREAKER_TEMP_DERATING = {
    25: 1.00, 30: 0.94, 35: 0.87, 40: 0.82, 45: 0.76, 50: 0.71,
    55: 0.65, 60: 0.58, 65: 0.50, 70: 0.41, 75: 0.29,
}

IEC_RATING_CEILINGS = {"marine": 1.4, "automotive": 1.25, "telecom": 1.2, "led": 1.3}

def get_breaker_temp_derating(temp_c: float) -> float:
    if temp_c <= 25:
        return 1.0
    for t in sorted(IEC_BREAKER_TEMP_DERATING):
        if t >= temp_c:
            return IEC_BREAKER_TEMP_DERATING[t]
    return IEC_BREAKER_TEMP_DERATING[max(IEC_BREAKER_TEMP_DERATING)]

# mm2 -> Amps, used to check that a breaker protects the connected cable
METRIC_WIRE_AMPACITY = {
    "1.5": 18, "2.5": 25, "4": 35, "6": 45, "10": 65, "16": 85, "25": 115, "35": 130,
    "50": 155, "70": 195, "95": 230, "120": 270, "150": 310, "185": 355, "240": 415, "300": 480,
}

# --- Conduit fill (IEC 61386 nominal outside diameter, internal area mm2) ---

IEC_CONDUIT_SIZES = ["16", "20", "25", "32", "40", "50", "63", "75", "90", "110", "125", "160"]

_PVC_AREAS = [86.6, 143.1, 268.8, 490.9, 804.2, 1256.6, 1963.5, 3117.2, 4536.5, 6939.8, 9160.9, 15393.8]
_STEEL_AREAS = [81.7, 136.8, 260.2, 479.1, 789.4, 1238.9, 1940.8, 3088.8, 4499.7, 6900.4, 9122.3, 15348.5]

IEC_CONDUITS: Dict[str, List[ConduitCatalogEntry]] = {
    "PVC": [ConduitCatalogEntry(s, "PVC", a) for s, a in zip(IEC_CONDUIT_SIZES, _PVC_AREAS)],
    "Steel": [ConduitCatalogEntry(s, "Steel", a) for s, a in zip(IEC_CONDUIT_SIZES, _STEEL_AREAS)],
}

# Overall insulated cable area, mm2 (IEC 60227 H07V-K / XLPE single core)
IEC_PVC_WIRE_AREAS = {
    "0.75": 3.73, "1": 4.26, "1.5": 6.07, "2.5": 8.96, "4": 11.65, "6": 14.93, "10": 24.35,
    "16": 33.29, "25": 50.77, "35": 64.75, "50": 91.35, "70": 117.61, "95": 158.36,
    "120": 190.40, "150": 238.10, "185": 282.74, "240": 362.17, "300": 436.63,
    "400": 571.77, "500": 690.88,
}
IEC_XLPE_WIRE_AREAS = {
    "1.5": 6.07, "2.5": 7.94, "4": 10.46, "6": 13.59, "10": 22.65, "16": 31.28, "25": 48.25,
    "35": 61.93, "50": 84.67, "70": 117.61, "95": 158.36, "120": 190.40, "150": 238.10,
    "185": 282.74, "240": 362.17, "300": 451.33, "400": 588.68, "500": 728.11,
}

# EPR and LSOH cables follow the XLPE and PVC dimensions respectively
IEC_INSULATION_TABLES = {
    "PVC": IEC_PVC_WIRE_AREAS,
    "LSOH": IEC_PVC_WIRE_AREAS,
    "XLPE": IEC_XLPE_WIRE_AREAS,
    "EPR": IEC_XLPE_WIRE_AREAS,
}
