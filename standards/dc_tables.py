"""
DC conductor tables per application (ISO 6722 / SAE J1128 automotive base table,
ABYC E-11 marine, UL 4703 solar, telecom, battery and LED variants).
"""
import math
from typing import Dict, List

from core.models import ConductorSpec, StandardId
from standards.nec_tables import FT_PER_KM

# (Gauge, mm2, R ohm/1000ft, continuous A, intermittent A, applications)
AUTOMOTIVE_WIRE_TABLE = [
    ("20", 0.52, 10.15, 11, 14, ("automotive", "led")),
    ("18", 0.82, 6.385, 16, 20, ("automotive", "marine", "led")),
    ("16", 1.31, 4.016, 22, 27, ("automotive", "marine", "led")),
    ("14", 2.08, 2.525, 32, 40, ("automotive", "marine", "solar", "battery")),
    ("12", 3.31, 1.588, 45, 55, ("automotive", "marine", "solar", "battery", "telecom")),
    ("10", 5.26, 0.999, 60, 75, ("automotive", "marine", "solar", "battery", "telecom")),
    ("8", 8.37, 0.628, 80, 100, ("automotive", "marine", "solar", "battery")),
    ("6", 13.3, 0.395, 105, 130, ("automotive", "marine", "solar", "battery")),
    ("4", 21.2, 0.249, 140, 175, ("automotive", "marine", "solar", "battery")),
    ("2", 33.6, 0.156, 190, 240, ("automotive", "marine", "solar", "battery")),
    ("1", 42.4, 0.124, 220, 275, ("automotive", "marine", "solar", "battery")),
    ("1/0", 53.5, 0.098, 260, 325, ("automotive", "marine", "solar", "battery")),
    ("2/0", 67.4, 0.078, 300, 375, ("marine", "solar", "battery")),
    ("4/0", 107.0, 0.049, 380, 475, ("marine", "solar", "battery")),
]

TELECOM_SMALL_GAUGES = [
    ("24", 0.20, 25.67, 3.5, 4.5, ("telecom",)),
    ("22", 0.33, 16.14, 7, 9, ("telecom",)),
]

# Temperature ratings (C) per application table
TABLE_TEMPERATURE_RATINGS = {
    "automotive": 105, "marine": 105, "solar": 90, "telecom": 75, "battery": 105, "led": 75,
}

# Continuous duty reads the rating column 1, intermittent column 2
CONTINUOUS, INTERMITTENT = 1, 2

def _round_half_up(value: float) -> float:
    return float(math.floor(value + 0.5))

def _awg_number(gauge: str) -> int:
    # "1/0" -> 0, "2/0" -> -1, "4/0" -> -3
    if "/" in gauge:
        return 1 - int(gauge.split("/")[0])
    return int(gauge)

def _build(rows, ampacity_factor: float = 1.0) -> List[ConductorSpec]:
    specs = []
    for gauge, mm2, r_kft, cont, inter, _apps in rows:
        if ampacity_factor != 1.0:
            cont, inter = _round_half_up(cont * ampacity_factor), _round_half_up(inter * ampacity_factor)
        specs.append(ConductorSpec(
            size=gauge,
            area_mm2=mm2,
            ampacity={CONTINUOUS: cont, INTERMITTENT: inter},
            resistance_ohm_per_km=r_kft * FT_PER_KM / 1000.0,
        ))
    return specs

def _rows_for(application: str):
    return [row for row in AUTOMOTIVE_WIRE_TABLE if application in row[5]]

DC_WIRE_TABLES: Dict[str, List[ConductorSpec]] = {
    "automotive": _build(_rows_for("automotive")),
    "marine": _build(_rows_for("marine"), 0.9),
    "solar": _build(_rows_for("solar"), 1.1),
    "battery": _build(_rows_for("battery"), 1.2),
    "telecom": _build(TELECOM_SMALL_GAUGES + [r for r in _rows_for("telecom") if _awg_number(r[0]) <= 12]),
    "led": _build([r for r in _rows_for("led") if _awg_number(r[0]) >= 14]),
}

WIRE_APPLICATIONS = {row[0]: row[5] for row in TELECOM_SMALL_GAUGES + AUTOMOTIVE_WIRE_TABLE}

# Ambient temperature correction, interpolated linearly between points
TEMPERATURE_CORRECTION_FACTORS = {
    "automotive": {-40: 1.15, -20: 1.10, 0: 1.05, 25: 1.00, 40: 0.95, 60: 0.87, 80: 0.76, 100: 0.62, 125: 0.40},
    "marine": {-20: 1.10, 0: 1.05, 25: 1.00, 40: 0.95, 60: 0.87, 80: 0.76},
    "solar": {-40: 1.15, -20: 1.10, 0: 1.05, 25: 1.00, 40: 0.95, 60: 0.87, 70: 0.82, 80: 0.76, 90: 0.67},
    "telecom": {0: 1.05, 10: 1.02, 25: 1.00, 40: 0.95, 50: 0.87},
    "battery": {-20: 1.10, 0: 1.05, 25: 1.00, 40: 0.95, 60: 0.87},
    "led": {-10: 1.05, 0: 1.02, 25: 1.00, 40: 0.95, 60: 0.87, 70: 0.82},
}

def get_temp_correction(application: str, temp_c: float) -> float:
    factors = TEMPERATURE_CORRECTION_FACTORS.get(application)
    if not factors:
        return 1.0
    temps = sorted(factors)
    if temp_c <= temps[0]:
        return factors[temps[0]]
    if temp_c >= temps[-1]:
        return factors[temps[-1]]
    for t1, t2 in zip(temps, temps[1:]):
        if t1 <= temp_c <= t2:
            f1, f2 = factors[t1], factors[t2]
            return f1 + (f2 - f1) * (temp_c - t1) / (t2 - t1)
    return 1.0

# Current multiplier applied before the ampacity check
AMPACITY_SAFETY_FACTORS = {
    "automotive": 1.25, "marine": 1.2, "solar": 1.25, "telecom": 1.15, "battery": 1.3, "led": 1.15,
}

# Operating ranges, C
TEMPERATURE_RANGES = {
    "automotive": (-40, 125), "marine": (-20, 80), "solar": (-40, 90),
    "telecom": (0, 50), "battery": (-20, 60), "led": (-10, 70),
}

DEFAULT_APPLICATIONS = {
    StandardId.DC_AUTOMOTIVE: "automotive",
    StandardId.DC_MARINE: "marine",
    StandardId.DC_SOLAR: "solar",
    StandardId.DC_TELECOM: "telecom",
}

DC_VOLTAGES = (12, 24, 48)
DC_INSTALLATION_METHODS = ("automotive", "marine", "solar_outdoor", "solar_indoor", "free_air")
ALUMINUM_RESISTANCE_MULTIPLIER = 1.61
