import math
from typing import Tuple, Optional

def convert_power_unit(val: float, unit: str, voltage: float, phases: int, pf: float) -> Tuple[float, Optional[float]]:
    """
    Converts input value to (Watts, Amps_Override).
    Amps_Override is set only when the user typed a current.
    """
    unit = unit.strip().upper()

    if unit == "W": return (val, None)
    if unit == "KW": return (val * 1000.0, None)
    if unit == "MW": return (val * 1000000.0, None)
    if unit == "HP": return (val * 746.0, None)

    if unit == "A":
        factor = math.sqrt(3) if phases == 3 else 1.0
        return (val * voltage * factor * pf, val)

    if unit in ["VA", "VAR"]:
        return (val * pf, None)
    if unit in ["KVA", "KVAR"]:
        return (val * 1000.0 * pf, None)

    return (val, None)

def convert_length_unit(val: float, unit: str) -> float:
    """Returns length in meters."""
    unit = unit.strip().lower()
    if unit in ["m", "mts", "metros", "metro"]: return val
    if unit in ["ft", "pies", "pie"]: return val * 0.3048
    if unit in ["yd", "yarda", "yardas"]: return val * 0.9144
    raise ValueError(f"Unknown length unit: {unit}")

def convert_temperature(val: float, unit: str) -> float:
    """Returns temperature in Celsius."""
    unit = unit.strip().upper()
    if unit in ["C", "°C"]: return val
    if unit in ["F", "°F"]: return (val - 32.0) * 5.0 / 9.0
    raise ValueError(f"Unknown temperature unit: {unit}")

def current_from_power(power: float, voltage: float, efficiency: float = 1.0, pf: float = 1.0) -> float:
    # I = P / (V * eff * pf)
    if voltage <= 0:
        raise ValueError("Voltage must be greater than 0")
    return power / (efficiency * pf) / voltage

# Nearest-equivalent AWG/kcmil -> mm2 (lossy: sizes do not map 1:1)
AWG_TO_MM2 = {
    "18": 0.82, "16": 1.31, "14": 2.08, "12": 3.31, "10": 5.26, "8": 8.37, "6": 13.3,
    "4": 21.2, "3": 26.7, "2": 33.6, "1": 42.4, "1/0": 53.5, "2/0": 67.4, "3/0": 85.0,
    "4/0": 107.2, "250": 127.0, "300": 152.0, "350": 177.0, "400": 203.0, "500": 253.0,
    "600": 304.0, "700": 355.0, "750": 380.0, "800": 405.0, "900": 456.0, "1000": 507.0,
}

METRIC_SIZES = [1.5, 2.5, 4, 6, 10, 16, 25, 35, 50, 70, 95, 120, 150, 185, 240, 300, 400, 500]

def normalize_awg(awg: str) -> str:
    return awg.strip().upper().replace("AWG", "").replace("KCMIL", "").strip()

def awg_to_mm2(awg: str) -> float:
    key = normalize_awg(awg)
    if key not in AWG_TO_MM2:
        raise ValueError(f"Unknown AWG/kcmil size: {awg}")
    return AWG_TO_MM2[key]

def mm2_to_awg(mm2: float) -> str:
    """Nearest AWG/kcmil by cross-section."""
    return min(AWG_TO_MM2, key=lambda g: abs(AWG_TO_MM2[g] - mm2))

def find_minimum_metric_size(mm2: float) -> float:
    """First standard metric size >= mm2, or the largest one."""
    for size in METRIC_SIZES:
        if size >= mm2:
            return size
    return METRIC_SIZES[-1]

def format_metric_size(mm2: float) -> str:
    # 2.5 -> "2.5", 16.0 -> "16"
    return f"{mm2:g}"
