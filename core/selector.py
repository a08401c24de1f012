import logging
import math
from dataclasses import dataclass, field
from typing import Callable, List, Sequence, Tuple

from core.errors import NoSuitableConductorError
from core.models import ConductorAlternative, ConductorSpec, VoltageSystem

logger = logging.getLogger(__name__)

@dataclass
class Selection:
    conductor: ConductorSpec
    base_ampacity: float
    adjusted_ampacity: float
    voltage_drop_volts: float
    voltage_drop_percent: float
    alternatives: List[ConductorAlternative] = field(default_factory=list)

def topology_multiplier(system: VoltageSystem) -> float:
    # Out-and-back for single phase and DC, line-to-line for three phase
    return math.sqrt(3) if system == VoltageSystem.THREE_PHASE else 2.0

def voltage_drop(current: float, length_m: float, ohm_per_km: float, voltage: float,
                 system: VoltageSystem, pf: float = 1.0, x_ohm_per_km: float = 0.0) -> Tuple[float, float]:
    """Returns (volts, percent) for k * I * L * (R cos + X sin)."""
    sin_phi = math.sqrt(max(0.0, 1.0 - pf * pf))
    z = ohm_per_km * pf + x_ohm_per_km * sin_phi
    volts = topology_multiplier(system) * current * (length_m / 1000.0) * z
    return volts, (volts / voltage) * 100.0

def power_loss(current: float, length_m: float, ohm_per_km: float, system: VoltageSystem) -> float:
    # I^2 * R over every current-carrying conductor of the run
    conductors = 3 if system == VoltageSystem.THREE_PHASE else 2
    return conductors * current ** 2 * ohm_per_km * (length_m / 1000.0)

def efficiency_percent(current: float, voltage: float, system: VoltageSystem, pf: float, loss_watts: float) -> float:
    factor = math.sqrt(3) if system == VoltageSystem.THREE_PHASE else 1.0
    delivered = voltage * current * factor * pf
    if delivered <= 0:
        return 0.0
    return max(0.0, (1.0 - loss_watts / delivered) * 100.0)

def select_conductor(
    candidates: Sequence[ConductorSpec],
    design_current: float,
    derating: float,
    rating: int,
    drop_fn: Callable[[ConductorSpec], Tuple[float, float]],
    limit_percent: float,
    max_alternatives: int = 5,
) -> Selection:
    """
    Smallest candidate (ascending table order) where
    base_ampacity * derating >= design_current and drop% <= limit_percent.
    """
    alternatives: List[ConductorAlternative] = []
    last_failures: List[str] = []

    for spec in candidates:
        base = spec.base_ampacity(rating)
        adjusted = base * derating
        volts, percent = drop_fn(spec)

        ampacity_ok = adjusted >= design_current
        drop_ok = percent <= limit_percent

        if ampacity_ok and len(alternatives) < max_alternatives:
            alternatives.append(ConductorAlternative(spec.size, base, percent))

        if ampacity_ok and drop_ok:
            logger.debug("Selected %s: %.1f A adjusted, %.2f%% drop", spec.size, adjusted, percent)
            return Selection(spec, base, adjusted, volts, percent, alternatives)

        last_failures = []
        if not ampacity_ok: last_failures.append("ampacity")
        if not drop_ok: last_failures.append("voltage_drop")

    largest = candidates[-1].size if candidates else "none"
    raise NoSuitableConductorError(largest, last_failures or ["ampacity"])
