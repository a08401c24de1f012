from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

class StandardId(Enum):
    NEC = "NEC"
    IEC = "IEC"
    BS7671 = "BS7671"
    DC_AUTOMOTIVE = "DC_AUTOMOTIVE"
    DC_MARINE = "DC_MARINE"
    DC_SOLAR = "DC_SOLAR"
    DC_TELECOM = "DC_TELECOM"

    @property
    def is_dc(self) -> bool:
        return self.value.startswith("DC_")

class VoltageSystem(Enum):
    SINGLE_PHASE = "single"
    THREE_PHASE = "three"
    DC = "dc"

class ConductorMaterial(Enum):
    COPPER = "copper"
    ALUMINUM = "aluminum"

class DutyCycle(Enum):
    CONTINUOUS = "continuous"
    INTERMITTENT = "intermittent"

class ApplicationType(Enum):
    AUTOMOTIVE = "automotive"
    MARINE = "marine"
    SOLAR = "solar"
    TELECOM = "telecom"
    BATTERY = "battery"
    LED = "led"
    INDUSTRIAL = "industrial"

class SolarConfiguration(Enum):
    PARALLEL = "parallel"
    SERIES = "series"

class VoltageDropCategory(Enum):
    NORMAL = "normal"
    SENSITIVE = "sensitive"
    CRITICAL = "critical"

class LengthUnit(Enum):
    FEET = "ft"
    METERS = "m"

class TemperatureUnit(Enum):
    CELSIUS = "C"
    FAHRENHEIT = "F"

# --- Static table records ---

@dataclass(frozen=True)
class ConductorSpec:
    size: str
    area_mm2: float
    ampacity: Dict[int, float]  # Temp rating (C) -> Amps
    resistance_ohm_per_km: float
    reactance_ohm_per_km: float = 0.0
    diameter_mm: Optional[float] = None

    def base_ampacity(self, rating: int) -> float:
        if rating in self.ampacity:
            return self.ampacity[rating]
        # Highest column not above the requested rating
        usable = [r for r in self.ampacity if r <= rating]
        return self.ampacity[max(usable)] if usable else self.ampacity[min(self.ampacity)]

@dataclass(frozen=True)
class CorrectionFactorSet:
    temperature: float = 1.0
    grouping: float = 1.0
    installation: float = 1.0
    material: float = 1.0
    thermal_resistivity: float = 1.0

    @property
    def total(self) -> float:
        return self.temperature * self.grouping * self.installation * self.material * self.thermal_resistivity

    def describe(self) -> str:
        return (f"Temp {self.temperature:.2f} * Grp {self.grouping:.2f} * Inst {self.installation:.2f}"
                f" * Mat {self.material:.2f} * Rho {self.thermal_resistivity:.2f} = {self.total:.3f}")

@dataclass(frozen=True)
class BreakerCatalogEntry:
    rating: float
    device_type: str
    voltage: float
    standard: str  # UL489, ABYC, SAE, IEC60947...
    applications: Tuple[str, ...]
    interrupting_capacity: int
    trip_curve: str = "C"
    frame: str = "Standard"
    continuous_duty: bool = True
    temperature_rating: float = 80.0  # Max ambient, C

@dataclass(frozen=True)
class FuseSpec:
    rating: float
    fuse_type: str  # regular, mini, maxi, micro2
    color: str
    voltages: Tuple[int, ...]
    applications: Tuple[str, ...]
    min_temp_c: float = -40.0
    max_temp_c: float = 85.0

@dataclass(frozen=True)
class ConduitCatalogEntry:
    trade_size: str
    conduit_type: str
    internal_area: float  # in2 (NEC) or mm2 (IEC)

# --- Inputs ---

@dataclass
class ConductorInput:
    standard: Union[StandardId, str, None]
    voltage: float
    circuit_length: float
    load_current: Optional[float] = None
    load_power: Optional[float] = None
    voltage_system: Optional[VoltageSystem] = None
    conductor_material: ConductorMaterial = ConductorMaterial.COPPER
    ambient_temperature: Optional[float] = None
    number_of_conductors: Optional[int] = None
    installation_method: Optional[str] = None
    temperature_rating: Optional[int] = None
    power_factor: float = 1.0
    duty_cycle: DutyCycle = DutyCycle.CONTINUOUS
    application: Optional[ApplicationType] = None
    voltage_drop_category: VoltageDropCategory = VoltageDropCategory.NORMAL
    allowable_voltage_drop_percent: Optional[float] = None
    soil_thermal_resistivity: Optional[float] = None
    grouping_factor: Optional[float] = None  # Manual override (IEC, BS 7671)
    load_type: Optional[str] = None  # UK diversity category (BS 7671)
    include_continuous_multiplier: bool = True
    length_unit: Optional[LengthUnit] = None
    temperature_unit: Optional[TemperatureUnit] = None

@dataclass
class BreakerInput:
    application: ApplicationType
    standard: Union[StandardId, str, None] = None
    load_current: Optional[float] = None
    load_power: Optional[float] = None
    system_voltage: Optional[float] = None
    duty_cycle: DutyCycle = DutyCycle.CONTINUOUS
    ambient_temperature: float = 25.0  # Celsius
    environment: str = "indoor"
    short_circuit_current: Optional[float] = None
    panel_isc: Optional[float] = None
    number_of_panels: Optional[int] = None
    panel_power: Optional[float] = None
    solar_configuration: SolarConfiguration = SolarConfiguration.PARALLEL
    bifacial: bool = True  # IEC 62548 conservative default
    wire_gauge: Optional[str] = None
    efficiency_factor: Optional[float] = None
    power_factor: float = 1.0

@dataclass
class WireEntry:
    gauge: str
    quantity: int
    insulation: str
    # Standard the gauge label is expressed in; None means the calculation's own standard
    gauge_standard: Optional[StandardId] = None

@dataclass
class ConduitFillInput:
    wires: List[WireEntry]
    conduit_type: str
    standard: Union[StandardId, str, None] = None
    future_fill_reserve: float = 0.0  # Percent
    ambient_temperature: float = 30.0  # Celsius
    application: str = "commercial"
    installation_method: str = "indoor"
    conduit_size: Optional[str] = None  # Check this trade size instead of picking one

# --- Results ---

@dataclass
class ComplianceFlags:
    ampacity: Optional[bool] = None
    voltage_drop: Optional[bool] = None
    temperature: Optional[bool] = None
    installation: Optional[bool] = None
    application: Optional[bool] = None
    wire_compatible: Optional[bool] = None
    rating_ceiling: Optional[bool] = None
    fill: Optional[bool] = None

    def applicable(self) -> Dict[str, bool]:
        return {name: value for name, value in self.__dict__.items() if value is not None}

    def failed(self) -> List[str]:
        return [name for name, value in self.applicable().items() if not value]

    @property
    def compliant(self) -> bool:
        return all(self.applicable().values())

@dataclass
class ConductorAlternative:
    size: str
    base_ampacity: float
    voltage_drop_percent: float

@dataclass
class ConductorResult:
    standard: StandardId
    size: str
    area_mm2: float
    design_current: float
    required_ampacity: float
    base_ampacity: float
    adjusted_ampacity: float
    voltage_drop_volts: float
    voltage_drop_percent: float
    voltage_drop_limit: float
    power_loss_watts: float
    efficiency_percent: float
    factors: CorrectionFactorSet
    compliance: ComplianceFlags
    length_m: float
    ambient_c: float
    alternatives: List[ConductorAlternative] = field(default_factory=list)
    reference: str = ""

@dataclass
class BreakerResult:
    standard: str
    rating: float
    device: Union[BreakerCatalogEntry, FuseSpec]
    is_automotive_fuse: bool
    base_current: float
    adjusted_current: float
    safety_factor: float
    temperature_derating: float
    calculation_method: str
    compliance: ComplianceFlags
    alternatives: List[Union[BreakerCatalogEntry, FuseSpec]] = field(default_factory=list)
    reference: str = ""

@dataclass
class ConduitWireArea:
    gauge: str
    original_gauge: str
    quantity: int
    insulation: str
    unit_area: float
    total_area: float
    converted: bool = False

@dataclass
class ConduitAlternative:
    trade_size: str
    internal_area: float
    fill_percent: float
    compliant: bool

@dataclass
class ConduitResult:
    standard: StandardId
    conduit_type: str
    trade_size: str
    total_wire_area: float
    required_wire_area: float  # total_wire_area plus the future fill reserve
    conduit_internal_area: float
    fill_percent: float
    max_fill_percent: float
    fill_rule: str
    area_unit: str
    wires: List[ConduitWireArea]
    compliance: ComplianceFlags
    alternatives: List[ConduitAlternative] = field(default_factory=list)
    reference: str = ""
