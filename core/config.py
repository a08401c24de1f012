from core.models import (
    LengthUnit, StandardId, TemperatureUnit, VoltageDropCategory, VoltageSystem,
)

# Optional ConductorInput fields filled per standard when left unset.
# Ambient values are Celsius and are applied after unit normalization.
STANDARD_DEFAULTS = {
    StandardId.NEC: {
        "voltage_system": VoltageSystem.SINGLE_PHASE,
        "installation_method": "conduit",
        "temperature_rating": 75,
        "number_of_conductors": 3,
        "ambient_temperature": 30.0,
    },
    StandardId.IEC: {
        "voltage_system": VoltageSystem.SINGLE_PHASE,
        "installation_method": "A1",
        "temperature_rating": 90,
        "number_of_conductors": 1,
        "ambient_temperature": 30.0,
    },
    StandardId.BS7671: {
        "voltage_system": VoltageSystem.SINGLE_PHASE,
        "installation_method": "A1",
        "temperature_rating": 70,
        "number_of_conductors": 1,
        "ambient_temperature": 20.0,  # UK reference ambient
    },
    StandardId.DC_AUTOMOTIVE: {
        "voltage_system": VoltageSystem.DC,
        "installation_method": "automotive",
        "number_of_conductors": 1,
        "ambient_temperature": 25.0,
    },
    StandardId.DC_MARINE: {
        "voltage_system": VoltageSystem.DC,
        "installation_method": "marine",
        "number_of_conductors": 1,
        "ambient_temperature": 25.0,
    },
    StandardId.DC_SOLAR: {
        "voltage_system": VoltageSystem.DC,
        "installation_method": "solar_outdoor",
        "number_of_conductors": 1,
        "ambient_temperature": 25.0,
    },
    StandardId.DC_TELECOM: {
        "voltage_system": VoltageSystem.DC,
        "installation_method": "free_air",
        "number_of_conductors": 1,
        "ambient_temperature": 25.0,
    },
}

# Nominal system voltage offered by the callers
DEFAULT_VOLTAGES = {
    StandardId.NEC: 120.0,
    StandardId.IEC: 230.0,
    StandardId.BS7671: 230.0,
    StandardId.DC_AUTOMOTIVE: 12.0,
    StandardId.DC_MARINE: 12.0,
    StandardId.DC_SOLAR: 24.0,
    StandardId.DC_TELECOM: 48.0,
}

# Units assumed when ConductorInput leaves length_unit / temperature_unit unset
NATIVE_UNITS = {
    StandardId.NEC: (LengthUnit.FEET, TemperatureUnit.FAHRENHEIT),
    StandardId.IEC: (LengthUnit.METERS, TemperatureUnit.CELSIUS),
    StandardId.BS7671: (LengthUnit.METERS, TemperatureUnit.CELSIUS),
    StandardId.DC_AUTOMOTIVE: (LengthUnit.FEET, TemperatureUnit.CELSIUS),
    StandardId.DC_MARINE: (LengthUnit.FEET, TemperatureUnit.CELSIUS),
    StandardId.DC_SOLAR: (LengthUnit.FEET, TemperatureUnit.CELSIUS),
    StandardId.DC_TELECOM: (LengthUnit.FEET, TemperatureUnit.CELSIUS),
}

def resolve_units(standard: StandardId, length_unit=None, temperature_unit=None):
    native_length, native_temp = NATIVE_UNITS[standard]
    return length_unit or native_length, temperature_unit or native_temp

_N, _S, _C = VoltageDropCategory.NORMAL, VoltageDropCategory.SENSITIVE, VoltageDropCategory.CRITICAL

# Maximum voltage drop, percent
VOLTAGE_DROP_LIMITS = {
    StandardId.NEC: {_N: 3.0, _S: 2.0, _C: 1.0},          # NEC 210.19(A) Informational Note 4
    StandardId.IEC: {_N: 4.0, _S: 3.0, _C: 2.0},          # IEC 60364-5-52 G.52.1
    StandardId.BS7671: {_N: 4.0, _S: 3.0, _C: 2.0},       # BS 7671 Appendix 4 section 6.4
    StandardId.DC_AUTOMOTIVE: {_N: 2.0, _S: 1.0, _C: 0.5},
    StandardId.DC_MARINE: {_N: 3.0, _S: 2.0, _C: 1.0},    # ABYC E-11 (10% non-critical not offered)
    StandardId.DC_SOLAR: {_N: 2.0, _S: 1.5, _C: 1.0},
    StandardId.DC_TELECOM: {_N: 1.0, _S: 0.5, _C: 0.25},
}

def get_voltage_drop_limit(standard: StandardId, category: VoltageDropCategory) -> float:
    return VOLTAGE_DROP_LIMITS[standard][category]
