from typing import Optional

from core.models import ComplianceFlags

def evaluate(
    ampacity: Optional[bool] = None,
    voltage_drop: Optional[bool] = None,
    temperature: Optional[bool] = None,
    installation: Optional[bool] = None,
    application: Optional[bool] = None,
    wire_compatible: Optional[bool] = None,
    rating_ceiling: Optional[bool] = None,
    fill: Optional[bool] = None,
) -> ComplianceFlags:
    """
    Builds the itemized flags. A check passed as None does not apply to the
    current standard/application and is left out of ComplianceFlags.compliant.
    """
    return ComplianceFlags(
        ampacity=ampacity,
        voltage_drop=voltage_drop,
        temperature=temperature,
        installation=installation,
        application=application,
        wire_compatible=wire_compatible,
        rating_ceiling=rating_ceiling,
        fill=fill,
    )

def within(value: float, low: float, high: float) -> bool:
    return low <= value <= high
