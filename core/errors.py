from typing import List, Optional, Sequence

class SizingError(Exception):
    """Base class for every error raised by the sizing engine."""

class InputValidationError(SizingError):
    """Raised when validate_input reports one or more problems."""

    def __init__(self, messages: Sequence[str]):
        self.messages: List[str] = list(messages)
        super().__init__("; ".join(self.messages))

class UnsupportedStandardError(SizingError):
    def __init__(self, value, supported: Optional[Sequence[str]] = None):
        self.value = value
        self.supported = list(supported) if supported else []
        msg = f"Unsupported standard: {value!r}"
        if self.supported:
            msg += f" (supported: {', '.join(self.supported)})"
        super().__init__(msg)

class NoSolutionError(SizingError):
    """No catalog entry satisfies the constraints."""

class NoSuitableConductorError(NoSolutionError):
    def __init__(self, largest_size: str, failed_constraints: Sequence[str]):
        self.largest_size = largest_size
        self.failed_constraints = list(failed_constraints)
        super().__init__(
            f"No conductor satisfies the load. Largest size checked: {largest_size} "
            f"(failed: {', '.join(self.failed_constraints)})"
        )

class NoSuitableBreakerError(NoSolutionError):
    def __init__(self, adjusted_current: float, largest_rating: Optional[float], catalog: str):
        self.adjusted_current = adjusted_current
        self.largest_rating = largest_rating
        self.catalog = catalog
        super().__init__(
            f"No {catalog} device rated >= {adjusted_current:.2f} A "
            f"(largest available: {largest_rating} A)"
        )

class NoSuitableConduitError(NoSolutionError):
    def __init__(self, required_area: float, largest_size: str, max_fill_percent: float, area_unit: str):
        self.required_area = required_area
        self.largest_size = largest_size
        self.max_fill_percent = max_fill_percent
        super().__init__(
            f"Wire area {required_area:.4f} {area_unit} exceeds {max_fill_percent:.0f}% fill "
            f"of the largest conduit checked ({largest_size})"
        )
