"""
Input and result checks shared by the calculators.
"""

import math


def require_whole_years(value, name: str) -> int:
    """Return ``value`` as an int, or raise ValueError unless it is a positive whole number."""
    if value <= 0 or int(value) != value:
        raise ValueError(f"{name} must be a positive whole number of years")
    return int(value)


def require_finite(value: float, name: str) -> float:
    """Raise ValueError if a computed value overflowed to inf or nan."""
    if not math.isfinite(value):
        raise ValueError(f"{name} is too large to calculate for these inputs")
    return value


def require_finite_inputs(**values) -> None:
    """Raise ValueError if any keyword argument is inf or nan."""
    for name, value in values.items():
        if not math.isfinite(value):
            raise ValueError(f"{name} must be a finite number")
