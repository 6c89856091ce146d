"""
Core math modules для numerics

Математические примитивы: checked 64-bit integers, float tolerance, углы.
"""

# Checked Integers
from src.numerics.math.checked_integers import (
    MAX_INT,
    MIN_INT,
    is_in_range,
    sign,
)

# Numerical Safeguards
from src.numerics.math.numerical_safeguards import (
    # Epsilon constants
    DEFAULT_ABSOLUTE_TOLERANCE,
    DEFAULT_RELATIVE_TOLERANCE,
    # NaN/Inf
    is_valid_float,
    # Safe narrowing
    try_convert_to_int,
    # Epsilon comparisons
    approx_compare,
    approx_equal,
)

# Angle
from src.numerics.math.angle import (
    PHASE_WRAP_TOLERANCE,
    TAU,
    Angle,
    to_radians,
    wrap_radians,
)

__all__ = [
    # Checked Integers — Constants
    "MAX_INT",
    "MIN_INT",
    # Checked Integers — Functions
    "is_in_range",
    "sign",
    # Numerical Safeguards — Epsilon constants
    "DEFAULT_ABSOLUTE_TOLERANCE",
    "DEFAULT_RELATIVE_TOLERANCE",
    # Numerical Safeguards — Functions
    "approx_compare",
    "approx_equal",
    "is_valid_float",
    "try_convert_to_int",
    # Angle — Constants
    "PHASE_WRAP_TOLERANCE",
    "TAU",
    # Angle — Types
    "Angle",
    # Angle — Functions
    "to_radians",
    "wrap_radians",
]
