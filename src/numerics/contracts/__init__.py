"""
Contract Validation Module

Модуль для валидации JSON контрактов числовых типов (Rational, Complex).
"""

from .validators import (
    COMPLEX_CONTRACT,
    RATIONAL_CONTRACT,
    NumericContract,
    NumericValidator,
    load_schema,
    validate_complex_contract,
    validate_rational_contract,
)

__all__ = [
    # Classes
    "NumericContract",
    "NumericValidator",
    # Contracts
    "RATIONAL_CONTRACT",
    "COMPLEX_CONTRACT",
    # Functions
    "load_schema",
    "validate_rational_contract",
    "validate_complex_contract",
]
