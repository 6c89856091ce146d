"""
Domain models and value objects.

Contains the numeric value types Rational and Complex, their comparison
mixins, string grammars and JSON payload models.
"""

from src.numerics.domain.comparable import ApproxComparable, Comparable
from src.numerics.domain.complex_number import Complex, ComplexLike
from src.numerics.domain.parsing import parse_complex_parts, parse_rational_parts
from src.numerics.domain.payloads import ComplexPayload, RationalPayload
from src.numerics.domain.rational import Rational, RationalLike, float_to_ratio, simplify

__all__ = [
    # Comparison mixins
    "Comparable",
    "ApproxComparable",
    # Rational model
    "Rational",
    "RationalLike",
    "float_to_ratio",
    "simplify",
    # Complex model
    "Complex",
    "ComplexLike",
    # Parsing
    "parse_rational_parts",
    "parse_complex_parts",
    # Payloads
    "RationalPayload",
    "ComplexPayload",
]
