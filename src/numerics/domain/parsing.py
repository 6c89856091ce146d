"""
Parsing — Грамматики строкового представления Rational и Complex

Rational:
    "123", "-456"            целое
    "123.456", "-4.5e-3"     float (конвертируется continued fraction)
    "1/2", " -3 / 4 "        дробь int/int (пробелы вокруг частей допустимы)

Complex:
    "5", "-3.14", "1.5e10"   вещественное
    "i", "-J", "2.5j"        чисто мнимое (i/j в любом регистре)
    "3+4i", "4i+3"           порядок слагаемых любой
    " 3 - 4 i "              любые пробелы

Функции возвращают "сырые" компоненты; конструирование значения
выполняет вызывающий тип. Нераспознанная строка → NumericError(DOMAIN).
"""

import re
from typing import Tuple, Union

from src.numerics.errors import domain_error

# =============================================================================
# ЛЕКСЕМЫ
# =============================================================================

# Десятичное число без знака: "12", "12.", ".5", "1.5e-3"
_NUMBER = r"(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"

_INT_RE = re.compile(r"[+-]?\d+")
_FLOAT_RE = re.compile(rf"[+-]?{_NUMBER}")

_REAL_RE = re.compile(rf"(?P<real>[+-]?{_NUMBER})")
_IMAG_RE = re.compile(rf"(?P<sign>[+-]?)(?P<coef>{_NUMBER})?[ij]", re.IGNORECASE)
_REAL_IMAG_RE = re.compile(
    rf"(?P<real>[+-]?{_NUMBER})(?P<sign>[+-])(?P<coef>{_NUMBER})?[ij]", re.IGNORECASE
)
_IMAG_REAL_RE = re.compile(
    rf"(?P<sign>[+-]?)(?P<coef>{_NUMBER})?[ij](?P<real>[+-]{_NUMBER})", re.IGNORECASE
)

_WHITESPACE_RE = re.compile(r"\s+")


# =============================================================================
# RATIONAL
# =============================================================================


def parse_rational_parts(text: str) -> Union[Tuple[int, int], float]:
    """
    Разбор строки Rational.

    Args:
        text: Строка вида "n", "x.y" или "n/d"

    Returns:
        (num, den) для целого или дроби; float для десятичной записи

    Raises:
        NumericError: DOMAIN если строка не распознана

    Examples:
        >>> parse_rational_parts(" 7 / 8 ")
        (7, 8)
        >>> parse_rational_parts("-123")
        (-123, 1)
        >>> parse_rational_parts("0.5")
        0.5
    """
    s = text.strip()

    if _INT_RE.fullmatch(s):
        return int(s), 1

    if _FLOAT_RE.fullmatch(s):
        return float(s)

    parts = s.split("/")
    if len(parts) == 2:
        num, den = parts[0].strip(), parts[1].strip()
        if _INT_RE.fullmatch(num) and _INT_RE.fullmatch(den):
            return int(num), int(den)

    raise domain_error("Rational.parse", f"Invalid rational number: {text!r}")


# =============================================================================
# COMPLEX
# =============================================================================


def _imaginary_coefficient(sign: str, coef: str) -> float:
    value = float(coef) if coef else 1.0
    return -value if sign == "-" else value


def parse_complex_parts(text: str) -> Tuple[float, float]:
    """
    Разбор строки Complex.

    Args:
        text: Строка комплексного числа

    Returns:
        (real, imaginary)

    Raises:
        NumericError: DOMAIN если строка не распознана

    Examples:
        >>> parse_complex_parts("3+4i")
        (3.0, 4.0)
        >>> parse_complex_parts("i-1")
        (-1.0, 1.0)
        >>> parse_complex_parts(" -J ")
        (0.0, -1.0)
    """
    s = _WHITESPACE_RE.sub("", text)

    m = _REAL_RE.fullmatch(s)
    if m:
        return float(m.group("real")), 0.0

    m = _IMAG_RE.fullmatch(s)
    if m:
        return 0.0, _imaginary_coefficient(m.group("sign"), m.group("coef"))

    m = _REAL_IMAG_RE.fullmatch(s)
    if m is None:
        m = _IMAG_REAL_RE.fullmatch(s)
    if m:
        real = float(m.group("real"))
        return real, _imaginary_coefficient(m.group("sign"), m.group("coef"))

    raise domain_error("Complex.parse", f"Invalid complex number: {text!r}")
