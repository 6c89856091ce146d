"""
Checked Integers — 64-bit целочисленная арифметика с контролем переполнения

Python int не переполняется, поэтому границы знакового 64-bit integer
проверяются явно. Любая операция либо возвращает значение в
[MIN_INT, MAX_INT], либо бросает NumericError(OVERFLOW/RANGE).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Результат никогда не "заворачивается" (wrap-around запрещён)
2. Переполнение add/sub/mul/pow → ErrorKind.OVERFLOW
3. gcd от MIN_INT → ErrorKind.RANGE (|MIN_INT| не представим)
4. Все операции детерминированы и без side effects
"""

import math
from typing import Final

from src.numerics.errors import overflow_error, range_error

# =============================================================================
# ГРАНИЦЫ ДИАПАЗОНА
# =============================================================================

# Максимальное значение знакового 64-bit integer
MAX_INT: Final[int] = 2**63 - 1

# Минимальное значение знакового 64-bit integer
# ВАЖНО: -MIN_INT не представим, поэтому Rational запрещает это значение
MIN_INT: Final[int] = -(2**63)


# =============================================================================
# ПРОВЕРКИ
# =============================================================================


def is_in_range(value: int) -> bool:
    """
    Проверка, что целое лежит в диапазоне [MIN_INT, MAX_INT].

    Args:
        value: Проверяемое целое

    Returns:
        True если значение представимо как 64-bit integer
    """
    return MIN_INT <= value <= MAX_INT


def _require_int(value: int, operation: str) -> None:
    if not is_in_range(value):
        raise range_error(operation, f"operand {value} is outside the 64-bit integer range")


def _checked(result: int, operation: str) -> int:
    if not is_in_range(result):
        raise overflow_error(operation, "integer overflow")
    return result


def sign(value: float) -> int:
    """
    Знак числа: -1, 0 или 1.

    Examples:
        >>> sign(-7)
        -1
        >>> sign(0.0)
        0
    """
    return (value > 0) - (value < 0)


# =============================================================================
# АРИФМЕТИКА С КОНТРОЛЕМ ПЕРЕПОЛНЕНИЯ
# =============================================================================


def add(a: int, b: int) -> int:
    """
    Сложение с контролем переполнения.

    Raises:
        NumericError: OVERFLOW если a + b вне диапазона

    Examples:
        >>> add(2, 3)
        5
        >>> add(MAX_INT, 1)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        NumericError: checked_integers.add: integer overflow
    """
    _require_int(a, "checked_integers.add")
    _require_int(b, "checked_integers.add")
    return _checked(a + b, "checked_integers.add")


def sub(a: int, b: int) -> int:
    """Вычитание с контролем переполнения."""
    _require_int(a, "checked_integers.sub")
    _require_int(b, "checked_integers.sub")
    return _checked(a - b, "checked_integers.sub")


def mul(a: int, b: int) -> int:
    """
    Умножение с контролем переполнения.

    Raises:
        NumericError: OVERFLOW если a * b вне диапазона
    """
    _require_int(a, "checked_integers.mul")
    _require_int(b, "checked_integers.mul")
    return _checked(a * b, "checked_integers.mul")


def pow(base: int, exponent: int) -> int:  # noqa: A001
    """
    Возведение в неотрицательную целую степень с контролем переполнения.

    Используется возведение в квадрат (exponentiation by squaring), каждый
    промежуточный шаг проверяется, поэтому огромные степени не строятся.

    Args:
        base: Основание
        exponent: Показатель (>= 0)

    Returns:
        base ** exponent

    Raises:
        NumericError: RANGE если exponent < 0, OVERFLOW при переполнении

    Examples:
        >>> pow(3, 4)
        81
        >>> pow(-2, 3)
        -8
    """
    operation = "checked_integers.pow"
    _require_int(base, operation)
    if exponent < 0:
        raise range_error(operation, f"negative exponent {exponent} is not supported")

    result = 1
    while True:
        if exponent & 1:
            result = _checked(result * base, operation)
        exponent >>= 1
        if exponent == 0:
            return result
        base = _checked(base * base, operation)


def gcd(a: int, b: int) -> int:
    """
    Наибольший общий делитель (всегда >= 0).

    ВАЖНО: gcd(MIN_INT, 0) = 2**63 не представим, поэтому MIN_INT
    в любом операнде отвергается.

    Raises:
        NumericError: RANGE если операнд равен MIN_INT или вне диапазона

    Examples:
        >>> gcd(12, -18)
        6
        >>> gcd(0, 5)
        5
    """
    operation = "checked_integers.gcd"
    _require_int(a, operation)
    _require_int(b, operation)
    if a == MIN_INT or b == MIN_INT:
        raise range_error(operation, "MIN_INT operand cannot be negated")
    return math.gcd(a, b)

