"""
Numerical Safeguards — Float Tolerance & Safe Narrowing

Модуль обеспечивает численную устойчивость операций над float:
- Проверка NaN/Inf
- Epsilon-сравнения float с комбинированной относительной и абсолютной толерантностью
- Безопасное сужение float → int (только точные целые в 64-bit диапазоне)

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Float сравнения всегда учитывают машинную точность
2. try_convert_to_int никогда не округляет: только точные целые значения
3. Все операции детерминированы и воспроизводимы
"""

import math
import sys
from typing import Final, Optional

from src.numerics.math.checked_integers import MAX_INT, MIN_INT, sign

# =============================================================================
# EPSILON-ПАРАМЕТРЫ
# =============================================================================

# Относительная толерантность по умолчанию для approx_equal / approx_compare
DEFAULT_RELATIVE_TOLERANCE: Final[float] = 1e-9

# Абсолютная толерантность по умолчанию (машинный epsilon для float64)
# Нужна для сравнений около нуля, где относительная толерантность бесполезна
DEFAULT_ABSOLUTE_TOLERANCE: Final[float] = sys.float_info.epsilon


# =============================================================================
# NaN/Inf ПРОВЕРКИ
# =============================================================================


def is_valid_float(value: float) -> bool:
    """
    Проверка, является ли float валидным (не NaN, не Inf).

    Args:
        value: Проверяемое значение

    Returns:
        True если значение валидное (finite), False если NaN или Inf
    """
    return math.isfinite(value)


# =============================================================================
# БЕЗОПАСНОЕ СУЖЕНИЕ FLOAT → INT
# =============================================================================


def try_convert_to_int(value: float) -> Optional[int]:
    """
    Точное сужение float → int.

    Возвращает целое только если float в точности равен целому значению,
    представимому как 64-bit integer. Никакого округления.

    Args:
        value: Исходное значение

    Returns:
        Эквивалентное целое или None ("no match")

    Examples:
        >>> try_convert_to_int(3.0)
        3
        >>> try_convert_to_int(-0.0)
        0
        >>> try_convert_to_int(0.5) is None
        True
        >>> try_convert_to_int(float(2**63)) is None  # MAX_INT + 1
        True
    """
    if not is_valid_float(value) or not value.is_integer():
        return None

    result = int(value)
    if result < MIN_INT or result > MAX_INT:
        return None
    return result


# =============================================================================
# EPSILON-СРАВНЕНИЯ FLOAT
# =============================================================================


def approx_equal(
    a: float,
    b: float,
    rel_tol: float = DEFAULT_RELATIVE_TOLERANCE,
    abs_tol: float = DEFAULT_ABSOLUTE_TOLERANCE,
) -> bool:
    """
    Сравнение float с учётом машинной точности.

    Реализация Python's math.isclose с настраиваемыми толерантностями.

    Алгоритм:
        abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)

    Для сравнения только по абсолютной разнице: rel_tol=0.0.
    Для сравнения только по относительной разнице: abs_tol=0.0.

    Args:
        a: Первое значение
        b: Второе значение
        rel_tol: Относительная толерантность (default: 1e-9)
        abs_tol: Абсолютная толерантность (default: float epsilon)

    Returns:
        True если значения близки с учётом толерантности

    Raises:
        ValueError: Если толерантность отрицательная

    Examples:
        >>> approx_equal(1.0, 1.0 + 1e-10)
        True
        >>> approx_equal(1.0, 1.1)
        False
        >>> approx_equal(1e10, 1e10 + 1.0)  # rel diff < rel_tol
        True
    """
    return math.isclose(a, b, rel_tol=rel_tol, abs_tol=abs_tol)


def approx_compare(
    a: float,
    b: float,
    rel_tol: float = DEFAULT_RELATIVE_TOLERANCE,
    abs_tol: float = DEFAULT_ABSOLUTE_TOLERANCE,
) -> int:
    """
    Сравнение двух float с учётом толерантности.

    Returns:
        -1 если a < b (с учётом tol)
         0 если a ≈ b (в пределах tol)
        +1 если a > b (с учётом tol)

    Examples:
        >>> approx_compare(1.0, 2.0)
        -1
        >>> approx_compare(2.0, 1.0)
        1
        >>> approx_compare(1.0, 1.0 + 1e-13)
        0
    """
    if approx_equal(a, b, rel_tol, abs_tol):
        return 0
    return sign(a - b)
