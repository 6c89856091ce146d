"""
Angle — Угол в радианах с конверсией градусов

Immutable value object для фазы комплексного числа и полярной формы.
Единственный допустимый способ конверсии градусы ↔ радианы в пакете.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Главное значение (principal value) всегда в (-π, π]
2. -π нормализуется в +π (нижняя граница исключена)
3. Углы вне (-π, π], чей остаток fmod отличается от ±π не более чем на
   PHASE_WRAP_TOLERANCE, приводятся к π (погрешность fmod на больших углах)
"""

import math
from dataclasses import dataclass
from typing import Final, Union

# =============================================================================
# КОНСТАНТЫ
# =============================================================================

# Полный оборот в радианах (τ = 2π)
TAU: Final[float] = 2.0 * math.pi

# Допуск привязки к ±π при нормализации угла
# fmod(3π, 2π) даёт π + 1 ulp; без допуска такой угол ушёл бы в -π
PHASE_WRAP_TOLERANCE: Final[float] = 1e-14


# =============================================================================
# НОРМАЛИЗАЦИЯ
# =============================================================================


def wrap_radians(radians: float) -> float:
    """
    Приведение угла к главному значению в (-π, π].

    Угол, уже лежащий в (-π, π], возвращается без изменений: привязка
    к π по PHASE_WRAP_TOLERANCE применяется только к остатку fmod.

    Args:
        radians: Угол в радианах (любой конечный)

    Returns:
        Эквивалентный угол в (-π, π]

    Examples:
        >>> wrap_radians(0.5)
        0.5
        >>> wrap_radians(-math.pi) == math.pi
        True
        >>> wrap_radians(-math.pi + 1e-15) < 0
        True
        >>> abs(wrap_radians(3 * math.pi) - math.pi) < 1e-12
        True
    """
    if -math.pi < radians <= math.pi:
        return radians
    if radians == -math.pi:
        return math.pi

    result = math.fmod(radians, TAU)

    if result > math.pi + PHASE_WRAP_TOLERANCE:
        result -= TAU
    elif result <= -math.pi + PHASE_WRAP_TOLERANCE:
        result += TAU

    # Остаток погрешности около +π прижимаем к π
    if result > math.pi:
        result = math.pi

    return result


# =============================================================================
# ANGLE MODEL
# =============================================================================


@dataclass(frozen=True)
class Angle:
    """
    Угол, хранимый в радианах.

    Immutable (frozen=True): все преобразования создают новый экземпляр.
    """

    radians: float

    @classmethod
    def from_degrees(cls, degrees: float) -> "Angle":
        """Создание угла из градусов."""
        return cls(math.radians(degrees))

    @classmethod
    def from_radians(cls, radians: float) -> "Angle":
        return cls(float(radians))

    @property
    def degrees(self) -> float:
        return math.degrees(self.radians)

    def wrap(self) -> "Angle":
        """Главное значение угла в (-π, π]."""
        return Angle(wrap_radians(self.radians))

    def __float__(self) -> float:
        return float(self.radians)


AngleLike = Union[float, int, Angle]


def to_radians(value: AngleLike) -> float:
    """
    Приведение угла (float радианы или Angle) к float радианам.

    Args:
        value: Угол как число радиан или Angle

    Returns:
        Угол в радианах
    """
    if isinstance(value, Angle):
        return value.radians
    return float(value)
