"""
Comparable — Mixin сравнений поверх одного примитива compare()

Конкретный тип реализует только:
- compare(other) -> -1 | 0 | 1 (бросает NumericError(INVALID_OPERAND) для несравнимых типов)
- approx_equal(other, rel_tol, abs_tol) -> bool (для ApproxComparable)

Всё остальное (is_less_than, операторы <, <=, >, >=, approx_compare)
выводится здесь.
"""

from abc import ABC, abstractmethod
from typing import Any

from src.numerics.errors import ErrorKind, NumericError
from src.numerics.math.numerical_safeguards import (
    DEFAULT_ABSOLUTE_TOLERANCE,
    DEFAULT_RELATIVE_TOLERANCE,
)


class Comparable(ABC):
    """Полный порядок, выведенный из compare()."""

    __slots__ = ()

    @abstractmethod
    def compare(self, other: Any) -> int:
        """Сравнение: -1 если self < other, 0 если равны, 1 если self > other."""

    def equal(self, other: Any) -> bool:
        """
        Проверка равенства без исключений.

        Несравнимый тип → False (а не ошибка), поэтому equal — тотальная функция.
        """
        try:
            return self.compare(other) == 0
        except NumericError as e:
            if e.kind is ErrorKind.INVALID_OPERAND:
                return False
            raise

    def is_less_than(self, other: Any) -> bool:
        return self.compare(other) < 0

    def is_less_than_or_equal(self, other: Any) -> bool:
        return self.compare(other) <= 0

    def is_greater_than(self, other: Any) -> bool:
        return self.compare(other) > 0

    def is_greater_than_or_equal(self, other: Any) -> bool:
        return self.compare(other) >= 0

    # -------- Python rich comparisons --------

    def _compare_or_not_implemented(self, other: Any):
        try:
            return self.compare(other)
        except NumericError as e:
            if e.kind is ErrorKind.INVALID_OPERAND:
                return NotImplemented
            raise

    def __lt__(self, other: Any):
        result = self._compare_or_not_implemented(other)
        return result if result is NotImplemented else result < 0

    def __le__(self, other: Any):
        result = self._compare_or_not_implemented(other)
        return result if result is NotImplemented else result <= 0

    def __gt__(self, other: Any):
        result = self._compare_or_not_implemented(other)
        return result if result is NotImplemented else result > 0

    def __ge__(self, other: Any):
        result = self._compare_or_not_implemented(other)
        return result if result is NotImplemented else result >= 0


class ApproxComparable(Comparable):
    """Comparable с приближённым сравнением в пределах толерантности."""

    __slots__ = ()

    @abstractmethod
    def approx_equal(
        self,
        other: Any,
        rel_tol: float = DEFAULT_RELATIVE_TOLERANCE,
        abs_tol: float = DEFAULT_ABSOLUTE_TOLERANCE,
    ) -> bool:
        """Приближённое равенство; несравнимый тип → False."""

    def approx_compare(
        self,
        other: Any,
        rel_tol: float = DEFAULT_RELATIVE_TOLERANCE,
        abs_tol: float = DEFAULT_ABSOLUTE_TOLERANCE,
    ) -> int:
        """
        Сравнение с толерантностью.

        Returns:
            0 если значения приближённо равны, иначе compare(other)

        Raises:
            NumericError: INVALID_OPERAND для несравнимого типа
        """
        if self.approx_equal(other, rel_tol, abs_tol):
            return 0
        return self.compare(other)
