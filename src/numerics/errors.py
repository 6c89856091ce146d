"""
NumericError — единая ошибка числовых типов

Все нарушения домена, диапазона и переполнения в Rational/Complex
сообщаются одним классом исключения с тегом ErrorKind.
Вызывающий код ветвится по `err.kind`, а не по иерархии классов.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Ошибка никогда не ретраится внутри движков
2. Операция либо возвращает новое каноническое значение, либо падает без side effects
3. "Мягкие" проверки равенства (equal, approx_equal) глушат только INVALID_OPERAND
"""

from enum import Enum


# =============================================================================
# ENUMS
# =============================================================================


class ErrorKind(str, Enum):
    """Тег вида числовой ошибки"""

    DOMAIN = "DOMAIN"  # нулевой знаменатель, ln(0), неверная степень корня, ...
    RANGE = "RANGE"  # значение вне представимого диапазона Rational
    OVERFLOW = "OVERFLOW"  # результат арифметики переполняет 64-bit integer
    INVALID_OPERAND = "INVALID_OPERAND"  # несравнимый/неподдерживаемый тип операнда


# =============================================================================
# EXCEPTIONS
# =============================================================================


class NumericError(ArithmeticError):
    """
    Числовая ошибка с тегом вида и именем операции.

    Attributes:
        kind: Вид ошибки (ErrorKind)
        operation: Имя операции, в которой возникла ошибка (например, 'Rational.div')
    """

    def __init__(self, kind: ErrorKind, operation: str, message: str):
        super().__init__(f"{operation}: {message}")
        self.kind = kind
        self.operation = operation
        self.message = message

    def __repr__(self) -> str:
        return f"NumericError({self.kind.value}, {self.operation!r}, {self.message!r})"


# =============================================================================
# CONSTRUCTORS
# =============================================================================


def domain_error(operation: str, message: str) -> NumericError:
    return NumericError(ErrorKind.DOMAIN, operation, message)


def range_error(operation: str, message: str) -> NumericError:
    return NumericError(ErrorKind.RANGE, operation, message)


def overflow_error(operation: str, message: str) -> NumericError:
    return NumericError(ErrorKind.OVERFLOW, operation, message)


def invalid_operand(operation: str, message: str) -> NumericError:
    return NumericError(ErrorKind.INVALID_OPERAND, operation, message)
