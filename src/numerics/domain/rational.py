"""
Rational — Точная дробь num/den над 64-bit integers

Immutable value object. Значение всегда хранится в канонической форме:
- 0 представляется как 0/1
- знаменатель всегда положительный (знак хранится в числителе)
- дробь сокращена (9/12 → 3/4)

Допустимый диапазон |значения|: [1/MAX_INT, MAX_INT].
Ни числитель, ни знаменатель не могут быть MIN_INT: -MIN_INT не представим,
и поддержка этого значения усложнила бы neg/inv/sub/simplify.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. den > 0, gcd(|num|, den) == 1 (или num == 0 ∧ den == 1)
2. num != MIN_INT, den != MIN_INT
3. Арифметика через checked integers: переполнение → NumericError(OVERFLOW)
4. Если точное целочисленное сокращение невозможно → continued fraction из float
5. compare при переполнении cross-multiplication сравнивает float-эквиваленты:
   две различные дроби с |значением| >= 2**53 могут оказаться "равными".
   Это известная неточность, а не ошибка.
6. == точен и согласован с hash: float сравнивается по своему двоичному
   значению, поэтому Rational(1, 3) != 1/3, хотя equal(1/3) истинно.
"""

import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Dict, Tuple, Union

from src.numerics.contracts import validate_rational_contract
from src.numerics.domain.comparable import ApproxComparable
from src.numerics.domain.parsing import parse_rational_parts
from src.numerics.domain.payloads import RationalPayload
from src.numerics.errors import (
    ErrorKind,
    NumericError,
    domain_error,
    invalid_operand,
    range_error,
)
from src.numerics.math import checked_integers
from src.numerics.math.checked_integers import MAX_INT, MIN_INT
from src.numerics.math.numerical_safeguards import (
    DEFAULT_ABSOLUTE_TOLERANCE,
    DEFAULT_RELATIVE_TOLERANCE,
    approx_equal,
    is_valid_float,
    try_convert_to_int,
)

logger = logging.getLogger(__name__)

RationalLike = Union[int, float, str, "Rational"]


# =============================================================================
# КАНОНИЧЕСКАЯ ФОРМА
# =============================================================================


def simplify(num: int, den: int) -> Tuple[int, int]:
    """
    Приведение дроби к канонической форме.

    Args:
        num: Числитель
        den: Знаменатель (!= 0)

    Returns:
        (num, den) сокращённые, den > 0

    Raises:
        NumericError: RANGE если числитель или знаменатель равен MIN_INT
            или вне 64-bit диапазона

    Examples:
        >>> simplify(6, 8)
        (3, 4)
        >>> simplify(3, -4)
        (-3, 4)
        >>> simplify(0, -5)
        (0, 1)
    """
    if not checked_integers.is_in_range(num) or not checked_integers.is_in_range(den):
        raise range_error("Rational.simplify", "operand is outside the 64-bit integer range")

    if num == 0:
        return 0, 1

    if num == den:
        return 1, 1

    if num == -den:
        return -1, 1

    # Бросает RANGE для MIN_INT
    gcd = checked_integers.gcd(num, den)

    if gcd > 1:
        num //= gcd
        den //= gcd

    return (-num, -den) if den < 0 else (num, den)


def float_to_ratio(value: float) -> Tuple[int, int]:
    """
    Конверсия float → (num, den) через continued fractions.

    Находит простейшую дробь, равную значению (или максимально близкую).
    Если точное совпадение не найдено до переполнения, возвращается лучшая
    найденная аппроксимация со знаменателем <= MAX_INT: это полезнее
    исключения и ограничивает время работы.

    Алгоритм:
        convergents (h0, h1) = (1, 0), (k0, k1) = (0, 1)
        a = int(x); h = a*h0 + h1; k = a*k0 + k1
        стоп: переполнение следующего convergent, err == 0, остаток == 0

    Args:
        value: Конечный float

    Returns:
        (num, den) в канонической форме

    Raises:
        NumericError: DOMAIN если value NaN/Inf
        NumericError: RANGE если |value| вне [1/MAX_INT, MAX_INT]

    Examples:
        >>> float_to_ratio(0.5)
        (1, 2)
        >>> float_to_ratio(-0.75)
        (-3, 4)
        >>> float_to_ratio(1 / 3)
        (1, 3)
    """
    operation = "Rational.float_to_ratio"

    if not is_valid_float(value):
        raise domain_error(operation, "Cannot convert ±∞ or NaN to a rational number.")

    # Целое значение в диапазоне: continued fraction не нужен
    int_value = try_convert_to_int(value)
    if int_value is not None and int_value > MIN_INT:
        return int_value, 1

    value_sign = -1 if value < 0 else 1
    abs_value = abs(value)

    if abs_value < 1 / MAX_INT or abs_value > MAX_INT:
        raise range_error(
            operation, "The value is outside the valid range for representation as a rational number."
        )

    # Convergents
    h0, h1 = 1, 0
    k0, k1 = 0, 1

    # Лучшая аппроксимация; стартуем с ближайшего целого (round half away from zero)
    h_best = math.floor(abs_value + 0.5)
    k_best = 1
    min_err = abs(h_best - abs_value)

    x = abs_value
    while True:
        a = int(x)

        h_new = a * h0 + h1
        k_new = a * k0 + k1

        # Следующий convergent не представим: возвращаем лучший найденный
        if h_new > MAX_INT or k_new > MAX_INT:
            return value_sign * h_best, k_best

        err = abs(h_new / k_new - abs_value)
        if err == 0.0:
            return value_sign * h_new, k_new

        if err < min_err:
            h_best, k_best = h_new, k_new
            min_err = err

        h1, h0 = h0, h_new
        k1, k0 = k0, k_new

        remainder = x - a
        if remainder == 0.0:
            return value_sign * h0, k0

        x = 1.0 / remainder


# =============================================================================
# RATIONAL MODEL
# =============================================================================


@dataclass(frozen=True, eq=False, init=False, repr=False)
class Rational(ApproxComparable):
    """
    Точная рациональная дробь.

    Immutable (frozen=True): каждая арифметическая операция возвращает
    новый канонический экземпляр.
    """

    num: int
    den: int

    def __init__(self, num: Union[int, float] = 0, den: Union[int, float] = 1):
        """
        Args:
            num: Числитель (int или float), default 0
            den: Знаменатель (int или float), default 1

        Raises:
            NumericError: DOMAIN если знаменатель равен нулю
            NumericError: DOMAIN если аргумент NaN/Inf
            NumericError: RANGE если значение вне допустимого диапазона
            NumericError: INVALID_OPERAND если аргумент не int/float
        """
        operation = "Rational.__init__"
        for arg in (num, den):
            if isinstance(arg, bool) or not isinstance(arg, (int, float)):
                raise invalid_operand(operation, f"expected int or float, got {type(arg).__name__}")

        if den == 0:
            raise domain_error(operation, "The denominator cannot be zero.")

        for arg in (num, den):
            if isinstance(arg, float) and not is_valid_float(arg):
                raise domain_error(operation, "Cannot convert an infinity or NaN to a rational number.")

        # Float, равный целому, делаем int: это позволяет simplify() вместо float_to_ratio()
        if isinstance(num, float):
            int_num = try_convert_to_int(num)
            if int_num is not None:
                num = int_num
        if isinstance(den, float):
            int_den = try_convert_to_int(den)
            if int_den is not None:
                den = int_den

        convert_float = True
        if isinstance(num, int) and isinstance(den, int):
            try:
                num2, den2 = simplify(num, den)
                convert_float = False
            except NumericError as e:
                if e.kind is not ErrorKind.RANGE:
                    raise
                logger.debug("Rational(%r, %r) out of integer range, using continued fraction", num, den)

        if convert_float:
            try:
                quotient = num / den
            except OverflowError:
                raise range_error(
                    operation, "The value is outside the valid range for representation as a rational number."
                )
            num2, den2 = float_to_ratio(quotient)

        object.__setattr__(self, "num", num2)
        object.__setattr__(self, "den", den2)

    # -------- Factory methods --------

    @classmethod
    def parse(cls, text: str) -> "Rational":
        """
        Разбор строки: "123", "-4.5", "3/4", " 5 / 6 ".

        Raises:
            NumericError: DOMAIN если строка не распознана
            NumericError: RANGE если значение вне допустимого диапазона
        """
        parts = parse_rational_parts(text)
        if isinstance(parts, tuple):
            return cls(*parts)
        return cls(parts)

    @classmethod
    def to_rational(cls, value: RationalLike) -> "Rational":
        """
        Приведение числа или строки к Rational (Rational возвращается как есть).

        Raises:
            NumericError: DOMAIN/RANGE/INVALID_OPERAND как у конструктора и parse
        """
        if isinstance(value, Rational):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        return cls(value)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rational":
        """
        Создание из контракта {"num": int, "den": int}.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме rational
        """
        validate_rational_contract(data)
        return cls(data["num"], data["den"])

    @classmethod
    def from_json(cls, text: str) -> "Rational":
        payload = RationalPayload.model_validate_json(text)
        return cls(payload.num, payload.den)

    float_to_ratio = staticmethod(float_to_ratio)

    # -------- Conversion --------

    def to_float(self) -> float:
        return self.num / self.den

    def to_int(self) -> int:
        """Ближайшее целое в сторону нуля."""
        q = abs(self.num) // self.den
        return -q if self.num < 0 else q

    def to_dict(self) -> Dict[str, int]:
        return {"num": self.num, "den": self.den}

    def to_json(self) -> str:
        return RationalPayload(num=self.num, den=self.den).model_dump_json()

    def is_integer(self) -> bool:
        return self.den == 1

    def __float__(self) -> float:
        return self.to_float()

    def __int__(self) -> int:
        return self.to_int()

    def __str__(self) -> str:
        return str(self.num) if self.den == 1 else f"{self.num}/{self.den}"

    def __repr__(self) -> str:
        return f"Rational({self.num}, {self.den})"

    def __hash__(self) -> int:
        return hash(Fraction(self.num, self.den))

    def __bool__(self) -> bool:
        return self.num != 0

    # -------- Comparison --------

    def compare(self, other: Any) -> int:
        """
        Сравнение с int, float или Rational.

        Оптимизации:
        1. Равные знаменатели → сравнение числителей
        2. Cross-multiplication a*d vs b*c с контролем переполнения
        3. При переполнении → сравнение float-эквивалентов (см. инвариант 5)

        int/float, не приводимые к Rational без float_to_ratio, сравниваются как float.

        Returns:
            -1, 0 или 1

        Raises:
            NumericError: INVALID_OPERAND для несравнимого типа или NaN
        """
        operation = "Rational.compare"
        if isinstance(other, bool) or not isinstance(other, (int, float, Rational)):
            raise invalid_operand(
                operation, "Can only compare Rational numbers with values of type int, float, or Rational."
            )

        if isinstance(other, float):
            if math.isnan(other):
                raise invalid_operand(operation, "Cannot compare with NaN.")
            int_other = try_convert_to_int(other)
            if int_other is not None:
                other = int_other

        if isinstance(other, int) and MIN_INT < other <= MAX_INT:
            other = Rational(other)

        if not isinstance(other, Rational):
            left, right = self.to_float(), other
        elif self.den == other.den:
            left, right = self.num, other.num
        else:
            try:
                left = checked_integers.mul(self.num, other.den)
                right = checked_integers.mul(self.den, other.num)
            except NumericError as e:
                if e.kind is not ErrorKind.OVERFLOW:
                    raise
                logger.debug("Rational.compare cross-multiplication overflow, comparing as floats")
                left, right = self.to_float(), other.to_float()

        return (left > right) - (left < right)

    def approx_equal(
        self,
        other: Any,
        rel_tol: float = DEFAULT_RELATIVE_TOLERANCE,
        abs_tol: float = DEFAULT_ABSOLUTE_TOLERANCE,
    ) -> bool:
        """
        Приближённое равенство (сравнение float-эквивалентов).

        Алгоритм: abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)
        Несравнимый тип → False (как у equal()).
        """
        if isinstance(other, Rational):
            other = other.to_float()
        elif isinstance(other, int) and not isinstance(other, bool):
            other = float(other)

        if not isinstance(other, float):
            return False

        return approx_equal(self.to_float(), other, rel_tol, abs_tol)

    def __eq__(self, other: Any):
        """
        Точное равенство для протокола Python (согласовано с __hash__).

        В отличие от equal(), float сравнивается по точному значению:
        Rational(1, 3).equal(1/3) истинно, Rational(1, 3) == 1/3 ложно.
        """
        if isinstance(other, Rational):
            return self.num == other.num and self.den == other.den
        if isinstance(other, bool) or not isinstance(other, (int, float)):
            return NotImplemented
        return Fraction(self.num, self.den) == other

    def __ne__(self, other: Any):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    # -------- Arithmetic --------

    def neg(self) -> "Rational":
        return Rational(-self.num, self.den)

    def abs(self) -> "Rational":
        return Rational(abs(self.num), self.den)

    def add(self, other: RationalLike) -> "Rational":
        """
        Сумма: (a/b) + (c/d) = (ad + bc) / (bd)

        Raises:
            NumericError: OVERFLOW если результат переполняет integer
        """
        other = Rational.to_rational(other)
        f = checked_integers.mul(self.num, other.den)
        g = checked_integers.mul(self.den, other.num)
        h = checked_integers.add(f, g)
        k = checked_integers.mul(self.den, other.den)
        return Rational(h, k)

    def sub(self, other: RationalLike) -> "Rational":
        return self.add(Rational.to_rational(other).neg())

    def inv(self) -> "Rational":
        """
        Обратное значение.

        Raises:
            NumericError: DOMAIN для нуля
        """
        if self.num == 0:
            raise domain_error("Rational.inv", "Cannot take reciprocal of zero.")

        # Знак остаётся в числителе
        if self.num > 0:
            return Rational(self.den, self.num)
        return Rational(-self.den, -self.num)

    def mul(self, other: RationalLike) -> "Rational":
        """
        Произведение с предварительным cross-cancellation.

        (a/b) * (c/d): сначала сокращаем gcd(a, d) и gcd(b, c),
        затем перемножаем уменьшенные члены — меньше риск переполнения.

        Raises:
            NumericError: OVERFLOW если результат переполняет integer
        """
        other = Rational.to_rational(other)

        gcd1 = checked_integers.gcd(self.num, other.den)
        gcd2 = checked_integers.gcd(self.den, other.num)

        a = self.num // gcd1
        b = self.den // gcd2
        c = other.num // gcd2
        d = other.den // gcd1

        h = checked_integers.mul(a, c)
        k = checked_integers.mul(b, d)
        return Rational(h, k)

    def div(self, other: RationalLike) -> "Rational":
        """
        Частное как умножение на обратное.

        Raises:
            NumericError: DOMAIN при делении на ноль
            NumericError: OVERFLOW если результат переполняет integer
        """
        other = Rational.to_rational(other)
        if other.num == 0:
            raise domain_error("Rational.div", "Cannot divide by zero.")
        return self.mul(other.inv())

    def pow(self, exponent: int) -> "Rational":
        """
        Целая степень.

        0**0 = 1 по соглашению; отрицательная степень → обратное значение.

        Raises:
            NumericError: DOMAIN если ноль в отрицательной степени
            NumericError: INVALID_OPERAND если показатель не int
            NumericError: OVERFLOW если результат переполняет integer
        """
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            raise invalid_operand("Rational.pow", "exponent must be an int")

        if exponent == 0:
            return Rational(1)

        if self.num == 0:
            if exponent < 0:
                raise domain_error("Rational.pow", "Cannot raise zero to a negative power.")
            return Rational(0)

        if exponent < 0:
            return self.inv().pow(-exponent)

        h = checked_integers.pow(self.num, exponent)
        k = checked_integers.pow(self.den, exponent)
        return Rational(h, k)

    def floor(self) -> int:
        return self.num // self.den

    def ceil(self) -> int:
        return -(-self.num // self.den)

    def round(self) -> int:
        """Ближайшее целое, половины округляются от нуля (half away from zero)."""
        q, r = divmod(abs(self.num), self.den)
        if r * 2 >= self.den:
            q += 1
        return -q if self.num < 0 else q

    # -------- Python numeric protocol --------

    def _coerce(self, other: Any):
        if isinstance(other, bool) or not isinstance(other, (int, float, Rational)):
            return None
        return Rational.to_rational(other)

    def __add__(self, other: Any):
        other = self._coerce(other)
        return NotImplemented if other is None else self.add(other)

    def __radd__(self, other: Any):
        other = self._coerce(other)
        return NotImplemented if other is None else other.add(self)

    def __sub__(self, other: Any):
        other = self._coerce(other)
        return NotImplemented if other is None else self.sub(other)

    def __rsub__(self, other: Any):
        other = self._coerce(other)
        return NotImplemented if other is None else other.sub(self)

    def __mul__(self, other: Any):
        other = self._coerce(other)
        return NotImplemented if other is None else self.mul(other)

    def __rmul__(self, other: Any):
        other = self._coerce(other)
        return NotImplemented if other is None else other.mul(self)

    def __truediv__(self, other: Any):
        other = self._coerce(other)
        return NotImplemented if other is None else self.div(other)

    def __rtruediv__(self, other: Any):
        other = self._coerce(other)
        return NotImplemented if other is None else other.div(self)

    def __pow__(self, exponent: Any):
        if isinstance(exponent, bool) or not isinstance(exponent, int):
            return NotImplemented
        return self.pow(exponent)

    def __neg__(self) -> "Rational":
        return self.neg()

    def __pos__(self) -> "Rational":
        return self

    def __abs__(self) -> "Rational":
        return self.abs()

    def __floor__(self) -> int:
        return self.floor()

    def __ceil__(self) -> int:
        return self.ceil()

    def __round__(self, ndigits=None):
        if ndigits is not None:
            return NotImplemented
        return self.round()
