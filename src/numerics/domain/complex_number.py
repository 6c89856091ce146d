"""
Complex — Комплексное число в прямоугольной форме с ленивой полярной формой

Immutable value object: (real, imaginary) как float. Полярная форма
(magnitude, phase) вычисляется при первом обращении и мемоизируется.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. real/imaginary никогда не меняются после конструирования
2. Кэш magnitude/phase записывается не более одного раза и согласован с
   real/imaginary: magnitude = hypot(real, imaginary), phase = atan2(imaginary, real)
3. phase всегда в (-π, π]; -π нормализуется в +π
4. Многозначные функции (ln, pow, sqrt, обратные тригонометрические)
   возвращают главное значение (principal branch)
5. Гонка при мемоизации безопасна: повторное вычисление даёт тот же результат

Тригонометрия и гиперболические функции вычисляются через замкнутые формы:
    sin(x + iy)  = sin x · cosh y + i · cos x · sinh y
    cos(x + iy)  = cos x · cosh y − i · sin x · sinh y
    sinh(x + iy) = sinh x · cos y + i · cosh x · sin y
    cosh(x + iy) = cosh x · cos y + i · sinh x · sin y
Обратные функции через логарифмы:
    asin z  = −i · ln(iz + √(1 − z²))
    acos z  = −i · ln(z + i · √(1 − z²))
    atan z  = (i/2) · ln((i + z)/(i − z))
    asinh z = ln(z + √(z² + 1))
    acosh z = ln(z + √(z + 1) · √(z − 1))
    atanh z = ½ · ln((1 + z)/(1 − z))
"""

import math
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from src.numerics.contracts import validate_complex_contract
from src.numerics.domain.parsing import parse_complex_parts
from src.numerics.domain.payloads import ComplexPayload
from src.numerics.errors import domain_error, invalid_operand, overflow_error
from src.numerics.math.angle import TAU, AngleLike, to_radians, wrap_radians
from src.numerics.math.numerical_safeguards import (
    DEFAULT_ABSOLUTE_TOLERANCE,
    DEFAULT_RELATIVE_TOLERANCE,
    approx_equal,
    is_valid_float,
    try_convert_to_int,
)

ComplexLike = Union[int, float, complex, str, "Complex"]


def _real_math(func: Callable[[float], float], x: float, operation: str) -> float:
    """Вызов функции math с переводом OverflowError в NumericError(OVERFLOW)."""
    try:
        return func(x)
    except OverflowError:
        raise overflow_error(operation, f"result of {func.__name__}({x}) is too large")


def _format_component(value: float) -> str:
    int_value = try_convert_to_int(value)
    return str(int_value) if int_value is not None else str(value)


def _divide(a: float, b: float, c: float, d: float) -> Tuple[float, float]:
    """
    (a + bi)/(c + di) по алгоритму Smith.

    Масштабирование на больший из |c|, |d| вместо c² + d², который
    переполняется или обращается в ноль на краях диапазона float.
    """
    if abs(c) >= abs(d):
        ratio = d / c
        scale = c + d * ratio
        return (a + b * ratio) / scale, (b - a * ratio) / scale
    ratio = c / d
    scale = c * ratio + d
    return (a * ratio + b) / scale, (b * ratio - a) / scale


# =============================================================================
# COMPLEX MODEL
# =============================================================================


@dataclass(frozen=True, eq=False, repr=False)
class Complex:
    """
    Комплексное число real + imaginary·i.

    Immutable (frozen=True). Поля _magnitude/_phase являются внутренним
    кэшем и заполняются через object.__setattr__ ровно один раз.
    """

    real: float = 0.0
    imaginary: float = 0.0

    _magnitude: Optional[float] = field(default=None, init=False, repr=False)
    _phase: Optional[float] = field(default=None, init=False, repr=False)

    def __post_init__(self):
        for name in ("real", "imaginary"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise invalid_operand(
                    "Complex.__init__", f"{name} must be int or float, got {type(value).__name__}"
                )
            object.__setattr__(self, name, float(value))

    # -------- Factory methods --------

    @classmethod
    def from_polar(cls, magnitude: float, phase: AngleLike) -> "Complex":
        """
        Создание из полярной формы.

        Кэш magnitude/phase заполняется напрямую из аргументов (phase
        нормализуется в (-π, π]), без повторного вычисления hypot/atan2.

        Args:
            magnitude: Модуль (>= 0)
            phase: Угол как float радианы или Angle

        Returns:
            magnitude·(cos(phase) + i·sin(phase))

        Raises:
            NumericError: DOMAIN если magnitude < 0 или аргумент NaN/Inf

        Examples:
            >>> z = Complex.from_polar(2.0, 0.0)
            >>> (z.real, z.imaginary)
            (2.0, 0.0)
        """
        radians = to_radians(phase)
        if not is_valid_float(magnitude) or not is_valid_float(radians):
            raise domain_error("Complex.from_polar", "magnitude and phase must be finite")
        if magnitude < 0:
            raise domain_error("Complex.from_polar", "magnitude cannot be negative")

        radians = wrap_radians(radians)
        z = cls(magnitude * math.cos(radians), magnitude * math.sin(radians))
        object.__setattr__(z, "_magnitude", float(magnitude))
        object.__setattr__(z, "_phase", radians)
        return z

    @classmethod
    def i(cls) -> "Complex":
        """Мнимая единица (process-wide singleton, создаётся лениво)."""
        global _IMAGINARY_UNIT
        if _IMAGINARY_UNIT is None:
            _IMAGINARY_UNIT = cls(0.0, 1.0)
        return _IMAGINARY_UNIT

    @classmethod
    def parse(cls, text: str) -> "Complex":
        """
        Разбор строки: "5", "-2.5j", "3 + 4i", "4i+3", "1e5-2e-3J".

        Raises:
            NumericError: DOMAIN если строка не распознана
        """
        real, imaginary = parse_complex_parts(text)
        return cls(real, imaginary)

    @classmethod
    def to_complex(cls, value: ComplexLike) -> "Complex":
        """
        Приведение значения к Complex.

        Args:
            value: int, float, complex, str или Complex

        Raises:
            NumericError: INVALID_OPERAND для неподдерживаемого типа (включая bool)
            NumericError: DOMAIN если строка не распознана
        """
        if isinstance(value, Complex):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, complex):
            return cls(value.real, value.imag)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise invalid_operand(
                "Complex.to_complex", f"cannot convert {type(value).__name__} to Complex"
            )
        return cls(value)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Complex":
        """
        Создание из контракта {"real": number, "imaginary": number}.

        Raises:
            jsonschema.ValidationError: Если данные не соответствуют схеме complex
        """
        validate_complex_contract(data)
        return cls(data["real"], data["imaginary"])

    @classmethod
    def from_json(cls, text: str) -> "Complex":
        payload = ComplexPayload.model_validate_json(text)
        return cls(payload.real, payload.imaginary)

    # -------- Polar form --------

    @property
    def magnitude(self) -> float:
        """Модуль |z| (hypot, мемоизируется)."""
        if self._magnitude is None:
            object.__setattr__(self, "_magnitude", math.hypot(self.real, self.imaginary))
        return self._magnitude

    @property
    def phase(self) -> float:
        """Аргумент z в (-π, π] (atan2, мемоизируется)."""
        if self._phase is None:
            radians = math.atan2(self.imaginary, self.real)
            # atan2(-0.0, x < 0) даёт ровно -π
            if radians == -math.pi:
                radians = math.pi
            object.__setattr__(self, "_phase", radians)
        return self._phase

    # -------- Predicates & conversion --------

    def is_zero(self) -> bool:
        return self.real == 0.0 and self.imaginary == 0.0

    def is_real(self) -> bool:
        return self.imaginary == 0.0

    def to_tuple(self) -> Tuple[float, float]:
        return self.real, self.imaginary

    def to_dict(self) -> Dict[str, float]:
        return {"real": self.real, "imaginary": self.imaginary}

    def to_json(self) -> str:
        return ComplexPayload(real=self.real, imaginary=self.imaginary).model_dump_json()

    def __getitem__(self, index: int) -> float:
        """z[0] → real, z[1] → imaginary."""
        if index == 0:
            return self.real
        if index == 1:
            return self.imaginary
        raise IndexError(f"Complex index out of range: {index!r} (expected 0 or 1)")

    def __complex__(self) -> complex:
        return complex(self.real, self.imaginary)

    def __str__(self) -> str:
        """
        Текстовая форма: "5", "i", "-3.5i", "3 + 4i", "3 - i".

        Коэффициент 1 у мнимой части опускается.
        """
        if self.imaginary == 0.0:
            return _format_component(self.real)

        abs_imaginary = abs(self.imaginary)
        coefficient = "" if abs_imaginary == 1.0 else _format_component(abs_imaginary)

        if self.real == 0.0:
            sign = "-" if self.imaginary < 0 else ""
            return f"{sign}{coefficient}i"

        sign = "-" if self.imaginary < 0 else "+"
        return f"{_format_component(self.real)} {sign} {coefficient}i"

    def __repr__(self) -> str:
        return f"Complex({self.real!r}, {self.imaginary!r})"

    def __hash__(self) -> int:
        return hash(complex(self.real, self.imaginary))

    def __bool__(self) -> bool:
        return not self.is_zero()

    # -------- Equality --------

    def equal(self, other: Any) -> bool:
        """
        Точное покомпонентное равенство.

        Вещественное int/float равно z только если imaginary == 0.
        Несовместимый тип (включая bool) → False.
        """
        if isinstance(other, bool):
            return False
        if isinstance(other, Complex):
            return self.real == other.real and self.imaginary == other.imaginary
        if isinstance(other, complex):
            return self.real == other.real and self.imaginary == other.imag
        if isinstance(other, (int, float)):
            return self.imaginary == 0.0 and self.real == other
        return False

    def approx_equal(
        self,
        other: Any,
        rel_tol: float = DEFAULT_RELATIVE_TOLERANCE,
        abs_tol: float = DEFAULT_ABSOLUTE_TOLERANCE,
    ) -> bool:
        """
        Приближённое равенство: обе компоненты проходят правило толерантности.

        Алгоритм (для каждой компоненты):
            abs(a - b) <= max(rel_tol * max(abs(a), abs(b)), abs_tol)
        """
        if isinstance(other, bool) or not isinstance(other, (int, float, complex, Complex)):
            return False
        other = Complex.to_complex(other)
        return approx_equal(self.real, other.real, rel_tol, abs_tol) and approx_equal(
            self.imaginary, other.imaginary, rel_tol, abs_tol
        )

    def __eq__(self, other: Any):
        if isinstance(other, bool) or not isinstance(other, (int, float, complex, Complex)):
            return NotImplemented
        return self.equal(other)

    def __ne__(self, other: Any):
        result = self.__eq__(other)
        return result if result is NotImplemented else not result

    # =========================================================================
    # ARITHMETIC
    # =========================================================================

    def neg(self) -> "Complex":
        return Complex(-self.real, -self.imaginary)

    def conj(self) -> "Complex":
        return Complex(self.real, -self.imaginary)

    def add(self, other: ComplexLike) -> "Complex":
        other = Complex.to_complex(other)
        return Complex(self.real + other.real, self.imaginary + other.imaginary)

    def sub(self, other: ComplexLike) -> "Complex":
        other = Complex.to_complex(other)
        return Complex(self.real - other.real, self.imaginary - other.imaginary)

    def mul(self, other: ComplexLike) -> "Complex":
        """(a + bi)(c + di) = (ac − bd) + (ad + bc)i"""
        other = Complex.to_complex(other)
        a, b = self.real, self.imaginary
        c, d = other.real, other.imaginary
        return Complex(a * c - b * d, a * d + b * c)

    def div(self, other: ComplexLike) -> "Complex":
        """
        Частное (a + bi)/(c + di) = ((ac + bd) + (bc − ad)i)/(c² + d²),
        вычисляемое без явного c² + d² (см. _divide).

        Raises:
            NumericError: DOMAIN при делении на ноль
        """
        other = Complex.to_complex(other)
        if other.is_zero():
            raise domain_error("Complex.div", "Cannot divide by zero.")
        return Complex(*_divide(self.real, self.imaginary, other.real, other.imaginary))

    def inv(self) -> "Complex":
        """
        Обратное значение 1/z = conj(z)/|z|².

        Raises:
            NumericError: DOMAIN для нуля
        """
        if self.is_zero():
            raise domain_error("Complex.inv", "Cannot take reciprocal of zero.")
        return Complex(*_divide(1.0, 0.0, self.real, self.imaginary))

    def sqr(self) -> "Complex":
        a, b = self.real, self.imaginary
        return Complex(a * a - b * b, 2.0 * a * b)

    def cube(self) -> "Complex":
        a, b = self.real, self.imaginary
        return Complex(a * a * a - 3.0 * a * b * b, 3.0 * a * a * b - b * b * b)

    # =========================================================================
    # TRANSCENDENTAL
    # =========================================================================

    def exp(self) -> "Complex":
        """
        e^z = e^real · (cos(imaginary) + i·sin(imaginary))

        Raises:
            NumericError: OVERFLOW если e^real не представим как float
        """
        magnitude = _real_math(math.exp, self.real, "Complex.exp")
        return Complex.from_polar(magnitude, self.imaginary)

    def ln(self) -> "Complex":
        """
        Главное значение натурального логарифма: ln|z| + i·phase.

        Raises:
            NumericError: DOMAIN для нуля
        """
        if self.is_zero():
            raise domain_error("Complex.ln", "Logarithm of zero is undefined.")
        return Complex(math.log(self.magnitude), self.phase)

    def log(self, base: ComplexLike) -> "Complex":
        """
        Логарифм по произвольному основанию: ln(z)/ln(base).

        Raises:
            NumericError: DOMAIN если base равен 0 или 1, или z равен нулю
        """
        base = Complex.to_complex(base)
        if base.is_zero() or base.equal(1):
            raise domain_error("Complex.log", "Logarithm base cannot be 0 or 1.")
        return self.ln().div(base.ln())

    def pow(self, exponent: ComplexLike) -> "Complex":
        """
        Главное значение z^w.

        Специальные случаи:
        - w == 0 → 1 (включая 0^0)
        - 0^w для вещественного w > 0 → 0
        - 0^w для отрицательного или невещественного w → DOMAIN
        - целое w >= 0 → возведение в квадрат (exponentiation by squaring)
        - целое w < 0 → 1/z^(-w)
        - вещественное w → полярная форма |z|^w · e^(i·w·phase)
        - иначе exp(w · ln z)

        Raises:
            NumericError: DOMAIN для 0 в отрицательной/невещественной степени
            NumericError: OVERFLOW если модуль результата не представим

        Examples:
            >>> Complex(0, 1).pow(2)
            Complex(-1.0, 0.0)
        """
        w = Complex.to_complex(exponent)

        if w.is_zero():
            return Complex(1.0)

        if self.is_zero():
            if w.is_real() and w.real > 0:
                return Complex(0.0)
            raise domain_error("Complex.pow", "Zero cannot be raised to a negative or non-real power.")

        if isinstance(exponent, int) and not isinstance(exponent, bool):
            if exponent < 0:
                return self.pow(-exponent).inv()
            return self._pow_by_squaring(exponent)

        if w.is_real():
            try:
                magnitude = self.magnitude ** w.real
            except OverflowError:
                raise overflow_error("Complex.pow", "magnitude of the result is too large")
            return Complex.from_polar(magnitude, self.phase * w.real)

        return w.mul(self.ln()).exp()

    def _pow_by_squaring(self, exponent: int) -> "Complex":
        result = Complex(1.0)
        base = self
        while exponent:
            if exponent & 1:
                result = result.mul(base)
            exponent >>= 1
            if exponent:
                base = base.sqr()
        return result

    def sqrt(self) -> "Complex":
        """Главный квадратный корень (phase/2 в (-π/2, π/2])."""
        return self.pow(0.5)

    def cbrt(self) -> "Complex":
        """Главный кубический корень."""
        return self.pow(1.0 / 3.0)

    def roots(self, n: int) -> List["Complex"]:
        """
        Все n корней n-й степени.

        k-й корень: |z|^(1/n) · e^(i·(phase + 2πk)/n), k = 0..n−1.
        Первый элемент списка совпадает с главным значением.

        Args:
            n: Степень корня (> 0)

        Returns:
            Список из n значений; для нуля единственный корень [0]

        Raises:
            NumericError: DOMAIN если n <= 0
            NumericError: INVALID_OPERAND если n не int
        """
        if isinstance(n, bool) or not isinstance(n, int):
            raise invalid_operand("Complex.roots", "root degree must be an int")
        if n <= 0:
            raise domain_error("Complex.roots", "Root degree must be a positive integer.")

        if self.is_zero():
            return [Complex(0.0)]

        magnitude = self.magnitude ** (1.0 / n)
        phase = self.phase
        return [Complex.from_polar(magnitude, (phase + TAU * k) / n) for k in range(n)]

    # =========================================================================
    # TRIGONOMETRIC
    # =========================================================================

    def sin(self) -> "Complex":
        x, y = self.real, self.imaginary
        return Complex(
            math.sin(x) * _real_math(math.cosh, y, "Complex.sin"),
            math.cos(x) * _real_math(math.sinh, y, "Complex.sin"),
        )

    def cos(self) -> "Complex":
        x, y = self.real, self.imaginary
        return Complex(
            math.cos(x) * _real_math(math.cosh, y, "Complex.cos"),
            -math.sin(x) * _real_math(math.sinh, y, "Complex.cos"),
        )

    def tan(self) -> "Complex":
        return self.sin().div(self.cos())

    def sec(self) -> "Complex":
        return self.cos().inv()

    def csc(self) -> "Complex":
        return self.sin().inv()

    def cot(self) -> "Complex":
        return self.tan().inv()

    def asin(self) -> "Complex":
        # −i · ln(iz + √(1 − z²))
        i = Complex.i()
        root = Complex(1.0).sub(self.sqr()).sqrt()
        return i.neg().mul(i.mul(self).add(root).ln())

    def acos(self) -> "Complex":
        # −i · ln(z + i·√(1 − z²))
        i = Complex.i()
        root = Complex(1.0).sub(self.sqr()).sqrt()
        return i.neg().mul(self.add(i.mul(root)).ln())

    def atan(self) -> "Complex":
        """
        (i/2) · ln((i + z)/(i − z))

        Raises:
            NumericError: DOMAIN для z = ±i
        """
        i = Complex.i()
        ratio = i.add(self).div(i.sub(self))
        return Complex(0.0, 0.5).mul(ratio.ln())

    def asec(self) -> "Complex":
        return self.inv().acos()

    def acsc(self) -> "Complex":
        return self.inv().asin()

    def acot(self) -> "Complex":
        return self.inv().atan()

    # =========================================================================
    # HYPERBOLIC
    # =========================================================================

    def sinh(self) -> "Complex":
        x, y = self.real, self.imaginary
        return Complex(
            _real_math(math.sinh, x, "Complex.sinh") * math.cos(y),
            _real_math(math.cosh, x, "Complex.sinh") * math.sin(y),
        )

    def cosh(self) -> "Complex":
        x, y = self.real, self.imaginary
        return Complex(
            _real_math(math.cosh, x, "Complex.cosh") * math.cos(y),
            _real_math(math.sinh, x, "Complex.cosh") * math.sin(y),
        )

    def tanh(self) -> "Complex":
        return self.sinh().div(self.cosh())

    def sech(self) -> "Complex":
        return self.cosh().inv()

    def csch(self) -> "Complex":
        return self.sinh().inv()

    def coth(self) -> "Complex":
        return self.tanh().inv()

    def asinh(self) -> "Complex":
        # ln(z + √(z² + 1))
        return self.add(self.sqr().add(1.0).sqrt()).ln()

    def acosh(self) -> "Complex":
        # ln(z + √(z + 1)·√(z − 1))
        root = self.add(1.0).sqrt().mul(self.sub(1.0).sqrt())
        return self.add(root).ln()

    def atanh(self) -> "Complex":
        """
        ½ · ln((1 + z)/(1 − z))

        Raises:
            NumericError: DOMAIN для z = ±1
        """
        one = Complex(1.0)
        return one.add(self).div(one.sub(self)).ln().mul(0.5)

    def asech(self) -> "Complex":
        return self.inv().acosh()

    def acsch(self) -> "Complex":
        return self.inv().asinh()

    def acoth(self) -> "Complex":
        return self.inv().atanh()

    # -------- Python numeric protocol --------

    @staticmethod
    def _coerce(other: Any) -> Optional["Complex"]:
        if isinstance(other, bool) or not isinstance(other, (int, float, complex, Complex)):
            return None
        return Complex.to_complex(other)

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
        if self._coerce(exponent) is None:
            return NotImplemented
        return self.pow(exponent)

    def __rpow__(self, base: Any):
        base = self._coerce(base)
        return NotImplemented if base is None else base.pow(self)

    def __neg__(self) -> "Complex":
        return self.neg()

    def __pos__(self) -> "Complex":
        return self

    def __abs__(self) -> float:
        return self.magnitude


# Лениво создаваемая мнимая единица (см. Complex.i)
_IMAGINARY_UNIT: Optional[Complex] = None
