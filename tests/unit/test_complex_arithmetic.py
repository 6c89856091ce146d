"""
Тесты Complex: конструирование, полярная форма, арифметика

Проверяет:
1. Конструктор и приведение к float, INVALID_OPERAND для неверных типов
2. from_polar, ленивые magnitude/phase, нормализацию phase в (-π, π]
3. Мнимую единицу Complex.i()
4. add/sub/mul/div/inv/conj/neg/sqr/cube и операторы Python
"""

import math

import pytest

from src.numerics.domain.complex_number import Complex
from src.numerics.errors import ErrorKind, NumericError
from src.numerics.math.angle import Angle


# =============================================================================
# ТЕСТЫ КОНСТРУИРОВАНИЯ
# =============================================================================


class TestConstruction:
    """Тесты конструктора Complex"""

    def test_defaults_to_zero(self) -> None:
        z = Complex()
        assert z.to_tuple() == (0.0, 0.0)

    def test_components_are_floats(self) -> None:
        z = Complex(3, 4)
        assert isinstance(z.real, float)
        assert isinstance(z.imaginary, float)

    @pytest.mark.parametrize("real, imaginary", [("1", 0), (True, 0), (0, None), (1j, 0)])
    def test_invalid_component_type(self, real, imaginary) -> None:
        with pytest.raises(NumericError) as exc_info:
            Complex(real, imaginary)
        assert exc_info.value.kind is ErrorKind.INVALID_OPERAND

    def test_is_immutable(self) -> None:
        z = Complex(1, 2)
        with pytest.raises(AttributeError):
            z.real = 5.0  # type: ignore[misc]

    def test_imaginary_unit_is_singleton(self) -> None:
        assert Complex.i() is Complex.i()
        assert Complex.i().to_tuple() == (0.0, 1.0)


# =============================================================================
# ТЕСТЫ ПОЛЯРНОЙ ФОРМЫ
# =============================================================================


class TestPolarForm:
    """Тесты magnitude/phase/from_polar"""

    def test_magnitude(self) -> None:
        assert Complex(3, 4).magnitude == 5.0
        assert abs(Complex(-3, -4)) == 5.0

    def test_magnitude_is_memoized(self) -> None:
        z = Complex(3, 4)
        assert z._magnitude is None
        first = z.magnitude
        assert z._magnitude == first
        assert z.magnitude is first

    def test_phase(self) -> None:
        assert Complex(1, 0).phase == 0.0
        assert Complex(0, 1).phase == math.pi / 2
        assert Complex(0, -1).phase == -math.pi / 2
        assert Complex(1, 1).phase == pytest.approx(math.pi / 4)

    def test_negative_real_axis_phase_is_plus_pi(self) -> None:
        """-π исключено: (-1, -0.0) тоже имеет phase = +π"""
        assert Complex(-1, 0).phase == math.pi
        assert Complex(-1, -0.0).phase == math.pi

    def test_phase_just_below_negative_real_axis(self) -> None:
        """Точка под отрицательной осью имеет phase около -π, а не +π"""
        z = Complex(-1.0, -1e-15)
        assert z.phase == math.atan2(-1e-15, -1.0)
        assert z.phase < 0

    def test_conjugate_negates_phase_near_cut(self) -> None:
        z = Complex(-1e15, 1)
        assert z.conj().phase == -z.phase

    def test_from_polar_keeps_phase_inside_range(self) -> None:
        radians = -math.pi + 1e-15
        z = Complex.from_polar(1, radians)
        assert z.phase == radians
        assert z.imaginary < 0

    def test_from_polar(self) -> None:
        z = Complex.from_polar(2, math.pi / 2)
        assert z.real == pytest.approx(0.0, abs=1e-15)
        assert z.imaginary == pytest.approx(2.0)
        assert z.magnitude == 2.0
        assert z.phase == math.pi / 2

    def test_from_polar_with_angle(self) -> None:
        z = Complex.from_polar(1, Angle.from_degrees(90))
        assert z.approx_equal(Complex(0, 1), abs_tol=1e-12)

    def test_from_polar_wraps_large_phase(self) -> None:
        """fromPolar(1, 3π).phase ≈ π"""
        z = Complex.from_polar(1, 3 * math.pi)
        assert z.phase == pytest.approx(math.pi, abs=1e-12)
        assert -math.pi < z.phase <= math.pi
        assert z.approx_equal(Complex(-1, 0), abs_tol=1e-12)

    @pytest.mark.parametrize(
        "radians, expected",
        [(10.5 * math.pi, 0.5 * math.pi), (-11.25 * math.pi, 0.75 * math.pi), (-math.pi, math.pi)],
    )
    def test_from_polar_phase_normalization(self, radians, expected) -> None:
        assert Complex.from_polar(1, radians).phase == pytest.approx(expected, abs=1e-12)

    def test_from_polar_270_degrees(self) -> None:
        assert Complex.from_polar(1, Angle.from_degrees(270)).phase == pytest.approx(-math.pi / 2)

    def test_negative_magnitude_is_domain_error(self) -> None:
        with pytest.raises(NumericError) as exc_info:
            Complex.from_polar(-1, 0)
        assert exc_info.value.kind is ErrorKind.DOMAIN

    def test_non_finite_phase_is_domain_error(self) -> None:
        with pytest.raises(NumericError) as exc_info:
            Complex.from_polar(1, math.nan)
        assert exc_info.value.kind is ErrorKind.DOMAIN


# =============================================================================
# ТЕСТЫ АРИФМЕТИКИ
# =============================================================================


class TestArithmetic:
    """Тесты add/sub/mul/div"""

    def test_add(self) -> None:
        assert Complex(1, 2).add(Complex(3, 4)) == Complex(4, 6)

    def test_sub(self) -> None:
        assert Complex(1, 2).sub(Complex(3, 4)) == Complex(-2, -2)

    def test_mul(self) -> None:
        """(3 + 4i)(1 + 2i) = -5 + 10i"""
        result = Complex(3, 4).mul(Complex(1, 2))
        assert result.real == -5.0
        assert result.imaginary == 10.0

    def test_div(self) -> None:
        assert Complex(-5, 10).div(Complex(1, 2)) == Complex(3, 4)

    def test_div_by_zero_is_domain_error(self) -> None:
        with pytest.raises(NumericError, match="divide by zero") as exc_info:
            Complex(1, 1).div(Complex(0, 0))
        assert exc_info.value.kind is ErrorKind.DOMAIN

    def test_mixed_operands(self) -> None:
        assert Complex(1, 2).add(1) == Complex(2, 2)
        assert Complex(1, 2).mul(2.0) == Complex(2, 4)
        assert Complex(1, 2).sub(1j) == Complex(1, 1)
        assert Complex(1, 2).add("3+4i") == Complex(4, 6)


class TestDivisionRange:
    """Деление на краях диапазона float: c² + d² не вычисляется явно"""

    def test_inv_of_tiny_value(self) -> None:
        result = Complex(1e-200, 0).inv()
        assert result.real == pytest.approx(1e200)
        assert result.imaginary == 0.0

    def test_div_by_tiny_value(self) -> None:
        result = Complex(1).div(Complex(1e-170, 1e-170))
        expected = complex(1) / complex(1e-170, 1e-170)
        assert result.real == pytest.approx(expected.real)
        assert result.imaginary == pytest.approx(expected.imag)

    def test_inv_of_huge_value(self) -> None:
        result = Complex(1e200, 1e200).inv()
        assert result.real == pytest.approx(5e-201)
        assert result.imaginary == pytest.approx(-5e-201)

    def test_huge_over_huge(self) -> None:
        assert Complex(1e300, 1e300).div(Complex(1e300, 1e300)) == Complex(1, 0)

    def test_tiny_divisor_on_imaginary_axis(self) -> None:
        result = Complex(0, 1).div(Complex(0, 1e-200))
        assert result.real == pytest.approx(1e200)
        assert result.imaginary == 0.0


class TestUnaryOperations:
    """Тесты inv/conj/neg/sqr/cube"""

    def test_inv(self) -> None:
        assert Complex(0, 2).inv() == Complex(0, -0.5)
        assert Complex(3, 4).inv().approx_equal(Complex(0.12, -0.16))

    def test_inv_of_zero_is_domain_error(self) -> None:
        with pytest.raises(NumericError) as exc_info:
            Complex().inv()
        assert exc_info.value.kind is ErrorKind.DOMAIN

    def test_conj(self) -> None:
        assert Complex(3, 4).conj() == Complex(3, -4)

    def test_neg(self) -> None:
        assert Complex(3, -4).neg() == Complex(-3, 4)

    def test_sqr(self) -> None:
        assert Complex(3, 4).sqr() == Complex(-7, 24)

    def test_cube(self) -> None:
        """(1 + i)³ = -2 + 2i"""
        assert Complex(1, 1).cube() == Complex(-2, 2)
        assert Complex(2, 3).cube() == Complex(2, 3).mul(Complex(2, 3)).mul(Complex(2, 3))


class TestOperators:
    """Тесты операторов Python"""

    def test_binary_operators(self) -> None:
        a, b = Complex(1, 2), Complex(3, 4)
        assert a + b == Complex(4, 6)
        assert a - b == Complex(-2, -2)
        assert a * b == Complex(-5, 10)
        assert (a * b) / b == a

    def test_reflected_operators(self) -> None:
        assert 1 + Complex(1, 1) == Complex(2, 1)
        assert 2 * Complex(1, 1) == Complex(2, 2)
        assert 1j + Complex(1, 1) == Complex(1, 2)
        assert 1 - Complex(1, 1) == Complex(0, -1)
        assert 1 / Complex(0, 2) == Complex(0, -0.5)

    def test_power_operators(self) -> None:
        assert Complex(0, 1) ** 2 == Complex(-1, 0)
        assert (2 ** Complex(3)).approx_equal(8)

    def test_unary_operators(self) -> None:
        assert -Complex(1, -1) == Complex(-1, 1)
        assert +Complex(1, -1) == Complex(1, -1)

    def test_builtin_complex(self) -> None:
        assert complex(Complex(1, 2)) == 1 + 2j

    def test_unsupported_operand_raises_type_error(self) -> None:
        with pytest.raises(TypeError):
            Complex(1, 1) + "x"  # type: ignore[operator]

    def test_bool(self) -> None:
        assert not Complex()
        assert Complex(0, 1)
