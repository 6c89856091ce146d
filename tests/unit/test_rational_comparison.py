"""
Тесты сравнения Rational

Проверяет:
1. compare → ровно -1/0/1 для Rational/int/float
2. INVALID_OPERAND для несравнимых типов и NaN
3. Fallback на float при переполнении cross-multiplication
4. equal/approx_equal/approx_compare и предикаты is_*
5. Операторы <, <=, >, >=, ==, hash
"""

import logging
import math

import pytest

from src.numerics.domain.rational import Rational
from src.numerics.errors import ErrorKind, NumericError
from src.numerics.math.checked_integers import MAX_INT


class TestCompare:
    """Тесты compare"""

    def test_rationals(self) -> None:
        assert Rational(1, 2).compare(Rational(1, 3)) == 1
        assert Rational(1, 3).compare(Rational(1, 2)) == -1
        assert Rational(2, 4).compare(Rational(1, 2)) == 0

    def test_same_denominator(self) -> None:
        assert Rational(3, 7).compare(Rational(5, 7)) == -1

    def test_with_int(self) -> None:
        assert Rational(1, 2).compare(1) == -1
        assert Rational(3).compare(3) == 0
        assert Rational(-1, 2).compare(-1) == 1

    def test_with_float(self) -> None:
        assert Rational(1, 2).compare(0.5) == 0
        assert Rational(1, 2).compare(0.25) == 1
        assert Rational(1, 3).compare(0.5) == -1
        assert Rational(4).compare(4.0) == 0

    def test_with_out_of_range_int(self) -> None:
        """int вне 64-bit диапазона сравнивается как float"""
        assert Rational(MAX_INT).compare(2**70) == -1
        assert Rational(1).compare(-(10**400)) == 1

    def test_result_is_exactly_unit(self) -> None:
        assert Rational(1000).compare(Rational(1, 1000)) == 1
        assert Rational(-1000).compare(Rational(1, 1000)) == -1

    def test_cross_multiplication_overflow_falls_back_to_float(self, caplog) -> None:
        caplog.set_level(logging.DEBUG, logger="src.numerics.domain.rational")
        assert Rational(MAX_INT, 2).compare(Rational(MAX_INT - 2, 3)) == 1
        assert "overflow" in caplog.text

    @pytest.mark.parametrize("other", ["1", None, True, [1], 1j])
    def test_unsupported_type_is_invalid_operand(self, other) -> None:
        with pytest.raises(NumericError) as exc_info:
            Rational(1).compare(other)
        assert exc_info.value.kind is ErrorKind.INVALID_OPERAND

    def test_nan_is_invalid_operand(self) -> None:
        with pytest.raises(NumericError) as exc_info:
            Rational(1).compare(math.nan)
        assert exc_info.value.kind is ErrorKind.INVALID_OPERAND


class TestEqual:
    """Тесты equal"""

    def test_equal_values(self) -> None:
        assert Rational(1, 2).equal(Rational(2, 4))
        assert Rational(1, 2).equal(0.5)
        assert Rational(5).equal(5)

    def test_unequal_values(self) -> None:
        assert not Rational(1, 2).equal(Rational(1, 3))

    def test_incompatible_type_is_false_not_error(self) -> None:
        assert Rational(1).equal("1") is False
        assert Rational(1).equal(True) is False
        assert Rational(1).equal(math.nan) is False

    def test_eq_operator(self) -> None:
        assert Rational(1, 2) == Rational(1, 2)
        assert Rational(1, 2) == 0.5
        assert 0.5 == Rational(1, 2)
        assert Rational(1, 2) != Rational(1, 3)
        assert Rational(1) != "1"


class TestPredicates:
    """Тесты is_less_than/is_greater_than и операторов порядка"""

    def test_predicates(self) -> None:
        a, b = Rational(1, 3), Rational(1, 2)
        assert a.is_less_than(b)
        assert a.is_less_than_or_equal(b)
        assert a.is_less_than_or_equal(Rational(2, 6))
        assert b.is_greater_than(a)
        assert b.is_greater_than_or_equal(a)
        assert b.is_greater_than_or_equal(0.5)

    def test_ordering_operators(self) -> None:
        assert Rational(1, 3) < Rational(1, 2)
        assert Rational(1, 2) <= 0.5
        assert Rational(3, 2) > 1
        assert Rational(3, 2) >= Rational(6, 4)
        assert 1 < Rational(3, 2)

    def test_sorting(self) -> None:
        values = [Rational(3, 4), Rational(-1, 2), Rational(1, 3), Rational(0)]
        assert sorted(values) == [Rational(-1, 2), Rational(0), Rational(1, 3), Rational(3, 4)]

    def test_ordering_unsupported_type_raises_type_error(self) -> None:
        with pytest.raises(TypeError):
            Rational(1) < "2"  # type: ignore[operator]


class TestApproxComparison:
    """Тесты approx_equal/approx_compare"""

    def test_approx_equal(self) -> None:
        assert Rational(1, 3).approx_equal(0.3333333333)
        assert not Rational(1, 3).approx_equal(0.33)
        assert Rational(1, 3).approx_equal(0.33, rel_tol=0.1)

    def test_approx_equal_with_rational_and_int(self) -> None:
        assert Rational(2, 2).approx_equal(1)
        assert Rational(1, 3).approx_equal(Rational(333333333333, 1000000000000), rel_tol=1e-9)

    def test_approx_equal_incompatible_type(self) -> None:
        assert Rational(1).approx_equal("1") is False
        assert Rational(1).approx_equal(True) is False

    def test_approx_compare(self) -> None:
        assert Rational(1, 3).approx_compare(0.3333333333) == 0
        assert Rational(1, 3).approx_compare(0.33) == 1
        assert Rational(1, 3).approx_compare(0.34) == -1


class TestHash:
    """Тесты hash"""

    def test_equal_values_have_equal_hashes(self) -> None:
        assert hash(Rational(2, 4)) == hash(Rational(1, 2))
        assert hash(Rational(1, 2)) == hash(0.5)
        assert hash(Rational(3)) == hash(3)

    def test_usable_as_dict_key(self) -> None:
        table = {Rational(1, 2): "half"}
        assert table[Rational(3, 6)] == "half"

    def test_eq_with_inexact_float_matches_hash(self) -> None:
        """== точен: 1/3 как float не равно Rational(1, 3), хотя equal() истинно"""
        third = Rational(1, 3)
        assert third.equal(1 / 3)
        assert third != 1 / 3
        assert len({third, 1 / 3}) == 2

    def test_eq_with_exact_float_and_large_int(self) -> None:
        assert Rational(3, 8) == 0.375
        assert hash(Rational(3, 8)) == hash(0.375)
        assert Rational(MAX_INT) != 2**63
        assert Rational(MAX_INT) == MAX_INT

    def test_eq_with_non_finite_float(self) -> None:
        assert Rational(1) != math.nan
        assert Rational(MAX_INT) != math.inf
