"""
Тесты для модуля Counting

Проверяет:
1. countr_zero / countl_zero: конкретные значения и ноль
2. countr_one / countl_one: определение через дополнение
3. first_leading_* / first_trailing_*: 1-based позиции и граничные случаи
4. Полный перебор 8/16 бит против эталона на int.bit_length
5. Совпадение portable bisection и override
"""

import random

import pytest

from src.core.bits import (
    U8,
    U16,
    U32,
    U64,
    U128,
    BitTypeError,
    BitValueError,
    I32,
    F32,
    configure_intrinsics,
    countl_one,
    countl_zero,
    countr_one,
    countr_zero,
    first_leading_one,
    first_leading_zero,
    first_trailing_one,
    first_trailing_zero,
    reset_intrinsics_config,
    unsigned_type_for_width,
)

ALL_TYPES = [U8, U16, U32, U64, U128, unsigned_type_for_width(256)]


@pytest.fixture(autouse=True)
def _default_intrinsics():
    reset_intrinsics_config()
    yield
    reset_intrinsics_config()


@pytest.fixture(params=[True, False], ids=["intrinsics", "bisection"])
def intrinsics_mode(request):
    """Прогон теста и с override, и на чистой bisection"""
    configure_intrinsics(enabled=request.param)
    return request.param


def reference_ctz(value: int, digits: int) -> int:
    if value == 0:
        return digits
    return (value & -value).bit_length() - 1


def reference_clz(value: int, digits: int) -> int:
    return digits - value.bit_length()


def sample_values(utype, count: int = 300) -> list[int]:
    rng = random.Random(utype.digits)
    values = [0, 1, 2, 3, utype.max, utype.max - 1, 1 << (utype.digits - 1)]
    values += [1 << k for k in range(utype.digits)]
    values += [rng.getrandbits(utype.digits) for _ in range(count)]
    return values


# =============================================================================
# ТЕСТЫ COUNTR_ZERO / COUNTL_ZERO
# =============================================================================


class TestCountrZero:
    """Тесты для countr_zero"""

    def test_examples_u8(self, intrinsics_mode) -> None:
        """Хвостовые нули для 8-битных значений"""
        assert countr_zero(0b00001000, U8) == 3
        assert countr_zero(0b00000001, U8) == 0
        assert countr_zero(0b10000000, U8) == 7
        assert countr_zero(0b01100000, U8) == 5

    @pytest.mark.parametrize("utype", ALL_TYPES, ids=lambda t: t.name)
    def test_zero_returns_width(self, utype, intrinsics_mode) -> None:
        """countr_zero(0) == W"""
        assert countr_zero(0, utype) == utype.digits

    def test_exhaustive_u8(self, intrinsics_mode) -> None:
        """Все 8-битные значения совпадают с эталоном"""
        for v in range(256):
            assert countr_zero(v, U8) == reference_ctz(v, 8)

    def test_exhaustive_u16(self, intrinsics_mode) -> None:
        """Все 16-битные значения совпадают с эталоном"""
        for v in range(1 << 16):
            assert countr_zero(v, U16) == reference_ctz(v, 16)

    @pytest.mark.parametrize("utype", ALL_TYPES, ids=lambda t: t.name)
    def test_sampled_wide_types(self, utype, intrinsics_mode) -> None:
        """Выборка значений для широких типов"""
        for v in sample_values(utype):
            assert countr_zero(v, utype) == reference_ctz(v, utype.digits)

    @pytest.mark.parametrize("utype", ALL_TYPES, ids=lambda t: t.name)
    def test_found_bit_is_lowest_set_bit(self, utype) -> None:
        """Бит countr_zero(v) установлен, все младшие биты — нули"""
        for v in sample_values(utype, count=50):
            if v == 0:
                continue
            n = countr_zero(v, utype)
            assert 0 <= n < utype.digits
            assert (v >> n) & 1 == 1
            assert v & ((1 << n) - 1) == 0


class TestCountlZero:
    """Тесты для countl_zero"""

    def test_examples_u8(self, intrinsics_mode) -> None:
        """Ведущие нули для 8-битных значений"""
        assert countl_zero(0b00001000, U8) == 4
        assert countl_zero(0b10000000, U8) == 0
        assert countl_zero(0b00000001, U8) == 7

    def test_examples_wide(self, intrinsics_mode) -> None:
        assert countl_zero(1, U32) == 31
        assert countl_zero(1, U64) == 63
        assert countl_zero(1, U128) == 127

    @pytest.mark.parametrize("utype", ALL_TYPES, ids=lambda t: t.name)
    def test_zero_returns_width(self, utype, intrinsics_mode) -> None:
        """countl_zero(0) == W"""
        assert countl_zero(0, utype) == utype.digits

    def test_exhaustive_u16(self, intrinsics_mode) -> None:
        for v in range(1 << 16):
            assert countl_zero(v, U16) == reference_clz(v, 16)

    @pytest.mark.parametrize("utype", ALL_TYPES, ids=lambda t: t.name)
    def test_sampled_wide_types(self, utype, intrinsics_mode) -> None:
        for v in sample_values(utype):
            assert countl_zero(v, utype) == reference_clz(v, utype.digits)

    @pytest.mark.parametrize("utype", ALL_TYPES, ids=lambda t: t.name)
    def test_found_bit_is_highest_set_bit(self, utype) -> None:
        """Бит W-1-countl_zero(v) установлен, все старшие биты — нули"""
        for v in sample_values(utype, count=50):
            if v == 0:
                continue
            n = countl_zero(v, utype)
            top = utype.digits - 1 - n
            assert (v >> top) & 1 == 1
            assert v >> (top + 1) == 0


# =============================================================================
# ТЕСТЫ COUNTL_ONE / COUNTR_ONE
# =============================================================================


class TestCountOnes:
    """Тесты для countl_one / countr_one"""

    def test_examples(self) -> None:
        assert countl_one(0xFF0FFF00, U32) == 8
        assert countr_one(0x00FF00FF, U32) == 8
        assert countl_one(0xFF, U8) == 8
        assert countr_one(0xFF, U8) == 8

    @pytest.mark.parametrize("utype", ALL_TYPES, ids=lambda t: t.name)
    def test_all_ones_returns_width(self, utype) -> None:
        assert countl_one(utype.max, utype) == utype.digits
        assert countr_one(utype.max, utype) == utype.digits

    @pytest.mark.parametrize("utype", ALL_TYPES, ids=lambda t: t.name)
    def test_zero_has_no_ones(self, utype) -> None:
        assert countl_one(0, utype) == 0
        assert countr_one(0, utype) == 0

    def test_complement_identity_u8(self, intrinsics_mode) -> None:
        """countl_one(v) == countl_zero(~v), countr_one(v) == countr_zero(~v)"""
        for v in range(256):
            assert countl_one(v, U8) == countl_zero(~v & 0xFF, U8)
            assert countr_one(v, U8) == countr_zero(~v & 0xFF, U8)

    @pytest.mark.parametrize("utype", [U32, U64, U128], ids=lambda t: t.name)
    def test_complement_identity_sampled(self, utype) -> None:
        for v in sample_values(utype, count=100):
            assert countl_one(v, utype) == countl_zero(~v & utype.max, utype)
            assert countr_one(v, utype) == countr_zero(~v & utype.max, utype)


# =============================================================================
# ТЕСТЫ FIRST_LEADING_* / FIRST_TRAILING_*
# =============================================================================


class TestFirstLeading:
    """Тесты для first_leading_zero / first_leading_one"""

    @pytest.mark.parametrize("utype", ALL_TYPES, ids=lambda t: t.name)
    def test_edges(self, utype) -> None:
        """first_leading_zero(max) == 0, first_leading_zero(0) == 1, first_leading_one(0) == 0"""
        assert first_leading_zero(utype.max, utype) == 0
        assert first_leading_zero(0, utype) == 1
        assert first_leading_one(0, utype) == 0
        assert first_leading_one(utype.max, utype) == 1

    def test_examples_u8(self) -> None:
        assert first_leading_zero(0b11100000, U8) == 4
        assert first_leading_zero(0b01111111, U8) == 1
        assert first_leading_zero(0b11111110, U8) == 8
        assert first_leading_one(0b00010000, U8) == 4
        assert first_leading_one(0b00000001, U8) == 8

    def test_exhaustive_u8(self) -> None:
        for v in range(256):
            expected_zero = 0 if v == 0xFF else countl_one(v, U8) + 1
            expected_one = 0 if v == 0 else countl_zero(v, U8) + 1
            assert first_leading_zero(v, U8) == expected_zero
            assert first_leading_one(v, U8) == expected_one


class TestFirstTrailing:
    """Тесты для first_trailing_zero / first_trailing_one"""

    @pytest.mark.parametrize("utype", ALL_TYPES, ids=lambda t: t.name)
    def test_edges(self, utype) -> None:
        assert first_trailing_zero(utype.max, utype) == 0
        assert first_trailing_zero(0, utype) == 1
        assert first_trailing_one(0, utype) == 0
        assert first_trailing_one(utype.max, utype) == 1

    def test_examples_u8(self) -> None:
        assert first_trailing_zero(0b00000111, U8) == 4
        assert first_trailing_one(0b00001000, U8) == 4
        assert first_trailing_one(0b10000000, U8) == 8


# =============================================================================
# ТЕСТЫ ВАЛИДАЦИИ АРГУМЕНТОВ
# =============================================================================


class TestCountingValidation:
    """Нарушения контракта отвергаются до вычислений"""

    @pytest.mark.parametrize(
        "fn",
        [countr_zero, countl_zero, countr_one, countl_one, first_leading_zero, first_leading_one],
    )
    def test_signed_or_float_type_rejected(self, fn) -> None:
        with pytest.raises(BitTypeError):
            fn(1, I32)
        with pytest.raises(BitTypeError):
            fn(1, F32)
        with pytest.raises(BitTypeError):
            fn(1, int)

    def test_out_of_range_value_rejected(self) -> None:
        with pytest.raises(BitValueError):
            countr_zero(256, U8)
        with pytest.raises(BitValueError):
            countl_zero(-1, U32)

    def test_non_int_value_rejected(self) -> None:
        with pytest.raises(BitTypeError):
            countr_zero(1.0, U8)
        with pytest.raises(BitTypeError):
            countl_zero(True, U8)
        with pytest.raises(BitTypeError):
            countl_one("1", U8)

    def test_type_error_is_builtin_type_error(self) -> None:
        """BitTypeError совместим с TypeError, BitValueError — с ValueError"""
        with pytest.raises(TypeError):
            countr_zero(1, I32)
        with pytest.raises(ValueError):
            countr_zero(1 << 8, U8)
