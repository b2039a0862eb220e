"""
Power of Two — ширина значения и округление до степеней двойки

Модуль обеспечивает:
- has_single_bit: value — степень двойки
- bit_width: минимальное число бит для представления value
- bit_floor: наибольшая степень двойки <= value
- bit_ceil: наименьшая степень двойки >= value

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. bit_width(0) == 0, bit_floor(0) == 0, bit_ceil(0) == bit_ceil(1) == 1
2. Для v != 0: bit_floor(v) <= v < 2 * bit_floor(v)
3. Для v >= 2: bit_ceil(v) / 2 < v <= bit_ceil(v)
4. bit_ceil(v) для v > 2**(W-1) не представим → BitCeilOverflowError
"""

from src.core.bits.counting import _countl_zero
from src.core.bits.limits import (
    BitCeilOverflowError,
    UnsignedType,
    require_unsigned,
    require_value,
)


def has_single_bit(value: int, utype: UnsignedType) -> bool:
    """
    Проверка, что установлен ровно один бит.

    Examples:
        >>> has_single_bit(64, U8)
        True
        >>> has_single_bit(0, U8)
        False
        >>> has_single_bit(6, U8)
        False
    """
    require_unsigned(utype)
    require_value(value, utype)
    return value != 0 and (value & (value - 1)) == 0


def _bit_width(value: int, digits: int) -> int:
    return digits - _countl_zero(value, digits)


def bit_width(value: int, utype: UnsignedType) -> int:
    """
    Число бит, необходимое для представления value (0 для value == 0).

    Examples:
        >>> bit_width(5, U8)
        3
        >>> bit_width(0x80, U8)
        8
    """
    require_unsigned(utype)
    require_value(value, utype)
    return _bit_width(value, utype.digits)


def bit_floor(value: int, utype: UnsignedType) -> int:
    """
    Наибольшая степень двойки, не превышающая value; 0 для value == 0.

    Examples:
        >>> bit_floor(5, U8)
        4
        >>> bit_floor(0, U8)
        0
    """
    require_unsigned(utype)
    require_value(value, utype)
    if not value:
        return 0
    return 1 << (_bit_width(value, utype.digits) - 1)


def bit_ceil(value: int, utype: UnsignedType) -> int:
    """
    Наименьшая степень двойки, не меньшая value; 1 для value < 2.

    Args:
        value: Значение в [0, 2**(W-1)]
        utype: Беззнаковый дескриптор ширины W

    Returns:
        Степень двойки в [1, 2**(W-1)]

    Raises:
        BitCeilOverflowError: Если value > 2**(W-1) (результат 2**W не
            помещается в тип)

    Examples:
        >>> bit_ceil(5, U8)
        8
        >>> bit_ceil(128, U8)
        128
        >>> bit_ceil(129, U8)  # doctest: +SKIP
        Traceback (most recent call last):
            ...
        BitCeilOverflowError: ...
    """
    require_unsigned(utype)
    require_value(value, utype)
    if value < 2:
        return 1

    largest = 1 << (utype.digits - 1)
    if value > largest:
        raise BitCeilOverflowError(
            f"bit_ceil({value}) is not representable in {utype.name}: "
            f"value exceeds the largest power of two {largest}"
        )

    return 1 << _bit_width(value - 1, utype.digits)
