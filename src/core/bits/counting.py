"""
Counting — подсчёт ведущих/хвостовых нулей и единиц

Модуль обеспечивает:
- countr_zero / countl_zero: bisection за O(log W) или override по ширине
- countr_one / countl_one: те же операции над дополнением до W бит
- first_leading_zero / first_leading_one: 1-based позиция от старшего бита
- first_trailing_zero / first_trailing_one: 1-based позиция от младшего бита

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. countr_zero(0) == countl_zero(0) == W (ноль определён, не UB)
2. countl_one(max) == countr_one(max) == W
3. first_*(v) == 0, если искомого бита нет
4. Override и bisection дают одинаковый результат для любого value

Bisection (countr_zero, W=8, value=0b00001000):
    shift=4 mask=0x0F: value & mask != 0 → младшая половина не пуста
    shift=2 mask=0x03: value & mask == 0 → value >>= 2, zero_bits |= 2
    shift=1 mask=0x01: value & mask == 0 → value >>= 1, zero_bits |= 1
    результат 3
"""

from src.core.bits.intrinsics import IntrinsicOp, lookup_intrinsic
from src.core.bits.limits import UnsignedType, require_unsigned, require_value

# =============================================================================
# PORTABLE BISECTION (без проверки аргументов)
# =============================================================================


def _countr_zero(value: int, digits: int) -> int:
    if not value:
        return digits

    accelerated = lookup_intrinsic(IntrinsicOp.COUNTR_ZERO, digits)
    if accelerated is not None:
        return accelerated(value)

    if value & 0x1:
        return 0

    zero_bits = 0
    shift = digits >> 1
    mask = ((1 << digits) - 1) >> shift
    while shift:
        if (value & mask) == 0:
            value >>= shift
            zero_bits |= shift
        shift >>= 1
        mask >>= shift
    return zero_bits


def _countl_zero(value: int, digits: int) -> int:
    if not value:
        return digits

    accelerated = lookup_intrinsic(IntrinsicOp.COUNTL_ZERO, digits)
    if accelerated is not None:
        return accelerated(value)

    zero_bits = 0
    shift = digits >> 1
    while shift:
        tmp = value >> shift
        if tmp:
            value = tmp
        else:
            zero_bits |= shift
        shift >>= 1
    return zero_bits


def _complement(value: int, utype: UnsignedType) -> int:
    return ~value & utype.max


# =============================================================================
# ПОДСЧЁТ НУЛЕЙ И ЕДИНИЦ
# =============================================================================


def countr_zero(value: int, utype: UnsignedType) -> int:
    """
    Количество нулевых бит от младшего до первой единицы.

    Args:
        value: Значение в [0, utype.max]
        utype: Беззнаковый дескриптор ширины W

    Returns:
        Число хвостовых нулей; W для value == 0

    Raises:
        BitTypeError: Если utype не беззнаковый или value не int
        BitValueError: Если value вне [0, max]

    Examples:
        >>> countr_zero(0b00001000, U8)
        3
        >>> countr_zero(0, U32)
        32
    """
    require_unsigned(utype)
    require_value(value, utype)
    return _countr_zero(value, utype.digits)


def countl_zero(value: int, utype: UnsignedType) -> int:
    """
    Количество нулевых бит от старшего до первой единицы.

    Returns:
        Число ведущих нулей; W для value == 0

    Examples:
        >>> countl_zero(0b00001000, U8)
        4
        >>> countl_zero(1, U64)
        63
    """
    require_unsigned(utype)
    require_value(value, utype)
    return _countl_zero(value, utype.digits)


def countl_one(value: int, utype: UnsignedType) -> int:
    """
    Количество единичных бит от старшего до первого нуля.

    Examples:
        >>> countl_one(0xFF0FFF00, U32)
        8
        >>> countl_one(0xFF, U8)
        8
    """
    require_unsigned(utype)
    require_value(value, utype)
    return _countl_zero(_complement(value, utype), utype.digits)


def countr_one(value: int, utype: UnsignedType) -> int:
    """
    Количество единичных бит от младшего до первого нуля.

    Examples:
        >>> countr_one(0x00FF00FF, U32)
        8
    """
    require_unsigned(utype)
    require_value(value, utype)
    return _countr_zero(_complement(value, utype), utype.digits)


# =============================================================================
# ПОЗИЦИИ ПЕРВОГО БИТА (1-based, 0 = нет такого бита)
# =============================================================================


def first_leading_zero(value: int, utype: UnsignedType) -> int:
    """
    1-based позиция первого нуля, считая от старшего бита.

    Для value == max нуля нет: countl_one + 1 дал бы W + 1,
    поэтому возвращается 0.

    Examples:
        >>> first_leading_zero(0xFF, U8)
        0
        >>> first_leading_zero(0, U8)
        1
        >>> first_leading_zero(0b11100000, U8)
        4
    """
    require_unsigned(utype)
    require_value(value, utype)
    if value == utype.max:
        return 0
    return _countl_zero(_complement(value, utype), utype.digits) + 1


def first_leading_one(value: int, utype: UnsignedType) -> int:
    """
    1-based позиция первой единицы, считая от старшего бита; 0 для value == 0.

    Examples:
        >>> first_leading_one(0b00010000, U8)
        4
    """
    require_unsigned(utype)
    require_value(value, utype)
    return first_leading_zero(_complement(value, utype), utype)


def first_trailing_zero(value: int, utype: UnsignedType) -> int:
    """1-based позиция первого нуля от младшего бита; 0 для value == max."""
    require_unsigned(utype)
    require_value(value, utype)
    if value == utype.max:
        return 0
    return _countr_zero(_complement(value, utype), utype.digits) + 1


def first_trailing_one(value: int, utype: UnsignedType) -> int:
    """1-based позиция первой единицы от младшего бита; 0 для value == 0."""
    require_unsigned(utype)
    require_value(value, utype)
    return first_trailing_zero(_complement(value, utype), utype)
