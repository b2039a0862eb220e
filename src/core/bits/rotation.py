"""
Rotation — циклический сдвиг W-битного значения

Формулировка "Safe, Efficient, and Portable Rotate in C/C++"
(https://blog.regehr.org/archives/1063): после редукции по модулю W
сдвиг r всегда в [1, W-1], поэтому сдвиг на полную ширину невозможен.

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. rotl(v, n) == rotr(v, -n) для любого целого n
2. rotl(v, 0) == rotl(v, W) == v
3. rotr(rotl(v, n), n) == v
"""

from src.core.bits.limits import UnsignedType, require_int, require_unsigned, require_value


def _reduce(rotate: int, digits: int) -> int:
    # Остаток с сохранением знака делимого (truncating remainder)
    reduced = abs(rotate) % digits
    return -reduced if rotate < 0 else reduced


def _rotl(value: int, rotate: int, digits: int, mask: int) -> int:
    rotate = _reduce(rotate, digits)
    if not rotate:
        return value
    if rotate < 0:
        return _rotr(value, -rotate, digits, mask)
    return ((value << rotate) | (value >> (digits - rotate))) & mask


def _rotr(value: int, rotate: int, digits: int, mask: int) -> int:
    rotate = _reduce(rotate, digits)
    if not rotate:
        return value
    if rotate < 0:
        return _rotl(value, -rotate, digits, mask)
    return ((value >> rotate) | (value << (digits - rotate))) & mask


def rotl(value: int, rotate: int, utype: UnsignedType) -> int:
    """
    Циклический сдвиг влево на rotate позиций.

    Отрицательный rotate делегируется в rotr.

    Args:
        value: Значение в [0, utype.max]
        rotate: Любое целое (редуцируется по модулю W)
        utype: Беззнаковый дескриптор ширины W

    Examples:
        >>> rotl(0b10000001, 1, U8)
        3
        >>> rotl(0x12345678, 8, U32) == 0x34567812
        True
    """
    require_unsigned(utype)
    require_value(value, utype)
    require_int(rotate, "rotate")
    return _rotl(value, rotate, utype.digits, utype.max)


def rotr(value: int, rotate: int, utype: UnsignedType) -> int:
    """
    Циклический сдвиг вправо на rotate позиций.

    Examples:
        >>> rotr(0b00000011, 1, U8)
        129
    """
    require_unsigned(utype)
    require_value(value, utype)
    require_int(rotate, "rotate")
    return _rotr(value, rotate, utype.digits, utype.max)
