"""
Reinterpret — bit_cast между тривиальными типами одного размера

Модуль обеспечивает:
- bit_cast: побайтовое копирование представления From в новый To
- bit_or_static_cast: bit_cast при равных размерах, иначе преобразование значения

Представление значения — native byte order (sys.byteorder / struct "=").
Байтовый порядок одинаков для кодирования и декодирования, поэтому
reinterpretation не зависит от платформы (u32 <-> f32 и т.п.).

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. sizeof(To) == sizeof(From), иначе BitCastError до чтения байт
2. Перед чтением источника вызывается sanitizer.unpoison(buffer)
3. Никакого арифметического преобразования, усечения или sign extension
4. bit_cast(A, bit_cast(B, a, A), B) == a для любого представимого a
   (f16/f32 декодируются в RawFloat, включая NaN payload)
5. Float, который округляется при упаковке в from_type, не представим → BitValueError
"""

import math
import struct
import sys
from typing import Any, Final, Union

from src.core.bits import sanitizer
from src.core.bits.limits import (
    FLOAT_FORMATS,
    BitCastError,
    BitTypeError,
    BitValueError,
    ScalarKind,
    ScalarType,
    UnsignedType,
    as_scalar,
)

TypeDescriptor = Union[ScalarType, UnsignedType]

# Размеры float, которые проходят через double при struct.unpack ('e', 'f')
NARROW_FLOAT_SIZES: Final[frozenset[int]] = frozenset({2, 4})


# =============================================================================
# RAW FLOAT
# =============================================================================


class RawFloat(float):
    """
    float с сохранённым битовым представлением узкого IEEE-754 типа.

    struct.unpack расширяет f16/f32 до double: signalling NaN становится
    quiet, payload NaN теряется. RawFloat ведёт себя как обычный float,
    но хранит исходные байты, и bit_cast обратно в тип того же размера
    использует их без преобразования.

    Attributes:
        raw: Байтовое представление (native byte order)
    """

    def __new__(cls, value: float, raw: bytes) -> "RawFloat":
        self = super().__new__(cls, value)
        self.raw = bytes(raw)
        return self

    def __repr__(self) -> str:
        return f"RawFloat({float(self)!r}, raw={self.raw.hex()})"


def _same_float(a: float, b: Any) -> bool:
    # NaN считается равным NaN: payload проверяется отдельно через RawFloat
    if math.isnan(a):
        return isinstance(b, float) and math.isnan(b)
    return a == b


# =============================================================================
# КОДИРОВАНИЕ / ДЕКОДИРОВАНИЕ ПРЕДСТАВЛЕНИЯ
# =============================================================================


def _encode_float(value: Any, stype: ScalarType) -> bytearray:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise BitTypeError(f"{stype.name} value must be float, got {type(value).__name__}")

    if isinstance(value, RawFloat) and len(value.raw) == stype.size:
        return bytearray(value.raw)

    code = "=" + FLOAT_FORMATS[stype.size]
    try:
        packed = struct.pack(code, value)
    except (OverflowError, struct.error) as e:
        raise BitValueError(f"{value} is not representable in {stype.name}") from e

    # pack округляет молча: значение, не совпадающее после распаковки, не представимо
    if not _same_float(struct.unpack(code, packed)[0], value):
        raise BitValueError(f"{value!r} is not exactly representable in {stype.name}")
    return bytearray(packed)


def _encode(value: Any, stype: ScalarType) -> bytearray:
    """Байтовое представление value как stype."""
    if stype.kind in (ScalarKind.UNSIGNED, ScalarKind.SIGNED):
        if isinstance(value, bool) or not isinstance(value, int):
            raise BitTypeError(f"{stype.name} value must be int, got {type(value).__name__}")
        try:
            return bytearray(
                value.to_bytes(stype.size, sys.byteorder, signed=stype.kind == ScalarKind.SIGNED)
            )
        except OverflowError as e:
            raise BitValueError(f"{value} is not representable in {stype.name}") from e

    if stype.kind == ScalarKind.FLOAT:
        return _encode_float(value, stype)

    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise BitTypeError(f"{stype.name} value must be bytes-like, got {type(value).__name__}")
    raw = bytearray(value)
    if len(raw) != stype.size:
        raise BitValueError(f"{stype.name} value must be {stype.size} bytes, got {len(raw)}")
    return raw


def _decode(buffer: bytearray, stype: ScalarType) -> Any:
    """Значение stype из его байтового представления."""
    if stype.kind in (ScalarKind.UNSIGNED, ScalarKind.SIGNED):
        return int.from_bytes(buffer, sys.byteorder, signed=stype.kind == ScalarKind.SIGNED)

    if stype.kind == ScalarKind.FLOAT:
        value = struct.unpack("=" + FLOAT_FORMATS[stype.size], buffer)[0]
        if stype.size in NARROW_FLOAT_SIZES:
            return RawFloat(value, buffer)
        return value

    return bytes(buffer)


# =============================================================================
# BIT CAST
# =============================================================================


def bit_cast(to_type: TypeDescriptor, value: Any, from_type: TypeDescriptor) -> Any:
    """
    Reinterpretation битового представления value как to_type.

    Алгоритм:
    1. Проверка контракта: оба дескриптора тривиальные, размеры равны
    2. Кодирование value в байты from_type
    3. sanitizer.unpoison(источник)
    4. Побайтовое копирование в новый буфер размера to_type
    5. Декодирование буфера как to_type

    Args:
        to_type: Целевой тип (ScalarType или UnsignedType)
        value: Значение типа from_type
        from_type: Исходный тип (ScalarType или UnsignedType)

    Returns:
        Значение to_type с тем же битовым представлением
        (RawFloat для f16/f32)

    Raises:
        BitCastError: Если дескриптор не тривиальный или размеры различаются
        BitTypeError: Если value не соответствует категории from_type
        BitValueError: Если value не представимо в from_type

    Examples:
        >>> bit_cast(U32, 1.0, F32) == 0x3F800000
        True
        >>> bit_cast(I8, 0xFF, U8)
        -1
        >>> bit_cast(F64, 0x4000000000000000, U64)
        2.0
    """
    to_scalar = as_scalar(to_type)
    from_scalar = as_scalar(from_type)

    if to_scalar.size != from_scalar.size:
        raise BitCastError(
            f"bit_cast requires equal sizes: {to_scalar.name} is {to_scalar.size} bytes, "
            f"{from_scalar.name} is {from_scalar.size} bytes"
        )

    source = _encode(value, from_scalar)
    sanitizer.unpoison(memoryview(source))

    destination = bytearray(to_scalar.size)
    destination[:] = source

    return _decode(destination, to_scalar)


# =============================================================================
# BIT OR STATIC CAST
# =============================================================================


def _static_cast(to_scalar: ScalarType, value: Any, from_scalar: ScalarType) -> Any:
    if ScalarKind.BYTES in (to_scalar.kind, from_scalar.kind):
        raise BitCastError(
            f"cannot convert between {from_scalar.name} and {to_scalar.name}: "
            f"raw byte blocks of different sizes have no value conversion"
        )

    if to_scalar.kind == ScalarKind.FLOAT:
        code = "=" + FLOAT_FORMATS[to_scalar.size]
        try:
            return struct.unpack(code, struct.pack(code, float(value)))[0]
        except OverflowError:
            # IEEE-754: округление за пределы диапазона даёт бесконечность со знаком value
            return math.copysign(math.inf, value)

    if isinstance(value, float):
        if not math.isfinite(value):
            raise BitValueError(f"cannot convert {value} to {to_scalar.name}")
        value = math.trunc(value)

    # Целевые целые типы: значение по модулю 2**bits (two's complement для signed)
    wrapped = value & ((1 << to_scalar.bits) - 1)
    if to_scalar.kind == ScalarKind.SIGNED and wrapped >> (to_scalar.bits - 1):
        wrapped -= 1 << to_scalar.bits
    return wrapped


def bit_or_static_cast(to_type: TypeDescriptor, value: Any, from_type: TypeDescriptor) -> Any:
    """
    bit_cast при равных размерах, иначе преобразование значения.

    Преобразование значения:
    - в целый тип: по модулю 2**bits (float усекается к нулю)
    - в float: float(value) с округлением до точности to_type;
      вне диапазона to_type результат ±inf

    Raises:
        BitCastError: Если один из типов — bytes-блок другого размера
        BitValueError: Если value не представимо в from_type или
            не конвертируется (NaN/Inf в целое)

    Examples:
        >>> bit_or_static_cast(U8, 0x1234, U16)
        52
        >>> bit_or_static_cast(F64, 7, U32)
        7.0
    """
    to_scalar = as_scalar(to_type)
    from_scalar = as_scalar(from_type)

    if to_scalar.size == from_scalar.size:
        return bit_cast(to_scalar, value, from_scalar)

    _encode(value, from_scalar)
    return _static_cast(to_scalar, value, from_scalar)
