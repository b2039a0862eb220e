"""
Numeric Limits — дескрипторы целочисленных типов фиксированной ширины

Python int не ограничен по разрядности, поэтому ширина W передаётся явно
через неизменяемый дескриптор типа (UnsignedType / ScalarType).

Модуль обеспечивает:
- UnsignedType: беззнаковый тип ширины W (digits, max)
- ScalarType: тривиальный тип фиксированного размера для bit_cast
- numeric_limits: digits / min / max для дескриптора
- Иерархию исключений для нарушений контракта
- Guard-функции для проверки аргументов

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. W всегда степень двойки в диапазоне [8, MAX_DIGITS]
2. Значение value всегда в [0, max] для своего дескриптора
3. Нарушение типа → BitTypeError до анализа любого бита
"""

from enum import Enum
from typing import Any, Final

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

# =============================================================================
# ПАРАМЕТРЫ ШИРИНЫ
# =============================================================================

# Минимальная ширина беззнакового типа (один байт)
MIN_DIGITS: Final[int] = 8

# Максимальная поддерживаемая ширина (bisection остаётся O(log W))
MAX_DIGITS: Final[int] = 1024

# Все ширины, для которых возможен дескриптор
SUPPORTED_WIDTHS: Final[tuple[int, ...]] = (8, 16, 32, 64, 128, 256, 512, 1024)

# Размеры IEEE-754 типов (байты) → struct format code
FLOAT_FORMATS: Final[dict[int, str]] = {2: "e", 4: "f", 8: "d"}


# =============================================================================
# EXCEPTIONS
# =============================================================================


class BitTypeError(TypeError):
    """
    Нарушение контракта на уровне типа.

    Передан знаковый тип, не-дескриптор или значение не-int.
    Аналог ошибки компиляции: проверяется до любых вычислений.
    """

    pass


class BitValueError(ValueError):
    """Значение вне домена своего дескриптора (например, value > max)."""

    pass


class BitCastError(BitTypeError):
    """
    Нарушение контракта bit_cast.

    Размеры To и From различаются или тип не является тривиальным.
    """

    pass


class BitCeilOverflowError(BitValueError):
    """
    bit_ceil(value) не представим в W битах.

    Возникает при value > 2**(W-1): наименьшая степень двойки >= value
    равна 2**W и не помещается в тип.
    """

    pass


# =============================================================================
# ДЕСКРИПТОРЫ ТИПОВ
# =============================================================================


class UnsignedType(BaseModel):
    """
    Беззнаковый целочисленный тип ширины W.

    Immutable модель (frozen=True), используется как ключ и как
    provider numeric_limits для всех операций модуля bits.
    """

    name: str = Field(..., min_length=1, description="Имя типа (например, 'u32')")
    digits: int = Field(..., ge=MIN_DIGITS, le=MAX_DIGITS, description="Ширина W в битах")

    model_config = {"frozen": True}

    @field_validator("digits")
    @classmethod
    def digits_power_of_two(cls, v: int) -> int:
        if v & (v - 1):
            raise ValueError(f"digits must be a power of two, got {v}")
        return v

    @property
    def max(self) -> int:
        """Значение со всеми единичными битами (2**W - 1)."""
        return (1 << self.digits) - 1

    @property
    def min(self) -> int:
        return 0

    @property
    def size(self) -> int:
        """Размер в байтах."""
        return self.digits // 8

    @property
    def is_signed(self) -> bool:
        return False

    def __repr__(self) -> str:
        return f"UnsignedType({self.name})"


class ScalarKind(str, Enum):
    """Категория тривиального типа для reinterpretation"""

    UNSIGNED = "unsigned"
    SIGNED = "signed"
    FLOAT = "float"
    BYTES = "bytes"


class ScalarType(BaseModel):
    """
    Тривиальный тип фиксированного размера.

    Значение полностью определяется своими байтами, поэтому
    побайтовое копирование корректно (используется bit_cast).
    """

    name: str = Field(..., min_length=1, description="Имя типа")
    kind: ScalarKind = Field(..., description="Категория типа")
    size: int = Field(..., gt=0, le=MAX_DIGITS // 8, description="Размер в байтах")

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_size_for_kind(self) -> "ScalarType":
        if self.kind == ScalarKind.FLOAT and self.size not in FLOAT_FORMATS:
            raise ValueError(
                f"float scalar size must be one of {sorted(FLOAT_FORMATS)}, got {self.size}"
            )
        if self.kind in (ScalarKind.UNSIGNED, ScalarKind.SIGNED) and self.size & (self.size - 1):
            raise ValueError(f"integer scalar size must be a power of two, got {self.size}")
        return self

    @property
    def bits(self) -> int:
        return self.size * 8

    def __repr__(self) -> str:
        return f"ScalarType({self.name})"


class NumericLimits(BaseModel):
    """Свойства numeric_limits для беззнакового дескриптора"""

    digits: int
    min: int
    max: int
    is_signed: bool

    model_config = {"frozen": True}


# =============================================================================
# ПРЕДОПРЕДЕЛЁННЫЕ ТИПЫ
# =============================================================================

U8: Final[UnsignedType] = UnsignedType(name="u8", digits=8)
U16: Final[UnsignedType] = UnsignedType(name="u16", digits=16)
U32: Final[UnsignedType] = UnsignedType(name="u32", digits=32)
U64: Final[UnsignedType] = UnsignedType(name="u64", digits=64)
U128: Final[UnsignedType] = UnsignedType(name="u128", digits=128)

I8: Final[ScalarType] = ScalarType(name="i8", kind=ScalarKind.SIGNED, size=1)
I16: Final[ScalarType] = ScalarType(name="i16", kind=ScalarKind.SIGNED, size=2)
I32: Final[ScalarType] = ScalarType(name="i32", kind=ScalarKind.SIGNED, size=4)
I64: Final[ScalarType] = ScalarType(name="i64", kind=ScalarKind.SIGNED, size=8)

F16: Final[ScalarType] = ScalarType(name="f16", kind=ScalarKind.FLOAT, size=2)
F32: Final[ScalarType] = ScalarType(name="f32", kind=ScalarKind.FLOAT, size=4)
F64: Final[ScalarType] = ScalarType(name="f64", kind=ScalarKind.FLOAT, size=8)

_UNSIGNED_BY_WIDTH: dict[int, UnsignedType] = {t.digits: t for t in (U8, U16, U32, U64, U128)}


def unsigned_type_for_width(digits: int) -> UnsignedType:
    """
    Дескриптор беззнакового типа по ширине.

    Args:
        digits: Ширина W в битах

    Returns:
        Зарегистрированный дескриптор (U8..U128) или новый uW

    Raises:
        BitTypeError: Если W не степень двойки или вне [8, MAX_DIGITS]

    Examples:
        >>> unsigned_type_for_width(32) is U32
        True
        >>> unsigned_type_for_width(256).name
        'u256'
    """
    if type(digits) is not int:
        raise BitTypeError(f"digits must be int, got {type(digits).__name__}")

    utype = _UNSIGNED_BY_WIDTH.get(digits)
    if utype is not None:
        return utype

    try:
        return UnsignedType(name=f"u{digits}", digits=digits)
    except ValidationError as e:
        raise BitTypeError(f"Unsupported unsigned width {digits}: {e}") from e


def unsigned_type_for_name(name: str) -> UnsignedType:
    """
    Дескриптор по имени ('u8', 'u32', ...).

    Raises:
        BitTypeError: Если имя не вида 'u<W>' с поддерживаемой W
    """
    if not isinstance(name, str):
        raise BitTypeError(f"Type name must be str, got {type(name).__name__}")
    if not name.startswith("u") or not (name[1:].isascii() and name[1:].isdecimal()):
        raise BitTypeError(f"Unknown unsigned type name {name!r}")
    return unsigned_type_for_width(int(name[1:]))


def bytes_type(size: int) -> ScalarType:
    """Тривиальный блок из size байт (без интерпретации)."""
    return ScalarType(name=f"bytes{size}", kind=ScalarKind.BYTES, size=size)


def as_scalar(t: UnsignedType | ScalarType) -> ScalarType:
    """
    Приведение дескриптора к ScalarType.

    UnsignedType превращается в эквивалентный ScalarType(kind=UNSIGNED).

    Raises:
        BitCastError: Если t не является дескриптором
    """
    if isinstance(t, ScalarType):
        return t
    if isinstance(t, UnsignedType):
        return ScalarType(name=t.name, kind=ScalarKind.UNSIGNED, size=t.size)
    raise BitCastError(f"Expected a trivial scalar type descriptor, got {t!r}")


def numeric_limits(utype: UnsignedType) -> NumericLimits:
    """
    numeric_limits для беззнакового типа.

    Examples:
        >>> numeric_limits(U8).max
        255
        >>> numeric_limits(U64).digits
        64
    """
    require_unsigned(utype)
    return NumericLimits(digits=utype.digits, min=0, max=utype.max, is_signed=False)


# =============================================================================
# ВАЛИДАЦИЯ АРГУМЕНТОВ
# =============================================================================


def require_unsigned(utype: Any, name: str = "utype") -> None:
    """
    Проверка, что utype — беззнаковый дескриптор.

    Raises:
        BitTypeError: Для знаковых, float, bytes и любых других объектов
    """
    if isinstance(utype, UnsignedType):
        return

    if isinstance(utype, ScalarType):
        raise BitTypeError(
            f"{name} must be an unsigned integer type, got {utype.kind.value} type {utype.name}"
        )

    raise BitTypeError(f"{name} must be an UnsignedType descriptor, got {utype!r}")


def require_int(value: Any, name: str = "value") -> None:
    """
    Проверка, что value — int (bool отвергается).

    Raises:
        BitTypeError: Если value не int или bool
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise BitTypeError(f"{name} must be int, got {type(value).__name__}")


def require_value(value: Any, utype: UnsignedType, name: str = "value") -> None:
    """
    Проверка, что value представимо в utype.

    Raises:
        BitTypeError: Если value не int
        BitValueError: Если value вне [0, utype.max]
    """
    require_int(value, name)

    if value < 0 or value > utype.max:
        raise BitValueError(f"{name} must be in [0, {utype.max}] for {utype.name}, got {value}")
