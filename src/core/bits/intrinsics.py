"""
Intrinsics — таблица ускоренных реализаций по ширине типа

Аналог compiler builtins (__builtin_clz / __builtin_ctz) для CPython:
int.bit_length() выполняется в C и заменяет bisection для выбранных ширин.

Модуль обеспечивает:
- Встроенные override для countl_zero / countr_zero на базе int.bit_length
- Регистрацию пользовательских override по (op, width)
- IntrinsicsConfig: включение/выключение и набор активных ширин

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Любой override возвращает W для value == 0 (guard оборачивает функцию)
2. Корректность никогда не зависит от наличия override
3. Конфигурация и таблица заменяются целиком (rebinding), не мутируются
"""

import logging
from enum import Enum
from typing import Callable, Final, Optional

from pydantic import BaseModel, Field, field_validator

from src.core.bits.limits import SUPPORTED_WIDTHS, BitTypeError

logger = logging.getLogger(__name__)

IntrinsicFn = Callable[[int], int]

# =============================================================================
# ПАРАМЕТРЫ ПО УМОЛЧАНИЮ
# =============================================================================

# Ширины с аппаратной поддержкой в исходной платформе (ctzs/clzs, ctz/clz, ctzll/clzll)
DEFAULT_INTRINSIC_WIDTHS: Final[frozenset[int]] = frozenset({16, 32, 64})


class IntrinsicOp(str, Enum):
    """Операции, допускающие ускоренную реализацию"""

    COUNTL_ZERO = "countl_zero"
    COUNTR_ZERO = "countr_zero"


# =============================================================================
# CONFIG
# =============================================================================


class IntrinsicsConfig(BaseModel):
    """
    Конфигурация ускоренного пути.

    enabled=False принудительно включает portable bisection для всех ширин.
    widths ограничивает встроенные override; пользовательские override
    действуют при enabled=True независимо от widths.
    """

    enabled: bool = Field(True, description="Использовать override, если доступен")
    widths: frozenset[int] = Field(
        default=DEFAULT_INTRINSIC_WIDTHS, description="Ширины со встроенным override"
    )

    model_config = {"frozen": True, "extra": "forbid"}

    @field_validator("widths")
    @classmethod
    def widths_supported(cls, v: frozenset[int]) -> frozenset[int]:
        unsupported = sorted(w for w in v if w not in SUPPORTED_WIDTHS)
        if unsupported:
            raise ValueError(f"unsupported intrinsic widths {unsupported}")
        return v


_CONFIG: IntrinsicsConfig = IntrinsicsConfig()


def get_intrinsics_config() -> IntrinsicsConfig:
    return _CONFIG


def configure_intrinsics(**changes) -> IntrinsicsConfig:
    """
    Замена конфигурации.

    Args:
        **changes: Поля IntrinsicsConfig (enabled, widths)

    Returns:
        Новая активная конфигурация

    Raises:
        pydantic.ValidationError: Если значения невалидны

    Examples:
        >>> configure_intrinsics(enabled=False).enabled
        False
        >>> reset_intrinsics_config().enabled
        True
    """
    global _CONFIG

    config = IntrinsicsConfig(**{**_CONFIG.model_dump(), **changes})
    _CONFIG = config
    logger.debug("Intrinsics config replaced: enabled=%s widths=%s", config.enabled, sorted(config.widths))
    return config


def reset_intrinsics_config() -> IntrinsicsConfig:
    global _CONFIG

    _CONFIG = IntrinsicsConfig()
    return _CONFIG


# =============================================================================
# ВСТРОЕННЫЕ РЕАЛИЗАЦИИ
# =============================================================================


def zero_guarded(fn: IntrinsicFn, width: int) -> IntrinsicFn:
    """
    Обёртка, определяющая результат для нуля.

    Аппаратные clz/ctz не определены на 0; guard возвращает width.
    """

    def guarded(value: int) -> int:
        if value == 0:
            return width
        return fn(value)

    guarded.__name__ = getattr(fn, "__name__", "intrinsic")
    guarded.__wrapped__ = fn
    return guarded


def _make_clz(width: int) -> IntrinsicFn:
    def clz(value: int) -> int:
        return width - value.bit_length()

    return clz


def _ctz(value: int) -> int:
    # value & -value оставляет только младший единичный бит
    return (value & -value).bit_length() - 1


_BUILTINS: Final[dict[tuple[IntrinsicOp, int], IntrinsicFn]] = {}
for _width in SUPPORTED_WIDTHS:
    _BUILTINS[(IntrinsicOp.COUNTL_ZERO, _width)] = zero_guarded(_make_clz(_width), _width)
    _BUILTINS[(IntrinsicOp.COUNTR_ZERO, _width)] = zero_guarded(_ctz, _width)
del _width

_CUSTOM: dict[tuple[IntrinsicOp, int], IntrinsicFn] = {}


# =============================================================================
# РЕГИСТРАЦИЯ И ПОИСК
# =============================================================================


def register_intrinsic(op: IntrinsicOp | str, width: int, fn: IntrinsicFn) -> None:
    """
    Регистрация пользовательского override для (op, width).

    Функция вызывается только для value != 0; ноль обрабатывает guard.

    Args:
        op: Операция (IntrinsicOp или её строковое имя)
        width: Ширина W
        fn: Реализация value -> int

    Raises:
        BitTypeError: Если ширина не поддерживается или fn не callable
        ValueError: Если op неизвестна
    """
    global _CUSTOM

    op = IntrinsicOp(op)
    if width not in SUPPORTED_WIDTHS:
        raise BitTypeError(f"Unsupported intrinsic width {width}")
    if not callable(fn):
        raise BitTypeError(f"Intrinsic for {op.value}/{width} must be callable, got {fn!r}")

    _CUSTOM = {**_CUSTOM, (op, width): zero_guarded(fn, width)}
    logger.debug("Registered intrinsic %s for width %d", op.value, width)


def unregister_intrinsic(op: IntrinsicOp | str, width: int) -> bool:
    """
    Удаление пользовательского override.

    Returns:
        True если override был зарегистрирован
    """
    global _CUSTOM

    key = (IntrinsicOp(op), width)
    if key not in _CUSTOM:
        return False

    _CUSTOM = {k: v for k, v in _CUSTOM.items() if k != key}
    logger.debug("Unregistered intrinsic %s for width %d", key[0].value, width)
    return True


def clear_intrinsics() -> None:
    """Удаление всех пользовательских override."""
    global _CUSTOM

    _CUSTOM = {}


def lookup_intrinsic(op: IntrinsicOp, width: int) -> Optional[IntrinsicFn]:
    """
    Поиск override для (op, width).

    Порядок: выключено → None; пользовательский override; встроенный,
    если width входит в config.widths; иначе None (portable path).
    """
    config = _CONFIG
    if not config.enabled:
        return None

    custom = _CUSTOM.get((op, width))
    if custom is not None:
        return custom

    if width in config.widths:
        return _BUILTINS.get((op, width))

    return None
