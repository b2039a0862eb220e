"""
Sanitizer interop — hook "unpoison" для инструментированных сборок

По умолчанию unpoison — no-op. Инструментирующий код (memory tracker,
taint-анализ) устанавливает свой hook через set_unpoison_hook; bit_cast
вызывает его для исходного буфера перед чтением байт.
"""

import logging
from typing import Callable

logger = logging.getLogger(__name__)

UnpoisonHook = Callable[[memoryview], None]


def _noop_unpoison(buffer: memoryview) -> None:
    return None


_HOOK: UnpoisonHook = _noop_unpoison


def unpoison(buffer: memoryview) -> None:
    """Пометить buffer как инициализированный для инструментирующего кода."""
    _HOOK(buffer)


def set_unpoison_hook(hook: UnpoisonHook) -> None:
    """
    Установка hook.

    Raises:
        TypeError: Если hook не callable
    """
    global _HOOK

    if not callable(hook):
        raise TypeError(f"unpoison hook must be callable, got {hook!r}")

    _HOOK = hook
    logger.debug("Unpoison hook installed: %r", hook)


def get_unpoison_hook() -> UnpoisonHook:
    return _HOOK


def reset_unpoison_hook() -> None:
    global _HOOK

    _HOOK = _noop_unpoison
