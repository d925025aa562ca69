"""
Реестр хелперов и партиалов.

Реестр — явное значение, которое передаётся в компилятор по ссылке.
Регистрация выполняется на этапе инициализации, до начала рендеринга:
реестр не защищён блокировками, параллельные рендеры только читают его.

Таблицы, переданные при рендеринге, перекрывают одноимённые записи
реестра через двухуровневый поиск и никогда его не изменяют.
"""

from __future__ import annotations

import logging
from collections import ChainMap
from dataclasses import dataclass
from typing import Any, Callable, Dict, Mapping, Optional

from .helpers import BUILTIN_HELPERS

logger = logging.getLogger(__name__)

HelperFn = Callable[..., Any]


@dataclass(frozen=True)
class Helper:
    """
    Зарегистрированный хелпер.

    Attributes:
        fn: Основная функция
        inverse_fn: Необязательная инверсная форма для {{^name}}...{{/name}}
    """
    fn: HelperFn
    inverse_fn: Optional[HelperFn] = None

    def __call__(self, *args: Any) -> Any:
        return self.fn(*args)


def as_helper(value: Any) -> Helper:
    """Приводит запись таблицы хелперов (функцию или Helper) к Helper."""
    if isinstance(value, Helper):
        return value
    if not callable(value):
        raise TypeError(f"Helper must be callable, got {type(value).__name__}")
    return Helper(fn=value)


class TemplateRegistry:
    """
    Реестр хелперов и партиалов.

    По умолчанию содержит встроенные хелперы blockHelperMissing, each и if.
    """

    def __init__(self, builtins: bool = True):
        self.helpers: Dict[str, Helper] = {}
        self.partials: Dict[str, str] = {}

        if builtins:
            for name, (fn, inverse_fn) in BUILTIN_HELPERS.items():
                self.helpers[name] = Helper(fn=fn, inverse_fn=inverse_fn)

        logger.debug("TemplateRegistry initialized with %d helpers", len(self.helpers))

    def register_helper(self, name: str, fn: HelperFn, inverse_fn: Optional[HelperFn] = None) -> None:
        """
        Регистрирует хелпер, перезаписывая прежнюю регистрацию с тем же именем.

        Args:
            name: Имя хелпера в шаблонах
            fn: Основная функция
            inverse_fn: Инверсная форма для инвертированных секций
        """
        if name in self.helpers:
            logger.debug("Helper '%s' overwrites existing registration", name)
        self.helpers[name] = Helper(fn=fn, inverse_fn=inverse_fn)
        logger.debug("Registered helper: %s", name)

    def register_partial(self, name: str, source: str) -> None:
        """Регистрирует исходный текст партиала."""
        if name in self.partials:
            logger.debug("Partial '%s' overwrites existing registration", name)
        self.partials[name] = source
        logger.debug("Registered partial: %s", name)

    def helpers_view(self, overrides: Optional[Mapping[str, Any]] = None) -> ChainMap:
        """Двухуровневая таблица хелперов: сначала overrides, затем реестр."""
        return ChainMap(dict(overrides or {}), self.helpers)

    def partials_view(self, overrides: Optional[Mapping[str, str]] = None) -> ChainMap:
        """Двухуровневая таблица партиалов: сначала overrides, затем реестр."""
        return ChainMap(dict(overrides or {}), self.partials)

    def get_helper(self, name: str, overrides: Optional[Mapping[str, Any]] = None) -> Optional[Helper]:
        value = self.helpers_view(overrides).get(name)
        return as_helper(value) if value is not None else None

    def get_partial(self, name: str, overrides: Optional[Mapping[str, str]] = None) -> Optional[str]:
        return self.partials_view(overrides).get(name)

    def copy(self) -> TemplateRegistry:
        """Независимая копия реестра."""
        clone = TemplateRegistry(builtins=False)
        clone.helpers = dict(self.helpers)
        clone.partials = dict(self.partials)
        return clone


# Общий реестр процесса
default_registry = TemplateRegistry()


def register_helper(name: str, fn: HelperFn, inverse_fn: Optional[HelperFn] = None) -> None:
    """Регистрирует хелпер в общем реестре процесса."""
    default_registry.register_helper(name, fn, inverse_fn)


def register_partial(name: str, source: str) -> None:
    """Регистрирует партиал в общем реестре процесса."""
    default_registry.register_partial(name, source)


__all__ = [
    "HelperFn",
    "Helper",
    "as_helper",
    "TemplateRegistry",
    "default_registry",
    "register_helper",
    "register_partial",
]
