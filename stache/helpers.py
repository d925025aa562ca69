"""
Встроенные хелперы.

Каждый хелпер первым аргументом получает `this` — данные внешнего кадра,
в котором встречен блок. Блочные хелперы вызываются как
helper(this, context, fn, inverse), где fn и inverse рендерят основное
и инверсное тело блока в новом кадре с переданными данными.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from typing import Any, Callable, Dict, Optional, Tuple

# Тело блока: данные нового кадра -> отрендеренный текст
BlockFn = Callable[[Any], str]


class ValueShape(enum.Enum):
    """Закрытый набор форм значения контекста для блочной диспетчеризации."""
    CALLABLE = "callable"
    TRUE = "true"
    FALSY = "falsy"        # False или None
    SEQUENCE = "sequence"
    RECORD = "record"      # всё остальное


def is_sequence(value: Any) -> bool:
    """Список/кортеж и прочие последовательности, кроме строк."""
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def classify_value(value: Any) -> ValueShape:
    """Определяет форму значения контекста."""
    if value is True:
        return ValueShape.TRUE
    if value is False or value is None:
        return ValueShape.FALSY
    if is_sequence(value):
        return ValueShape.SEQUENCE
    if callable(value):
        return ValueShape.CALLABLE
    return ValueShape.RECORD


def is_empty_value(value: Any) -> bool:
    """
    Проверяет, должна ли для значения рендериться инверсная секция.

    Вызываемое значение предварительно вычисляется.
    """
    if classify_value(value) is ValueShape.CALLABLE:
        value = value()
    shape = classify_value(value)
    if shape is ValueShape.FALSY:
        return True
    if shape is ValueShape.SEQUENCE:
        return len(value) == 0
    return False


def _render_nothing(_context: Any) -> str:
    return ""


def block_helper_missing(this: Any, context: Any, fn: BlockFn, inverse: Optional[BlockFn] = None) -> str:
    """
    Хелпер по умолчанию для блоков без зарегистрированного хелпера.

    Правила:
    - вызываемое значение вызывается, результат диспетчеризуется заново
    - True: тело рендерится один раз во внешнем контексте
    - False/None: рендерится инверсная секция
    - последовательность: тело для каждого элемента, либо инверсная секция для пустой
    - иначе: тело рендерится с самим значением в качестве контекста
    """
    inverse = inverse or _render_nothing

    shape = classify_value(context)
    if shape is ValueShape.CALLABLE:
        context = context()
        shape = classify_value(context)

    if shape is ValueShape.TRUE:
        return fn(this)
    elif shape is ValueShape.FALSY:
        return inverse(this)
    elif shape is ValueShape.SEQUENCE:
        if len(context) > 0:
            return "".join(fn(item) for item in context)
        return inverse(this)
    else:
        return fn(context)


def block_helper_missing_inverse(this: Any, context: Any, fn: BlockFn) -> str:
    """Инверсная форма block_helper_missing: рендерит тело в переданном контексте."""
    return fn(context)


def each_helper(this: Any, context: Any, fn: BlockFn, inverse: Optional[BlockFn] = None) -> str:
    """Рендерит тело для каждого элемента последовательности, для пустой — инверсную секцию."""
    inverse = inverse or _render_nothing

    if is_sequence(context) and len(context) > 0:
        return "".join(fn(item) for item in context)
    return inverse(this)


def if_helper(this: Any, context: Any, fn: BlockFn, inverse: Optional[BlockFn] = None) -> str:
    """False/None — инверсная секция, иначе тело во внешнем контексте."""
    inverse = inverse or _render_nothing

    if context is False or context is None:
        return inverse(this)
    return fn(this)


BLOCK_HELPER_MISSING = "blockHelperMissing"

# Имя -> (функция, инверсная форма)
BUILTIN_HELPERS: Dict[str, Tuple[Callable[..., Any], Optional[Callable[..., Any]]]] = {
    BLOCK_HELPER_MISSING: (block_helper_missing, block_helper_missing_inverse),
    "each": (each_helper, None),
    "if": (if_helper, None),
}


__all__ = [
    "BlockFn",
    "ValueShape",
    "is_sequence",
    "classify_value",
    "is_empty_value",
    "block_helper_missing",
    "block_helper_missing_inverse",
    "each_helper",
    "if_helper",
    "BLOCK_HELPER_MISSING",
    "BUILTIN_HELPERS",
]
