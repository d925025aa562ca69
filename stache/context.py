"""
Контекст рендеринга.

Цепочка кадров данных (data, parent), по которой разрешаются пути шаблона.
Кадры неизменяемы: блоки создают дочерние кадры, не трогая родительские.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Optional

from .nodes import PathExpression


@dataclass(frozen=True)
class ContextFrame:
    """
    Один уровень цепочки данных, видимый при вычислении.

    Attributes:
        data: Данные текущего уровня
        parent: Родительский кадр (None для корня)
    """
    data: Any
    parent: Optional[ContextFrame] = None

    def child(self, data: Any) -> ContextFrame:
        """Создаёт дочерний кадр с указанными данными."""
        return ContextFrame(data=data, parent=self)

    def ancestor(self, depth: int) -> Optional[ContextFrame]:
        """Возвращает предка на указанной глубине или None, если цепочка короче."""
        frame: Optional[ContextFrame] = self
        for _ in range(depth):
            if frame is None:
                return None
            frame = frame.parent
        return frame

    def resolve(self, path: PathExpression) -> Any:
        """
        Разрешает путь относительно текущего кадра.

        Неразрешённый путь даёт None, а не ошибку.
        """
        frame = self.ancestor(path.depth)
        if frame is None:
            return None

        value = frame.data
        for part in path.parts:
            value = lookup_member(value, part)
            if value is None:
                return None
        return value


def lookup_member(value: Any, key: str) -> Any:
    """
    Достаёт именованный член значения.

    Поддерживаются словари, числовые индексы последовательностей
    и публичные атрибуты объектов.
    """
    if value is None:
        return None
    if isinstance(value, Mapping):
        return value.get(key)
    if isinstance(value, Sequence) and not isinstance(value, (str, bytes)):
        if key.isdigit():
            index = int(key)
            return value[index] if index < len(value) else None
        return None
    if key.startswith("_"):
        return None
    return getattr(value, key, None)


__all__ = ["ContextFrame", "lookup_member"]
