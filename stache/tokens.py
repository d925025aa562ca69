"""
Лексические типы.

Определяет типы токенов mustache-шаблона и сам токен
с позиционной информацией для диагностики ошибок.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass


class TokenKind(enum.Enum):
    """Типы токенов в шаблоне."""

    # Обычный текст между тегами
    CONTENT = "CONTENT"

    # Открывающие разделители тегов
    OPEN = "OPEN"                    # {{
    OPEN_BLOCK = "OPEN_BLOCK"        # {{#
    OPEN_ENDBLOCK = "OPEN_ENDBLOCK"  # {{/
    OPEN_INVERSE = "OPEN_INVERSE"    # {{^
    OPEN_PARTIAL = "OPEN_PARTIAL"    # {{>

    # Закрывающий разделитель
    CLOSE = "CLOSE"                  # }}

    # Комментарий {{! ... }} целиком
    COMMENT = "COMMENT"

    # Содержимое тегов
    ID = "ID"
    SEP = "SEP"                      # / или .
    STRING = "STRING"                # "..."

    EOF = "EOF"


@dataclass(frozen=True)
class Token:
    """
    Токен с позиционной информацией для точной диагностики ошибок.
    """
    kind: TokenKind
    text: str
    position: int = 0    # Позиция в исходном тексте
    line: int = 1        # Номер строки (начиная с 1)
    column: int = 1      # Номер колонки (начиная с 1)

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.text!r}, {self.line}:{self.column})"


__all__ = ["TokenKind", "Token"]
