"""
Лексический анализатор mustache-шаблонов.

Токенизирует исходный текст шаблона, разбивая его на последовательность
токенов для последующего синтаксического анализа.

Работает в двух режимах:
- обычный текст (накапливается в CONTENT до ближайшего "{{")
- внутри тега (после открывающего разделителя и до "}}")

На некорректном вводе лексер не бросает исключений: он останавливается
после последнего распознанного токена и не добавляет EOF. Обнаружение
ошибки откладывается до парсера.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from .tokens import Token, TokenKind

logger = logging.getLogger(__name__)


class TemplateLexer:
    """
    Лексический анализатор шаблонов.

    Каждый шаг токенизации либо поглощает хотя бы один символ,
    либо останавливает лексер, поэтому разбор любого ввода конечен.
    """

    OPEN_DELIMITER = "{{"
    CLOSE_DELIMITER = "}}"

    # Символ после "{{" определяет тип открывающего токена
    _OPENERS = {
        "#": TokenKind.OPEN_BLOCK,
        "/": TokenKind.OPEN_ENDBLOCK,
        "^": TokenKind.OPEN_INVERSE,
        ">": TokenKind.OPEN_PARTIAL,
    }

    _PATTERNS = {
        "whitespace": re.compile(r'\s+'),
        # ".." ссылается на родительский контекст
        "parent": re.compile(r'\.\.'),
        TokenKind.ID: re.compile(r'[\w$\-]+'),
        TokenKind.SEP: re.compile(r'[/.]'),
        # Строка в двойных кавычках, допускает экранированные символы
        TokenKind.STRING: re.compile(r'"((?:\\.|[^"\\])*)"', re.DOTALL),
    }

    def __init__(self, text: str):
        self.text = text
        self.position = 0
        self.line = 1
        self.column = 1
        self.length = len(text)
        self.in_tag = False
        self.halted = False

    def tokenize(self) -> List[Token]:
        """
        Токенизирует весь исходный текст и возвращает список токенов.

        Список завершается EOF, если ввод разобран целиком. При остановке
        на некорректном вводе EOF отсутствует.
        """
        tokens: List[Token] = []

        while self.position < self.length:
            if self.in_tag:
                token = self._next_tag_token()
            else:
                token = self._next_raw_token()
            if token is None:
                return self._halt(tokens)
            tokens.append(token)

        if self.in_tag:
            # Ввод закончился внутри тега
            return self._halt(tokens)

        tokens.append(Token(TokenKind.EOF, "", self.position, self.line, self.column))
        return tokens

    def _halt(self, tokens: List[Token]) -> List[Token]:
        self.halted = True
        logger.debug(
            "Tokenization halted at %d:%d after %d tokens",
            self.line, self.column, len(tokens)
        )
        return tokens

    def _next_raw_token(self) -> Optional[Token]:
        """Извлекает токен в режиме обычного текста."""
        start_pos = self.position
        start_line = self.line
        start_column = self.column

        if not self.text.startswith(self.OPEN_DELIMITER, self.position):
            # Текст до следующего "{{" или до конца
            end = self.text.find(self.OPEN_DELIMITER, self.position)
            if end == -1:
                end = self.length
            value = self.text[self.position:end]
            self._advance(len(value))
            return Token(TokenKind.CONTENT, value, start_pos, start_line, start_column)

        marker = self.text[self.position + 2:self.position + 3]

        if marker == "!":
            # Комментарий забирается целиком, минуя токенизацию тега
            body_start = self.position + 3
            end = self.text.find(self.CLOSE_DELIMITER, body_start)
            if end == -1:
                return None
            value = self.text[body_start:end]
            self._advance(end + len(self.CLOSE_DELIMITER) - self.position)
            return Token(TokenKind.COMMENT, value, start_pos, start_line, start_column)

        kind = self._OPENERS.get(marker)
        if kind is None:
            kind = TokenKind.OPEN
            value = self.OPEN_DELIMITER
        else:
            value = self.OPEN_DELIMITER + marker

        self._advance(len(value))
        self.in_tag = True
        return Token(kind, value, start_pos, start_line, start_column)

    def _next_tag_token(self) -> Optional[Token]:
        """Извлекает токен внутри тега."""
        whitespace = self._PATTERNS["whitespace"].match(self.text, self.position)
        if whitespace:
            self._advance(len(whitespace.group(0)))
            if self.position >= self.length:
                return None

        start_pos = self.position
        start_line = self.line
        start_column = self.column

        if self.text.startswith(self.CLOSE_DELIMITER, self.position):
            self._advance(len(self.CLOSE_DELIMITER))
            self.in_tag = False
            return Token(TokenKind.CLOSE, self.CLOSE_DELIMITER, start_pos, start_line, start_column)

        # ".." проверяется раньше одиночной точки-разделителя
        match = self._PATTERNS["parent"].match(self.text, self.position)
        if match:
            self._advance(2)
            return Token(TokenKind.ID, "..", start_pos, start_line, start_column)

        match = self._PATTERNS[TokenKind.STRING].match(self.text, self.position)
        if match:
            self._advance(len(match.group(0)))
            value = match.group(1).replace('\\"', '"')
            return Token(TokenKind.STRING, value, start_pos, start_line, start_column)

        for kind in (TokenKind.SEP, TokenKind.ID):
            match = self._PATTERNS[kind].match(self.text, self.position)
            if match:
                value = match.group(0)
                self._advance(len(value))
                return Token(kind, value, start_pos, start_line, start_column)

        # Недопустимый символ, одиночная "}" или незакрытая строка
        return None

    def _advance(self, count: int) -> None:
        """
        Перемещает позицию на указанное количество символов,
        обновляя номера строк и колонок.
        """
        for _ in range(count):
            if self.position < self.length:
                if self.text[self.position] == '\n':
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.position += 1


def tokenize_template(text: str) -> List[Token]:
    """
    Удобная функция для токенизации шаблона.

    Args:
        text: Исходный текст шаблона

    Returns:
        Список токенов (с EOF в конце, если ввод корректен)
    """
    lexer = TemplateLexer(text)
    return lexer.tokenize()


__all__ = ["TemplateLexer", "tokenize_template"]
