"""
Парсер шаблонов с рекурсивным спуском.

Строит неизменяемое AST из последовательности токенов.

Грамматика:
program   → statement*
statement → CONTENT | COMMENT | mustache | block | inverted | partial
mustache  → OPEN call CLOSE
block     → OPEN_BLOCK call CLOSE program (OPEN_INVERSE CLOSE program)? close
inverted  → OPEN_INVERSE call CLOSE program close
partial   → OPEN_PARTIAL ID path? CLOSE
close     → OPEN_ENDBLOCK path CLOSE
call      → path param*
param     → path | STRING
path      → ID (SEP ID)*

Голый {{^}} допустим только непосредственно в основном теле блока.
"""

from __future__ import annotations

from typing import List, Optional, Tuple

from .errors import GrammarError
from .lexer import tokenize_template
from .nodes import (
    BlockStatement,
    CommentStatement,
    ContentStatement,
    Expression,
    MustacheStatement,
    PartialStatement,
    PathExpression,
    Program,
    StringLiteral,
    TemplateNode,
)
from .tokens import Token, TokenKind


PARENT_SEGMENT = ".."
THIS_SEGMENT = "this"


class TemplateParser:
    """
    Рекурсивный парсер для шаблонов.

    Обрабатывает последовательность токенов и строит AST, корректно
    обрабатывая вложенные блоки и инверсные секции.
    """

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.position = 0

    def parse(self) -> Program:
        """
        Парсит всю последовательность токенов в AST.

        Returns:
            Корневой узел Program

        Raises:
            GrammarError: При ошибке синтаксического анализа
        """
        if not self.tokens or self.tokens[-1].kind != TokenKind.EOF:
            # Лексер остановился на некорректном вводе
            last = self.tokens[-1] if self.tokens else None
            raise GrammarError("Unexpected end of template", last)

        program = self._parse_program(allow_inverse=False)

        current = self._current_token()
        if current.kind == TokenKind.OPEN_ENDBLOCK:
            raise GrammarError("Closing tag without matching block", current)
        if current.kind != TokenKind.EOF:
            raise GrammarError(f"Unexpected token {current.kind.name}", current)

        return program

    def _parse_program(self, allow_inverse: bool) -> Program:
        """
        Парсит последовательность инструкций до закрывающего тега,
        инверсной секции или конца ввода.
        """
        statements: List[TemplateNode] = []

        while True:
            current = self._current_token()
            if current.kind in (TokenKind.EOF, TokenKind.OPEN_ENDBLOCK):
                break
            if self._at_bare_inverse():
                if allow_inverse:
                    break
                raise GrammarError("Inverse section '{{^}}' outside of a block", current)
            statements.append(self._parse_statement())

        return Program(statements=tuple(statements))

    def _parse_statement(self) -> TemplateNode:
        current = self._current_token()

        if current.kind == TokenKind.CONTENT:
            self._advance()
            return ContentStatement(text=current.text)
        elif current.kind == TokenKind.COMMENT:
            self._advance()
            return CommentStatement(text=current.text)
        elif current.kind == TokenKind.OPEN:
            return self._parse_mustache()
        elif current.kind == TokenKind.OPEN_BLOCK:
            return self._parse_block()
        elif current.kind == TokenKind.OPEN_INVERSE:
            return self._parse_inverted()
        elif current.kind == TokenKind.OPEN_PARTIAL:
            return self._parse_partial()
        else:
            raise GrammarError(f"Unexpected token {current.kind.name}", current)

    def _parse_mustache(self) -> MustacheStatement:
        """Парсит подстановку {{path param...}}."""
        self._consume(TokenKind.OPEN)
        path, params = self._parse_call()
        self._consume(TokenKind.CLOSE)
        return MustacheStatement(path=path, params=params)

    def _parse_block(self) -> BlockStatement:
        """Парсит блок {{#path}}...{{^}}...{{/path}}."""
        open_token = self._consume(TokenKind.OPEN_BLOCK)
        path, params = self._parse_call()
        self._consume(TokenKind.CLOSE)

        program = self._parse_program(allow_inverse=True)

        inverse: Optional[Program] = None
        if self._at_bare_inverse():
            self._advance()
            self._advance()
            inverse = self._parse_program(allow_inverse=False)

        close_path = self._parse_close(path, open_token)
        return BlockStatement(
            path=path,
            params=params,
            program=program,
            inverse=inverse,
            close_path=close_path,
        )

    def _parse_inverted(self) -> BlockStatement:
        """Парсит инвертированную секцию {{^path}}...{{/path}}."""
        open_token = self._consume(TokenKind.OPEN_INVERSE)
        path, params = self._parse_call()
        self._consume(TokenKind.CLOSE)

        program = self._parse_program(allow_inverse=False)

        close_path = self._parse_close(path, open_token)
        return BlockStatement(
            path=path,
            params=params,
            program=program,
            close_path=close_path,
            inverted=True,
        )

    def _parse_close(self, open_path: PathExpression, open_token: Token) -> PathExpression:
        """Парсит {{/path}} и сверяет его с открывающим тегом."""
        current = self._current_token()
        if current.kind != TokenKind.OPEN_ENDBLOCK:
            raise GrammarError(f"Unclosed block '{open_path.original}'", open_token)
        self._advance()

        close_path = self._parse_path()
        if close_path.original != open_path.original:
            raise GrammarError(
                f"'{open_path.original}' doesn't match '{close_path.original}'",
                current
            )
        self._consume(TokenKind.CLOSE)
        return close_path

    def _parse_partial(self) -> PartialStatement:
        """Парсит партиал {{>name}} или {{>name path}}."""
        self._consume(TokenKind.OPEN_PARTIAL)
        name_token = self._consume(TokenKind.ID, "Expected partial name")

        context: Optional[PathExpression] = None
        if self._current_token().kind == TokenKind.ID:
            context = self._parse_path()

        self._consume(TokenKind.CLOSE)
        return PartialStatement(name=name_token.text, context=context)

    def _parse_call(self) -> Tuple[PathExpression, Tuple[Expression, ...]]:
        """Парсит путь с параметрами: path param*."""
        path = self._parse_path()

        params: List[Expression] = []
        while True:
            current = self._current_token()
            if current.kind == TokenKind.STRING:
                self._advance()
                params.append(StringLiteral(value=current.text))
            elif current.kind == TokenKind.ID:
                params.append(self._parse_path())
            else:
                break

        return path, tuple(params)

    def _parse_path(self) -> PathExpression:
        """
        Парсит путь ID (SEP ID)*.

        Ведущие сегменты ".." увеличивают глубину, ведущий "this"
        обозначает текущий контекст.
        """
        first = self._consume(TokenKind.ID, "Expected identifier")
        segments = [first]
        original = first.text

        while self._current_token().kind == TokenKind.SEP:
            separator = self._advance()
            segment = self._consume(TokenKind.ID, "Expected identifier after separator")
            segments.append(segment)
            original += separator.text + segment.text

        parts: List[str] = []
        depth = 0
        for index, segment in enumerate(segments):
            if segment.text == PARENT_SEGMENT:
                if parts:
                    raise GrammarError("'..' must precede named path segments", segment)
                depth += 1
            elif segment.text == THIS_SEGMENT and index == depth:
                continue
            else:
                parts.append(segment.text)

        return PathExpression(parts=tuple(parts), depth=depth, original=original)

    # Вспомогательные методы для работы с токенами

    def _current_token(self) -> Token:
        """Возвращает текущий токен без продвижения позиции."""
        if self.position >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[self.position]

    def _peek(self, offset: int = 1) -> Token:
        """Возвращает токен на указанном смещении от текущей позиции."""
        pos = self.position + offset
        if pos >= len(self.tokens):
            return self.tokens[-1]
        return self.tokens[pos]

    def _advance(self) -> Token:
        """Продвигает позицию и возвращает предыдущий токен."""
        current = self._current_token()
        if self.position < len(self.tokens):
            self.position += 1
        return current

    def _at_bare_inverse(self) -> bool:
        """Проверяет, стоит ли парсер на голом {{^}}."""
        return (
            self._current_token().kind == TokenKind.OPEN_INVERSE
            and self._peek().kind == TokenKind.CLOSE
        )

    def _consume(self, expected: TokenKind, message: Optional[str] = None) -> Token:
        """
        Потребляет токен ожидаемого типа.

        Raises:
            GrammarError: Если токен не соответствует ожидаемому типу
        """
        current = self._current_token()
        if current.kind != expected:
            raise GrammarError(
                message or f"Expected {expected.name}, got {current.kind.name}",
                current
            )
        return self._advance()


def parse_tokens(tokens: List[Token]) -> Program:
    """Парсит готовую последовательность токенов."""
    return TemplateParser(tokens).parse()


def parse_template(text: str) -> Program:
    """
    Удобная функция для разбора шаблона.

    Args:
        text: Исходный текст шаблона

    Returns:
        Корневой узел AST

    Raises:
        GrammarError: При синтаксической ошибке
    """
    return parse_tokens(tokenize_template(text))


__all__ = ["TemplateParser", "parse_tokens", "parse_template", "PARENT_SEGMENT", "THIS_SEGMENT"]
