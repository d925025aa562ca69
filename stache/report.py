"""
Модели JSON-отчётов CLI.
"""

from __future__ import annotations

from typing import List

from pydantic import BaseModel

from .tokens import Token, TokenKind


class TokenInfo(BaseModel):
    kind: str
    text: str
    line: int
    column: int


class TokensReport(BaseModel):
    """Результат токенизации шаблона."""
    tokens: List[TokenInfo]
    complete: bool  # False, если лексер остановился на некорректном вводе


def build_tokens_report(tokens: List[Token]) -> TokensReport:
    return TokensReport(
        tokens=[
            TokenInfo(kind=t.kind.name, text=t.text, line=t.line, column=t.column)
            for t in tokens
        ],
        complete=bool(tokens) and tokens[-1].kind == TokenKind.EOF,
    )


__all__ = ["TokenInfo", "TokensReport", "build_tokens_report"]
