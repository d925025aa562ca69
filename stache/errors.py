"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from StacheUserError.

Programming errors and bugs, including exceptions raised by user helpers,
should NOT inherit from StacheUserError: they propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional

from .tokens import Token


class StacheUserError(Exception):
    """
    Base class for all user-facing errors in stache.

    These errors indicate problems that the user can fix:
    malformed templates, unknown partials, unreadable data files.
    """
    pass


class GrammarError(StacheUserError):
    """Ошибка синтаксического анализа: токены не удовлетворяют грамматике."""

    def __init__(self, message: str, token: Optional[Token] = None):
        if token is not None:
            super().__init__(f"{message} at {token.line}:{token.column} (token: {token.kind.name})")
        else:
            super().__init__(message)
        self.message = message
        self.token = token
        self.line = token.line if token is not None else None
        self.column = token.column if token is not None else None


class PartialNotFoundError(StacheUserError):
    """Партиал с указанным именем не зарегистрирован."""

    def __init__(self, name: str):
        super().__init__(f"Partial '{name}' is not registered")
        self.name = name


class ConfigError(StacheUserError):
    """Ошибка загрузки файла с данными или таблицей партиалов."""
    pass


__all__ = ["StacheUserError", "GrammarError", "PartialNotFoundError", "ConfigError"]
