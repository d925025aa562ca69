"""
stache — компилятор mustache-шаблонов.

Шаблон разбирается в неизменяемое AST и компилируется в функцию
рендеринга, которая обходит дерево с учётом данных, хелперов и партиалов.
"""

from __future__ import annotations

from .compiler import compile_template, render_template
from .context import ContextFrame
from .errors import ConfigError, GrammarError, PartialNotFoundError, StacheUserError
from .lexer import TemplateLexer, tokenize_template
from .parser import TemplateParser, parse_template
from .printer import print_ast
from .registry import Helper, TemplateRegistry, default_registry, register_helper, register_partial
from .tokens import Token, TokenKind

# Короткие имена публичного API
parse = parse_template
compile = compile_template
render = render_template
tokenize = tokenize_template

__all__ = [
    "parse",
    "compile",
    "render",
    "tokenize",
    "print_ast",
    "register_helper",
    "register_partial",
    "compile_template",
    "render_template",
    "parse_template",
    "tokenize_template",
    "TemplateLexer",
    "TemplateParser",
    "TemplateRegistry",
    "Helper",
    "default_registry",
    "ContextFrame",
    "Token",
    "TokenKind",
    "StacheUserError",
    "GrammarError",
    "PartialNotFoundError",
    "ConfigError",
]
