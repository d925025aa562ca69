"""
Печать AST обратно в исходный текст шаблона.

Разбор напечатанного текста даёт структурно равное AST.
"""

from __future__ import annotations

from typing import List, Tuple

from .nodes import (
    BlockStatement,
    CommentStatement,
    ContentStatement,
    Expression,
    MustacheStatement,
    NodeVisitor,
    PartialStatement,
    PathExpression,
    Program,
    StringLiteral,
    TemplateNode,
)


class TemplatePrinter(NodeVisitor):
    """Посетитель, собирающий текст шаблона из узлов."""

    def visit_program(self, node: Program) -> str:
        return "".join(statement.accept(self) for statement in node.statements)

    def visit_content(self, node: ContentStatement) -> str:
        return node.text

    def visit_comment(self, node: CommentStatement) -> str:
        return f"{{{{!{node.text}}}}}"

    def visit_mustache(self, node: MustacheStatement) -> str:
        return f"{{{{{self._call(node.path, node.params)}}}}}"

    def visit_block(self, node: BlockStatement) -> str:
        close_path = node.close_path or node.path
        opener = "^" if node.inverted else "#"

        parts: List[str] = [
            f"{{{{{opener}{self._call(node.path, node.params)}}}}}",
            node.program.accept(self),
        ]
        if node.inverse is not None:
            parts.append("{{^}}")
            parts.append(node.inverse.accept(self))
        parts.append(f"{{{{/{close_path.accept(self)}}}}}")
        return "".join(parts)

    def visit_partial(self, node: PartialStatement) -> str:
        if node.context is None:
            return f"{{{{>{node.name}}}}}"
        return f"{{{{>{node.name} {node.context.accept(self)}}}}}"

    def visit_path(self, node: PathExpression) -> str:
        return node.original

    def visit_string(self, node: StringLiteral) -> str:
        escaped = node.value.replace('"', '\\"')
        return f'"{escaped}"'

    def _call(self, path: PathExpression, params: Tuple[Expression, ...]) -> str:
        return " ".join([path.accept(self), *(param.accept(self) for param in params)])


def print_ast(node: TemplateNode) -> str:
    """Печатает узел AST в виде текста шаблона."""
    return node.accept(TemplatePrinter())


__all__ = ["TemplatePrinter", "print_ast"]
