"""
AST-узлы шаблона.

Определяет закрытый набор неизменяемых классов узлов для представления
структуры шаблонов и протокол посетителя для их обхода.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, ClassVar, Optional, Tuple, Union, cast


class NodeKind(enum.Enum):
    """Типы узлов AST."""
    PROGRAM = "program"
    CONTENT = "content"
    COMMENT = "comment"
    MUSTACHE = "mustache"
    BLOCK = "block"
    PARTIAL = "partial"
    PATH = "path"
    STRING = "string"


@dataclass(frozen=True)
class TemplateNode:
    """Базовый класс для всех узлов AST шаблона."""

    kind: ClassVar[NodeKind]

    def accept(self, visitor: NodeVisitor) -> Any:
        """Передаёт узел посетителю, который выбирает операцию по типу узла."""
        return visitor.visit(self)


@dataclass(frozen=True)
class PathExpression(TemplateNode):
    """
    Путь в цепочке контекстов: foo, foo/bar, ../foo, this.

    Attributes:
        parts: Именованные сегменты пути (пусто для this и "..")
        depth: Количество ведущих сегментов ".."
        original: Исходная запись пути в шаблоне
    """
    kind: ClassVar[NodeKind] = NodeKind.PATH

    parts: Tuple[str, ...]
    depth: int = 0
    original: str = ""

    @property
    def is_simple(self) -> bool:
        """Простое имя без разделителей и ссылок на родителя (кандидат в хелперы)."""
        return self.depth == 0 and len(self.parts) == 1 and self.original == self.parts[0]


@dataclass(frozen=True)
class StringLiteral(TemplateNode):
    """Строковый параметр в двойных кавычках."""
    kind: ClassVar[NodeKind] = NodeKind.STRING

    value: str


# Параметр вызова хелпера
Expression = Union[PathExpression, StringLiteral]


@dataclass(frozen=True)
class Program(TemplateNode):
    """Упорядоченная последовательность инструкций. Порядок равен порядку вывода."""
    kind: ClassVar[NodeKind] = NodeKind.PROGRAM

    statements: Tuple[TemplateNode, ...] = ()


@dataclass(frozen=True)
class ContentStatement(TemplateNode):
    """
    Обычный текстовый контент в шаблоне.

    Выводится в результат как есть.
    """
    kind: ClassVar[NodeKind] = NodeKind.CONTENT

    text: str


@dataclass(frozen=True)
class CommentStatement(TemplateNode):
    """Комментарий {{! ... }}. Никогда не попадает в вывод."""
    kind: ClassVar[NodeKind] = NodeKind.COMMENT

    text: str


@dataclass(frozen=True)
class MustacheStatement(TemplateNode):
    """Подстановка значения или вызов хелпера: {{path param...}}."""
    kind: ClassVar[NodeKind] = NodeKind.MUSTACHE

    path: PathExpression
    params: Tuple[Expression, ...] = ()


@dataclass(frozen=True)
class BlockStatement(TemplateNode):
    """
    Блок {{#path param...}}...{{^}}...{{/path}}.

    Для инвертированной секции {{^path}}...{{/path}} флаг inverted
    установлен, а тело хранится в program.
    """
    kind: ClassVar[NodeKind] = NodeKind.BLOCK

    path: PathExpression
    params: Tuple[Expression, ...]
    program: Program
    inverse: Optional[Program] = None
    close_path: Optional[PathExpression] = None
    inverted: bool = False


@dataclass(frozen=True)
class PartialStatement(TemplateNode):
    """Включение партиала {{>name}} или {{>name path}}."""
    kind: ClassVar[NodeKind] = NodeKind.PARTIAL

    name: str
    context: Optional[PathExpression] = None


class NodeVisitor(ABC):
    """
    Посетитель AST.

    Определяет по одной операции на каждый тип узла. Диспетчеризация
    исчерпывающая: неизвестный тип узла является ошибкой программы.
    """

    def visit(self, node: TemplateNode) -> Any:
        kind = node.kind

        if kind == NodeKind.PROGRAM:
            return self.visit_program(cast(Program, node))
        elif kind == NodeKind.CONTENT:
            return self.visit_content(cast(ContentStatement, node))
        elif kind == NodeKind.COMMENT:
            return self.visit_comment(cast(CommentStatement, node))
        elif kind == NodeKind.MUSTACHE:
            return self.visit_mustache(cast(MustacheStatement, node))
        elif kind == NodeKind.BLOCK:
            return self.visit_block(cast(BlockStatement, node))
        elif kind == NodeKind.PARTIAL:
            return self.visit_partial(cast(PartialStatement, node))
        elif kind == NodeKind.PATH:
            return self.visit_path(cast(PathExpression, node))
        elif kind == NodeKind.STRING:
            return self.visit_string(cast(StringLiteral, node))
        else:
            raise TypeError(f"Unknown node kind: {kind}")

    @abstractmethod
    def visit_program(self, node: Program) -> Any: ...

    @abstractmethod
    def visit_content(self, node: ContentStatement) -> Any: ...

    @abstractmethod
    def visit_comment(self, node: CommentStatement) -> Any: ...

    @abstractmethod
    def visit_mustache(self, node: MustacheStatement) -> Any: ...

    @abstractmethod
    def visit_block(self, node: BlockStatement) -> Any: ...

    @abstractmethod
    def visit_partial(self, node: PartialStatement) -> Any: ...

    @abstractmethod
    def visit_path(self, node: PathExpression) -> Any: ...

    @abstractmethod
    def visit_string(self, node: StringLiteral) -> Any: ...


__all__ = [
    "NodeKind",
    "TemplateNode",
    "PathExpression",
    "StringLiteral",
    "Expression",
    "Program",
    "ContentStatement",
    "CommentStatement",
    "MustacheStatement",
    "BlockStatement",
    "PartialStatement",
    "NodeVisitor",
]
