"""
Вычислитель AST шаблона.

Обходит дерево в глубину слева направо и накапливает вывод в буфере,
принадлежащем одному вызову рендеринга.
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional

from .context import ContextFrame
from .errors import PartialNotFoundError
from .helpers import (
    BLOCK_HELPER_MISSING,
    BlockFn,
    block_helper_missing,
    block_helper_missing_inverse,
    is_empty_value,
)
from .nodes import (
    BlockStatement,
    CommentStatement,
    ContentStatement,
    MustacheStatement,
    NodeVisitor,
    PartialStatement,
    PathExpression,
    Program,
    StringLiteral,
)
from .parser import parse_template
from .registry import Helper, as_helper

logger = logging.getLogger(__name__)

# Используется, если blockHelperMissing отсутствует в таблицах
_FALLBACK_MISSING_HELPER = Helper(fn=block_helper_missing, inverse_fn=block_helper_missing_inverse)


def to_output(value: Any) -> str:
    """Строковое представление значения для вывода; None даёт пустую строку."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


class TemplateRuntime(NodeVisitor):
    """
    Рантайм шаблона.

    Связывает AST с кадром контекста и таблицами хелперов и партиалов.
    Каждый экземпляр владеет собственным буфером вывода.
    """

    def __init__(self, frame: ContextFrame, helpers: Mapping[str, Any], partials: Mapping[str, str]):
        """
        Args:
            frame: Текущий кадр контекста
            helpers: Таблица хелперов (с уже применёнными перекрытиями)
            partials: Таблица партиалов (с уже применёнными перекрытиями)
        """
        self.frame = frame
        self.helpers = helpers
        self.partials = partials
        self.buffer: List[str] = []

    def evaluate(self, program: Program) -> str:
        """Вычисляет программу и возвращает накопленный вывод."""
        program.accept(self)
        return "".join(self.buffer)

    # Инструкции

    def visit_program(self, node: Program) -> None:
        for statement in node.statements:
            statement.accept(self)

    def visit_content(self, node: ContentStatement) -> None:
        self.buffer.append(node.text)

    def visit_comment(self, node: CommentStatement) -> None:
        pass

    def visit_mustache(self, node: MustacheStatement) -> None:
        helper = self._find_helper(node.path)
        if helper is not None:
            params = [param.accept(self) for param in node.params]
            value = helper(self.frame.data, *params)
        else:
            value = node.path.accept(self)
        self.buffer.append(to_output(value))

    def visit_block(self, node: BlockStatement) -> None:
        this = self.frame.data
        helper = self._find_helper(node.path)

        params = [param.accept(self) for param in node.params]
        if params:
            value, extra = params[0], params[1:]
        elif helper is None:
            value, extra = node.path.accept(self), []
        else:
            value, extra = this, []

        if node.inverted:
            result = self._invoke_inverted(node, helper, this, value, extra)
        else:
            if helper is None:
                logger.debug("No helper '%s', falling back to %s", node.path.original, BLOCK_HELPER_MISSING)
                helper = self._missing_helper()
            fn = self._block_fn(node.program)
            inverse = self._block_fn(node.inverse)
            result = helper(this, value, fn, inverse, *extra)

        self.buffer.append(to_output(result))

    def visit_partial(self, node: PartialStatement) -> None:
        source = self.partials.get(node.name)
        if source is None:
            raise PartialNotFoundError(node.name)

        program = parse_template(source)
        if node.context is None:
            frame = self.frame
        else:
            frame = self.frame.child(node.context.accept(self))

        self.buffer.append(self._evaluate_in(program, frame))

    # Выражения

    def visit_path(self, node: PathExpression) -> Any:
        return self.frame.resolve(node)

    def visit_string(self, node: StringLiteral) -> Any:
        return node.value

    # Вспомогательные методы

    def _invoke_inverted(
        self,
        node: BlockStatement,
        helper: Optional[Helper],
        this: Any,
        value: Any,
        extra: List[Any],
    ) -> Any:
        """
        Вычисляет инвертированную секцию {{^name}}...{{/name}}.

        - хелпер с инверсной формой решает сам: inverse_fn(this, value, body)
        - без хелпера тело рендерится только для пустого значения,
          через инверсную форму blockHelperMissing
        - хелпер без инверсной формы получает тело в качестве inverse
        """
        body = self._block_fn(node.program)

        if helper is None:
            helper = self._missing_helper()
            if helper.inverse_fn is not None:
                if not is_empty_value(value):
                    return ""
                return helper.inverse_fn(this, this, body)
        elif helper.inverse_fn is not None:
            return helper.inverse_fn(this, value, body)

        return helper(this, value, self._block_fn(None), body, *extra)

    def _find_helper(self, path: PathExpression) -> Optional[Helper]:
        """Хелпером может быть только простое имя без разделителей."""
        if not path.is_simple:
            return None
        value = self.helpers.get(path.parts[0])
        return as_helper(value) if value is not None else None

    def _missing_helper(self) -> Helper:
        value = self.helpers.get(BLOCK_HELPER_MISSING)
        return as_helper(value) if value is not None else _FALLBACK_MISSING_HELPER

    def _block_fn(self, program: Optional[Program]) -> BlockFn:
        """Тело блока: рендерит программу в новом кадре, дочернем к текущему."""
        if program is None:
            return lambda data: ""

        def render_block(data: Any) -> str:
            return self._evaluate_in(program, self.frame.child(data))

        return render_block

    def _evaluate_in(self, program: Program, frame: ContextFrame) -> str:
        return TemplateRuntime(frame, self.helpers, self.partials).evaluate(program)


__all__ = ["TemplateRuntime", "to_output"]
