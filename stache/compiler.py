"""
Компилятор шаблонов.

Публичный API, объединяющий лексер, парсер и рантайм: шаблон разбирается
один раз, а возвращаемая функция рендерит его для любых данных.
"""

from __future__ import annotations

from typing import Any, Callable, Mapping, Optional

from .context import ContextFrame
from .parser import parse_template
from .registry import TemplateRegistry, default_registry
from .runtime import TemplateRuntime

# render(context, helpers=None, partials=None) -> str
RenderFunction = Callable[..., str]


def compile_template(source: str, registry: Optional[TemplateRegistry] = None) -> RenderFunction:
    """
    Компилирует шаблон в функцию рендеринга.

    Args:
        source: Исходный текст шаблона
        registry: Реестр хелперов и партиалов (по умолчанию общий реестр процесса).
                  Читается в момент рендеринга, а не компиляции.

    Returns:
        Функция render(context, helpers=None, partials=None) -> str

    Raises:
        GrammarError: При синтаксической ошибке в шаблоне
    """
    program = parse_template(source)
    registry = default_registry if registry is None else registry

    def render(
        context: Any = None,
        helpers: Optional[Mapping[str, Any]] = None,
        partials: Optional[Mapping[str, str]] = None,
    ) -> str:
        runtime = TemplateRuntime(
            ContextFrame(data=context),
            registry.helpers_view(helpers),
            registry.partials_view(partials),
        )
        return runtime.evaluate(program)

    return render


def render_template(
    source: str,
    context: Any = None,
    helpers: Optional[Mapping[str, Any]] = None,
    partials: Optional[Mapping[str, str]] = None,
    registry: Optional[TemplateRegistry] = None,
) -> str:
    """Компилирует и сразу рендерит шаблон."""
    return compile_template(source, registry)(context, helpers, partials)


__all__ = ["RenderFunction", "compile_template", "render_template"]
