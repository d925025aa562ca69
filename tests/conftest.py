from typing import List

import pytest

from stache.registry import TemplateRegistry, default_registry
from stache.tokens import Token, TokenKind


@pytest.fixture
def registry() -> TemplateRegistry:
    """Изолированный реестр со встроенными хелперами."""
    return TemplateRegistry()


@pytest.fixture
def restore_default_registry():
    """Восстанавливает общий реестр процесса после теста."""
    helpers = dict(default_registry.helpers)
    partials = dict(default_registry.partials)
    yield default_registry
    default_registry.helpers.clear()
    default_registry.helpers.update(helpers)
    default_registry.partials.clear()
    default_registry.partials.update(partials)


def kinds(tokens: List[Token]) -> List[str]:
    """Имена типов токенов без завершающего EOF."""
    return [t.kind.name for t in tokens if t.kind != TokenKind.EOF]
