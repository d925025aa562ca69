from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, Dict

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .errors import ConfigError

STDIN_MARKER = "-"

# --------------------------------------------------------------------------- #
# YAML loader (safe-режим читает и JSON)
# --------------------------------------------------------------------------- #
_yaml = YAML(typ="safe")


# --------------------------------------------------------------------------- #
# HELPERS
# --------------------------------------------------------------------------- #
def _read_text(path: Path) -> str:
    if not path.exists():
        raise ConfigError(f"File not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Failed to read {path}: {e}") from e


def _load_yaml(path: Path) -> Any:
    text = _read_text(path)
    try:
        return _yaml.load(text)
    except YAMLError as e:
        raise ConfigError(f"Invalid YAML/JSON in {path}: {e}") from e


# --------------------------------------------------------------------------- #
# PUBLIC API
# --------------------------------------------------------------------------- #
def read_template(source: str) -> str:
    """
    Прочитать текст шаблона.

    • "-" — читать из stdin.
    • Иначе — путь к файлу шаблона.
    """
    if source == STDIN_MARKER:
        return sys.stdin.read()
    return _read_text(Path(source))


def load_data(path: Path) -> Any:
    """
    Загрузить данные для рендеринга из YAML или JSON.

    Пустой документ даёт пустой словарь.
    """
    data = _load_yaml(path)
    return {} if data is None else data


def load_partials(path: Path) -> Dict[str, str]:
    """
    Загрузить таблицу партиалов: отображение имя -> текст шаблона.

    Все значения должны быть строками.
    """
    raw = _load_yaml(path)
    if raw is None:
        return {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Partials file {path} must contain a mapping, got {type(raw).__name__}")

    partials: Dict[str, str] = {}
    for name, source in raw.items():
        if not isinstance(source, str):
            raise ConfigError(f"Partial '{name}' in {path} must be a string")
        partials[str(name)] = source
    return partials


__all__ = ["read_template", "load_data", "load_partials"]
