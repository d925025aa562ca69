from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict

from .compiler import compile_template
from .config import load_data, load_partials, read_template
from .errors import StacheUserError
from .lexer import tokenize_template
from .parser import parse_template
from .printer import print_ast
from .report import build_tokens_report
from .version import tool_version

_LOG = logging.getLogger("stache")


def _setup_logging() -> None:
    level = logging.DEBUG if os.environ.get("STACHE_DEBUG") else logging.WARNING
    _LOG.setLevel(level)
    if not _LOG.handlers:
        h = logging.StreamHandler()
        fmt = logging.Formatter("[%(levelname)s] %(message)s")
        h.setFormatter(fmt)
        _LOG.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="stache",
        description="Mustache-style template compiler",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_template(sp: argparse.ArgumentParser) -> None:
        sp.add_argument("template", help="путь к файлу шаблона или - для чтения из stdin")

    sp_render = sub.add_parser("render", help="Отрендерить шаблон (текст)")
    add_template(sp_render)
    sp_render.add_argument(
        "--data",
        metavar="FILE",
        help="данные для рендеринга (YAML или JSON)",
    )
    sp_render.add_argument(
        "--partials",
        metavar="FILE",
        help="таблица партиалов: YAML-отображение имя -> текст шаблона",
    )

    sp_tokens = sub.add_parser("tokens", help="Токены шаблона (JSON)")
    add_template(sp_tokens)

    sp_print = sub.add_parser("print", help="Разобрать шаблон и напечатать AST обратно в текст")
    add_template(sp_print)

    return p


def _render(ns: argparse.Namespace) -> str:
    source = read_template(ns.template)
    context: Any = load_data(Path(ns.data)) if ns.data else {}
    partials: Dict[str, str] = load_partials(Path(ns.partials)) if ns.partials else {}

    render = compile_template(source)
    return render(context, partials=partials)


def main(argv: list[str] | None = None) -> int:
    _setup_logging()
    ns = _build_parser().parse_args(argv)

    try:
        if ns.cmd == "render":
            sys.stdout.write(_render(ns))
            return 0

        if ns.cmd == "tokens":
            tokens = tokenize_template(read_template(ns.template))
            report = build_tokens_report(tokens)
            sys.stdout.write(report.model_dump_json())
            return 0

        if ns.cmd == "print":
            program = parse_template(read_template(ns.template))
            sys.stdout.write(print_ast(program))
            return 0

    except StacheUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
