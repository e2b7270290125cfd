from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .errors import EMLUserError
from .jsonic import dumps as jdumps
from .version import DIST_NAME, tool_version

_LOG_FORMAT = "[%(levelname)s] %(message)s"


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="eml",
        description="Entered modules: import rules for entry-point files",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Общие аргументы логирования
    def add_logging(sp: argparse.ArgumentParser) -> None:
        grp = sp.add_mutually_exclusive_group()
        grp.add_argument("--debug", action="store_true", help="подробный лог в stderr (также EML_DEBUG=1)")
        grp.add_argument("--quiet", action="store_true", help="только предупреждения и ошибки в stderr")

    sp_check = sub.add_parser("check", help="проверить импорты в файлах проекта")
    sp_check.add_argument(
        "targets",
        nargs="*",
        type=Path,
        help="файлы или каталоги относительно --root (по умолчанию весь проект)",
    )
    sp_check.add_argument("--root", type=Path, default=None, help="корень проекта (по умолчанию текущий каталог)")
    sp_check.add_argument("--config", type=Path, default=None, help="путь к конфигу (по умолчанию <root>/eml.yaml)")
    sp_check.add_argument("--format", choices=["text", "json"], default="text", help="формат вывода")
    sp_check.add_argument("--alias", default=None, help="алиас корня top-level импортов (например: @ или ~)")
    sp_check.add_argument("--no-gitignore", action="store_true", help="не учитывать .gitignore при обходе")
    sp_check.add_argument(
        "--max-warnings",
        type=int,
        default=-1,
        metavar="N",
        help="код выхода 1, если предупреждений больше N (по умолчанию без ограничения)",
    )
    add_logging(sp_check)

    sp_classify = sub.add_parser("classify", help="разобрать пути импортов (JSON)")
    sp_classify.add_argument("paths", nargs="+", help="строки источников импорта, например ./ui/entry.ts")
    sp_classify.add_argument("--alias", default=None, help="алиас корня top-level импортов")
    sp_classify.add_argument(
        "--ext",
        action="append",
        metavar=".EXT",
        help="отрезаемое расширение (можно указать несколько; по умолчанию .ts .tsx .js .jsx)",
    )
    add_logging(sp_classify)

    sp_list = sub.add_parser("list", help="списки сущностей (JSON)")
    sp_list.add_argument("what", choices=["rules", "configs"], help="что вывести")
    add_logging(sp_list)

    return p


def _setup_logging(ns: argparse.Namespace) -> None:
    if getattr(ns, "debug", False) or os.environ.get("EML_DEBUG"):
        level = logging.DEBUG
    elif getattr(ns, "quiet", False):
        level = logging.WARNING
    else:
        level = logging.INFO
    log = logging.getLogger("eml")
    log.setLevel(level)
    # повторный вызов main() в одном процессе: прежний stderr мог быть уже закрыт
    for old in list(log.handlers):
        log.removeHandler(old)
    h = logging.StreamHandler(sys.stderr)
    h.setFormatter(logging.Formatter(_LOG_FORMAT))
    log.addHandler(h)


def _cmd_check(ns: argparse.Namespace) -> int:
    from .config import load_config
    from .engine import run_check
    from .formatters import format_text

    root = (ns.root or Path.cwd()).resolve()
    cfg = load_config(
        root,
        ns.config,
        alias=ns.alias,
        gitignore=False if ns.no_gitignore else None,
    )
    report = run_check(root, ns.targets, cfg)

    if ns.format == "json":
        sys.stdout.write(jdumps(report.model_dump(mode="json", by_alias=True)))
    else:
        sys.stdout.write(format_text(report))

    if report.error_count:
        return 1
    if 0 <= ns.max_warnings < report.warning_count:
        return 1
    return 0


def _cmd_classify(ns: argparse.Namespace) -> int:
    from .config import check_alias, check_extensions
    from .report import PathExplanation
    from .rules import PathPolicy, explain
    from .rules.entry_paths import DEFAULT_ALIAS, DEFAULT_EXTENSIONS

    # те же проверки, что и для значений из eml.yaml
    alias = DEFAULT_ALIAS if ns.alias is None else ns.alias
    exts = list(ns.ext) if ns.ext else list(DEFAULT_EXTENSIONS)
    check_alias(alias, "command line")
    check_extensions(exts, "--ext", "command line")

    policy = PathPolicy(top_level_alias=alias, extensions=tuple(exts))
    results: List[Dict[str, Any]] = []
    for path in ns.paths:
        c = explain(path, policy)
        results.append(PathExplanation(
            path=c.path,
            prefix_class=c.prefix_class.value,
            segments=c.segments,
            entry_name=c.entry_name,
            entry_kind=c.entry_kind.value if c.entry_kind else None,
            violation=c.violation.value if c.violation else None,
        ).model_dump(mode="json", by_alias=True))
    sys.stdout.write(jdumps({"results": results}))
    return 0


def _cmd_list(ns: argparse.Namespace) -> int:
    from .rules import get_preset, get_rule_class, list_presets, list_rules

    data: Dict[str, Any]
    if ns.what == "rules":
        rules = []
        for name in list_rules():
            rule = get_rule_class(name)()
            rules.append({
                "name": name,
                "type": rule.meta.type,
                "description": rule.meta.description,
                "recommended": rule.meta.recommended,
                "messages": rule.messages(),
            })
        data = {"plugin": {"name": DIST_NAME, "version": tool_version()}, "rules": rules}
    elif ns.what == "configs":
        data = {"configs": {name: get_preset(name) for name in list_presets()}}
    else:
        raise ValueError(f"Unknown list target: {ns.what}")
    sys.stdout.write(jdumps(data))
    return 0


_COMMANDS = {
    "check": _cmd_check,
    "classify": _cmd_classify,
    "list": _cmd_list,
}


def main(argv: Optional[list[str]] = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging(ns)

    try:
        return _COMMANDS[ns.cmd](ns)
    except EMLUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
