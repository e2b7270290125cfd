"""
Lint engine: discovered files → import sources → rules → report.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Sequence

from .adapters import extract_imports
from .config.model import LintConfig
from .discovery import discover_files
from .report import CheckReport, Diagnostic, SkippedFile
from .rules import get_rule_class
from .rules.base import BaseRule
from .types import Severity
from .version import tool_version

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BoundRule:
    rule: BaseRule
    severity: Severity


def bind_rules(cfg: LintConfig) -> List[BoundRule]:
    """Инстанцирует включённые правила с политикой из конфига."""
    return [
        BoundRule(get_rule_class(name)(cfg.policy), severity)
        for name, severity in sorted(cfg.enabled_rules().items())
    ]


def lint_text(text: str, ext: str, rules: Sequence[BoundRule], *, file: str = "<text>") -> List[Diagnostic]:
    """
    Проверяет текст одного файла.

    Args:
        text: Содержимое файла
        ext: Расширение ("ts", ".tsx", ...) — определяет грамматику
        rules: Связанные правила
        file: Имя файла для диагностик
    """
    diagnostics: List[Diagnostic] = []
    for source in extract_imports(text, ext):
        for bound in rules:
            hit = bound.rule.check(source)
            if hit is None:
                continue
            diagnostics.append(Diagnostic(
                file=file,
                line=source.line,
                column=source.column,
                end_line=source.end_line,
                end_column=source.end_column,
                rule_id=bound.rule.name,
                message_id=hit.message_id,
                message=hit.message,
                severity=bound.severity,
                import_path=source.path,
            ))
    return diagnostics


def run_check(root: Path, targets: Sequence[Path], cfg: LintConfig) -> CheckReport:
    """
    Проверяет все файлы проекта, попадающие под цели.

    Нечитаемые файлы попадают в `skipped` и не прерывают прогон.
    """
    root = root.resolve()
    rules = bind_rules(cfg)
    files = discover_files(root, cfg, targets)
    logger.debug("Checking %d file(s) with rules %s", len(files), [b.rule.name for b in rules])

    diagnostics: List[Diagnostic] = []
    skipped: List[SkippedFile] = []
    checked = 0

    for rel in files:
        path = root / rel
        try:
            text = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Skipping {rel}: {e}")
            skipped.append(SkippedFile(file=rel, reason=str(e)))
            continue
        checked += 1
        if rules:
            diagnostics.extend(lint_text(text, path.suffix, rules, file=rel))

    return CheckReport(
        version=tool_version(),
        root=root.as_posix(),
        config=cfg.source.as_posix() if cfg.source else None,
        files_checked=checked,
        error_count=sum(1 for d in diagnostics if d.severity == "error"),
        warning_count=sum(1 for d in diagnostics if d.severity == "warn"),
        diagnostics=diagnostics,
        skipped=skipped,
    )


__all__ = ["BoundRule", "bind_rules", "lint_text", "run_check"]
