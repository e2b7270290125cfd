from __future__ import annotations

from itertools import groupby
from typing import List

from .report import CheckReport


def _plural(n: int, word: str) -> str:
    return f"{n} {word}" if n == 1 else f"{n} {word}s"


def format_text(report: CheckReport) -> str:
    """
    Человекочитаемый вывод в духе eslint "stylish":

        src/app/page.ts
          3:20  error  <message>  no-invalid-entry-imports

        1 problem (1 error, 0 warnings)

    Пустая строка, если проблем нет и ничего не пропущено.
    """
    lines: List[str] = []
    diags = sorted(report.diagnostics, key=lambda d: (d.file, d.line, d.column, d.rule_id))
    for file, items in groupby(diags, key=lambda d: d.file):
        lines.append(file)
        for d in items:
            lines.append(f"  {d.line}:{d.column}  {d.severity}  {d.message}  {d.rule_id}")
        lines.append("")

    for s in report.skipped:
        lines.append(f"skipped {s.file}: {s.reason}")
    if report.skipped:
        lines.append("")

    total = report.error_count + report.warning_count
    if total:
        lines.append(
            f"{_plural(total, 'problem')} "
            f"({_plural(report.error_count, 'error')}, {_plural(report.warning_count, 'warning')})"
        )

    return "\n".join(lines) + ("\n" if lines else "")


__all__ = ["format_text"]
