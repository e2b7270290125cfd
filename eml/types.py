from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, NewType


# ---- Aliases for clarity ----
Severity = Literal["error", "warn", "off"]
RuleName = NewType("RuleName", str)  # "no-invalid-entry-imports"
MessageId = NewType("MessageId", str)  # "invalidParentImport", ...
RepoRelPath = NewType("RepoRelPath", str)  # repo-root relative POSIX path

SEVERITIES: tuple[str, ...] = ("error", "warn", "off")


# ---- Исходный импорт ----

@dataclass(frozen=True)
class ImportSource:
    """
    Строковый литерал источника одного import-выражения.

    Позиции 1-based, колонки считаются в символах (не в байтах)
    и указывают на литерал вместе с кавычками.
    """
    path: str
    line: int = 1
    column: int = 1
    end_line: int = 1
    end_column: int = 1


# ---- Правила ----

@dataclass(frozen=True)
class RuleMeta:
    name: RuleName
    type: Literal["problem", "suggestion", "layout"]
    description: str
    recommended: bool = False
    messages: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class RuleHit:
    """Результат срабатывания правила на одном импорте (до назначения severity)."""
    message_id: MessageId
    message: str
    source: ImportSource
