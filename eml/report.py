"""
Модели отчёта `eml check` (JSON-протокол, camelCase).
"""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .version import DIST_NAME

PROTOCOL_VERSION = 1


class _Model(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Diagnostic(_Model):
    file: str
    line: int
    column: int
    end_line: int
    end_column: int
    rule_id: str
    message_id: str
    message: str
    severity: Literal["error", "warn"]
    import_path: str


class SkippedFile(_Model):
    file: str
    reason: str


class CheckReport(_Model):
    protocol: int = PROTOCOL_VERSION
    tool: str = DIST_NAME
    version: str
    root: str
    config: Optional[str] = None
    files_checked: int = 0
    error_count: int = 0
    warning_count: int = 0
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    skipped: List[SkippedFile] = Field(default_factory=list)


class PathExplanation(_Model):
    """Результат `eml classify` для одного пути."""
    path: str
    prefix_class: str
    segments: List[str]
    entry_name: Optional[str] = None
    entry_kind: Optional[str] = None
    violation: Optional[str] = None


__all__ = [
    "PROTOCOL_VERSION",
    "Diagnostic",
    "SkippedFile",
    "CheckReport",
    "PathExplanation",
]
