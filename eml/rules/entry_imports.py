"""
Rule `no-invalid-entry-imports`.

Thin adapter between extracted import sources and the path classifier:
a returned violation kind becomes a message id and a rendered message.
"""

from __future__ import annotations

from typing import Optional

from .base import BaseRule
from .entry_paths import ViolationKind, classify
from ..types import ImportSource, MessageId, RuleHit, RuleMeta, RuleName

RULE_NAME = RuleName("no-invalid-entry-imports")

_MESSAGES = {
    ViolationKind.INVALID_PARENT_IMPORT.value: (
        'Imports starting with ".." can only reference '
        "entry..<OPTIONAL-SEGMENTS>.children{ext} files"
    ),
    ViolationKind.INVALID_SUBDIRECTORY_IMPORT.value: (
        'Imports starting with "./some-directory/" can only reference '
        "entry.<OPTIONAL-SEGMENTS>{ext} files "
        "(not non-entry files or children-specific entry files)"
    ),
    ViolationKind.TOO_MANY_DIRECTORY_SEGMENTS.value: (
        "Imports can only reference files one directory level deep "
        "(found multiple directory segments)"
    ),
    ViolationKind.INVALID_TOP_LEVEL_IMPORT.value: (
        "Top-level imports must follow pattern "
        "{prefix}module-name/entry.<OPTIONAL-SEGMENTS>{ext}"
    ),
    ViolationKind.INVALID_TOP_LEVEL_IMPORT_DEPTH.value: (
        "Top-level imports must have exactly 1 directory segment (the module name). "
        "Use {prefix}module-name/entry.<SEGMENTS>{ext} format"
    ),
    ViolationKind.INVALID_TOP_LEVEL_IMPORT_CHILDREN.value: (
        "Top-level imports cannot reference entry..<OPTIONAL-SEGMENTS>.children{ext} files "
        "(children entries are for internal use only)"
    ),
}


class EntryImportsRule(BaseRule):
    """Enforce modular architecture import rules for entry point files."""

    meta = RuleMeta(
        name=RULE_NAME,
        type="problem",
        description="Enforce modular architecture import rules for entry point files",
        recommended=True,
        messages=_MESSAGES,
    )

    def render_message(self, message_id: str) -> str:
        template = self.meta.messages[message_id]
        return template.format(
            prefix=self.policy.top_level_prefix,
            ext=_extensions_hint(self.policy.extensions),
        )

    def check(self, source: ImportSource) -> Optional[RuleHit]:
        violation = classify(source.path, self.policy)
        if violation is None:
            return None
        return RuleHit(
            message_id=MessageId(violation.value),
            message=self.render_message(violation.value),
            source=source,
        )


def _extensions_hint(extensions: tuple[str, ...]) -> str:
    # (".ts", ".tsx") → "[.ts|.tsx]"
    if not extensions:
        return ""
    if len(extensions) == 1:
        return extensions[0]
    return "[" + "|".join(extensions) + "]"


__all__ = ["EntryImportsRule", "RULE_NAME"]
