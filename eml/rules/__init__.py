from __future__ import annotations

# Public API of rules package:
#  • classify / explain — pure import path classifier
#  • get_rule_class — lazy retrieval of rule class by name
#  • get_preset — named rule severity presets ("recommended")
from .entry_paths import (
    DEFAULT_POLICY,
    Classification,
    EntryKind,
    PathPolicy,
    PrefixClass,
    ViolationKind,
    classify,
    explain,
)
from .registry import (
    get_preset,
    get_rule_class,
    list_presets,
    list_rules,
    register_lazy,
    register_preset,
)

__all__ = [
    "DEFAULT_POLICY",
    "Classification",
    "EntryKind",
    "PathPolicy",
    "PrefixClass",
    "ViolationKind",
    "classify",
    "explain",
    "get_preset",
    "get_rule_class",
    "list_presets",
    "list_rules",
    "register_lazy",
    "register_preset",
]

# ---- Lightweight (lazy) registration of built-in rules ---------------------
# Only module:class strings here; the rule module is imported on first request.
register_lazy(name="no-invalid-entry-imports", module=".entry_imports", class_name="EntryImportsRule")

register_preset("recommended", {"no-invalid-entry-imports": "error"})
