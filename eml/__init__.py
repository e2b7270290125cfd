from __future__ import annotations

# Public API:
#  • classify / explain — pure import path classifier (no I/O)
# The lint engine (tree-sitter, file discovery) lives in eml.engine
# and is not imported here.
from .rules.entry_paths import PathPolicy, ViolationKind, classify, explain

__all__ = ["PathPolicy", "ViolationKind", "classify", "explain"]
