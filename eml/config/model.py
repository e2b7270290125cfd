from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from ..rules.entry_paths import DEFAULT_EXTENSIONS, DEFAULT_POLICY, PathPolicy
from ..types import Severity

# Scanned for imports in addition to the stripped extensions.
EXTRA_LINT_EXTENSIONS: Tuple[str, ...] = (".mts", ".cts", ".mjs", ".cjs")
DEFAULT_LINT_EXTENSIONS: Tuple[str, ...] = DEFAULT_EXTENSIONS + EXTRA_LINT_EXTENSIONS

# Always pruned during directory walks, regardless of .gitignore.
ALWAYS_SKIP_DIRS: Tuple[str, ...] = (".git", "node_modules")


@dataclass
class ConfigFile:
    """Сырой eml.yaml как есть (после типизации, до разрешения пресетов)."""
    extends: Optional[Union[str, List[str]]] = None
    top_level_alias: str = DEFAULT_POLICY.top_level_alias
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    lint_extensions: Optional[List[str]] = None
    exclude: List[str] = field(default_factory=list)
    gitignore: bool = True
    rules: Dict[str, Severity] = field(default_factory=dict)


@dataclass(frozen=True)
class LintConfig:
    """Итоговая конфигурация прогона."""
    policy: PathPolicy = DEFAULT_POLICY
    lint_extensions: Tuple[str, ...] = DEFAULT_LINT_EXTENSIONS
    exclude: Tuple[str, ...] = ()
    gitignore: bool = True
    rules: Dict[str, Severity] = field(default_factory=lambda: {"no-invalid-entry-imports": "error"})
    # Откуда загружено (None — встроенные значения)
    source: Optional[Path] = None

    def enabled_rules(self) -> Dict[str, Severity]:
        return {name: sev for name, sev in self.rules.items() if sev != "off"}


__all__ = [
    "ALWAYS_SKIP_DIRS",
    "DEFAULT_LINT_EXTENSIONS",
    "EXTRA_LINT_EXTENSIONS",
    "ConfigFile",
    "LintConfig",
]
