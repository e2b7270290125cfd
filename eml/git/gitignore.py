"""
Проверка путей проекта по правилам .gitignore.

Правила собираются из .git/info/exclude, корневого .gitignore и
.gitignore во вложенных каталогах. Шаблоны вложенного файла считаются
относительно его каталога; при нескольких совпадениях побеждает
последнее (более глубокий файл, более поздняя строка), так что `!pattern`
в подкаталоге снимает игнор, заданный выше.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pathspec.patterns import GitWildMatchPattern

logger = logging.getLogger(__name__)

__all__ = ["GitIgnoreService"]


def _read_patterns(path: Path) -> List[GitWildMatchPattern]:
    try:
        lines = path.read_text(encoding="utf-8", errors="ignore").splitlines()
    except OSError as e:
        logger.warning(f"Failed to read {path}: {e}")
        return []
    # пустые строки и комментарии дают pattern.include is None
    return [p for p in map(GitWildMatchPattern, lines) if p.include is not None]


class GitIgnoreService:
    """
    Usage:
        svc = GitIgnoreService(project_root)
        svc.is_ignored("src/gen/api.ts")
        svc.is_dir_ignored("dist")
    """

    def __init__(self, root: Path):
        self.root = root.resolve()
        root_patterns = _read_patterns(self.root / ".git" / "info" / "exclude")
        root_patterns += _read_patterns(self.root / ".gitignore")
        # каталог относительно корня ("" — корень) → шаблоны его .gitignore
        self._levels: Dict[str, List[GitWildMatchPattern]] = {"": root_patterns}
        self._verdicts: Dict[str, bool] = {}

    def _patterns_for(self, rel_dir: str) -> List[GitWildMatchPattern]:
        patterns = self._levels.get(rel_dir)
        if patterns is None:
            ignore_file = self.root / rel_dir / ".gitignore"
            patterns = _read_patterns(ignore_file) if ignore_file.is_file() else []
            self._levels[rel_dir] = patterns
        return patterns

    def _chain(self, parts: List[str]) -> List[Tuple[str, str]]:
        """(каталог .gitignore, путь относительно него) от корня вглубь."""
        return [("/".join(parts[:i]), "/".join(parts[i:])) for i in range(len(parts))]

    def is_ignored(self, rel_path: str) -> bool:
        """
        Args:
            rel_path: POSIX путь относительно корня; завершающий "/" — каталог
        """
        cached = self._verdicts.get(rel_path)
        if cached is not None:
            return cached

        suffix = "/" if rel_path.endswith("/") else ""
        parts = [p for p in rel_path.split("/") if p]
        verdict = False
        for base, tail in self._chain(parts):
            for pattern in self._patterns_for(base):
                if pattern.match_file(tail + suffix) is not None:
                    verdict = bool(pattern.include)

        self._verdicts[rel_path] = verdict
        return verdict

    def is_dir_ignored(self, rel_dir: str) -> bool:
        return self.is_ignored(rel_dir.rstrip("/") + "/")
