"""
Поиск исходных файлов для проверки.

Цели — файлы или каталоги относительно корня проекта. Каталоги обходятся
рекурсивно с отсечением .git/node_modules, правил .gitignore и `exclude`.
Явно названный файл проверяется, даже если он попадает под .gitignore,
но не если он исключён через `exclude`.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from pathspec import PathSpec
from pathspec.patterns import GitWildMatchPattern

from .config.model import ALWAYS_SKIP_DIRS, LintConfig
from .errors import TargetNotFoundError
from .git import GitIgnoreService
from .types import RepoRelPath

logger = logging.getLogger(__name__)


class FileDiscovery:

    def __init__(self, root: Path, cfg: LintConfig):
        self.root = root.resolve()
        self.cfg = cfg
        self._exts = {e.lower() for e in cfg.lint_extensions}
        self._exclude: Optional[PathSpec] = (
            PathSpec.from_lines(GitWildMatchPattern, cfg.exclude) if cfg.exclude else None
        )
        self._gitignore: Optional[GitIgnoreService] = GitIgnoreService(self.root) if cfg.gitignore else None

    # ---- predicates ----

    def _rel(self, path: Path) -> str:
        try:
            return path.resolve().relative_to(self.root).as_posix()
        except ValueError:
            raise TargetNotFoundError(f"Target is outside of project root {self.root}: {path}") from None

    def is_lintable(self, rel: str) -> bool:
        return os.path.splitext(rel)[1].lower() in self._exts

    def is_excluded(self, rel: str, *, is_dir: bool = False) -> bool:
        if self._exclude is None:
            return False
        return self._exclude.match_file(rel + "/" if is_dir else rel)

    def _is_git_ignored(self, rel: str, *, is_dir: bool = False) -> bool:
        if self._gitignore is None:
            return False
        return self._gitignore.is_dir_ignored(rel) if is_dir else self._gitignore.is_ignored(rel)

    # ---- walking ----

    def _walk_dir(self, base: Path) -> Iterable[str]:
        for dirpath, dirnames, filenames in os.walk(base):
            dir_rel = self._rel(Path(dirpath))
            dir_rel = "" if dir_rel == "." else dir_rel

            kept = []
            for d in sorted(dirnames):
                if d in ALWAYS_SKIP_DIRS:
                    continue
                sub_rel = f"{dir_rel}/{d}" if dir_rel else d
                if self.is_excluded(sub_rel, is_dir=True) or self._is_git_ignored(sub_rel, is_dir=True):
                    logger.debug("Skipping directory %s", sub_rel)
                    continue
                kept.append(d)
            dirnames[:] = kept

            for name in sorted(filenames):
                rel = f"{dir_rel}/{name}" if dir_rel else name
                if not self.is_lintable(rel):
                    continue
                if self.is_excluded(rel) or self._is_git_ignored(rel):
                    continue
                yield rel

    def iter_files(self, targets: Sequence[Path]) -> List[RepoRelPath]:
        """
        Собирает файлы по целям.

        Returns:
            Отсортированный список уникальных путей относительно корня (POSIX)
        """
        found: set[str] = set()
        for target in targets or [self.root]:
            path = target if target.is_absolute() else (self.root / target)
            if path.is_dir():
                found.update(self._walk_dir(path))
            elif path.is_file():
                rel = self._rel(path)
                if not self.is_lintable(rel):
                    logger.debug("Skipping %s: extension is not linted", rel)
                    continue
                if self.is_excluded(rel):
                    logger.debug("Skipping %s: matched by exclude", rel)
                    continue
                found.add(rel)
            else:
                raise TargetNotFoundError(f"No such file or directory: {target}")
        return [RepoRelPath(r) for r in sorted(found)]


def discover_files(root: Path, cfg: LintConfig, targets: Sequence[Path] = ()) -> List[RepoRelPath]:
    return FileDiscovery(root, cfg).iter_files(targets)


__all__ = ["FileDiscovery", "discover_files"]
