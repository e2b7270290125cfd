from __future__ import annotations

from .gitignore import GitIgnoreService

__all__ = ["GitIgnoreService"]
