from __future__ import annotations

from functools import lru_cache
from importlib import metadata

DIST_NAME = "entered-modules"


@lru_cache(maxsize=None)
def tool_version() -> str:
    """Версия установленного дистрибутива; "0.0.0" при запуске из исходников без установки."""
    try:
        return metadata.version(DIST_NAME)
    except metadata.PackageNotFoundError:
        return "0.0.0"


__all__ = ["DIST_NAME", "tool_version"]
