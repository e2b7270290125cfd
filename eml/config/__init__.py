from __future__ import annotations

from .load import build_config, check_alias, check_extensions, load_config, parse_config
from .model import ConfigFile, LintConfig
from .paths import CFG_FILE, cfg_path

__all__ = [
    "CFG_FILE",
    "ConfigFile",
    "LintConfig",
    "build_config",
    "check_alias",
    "check_extensions",
    "cfg_path",
    "load_config",
    "parse_config",
]
