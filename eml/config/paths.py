from __future__ import annotations

from pathlib import Path

# Single source of truth for configuration file location.
CFG_FILE = "eml.yaml"


def cfg_path(root: Path) -> Path:
    """Absolute path to the project config file <root>/eml.yaml."""
    return (root / CFG_FILE).resolve()
