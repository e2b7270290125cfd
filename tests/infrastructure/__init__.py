"""
Unified test infrastructure for entered-modules.

Modules:
- file_utils: Utilities for creating files and project trees
- cli_utils: Running the CLI in-process and as a subprocess
"""

from .file_utils import write, write_tree
from .cli_utils import run_cli, run_main, jload

__all__ = [
    # File utilities
    "write", "write_tree",

    # CLI utilities
    "run_cli", "run_main", "jload",
]
