from __future__ import annotations

# Public API of adapters package:
#  • extract_imports — static import sources of a TS/JS file
#  • is_supported_extension — whether a file suffix can be parsed
from .typescript import TS_EXTENSIONS, TSX_EXTENSIONS, extract_imports

__all__ = ["extract_imports", "is_supported_extension"]


def is_supported_extension(suffix: str) -> bool:
    ext = suffix.lstrip(".").lower()
    return ext in TS_EXTENSIONS or ext in TSX_EXTENSIONS
