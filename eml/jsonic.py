from __future__ import annotations

import json
from typing import Any


def dumps(data: Any) -> str:
    """JSON для stdout: UTF-8 без экранирования, отступ 2, перевод строки в конце."""
    return json.dumps(data, ensure_ascii=False, indent=2) + "\n"


__all__ = ["dumps"]
