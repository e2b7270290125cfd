from __future__ import annotations

from pathlib import Path

import pytest

from tests.infrastructure import write_tree


# Минимальный модульный проект:
#   src/ui          — модуль с обычной и children-точкой входа
#   src/app/page.ts — одна нарушенная глубина top-level импорта
#   src/ui/widgets  — один импорт обычного entry через ".."
#   dist/, node_modules/ — нарушения, которые не должны попасть в отчёт
PROJECT_FILES = {
    "src/app/page.ts": """
        import { Button } from "@/ui/entry";
        import { Card } from "@/ui/widgets/Card";
        import { helper } from "./helpers";
        import React from "react";
        """,
    "src/app/helpers.ts": """
        export const helper = 3;
        """,
    "src/ui/entry.ts": """
        export const Button = 1;
        """,
    "src/ui/entry..children.ts": """
        export const shared = 2;
        """,
    "src/ui/widgets/Card.tsx": """
        import { shared } from '../entry..children';
        import { Button } from '../entry';

        export const Card = () => <div>{shared}{Button}</div>;
        """,
    "src/ui/README.md": """
        import x from "../../nowhere";
        """,
    ".gitignore": """
        dist/
        """,
    "dist/bundle.js": """
        import x from "../../deep/thing";
        """,
    "node_modules/pkg/index.js": """
        import y from "./a/b/c";
        """,
}


@pytest.fixture
def tmpproj(tmp_path: Path) -> Path:
    """Проект без eml.yaml: встроенные значения и пресет recommended."""
    return write_tree(tmp_path, PROJECT_FILES)


@pytest.fixture(autouse=True)
def _no_debug_env(monkeypatch):
    # EML_DEBUG из окружения разработчика не должен менять вывод тестов
    monkeypatch.delenv("EML_DEBUG", raising=False)
