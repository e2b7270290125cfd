"""
TypeScript / JavaScript import extraction using Tree-sitter AST.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from tree_sitter import Language

from .tree_sitter_support import TreeSitterDocument, Node
from ..types import ImportSource

logger = logging.getLogger(__name__)

# Plain TypeScript grammar; everything else is parsed with TSX.
TS_EXTENSIONS = {"ts", "mts", "cts"}
TSX_EXTENSIONS = {"tsx", "js", "jsx", "mjs", "cjs"}

QUERIES = {
    # Static imports only: `import x from '...'`, `import '...'`, `import type ...`.
    # `import x = require('...')` keeps its source inside import_require_clause
    # and is not captured.
    "import_sources": """
    (import_statement
      source: (string) @source)
    """,
}


class TypeScriptDocument(TreeSitterDocument):

    def get_language(self) -> Language:
        import tree_sitter_typescript as tsts
        # TS and TSX have two different grammars in one package
        if self.ext in TS_EXTENSIONS:
            return Language(tsts.language_typescript())
        return Language(tsts.language_tsx())

    def get_query_definitions(self) -> Dict[str, str]:
        return QUERIES


class TypeScriptImportExtractor:
    """Collects import source literals from a parsed document."""

    def extract(self, doc: TreeSitterDocument) -> List[ImportSource]:
        if doc.has_error():
            logger.debug("Syntax errors in .%s document, scanning recoverable imports only", doc.ext)

        sources: List[ImportSource] = []
        for node, capture_name in doc.query("import_sources"):
            if capture_name != "source":
                continue
            source = self._source_from_node(doc, node)
            if source is not None:
                sources.append(source)
        return sources

    @staticmethod
    def _source_from_node(doc: TreeSitterDocument, node: Node) -> Optional[ImportSource]:
        text = doc.get_node_text(node)
        # Remove quotes - could be single or double
        if len(text) < 2 or text[0] not in "'\"" or text[-1] != text[0]:
            return None
        line, column, end_line, end_column = doc.get_node_position(node)
        return ImportSource(
            path=text[1:-1],
            line=line,
            column=column,
            end_line=end_line,
            end_column=end_column,
        )


def extract_imports(text: str, ext: str) -> List[ImportSource]:
    """
    Parse source text and return its static import sources in document order.

    Args:
        text: File content
        ext: Extension without the dot ("ts", "tsx", "js", ...)
    """
    doc = TypeScriptDocument(text, ext.lstrip(".").lower())
    return TypeScriptImportExtractor().extract(doc)


__all__ = [
    "TS_EXTENSIONS",
    "TSX_EXTENSIONS",
    "TypeScriptDocument",
    "TypeScriptImportExtractor",
    "extract_imports",
]
