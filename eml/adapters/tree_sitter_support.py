"""
Базовый документ на Tree-sitter: разбор текста, именованные запросы
и пересчёт байтовых позиций узлов в позиции редактора (строка/символ).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from bisect import bisect_right
from typing import Dict, List, Tuple

from tree_sitter import Language, Node, Parser, Query, QueryCursor, Tree

# (line, column, end_line, end_column), всё 1-based
Span = Tuple[int, int, int, int]


class TreeSitterDocument(ABC):
    """
    Разобранный исходник одного файла.

    Наследник задаёт грамматику и словарь запросов; документ
    парсится сразу в конструкторе.
    """

    # Скомпилированные запросы общие для всех документов одной грамматики
    _compiled: Dict[Tuple[str, str, str], Query] = {}

    def __init__(self, text: str, ext: str):
        self.text = text
        self.ext = ext
        self._data = text.encode("utf-8")
        self._line_starts = [0] + [i + 1 for i, b in enumerate(self._data) if b == 0x0A]
        self.tree: Tree = Parser(self.get_language()).parse(self._data)

    @abstractmethod
    def get_language(self) -> Language:
        ...

    @abstractmethod
    def get_query_definitions(self) -> Dict[str, str]:
        """Имя запроса → S-выражение Tree-sitter."""
        ...

    @property
    def root_node(self) -> Node:
        return self.tree.root_node

    def has_error(self) -> bool:
        return self.root_node.has_error

    def _compile(self, query_name: str) -> Query:
        definitions = self.get_query_definitions()
        if query_name not in definitions:
            raise ValueError(f"Unknown query: {query_name}")
        key = (type(self).__name__, self.ext, query_name)
        q = self._compiled.get(key)
        if q is None:
            q = Query(self.get_language(), definitions[query_name])
            self._compiled[key] = q
        return q

    def query(self, query_name: str) -> List[Tuple[Node, str]]:
        """
        Выполняет именованный запрос.

        Returns:
            Пары (node, capture_name) в порядке следования в документе
        """
        cursor = QueryCursor(self._compile(query_name))
        found = [
            (node, capture)
            for _idx, captures in cursor.matches(self.root_node)
            for capture, nodes in captures.items()
            for node in nodes
        ]
        found.sort(key=lambda item: item[0].start_byte)
        return found

    def get_node_text(self, node: Node) -> str:
        return self._data[node.start_byte:node.end_byte].decode("utf-8")

    def get_node_position(self, node: Node) -> Span:
        """
        Позиция узла так, как её показывает редактор: строки и колонки
        с единицы, колонки в символах (не в байтах UTF-8).
        """
        line, col = self._point(node.start_byte)
        end_line, end_col = self._point(node.end_byte)
        return line, col, end_line, end_col

    def _point(self, byte_pos: int) -> Tuple[int, int]:
        row = bisect_right(self._line_starts, byte_pos) - 1
        prefix = self._data[self._line_starts[row]:byte_pos]
        return row + 1, len(prefix.decode("utf-8", errors="ignore")) + 1


__all__ = ["TreeSitterDocument", "Span", "Node"]
