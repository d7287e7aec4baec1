from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

Point = Tuple[int, int]

NO_NODE = -1


@dataclass(frozen=True)
class SourceRange:
    start_offset: int
    end_offset: int
    start_point: Point
    end_point: Point

    def __str__(self) -> str:
        (start_row, start_col), (end_row, end_col) = self.start_point, self.end_point
        return f"[{start_row}:{start_col}-{end_row}:{end_col}]"


@dataclass
class _NodeRecord:
    kind: str
    start_offset: int
    start_point: Point
    end_offset: int = 0
    end_point: Point = (0, 0)
    parent: int = NO_NODE
    first_child: int = NO_NODE
    last_child: int = NO_NODE
    next_sibling: int = NO_NODE
    child_count: int = 0


@dataclass
class CstTree:
    """
    An immutable concrete syntax tree stored as a flat arena.

    Nodes refer to each other by index only, so the tree holds no
    reference cycles. ``base_offset`` is where ``source`` starts inside
    the complete input the tree was cut from.
    """

    source: str
    base_offset: int = 0
    records: List[_NodeRecord] = field(default_factory=list)

    def root_node(self) -> CstNode:
        if not self.records:
            raise ValueError("Tree has no nodes")
        return CstNode(self, 0)

    def __len__(self) -> int:
        return len(self.records)


class CstNode:
    __slots__ = ("tree", "index")

    def __init__(self, tree: CstTree, index: int):
        self.tree = tree
        self.index = index

    @property
    def _record(self) -> _NodeRecord:
        return self.tree.records[self.index]

    def _at(self, index: int) -> Optional[CstNode]:
        if index == NO_NODE:
            return None
        return CstNode(self.tree, index)

    def kind(self) -> str:
        return self._record.kind

    def child_count(self) -> int:
        return self._record.child_count

    def is_token(self) -> bool:
        return self._record.child_count == 0

    def range(self) -> SourceRange:
        record = self._record
        return SourceRange(
            record.start_offset, record.end_offset, record.start_point, record.end_point
        )

    def text(self) -> str:
        record = self._record
        start = record.start_offset - self.tree.base_offset
        end = record.end_offset - self.tree.base_offset
        return self.tree.source[start:end]

    def parent(self) -> Optional[CstNode]:
        return self._at(self._record.parent)

    def first_child(self) -> Optional[CstNode]:
        return self._at(self._record.first_child)

    def next_sibling(self) -> Optional[CstNode]:
        return self._at(self._record.next_sibling)

    def children(self) -> Iterator[CstNode]:
        child = self.first_child()
        while child is not None:
            yield child
            child = child.next_sibling()

    def walk(self) -> TreeCursor:
        return TreeCursor(self)

    def __eq__(self, other) -> bool:
        if not isinstance(other, CstNode):
            return NotImplemented
        return self.tree is other.tree and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self.tree), self.index))

    def __repr__(self) -> str:
        return f"<CstNode {self.kind()} {self.range()}>"


class TreeCursor:
    """
    Cursor over a subtree, keeping the path from its starting node.

    The cursor never leaves the subtree it was created on: it cannot move
    to the siblings or the parent of its starting node.
    """

    def __init__(self, node: CstNode):
        self._tree = node.tree
        self._path: List[int] = [node.index]

    def node(self) -> CstNode:
        return CstNode(self._tree, self._path[-1])

    def depth(self) -> int:
        return len(self._path) - 1

    def goto_first_child(self) -> bool:
        child = self._tree.records[self._path[-1]].first_child
        if child == NO_NODE:
            return False
        self._path.append(child)
        return True

    def goto_next_sibling(self) -> bool:
        if len(self._path) == 1:
            return False
        sibling = self._tree.records[self._path[-1]].next_sibling
        if sibling == NO_NODE:
            return False
        self._path[-1] = sibling
        return True

    def goto_parent(self) -> bool:
        if len(self._path) == 1:
            return False
        self._path.pop()
        return True


class TreeBuilder:
    """
    Builds a CstTree from a stream of start/token/finish events.

    Only tokens carry text; every offset and (row, column) point is
    derived from the token text seen so far.
    """

    def __init__(self, base_offset: int = 0, base_point: Point = (0, 0)):
        self._base_offset = base_offset
        self._offset = base_offset
        self._row, self._col = base_point
        self._chunks: List[str] = []
        self._records: List[_NodeRecord] = []
        self._open: List[int] = []

    def _append(self, kind: str) -> int:
        if not self._open and self._records:
            raise ValueError("Tree already has a root node")
        index = len(self._records)
        record = _NodeRecord(kind, self._offset, (self._row, self._col))
        if self._open:
            parent_index = self._open[-1]
            parent = self._records[parent_index]
            record.parent = parent_index
            if parent.last_child == NO_NODE:
                parent.first_child = index
            else:
                self._records[parent.last_child].next_sibling = index
            parent.last_child = index
            parent.child_count += 1
        self._records.append(record)
        return index

    def _close(self, index: int):
        record = self._records[index]
        record.end_offset = self._offset
        record.end_point = (self._row, self._col)

    def _advance(self, text: str):
        self._chunks.append(text)
        self._offset += len(text)
        newlines = text.count("\n")
        if newlines:
            self._row += newlines
            self._col = len(text) - text.rfind("\n") - 1
        else:
            self._col += len(text)

    def start_node(self, kind: str) -> "TreeBuilder":
        self._open.append(self._append(kind))
        return self

    def token(self, kind: str, text: str) -> "TreeBuilder":
        index = self._append(kind)
        self._advance(text)
        self._close(index)
        return self

    def finish_node(self) -> "TreeBuilder":
        if not self._open:
            raise ValueError("finish_node() called without a matching start_node()")
        self._close(self._open.pop())
        return self

    def finish(self) -> CstTree:
        if self._open:
            raise ValueError(f"{len(self._open)} node(s) left open")
        if not self._records:
            raise ValueError("Tree has no nodes")
        return CstTree(
            source="".join(self._chunks),
            base_offset=self._base_offset,
            records=self._records,
        )
