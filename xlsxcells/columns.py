"""Column definitions and a store that keeps their ranges from overlapping."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterator, List, Optional

from xlsxcells.celltype import GENERAL_FORMAT, INT_FORMAT, STRING_FORMAT, CellType

COL_WIDTH = 9.5
EXCEL_2006_MAX_ROW_COUNT = 1048576
EXCEL_2006_MAX_ROW_INDEX = EXCEL_2006_MAX_ROW_COUNT - 1

_NUM_FMT_FOR_TYPE = {
    CellType.STRING: STRING_FORMAT,
    CellType.NUMERIC: INT_FORMAT,
    CellType.BOOL: GENERAL_FORMAT,
    CellType.INLINE: STRING_FORMAT,
    CellType.ERROR: GENERAL_FORMAT,
    # Date-typed cells are not really supported; dates should be numeric
    # cells with a date format.
    CellType.DATE: GENERAL_FORMAT,
    CellType.STRING_FORMULA: STRING_FORMAT,
}


@dataclass
class Col:
    """Settings that apply to the columns ``min`` to ``max`` inclusive."""

    min: int = 0
    max: int = 0
    hidden: Optional[bool] = None
    width: Optional[float] = None
    collapsed: Optional[bool] = None
    outline_level: Optional[int] = None
    best_fit: Optional[bool] = None
    custom_width: Optional[bool] = None
    phonetic: Optional[bool] = None
    num_fmt: str = ""
    parsed_num_fmt: Any = None
    style: Any = None
    out_xf_id: int = 0

    def set_width(self, width: float) -> None:
        """Set a custom width, in characters of the default font's widest digit."""
        self.width = width
        self.custom_width = True

    def set_type(self, cell_type: CellType) -> None:
        """Set the column's number format from a cell type."""
        fmt = _NUM_FMT_FOR_TYPE.get(cell_type)
        if fmt is not None:
            self.num_fmt = fmt

    def set_outline_level(self, level: int) -> None:
        """Set the outline (grouping) level of the column."""
        self.outline_level = level

    def copy_to_range(self, low: int, high: int) -> "Col":
        """Return a copy of this column covering ``low`` to ``high``."""
        return Col(
            min=low,
            max=high,
            hidden=self.hidden,
            width=self.width,
            collapsed=self.collapsed,
            outline_level=self.outline_level,
            best_fit=self.best_fit,
            custom_width=self.custom_width,
            phonetic=self.phonetic,
            num_fmt=self.num_fmt,
            parsed_num_fmt=self.parsed_num_fmt,
            style=self.style,
        )


def new_col_for_range(low: int, high: int) -> Col:
    """Create a Col for the inclusive range, swapping bounds given backwards."""
    if high < low:
        return Col(min=high, max=low)
    return Col(min=low, max=high)


class ColStoreNode:
    """A link in the ordered chain of column definitions."""

    __slots__ = ("col", "prev", "next")

    def __init__(
        self,
        col: Col,
        prev: Optional["ColStoreNode"] = None,
        next: Optional["ColStoreNode"] = None,
    ) -> None:
        self.col = col
        self.prev = prev
        self.next = next

    def __repr__(self) -> str:
        return f"ColStoreNode({self.col.min}..{self.col.max})"

    def find_node_for_col_num(self, num: int) -> Optional["ColStoreNode"]:
        """Walk the chain from here to the node covering column ``num``."""
        node: Optional[ColStoreNode] = self
        while node is not None:
            col = node.col
            if col.min <= num <= col.max:
                return node
            if num < col.min:
                if node.prev is None or node.prev.col.max < num:
                    return None
                node = node.prev
            else:
                if node.next is None or node.next.col.min > num:
                    return None
                node = node.next
        return None


class ColStore:
    """Ordered, non-overlapping column definitions.

    Adding a column trims, splits or replaces existing definitions that
    it overlaps.
    """

    def __init__(self) -> None:
        self.root: Optional[ColStoreNode] = None
        self.length = 0

    def __len__(self) -> int:
        return self.length

    def _nodes(self) -> Iterator[ColStoreNode]:
        node = self.root
        if node is None:
            return
        while node.prev is not None:
            node = node.prev
        while node is not None:
            yield node
            node = node.next

    def __iter__(self) -> Iterator[Col]:
        return (node.col for node in self._nodes())

    def add(self, col: Col) -> ColStoreNode:
        """Add a column, making way for it among the existing ones."""
        new_node = ColStoreNode(col)
        if self.root is None:
            self.root = new_node
            self.length = 1
            return new_node
        self._make_way(self.root, new_node)
        return new_node

    def find_col_by_index(self, index: int) -> Optional[Col]:
        """Return the column definition covering ``index``, if any."""
        node = self.find_node_for_col_num(index)
        return node.col if node is not None else None

    def find_node_for_col_num(self, num: int) -> Optional[ColStoreNode]:
        """Return the node covering column ``num``, if any."""
        if self.root is None:
            return None
        return self.root.find_node_for_col_num(num)

    def remove_node(self, node: ColStoreNode) -> None:
        """Unlink ``node`` from the chain."""
        if node.prev is not None:
            node.prev.next = node.next
        if node.next is not None:
            node.next.prev = node.prev
        if self.root is node:
            self.root = node.prev if node.prev is not None else node.next
        node.next = None
        node.prev = None
        self.length -= 1

    def _add_node(
        self,
        prev: Optional[ColStoreNode],
        this: ColStoreNode,
        nxt: Optional[ColStoreNode],
    ) -> None:
        if prev is not None:
            prev.next = this
        this.prev = prev
        this.next = nxt
        if nxt is not None:
            nxt.prev = this
        self.length += 1

    def _make_way(self, node1: ColStoreNode, node2: ColStoreNode) -> None:
        c1, c2 = node1.col, node2.col

        if c1.max < c2.min:
            # node2 lies entirely after node1.
            if node1.next is not None:
                if node1.next.col.min <= c2.max:
                    self._make_way(node1.next, node2)
                    return
                self._add_node(node1, node2, node1.next)
                return
            self._add_node(node1, node2, None)
            return

        if c1.min > c2.max:
            # node2 lies entirely before node1.
            if node1.prev is not None:
                if node1.prev.col.max >= c2.min:
                    self._make_way(node1.prev, node2)
                    return
                self._add_node(node1.prev, node2, node1)
                return
            self._add_node(None, node2, node1)
            return

        if c1.min == c2.min and c1.max == c2.max:
            # Exact match: node2 replaces node1.
            prev, nxt = node1.prev, node1.next
            self.remove_node(node1)
            self._add_node(prev, node2, nxt)
            if self.root is None:
                self.root = node2
            return

        if c1.min > c2.min and c1.max < c2.max:
            # node2 envelopes node1.
            prev, nxt = node1.prev, node1.next
            self.remove_node(node1)
            if prev is node2:
                node2.next = nxt
            elif nxt is node2:
                node2.prev = prev
            else:
                self._add_node(prev, node2, nxt)
            if node2.prev is not None and node2.prev.col.max >= c2.min:
                self._make_way(prev, node2)
            if node2.next is not None and node2.next.col.min <= c2.max:
                self._make_way(nxt, node2)
            if self.root is None:
                self.root = node2
            return

        if c1.min < c2.min and c1.max > c2.max:
            # node2 bisects node1.
            tail = ColStoreNode(c1.copy_to_range(c2.max + 1, c1.max))
            self._add_node(node1, tail, node1.next)
            c1.max = c2.min - 1
            self._add_node(node1, node2, tail)
            return

        if c1.max >= c2.min and c1.min < c2.min:
            # node2 overlaps the top end of node1.
            nxt = node1.next
            c1.max = c2.min - 1
            if nxt is node2:
                return
            self._add_node(node1, node2, nxt)
            if nxt is not None and nxt.col.min <= c2.max:
                self._make_way(nxt, node2)
            return

        if c1.min <= c2.max and c1.min > c2.min:
            # node2 overlaps the bottom end of node1.
            prev = node1.prev
            c1.min = c2.max + 1
            if prev is node2:
                return
            self._add_node(prev, node2, node1)
            if prev is not None and prev.col.max >= c2.min:
                self._make_way(node1.prev, node2)
            return

    def get_or_make_cols_for_range(
        self, start: Optional[ColStoreNode], low: int, high: int
    ) -> List[Col]:
        """Return columns covering ``low`` to ``high``, creating any gaps."""
        if start is None:
            node = self.add(new_col_for_range(low, high))
        elif start.col.min <= low <= start.col.max:
            node = start
        elif start.col.min < low and start.col.max < low:
            if start.next is not None:
                return self.get_or_make_cols_for_range(start.next, low, high)
            node = self.add(new_col_for_range(low, high))
        else:
            if start.col.min > high:
                new_col = new_col_for_range(low, high)
            else:
                new_col = new_col_for_range(low, start.col.min - 1)
            node = self.add(new_col)

        cols = [node.col]
        if node.col.max >= high:
            return cols
        cols.extend(self.get_or_make_cols_for_range(node.next, node.col.max + 1, high))
        return cols

    def for_each(self, fn: Callable[[int, Col], Any]) -> None:
        """Call ``fn(index, col)`` for each column definition, in order.

        The last definition is passed the total count as its index.
        """
        nodes = list(self._nodes())
        if not nodes:
            return
        for index, node in enumerate(nodes[:-1]):
            fn(index, node.col)
        fn(len(nodes), nodes[-1].col)