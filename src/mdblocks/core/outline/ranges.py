"""Open line ranges and the closer that tracks the current list item and content run"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from mdblocks.core.outline.keys import ROOT_KEY


class BlockKind(str, Enum):
    """Closed set of structural units the outline can emit"""
    heading = "heading"
    list_item = "list_item"
    content = "content"
    frontmatter = "frontmatter"
    root = "root"


@dataclass
class OpenRange:
    """A [start, end] line range whose end stays None until resolved."""
    kind: BlockKind
    start: int
    end: Optional[int] = None

    @property
    def is_open(self) -> bool:
        return self.end is None


class RangeTable:
    """Insertion-ordered key -> OpenRange map; closing an already closed range is a no-op."""

    def __init__(self):
        self._ranges: dict[str, OpenRange] = {}

    def __contains__(self, key: str) -> bool:
        return key in self._ranges

    def __len__(self) -> int:
        return len(self._ranges)

    def get(self, key: str) -> Optional[OpenRange]:
        return self._ranges.get(key)

    def open(self, key: str, kind: BlockKind, line: int) -> OpenRange:
        rng = OpenRange(kind=kind, start=line)
        self._ranges[key] = rng
        return rng

    def close(self, key: str, line: int) -> None:
        rng = self._ranges.get(key)
        if rng is not None and rng.is_open:
            rng.end = max(line, rng.start)  # never ends before it starts

    def resolve(self, last_line: int) -> dict[str, tuple[int, int]]:
        """Close every remaining range at last_line and return the final key -> (start, end) map."""
        for key in self._ranges:
            self.close(key, last_line)
        return {key: (r.start, r.end) for key, r in self._ranges.items()}

    def kinds(self) -> dict[str, BlockKind]:
        return {key: r.kind for key, r in self._ranges.items()}


class RangeCloser:
    """Tracks the single open list item and the single open content run.

    A content run under the root is the root range itself; it absorbs later
    root-level content without taking a counter slot.
    """

    def __init__(self, table: RangeTable):
        self.table = table
        self.list_item: Optional[str] = None
        self.content_run: Optional[str] = None

    def ensure_root(self, line: int) -> None:
        if ROOT_KEY not in self.table:
            self.table.open(ROOT_KEY, BlockKind.root, line)

    def close_list_item(self, line: int) -> None:
        if self.list_item is not None:
            self.table.close(self.list_item, line)
            self.list_item = None

    def close_content_run(self, line: int) -> None:
        if self.content_run is not None:
            self.table.close(self.content_run, line)
            self.content_run = None

    def close_all(self, line: int) -> None:
        self.close_content_run(line)
        self.close_list_item(line)

    def open_list_item(self, key: str, line: int) -> None:
        """Open key as the current list item, closing the previous item and any non-root run."""
        self.close_list_item(line - 1)
        if self.content_run != ROOT_KEY:
            self.close_content_run(line - 1)
        self.table.open(key, BlockKind.list_item, line)
        self.list_item = key

    def open_content_run(self, key: str, line: int) -> None:
        """Open key as the current content run; ROOT_KEY reuses the root range."""
        self.close_list_item(line - 1)
        if key == ROOT_KEY:
            self.ensure_root(line)
        else:
            self.table.open(key, BlockKind.content, line)
        self.content_run = key
