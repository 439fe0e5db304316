"""Heading frame stack: the chain of currently open ancestor headings"""

from dataclasses import dataclass
from typing import Optional

from mdblocks.core.outline.keys import KeyBuilder, ROOT_KEY
from mdblocks.core.outline.ranges import BlockKind, RangeTable


@dataclass(frozen=True)
class HeadingFrame:
    level: int          # 1-6
    title: str          # after duplicate suffixing
    key: str


class HeadingStack:
    """Open heading frames, innermost last."""

    def __init__(self, table: RangeTable, keys: KeyBuilder):
        self.table = table
        self.keys = keys
        self.frames: list[HeadingFrame] = []

    def __bool__(self) -> bool:
        return bool(self.frames)

    @property
    def top(self) -> Optional[HeadingFrame]:
        return self.frames[-1] if self.frames else None

    @property
    def parent_key(self) -> str:
        """Key that new sub-blocks attach to: the innermost frame, else the root."""
        return self.frames[-1].key if self.frames else ROOT_KEY

    def pop_to(self, level: int, line: int) -> None:
        """Pop and close every frame with level >= level; closed ranges end on line - 1."""
        while self.frames and self.frames[-1].level >= level:
            frame = self.frames.pop()
            self.table.close(frame.key, line - 1)

    def push(self, level: int, title: str, line: int) -> HeadingFrame:
        """Mint a key relative to the current top frame, open its range, and push it."""
        parent = self.top
        if parent is None:
            title, key = self.keys.heading_key(level, title, None, taken=self.table)
        else:
            title, key = self.keys.heading_key(level, title, parent.key, parent.level, self.table)
        self.table.open(key, BlockKind.heading, line)
        frame = HeadingFrame(level=level, title=title, key=key)
        self.frames.append(frame)
        return frame

    def close_all(self, line: int) -> None:
        while self.frames:
            self.table.close(self.frames.pop().key, line)
