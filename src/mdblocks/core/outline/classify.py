"""Line classification for the outline scan"""

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional


FRONTMATTER_DELIM = '---'
FENCE = '```'

HEADING_RE = re.compile(r'^(#{1,6})\s+(.+)$')
LIST_ITEM_RE = re.compile(r'^([-*]|\d+\.) (.+)$')


class LineKind(Enum):
    FRONTMATTER_OPEN = "frontmatter_open"
    FRONTMATTER_CLOSE = "frontmatter_close"
    FRONTMATTER_BODY = "frontmatter_body"
    FENCE = "fence"
    CODE = "code"
    HEADING = "heading"
    LIST_ITEM = "list_item"
    CONTINUATION = "continuation"
    BLANK = "blank"
    CONTENT = "content"


@dataclass(frozen=True)
class Line:
    kind: LineKind
    raw: str
    trimmed: str
    level: Optional[int] = None     # heading level
    text: Optional[str] = None      # heading title or list item content

    @property
    def indented(self) -> bool:
        return bool(self.raw) and self.raw[0].isspace()


@dataclass
class ScanMode:
    """Mode flags carried from line to line."""
    in_frontmatter: bool = False
    frontmatter_seen: bool = False
    in_code_block: bool = False
    in_list_item: bool = False


def classify(raw: str, index: int, mode: ScanMode) -> Line:
    """Classify one line given the scan mode. Only frontmatter and fence lines change the mode.

    index is the 0-based position of the line in the document; frontmatter can
    only open on index 0.
    """
    trimmed = raw.strip()

    if trimmed == FRONTMATTER_DELIM:
        if index == 0 and not mode.frontmatter_seen:
            mode.frontmatter_seen = True
            mode.in_frontmatter = True
            return Line(LineKind.FRONTMATTER_OPEN, raw, trimmed)
        if mode.in_frontmatter:
            mode.in_frontmatter = False
            return Line(LineKind.FRONTMATTER_CLOSE, raw, trimmed)
    if mode.in_frontmatter:
        return Line(LineKind.FRONTMATTER_BODY, raw, trimmed)

    if trimmed.startswith(FENCE):
        mode.in_code_block = not mode.in_code_block
        return Line(LineKind.FENCE, raw, trimmed)
    if mode.in_code_block:
        return Line(LineKind.CODE, raw, trimmed)

    if m := HEADING_RE.match(trimmed):
        return Line(LineKind.HEADING, raw, trimmed, level=len(m.group(1)), text=m.group(2).strip())
    if m := LIST_ITEM_RE.match(raw):
        return Line(LineKind.LIST_ITEM, raw, trimmed, text=m.group(2))
    if not trimmed:
        return Line(LineKind.BLANK, raw, trimmed)
    if mode.in_list_item and raw[0].isspace():
        return Line(LineKind.CONTINUATION, raw, trimmed)
    return Line(LineKind.CONTENT, raw, trimmed)
