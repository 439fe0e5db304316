"""Data models for parse options, outline results, and block records"""

import logging
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

from mdblocks.core.outline.ranges import BlockKind


log = logging.getLogger(__name__)


class ParseOptions(BaseModel):
    """Outline parser options. Invalid values fall back to the defaults instead of failing."""
    start_index:       int  = Field(default=1,  description="Number reported for the first line")
    line_keys:         bool = Field(default=False, description="Key list items by their longest words")
    list_key_word_len: int  = Field(default=10, description="Word count for line-derived list keys")

    @field_validator('start_index', 'line_keys', 'list_key_word_len', mode='wrap')
    @classmethod
    def _fallback_to_default(cls, value, handler, info):
        default = cls.model_fields[info.field_name].default
        try:
            parsed = handler(value)
        except ValidationError:
            log.debug("Invalid %s=%r; using default %r", info.field_name, value, default)
            return default
        if info.field_name == 'list_key_word_len' and parsed < 1:
            log.debug("Invalid list_key_word_len=%r; using default %r", value, default)
            return default
        return parsed


class IncompleteTasks(BaseModel):
    all: list[int] = Field(default_factory=list)
    top: list[int] = Field(default_factory=list)


class Tasks(BaseModel):
    incomplete: Optional[IncompleteTasks] = None    # None when no unchecked box was seen


class ParseResult(BaseModel):
    """Outline of one document: block ranges, task lines, and fenced code spans."""
    blocks:           dict[str, tuple[int, int]] = Field(default_factory=dict)
    task_lines:       list[int] = Field(default_factory=list)
    tasks:            Tasks = Field(default_factory=Tasks)
    codeblock_ranges: list[tuple[int, int]] = Field(default_factory=list)
    kinds:            dict[str, BlockKind] = Field(default_factory=dict, exclude=True)

    def to_dict(self) -> dict[str, Any]:
        """Plain mapping with list ranges; tasks is {} when nothing is incomplete."""
        return self.model_dump(mode='json', exclude_none=True)


class Link(BaseModel):
    """An outbound link; line is 1-based within the text it was found in."""
    title: str
    target: str
    line: int


class BlockRecord(BaseModel):
    """A single outline entry with its content."""
    key: str
    kind: BlockKind
    lines: tuple[int, int]
    size: int
    content: str
    outlinks: list[Link] = Field(default_factory=list)


class OutlinedDoc(BaseModel):
    """Outline output for one file, as written by the extract pipeline."""
    path: str
    slug: str
    frontmatter: dict[str, Any] = {}
    outline: ParseResult
    blocks: list[BlockRecord] = Field(default_factory=list)
