"""Single-pass markdown outline parser: block keys to inclusive line ranges

Keys encode the heading path of each block:

    "#Top-Level Heading":                      [1, 6]
    "#Top-Level Heading##Level 3 Heading":     [3, 6]
    "#Top-Level Heading##Level 3 Heading#{1}": [5, 6]
    "#Overview[2]":                            [7, 9]

- repeated top-level titles get a "[n]" suffix, repeated sibling subheadings a "#{n}" suffix
- skipped heading levels add one "#" per skipped level
- top-level list items and runs of plain content are numbered "#{n}" under their parent
- content before the first heading belongs to the root key "#"
- a "---" block on the first line is kept under "#---frontmatter---"
- lines inside ``` fences never start headings or list items
"""

import logging
from typing import Any, Optional, Union

from mdblocks.core.models import IncompleteTasks, ParseOptions, ParseResult, Tasks
from mdblocks.core.outline.classify import LineKind, ScanMode, classify
from mdblocks.core.outline.frames import HeadingStack
from mdblocks.core.outline.keys import FRONTMATTER_KEY, KeyBuilder, ROOT_KEY
from mdblocks.core.outline.ranges import BlockKind, RangeCloser, RangeTable
from mdblocks.core.outline.trackers import FenceTracker, TaskTracker


log = logging.getLogger(__name__)


class _OutlineState:
    """All mutable state for one parse; a fresh instance per call."""

    def __init__(self, options: ParseOptions):
        self.options = options
        self.table = RangeTable()
        self.keys = KeyBuilder()
        self.stack = HeadingStack(self.table, self.keys)
        self.closer = RangeCloser(self.table)
        self.mode = ScanMode()
        self.tasks = TaskTracker()
        self.fences = FenceTracker()

    def open_content_run(self, line_number: int) -> None:
        parent = self.stack.parent_key
        key = ROOT_KEY if parent == ROOT_KEY else self.keys.sub_block_key(parent)
        self.closer.open_content_run(key, line_number)

    def on_heading(self, level: int, title: str, line_number: int) -> None:
        self.stack.pop_to(level, line_number)
        if not self.stack:
            self.table.close(ROOT_KEY, line_number - 1)
        self.closer.close_all(line_number - 1)
        self.stack.push(level, title, line_number)

    def on_list_item(self, text: str, line_number: int) -> None:
        parent = self.stack.parent_key
        if parent == ROOT_KEY:
            self.closer.ensure_root(line_number)
        if self.options.line_keys:
            key = self.keys.list_item_key(parent, text, self.options.list_key_word_len, self.table)
        else:
            key = self.keys.sub_block_key(parent)
        self.closer.open_list_item(key, line_number)

    def on_fence(self, indented: bool, line_number: int) -> None:
        self.fences.observe(line_number)
        if self.closer.content_run is not None:
            return
        if self.closer.list_item is not None and indented:
            return
        self.open_content_run(line_number)

    def on_code(self, line_number: int) -> None:
        if self.closer.content_run is None and self.closer.list_item is None:
            self.open_content_run(line_number)

    def on_content(self, line_number: int) -> None:
        if self.closer.content_run is None:
            self.open_content_run(line_number)

    def finish(self, last_line: int) -> ParseResult:
        self.stack.close_all(last_line)
        self.closer.close_all(last_line)
        if self.mode.in_frontmatter:
            log.debug("Frontmatter never closed; ending it on line %d", last_line)
        incomplete = None
        if self.tasks.incomplete_all:
            incomplete = IncompleteTasks(all=self.tasks.incomplete_all, top=self.tasks.incomplete_top)
        return ParseResult(
            blocks=self.table.resolve(last_line),
            task_lines=self.tasks.task_lines,
            tasks=Tasks(incomplete=incomplete),
            codeblock_ranges=self.fences.finish(),
            kinds=self.table.kinds(),
        )


def _options(options: Union[ParseOptions, dict, None], overrides: dict[str, Any]) -> ParseOptions:
    if isinstance(options, ParseOptions):
        if not overrides:
            return options
        options = options.model_dump()
    data = dict(options or {})
    data.update(overrides)
    return ParseOptions(**data)


def parse_markdown_blocks(
    markdown: str,
    options: Optional[Union[ParseOptions, dict]] = None,
    **overrides: Any,
    ) -> ParseResult:
    """Outline a markdown document into block keys and inclusive line ranges.

    options may be a ParseOptions, a dict of its fields, or keyword overrides
    (start_index, line_keys, list_key_word_len). Never raises for malformed
    markdown: open blocks end on the last line and an unterminated fence is
    left out of codeblock_ranges.
    """
    opts = _options(options, overrides)
    state = _OutlineState(opts)
    lines = markdown.split('\n')

    for i, raw in enumerate(lines):
        if raw.endswith('\r'):
            raw = raw[:-1]
        line_number = i + opts.start_index
        in_code = state.mode.in_code_block
        state.mode.in_list_item = state.closer.list_item is not None
        line = classify(raw, i, state.mode)
        kind = line.kind

        if kind is LineKind.FRONTMATTER_OPEN:
            state.table.open(FRONTMATTER_KEY, BlockKind.frontmatter, line_number)
            continue
        if kind is LineKind.FRONTMATTER_CLOSE:
            state.table.close(FRONTMATTER_KEY, line_number)
            continue
        if kind is LineKind.FRONTMATTER_BODY:
            continue

        if not in_code:
            state.tasks.observe(raw, line.trimmed, line_number)

        if kind is LineKind.FENCE:
            state.on_fence(line.indented, line_number)
        elif kind is LineKind.CODE:
            state.on_code(line_number)
        elif kind is LineKind.HEADING:
            state.on_heading(line.level, line.text, line_number)
        elif kind is LineKind.LIST_ITEM:
            state.on_list_item(line.text, line_number)
        elif kind is LineKind.CONTENT:
            state.on_content(line_number)
        # BLANK and CONTINUATION lines stay in whatever block is open

    return state.finish(len(lines) + opts.start_index - 1)


parse = parse_markdown_blocks
