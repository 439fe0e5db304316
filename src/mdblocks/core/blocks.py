"""Block records: outline entries resolved to their content, size, and outbound links"""

from typing import Optional, Union

from mdblocks.core.links import get_markdown_links
from mdblocks.core.models import BlockRecord, ParseOptions, ParseResult
from mdblocks.core.outline.parser import parse_markdown_blocks
from mdblocks.core.outline.ranges import BlockKind


def get_line_range(content: str, start: int, end: int, start_index: int = 1) -> str:
    """Return lines start..end (inclusive, numbered from start_index) joined with newlines."""
    lines = content.split('\n')
    return '\n'.join(lines[max(start - start_index, 0):end - start_index + 1])


def display_name(key: str, lines: Optional[tuple[int, int]] = None, show_full_path: bool = True) -> str:
    """Readable label for a block key.

    Full form turns every "#" and "/" into " > ". Short form keeps the file
    name and the innermost heading, plus "Lines: a-b" for numbered sub-blocks.
    """
    if show_full_path:
        return key.replace('#', ' > ').replace('/', ' > ')

    source_key, *block_parts = key.split('#')
    parts = [source_key.split('/')[-1]]
    if block_parts:
        last = block_parts.pop()
        if last.startswith('{') and last.endswith('}'):
            if block_parts:
                parts.append(block_parts.pop())
            if lines:
                parts.append(f"Lines: {lines[0]}-{lines[1]}")
        else:
            parts.append(last)
    return ' > '.join(p for p in parts if p)


def build_block_records(
    content: str,
    result: Optional[ParseResult] = None,
    source_key: str = '',
    options: Optional[Union[ParseOptions, dict]] = None,
    parser_config: str = 'gfm-like',
    ) -> list[BlockRecord]:
    """Return one BlockRecord per outline entry, in outline order.

    source_key is prefixed to every block key (e.g. "notes/today.md").
    """
    opts = options if isinstance(options, ParseOptions) else ParseOptions(**(options or {}))
    if result is None:
        result = parse_markdown_blocks(content, opts)

    records = []
    for key, (start, end) in result.blocks.items():
        text = get_line_range(content, start, end, opts.start_index)
        records.append(BlockRecord(
            key=source_key + key,
            kind=result.kinds.get(key, BlockKind.content),
            lines=(start, end),
            size=len(text),
            content=text,
            outlinks=get_markdown_links(text, parser_config),
        ))
    return records


def read_block(content: str, key: str, options: Optional[Union[ParseOptions, dict]] = None) -> str:
    """Return the content of the block with the given key; KeyError if the outline has no such key."""
    opts = options if isinstance(options, ParseOptions) else ParseOptions(**(options or {}))
    result = parse_markdown_blocks(content, opts)
    if key not in result.blocks:
        raise KeyError(key)
    start, end = result.blocks[key]
    return get_line_range(content, start, end, opts.start_index)
