"""Outbound link extraction from markdown-it inline tokens"""

import re
from urllib.parse import unquote

from mdblocks.core.models import Link
from mdblocks.core.parse import make_parser


WIKILINK_RE = re.compile(r'\[\[([^|\]]+?)(?:\|([^\]]+?))?\]\]')
SCHEME_RE = re.compile(r'^[a-zA-Z][\w+\-.]*://')

TEXT_TYPES = {'text', 'text_special'}
BREAK_TYPES = {'softbreak', 'hardbreak'}


def normalize_target(raw: str) -> str:
    """Decode %xx escapes in local targets; leave URLs with a scheme untouched."""
    target = raw.strip()
    if SCHEME_RE.match(target):
        return target
    return unquote(target)


def _link_title(children: list, start: int) -> str:
    """Concatenate the text between a link_open at start and its link_close."""
    parts = []
    for child in children[start + 1:]:
        if child.type == 'link_close':
            break
        parts.append(child.content)
    return ''.join(parts)


def _inline_links(token, first_line: int) -> list[Link]:
    links: list[Link] = []
    line = first_line
    buffer: list[str] = []

    def flush():
        text = ''.join(buffer)
        for m in WIKILINK_RE.finditer(text):
            links.append(Link(title=m.group(2) or m.group(1), target=normalize_target(m.group(1)), line=line))
        buffer.clear()

    children = token.children or []
    for i, child in enumerate(children):
        if child.type in BREAK_TYPES:
            flush()
            line += 1
        elif child.type in TEXT_TYPES:
            buffer.append(child.content)
        elif child.type == 'link_open':
            links.append(Link(
                title=_link_title(children, i),
                target=normalize_target(child.attrs.get('href', '')),
                line=line,
            ))
        elif child.type == 'image':
            links.append(Link(
                title=child.content,
                target=normalize_target(child.attrs.get('src', '')),
                line=line,
            ))
    flush()
    return links


def get_markdown_links(content: str, parser_config: str = 'gfm-like') -> list[Link]:
    """Return standard and wiki links in content, sorted by line then target.

    Links inside code spans and fenced/indented code are not reported.
    """
    links: list[Link] = []
    last_map = None
    for token in make_parser(parser_config).parse(content):
        if token.map:
            last_map = token.map
        if token.type != 'inline' or last_map is None:
            continue
        links.extend(_inline_links(token, last_map[0] + 1))
    return sorted(links, key=lambda link: (link.line, link.target))
