"""Unit tests for core/links.py"""

from mdblocks.core.links import get_markdown_links, normalize_target


def _links(content: str) -> list[tuple]:
    return [(link.title, link.target, link.line) for link in get_markdown_links(content)]


def test_standard_and_wiki_links_sorted_by_line_then_target():
    content = "See [b](b.md) and [a](a.md).\nAlso [[Zeta]] and [[Alpha|the alpha]]."
    assert _links(content) == [
        ("a", "a.md", 1),
        ("b", "b.md", 1),
        ("the alpha", "Alpha", 2),
        ("Zeta", "Zeta", 2),
    ]


def test_line_numbers_across_paragraphs_and_lists():
    content = "# Title\n\nFirst line\nsecond [x](x.md)\n\n- item\n- other [[Y]]\n"
    assert _links(content) == [("x", "x.md", 4), ("Y", "Y", 7)]


def test_images_are_links():
    assert _links("![diagram](img/flow%20chart.png)") == [("diagram", "img/flow chart.png", 1)]


def test_links_in_code_are_ignored():
    content = "`[no](no.md)`\n\n```\n[[No]]\n[no](no.md)\n```\n"
    assert _links(content) == []


def test_external_urls_left_untouched():
    assert _links("[site](https://example.com/a%20b)") == [("site", "https://example.com/a%20b", 1)]


def test_normalize_target():
    assert normalize_target(" Some%20File.md ") == "Some File.md"
    assert normalize_target("obsidian://open?file=a%20b") == "obsidian://open?file=a%20b"
    assert normalize_target("bad%zzescape") == "bad%zzescape"
