"""Block key construction: heading paths, duplicate suffixes, and sub-block counters"""

import re


SEP = '#'
ROOT_KEY = '#'
FRONTMATTER_KEY = '#---frontmatter---'

CHECKBOX_RE = re.compile(r'^\[(?: |x|X)\]\s*')


def longest_words_in_order(line: str, n: int = 3) -> str:
    """Return the n longest words of line, joined in their original order.

    Ties in length keep first-occurrence order (sorted() is stable).
    """
    words = line.split()
    ranked = sorted(range(len(words)), key=lambda i: -len(words[i]))[:n]
    return ' '.join(words[i] for i in sorted(ranked))


class KeyBuilder:
    """Per-parse counters used to mint unique, hierarchical block keys.

    top_counts:    occurrences of each title among headings with no open ancestor
    nested_counts: occurrences of each (parent_key, title) pair
    sub_counts:    next sub-block number per parent key; never reset during a parse
    """

    def __init__(self):
        self.top_counts: dict[str, int] = {}
        self.nested_counts: dict[tuple[str, str], int] = {}
        self.sub_counts: dict[str, int] = {ROOT_KEY: 0}
        self.line_key_counts: dict[str, int] = {}

    def heading_title(self, title: str, parent_key: str | None) -> str:
        """Return title with its duplicate suffix applied, counting this occurrence."""
        if parent_key is None:
            count = self.top_counts.get(title, 0) + 1
            self.top_counts[title] = count
            return f"{title}[{count}]" if count > 1 else title

        pair = (parent_key, title)
        count = self.nested_counts.get(pair, 0) + 1
        self.nested_counts[pair] = count
        return f"{title}{SEP}{{{count}}}" if count > 1 else title

    def heading_key(
        self, level: int, title: str, parent_key: str | None, parent_level: int = 0, taken=(),
        ) -> tuple[str, str]:
        """Return (disambiguated_title, key) for a heading under parent_key (None at top level).

        A key already in taken is skipped by moving on to the next duplicate suffix.
        """
        prefix = (parent_key or '') + SEP * (level - parent_level)
        label = self.heading_title(title, parent_key)
        while prefix + label in taken:
            label = self.heading_title(title, parent_key)
        title, key = label, prefix + label
        self.sub_counts[key] = 0
        return title, key

    def sub_block_key(self, parent_key: str) -> str:
        """Return the next numbered sub-block key under parent_key."""
        n = self.sub_counts.get(parent_key, 0) + 1
        self.sub_counts[parent_key] = n
        return f"{parent_key}{SEP}{{{n}}}"

    def list_item_key(self, parent_key: str, text: str, word_len: int, taken) -> str:
        """Return a key for a list item labelled by its longest words.

        Falls back to the numbered form when the label is empty and appends an
        occurrence suffix when the derived key is already in taken.
        """
        label = longest_words_in_order(CHECKBOX_RE.sub('', text, count=1), word_len)
        if not label:
            return self.sub_block_key(parent_key)
        self.sub_counts[parent_key] = self.sub_counts.get(parent_key, 0) + 1

        key = f"{parent_key}{SEP}{label}"
        if key not in taken:
            return key
        count = self.line_key_counts.get(key, 1) + 1
        while f"{key}{SEP}{{{count}}}" in taken:
            count += 1
        self.line_key_counts[key] = count
        return f"{key}{SEP}{{{count}}}"
