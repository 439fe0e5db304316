"""Shared fixtures for core unit tests"""

import pytest


SAMPLE_MD = """\
---
title: Test Doc
slug: test-doc
tags: [a, b]
---

Intro with a [[Wiki Note|wiki alias]].

# Heading 1

A paragraph with a [link](other%20note.md) and **bold** text.

## Heading 2

- [ ] item one
  - [ ] nested item
- [x] item two

```python
print("[not](a-link.md)")
```
"""


@pytest.fixture(name="sample_md")
def sample_md_fixture():
    return SAMPLE_MD


@pytest.fixture(name="sample_file")
def sample_file_fixture(tmp_path):
    f = tmp_path / "Sample Doc.md"
    f.write_text(SAMPLE_MD, encoding="utf-8")
    return f
