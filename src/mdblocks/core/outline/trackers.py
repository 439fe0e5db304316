"""Task-line and fenced-code-block trackers that run beside the outline scan"""

import logging
import re
from typing import Optional


log = logging.getLogger(__name__)

TASK_RE = re.compile(r'^[-*+]\s+\[(?: |x|X)\]')
INCOMPLETE_TASK_RE = re.compile(r'^[-*+]\s+\[ \]')


class TaskTracker:
    """Collects checkbox list lines; incomplete ones are split into all/top-level."""

    def __init__(self):
        self.task_lines: list[int] = []
        self.incomplete_all: list[int] = []
        self.incomplete_top: list[int] = []

    def observe(self, raw: str, trimmed: str, line_number: int) -> None:
        if not TASK_RE.match(trimmed):
            return
        self.task_lines.append(line_number)
        if INCOMPLETE_TASK_RE.match(trimmed):
            self.incomplete_all.append(line_number)
            if INCOMPLETE_TASK_RE.match(raw):
                self.incomplete_top.append(line_number)


class FenceTracker:
    """Pairs opening and closing fence lines into (start, end) spans."""

    def __init__(self):
        self.ranges: list[tuple[int, int]] = []
        self._start: Optional[int] = None

    def observe(self, line_number: int) -> None:
        if self._start is None:
            self._start = line_number
        else:
            self.ranges.append((self._start, line_number))
            self._start = None

    def finish(self) -> list[tuple[int, int]]:
        """Return completed spans; an unterminated fence is dropped."""
        if self._start is not None:
            log.debug("Dropping unterminated code fence opened on line %d", self._start)
        return self.ranges
