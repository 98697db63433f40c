# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from collections.abc import Iterable


class DiffModel:
    """
    Scrollable buffer of diff text lines.

    DiffModel doesn't know which commit its lines belong to; whoever
    calls load() is responsible for only loading the right diff.
    """

    def __init__(self, height: int = 0):
        self._lines: list[str] = []
        self._offset = 0
        self._height = max(0, height)

    def __len__(self):
        return len(self._lines)

    @property
    def lines(self) -> list[str]:
        return self._lines

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def height(self) -> int:
        return self._height

    def maxOffset(self) -> int:
        return max(0, len(self._lines) - self._height)

    def load(self, lines: Iterable[str]):
        self._lines = list(lines)
        self._offset = 0

    def scroll(self, delta: int):
        self._offset = min(max(self._offset + delta, 0), self.maxOffset())

    def scrollToTop(self):
        self._offset = 0

    def scrollToBottom(self):
        self._offset = self.maxOffset()

    def pageUp(self):
        self.scroll(-max(1, self._height))

    def pageDown(self):
        self.scroll(max(1, self._height))

    def restoreScrollOffset(self, offset: int):
        self._offset = 0
        self.scroll(offset)

    def setViewportHeight(self, height: int):
        self._height = max(0, height)
        self.scroll(0)

    def visibleLines(self) -> list[str]:
        return self._lines[self._offset:self._offset + self._height]
