# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
from collections.abc import Callable, Iterable

from gitt.graph import GraphRow, Oid

logger = logging.getLogger(__name__)


class ListModel:
    """
    Scrollable commit list: the laid-out graph rows, the selected row,
    and the first row shown in the viewport.

    Invariants:
    - selection is -1 if and only if there are no rows;
    - 0 <= offset <= max(0, len(rows) - height).
    """

    onSelectionChanged: Callable[[Oid], None]

    def __init__(self, height: int = 0):
        self._rows: list[GraphRow] = []
        self._selection = -1
        self._offset = 0
        self._height = max(0, height)
        self.notice = ""
        self.onSelectionChanged = ListModel.defaultOnSelectionChanged

    @staticmethod
    def defaultOnSelectionChanged(commitId: Oid):
        pass

    def __len__(self):
        return len(self._rows)

    @property
    def rows(self) -> list[GraphRow]:
        return self._rows

    @property
    def selection(self) -> int:
        return self._selection

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def height(self) -> int:
        return self._height

    @property
    def selectedRow(self) -> GraphRow | None:
        if self._selection < 0:
            return None
        return self._rows[self._selection]

    @property
    def selectedCommitId(self) -> Oid | None:
        row = self.selectedRow
        return row.commitId if row is not None else None

    def maxOffset(self) -> int:
        return max(0, len(self._rows) - self._height)

    def _clampOffset(self):
        self._offset = min(max(self._offset, 0), self.maxOffset())

    def append(self, rows: Iterable[GraphRow]):
        """ Grow the sequence. Doesn't disturb the selection or the scroll offset. """
        self._rows.extend(rows)

    def setSelection(self, index: int):
        if not self._rows:
            return

        index = min(max(index, 0), len(self._rows) - 1)
        if index == self._selection:
            return

        self._selection = index
        self.ensureVisible()
        self.onSelectionChanged(self._rows[index].commitId)

    def moveSelection(self, delta: int):
        if not self._rows:
            return
        self.setSelection(self._selection + delta)

    def ensureVisible(self):
        """ Scroll as little as possible so that the selected row is in the viewport. """
        if self._selection < 0:
            self._clampOffset()
            return

        if self._selection < self._offset:
            self._offset = self._selection
        elif self._height > 0 and self._selection >= self._offset + self._height:
            self._offset = self._selection - self._height + 1

        self._clampOffset()

    def scrollToTop(self):
        self.setSelection(0)
        self._offset = 0

    def scrollToBottom(self):
        self.setSelection(len(self._rows) - 1)
        self._offset = self.maxOffset()

    def pageUp(self):
        self.moveSelection(-max(1, self._height))

    def pageDown(self):
        self.moveSelection(max(1, self._height))

    def setViewportHeight(self, height: int):
        self._height = max(0, height)
        self.ensureVisible()

    def visibleRows(self) -> list[tuple[int, GraphRow]]:
        end = min(len(self._rows), self._offset + self._height)
        return [(i, self._rows[i]) for i in range(self._offset, end)]

    def isNearEnd(self) -> bool:
        """ True if the selection is within one viewport of the last loaded row. """
        return len(self._rows) - 1 - self._selection <= self._height
