# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses


@dataclasses.dataclass(frozen=True)
class Rect:
    top: int
    left: int
    height: int
    width: int

    @property
    def isEmpty(self) -> bool:
        return self.height <= 0 or self.width <= 0


@dataclasses.dataclass(frozen=True)
class ScreenLayout:
    listTitle: Rect
    listArea: Rect
    diffTitle: Rect
    diffArea: Rect
    statusBar: Rect

    @property
    def listContent(self) -> Rect:
        """ List area minus the scrollbar column. """
        return dataclasses.replace(self.listArea, width=max(0, self.listArea.width - 1))

    @property
    def diffContent(self) -> Rect:
        """ Diff area minus the scrollbar column. """
        return dataclasses.replace(self.diffArea, width=max(0, self.diffArea.width - 1))


def computeLayout(screenHeight: int, screenWidth: int, listRatio: float = 0.4) -> ScreenLayout:
    """
    Stack the commit list, the diff pane and the status bar vertically.
    A screen that's too small gets empty rects rather than negative sizes.
    """
    screenHeight = max(0, screenHeight)
    screenWidth = max(0, screenWidth)
    listRatio = min(max(listRatio, 0.0), 1.0)

    # Two title bars and the status bar
    usable = max(0, screenHeight - 3)
    listHeight = min(usable, max(1, round(usable * listRatio))) if usable else 0
    diffHeight = usable - listHeight

    top = 0

    def take(height: int) -> Rect:
        nonlocal top
        height = max(0, min(height, screenHeight - top))
        rect = Rect(top, 0, height, screenWidth)
        top += height
        return rect

    listTitle = take(1)
    listArea = take(listHeight)
    diffTitle = take(1)
    diffArea = take(diffHeight)
    statusBar = take(1)

    return ScreenLayout(listTitle, listArea, diffTitle, diffArea, statusBar)


def scrollbarThumb(total: int, offset: int, window: int, trackHeight: int) -> tuple[int, int]:
    """
    Return the (start, length) of the scrollbar thumb in a track of
    `trackHeight` cells, for a viewport of `window` items at `offset`
    into `total` items.
    """
    if trackHeight <= 0 or total <= 0:
        return 0, 0

    if window >= total:
        return 0, trackHeight

    scaling = trackHeight / total
    length = max(1, round(scaling * window))
    length = min(length, trackHeight)
    start = int(scaling * offset)
    start = min(max(start, 0), trackHeight - length)
    return start, length
