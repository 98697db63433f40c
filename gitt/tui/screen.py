# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Draws a Session on a curses window.
"""

import curses
import logging

from gitt import settings
from gitt.diffview.diffstyle import LineStyle, styleLines
from gitt.focus import Pane
from gitt.graphview.commitlogdelegate import SpanStyle, formatRow
from gitt.session import Session
from gitt.toolbox import cellWidth, expandTabs, fitText, padText
from gitt.tui.layout import Rect, ScreenLayout, scrollbarThumb

logger = logging.getLogger(__name__)

THUMB_GLYPH = "█"
TRACK_GLYPH = "│"

# Color pair number -> (foreground, background)
PALETTE = {
    1: (curses.COLOR_GREEN, -1),
    2: (curses.COLOR_RED, -1),
    3: (curses.COLOR_CYAN, -1),
    4: (curses.COLOR_YELLOW, -1),
    5: (curses.COLOR_MAGENTA, -1),
    6: (curses.COLOR_BLUE, -1),
}

SPAN_COLORS = {
    SpanStyle.GRAPH: 6,
    SpanStyle.HASH: 4,
    SpanStyle.REFS: 5,
    SpanStyle.HEAD: 3,
    SpanStyle.AUTHOR: 1,
    SpanStyle.DATE: 6,
}

LINE_COLORS = {
    LineStyle.ADDITION: 1,
    LineStyle.DELETION: 2,
    LineStyle.HUNK: 3,
    LineStyle.COMMIT: 4,
    LineStyle.NOTICE: 2,
}

LINE_ATTRS = {
    LineStyle.FILE_HEADER: curses.A_BOLD,
    LineStyle.COMMIT: curses.A_BOLD,
    LineStyle.METADATA: curses.A_DIM,
}


class Renderer:
    def __init__(self, window, title: str):
        self.window = window
        self.title = title
        self.useColors = False

    def initColors(self):
        try:
            if not curses.has_colors():
                return
            curses.start_color()
            curses.use_default_colors()
            for pair, (fg, bg) in PALETTE.items():
                curses.init_pair(pair, fg, bg)
            self.useColors = True
        except curses.error:
            logger.info("Terminal doesn't support colors", exc_info=True)
            self.useColors = False

    def colorAttr(self, pair: int) -> int:
        if not self.useColors or not pair:
            return 0
        return curses.color_pair(pair)

    def put(self, y: int, x: int, text: str, attr: int = 0):
        """ Write text, tolerating the error curses raises at the bottom-right cell. """
        try:
            self.window.addstr(y, x, text, attr)
        except curses.error:
            pass

    # -------------------------------------------------------------------------

    def draw(self, session: Session, layout: ScreenLayout):
        self.window.erase()

        focus = session.focus.focus
        self.drawTitle(layout.listTitle, " Commits ", focus == Pane.LIST)
        self.drawCommitList(session, layout)
        self.drawTitle(layout.diffTitle, " Details ", focus == Pane.DIFF)
        self.drawDiff(session, layout)
        self.drawStatusBar(session, layout.statusBar)

        self.window.noutrefresh()
        curses.doupdate()

    def drawTitle(self, rect: Rect, title: str, focused: bool):
        if rect.isEmpty:
            return
        attr = curses.A_REVERSE | curses.A_BOLD if focused else curses.A_REVERSE
        self.put(rect.top, rect.left, padText(title, rect.width), attr)

    def drawScrollbar(self, area: Rect, total: int, offset: int):
        if area.isEmpty:
            return
        x = area.left + area.width - 1
        start, length = scrollbarThumb(total, offset, area.height, area.height)
        for y in range(area.height):
            if start <= y < start + length:
                self.put(area.top + y, x, THUMB_GLYPH)
            else:
                self.put(area.top + y, x, TRACK_GLYPH, curses.A_DIM)

    def drawCommitList(self, session: Session, layout: ScreenLayout):
        listModel = session.listModel
        content = layout.listContent
        if content.isEmpty:
            return

        visible = listModel.visibleRows()
        graphWidth = max((row.width for _, row in visible), default=0)
        focused = session.focus.focus == Pane.LIST

        y = content.top
        for index, row in visible:
            selected = index == listModel.selection
            x = content.left
            for span in formatRow(row, content.width, graphWidth):
                attr = self.colorAttr(SPAN_COLORS.get(span.style, 0))
                if selected:
                    attr = curses.A_REVERSE | (curses.A_BOLD if focused else 0)
                self.put(y, x, span.text, attr)
                x += cellWidth(span.text)
            y += 1

        # Inline notice after the last row (load errors, end of history...)
        bottom = content.top + content.height
        if y < bottom:
            if listModel.notice:
                self.put(y, content.left, fitText(listModel.notice, content.width), curses.A_DIM)
            elif len(listModel) == 0:
                self.put(y, content.left, fitText("Loading commits…", content.width), curses.A_DIM)

        self.drawScrollbar(layout.listArea, len(listModel), listModel.offset)

    def drawDiff(self, session: Session, layout: ScreenLayout):
        diffModel = session.diffModel
        content = layout.diffContent
        if content.isEmpty:
            return

        if len(diffModel) == 0:
            if session.inFlightDiff is not None:
                self.put(content.top, content.left, fitText("Loading…", content.width), curses.A_DIM)
            return

        lines = diffModel.visibleLines()
        styles = styleLines(diffModel.lines, diffModel.offset, len(lines))
        tabSpaces = settings.prefs.tabSpaces

        for y, (line, style) in enumerate(zip(lines, styles), start=content.top):
            text = fitText(expandTabs(line, tabSpaces), content.width)
            attr = self.colorAttr(LINE_COLORS.get(style, 0)) | LINE_ATTRS.get(style, 0)
            self.put(y, content.left, text, attr)

        self.drawScrollbar(layout.diffArea, len(diffModel), diffModel.offset)

    def drawStatusBar(self, session: Session, rect: Rect):
        if rect.isEmpty:
            return

        listModel = session.listModel
        position = f"{listModel.selection + 1}/{len(listModel)}"
        if not session.commitsExhausted:
            position += "+"

        text = f" {self.title}  {position}  [{session.focus.focus.name.lower()}]"
        hint = "tab: switch pane  g/G: top/bottom  q: quit "
        room = rect.width - cellWidth(text)
        if room > cellWidth(hint):
            text += " " * (room - cellWidth(hint)) + hint
        self.put(rect.top, rect.left, padText(text, rect.width), curses.A_REVERSE)
