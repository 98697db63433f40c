# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import curses

import pytest

from gitt.revisionsource import CommitInfo
from gitt.revisionworker import CommitsLoaded, LoadFailed, LoadTarget
from gitt.session import Session
from gitt.tui.layout import computeLayout
from gitt.tui.screen import THUMB_GLYPH, Renderer
from .test_session import FakeWorker, diffFor
from .util import TEST_SIGNATURE


class FakeWindow:
    """ Character grid standing in for a curses window (one cell per character). """

    def __init__(self, height: int, width: int):
        self.height = height
        self.width = width
        self.grid = [[" "] * width for _ in range(height)]

    def addstr(self, y, x, text, attr=0):
        if not (0 <= y < self.height and 0 <= x < self.width):
            raise curses.error("out of bounds")
        for i, c in enumerate(text):
            if x + i >= self.width:
                raise curses.error("out of bounds")
            self.grid[y][x + i] = c

    def line(self, y: int) -> str:
        return "".join(self.grid[y])


def makeCommits(count):
    ids = [f"{i:040x}" for i in range(1, count + 1)]
    parents = [(p,) for p in ids[1:]] + [()]
    return tuple(
        CommitInfo(c, ps, f"Subject {n}", TEST_SIGNATURE.name, TEST_SIGNATURE.email,
                   TEST_SIGNATURE.time, TEST_SIGNATURE.offset)
        for n, (c, ps) in enumerate(zip(ids, parents)))


@pytest.fixture
def screen():
    window = FakeWindow(12, 60)
    layout = computeLayout(window.height, window.width)
    worker = FakeWorker()
    session = Session(worker, chunkSize=10)
    session.setViewportHeights(layout.listArea.height, layout.diffArea.height)
    session.start()
    renderer = Renderer(window, "HEAD")
    return window, layout, worker, session, renderer


def testLoadingPlaceholder(screen):
    window, layout, worker, session, renderer = screen
    renderer.drawCommitList(session, layout)
    assert window.line(layout.listContent.top).startswith("Loading commits…")


def testCommitRows(screen):
    window, layout, worker, session, renderer = screen
    session.processEvents([CommitsLoaded(makeCommits(3), exhausted=True)])
    renderer.drawCommitList(session, layout)

    top = layout.listContent.top
    for i in range(3):
        assert f"Subject {i}" in window.line(top + i)
    assert window.line(top).startswith("┯ 0000000 Subject 0")
    assert window.line(top + 2).startswith("┷ 0000000 Subject 2")

    # Everything fits: the scrollbar thumb fills the track
    scrollbarColumn = layout.listArea.width - 1
    for y in range(layout.listArea.top, layout.listArea.top + layout.listArea.height):
        assert window.grid[y][scrollbarColumn] == THUMB_GLYPH


def testNotice(screen):
    window, layout, worker, session, renderer = screen
    session.processEvents([CommitsLoaded((), exhausted=True)])
    renderer.drawCommitList(session, layout)
    assert window.line(layout.listContent.top).startswith("No commits to show.")


def testNoticeAfterRows(screen):
    window, layout, worker, session, renderer = screen
    session.processEvents([
        CommitsLoaded(makeCommits(2)[:1], exhausted=False),
        LoadFailed(LoadTarget.COMMITS, "boom"),
    ])
    renderer.drawCommitList(session, layout)
    assert window.line(layout.listContent.top + 1).startswith("Couldn't load more commits: boom")


def testDiffPane(screen):
    window, layout, worker, session, renderer = screen
    session.processEvents([CommitsLoaded(makeCommits(3), exhausted=True)])

    renderer.drawDiff(session, layout)
    assert window.line(layout.diffContent.top).startswith("Loading…")

    session.processEvents([diffFor(worker.lastDiffRequest, 20)])
    renderer.drawDiff(session, layout)
    top = layout.diffContent.top
    commitId = session.listModel.selectedCommitId
    assert window.line(top).startswith(f"{commitId} line 0")
    assert window.line(top + layout.diffContent.height - 1).startswith(f"{commitId} line 4")


def testTitlesAndStatusBar(screen):
    window, layout, worker, session, renderer = screen
    session.processEvents([CommitsLoaded(makeCommits(3), exhausted=False)])

    renderer.drawTitle(layout.listTitle, " Commits ", True)
    renderer.drawTitle(layout.diffTitle, " Details ", False)
    renderer.drawStatusBar(session, layout.statusBar)

    assert window.line(layout.listTitle.top).startswith(" Commits ")
    assert window.line(layout.diffTitle.top).startswith(" Details ")
    assert window.line(layout.statusBar.top).startswith(" HEAD  1/3+  [list]")


def testPutToleratesOutOfBounds(screen):
    window, layout, worker, session, renderer = screen
    renderer.put(100, 0, "nope")
    renderer.put(0, 58, "overflow")
    assert window.line(0).endswith("ov")
