# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import curses
import logging
import os

from gitt import settings
from gitt.keymap import actionForKey
from gitt.revisionsource import RevisionSource
from gitt.revisionworker import RevisionWorker
from gitt.session import Session
from gitt.tui.layout import ScreenLayout, computeLayout
from gitt.tui.screen import Renderer

logger = logging.getLogger(__name__)


class InputLoop:
    """
    Single thread that owns the session: drains worker results,
    redraws, and dispatches key presses, once per tick.
    """

    def __init__(self, session: Session, worker: RevisionWorker, title: str):
        self.session = session
        self.worker = worker
        self.title = title
        self.layout: ScreenLayout | None = None

    def relayout(self, window):
        height, width = window.getmaxyx()
        self.layout = computeLayout(height, width, settings.prefs.listPaneRatio)
        self.session.setViewportHeights(self.layout.listArea.height, self.layout.diffArea.height)
        logger.debug(f"Layout for {width}x{height}: {self.layout}")

    def run(self, window):
        try:
            curses.curs_set(0)
        except curses.error:
            pass  # Invisible cursor not supported by this terminal
        window.keypad(True)
        window.timeout(settings.prefs.tickMilliseconds)

        renderer = Renderer(window, self.title)
        renderer.initColors()

        self.relayout(window)
        self.session.start()

        while True:
            self.session.processEvents(self.worker.pollEvents())
            renderer.draw(self.session, self.layout)

            key = window.getch()
            if key == -1:  # Tick
                continue
            if key == curses.KEY_RESIZE:
                self.relayout(window)
                continue

            if not self.session.handleAction(actionForKey(key)):
                break


def sessionTitle(source: RevisionSource) -> str:
    title = source.committish or "HEAD"
    if source.paths:
        title += " -- " + " ".join(source.paths)
    return title


def run(source: RevisionSource) -> int:
    """ Browse the history supplied by `source` until the user quits. """
    # Don't make Esc-prefixed keys wait for a full second
    os.environ.setdefault("ESCDELAY", "25")

    worker = RevisionWorker(source)
    session = Session(worker)
    loop = InputLoop(session, worker, sessionTitle(source))

    worker.start()
    try:
        curses.wrapper(loop.run)
    finally:
        session.close()
        worker.stop()

    return 0
