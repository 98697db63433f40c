# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import collections
import logging
import time
from collections.abc import Iterable
from typing import Protocol

from gitt import settings
from gitt.diffview.diffmodel import DiffModel
from gitt.diffview.diffstyle import NOTICE_PREFIX
from gitt.focus import FocusController, Pane
from gitt.graph import GraphBuildLoop
from gitt.graphview.listmodel import ListModel
from gitt.keymap import Action
from gitt.revisionworker import CommitsLoaded, DiffLoaded, DiffRequest, LoadFailed, LoadTarget
from gitt.toolbox import PeakTiming

logger = logging.getLogger(__name__)


class Worker(Protocol):
    def requestCommits(self, count: int): ...
    def requestDiff(self, commitId: str) -> DiffRequest: ...


class Session:
    """
    State of a browsing session, mutated from the UI thread only.

    Owns the commit list, the diff pane and the focus, lays out incoming
    commits, and makes sure that the diff pane never shows the diff of a
    commit that isn't selected anymore.
    """

    def __init__(self, worker: Worker, chunkSize: int = 0):
        self.worker = worker
        self.chunkSize = chunkSize or settings.prefs.commitChunkSize

        self.listModel = ListModel()
        self.diffModel = DiffModel()
        self.focus = FocusController(self.listModel, self.diffModel)
        self.buildLoop = GraphBuildLoop()

        self.commitsExhausted = False
        self.commitRequestPending = False
        self.inFlightDiff: DiffRequest | None = None
        self.displayedCommitId = ""
        self.scrollCache: collections.OrderedDict[str, int] = collections.OrderedDict()
        self.diffTiming = PeakTiming("Slowest diff load")

        self.listModel.onSelectionChanged = self.onSelectionChanged

    def start(self):
        self.requestMoreCommits()

    def close(self):
        if self.inFlightDiff is not None:
            self.inFlightDiff.cancel()
            self.inFlightDiff = None
        logger.info(f"{len(self.listModel)} commits loaded; {self.diffTiming}")

    # -------------------------------------------------------------------------
    # Viewport

    def setViewportHeights(self, listHeight: int, diffHeight: int):
        self.listModel.setViewportHeight(listHeight)
        self.diffModel.setViewportHeight(diffHeight)
        if self.listModel.isNearEnd():
            self.requestMoreCommits()

    # -------------------------------------------------------------------------
    # Input

    def handleAction(self, action: Action) -> bool:
        """ Apply a key action. Return False when the session should end. """
        if action == Action.QUIT:
            return False

        self.focus.handleAction(action)

        if self.focus.focus == Pane.LIST and self.listModel.isNearEnd():
            # Scrolling toward the end of what's loaded: fetch more ahead of time
            self.requestMoreCommits()

        return True

    def requestMoreCommits(self):
        if self.commitsExhausted or self.commitRequestPending:
            return
        self.commitRequestPending = True
        self.worker.requestCommits(self.chunkSize)

    def onSelectionChanged(self, commitId: str):
        if self.inFlightDiff is not None:
            logger.debug(f"Superseding {self.inFlightDiff}")
            self.inFlightDiff.cancel()

        # Keep showing the previous diff until the new one comes in
        self.inFlightDiff = self.worker.requestDiff(commitId)

    # -------------------------------------------------------------------------
    # Results from the worker

    def processEvents(self, events: Iterable[CommitsLoaded | DiffLoaded | LoadFailed]):
        for event in events:
            self.handleEvent(event)

    def handleEvent(self, event: CommitsLoaded | DiffLoaded | LoadFailed):
        if isinstance(event, CommitsLoaded):
            self.onCommitsLoaded(event)
        elif isinstance(event, DiffLoaded):
            self.onDiffLoaded(event)
        elif isinstance(event, LoadFailed):
            self.onLoadFailed(event)
        else:
            raise NotImplementedError(f"Unsupported event {event}")

    def onCommitsLoaded(self, event: CommitsLoaded):
        self.commitRequestPending = False

        rows = self.buildLoop.sendChunk(event.commits)
        wasEmpty = len(self.listModel) == 0
        self.listModel.append(rows)

        if event.exhausted:
            self.commitsExhausted = True
            if self.buildLoop.isDangling():
                logger.info(f"History ends with {len(self.buildLoop.pendingIds)} parents never seen")
            if len(self.listModel) == 0:
                self.listModel.notice = "No commits to show."

        if wasEmpty and rows:
            self.listModel.setSelection(0)

        # A chunk shorter than the viewport leaves the pane part-filled
        if self.listModel.isNearEnd():
            self.requestMoreCommits()

    def isCurrentDiff(self, commitId: str, serial: int) -> bool:
        """
        A diff result may be shown only if it answers the latest request
        and that request is for the commit that is selected right now.
        """
        request = self.inFlightDiff
        return (request is not None
                and request.serial == serial
                and request.commitId == commitId
                and commitId == self.listModel.selectedCommitId)

    def onDiffLoaded(self, event: DiffLoaded):
        if not self.isCurrentDiff(event.commitId, event.serial):
            logger.debug(f"Discarding superseded diff of {event.commitId} (#{event.serial})")
            return

        self.diffTiming.record(time.perf_counter() - self.inFlightDiff.requestedAt, event.commitId)
        self.inFlightDiff = None
        self.showDiff(event.commitId, event.lines)

    def showDiff(self, commitId: str, lines: Iterable[str]):
        self._rememberScrollOffset()

        self.diffModel.load(lines)
        self.displayedCommitId = commitId

        cachedOffset = self.scrollCache.get(commitId, 0)
        if cachedOffset:
            self.diffModel.restoreScrollOffset(cachedOffset)

    def _rememberScrollOffset(self):
        if not self.displayedCommitId:
            return

        cache = self.scrollCache
        cache[self.displayedCommitId] = self.diffModel.offset
        cache.move_to_end(self.displayedCommitId)
        while len(cache) > settings.prefs.scrollCacheSize:
            cache.popitem(last=False)

    def onLoadFailed(self, event: LoadFailed):
        if event.target == LoadTarget.COMMITS:
            self.commitRequestPending = False
            self.commitsExhausted = True
            self.listModel.notice = f"Couldn't load more commits: {event.message}"
        elif self.isCurrentDiff(event.commitId, event.serial):
            self.inFlightDiff = None
            self.showDiff(event.commitId, [f"{NOTICE_PREFIX}Couldn't load diff: {event.message}"])
        else:
            logger.debug(f"Ignoring failure of superseded diff of {event.commitId}")
