# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Background thread that pulls commits and diffs out of a RevisionSource.

The UI thread sends requests through the worker's inbox and picks up
immutable result events from its outbox at every tick of the input loop.
"""

from __future__ import annotations

import dataclasses
import enum
import itertools
import logging
import queue
import threading
import time
from collections.abc import Iterator

from gitt.porcelain import GitError
from gitt.revisionsource import CommitInfo, LoadError, RevisionSource
from gitt.toolbox import Benchmark, excSummaryLine

logger = logging.getLogger(__name__)

LOAD_ERRORS = (LoadError, GitError, KeyError, ValueError, OSError)


class LoadTarget(enum.IntEnum):
    COMMITS = 0
    DIFF = 1


@dataclasses.dataclass(frozen=True)
class CommitsLoaded:
    commits: tuple[CommitInfo, ...]
    exhausted: bool


@dataclasses.dataclass(frozen=True)
class DiffLoaded:
    commitId: str
    serial: int
    lines: tuple[str, ...]


@dataclasses.dataclass(frozen=True)
class LoadFailed:
    target: LoadTarget
    message: str
    commitId: str = ""
    serial: int = -1


@dataclasses.dataclass(frozen=True)
class CommitsRequest:
    count: int


class DiffRequest:
    """
    Request for the diff of a commit. The UI thread cancels it when the
    selection moves on; the worker then abandons it as soon as it notices.
    """

    _serials = itertools.count(1)

    def __init__(self, commitId: str):
        self.commitId = commitId
        self.serial = next(DiffRequest._serials)
        self.requestedAt = time.perf_counter()
        self._cancelled = threading.Event()

    def cancel(self):
        self._cancelled.set()

    @property
    def isCancelled(self) -> bool:
        return self._cancelled.is_set()

    def __repr__(self):
        return f"DiffRequest({self.commitId[:7]}, #{self.serial}{', cancelled' if self.isCancelled else ''})"


class RevisionWorker(threading.Thread):
    def __init__(self, source: RevisionSource):
        super().__init__(name="RevisionWorker", daemon=True)
        self.source = source
        self.inbox: queue.Queue[CommitsRequest | DiffRequest | None] = queue.Queue()
        self.outbox: queue.Queue[CommitsLoaded | DiffLoaded | LoadFailed] = queue.Queue()
        self._walk: Iterator[CommitInfo] | None = None

    # -------------------------------------------------------------------------
    # UI thread side

    def requestCommits(self, count: int):
        self.inbox.put(CommitsRequest(count))

    def requestDiff(self, commitId: str) -> DiffRequest:
        request = DiffRequest(commitId)
        self.inbox.put(request)
        return request

    def pollEvents(self) -> list[CommitsLoaded | DiffLoaded | LoadFailed]:
        """ Collect pending results without blocking. """
        events = []
        while True:
            try:
                events.append(self.outbox.get_nowait())
            except queue.Empty:
                return events

    def stop(self, timeout: float = 0.5):
        self.inbox.put(None)
        if self.is_alive():
            self.join(timeout)

    # -------------------------------------------------------------------------
    # Worker thread side

    def run(self):
        while True:
            request = self.inbox.get()
            if request is None:
                break
            elif isinstance(request, DiffRequest):
                self.loadDiff(request)
            else:
                self.loadCommits(request.count)
        logger.debug("Worker stopped")

    def loadCommits(self, count: int):
        if self._walk is None:
            self._walk = self.source.walk()

        batch = []
        try:
            with Benchmark("Load commits"):
                for commit in itertools.islice(self._walk, count):
                    batch.append(commit)
        except LOAD_ERRORS as exc:
            logger.warning("Commit walk failed", exc_info=True)
            self._walk = iter(())
            if batch:
                self.outbox.put(CommitsLoaded(tuple(batch), exhausted=False))
            self.outbox.put(LoadFailed(LoadTarget.COMMITS, excSummaryLine(exc)))
            return

        exhausted = len(batch) < count
        if exhausted:
            logger.info("Reached end of history")
        self.outbox.put(CommitsLoaded(tuple(batch), exhausted))

    def loadDiff(self, request: DiffRequest):
        if request.isCancelled:
            logger.debug(f"Skipping {request}")
            return

        lines = []
        try:
            with Benchmark("Load diff"):
                for line in self.source.diffLines(request.commitId):
                    if request.isCancelled:
                        logger.debug(f"Abandoning {request} after {len(lines)} lines")
                        return
                    lines.append(line)
        except LOAD_ERRORS as exc:
            logger.warning(f"Couldn't load diff of {request.commitId}", exc_info=True)
            self.outbox.put(LoadFailed(LoadTarget.DIFF, excSummaryLine(exc), request.commitId, request.serial))
            return

        self.outbox.put(DiffLoaded(request.commitId, request.serial, tuple(lines)))
