# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import threading

import pytest

from gitt.graph import MockCommit
from gitt.revisionsource import LoadError
from gitt.revisionworker import CommitsLoaded, DiffLoaded, DiffRequest, LoadFailed, LoadTarget, RevisionWorker


class FakeSource:
    def __init__(self, numCommits=5, failAfter=-1):
        self.numCommits = numCommits
        self.failAfter = failAfter
        self.diffStarted = threading.Event()
        self.diffGate = threading.Event()
        self.gateDiffs = False

    def walk(self):
        for i in range(self.numCommits):
            if i == self.failAfter:
                raise LoadError("corrupt object")
            parents = (f"c{i + 1}",) if i + 1 < self.numCommits else ()
            yield MockCommit(f"c{i}", parents)

    def diffLines(self, commitId):
        if commitId == "missing":
            raise LoadError(f"Commit not found: {commitId}")
        yield f"commit {commitId}"
        self.diffStarted.set()
        if self.gateDiffs:
            assert self.diffGate.wait(5)
        for i in range(3):
            yield f"line {i}"


@pytest.fixture
def makeWorker():
    workers = []

    def factory(source) -> RevisionWorker:
        worker = RevisionWorker(source)
        worker.start()
        workers.append(worker)
        return worker

    yield factory

    for worker in workers:
        worker.stop(timeout=5)
        assert not worker.is_alive()


def nextEvent(worker: RevisionWorker):
    return worker.outbox.get(timeout=5)


def testCommitsInChunks(makeWorker):
    worker = makeWorker(FakeSource(5))

    worker.requestCommits(2)
    event = nextEvent(worker)
    assert isinstance(event, CommitsLoaded)
    assert [c.id for c in event.commits] == ["c0", "c1"]
    assert not event.exhausted

    worker.requestCommits(2)
    assert [c.id for c in nextEvent(worker).commits] == ["c2", "c3"]

    worker.requestCommits(2)
    event = nextEvent(worker)
    assert [c.id for c in event.commits] == ["c4"]
    assert event.exhausted


def testWalkFailure(makeWorker):
    worker = makeWorker(FakeSource(5, failAfter=3))

    worker.requestCommits(10)
    partial = nextEvent(worker)
    assert isinstance(partial, CommitsLoaded)
    assert [c.id for c in partial.commits] == ["c0", "c1", "c2"]
    assert not partial.exhausted

    failure = nextEvent(worker)
    assert isinstance(failure, LoadFailed)
    assert failure.target == LoadTarget.COMMITS
    assert "corrupt object" in failure.message

    # The walk is over for good
    worker.requestCommits(10)
    event = nextEvent(worker)
    assert event.commits == ()
    assert event.exhausted


def testDiff(makeWorker):
    worker = makeWorker(FakeSource())
    request = worker.requestDiff("c1")
    event = nextEvent(worker)
    assert event == DiffLoaded("c1", request.serial, ("commit c1", "line 0", "line 1", "line 2"))


def testDiffFailure(makeWorker):
    worker = makeWorker(FakeSource())
    request = worker.requestDiff("missing")
    event = nextEvent(worker)
    assert isinstance(event, LoadFailed)
    assert event.target == LoadTarget.DIFF
    assert event.commitId == "missing"
    assert event.serial == request.serial
    assert "Commit not found" in event.message


def testCancelledDiffIsAbandoned(makeWorker):
    source = FakeSource()
    source.gateDiffs = True
    worker = makeWorker(source)

    first = worker.requestDiff("c0")
    assert source.diffStarted.wait(5)
    first.cancel()
    source.gateDiffs = False
    second = worker.requestDiff("c1")
    source.diffGate.set()

    # Only the second request produces a result
    event = nextEvent(worker)
    assert isinstance(event, DiffLoaded)
    assert event.commitId == "c1"
    assert event.serial == second.serial
    assert worker.outbox.empty()


def testCancelledBeforeStartIsSkipped(makeWorker):
    source = FakeSource()
    worker = makeWorker(source)
    request = DiffRequest("c0")
    request.cancel()
    worker.inbox.put(request)
    worker.requestCommits(1)

    event = nextEvent(worker)
    assert isinstance(event, CommitsLoaded)
    assert not source.diffStarted.is_set()


def testSerialsIncrease():
    a = DiffRequest("c0")
    b = DiffRequest("c0")
    assert b.serial > a.serial
    assert not a.isCancelled
    a.cancel()
    assert a.isCancelled
    assert "cancelled" in repr(a)


def testPollEvents(makeWorker):
    worker = makeWorker(FakeSource(3))
    assert worker.pollEvents() == []

    worker.requestCommits(10)
    worker.requestDiff("c0")
    worker.stop(timeout=5)  # drains the inbox before returning

    events = worker.pollEvents()
    assert [type(e) for e in events] == [CommitsLoaded, DiffLoaded]
    assert worker.pollEvents() == []
