# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import bisect
import collections
import logging
from collections.abc import Sequence

from gitt.graph.graph import CommitLike, GraphRow, Oid, Segment, SegmentKind

logger = logging.getLogger(__name__)


class GraphWeaver:
    """
    Assigns lanes to commits as they come in, in revision-walk order,
    and records the line segments needed to draw each row.

    Rows are never revisited: once a commit is woven, its lane is final.
    """

    lanes: list[Oid | None]
    laneLookup: collections.defaultdict[Oid, list[int]]  # list: all lanes reserved for a commit, in discovery order
    freeLanes: list[int]  # sorted
    seen: set[Oid]
    rowCount: int
    peakLaneCount: int

    def __init__(self):
        self.lanes = []
        self.laneLookup = collections.defaultdict(list)
        self.freeLanes = []
        self.seen = set()
        self.rowCount = 0
        self.peakLaneCount = 0

    def _allocLane(self) -> int:
        # Pick leftmost free lane
        if self.freeLanes:
            return self.freeLanes.pop(0)

        # All lanes taken: create one on the right
        self.lanes.append(None)
        return len(self.lanes) - 1

    def _peekLane(self) -> int:
        """ Leftmost free lane, without reserving it. """
        if self.freeLanes:
            return self.freeLanes[0]
        return len(self.lanes)

    def _freeLane(self, lane: int):
        self.lanes[lane] = None
        bisect.insort(self.freeLanes, lane)

    def sanitizeParents(self, me: Oid, parents: Sequence[Oid]) -> list[Oid]:
        """
        Drop parent references that can't be drawn below this commit:
        empty ids, self references, duplicates, and commits that were
        already laid out higher up in the graph.
        """
        clean = []
        for parent in parents:
            if not parent or parent == me or parent in clean or parent in self.seen:
                logger.debug(f"Ignoring bogus parent {parent!r} of {me}")
                continue
            clean.append(parent)
        return clean

    def newCommit(self, commit: CommitLike) -> GraphRow:
        """ Lay out the next commit in the sequence. """

        me = commit.id
        myParents = self.sanitizeParents(me, commit.parent_ids)
        hasParents = len(myParents) > 0
        lanesAbove = tuple(self.lanes)
        segments = []

        # Resolve lanes that my child commits have reserved higher up in the graph,
        # waiting for me to appear in the commit sequence so I can close them.
        myLanes = self.laneLookup.pop(me, None)
        if myLanes:
            # The first child that discovered me keeps its lane; the others converge into it
            myLane = myLanes[0]
            for lane in myLanes:
                segments.append(Segment(SegmentKind.INCOMING, lane, myLane))
                if lane == myLane and hasParents:
                    self.lanes[lane] = None  # will be handed off to my first parent below
                else:
                    self._freeLane(lane)
        elif hasParents:
            # Nobody was looking for me, so I'm the tip of a new branch
            myLane = self._allocLane()
        else:
            # Edge case: the commit is BOTH childless AND parentless.
            # Put the commit in a free lane, but do NOT reserve the lane.
            myLane = self._peekLane()

        # Lanes that keep running past me
        myLaneSet = set(myLanes or ())
        for lane, waitingFor in enumerate(lanesAbove):
            if waitingFor is not None and lane not in myLaneSet:
                segments.append(Segment(SegmentKind.PASSING, lane, lane))

        for i, parent in enumerate(myParents):
            if i == 0:
                # Hand over my lane to my first parent
                parentLane = myLane
            else:
                reserved = self.laneLookup.get(parent)
                if reserved:
                    # Another child already opened a lane for this parent: join it
                    segments.append(Segment(SegmentKind.OUTGOING, myLane, reserved[0]))
                    continue
                # Branch out on a new lane for this merge parent
                parentLane = self._allocLane()

            self.lanes[parentLane] = parent
            self.laneLookup[parent].append(parentLane)
            segments.append(Segment(SegmentKind.OUTGOING, myLane, parentLane))

        # Compact free lanes on the right
        while self.lanes and self.lanes[-1] is None:
            assert self.freeLanes[-1] == len(self.lanes) - 1
            self.freeLanes.pop()
            self.lanes.pop()

        self.seen.add(me)
        self.rowCount += 1
        self.peakLaneCount = max(self.peakLaneCount, len(self.lanes))

        return GraphRow(
            commit=commit,
            lane=myLane,
            lanesAbove=lanesAbove,
            lanesBelow=tuple(self.lanes),
            segments=tuple(segments))

    @property
    def pendingIds(self) -> set[Oid]:
        """ Commits that rows above are still waiting for. """
        return set(self.laneLookup.keys())

    def isDangling(self) -> bool:
        return len(self.laneLookup) > 0
