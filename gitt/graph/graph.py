# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import enum
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

Oid = str


class CommitLike(Protocol):
    """ Anything with an id and parent ids can be laid out in the graph. """
    id: Oid
    parent_ids: Sequence[Oid]


class SegmentKind(enum.IntEnum):
    PASSING = 0
    "A lane runs past the commit, from the row above to the row below."

    INCOMING = 1
    "A lane from the row above ends at the commit (the commit is its tip's parent)."

    OUTGOING = 2
    "A line leaves the commit toward a lane in the row below (one of its parents)."


@dataclass(frozen=True)
class Segment:
    """
    One piece of line to draw within a GraphRow.

    For PASSING segments, `lane == target`.
    For INCOMING segments, `lane` is the lane coming from above
    and `target` is the commit's home lane.
    For OUTGOING segments, `lane` is the commit's home lane
    and `target` is the lane leading to the parent below.
    """

    kind: SegmentKind
    lane: int
    target: int


@dataclass(frozen=True)
class GraphRow:
    """
    A commit placed in the commit graph.

    `lanesAbove[i]` is the id of the commit that lane i is waiting for
    as it enters this row from the top, or None if lane i is free.
    `lanesBelow[i]` is the same thing as lane i leaves the row at the bottom.
    """

    commit: CommitLike
    lane: int
    lanesAbove: tuple[Oid | None, ...]
    lanesBelow: tuple[Oid | None, ...]
    segments: tuple[Segment, ...]

    @property
    def commitId(self) -> Oid:
        return self.commit.id

    @property
    def width(self) -> int:
        """ Number of lane columns needed to draw this row. """
        return max(len(self.lanesAbove), len(self.lanesBelow), self.lane + 1)

    def segmentsOfKind(self, kind: SegmentKind) -> list[Segment]:
        return [s for s in self.segments if s.kind == kind]

    def hasIncoming(self) -> bool:
        return any(s.kind == SegmentKind.INCOMING for s in self.segments)

    def hasOutgoing(self) -> bool:
        return any(s.kind == SegmentKind.OUTGOING for s in self.segments)
