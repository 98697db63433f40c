# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import logging
from collections.abc import Callable, Iterable, Sequence

from gitt.graph.graph import CommitLike, GraphRow, Oid
from gitt.graph.graphweaver import GraphWeaver

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class MockCommit:
    id: Oid
    parent_ids: Sequence[Oid]


class GraphBuildLoop:
    """
    Feeds commits to a GraphWeaver and collects the resulting rows.

    Commits may be sent in any number of chunks; the rows come out
    the same as if the whole sequence had been sent at once.
    """

    onRow: Callable[[GraphRow], None]

    def __init__(self):
        self.weaver = GraphWeaver()
        self.rows: list[GraphRow] = []
        self.onRow = GraphBuildLoop.defaultOnRow

    @staticmethod
    def defaultOnRow(row: GraphRow):
        pass

    def sendAll(self, sequence: Iterable[CommitLike]):
        gen = self.coBuild()
        gen.send(None)  # prime it
        for c in sequence:
            gen.send(c)
        gen.close()
        return self

    def sendChunk(self, chunk: Iterable[CommitLike]) -> list[GraphRow]:
        """ Lay out the next chunk of commits and return the new rows. """
        start = len(self.rows)
        self.sendAll(chunk)
        return self.rows[start:]

    def coBuild(self):
        weaver = self.weaver
        rows = self.rows

        while True:
            try:
                commit = yield
            except GeneratorExit:
                break

            row = weaver.newCommit(commit)
            rows.append(row)
            self.onRow(row)

        logger.debug(f"Rows: {weaver.rowCount}; peak lane count: {weaver.peakLaneCount}")

    @property
    def pendingIds(self) -> set[Oid]:
        return self.weaver.pendingIds

    def isDangling(self) -> bool:
        return self.weaver.isDangling()
