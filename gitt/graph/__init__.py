# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from gitt.graph.graph import (
    CommitLike,
    GraphRow,
    Oid,
    Segment,
    SegmentKind,
)
from gitt.graph.graphweaver import GraphWeaver
from gitt.graph.graphbuilder import (
    GraphBuildLoop,
    MockCommit,
)
from gitt.graph.graphdiagram import GraphDiagram
