# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Turns a GraphRow into the styled text spans of one commit list line.
"""

import enum
from typing import NamedTuple

from gitt import settings
from gitt.graph import GraphDiagram, GraphRow
from gitt.toolbox import abbreviatePerson, cellWidth, fitText, padText, shortHash, signatureDateFormat

MIN_SUBJECT_WIDTH = 30
MIN_DATE_WIDTH = 10
MAX_DATE_WIDTH = 16
MIN_AUTHOR_WIDTH = 20
MAX_AUTHOR_WIDTH = 40


class SpanStyle(enum.IntEnum):
    PLAIN = 0
    GRAPH = 1
    HASH = 2
    REFS = 3
    HEAD = 4
    SUBJECT = 5
    AUTHOR = 6
    DATE = 7


class Span(NamedTuple):
    text: str
    style: SpanStyle


class ColumnWidths(NamedTuple):
    main: int
    author: int
    date: int


def columnWidths(totalWidth: int) -> ColumnWidths:
    """
    Split the width of the commit list into the main column (graph, hash,
    refs, subject), the author column and the date column.

    The author and date columns get a share of the width within fixed bounds.
    They are dropped (author first) when the main column would get too narrow.
    """
    totalWidth = max(0, totalWidth)
    date = min(MAX_DATE_WIDTH, max(MIN_DATE_WIDTH, round(totalWidth * 0.09)))
    author = min(MAX_AUTHOR_WIDTH, max(MIN_AUTHOR_WIDTH, round(totalWidth * 0.18)))

    main = totalWidth - author - date - 2
    if main < MIN_SUBJECT_WIDTH:
        author = 0
        main = totalWidth - date - 1
    if main < MIN_SUBJECT_WIDTH:
        date = 0
        main = totalWidth

    return ColumnWidths(main, author, date)


def refsText(row: GraphRow) -> str:
    refs = getattr(row.commit, "refs", ())
    if not refs or not settings.prefs.showRefs:
        return ""
    return "(" + ", ".join(refs) + ")"


def formatRow(row: GraphRow, totalWidth: int, graphWidth: int = 0) -> list[Span]:
    """
    Lay out a commit list line as styled spans that fit in `totalWidth` cells.
    `graphWidth` (in lanes) keeps the subjects aligned across visible rows.
    """
    commit = row.commit
    widths = columnWidths(totalWidth)
    spans = []
    remaining = widths.main

    def push(text: str, style: SpanStyle):
        nonlocal remaining
        text = fitText(text, remaining)
        if text:
            spans.append(Span(text, style))
            remaining -= cellWidth(text)

    push(GraphDiagram.rowGlyphs(row, graphWidth) + " ", SpanStyle.GRAPH)
    push(shortHash(str(commit.id)) + " ", SpanStyle.HASH)

    refs = refsText(row)
    if refs:
        push(refs + " ", SpanStyle.HEAD if "HEAD" in getattr(commit, "refs", ()) else SpanStyle.REFS)

    push(getattr(commit, "subject", ""), SpanStyle.SUBJECT)

    if remaining > 0:
        spans.append(Span(" " * remaining, SpanStyle.PLAIN))

    if widths.author:
        author = abbreviatePerson(getattr(commit, "author", ""), getattr(commit, "authorEmail", ""),
                                  settings.prefs.authorDisplayStyle)
        spans.append(Span(" " + padText(author, widths.author), SpanStyle.AUTHOR))

    if widths.date:
        date = signatureDateFormat(getattr(commit, "time", 0), getattr(commit, "offset", 0))
        spans.append(Span(" " + padText(date, widths.date), SpanStyle.DATE))

    return spans
