# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import enum
import re

HUNK_HEADER_PATTERN = re.compile(r"^@@ -\d+(,\d+)? \+\d+(,\d+)? @@")
COMMIT_HEADER_PATTERN = re.compile(r"^commit [0-9a-f]{4,}")
FILE_HEADER_PREFIXES = ("diff --git ", "index ", "--- ", "+++ ", "new file mode", "deleted file mode",
                        "old mode", "new mode", "similarity index", "rename from", "rename to",
                        "copy from", "copy to", "Binary files ")
METADATA_PREFIXES = ("Author:", "Date:", "Merge:")
NOTICE_PREFIX = "[!] "


class LineStyle(enum.IntEnum):
    CONTEXT = 0
    ADDITION = 1
    DELETION = 2
    HUNK = 3
    FILE_HEADER = 4
    COMMIT = 5
    METADATA = 6
    NOTICE = 7


def lineStyle(line: str, inHeader: bool = False) -> LineStyle:
    """
    Classify a line of `git show`-style output for coloring.
    `inHeader` is True while still above the first "diff --git" line,
    where lines starting with "+" or "-" belong to the commit message.
    """
    if line.startswith(NOTICE_PREFIX):
        return LineStyle.NOTICE
    if COMMIT_HEADER_PATTERN.match(line):
        return LineStyle.COMMIT
    if inHeader:
        return LineStyle.METADATA if line.startswith(METADATA_PREFIXES) else LineStyle.CONTEXT
    if line.startswith(FILE_HEADER_PREFIXES):
        return LineStyle.FILE_HEADER
    if HUNK_HEADER_PATTERN.match(line):
        return LineStyle.HUNK
    if line.startswith("+"):
        return LineStyle.ADDITION
    if line.startswith("-"):
        return LineStyle.DELETION
    return LineStyle.CONTEXT


def styleLines(lines: list[str], start: int = 0, count: int = -1) -> list[LineStyle]:
    """ Style `count` lines starting at `start`, taking the commit header into account. """
    if count < 0:
        count = len(lines) - start

    # Everything above the first file header belongs to the commit header
    inHeader = not any(line.startswith("diff --git ") for line in lines[:start])

    styles = []
    for line in lines[start:start + count]:
        if line.startswith("diff --git "):
            inHeader = False
        styles.append(lineStyle(line, inHeader))
    return styles
