# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from wcwidth import wcswidth, wcwidth

ELLIPSIS = "…"


def messageSummary(body: str, elision=" […]"):
    messageContinued = False
    message: str = body.strip()
    newline = message.find('\n')
    if newline > -1:
        messageContinued = newline < len(message) - 1
        message = message[:newline]
        if messageContinued:
            message += elision
    return message, messageContinued


def cellWidth(text: str) -> int:
    """ Number of terminal cells needed to display `text`. """
    width = wcswidth(text)
    if width >= 0:
        return width
    # Non-printable characters in the string: count them as zero-width
    return sum(max(wcwidth(c), 0) for c in text)


def fitText(text: str, maxWidth: int, ellipsis: str = ELLIPSIS) -> str:
    """
    Elide `text` on the right so that it occupies at most `maxWidth` cells.
    Wide (e.g. CJK) characters count as two cells.
    """
    if maxWidth <= 0:
        return ""

    if cellWidth(text) <= maxWidth:
        return text

    budget = maxWidth - cellWidth(ellipsis)
    if budget < 0:
        return ""

    out = []
    used = 0
    for c in text:
        w = max(wcwidth(c), 0)
        if used + w > budget:
            break
        out.append(c)
        used += w

    return "".join(out) + ellipsis


def padText(text: str, width: int) -> str:
    """ Fit `text` to exactly `width` cells, padding with spaces. """
    text = fitText(text, width)
    return text + " " * (width - cellWidth(text))


def expandTabs(line: str, tabSpaces: int) -> str:
    return line.expandtabs(tabSpaces)
