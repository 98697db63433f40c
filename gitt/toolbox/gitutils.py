# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import datetime
import enum
import re
from contextlib import suppress


INITIALS_PATTERN = re.compile(r"(?:^|\s|-)+([^\s\-])[^\s\-]*")
FIRST_NAME_PATTERN = re.compile(r"(\w(\.?-|\.\s?|\s))*[\w.-]+")


class AuthorDisplayStyle(enum.IntEnum):
    FULL_NAME = 1
    FIRST_NAME = 2
    LAST_NAME = 3
    INITIALS = 4
    FULL_EMAIL = 5
    ABBREVIATED_EMAIL = 6


def abbreviatePerson(name: str, email: str, style: AuthorDisplayStyle = AuthorDisplayStyle.FULL_NAME):
    with suppress(IndexError, TypeError):
        if style == AuthorDisplayStyle.FULL_NAME:
            return name

        elif style == AuthorDisplayStyle.FIRST_NAME:
            return re.match(FIRST_NAME_PATTERN, name)[0]

        elif style == AuthorDisplayStyle.LAST_NAME:
            return name.split(' ')[-1]

        elif style == AuthorDisplayStyle.INITIALS:
            return re.sub(INITIALS_PATTERN, r"\1", name)

        elif style == AuthorDisplayStyle.FULL_EMAIL:
            return email

        elif style == AuthorDisplayStyle.ABBREVIATED_EMAIL:
            emailParts = email.split('@', 1)
            if len(emailParts) == 2 and emailParts[1] == "users.noreply.github.com":
                # Strip ID from GitHub noreply addresses (1234567+username@users.noreply.github.com)
                return emailParts[0].split('+', 1)[-1]
            else:
                return emailParts[0]

    return email


def shortHash(commitId: str) -> str:
    from gitt.settings import prefs
    return commitId[:prefs.shortHashChars]


def signatureDateTime(time: int, offset: int) -> datetime.datetime:
    """ `offset` is in minutes east of UTC, like pygit2.Signature.offset. """
    tz = datetime.timezone(datetime.timedelta(minutes=offset))
    return datetime.datetime.fromtimestamp(time, tz)


def signatureDateFormat(time: int, offset: int, fmt: str = "") -> str:
    if not fmt:
        from gitt.settings import prefs
        fmt = prefs.shortTimeFormat
    return signatureDateTime(time, offset).strftime(fmt)


def gitDateFormat(time: int, offset: int) -> str:
    """ Format a date the way `git show` does, e.g. "Sun Jan 1 19:06:40 2023 +0000". """
    dt = signatureDateTime(time, offset)
    sign = "+" if offset >= 0 else "-"
    hours, minutes = divmod(abs(offset), 60)
    return f"{dt:%a %b} {dt.day} {dt:%H:%M:%S %Y} {sign}{hours:02d}{minutes:02d}"
