# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging

import pytest

from gitt import settings
from gitt.toolbox import *


def testCellWidth():
    assert cellWidth("abc") == 3
    assert cellWidth("日本") == 4
    assert cellWidth("") == 0


def testFitText():
    assert fitText("hello world", 5) == "hell…"
    assert fitText("hello", 5) == "hello"
    assert fitText("hello", 0) == ""
    assert fitText("hello", -3) == ""
    assert fitText("日本語", 5) == "日本…"
    assert fitText("日本語", 4) == "日…"
    assert fitText("hello", 3, ellipsis="...") == "..."


def testPadText():
    assert padText("ab", 4) == "ab  "
    assert padText("abcdef", 4) == "abc…"
    assert padText("日本語", 5) == "日本…"
    assert padText("日本", 5) == "日本 "


def testExpandTabs():
    assert expandTabs("\tx", 4) == "    x"
    assert expandTabs("ab\tx", 8) == "ab      x"


def testMessageSummary():
    assert messageSummary("Subject\n\nBody text") == ("Subject […]", True)
    assert messageSummary("Subject\n\nBody text", elision="") == ("Subject", True)
    assert messageSummary("  Subject only \n") == ("Subject only", False)


@pytest.mark.parametrize("style,expected", [
    (AuthorDisplayStyle.FULL_NAME, "Test Person"),
    (AuthorDisplayStyle.FIRST_NAME, "Test"),
    (AuthorDisplayStyle.LAST_NAME, "Person"),
    (AuthorDisplayStyle.INITIALS, "TP"),
    (AuthorDisplayStyle.FULL_EMAIL, "toto@example.com"),
    (AuthorDisplayStyle.ABBREVIATED_EMAIL, "toto"),
])
def testAbbreviatePerson(style, expected):
    assert abbreviatePerson("Test Person", "toto@example.com", style) == expected


def testAbbreviateGitHubNoreplyEmail():
    email = "1234567+someone@users.noreply.github.com"
    assert abbreviatePerson("", email, AuthorDisplayStyle.ABBREVIATED_EMAIL) == "someone"


def testShortHash():
    commitId = "0123456789abcdef0123456789abcdef01234567"
    assert shortHash(commitId) == "0123456"
    settings.prefs.shortHashChars = 10
    assert shortHash(commitId) == "0123456789"


def testDateFormats():
    assert gitDateFormat(1672600000, 0) == "Sun Jan 1 19:06:40 2023 +0000"
    assert gitDateFormat(1672600000, 120) == "Sun Jan 1 21:06:40 2023 +0200"
    assert gitDateFormat(1672600000, -330) == "Sun Jan 1 13:36:40 2023 -0530"

    assert signatureDateFormat(1672600000, 0) == "2023-01-01 19:06"
    assert signatureDateFormat(1672600000, 0, "%d/%m/%y") == "01/01/23"

    settings.prefs.shortTimeFormat = settings.SHORT_DATE_PRESETS["European 2"]
    assert signatureDateFormat(1672600000, 60) == "01.01.23 20:06"


def testExcSummaryLine():
    try:
        raise ValueError("first line\nsecond line")
    except ValueError as exc:
        assert excSummaryLine(exc) == "ValueError: first line"
        summary, details = excStrings(exc)
        assert "Traceback" in details


def testBenchmark(caplog):
    caplog.set_level(BENCHMARK_LOGGING_LEVEL)
    with Benchmark("Some work") as bench:
        pass
    assert bench.elapsed >= 0
    assert any("Some work" in r.getMessage() for r in caplog.records if r.levelno == BENCHMARK_LOGGING_LEVEL)


def testPeakTiming():
    timing = PeakTiming("Slowest")
    assert str(timing) == "Slowest: 0ms (n/a)"
    timing.record(0.002, "a")
    timing.record(0.010, "b")
    timing.record(0.005, "c")
    assert timing.where == "b"
    assert str(timing) == "Slowest: 10ms (b)"
