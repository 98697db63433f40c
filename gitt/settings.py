# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import logging
import sys

from gitt.prefsfile import PrefsFile
from gitt.toolbox.benchmark import BENCHMARK_LOGGING_LEVEL
from gitt.toolbox.gitutils import AuthorDisplayStyle

logger = logging.getLogger(__name__)

TEST_MODE = "pytest" in sys.modules
"""
Unit testing mode (don't touch real user prefs, etc.).
"""

SHORT_DATE_PRESETS = {
    "ISO": "%Y-%m-%d %H:%M",
    "Universal 1": "%d %b %Y %H:%M",
    "Universal 2": "%a %d %b %Y %H:%M",
    "European 1": "%d/%m/%y %H:%M",
    "European 2": "%d.%m.%y %H:%M",
    "American": "%m/%d/%y %I:%M %p",
}


class LoggingLevel(enum.IntEnum):
    BENCHMARK = BENCHMARK_LOGGING_LEVEL
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING


@dataclasses.dataclass
class Prefs(PrefsFile):
    _filename = "prefs.json"

    _category_diff              : int                   = 0
    contextLines                : int                   = 3
    tabSpaces                   : int                   = 4

    _category_graph             : int                   = 0
    chronologicalOrder          : bool                  = True
    authorDisplayStyle          : AuthorDisplayStyle    = AuthorDisplayStyle.FULL_NAME
    shortTimeFormat             : str                   = list(SHORT_DATE_PRESETS.values())[0]
    showRefs                    : bool                  = True
    commitChunkSize             : int                   = 200

    _category_layout            : int                   = 0
    listPaneRatio               : float                 = 0.4
    scrollCacheSize             : int                   = 150

    _category_advanced          : int                   = 0
    shortHashChars              : int                   = 7
    tickMilliseconds            : int                   = 200
    verbosity                   : LoggingLevel          = LoggingLevel.WARNING


prefs = Prefs()
