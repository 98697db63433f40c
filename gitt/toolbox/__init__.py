# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Utilities that aren't specifically tied to gitt's core functionality.
"""

from .benchmark import Benchmark, PeakTiming, BENCHMARK_LOGGING_LEVEL
from .excutils import excStrings, excSummaryLine
from .gitutils import (
    AuthorDisplayStyle,
    abbreviatePerson,
    shortHash,
    signatureDateTime,
    signatureDateFormat,
    gitDateFormat,
)
from .textutils import (
    messageSummary,
    cellWidth,
    fitText,
    padText,
    expandTabs,
)
