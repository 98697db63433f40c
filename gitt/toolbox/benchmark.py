# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
import os
import time

logger = logging.getLogger(__name__)
BENCHMARK_LOGGING_LEVEL = 5

try:
    import psutil
except ModuleNotFoundError:
    logger.info("psutil isn't available. Memory usage won't be reported in benchmarks.")
    psutil = None


def residentSetSize() -> int:
    if psutil is None:
        return 0
    return psutil.Process(os.getpid()).memory_info().rss


class Benchmark:
    """
    Context manager that logs how long a piece of code takes to run
    and how much the resident set grew meanwhile (if psutil is installed).
    Nested benchmarks are reported as "outer/inner".
    """

    nesting: list[str] = []

    def __init__(self, name: str):
        self.name = name
        self.elapsed = 0.0
        self._start = 0.0
        self._startRSS = 0

    def __enter__(self):
        Benchmark.nesting.append(self.name)
        self._startRSS = residentSetSize()
        self._start = time.perf_counter()
        return self

    def __exit__(self, excType=None, excValue=None, traceback=None):
        self.elapsed = time.perf_counter() - self._start
        kb = (residentSetSize() - self._startRSS) // 1024

        path = "/".join(Benchmark.nesting)
        Benchmark.nesting.pop()

        if excType is not None:
            path += f" [{excType.__name__}]"
        logger.log(BENCHMARK_LOGGING_LEVEL, f"{1000 * self.elapsed:8.2f} ms {kb:6,d}K {path}")


class PeakTiming:
    """
    Keeps track of the slowest occurrence of a recurring operation
    (e.g. loading the diff of a commit) and where it happened.
    """

    def __init__(self, name: str):
        self.name = name
        self.seconds = 0.0
        self.where = ""

    def record(self, seconds: float, where: str):
        if seconds > self.seconds:
            self.seconds = seconds
            self.where = where

    def __str__(self):
        return f"{self.name}: {1000 * self.seconds:.0f}ms ({self.where or 'n/a'})"
