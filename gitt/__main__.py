# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
import os
import sys
from argparse import ArgumentParser

from gitt import settings
from gitt.porcelain import LIBGIT2_VERSION, PYGIT2_VERSION
from gitt.prefsfile import configDir
from gitt.revisionsource import RevisionSource, StartupError
from gitt.toolbox import BENCHMARK_LOGGING_LEVEL

logger = logging.getLogger(__name__)

LOG_FILENAME = "gitt.log"


def makeArgumentParser() -> ArgumentParser:
    parser = ArgumentParser(
        prog="gitt",
        description="Git repository viewer in your terminal",
        usage="%(prog)s [OPTIONS] [COMMITTISH] [-- <path>...]")
    parser.add_argument("committish", nargs="?", default="", metavar="COMMITTISH",
                        help="Show history starting at this commit, branch or tag (default: HEAD)")
    parser.add_argument("--working-directory", metavar="PATH", default="",
                        help="Use PATH as the working directory of gitt")
    parser.add_argument("--verbose", action="store_true",
                        help="Write debug messages to the log file")
    return parser


def parseArgs(argv: list[str]):
    """
    Parse the command line. Arguments after "--" are path filters;
    argparse would otherwise take the first of them for the committish.
    """
    if "--" in argv:
        split = argv.index("--")
        options, paths = argv[:split], argv[split + 1:]
    else:
        options, paths = argv, []

    args = makeArgumentParser().parse_args(options)
    args.paths = paths
    return args


def setUpLogging(verbose: bool):
    logging.addLevelName(BENCHMARK_LOGGING_LEVEL, "BENCHMARK")
    level = logging.DEBUG if verbose else settings.prefs.verbosity

    # curses owns the terminal, so log to a file instead of stdout
    logDir = configDir()
    try:
        os.makedirs(logDir, exist_ok=True)
        handler = logging.FileHandler(os.path.join(logDir, LOG_FILENAME), encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()

    logging.basicConfig(
        handlers=[handler],
        level=level,
        format='%(levelname).1s %(asctime)s %(filename)-16s | %(message)s',
        datefmt="%H:%M:%S")

    logger.info(f"gitt on pygit2 {PYGIT2_VERSION}, libgit2 {LIBGIT2_VERSION}")


def main(argv: list[str] | None = None) -> int:
    args = parseArgs(sys.argv[1:] if argv is None else argv)

    settings.prefs.load()
    setUpLogging(args.verbose)

    try:
        source = RevisionSource.open(args.working_directory, args.committish, args.paths)
    except StartupError as exc:
        logger.error(f"Startup failed: {exc}")
        print(f"gitt: {exc}", file=sys.stderr)
        return 1

    from gitt.tui.app import run
    try:
        return run(source)
    except KeyboardInterrupt:
        return 0


if __name__ == "__main__":
    sys.exit(main())
