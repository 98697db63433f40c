# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import traceback


def excStrings(exc: BaseException) -> tuple[str, str]:
    summary = traceback.format_exception_only(exc.__class__, exc)
    summary = ''.join(summary).strip()

    details = traceback.format_exception(exc.__class__, exc, exc.__traceback__)
    details = ''.join(details).strip()

    return summary, details


def excSummaryLine(exc: BaseException) -> str:
    """ First line of the exception summary, fit for a one-line notice. """
    summary, _ = excStrings(exc)
    return summary.splitlines()[0] if summary else exc.__class__.__name__
