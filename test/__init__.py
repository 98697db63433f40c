# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging

# Verbose logging by default in unit tests
logging.basicConfig(level=logging.DEBUG)
logging.captureWarnings(True)
