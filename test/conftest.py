# -----------------------------------------------------------------------------
# Copyright (C) 2024 The gitt authors.
# This file is part of gitt, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import os
import tempfile

import pygit2
import pytest

from gitt import settings


def setUpGitConfigSearchPaths(prefix=""):
    # Don't let unit tests access host system's git config
    levels = [
        pygit2.enums.ConfigLevel.GLOBAL,
        pygit2.enums.ConfigLevel.XDG,
        pygit2.enums.ConfigLevel.SYSTEM,
        pygit2.enums.ConfigLevel.PROGRAMDATA,
    ]
    for level in levels:
        if prefix:
            path = f"{prefix}_{level.name}"
        else:
            path = ""
        pygit2.settings.search_path[level] = path


@pytest.fixture(scope='session', autouse=True)
def maskHostGitConfig():
    setUpGitConfigSearchPaths("")


@pytest.fixture(autouse=True)
def defaultPrefs():
    # Prevent spillage of modified prefs from one test to the next
    assert settings.TEST_MODE
    settings.prefs.reset()
    yield settings.prefs
    settings.prefs.reset()


@pytest.fixture
def tempDir() -> tempfile.TemporaryDirectory:
    td = tempfile.TemporaryDirectory(prefix="gitttest-")
    yield td
    td.cleanup()


@pytest.fixture
def repoBuilder(tempDir):
    from .util import RepoBuilder
    path = os.path.realpath(os.path.join(tempDir.name, "TestRepo"))
    return RepoBuilder(path)
