# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitFileLog, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Generator

import pygit2
import pytest


def setUpGitConfigSearchPaths(prefix=""):
    """
    Prevent unit tests from accessing the host system's git config files.
    This modifies libgit2 search paths and GIT_CONFIG environment variables
    for vanilla git.
    """
    ConfigLevel = pygit2.enums.ConfigLevel

    levels = [
        ConfigLevel.GLOBAL,
        ConfigLevel.XDG,
        ConfigLevel.SYSTEM,
        ConfigLevel.PROGRAMDATA,
    ]

    for level in levels:
        if prefix:
            path = f"{prefix}_{level.name}"
        else:
            path = ""
        pygit2.settings.search_path[level] = path

    def vanillaGitConfigPath(level):
        path = pygit2.settings.search_path[level]
        if path:
            path += "/.gitconfig"
        return path

    os.environ["GIT_CONFIG_SYSTEM"] = vanillaGitConfigPath(ConfigLevel.SYSTEM)
    os.environ["GIT_CONFIG_GLOBAL"] = vanillaGitConfigPath(ConfigLevel.GLOBAL)


@pytest.fixture(scope='session', autouse=True)
def maskHostGitConfig():
    setUpGitConfigSearchPaths("")


@pytest.fixture(scope='session', autouse=True)
def setUpLogging():
    rootLogger = logging.root
    rootLogger.setLevel(logging.DEBUG)

    yield

    # Work around https://github.com/pytest-dev/pytest/issues/5502
    for handler in rootLogger.handlers:
        rootLogger.removeHandler(handler)


@pytest.fixture
def tempDir() -> Generator[tempfile.TemporaryDirectory, None, None]:
    location = os.environ.get("GITFILELOG_TEMPDIR", None)

    td = tempfile.TemporaryDirectory(prefix="gitfilelogtest-", dir=location)
    yield td
    td.cleanup()


@pytest.fixture
def builder(tempDir):
    from .util import RepoBuilder

    with RepoBuilder(f"{tempDir.name}/repo") as repoBuilder:
        yield repoBuilder
