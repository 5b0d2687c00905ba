# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
import os
import shlex
import sys
import tempfile
from collections.abc import Generator

import pytest

# Tests never need a visible window
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope='session', autouse=True)
def setUpLogging():
    rootLogger = logging.root
    rootLogger.setLevel(logging.DEBUG)

    yield

    # Chatty destructors may cause spam after pytest has wound down.
    # Work around https://github.com/pytest-dev/pytest/issues/5502
    for handler in rootLogger.handlers:
        rootLogger.removeHandler(handler)


@pytest.fixture(scope='session', autouse=True)
def isolateStandardPaths():
    from svnscope.qt import QStandardPaths

    # Prevent unit tests from reading actual user settings.
    # (APP_TESTMODE already points prefs elsewhere; this is an extra precaution.)
    QStandardPaths.setTestModeEnabled(True)
    yield
    QStandardPaths.setTestModeEnabled(False)


@pytest.fixture
def tempDir() -> Generator[tempfile.TemporaryDirectory, None, None]:
    td = tempfile.TemporaryDirectory(prefix="svnscopetest-")
    yield td
    td.cleanup()


@pytest.fixture
def svnShim(qapp) -> Generator[str, None, None]:
    """
    Route every svn invocation to test/data/svn-shim.py for the duration of the test.
    Yields the command line that stands in for svn.
    """
    from svnscope.svndriver import SvnDriver
    from .util import getTestDataPath

    savedStem = SvnDriver.commandStem()
    command = shlex.join([sys.executable, getTestDataPath("svn-shim.py")])
    SvnDriver.setSvnPath(command)

    yield command

    SvnDriver._commandStem = savedStem
