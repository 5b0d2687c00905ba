# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
import os
from urllib.parse import quote

from svnscope.qt import *
from svnscope.svndriver import (
    AnnotateLine, Commit, SvnDriver, VcsFailure,
    parseSvnAnnotate, parseSvnInfo, parseSvnLog)
from svnscope.toolbox import benchmark, pegEscape

logger = logging.getLogger(__name__)

# svn's "no such revision" errors (ra layer and client layer)
NO_SUCH_REVISION_ERRORS = ("E160006", "E195012")


class SvnService(QObject):
    """
    Queries a Subversion working copy through the svn command-line client.

    All svn commands run with the working copy as their current directory.
    """

    def __init__(self, workspaceRoot: str, parent: QObject | None = None):
        super().__init__(parent)
        self.setObjectName("SvnService")
        self.workspaceRoot = os.path.normpath(workspaceRoot)
        self._repoRoot = ""

    def _run(self, *args: str) -> SvnDriver:
        return SvnDriver.run(*args, directory=self.workspaceRoot)

    @benchmark
    def getHistory(self, limit: int = 50) -> list[Commit]:
        driver = self._run("log", "--limit", str(limit), "--xml", "--verbose")
        return parseSvnLog(driver.stdoutBytes())

    @benchmark
    def getFileHistory(self, path: str, limit: int = 50) -> list[Commit]:
        driver = self._run("log", "--limit", str(limit), "--xml", "--verbose", "--", pegEscape(path))
        return parseSvnLog(driver.stdoutBytes())

    def getCommit(self, revision: str) -> Commit | None:
        """
        Look up a single revision. Return None if the repository has no such revision.
        """
        if not revision or revision.startswith("-"):
            logger.warning(f"getCommit: bogus revision {revision!r}")
            return None

        driver = SvnDriver("log", "--revision", revision, "--xml", "--verbose", directory=self.workspaceRoot)
        driver.start()
        driver.waitDone()

        if not driver.isSuccessful() and driver.hasSvnError(*NO_SUCH_REVISION_ERRORS):
            logger.info(f"No such revision: {revision}")
            return None
        driver.checkSuccess()

        commits = parseSvnLog(driver.stdoutBytes())
        if not commits:
            return None
        return commits[0]

    def startFileContent(self, url: str, revision: str) -> SvnDriver:
        """
        Start fetching a file's raw content at a given revision, without waiting for it.
        Pass the returned driver to finishFileContent() to get the data.
        """
        driver = SvnDriver("cat", "--", f"{url}@{revision}", directory=self.workspaceRoot)
        driver.start()
        return driver

    def finishFileContent(self, driver: SvnDriver) -> bytes:
        driver.waitDone()
        driver.checkSuccess()
        return driver.stdoutBytes()

    def getFileContent(self, url: str, revision: str) -> bytes:
        return self.finishFileContent(self.startFileContent(url, revision))

    def getRepoRoot(self) -> str:
        if not self._repoRoot:
            driver = self._run("info", "--xml")
            self._repoRoot = parseSvnInfo(driver.stdoutBytes())
            if not self._repoRoot:
                logger.warning(f"svn info didn't report a repository root for {self.workspaceRoot}")
        return self._repoRoot

    def repoUrl(self, repoPath: str) -> str:
        """ Full URL of a path as reported by svn log (e.g. "/trunk/src/main.c"). """
        root = self.getRepoRoot()
        if not root:
            raise VcsFailure("svn info --xml", "no repository root")
        return root.rstrip("/") + quote("/" + repoPath.lstrip("/"), safe="/")

    @benchmark
    def getAnnotate(self, path: str) -> list[AnnotateLine]:
        driver = self._run("annotate", "--xml", "--", pegEscape(path))
        return parseSvnAnnotate(driver.stdoutBytes())
