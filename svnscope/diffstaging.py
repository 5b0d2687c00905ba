# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Stage a revision of a file and its predecessor as two temporary files,
ready to be compared with any diff tool.
"""

import dataclasses
import logging
import os
import posixpath
import zlib
from pathlib import Path

from svnscope.appconsts import *
from svnscope.localization import *
from svnscope.qt import *
from svnscope.svndriver import VcsFailure
from svnscope.svnservice import SvnService
from svnscope.toolbox import Benchmark

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class StagedDiff:
    repoPath: str
    revision: str
    priorRevision: str
    priorPath: str
    currentPath: str
    title: str

    priorMissing: bool = False
    "True if the prior revision's content couldn't be fetched (e.g. the file was added in this revision)."


class DiffStaging(QObject):
    """
    Owns the temporary files produced by prepareDiff() for the lifetime of a session.

    Files are written to a session-wide temporary directory. Call cleanup()
    when the session ends to delete them.
    """

    def __init__(self, service: SvnService, parent: QObject | None = None):
        super().__init__(parent)
        self.setObjectName("DiffStaging")
        self.service = service
        self.tempDir: QTemporaryDir | None = None
        self.stagedFiles: set[str] = set()
        self._registry: dict[str, StagedDiff] = {}

    def tempDirPath(self) -> str:
        if self.tempDir is None:
            tempDirTemplate = str(Path(QDir.tempPath(), f"{APP_SYSTEM_NAME}-diff"))
            tempDir = QTemporaryDir(tempDirTemplate)
            if not tempDir.isValid():
                raise OSError(_("Can’t create temporary directory: {0}", tempDir.errorString()))
            tempDir.setAutoRemove(True)
            self.tempDir = tempDir
        return self.tempDir.path()

    @staticmethod
    def stagedName(repoPath: str, revision: str, role: str) -> str:
        """
        Name of a staged file. Revision and role tell apart the files of
        concurrent diffs; the path hash tells apart same-named files in
        different directories.
        """
        pathHash = zlib.crc32(repoPath.encode("utf-8"))
        fileName = posixpath.basename(repoPath.rstrip("/")) or "file"
        return f"r{revision}-{role}_{pathHash:08x}_{fileName}"

    def prepareDiff(self, repoPath: str, revision: str) -> StagedDiff:
        """
        Fetch a file at `revision` and at the revision before it, and stage
        both. The current content is required. The prior content is
        best-effort: if svn can't produce it, an empty file is staged instead.

        Staging the same file at the same revision again reuses the files
        already on disk.
        """
        priorRevision = str(int(revision) - 1)

        currentPath = os.path.join(self.tempDirPath(), self.stagedName(repoPath, revision, "current"))
        priorPath = os.path.join(self.tempDirPath(), self.stagedName(repoPath, priorRevision, "prior"))

        with Benchmark("prepareDiff"):
            try:
                staged = self._registry[currentPath]
                if os.path.exists(staged.currentPath) and os.path.exists(staged.priorPath):
                    logger.debug(f"Reusing staged diff: {repoPath}@{revision}")
                    return staged
            except KeyError:
                pass

            url = self.service.repoUrl(repoPath)

            # Both fetches run at the same time
            currentDriver = self.service.startFileContent(url, revision)
            priorDriver = self.service.startFileContent(url, priorRevision)

            priorMissing = False
            try:
                priorContent = self.service.finishFileContent(priorDriver)
            except VcsFailure as exc:
                logger.info(f"No prior content for {repoPath}@{priorRevision}: {exc.exitInfo}")
                priorContent = b""
                priorMissing = True

            currentContent = self.service.finishFileContent(currentDriver)

            self._writeStagedFile(currentPath, currentContent)
            try:
                self._writeStagedFile(priorPath, priorContent)
            except OSError:
                self._discard(currentPath)
                raise

        fileName = posixpath.basename(repoPath.rstrip("/")) or repoPath
        staged = StagedDiff(
            repoPath=repoPath,
            revision=revision,
            priorRevision=priorRevision,
            priorPath=priorPath,
            currentPath=currentPath,
            title=f"{fileName} (r{priorRevision} ↔ r{revision})",
            priorMissing=priorMissing)

        self._registry[currentPath] = staged
        return staged

    def _writeStagedFile(self, path: str, data: bytes):
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError:
            logger.warning(f"Couldn't stage {path}", exc_info=True)
            self._discard(path)
            raise
        self.stagedFiles.add(path)

    def _discard(self, path: str):
        self.stagedFiles.discard(path)
        try:
            os.unlink(path)
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.warning(f"Couldn't delete staged file {path}: {exc}")

    def cleanup(self):
        """
        Delete all staged files, then the temporary directory.
        Failures are logged and otherwise ignored.
        """
        logger.debug(f"Cleaning up {len(self.stagedFiles)} staged files")

        for path in sorted(self.stagedFiles):
            try:
                os.unlink(path)
            except OSError as exc:
                logger.warning(f"Couldn't delete staged file {path}: {exc}")

        self.stagedFiles.clear()
        self._registry.clear()

        if self.tempDir is not None:
            if not self.tempDir.remove():
                logger.warning(f"Couldn't remove temporary directory {self.tempDir.path()}")
            self.tempDir = None
