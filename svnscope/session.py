# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging
import os

from svnscope.blame import BlameEngine
from svnscope.diffstaging import DiffStaging
from svnscope.historymodel import HistoryModel
from svnscope.qt import *
from svnscope.svnservice import SvnService
from svnscope.toolbox import compactPath

logger = logging.getLogger(__name__)


class SvnSession(QObject):
    """
    Everything a view needs to browse one working copy.

    close() ends the session: staged diff files are deleted and blame
    resources are released.
    """

    def __init__(self, workspaceRoot: str, pageSize: int = 0, parent: QObject | None = None):
        super().__init__(parent)
        self.setObjectName("SvnSession")

        self.workspaceRoot = os.path.abspath(workspaceRoot)
        self.service = SvnService(self.workspaceRoot, self)
        self.history = HistoryModel(self.service, pageSize, self)
        self.blame = BlameEngine(self.service, self)
        self.diffStaging = DiffStaging(self.service, self)
        self.closed = False

        logger.info(f"Session opened: {compactPath(self.workspaceRoot)}")

    def close(self):
        if self.closed:
            return
        self.closed = True
        self.diffStaging.cleanup()
        self.blame.dispose()
        logger.info(f"Session closed: {compactPath(self.workspaceRoot)}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
