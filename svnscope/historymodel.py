# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Loaded commit history with pagination and filters.

The svn client can't resume a log from an offset, so paging works by
re-requesting a larger page. Every fetch replaces the whole commit set.
"""

import enum
import logging
from datetime import datetime

from svnscope import settings
from svnscope.localization import *
from svnscope.qt import *
from svnscope.svndriver import Commit, VcsFailure
from svnscope.svnservice import SvnService
from svnscope.toolbox import relativeToRoot, tquo

logger = logging.getLogger(__name__)


class HistoryState(enum.IntEnum):
    Empty = 0
    Loaded = 1
    Filtered = 2


class HistoryModel(QObject):
    historyChanged = Signal()
    "Emitted whenever the commit set or the filter state changes."

    loadFailed = Signal(str)

    def __init__(self, service: SvnService, pageSize: int = 0, parent: QObject | None = None):
        super().__init__(parent)
        self.setObjectName("HistoryModel")

        self.service = service
        self.pageSize = pageSize if pageSize > 0 else settings.prefs.clampedPageSize()

        self.commits: list[Commit] = []
        self.limit = self.pageSize
        self.fileScope = ""
        self.searchText = ""

        # Fetch bookkeeping. Only results from the latest generation are kept.
        self._generation = 0
        self._issuedLimit = self.limit

    # -------------------------------------------------------------------------
    # Derived state

    @property
    def state(self) -> HistoryState:
        if self.isFiltered:
            return HistoryState.Filtered
        if self.commits:
            return HistoryState.Loaded
        return HistoryState.Empty

    @property
    def isFiltered(self) -> bool:
        return bool(self.fileScope or self.searchText)

    @property
    def filteredCommits(self) -> list[Commit]:
        if not self.searchText:
            return list(self.commits)
        return [c for c in self.commits if c.matches(self.searchText)]

    def filterDescription(self) -> str:
        parts = []
        if self.fileScope:
            parts.append(_("file: {0}", relativeToRoot(self.fileScope, self.service.workspaceRoot)))
        if self.searchText:
            parts.append(tquo(self.searchText))
        return ", ".join(parts)

    def countDescription(self) -> str:
        total = len(self.commits)
        if not self.isFiltered:
            return _n("{n} commit", "{n} commits", total)
        return _n("{0} of {n} commit", "{0} of {n} commits", total, len(self.filteredCommits))

    def groupedCommits(self, now: datetime | None = None) -> dict[str, list[Commit]]:
        """
        Partition filteredCommits by date group, computed against `now`.
        Groups appear in the order their first commit appears.
        """
        groups: dict[str, list[Commit]] = {}
        for commit in self.filteredCommits:
            label = commit.groupLabel(now)
            groups.setdefault(label, []).append(commit)
        return groups

    # -------------------------------------------------------------------------
    # Fetching

    def _fetch(self, limit: int, fileScope: str, clearSearch: bool = False) -> bool:
        """
        Query svn and replace the commit set. The file scope is applied together
        with the new commits, so a failed fetch leaves everything as it was.

        The search text is left alone unless `clearSearch` is set: it may
        change while svn is running, and the user's latest search wins.

        Return False if a later fetch superseded this one.
        """
        self._generation += 1
        generation = self._generation
        self._issuedLimit = limit

        try:
            if fileScope:
                commits = self.service.getFileHistory(fileScope, limit)
            else:
                commits = self.service.getHistory(limit)
        except VcsFailure as exc:
            if generation == self._generation:
                self._issuedLimit = self.limit
                self.loadFailed.emit(str(exc))
            raise

        if generation != self._generation:
            logger.debug(f"Discarding superseded history fetch #{generation} (limit {limit})")
            return False

        self.commits = commits
        self.limit = limit
        self.fileScope = fileScope
        if clearSearch:
            self.searchText = ""
        logger.debug(f"History fetch #{generation}: {len(commits)} commits (limit {limit})")

        self.historyChanged.emit()
        return True

    def refresh(self) -> bool:
        return self._fetch(self.pageSize, self.fileScope)

    def loadMore(self) -> bool:
        return self._fetch(self._issuedLimit + self.pageSize, self.fileScope)

    def showFileHistory(self, path: str) -> bool:
        return self._fetch(self.pageSize, path)

    def clearFilters(self) -> bool:
        return self._fetch(self.pageSize, "", clearSearch=True)

    def setSearchText(self, text: str):
        self.searchText = text
        self.historyChanged.emit()

    def fetchRecentAuthors(self, limit: int = 0) -> list[str]:
        """ Unique authors among the most recent commits, sorted. Doesn't touch the loaded history. """
        limit = limit if limit > 0 else settings.prefs.recentAuthorsLimit
        commits = self.service.getHistory(limit)
        return sorted({c.author for c in commits})
