# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
from datetime import datetime
from enum import StrEnum

from svnscope.localization import *
from svnscope.toolbox.dateutils import groupLabel
from svnscope.toolbox.textutils import messageSummary


class ChangeAction(StrEnum):
    Added = "A"
    Modified = "M"
    Deleted = "D"
    Replaced = "R"

    def displayName(self) -> str:
        names = {
            ChangeAction.Added: _p("change action", "Added"),
            ChangeAction.Modified: _p("change action", "Modified"),
            ChangeAction.Deleted: _p("change action", "Deleted"),
            ChangeAction.Replaced: _p("change action", "Replaced"),
        }
        return names[self]


@dataclasses.dataclass(frozen=True)
class ChangedPath:
    action: ChangeAction
    path: str
    kind: str = ""
    "'file', 'dir', or empty if svn didn't say."

    copyFromPath: str = ""
    copyFromRevision: str = ""


@dataclasses.dataclass(frozen=True)
class Commit:
    revision: str
    author: str

    timestamp: datetime | None
    "UTC. None if svn reported a date we couldn't parse."

    displayTimestamp: str
    message: str
    changedFiles: tuple[ChangedPath, ...] = ()

    @property
    def summary(self) -> str:
        return messageSummary(self.message, elision="")[0]

    @property
    def hasValidTimestamp(self) -> bool:
        return self.timestamp is not None

    def groupLabel(self, now: datetime | None = None) -> str:
        return groupLabel(self.timestamp, now)

    def matches(self, needle: str) -> bool:
        """ Case-insensitive substring match on author, message and revision. """
        needle = needle.casefold()
        return (needle in self.author.casefold()
                or needle in self.message.casefold()
                or needle in self.revision.casefold())


@dataclasses.dataclass(frozen=True)
class AnnotateLine:
    lineNumber: int
    revision: str
    author: str
    timestamp: datetime
