# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Nodes for the history list and the commit details list.

Each kind of node is its own class, so a node can't be both a commit and a
"load more" entry. Views dispatch on the node's type.
"""

import dataclasses
import os
import posixpath
from datetime import datetime

from svnscope import settings
from svnscope.historymodel import HistoryModel
from svnscope.localization import *
from svnscope.svndriver import ChangedPath, Commit
from svnscope.toolbox import cleanRepoPath, ellipsize, formatListDate, localNow, repoDirPath, toFsPath

BULLET = " • "


@dataclasses.dataclass(frozen=True)
class CommitNode:
    commit: Commit
    label: str
    description: str
    tooltip: str

    @staticmethod
    def fromCommit(commit: Commit, groupLabel: str) -> "CommitNode":
        numFiles = len(commit.changedFiles)
        description = BULLET.join([
            commit.author,
            formatListDate(commit.timestamp, groupLabel),
            _n("{n} file", "{n} files", numFiles),
        ])
        return CommitNode(
            commit=commit,
            label=f"r{commit.revision} - {commit.summary}",
            description=description,
            tooltip=f"{commit.revision}: {commit.message}")


@dataclasses.dataclass(frozen=True)
class GroupNode:
    label: str
    children: tuple[CommitNode, ...]


@dataclasses.dataclass(frozen=True)
class LoadMoreNode:
    pageSize: int

    @property
    def label(self) -> str:
        return _n("Load {n} more...", "Load {n} more...", self.pageSize)

    @property
    def tooltip(self) -> str:
        return _n("Click to load {n} more commit", "Click to load {n} more commits", self.pageSize)


def buildHistoryTree(model: HistoryModel, now: datetime | None = None) -> list[GroupNode | LoadMoreNode]:
    """
    Top-level nodes of the history list: one GroupNode per date group,
    then a LoadMoreNode. Group labels are computed against `now`.
    """
    if now is None:
        now = localNow()

    nodes: list[GroupNode | LoadMoreNode] = []
    for label, commits in model.groupedCommits(now).items():
        children = tuple(CommitNode.fromCommit(c, label) for c in commits)
        nodes.append(GroupNode(label, children))

    nodes.append(LoadMoreNode(model.pageSize))
    return nodes


# -----------------------------------------------------------------------------
# Commit details


@dataclasses.dataclass(frozen=True)
class CommitHeaderNode:
    revision: str
    label: str
    tooltip: str


@dataclasses.dataclass(frozen=True)
class ChangedFileNode:
    change: ChangedPath
    revision: str
    label: str
    description: str
    tooltip: str
    localPath: str


@dataclasses.dataclass(frozen=True)
class FilesHeaderNode:
    label: str
    children: tuple[ChangedFileNode, ...]


def changedFileNode(change: ChangedPath, revision: str, workspaceRoot: str) -> ChangedFileNode:
    relPath = cleanRepoPath(change.path).lstrip("/")
    dirPath = repoDirPath(change.path)
    description = BULLET.join(part for part in [change.action.value, dirPath] if part)

    return ChangedFileNode(
        change=change,
        revision=revision,
        label=posixpath.basename(change.path.rstrip("/")),
        description=description,
        tooltip=os.path.normpath(relPath),
        localPath=toFsPath(change.path, workspaceRoot))


def buildCommitDetails(commit: Commit, workspaceRoot: str) -> list[CommitHeaderNode | FilesHeaderNode]:
    maxLength = settings.prefs.detailsHeaderMaxLength
    header = CommitHeaderNode(
        revision=commit.revision,
        label=ellipsize(f"r{commit.revision} - {commit.summary}", maxLength),
        tooltip=_("Revision {0}", commit.revision) + "\n\n" + commit.message)

    files = tuple(changedFileNode(change, commit.revision, workspaceRoot) for change in commit.changedFiles)
    filesHeader = FilesHeaderNode(_("Changed Files ({0})", len(files)), files)

    return [header, filesHeader]
