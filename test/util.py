# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import json
import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from xml.sax.saxutils import escape, quoteattr

from svnscope.svndriver import *
from svnscope.toolbox import formatDateTime
from . import *

TEST_REPO_ROOT = "file:///srv/svn/project"


def getTestDataPath(name):
    path = Path(__file__).resolve().parent / "data"
    return str(path / name)


def noonToday() -> datetime:
    """ Today at noon, local time. Keeps relative dates clear of midnight. """
    return datetime.now().astimezone().replace(hour=12, minute=0, second=0, microsecond=0)


def svnDate(timestamp: datetime) -> str:
    return timestamp.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def writeFile(path, text):
    # Prevent accidental littering of current working directory
    assert os.path.isabs(path), "pass me an absolute path"

    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "wb") as f:
        f.write(text.encode("utf-8") if isinstance(text, str) else text)


def readFile(path):
    with open(path, "rb") as f:
        return f.read()


# -----------------------------------------------------------------------------
# Canned svn output

def logEntryXml(
        revision: str,
        author: str | None = "alice",
        date: datetime | str = "2026-01-15T10:30:00.000000Z",
        message: str = "",
        paths: tuple = (),
) -> str:
    if isinstance(date, datetime):
        date = svnDate(date)

    pathXml = "".join(
        f'<path action="{action}" kind="file" prop-mods="false" text-mods="true">{escape(path)}</path>'
        for action, path in paths)

    return "".join([
        f'<logentry revision="{revision}">',
        f"<author>{escape(author)}</author>" if author is not None else "",
        f"<date>{date}</date>",
        f"<paths>{pathXml}</paths>" if paths else "",
        f"<msg>{escape(message)}</msg>",
        "</logentry>",
    ])


def logXml(*entries: str) -> str:
    return "\n".join(['<?xml version="1.0" encoding="UTF-8"?>', "<log>", *entries, "</log>", ""])


def annotateXml(path: str, entries: list[tuple[int, str, str, str]]) -> str:
    """ entries: (lineNumber, revision, author, date). An empty revision yields a line with no <commit>. """
    lines = ['<?xml version="1.0" encoding="UTF-8"?>', "<blame>", f"<target path={quoteattr(path)}>"]
    for lineNumber, revision, author, date in entries:
        if not revision:
            lines.append(f'<entry line-number="{lineNumber}"></entry>')
            continue
        lines.append(
            f'<entry line-number="{lineNumber}"><commit revision="{revision}">'
            f"<author>{escape(author)}</author><date>{date}</date></commit></entry>")
    lines += ["</target>", "</blame>", ""]
    return "\n".join(lines)


def infoXml(root: str = TEST_REPO_ROOT) -> str:
    return "\n".join([
        '<?xml version="1.0" encoding="UTF-8"?>',
        "<info>",
        '<entry kind="dir" path="." revision="10">',
        f"<url>{root}/trunk</url>",
        "<relative-url>^/trunk</relative-url>",
        f"<repository><root>{root}</root><uuid>0b4c6bd2-7d1c-4e64-9d51-7f3c2e1f4a11</uuid></repository>",
        "</entry>",
        "</info>",
        ""])


# -----------------------------------------------------------------------------
# Fake working copies served by svn-shim.py

def makeWorkingCopy(
        tempDir: tempfile.TemporaryDirectory | str,
        log: str = "",
        info: str = "",
        annotate: str = "",
        catFiles: dict[tuple[str, str], bytes] | None = None,
        files: dict[str, str] | None = None,
) -> str:
    tempDirPath = tempDir if isinstance(tempDir, str) else tempDir.name
    wc = os.path.realpath(os.path.join(tempDirPath, "wc"))
    shimDir = os.path.join(wc, ".svn-shim")
    os.makedirs(shimDir)

    writeFile(os.path.join(shimDir, "log.xml"), log or logXml())
    writeFile(os.path.join(shimDir, "info.xml"), info or infoXml())
    if annotate:
        writeFile(os.path.join(shimDir, "annotate.xml"), annotate)

    for (revision, name), data in (catFiles or {}).items():
        writeFile(os.path.join(shimDir, "cat", revision, name), data)

    for relPath, text in (files or {}).items():
        writeFile(os.path.join(wc, relPath), text)

    return wc


def makeShimFail(wc: str, stderr: str = "svn: E170013: Unable to connect to a repository"):
    writeFile(os.path.join(wc, ".svn-shim", "fail"), stderr)


def readShimCalls(wc: str) -> list[list[str]]:
    path = os.path.join(wc, ".svn-shim", "calls.log")
    if not os.path.exists(path):
        return []
    with open(path, encoding="utf-8") as f:
        return [json.loads(line) for line in f if line.strip()]


def shimCallsTo(wc: str, subcommand: str) -> list[list[str]]:
    return [call for call in readShimCalls(wc) if call and call[0] == subcommand]


# -----------------------------------------------------------------------------
# In-memory stand-ins

def makeCommit(
        revision: str,
        author: str = "alice",
        message: str = "Commit message",
        timestamp: datetime | None = None,
        files: tuple = (),
) -> Commit:
    if timestamp is None:
        timestamp = noonToday()
    timestamp = timestamp.astimezone(timezone.utc)
    changedFiles = tuple(ChangedPath(ChangeAction(action), path, "file") for action, path in files)
    return Commit(revision, author, timestamp, formatDateTime(timestamp), message, changedFiles)


class FakeSvnService:
    """ Records queries and serves canned commits, without running svn. """

    def __init__(self, commits: list[Commit], workspaceRoot: str = "/home/toto/wc"):
        self.commits = commits
        self.workspaceRoot = workspaceRoot
        self.calls = []
        self.annotations: dict[str, list[AnnotateLine]] = {}
        self.failure: Exception | None = None
        self.onFetch = None

    def _serve(self, call: tuple, commits: list[Commit]) -> list[Commit]:
        self.calls.append(call)
        if self.failure is not None:
            raise self.failure
        if self.onFetch is not None:
            callback, self.onFetch = self.onFetch, None
            callback()
        return list(commits)

    def getHistory(self, limit=50):
        return self._serve(("getHistory", limit), self.commits[:limit])

    def getFileHistory(self, path, limit=50):
        name = os.path.basename(path)
        matching = [c for c in self.commits if any(os.path.basename(f.path) == name for f in c.changedFiles)]
        return self._serve(("getFileHistory", path, limit), matching[:limit])

    def getAnnotate(self, path):
        self.calls.append(("getAnnotate", path))
        if self.failure is not None:
            raise self.failure
        return list(self.annotations.get(path, []))


def makeFailure(message="svn: E170013: Unable to connect to a repository") -> VcsFailure:
    return VcsFailure("svn log --xml", "exit code 1", message, 1)


def hoursAgo(hours: float, now: datetime | None = None) -> datetime:
    return (now or noonToday()) - timedelta(hours=hours)
