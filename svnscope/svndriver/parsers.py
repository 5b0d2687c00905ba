# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Parsers for the XML output of `svn log`, `svn annotate` and `svn info`.

The XML is consumed one closed element at a time, so delimiter-like text
inside a commit message can never split an entry. Malformed entries are
skipped individually; if the document itself is broken or truncated, every
entry that was complete before the error is kept.
"""

import logging
import re
import xml.etree.ElementTree as ET
from collections.abc import Generator
from datetime import datetime, timedelta, timezone

from svnscope.localization import *
from svnscope.svndriver.svncommit import AnnotateLine, ChangeAction, ChangedPath, Commit
from svnscope.toolbox.dateutils import formatDateTime

logger = logging.getLogger(__name__)

# 2026-10-18T09:12:34.567890Z
_svnDatePattern = re.compile(
    r"(\d{4})-(\d\d)-(\d\d)[T ](\d\d):(\d\d):(\d\d)(?:[.,](\d+))?\s*(Z|[+-]\d\d:?\d\d)?$",
    re.IGNORECASE)


def noAuthorSentinel() -> str:
    return _("No author")


def noMessageSentinel() -> str:
    return _("<no comment>")


def parseSvnDate(text: str) -> datetime | None:
    """
    Parse an svn timestamp into an aware UTC datetime.
    Return None (never raise) if the text isn't a valid ISO-8601 date.
    """
    match = _svnDatePattern.match(text.strip())
    if match is None:
        return None

    year, month, day, hour, minute, second, fraction, zone = match.groups()

    # svn gives microseconds; anything finer is truncated
    microsecond = int((fraction or "0")[:6].ljust(6, "0"))

    if not zone or zone.upper() == "Z":
        tz = timezone.utc
    else:
        sign = -1 if zone[0] == "-" else 1
        digits = zone[1:].replace(":", "")
        tz = timezone(sign * timedelta(hours=int(digits[:2]), minutes=int(digits[2:])))

    try:
        stamp = datetime(int(year), int(month), int(day), int(hour), int(minute), int(second),
                         microsecond, tzinfo=tz)
    except ValueError:  # e.g. month 13
        return None

    return stamp.astimezone(timezone.utc)


def iterClosedElements(raw: bytes | str, tag: str) -> Generator[ET.Element, None, None]:
    parser = ET.XMLPullParser(events=("end",))

    # XMLPullParser queues syntax errors among the events, so feed() doesn't raise.
    # close() does raise if the document is incomplete.
    parser.feed(raw)
    try:
        parser.close()
    except ET.ParseError as exc:
        logger.warning(f"svn xml output is incomplete: {exc}")

    try:
        for _event, element in parser.read_events():
            if element.tag == tag:
                yield element
    except ET.ParseError as exc:
        logger.warning(f"svn xml output is malformed, keeping entries parsed so far: {exc}")


def parseSvnLog(raw: bytes | str) -> list[Commit]:
    commits = []
    for element in iterClosedElements(raw, "logentry"):
        commit = _parseLogEntry(element)
        if commit is not None:
            commits.append(commit)
    return commits


def _parseLogEntry(element: ET.Element) -> Commit | None:
    revision = element.get("revision", "").strip()
    if not revision:
        logger.warning("skipping log entry without a revision")
        return None

    author = (element.findtext("author") or "").strip() or noAuthorSentinel()
    message = (element.findtext("msg") or "").strip() or noMessageSentinel()

    dateText = element.findtext("date") or ""
    timestamp = parseSvnDate(dateText)
    if timestamp is None:
        logger.debug(f"r{revision}: unparseable date {dateText!r}")

    changedFiles = tuple(_parseChangedPaths(revision, element))

    return Commit(
        revision=revision,
        author=author,
        timestamp=timestamp,
        displayTimestamp=formatDateTime(timestamp),
        message=message,
        changedFiles=changedFiles)


def _parseChangedPaths(revision: str, entry: ET.Element):
    for element in entry.iterfind("paths/path"):
        path = (element.text or "").strip()
        actionCode = element.get("action", "")

        try:
            action = ChangeAction(actionCode)
        except ValueError:
            logger.warning(f"r{revision}: unknown action code {actionCode!r} for {path!r}")
            continue

        if not path:
            logger.warning(f"r{revision}: changed path without a name")
            continue

        yield ChangedPath(
            action=action,
            path=path,
            kind=element.get("kind", ""),
            copyFromPath=element.get("copyfrom-path", ""),
            copyFromRevision=element.get("copyfrom-rev", ""))


def parseSvnAnnotate(raw: bytes | str) -> list[AnnotateLine]:
    lines = []

    for element in iterClosedElements(raw, "entry"):
        try:
            lineNumber = int(element.get("line-number", ""))
        except ValueError:
            continue
        if lineNumber < 1:
            continue

        # Lines with local modifications have no <commit>
        commit = element.find("commit")
        if commit is None:
            continue

        revision = commit.get("revision", "").strip()
        timestamp = parseSvnDate(commit.findtext("date") or "")
        if not revision or timestamp is None:
            logger.debug(f"annotate line {lineNumber}: no usable revision/date, skipping")
            continue

        author = (commit.findtext("author") or "").strip() or noAuthorSentinel()
        lines.append(AnnotateLine(lineNumber, revision, author, timestamp))

    return lines


def parseSvnInfo(raw: bytes | str) -> str:
    """ Return the repository root URL from `svn info --xml`, or an empty string. """
    for element in iterClosedElements(raw, "root"):
        root = (element.text or "").strip()
        if root:
            return root
    return ""
