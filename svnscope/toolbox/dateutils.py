# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Relative date buckets ("Today", "Last Week"...) and locale-aware date strings.

Group labels depend on the current date, so they are never stored on a Commit.
Compute them when the history is displayed.
"""

from datetime import datetime

from svnscope import settings
from svnscope.localization import *
from svnscope.qt import *


def localNow() -> datetime:
    return datetime.now().astimezone()


def calendarDaysBetween(timestamp: datetime, now: datetime) -> int:
    """
    Number of midnights between timestamp and now, counted in now's timezone.
    Negative if timestamp lies in the future.
    """
    if now.tzinfo is None:
        now = now.astimezone()
    commitDay = timestamp.astimezone(now.tzinfo).date()
    return (now.date() - commitDay).days


def groupLabel(timestamp: datetime | None, now: datetime | None = None) -> str:
    if timestamp is None:
        return _("Unknown Date")

    if now is None:
        now = localNow()

    days = calendarDaysBetween(timestamp, now)

    # Commits stamped slightly ahead of our clock (server skew) count as today
    if days <= 0:
        return _("Today")
    if days == 1:
        return _("Yesterday")
    if days < 7:
        return _("Last Week")
    if days < 30:
        return _("Last Month")

    # Older commits: e.g. "January 2026"
    localDate = timestamp.astimezone(now.tzinfo).date()
    return QLocale().toString(QDate(localDate.year, localDate.month, localDate.day), "MMMM yyyy")


def isRelativeGroupLabel(label: str) -> bool:
    return label in (_("Today"), _("Yesterday"), _("Last Week"), _("Last Month"))


def toQDateTime(timestamp: datetime) -> QDateTime:
    """ Local-time QDateTime for an aware datetime. """
    return QDateTime.fromMSecsSinceEpoch(round(timestamp.timestamp() * 1000))


def formatDateTime(timestamp: datetime | None) -> str:
    if timestamp is None:
        return ""
    return QLocale().toString(toQDateTime(timestamp), settings.prefs.shortTimeFormat)


def formatShortDate(timestamp: datetime | None) -> str:
    if timestamp is None:
        return ""
    return QLocale().toString(toQDateTime(timestamp), settings.prefs.blameDateFormat)


def formatListDate(timestamp: datetime | None, label: str) -> str:
    """
    Date shown next to a commit in a grouped list. Within "Today" and
    "Yesterday" the group already says which day it is, so only show the time.
    """
    if timestamp is None:
        return _("unknown date")
    if label in (_("Today"), _("Yesterday")):
        return QLocale().toString(toQDateTime(timestamp), settings.prefs.listTimeFormat)
    return formatDateTime(timestamp)
