# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging

from svnscope import settings
from svnscope.qt import *

logger = logging.getLogger(__name__)


def _toInt32(n: int) -> int:
    return ((n + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def authorHash(author: str) -> int:
    """
    Non-negative string hash over UTF-16 code units: h = c + (h << 5) - h.
    The shift wraps to 32 bits; the running sum doesn't.
    """
    h = 0
    raw = author.encode("utf-16-le")
    for i in range(0, len(raw), 2):
        codeUnit = raw[i] | (raw[i + 1] << 8)
        h = codeUnit + _toInt32(_toInt32(h) << 5) - h
    return abs(h)


def authorHue(author: str) -> int:
    """ Hue in [0, 360). Stable across sessions; distinct authors may collide. """
    return authorHash(author) % 360


def authorColor(author: str) -> QColor:
    saturation = round(settings.prefs.blameSaturation * 255 / 100)
    lightness = round(settings.prefs.blameLightness * 255 / 100)
    return QColor.fromHsl(authorHue(author), saturation, lightness)


class AuthorPalette:
    """
    One text format per author, created on demand.

    The registry only grows while the palette is alive (one entry per distinct
    author seen). Call clear() to release everything.
    """

    def __init__(self):
        self._formats: dict[str, QTextCharFormat] = {}

    def __len__(self):
        return len(self._formats)

    def __contains__(self, author: str):
        return author in self._formats

    def format(self, author: str) -> QTextCharFormat:
        try:
            return self._formats[author]
        except KeyError:
            pass

        charFormat = QTextCharFormat()
        charFormat.setForeground(QBrush(authorColor(author)))
        self._formats[author] = charFormat
        return charFormat

    def clear(self):
        logger.debug(f"Releasing {len(self._formats)} author formats")
        self._formats.clear()
