# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import logging
import os
from datetime import datetime

from svnscope.blame.authorpalette import AuthorPalette, authorColor, authorHue
from svnscope.localization import *
from svnscope.qt import *
from svnscope.svndriver import AnnotateLine, VcsFailure
from svnscope.svnservice import SvnService
from svnscope.toolbox import formatDateTime, formatShortDate

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class BlameDecoration:
    lineNumber: int
    revision: str
    author: str
    timestamp: datetime
    label: str
    tooltip: str

    @staticmethod
    def fromAnnotateLine(line: AnnotateLine) -> "BlameDecoration":
        label = f"{line.revision} {line.author} {formatShortDate(line.timestamp)}"
        tooltip = "\n".join([
            f"r{line.revision}",
            _("Author: {0}", line.author),
            _("Date: {0}", formatDateTime(line.timestamp)),
        ])
        return BlameDecoration(line.lineNumber, line.revision, line.author, line.timestamp, label, tooltip)


def countLines(path: str) -> int:
    try:
        with open(path, "rb") as f:
            return len(f.read().splitlines())
    except OSError as exc:
        logger.warning(f"Can't count lines in {path}: {exc}")
        return 0


class BlameEngine(QObject):
    """
    Per-file blame annotations.

    Annotate results are cached by file path. Turning blame off for a file
    only clears its decorations; the cached annotations stay around until
    clearCache() is called, so turning it back on doesn't query svn again.
    """

    decorationsChanged = Signal(str)

    def __init__(self, service: SvnService, parent: QObject | None = None):
        super().__init__(parent)
        self.setObjectName("BlameEngine")
        self.service = service
        self.palette = AuthorPalette()
        self._enabledFiles: set[str] = set()
        self._cache: dict[str, list[AnnotateLine]] = {}
        self._decorations: dict[str, list[BlameDecoration]] = {}

    @staticmethod
    def _key(path: str) -> str:
        return os.path.normpath(os.path.abspath(path))

    def isEnabled(self, path: str) -> bool:
        return self._key(path) in self._enabledFiles

    def isCached(self, path: str) -> bool:
        return self._key(path) in self._cache

    def decorations(self, path: str) -> list[BlameDecoration]:
        return list(self._decorations.get(self._key(path), []))

    def toggle(self, path: str, lineCount: int | None = None) -> bool:
        """ Flip blame on or off for a file. Return the new state. """
        key = self._key(path)

        if key in self._enabledFiles:
            self._enabledFiles.discard(key)
            self._clearDecorations(key)
            return False

        self._enabledFiles.add(key)
        try:
            self.refreshFor(key, lineCount)
        except VcsFailure:
            self._enabledFiles.discard(key)
            raise
        return True

    def refreshFor(self, path: str, lineCount: int | None = None) -> list[BlameDecoration]:
        """
        Recompute the decorations for a file.

        Lines past lineCount are skipped, since the file may have been edited
        since it was annotated. If lineCount is None, the lines of the file
        on disk are counted.
        """
        key = self._key(path)

        if key not in self._enabledFiles:
            self._clearDecorations(key)
            return []

        try:
            annotations = self._cache[key]
        except KeyError:
            annotations = self.service.getAnnotate(key)
            self._cache[key] = annotations

        if lineCount is None:
            lineCount = countLines(key)

        decorations = [BlameDecoration.fromAnnotateLine(line)
                       for line in annotations
                       if line.lineNumber <= lineCount]

        # Register every author's format up front so the view can look them up
        for decoration in decorations:
            self.palette.format(decoration.author)

        self._decorations[key] = decorations
        self.decorationsChanged.emit(key)
        return list(decorations)

    def _clearDecorations(self, key: str):
        if self._decorations.pop(key, None) is not None:
            self.decorationsChanged.emit(key)

    def clearCache(self, path: str = ""):
        if path:
            self._cache.pop(self._key(path), None)
        else:
            self._cache.clear()

    def authorHue(self, author: str) -> int:
        return authorHue(author)

    def authorColor(self, author: str) -> QColor:
        return authorColor(author)

    def authorFormat(self, author: str) -> QTextCharFormat:
        return self.palette.format(author)

    def dispose(self):
        for key in list(self._decorations):
            self._clearDecorations(key)
        self.palette.clear()
