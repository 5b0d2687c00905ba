# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import logging

from svnscope.appconsts import *
from svnscope.prefsfile import PrefsFile
from svnscope.toolbox.benchmark import BENCHMARK_LOGGING_LEVEL

logger = logging.getLogger(__name__)


SHORT_DATE_PRESETS = {
    "ISO": "yyyy-MM-dd HH:mm",
    "Universal 1": "dd MMM yyyy HH:mm",
    "Universal 2": "ddd dd MMM yyyy HH:mm",
    "European 1": "dd/MM/yy HH:mm",
    "European 2": "dd.MM.yy HH:mm",
    "American": "MM/dd/yy, hh:mm AP",
}


class QtApiNames(enum.StrEnum):
    Automatic = ""
    PyQt6 = "pyqt6"
    PySide6 = "pyside6"


class LoggingLevel(enum.IntEnum):
    Benchmark = BENCHMARK_LOGGING_LEVEL
    Debug = logging.DEBUG
    Info = logging.INFO
    Warning = logging.WARNING


@dataclasses.dataclass
class Prefs(PrefsFile):
    _filename = "prefs.json"

    _category_general           : int                   = 0
    translationFile             : str                   = ""
    verbosity                   : LoggingLevel          = LoggingLevel.Debug if APP_TESTMODE else LoggingLevel.Warning
    forceQtApi                  : QtApiNames            = QtApiNames.Automatic

    _category_svn               : int                   = 0
    svnCommand                  : str                   = "svn"
    pageSize                    : int                   = 50
    recentAuthorsLimit          : int                   = 200

    _category_history           : int                   = 0
    shortTimeFormat             : str                   = list(SHORT_DATE_PRESETS.values())[0]
    listTimeFormat              : str                   = "HH:mm"
    detailsHeaderMaxLength      : int                   = 60

    _category_blame             : int                   = 0
    blameDateFormat             : str                   = "dd/MM/yy"
    blameSaturation             : int                   = 45
    blameLightness              : int                   = 50

    def clampedPageSize(self) -> int:
        if self.pageSize < 1:
            logger.warning(f"pageSize must be positive, got {self.pageSize}")
            return 1
        return self.pageSize


# Initialize default prefs.
# The app should load the user's prefs with prefs.load().
prefs = Prefs()
