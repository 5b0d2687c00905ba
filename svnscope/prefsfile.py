# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import dataclasses
import enum
import json
import logging
import os

from svnscope.appconsts import *
from svnscope.qt import *

logger = logging.getLogger(__name__)


def userConfigDir() -> str:
    # Same folder as AppConfigLocation without an organization name, but
    # independent of whoever last renamed the QCoreApplication.
    base = QStandardPaths.writableLocation(QStandardPaths.StandardLocation.GenericConfigLocation)
    return os.path.join(base, APP_SYSTEM_NAME)


class PrefsFile:
    """
    Mixin for dataclasses that persist their public fields to a JSON file.

    Fields whose name starts with an underscore are never saved
    (e.g. the `_category_*` separators in Prefs).
    """

    _filename = ""
    _allowMakeDirs = True
    _parentDir = ""
    _dirty = False

    def getParentDir(self) -> str:
        return self._parentDir or userConfigDir()

    def fullPath(self) -> str:
        assert self._filename, "PrefsFile subclass must set _filename"
        return os.path.join(self.getParentDir(), self._filename)

    def setDirty(self):
        self._dirty = True

    def isDirty(self) -> bool:
        return self._dirty

    def _publicFields(self):
        for field in dataclasses.fields(self):
            if not field.name.startswith("_"):
                yield field

    def load(self) -> bool:
        path = self.fullPath()

        try:
            with open(path, encoding="utf-8") as f:
                jsonData = json.load(f)
        except FileNotFoundError:
            return False
        except (OSError, ValueError) as exc:
            logger.warning(f"{self._filename}: could not load: {exc}")
            return False

        if not isinstance(jsonData, dict):
            logger.warning(f"{self._filename}: top-level object isn't a dict, ignoring")
            return False

        for field in self._publicFields():
            if field.name not in jsonData:
                continue
            current = getattr(self, field.name)
            try:
                value = self._coerce(current, jsonData[field.name])
            except (TypeError, ValueError):
                logger.warning(f"{self._filename}: ignoring bad value for {field.name}: {jsonData[field.name]!r}")
                continue
            setattr(self, field.name, value)

        self._dirty = False
        return True

    @staticmethod
    def _coerce(current, value):
        if isinstance(current, enum.Enum):
            return type(current)(value)
        # bool is a subclass of int, check it first
        if isinstance(current, bool):
            if not isinstance(value, bool):
                raise TypeError("expected bool")
            return value
        if isinstance(current, int):
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError("expected int")
            return value
        if isinstance(current, str):
            if not isinstance(value, str):
                raise TypeError("expected str")
            return value
        if isinstance(current, list):
            return list(value)
        return value

    def write(self, force=False) -> str:
        """
        Save the file if it's dirty (or if forced).
        Return the path that was written, or an empty string if nothing was written.
        """
        if not force and not self._dirty:
            return ""

        parentDir = self.getParentDir()
        if self._allowMakeDirs:
            os.makedirs(parentDir, exist_ok=True)

        jsonData = {}
        for field in self._publicFields():
            value = getattr(self, field.name)
            if isinstance(value, enum.Enum):
                value = value.value
            jsonData[field.name] = value

        path = self.fullPath()
        with open(path, "w", encoding="utf-8") as f:
            json.dump(jsonData, f, indent=1, sort_keys=True)

        self._dirty = False
        logger.debug(f"Wrote {path}")
        return path
