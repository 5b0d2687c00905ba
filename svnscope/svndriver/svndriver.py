# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import shlex
import signal

from svnscope.localization import *
from svnscope.qt import *
from svnscope.toolbox.qsignalconnectcontext import QSignalConnectContext

logger = logging.getLogger(__name__)


class VcsFailure(Exception):
    """
    An svn command could not be run, or exited with a non-zero code.
    Carries enough context to tell the user what went wrong.
    """

    def __init__(self, command: str, exitInfo: str, stderrExcerpt: str = "", exitCode: int = -1):
        self.command = command
        self.exitInfo = exitInfo
        self.stderrExcerpt = stderrExcerpt
        self.exitCode = exitCode
        super().__init__(_("svn command failed ({0}): {1}", exitInfo, command))

    def __str__(self):
        text = super().__str__()
        if self.stderrExcerpt:
            text += "\n" + self.stderrExcerpt
        return text


class SvnDriver(QProcess):
    """
    Runs a single svn command.

    start() the driver, then waitDone() to suspend the caller until svn exits.
    While waiting, a local event loop keeps the rest of the application
    responsive; several drivers may be started before waiting on any of them.
    """

    _commandStem = ["svn"]

    StderrExcerptMaxLines = 12

    @classmethod
    def setSvnPath(cls, svnPath: str):
        cls._commandStem = shlex.split(svnPath) or ["svn"]

    @classmethod
    def commandStem(cls) -> list[str]:
        return list(cls._commandStem)

    @classmethod
    def run(cls, *args: str, directory: str = "") -> SvnDriver:
        """ Start an svn command, wait for it to exit, and raise VcsFailure if it didn't succeed. """
        driver = cls(*args, directory=directory)
        driver.start()
        driver.waitDone()
        driver.checkSuccess()
        return driver

    def __init__(self, *args: str, directory: str = "", parent: QObject | None = None):
        super().__init__(parent)

        self.setObjectName("SvnDriver")

        # Never let svn stop to prompt for credentials or certificates
        tokens = SvnDriver._commandStem + ["--non-interactive"] + list(args)
        self.setProgram(tokens[0])
        self.setArguments(tokens[1:])
        if directory:
            self.setWorkingDirectory(directory)

        self._stdout: bytes | None = None
        self._stderr: bytes | None = None
        self._failedToStart = False
        self.errorOccurred.connect(self._onErrorOccurred)

    def _onErrorOccurred(self, error: QProcess.ProcessError):
        if error == QProcess.ProcessError.FailedToStart:
            self._failedToStart = True

    def start(self):
        logger.info(f"svn: {self.formatCommandLine()}")
        super().start()

    def waitDone(self):
        if QCoreApplication.instance() is None:
            # No event dispatcher to spin; block the old-fashioned way.
            self.waitForFinished(-1)
            return

        loop = QEventLoop()
        with QSignalConnectContext(self.finished, loop.quit), QSignalConnectContext(self.errorOccurred, loop.quit):
            # errorOccurred may fire for non-fatal reasons, so keep going until svn is really gone
            while self.state() != QProcess.ProcessState.NotRunning:
                loop.exec()
        loop.deleteLater()

    def isSuccessful(self) -> bool:
        return (not self._failedToStart
                and self.state() == QProcess.ProcessState.NotRunning
                and self.exitStatus() == QProcess.ExitStatus.NormalExit
                and self.exitCode() == 0)

    def checkSuccess(self):
        if self.isSuccessful():
            return
        failure = VcsFailure(
            command=self.formatCommandLine(),
            exitInfo=self.formatExitInfo(),
            stderrExcerpt=self.stderrExcerpt(),
            exitCode=-1 if self._failedToStart else self.exitCode())
        logger.warning(f"{failure}")
        raise failure

    def stdoutBytes(self) -> bytes:
        if self._stdout is None:
            self._stdout = self.readAllStandardOutput().data()
        return self._stdout

    def stderrBytes(self) -> bytes:
        if self._stderr is None:
            self._stderr = self.readAllStandardError().data()
        return self._stderr

    def stderrScrollback(self) -> str:
        return '\n'.join(
            line.rstrip().decode("utf-8", errors="replace")
            for line in self.stderrBytes().splitlines())

    def stderrExcerpt(self) -> str:
        lines = self.stderrScrollback().strip().splitlines()
        if len(lines) > self.StderrExcerptMaxLines:
            lines = ["[...]"] + lines[-self.StderrExcerptMaxLines:]
        return "\n".join(lines)

    def hasSvnError(self, *codes: str) -> bool:
        """ True if svn reported any of the given error codes (e.g. "E160006") on stderr. """
        stderr = self.stderrScrollback()
        return any(code in stderr for code in codes)

    def formatExitCode(self) -> str:
        code = self.exitCode()

        if WINDOWS:
            return f"{code}"

        try:
            s = signal.Signals(code)
            return f"{code} ({s.name})"
        except ValueError:
            pass

        return f"{code}"

    def formatExitInfo(self) -> str:
        if self._failedToStart:
            return _("could not start {0}: {1}", self.program(), self.errorString())
        if self.exitStatus() == QProcess.ExitStatus.CrashExit:
            return _("crashed")
        return _("exit code {0}", self.formatExitCode())

    def formatCommandLine(self):
        return shlex.join([self.program()] + self.arguments())
