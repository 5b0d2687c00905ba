# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import logging

import pytest

from svnscope.svndriver import SvnDriver, VcsFailure
from svnscope.svnservice import SvnService
from .util import *


def makeLog():
    return logXml(
        logEntryXml("10", "alice", message="Add lexer", paths=[("A", "/trunk/src/lexer.c")]),
        logEntryXml("9", "bob", message="Fix crash", paths=[("M", "/trunk/src/main@2x.c")]),
        logEntryXml("8", "carol", message="Tidy up", paths=[("M", "/trunk/README")]),
    )


def testGetHistory(tempDir, svnShim):
    wc = makeWorkingCopy(tempDir, log=makeLog())
    service = SvnService(wc)

    commits = service.getHistory(2)

    assert [c.revision for c in commits] == ["10", "9"]
    assert shimCallsTo(wc, "log") == [["log", "--limit", "2", "--xml", "--verbose"]]


def testGetFileHistoryPegEscapesPath(tempDir, svnShim):
    wc = makeWorkingCopy(tempDir, log=makeLog())
    service = SvnService(wc)
    path = os.path.join(wc, "src", "main@2x.c")

    commits = service.getFileHistory(path, 50)

    assert [c.revision for c in commits] == ["9"]
    [call] = shimCallsTo(wc, "log")
    assert call[-2:] == ["--", path + "@"]


def testGetCommit(tempDir, svnShim):
    wc = makeWorkingCopy(tempDir, log=makeLog())
    service = SvnService(wc)

    commit = service.getCommit("9")

    assert commit is not None
    assert commit.author == "bob"
    assert shimCallsTo(wc, "log") == [["log", "--revision", "9", "--xml", "--verbose"]]


def testGetCommitNoSuchRevision(tempDir, svnShim):
    wc = makeWorkingCopy(tempDir, log=makeLog())
    service = SvnService(wc)
    assert service.getCommit("99") is None


def testGetCommitRejectsOptionLikeRevision(tempDir, svnShim):
    wc = makeWorkingCopy(tempDir, log=makeLog())
    service = SvnService(wc)
    assert service.getCommit("--help") is None
    assert readShimCalls(wc) == []


def testGetRepoRootIsMemoized(tempDir, svnShim):
    wc = makeWorkingCopy(tempDir, info=infoXml("https://svn.example.com/repo"))
    service = SvnService(wc)

    assert service.getRepoRoot() == "https://svn.example.com/repo"
    assert service.getRepoRoot() == "https://svn.example.com/repo"
    assert service.repoUrl("/trunk/src/main.c") == "https://svn.example.com/repo/trunk/src/main.c"
    assert service.repoUrl("/trunk/my file.c") == "https://svn.example.com/repo/trunk/my%20file.c"

    assert len(shimCallsTo(wc, "info")) == 1


def testGetRepoRootFailureIsNotCached(tempDir, svnShim):
    wc = makeWorkingCopy(tempDir)
    makeShimFail(wc)
    service = SvnService(wc)

    with pytest.raises(VcsFailure):
        service.getRepoRoot()

    os.unlink(os.path.join(wc, ".svn-shim", "fail"))
    assert service.getRepoRoot() == TEST_REPO_ROOT
    assert len(shimCallsTo(wc, "info")) == 2


def testGetFileContent(tempDir, svnShim):
    wc = makeWorkingCopy(tempDir, catFiles={("7", "main.c"): b"int main() {}\n\x00\xff"})
    service = SvnService(wc)

    data = service.getFileContent(TEST_REPO_ROOT + "/trunk/main.c", "7")

    assert data == b"int main() {}\n\x00\xff"
    assert shimCallsTo(wc, "cat") == [["cat", "--", TEST_REPO_ROOT + "/trunk/main.c@7"]]


def testGetFileContentMissingRevision(tempDir, svnShim):
    wc = makeWorkingCopy(tempDir)
    service = SvnService(wc)

    with pytest.raises(VcsFailure) as excInfo:
        service.getFileContent(TEST_REPO_ROOT + "/trunk/main.c", "7")

    assert "E195012" in excInfo.value.stderrExcerpt
    assert excInfo.value.exitCode == 1


def testGetAnnotate(tempDir, svnShim):
    date = "2026-03-04T05:06:07.000000Z"
    path = "/whatever/main.c"
    wc = makeWorkingCopy(tempDir, annotate=annotateXml(path, [
        (n, "3", "alice", date) for n in range(1, 6)
    ]))
    service = SvnService(wc)

    lines = service.getAnnotate(os.path.join(wc, "main.c"))

    assert [line.lineNumber for line in lines] == [1, 2, 3, 4, 5]
    [call] = shimCallsTo(wc, "annotate")
    assert call == ["annotate", "--xml", "--", os.path.join(wc, "main.c")]


def testNonZeroExitRaisesVcsFailure(tempDir, svnShim):
    wc = makeWorkingCopy(tempDir, log=makeLog())
    makeShimFail(wc, "svn: E170013: Unable to connect to a repository at URL 'https://nope'")
    service = SvnService(wc)

    with pytest.raises(VcsFailure) as excInfo:
        service.getHistory(5)

    failure = excInfo.value
    assert "log" in failure.command
    assert "--limit" in failure.command
    assert failure.exitCode == 1
    assert "E170013" in failure.stderrExcerpt
    assert "E170013" in str(failure)


def testMissingExecutableRaisesVcsFailure(tempDir, qapp):
    savedStem = SvnDriver.commandStem()
    SvnDriver.setSvnPath(os.path.join(tempDir.name, "no-such-svn"))
    try:
        service = SvnService(tempDir.name)
        with pytest.raises(VcsFailure) as excInfo:
            service.getHistory(5)
    finally:
        SvnDriver._commandStem = savedStem

    assert "no-such-svn" in excInfo.value.command
    assert excInfo.value.exitCode == -1


def testCommandsAreLogged(tempDir, svnShim, caplog):
    wc = makeWorkingCopy(tempDir, log=makeLog())
    service = SvnService(wc)

    with caplog.at_level(logging.INFO, logger="svnscope.svndriver.svndriver"):
        service.getHistory(3)

    assert any("svn:" in r.message and "--limit 3" in r.message for r in caplog.records)


def testConcurrentDrivers(tempDir, svnShim):
    wc = makeWorkingCopy(tempDir, catFiles={("1", "a.txt"): b"one", ("2", "a.txt"): b"two"})
    service = SvnService(wc)

    driver1 = service.startFileContent(TEST_REPO_ROOT + "/trunk/a.txt", "1")
    driver2 = service.startFileContent(TEST_REPO_ROOT + "/trunk/a.txt", "2")

    assert service.finishFileContent(driver2) == b"two"
    assert service.finishFileContent(driver1) == b"one"


def testSetSvnPathSplitsArguments():
    savedStem = SvnDriver.commandStem()
    try:
        SvnDriver.setSvnPath("'/opt/my svn/bin/svn' --config-dir /tmp/cfg")
        assert SvnDriver.commandStem() == ["/opt/my svn/bin/svn", "--config-dir", "/tmp/cfg"]
        driver = SvnDriver("info", "--xml")
        assert driver.program() == "/opt/my svn/bin/svn"
        assert driver.arguments() == ["--config-dir", "/tmp/cfg", "--non-interactive", "info", "--xml"]
    finally:
        SvnDriver._commandStem = savedStem
