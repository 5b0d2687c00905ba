# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import os
import posixpath
import re

HOME = os.path.abspath(os.path.expanduser('~'))

# Standard Subversion layout: /trunk/, /branches/<name>/, /tags/<name>/
_layoutPrefixPattern = re.compile(r"^/(trunk|branches/[^/]+|tags/[^/]+)/")


def compactPath(path: str) -> str:
    # Normalize path first, which also turns forward slashes to backslashes on Windows.
    path = os.path.abspath(path)
    if path.startswith(HOME):
        path = "~" + path[len(HOME):]
    return path


def cleanRepoPath(repoPath: str) -> str:
    """
    Strip the standard layout prefix from a path reported by svn log,
    e.g. "/trunk/src/main.c" -> "src/main.c".

    Paths outside of the standard layout are returned unchanged.
    """
    return _layoutPrefixPattern.sub("", repoPath, count=1)


def toFsPath(repoPath: str, workspaceRoot: str) -> str:
    """ Map a repository path to an absolute path in the local working copy. """
    relativePath = cleanRepoPath(repoPath).lstrip("/")
    return os.path.normpath(os.path.join(workspaceRoot, relativePath))


def repoDirPath(repoPath: str) -> str:
    """ Directory part of a cleaned repository path, or an empty string for files at the root. """
    return posixpath.dirname(cleanRepoPath(repoPath).lstrip("/"))


def relativeToRoot(path: str, workspaceRoot: str) -> str:
    """ Express an absolute local path relative to the working copy, if it lives inside it. """
    try:
        relPath = os.path.relpath(path, workspaceRoot)
    except ValueError:  # different drives on Windows
        return path
    if relPath.startswith(os.pardir):
        return path
    return relPath


def pegEscape(path: str) -> str:
    """
    svn reads an '@' in a path argument as a peg revision.
    Appending a bare '@' makes svn take the path literally.
    """
    if "@" in path:
        return path + "@"
    return path
