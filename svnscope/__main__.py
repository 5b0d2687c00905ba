# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import difflib
import logging
import os
import sys
from argparse import ArgumentParser

from svnscope.qt import *


def makeArgumentParser() -> ArgumentParser:
    from svnscope.appconsts import APP_DISPLAY_NAME, APP_VERSION

    parser = ArgumentParser(prog="svnscope", description=f"{APP_DISPLAY_NAME} - browse Subversion history and blame")
    parser.add_argument("--version", action="version", version=f"{APP_DISPLAY_NAME} {APP_VERSION} ({QT_BINDING} {QT_BINDING_VERSION})")
    parser.add_argument("-C", "--workdir", default=".", help="Working copy root (default: current directory)")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (repeatable)")
    parser.add_argument("--svn", default="", help="svn command to run (default: from prefs)")

    subparsers = parser.add_subparsers(dest="command", required=True)

    logParser = subparsers.add_parser("log", help="Show commit history grouped by date")
    logParser.add_argument("-f", "--file", default="", help="Only show the history of this file")
    logParser.add_argument("-s", "--search", default="", help="Only show commits matching this text")
    logParser.add_argument("-n", "--page-size", type=int, default=0, help="Commits per page")
    logParser.add_argument("-m", "--more", type=int, default=0, help="Load this many extra pages")

    showParser = subparsers.add_parser("show", help="Show a revision and the files it changed")
    showParser.add_argument("revision")

    authorsParser = subparsers.add_parser("authors", help="List recent authors")
    authorsParser.add_argument("-n", "--limit", type=int, default=0, help="Number of recent commits to look at")

    blameParser = subparsers.add_parser("blame", help="Annotate a file line by line")
    blameParser.add_argument("path")

    diffParser = subparsers.add_parser("diff", help="Diff a file at a revision against its previous revision")
    diffParser.add_argument("repoPath", help="Path as reported by svn log, e.g. /trunk/src/main.c")
    diffParser.add_argument("revision")

    return parser


def printHistory(session, args):
    from svnscope.historytree import GroupNode, buildHistoryTree

    model = session.history
    if args.file:
        model.showFileHistory(os.path.abspath(args.file))
    else:
        model.refresh()
    for _i in range(args.more):
        model.loadMore()
    if args.search:
        model.setSearchText(args.search)

    header = model.countDescription()
    if model.isFiltered:
        header += f" ({model.filterDescription()})"
    print(header)

    for node in buildHistoryTree(model):
        if isinstance(node, GroupNode):
            print(f"\n{node.label}")
            for child in node.children:
                print(f"  {child.label}    {child.description}")


def printCommit(session, args) -> int:
    from svnscope.historytree import buildCommitDetails
    from svnscope.localization import _

    commit = session.service.getCommit(args.revision)
    if commit is None:
        print(_("No such revision: {0}", args.revision), file=sys.stderr)
        return 1

    header, filesHeader = buildCommitDetails(commit, session.workspaceRoot)
    print(header.label)
    print(f"{commit.author}, {commit.displayTimestamp}")
    print()
    print(commit.message)
    print()
    print(filesHeader.label)
    for node in filesHeader.children:
        print(f"  {node.label}    {node.description}")
    return 0


def printBlame(session, args):
    path = os.path.abspath(args.path)
    with open(path, "rb") as f:
        lines = f.read().decode("utf-8", errors="replace").splitlines()

    session.blame.toggle(path, len(lines))
    labels = {d.lineNumber: d.label for d in session.blame.decorations(path)}
    width = max((len(label) for label in labels.values()), default=0)

    for lineNumber, text in enumerate(lines, start=1):
        print(f"{labels.get(lineNumber, ''):<{width}} | {text}")


def printDiff(session, args):
    staged = session.diffStaging.prepareDiff(args.repoPath, args.revision)

    with open(staged.priorPath, "rb") as f:
        before = f.read().decode("utf-8", errors="replace").splitlines(keepends=True)
    with open(staged.currentPath, "rb") as f:
        after = f.read().decode("utf-8", errors="replace").splitlines(keepends=True)

    print(staged.title)
    sys.stdout.writelines(difflib.unified_diff(
        before, after,
        fromfile=f"{staged.repoPath}@{staged.priorRevision}",
        tofile=f"{staged.repoPath}@{staged.revision}"))


def main(argv: list[str] | None = None) -> int:
    from svnscope import settings
    from svnscope.appconsts import APP_SYSTEM_NAME, APP_VERSION
    from svnscope.localization import installGettextTranslator
    from svnscope.session import SvnSession
    from svnscope.svndriver import SvnDriver, VcsFailure
    from svnscope.toolbox import BENCHMARK_LOGGING_LEVEL

    args = makeArgumentParser().parse_args(argv)

    # Waiting on svn spins a local event loop, which needs an application object
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])
    app.setApplicationName(APP_SYSTEM_NAME)  # used by QStandardPaths
    app.setApplicationVersion(APP_VERSION)

    settings.prefs.load()

    logging.basicConfig(
        stream=sys.stderr,
        level=max(BENCHMARK_LOGGING_LEVEL, settings.prefs.verbosity - 10 * args.verbose),
        format='%(levelname).1s %(asctime)s %(filename)-16s | %(message)s',
        datefmt="%H:%M:%S")
    logging.captureWarnings(True)

    if settings.prefs.translationFile:
        installGettextTranslator(settings.prefs.translationFile)

    SvnDriver.setSvnPath(args.svn or settings.prefs.svnCommand)

    pageSize = getattr(args, "page_size", 0)

    with SvnSession(args.workdir, pageSize) as session:
        try:
            if args.command == "log":
                printHistory(session, args)
            elif args.command == "show":
                return printCommit(session, args)
            elif args.command == "authors":
                for author in session.history.fetchRecentAuthors(args.limit):
                    print(author)
            elif args.command == "blame":
                printBlame(session, args)
            elif args.command == "diff":
                printDiff(session, args)
        except (VcsFailure, OSError, ValueError) as exc:
            print(f"svnscope: {exc}", file=sys.stderr)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
