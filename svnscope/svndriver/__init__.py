# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from .parsers import parseSvnAnnotate, parseSvnDate, parseSvnInfo, parseSvnLog
from .svncommit import AnnotateLine, ChangeAction, ChangedPath, Commit
from .svndriver import SvnDriver, VcsFailure
