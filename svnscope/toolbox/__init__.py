# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from .benchmark import Benchmark, benchmark, BENCHMARK_LOGGING_LEVEL
from .dateutils import (
    formatDateTime,
    formatListDate,
    formatShortDate,
    groupLabel,
    isRelativeGroupLabel,
    localNow,
)
from .pathutils import cleanRepoPath, compactPath, pegEscape, relativeToRoot, repoDirPath, toFsPath
from .qsignalconnectcontext import QSignalConnectContext
from .textutils import ellipsize, messageSummary, tquo
