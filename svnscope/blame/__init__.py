# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Line-by-line authorship from `svn annotate`, with a stable color per author.
"""

from svnscope.blame.authorpalette import AuthorPalette, authorColor, authorHash, authorHue
from svnscope.blame.blameengine import BlameDecoration, BlameEngine, countLines
