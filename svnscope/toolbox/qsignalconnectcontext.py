# -----------------------------------------------------------------------------
# Copyright (C) 2026 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from svnscope.qt import *


class QSignalConnectContext:
    """ Keep a signal connected to a slot for the duration of a `with` block. """

    def __init__(self, signal: SignalInstance, slot):
        self.signal = signal
        self.slot = slot

    def __enter__(self):
        self.connection = self.signal.connect(self.slot)

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.signal.disconnect(self.connection)
