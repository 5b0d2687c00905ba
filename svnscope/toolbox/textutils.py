# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of SvnScope, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from svnscope.localization import *


def messageSummary(body: str, elision=" […]"):
    messageContinued = False
    message: str = body.strip()
    newline = message.find('\n')
    if newline > -1:
        messageContinued = newline < len(message) - 1
        message = message[:newline].rstrip()
        if messageContinued:
            message += elision
    return message, messageContinued


def ellipsize(text: str, maxLength: int, ellipsis="...") -> str:
    """ Cut text down to maxLength characters, ellipsis included. """
    if maxLength <= 0 or len(text) <= maxLength:
        return text
    return text[:max(0, maxLength - len(ellipsis))] + ellipsis


def tquo(text: str) -> str:
    """ Quote plain text with language-dependent typographic quotes. """
    return _("“{0}”").format(text)
