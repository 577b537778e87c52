"""Ranked result entries handed to the launcher UI."""

from __future__ import annotations

import sys
from dataclasses import dataclass
from typing import Callable, Optional

LOWEST_PRIORITY = -sys.float_info.max

Clipboard = Callable[[str], None]


@dataclass(frozen=True)
class ResultEntry:
    """One line of launcher output.

    ``payload`` is the text handed to the clipboard when the entry is
    activated; entries without a payload do nothing on activation.
    """

    text: str
    priority: float
    source: str
    payload: Optional[str] = None

    def activate(self, clipboard: Clipboard) -> bool:
        if self.payload is None:
            return False
        clipboard(self.payload)
        return True


__all__ = ["ResultEntry", "LOWEST_PRIORITY", "Clipboard"]
