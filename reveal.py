"""
reveal.py
---------
Typing effect for assistant replies.

A RevealTask holds a cursor into a reply that was already composed in full
and shows it one character per tick. Stopping sets a flag that is checked
before every advance; whatever was revealed so far stays, followed by
STOPPED_MARKER.
"""

import time
from typing import Callable, Optional

STOPPED_MARKER = "\n\n⏹ Respons dihentikan."
DEFAULT_INTERVAL = 0.02  # seconds per character


class RevealTask:
    """
    Parameters
    ----------
    text:
        The full reply to reveal.
    interval:
        Seconds between ticks when driven by run().
    """

    def __init__(self, text: str, interval: float = DEFAULT_INTERVAL):
        self.text = text
        self.interval = interval
        self._cursor = 0
        self._cancelled = False

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    @property
    def done(self) -> bool:
        return self._cancelled or self._cursor >= len(self.text)

    @property
    def revealed(self) -> str:
        shown = self.text[: self._cursor]
        return shown + STOPPED_MARKER if self._cancelled else shown

    def tick(self) -> bool:
        """Reveal one more character. Returns True while more remain."""
        if self.done:
            return False
        self._cursor += 1
        return not self.done

    def cancel(self) -> bool:
        """
        Stop revealing. Has no effect once the whole text is shown.

        Returns True if this call interrupted the reveal.
        """
        if self.done:
            return False
        self._cancelled = True
        return True

    def run(
        self,
        on_tick: Optional[Callable[[str], None]] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> str:
        """
        Drive the reveal to the end (or until cancelled), calling on_tick
        with each character before it counts as revealed.

        Returns the revealed text.
        """
        while not self.done:
            sleep(self.interval)
            if self._cancelled:
                break
            if on_tick is not None:
                on_tick(self.text[self._cursor])
            self.tick()
        return self.revealed
