"""A single-shot timer that asks for a reconnection attempt."""

from __future__ import annotations

import threading
from collections.abc import Callable

__all__ = ["ReconnectTimer", "INTERVAL"]

INTERVAL = 5.0


class ReconnectTimer:
    """Calls ``callback`` once, ``interval`` seconds after each ``start``."""

    def __init__(self, callback: Callable[[], object], interval: float = INTERVAL) -> None:
        self.callback = callback
        self.interval = interval
        self._timer: threading.Timer | None = None
        self._lock = threading.Lock()

    @property
    def active(self) -> bool:
        """Whether a reconnection is pending."""
        with self._lock:
            return self._timer is not None

    def start(self) -> None:
        """Start the countdown, restarting it if it is already running."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
            timer = threading.Timer(self.interval, self._fire)
            timer.daemon = True
            self._timer = timer
            timer.start()

    def cancel(self) -> None:
        """Stop the countdown without calling the callback."""
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _fire(self) -> None:
        with self._lock:
            if self._timer is not threading.current_thread():
                return
            self._timer = None
        self.callback()