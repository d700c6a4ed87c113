"""Recurring autosave timer owned by whoever holds the loaded project."""

from __future__ import annotations

import logging
import threading
from typing import Callable, Optional

logger = logging.getLogger(__name__)

DEFAULT_AUTOSAVE_PERIOD_SEC = 5.0


class AutosaveScheduler:
    """
    Fires ``callback`` every ``period`` seconds on a daemon thread.

    ``stop()`` bumps a generation counter under the same lock a tick holds
    while running, so once ``stop()`` returns no further tick can start.
    ``start()`` on a running scheduler stops the previous timer first.
    """

    def __init__(
        self,
        callback: Callable[[], None],
        period: float = DEFAULT_AUTOSAVE_PERIOD_SEC,
        *,
        name: str = "projsync-autosave",
    ) -> None:
        if period <= 0:
            raise ValueError("period must be positive")
        self._callback = callback
        self._period = period
        self._name = name
        self._lock = threading.RLock()
        self._generation = 0
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def period(self) -> float:
        return self._period

    @property
    def running(self) -> bool:
        with self._lock:
            return self._stop_event is not None

    def start(self) -> None:
        self.stop()
        with self._lock:
            self._generation += 1
            generation = self._generation
            stop_event = threading.Event()
            self._stop_event = stop_event
            worker = threading.Thread(
                target=self._run,
                args=(generation, stop_event),
                name=self._name,
                daemon=True,
            )
            self._thread = worker
        worker.start()
        logger.debug("Autosave started (period=%.2fs)", self._period)

    def stop(self) -> None:
        with self._lock:
            if self._stop_event is None:
                return
            self._generation += 1
            self._stop_event.set()
            self._stop_event = None
            worker = self._thread
            self._thread = None
        if worker is not None and worker is not threading.current_thread():
            worker.join(timeout=self._period + 1.0)
        logger.debug("Autosave stopped")

    def tick(self) -> bool:
        """Run one tick now if the scheduler is running. Returns True if it ran."""
        with self._lock:
            if self._stop_event is None:
                return False
            self._invoke()
            return True

    def _run(self, generation: int, stop_event: threading.Event) -> None:
        while not stop_event.wait(self._period):
            with self._lock:
                if generation != self._generation:
                    return
                self._invoke()

    def _invoke(self) -> None:
        try:
            self._callback()
        except Exception:
            # A failing tick must not kill the timer; the next tick retries.
            logger.exception("Autosave tick failed")
