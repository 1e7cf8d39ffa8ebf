"""
Elapsed-time counter for a single game.

The counter is a cancellable periodic task: a daemon thread that adds one
to ``elapsed`` every ``interval`` seconds until stopped.
"""
import logging
import threading
from typing import Optional


logger = logging.getLogger(__name__)


class ElapsedTimer:
    """
    Whole-second game clock owned by a Board.

    At most one ticking thread exists per timer. ``stop`` is immediate and
    may be called any number of times.
    """

    def __init__(self, interval: float = 1.0) -> None:
        """
        Initialize a stopped timer.

        Args:
            interval: Seconds between ticks.
        """
        self.interval = interval
        self._elapsed = 0
        self._lock = threading.Lock()
        self._stop_event: Optional[threading.Event] = None
        self._thread: Optional[threading.Thread] = None

    @property
    def elapsed(self) -> int:
        """Seconds counted so far."""
        with self._lock:
            return self._elapsed

    @property
    def running(self) -> bool:
        return self._stop_event is not None and not self._stop_event.is_set()

    def start(self) -> None:
        """Start counting from zero. No-op if already running."""
        if self.running:
            return
        with self._lock:
            self._elapsed = 0
            self._stop_event = threading.Event()
        self._thread = threading.Thread(
            target=self._run,
            args=(self._stop_event,),
            name="minesweeper-timer",
            daemon=True,
        )
        self._thread.start()
        logger.debug("Timer started (interval=%ss)", self.interval)

    def stop(self) -> None:
        """Stop counting and freeze the elapsed value."""
        with self._lock:
            if self._stop_event is None or self._stop_event.is_set():
                return
            self._stop_event.set()
        thread, self._thread = self._thread, None
        # Joined outside the lock, which the ticking thread also takes
        if thread is not None:
            thread.join(timeout=self.interval + 1.0)
        logger.debug("Timer stopped at %ss", self.elapsed)

    def reset(self) -> None:
        """Stop the timer and zero the count."""
        self.stop()
        with self._lock:
            self._elapsed = 0

    def tick(self) -> None:
        """Advance the count by one second."""
        with self._lock:
            self._elapsed += 1

    def _run(self, stop_event: threading.Event) -> None:
        while not stop_event.wait(self.interval):
            with self._lock:
                # stop() may have raced with the wait timing out
                if stop_event.is_set():
                    break
                self._elapsed += 1
