"""Hand work from background threads to the UI thread.

Views are not thread-safe: only the UI thread touches them.  Other
threads submit callables to a bounded FIFO and the UI loop drains it
between redraws.
"""

import logging
import queue
import threading
from typing import Any, Callable, Optional

from .constants import ToolkitConstants

logger = logging.getLogger(__name__)


class WorkQueue:
    """Bounded FIFO of callables applied on the UI thread."""

    def __init__(self, maxsize: int = ToolkitConstants.WORK_QUEUE_SIZE):
        self._queue: queue.Queue = queue.Queue(maxsize=maxsize)

    def __len__(self):
        return self._queue.qsize()

    def submit(self, fn: Callable[[Any], None], timeout: Optional[float] = None) -> bool:
        """Queue fn for the UI thread, blocking while the queue is full.

        Returns:
            False if timeout expired before there was room
        """
        try:
            self._queue.put(fn, timeout=timeout)
        except queue.Full:
            logger.warning("work queue full, dropped %r", fn)
            return False
        return True

    def drain(self, target) -> int:
        """Apply every queued callable to target in submission order.

        Never blocks; returns the number of callables run.
        """
        count = 0
        while True:
            try:
                fn = self._queue.get_nowait()
            except queue.Empty:
                return count
            fn(target)
            count += 1


class InputPump(threading.Thread):
    """Daemon thread forwarding input from source into a WorkQueue.

    source(timeout) returns a key token or event, or None when nothing
    arrived in time.  Each one becomes a submitted call of
    handler(target, token).
    """

    def __init__(self, source: Callable[[float], Optional[Any]], work: WorkQueue,
                 handler: Callable[[Any, Any], None],
                 poll_timeout: float = ToolkitConstants.INPUT_POLL_TIMEOUT):
        super().__init__(name="textpane-input", daemon=True)
        self.source = source
        self.work = work
        self.handler = handler
        self.poll_timeout = poll_timeout
        self._stopped = threading.Event()

    def run(self):
        while not self._stopped.is_set():
            token = self.source(self.poll_timeout)
            if token is None:
                continue
            self.work.submit(lambda target, token=token: self.handler(target, token))

    def stop(self):
        self._stopped.set()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()
