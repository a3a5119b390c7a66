# events.py
# Snapshot publishing and the single execution context of the core.
#
# Every mutation of core state runs on the EventLoop: UI commands and
# ambulance ticks are posted as callables and executed one at a time in
# FIFO order, so no two mutators ever overlap.

import logging
import queue
import threading
from typing import Any, Callable, Generic, List, Optional, TypeVar

logger = logging.getLogger(__name__)

S = TypeVar("S")


class Observable(Generic[S]):
    """
    Base class for components that publish immutable snapshots.

    Subclasses implement snapshot() and call _publish() after each
    state change.
    """

    def __init__(self) -> None:
        self._subscribers: List[Callable[[S], None]] = []

    def snapshot(self) -> S:
        raise NotImplementedError

    def subscribe(self, callback: Callable[[S], None]) -> Callable[[], None]:
        """
        Register callback for every new snapshot.

        Returns:
            A function that removes the subscription.
        """
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self) -> S:
        snap = self.snapshot()
        for callback in list(self._subscribers):
            callback(snap)
        return snap


class EventLoop:
    """
    FIFO command queue drained by exactly one thread.

    Two ways to drive it:
        loop.start()         # background worker thread (interactive app)
        loop.run_pending()   # drain on the caller's thread (tests, scripts)

    Usage:
        loop.post(dispatch.tick)
        result = loop.call(nav.go_back)   # post and wait for the result
    """

    _STOP = object()

    def __init__(self) -> None:
        self._queue: "queue.Queue[Any]" = queue.Queue()
        self._thread: Optional[threading.Thread] = None
        self._stopping = False

    # ------------------------------------------------------------------
    # Posting
    # ------------------------------------------------------------------

    def post(self, fn: Callable[..., Any], *args: Any) -> None:
        """Queue fn(*args) without waiting for it."""
        self._queue.put((fn, args, None))

    def call(self, fn: Callable[..., Any], *args: Any) -> Any:
        """
        Run fn(*args) on the loop and return its result.

        Runs inline when called from the loop thread itself, or when no
        worker thread is running. While a stop is pending the worker is
        joined first, so nothing runs beside it.
        """
        worker = self._thread
        if worker is not None and threading.current_thread() is worker:
            return fn(*args)
        if worker is not None and self._stopping:
            worker.join()
            self._thread, self._stopping = None, False
            worker = None
        if worker is None:
            self.run_pending()
            return fn(*args)

        done = threading.Event()
        box: dict = {}
        self._queue.put((fn, args, (done, box)))
        done.wait()
        if "error" in box:
            raise box["error"]
        return box.get("result")

    # ------------------------------------------------------------------
    # Draining
    # ------------------------------------------------------------------

    def run_pending(self) -> int:
        """Execute everything queued so far on the calling thread."""
        count = 0
        while True:
            try:
                item = self._queue.get_nowait()
            except queue.Empty:
                return count
            if item is self._STOP:
                self._queue.task_done()
                return count
            self._execute(item)
            count += 1

    @property
    def running(self) -> bool:
        return self._thread is not None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._worker, name="core-loop", daemon=True)
        self._thread.start()

    def stop(self, timeout: float = 5.0) -> None:
        """Let queued work finish, then stop the worker thread."""
        if self._thread is None:
            return
        if not self._stopping:
            self._stopping = True
            self._queue.put(self._STOP)
        self._thread.join(timeout=timeout)
        if self._thread.is_alive():
            logger.warning(f"Loop thread still busy after {timeout:.1f}s; it stops after the current item.")
            return
        self._thread, self._stopping = None, False

    def _worker(self) -> None:
        while True:
            item = self._queue.get()
            if item is self._STOP:
                self._queue.task_done()
                break
            self._execute(item)

    def _execute(self, item) -> None:
        fn, args, reply = item
        try:
            result = fn(*args)
        except Exception as e:
            if reply is None:
                logger.exception(f"Posted event {getattr(fn, '__name__', fn)} failed: {e}")
            else:
                reply[1]["error"] = e
        else:
            if reply is not None:
                reply[1]["result"] = result
        finally:
            if reply is not None:
                reply[0].set()
            self._queue.task_done()
