"""
Filter Engine - node-side filters and their polling loops.

A Filter wraps the identifier the node returned from one of the
mc_new*Filter calls. ``watch()`` starts a background thread that polls
mc_getFilterChanges on a fixed interval and feeds a FilterWatcher, a
single-consumer ordered stream. ``uninstall()`` stops the thread and
releases the node-side filter.

Lifecycle: created -> watching -> cancelled. Nothing leaves cancelled.
"""

from __future__ import annotations

import logging
import queue
import threading
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable, Iterator, Optional

from ..errors import DecodeError, InvalidStateError, RpcError, TransportError
from ..types import FilterOption, Log, decode_hash

if TYPE_CHECKING:
    from .api import Mc

logger = logging.getLogger(__name__)

STOP_TIMEOUT = 60.0


class FilterKind(str, Enum):
    LOG = "log"
    BLOCK = "block"
    PENDING_TRANSACTION = "pending_transaction"


class FilterState(str, Enum):
    CREATED = "created"
    WATCHING = "watching"
    CANCELLED = "cancelled"


class _Closed:
    pass


class _Failure:
    def __init__(self, error: Exception) -> None:
        self.error = error


_CLOSED = _Closed()


class FilterWatcher:
    """
    Ordered stream of entries from one filter's polling thread.

    Iterate it, or call ``get(timeout)``. Iteration ends when the filter
    is uninstalled. A poll failure ends the stream by raising the
    poll's exception to the consumer.
    """

    def __init__(
        self,
        poll: Callable[[], list[Any]],
        interval: float,
        cancelled: threading.Event,
        name: str,
    ) -> None:
        self._poll = poll
        self._interval = interval
        self._cancelled = cancelled
        self._queue: queue.Queue[Any] = queue.Queue()
        self._terminal: Optional[Any] = None
        self._thread = threading.Thread(target=self._run, name=name, daemon=True)

    @property
    def running(self) -> bool:
        return self._thread.is_alive()

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        logger.debug("%s: polling every %.3fs", self._thread.name, self._interval)
        while not self._cancelled.is_set():
            try:
                entries = self._poll()
            except InvalidStateError:
                break
            except (TransportError, RpcError, DecodeError) as exc:
                logger.warning("%s: polling stopped: %s", self._thread.name, exc)
                self._queue.put(_Failure(exc))
                return
            except Exception as exc:
                logger.exception("%s: polling crashed", self._thread.name)
                self._queue.put(_Failure(exc))
                return
            for entry in entries:
                if self._cancelled.is_set():
                    break
                self._queue.put(entry)
            if self._cancelled.wait(self._interval):
                break
        logger.debug("%s: polling stopped", self._thread.name)
        self._queue.put(_CLOSED)

    def get(self, timeout: Optional[float] = None) -> Any:
        """
        Take the next entry, blocking until one arrives.

        Args:
            timeout: Seconds to wait (None waits forever)

        Returns:
            The next entry (Log for log filters, Hash otherwise)

        Raises:
            TimeoutError: If nothing arrived within timeout
            InvalidStateError: If the filter was uninstalled and every
                delivered entry has been consumed
            TransportError / RpcError / DecodeError: If polling failed
        """
        if self._terminal is None:
            try:
                item = self._queue.get(timeout=timeout)
            except queue.Empty:
                raise TimeoutError(f"No filter entry within {timeout}s") from None
            if not isinstance(item, (_Closed, _Failure)):
                return item
            self._terminal = item
        if isinstance(self._terminal, _Failure):
            raise self._terminal.error
        raise InvalidStateError("Filter was uninstalled")

    def stop(self, timeout: float = STOP_TIMEOUT) -> None:
        """Signal the polling thread and wait for it to finish."""
        self._cancelled.set()
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout)

    def __iter__(self) -> Iterator[Any]:
        return self

    def __next__(self) -> Any:
        try:
            return self.get()
        except InvalidStateError:
            raise StopIteration from None


class Filter:
    """A node-side filter and its local polling state."""

    def __init__(
        self,
        mc: "Mc",
        filter_id: str,
        kind: FilterKind,
        option: Optional[FilterOption] = None,
        poll_interval: float = 1.0,
    ) -> None:
        self._mc = mc
        self._id = filter_id
        self.kind = kind
        self.option = option
        self.poll_interval = poll_interval
        self._cancelled = threading.Event()
        self._released = False
        self._lock = threading.Lock()
        self._watcher: Optional[FilterWatcher] = None

    def __repr__(self) -> str:
        return f"Filter(id={self._id!r}, kind={self.kind.value}, state={self.state.value})"

    @property
    def id(self) -> str:
        return self._id

    @property
    def state(self) -> FilterState:
        if self._cancelled.is_set():
            return FilterState.CANCELLED
        if self._watcher is not None:
            return FilterState.WATCHING
        return FilterState.CREATED

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def released(self) -> bool:
        return self._released

    def ensure_active(self) -> None:
        if self._cancelled.is_set():
            raise InvalidStateError(f"Filter {self._id} has been uninstalled")

    def decode_entry(self, raw: Any) -> Any:
        if self.kind is FilterKind.LOG:
            return Log.from_dict(raw)
        return decode_hash(raw)

    def watch(self, interval: Optional[float] = None) -> FilterWatcher:
        """
        Start polling for changes in a background thread.

        Args:
            interval: Seconds between polls (default: the filter's
                poll_interval)

        Returns:
            FilterWatcher delivering entries in node order

        Raises:
            InvalidStateError: If the filter was uninstalled or is
                already being watched
        """
        with self._lock:
            self.ensure_active()
            if self._watcher is not None:
                raise InvalidStateError(f"Filter {self._id} is already being watched")
            self._watcher = FilterWatcher(
                poll=self.get_changes,
                interval=self.poll_interval if interval is None else interval,
                cancelled=self._cancelled,
                name=f"chain3-filter-{self._id}",
            )
            self._watcher.start()
            return self._watcher

    def get_changes(self) -> list[Any]:
        return self._mc.get_filter_changes(self)

    def get_logs(self) -> list[Log]:
        return self._mc.get_filter_logs(self)

    def uninstall(self) -> bool:
        return self._mc.uninstall_filter(self)

    def cancel(self, timeout: float = STOP_TIMEOUT) -> None:
        """Stop local polling. Safe to call repeatedly and from any thread."""
        with self._lock:
            self._cancelled.set()
            watcher = self._watcher
        if watcher is not None:
            watcher.stop(timeout)

    def mark_released(self) -> None:
        self._released = True

    def __enter__(self) -> "Filter":
        return self

    def __exit__(self, *exc_info: object) -> None:
        if not self._released:
            self.uninstall()
