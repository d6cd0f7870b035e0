"""Single-owner merge path for the aggregate calendar."""

import logging
import queue
import threading

from typing_extensions import assert_never

from calproxy.constants import MERGE_THREAD_NAME
from calproxy.models.aggregate import AggregateCalendar
from calproxy.models.entry import CalendarEntry, EventEntry, OtherEntry, TimezoneEntry

logger = logging.getLogger(__name__)

_STOP = object()


class CalendarMerger:
    """Merge thread that exclusively owns an AggregateCalendar.

    Producers call ``submit`` from any thread; entries travel through an
    unbounded FIFO queue to the merge thread, which is the only code that
    mutates the aggregate. ``stop`` enqueues a sentinel behind every entry
    already submitted, so the thread drains those entries before it exits, and
    returns the aggregate only once the thread has left its loop.

    Usage:
        merger = CalendarMerger(AggregateCalendar())
        merger.start()
        merger.submit(entry)         # from worker threads
        aggregate = merger.stop()    # after all producers have returned
    """

    def __init__(
        self,
        aggregate: AggregateCalendar | None = None,
        log: logging.Logger | None = None,
    ):
        self._aggregate = aggregate if aggregate is not None else AggregateCalendar()
        self._log = log or logger
        self._queue: queue.Queue = queue.Queue()
        self._result: queue.Queue = queue.Queue(maxsize=1)
        self._thread = threading.Thread(
            target=self._run, name=MERGE_THREAD_NAME, daemon=True
        )
        self._stopped = False

    def start(self) -> None:
        self._thread.start()

    def submit(self, entry: CalendarEntry) -> None:
        """Hand an entry to the merge thread."""
        if self._stopped:
            raise RuntimeError("Cannot submit entries after merger has stopped")
        self._queue.put(entry)

    def stop(self) -> AggregateCalendar:
        """Signal that no further entries will arrive and collect the aggregate.

        Blocks until the merge thread has drained the queue and exited.
        """
        self._stopped = True
        self._queue.put(_STOP)
        outcome = self._result.get()
        self._thread.join()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome

    def _run(self) -> None:
        aggregate = self._aggregate
        outcome: object = aggregate
        try:
            while True:
                item = self._queue.get()
                if item is _STOP:
                    break
                self._merge(aggregate, item)
        except Exception as e:
            self._log.exception(f"Merge path failed: {e}")
            outcome = e
        finally:
            self._result.put(outcome)

    def _merge(self, aggregate: AggregateCalendar, entry: CalendarEntry) -> None:
        """Append one entry to the aggregate, dispatching on its kind."""
        if isinstance(entry, EventEntry):
            aggregate.add_event(entry)
        elif isinstance(entry, TimezoneEntry):
            aggregate.add_timezone(entry)
        elif isinstance(entry, OtherEntry):
            aggregate.entries_dropped += 1
            self._log.warning(
                f"Dropping unhandled entry type {entry.kind} from {entry.source}"
            )
        else:
            assert_never(entry)
