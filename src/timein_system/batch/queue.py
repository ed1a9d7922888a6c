from __future__ import annotations

import csv
import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Optional, Sequence

from ..core.constants import (
    DEFAULT_QUEUE_BATCH_SIZE,
    DEFAULT_QUEUE_DELAY_SECONDS,
    DEFAULT_QUEUE_MAX_SIZE,
    TIME_IN_CSV_HEADER,
)
from ..core.exceptions import QueueFullError

logger = logging.getLogger(__name__)

TimerFactory = Callable[[float, Callable[[], None]], threading.Timer]


@dataclass(frozen=True)
class QueueItem:
    row: tuple[str, ...]
    images: tuple[str, ...] = field(default_factory=tuple)


def _daemon_timer(delay: float, callback: Callable[[], None]) -> threading.Timer:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


class BatchEmailQueue:
    """Buffers time-in rows and mails them as one CSV attachment.

    A batch goes out when ``batch_size`` rows are waiting or ``delay_seconds``
    after the first row of the batch arrived, whichever comes first. A failed
    send keeps every row and file for the next trigger. Nothing survives a
    process restart.
    """

    def __init__(
        self,
        send_batch: Callable[[Path, Sequence[str]], None],
        *,
        batch_file: str | Path,
        cleanup_paths: Sequence[str | Path] = (),
        batch_size: int = DEFAULT_QUEUE_BATCH_SIZE,
        max_size: int = DEFAULT_QUEUE_MAX_SIZE,
        delay_seconds: float = DEFAULT_QUEUE_DELAY_SECONDS,
        background_flush: bool = True,
        timer_factory: TimerFactory = _daemon_timer,
        debug: bool = False,
    ):
        self._send_batch = send_batch
        self._batch_file = Path(batch_file)
        self._cleanup_paths = tuple(Path(p) for p in cleanup_paths)
        self._batch_size = int(batch_size)
        self._max_size = int(max_size)
        self._delay = float(delay_seconds)
        self._background = bool(background_flush)
        self._timer_factory = timer_factory
        self._debug = debug

        self._items: list[QueueItem] = []
        # Slots promised to submissions that have not enqueued yet.
        self._reserved = 0
        self._lock = threading.Lock()
        self._flush_lock = threading.Lock()
        self._timer: Optional[threading.Timer] = None

    def pending(self) -> int:
        with self._lock:
            return len(self._items)

    def is_full(self) -> bool:
        with self._lock:
            return len(self._items) + self._reserved >= self._max_size

    def reserve(self) -> None:
        """Hold one slot for a row that will be enqueued with ``reserved=True``."""
        with self._lock:
            if len(self._items) + self._reserved >= self._max_size:
                raise QueueFullError("Email queue full")
            self._reserved += 1

    def release(self) -> None:
        with self._lock:
            self._reserved = max(self._reserved - 1, 0)

    def enqueue(self, row: Sequence[str], images: Sequence[str | Path] = (), *, reserved: bool = False) -> None:
        item = QueueItem(row=tuple(row), images=tuple(str(p) for p in images))
        with self._lock:
            if reserved and self._reserved:
                self._reserved -= 1
            elif len(self._items) + self._reserved >= self._max_size:
                raise QueueFullError("Email queue full")
            self._items.append(item)
            size = len(self._items)
            batch_ready = size >= self._batch_size
            if not batch_ready and self._timer is None:
                self._timer = self._timer_factory(self._delay, self.flush)
                self._timer.start()

        logger.debug("Queued time-in (%s/%s)", size, self._batch_size)
        if batch_ready:
            if self._background:
                threading.Thread(target=self.flush, name="timein-batch-flush", daemon=True).start()
            else:
                self.flush()

    def flush(self) -> bool:
        """Send everything queued so far. Returns True when a batch went out."""
        if not self._flush_lock.acquire(blocking=False):
            return False
        try:
            with self._lock:
                if self._timer is not None:
                    self._timer.cancel()
                    self._timer = None
                batch = list(self._items)
            if not batch:
                return False

            images = [img for item in batch for img in item.images]
            try:
                self._write_batch_file(batch)
                self._send_batch(self._batch_file, images)
            except Exception as exc:
                # Rows and files stay queued for the next trigger.
                logger.error("Batch email send failed: %s", exc, exc_info=self._debug)
                return False

            self._cleanup(images)
            with self._lock:
                del self._items[: len(batch)]
            logger.info("Sent time-in batch with %s row(s) and %s image(s)", len(batch), len(images))
            return True
        finally:
            self._flush_lock.release()

    def shutdown(self) -> None:
        with self._lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _write_batch_file(self, batch: Sequence[QueueItem]) -> None:
        self._batch_file.parent.mkdir(parents=True, exist_ok=True)
        with self._batch_file.open("w", newline="", encoding="utf-8") as fh:
            writer = csv.writer(fh, quoting=csv.QUOTE_ALL)
            writer.writerow(TIME_IN_CSV_HEADER)
            writer.writerows(item.row for item in batch)

    def _cleanup(self, images: Sequence[str]) -> None:
        for path in (self._batch_file, *self._cleanup_paths, *(Path(p) for p in images)):
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not delete %s: %s", path, exc)
