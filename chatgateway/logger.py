"""A line-oriented logger that writes timestamped lines from a background thread."""

from __future__ import annotations

import queue
import sys
import threading
import time
from typing import Any, TextIO

_STOP = object()
_TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class AsyncLogger:
    """Collects text until a newline arrives, then hands the line to a writer thread.

    Each line is printed as ``[YYYY-MM-DD HH:MM:SS] message`` in local time.
    Text still waiting for its newline when the logger closes is dropped.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._queue: queue.Queue[Any] = queue.Queue()
        self._buffer = ""
        self._lock = threading.Lock()
        self._closed = False
        self._thread = threading.Thread(target=self._run, name="async-logger", daemon=True)
        self._thread.start()

    def _run(self) -> None:
        while (message := self._queue.get()) is not _STOP:
            stamp = time.strftime(_TIME_FORMAT, time.localtime())
            self._stream.write(f"[{stamp}] {message.removesuffix(chr(10))}\n")
            self._stream.flush()

    def write(self, text: Any) -> AsyncLogger:
        """Append ``text`` to the pending line; queue it once it holds a newline."""
        with self._lock:
            if self._closed:
                raise RuntimeError("logger is closed")
            self._buffer += str(text)
            if "\n" in self._buffer:
                self._queue.put(self._buffer)
                self._buffer = ""
        return self

    def close(self) -> None:
        """Write every queued line and stop the writer thread."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            self._queue.put(_STOP)
        self._thread.join()

    def __enter__(self) -> AsyncLogger:
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()