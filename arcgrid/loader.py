"""A one-line text progress bar."""

from __future__ import annotations

import sys
import threading
from typing import Optional, TextIO

LOADING_LEN = 40


class Loader:
    """Progress bar for ``n`` steps; call once per step, close when done."""

    def __init__(self, n: int, text: str = "", stream: Optional[TextIO] = None) -> None:
        self.n = n
        self.text = text
        self.counter = 0
        self.prev = -1
        self.keep_title = False
        self._stream = stream
        self._lock = threading.Lock()
        self._closed = False

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def __call__(self) -> None:
        if self.n <= 0:
            raise ValueError("progress total must be positive")
        a = self.counter
        self.counter += 1
        b = self.n

        pb = self.prev * b * 2
        x = a * 2000 + b
        if x - b * 2 < pb <= x:
            return

        with self._lock:
            p = self.prev = x // (2 * b)
            dist = (a * 2 * LOADING_LEN + (b >> 1)) // b
            bar = "=" * (dist >> 1)
            if dist & 1:
                bar += "-"
            bar += " " * max(0, LOADING_LEN - ((dist + 1) >> 1))
            out = self.stream
            out.write(f"{self.text} |{bar}| {a} / {b} ({p // 10}.{p % 10}%)\r")
            out.flush()

    def close(self) -> None:
        """Blank out the bar, leaving the title if ``keep_title`` is set."""
        if self._closed:
            return
        self._closed = True
        with self._lock:
            out = self.stream
            out.write(" " * (len(self.text) + LOADING_LEN + 35 + 5) + "\r")
            out.flush()
            if self.keep_title:
                out.write(f"{self.text} \n")

    def __enter__(self) -> Loader:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()