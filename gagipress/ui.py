"""Terminal feedback: a spinner for long operations and status lines."""

from __future__ import annotations

import sys
import threading
from typing import TextIO

_FRAMES = ("⠋", "⠙", "⠹", "⠸", "⠼", "⠴", "⠦", "⠧", "⠇", "⠏")
_INTERVAL = 0.1
_CLEAR_LINE = "\r\033[K"


class Spinner:
    """An animated spinner drawn on one terminal line while work runs."""

    def __init__(self, message: str, stream: TextIO | None = None) -> None:
        self.message = message
        self._stream = stream
        self._done = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def _run(self) -> None:
        stream = self.stream
        index = 0
        while not self._done.is_set():
            stream.write(f"\r{_FRAMES[index]} {self.message}")
            stream.flush()
            index = (index + 1) % len(_FRAMES)
            self._done.wait(_INTERVAL)

    def start(self) -> None:
        """Start drawing the spinner in a background thread."""
        if self._thread is not None:
            return
        self._done.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()

    def stop(self) -> None:
        """Stop the spinner and clear its line."""
        self._done.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        self.stream.write(_CLEAR_LINE)
        self.stream.flush()

    def __enter__(self) -> Spinner:
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()


def success(message: str) -> None:
    """Print a success line."""
    print(f"✓ {message}")


def error(message: str) -> None:
    """Print an error line."""
    print(f"✗ {message}")


def info(message: str) -> None:
    """Print an informational line."""
    print(f"ℹ {message}")


def warning(message: str) -> None:
    """Print a warning line."""
    print(f"⚠ {message}")