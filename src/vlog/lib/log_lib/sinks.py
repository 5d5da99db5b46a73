"""
Log sinks: where finished records go.

A sink is anything with ``write(channel, message)``. Three are provided:

    StreamSink   stdout for 'standard', stderr for 'error' and 'warning'
    LoggingSink  forwards to a standard library logging.Logger
    MemorySink   keeps (channel, message) pairs, for hosts and tests
"""

import logging
import sys
import threading
from typing import List, Protocol, TextIO, Tuple

import colorama

from .channels import ERROR_CHANNEL, STANDARD_CHANNEL, WARNING_CHANNEL


class LogSink(Protocol):
    """Destination accepting a channel name and a finished record."""

    def write(self, channel: str, message: str) -> None:
        ...


_console_ready = False


def _prepare_console() -> None:
    """Enable ANSI handling on legacy Windows consoles, once."""
    global _console_ready
    if not _console_ready:
        colorama.just_fix_windows_console()
        _console_ready = True


class StreamSink:
    """Write records to text streams, one write() per record.

    Streams default to sys.stdout / sys.stderr, looked up at write time
    so redirection (and pytest capture) is honored.
    """

    def __init__(self, stdout: TextIO = None, stderr: TextIO = None):
        self._stdout = stdout
        self._stderr = stderr
        self._lock = threading.Lock()
        if stdout is None or stderr is None:
            _prepare_console()

    def stream_for(self, channel: str) -> TextIO:
        if channel == STANDARD_CHANNEL:
            return self._stdout if self._stdout is not None else sys.stdout
        return self._stderr if self._stderr is not None else sys.stderr

    def write(self, channel: str, message: str) -> None:
        stream = self.stream_for(channel)
        with self._lock:
            stream.write(message + "\n")
            stream.flush()


class LoggingSink:
    """Forward records to a standard library logger."""

    LEVELS = {
        ERROR_CHANNEL: logging.ERROR,
        WARNING_CHANNEL: logging.WARNING,
        STANDARD_CHANNEL: logging.INFO,
    }

    def __init__(self, logger: logging.Logger = None):
        self.logger = logger if logger is not None else logging.getLogger("vlog")

    def write(self, channel: str, message: str) -> None:
        self.logger.log(self.LEVELS.get(channel, logging.INFO), message)


class MemorySink:
    """Collect records in memory."""

    def __init__(self):
        self.records: List[Tuple[str, str]] = []
        self._lock = threading.Lock()

    def write(self, channel: str, message: str) -> None:
        with self._lock:
            self.records.append((channel, message))

    def messages(self, channel: str = None) -> List[str]:
        """Messages written so far, optionally for one channel."""
        with self._lock:
            return [m for c, m in self.records if channel is None or c == channel]

    def clear(self) -> None:
        with self._lock:
            self.records.clear()
