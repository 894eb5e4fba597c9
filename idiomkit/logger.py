"""Loggers assembled from interchangeable formatting, output, locking and filtering parts."""

from __future__ import annotations

import argparse
import contextlib
import sys
import threading
import time
from collections.abc import Iterable, Mapping
from enum import IntEnum
from typing import Callable, Protocol, TextIO


class LogLevel(IntEnum):
    """Severity of a log message, ordered from least to most severe."""

    DEBUG = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    FATAL = 4


_LABELS = {
    LogLevel.DEBUG: "[DEBUG] ",
    LogLevel.INFO: "[INFO] ",
    LogLevel.WARNING: "[WARNING] ",
    LogLevel.ERROR: "[ERROR] ",
    LogLevel.FATAL: "[FATAL] ",
}


def level_label(level: LogLevel | int) -> str:
    """Return the prefix written before messages of ``level``."""
    try:
        return _LABELS[LogLevel(level)]
    except ValueError:
        return "[UNKNOWN] "


def simple_format(message: str) -> str:
    """Return the message unchanged."""
    return message


def timestamp_format(message: str) -> str:
    """Prefix the message with the local date and time."""
    return time.strftime("[%Y-%m-%d %H:%M:%S] ", time.localtime()) + message


def thread_format(message: str) -> str:
    """Prefix the message with the identifier of the calling thread."""
    return f"[thread {threading.get_ident()}] {message}"


class _Output(Protocol):
    def write(self, message: str) -> None: ...


class ConsoleOutput:
    """Writes each message as a line to a text stream."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def write(self, message: str) -> None:
        """Write ``message`` followed by a newline."""
        stream = self._stream if self._stream is not None else sys.stdout
        print(message, file=stream, flush=True)


class FileOutput:
    """Appends each message as a line to a file."""

    def __init__(self, filename: str = "log.txt") -> None:
        self.filename = str(filename)
        try:
            self._file: TextIO | None = open(self.filename, "a", encoding="utf-8")
        except OSError as exc:
            raise OSError(f"cannot open log file: {self.filename}") from exc

    def write(self, message: str) -> None:
        """Append ``message`` as a line; ignored once the file is closed."""
        if self._file is None:
            return
        self._file.write(message + "\n")
        self._file.flush()

    def close(self) -> None:
        """Close the file."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self) -> FileOutput:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class BufferedOutput:
    """Keeps messages in memory until they are dumped."""

    def __init__(self) -> None:
        self._buffer: list[str] = []

    def write(self, message: str) -> None:
        """Store ``message``."""
        self._buffer.append(message)

    @property
    def buffer(self) -> tuple[str, ...]:
        """Stored messages in the order they were written."""
        return tuple(self._buffer)

    def clear(self) -> None:
        """Drop all stored messages."""
        self._buffer.clear()

    def dump(self, stream: TextIO | None = None) -> None:
        """Write every stored message as a line to ``stream``."""
        out = stream if stream is not None else sys.stdout
        for message in self._buffer:
            print(message, file=out)

    def dump_to_file(self, filename: str) -> None:
        """Write every stored message as a line to ``filename``, replacing it."""
        with open(filename, "w", encoding="utf-8") as file:
            file.writelines(message + "\n" for message in self._buffer)


class LevelFilter:
    """Lets through messages at or above a minimum level."""

    def __init__(self, min_level: LogLevel = LogLevel.DEBUG) -> None:
        self.min_level = LogLevel(min_level)

    def should_log(self, level: LogLevel) -> bool:
        """Whether a message of ``level`` passes the filter."""
        return level >= self.min_level


class Logger:
    """A logger combining a formatter, an output, optional locking and a filter."""

    def __init__(
        self,
        formatter: Callable[[str], str] = simple_format,
        output: _Output | None = None,
        thread_safe: bool = False,
        level_filter: LevelFilter | None = None,
    ) -> None:
        self.formatter = formatter
        self.output = output if output is not None else ConsoleOutput()
        self.level_filter = level_filter if level_filter is not None else LevelFilter()
        self._lock: contextlib.AbstractContextManager = (
            threading.Lock() if thread_safe else contextlib.nullcontext()
        )

    def log(self, level: LogLevel, message: str) -> None:
        """Format and write ``message`` if ``level`` passes the filter."""
        if not self.level_filter.should_log(level):
            return
        with self._lock:
            self.output.write(self.formatter(level_label(level) + message))

    def debug(self, message: str) -> None:
        """Log at debug level."""
        self.log(LogLevel.DEBUG, message)

    def info(self, message: str) -> None:
        """Log at info level."""
        self.log(LogLevel.INFO, message)

    def warning(self, message: str) -> None:
        """Log at warning level."""
        self.log(LogLevel.WARNING, message)

    def error(self, message: str) -> None:
        """Log at error level."""
        self.log(LogLevel.ERROR, message)

    def fatal(self, message: str) -> None:
        """Log at fatal level."""
        self.log(LogLevel.FATAL, message)


def console_logger(stream: TextIO | None = None) -> Logger:
    """Plain messages to a console stream, without locking."""
    return Logger(simple_format, ConsoleOutput(stream), thread_safe=False)


def file_logger(filename: str) -> Logger:
    """Timestamped messages appended to ``filename``, with locking."""
    return Logger(timestamp_format, FileOutput(filename), thread_safe=True)


def buffered_logger() -> Logger:
    """Messages tagged with the thread id, kept in memory, with locking."""
    return Logger(thread_format, BufferedOutput(), thread_safe=True)


def log_container(logger: Logger, container: Iterable | Mapping) -> None:
    """Log every element of ``container``; mappings are logged as key -> value."""
    logger.info("Container contents:")
    if isinstance(container, Mapping):
        for key, value in container.items():
            logger.info(f"  {key} -> {value}")
    else:
        for value in container:
            logger.info(f"  {value}")


def _worker(logger: Logger, worker_id: int) -> None:
    logger.info(f"Thread {worker_id} started")
    time.sleep(worker_id * 0.1)
    logger.info(f"Thread {worker_id} finished its work")


def main(argv: list[str] | None = None) -> int:
    """Run the policy-based logger demonstration."""
    argparse.ArgumentParser(description="Policy-based logger demonstration").parse_args(argv)
    try:
        print("===== Policy-based logger demo =====")

        print("\n-- Console logger --")
        console = console_logger()
        console.debug("This is a debug message")
        console.info("This is an info message")
        console.warning("This is a warning message")
        console.error("This is an error message")

        print("\n-- File logger --")
        logger = file_logger("example.log")
        logger.info("Log written to file")
        logger.warning("This warning is written to the file too")
        logger.output.close()
        print("Messages written to example.log")

        print("\n-- Buffered logger --")
        buffered = buffered_logger()
        buffered.info("This message is buffered")
        buffered.warning("This warning is buffered too")
        buffered.error("Serious error!")
        print("Buffer contents:")
        for message in buffered.output.buffer:
            print(f"  {message}")
        buffered.output.dump_to_file("buffer_dump.log")
        print("Buffer contents written to buffer_dump.log")

        print("\n-- Custom logger --")
        warning_logger = Logger(
            timestamp_format, ConsoleOutput(), False, LevelFilter(LogLevel.WARNING)
        )
        warning_logger.debug("This debug message is not shown")
        warning_logger.info("This info message is not shown either")
        warning_logger.warning("This warning is shown")
        warning_logger.error("This error is shown too")

        print("\n-- Multi-threaded logging --")
        thread_logger = Logger(thread_format, ConsoleOutput(), thread_safe=True)
        threads = [
            threading.Thread(target=_worker, args=(thread_logger, i)) for i in range(1, 4)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        print("\n-- Logging containers --")
        log_container(console, [1, 2, 3, 4, 5])
        scores = {"Alice": 85, "Bob": 92, "Carol": 78}
        log_container(console, dict(sorted(scores.items())))

        print("\n===== End of policy-based logger demo =====")
    except Exception as exc:  # noqa: BLE001
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0