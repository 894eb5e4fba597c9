"""File access whose open files are always closed when their owner is done."""

from __future__ import annotations

import argparse
import os
import sys
from enum import Enum
from typing import BinaryIO, Iterator


class FileException(RuntimeError):
    """Raised when a file cannot be opened, read or written."""


class FileMode(Enum):
    """How a file is opened."""

    READ = "rb"
    WRITE = "wb"
    READ_WRITE = "r+b"
    APPEND = "ab"


class FileHandle:
    """Owns one open binary file and closes it when done."""

    def __init__(self, filepath: str, mode: FileMode) -> None:
        self.filepath = str(filepath)
        mode = FileMode(mode)
        if mode is FileMode.READ and not os.path.isfile(self.filepath):
            raise FileException(f"cannot open file for reading: {self.filepath}")
        try:
            self._file: BinaryIO = open(self.filepath, mode.value)
        except OSError as exc:
            raise FileException(f"cannot open file: {self.filepath}") from exc
        print(f"File opened: {self.filepath}")

    def is_open(self) -> bool:
        """Whether the file is still open."""
        return not self._file.closed

    def close(self) -> None:
        """Close the file if it is open."""
        if not self._file.closed:
            self._file.close()
            print(f"File closed: {self.filepath}")

    def flush(self) -> None:
        """Flush buffered writes."""
        self._file.flush()

    @property
    def raw(self) -> BinaryIO:
        """The underlying file object."""
        return self._file

    def __enter__(self) -> FileHandle:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


class FileHandler:
    """Reads and writes text through an owned file handle."""

    def __init__(self, filepath: str, mode: FileMode = FileMode.READ_WRITE) -> None:
        self._filepath = str(filepath)
        self.mode = FileMode(mode)
        self._handle: FileHandle | None = FileHandle(self._filepath, self.mode)

    def __enter__(self) -> FileHandler:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
        print("FileHandler released, file closed automatically")

    @property
    def filepath(self) -> str:
        """Path of the file, empty once ownership was taken elsewhere."""
        return self._filepath

    @property
    def handle(self) -> FileHandle | None:
        """The owned file handle, if any."""
        return self._handle

    def is_open(self) -> bool:
        """Whether a file is owned and open."""
        return self._handle is not None and self._handle.is_open()

    def close(self) -> None:
        """Close the owned file."""
        if self._handle is not None:
            self._handle.close()

    def _open_file(self) -> BinaryIO:
        if self._handle is None or not self._handle.is_open():
            raise FileException(f"file is not open or already closed: {self._filepath}")
        return self._handle.raw

    def write(self, content: str) -> None:
        """Write ``content`` at the current position and flush it."""
        file = self._open_file()
        try:
            file.write(content.encode("utf-8"))
            file.flush()
        except (OSError, ValueError) as exc:
            raise FileException(f"failed to write file: {self._filepath}") from exc

    def write_line(self, line: str) -> None:
        """Write ``line`` followed by a newline."""
        self.write(line + "\n")

    def read(self) -> str:
        """Return the whole file, leaving the current position unchanged."""
        file = self._open_file()
        try:
            position = file.tell()
            file.seek(0)
            data = file.read()
            file.seek(position)
        except (OSError, ValueError) as exc:
            raise FileException(f"failed to read file: {self._filepath}") from exc
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise FileException(f"failed to read file: {self._filepath}") from exc

    def read_lines(self) -> list[str]:
        """Return the file's lines without their newline characters."""
        lines = self.read().split("\n")
        if lines[-1] == "":
            lines.pop()
        return lines

    def take(self) -> FileHandler:
        """Move the open file into a new handler, leaving this one empty."""
        moved = FileHandler.__new__(FileHandler)
        moved._filepath = self._filepath
        moved.mode = self.mode
        moved._handle = self._handle
        self._handle = None
        self._filepath = ""
        print("FileHandler moved")
        return moved


class LineIterator:
    """Iterates over the lines a handler's file held when the iterator was made."""

    def __init__(self, handler: FileHandler) -> None:
        self._lines = handler.read_lines()
        self._position = 0

    def has_next(self) -> bool:
        """Whether another line remains."""
        return self._position < len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if not self.has_next():
            raise StopIteration
        line = self._lines[self._position]
        self._position += 1
        return line


def main(argv: list[str] | None = None) -> int:
    """Run the file handling demonstration."""
    argparse.ArgumentParser(description="File handling demonstration").parse_args(argv)
    try:
        print("===== File handler demo =====")

        print("\n-- Writing the test file --")
        with FileHandler("test.txt", FileMode.WRITE) as writer:
            writer.write_line("Line 1: resource management demo")
            writer.write_line("Line 2: acquisition is initialisation")
            writer.write_line("Line 3: resources released automatically")
            writer.write_line("Line 4: exception safety guaranteed")
            print("File written")

        print("\n-- Reading the test file --")
        with FileHandler("test.txt", FileMode.READ) as reader:
            print("Whole content:")
            print(reader.read())
            print("Line by line:")
            for line in LineIterator(reader):
                print(f"  > {line}")

        print("\n-- Transferring ownership --")
        original = FileHandler("test.txt", FileMode.READ_WRITE)
        with original.take() as moved:
            print(f"Path after transfer: {moved.filepath}")
            print("The original handler still exists but no longer owns the file")

        print("\n-- Error handling --")
        try:
            FileHandler("non_existent_file.txt", FileMode.READ)
        except FileException as exc:
            print(f"Expected error: {exc}")

        print("\n===== End of file handler demo =====")
    except Exception as exc:  # noqa: BLE001
        print(f"Unhandled error: {exc}", file=sys.stderr)
        return 1
    return 0