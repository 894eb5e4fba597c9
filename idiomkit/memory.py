"""Allocation tracking, a fixed-block memory pool and tracked object creation."""

from __future__ import annotations

import argparse
import sys
import threading
from dataclasses import dataclass
from typing import Any, ClassVar, TextIO, TypeVar

_T = TypeVar("_T", bound="Trackable")

_ALIGNMENT = 16


class _AddressSpace:
    """Hands out unique, aligned, never-reused simulated addresses."""

    def __init__(self, start: int = 0x10000) -> None:
        self._next = start
        self._lock = threading.Lock()

    def reserve(self, size: int) -> int:
        span = max(size, 1)
        span = (span + _ALIGNMENT - 1) // _ALIGNMENT * _ALIGNMENT
        with self._lock:
            address = self._next
            self._next += span
        return address


_ADDRESSES = _AddressSpace()


def _hex(address: int) -> str:
    return f"0x{address:x}"


@dataclass(frozen=True)
class AllocationInfo:
    """Where and how large a tracked allocation is."""

    size: int
    file: str
    line: int


class MemoryTracker:
    """Records allocations and releases so leaks can be reported."""

    _instance: ClassVar[MemoryTracker | None] = None
    _instance_lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out
        self._allocations: dict[int, AllocationInfo] = {}
        self._total = 0
        self._lock = threading.Lock()

    @property
    def out(self) -> TextIO:
        """The stream messages are written to."""
        return self._out if self._out is not None else sys.stdout

    @classmethod
    def instance(cls) -> MemoryTracker:
        """Return the process-wide tracker, creating it on first use."""
        if cls._instance is None:
            with cls._instance_lock:
                if cls._instance is None:
                    cls._instance = cls()
        return cls._instance

    def record_allocation(
        self, address: int | None, size: int, file: str, line: int
    ) -> None:
        """Remember an allocation of ``size`` bytes made at ``file:line``."""
        if address is None:
            return
        with self._lock:
            self._allocations[address] = AllocationInfo(size, file, line)
            self._total += size
        print(
            f"[memory] allocated {size} bytes at {file}:{line} "
            f"address: {_hex(address)}",
            file=self.out,
        )

    def record_deallocation(self, address: int | None) -> None:
        """Forget an allocation; raise KeyError if it was never recorded."""
        if address is None:
            return
        with self._lock:
            info = self._allocations.pop(address, None)
            if info is not None:
                self._total -= info.size
        if info is None:
            raise KeyError(f"release of untracked memory: {_hex(address)}")
        print(
            f"[memory] released {info.size} bytes at address: {_hex(address)}",
            file=self.out,
        )

    def is_tracked(self, address: int) -> bool:
        """Whether ``address`` is a live tracked allocation."""
        with self._lock:
            return address in self._allocations

    @property
    def total_allocated(self) -> int:
        """Bytes currently allocated and not yet released."""
        with self._lock:
            return self._total

    def leaks(self) -> dict[int, AllocationInfo]:
        """Live allocations keyed by address."""
        with self._lock:
            return dict(self._allocations)

    def leak_report(self) -> str:
        """Return a printable summary of all live allocations."""
        with self._lock:
            allocations = dict(self._allocations)
            total = self._total
        lines = ["====== Memory leak report ======", f"Total allocated: {total} bytes"]
        if not allocations:
            lines.append("No memory leaks detected")
        else:
            lines.append(f"Detected {len(allocations)} memory leak(s):")
            lines.extend(
                f"  leak: {info.size} bytes at {info.file}:{info.line} "
                f"address: {_hex(address)}"
                for address, info in allocations.items()
            )
        lines.append("================================")
        return "\n".join(lines) + "\n"


class MemoryPool:
    """A pool of fixed-size blocks carved out of one contiguous region."""

    def __init__(
        self,
        block_size: int = 1024,
        pool_size: int = 1024 * 1024,
        out: TextIO | None = None,
    ) -> None:
        if block_size <= 0:
            raise ValueError("block size must be positive")
        if pool_size < 0:
            raise ValueError("pool size must not be negative")
        self._block_size = block_size
        self._pool_size = pool_size
        self._out = out
        self._base = _ADDRESSES.reserve(pool_size)
        self._used = 0
        self._lock = threading.Lock()
        num_blocks = pool_size // block_size
        self._free = [self._base + i * block_size for i in range(num_blocks)]
        self._free_set = set(self._free)
        print(
            f"Memory pool created: {num_blocks} blocks of {block_size} bytes",
            file=self._stream,
        )

    @property
    def _stream(self) -> TextIO:
        return self._out if self._out is not None else sys.stdout

    def allocate(self) -> int:
        """Take a free block and return its address."""
        with self._lock:
            if not self._free:
                raise MemoryError("memory pool is exhausted")
            block = self._free.pop()
            self._free_set.discard(block)
            self._used += self._block_size
        return block

    def deallocate(self, address: int) -> None:
        """Return the block at ``address`` to the pool."""
        with self._lock:
            if not self._base <= address < self._base + self._pool_size:
                raise ValueError(
                    f"memory does not belong to this pool: {_hex(address)}"
                )
            if (address - self._base) % self._block_size != 0:
                raise ValueError(
                    f"address is not the start of a block: {_hex(address)}"
                )
            if address in self._free_set:
                raise ValueError(f"block released more than once: {_hex(address)}")
            self._free.append(address)
            self._free_set.add(address)
            self._used -= self._block_size
        print(f"[pool] block returned: {_hex(address)}", file=self._stream)

    @property
    def block_size(self) -> int:
        """Size of each block in bytes."""
        return self._block_size

    @property
    def used(self) -> int:
        """Bytes handed out and not yet returned."""
        with self._lock:
            return self._used

    @property
    def free_count(self) -> int:
        """Number of free blocks."""
        with self._lock:
            return len(self._free)


class Trackable:
    """Base for objects whose creation and release are recorded by a tracker."""

    allocation_size: ClassVar[int] = 1

    _address: int | None = None
    _tracker: MemoryTracker | None = None
    _pool: MemoryPool | None = None

    @property
    def address(self) -> int | None:
        """Simulated address of this object, or None if it was not tracked."""
        return self._address

    @property
    def _stream(self) -> TextIO:
        return self._tracker.out if self._tracker is not None else sys.stdout

    @classmethod
    def _size(cls) -> int:
        return max(cls.allocation_size, 1)

    @classmethod
    def _place(
        cls: type[_T], address: int, tracker: MemoryTracker, pool: MemoryPool | None
    ) -> _T:
        obj = cls.__new__(cls)
        obj._address = address
        obj._tracker = tracker
        obj._pool = pool
        return obj

    @classmethod
    def create(
        cls: type[_T], *args: Any, tracker: MemoryTracker | None = None, **kwargs: Any
    ) -> _T:
        """Allocate and construct a tracked instance."""
        return cls.create_at("Unknown", 0, *args, tracker=tracker, **kwargs)

    @classmethod
    def create_at(
        cls: type[_T],
        file: str,
        line: int,
        *args: Any,
        tracker: MemoryTracker | None = None,
        **kwargs: Any,
    ) -> _T:
        """Allocate and construct an instance, recording ``file:line``."""
        tracker = tracker if tracker is not None else MemoryTracker.instance()
        size = cls._size()
        address = _ADDRESSES.reserve(size)
        tracker.record_allocation(address, size, file, line)
        obj = cls._place(address, tracker, None)
        try:
            obj.__init__(*args, **kwargs)
        except BaseException:
            print(
                f"[memory] construction failed, releasing {file}:{line}",
                file=tracker.out,
            )
            tracker.record_deallocation(address)
            raise
        return obj

    @classmethod
    def create_in_pool(
        cls: type[_T],
        pool: MemoryPool,
        *args: Any,
        tracker: MemoryTracker | None = None,
        **kwargs: Any,
    ) -> _T:
        """Construct an instance inside a block taken from ``pool``."""
        tracker = tracker if tracker is not None else MemoryTracker.instance()
        size = cls._size()
        if size > pool.block_size:
            raise MemoryError("object does not fit in a pool block")
        address = pool.allocate()
        tracker.record_allocation(address, size, "MemoryPool", 0)
        obj = cls._place(address, tracker, pool)
        try:
            obj.__init__(*args, **kwargs)
        except BaseException:
            print("[memory] construction failed, returning block to pool", file=tracker.out)
            if tracker.is_tracked(address):
                tracker.record_deallocation(address)
            pool.deallocate(address)
            raise
        return obj

    def _on_release(self) -> None:
        """Hook run before the object's memory is released."""

    def release(self) -> None:
        """Destroy the object and release its tracked memory."""
        address, tracker = self._address, self._tracker
        if address is None or tracker is None or not tracker.is_tracked(address):
            raise ValueError(
                "release of untracked memory"
                + (f": {_hex(address)}" if address is not None else "")
            )
        self._on_release()
        tracker.record_deallocation(address)
        if self._pool is not None:
            self._pool.deallocate(address)
        self._address = None


class Widget(Trackable):
    """Sample tracked object that owns a small buffer."""

    allocation_size: ClassVar[int] = 16

    def __init__(self, throw_exception: bool = False) -> None:
        if throw_exception:
            print("Widget constructed (may fail)", file=self._stream)
        else:
            print("Widget constructed", file=self._stream)
        self._data = [0] * 100
        if throw_exception:
            raise RuntimeError("Widget construction failed on purpose")

    def _on_release(self) -> None:
        print("Widget destroyed", file=self._stream)
        self._data = []


def print_memory_stats(
    tracker: MemoryTracker | None = None, out: TextIO | None = None
) -> None:
    """Print the number of bytes currently allocated."""
    tracker = tracker if tracker is not None else MemoryTracker.instance()
    stream = out if out is not None else tracker.out
    print(f"\nCurrently allocated: {tracker.total_allocated} bytes", file=stream)


def _here() -> tuple[str, int]:
    frame = sys._getframe(1)
    return frame.f_code.co_filename, frame.f_lineno


def _demo_basic(tracker: MemoryTracker) -> None:
    print("\n-- Basic tracking --")
    w1 = Widget.create(tracker=tracker)
    print_memory_stats(tracker)
    w1.release()
    print_memory_stats(tracker)
    widgets = [Widget.create(tracker=tracker) for _ in range(3)]
    print_memory_stats(tracker)
    for w in widgets:
        w.release()
    print_memory_stats(tracker)


def _demo_tracked_new(tracker: MemoryTracker) -> None:
    print("\n-- Tracking with location --")
    w2 = Widget.create_at(*_here(), tracker=tracker)
    print_memory_stats(tracker)
    w2.release()
    print_memory_stats(tracker)


def _demo_pool(tracker: MemoryTracker) -> None:
    print("\n-- Memory pool --")
    pool = MemoryPool(Widget.allocation_size, 1024 * 10)
    print(f"Initial free blocks: {pool.free_count}")
    try:
        w3 = Widget.create_in_pool(pool, tracker=tracker)
        print(f"Free blocks after allocation: {pool.free_count}")
        print(f"Memory used: {pool.used} bytes")
        w3.release()
        print(f"Free blocks after release: {pool.free_count}")
        print(f"Memory used: {pool.used} bytes")
    except (MemoryError, ValueError) as exc:
        print(f"Pool allocation failed: {exc}", file=sys.stderr)


def _demo_constructor_failure(tracker: MemoryTracker) -> None:
    print("\n-- Constructor failure --")
    try:
        Widget.create_at(*_here(), True, tracker=tracker)
    except RuntimeError as exc:
        print(f"Caught: {exc}")
    print_memory_stats(tracker)

    pool = MemoryPool(Widget.allocation_size, 1024)
    try:
        Widget.create_in_pool(pool, True, tracker=tracker)
    except RuntimeError as exc:
        print(f"Caught (pool): {exc}")
    print_memory_stats(tracker)


def _demo_leak(tracker: MemoryTracker) -> None:
    print("\n-- Leak detection --")
    Widget.create(tracker=tracker)
    print("Leaked one Widget on purpose")
    print_memory_stats(tracker)


def main(argv: list[str] | None = None) -> int:
    """Run the memory management demonstration."""
    argparse.ArgumentParser(description="Memory management demonstration").parse_args(argv)
    tracker = MemoryTracker.instance()
    try:
        print("===== Memory management demo =====")
        _demo_basic(tracker)
        _demo_tracked_new(tracker)
        _demo_pool(tracker)
        _demo_constructor_failure(tracker)
        _demo_leak(tracker)
        print("\n===== End of memory management demo =====")
    except Exception as exc:  # noqa: BLE001
        print(f"Unhandled error: {exc}", file=sys.stderr)
        return 1
    finally:
        print(tracker.leak_report(), end="", file=tracker.out)
    return 0