"""Thread coordination: a bounded circular buffer, counters, mutexes and a start gate."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from collections import deque
from typing import Any, Callable, Optional, Sequence, TextIO

__all__ = [
    "CircularBuffer",
    "Counter",
    "Odometer",
    "SpinMutex",
    "StartGate",
    "producer",
    "consumer",
    "run_workers",
    "main",
]

DEFAULT_CAPACITY = 20
PRODUCER_ITEMS = 45
CONSUMER_ITEMS = 30
PRODUCER_DELAY = 0.15
CONSUMER_DELAY = 0.3


def _stream(out: Optional[TextIO]) -> TextIO:
    return sys.stdout if out is None else out


class CircularBuffer:
    """A fixed-capacity FIFO that blocks depositors when full and fetchers when empty."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY, out: Optional[TextIO] = None):
        if capacity < 1:
            raise ValueError(f"capacity must be positive, got {capacity}")
        self.capacity = capacity
        self.out = out
        self._items: deque[Any] = deque()
        self._lock = threading.Lock()
        self._not_full = threading.Condition(self._lock)
        self._not_empty = threading.Condition(self._lock)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def deposit(self, data: Any) -> None:
        """Add ``data`` at the rear, waiting while the buffer is full."""
        with self._not_full:
            self._not_full.wait_for(lambda: len(self._items) < self.capacity)
            self._items.append(data)
            print(f"Deposited\t{data} count\t{len(self._items)}", file=_stream(self.out))
            self._not_empty.notify()

    def fetch(self) -> Any:
        """Remove and return the front item, waiting while the buffer is empty."""
        with self._not_empty:
            self._not_empty.wait_for(lambda: len(self._items) > 0)
            result = self._items.popleft()
            print(f"Fetched  \t{result} count\t{len(self._items)}", file=_stream(self.out))
            self._not_full.notify()
            return result


class Counter:
    """A counter shared between threads; atomic unless asked otherwise."""

    def __init__(self, atomic: bool = True):
        self.value = 0
        self._lock: Optional[threading.Lock] = threading.Lock() if atomic else None

    def increment(self) -> None:
        """Add one to the count."""
        if self._lock is None:
            self.value += 1
            return
        with self._lock:
            self.value += 1


class Odometer:
    """Accumulates counts from several threads, one whole batch at a time."""

    def __init__(self) -> None:
        self.counts = 0
        self._lock = threading.Lock()

    def add_counts(self, counts: int) -> None:
        """Add ``counts`` one at a time while holding the lock."""
        with self._lock:
            for _ in range(counts):
                self.counts += 1


class SpinMutex:
    """A mutex that busy-waits for its turn; usable as a context manager."""

    def __init__(self) -> None:
        self._held = False
        self._guard = threading.Lock()

    @property
    def locked(self) -> bool:
        """Whether the mutex is currently held."""
        with self._guard:
            return self._held

    def _try_acquire(self) -> bool:
        with self._guard:
            if self._held:
                return False
            self._held = True
            return True

    def lock(self) -> None:
        """Spin until the mutex is free, then take it."""
        while not self._try_acquire():
            time.sleep(0)

    def unlock(self) -> None:
        """Release the mutex; raise RuntimeError if it is not held."""
        with self._guard:
            if not self._held:
                raise RuntimeError("unlock of a mutex that is not locked")
            self._held = False

    def __enter__(self) -> "SpinMutex":
        self.lock()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.unlock()


class StartGate:
    """Holds threads in ``wait`` until ``release`` is called, immune to spurious wakeups."""

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._open = False

    @property
    def is_open(self) -> bool:
        """Whether the gate has been released."""
        with self._condition:
            return self._open

    def wait(self) -> None:
        """Block until the gate is released."""
        with self._condition:
            self._condition.wait_for(lambda: self._open)

    def release(self) -> None:
        """Open the gate and wake every waiting thread."""
        with self._condition:
            self._open = True
            self._condition.notify_all()


def producer(
    ident: int,
    buffer: CircularBuffer,
    count: int = PRODUCER_ITEMS,
    delay: float = PRODUCER_DELAY,
) -> None:
    """Deposit ``ident``, ``ident + 1``, ... ``count`` times, pausing ``delay`` after each."""
    for offset in range(count):
        buffer.deposit(ident + offset)
        time.sleep(delay)


def consumer(
    ident: int,
    buffer: CircularBuffer,
    count: int = CONSUMER_ITEMS,
    delay: float = CONSUMER_DELAY,
) -> list[Any]:
    """Fetch ``count`` items, pausing ``delay`` after each, and return them."""
    fetched = []
    for _ in range(count):
        fetched.append(buffer.fetch())
        time.sleep(delay)
    return fetched


def run_workers(worker: Callable[[], Any], count: int) -> list[Any]:
    """Run ``worker`` on ``count`` threads at once and return their results in start order.

    If any worker raises, the first such error is raised once all threads finish.
    """
    if count < 0:
        raise ValueError(f"worker count must not be negative, got {count}")
    results: list[Any] = [None] * count
    errors: list[BaseException] = []

    def target(index: int) -> None:
        try:
            results[index] = worker()
        except BaseException as error:  # noqa: BLE001 - reported to the caller
            errors.append(error)

    threads = [threading.Thread(target=target, args=(index,)) for index in range(count)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    if errors:
        raise errors[0]
    return results


def _demo_counter(out: TextIO) -> None:
    counter = Counter()

    def work() -> None:
        for _ in range(100):
            counter.increment()

    run_workers(work, 5)
    print(counter.value, file=out)


def _demo_odometer(out: TextIO) -> None:
    odometer = Odometer()
    run_workers(lambda: odometer.add_counts(1000), 5)
    print(odometer.counts, file=out)


def _demo_gate(out: TextIO, scale: float) -> None:
    gate = StartGate()
    print_lock = threading.Lock()

    def print_id(ident: int) -> None:
        gate.wait()
        with print_lock:
            print(f"Thread {ident}", file=out)

    threads = []
    for ident in range(4):
        time.sleep(0.05 * scale)
        thread = threading.Thread(target=print_id, args=(ident,))
        thread.start()
        threads.append(thread)
    time.sleep(1.0 * scale)
    print("threads ready to race...", file=out)
    gate.release()
    for thread in threads:
        thread.join()


def _demo_buffer(out: TextIO, scale: float) -> None:
    buffer = CircularBuffer(DEFAULT_CAPACITY, out=out)
    threads = [
        threading.Thread(target=consumer, args=(ident, buffer, CONSUMER_ITEMS, CONSUMER_DELAY * scale))
        for ident in range(3)
    ]
    threads += [
        threading.Thread(target=producer, args=(ident, buffer, PRODUCER_ITEMS, PRODUCER_DELAY * scale))
        for ident in (1000, 2000)
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run one of the threading demonstrations."""
    parser = argparse.ArgumentParser(description="Demonstrate thread coordination.")
    parser.add_argument(
        "demo",
        nargs="?",
        default="buffer",
        choices=["buffer", "counter", "odometer", "gate"],
        help="which demonstration to run",
    )
    parser.add_argument(
        "--scale",
        type=float,
        default=1.0,
        help="multiplier applied to every pause",
    )
    args = parser.parse_args(argv)
    if args.scale < 0:
        parser.error("--scale must not be negative")

    out = sys.stdout
    if args.demo == "counter":
        _demo_counter(out)
    elif args.demo == "odometer":
        _demo_odometer(out)
    elif args.demo == "gate":
        _demo_gate(out, args.scale)
    else:
        _demo_buffer(out, args.scale)
    return 0


if __name__ == "__main__":
    sys.exit(main())