"""Emulated sensor hardware that delivers readings to callback objects on a timer."""

from __future__ import annotations

import argparse
import sys
import threading
import time
from abc import ABC, abstractmethod
from typing import Optional, Sequence, TextIO

__all__ = [
    "SensorCallable",
    "HardwareEmulator",
    "SensorReceiver",
    "Node",
    "FireDetector",
    "FireDetectorCamera",
    "FireDetectorPhotodiode",
    "FireDetectorNode",
    "make_fire_detector",
    "main",
]


def _stream(out: Optional[TextIO]) -> TextIO:
    return sys.stdout if out is None else out


class SensorCallable(ABC):
    """Base for anything that receives sensor readings."""

    @abstractmethod
    def callback(self, value: int) -> None:
        """Handle one sensor reading."""


class HardwareEmulator:
    """Calls ``callback_object.callback`` with 0, 1, 2, ... once per ``interval`` seconds.

    The emulator starts on construction unless ``autostart`` is false, and can
    be used as a context manager that stops it on exit.
    """

    def __init__(
        self,
        callback_object: SensorCallable,
        interval: float = 1.0,
        out: Optional[TextIO] = None,
        autostart: bool = True,
    ):
        self.callback_object = callback_object
        self.interval = interval
        self.out = out
        self._stopping = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._next_value = 0
        if autostart:
            self.start()

    @property
    def running(self) -> bool:
        """Whether the timer thread is alive."""
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        """Start delivering readings on a background thread."""
        if self.running:
            raise RuntimeError("hardware emulator is already running")
        self._stopping.clear()
        self._thread = threading.Thread(target=self._run_timer, daemon=True)
        self._thread.start()
        print("Started hardware emulator", file=_stream(self.out))

    def stop(self) -> None:
        """Stop delivering readings and wait for the timer thread to finish."""
        self._stopping.set()
        if self._thread is not None and self._thread is not threading.current_thread():
            self._thread.join()
        self._thread = None
        print("Stopped hardware emulator", file=_stream(self.out))

    def _run_timer(self) -> None:
        while not self._stopping.wait(self.interval):
            self.callback_object.callback(self._next_value)
            self._next_value += 1

    def __enter__(self) -> "HardwareEmulator":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()


class SensorReceiver(SensorCallable):
    """Prints every reading it receives."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out

    def callback(self, value: int) -> None:
        print(f"SensorReceiver got value {value}", file=_stream(self.out))


class Node:
    """A minimal stand-in for a messaging node that publishes by printing."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out

    def publish(self, message: str) -> None:
        """Publish ``message``."""
        print(message, file=_stream(self.out))


class FireDetector(SensorCallable):
    """A fire detector that keeps the history of readings it has handled."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out
        self.history: list[int] = []
        self._lock = threading.Lock()
        print("FireDetector created", file=_stream(out))

    def track_history(self, value: int) -> None:
        """Record a reading."""
        with self._lock:
            self.history.append(value)


class FireDetectorCamera(FireDetector):
    """A camera-based fire detector."""

    def callback(self, value: int) -> None:
        print(f"Fire detector camera got value: {value}", file=_stream(self.out))
        self.track_history(value)


class FireDetectorPhotodiode(FireDetector):
    """A photodiode-based fire detector."""

    def callback(self, value: int) -> None:
        print(f"Fire detector photodiode got value: {value}", file=_stream(self.out))
        self.track_history(value)


_DETECTORS = {
    0: FireDetectorCamera,
    1: FireDetectorPhotodiode,
}


def make_fire_detector(choice: int, out: Optional[TextIO] = None) -> FireDetector:
    """Create a detector: 0 for camera-based, 1 for photodiode-based."""
    try:
        detector_type = _DETECTORS[choice]
    except (KeyError, TypeError):
        raise ValueError(f"invalid fire detector choice {choice!r}") from None
    return detector_type(out)


class FireDetectorNode(Node):
    """A node whose fire detector hardware is chosen at run time."""

    def __init__(self, choice: int, out: Optional[TextIO] = None):
        super().__init__(out)
        self.detector = make_fire_detector(choice, out)


def _ask_choice() -> int:
    print("Enter 0 for camera-based fire detection, 1 for photodiode-based")
    reply = sys.stdin.readline().strip()
    try:
        return int(reply)
    except ValueError:
        raise ValueError(f"invalid fire detector choice {reply!r}") from None


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run a fire detector node, or a plain receiver, against emulated hardware."""
    parser = argparse.ArgumentParser(description="Feed emulated sensor readings to a node.")
    parser.add_argument(
        "choice",
        nargs="?",
        type=int,
        help="0 for camera-based, 1 for photodiode-based; asked for when omitted",
    )
    parser.add_argument("--plain", action="store_true", help="use a plain printing receiver")
    parser.add_argument("--seconds", type=float, default=5.0, help="how long to run")
    parser.add_argument("--interval", type=float, default=1.0, help="seconds between readings")
    args = parser.parse_args(argv)

    if args.plain:
        receiver: SensorCallable = SensorReceiver()
    else:
        choice = _ask_choice() if args.choice is None else args.choice
        try:
            receiver = FireDetectorNode(choice).detector
        except ValueError as error:
            print(f"Error: {error}", file=sys.stderr)
            return 1

    with HardwareEmulator(receiver, interval=args.interval):
        time.sleep(args.seconds)
    return 0


if __name__ == "__main__":
    sys.exit(main())