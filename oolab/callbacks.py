"""A camera that notifies registered callbacks when a new frame arrives."""

from __future__ import annotations

import argparse
import sys
from typing import Callable, Optional, Sequence, TextIO, Union

__all__ = ["FRAME_VALUE", "Camera", "CameraUser", "Logger", "main"]

FRAME_VALUE = 3

Callback = Callable[[int], object]


def _stream(out: Optional[TextIO]) -> TextIO:
    return sys.stdout if out is None else out


class Camera:
    """Calls every registered callback, in registration order, on each new frame.

    A callback may be any callable taking one integer, or an object with a
    ``callback`` method.
    """

    def __init__(self, *callbacks: Union[Callback, object]):
        self._callbacks: list[Callback] = []
        for callback in callbacks:
            self.register_callback(callback)

    def register_callback(self, callback: Union[Callback, object]) -> None:
        """Add ``callback`` to those notified of new frames."""
        method = getattr(callback, "callback", None)
        if callable(method):
            self._callbacks.append(method)
        elif callable(callback):
            self._callbacks.append(callback)
        else:
            raise TypeError(f"{callback!r} is not callable and has no callback method")

    def clear_callbacks(self) -> None:
        """Forget every registered callback."""
        self._callbacks.clear()

    def new_frame(self) -> None:
        """Signal the arrival of a frame to every registered callback."""
        for callback in self._callbacks:
            callback(FRAME_VALUE)


class CameraUser:
    """Receives frame notifications and keeps the parameters it was given."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out
        self.received: list[int] = []

    def callback(self, param: int) -> None:
        self.received.append(param)
        print(f"CameraUser CB, param: {param}", file=_stream(self.out))


class Logger:
    """Logs frame notifications and keeps the parameters it was given."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out
        self.received: list[int] = []

    def callback(self, param: int) -> None:
        self.received.append(param)
        print(f"Logger CB, param: {param}", file=_stream(self.out))


def _callback1(param: int) -> None:
    print(f"Callback1 got called, param: {param}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Demonstrate function, single-object and multi-object callbacks."""
    parser = argparse.ArgumentParser(description="Demonstrate camera frame callbacks.")
    parser.parse_args(argv)

    notify = _callback1
    notify(42)
    Camera(_callback1).new_frame()

    Camera(CameraUser()).new_frame()

    camera = Camera()
    camera.register_callback(CameraUser())
    camera.register_callback(Logger())
    camera.new_frame()
    return 0


if __name__ == "__main__":
    sys.exit(main())