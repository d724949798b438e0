"""Named driving styles with range checking."""

from __future__ import annotations

import argparse
import sys
from enum import IntEnum
from typing import Optional, Sequence, TextIO

__all__ = ["DrivingStyle", "Car", "main"]


class DrivingStyle(IntEnum):
    """The ways a car can be driven."""

    FAST = 0
    SLOW = 1
    SIDEWAYS = 2


class Car:
    """A car that reports the style it is driven in."""

    def __init__(self, out: Optional[TextIO] = None):
        self.out = out

    def drive(self, style: int) -> DrivingStyle:
        """Drive in ``style``, printing its number; raise ValueError if out of range."""
        try:
            checked = DrivingStyle(style)
        except ValueError:
            raise ValueError(f"invalid driving style {style!r}") from None
        stream = sys.stdout if self.out is None else self.out
        print(int(checked), file=stream)
        return checked


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Drive fast, then attempt a style just below the valid range."""
    parser = argparse.ArgumentParser(description="Demonstrate range-checked driving styles.")
    parser.parse_args(argv)

    car = Car()
    try:
        car.drive(DrivingStyle.FAST)
        car.drive(DrivingStyle.FAST - 1)
    except ValueError as error:
        print(error, file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())