"""Locations and the event log written by the delivery simulation."""

from __future__ import annotations

import sys
import threading
from dataclasses import dataclass
from typing import TextIO

COORDINATE_MAX = 2**32 - 1


@dataclass(frozen=True)
class Location:
    """A point on the delivery grid with unsigned 32-bit coordinates."""

    x: int
    y: int

    def __post_init__(self) -> None:
        for value in (self.x, self.y):
            if not 0 <= value <= COORDINATE_MAX:
                raise ValueError(
                    f"coordinate {value} outside 0..{COORDINATE_MAX}"
                )

    def distance(self, other: Location) -> int:
        """Rectilinear (Manhattan) distance to another location."""
        return abs(self.x - other.x) + abs(self.y - other.y)

    def __str__(self) -> str:
        return format_location(self)


def format_location(location: Location) -> str:
    """Render a location the way it appears in the event log."""
    return f"({location.x},{location.y})"


class Reporter:
    """Writes one line per delivery event; safe to share between threads."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self._lock = threading.Lock()

    def _emit(self, text: str) -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        with self._lock:
            stream.write(text + "\n")
            stream.flush()

    def driver_ready(self, driver: int, location: Location) -> None:
        self._emit(f"driver {driver} ready at {format_location(location)}")

    def drive(self, driver: int, start: Location, end: Location) -> None:
        self._emit(
            f"driver {driver} driving from {format_location(start)}"
            f" to {format_location(end)}"
        )

    def customer_ready(self, customer: int, location: Location) -> None:
        self._emit(
            f"customer {customer} requests pizza at {format_location(location)}"
        )

    def pay(self, customer: int, driver: int) -> None:
        self._emit(f"customer {customer} pays driver {driver}")

    def match(self, customer: int, driver: int) -> None:
        self._emit(f"customer {customer} matched with driver {driver}")