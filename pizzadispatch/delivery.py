"""Concurrent pizza delivery: driver and customer threads plus a matcher."""

from __future__ import annotations

import argparse
import threading
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .events import Location, Reporter


def parse_location(text: str) -> Location:
    """Parse a request line holding two whitespace-separated coordinates."""
    fields = text.split()
    if len(fields) < 2:
        raise ValueError(f"expected two coordinates in {text!r}")
    try:
        x, y = int(fields[0]), int(fields[1])
    except ValueError as exc:
        raise ValueError(f"invalid coordinates in {text!r}") from exc
    return Location(x, y)


def read_customer_file(path) -> list[Location]:
    """Read one customer's requests, skipping blank lines."""
    with open(path, encoding="utf-8") as handle:
        return [parse_location(line) for line in handle if line.strip()]


@dataclass
class _DriverState:
    wakeup: threading.Condition
    location: Location = field(default_factory=lambda: Location(0, 0))
    match: int = 0
    awaiting_match: bool = False
    awaiting_pay: bool = False


@dataclass
class _CustomerState:
    wakeup: threading.Condition
    requests: list[Location]
    location: Location = field(default_factory=lambda: Location(0, 0))
    match: int = 0
    awaiting_pizza: bool = False


class DeliverySystem:
    """Matches ready customers to ready drivers until every request is served."""

    def __init__(
        self,
        num_drivers: int,
        requests: Iterable[Sequence[Location]],
        reporter: Reporter | None = None,
    ) -> None:
        if num_drivers < 0:
            raise ValueError("number of drivers must not be negative")
        request_lists = [list(r) for r in requests]
        if num_drivers == 0 and any(request_lists):
            raise ValueError("customers have requests but there are no drivers")
        self.reporter = reporter if reporter is not None else Reporter()
        self._lock = threading.Lock()
        self._matcher_wakeup = threading.Condition(self._lock)
        self.drivers = [
            _DriverState(threading.Condition(self._lock)) for _ in range(num_drivers)
        ]
        self.customers = [
            _CustomerState(threading.Condition(self._lock), r) for r in request_lists
        ]
        self.ready_drivers: list[int] = []
        self.ready_customers: list[int] = []
        self.active_customers = len(self.customers)

    def run(self) -> None:
        """Start all participant threads, match until done, then join them."""
        threads = [
            threading.Thread(target=self.driver_sequence, args=(d,), name=f"driver-{d}")
            for d in range(len(self.drivers))
        ] + [
            threading.Thread(
                target=self.customer_sequence, args=(c,), name=f"customer-{c}"
            )
            for c in range(len(self.customers))
        ]
        for t in threads:
            t.start()
        while True:
            with self._lock:
                while self.active_customers > 0 and not (
                    self.ready_customers and self.ready_drivers
                ):
                    self._matcher_wakeup.wait()
                if self.active_customers == 0:
                    break
                self._match_locked()
        for t in threads:
            t.join()

    def _wake_matcher(self) -> None:
        if self.ready_customers and self.ready_drivers:
            self._matcher_wakeup.notify()

    def driver_sequence(self, driver: int) -> None:
        """Body of a driver thread: ready up, deliver, collect payment, repeat."""
        state = self.drivers[driver]
        while True:
            with self._lock:
                self.reporter.driver_ready(driver, state.location)
                if self.active_customers == 0:
                    return
                self.ready_drivers.append(driver)
                self._wake_matcher()
                state.awaiting_match = True
                while state.awaiting_match and self.active_customers > 0:
                    state.wakeup.wait()
                if state.awaiting_match:
                    # Every customer finished while this driver sat idle.
                    state.awaiting_match = False
                    return
                start = state.location
                customer = state.match
                end = self.customers[customer].location

            self.reporter.drive(driver, start, end)

            with self._lock:
                target = self.customers[customer]
                state.location = target.location
                target.awaiting_pizza = False
                target.wakeup.notify()
                state.awaiting_pay = True
                while state.awaiting_pay:
                    state.wakeup.wait()

    def customer_sequence(self, customer: int) -> None:
        """Body of a customer thread: request, wait for the pizza, pay, repeat."""
        state = self.customers[customer]
        for location in state.requests:
            with self._lock:
                state.location = location
                self.reporter.customer_ready(customer, location)
                self.ready_customers.append(customer)
                self._wake_matcher()
                state.awaiting_pizza = True
                while state.awaiting_pizza:
                    state.wakeup.wait()
                driver = state.match
                self.reporter.pay(customer, driver)
                paid = self.drivers[driver]
                paid.awaiting_pay = False
                paid.wakeup.notify()
        with self._lock:
            self.active_customers -= 1
            if self.active_customers == 0:
                self._matcher_wakeup.notify_all()
                for waiting in self.drivers:
                    waiting.wakeup.notify_all()

    def match_once(self) -> tuple[int, int] | None:
        """Make at most one customer/driver match; return the pair or None."""
        with self._lock:
            return self._match_locked()

    def _match_locked(self) -> tuple[int, int] | None:
        if not (self.ready_customers and self.ready_drivers):
            return None
        for c_index, customer in enumerate(self.ready_customers):
            target = self.customers[customer].location
            d_index, driver = min(
                enumerate(self.ready_drivers),
                key=lambda item: self.drivers[item[1]].location.distance(target),
            )
            driver_location = self.drivers[driver].location
            best = driver_location.distance(target)
            if any(
                self.customers[other].location.distance(driver_location) < best
                for other in self.ready_customers
            ):
                continue
            self.reporter.match(customer, driver)
            self.drivers[driver].match = customer
            self.customers[customer].match = driver
            self.drivers[driver].awaiting_match = False
            self.drivers[driver].wakeup.notify()
            del self.ready_customers[c_index]
            del self.ready_drivers[d_index]
            return customer, driver
        return None


def _count(value: str) -> int:
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"not a number: {value!r}") from exc
    if number < 0:
        raise argparse.ArgumentTypeError("must not be negative")
    return number


def main(argv: Sequence[str] | None = None) -> int:
    """Run the simulation: a driver count followed by one file per customer."""
    parser = argparse.ArgumentParser(
        prog="pizzadispatch", description="Simulate concurrent pizza delivery."
    )
    parser.add_argument("drivers", type=_count, help="number of drivers")
    parser.add_argument("customer_files", nargs="*", help="one request file per customer")
    args = parser.parse_args(argv)
    try:
        requests = [read_customer_file(path) for path in args.customer_files]
        system = DeliverySystem(args.drivers, requests, Reporter())
    except (OSError, ValueError) as exc:
        parser.error(str(exc))
    system.run()
    return 0