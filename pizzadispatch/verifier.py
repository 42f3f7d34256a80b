"""Check an event log from the delivery simulation for ordering and match errors."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass, field
from typing import Iterable, Sequence

from .events import Location


class VerificationError(Exception):
    """Raised when an event log breaks the delivery protocol."""

    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self) -> str:
        if self.line is None:
            return self.message
        return f"{self.message}\nLINE = {self.line}"


@dataclass
class Participant:
    """A driver or customer as reconstructed from the log."""

    id: int
    location: Location = field(default_factory=lambda: Location(0, 0))
    match: int = 0
    state: str = ""


def _token(tokens: Sequence[str], index: int) -> str:
    return tokens[index] if index < len(tokens) else ""


class Verifier:
    """Replays log lines one at a time and tracks every participant's state."""

    def __init__(self) -> None:
        self.drivers: dict[int, Participant] = {}
        self.customers: dict[int, Participant] = {}
        self.ready_drivers: dict[int, Participant] = {}
        self.ready_customers: dict[int, Participant] = {}
        self.line_number = 1

    def _fail(self, message: str) -> VerificationError:
        return VerificationError(message, self.line_number)

    def _number(self, text: str) -> int:
        try:
            return int(text)
        except ValueError:
            raise self._fail(f"MALFORMED NUMBER {text!r}") from None

    def _location(self, text: str) -> Location:
        inner = text[1:-1]
        parts = inner.split(",")
        try:
            if len(parts) != 2:
                raise ValueError
            return Location(int(parts[0]), int(parts[1]))
        except ValueError:
            raise self._fail(f"MALFORMED LOCATION {text!r}") from None

    def feed(self, line: str) -> None:
        """Process one log line; raise VerificationError if it is out of order."""
        tokens = line.split()
        role = _token(tokens, 0)
        if role == "driver":
            self._driver_event(tokens)
        elif role == "customer":
            self._customer_event(tokens)
        self.line_number += 1

    def _driver_event(self, tokens: Sequence[str]) -> None:
        verb = _token(tokens, 2)
        if verb == "ready":
            number = self._number(_token(tokens, 1))
            driver = self.drivers.get(number)
            if driver is None:
                driver = Participant(number, state="ready")
                self.drivers[number] = driver
                self.ready_drivers[number] = driver
            elif driver.state != "paid":
                raise self._fail(f"ERROR: DRIVER {number} READY BEFORE GETTING PAID")
            else:
                driver.location = self._location(_token(tokens, 4))
                driver.state = "ready"
                self.ready_drivers[number] = driver
        elif verb == "driving":
            number = self._number(_token(tokens, 1))
            driver = self.drivers.get(number)
            if driver is None:
                raise self._fail(f"DRIVER {number} DRIVING BEFORE DECLARING READY.")
            if driver.state != "matched":
                raise self._fail(f"DRIVER {number} DRIVING BEFORE MATCHED.")
            driver.state = "driving"
            target = self.customers.setdefault(driver.match, Participant(driver.match))
            target.state = "drivento"

    def _customer_event(self, tokens: Sequence[str]) -> None:
        number = self._number(_token(tokens, 1))
        verb = _token(tokens, 2)
        customer = self.customers.get(number)
        if verb == "requests":
            location = None
            if customer is None:
                location = self._location(_token(tokens, 5))
                customer = Participant(number, location=location, state="ready")
                self.customers[number] = customer
            elif customer.state != "paid":
                raise self._fail(f"CUSTOMER {number} READY BEFORE PAYING")
            else:
                customer.location = self._location(_token(tokens, 5))
                customer.state = "ready"
            self.ready_customers[number] = customer
        elif verb == "matched":
            driver_number = self._number(_token(tokens, 5))
            if customer is None:
                raise self._fail(
                    f"CUSTOMER {number} MATCHING BEFORE DECLARING READY."
                )
            if customer.state != "ready":
                raise self._fail(f"CUSTOMER {number} MATCHED BEFORE BEING READY")
            candidate = self.ready_drivers.get(driver_number, Participant(driver_number))
            self.check_location(candidate, self.ready_customers[number])
            customer.match = driver_number
            driver = self.drivers.setdefault(driver_number, Participant(driver_number))
            driver.match = number
            customer.state = "matched"
            driver.state = "matched"
            self.ready_customers.pop(number, None)
            self.ready_drivers.pop(driver_number, None)
        elif verb == "pays":
            driver_number = self._number(_token(tokens, 4))
            if customer is None:
                raise self._fail(f"CUSTOMER {number} PAYING BEFORE DECLARING READY.")
            if customer.state != "drivento":
                raise self._fail(
                    f"CUSTOMER {number} PAID BEFORE BEING DRIVEN TO / MATCHING"
                )
            customer.state = "paid"
            driver = self.drivers.setdefault(driver_number, Participant(driver_number))
            driver.state = "paid"

    def check_location(self, driver: Participant, customer: Participant) -> None:
        """Raise if a ready driver or customer was closer than the chosen pair."""
        best = driver.location.distance(customer.location)
        for other in self.ready_drivers.values():
            if other.location.distance(customer.location) < best:
                raise self._fail(
                    "MATCH WAS INCORRECT. CUSTOMER SHOULD HAVE MATCHED WITH DRIVER "
                    f"{other.id}"
                )
        for other in self.ready_customers.values():
            if other.location.distance(driver.location) < best:
                raise self._fail(
                    "MATCH WAS INCORRECT. DRIVER SHOULD HAVE MATCHED WITH CUSTOMER "
                    f"{other.id}"
                )

    def finish(self) -> None:
        """Check that every customer has paid and every driver ended ready."""
        for number in range(len(self.customers)):
            customer = self.customers.get(number)
            if customer is None or customer.state != "paid":
                raise VerificationError(f"CUSTOMER {number} HAS NOT ENDED.")
        for number in range(len(self.drivers)):
            driver = self.drivers.get(number)
            if driver is None or driver.state != "ready":
                raise VerificationError(f"DRIVER {number} DID NOT END READY.")


def verify_lines(lines: Iterable[str]) -> Verifier:
    """Verify a whole log; return the final verifier state."""
    verifier = Verifier()
    for line in lines:
        verifier.feed(line)
    verifier.finish()
    return verifier


def verify_file(path) -> Verifier:
    """Verify the log stored in a file."""
    with open(path, encoding="utf-8") as handle:
        return verify_lines(line.rstrip("\n") for line in handle)


def main(argv: Sequence[str] | None = None) -> int:
    """Verify a log file; print the outcome and return an exit status."""
    parser = argparse.ArgumentParser(
        prog="pizzadispatch-verify", description="Check a delivery event log."
    )
    parser.add_argument("log", help="event log to check")
    args = parser.parse_args(argv)
    try:
        verify_file(args.log)
    except VerificationError as exc:
        print(exc)
        return 1
    except OSError as exc:
        print(exc, file=sys.stderr)
        return 1
    print("all done!")
    return 0