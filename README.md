# pizzadispatch

A small threaded simulation of a pizza delivery service, plus a tool that
checks the event log a run produces.

Each driver and each customer runs in its own thread. Customers request pizza
at a sequence of locations read from a file; drivers declare themselves ready
at their current location. A dispatcher pairs a ready customer with a ready
driver only when no other ready driver is closer to that customer and no other
ready customer is closer to that driver, by Manhattan (rectangular) distance.
The driver then drives to the customer, the customer pays, and both go round
again until every customer has run out of locations.

## Installing

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## Running a simulation

```
pizza-dispatch NUM_DRIVERS [CUSTOMER_FILE ...]
```

`NUM_DRIVERS` is the number of driver threads and must not be negative. Every
driver starts at `(0,0)`. Each customer file describes one customer: one
location per line, given as two integers between 0 and 4294967295 separated by
whitespace (anything after the second number on a line is ignored). Blank
lines are skipped. Customers are numbered from 0 in the order their files are
given.

The command stops with a usage error if a file cannot be read, a line does not
hold two valid coordinates, or customers have requests but there are no
drivers.

Example customer file:

```
3 4
10 2
0 7
```

The run prints one line per event to standard output, for example:

```
driver 0 ready at (0,0)
customer 0 requests pizza at (3,4)
customer 0 matched with driver 0
driver 0 driving from (0,0) to (3,4)
customer 0 pays driver 0
driver 0 ready at (3,4)
```

Once every customer has finished, each driver reports itself ready one last
time and the run ends.

## Verifying a log

Save the output of a run and check it:

```
pizza-dispatch 2 alice.txt bob.txt > run.log
pizza-verify run.log
```

The verifier replays the log line by line (lines that start with neither
`driver` nor `customer` are ignored) and checks that:

- a driver is not ready again before being paid, and a customer does not
  request again before paying;
- nobody is matched, driven to, or pays out of turn;
- at each match, no ready driver is closer to the customer and no ready
  customer is closer to the driver than the matched pair are to each other;
- at the end, customers `0..n-1` have all paid and drivers `0..m-1` are all
  ready.

On a valid log it prints `all done!` and exits with status 0. Otherwise it
prints what went wrong, followed by `LINE = <n>` for errors found while
replaying, and exits with status 1. A file that cannot be opened is reported
on standard error, also with status 1.

## Using it as a library

- `pizzadispatch.events`: `Location` (a frozen dataclass with unsigned 32-bit
  `x` and `y` and a `distance` method), `format_location`, and `Reporter`,
  which writes the event lines to a given stream (standard output by default)
  under a lock.
- `pizzadispatch.delivery`: `parse_location`, `read_customer_file`, and
  `DeliverySystem(num_drivers, requests, reporter=None)`. Its `run` method
  carries out a whole simulation; `match_once` makes at most one match among
  the currently ready participants and returns the `(customer, driver)` pair
  or `None`. `main(argv=None)` is the `pizza-dispatch` command.
- `pizzadispatch.verifier`: `Verifier` (with `feed`, `check_location` and
  `finish`), `Participant`, `verify_lines`, `verify_file`, and the
  `VerificationError` raised when a log breaks a rule; its `line` attribute
  holds the offending line number, or `None` for end-of-log checks.
  `main(argv=None)` is the `pizza-verify` command.

```python
import io
from pizzadispatch.delivery import DeliverySystem
from pizzadispatch.events import Location, Reporter
from pizzadispatch.verifier import verify_lines

out = io.StringIO()
DeliverySystem(1, [[Location(3, 4)]], Reporter(out)).run()
verify_lines(out.getvalue().splitlines())
```

## What it does not do

Scheduling is left to Python's threads, so the order of events, and which
pairs get matched, can differ from run to run; there is no option for a
repeatable schedule. Events are only printed, not stored.