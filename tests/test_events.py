import io
import threading

import pytest

from pizzadispatch.events import COORDINATE_MAX, Location, Reporter, format_location


def test_format_location_pinned():
    assert format_location(Location(3, 4)) == "(3,4)"


def test_str_uses_format_location():
    loc = Location(12, 99)
    assert str(loc) == format_location(loc)


@pytest.mark.parametrize("x,y", [(-1, 0), (0, -5), (COORDINATE_MAX + 1, 0)])
def test_location_out_of_range(x, y):
    with pytest.raises(ValueError):
        Location(x, y)


def test_location_accepts_extremes():
    loc = Location(0, COORDINATE_MAX)
    assert loc.y == COORDINATE_MAX


def test_distance_to_self_is_zero():
    loc = Location(17, 23)
    assert loc.distance(loc) == 0


def test_distance_symmetric():
    a, b = Location(1, 50), Location(40, 2)
    assert a.distance(b) == b.distance(a)


def test_distance_along_axis():
    assert Location(0, 0).distance(Location(25, 0)) == 25
    assert Location(0, 9).distance(Location(0, 0)) == 9


def test_distance_no_overflow_at_extremes():
    a = Location(0, 0)
    b = Location(COORDINATE_MAX, COORDINATE_MAX)
    assert a.distance(b) == 2 * COORDINATE_MAX


def test_triangle_inequality():
    a, b, c = Location(3, 8), Location(20, 1), Location(7, 7)
    assert a.distance(c) <= a.distance(b) + b.distance(c)


def _lines(stream):
    return stream.getvalue().splitlines()


def test_driver_ready_line():
    out = io.StringIO()
    loc = Location(5, 6)
    Reporter(out).driver_ready(2, loc)
    assert _lines(out) == [f"driver 2 ready at {format_location(loc)}"]


def test_drive_line():
    out = io.StringIO()
    start, end = Location(0, 0), Location(8, 9)
    Reporter(out).drive(1, start, end)
    assert _lines(out)[0].split() == [
        "driver", "1", "driving", "from",
        format_location(start), "to", format_location(end),
    ]


def test_customer_ready_line():
    out = io.StringIO()
    loc = Location(4, 4)
    Reporter(out).customer_ready(3, loc)
    assert _lines(out)[0].split() == [
        "customer", "3", "requests", "pizza", "at", format_location(loc),
    ]


def test_pay_and_match_lines():
    out = io.StringIO()
    reporter = Reporter(out)
    reporter.match(0, 1)
    reporter.pay(0, 1)
    lines = _lines(out)
    assert lines[0].split() == ["customer", "0", "matched", "with", "driver", "1"]
    assert lines[1].split() == ["customer", "0", "pays", "driver", "1"]


def test_default_stream_is_stdout(capsys):
    Reporter().pay(7, 8)
    assert capsys.readouterr().out.split() == ["customer", "7", "pays", "driver", "8"]


def test_concurrent_writes_keep_lines_whole():
    out = io.StringIO()
    reporter = Reporter(out)

    def worker(n):
        for _ in range(50):
            reporter.pay(n, n)

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    lines = _lines(out)
    assert len(lines) == 200
    assert all(len(line.split()) == 5 for line in lines)