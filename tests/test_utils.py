"""Formatting helpers, the request gate, throttling and the debug log."""

import time

from plotTwist import settings
from plotTwist.utils import (
    LatestRequestGate, format_currency, format_runtime, format_year,
    log_debug, throttle,
)


def test_format_runtime():
    assert format_runtime(135) == "2h 15m"
    assert format_runtime(45) == "0h 45m"
    assert format_runtime(None) == "N/A"
    assert format_runtime(0) == "N/A"


def test_format_currency():
    assert format_currency(160000000) == "$160,000,000"
    assert format_currency(0) == "N/A"
    assert format_currency(None) == "N/A"


def test_format_year():
    assert format_year(2010) == "2010"
    assert format_year(None) == "N/A"


def test_gate_only_latest_ticket_is_current():
    gate = LatestRequestGate()
    first = gate.next()
    second = gate.next()
    assert not gate.is_current(first)
    assert gate.is_current(second)


def test_gate_cancel_invalidates_outstanding_ticket():
    gate = LatestRequestGate()
    ticket = gate.next()
    gate.cancel()
    assert not gate.is_current(ticket)
    assert gate.is_current(gate.next())


def test_throttle_zero_delay_never_sleeps(monkeypatch):
    slept = []
    monkeypatch.setattr(time, "sleep", slept.append)

    @throttle(min_delay=0)
    def ping(x):
        return x

    assert [ping(n) for n in range(5)] == [0, 1, 2, 3, 4]
    assert slept == []


def test_throttle_spaces_back_to_back_calls(monkeypatch):
    slept = []
    monkeypatch.setattr(time, "sleep", slept.append)

    @throttle(min_delay=5, jitter=0)
    def ping():
        return "pong"

    assert ping() == "pong"
    assert ping() == "pong"
    assert len(slept) == 1
    assert 0 < slept[0] <= 5


def test_log_debug_appends_timestamped_lines():
    log_debug("first")
    log_debug("second")
    lines = settings.LOG_PATH.read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("[") and lines[0].endswith("] first")
    assert lines[1].endswith("] second")
