"""
TEST: Section Queries
=====================

Three sequential queries must produce three records in call order, with
non-decreasing timestamps and unique identifiers.
"""

import logging
from datetime import datetime, timedelta

import pytest

from rodcraft.sections import SectionQueryCalculator


def fixed_clock(*times):
    it = iter(times)
    return lambda: next(it)


def test_three_queries_in_call_order(two_rod_result):
    calc = SectionQueryCalculator(two_rod_result.rods)

    r1 = calc.query(0, 1.0)
    r2 = calc.query(1, 0.42)
    r3 = calc.query(1, 1.0)

    history = calc.get_history()
    assert history == (r1, r2, r3)
    assert len(calc) == 3
    assert len({r.id for r in history}) == 3
    assert all(a.timestamp <= b.timestamp for a, b in zip(history, history[1:]))

    assert r1.N == pytest.approx(1000.0)
    assert r1.u == pytest.approx(5e-7)
    assert r2.u == pytest.approx(2.1025e-6)
    assert r3.sigma == pytest.approx(-1.45e6)
    print("✓ 3 records, call order, unique ids, monotonic timestamps")


def test_timestamps_never_go_backwards(two_rod_result):
    t0 = datetime(2025, 1, 1, 12, 0, 0)
    clock = fixed_clock(t0, t0 - timedelta(seconds=5), t0 + timedelta(seconds=1))
    calc = SectionQueryCalculator(two_rod_result.rods, clock=clock)

    stamps = [calc.query(0, 0.5).timestamp for _ in range(3)]

    assert stamps == [t0, t0, t0 + timedelta(seconds=1)]


def test_history_snapshot_and_clear(two_rod_result):
    calc = SectionQueryCalculator(two_rod_result.rods)
    calc.query(0, 0.0)
    snapshot = calc.get_history()

    calc.query(0, 2.0)
    assert len(snapshot) == 1
    assert len(calc.get_history()) == 2

    calc.clear()
    assert calc.get_history() == ()
    assert len(calc) == 0


def test_unknown_rod_raises(two_rod_result):
    calc = SectionQueryCalculator(two_rod_result.rods)
    with pytest.raises(KeyError):
        calc.query(7, 0.5)
    assert len(calc) == 0


def test_out_of_range_x_extrapolates_with_warning(two_rod_result, caplog):
    calc = SectionQueryCalculator(two_rod_result.rods)

    with caplog.at_level(logging.WARNING):
        record = calc.query(0, 3.0)

    assert record.u == pytest.approx(1.5e-6)
    assert any("outside rod 0" in r.getMessage() for r in caplog.records)
