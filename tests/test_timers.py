"""Tests for the game-time scheduler."""

from __future__ import annotations

import pytest

from game.rescue.timers import Scheduler


class TestCallLater:
    def test_fires_once_when_due(self):
        s = Scheduler()
        hits = []
        s.call_later(1.0, lambda: hits.append(s.time))

        s.advance(0.5)
        assert hits == []
        s.advance(0.5)
        assert hits == [1.0]
        s.advance(10.0)
        assert hits == [1.0]
        assert s.pending == 0

    def test_rejects_non_positive_delay(self):
        s = Scheduler()
        with pytest.raises(ValueError):
            s.call_later(0, lambda: None)
        with pytest.raises(ValueError):
            s.call_every(-1, lambda: None)

    def test_fires_in_due_order(self):
        s = Scheduler()
        order = []
        s.call_later(2.0, lambda: order.append("b"))
        s.call_later(1.0, lambda: order.append("a"))
        s.call_later(3.0, lambda: order.append("c"))
        s.advance(5.0)
        assert order == ["a", "b", "c"]

    def test_self_rescheduling_chain_has_no_drift(self):
        s = Scheduler()
        fired_at = []

        def chain():
            fired_at.append(s.time)
            s.call_later(0.75, chain)

        s.call_later(0.75, chain)
        # One big step covers several links of the chain
        s.advance(3.0)
        assert fired_at == [0.75, 1.5, 2.25, 3.0]

    def test_negative_dt_rejected(self):
        with pytest.raises(ValueError):
            Scheduler().advance(-0.1)


class TestCallEvery:
    def test_fires_once_per_interval(self):
        s = Scheduler()
        ticks = []
        s.call_every(1.0, lambda: ticks.append(s.time))
        for _ in range(7):
            s.advance(0.5)
        assert ticks == [1.0, 2.0, 3.0]

    def test_catches_up_after_large_step(self):
        s = Scheduler()
        ticks = []
        s.call_every(1.0, lambda: ticks.append(s.time))
        fired = s.advance(4.0)
        assert fired == 4
        assert ticks == [1.0, 2.0, 3.0, 4.0]
        assert s.time == 4.0


class TestCancellation:
    def test_cancelled_timer_never_fires(self):
        s = Scheduler()
        hits = []
        t = s.call_later(1.0, lambda: hits.append(1))
        t.cancel()
        s.advance(2.0)
        assert hits == []

    def test_periodic_cancel_from_inside_callback(self):
        s = Scheduler()
        ticks = []

        def tick():
            ticks.append(s.time)
            if len(ticks) == 2:
                timer.cancel()

        timer = s.call_every(1.0, tick)
        s.advance(10.0)
        assert ticks == [1.0, 2.0]

    def test_cancel_all_drops_due_callbacks(self):
        s = Scheduler()
        hits = []

        def first():
            hits.append("first")
            s.cancel_all()

        s.call_later(1.0, first)
        s.call_later(1.5, lambda: hits.append("second"))
        s.call_every(0.25, lambda: hits.append("tick"))
        s.advance(2.0)
        # first (scheduled earlier) wins the tie with the 1.0 tick
        assert hits == ["tick", "tick", "tick", "first"]
        assert s.pending == 0

    def test_cancel_all_from_periodic_callback_stops_it(self):
        s = Scheduler()
        ticks = []

        def tick():
            ticks.append(s.time)
            s.cancel_all()

        s.call_every(1.0, tick)
        s.advance(5.0)
        assert ticks == [1.0]
        assert s.pending == 0
