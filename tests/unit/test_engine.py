"""Tests for the tick-driven SimulationEngine."""

from __future__ import annotations

import logging
import random

import pytest

from tellersim.core.errors import (
    EngineAbortedError,
    InvalidConfigurationError,
    TellerBusyError,
)
from tellersim.engine import SimulationEngine, new_engine
from tellersim.instrumentation.summary import Assignment


def run_ticks(engine: SimulationEngine, arrivals: list[int]):
    return [engine.tick(tick, duration) for tick, duration in enumerate(arrivals, start=1)]


class TestConstruction:

    def test_creates_free_tellers_and_empty_queue(self):
        engine = new_engine(3)
        snapshot = engine.snapshot()

        assert engine.teller_count == 3
        assert [t.busy for t in snapshot.tellers] == [False, False, False]
        assert snapshot.queue_length == 0
        assert engine.ticks == 0

    @pytest.mark.parametrize("count", [0, -2])
    def test_rejects_non_positive_teller_count(self, count):
        with pytest.raises(InvalidConfigurationError, match="teller_count must be >= 1"):
            SimulationEngine(count)

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            SimulationEngine(0)


class TestScenarios:

    def test_single_customer_no_backlog(self):
        """1 teller, arrivals [5, 0, 0]."""
        engine = SimulationEngine(1)
        results = run_ticks(engine, [5, 0, 0])

        assert results[0].assignments == (
            Assignment(teller_index=0, service_duration=5, wait_time=0, busy_until=6),
        )
        assert [r.queue_length for r in results] == [0, 0, 0]
        assert not results[1].arrived
        assert results[1].assignments == ()

        snapshot = engine.snapshot()
        assert snapshot.tick == 3
        assert snapshot.tellers[0].busy_until == 6

        report = engine.final_report()
        assert report.ticks == 3
        assert report.served_count == 1
        assert report.avg_queue_length == 0
        assert report.max_queue_length == 0
        assert report.max_wait_time == 0
        assert report.avg_wait_time == 0

    def test_backlog_builds_behind_busy_teller(self):
        """1 teller, arrivals [3, 3, 3]."""
        engine = SimulationEngine(1)
        results = run_ticks(engine, [3, 3, 3])

        assert results[0].assignments[0].busy_until == 4
        assert [r.queue_length for r in results] == [0, 1, 2]
        assert engine.snapshot().queue_contents == (3, 3)

        report = engine.final_report()
        assert report.max_queue_length == 2
        assert report.served_count == 1
        assert report.avg_queue_length == pytest.approx(1.0)
        assert report.arrivals == 3

    def test_backlog_drains_when_teller_frees(self):
        engine = SimulationEngine(1)
        run_ticks(engine, [3, 3, 3])
        result = engine.tick(4, 0)

        assert result.released == (0,)
        assert result.assignments == (
            Assignment(teller_index=0, service_duration=3, wait_time=2, busy_until=7),
        )
        assert result.queue_length == 1

        report = engine.final_report()
        assert report.served_count == 2
        assert report.max_wait_time == 2
        assert report.avg_wait_time == pytest.approx(1.0)

    def test_second_arrival_goes_to_second_teller(self):
        """2 tellers, arrivals [4, 4]."""
        engine = SimulationEngine(2)
        results = run_ticks(engine, [4, 4])

        assert results[0].assignments[0].teller_index == 0
        assert results[1].assignments[0].teller_index == 1
        assert all(r.queue_length == 0 for r in results)
        assert engine.final_report().max_queue_length == 0


class TestAssignmentPolicy:

    def test_lowest_index_free_teller_wins(self):
        engine = SimulationEngine(3)
        result = engine.tick(1, 2)
        assert result.assignments[0].teller_index == 0

    def test_freed_lower_index_preferred_over_idle_higher_index(self):
        engine = SimulationEngine(3)
        engine.tick(1, 10)   # teller 0 until 11
        engine.tick(2, 2)    # teller 1 until 4
        engine.tick(3, 0)
        result = engine.tick(4, 5)

        assert result.released == (1,)
        assert result.assignments[0].teller_index == 1
        assert not engine.snapshot().tellers[2].busy

    def test_tie_break_is_reproducible(self):
        arrivals = [3, 0, 2, 5, 1, 0, 4, 4, 0, 2]
        first = [r.assignments for r in run_ticks(SimulationEngine(3), arrivals)]
        second = [r.assignments for r in run_ticks(SimulationEngine(3), arrivals)]
        assert first == second

    def test_multiple_assignments_in_one_tick(self):
        engine = SimulationEngine(2)
        engine.tick(1, 3)    # teller 0 until 4
        engine.tick(2, 2)    # teller 1 until 4
        engine.tick(3, 1)    # queued
        result = engine.tick(4, 6)

        assert result.released == (0, 1)
        assert result.assignments == (
            Assignment(teller_index=0, service_duration=1, wait_time=1, busy_until=5),
            Assignment(teller_index=1, service_duration=6, wait_time=0, busy_until=10),
        )
        assert result.queue_length == 0

    def test_zero_duration_never_enters_queue(self):
        engine = SimulationEngine(1)
        engine.tick(1, 9)
        for tick in range(2, 6):
            engine.tick(tick, 0)
        assert engine.queue_length == 0
        assert engine.arrivals == 1


class TestStatistics:

    def test_avg_wait_is_zero_without_service(self):
        engine = SimulationEngine(2)
        run_ticks(engine, [0, 0, 0])
        report = engine.final_report()

        assert report.served_count == 0
        assert report.avg_wait_time == 0.0

    def test_report_before_any_tick(self):
        report = SimulationEngine(1).final_report()
        assert report.ticks == 0
        assert report.avg_queue_length == 0.0
        assert report.avg_wait_time == 0.0

    def test_served_per_teller(self):
        engine = SimulationEngine(2)
        # teller 0 frees first at tick 5 and again at tick 6
        run_ticks(engine, [4, 4, 1, 0, 0, 1])
        assert engine.final_report().served_per_teller == (3, 1)

    def test_records_data_series(self):
        engine = SimulationEngine(1)
        run_ticks(engine, [3, 3, 3, 0])

        assert engine.queue_length_data.values == [(1, 0), (2, 1), (3, 2), (4, 1)]
        assert engine.wait_time_data.values == [(1, 0), (4, 2)]

    @pytest.mark.parametrize("seed", range(20))
    def test_generated_runs_keep_invariants(self, seed):
        rng = random.Random(seed)
        tellers = rng.randint(1, 4)
        arrivals = [rng.choice([0, 0, 1, 2, 3, 5, 8]) for _ in range(rng.randint(1, 60))]

        engine = SimulationEngine(tellers)
        for tick, duration in enumerate(arrivals, start=1):
            result = engine.tick(tick, duration)
            assigned_tellers = {a.teller_index for a in result.assignments}
            assert len(assigned_tellers) == len(result.assignments)

        report = engine.final_report()
        positive = sum(1 for d in arrivals if d > 0)
        assert report.served_count <= positive
        assert report.served_count + engine.queue_length == positive
        assert report.max_wait_time >= report.avg_wait_time


class TestValidation:

    def test_rejects_tick_zero(self):
        with pytest.raises(InvalidConfigurationError, match="current_tick must be >= 1"):
            SimulationEngine(1).tick(0, 1)

    def test_rejects_negative_duration(self):
        with pytest.raises(InvalidConfigurationError, match="arrival_duration must be >= 0"):
            SimulationEngine(1).tick(1, -1)

    def test_rejects_non_increasing_tick(self):
        engine = SimulationEngine(1)
        engine.tick(1, 2)
        with pytest.raises(InvalidConfigurationError, match="current_tick must be > 1"):
            engine.tick(1, 0)

    def test_rejected_call_leaves_state_unchanged(self):
        engine = SimulationEngine(1)
        engine.tick(1, 2)
        with pytest.raises(InvalidConfigurationError):
            engine.tick(2, -3)

        assert engine.ticks == 1
        assert engine.tick(2, 0).tick == 2

    def test_rejects_bool_duration(self):
        with pytest.raises(InvalidConfigurationError, match="must be an integer"):
            SimulationEngine(1).tick(1, True)


class TestInvariantViolation:

    def test_assignment_bug_aborts_engine(self, monkeypatch, caplog):
        engine = SimulationEngine(1)
        engine.tick(1, 5)
        teller = engine._tellers[0]
        monkeypatch.setattr(teller, "is_busy", lambda: False)

        with caplog.at_level(logging.CRITICAL, logger="tellersim.engine"):
            with pytest.raises(TellerBusyError):
                engine.tick(2, 3)

        assert engine.aborted
        assert any("invariant violated" in rec.message for rec in caplog.records)

        with pytest.raises(EngineAbortedError):
            engine.tick(3, 0)
