"""Tick-driven engine for a counter with a fixed number of tellers.

Each call to ``SimulationEngine.tick`` runs four phases in a fixed order:

1. Release: every teller whose customer is done becomes free.
2. Arrival: a positive duration enqueues one new customer; 0 means nobody came.
3. Assignment: the waiting line is drained into free tellers, scanning
   tellers by index so the lowest free index always wins.
4. Statistics: the settled queue length is folded into the running totals.

The engine owns its tellers and its waiting line. Nothing outside it mutates
them; drivers only see snapshots.
"""

from __future__ import annotations

import logging

from tellersim.core.customer import Customer
from tellersim.core.errors import (
    EngineAbortedError,
    InvalidConfigurationError,
    InvariantViolation,
    require_int,
)
from tellersim.core.teller import Teller
from tellersim.core.waiting_queue import WaitingQueue
from tellersim.instrumentation.data import Data
from tellersim.instrumentation.summary import (
    Assignment,
    CounterSnapshot,
    FinalReport,
    TickResult,
)

logger = logging.getLogger(__name__)


class SimulationEngine:
    """Counter with ``teller_count`` tellers and one FIFO waiting line.

    Args:
        teller_count: Number of tellers, at least 1.

    Raises:
        InvalidConfigurationError: If ``teller_count`` is not a positive int.
    """

    def __init__(self, teller_count: int):
        require_int("teller_count", teller_count, 1)
        self._tellers = [Teller(index) for index in range(teller_count)]
        self._queue = WaitingQueue()
        self._last_tick = 0
        self._aborted = False

        self._ticks = 0
        self._arrivals = 0
        self._served = 0
        self._cumulative_queue_length = 0
        self._max_queue_length = 0
        self._cumulative_wait_time = 0
        self._max_wait_time = 0

        self.queue_length_data = Data("queue_length")
        self.wait_time_data = Data("wait_time")

    @property
    def teller_count(self) -> int:
        return len(self._tellers)

    @property
    def ticks(self) -> int:
        """Number of ticks processed so far."""
        return self._ticks

    @property
    def served_count(self) -> int:
        return self._served

    @property
    def arrivals(self) -> int:
        return self._arrivals

    @property
    def queue_length(self) -> int:
        return len(self._queue)

    @property
    def aborted(self) -> bool:
        return self._aborted

    def tick(self, current_tick: int, arrival_duration: int = 0) -> TickResult:
        """Run the release, arrival, assignment and statistics phases.

        Args:
            current_tick: Tick being processed. Must be greater than the
                previously processed tick.
            arrival_duration: Service duration of the customer arriving this
                tick, or 0 for no arrival.

        Raises:
            InvalidConfigurationError: On a non-positive or non-increasing
                tick, or a negative duration. The engine state is unchanged.
            EngineAbortedError: If an earlier tick hit an invariant violation.
            InvariantViolation: If the engine's own bookkeeping breaks. The
                engine is aborted afterwards.
        """
        if self._aborted:
            raise EngineAbortedError("Engine aborted after an invariant violation")
        require_int("current_tick", current_tick, 1)
        require_int("arrival_duration", arrival_duration, 0)
        if current_tick <= self._last_tick:
            raise InvalidConfigurationError(
                f"current_tick must be > {self._last_tick}, got {current_tick}"
            )

        try:
            return self._run_phases(current_tick, arrival_duration)
        except InvariantViolation:
            self._aborted = True
            logger.critical("[tick %d] invariant violated, aborting engine", current_tick)
            raise

    def _run_phases(self, tick: int, arrival_duration: int) -> TickResult:
        self._last_tick = tick

        released = self._release(tick)

        if arrival_duration > 0:
            self._queue.enqueue(Customer(arrival_duration, tick))
            self._arrivals += 1
            logger.debug(
                "[tick %d] customer arrived (duration=%d), queue length=%d",
                tick, arrival_duration, len(self._queue),
            )

        assignments = self._assign(tick)

        queue_length = len(self._queue)
        self._ticks += 1
        self._cumulative_queue_length += queue_length
        self._max_queue_length = max(self._max_queue_length, queue_length)
        self.queue_length_data.add_stat(queue_length, tick)

        return TickResult(
            tick=tick,
            arrival_duration=arrival_duration,
            released=tuple(released),
            assignments=tuple(assignments),
            queue_length=queue_length,
        )

    def _release(self, tick: int) -> list[int]:
        released = []
        for teller in self._tellers:
            if teller.release(tick) is not None:
                released.append(teller.index)
        return released

    def _assign(self, tick: int) -> list[Assignment]:
        # Lowest free index first; a teller assigned here is busy for the
        # rest of the scan.
        assignments = []
        for teller in self._tellers:
            if self._queue.is_empty():
                break
            if teller.is_busy():
                continue

            customer = self._queue.dequeue()
            teller.assign(customer, tick)

            wait_time = customer.wait_time(tick)
            self._served += 1
            self._cumulative_wait_time += wait_time
            self._max_wait_time = max(self._max_wait_time, wait_time)
            self.wait_time_data.add_stat(wait_time, tick)

            assignments.append(
                Assignment(
                    teller_index=teller.index,
                    service_duration=customer.service_duration,
                    wait_time=wait_time,
                    busy_until=teller.busy_until,
                )
            )
            logger.debug(
                "[tick %d] teller %d took customer after waiting %d tick(s)",
                tick, teller.index, wait_time,
            )
        return assignments

    def snapshot(self) -> CounterSnapshot:
        """Current teller statuses and waiting-line contents."""
        return CounterSnapshot(
            tick=self._last_tick,
            tellers=tuple(t.status() for t in self._tellers),
            queue_contents=tuple(self._queue.durations()),
        )

    def final_report(self) -> FinalReport:
        """Aggregate statistics over all ticks processed so far."""
        avg_queue_length = 0.0
        if self._ticks > 0:
            avg_queue_length = self._cumulative_queue_length / self._ticks

        avg_wait_time = 0.0
        if self._served > 0:
            avg_wait_time = self._cumulative_wait_time / self._served

        return FinalReport(
            ticks=self._ticks,
            teller_count=len(self._tellers),
            served_count=self._served,
            avg_queue_length=avg_queue_length,
            max_queue_length=self._max_queue_length,
            avg_wait_time=avg_wait_time,
            max_wait_time=self._max_wait_time,
            arrivals=self._arrivals,
            served_per_teller=tuple(t.served for t in self._tellers),
        )

    def __repr__(self) -> str:
        return (
            f"SimulationEngine(tellers={len(self._tellers)}, "
            f"tick={self._last_tick}, queue={len(self._queue)})"
        )


def new_engine(teller_count: int) -> SimulationEngine:
    """Create an engine with ``teller_count`` free tellers and an empty line."""
    return SimulationEngine(teller_count)
