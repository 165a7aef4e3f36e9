"""Run the engine over a whole simulation and keep its history.

``run_simulation`` is the non-interactive driver: it feeds one arrival per
tick from a sequence or a callable, collects every TickResult and
CounterSnapshot, and returns them with the final report.

Example:
    from tellersim import SimulationConfig, run_simulation

    result = run_simulation(SimulationConfig(total_ticks=3, teller_count=1), [3, 3, 3])
    print(result.report)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Sequence, Union

from tellersim.core.errors import InvalidConfigurationError, require_int
from tellersim.engine import SimulationEngine
from tellersim.instrumentation.data import Data
from tellersim.instrumentation.summary import CounterSnapshot, FinalReport, TickResult

if TYPE_CHECKING:
    import pandas as pd

logger = logging.getLogger(__name__)

ArrivalSource = Union[Sequence[int], Callable[[int], int]]
TickCallback = Callable[[TickResult, CounterSnapshot], None]


@dataclass(frozen=True)
class SimulationConfig:
    """Length of the run and size of the counter."""

    total_ticks: int
    teller_count: int

    def __post_init__(self) -> None:
        require_int("total_ticks", self.total_ticks, 1)
        require_int("teller_count", self.teller_count, 1)


@dataclass
class TickRecord:
    result: TickResult
    snapshot: CounterSnapshot


@dataclass
class SimulationResult:
    """Everything a run produced."""

    config: SimulationConfig
    report: FinalReport
    history: list[TickRecord] = field(default_factory=list)
    queue_length_data: Data = field(default_factory=lambda: Data("queue_length"))
    wait_time_data: Data = field(default_factory=lambda: Data("wait_time"))

    def to_dataframe(self) -> pd.DataFrame:
        """One row per tick: arrival, queue length, assignments, busy tellers."""
        import pandas as pd

        rows = [
            {
                "tick": rec.result.tick,
                "arrival_duration": rec.result.arrival_duration,
                "queue_length": rec.result.queue_length,
                "assigned": len(rec.result.assignments),
                "released": len(rec.result.released),
                "busy_tellers": rec.snapshot.busy_tellers,
            }
            for rec in self.history
        ]
        columns = ["tick", "arrival_duration", "queue_length", "assigned", "released", "busy_tellers"]
        return pd.DataFrame(rows, columns=columns).set_index("tick")


def _arrival_lookup(arrivals: ArrivalSource, total_ticks: int) -> Callable[[int], int]:
    if callable(arrivals):
        return arrivals

    durations = list(arrivals)
    if len(durations) > total_ticks:
        raise InvalidConfigurationError(
            f"got {len(durations)} arrivals for a run of {total_ticks} tick(s)"
        )
    for duration in durations:
        require_int("arrival_duration", duration, 0)

    def lookup(tick: int) -> int:
        if tick <= len(durations):
            return durations[tick - 1]
        return 0

    return lookup


def run_simulation(
    config: SimulationConfig,
    arrivals: ArrivalSource = (),
    on_tick: TickCallback | None = None,
) -> SimulationResult:
    """Run ticks 1..total_ticks and return the history and report.

    Args:
        config: Run length and teller count.
        arrivals: Service durations indexed from tick 1, or a callable that
            returns the duration for a given tick. Ticks past the end of a
            sequence get no arrival.
        on_tick: Called with each TickResult and the snapshot after it.

    Raises:
        InvalidConfigurationError: If the sequence is longer than the run or
            holds a negative duration.
    """
    arrival_for = _arrival_lookup(arrivals, config.total_ticks)
    engine = SimulationEngine(config.teller_count)
    history: list[TickRecord] = []

    logger.info(
        "Starting run: %d tick(s), %d teller(s)", config.total_ticks, config.teller_count
    )
    for tick in range(1, config.total_ticks + 1):
        result = engine.tick(tick, arrival_for(tick))
        snapshot = engine.snapshot()
        history.append(TickRecord(result=result, snapshot=snapshot))
        if on_tick is not None:
            on_tick(result, snapshot)

    report = engine.final_report()
    logger.info(
        "Run finished: served %d of %d arrival(s), max queue %d",
        report.served_count, report.arrivals, report.max_queue_length,
    )
    return SimulationResult(
        config=config,
        report=report,
        history=history,
        queue_length_data=engine.queue_length_data,
        wait_time_data=engine.wait_time_data,
    )
