"""Structured results produced by the engine.

TickResult describes what happened during one tick, CounterSnapshot is the
state of the counter after a tick, and FinalReport aggregates the whole run.
All of them are plain data; rendering for people lives in the console driver.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from tellersim.core.teller import TellerStatus


@dataclass(frozen=True)
class Assignment:
    """A customer leaving the waiting line for a teller."""

    teller_index: int
    service_duration: int
    wait_time: int
    busy_until: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "teller_index": self.teller_index,
            "service_duration": self.service_duration,
            "wait_time": self.wait_time,
            "busy_until": self.busy_until,
        }


@dataclass(frozen=True)
class TickResult:
    """Outcome of one tick of the engine.

    Attributes:
        tick: The tick that was processed.
        arrival_duration: Service duration of the arrival, 0 if nobody came.
        released: Indices of tellers that became free at the start of the tick.
        assignments: Customers handed to tellers, in assignment order.
        queue_length: Waiting-line length once assignment settled.
    """

    tick: int
    arrival_duration: int
    released: tuple[int, ...] = ()
    assignments: tuple[Assignment, ...] = ()
    queue_length: int = 0

    @property
    def arrived(self) -> bool:
        return self.arrival_duration > 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "tick": self.tick,
            "arrival_duration": self.arrival_duration,
            "released": list(self.released),
            "assignments": [a.to_dict() for a in self.assignments],
            "queue_length": self.queue_length,
        }


@dataclass(frozen=True)
class CounterSnapshot:
    """Teller statuses and waiting-line contents after a tick."""

    tick: int
    tellers: tuple[TellerStatus, ...]
    queue_contents: tuple[int, ...] = ()

    @property
    def queue_length(self) -> int:
        return len(self.queue_contents)

    @property
    def busy_tellers(self) -> int:
        return sum(1 for t in self.tellers if t.busy)

    def to_dict(self) -> dict[str, Any]:
        return {
            "tick": self.tick,
            "tellers": [t.to_dict() for t in self.tellers],
            "queue_length": self.queue_length,
            "queue_contents": list(self.queue_contents),
        }


@dataclass(frozen=True)
class FinalReport:
    """Aggregated statistics for a whole run."""

    ticks: int
    teller_count: int
    served_count: int
    avg_queue_length: float
    max_queue_length: int
    avg_wait_time: float
    max_wait_time: int
    arrivals: int = 0
    served_per_teller: tuple[int, ...] = field(default=())

    def __str__(self) -> str:
        lines = [
            "Counter Report",
            f"  Ticks simulated: {self.ticks}",
            f"  Tellers: {self.teller_count}",
            f"  Arrivals: {self.arrivals}",
            f"  Customers served: {self.served_count}",
            f"  Queue length: avg={self.avg_queue_length:.2f}, max={self.max_queue_length}",
            f"  Wait time: avg={self.avg_wait_time:.2f}, max={self.max_wait_time}",
        ]
        return "\n".join(lines)

    def to_dict(self) -> dict[str, Any]:
        return {
            "ticks": self.ticks,
            "teller_count": self.teller_count,
            "served_count": self.served_count,
            "avg_queue_length": self.avg_queue_length,
            "max_queue_length": self.max_queue_length,
            "avg_wait_time": self.avg_wait_time,
            "max_wait_time": self.max_wait_time,
            "arrivals": self.arrivals,
            "served_per_teller": list(self.served_per_teller),
        }
