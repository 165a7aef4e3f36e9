"""Customer value carried through the waiting line and the tellers."""

from __future__ import annotations

from dataclasses import dataclass

from tellersim.core.errors import require_int


@dataclass(frozen=True)
class Customer:
    """A customer who arrived at ``arrival_tick`` needing ``service_duration`` ticks.

    A service duration of 0 means "nobody arrived" to the drivers, so a
    Customer always has a duration of at least one tick.

    Attributes:
        service_duration: Ticks a teller needs to serve this customer.
        arrival_tick: Tick at which the customer joined the waiting line.
    """

    service_duration: int
    arrival_tick: int

    def __post_init__(self) -> None:
        require_int("service_duration", self.service_duration, 1)
        require_int("arrival_tick", self.arrival_tick, 1)

    def wait_time(self, current_tick: int) -> int:
        """Ticks spent in the waiting line if served at ``current_tick``."""
        return current_tick - self.arrival_tick

    def __str__(self) -> str:
        return str(self.service_duration)
