"""Single-server teller state machine.

A Teller is either Free (no customer) or Busy (exactly one customer). It
becomes Busy through ``assign`` and returns to Free through ``release``
once the current tick reaches ``busy_until``. Tellers live for the whole run
and cycle between the two states; there is no terminal state.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from tellersim.core.customer import Customer
from tellersim.core.errors import TellerBusyError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TellerStatus:
    """Read-only view of one teller, for display."""

    index: int
    busy: bool
    busy_until: int | None = None
    service_duration: int | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "index": self.index,
            "busy": self.busy,
            "busy_until": self.busy_until,
            "service_duration": self.service_duration,
        }

    def __str__(self) -> str:
        if not self.busy:
            return "free"
        return f"busy until tick {self.busy_until}"


class Teller:
    """A teller that serves at most one customer at a time.

    Args:
        index: Position of the teller in the counter. Lower indices are
            preferred when several tellers are free.
    """

    def __init__(self, index: int = 0):
        self.index = index
        self._customer: Customer | None = None
        self._busy_until = 0
        self._served = 0

    @property
    def customer(self) -> Customer | None:
        return self._customer

    @property
    def busy_until(self) -> int:
        """Tick at which the current customer leaves. Only meaningful while busy."""
        return self._busy_until

    @property
    def served(self) -> int:
        """Number of customers this teller has started serving."""
        return self._served

    def is_busy(self) -> bool:
        return self._customer is not None

    def release(self, current_tick: int) -> Customer | None:
        """Let the current customer leave if their service is over.

        Returns:
            The released customer, or None when the teller was free or is
            still serving.
        """
        if self._customer is None or current_tick < self._busy_until:
            return None

        customer = self._customer
        self._customer = None
        logger.debug(
            "[teller %d] released customer at tick %d", self.index, current_tick
        )
        return customer

    def assign(self, customer: Customer, current_tick: int) -> None:
        """Start serving ``customer`` at ``current_tick``.

        Raises:
            TellerBusyError: If the teller is already serving someone. Callers
                must check ``is_busy()`` first.
        """
        if self._customer is not None:
            raise TellerBusyError(self.index, self._busy_until)

        self._customer = customer
        self._busy_until = current_tick + customer.service_duration
        self._served += 1
        logger.debug(
            "[teller %d] serving customer (duration=%d) until tick %d",
            self.index, customer.service_duration, self._busy_until,
        )

    def status(self) -> TellerStatus:
        if self._customer is None:
            return TellerStatus(index=self.index, busy=False)
        return TellerStatus(
            index=self.index,
            busy=True,
            busy_until=self._busy_until,
            service_duration=self._customer.service_duration,
        )

    def __repr__(self) -> str:
        return f"Teller(index={self.index}, status={self.status()})"
