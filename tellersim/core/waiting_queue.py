"""FIFO waiting line of customers.

Insertion order is service order. The queue holds Customer instances only,
so dequeued items need no type checks.
"""

from __future__ import annotations

from collections import deque
from typing import Iterator

from tellersim.core.customer import Customer
from tellersim.core.errors import EmptyQueueError


class WaitingQueue:
    """Strict first-in, first-out line of customers waiting for a teller."""

    def __init__(self) -> None:
        self._queue: deque[Customer] = deque()

    def enqueue(self, customer: Customer) -> None:
        """Add ``customer`` at the back of the line."""
        self._queue.append(customer)

    def dequeue(self) -> Customer:
        """Remove and return the customer who has waited longest.

        Raises:
            EmptyQueueError: If the line is empty.
        """
        if not self._queue:
            raise EmptyQueueError()
        return self._queue.popleft()

    def peek(self) -> Customer | None:
        """Return the head of the line without removing it, or None if empty."""
        if not self._queue:
            return None
        return self._queue[0]

    def is_empty(self) -> bool:
        return len(self._queue) == 0

    def length(self) -> int:
        return len(self._queue)

    def durations(self) -> list[int]:
        """Service durations in service order."""
        return [c.service_duration for c in self._queue]

    def __len__(self) -> int:
        return len(self._queue)

    def __iter__(self) -> Iterator[Customer]:
        return iter(tuple(self._queue))

    def __str__(self) -> str:
        return "[" + ", ".join(str(c) for c in self._queue) + "]"
