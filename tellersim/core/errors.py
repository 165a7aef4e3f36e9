"""Error types raised at the boundary of the teller engine.

Two kinds of failure exist:

- ``InvalidConfigurationError``: a caller passed an argument outside its
  allowed range (teller count, tick, arrival duration). It subclasses
  ``ValueError`` so drivers can validate-and-retry with a plain
  ``except ValueError``.
- ``InvariantViolation``: the engine reached a state its assignment logic
  should make impossible (assigning a busy teller, dequeuing an empty line).
  These are fatal to the run and are never retried.
"""

from __future__ import annotations

__all__ = [
    "EmptyQueueError",
    "EngineAbortedError",
    "InvalidConfigurationError",
    "InvariantViolation",
    "TellerBusyError",
    "TellerSimError",
]


class TellerSimError(Exception):
    """Base class for all tellersim errors."""


class InvalidConfigurationError(TellerSimError, ValueError):
    """An argument violates its positivity or ordering constraint."""


class InvariantViolation(TellerSimError, RuntimeError):
    """Internal state became inconsistent. Not recoverable."""


class TellerBusyError(InvariantViolation):
    """A customer was assigned to a teller that is still serving."""

    def __init__(self, index: int, busy_until: int):
        super().__init__(
            f"Teller {index} is busy serving a customer until tick {busy_until}"
        )
        self.index = index
        self.busy_until = busy_until


class EmptyQueueError(InvariantViolation):
    """Dequeue was called on an empty waiting line."""

    def __init__(self) -> None:
        super().__init__("Cannot dequeue from an empty waiting line")


class EngineAbortedError(InvariantViolation):
    """The engine hit an invariant violation earlier and refuses further ticks."""


def require_int(name: str, value: object, minimum: int) -> int:
    """Return ``value`` if it is an int >= ``minimum``.

    Raises:
        InvalidConfigurationError: If ``value`` is not an int (bools are
            rejected) or is below ``minimum``.
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(
            f"{name} must be an integer, got {type(value).__name__}"
        )
    if value < minimum:
        raise InvalidConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value
