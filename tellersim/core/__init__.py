"""Core teller counter components."""

from tellersim.core.customer import Customer
from tellersim.core.errors import (
    EmptyQueueError,
    EngineAbortedError,
    InvalidConfigurationError,
    InvariantViolation,
    TellerBusyError,
    TellerSimError,
)
from tellersim.core.teller import Teller, TellerStatus
from tellersim.core.waiting_queue import WaitingQueue

__all__ = [
    "Customer",
    "EmptyQueueError",
    "EngineAbortedError",
    "InvalidConfigurationError",
    "InvariantViolation",
    "Teller",
    "TellerBusyError",
    "TellerSimError",
    "TellerStatus",
    "WaitingQueue",
]
