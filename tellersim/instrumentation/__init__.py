"""Run statistics and result types."""

from tellersim.instrumentation.data import Data
from tellersim.instrumentation.summary import (
    Assignment,
    CounterSnapshot,
    FinalReport,
    TickResult,
)

__all__ = [
    "Assignment",
    "CounterSnapshot",
    "Data",
    "FinalReport",
    "TickResult",
]
