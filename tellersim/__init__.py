"""tellersim: tick-by-tick simulation of a counter with a fixed number of tellers.

Customers arrive one per tick at most, wait in a single FIFO line, and are
handed to the lowest-numbered free teller. The engine reports per-tick
snapshots and an aggregated report (served count, queue length and wait
time statistics).

Logging is silent by default; see ``tellersim.logging_config``.
"""

import logging

from tellersim.core import (
    Customer,
    EmptyQueueError,
    EngineAbortedError,
    InvalidConfigurationError,
    InvariantViolation,
    Teller,
    TellerBusyError,
    TellerSimError,
    TellerStatus,
    WaitingQueue,
)
from tellersim.engine import SimulationEngine, new_engine
from tellersim.instrumentation import (
    Assignment,
    CounterSnapshot,
    Data,
    FinalReport,
    TickResult,
)
from tellersim.logging_config import (
    configure_from_env,
    disable_logging,
    enable_console_logging,
    enable_file_logging,
    enable_json_logging,
    set_level,
    set_module_level,
)
from tellersim.simulation import (
    SimulationConfig,
    SimulationResult,
    TickRecord,
    run_simulation,
)

logging.getLogger("tellersim").addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    # Core
    "Customer",
    "Teller",
    "TellerStatus",
    "WaitingQueue",
    # Errors
    "EmptyQueueError",
    "EngineAbortedError",
    "InvalidConfigurationError",
    "InvariantViolation",
    "TellerBusyError",
    "TellerSimError",
    # Engine
    "SimulationEngine",
    "new_engine",
    # Results
    "Assignment",
    "CounterSnapshot",
    "Data",
    "FinalReport",
    "TickResult",
    # Runner
    "SimulationConfig",
    "SimulationResult",
    "TickRecord",
    "run_simulation",
    # Logging
    "configure_from_env",
    "disable_logging",
    "enable_console_logging",
    "enable_file_logging",
    "enable_json_logging",
    "set_level",
    "set_module_level",
]
