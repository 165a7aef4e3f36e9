"""Charts of a finished run."""

from __future__ import annotations

import logging
from pathlib import Path

from tellersim.simulation import SimulationResult

logger = logging.getLogger(__name__)


def plot_run(result: SimulationResult, output_path: str | Path) -> Path:
    """Save a two-panel chart: queue length and busy tellers per tick, and wait times.

    Returns:
        The path the figure was written to.
    """
    import matplotlib.pyplot as plt

    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    frame = result.to_dataframe()
    report = result.report

    fig, axes = plt.subplots(2, 1, figsize=(10, 8), sharex=True)

    ax = axes[0]
    ax.step(frame.index, frame["queue_length"], where="post", label="Waiting line")
    ax.step(frame.index, frame["busy_tellers"], where="post", label="Busy tellers")
    ax.axhline(y=report.teller_count, color="r", linestyle="--", alpha=0.5,
               label=f"Tellers ({report.teller_count})")
    ax.axhline(y=report.avg_queue_length, color="gray", linestyle=":",
               label=f"Avg queue ({report.avg_queue_length:.2f})")
    ax.set_ylabel("Customers")
    ax.set_title("Counter Load")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)

    ax = axes[1]
    waits = result.wait_time_data
    if waits:
        ax.scatter(waits.ticks(), waits.raw_values(), s=12, label="Wait at assignment")
        ax.axhline(y=report.avg_wait_time, color="gray", linestyle=":",
                   label=f"Avg wait ({report.avg_wait_time:.2f})")
        ax.legend(loc="upper left")
    ax.set_xlabel("Tick (min)")
    ax.set_ylabel("Wait (ticks)")
    ax.set_title("Customer Wait Times")
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(output_path, dpi=120)
    plt.close(fig)
    logger.info("Saved chart to %s", output_path)
    return output_path
