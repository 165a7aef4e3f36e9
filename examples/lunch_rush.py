"""Lunch rush at a teller counter.

Replays a scripted two-hour arrival pattern (quiet morning, a burst of
customers around noon, quiet again) against counters of different sizes,
and compares how the waiting line and wait times react to staffing.

## Architecture Diagram

```
    arrivals[tick]  -->  WaitingQueue (FIFO)  -->  Teller 1 (lowest free index first)
    (0 = nobody)                              -->  Teller 2
                                              -->  ...
```

Usage:
    python examples/lunch_rush.py --tellers 1 2 3 --output output/lunch_rush
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

from tellersim import SimulationConfig, SimulationResult, run_simulation


# =============================================================================
# Configuration
# =============================================================================


@dataclass(frozen=True)
class RushConfig:
    """Shape of the scripted arrival pattern."""

    total_ticks: int = 120        # two hours, one tick per minute
    rush_start: int = 45          # first minute of the rush
    rush_end: int = 75            # first minute after the rush
    quiet_every: int = 6          # a customer every N minutes outside the rush
    rush_durations: tuple[int, ...] = (2, 4, 3, 6, 2, 3)


def build_arrivals(config: RushConfig) -> list[int]:
    """Service time per minute, 0 where nobody arrives."""
    arrivals = []
    for tick in range(1, config.total_ticks + 1):
        if config.rush_start <= tick < config.rush_end:
            arrivals.append(config.rush_durations[tick % len(config.rush_durations)])
        elif tick % config.quiet_every == 0:
            arrivals.append(3)
        else:
            arrivals.append(0)
    return arrivals


# =============================================================================
# Runner
# =============================================================================


def run_rush(teller_counts: list[int], config: RushConfig | None = None) -> dict[int, SimulationResult]:
    if config is None:
        config = RushConfig()
    arrivals = build_arrivals(config)
    return {
        tellers: run_simulation(
            SimulationConfig(total_ticks=config.total_ticks, teller_count=tellers),
            arrivals,
        )
        for tellers in teller_counts
    }


def print_summary(results: dict[int, SimulationResult]) -> None:
    print("\n" + "=" * 65)
    print("LUNCH RUSH RESULTS")
    print("=" * 65)
    print(f"\n  {'Tellers':>7} {'Served':>7} {'Avg queue':>10} {'Max queue':>10} "
          f"{'Avg wait':>9} {'p90 wait':>9} {'Max wait':>9}")
    for tellers, result in results.items():
        r = result.report
        p90 = result.wait_time_data.percentile(0.90)
        print(f"  {tellers:>7} {r.served_count:>7} {r.avg_queue_length:>10.2f} "
              f"{r.max_queue_length:>10} {r.avg_wait_time:>9.2f} {p90:>9.1f} {r.max_wait_time:>9}")
    print("=" * 65)


def visualize_results(results: dict[int, SimulationResult], output_dir: Path) -> None:
    import matplotlib.pyplot as plt

    output_dir.mkdir(parents=True, exist_ok=True)

    fig, ax = plt.subplots(figsize=(12, 5))
    for tellers, result in results.items():
        series = result.queue_length_data.to_series()
        ax.step(series.index, series.values, where="post", label=f"{tellers} teller(s)")
    ax.set_xlabel("Minute")
    ax.set_ylabel("Waiting line length")
    ax.set_title("Waiting Line During the Lunch Rush")
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3)

    fig.tight_layout()
    fig.savefig(output_dir / "lunch_rush.png", dpi=150)
    plt.close(fig)
    print(f"Saved: {output_dir / 'lunch_rush.png'}")


# =============================================================================
# Entry Point
# =============================================================================


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Lunch rush teller staffing comparison")
    parser.add_argument("--tellers", type=int, nargs="+", default=[1, 2, 3], help="Teller counts to compare")
    parser.add_argument("--ticks", type=int, default=120, help="Run length in minutes")
    parser.add_argument("--output", type=str, default="output/lunch_rush", help="Output dir")
    parser.add_argument("--no-viz", action="store_true", help="Skip visualization")
    args = parser.parse_args()

    results = run_rush(args.tellers, RushConfig(total_ticks=args.ticks))
    print_summary(results)

    if not args.no_viz:
        visualize_results(results, Path(args.output))
