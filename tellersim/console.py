"""Text console driver for the teller counter.

Asks for the run length, the number of tellers and, tick by tick, the service
time of the arriving customer (0 for nobody). Every answer is re-asked until
it parses as an integer in range. After each tick the counter state is
printed, and the run ends with the closing report.

Any value can be given up front instead:

    python -m tellersim --ticks 10 --tellers 2 --arrivals 5,0,3,3,0,1
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Callable, Sequence, TextIO

from tellersim.instrumentation.summary import CounterSnapshot, FinalReport, TickResult
from tellersim.logging_config import configure_from_env, enable_console_logging
from tellersim.simulation import SimulationConfig, SimulationResult, run_simulation

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]

RULE = "-" * 15


def prompt_int(
    prompt: str,
    minimum: int,
    range_error: str,
    *,
    read: Reader = input,
    err: TextIO | None = None,
) -> int:
    """Ask until the answer is an integer >= ``minimum``.

    Raises:
        EOFError: If the input runs out before a valid answer.
    """
    err = err or sys.stderr
    while True:
        raw = read(prompt)
        try:
            value = int(raw.strip())
        except ValueError:
            print("Please enter an integer.", file=err)
            continue
        if value < minimum:
            print(range_error, file=err)
            continue
        return value


def parse_arrivals(text: str) -> list[int]:
    """Parse ``"5,0,3"`` into ``[5, 0, 3]``."""
    try:
        durations = [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"arrivals must be comma-separated integers, got {text!r}"
        ) from None
    if any(d < 0 for d in durations):
        raise argparse.ArgumentTypeError("arrival durations must be >= 0")
    return durations


def positive_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}") from None
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def render_snapshot(snapshot: CounterSnapshot) -> str:
    lines = [f"After {snapshot.tick} minute(s) ##"]
    for status in snapshot.tellers:
        lines.append(f"    Teller {status.index + 1}: {status}")
    contents = ", ".join(str(d) for d in snapshot.queue_contents)
    lines.append(f"    Waiting Line: [{contents}]")
    return "\n".join(lines)


def render_report(report: FinalReport) -> str:
    lines = [
        f"{RULE} END OF SIMULATION {RULE}",
        f"Total minutes simulated   : {report.ticks} minute(s)",
        f"Number of tellers         : {report.teller_count} teller(s)",
        f"Number of customers served: {report.served_count} customer(s)",
        f"Average queue length      : {report.avg_queue_length:.2f} customer(s)",
        f"Maximum queue length      : {report.max_queue_length} customer(s)",
        f"Average wait time         : {report.avg_wait_time:.2f} minute(s)",
        f"Maximum wait time         : {report.max_wait_time} minute(s)",
    ]
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tellersim", description="Tick-by-tick teller counter simulation"
    )
    parser.add_argument("--ticks", type=positive_int, help="Simulation length in minutes")
    parser.add_argument("--tellers", type=positive_int, help="Number of tellers")
    parser.add_argument(
        "--arrivals",
        type=parse_arrivals,
        help="Comma-separated service times per minute (0 = no arrival); prompts if omitted",
    )
    parser.add_argument("--quiet", action="store_true", help="Only print the final report")
    parser.add_argument("--csv", type=str, default=None, help="Write the per-tick history as CSV")
    parser.add_argument("--plot", type=str, default=None, help="Save a chart of the run (PNG)")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        default=None,
        help="Enable console logging at this level (otherwise TS_LOGGING is used)",
    )
    return parser


def run_console(
    args: argparse.Namespace,
    *,
    read: Reader = input,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> SimulationResult:
    """Collect missing settings interactively and run the simulation."""
    out = out or sys.stdout
    err = err or sys.stderr

    print(f"{RULE} SETUP SIMULATION ENVIRONMENT {RULE}", file=out)
    ticks = args.ticks
    if ticks is None:
        ticks = prompt_int(
            "Input simulation length (min): ", 1,
            "The simulation length must be >= 1.", read=read, err=err,
        )
    tellers = args.tellers
    if tellers is None:
        tellers = prompt_int(
            "Input number of counters: ", 1,
            "The number of counters must be >= 1.", read=read, err=err,
        )
    config = SimulationConfig(total_ticks=ticks, teller_count=tellers)

    def ask_arrival(tick: int) -> int:
        print(f"At the beginning of iteration {tick}...", file=out)
        return prompt_int(
            "Input serving time for a new customer: ", 0,
            "The serving time must be >= 0.", read=read, err=err,
        )

    arrivals: Sequence[int] | Callable[[int], int] = ask_arrival
    if args.arrivals is not None:
        arrivals = args.arrivals

    def show(result: TickResult, snapshot: CounterSnapshot) -> None:
        if not args.quiet:
            print(render_snapshot(snapshot), file=out)
            print(file=out)

    print(file=out)
    print(f"{RULE} START SIMULATION {RULE}", file=out)
    print(file=out)
    result = run_simulation(config, arrivals, on_tick=show)
    print(render_report(result.report), file=out)
    return result


def main(
    argv: Sequence[str] | None = None,
    *,
    read: Reader = input,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    err = err or sys.stderr

    if args.log_level:
        enable_console_logging(level=args.log_level)
    else:
        configure_from_env()

    try:
        result = run_console(args, read=read, out=out, err=err)
    except EOFError:
        print("Input ended before the simulation was set up.", file=err)
        return 1
    except ValueError as exc:
        parser.error(str(exc))
    except KeyboardInterrupt:
        return 130

    if args.csv:
        result.to_dataframe().to_csv(args.csv)
        logger.info("Wrote history to %s", args.csv)
    if args.plot:
        from tellersim.plotting import plot_run

        plot_run(result, args.plot)
    return 0
