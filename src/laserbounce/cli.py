# src/laserbounce/cli.py
import logging
from typing import Optional

import typer

from .errors import ConfigError, ParallelUnavailableError
from .models.config import SimConfig
from .report import print_report, report_json
from .simulation.run_tries import run_simulation

app = typer.Typer(
    name="laserbounce",
    help="Monte Carlo estimate of a laser bouncing off a random circular mirror onto a plate",
    add_completion=False,
)


@app.command()
def run(
    threads: int = typer.Option(8, "--threads", "-t", envvar="NUMT", help="Worker threads"),
    trials: int = typer.Option(1_000_000, "--trials", "-n", envvar="NUMTRIALS", help="Trials per try"),
    tries: int = typer.Option(10, "--tries", envvar="NUMTRIES", help="Timed tries"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Fixed seed (default: wall clock)"),
    angle: float = typer.Option(30.0, "--angle", help="Beam angle in degrees"),
    skip_after_abort: bool = typer.Option(
        True, "--skip-after-abort/--no-skip-after-abort",
        help="Skip remaining tries once a beam escaped upward"),
    as_json: bool = typer.Option(False, "--json", help="Print the report as JSON"),
    progress: bool = typer.Option(False, "--progress", help="Show a progress bar over tries"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """Run the simulation and print the summary."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = SimConfig(threads=threads, trials=trials, tries=tries, seed=seed,
                           beam_angle_deg=angle, skip_after_abort=skip_after_abort)
    except ConfigError as e:
        typer.echo(f"Invalid configuration: {e}", err=True)
        raise typer.Exit(code=2)

    try:
        result = run_simulation(config, progress=progress)
    except ParallelUnavailableError as e:
        typer.echo(f"No parallel support: {e}", err=True)
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(report_json(result))
    else:
        print_report(result)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
