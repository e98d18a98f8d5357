# src/laserbounce/report.py
import json
import sys
from typing import List

from .simulation.run_tries import RunResult


def format_report(result: RunResult) -> List[str]:
    return [
        f"Max Performance = {result.peak_rate:8.6f} megatrials per second",
        f"Probability of the laser hitting the panel: {result.probability:.6f}",
        f"Calculated from: {result.num_trials} trials",
        f"Number of hits: {result.implied_hits}",
        f"Average Performance = {result.average_rate:.6f} megatrials per second",
    ]


def print_report(result: RunResult, file=None):
    out = sys.stdout if file is None else file
    for line in format_report(result):
        print(line, file=out)


def report_json(result: RunResult) -> str:
    return json.dumps({
        "peak_megatrials_per_sec": result.peak_rate,
        "probability": result.probability,
        "trials": result.num_trials,
        "hits": result.implied_hits,
        "average_megatrials_per_sec": result.average_rate,
        "tries": result.num_tries,
        "tries_completed": result.tries_completed,
        "aborted": result.aborted,
        "seed": result.seed,
    })
