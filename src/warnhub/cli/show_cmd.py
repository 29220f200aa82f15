"""``warnhub show <results.json>`` -- Display a recorded results file.

Exit Codes:
    0 -- Results displayed.
    2 -- The file is not a warnhub results file, or the requested result
         id does not exist.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from warnhub.cli.output import print_outcome, print_result_detail
from warnhub.recording import ExecutionOutcome


@click.command("show")
@click.argument("results_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--id", "result_id", help="Show the issues of a single result.")
def show_command(results_file: Path, result_id: str | None) -> None:
    """Display the results stored in RESULTS_FILE by ``warnhub record -o``."""
    try:
        outcome = ExecutionOutcome.from_dict(json.loads(results_file.read_text(encoding="utf-8")))
    except (ValueError, KeyError, TypeError) as exc:
        click.echo(f"Error: {results_file} is not a results file: {exc}", err=True)
        sys.exit(2)

    if result_id is None:
        print_outcome(outcome)
        return

    result = outcome.result(result_id)
    if result is None:
        known = ", ".join(r.id for r in outcome.results) or "none"
        click.echo(f"Error: no result with id '{result_id}' (available: {known})", err=True)
        sys.exit(2)
    print_result_detail(result)
