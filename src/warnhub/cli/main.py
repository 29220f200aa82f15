"""warnhub CLI -- Static analysis issue aggregation.

Entry point for the ``warnhub`` command-line tool. Registers all
subcommands under a single Click group.

Commands:
    record -- Parse tool reports in a workspace and aggregate the issues.
    show   -- Display a results file written by ``record --output``.
    tools  -- List all supported analysis tools.

Usage::

    warnhub record -t checkstyle -t pmd=**/pmd.xml
    warnhub record ./build --config warnhub.yaml --aggregate -o warnings.json
    warnhub record --reference previous.json -t pylint=**/pylint.log
    warnhub show warnings.json --id checkstyle
    warnhub tools
"""

from __future__ import annotations

import logging

import click

from warnhub import __version__
from warnhub.cli.record import record_command
from warnhub.cli.show_cmd import show_command
from warnhub.cli.tools_cmd import tools_command


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def cli(verbose: bool) -> None:
    """warnhub: Aggregate static analysis warnings across tools.

    Parse the reports of CheckStyle, PMD, Pylint, compilers and more,
    deduplicate the issues, keep tools separate or merge them into one
    result, and gate the build on issue thresholds.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s"
        )


# Register all subcommands
cli.add_command(record_command)
cli.add_command(show_command)
cli.add_command(tools_command)
