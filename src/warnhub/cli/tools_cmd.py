"""``warnhub tools`` -- List all supported analysis tools.

Prints each tool's id, display name, default report pattern and whether
it can scan a console log.

Exit Codes:
    0 -- Always (informational command, cannot fail).
"""

from __future__ import annotations

import click

from warnhub.cli.output import print_tools
from warnhub.parsers.registry import default_registry


@click.command("tools")
def tools_command() -> None:
    """List all supported analysis tools and their default patterns."""
    print_tools(default_registry())
