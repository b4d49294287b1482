"""Allow ``python -m clikit`` invocation.

Runs the pre-built cache commands against an in-memory client, which
makes a quick way to see help output, argument errors and the JSON
result format.
"""

from __future__ import annotations

from clikit.cli.runner import run_cli
from clikit.core.commands import cache_commands
from clikit.core.models import RunOptions
from clikit.infra.memory_cache import MemoryCacheClient

DEMO_OPTIONS = RunOptions(
    program_name="clikit",
    description="Cache management commands on an in-memory cache",
    usage="python -m clikit <command> [options]",
)


def cli() -> None:
    """Console-script entry point for the demo."""
    run_cli(cache_commands(), MemoryCacheClient, DEMO_OPTIONS)


if __name__ == "__main__":
    cli()
