"""clikit — schema-validated command-line tools.

Tokenize ``--key value`` arguments, validate them with pydantic, and
dispatch to async command handlers with consistent help, JSON output
and error reporting.

Example::

    from clikit import (
        ArgsSchema, Field, RunOptions, cache_commands, cli_types, create_command, run_cli,
    )

    class GetOrderArgs(ArgsSchema):
        order_id: str = Field(min_length=1, description="Order ID")
        limit: cli_types.limit(50, 250)

    async def get_order(args, client, _globals):
        return await client.get_order(args.order_id, limit=args.limit)

    commands = {
        "get-order": create_command(GetOrderArgs, get_order, "Retrieve an order by ID"),
        **cache_commands(),
    }

    run_cli(commands, OrderClient, RunOptions(program_name="orders"))
"""

from pydantic import Field

from clikit.cli.help import format_validation_errors, render_command_help, render_full_help
from clikit.cli.runner import main, run, run_cli
from clikit.core.coercion import cli_types
from clikit.core.commands import cache_commands, create_command
from clikit.core.introspect import describe_command, describe_fields
from clikit.core.models import (
    CliResult,
    CommandDefinition,
    CommandMeta,
    FieldIssue,
    GlobalFlags,
    IssueKind,
    RawArguments,
    RunOptions,
    SchemaFieldMeta,
)
from clikit.core.naming import compact_to_hyphen, hyphen_to_compact
from clikit.core.parser import extract_command_token, extract_global_flags, tokenize
from clikit.core.protocols import CacheClient, CacheDisable, Disposable
from clikit.core.schema import ArgsSchema, refine
from clikit.core.validation import validate
from clikit.exceptions import ClikitError
from clikit.version import __version__

__all__: list[str] = [
    "ArgsSchema",
    "CacheClient",
    "CacheDisable",
    "CliResult",
    "ClikitError",
    "CommandDefinition",
    "CommandMeta",
    "Disposable",
    "Field",
    "FieldIssue",
    "GlobalFlags",
    "IssueKind",
    "RawArguments",
    "RunOptions",
    "SchemaFieldMeta",
    "__version__",
    "cache_commands",
    "cli_types",
    "compact_to_hyphen",
    "create_command",
    "describe_command",
    "describe_fields",
    "extract_command_token",
    "extract_global_flags",
    "format_validation_errors",
    "hyphen_to_compact",
    "main",
    "refine",
    "render_command_help",
    "render_full_help",
    "run",
    "run_cli",
    "tokenize",
    "validate",
]
