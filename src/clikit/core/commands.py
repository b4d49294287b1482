"""Command construction helpers and the pre-built cache commands."""

from __future__ import annotations

from typing import Any

from pydantic import Field

from clikit.core.models import CommandDefinition, CommandHandler, GlobalFlags
from clikit.core.protocols import CacheClient
from clikit.core.schema import ArgsSchema


def create_command(
    schema: Any,
    handler: CommandHandler,
    description: str | None = None,
) -> CommandDefinition:
    """Bundle *schema*, *handler* and *description* into a definition.

    Example::

        commands = {
            "get-order": create_command(
                GetOrderArgs,
                lambda args, client, _globals: client.get_order(args.order_id),
                "Retrieve an order by ID",
            ),
        }
    """
    return CommandDefinition(schema=schema, handler=handler, description=description)


# ---------------------------------------------------------------------------
# Cache commands
# ---------------------------------------------------------------------------

class NoArgs(ArgsSchema):
    """Schema for commands that take no options."""


class InvalidateArgs(ArgsSchema):
    key: str = Field(min_length=1, description="Cache key to invalidate")


async def _cache_stats(_args: NoArgs, client: CacheClient, _globals: GlobalFlags) -> Any:
    return client.get_cache_stats()


async def _cache_clear(_args: NoArgs, client: CacheClient, _globals: GlobalFlags) -> dict[str, int]:
    return {"cleared": client.clear_cache()}


async def _cache_invalidate(
    args: InvalidateArgs,
    client: CacheClient,
    _globals: GlobalFlags,
) -> dict[str, bool]:
    return {"invalidated": client.invalidate_cache_key(args.key)}


def cache_commands() -> dict[str, CommandDefinition]:
    """Commands for any client implementing :class:`CacheClient`.

    Merge into a registry with ``{**my_commands, **cache_commands()}``.
    """
    return {
        "cache-stats": create_command(NoArgs, _cache_stats, "Show cache statistics"),
        "cache-clear": create_command(NoArgs, _cache_clear, "Clear all cached data"),
        "cache-invalidate": create_command(
            InvalidateArgs,
            _cache_invalidate,
            "Invalidate a specific cache key",
        ),
    }
