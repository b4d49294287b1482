"""Command dispatch and the process error boundary.

:func:`run` executes one invocation, strictly in this order:

1. Tokenize the arguments and read the command token.
2. Help short-circuit (``--help``, ``-h``, ``help``, or no command).
3. Look the command up; unknown names fail immediately.
4. Validate the arguments — *before* the client exists, so users see
   argument errors even when the client could not be configured.
5. Build the client; apply ``--no-cache`` when it supports it.
6. Await the handler.
7. Print the result as JSON on stdout, or
8. print ``{"error": true, "message": ...}`` on stderr.
9. Release the client (exactly once, only if one was built).

:func:`main` wraps :func:`run` for synchronous callers and
:func:`run_cli` is the ``sys.exit`` boundary for console scripts.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
import sys
from collections.abc import Callable, Mapping, Sequence
from contextlib import AsyncExitStack
from typing import Any, NoReturn

from clikit.cli import exit_codes
from clikit.cli.console import err, out, print_error, to_json
from clikit.cli.help import format_validation_errors, render_full_help
from clikit.cli.logs import configure_logging
from clikit.core.models import CliResult, CommandDefinition, Invalid, RunOptions
from clikit.core.parser import extract_command_token, extract_global_flags, tokenize
from clikit.core.protocols import CacheDisable, Disposable
from clikit.core.validation import validate
from clikit.exceptions import ArgumentValidationError, ClikitError, UnknownCommandError

logger = logging.getLogger(__name__)

HELP_COMMANDS: frozenset[str] = frozenset({"help", "-h"})

ClientFactory = Callable[[], Any]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _failure(exc: BaseException) -> CliResult:
    """Report *exc* on stderr and build the failing result."""
    message = str(exc) or type(exc).__name__
    hint = exc.hint if isinstance(exc, ClikitError) else None
    print_error(message, hint=hint)
    return CliResult(success=False, exit_code=exit_codes.GENERAL_ERROR, error=message)


async def _dispose(client: Disposable) -> None:
    """Await the client's teardown; failures are logged, never raised."""
    try:
        pending = client.disconnect()
        if inspect.isawaitable(pending):
            await pending
    except Exception:
        logger.warning("Client teardown failed", exc_info=True)
    else:
        logger.debug("Client disconnected")


# ---------------------------------------------------------------------------
# Dispatch
# ---------------------------------------------------------------------------

async def run(
    commands: Mapping[str, CommandDefinition],
    client_factory: ClientFactory,
    argv: Sequence[str],
    options: RunOptions | None = None,
) -> CliResult:
    """Execute one CLI invocation and report its outcome.

    Parameters
    ----------
    commands:
        Registry of command name → definition, in help order.
    client_factory:
        Zero-argument callable (usually a class) building the per-run
        client.  Only called after arguments validated.
    argv:
        Arguments without the program name (``sys.argv[1:]``).
    options:
        Program name, description and usage line for help output.

    Returns
    -------
    CliResult
        ``exit_code`` is 0 on success or help, 1 on any failure.
    """
    command_name = extract_command_token(argv)
    raw_args = tokenize(argv)
    flags = extract_global_flags(raw_args)
    configure_logging(flags.verbose)

    if flags.help or command_name is None or command_name in HELP_COMMANDS:
        out.print(render_full_help(commands, options))
        return CliResult(success=True, exit_code=exit_codes.SUCCESS)

    definition = commands.get(command_name)
    if definition is None:
        return _failure(UnknownCommandError(command_name))

    try:
        outcome = validate(definition.schema, raw_args)
    except ClikitError as exc:
        return _failure(exc)
    if isinstance(outcome, Invalid):
        return _failure(
            ArgumentValidationError(format_validation_errors(outcome.issues), outcome.issues),
        )

    logger.debug("Running command %r", command_name)
    try:
        async with AsyncExitStack() as stack:
            client = client_factory()
            if isinstance(client, Disposable):
                stack.push_async_callback(_dispose, client)
            if flags.no_cache and isinstance(client, CacheDisable):
                client.disable_cache()

            result = definition.handler(outcome.value, client, flags)
            if inspect.isawaitable(result):
                result = await result

            out.print(to_json(result))
    except Exception as exc:
        logger.debug("Command %r failed", command_name, exc_info=True)
        return _failure(exc)

    return CliResult(success=True, exit_code=exit_codes.SUCCESS, data=result)


def main(
    commands: Mapping[str, CommandDefinition],
    client_factory: ClientFactory,
    argv: Sequence[str] | None = None,
    options: RunOptions | None = None,
) -> int:
    """Run synchronously and return the process exit code.

    When *argv* is ``None`` (default), ``sys.argv[1:]`` is used.
    Accepting *argv* enables deterministic testing without monkeypatching.
    """
    if argv is None:
        argv = sys.argv[1:]
    result = asyncio.run(run(commands, client_factory, argv, options))
    return result.exit_code


def run_cli(
    commands: Mapping[str, CommandDefinition],
    client_factory: ClientFactory,
    options: RunOptions | None = None,
    argv: Sequence[str] | None = None,
) -> NoReturn:
    """Top-level error boundary for console-script entry points.

    Guarantees the process never exits with a raw stack trace during
    normal usage.
    """
    try:
        code = main(commands, client_factory, argv, options)
    except KeyboardInterrupt:
        err.print("Aborted by user.")
        code = exit_codes.KEYBOARD_INTERRUPT
    except Exception as exc:  # noqa: BLE001
        print_error(f"Unexpected error: {type(exc).__name__}: {exc}")
        code = exit_codes.GENERAL_ERROR
    sys.exit(code)
