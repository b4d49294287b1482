"""Command-line tokenizer.

Turns a flat argument list into :data:`~clikit.core.models.RawArguments`.
It does **not** validate anything — typing, defaults and error messages
belong to the schema layer.

Supported syntax
----------------
* ``--key value``  — string value
* ``--key=value``  — string value (split at the first ``=`` only)
* ``--flag``       — boolean ``True``
* ``--no-flag``    — boolean ``False`` for ``flag``

Tokens without the ``--`` prefix are never options; the first of them
names the command (see :func:`extract_command_token`).
"""

from __future__ import annotations

from collections.abc import Sequence
from types import MappingProxyType
from typing import Final

from clikit.core.models import GlobalFlags, RawArguments
from clikit.core.naming import hyphen_to_compact

OPTION_PREFIX: Final[str] = "--"
NEGATION_PREFIX: Final[str] = "no-"

GLOBAL_FLAG_NAMES: Final[frozenset[str]] = frozenset({"help", "no-cache", "verbose"})
"""Reserved flags that never take a value and are never negated."""


def tokenize(tokens: Sequence[str]) -> RawArguments:
    """Parse *tokens* into an immutable name → value mapping.

    Rules, first match wins per token:

    1. Tokens not starting with ``--`` are skipped.
    2. ``--key=value`` stores everything after the first ``=``.
    3. A reserved global flag (``--help``, ``--no-cache``,
       ``--verbose``) is set to ``True``.
    4. ``--no-name`` sets ``name`` to ``False``.
    5. A following token without the ``--`` prefix is consumed as the
       value — ``"-5"`` is a value, not an option.
    6. Anything else is a boolean ``True``.

    Later occurrences of a key overwrite earlier ones.

    Example::

        >>> dict(tokenize(["--limit", "50", "--verbose"]))
        {'limit': '50', 'verbose': True}
    """
    args: dict[str, str | bool] = {}
    index = 0
    while index < len(tokens):
        token = tokens[index]
        index += 1

        if not token.startswith(OPTION_PREFIX):
            continue

        body = token[len(OPTION_PREFIX):]

        if "=" in body:
            key, _, value = body.partition("=")
            args[hyphen_to_compact(key)] = value
            continue

        if body in GLOBAL_FLAG_NAMES:
            args[hyphen_to_compact(body)] = True
            continue

        if body.startswith(NEGATION_PREFIX):
            args[hyphen_to_compact(body[len(NEGATION_PREFIX):])] = False
            continue

        if index < len(tokens) and not tokens[index].startswith(OPTION_PREFIX):
            args[hyphen_to_compact(body)] = tokens[index]
            index += 1
        else:
            args[hyphen_to_compact(body)] = True

    return MappingProxyType(args)


def extract_command_token(tokens: Sequence[str]) -> str | None:
    """Return the first token that is not an option, or ``None``.

    The command must come before any space-separated option value:
    in ``--limit 5 list`` the ``5`` is the first non-option token.
    """
    return next((token for token in tokens if not token.startswith(OPTION_PREFIX)), None)


def _flag_is_set(args: RawArguments, key: str) -> bool:
    value = args.get(key)
    return value is True or value == "true"


def extract_global_flags(args: RawArguments) -> GlobalFlags:
    """Derive :class:`GlobalFlags` from tokenized arguments.

    A flag is on when its value is ``True`` or the string ``"true"``
    (``--verbose=true``); every other value leaves it off.
    """
    return GlobalFlags(
        no_cache=_flag_is_set(args, "noCache"),
        help=_flag_is_set(args, "help"),
        verbose=_flag_is_set(args, "verbose"),
    )
