"""Domain models for clikit.

All models are **frozen** dataclasses — immutable value objects with no
behaviour beyond data access.  They are shared by every layer: the
tokenizer produces :data:`RawArguments`, the validation layer produces
:data:`ValidationOutcome`, and the runner produces :class:`CliResult`.
"""

from __future__ import annotations

import enum
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass, field
from typing import Any, Final, Union


RawArguments = Mapping[str, Union[str, bool]]
"""Option name (compact form) → string value or boolean flag."""


class _NoDefault:
    """Sentinel type for "the field declares no default"."""

    _instance: _NoDefault | None = None

    def __new__(cls) -> _NoDefault:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "NO_DEFAULT"

    def __bool__(self) -> bool:
        return False


NO_DEFAULT: Final = _NoDefault()


# ---------------------------------------------------------------------------
# Global flags
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class GlobalFlags:
    """Flags recognised across all commands."""

    no_cache: bool = False
    """``--no-cache`` — ask the client to bypass its cache."""

    help: bool = False
    """``--help`` — render help instead of running a command."""

    verbose: bool = False
    """``--verbose`` — debug logging on stderr."""


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------

CommandHandler = Callable[[Any, Any, GlobalFlags], Union[Awaitable[Any], Any]]
"""``handler(args, client, globals)`` — may return a value or an awaitable."""


@dataclass(frozen=True, slots=True)
class CommandDefinition:
    """A registered command: its argument schema and its handler."""

    schema: Any
    """An :class:`~clikit.core.schema.ArgsSchema` subclass, a refined
    schema, or any type pydantic can validate."""

    handler: CommandHandler

    description: str | None = None
    """One-line summary shown in help output."""


CommandRegistry = Mapping[str, CommandDefinition]
"""Command name as typed on the command line → definition."""


# ---------------------------------------------------------------------------
# Introspection
# ---------------------------------------------------------------------------

class FieldType(str, enum.Enum):
    """Coarse field type shown in help output."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ENUM = "enum"


@dataclass(frozen=True, slots=True)
class SchemaFieldMeta:
    """Help-rendering metadata for one schema field.

    Never used for validation — the runner always validates against the
    schema itself.
    """

    name: str
    """Compact (camel-case) option name."""

    type: FieldType = FieldType.STRING
    required: bool = True
    default: Any = NO_DEFAULT
    description: str | None = None
    enum_values: tuple[str, ...] | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass(frozen=True, slots=True)
class CommandMeta:
    """Name, description and fields of one command, for help generation."""

    name: str
    description: str | None
    fields: tuple[SchemaFieldMeta, ...]


# ---------------------------------------------------------------------------
# Validation outcome
# ---------------------------------------------------------------------------

class IssueKind(str, enum.Enum):
    """Classification of a single validation issue."""

    MISSING = "missing"
    INVALID_TYPE = "invalid_type"
    TOO_SMALL = "too_small"
    TOO_BIG = "too_big"
    INVALID_ENUM = "invalid_enum"
    CUSTOM = "custom"


@dataclass(frozen=True, slots=True)
class FieldIssue:
    """One field-level validation problem."""

    path: tuple[str | int, ...]
    """Location of the offending value; empty for whole-input issues."""

    kind: IssueKind
    message: str
    """Human-readable explanation from the validation layer."""

    expected: str | None = None
    received: str | None = None
    minimum: Any = None
    maximum: Any = None
    options: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Validated:
    """Successful validation carrying the typed arguments."""

    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Invalid:
    """Failed validation carrying every collected issue, in order."""

    issues: tuple[FieldIssue, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return False


ValidationOutcome = Union[Validated, Invalid]


# ---------------------------------------------------------------------------
# Runner configuration and result
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class RunOptions:
    """Program-level settings supplied by the embedding application."""

    program_name: str = "cli"
    description: str | None = None
    usage: str | None = None
    """Replaces the default ``<program> <command> [options]`` line."""


@dataclass(frozen=True, slots=True)
class CliResult:
    """Outcome of a single run, returned by :func:`clikit.cli.runner.run`."""

    success: bool
    exit_code: int
    data: Any = None
    error: str | None = None
