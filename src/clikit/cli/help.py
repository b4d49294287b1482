"""Help text and validation-error rendering.

Everything shown to the user names options in hyphenated form
(``--order-id``); conversion goes through :mod:`clikit.core.naming`.
"""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from clikit.core.introspect import describe_fields
from clikit.core.models import (
    CommandDefinition,
    FieldIssue,
    IssueKind,
    RunOptions,
    SchemaFieldMeta,
)
from clikit.core.naming import compact_to_hyphen

GLOBAL_OPTIONS_HELP: tuple[str, ...] = (
    "  --help, -h      Show this help message",
    "  --no-cache      Disable caching for this request",
    "  --verbose       Enable verbose output",
)


# ---------------------------------------------------------------------------
# Help
# ---------------------------------------------------------------------------

def format_value(value: Any) -> str:
    """Render a default value the way it would be typed on the CLI."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, enum.Enum):
        return str(value.value)
    if isinstance(value, (list, tuple, set, frozenset)):
        return ",".join(format_value(item) for item in value)
    return str(value)


def _field_line(field: SchemaFieldMeta) -> str:
    flag_name = f"--{compact_to_hyphen(field.name)}"
    type_str = "|".join(field.enum_values) if field.enum_values else f"<{field.type.value}>"
    if field.required:
        req_str = "(required)"
    elif field.has_default:
        req_str = f"(default: {format_value(field.default)})"
    else:
        req_str = "(optional)"
    desc = f" - {field.description}" if field.description else ""
    return f"      {flag_name} {type_str} {req_str}{desc}"


def render_command_help(name: str, definition: CommandDefinition) -> str:
    """Usage block for one command::

          get-order
            Retrieve an order by ID
            Options:
              --order-id <string> (required) - Order ID
    """
    lines = [f"  {name}"]
    if definition.description:
        lines.append(f"    {definition.description}")

    fields = describe_fields(definition.schema)
    if fields:
        lines.append("    Options:")
        lines.extend(_field_line(field) for field in fields)

    return "\n".join(lines)


def render_full_help(
    commands: Mapping[str, CommandDefinition],
    options: RunOptions | None = None,
) -> str:
    """Banner, usage, global options, then every command in registration order."""
    options = options or RunOptions()
    usage = options.usage or f"{options.program_name} <command> [options]"

    lines = [options.program_name]
    if options.description:
        lines.append(f"  {options.description}")
    lines += ["", "Usage:", f"  {usage}", "", "Global Options:"]
    lines.extend(GLOBAL_OPTIONS_HELP)
    lines += ["", "Commands:"]

    for name, definition in commands.items():
        lines.append(render_command_help(name, definition))
        lines.append("")

    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Validation errors
# ---------------------------------------------------------------------------

def _flag_path(path: Sequence[str | int]) -> str:
    if not path:
        return "input"
    return f"--{compact_to_hyphen('.'.join(str(part) for part in path))}"


def format_issue(issue: FieldIssue) -> str:
    """One flag-shaped line for a single issue."""
    path = _flag_path(issue.path)

    if issue.kind is IssueKind.MISSING:
        return f"Missing required argument: {path}"
    if issue.kind is IssueKind.INVALID_TYPE:
        return f"{path}: Expected {issue.expected}, got {issue.received}"
    if issue.kind is IssueKind.TOO_SMALL:
        return f"{path}: Value too small (minimum: {issue.minimum})"
    if issue.kind is IssueKind.TOO_BIG:
        return f"{path}: Value too large (maximum: {issue.maximum})"
    if issue.kind is IssueKind.INVALID_ENUM:
        return f"{path}: Invalid value. Expected one of: {', '.join(issue.options)}"
    return f"{path}: {issue.message}"


def format_validation_errors(issues: Iterable[FieldIssue]) -> str:
    """Render every issue, one per line, in the order reported."""
    return "\n".join(format_issue(issue) for issue in issues)
