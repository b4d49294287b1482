"""Custom exception hierarchy for clikit.

Every error that the runner reports to the user maps to a subclass of
:class:`ClikitError`.  Exceptions raised by command handlers are *not*
wrapped — the runner reports their message text as-is — but errors
raised by clikit itself always come from this module.

Hierarchy
---------
ClikitError
├── UnknownCommandError
├── ArgumentValidationError
└── SchemaError
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from clikit.core.models import FieldIssue


class ClikitError(Exception):
    """Base exception for all clikit errors.

    The runner renders ``str(exc)`` as the ``message`` of the error
    object written to stderr, and adds ``hint`` when one is set.
    """

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint: str | None = hint
        """Optional actionable guidance rendered next to the message."""


# --- Usage -----------------------------------------------------------------

class UnknownCommandError(ClikitError):
    """Raised when the command token does not name a registered command."""

    def __init__(self, command: str) -> None:
        super().__init__(
            f"Unknown command: {command}. "
            "Run with --help for available commands.",
        )
        self.command: str = command


# --- Validation ------------------------------------------------------------

class ArgumentValidationError(ClikitError):
    """Raised when raw arguments fail schema validation.

    Carries every collected :class:`~clikit.core.models.FieldIssue`;
    the message is the rendered, flag-shaped error text.
    """

    def __init__(self, message: str, issues: Sequence[FieldIssue]) -> None:
        super().__init__(message)
        self.issues: tuple[FieldIssue, ...] = tuple(issues)


# --- Schema definition -----------------------------------------------------

class SchemaError(ClikitError):
    """Raised when a schema or coercion helper is declared incorrectly."""
