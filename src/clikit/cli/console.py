"""Output helpers with optional Rich support.

Standard output carries results and help; standard error carries error
objects and logs.  Rich is imported lazily so that output still works
when it is not installed, and a console is created per call so the
current ``sys.stdout``/``sys.stderr`` are always honoured.
"""

from __future__ import annotations

import dataclasses
import datetime
import enum
import json
import sys
from collections.abc import Mapping, Set
from decimal import Decimal
from pathlib import PurePath
from typing import Any

from pydantic import BaseModel

from clikit.exceptions import ClikitError


def _load_rich_console_class() -> type[Any]:
    """Return ``rich.console.Console`` class or raise ``ClikitError``."""
    try:
        from rich.console import Console
    except ModuleNotFoundError as exc:
        raise ClikitError(
            "rich is not installed.",
            hint="Install with: pip install rich",
        ) from exc
    return Console


def get_rich_console(*, stderr: bool = False) -> Any:
    """Create a Rich console targeting stdout, or stderr when asked."""
    console_class = _load_rich_console_class()
    return console_class(stderr=stderr)


class _ConsoleProxy:
    """Plain-text writer for one stream with a ``print`` fallback.

    Markup, emoji codes, highlighting and wrapping are disabled: output
    is meant to be piped into other programs as-is.
    """

    def __init__(self, *, stderr: bool) -> None:
        self._stderr: bool = stderr

    def print(self, text: str = "") -> None:
        try:
            rich_console = get_rich_console(stderr=self._stderr)
        except ClikitError:
            print(text, file=sys.stderr if self._stderr else sys.stdout)
            return
        rich_console.print(
            text, markup=False, emoji=False, highlight=False, soft_wrap=True,
        )


out = _ConsoleProxy(stderr=False)
err = _ConsoleProxy(stderr=True)


# ---------------------------------------------------------------------------
# JSON rendering
# ---------------------------------------------------------------------------

def _json_default(value: Any) -> Any:
    """Serialise values the ``json`` module does not know about."""
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    if isinstance(value, (datetime.datetime, datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, enum.Enum):
        return value.value
    if isinstance(value, Decimal):
        return float(value)
    if isinstance(value, (Set, tuple)):
        return list(value)
    if isinstance(value, Mapping):
        return dict(value)
    if isinstance(value, PurePath):
        return str(value)
    return str(value)


def to_json(value: Any) -> str:
    """Pretty-print *value* as JSON with two-space indentation."""
    return json.dumps(value, indent=2, default=_json_default, ensure_ascii=False)


def print_result(value: Any) -> None:
    """Write a command result to standard output."""
    out.print(to_json(value))


def print_error(message: str, *, hint: str | None = None) -> None:
    """Write ``{"error": true, "message": ...}`` to standard error."""
    payload: dict[str, Any] = {"error": True, "message": message}
    if hint:
        payload["hint"] = hint
    err.print(to_json(payload))
