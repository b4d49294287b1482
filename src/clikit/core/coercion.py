"""Reusable field types for common CLI value shapes.

Raw option values are always ``str`` or ``bool``.  Each helper on
:data:`cli_types` returns an ``Annotated`` type that first normalises
that raw value (see :class:`~clikit.core.schema.Preprocess`) and then
hands it to pydantic in strict mode, so range and type errors keep
pydantic's own wording::

    class ListOrdersArgs(ArgsSchema):
        limit: cli_types.limit(50, 250)
        min_total: cli_types.float(min=0) | None = None
        include_line_items: cli_types.bool() = False

An empty value (``--limit=``) counts as "not provided": the field's
default applies, or it is reported as missing.
"""

from __future__ import annotations

import builtins
import math
import re
from datetime import date, datetime
from typing import Annotated, Any

from pydantic import AfterValidator, Field

from clikit.core.schema import NO_VALUE, Preprocess
from clikit.exceptions import SchemaError

_DATETIME_WITH_OFFSET = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}(:\d{2}(\.\d+)?)?(Z|[+-]\d{2}(:?\d{2})?)$",
)
_CALENDAR_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
# ASCII digits only: no underscores, padding or other scripts' digits.
_DECIMAL = re.compile(
    r"[+-]?(?:[0-9]+(?P<fraction>\.[0-9]*)?|(?P<dot>\.[0-9]+))(?P<exponent>[eE][+-]?[0-9]+)?",
)


# ---------------------------------------------------------------------------
# Preprocessors
# ---------------------------------------------------------------------------

def _is_empty(value: Any) -> builtins.bool:
    return value is None or value == ""


def _to_number(value: Any) -> Any:
    """Parse numeric text; anything unparsable is returned unchanged.

    Booleans are left alone so strict validation rejects them.
    """
    if _is_empty(value):
        return NO_VALUE
    if not isinstance(value, str):
        return value
    match = _DECIMAL.fullmatch(value)
    if match is None:
        return value
    if not any(match.group("fraction", "dot", "exponent")):
        return builtins.int(value)
    return builtins.float(value)


def _to_integer(value: Any) -> Any:
    """Like :func:`_to_number`, but integral floats become ``int``.

    A fractional result stays a ``float`` so validation fails rather
    than truncating ``"3.5"`` to ``3``.
    """
    number = _to_number(value)
    if isinstance(number, builtins.float) and math.isfinite(number) and number.is_integer():
        return builtins.int(number)
    return number


def _to_bool(value: Any) -> Any:
    if value is True or value == "true":
        return True
    if value is False or value == "false":
        return False
    return NO_VALUE


def _check_iso_date(value: str) -> str:
    """Accept ``YYYY-MM-DD`` or an ISO 8601 date-time with an offset."""
    try:
        if _DATETIME_WITH_OFFSET.match(value):
            datetime.fromisoformat(value.replace("Z", "+00:00"))
            return value
        if _CALENDAR_DATE.match(value):
            date.fromisoformat(value)
            return value
    except ValueError:
        pass
    raise ValueError(
        f"Invalid date {value!r}: expected YYYY-MM-DD or an ISO 8601 "
        "date-time with offset",
    )


def _check_bounds(minimum: Any, maximum: Any) -> None:
    if minimum is not None and maximum is not None and minimum > maximum:
        raise SchemaError(f"min ({minimum}) must not exceed max ({maximum})")


# ---------------------------------------------------------------------------
# Public helpers
# ---------------------------------------------------------------------------

class _CliTypes:
    """Namespace object exposed as :data:`cli_types`."""

    @staticmethod
    def int(min: builtins.int | None = None, max: builtins.int | None = None) -> Any:
        """Whole number, optionally bounded (inclusive)."""
        _check_bounds(min, max)
        return Annotated[
            builtins.int,
            Preprocess(_to_integer),
            Field(strict=True, ge=min, le=max),
        ]

    @staticmethod
    def float(
        min: builtins.float | None = None,
        max: builtins.float | None = None,
    ) -> Any:
        """Finite number, optionally bounded (inclusive)."""
        _check_bounds(min, max)
        return Annotated[
            builtins.float,
            Preprocess(_to_number),
            Field(strict=True, ge=min, le=max, allow_inf_nan=False),
        ]

    @staticmethod
    def bool() -> Any:
        """``--flag`` / ``--no-flag`` / ``--flag=true|false``.

        Any other value counts as not provided, never as ``False``.
        """
        return Annotated[builtins.bool, Preprocess(_to_bool), Field(strict=True)]

    @staticmethod
    def date() -> Any:
        """ISO 8601 date-time with offset, or a calendar date.

        The validated value is the original string.
        """
        return Annotated[str, Field(strict=True), AfterValidator(_check_iso_date)]

    @staticmethod
    def limit(default: builtins.int = 50, max: builtins.int = 250) -> Any:
        """Pagination size: integer in ``[1, max]``, *default* when omitted."""
        if max < 1:
            raise SchemaError(f"limit max must be at least 1, got {max}")
        if not 1 <= default <= max:
            raise SchemaError(f"limit default {default} is outside [1, {max}]")
        return Annotated[
            builtins.int,
            Preprocess(_to_integer),
            Field(default=default, strict=True, ge=1, le=max),
        ]


cli_types = _CliTypes()
"""Factory namespace: ``cli_types.int()``, ``cli_types.limit(50, 250)``, …"""
