"""Schema validation with pydantic, reported as :class:`FieldIssue` lists.

:func:`validate` is the only place clikit talks to pydantic's
validation engine.  Every pydantic error is translated into a
:class:`~clikit.core.models.FieldIssue` so the rendering layer works
with a small, stable vocabulary instead of pydantic's error codes.
All issues are collected; validation never stops at the first one.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Mapping
from typing import Any

from pydantic import PydanticUserError, TypeAdapter, ValidationError

from clikit.core.introspect import describe_fields
from clikit.core.models import FieldIssue, Invalid, IssueKind, Validated, ValidationOutcome
from clikit.core.schema import RefinedSchema, unwrap_schema
from clikit.exceptions import SchemaError

logger = logging.getLogger(__name__)

_EXPECTED_NAMES: dict[str, str] = {
    "int": "integer",
    "float": "number",
    "finite": "number",
    "bool": "boolean",
    "string": "string",
    "model": "object",
    "dict": "object",
    "list": "array",
}

_MINIMUM_KEYS: dict[str, str] = {
    "greater_than_equal": "ge",
    "greater_than": "gt",
    "too_short": "min_length",
    "string_too_short": "min_length",
}

_MAXIMUM_KEYS: dict[str, str] = {
    "less_than_equal": "le",
    "less_than": "lt",
    "too_long": "max_length",
    "string_too_long": "max_length",
}

_QUOTED = re.compile(r"'([^']*)'")


def validate(schema: Any, raw: Mapping[str, Any]) -> ValidationOutcome:
    """Validate *raw* arguments against *schema*.

    *schema* may be an :class:`~clikit.core.schema.ArgsSchema` (or any
    pydantic model), a :class:`~clikit.core.schema.RefinedSchema`, or any
    other type pydantic can validate.  A refinement's check only runs
    when everything beneath it validated; a check that raises is
    reported like one returning ``False``.

    Raises
    ------
    SchemaError
        If pydantic cannot build a validator for *schema*.
    """
    if isinstance(schema, RefinedSchema):
        outcome = validate(schema.inner, raw)
        if isinstance(outcome, Invalid) or _passes(schema, outcome.value):
            return outcome
        return Invalid((
            FieldIssue(path=schema.path, kind=IssueKind.CUSTOM, message=schema.message),
        ))

    data = dict(raw)
    try:
        model = unwrap_schema(schema)
        if model is not None:
            value = model.model_validate(data)
        else:
            value = TypeAdapter(schema).validate_python(data)
    except ValidationError as exc:
        enum_options = {
            meta.name: meta.enum_values
            for meta in describe_fields(schema)
            if meta.enum_values
        }
        issues = tuple(
            _issue_from_error(error, enum_options)
            for error in exc.errors(include_url=False)
        )
        logger.debug("Validation failed with %d issue(s)", len(issues))
        return Invalid(issues)
    except PydanticUserError as exc:
        raise SchemaError(f"Unusable argument schema: {exc}") from exc

    return Validated(value)


def _passes(schema: RefinedSchema, value: Any) -> bool:
    """Run a refinement check; a check that raises counts as failed."""
    try:
        return bool(schema.check(value))
    except Exception:
        logger.debug("Refinement check raised", exc_info=True)
        return False


# ---------------------------------------------------------------------------
# pydantic error → FieldIssue
# ---------------------------------------------------------------------------

def _received_name(value: Any) -> str:
    """Describe the type of an offending input in CLI terms."""
    if value is None:
        return "undefined"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, float):
        if math.isnan(value):
            return "nan"
        return "number" if value.is_integer() else "float"
    if isinstance(value, int):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, Mapping):
        return "object"
    if isinstance(value, (list, tuple)):
        return "array"
    return type(value).__name__


def _is_type_error(error_type: str) -> bool:
    return (
        error_type.endswith(("_type", "_parsing"))
        or error_type in {"int_from_float", "finite_number"}
    )


def _expected_name(error_type: str) -> str:
    prefix = error_type.split("_", 1)[0]
    return _EXPECTED_NAMES.get(prefix, prefix)


def _enum_options(
    error: Mapping[str, Any],
    enum_options: Mapping[str, tuple[str, ...]],
) -> tuple[str, ...]:
    loc = error.get("loc", ())
    if len(loc) == 1 and loc[0] in enum_options:
        return enum_options[loc[0]]
    expected = str(error.get("ctx", {}).get("expected", ""))
    return tuple(_QUOTED.findall(expected))


def _custom_message(error: Mapping[str, Any]) -> str:
    """Prefer the raised exception's own text over pydantic's prefix."""
    cause = error.get("ctx", {}).get("error")
    if cause is not None and str(cause):
        return str(cause)
    return str(error.get("msg", "Invalid value"))


def _issue_from_error(
    error: Mapping[str, Any],
    enum_options: Mapping[str, tuple[str, ...]],
) -> FieldIssue:
    error_type: str = error["type"]
    path = tuple(error.get("loc", ()))
    message = str(error.get("msg", ""))
    ctx: Mapping[str, Any] = error.get("ctx", {})

    if error_type == "missing" or (_is_type_error(error_type) and error.get("input") is None):
        return FieldIssue(path=path, kind=IssueKind.MISSING, message=message)

    if _is_type_error(error_type):
        return FieldIssue(
            path=path,
            kind=IssueKind.INVALID_TYPE,
            message=message,
            expected=_expected_name(error_type),
            received=_received_name(error.get("input")),
        )

    if error_type in _MINIMUM_KEYS:
        return FieldIssue(
            path=path,
            kind=IssueKind.TOO_SMALL,
            message=message,
            minimum=ctx.get(_MINIMUM_KEYS[error_type]),
        )

    if error_type in _MAXIMUM_KEYS:
        return FieldIssue(
            path=path,
            kind=IssueKind.TOO_BIG,
            message=message,
            maximum=ctx.get(_MAXIMUM_KEYS[error_type]),
        )

    if error_type in {"literal_error", "enum"}:
        return FieldIssue(
            path=path,
            kind=IssueKind.INVALID_ENUM,
            message=message,
            options=_enum_options(error, enum_options),
        )

    return FieldIssue(path=path, kind=IssueKind.CUSTOM, message=_custom_message(error))
