"""Schema field introspection for help rendering.

Pure functions: they read a schema and never mutate or validate with
it.  Validation itself always goes back to the schema directly (see
:mod:`clikit.core.validation`), so this metadata can never drift from
what is actually enforced.
"""

from __future__ import annotations

import enum
from decimal import Decimal
from typing import Any, Literal, get_args, get_origin

from pydantic.fields import FieldInfo

from clikit.core.models import (
    NO_DEFAULT,
    CommandDefinition,
    CommandMeta,
    FieldType,
    SchemaFieldMeta,
)
from clikit.core.schema import (
    Effect,
    FieldShape,
    Optional,
    Plain,
    WithDefault,
    field_shape,
    unwrap_schema,
)


def _classify(annotation: Any) -> tuple[FieldType, tuple[str, ...] | None]:
    """Map a bare annotation onto a :class:`FieldType`."""
    origin = get_origin(annotation)
    if origin is Literal:
        return FieldType.ENUM, tuple(str(value) for value in get_args(annotation))

    if origin is None and isinstance(annotation, type):
        if issubclass(annotation, enum.Enum):
            return FieldType.ENUM, tuple(str(member.value) for member in annotation)
        if issubclass(annotation, bool):
            return FieldType.BOOLEAN, None
        if issubclass(annotation, (int, float, Decimal)):
            return FieldType.NUMBER, None

    return FieldType.STRING, None


def _describe(name: str, info: FieldInfo) -> SchemaFieldMeta:
    required = True
    default: Any = NO_DEFAULT
    shape: FieldShape = field_shape(info)

    while not isinstance(shape, Plain):
        if isinstance(shape, WithDefault):
            required = False
            default = shape.producer()
        elif isinstance(shape, Optional):
            required = False
        elif not isinstance(shape, Effect):
            raise TypeError(f"Unknown field shape: {shape!r}")
        shape = shape.inner

    field_type, enum_values = _classify(shape.annotation)
    return SchemaFieldMeta(
        name=info.alias or name,
        type=field_type,
        required=required,
        default=default,
        description=info.description,
        enum_values=enum_values,
    )


def describe_fields(schema: Any) -> list[SchemaFieldMeta]:
    """List the fields of *schema* in declaration order.

    Refinement wrappers are unwrapped first; a schema that is not a
    model (an opaque type) has no fields and yields ``[]``.
    """
    model = unwrap_schema(schema)
    if model is None:
        return []
    return [_describe(name, info) for name, info in model.model_fields.items()]


def describe_command(name: str, definition: CommandDefinition) -> CommandMeta:
    """Collect the help metadata of one registered command."""
    return CommandMeta(
        name=name,
        description=definition.description,
        fields=tuple(describe_fields(definition.schema)),
    )
