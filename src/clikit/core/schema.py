"""Schema building blocks on top of pydantic.

A command schema is a subclass of :class:`ArgsSchema`::

    class GetOrderArgs(ArgsSchema):
        order_id: str = Field(min_length=1, description="Order ID")
        limit: cli_types.limit(50, 250)

Field names are snake_case in Python and compact on the wire
(``orderId``), matching the compact keys produced by the tokenizer.

This module also defines the closed set of *field shapes* used for
introspection.  :func:`field_shape` turns a pydantic ``FieldInfo`` into
a small tree of :class:`WithDefault` / :class:`Optional` /
:class:`Effect` / :class:`Plain` nodes, so help rendering never has to
reach into pydantic internals.
"""

from __future__ import annotations

import types
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Annotated, Any, Final, Union, get_args, get_origin

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.fields import FieldInfo

from clikit.core.naming import hyphen_to_compact


class _NoValue:
    """Sentinel returned by a preprocessor for "no value provided"."""

    def __repr__(self) -> str:
        return "NO_VALUE"


NO_VALUE: Final = _NoValue()


@dataclass(frozen=True, slots=True)
class Preprocess:
    """Annotation marker: normalise the raw CLI value before validation.

    The wrapped function receives the raw ``str | bool`` value and
    returns the value to validate, or :data:`NO_VALUE` to treat the
    option as absent (so the field's default or required rule applies).
    Only honoured on :class:`ArgsSchema` subclasses.
    """

    func: Callable[[Any], Any]

    def __call__(self, value: Any) -> Any:
        return self.func(value)


# ---------------------------------------------------------------------------
# Field shapes
# ---------------------------------------------------------------------------

@dataclass(frozen=True, slots=True)
class Plain:
    """Leaf node: the declared type with wrappers removed."""

    annotation: Any


@dataclass(frozen=True, slots=True)
class Optional:
    """The field may be omitted; no default is rendered."""

    inner: FieldShape


@dataclass(frozen=True, slots=True)
class WithDefault:
    """The field may be omitted; *producer* yields the default."""

    inner: FieldShape
    producer: Callable[[], Any]


@dataclass(frozen=True, slots=True)
class Effect:
    """The raw value passes through *preprocess* before validation."""

    inner: FieldShape
    preprocess: Preprocess


FieldShape = Union[Plain, Optional, WithDefault, Effect]


def _split_annotated(annotation: Any) -> tuple[Any, tuple[Any, ...]]:
    """Return ``(base, extras)`` for ``Annotated[base, *extras]``."""
    if get_origin(annotation) is Annotated:
        base, *extras = get_args(annotation)
        return base, tuple(extras)
    return annotation, ()


def _strip_none(annotation: Any) -> tuple[Any, bool]:
    """Return ``(annotation without None, was_nullable)``."""
    if get_origin(annotation) not in (Union, types.UnionType):
        return annotation, False
    members = [arg for arg in get_args(annotation) if arg is not type(None)]
    if len(members) == len(get_args(annotation)):
        return annotation, False
    if len(members) == 1:
        return members[0], True
    return Union[tuple(members)], True


def find_preprocess(info: FieldInfo) -> Preprocess | None:
    """Locate the :class:`Preprocess` marker of a field, if any.

    The marker is either in the field's own metadata or, for
    ``cli_types.int() | None``, inside the nullable member.
    """
    for item in info.metadata:
        if isinstance(item, Preprocess):
            return item
    inner, _ = _strip_none(info.annotation)
    for item in _split_annotated(inner)[1]:
        if isinstance(item, Preprocess):
            return item
    return None


def field_shape(info: FieldInfo) -> FieldShape:
    """Build the shape tree of one pydantic field."""
    annotation, nullable = _strip_none(info.annotation)
    shape: FieldShape = Plain(_split_annotated(annotation)[0])

    preprocess = find_preprocess(info)
    if preprocess is not None:
        shape = Effect(shape, preprocess)

    if info.is_required():
        return shape

    # A factory reading the validated data has no value outside validation.
    if info.default_factory_takes_validated_data:
        return Optional(shape)

    if nullable and info.default is None and info.default_factory is None:
        return Optional(shape)

    return WithDefault(shape, lambda: info.get_default(call_default_factory=True))


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

def compact_alias(name: str) -> str:
    """Field name → the compact key the tokenizer produces for its option.

    ``order_id`` → ``orderId``; ``page_2`` → ``page-2`` (the option
    ``--page-2``).
    """
    return hyphen_to_compact(name.replace("_", "-"))


class ArgsSchema(BaseModel):
    """Base class for command argument schemas.

    * Fields are exposed under their compact option names (``order_id``
      → ``orderId``, see :func:`compact_alias`) and may also be
      populated by name.
    * Unknown keys (global flags, options of other commands) are ignored.
    * :class:`Preprocess` markers run before field validation.
    """

    model_config = ConfigDict(
        alias_generator=compact_alias,
        populate_by_name=True,
        extra="ignore",
        frozen=True,
    )

    @model_validator(mode="before")
    @classmethod
    def apply_preprocessors(cls, data: Any) -> Any:
        if not isinstance(data, Mapping):
            return data

        values = dict(data)
        for name, info in cls.model_fields.items():
            preprocess = find_preprocess(info)
            if preprocess is None:
                continue
            key = info.alias if info.alias in values else name
            if key not in values:
                continue
            value = preprocess(values[key])
            if value is NO_VALUE:
                del values[key]
            else:
                values[key] = value
        return values


@dataclass(frozen=True, slots=True)
class RefinedSchema:
    """A schema plus a whole-input check run after it validates."""

    inner: Any
    check: Callable[[Any], bool]
    message: str = "Invalid input"
    path: tuple[str, ...] = ()


def refine(
    schema: Any,
    check: Callable[[Any], bool],
    message: str = "Invalid input",
    *,
    path: tuple[str, ...] = (),
) -> RefinedSchema:
    """Attach a cross-field check to *schema*.

    *check* receives the validated model and returns ``False`` to reject
    it; the resulting issue is reported at *path* (compact field names)
    with *message*.  Refinements may be nested.

    Example::

        DateRange = refine(
            RangeArgs,
            lambda args: args.start <= args.end,
            "start must not be after end",
            path=("start",),
        )
    """
    return RefinedSchema(inner=schema, check=check, message=message, path=tuple(path))


def unwrap_schema(schema: Any) -> type[BaseModel] | None:
    """Peel refinement layers off *schema* and return its model class.

    Returns ``None`` when the schema is not a model (an opaque type).
    """
    while isinstance(schema, RefinedSchema):
        schema = schema.inner
    if (
        isinstance(schema, type)
        and get_origin(schema) is None
        and issubclass(schema, BaseModel)
    ):
        return schema
    return None
