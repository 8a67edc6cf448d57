"""Coercions: recipes that turn values of one schema into another.

:func:`derive_coercion` works out how values described by a source schema
can be made to fit a target schema. The resulting :class:`Coercion` is then
applied to values with :meth:`Coercion.coerce`.
"""

from __future__ import annotations

import copy
import math
from abc import ABC, abstractmethod
from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from .schema import (
    AnyNode,
    ArrayNode,
    BooleanNode,
    IntegerNode,
    NullNode,
    NumberNode,
    ObjectNode,
    SchemaNode,
    StringNode,
)

__all__ = [
    "Coercion",
    "Identity",
    "ReplaceWithLiteral",
    "NumberToString",
    "ArrayCoercion",
    "ObjectCoercion",
    "CoercionError",
    "IncompatibleSchemas",
    "UnexpectedInput",
    "ObjectFieldsMissing",
    "JsNumberError",
    "derive_coercion",
]


class CoercionError(Exception):
    """Base of all coercion failures."""


class IncompatibleSchemas(CoercionError):
    """No coercion leads from the source schema to the target schema."""

    def __init__(self, source: SchemaNode, target: SchemaNode) -> None:
        super().__init__(f"CoercionError::IncompatibleSchemas: {source!r} -> {target!r}")
        self.source = source
        self.target = target


class UnexpectedInput(CoercionError):
    """A value does not have the shape the coercion expects."""

    def __init__(self, input: Any, coercion: Coercion) -> None:
        super().__init__(f"CoercionError::UnexpectedInput: {input!r} {coercion!r}")
        self.input = input
        self.coercion = coercion


class ObjectFieldsMissing(CoercionError):
    """Fields needed by the target are absent."""

    def __init__(self, fields: Iterable[str]) -> None:
        self.fields = frozenset(fields)
        super().__init__(f"CoercionError::ObjectFieldsMissing: {sorted(self.fields)!r}")


class JsNumberError(CoercionError):
    """A number cannot be represented as a finite double."""

    def __init__(self) -> None:
        super().__init__("CoercionError::JsNumberError")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _format_double(number: float) -> str:
    """Format like a shortest round-trip double, never in exponent form."""
    return format(Decimal(repr(number)).normalize(), "f")


class Coercion(ABC):
    """A transformation from values of one schema to values of another."""

    @abstractmethod
    def coerce(self, value: Any) -> Any:
        """Return *value* transformed; raise :class:`CoercionError` on bad input."""

    @abstractmethod
    def is_subtyping_only(self) -> bool:
        """Whether the coercion never changes a value, only drops parts of it."""


@dataclass(frozen=True)
class Identity(Coercion):
    """Leaves values unchanged."""

    def coerce(self, value: Any) -> Any:
        return value

    def is_subtyping_only(self) -> bool:
        return True


@dataclass(frozen=True)
class ReplaceWithLiteral(Coercion):
    """Replaces every value with a fixed literal."""

    literal: Any

    def coerce(self, value: Any) -> Any:
        return copy.deepcopy(self.literal)

    def is_subtyping_only(self) -> bool:
        return False


@dataclass(frozen=True)
class NumberToString(Coercion):
    """Turns a number into its decimal text."""

    def coerce(self, value: Any) -> Any:
        if not _is_number(value):
            raise UnexpectedInput(value, self)
        try:
            number = float(value)
        except OverflowError:
            raise JsNumberError() from None
        if not math.isfinite(number):
            raise JsNumberError()
        return _format_double(number)

    def is_subtyping_only(self) -> bool:
        return False


@dataclass(frozen=True)
class ArrayCoercion(Coercion):
    """Applies a coercion to every item of an array."""

    items: Coercion

    def coerce(self, value: Any) -> Any:
        if not isinstance(value, list):
            raise UnexpectedInput(value, self)
        return [self.items.coerce(item) for item in value]

    def is_subtyping_only(self) -> bool:
        return self.items.is_subtyping_only()


@dataclass(frozen=True)
class ObjectCoercion(Coercion):
    """Keeps only the listed fields of an object, each coerced in turn."""

    properties: tuple[tuple[str, Coercion], ...]

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "properties", tuple((name, coercion) for name, coercion in self.properties)
        )

    def coerce(self, value: Any) -> Any:
        if not isinstance(value, dict):
            raise UnexpectedInput(value, self)
        output: dict[str, Any] = {}
        for name, coercion in self.properties:
            if name not in value:
                raise ObjectFieldsMissing({name})
            output[name] = coercion.coerce(value[name])
        return output

    def is_subtyping_only(self) -> bool:
        return all(coercion.is_subtyping_only() for _, coercion in self.properties)


def derive_coercion(source: SchemaNode, target: SchemaNode) -> Coercion:
    """Return the coercion taking values of *source* to values of *target*.

    Raises :class:`IncompatibleSchemas` when there is none and
    :class:`ObjectFieldsMissing` when the target requires fields the source
    does not guarantee.
    """
    if not (source.is_valid and target.is_valid):
        raise IncompatibleSchemas(source, target)

    if isinstance(target, AnyNode):
        return Identity()
    if isinstance(target, NullNode):
        return Identity() if isinstance(source, NullNode) else ReplaceWithLiteral(None)
    if isinstance(target, BooleanNode):
        if isinstance(source, BooleanNode):
            return Identity()
    elif isinstance(target, IntegerNode):
        if isinstance(source, IntegerNode):
            return Identity()
    elif isinstance(target, NumberNode):
        if isinstance(source, (NumberNode, IntegerNode)):
            return Identity()
    elif isinstance(target, StringNode):
        if isinstance(source, StringNode):
            return Identity()
        if isinstance(source, (NumberNode, IntegerNode)):
            return NumberToString()
    elif isinstance(target, ArrayNode):
        if isinstance(source, ArrayNode):
            items = derive_coercion(source.items, target.items)
            return items if isinstance(items, Identity) else ArrayCoercion(items)
    elif isinstance(target, ObjectNode):
        if isinstance(source, ObjectNode):
            return _derive_object(source, target)
    raise IncompatibleSchemas(source, target)


def _derive_object(source: ObjectNode, target: ObjectNode) -> Coercion:
    missing = target.required - source.required
    if missing:
        raise ObjectFieldsMissing(missing)
    properties = [
        (name, derive_coercion(source.properties[name], schema))
        for name, schema in target.properties.items()
        if name in source.properties
    ]
    return ObjectCoercion(tuple(properties)) if properties else Identity()