"""Schema nodes: a small, typed model of JSON Schema documents.

A schema is a tree of :class:`SchemaNode` values. Every recognised
``"type"`` has its own node class. A document that cannot be read as one of
them is kept whole as an :class:`InvalidNode`. Keywords the model does not
interpret (``description``, ``minimum`` and so on) are kept in ``extra``.
Nodes are immutable; the builder methods return new nodes.
"""

from __future__ import annotations

import copy
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field, replace
from typing import Any, ClassVar, Union

from .query import MISSING, InsertError, PathLike, split_path

__all__ = [
    "SchemaNode",
    "AnyNode",
    "NullNode",
    "BooleanNode",
    "StringNode",
    "NumberNode",
    "IntegerNode",
    "ArrayNode",
    "ObjectNode",
    "InvalidNode",
    "QueryNode",
    "from_json",
    "for_literal",
    "lookup_schema",
    "take_schema",
    "insert_schema",
]

_DESCRIPTION_KEY = "description"
_I64_MIN = -(2**63)
_I64_MAX = 2**63 - 1


class _Unparseable(Exception):
    """The data does not describe a valid node."""


@dataclass(frozen=True)
class SchemaNode:
    """Base of all schema nodes; holds the keywords the model leaves alone."""

    extra: Mapping[str, Any] = field(default_factory=dict, kw_only=True)

    type_name: ClassVar[str | None] = None

    def __post_init__(self) -> None:
        if type(self) is SchemaNode:
            raise TypeError("SchemaNode is abstract; use one of its node classes")
        object.__setattr__(self, "extra", dict(self.extra))

    @property
    def is_valid(self) -> bool:
        """Whether this node is one of the recognised schema types."""
        return True

    def description(self) -> str | None:
        """Return the ``description`` keyword if it holds a string."""
        value = self.extra.get(_DESCRIPTION_KEY)
        return value if isinstance(value, str) else None

    def with_description(self, description: str) -> SchemaNode:
        """Return a copy carrying *description*."""
        return replace(self, extra={**self.extra, _DESCRIPTION_KEY: description})

    def with_extra_props(self, extra_props: Mapping[str, Any]) -> SchemaNode:
        """Return a copy whose extra keywords are exactly *extra_props*."""
        return replace(self, extra=dict(extra_props))

    def to_json(self) -> dict[str, Any]:
        """Return the node as a JSON-compatible dictionary."""
        data: dict[str, Any] = {"type": self.type_name}
        data.update(self._own_json())
        for key, value in self.extra.items():
            data.setdefault(key, copy.deepcopy(value))
        return data

    def _own_json(self) -> dict[str, Any]:
        return {}

    @classmethod
    def _from_fields(cls, fields: dict[str, Any]) -> SchemaNode:
        return cls(extra=fields)


@dataclass(frozen=True)
class AnyNode(SchemaNode):
    """Accepts any value."""

    type_name: ClassVar[str] = "any"


@dataclass(frozen=True)
class NullNode(SchemaNode):
    """Accepts ``null``."""

    type_name: ClassVar[str] = "null"


@dataclass(frozen=True)
class BooleanNode(SchemaNode):
    """Accepts booleans."""

    type_name: ClassVar[str] = "boolean"


@dataclass(frozen=True)
class StringNode(SchemaNode):
    """Accepts strings."""

    type_name: ClassVar[str] = "string"


@dataclass(frozen=True)
class NumberNode(SchemaNode):
    """Accepts any number."""

    type_name: ClassVar[str] = "number"


@dataclass(frozen=True)
class IntegerNode(SchemaNode):
    """Accepts integers."""

    type_name: ClassVar[str] = "integer"


@dataclass(frozen=True)
class ArrayNode(SchemaNode):
    """Accepts arrays whose items all match ``items``."""

    items: SchemaNode

    type_name: ClassVar[str] = "array"

    def __post_init__(self) -> None:
        super().__post_init__()
        if not isinstance(self.items, SchemaNode):
            raise TypeError(f"array items must be a SchemaNode, not {self.items!r}")

    def _own_json(self) -> dict[str, Any]:
        return {"items": self.items.to_json()}

    @classmethod
    def _from_fields(cls, fields: dict[str, Any]) -> SchemaNode:
        if "items" not in fields:
            raise _Unparseable("array without items")
        items = fields.pop("items")
        if not isinstance(items, dict):
            raise _Unparseable("array items is not an object")
        return cls(from_json(items), extra=fields)


@dataclass(frozen=True)
class ObjectNode(SchemaNode):
    """Accepts objects with the given properties, some of them required."""

    properties: Mapping[str, SchemaNode] = field(default_factory=dict)
    required: frozenset[str] = field(default_factory=frozenset)

    type_name: ClassVar[str] = "object"

    def __post_init__(self) -> None:
        super().__post_init__()
        properties = dict(self.properties)
        for key, schema in properties.items():
            if not isinstance(schema, SchemaNode):
                raise TypeError(f"property {key!r} must be a SchemaNode, not {schema!r}")
        object.__setattr__(self, "properties", properties)
        object.__setattr__(self, "required", frozenset(self.required))

    def with_properties(self, properties: Mapping[str, SchemaNode]) -> ObjectNode:
        """Return a copy with *properties* in place of the current ones."""
        return replace(self, properties=dict(properties))

    def add_property(self, key: str, schema: SchemaNode) -> ObjectNode:
        """Return a copy with property *key* set to *schema*."""
        return replace(self, properties={**self.properties, key: schema})

    def rm_property(self, key: str) -> ObjectNode:
        """Return a copy without property *key*."""
        properties = {k: v for k, v in self.properties.items() if k != key}
        return replace(self, properties=properties)

    def with_required(self, required: Iterable[str]) -> ObjectNode:
        """Return a copy whose required keys are exactly *required*."""
        return replace(self, required=frozenset(required))

    def add_required(self, key: str) -> ObjectNode:
        """Return a copy in which *key* is required."""
        return replace(self, required=self.required | {key})

    def rm_required(self, key: str) -> ObjectNode:
        """Return a copy in which *key* is not required."""
        return replace(self, required=self.required - {key})

    def _own_json(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "properties": {key: node.to_json() for key, node in self.properties.items()}
        }
        if self.required:
            data["required"] = sorted(self.required)
        return data

    @classmethod
    def _from_fields(cls, fields: dict[str, Any]) -> SchemaNode:
        if "properties" not in fields:
            raise _Unparseable("object without properties")
        raw_properties = fields.pop("properties")
        if not isinstance(raw_properties, dict) or not all(
            isinstance(value, dict) for value in raw_properties.values()
        ):
            raise _Unparseable("object properties must map names to objects")
        properties = {key: from_json(value) for key, value in raw_properties.items()}

        required: frozenset[str] = frozenset()
        if "required" in fields:
            raw_required = fields.pop("required")
            if not isinstance(raw_required, list) or not all(
                isinstance(key, str) for key in raw_required
            ):
                raise _Unparseable("object required must be a list of strings")
            required = frozenset(raw_required)

        return cls(properties, required, extra=fields)


@dataclass(frozen=True)
class InvalidNode(SchemaNode):
    """A schema document that is not one of the recognised node types."""

    @property
    def is_valid(self) -> bool:
        return False

    def to_json(self) -> dict[str, Any]:
        return copy.deepcopy(dict(self.extra))


@dataclass(frozen=True)
class QueryNode:
    """A schema found under a path, with whether its parent requires it."""

    schema: SchemaNode
    is_required: bool


_NODE_TYPES: dict[str, type[SchemaNode]] = {
    cls.type_name: cls
    for cls in (
        AnyNode,
        NullNode,
        BooleanNode,
        StringNode,
        NumberNode,
        IntegerNode,
        ArrayNode,
        ObjectNode,
    )
}


def from_json(data: Any) -> SchemaNode:
    """Read a schema node from a JSON object.

    An object that is not a valid node becomes an :class:`InvalidNode`;
    anything that is not an object raises ``ValueError``.
    """
    if not isinstance(data, dict):
        raise ValueError(f"a schema must be a JSON object, not {data!r}")
    data = copy.deepcopy(data)
    tag = data.get("type")
    node_class = _NODE_TYPES.get(tag) if isinstance(tag, str) else None
    if node_class is not None:
        fields = {key: value for key, value in data.items() if key != "type"}
        try:
            return node_class._from_fields(fields)
        except _Unparseable:
            pass
    return InvalidNode(extra=data)


def for_literal(value: Any) -> SchemaNode:
    """Return the narrowest schema describing the JSON value *value*.

    Objects get every one of their keys as a required property.
    """
    if value is None:
        return NullNode()
    if isinstance(value, bool):
        return BooleanNode()
    if isinstance(value, int):
        return IntegerNode() if _I64_MIN <= value <= _I64_MAX else NumberNode()
    if isinstance(value, float):
        return NumberNode()
    if isinstance(value, str):
        return StringNode()
    if isinstance(value, list):
        return ArrayNode(AnyNode())
    if isinstance(value, dict):
        node = ObjectNode()
        for key, item in value.items():
            node = node.add_property(key, for_literal(item)).add_required(key)
        return node
    raise TypeError(f"not a JSON value: {value!r}")


def lookup_schema(schema: SchemaNode, path: PathLike) -> QueryNode:
    """Return the schema under *path* and whether it is required.

    Raises ``KeyError`` when the path does not lead to a schema.
    """
    components = split_path(path)
    node, is_required = schema, True
    for depth, key in enumerate(components):
        if not isinstance(node, ObjectNode) or key not in node.properties:
            raise KeyError("/".join(components[: depth + 1]))
        node, is_required = node.properties[key], key in node.required
    return QueryNode(node, is_required)


def take_schema(schema: SchemaNode, path: PathLike) -> tuple[Any, Any]:
    """Split the schema under *path* out of *schema*.

    Returns ``(remainder, taken)`` where *taken* is a :class:`QueryNode`.
    Either may be ``MISSING``: the remainder when nothing is left, the taken
    node when the path leads nowhere. Required keys are left as they were.
    """
    return _take(schema, True, split_path(path))


def _take(node: SchemaNode, is_required: bool, components: list[str]) -> tuple[Any, Any]:
    if not components:
        return MISSING, QueryNode(node, is_required)
    if not isinstance(node, ObjectNode):
        return node, MISSING
    key, rest = components[0], components[1:]
    if key not in node.properties:
        return node, MISSING

    child_remainder, taken = _take(node.properties[key], key in node.required, rest)
    properties = dict(node.properties)
    if child_remainder is MISSING:
        del properties[key]
    else:
        properties[key] = child_remainder
    if not properties:
        return MISSING, taken
    return node.with_properties(properties), taken


def insert_schema(
    schema: SchemaNode, path: PathLike, insertee: Union[QueryNode, SchemaNode]
) -> SchemaNode:
    """Return a copy of *schema* with *insertee* placed under *path*.

    Missing object nodes along the path are created. Raises ``InsertError``
    when the path passes through a node that is not an object.
    """
    new_node = insertee.schema if isinstance(insertee, QueryNode) else insertee
    components = split_path(path)
    try:
        return _insert(schema, components, new_node)
    except _Unparseable:
        raise InsertError(insertee, components) from None


def _insert(node: SchemaNode, components: list[str], insertee: SchemaNode) -> SchemaNode:
    if not components:
        return insertee
    if not isinstance(node, ObjectNode):
        raise _Unparseable
    key, rest = components[0], components[1:]
    child = node.properties.get(key, ObjectNode())
    return node.add_property(key, _insert(child, rest, insertee))