# schemacoerce

A small library for working with JSON Schema documents as Python objects:

- an immutable, typed model of schema nodes (`any`, `null`, `boolean`,
  `string`, `number`, `integer`, `array`, `object`) that converts to and from
  JSON dictionaries;
- path queries (`lookup`, `take`, `insert`) over plain JSON values and over
  schemas, with paths written as `"a/b/c"` or as a list of keys;
- compiling a schema and validating values against it;
- deriving a *coercion* that turns values described by one schema into values
  described by another, and applying it.

## Installation

```
pip install schemacoerce
```

## Querying JSON values

`schemacoerce.query` works on plain `dict`/`list`/scalar values. Only objects
(`dict`) can be descended into. No operation changes its input.

```python
from schemacoerce.query import MISSING, InsertError, insert, lookup, split_path, take

doc = {"one": 1, "two": {"three": 3}}

split_path("two/three")         # ["two", "three"]
split_path("")                  # [] - the empty path

lookup(doc, "two/three")        # 3
lookup(doc, "")                 # the whole document
lookup(doc, ["two", "three"])   # 3
lookup(doc, "one/missing")      # raises KeyError

rest, taken = take(doc, "two")  # ({"one": 1}, {"three": 3})
rest, taken = take(doc, "")     # (MISSING, doc)
rest, taken = take(doc, "zero") # (doc, MISSING)

insert(doc, "two/four", 4)      # a new document; missing objects are created
try:
    insert(doc, "one/zero", None)
except InsertError as err:
    err.insertee, err.path      # (None, ["one", "zero"])
```

`take` returns `MISSING` (a falsy sentinel, distinct from `None`, which is
JSON `null`) for the remainder when nothing is left of it - the whole value
was taken, or an object on the way became empty - and for the taken element
when the path leads nowhere.

## Building schemas

`schemacoerce.schema` holds the node classes. Builder methods return new
nodes.

```python
from schemacoerce.schema import (
    ArrayNode, IntegerNode, ObjectNode, StringNode, for_literal, from_json,
)

person = (
    ObjectNode()
    .add_property("name", StringNode())
    .add_property("age", IntegerNode())
    .add_required("name")
    .with_description("A person")
)

person.description()   # "A person"
person.to_json()
# {"type": "object",
#  "properties": {"name": {"type": "string"}, "age": {"type": "integer"}},
#  "required": ["name"],
#  "description": "A person"}

from_json({"type": "array", "items": {"type": "string"}})  # ArrayNode(StringNode())
for_literal({"a": 1, "b": "x"})  # object schema, both keys required
```

`ObjectNode` also has `with_properties`, `rm_property`, `with_required` and
`rm_required`; every node has `with_extra_props`. Keywords the model does not
interpret are kept in a node's `extra` mapping and written back by
`to_json`.

`from_json` accepts a JSON object. An object that is not one of the known
node shapes (an unknown `"type"`, an `object` without `properties`, an
`array` without `items`, and so on) becomes an `InvalidNode` holding the
document unchanged; its `is_valid` is `False`. Anything that is not an object
raises `ValueError`.

### Querying schemas

```python
from schemacoerce.schema import lookup_schema, take_schema, insert_schema

found = lookup_schema(person, "name")   # QueryNode(schema=StringNode(), is_required=True)
rest, taken = take_schema(person, "age")
bigger = insert_schema(person, "address/city", StringNode())
```

These behave like the JSON queries above: `lookup_schema` raises `KeyError`
when the path leads nowhere, `take_schema` may return `MISSING`, and
`insert_schema` raises `InsertError` when the path passes through a node that
is not an object. `insert_schema` takes either a `SchemaNode` or a
`QueryNode`. Required keys are left as they were.

## Validating

```python
from schemacoerce.compiled import CompileError, ValidationError, compile_schema

compiled = compile_schema(person)
compiled.validate({"name": "Ann", "age": 3})   # returns None
try:
    compiled.validate({"age": "three"})
except ValidationError as err:
    for error in err.errors:
        print(error["path"], error["keyword"], error["message"])
```

Schemas are checked against the JSON Schema draft 4 meta-schema, extended
with the `"any"` type; a schema that fails the check raises `CompileError`.
`SchemaCompiled.schema` returns the JSON form of the compiled schema.

## Coercing between schemas

```python
from schemacoerce.coercion import derive_coercion
from schemacoerce.schema import IntegerNode, ObjectNode, StringNode

source = ObjectNode().add_property("id", IntegerNode()).add_required("id")
target = ObjectNode().add_property("id", StringNode()).add_required("id")

coercion = derive_coercion(source, target)
coercion.coerce({"id": 42, "extra": True})   # {"id": "42"}
coercion.is_subtyping_only()                 # False
```

The coercions are `Identity`, `ReplaceWithLiteral`, `NumberToString`,
`ArrayCoercion` and `ObjectCoercion`. In short:

- anything goes into `any` unchanged;
- anything goes into `null` by being replaced with `None`;
- `integer` and `number` go into `number` unchanged, and into `string` as
  their decimal text;
- arrays are coerced item by item;
- an object coercion keeps only the target's properties that the source also
  has, each coerced in turn; if there are none, values pass unchanged.

Failures are subclasses of `CoercionError`: `derive_coercion` raises
`IncompatibleSchemas` or `ObjectFieldsMissing` (when the target requires
fields the source does not); `Coercion.coerce` raises `UnexpectedInput`,
`ObjectFieldsMissing` or `JsNumberError` (a number that is not a finite
double).

## What it does not do

This is a library only: it has no command-line tool, and it does not read or
write schema files itself - pass it dictionaries loaded with `json` or any
other parser.

## Running the tests

```
pip install -e ".[test]"
pytest
```