import pytest

from schemacoerce.compiled import (
    ROOT_URL,
    CompileError,
    SchemaCompiled,
    ValidationError,
    compile_schema,
)
from schemacoerce.schema import (
    AnyNode,
    ArrayNode,
    IntegerNode,
    ObjectNode,
    StringNode,
    for_literal,
    from_json,
)


def test_string_schema_accepts_strings_and_rejects_numbers():
    compiled = compile_schema(StringNode())
    assert compiled.validate("text") is None
    with pytest.raises(ValidationError):
        compiled.validate(12)


def test_root_url_is_fixed():
    compiled = compile_schema(StringNode())
    assert compiled.root_url == "json-schema://root"
    assert SchemaCompiled.root_url == ROOT_URL


def test_compiled_schema_keeps_json_form():
    node = ObjectNode().add_property("a", IntegerNode()).add_required("a")
    compiled = compile_schema(node)
    assert compiled.schema == node.to_json()


@pytest.mark.parametrize("value", [None, True, 1, 1.5, "s", [1, "x"], {"k": "v"}])
def test_any_property_accepts_every_value_but_stays_required(value):
    compiled = compile_schema(ObjectNode().add_property("a", AnyNode()).add_required("a"))
    assert compiled.validate({"a": value}) is None
    with pytest.raises(ValidationError):
        compiled.validate({})


def test_array_of_any_compiles():
    compiled = compile_schema(ArrayNode(AnyNode()))
    assert compiled.validate([None, 1, "x"]) is None
    with pytest.raises(ValidationError):
        compiled.validate({"not": "an array"})


def test_literal_schema_validates_its_literal():
    document = {"name": "n", "count": 3, "tags": ["a"], "nested": {"flag": False}}
    compiled = compile_schema(for_literal(document))
    assert compiled.validate(document) is None
    with pytest.raises(ValidationError):
        compiled.validate({**document, "count": "three"})


def test_error_path_points_at_offending_value():
    compiled = compile_schema(ObjectNode().add_property("a", IntegerNode()))
    with pytest.raises(ValidationError) as info:
        compiled.validate({"a": "x"})
    assert [error["path"] for error in info.value.errors] == ["/a"]
    assert info.value.errors[0]["keyword"] == "type"


def test_every_violation_is_reported():
    node = ObjectNode().add_property("a", IntegerNode()).add_property("b", IntegerNode())
    compiled = compile_schema(node)
    with pytest.raises(ValidationError) as info:
        compiled.validate({"a": "x", "b": "y"})
    assert len(info.value.errors) == 2
    assert str(info.value).startswith("ValidationError")


def test_array_item_error_path():
    compiled = compile_schema(ArrayNode(IntegerNode()))
    with pytest.raises(ValidationError) as info:
        compiled.validate([1, "x"])
    assert [error["path"] for error in info.value.errors] == ["/1"]


def test_integer_rejects_booleans():
    compiled = compile_schema(IntegerNode())
    assert compiled.validate(7) is None
    with pytest.raises(ValidationError):
        compiled.validate(True)


def test_invalid_node_with_empty_required_does_not_compile():
    node = from_json({"type": "object", "required": []})
    assert not node.is_valid
    with pytest.raises(CompileError):
        compile_schema(node)


def test_unserialisable_extra_does_not_compile():
    node = StringNode(extra={"weird": {1, 2}})
    with pytest.raises(CompileError):
        compile_schema(node)


def test_extra_keywords_take_effect():
    compiled = compile_schema(StringNode(extra={"maxLength": 3}))
    assert compiled.validate("abc") is None
    with pytest.raises(ValidationError):
        compiled.validate("abcd")