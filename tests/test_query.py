import copy

import pytest

from schemacoerce.query import MISSING, InsertError, insert, lookup, split_path, take


def make_object():
    return {
        "one": "one",
        "two": {
            "one": "two/one",
            "two": "two/two",
            "three": {
                "one": "two/three/one",
                "two": ["two/three/one[0]", "two/three/one[1]", "two/three/one[2]"],
            },
        },
    }


THREE = {
    "one": "two/three/one",
    "two": ["two/three/one[0]", "two/three/one[1]", "two/three/one[2]"],
}


def test_string_as_path():
    path = "two/three"
    assert lookup(make_object(), path) == THREE


def test_list_as_path():
    assert lookup(make_object(), ["two", "three", "one"]) == "two/three/one"


def test_empty_string_is_an_empty_path():
    assert split_path("") == []


def test_split_path_components():
    assert split_path("a/b/c") == ["a", "b", "c"]
    assert split_path(("x", "y")) == ["x", "y"]


def test_lookup_01():
    obj = make_object()
    assert lookup(obj, "") == obj
    assert lookup(obj, "one") == "one"
    with pytest.raises(KeyError):
        lookup(obj, "one/two")
    assert lookup(obj, "two") == make_object()["two"]
    assert lookup(obj, "two/one") == "two/one"
    assert lookup(obj, "two/two") == "two/two"
    assert lookup(obj, "two/three") == THREE
    assert lookup(obj, "two/three/one") == "two/three/one"
    assert lookup(obj, "two/three/two") == [
        "two/three/one[0]",
        "two/three/one[1]",
        "two/three/one[2]",
    ]
    with pytest.raises(KeyError):
        lookup(obj, "two/three/two/wat!?")


def test_lookup_finds_null():
    assert lookup({"a": None}, "a") is None


def test_take_01():
    obj = make_object()
    remainder, taken = take(obj, "")
    assert remainder is MISSING
    assert taken == make_object()


def test_take_02():
    obj = make_object()
    remainder, taken = take(obj, "zero")
    assert remainder == make_object()
    assert taken is MISSING


def test_take_03():
    remainder, taken = take(make_object(), "two")
    assert remainder == {"one": "one"}
    assert taken == make_object()["two"]


def test_take_04():
    remainder, taken = take(make_object(), "two/three")
    assert remainder == {
        "one": "one",
        "two": {"one": "two/one", "two": "two/two"},
    }
    assert taken == THREE


def test_take_does_not_modify_input():
    obj = make_object()
    take(obj, "two/three/one")
    assert obj == make_object()


def test_take_collapses_empty_objects():
    remainder, taken = take({"a": {"b": 1}}, "a/b")
    assert remainder is MISSING
    assert taken == 1


def test_take_through_non_object():
    remainder, taken = take({"a": [1]}, "a/b")
    assert remainder == {"a": [1]}
    assert taken is MISSING


def test_insert_01():
    expected = {
        "one": "one",
        "two": {"one": "two/one", "two": "two/two", "three": "two/three"},
    }
    assert insert(make_object(), "two/three", "two/three") == expected


def test_insert_02():
    expected = make_object()
    expected["two"]["three"]["three"] = "two/three/three"
    assert insert(make_object(), "two/three/three", "two/three/three") == expected


def test_insert_03():
    original = make_object()
    obj = copy.deepcopy(original)
    with pytest.raises(InsertError) as info:
        insert(obj, "one/zero", None)
    assert info.value.insertee is None
    assert info.value.path == ["one", "zero"]
    assert obj == original


def test_insert_04():
    assert insert(make_object(), "", None) is None


def test_insert_creates_intermediate_objects():
    assert insert({}, "a/b/c", 5) == {"a": {"b": {"c": 5}}}


def test_insert_then_lookup_round_trip():
    result = insert(make_object(), ["two", "four", "x"], [1, 2])
    assert lookup(result, "two/four/x") == [1, 2]
    assert lookup(result, "two/one") == "two/one"