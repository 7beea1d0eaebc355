from dataclasses import dataclass

import pytest

from dapwire.types import Kind, is_kind, kind_of


@dataclass
class AnyTestObject:
    i: int = 0
    n: float = 0.0


TEST_VALUES = [
    (None, Kind.NULL),
    (20, Kind.INTEGER),
    (True, Kind.BOOLEAN),
    (123.45, Kind.NUMBER),
    ("hello world", Kind.STRING),
    (["one", "two", "three"], Kind.ARRAY),
    (AnyTestObject(10, 20.30), Kind.STRUCT),
]


def test_empty_is_null_only():
    value = None
    assert is_kind(value, Kind.NULL)
    for kind in Kind:
        if kind is not Kind.NULL:
            assert not is_kind(value, kind)


def test_boolean():
    assert is_kind(True, Kind.BOOLEAN)
    assert not is_kind(True, Kind.INTEGER)
    assert kind_of(False) is Kind.BOOLEAN


def test_integer():
    assert is_kind(10, Kind.INTEGER)
    assert kind_of(10) is Kind.INTEGER


def test_number():
    assert is_kind(123.0, Kind.NUMBER)
    assert not is_kind(123.0, Kind.INTEGER)


def test_string():
    assert kind_of("hello world") is Kind.STRING


def test_array():
    assert kind_of([10, 20, 30]) is Kind.ARRAY
    assert kind_of((10, 20, 30)) is Kind.ARRAY


def test_object():
    obj = {"one": 1, "two": 2, "three": 3}
    assert kind_of(obj) is Kind.OBJECT
    assert all(kind_of(v) is Kind.INTEGER for v in obj.values())


def test_struct_object():
    value = AnyTestObject(5, 3.0)
    assert kind_of(value) is Kind.STRUCT
    assert value.i == 5
    assert value.n == 3.0


@pytest.mark.parametrize("value,expected", TEST_VALUES)
def test_kind_is_exclusive(value, expected):
    assert kind_of(value) is expected
    for kind in Kind:
        assert is_kind(value, kind) == (kind is expected)


@pytest.mark.parametrize("value,expected", TEST_VALUES)
def test_repeated_assign_takes_last_kind(value, expected):
    holder = "hello world"
    holder = value
    assert kind_of(holder) is expected


def test_dataclass_type_is_not_a_value():
    with pytest.raises(TypeError):
        kind_of(AnyTestObject)


def test_unsupported_value():
    with pytest.raises(TypeError):
        kind_of({1, 2})
    assert not is_kind(object(), Kind.STRUCT)