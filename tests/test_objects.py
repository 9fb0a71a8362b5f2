import pytest

from monkey.types.objects import (
    Array,
    Boolean,
    Error,
    FALSE,
    Hash,
    HashKey,
    HashPair,
    Integer,
    NULL,
    ObjectType,
    ReturnValue,
    String,
    TRUE,
    fnv1a_64,
    is_hashable,
    is_truthy,
    native_bool,
    wrap_int64,
)


def test_string_hash_keys():
    hello1 = String("Hello World")
    hello2 = String("Hello World")
    diff = String("My name is johnny")
    assert hello1.hash_key() == hello2.hash_key()
    assert hello1.hash_key() != diff.hash_key()


def test_hash_keys_include_type():
    assert Integer(1).hash_key() != TRUE.hash_key()
    assert Integer(0).hash_key() != FALSE.hash_key()
    assert TRUE.hash_key() == HashKey(ObjectType.BOOLEAN, 1)
    assert Integer(-4).hash_key() == HashKey(ObjectType.INTEGER, -4)


def test_fnv1a_reference_values():
    assert fnv1a_64(b"") == 0xCBF29CE484222325
    assert fnv1a_64(b"a") == 0xAF63DC4C8601EC8C


@pytest.mark.parametrize(
    "obj,hashable",
    [(Integer(1), True), (TRUE, True), (String("a"), True), (NULL, False), (Array([]), False)],
)
def test_is_hashable(obj, hashable):
    assert is_hashable(obj) is hashable


def test_truthiness():
    assert not is_truthy(FALSE)
    assert not is_truthy(NULL)
    for obj in (TRUE, Integer(0), String(""), Array([])):
        assert is_truthy(obj)


def test_native_bool_uses_singletons():
    assert native_bool(True) is TRUE
    assert native_bool(False) is FALSE
    assert Boolean(True) is not TRUE


@pytest.mark.parametrize(
    "value,expected",
    [(2**63, -(2**63)), (2**64 + 5, 5), (-(2**63) - 1, 2**63 - 1), (42, 42)],
)
def test_int64_wrapping(value, expected):
    assert wrap_int64(value) == expected
    assert Integer(value).value == expected


def test_inspect():
    assert Integer(5).inspect() == "5"
    assert TRUE.inspect() == "true"
    assert NULL.inspect() == "null"
    assert String("hi").inspect() == "hi"
    assert Array([Integer(1), String("a")]).inspect() == "[1, a]"
    assert ReturnValue(Integer(3)).inspect() == "3"
    assert Error("boom").inspect() == "ERROR: boom"
    key = String("k")
    assert Hash({key.hash_key(): HashPair(key, Integer(1))}).inspect() == "{k: 1}"


def test_object_types():
    assert Integer(1).type is ObjectType.INTEGER
    assert f"{ObjectType.RETURN_VALUE}" == "RETURN_VALUE"
