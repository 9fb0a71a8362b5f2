"""Runtime values of the Monkey evaluator.

Every value has a `type` (an ObjectType) and an `inspect()` rendering used by
the REPL. Booleans and null are singletons: TRUE, FALSE and NULL are the only
instances ever handed out, so `==` on them is an identity check.

ReturnValue and Error are control-flow carriers: the evaluator stops at the
first one it sees and passes it up unchanged.
"""

from __future__ import annotations

from enum import Enum
from typing import NamedTuple, Union

INT64_MASK = (1 << 64) - 1
INT64_SIGN = 1 << 63

FNV_OFFSET_BASIS = 0xCBF29CE484222325
FNV_PRIME = 0x100000001B3


class ObjectType(str, Enum):
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    NULL = "NULL"
    STRING = "STRING"
    ARRAY = "ARRAY"
    HASH = "HASH"
    FUNCTION = "FUNCTION"
    BUILTIN = "BUILTIN"
    RETURN_VALUE = "RETURN_VALUE"
    ERROR = "ERROR"

    def __str__(self) -> str:
        return self.value


class HashKey(NamedTuple):
    type: ObjectType
    value: int


def wrap_int64(value: int) -> int:
    """Wrap an arbitrary Python int to signed 64-bit two's complement."""
    value &= INT64_MASK
    return value - (1 << 64) if value & INT64_SIGN else value


def fnv1a_64(data: bytes) -> int:
    h = FNV_OFFSET_BASIS
    for byte in data:
        h ^= byte
        h = (h * FNV_PRIME) & INT64_MASK
    return h


class Integer:
    __slots__ = ("value",)
    type = ObjectType.INTEGER

    def __init__(self, value: int):
        self.value = wrap_int64(value)

    def inspect(self) -> str:
        return str(self.value)

    def hash_key(self) -> HashKey:
        return HashKey(self.type, self.value)

    def __repr__(self) -> str:
        return f"Integer({self.value})"


class Boolean:
    __slots__ = ("value",)
    type = ObjectType.BOOLEAN

    def __init__(self, value: bool):
        self.value = value

    def inspect(self) -> str:
        return "true" if self.value else "false"

    def hash_key(self) -> HashKey:
        return HashKey(self.type, 1 if self.value else 0)

    def __repr__(self) -> str:
        return f"Boolean({self.value})"


class Null:
    __slots__ = ()
    type = ObjectType.NULL

    def inspect(self) -> str:
        return "null"

    def __repr__(self) -> str:
        return "NULL"


class String:
    __slots__ = ("value",)
    type = ObjectType.STRING

    def __init__(self, value: str):
        self.value = value

    def inspect(self) -> str:
        return self.value

    def hash_key(self) -> HashKey:
        return HashKey(self.type, fnv1a_64(self.value.encode("utf-8")))

    def __repr__(self) -> str:
        return f"String({self.value!r})"


class Array:
    __slots__ = ("elements",)
    type = ObjectType.ARRAY

    def __init__(self, elements: list[Object]):
        self.elements = elements

    def inspect(self) -> str:
        return "[" + ", ".join(e.inspect() for e in self.elements) + "]"

    def __repr__(self) -> str:
        return f"Array({self.elements!r})"


class HashPair(NamedTuple):
    key: Object
    value: Object


class Hash:
    """Mapping from HashKey to the original key object and its value.

    Rendering follows insertion order, but callers must not rely on it.
    """

    __slots__ = ("pairs",)
    type = ObjectType.HASH

    def __init__(self, pairs: dict[HashKey, HashPair]):
        self.pairs = pairs

    def inspect(self) -> str:
        items = (f"{p.key.inspect()}: {p.value.inspect()}" for p in self.pairs.values())
        return "{" + ", ".join(items) + "}"

    def __repr__(self) -> str:
        return f"Hash({self.inspect()})"


class ReturnValue:
    __slots__ = ("value",)
    type = ObjectType.RETURN_VALUE

    def __init__(self, value: Object):
        self.value = value

    def inspect(self) -> str:
        return self.value.inspect()

    def __repr__(self) -> str:
        return f"ReturnValue({self.value!r})"


class Error:
    __slots__ = ("message",)
    type = ObjectType.ERROR

    def __init__(self, message: str):
        self.message = message

    def inspect(self) -> str:
        return f"ERROR: {self.message}"

    def __repr__(self) -> str:
        return f"Error({self.message!r})"


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def native_bool(flag: bool) -> Boolean:
    return TRUE if flag else FALSE


def is_hashable(obj: Object) -> bool:
    return isinstance(obj, (Integer, Boolean, String))


def is_terminal(obj: Object) -> bool:
    """Error or ReturnValue: evaluation of the enclosing code stops here."""
    return isinstance(obj, (Error, ReturnValue))


def is_truthy(obj: Object) -> bool:
    """Only false and null are falsy; 0, "" and [] are all truthy."""
    return obj is not FALSE and obj is not NULL


# Function and Builtin live in monkey.types.function
Object = Union[Integer, Boolean, Null, String, Array, Hash, ReturnValue, Error, "Function", "Builtin"]
