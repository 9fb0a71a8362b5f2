"""Built-in functions for the Monkey runtime.

The table is process-wide and read-only. Identifier lookup falls back to it
when a name is not bound anywhere in the environment chain, so a `let` binding
can shadow a builtin.

Builtins never raise for bad input: arity and type problems come back as
Error values, like any other evaluation failure.
"""
from __future__ import annotations

from typing import Optional

from monkey.types.function import Builtin
from monkey.types.objects import Array, Error, Integer, NULL, Object, ObjectType, String


def wrong_arity(got: int, want: int) -> Error:
    return Error(f"wrong number of arguments. got={got}, want={want}")


def _array_arg(name: str, args: tuple[Object, ...]) -> Array | Error:
    """Validate the single-Array argument shared by first/last/rest."""
    if len(args) != 1:
        return wrong_arity(len(args), 1)
    if args[0].type is not ObjectType.ARRAY:
        return Error(f"argument to `{name}` must be ARRAY, got {args[0].type}")
    return args[0]


# -------------------------------
# Builtins
# -------------------------------
def builtin_len(*args: Object) -> Object:
    """Length of a String (in characters) or an Array."""
    if len(args) != 1:
        return wrong_arity(len(args), 1)
    arg = args[0]
    if isinstance(arg, String):
        return Integer(len(arg.value))
    if isinstance(arg, Array):
        return Integer(len(arg.elements))
    return Error(f"argument to `len` not supported, got {arg.type}")


def builtin_first(*args: Object) -> Object:
    arr = _array_arg("first", args)
    if isinstance(arr, Error):
        return arr
    return arr.elements[0] if arr.elements else NULL


def builtin_last(*args: Object) -> Object:
    arr = _array_arg("last", args)
    if isinstance(arr, Error):
        return arr
    return arr.elements[-1] if arr.elements else NULL


def builtin_rest(*args: Object) -> Object:
    """A new Array holding every element but the first; null for an empty Array."""
    arr = _array_arg("rest", args)
    if isinstance(arr, Error):
        return arr
    if not arr.elements:
        return NULL
    return Array(list(arr.elements[1:]))


def builtin_push(*args: Object) -> Object:
    """A new Array with the value appended; the argument is left untouched."""
    if len(args) != 2:
        return wrong_arity(len(args), 2)
    arr, value = args
    if not isinstance(arr, Array):
        return Error(f"argument to `push` must be ARRAY, got {arr.type}")
    return Array(arr.elements + [value])


def builtin_puts(*args: Object) -> Object:
    for arg in args:
        print(arg.inspect())
    return NULL


BUILTINS: dict[str, Builtin] = {
    name: Builtin(name, fn)
    for name, fn in (
        ("len", builtin_len),
        ("first", builtin_first),
        ("last", builtin_last),
        ("rest", builtin_rest),
        ("push", builtin_push),
        ("puts", builtin_puts),
    )
}


def lookup_builtin(name: str) -> Optional[Builtin]:
    return BUILTINS.get(name)
