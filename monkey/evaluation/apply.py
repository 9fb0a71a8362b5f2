"""Function application for the Monkey evaluator.

Calls go through `apply_function` whether the callee is a user Function or a
native Builtin. A user function body runs in a fresh frame enclosing the
function's captured environment; a `return` inside it is unwrapped here and
goes no further.
"""

from __future__ import annotations

from typing import Callable, Sequence

from monkey.types.environment import Environment
from monkey.types.function import Builtin, Function
from monkey.types.objects import Error, Object, ReturnValue

EvaluatorFn = Callable[..., Object]


def extend_function_env(fn: Function, args: Sequence[Object]) -> Environment:
    """Bind arguments positionally in a new frame over the closure environment."""
    env = Environment.enclosed(fn.env)
    for param, arg in zip(fn.parameters, args):
        env.set(param.value, arg)
    return env


def unwrap_return_value(obj: Object) -> Object:
    if isinstance(obj, ReturnValue):
        return obj.value
    return obj


def apply_function(fn: Object, args: Sequence[Object], evaluate_fn: EvaluatorFn) -> Object:
    """Apply a Function or Builtin to already-evaluated arguments.

    Arity mismatches on user functions are errors, never padded or truncated.
    """
    if isinstance(fn, Function):
        if len(args) != len(fn.parameters):
            return Error(
                f"wrong number of arguments: want={len(fn.parameters)}, got={len(args)}"
            )
        evaluated = evaluate_fn(fn.body, extend_function_env(fn, args))
        return unwrap_return_value(evaluated)
    if isinstance(fn, Builtin):
        return fn(*args)
    return Error(f"not a function: {fn.type}")
