"""Core tree-walking evaluator for Monkey.

`evaluate(node, env)` dispatches on the AST node class and returns one
runtime Object. Failures are Error values, not exceptions: the first Error
produced while evaluating a statement or expression is returned unchanged
by everything that contains it, and nothing after it is evaluated. A
ReturnValue travels the same way until the enclosing function call (or the
program) unwraps it.
"""

from __future__ import annotations

from typing import Sequence

from monkey import ast
from monkey.builtin.env_builtin import lookup_builtin
from monkey.errors import MonkeyTypeError
from monkey.evaluation.apply import apply_function
from monkey.types.environment import Environment
from monkey.types.function import Function
from monkey.types.objects import (
    Array,
    Error,
    Hash,
    HashPair,
    Integer,
    NULL,
    Object,
    ObjectType,
    ReturnValue,
    String,
    FALSE,
    TRUE,
    is_hashable,
    is_terminal,
    is_truthy,
    native_bool,
    wrap_int64,
)


def evaluate(node: ast.Node, env: Environment) -> Object:
    match node:
        # --- Statements ---
        case ast.Program(statements=statements):
            return eval_program(statements, env)
        case ast.BlockStatement(statements=statements):
            return eval_block_statement(statements, env)
        case ast.ExpressionStatement(expression=expression):
            return evaluate(expression, env)
        case ast.LetStatement(name=name, value=value):
            val = evaluate(value, env)
            if is_terminal(val):
                return val
            env.set(name.value, val)
            return NULL
        case ast.ReturnStatement(value=value):
            val = evaluate(value, env)
            if is_terminal(val):
                return val
            return ReturnValue(val)

        # --- Literals ---
        case ast.IntegerLiteral(value=value):
            return Integer(value)
        case ast.StringLiteral(value=value):
            return String(value)
        case ast.Boolean(value=value):
            return native_bool(value)
        case ast.ArrayLiteral(elements=elements):
            values = eval_expressions(elements, env)
            if len(values) == 1 and is_terminal(values[0]):
                return values[0]
            return Array(values)
        case ast.HashLiteral():
            return eval_hash_literal(node, env)
        case ast.FunctionLiteral(parameters=parameters, body=body):
            return Function(parameters, body, env)

        # --- Expressions ---
        case ast.Identifier():
            return eval_identifier(node, env)
        case ast.PrefixExpression(operator=operator, right=right):
            val = evaluate(right, env)
            if is_terminal(val):
                return val
            return eval_prefix_expression(operator, val)
        case ast.InfixExpression(left=left, operator=operator, right=right):
            lval = evaluate(left, env)
            if is_terminal(lval):
                return lval
            rval = evaluate(right, env)
            if is_terminal(rval):
                return rval
            return eval_infix_expression(operator, lval, rval)
        case ast.IfExpression():
            return eval_if_expression(node, env)
        case ast.CallExpression(function=function, arguments=arguments):
            fn = evaluate(function, env)
            if is_terminal(fn):
                return fn
            args = eval_expressions(arguments, env)
            if len(args) == 1 and is_terminal(args[0]):
                return args[0]
            return apply_function(fn, args, evaluate)
        case ast.IndexExpression(left=left, index=index):
            lval = evaluate(left, env)
            if is_terminal(lval):
                return lval
            idx = evaluate(index, env)
            if is_terminal(idx):
                return idx
            return eval_index_expression(lval, idx)

    raise MonkeyTypeError(f"Cannot evaluate {type(node).__name__}: {node!r}")


# -------------------------------
# Statement sequences
# -------------------------------
def eval_program(statements: Sequence[ast.Statement], env: Environment) -> Object:
    result: Object = NULL
    for stmt in statements:
        result = evaluate(stmt, env)
        if isinstance(result, ReturnValue):
            return result.value
        if isinstance(result, Error):
            return result
    return result


def eval_block_statement(statements: Sequence[ast.Statement], env: Environment) -> Object:
    # ReturnValue stays wrapped so enclosing blocks stop too
    result: Object = NULL
    for stmt in statements:
        result = evaluate(stmt, env)
        if is_terminal(result):
            return result
    return result


def eval_expressions(expressions: Sequence[ast.Expression], env: Environment) -> list[Object]:
    """Evaluate left to right; on the first Error or ReturnValue return just [it]."""
    result: list[Object] = []
    for expr in expressions:
        val = evaluate(expr, env)
        if is_terminal(val):
            return [val]
        result.append(val)
    return result


def eval_identifier(node: ast.Identifier, env: Environment) -> Object:
    val = env.get(node.value)
    if val is not None:
        return val
    builtin = lookup_builtin(node.value)
    if builtin is not None:
        return builtin
    return Error(f"identifier not found: {node.value}")


# -------------------------------
# Operators
# -------------------------------
def eval_prefix_expression(operator: str, right: Object) -> Object:
    if operator == "!":
        return FALSE if is_truthy(right) else TRUE
    if operator == "-":
        if not isinstance(right, Integer):
            return Error(f"unknown operator: -{right.type}")
        return Integer(-right.value)
    return Error(f"unknown operator: {operator}{right.type}")


def eval_infix_expression(operator: str, left: Object, right: Object) -> Object:
    if isinstance(left, Integer) and isinstance(right, Integer):
        return eval_integer_infix_expression(operator, left, right)
    if isinstance(left, String) and isinstance(right, String):
        return eval_string_infix_expression(operator, left, right)
    # Booleans and null are singletons: equality is identity
    if operator == "==":
        return native_bool(left is right)
    if operator == "!=":
        return native_bool(left is not right)
    if left.type is not right.type:
        return Error(f"type mismatch: {left.type} {operator} {right.type}")
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


def eval_integer_infix_expression(operator: str, left: Integer, right: Integer) -> Object:
    a, b = left.value, right.value
    match operator:
        case "+":
            return Integer(a + b)
        case "-":
            return Integer(a - b)
        case "*":
            return Integer(a * b)
        case "/":
            if b == 0:
                return Error("division by zero")
            return Integer(wrap_int64(truncating_div(a, b)))
        case "<":
            return native_bool(a < b)
        case ">":
            return native_bool(a > b)
        case "==":
            return native_bool(a == b)
        case "!=":
            return native_bool(a != b)
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


def eval_string_infix_expression(operator: str, left: String, right: String) -> Object:
    match operator:
        case "+":
            return String(left.value + right.value)
        case "==":
            return native_bool(left.value == right.value)
        case "!=":
            return native_bool(left.value != right.value)
    return Error(f"unknown operator: {left.type} {operator} {right.type}")


# -------------------------------
# Conditionals, indexing, hashes
# -------------------------------
def eval_if_expression(node: ast.IfExpression, env: Environment) -> Object:
    condition = evaluate(node.condition, env)
    if is_terminal(condition):
        return condition
    if is_truthy(condition):
        return evaluate(node.consequence, env)
    if node.alternative is not None:
        return evaluate(node.alternative, env)
    return NULL


def eval_index_expression(left: Object, index: Object) -> Object:
    if left.type is ObjectType.ARRAY and index.type is ObjectType.INTEGER:
        return eval_array_index_expression(left, index)
    if left.type is ObjectType.HASH:
        return eval_hash_index_expression(left, index)
    return Error(f"index operator not supported: {left.type}")


def eval_array_index_expression(array: Array, index: Integer) -> Object:
    # Out of range (including negative) is null, not an error
    idx = index.value
    if idx < 0 or idx >= len(array.elements):
        return NULL
    return array.elements[idx]


def eval_hash_index_expression(hash_obj: Hash, index: Object) -> Object:
    if not is_hashable(index):
        return Error(f"unusable as hash key: {index.type}")
    pair = hash_obj.pairs.get(index.hash_key())
    return NULL if pair is None else pair.value


def eval_hash_literal(node: ast.HashLiteral, env: Environment) -> Object:
    pairs: dict = {}
    for key_node, value_node in node.pairs:
        key = evaluate(key_node, env)
        if is_terminal(key):
            return key
        if not is_hashable(key):
            return Error(f"unusable as hash key: {key.type}")
        value = evaluate(value_node, env)
        if is_terminal(value):
            return value
        # Later duplicates overwrite earlier ones
        pairs[key.hash_key()] = HashPair(key, value)
    return Hash(pairs)
