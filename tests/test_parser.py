import pytest

from monkey import ast
from monkey.reader.lexer import Lexer
from monkey.reader.parser import Parser, ParseDiagnostic, Precedence, parse


def _parse_ok(source):
    program, errors = parse(source)
    assert errors == [], f"parse errors for {source!r}: {errors}"
    return program


def _single_expression(source):
    program = _parse_ok(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, ast.ExpressionStatement)
    return stmt.expression


@pytest.mark.parametrize(
    "source,name,value",
    [
        ("let x = 5;", "x", "5"),
        ("let y = true;", "y", "true"),
        ("let foobar = y;", "foobar", "y"),
        ("let z = 1 + 2", "z", "(1 + 2)"),
    ],
)
def test_let_statements(source, name, value):
    (stmt,) = _parse_ok(source).statements
    assert isinstance(stmt, ast.LetStatement)
    assert stmt.token_literal() == "let"
    assert stmt.name.value == name
    assert str(stmt.value) == value


@pytest.mark.parametrize("source,value", [("return 5;", "5"), ("return x", "x"), ("return a + b;", "(a + b)")])
def test_return_statements(source, value):
    (stmt,) = _parse_ok(source).statements
    assert isinstance(stmt, ast.ReturnStatement)
    assert str(stmt.value) == value


def test_program_rendering():
    program = _parse_ok("let myVar = anotherVar; return myVar;")
    assert str(program) == "let myVar = anotherVar;return myVar;"
    assert program.token_literal() == "let"


def test_empty_program():
    program = _parse_ok("")
    assert program.statements == ()
    assert program.token_literal() == ""


@pytest.mark.parametrize(
    "source,expected",
    [
        ("-a * b", "((-a) * b)"),
        ("!-a", "(!(-a))"),
        ("a + b + c", "((a + b) + c)"),
        ("a + b - c", "((a + b) - c)"),
        ("a * b * c", "((a * b) * c)"),
        ("a * b / c", "((a * b) / c)"),
        ("a + b / c", "(a + (b / c))"),
        ("a + b * c", "(a + (b * c))"),
        ("a + b * c + d / e - f", "(((a + (b * c)) + (d / e)) - f)"),
        ("3 + 4; -5 * 5", "(3 + 4)((-5) * 5)"),
        ("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))"),
        ("5 < 4 != 3 > 4", "((5 < 4) != (3 > 4))"),
        ("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))"),
        ("true", "true"),
        ("3 > 5 == false", "((3 > 5) == false)"),
        ("1 + (2 + 3) + 4", "((1 + (2 + 3)) + 4)"),
        ("(5 + 5) * 2", "((5 + 5) * 2)"),
        ("-(5 + 5)", "(-(5 + 5))"),
        ("!(true == true)", "(!(true == true))"),
        ("a + add(b * c) + d", "((a + add((b * c))) + d)"),
        ("add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))", "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))"),
        ("add(a + b + c * d / f + g)", "add((((a + b) + ((c * d) / f)) + g))"),
        ("a * [1, 2, 3, 4][b * c] * d", "((a * ([1, 2, 3, 4][(b * c)])) * d)"),
        ("add(a * b[2], b[1], 2 * [1, 2][1])", "add((a * (b[2])), (b[1]), (2 * ([1, 2][1])))"),
    ],
)
def test_operator_precedence(source, expected):
    assert str(_parse_ok(source)) == expected


@pytest.mark.parametrize(
    "source,cls,value",
    [
        ("foobar;", ast.Identifier, "foobar"),
        ("5;", ast.IntegerLiteral, 5),
        ('"hello world";', ast.StringLiteral, "hello world"),
        ("true;", ast.Boolean, True),
        ("false;", ast.Boolean, False),
        ("9223372036854775807", ast.IntegerLiteral, 2**63 - 1),
    ],
)
def test_literal_expressions(source, cls, value):
    expr = _single_expression(source)
    assert isinstance(expr, cls)
    assert expr.value == value


def test_prefix_and_infix_nodes():
    expr = _single_expression("!5 == -x")
    assert isinstance(expr, ast.InfixExpression)
    assert expr.operator == "=="
    assert isinstance(expr.left, ast.PrefixExpression) and expr.left.operator == "!"
    assert isinstance(expr.right, ast.PrefixExpression) and expr.right.operator == "-"


def test_if_expression():
    expr = _single_expression("if (x < y) { x }")
    assert isinstance(expr, ast.IfExpression)
    assert str(expr.condition) == "(x < y)"
    assert str(expr.consequence) == "x"
    assert expr.alternative is None


def test_if_else_expression():
    expr = _single_expression("if (x < y) { x } else { y }")
    assert str(expr.alternative) == "y"
    assert str(expr) == "if(x < y) xelse y"


def test_function_literal():
    expr = _single_expression("fn(x, y) { x + y; }")
    assert isinstance(expr, ast.FunctionLiteral)
    assert [p.value for p in expr.parameters] == ["x", "y"]
    assert str(expr.body) == "(x + y)"
    assert str(expr) == "fn(x, y) (x + y)"


@pytest.mark.parametrize(
    "source,params",
    [("fn() {};", []), ("fn(x) {};", ["x"]), ("fn(x, y, z) {};", ["x", "y", "z"])],
)
def test_function_parameters(source, params):
    expr = _single_expression(source)
    assert [p.value for p in expr.parameters] == params


def test_call_expression():
    expr = _single_expression("add(1, 2 * 3, 4 + 5);")
    assert isinstance(expr, ast.CallExpression)
    assert str(expr.function) == "add"
    assert [str(a) for a in expr.arguments] == ["1", "(2 * 3)", "(4 + 5)"]


def test_array_and_index():
    expr = _single_expression("[1, 2 * 2, 3 + 3]")
    assert isinstance(expr, ast.ArrayLiteral)
    assert [str(e) for e in expr.elements] == ["1", "(2 * 2)", "(3 + 3)"]
    expr = _single_expression("myArray[1 + 1]")
    assert isinstance(expr, ast.IndexExpression)
    assert str(expr) == "(myArray[(1 + 1)])"


def test_empty_array():
    expr = _single_expression("[]")
    assert isinstance(expr, ast.ArrayLiteral)
    assert expr.elements == ()


def test_hash_literal_keeps_source_order():
    expr = _single_expression('{"one": 1, "two": 2, "three": 3}')
    assert isinstance(expr, ast.HashLiteral)
    assert [(str(k), str(v)) for k, v in expr.pairs] == [("one", "1"), ("two", "2"), ("three", "3")]


def test_hash_literal_with_expressions():
    expr = _single_expression('{"one": 0 + 1, "two": 10 - 8, true: 15 / 5}')
    assert [str(v) for _, v in expr.pairs] == ["(0 + 1)", "(10 - 8)", "(15 / 5)"]


def test_empty_hash_literal():
    expr = _single_expression("{}")
    assert isinstance(expr, ast.HashLiteral)
    assert expr.pairs == ()


def test_ast_is_immutable():
    expr = _single_expression("x")
    with pytest.raises(AttributeError):
        expr.value = "y"


def test_precedence_order():
    assert Precedence.LOWEST < Precedence.EQUALS < Precedence.LESSGREATER < Precedence.SUM
    assert Precedence.SUM < Precedence.PRODUCT < Precedence.PREFIX < Precedence.CALL < Precedence.INDEX


# -------------------------------
# Diagnostics
# -------------------------------
@pytest.mark.parametrize(
    "source,first_error",
    [
        ("let x 5;", "expected next token to be =, got INT instead"),
        ("let = 10;", "expected next token to be IDENT, got = instead"),
        ("let 838383;", "expected next token to be IDENT, got INT instead"),
        ("add(1, 2", "expected next token to be ), got EOF instead"),
        ("[1, 2", "expected next token to be ], got EOF instead"),
        ('{"a" 1}', "expected next token to be :, got INT instead"),
        ("if (x) { x", "expected next token to be }, got EOF instead"),
        ("fn(x y) {}", "expected next token to be ), got IDENT instead"),
        ("(1 + 2", "expected next token to be ), got EOF instead"),
        ("}", "no prefix parse function for } found"),
        ('"abc', "no prefix parse function for ILLEGAL found"),
        ("9223372036854775808", 'could not parse "9223372036854775808" as integer'),
    ],
)
def test_parse_errors(source, first_error):
    program, errors = parse(source)
    assert isinstance(program, ast.Program)
    assert errors
    assert errors[0] == first_error


def test_let_without_name_reports_each_problem():
    _, errors = parse("let = 10;")
    assert errors == [
        "expected next token to be IDENT, got = instead",
        "no prefix parse function for = found",
    ]


def test_parser_resumes_after_error():
    program, errors = parse("let 838383; let y = 2;")
    assert errors == ["expected next token to be IDENT, got INT instead"]
    assert [str(s) for s in program.statements] == ["838383", "let y = 2;"]


def test_partial_program_is_returned():
    program, errors = parse("if (x) { x")
    assert len(errors) == 1
    assert len(program.statements) == 1


def test_diagnostic_positions():
    parser = Parser(Lexer("let a = 1;\nlet x 5;"))
    parser.parse_program()
    assert parser.diagnostics == [
        ParseDiagnostic("expected next token to be =, got INT instead", 2, 7)
    ]
    assert parser.errors == ["expected next token to be =, got INT instead"]
