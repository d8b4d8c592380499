from typing import Any

import pytest
from hypothesis import given
from hypothesis import strategies as st

from monkey.monkey_ast import (
    BooleanLiteral,
    CallExpression,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
)
from monkey.monkey_lexer import Lexer
from monkey.monkey_parser import Parser, parse


def parse_ok(source: str) -> Program:
    program, errors = parse(source)
    assert errors == [], f"parser had {len(errors)} errors: {errors}"
    return program


def single_expression(source: str) -> Any:
    program = parse_ok(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, ExpressionStatement)
    return stmt.expression


@pytest.mark.parametrize(
    "source,name,value",
    [
        ("let x = 5;", "x", "5"),
        ("let y = true;", "y", "true"),
        ("let foobar = y", "foobar", "y"),
    ],
)  # type: ignore[misc]
def test_let_statements(source: str, name: str, value: str) -> None:
    program = parse_ok(source)
    assert len(program.statements) == 1
    stmt = program.statements[0]
    assert isinstance(stmt, LetStatement)
    assert stmt.token_literal() == "let"
    assert stmt.name.value == name
    assert str(stmt.value) == value


@pytest.mark.parametrize(
    "source,value",
    [("return 5;", "5"), ("return true;", "true"), ("return foobar", "foobar")],
)  # type: ignore[misc]
def test_return_statements(source: str, value: str) -> None:
    program = parse_ok(source)
    stmt = program.statements[0]
    assert isinstance(stmt, ReturnStatement)
    assert str(stmt.return_value) == value


def test_identifier_expression() -> None:
    expr = single_expression("foobar;")
    assert isinstance(expr, Identifier)
    assert expr.value == "foobar"
    assert expr.token_literal() == "foobar"


def test_integer_literal_expression() -> None:
    expr = single_expression("5;")
    assert isinstance(expr, IntegerLiteral)
    assert expr.value == 5


def test_float_literal_expression() -> None:
    expr = single_expression("3.25")
    assert isinstance(expr, FloatLiteral)
    assert expr.value == 3.25


@pytest.mark.parametrize("source,value", [("true;", True), ("false;", False)])  # type: ignore[misc]
def test_boolean_expression(source: str, value: bool) -> None:
    expr = single_expression(source)
    assert isinstance(expr, BooleanLiteral)
    assert expr.value is value


@pytest.mark.parametrize(
    "source,operator,operand",
    [("!5;", "!", "5"), ("-15;", "-", "15"), ("!true;", "!", "true"), ("-x", "-", "x")],
)  # type: ignore[misc]
def test_prefix_expressions(source: str, operator: str, operand: str) -> None:
    expr = single_expression(source)
    assert isinstance(expr, PrefixExpression)
    assert expr.operator == operator
    assert str(expr.right) == operand


@pytest.mark.parametrize(
    "operator", ["+", "-", "*", "/", ">", "<", "==", "!="]
)  # type: ignore[misc]
def test_infix_expressions(operator: str) -> None:
    expr = single_expression(f"5 {operator} 6;")
    assert isinstance(expr, InfixExpression)
    assert expr.operator == operator
    assert isinstance(expr.left, IntegerLiteral) and expr.left.value == 5
    assert isinstance(expr.right, IntegerLiteral) and expr.right.value == 6


@pytest.mark.parametrize(
    "source,expected",
    [
        ("a + b * c", "(a + (b * c))"),
        ("-a * b", "((-a) * b)"),
        ("!-a", "(!(-a))"),
        ("a + b + c", "((a + b) + c)"),
        ("a + b - c", "((a + b) - c)"),
        ("a * b * c", "((a * b) * c)"),
        ("a * b / c", "((a * b) / c)"),
        ("a + b / c", "(a + (b / c))"),
        ("a + b * c + d / e - f", "(((a + (b * c)) + (d / e)) - f)"),
        ("3 + 4; -5 * 5", "(3 + 4); ((-5) * 5)"),
        ("5 > 4 == 3 < 4", "((5 > 4) == (3 < 4))"),
        ("5 < 4 != 3 > 4", "((5 < 4) != (3 > 4))"),
        ("3 + 4 * 5 == 3 * 1 + 4 * 5", "((3 + (4 * 5)) == ((3 * 1) + (4 * 5)))"),
        ("true", "true"),
        ("3 > 5 == false", "((3 > 5) == false)"),
        ("1 + (2 + 3) + 4", "((1 + (2 + 3)) + 4)"),
        ("(5 + 5) * 2", "((5 + 5) * 2)"),
        ("2 / (5 + 5)", "(2 / (5 + 5))"),
        ("-(5 + 5)", "(-(5 + 5))"),
        ("!(true == true)", "(!(true == true))"),
        ("a + add(b * c) + d", "((a + add((b * c))) + d)"),
        (
            "add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))",
            "add(a, b, 1, (2 * 3), (4 + 5), add(6, (7 * 8)))",
        ),
        ("add(a + b + c * d / f + g)", "add((((a + b) + ((c * d) / f)) + g))"),
        ("1.5 * 2.0 - 0.25", "((1.5 * 2.0) - 0.25)"),
    ],
)  # type: ignore[misc]
def test_operator_precedence_parsing(source: str, expected: str) -> None:
    assert str(parse_ok(source)) == expected


def test_if_expression() -> None:
    expr = single_expression("if (x < y) { x }")
    assert isinstance(expr, IfExpression)
    assert str(expr.condition) == "(x < y)"
    assert len(expr.consequence.statements) == 1
    assert str(expr.consequence.statements[0]) == "x"
    assert expr.alternative is None


def test_if_else_expression() -> None:
    expr = single_expression("if (x < y) { x } else { y }")
    assert isinstance(expr, IfExpression)
    assert expr.alternative is not None
    assert str(expr.alternative) == "{ y }"
    assert str(expr) == "if ((x < y)) { x } else { y }"


def test_function_literal() -> None:
    expr = single_expression("fn(x, y) { x + y; }")
    assert isinstance(expr, FunctionLiteral)
    assert [p.value for p in expr.parameters] == ["x", "y"]
    assert len(expr.body.statements) == 1
    assert str(expr.body.statements[0]) == "(x + y)"


@pytest.mark.parametrize(
    "source,params",
    [("fn() {};", []), ("fn(x) {};", ["x"]), ("fn(x, y, z) {};", ["x", "y", "z"])],
)  # type: ignore[misc]
def test_function_parameters(source: str, params: list[str]) -> None:
    expr = single_expression(source)
    assert isinstance(expr, FunctionLiteral)
    assert [p.value for p in expr.parameters] == params


def test_call_expression() -> None:
    expr = single_expression("add(1, 2 * 3, 4 + 5);")
    assert isinstance(expr, CallExpression)
    assert isinstance(expr.function, Identifier)
    assert expr.function.value == "add"
    assert [str(a) for a in expr.arguments] == ["1", "(2 * 3)", "(4 + 5)"]


def test_call_with_no_arguments() -> None:
    expr = single_expression("f()")
    assert isinstance(expr, CallExpression)
    assert expr.arguments == []


def test_immediately_invoked_function_literal() -> None:
    expr = single_expression("fn(x) { x }(5)")
    assert isinstance(expr, CallExpression)
    assert isinstance(expr.function, FunctionLiteral)
    assert str(expr) == "fn(x) { x }(5)"


def test_chained_calls_are_left_associative() -> None:
    assert str(parse_ok("f(1)(2)")) == "f(1)(2)"


@pytest.mark.parametrize(
    "source,errors",
    [
        ("let = 5;", ["expected next token to be IDENT, got ASSIGN"]),
        ("let x 5;", ["expected next token to be ASSIGN, got INT"]),
        ("(1 + 2", ["expected next token to be RPAREN, got EOF"]),
        (")", ["no prefix parse function for RPAREN"]),
        ("if x { 1 }", ["expected next token to be LPAREN, got IDENT"]),
        ("if (x) 1", ["expected next token to be LBRACE, got INT"]),
        ("fn(x, 1) { x }", ["expected next token to be IDENT, got INT"]),
        ("fn(x y) { x }", ["expected next token to be RPAREN, got IDENT"]),
        ("add(1, 2", ["expected next token to be RPAREN, got EOF"]),
        ("if (x) { 1", ["expected next token to be RBRACE, got EOF"]),
        ("99999999999999999999", ["could not parse 99999999999999999999 as integer"]),
        ("1" * 5000, [f"could not parse {'1' * 5000} as integer"]),
        ("@", ["no prefix parse function for ILLEGAL"]),
    ],
)  # type: ignore[misc]
def test_parse_errors(source: str, errors: list[str]) -> None:
    _, actual = parse(source)
    assert actual[: len(errors)] == errors


def test_errors_are_collected_across_statements() -> None:
    program, errors = parse("let x 5; let y = 10; let = 3;")
    assert "expected next token to be ASSIGN, got INT" in errors
    assert "expected next token to be IDENT, got ASSIGN" in errors
    assert any(
        isinstance(s, LetStatement) and s.name.value == "y" for s in program.statements
    )


def test_int64_max_parses() -> None:
    expr = single_expression("9223372036854775807")
    assert expr.value == 2**63 - 1


def test_leading_zeros_do_not_count_toward_integer_width() -> None:
    expr = single_expression("0" * 5000 + "42")
    assert isinstance(expr, IntegerLiteral)
    assert expr.value == 42
    assert single_expression("000").value == 0


def test_parser_from_lexer_matches_parse() -> None:
    parser = Parser(Lexer("let a = 1; a"))
    program = parser.parse_program()
    assert parser.errors == []
    assert program == parse_ok("let a = 1; a")


@pytest.mark.parametrize(
    "source",
    [
        "let newAdder = fn(x) { fn(y) { x + y } }; let addTwo = newAdder(2); addTwo(3);",
        "if (10 > 1) { if (10 > 1) { return 10; } return 1; }",
        "let f = fn() { }; f()",
        "-a * b + !c == d(e, f)(g)",
        "if (a) { b } else { let c = 1; return c }",
        "fn(x) { x }(1.25)",
    ],
)  # type: ignore[misc]
def test_render_is_a_fixpoint(source: str) -> None:
    first = parse_ok(source)
    rendered = str(first)
    second = parse_ok(rendered)
    assert second == first
    assert str(second) == rendered


identifiers = st.sampled_from(["a", "b", "c", "x", "y", "foo"])
operators = st.sampled_from(["+", "-", "*", "/", "<", ">", "==", "!="])


@st.composite  # type: ignore[misc]
def expressions(draw: Any, depth: int = 3) -> str:
    if depth == 0 or draw(st.booleans()):
        return str(draw(st.one_of(identifiers, st.integers(0, 1000).map(str))))
    kind = draw(st.sampled_from(["infix", "prefix", "group", "call"]))
    if kind == "prefix":
        return draw(st.sampled_from(["-", "!"])) + draw(expressions(depth - 1))
    if kind == "group":
        return "(" + draw(expressions(depth - 1)) + ")"
    if kind == "call":
        args = draw(st.lists(expressions(depth - 1), max_size=3))
        return draw(identifiers) + "(" + ", ".join(args) + ")"
    left = draw(expressions(depth - 1))
    right = draw(expressions(depth - 1))
    return f"{left} {draw(operators)} {right}"


@given(expressions())  # type: ignore[misc]
def test_generated_expressions_round_trip(source: str) -> None:
    first = parse_ok(source)
    second = parse_ok(str(first))
    assert second == first
