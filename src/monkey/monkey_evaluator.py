"""
Tree-walking evaluator for the Monkey language.

`evaluate(node, env)` reduces any AST node to a runtime `Object`, reading and
writing the given `Environment`. There is no bytecode step: each node kind has
one `eval_*` function and `evaluate` dispatches on the node's class.

Control flow travels as values rather than exceptions:

- `return` produces a `ReturnValue`. Blocks hand it back still wrapped, so it
  passes through every enclosing block; only a function call or the program
  itself unwraps it.
- A runtime failure produces an `Error` value. Every node that evaluates a
  child forwards an `Error` unchanged, and program evaluation stops at the
  first one.

Deep (non-tail) recursion in a Monkey program can exhaust the Python stack;
the resulting `RecursionError` propagates to the caller.

Functions:
    evaluate(node, env) -> Object
    run(source, env=None) -> Object | list[str]
"""

import logging
import math
from collections.abc import Callable
from typing import Any

from monkey.monkey_ast import (
    BlockStatement,
    BooleanLiteral,
    CallExpression,
    Expression,
    ExpressionStatement,
    FloatLiteral,
    FunctionLiteral,
    Identifier,
    IfExpression,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    Node,
    PrefixExpression,
    Program,
    ReturnStatement,
)
from monkey.monkey_environment import Environment
from monkey.monkey_object import (
    NULL,
    Boolean,
    Error,
    Float,
    Function,
    Integer,
    Object,
    ReturnValue,
    is_error,
    is_truthy,
    native_bool_to_boolean,
)
from monkey.monkey_parser import parse

logger = logging.getLogger(__name__)


def wrap_int64(value: int) -> int:
    """Reduce an arbitrary Python int to signed 64-bit two's complement."""
    return (value + 2**63) % 2**64 - 2**63


def evaluate(node: Node, env: Environment) -> Object:
    evaluator = _EVALUATORS.get(type(node))
    if evaluator is None:
        raise TypeError(f"Cannot evaluate {type(node).__name__!r}: not a Monkey AST node")
    return evaluator(node, env)


def run(source: str, env: Environment | None = None) -> Object | list[str]:
    """Parse and evaluate `source`; returns the parser errors instead if there are any."""
    program, errors = parse(source)
    if errors:
        return errors
    return evaluate(program, env if env is not None else Environment())


# Statements


def eval_program(program: Program, env: Environment) -> Object:
    result: Object = NULL
    for stmt in program.statements:
        result = evaluate(stmt, env)
        if isinstance(result, ReturnValue):
            return result.value
        if isinstance(result, Error):
            return result
    return result


def eval_block_statement(block: BlockStatement, env: Environment) -> Object:
    result: Object = NULL
    for stmt in block.statements:
        result = evaluate(stmt, env)
        # left wrapped so that enclosing blocks stop too
        if isinstance(result, (ReturnValue, Error)):
            return result
    return result


def eval_expression_statement(stmt: ExpressionStatement, env: Environment) -> Object:
    return evaluate(stmt.expression, env)


def eval_let_statement(stmt: LetStatement, env: Environment) -> Object:
    value = evaluate(stmt.value, env)
    if is_error(value):
        return value
    env.set(stmt.name.value, value)
    return NULL


def eval_return_statement(stmt: ReturnStatement, env: Environment) -> Object:
    value = evaluate(stmt.return_value, env)
    if is_error(value):
        return value
    return ReturnValue(value)


# Expressions


def eval_integer_literal(node: IntegerLiteral, env: Environment) -> Object:
    return Integer(node.value)


def eval_float_literal(node: FloatLiteral, env: Environment) -> Object:
    return Float(node.value)


def eval_boolean_literal(node: BooleanLiteral, env: Environment) -> Object:
    return native_bool_to_boolean(node.value)


def eval_identifier(node: Identifier, env: Environment) -> Object:
    value = env.get(node.value)
    if value is None:
        return Error(f"identifier not found: {node.value}")
    return value


def eval_prefix_expression(node: PrefixExpression, env: Environment) -> Object:
    right = evaluate(node.right, env)
    if is_error(right):
        return right

    if node.operator == "!":
        return native_bool_to_boolean(not is_truthy(right))
    if node.operator == "-":
        return eval_minus_prefix_operator(right)
    return Error(f"unknown operator: {node.operator}{right.type_name()}")


def eval_minus_prefix_operator(right: Object) -> Object:
    if isinstance(right, Integer):
        return Integer(wrap_int64(-right.value))
    if isinstance(right, Float):
        return Float(-right.value)
    return Error(f"unknown operator: -{right.type_name()}")


def eval_infix_expression(node: InfixExpression, env: Environment) -> Object:
    left = evaluate(node.left, env)
    if is_error(left):
        return left
    right = evaluate(node.right, env)
    if is_error(right):
        return right
    return apply_infix_operator(node.operator, left, right)


def apply_infix_operator(operator: str, left: Object, right: Object) -> Object:
    if left.type_name() != right.type_name():
        return Error(
            f"type mismatch: {left.type_name()} {operator} {right.type_name()}"
        )
    if isinstance(left, Integer) and isinstance(right, Integer):
        return eval_integer_infix_expression(operator, left.value, right.value)
    if isinstance(left, Float) and isinstance(right, Float):
        return eval_float_infix_expression(operator, left.value, right.value)
    if isinstance(left, Boolean) and isinstance(right, Boolean) and operator in ("==", "!="):
        return native_bool_to_boolean(_COMPARISONS[operator](left.value, right.value))
    return Error(f"unknown operator: {left.type_name()} {operator} {right.type_name()}")


def eval_integer_infix_expression(operator: str, left: int, right: int) -> Object:
    if operator == "+":
        return Integer(wrap_int64(left + right))
    if operator == "-":
        return Integer(wrap_int64(left - right))
    if operator == "*":
        return Integer(wrap_int64(left * right))
    if operator == "/":
        if right == 0:
            return Error("division by zero")
        # truncate toward zero
        quotient = abs(left) // abs(right)
        if (left < 0) != (right < 0):
            quotient = -quotient
        return Integer(wrap_int64(quotient))
    if operator in _COMPARISONS:
        return native_bool_to_boolean(_COMPARISONS[operator](left, right))
    return Error(f"unknown operator: INTEGER {operator} INTEGER")


def eval_float_infix_expression(operator: str, left: float, right: float) -> Object:
    if operator == "+":
        return Float(left + right)
    if operator == "-":
        return Float(left - right)
    if operator == "*":
        return Float(left * right)
    if operator == "/":
        return Float(_ieee_divide(left, right))
    if operator in _COMPARISONS:
        return native_bool_to_boolean(_COMPARISONS[operator](left, right))
    return Error(f"unknown operator: FLOAT {operator} FLOAT")


def _ieee_divide(left: float, right: float) -> float:
    if right != 0.0:
        return left / right
    if left == 0.0 or math.isnan(left):
        return math.nan
    return math.copysign(math.inf, left) * math.copysign(1.0, right)


_COMPARISONS: dict[str, Callable[[Any, Any], bool]] = {
    "<": lambda a, b: a < b,
    ">": lambda a, b: a > b,
    "==": lambda a, b: a == b,
    "!=": lambda a, b: a != b,
}


def eval_if_expression(node: IfExpression, env: Environment) -> Object:
    condition = evaluate(node.condition, env)
    if is_error(condition):
        return condition

    if is_truthy(condition):
        return evaluate(node.consequence, env)
    if node.alternative is not None:
        return evaluate(node.alternative, env)
    return NULL


def eval_function_literal(node: FunctionLiteral, env: Environment) -> Object:
    return Function(node.parameters, node.body, env)


def eval_call_expression(node: CallExpression, env: Environment) -> Object:
    function = evaluate(node.function, env)
    if is_error(function):
        return function

    args = eval_expressions(node.arguments, env)
    if isinstance(args, Error):
        return args
    return apply_function(function, args)


def eval_expressions(exprs: list[Expression], env: Environment) -> list[Object] | Error:
    """Evaluate left to right, stopping at the first Error."""
    result: list[Object] = []
    for expr in exprs:
        evaluated = evaluate(expr, env)
        if isinstance(evaluated, Error):
            return evaluated
        result.append(evaluated)
    return result


def apply_function(fn: Object, args: list[Object]) -> Object:
    if not isinstance(fn, Function):
        return Error(f"not a function: {fn.type_name()}")

    if len(args) != len(fn.parameters):
        return Error(
            f"wrong number of arguments: expected {len(fn.parameters)}, got {len(args)}"
        )

    logger.debug("calling %s with %d argument(s)", fn, len(args))
    extended_env = Environment.new_enclosed(fn.env)
    for param, arg in zip(fn.parameters, args):
        extended_env.set(param.value, arg)

    evaluated = evaluate(fn.body, extended_env)
    if isinstance(evaluated, ReturnValue):
        return evaluated.value
    return evaluated


_EVALUATORS: dict[type, Callable[[Any, Environment], Object]] = {
    Program: eval_program,
    BlockStatement: eval_block_statement,
    ExpressionStatement: eval_expression_statement,
    LetStatement: eval_let_statement,
    ReturnStatement: eval_return_statement,
    IntegerLiteral: eval_integer_literal,
    FloatLiteral: eval_float_literal,
    BooleanLiteral: eval_boolean_literal,
    Identifier: eval_identifier,
    PrefixExpression: eval_prefix_expression,
    InfixExpression: eval_infix_expression,
    IfExpression: eval_if_expression,
    FunctionLiteral: eval_function_literal,
    CallExpression: eval_call_expression,
}


__all__ = ["apply_function", "evaluate", "run", "wrap_int64"]
