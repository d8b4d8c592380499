"""
Defines the abstract syntax tree (AST) node structure for the Monkey programming language.

The node set is closed. Every node is a dataclass that keeps the token it was
built from (for `token_literal()` and error locations) and exposes its
structural fields to the evaluator.

Node families:
    Statement:
        LetStatement, ReturnStatement, ExpressionStatement, BlockStatement
    Expression:
        Identifier, IntegerLiteral, FloatLiteral, BooleanLiteral,
        PrefixExpression, InfixExpression, IfExpression,
        FunctionLiteral, CallExpression
    Program:
        The root, an ordered list of statements.

Rendering:
    `str(node)` produces the canonical, fully-parenthesized source text of the
    node, e.g. `a + b * c` renders as `(a + (b * c))`. The render is valid
    Monkey source: parsing it again yields a structurally equal tree.

Equality:
    Nodes compare structurally. Tokens (and so source locations) are ignored,
    which lets a tree parsed from the original text compare equal to a tree
    parsed from its render.

Usage:
    node.to_dict() converts any node into nested plain dictionaries for
    JSON output, debugging or assertions in tests.
"""

from dataclasses import dataclass, field, fields
from typing import Any

from monkey.monkey_lexer import Token

ASTDict = dict[str, Any]


class Node:
    """Capability shared by every AST node: locate its token, render, serialize."""

    token: Token

    def token_literal(self) -> str:
        return self.token.literal

    def to_dict(self) -> ASTDict:
        result: ASTDict = {"kind": type(self).__name__}
        for f in fields(self):  # type: ignore[arg-type]
            if f.name == "token":
                continue
            result[f.name] = _serialize(getattr(self, f.name))
        return result


def _serialize(value: Any) -> Any:
    if isinstance(value, Node):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(v) for v in value]
    return value


class Statement(Node):
    pass


class Expression(Node):
    pass


# Expressions


@dataclass
class Identifier(Expression):
    token: Token = field(compare=False, repr=False)
    value: str

    def __str__(self) -> str:
        return self.value


@dataclass
class IntegerLiteral(Expression):
    token: Token = field(compare=False, repr=False)
    value: int

    def __str__(self) -> str:
        return str(self.value)


@dataclass
class FloatLiteral(Expression):
    token: Token = field(compare=False, repr=False)
    value: float

    def __str__(self) -> str:
        # source text keeps `1.50` readable where repr() could give `1e+16`
        return self.token.literal


@dataclass
class BooleanLiteral(Expression):
    token: Token = field(compare=False, repr=False)
    value: bool

    def __str__(self) -> str:
        return "true" if self.value else "false"


@dataclass
class PrefixExpression(Expression):
    token: Token = field(compare=False, repr=False)
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.operator}{self.right})"


@dataclass
class InfixExpression(Expression):
    token: Token = field(compare=False, repr=False)
    left: Expression
    operator: str
    right: Expression

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


@dataclass
class IfExpression(Expression):
    token: Token = field(compare=False, repr=False)
    condition: Expression
    consequence: "BlockStatement"
    alternative: "BlockStatement | None" = None

    def __str__(self) -> str:
        out = f"if ({self.condition}) {self.consequence}"
        if self.alternative is not None:
            out += f" else {self.alternative}"
        return out


@dataclass
class FunctionLiteral(Expression):
    token: Token = field(compare=False, repr=False)
    parameters: list[Identifier]
    body: "BlockStatement"

    def __str__(self) -> str:
        params = ", ".join(str(p) for p in self.parameters)
        return f"fn({params}) {self.body}"


@dataclass
class CallExpression(Expression):
    token: Token = field(compare=False, repr=False)  # the `(` token
    function: Expression
    arguments: list[Expression]

    def __str__(self) -> str:
        args = ", ".join(str(a) for a in self.arguments)
        return f"{self.function}({args})"


# Statements


@dataclass
class LetStatement(Statement):
    token: Token = field(compare=False, repr=False)
    name: Identifier
    value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {self.value}"


@dataclass
class ReturnStatement(Statement):
    token: Token = field(compare=False, repr=False)
    return_value: Expression

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.return_value}"


@dataclass
class ExpressionStatement(Statement):
    token: Token = field(compare=False, repr=False)  # first token of the expression
    expression: Expression

    def __str__(self) -> str:
        return str(self.expression)


@dataclass
class BlockStatement(Statement):
    token: Token = field(compare=False, repr=False)  # the `{` token
    statements: list[Statement]

    def __str__(self) -> str:
        if not self.statements:
            return "{ }"
        return "{ " + "; ".join(str(s) for s in self.statements) + " }"


@dataclass
class Program(Node):
    statements: list[Statement] = field(default_factory=list)

    def token_literal(self) -> str:
        return self.statements[0].token_literal() if self.statements else ""

    def __str__(self) -> str:
        return "; ".join(str(s) for s in self.statements)


__all__ = [
    "ASTDict",
    "BlockStatement",
    "BooleanLiteral",
    "CallExpression",
    "Expression",
    "ExpressionStatement",
    "FloatLiteral",
    "FunctionLiteral",
    "Identifier",
    "IfExpression",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
]
