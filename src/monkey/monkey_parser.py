"""
Monkey Language Parser

Parses the token stream produced by `monkey_lexer.Lexer` into an abstract
syntax tree rooted at `monkey_ast.Program`.

Strategy
--------
- Statements (`let`, `return`, expression statements, blocks) are parsed by
  plain recursive descent.
- Expressions are parsed Pratt-style: every token kind may own a *prefix*
  handler (it starts an expression) and/or an *infix* handler (it continues
  one), and the loop in `parse_expression` only hands the current left-hand
  side to an infix handler whose precedence is strictly higher than the
  caller's. Equal precedence therefore associates to the left.

Precedence, lowest to highest::

    ==  !=   <  >   +  -   *  /   -x  !x   f(x)

Parser Behavior
---------------
- Pulls tokens from the lexer on demand with two tokens of lookahead
  (`cur_token` and `peek_token`).
- Never raises on bad input. Each structural problem is appended to
  `Parser.errors` and only the construct being parsed is abandoned, so a
  single pass reports every syntax problem it can find.
- A non-empty error list means the (possibly partial) program must not be
  evaluated.

Entry Points
------------
- `parse(source)`: Parse a whole program, returning `(program, errors)`.
- `Parser.parse_program()`: The same, on an explicit parser instance.
- `Parser.parse_expression(precedence)`: The Pratt core.
"""

from __future__ import annotations

import logging
from collections.abc import Callable

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
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_constants import (
    ASSIGN,
    ASTERISK,
    BANG,
    COMMA,
    ELSE,
    EOF,
    EQ,
    FALSE,
    FLOAT,
    FUNCTION,
    GT,
    IDENT,
    IF,
    INT,
    INT64_MAX,
    LBRACE,
    LET,
    LPAREN,
    LT,
    MINUS,
    NOTEQ,
    PLUS,
    RBRACE,
    RETURN,
    RPAREN,
    SEMICOLON,
    SLASH,
    TRUE,
    Precedence,
    precedences,
)
from monkey.monkey_lexer import Lexer, Token

logger = logging.getLogger(__name__)

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression], Expression | None]


class Parser:
    """
    Monkey Parser Class

    Builds a `Program` from a `Lexer`, collecting error messages instead of
    raising.

    Attributes
    ----------
    lexer : Lexer
        The token source. It is consumed as parsing proceeds.
    cur_token : Token
        The token under examination.
    peek_token : Token
        The token after `cur_token`.
    errors : list[str]
        Accumulated syntax error messages, in the order they were found.
    prefix_parse_fns : dict[str, PrefixParseFn]
        Token kind -> handler that starts an expression with that token.
    infix_parse_fns : dict[str, InfixParseFn]
        Token kind -> handler that extends an already-parsed left operand.
    """

    def __init__(self, lexer: Lexer) -> None:
        self.lexer = lexer
        self.errors: list[str] = []

        self.prefix_parse_fns: dict[str, PrefixParseFn] = {
            IDENT: self.parse_identifier,
            INT: self.parse_integer_literal,
            FLOAT: self.parse_float_literal,
            TRUE: self.parse_boolean,
            FALSE: self.parse_boolean,
            BANG: self.parse_prefix_expression,
            MINUS: self.parse_prefix_expression,
            LPAREN: self.parse_grouped_expression,
            IF: self.parse_if_expression,
            FUNCTION: self.parse_function_literal,
        }

        self.infix_parse_fns: dict[str, InfixParseFn] = {
            op: self.parse_infix_expression
            for op in (PLUS, MINUS, SLASH, ASTERISK, EQ, NOTEQ, LT, GT)
        }
        self.infix_parse_fns[LPAREN] = self.parse_call_expression

        # Read two tokens so cur_token and peek_token are both set
        self.cur_token: Token = self.lexer.next_token()
        self.peek_token: Token = self.lexer.next_token()

    @classmethod
    def from_source(cls, source: str) -> Parser:
        return cls(Lexer(source))

    # Token cursor

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, type_: str) -> bool:
        return self.cur_token.type == type_

    def peek_token_is(self, type_: str) -> bool:
        return self.peek_token.type == type_

    def expect_peek(self, type_: str) -> bool:
        """Advance only if the next token has the required kind; otherwise record an error."""
        if self.peek_token_is(type_):
            self.next_token()
            return True
        self.peek_error(type_)
        return False

    def peek_precedence(self) -> Precedence:
        return precedences.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> Precedence:
        return precedences.get(self.cur_token.type, Precedence.LOWEST)

    # Errors

    def record_error(self, message: str, tok: Token) -> None:
        logger.debug("parse error at line %d, col %d: %s", tok.line, tok.col, message)
        self.errors.append(message)

    def peek_error(self, type_: str) -> None:
        self.record_error(
            f"expected next token to be {type_}, got {self.peek_token.type}",
            self.peek_token,
        )

    def no_prefix_parse_fn_error(self, tok: Token) -> None:
        self.record_error(f"no prefix parse function for {tok.type}", tok)

    # Statements

    def parse_program(self) -> Program:
        """Parse statements until EOF, skipping any statement that fails to parse."""
        program = Program()
        while not self.cur_token_is(EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.next_token()
        return program

    def parse_statement(self) -> Statement | None:
        if self.cur_token_is(LET):
            return self.parse_let_statement()
        if self.cur_token_is(RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        tok = self.cur_token

        if not self.expect_peek(IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)
        if value is None:
            return None

        if self.peek_token_is(SEMICOLON):
            self.next_token()
        return LetStatement(tok, name, value)

    def parse_return_statement(self) -> ReturnStatement | None:
        tok = self.cur_token
        self.next_token()

        return_value = self.parse_expression(Precedence.LOWEST)
        if return_value is None:
            return None

        if self.peek_token_is(SEMICOLON):
            self.next_token()
        return ReturnStatement(tok, return_value)

    def parse_expression_statement(self) -> ExpressionStatement | None:
        tok = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if self.peek_token_is(SEMICOLON):
            self.next_token()
        return ExpressionStatement(tok, expression)

    def parse_block_statement(self) -> BlockStatement | None:
        """Parse statements after the current `{` up to its matching `}`."""
        block = BlockStatement(self.cur_token, [])
        self.next_token()

        while not self.cur_token_is(RBRACE):
            if self.cur_token_is(EOF):
                self.record_error(
                    f"expected next token to be {RBRACE}, got {EOF}", self.cur_token
                )
                return None
            stmt = self.parse_statement()
            if stmt is not None:
                block.statements.append(stmt)
            self.next_token()

        return block

    # Expressions

    def parse_expression(self, precedence: Precedence) -> Expression | None:
        prefix = self.prefix_parse_fns.get(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token)
            return None

        left = prefix()
        if left is None:
            return None

        while not self.peek_token_is(SEMICOLON) and precedence < self.peek_precedence():
            infix = self.infix_parse_fns.get(self.peek_token.type)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)
            if left is None:
                return None

        return left

    def parse_identifier(self) -> Expression | None:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Expression | None:
        tok = self.cur_token
        # int() refuses very long digit strings; INT64_MAX has 19 digits
        digits = tok.literal.lstrip("0") or "0"
        if len(digits) > 19 or int(digits) > INT64_MAX:
            self.record_error(f"could not parse {tok.literal} as integer", tok)
            return None
        return IntegerLiteral(tok, int(digits))

    def parse_float_literal(self) -> Expression | None:
        tok = self.cur_token
        try:
            value = float(tok.literal)
        except ValueError:
            self.record_error(f"could not parse {tok.literal} as float", tok)
            return None
        return FloatLiteral(tok, value)

    def parse_boolean(self) -> Expression | None:
        return BooleanLiteral(self.cur_token, self.cur_token_is(TRUE))

    def parse_prefix_expression(self) -> Expression | None:
        tok = self.cur_token
        self.next_token()

        right = self.parse_expression(Precedence.PREFIX)
        if right is None:
            return None
        return PrefixExpression(tok, tok.literal, right)

    def parse_infix_expression(self, left: Expression) -> Expression | None:
        tok = self.cur_token
        # bind the right operand at this operator's own precedence
        precedence = self.cur_precedence()
        self.next_token()

        right = self.parse_expression(precedence)
        if right is None:
            return None
        return InfixExpression(tok, left, tok.literal, right)

    def parse_grouped_expression(self) -> Expression | None:
        self.next_token()

        expression = self.parse_expression(Precedence.LOWEST)
        if expression is None:
            return None

        if not self.expect_peek(RPAREN):
            return None
        return expression

    def parse_if_expression(self) -> Expression | None:
        tok = self.cur_token

        if not self.expect_peek(LPAREN):
            return None
        self.next_token()

        condition = self.parse_expression(Precedence.LOWEST)
        if condition is None:
            return None

        if not self.expect_peek(RPAREN):
            return None
        if not self.expect_peek(LBRACE):
            return None

        consequence = self.parse_block_statement()
        if consequence is None:
            return None

        alternative = None
        if self.peek_token_is(ELSE):
            self.next_token()
            if not self.expect_peek(LBRACE):
                return None
            alternative = self.parse_block_statement()
            if alternative is None:
                return None

        return IfExpression(tok, condition, consequence, alternative)

    def parse_function_literal(self) -> Expression | None:
        tok = self.cur_token

        if not self.expect_peek(LPAREN):
            return None

        parameters = self.parse_function_parameters()
        if parameters is None:
            return None

        if not self.expect_peek(LBRACE):
            return None

        body = self.parse_block_statement()
        if body is None:
            return None
        return FunctionLiteral(tok, parameters, body)

    def parse_function_parameters(self) -> list[Identifier] | None:
        identifiers: list[Identifier] = []

        if self.peek_token_is(RPAREN):
            self.next_token()
            return identifiers

        if not self.expect_peek(IDENT):
            return None
        identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        while self.peek_token_is(COMMA):
            self.next_token()
            if not self.expect_peek(IDENT):
                return None
            identifiers.append(Identifier(self.cur_token, self.cur_token.literal))

        if not self.expect_peek(RPAREN):
            return None
        return identifiers

    def parse_call_expression(self, function: Expression) -> Expression | None:
        tok = self.cur_token
        arguments = self.parse_call_arguments()
        if arguments is None:
            return None
        return CallExpression(tok, function, arguments)

    def parse_call_arguments(self) -> list[Expression] | None:
        args: list[Expression] = []

        if self.peek_token_is(RPAREN):
            self.next_token()
            return args

        self.next_token()
        arg = self.parse_expression(Precedence.LOWEST)
        if arg is None:
            return None
        args.append(arg)

        while self.peek_token_is(COMMA):
            self.next_token()
            self.next_token()
            arg = self.parse_expression(Precedence.LOWEST)
            if arg is None:
                return None
            args.append(arg)

        if not self.expect_peek(RPAREN):
            return None
        return args


def parse(source: str) -> tuple[Program, list[str]]:
    """Parse `source` into a Program plus the list of syntax errors found."""
    parser = Parser.from_source(source)
    program = parser.parse_program()
    return program, parser.errors


__all__ = ["Parser", "parse"]
