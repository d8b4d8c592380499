"""
Token kinds, reserved words and operator precedence for the Monkey language.

The lexer, parser and test suites import their vocabulary from here so that a
token kind is spelled exactly once.

Exports:
    - token kind constants (ILLEGAL, EOF, IDENT, ...)
    - keywords: reserved word -> token kind
    - single_char_tokens: punctuation/operator character -> token kind
    - Precedence: binding power ranks used by the Pratt parser
    - precedences: infix-capable token kind -> Precedence
"""

from enum import IntEnum

ILLEGAL = "ILLEGAL"
EOF = "EOF"

# Identifiers + literals
IDENT = "IDENT"
INT = "INT"
FLOAT = "FLOAT"

# Operators
ASSIGN = "ASSIGN"
PLUS = "PLUS"
MINUS = "MINUS"
BANG = "BANG"
ASTERISK = "ASTERISK"
SLASH = "SLASH"
LT = "LT"
GT = "GT"
EQ = "EQ"
NOTEQ = "NOTEQ"

# Delimiters
COMMA = "COMMA"
SEMICOLON = "SEMICOLON"
LPAREN = "LPAREN"
RPAREN = "RPAREN"
LBRACE = "LBRACE"
RBRACE = "RBRACE"

# Keywords
FUNCTION = "FUNCTION"
LET = "LET"
TRUE = "TRUE"
FALSE = "FALSE"
IF = "IF"
ELSE = "ELSE"
RETURN = "RETURN"

keywords: dict[str, str] = {
    "fn": FUNCTION,
    "let": LET,
    "true": TRUE,
    "false": FALSE,
    "if": IF,
    "else": ELSE,
    "return": RETURN,
}

# `=` and `!` are resolved by the lexer with one character of lookahead.
single_char_tokens: dict[str, str] = {
    "=": ASSIGN,
    "!": BANG,
    "+": PLUS,
    "-": MINUS,
    "*": ASTERISK,
    "/": SLASH,
    "<": LT,
    ">": GT,
    ",": COMMA,
    ";": SEMICOLON,
    "(": LPAREN,
    ")": RPAREN,
    "{": LBRACE,
    "}": RBRACE,
}

two_char_tokens: dict[str, str] = {
    "==": EQ,
    "!=": NOTEQ,
}


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -X or !X
    CALL = 7  # myFunction(X)


precedences: dict[str, Precedence] = {
    EQ: Precedence.EQUALS,
    NOTEQ: Precedence.EQUALS,
    LT: Precedence.LESSGREATER,
    GT: Precedence.LESSGREATER,
    PLUS: Precedence.SUM,
    MINUS: Precedence.SUM,
    SLASH: Precedence.PRODUCT,
    ASTERISK: Precedence.PRODUCT,
    LPAREN: Precedence.CALL,
}

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
