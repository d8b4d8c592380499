"""
Lexical analyzer for the Monkey programming language.

This module turns raw source text into a stream of tokens that the parser pulls
one at a time:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: A single token with its kind, literal text and source location.
    Lexer: Converts source text into a lazy, finite sequence of tokens.

Features:
    - Skips spaces, tabs, carriage returns and newlines
    - One-character lookahead for `==` and `!=`
    - Recognizes:
        * Identifiers and the reserved words `let fn if else return true false`
        * Integer and float literals (`12`, `3.14`)
        * Operators and punctuation
    - Anything unrecognized becomes an `ILLEGAL` token instead of raising

The lexer never reads past the end of its input: once the source is exhausted
every call to `next_token` returns an `EOF` token.

Example:
    >>> lexer = Lexer("let five = 5;")
    >>> lexer.next_token()
    Token(LET, let)

Exports:
    - CharacterStream
    - Token
    - Lexer
    - tokenize
"""

from collections.abc import Iterator
from typing import Any

from monkey.monkey_constants import (
    EOF,
    FLOAT,
    IDENT,
    ILLEGAL,
    INT,
    keywords,
    single_char_tokens,
    two_char_tokens,
)

NUL = "\0"
WHITESPACE = " \t\r\n"


def is_digit(ch: str) -> bool:
    return "0" <= ch <= "9"


def is_letter(ch: str) -> bool:
    return ch.isalpha() or ch == "_"


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

    Reads at or beyond the end of the source return the NUL sentinel instead of
    failing, which lets the lexer look ahead freely.

    Attributes:
        source (str): The input source string.
        position (int): Current index in the source.
        line (int): Current line number (1-indexed).
        column (int): Current column number (1-indexed).
    """

    def __init__(self, source: str, position: int = 0, line: int = 1, column: int = 1):
        self.source = source
        self.position = position
        self.line = line
        self.column = column

    def next(self) -> str:
        """
        Consumes and returns the next character in the stream.

        Returns:
            str: The next character.

        Raises:
            EOFError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise EOFError(
                f"Attempted to read past end of source at position=<{self.position}>, line=<{self.line}>"
            )
        char = self.source[self.position]
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        self.position += 1
        return char

    def peek(self, offset: int = 0) -> str:
        """
        Returns the character at the given offset from the current position without advancing.

        Args:
            offset (int, optional): Number of characters to look ahead. Defaults to 0.

        Returns:
            str: The character at the offset, or NUL if out of bounds.
        """
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return NUL
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


class Token:
    """Represents a single lexical token in the Monkey language.

    Attributes:
        type (str): The token kind (e.g. 'IDENT', 'INT', 'EOF').
        literal (str): The source text the token was read from.
        line (int): The 1-based line number where the token appears.
        col (int): The 1-based column number where the token starts.
    """

    def __init__(self, type_: str, literal: str, line: int = 0, col: int = 0):
        self.type = type_
        self.literal = literal
        self.line = line
        self.col = col

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.literal})"

    def __str__(self) -> str:
        return f"[`{self.type}`: `{self.literal}`]"

    def __eq__(self, other: Any) -> bool:
        return (
            isinstance(other, Token)
            and self.type == other.type
            and self.literal == other.literal
            and self.line == other.line
            and self.col == other.col
        )

    def __hash__(self) -> int:
        return hash((self.type, self.literal, self.line, self.col))


class Lexer:
    """Lexical analyzer for the Monkey language.

    Tokens are produced on demand by `next_token`; the lexer keeps no token
    buffer. A lexer cannot be rewound, so lexing the same source again needs a
    fresh instance.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, source: str) -> None:
        self.stream = CharacterStream(source)

    def __iter__(self) -> Iterator[Token]:
        """Yields tokens up to and including the first EOF."""
        while True:
            tok = self.next_token()
            yield tok
            if tok.type == EOF:
                return

    def peek(self, offset: int = 0) -> str:
        return self.stream.peek(offset)

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in WHITESPACE:
            self.advance()

    def read_identifier(self) -> str:
        ident = ""
        while not self.stream.end_of_file() and is_letter(self.peek()):
            ident += self.advance()
        return ident

    def read_number(self, line: int, col: int) -> Token:
        """Reads an integer or float literal starting at the current digit.

        A dot is only part of the number when at least one digit follows it;
        `5.` on its own is reported as a single ILLEGAL token.
        """
        num = ""
        while is_digit(self.peek()):
            num += self.advance()

        if self.peek() != ".":
            return Token(INT, num, line, col)

        num += self.advance()
        if not is_digit(self.peek()):
            return Token(ILLEGAL, num, line, col)

        while is_digit(self.peek()):
            num += self.advance()
        return Token(FLOAT, num, line, col)

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token, or an EOF token once the input is exhausted.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(EOF, "", line, col)

        ch = self.peek()

        # 1. `==` and `!=`
        pair = ch + self.peek(1)
        if pair in two_char_tokens:
            self.advance()
            self.advance()
            return Token(two_char_tokens[pair], pair, line, col)

        # 2. Single-character operators and punctuation
        if ch in single_char_tokens:
            return Token(single_char_tokens[self.advance()], ch, line, col)

        # 3. Identifier or keyword
        if is_letter(ch):
            ident = self.read_identifier()
            return Token(keywords.get(ident, IDENT), ident, line, col)

        # 4. Integer or float
        if is_digit(ch):
            return self.read_number(line, col)

        # 5. Unknown character
        return Token(ILLEGAL, self.advance(), line, col)


def tokenize(source: str) -> list[Token]:
    """Lexes `source` completely; the returned list ends with the EOF token."""
    return list(Lexer(source))


__all__ = ["CharacterStream", "Lexer", "Token", "tokenize"]
