"""
Lexical analyzer for the Monkey language.

This module turns raw source text into the token stream the parser consumes:

Classes:
    CharacterStream: Stream abstraction for reading characters with line/column tracking.
    Token: Immutable lexical token with type, literal text, and source location.
    Lexer: Converts a CharacterStream into tokens, one `next_token()` call at a time.
    ListTokenStream: Serves a prebuilt list of tokens through the same interface.

Features:
    - Skips spaces, tabs, carriage returns and newlines
    - Longest-match recognition of operators (`==` before `=`, `!=` before `!`)
    - Recognizes identifiers, keywords (`fn`, `let`, `return`) and integers
    - Unknown characters become ILLEGAL tokens; the lexer never raises
    - Once the source is exhausted every call returns an EOF token

Example:
    >>> lexer = Lexer(CharacterStream("let x = 5;"))
    >>> lexer.next_token()
    Token(LET, 'let')
"""

import logging
from dataclasses import dataclass
from typing import Protocol

from monkey.monkey_constants import TokenType, keywords, token_hashmap

logger = logging.getLogger(__name__)

DIGITS = "0123456789"


class CharacterStream:
    """
    A utility for reading characters from a string source with line and column tracking.

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

        Raises:
            IndexError: If reading past the end of the source.
        """
        if self.position >= len(self.source):
            raise IndexError(
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
        """Returns the character at `offset` without advancing, or "" when out of bounds."""
        index = self.position + offset
        if index < 0 or index >= len(self.source):
            return ""
        return self.source[index]

    def end_of_file(self) -> bool:
        return self.position >= len(self.source)


@dataclass(frozen=True)
class Token:
    """A single lexical token.

    Attributes:
        type (TokenType): The token kind (e.g. IDENT, INT, EOF).
        literal (str): The exact source text of the token ("" for EOF).
        line (int): 1-based line of the first character, 0 when unknown.
        col (int): 1-based column of the first character, 0 when unknown.
    """

    type: TokenType
    literal: str
    line: int = 0
    col: int = 0

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.literal!r})"


class TokenStream(Protocol):
    """Anything the parser can pull tokens from."""

    def next_token(self) -> Token: ...


class Lexer:
    """Lexical analyzer for the Monkey language.

    Attributes:
        stream (CharacterStream): The source stream to tokenize.
    """

    def __init__(self, stream: CharacterStream) -> None:
        self.stream = stream

    def peek(self) -> str:
        return self.stream.peek()

    def advance(self) -> str:
        return self.stream.next()

    def skip_whitespace(self) -> None:
        while not self.stream.end_of_file() and self.peek() in " \t\r\n":
            self.advance()

    def match_operator(self) -> Token | None:
        """Attempts to match the longest operator or delimiter at the current position.

        Returns:
            Token | None: A Token if a match is found, otherwise None.
        """
        line, col = self.stream.line, self.stream.column
        max_token = None
        candidate = ""

        for i in range(2):  # longest spelling is two characters
            ch = self.stream.peek(i)
            if ch == "":
                break
            candidate += ch
            if candidate in token_hashmap:
                max_token = candidate

        if max_token:
            for _ in range(len(max_token)):
                self.advance()
            return Token(token_hashmap[max_token], max_token, line, col)

        return None

    def next_token(self) -> Token:
        """Consumes and returns the next Token from the stream.

        Returns:
            Token: The next token; EOF (with an empty literal) once the source is exhausted.
        """
        self.skip_whitespace()

        line, col = self.stream.line, self.stream.column
        if self.stream.end_of_file():
            return Token(TokenType.EOF, "", line, col)

        ch = self.peek()

        # 1. Identifier or keyword
        if is_letter(ch):
            ident = ""
            while not self.stream.end_of_file() and (
                is_letter(self.peek()) or self.peek() in DIGITS
            ):
                ident += self.advance()
            return Token(keywords.get(ident, TokenType.IDENT), ident, line, col)

        # 2. Integer
        if ch in DIGITS:
            num = ""
            while not self.stream.end_of_file() and self.peek() in DIGITS:
                num += self.advance()
            return Token(TokenType.INT, num, line, col)

        # 3. Operator or delimiter
        token = self.match_operator()
        if token:
            return token

        # 4. Unknown character
        illegal = self.advance()
        logger.debug("illegal character %r at line %d, col %d", illegal, line, col)
        return Token(TokenType.ILLEGAL, illegal, line, col)


class ListTokenStream:
    """Feeds a prebuilt token list to the parser, then EOF forever."""

    def __init__(self, tokens: list[Token]) -> None:
        self.tokens = tokens
        self.position = 0

    def next_token(self) -> Token:
        if self.position < len(self.tokens):
            tok = self.tokens[self.position]
            self.position += 1
            return tok
        return Token(TokenType.EOF, "")


def is_letter(ch: str) -> bool:
    return ch == "_" or (ch.isascii() and ch.isalpha())


def tokenize(source: str) -> list[Token]:
    """Lex `source` completely, returning every token up to and including EOF."""
    lexer = Lexer(CharacterStream(source))
    tokens = []
    while True:
        tok = lexer.next_token()
        tokens.append(tok)
        if tok.type == TokenType.EOF:
            break
    return tokens


__all__ = [
    "CharacterStream",
    "Lexer",
    "ListTokenStream",
    "Token",
    "TokenStream",
    "tokenize",
]
