"""
Monkey Language Parser

Parses a stream of Monkey tokens into an abstract syntax tree (`Program`).

The parser is a Pratt (precedence climbing) parser. It keeps exactly one token of
lookahead beyond the current token, dispatches on the current token kind to pick a
prefix rule and on the upcoming token kind to pick an infix rule, and climbs the
static precedence table in `monkey.monkey_constants` to group operators.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = <expression>;`
    * `return <expression>;`
    * bare expressions, with an optional trailing `;`
- Expressions:
    * identifiers and 64-bit signed integer literals
    * prefix operators: `!x`, `-x`
    * infix operators: `+ - * / == != < >`, all left-associative

Parser Behavior
---------------
- Never raises while parsing. Malformed input is reported through `errors()`, an
  ordered list of diagnostics, and the pass continues with the next statement.
- A statement missing a mandatory token (identifier or `=` after `let`) is dropped.
- An expression without a prefix rule, or an integer literal that is malformed or outside the
  signed 64-bit range, leaves `None` in place of that subtree.
- `check_errors()` turns a non-empty diagnostic list into a `ParseError` for callers
  that want to fail hard.

Entry Points
------------
- `Parser(stream).parse_program()`: parse everything up to EOF.
- `Parser.from_source(source)`: build a parser over a fresh lexer.
- `Parser.errors()`: diagnostics recorded so far.
"""

from __future__ import annotations

import logging
import re
from typing import Callable

from monkey.monkey_ast import (
    Expression,
    ExpressionStatement,
    Identifier,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_constants import (
    INT64_MAX,
    INT64_MIN,
    Precedence,
    TokenType,
    precedences,
)
from monkey.monkey_lexer import CharacterStream, Lexer, Token, TokenStream

logger = logging.getLogger(__name__)

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression | None], Expression | None]

# Base-prefixed integer syntax: 0x / 0o / 0b, a bare leading 0 for octal, and
# single underscores between digits (or right after the base prefix).
INTEGER_PATTERN = re.compile(
    r"""
    (?P<sign>[+-]?)
    (?:
        0[xX](?P<hex>(?:_?[0-9a-fA-F])+)
      | 0[oO](?P<oct>(?:_?[0-7])+)
      | 0[bB](?P<bin>(?:_?[01])+)
      | 0(?P<legacy_oct>(?:_?[0-7])+)
      | (?P<dec>[1-9](?:_?[0-9])*|0)
    )
    """,
    re.VERBOSE,
)

INTEGER_BASES = {"hex": 16, "oct": 8, "bin": 2, "legacy_oct": 8, "dec": 10}


def parse_int64(literal: str) -> int | None:
    """Read `literal` as a signed 64-bit integer, or return None if it is not one.

    >>> parse_int64("010"), parse_int64("0x1F"), parse_int64("1_000")
    (8, 31, 1000)
    >>> parse_int64("09") is None
    True
    """
    match = INTEGER_PATTERN.fullmatch(literal)
    if match is None:
        return None

    base, digits = next(
        (INTEGER_BASES[name], text)
        for name, text in match.groupdict().items()
        if name in INTEGER_BASES and text is not None
    )
    value = int(digits.replace("_", ""), base)
    if match.group("sign") == "-":
        value = -value

    if not INT64_MIN <= value <= INT64_MAX:
        return None
    return value


class ParseError(SyntaxError):
    """Raised by `Parser.check_errors()` when the parse left diagnostics behind.

    Attributes:
        errors (list[str]): The diagnostics, in the order they were recorded.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__(
            f"parser has {len(self.errors)} errors: " + "; ".join(self.errors)
        )


class Parser:
    """
    Monkey Parser Class

    Pulls tokens on demand from a token stream and builds a `Program`.

    Attributes
    ----------
    stream : TokenStream
        The borrowed token source; only `next_token()` is ever called on it.
    cur_token : Token
        The token under examination.
    peek_token : Token
        The token right after `cur_token`.

    Methods
    -------
    parse_program() -> Program
        Parse statements until EOF.
    errors() -> list[str]
        Diagnostics recorded so far.
    check_errors() -> None
        Raise `ParseError` if any diagnostic was recorded.
    """

    def __init__(self, stream: TokenStream) -> None:
        self.stream = stream
        self._errors: list[str] = []

        self.cur_token = Token(TokenType.EOF, "")
        self.peek_token = Token(TokenType.EOF, "")

        # Read two tokens, so cur_token and peek_token are both set
        self.next_token()
        self.next_token()

    @classmethod
    def from_source(cls, source: str) -> Parser:
        return cls(Lexer(CharacterStream(source)))

    def errors(self) -> list[str]:
        return list(self._errors)

    def check_errors(self) -> None:
        if self._errors:
            raise ParseError(self._errors)

    def next_token(self) -> None:
        self.cur_token = self.peek_token
        self.peek_token = self.stream.next_token()

    def cur_token_is(self, t: TokenType) -> bool:
        return self.cur_token.type == t

    def peek_token_is(self, t: TokenType) -> bool:
        return self.peek_token.type == t

    def expect_peek(self, t: TokenType) -> bool:
        """Advance onto the peek token if it has type `t`; otherwise record an error."""
        if self.peek_token_is(t):
            self.next_token()
            return True
        self.peek_error(t)
        return False

    def add_error(self, msg: str) -> None:
        logger.debug(
            "parse error at line %d, col %d: %s",
            self.cur_token.line,
            self.cur_token.col,
            msg,
        )
        self._errors.append(msg)

    def peek_error(self, t: TokenType) -> None:
        self.add_error(
            f"expected next token to be {t}, got {self.peek_token.type} instead"
        )

    def no_prefix_parse_fn_error(self, t: TokenType) -> None:
        self.add_error(f"no prefix parse function for {t} found")

    def parse_program(self) -> Program:
        """Parse statements until EOF. Statements that fail to parse are left out."""
        statements: list[Statement] = []
        errors_before = len(self._errors)

        while not self.cur_token_is(TokenType.EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                statements.append(stmt)
            self.next_token()

        logger.debug(
            "parsed %d statements with %d new errors",
            len(statements),
            len(self._errors) - errors_before,
        )
        return Program(statements)

    def parse_statement(self) -> Statement | None:
        match self.cur_token.type:
            case TokenType.LET:
                return self.parse_let_statement()
            case TokenType.RETURN:
                return self.parse_return_statement()
            case _:
                return self.parse_expression_statement()

    def parse_let_statement(self) -> LetStatement | None:
        """Parse `let <ident> = <expression>`, with an optional trailing `;`."""
        token = self.cur_token

        if not self.expect_peek(TokenType.IDENT):
            return None
        name = Identifier(self.cur_token, self.cur_token.literal)

        if not self.expect_peek(TokenType.ASSIGN):
            return None

        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return LetStatement(token, name, value)

    def parse_return_statement(self) -> ReturnStatement:
        token = self.cur_token

        self.next_token()
        return_value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return ReturnStatement(token, return_value)

    def parse_expression_statement(self) -> ExpressionStatement:
        token = self.cur_token
        expression = self.parse_expression(Precedence.LOWEST)

        # Optional, so `5 + 5` works in the REPL
        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        return ExpressionStatement(token, expression)

    def parse_expression(self, precedence: int) -> Expression | None:
        """Parse an expression whose operators all bind tighter than `precedence`.

        Equal precedence stops the loop, which makes every binary operator
        left-associative: the caller that owns the left operand picks up the next
        operator of the same rank.
        """
        prefix = self.prefix_parse_fn(self.cur_token.type)
        if prefix is None:
            self.no_prefix_parse_fn_error(self.cur_token.type)
            return None
        left = prefix()

        while (
            not self.peek_token_is(TokenType.SEMICOLON)
            and precedence < self.peek_precedence()
        ):
            infix = self.infix_parse_fn(self.peek_token.type)
            if infix is None:
                return left
            self.next_token()
            left = infix(left)

        return left

    def prefix_parse_fn(self, t: TokenType) -> PrefixParseFn | None:
        match t:
            case TokenType.IDENT:
                return self.parse_identifier
            case TokenType.INT:
                return self.parse_integer_literal
            case TokenType.BANG | TokenType.MINUS:
                return self.parse_prefix_expression
            case _:
                return None

    def infix_parse_fn(self, t: TokenType) -> InfixParseFn | None:
        match t:
            case (
                TokenType.PLUS
                | TokenType.MINUS
                | TokenType.ASTERISK
                | TokenType.SLASH
                | TokenType.EQ
                | TokenType.NOT_EQ
                | TokenType.LT
                | TokenType.GT
            ):
                return self.parse_infix_expression
            case _:
                return None

    def peek_precedence(self) -> int:
        return precedences.get(self.peek_token.type, Precedence.LOWEST)

    def cur_precedence(self) -> int:
        return precedences.get(self.cur_token.type, Precedence.LOWEST)

    def parse_identifier(self) -> Expression:
        return Identifier(self.cur_token, self.cur_token.literal)

    def parse_integer_literal(self) -> Expression | None:
        token = self.cur_token
        literal = token.literal

        value = parse_int64(literal)
        if value is None:
            self.add_error(f'could not parse "{literal}" as integer')
            return None

        return IntegerLiteral(token, value)

    def parse_prefix_expression(self) -> Expression:
        """Parse one or more stacked unary operators and their shared operand.

        A run like `!--x` is gathered in a loop and wrapped inside-out, so long runs
        do not grow the Python call stack.
        """
        operators: list[Token] = []
        while self.cur_token_is(TokenType.BANG) or self.cur_token_is(TokenType.MINUS):
            operators.append(self.cur_token)
            self.next_token()

        right = self.parse_expression(Precedence.PREFIX)

        for token in reversed(operators):
            right = PrefixExpression(token, token.literal, right)
        assert right is not None  # for mypy
        return right

    def parse_infix_expression(self, left: Expression | None) -> Expression:
        token = self.cur_token
        # The right operand climbs from this operator's own rank
        precedence = self.cur_precedence()

        self.next_token()
        right = self.parse_expression(precedence)

        return InfixExpression(token, token.literal, left, right)


__all__ = ["ParseError", "Parser"]
