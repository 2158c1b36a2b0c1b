"""
Token kinds, keyword table and operator precedences for the Monkey language.

Exports:
    TokenType: Closed enumeration of every token kind the lexer can produce.
    keywords: Reserved words mapped to their token kind.
    token_hashmap: Operator and delimiter spellings mapped to their token kind.
    Precedence: Binding power ranks, lowest to highest.
    precedences: Read-only mapping from infix operator kind to its rank.
"""

from enum import IntEnum, StrEnum
from types import MappingProxyType
from typing import Mapping


class TokenType(StrEnum):
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    # Identifiers + literals
    IDENT = "IDENT"
    INT = "INT"

    # Operators
    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    # Delimiters
    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    # Keywords
    FUNCTION = "FUNCTION"
    LET = "LET"
    RETURN = "RETURN"


keywords: Mapping[str, TokenType] = MappingProxyType(
    {
        "fn": TokenType.FUNCTION,
        "let": TokenType.LET,
        "return": TokenType.RETURN,
    }
)

# Longest spelling wins in the lexer, so "==" beats "=".
token_hashmap: Mapping[str, TokenType] = MappingProxyType(
    {
        "=": TokenType.ASSIGN,
        "+": TokenType.PLUS,
        "-": TokenType.MINUS,
        "!": TokenType.BANG,
        "*": TokenType.ASTERISK,
        "/": TokenType.SLASH,
        "<": TokenType.LT,
        ">": TokenType.GT,
        "==": TokenType.EQ,
        "!=": TokenType.NOT_EQ,
        ",": TokenType.COMMA,
        ";": TokenType.SEMICOLON,
        "(": TokenType.LPAREN,
        ")": TokenType.RPAREN,
        "{": TokenType.LBRACE,
        "}": TokenType.RBRACE,
    }
)


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2  # ==
    LESSGREATER = 3  # > or <
    SUM = 4  # +
    PRODUCT = 5  # *
    PREFIX = 6  # -X or !X
    CALL = 7  # myFunction(X), reserved


precedences: Mapping[TokenType, Precedence] = MappingProxyType(
    {
        TokenType.EQ: Precedence.EQUALS,
        TokenType.NOT_EQ: Precedence.EQUALS,
        TokenType.LT: Precedence.LESSGREATER,
        TokenType.GT: Precedence.LESSGREATER,
        TokenType.PLUS: Precedence.SUM,
        TokenType.MINUS: Precedence.SUM,
        TokenType.SLASH: Precedence.PRODUCT,
        TokenType.ASTERISK: Precedence.PRODUCT,
    }
)

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

__all__ = [
    "INT64_MAX",
    "INT64_MIN",
    "Precedence",
    "TokenType",
    "keywords",
    "precedences",
    "token_hashmap",
]
