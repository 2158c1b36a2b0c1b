from typing import Any

import hypothesis.strategies as st
import pytest
from hypothesis import given

from monkey.monkey_ast import (
    ExpressionStatement,
    Identifier,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    PrefixExpression,
    Program,
    ReturnStatement,
)
from monkey.monkey_constants import TokenType
from monkey.monkey_lexer import Token


def ident(name: str) -> Identifier:
    return Identifier(Token(TokenType.IDENT, name), name)


def integer(value: int) -> IntegerLiteral:
    return IntegerLiteral(Token(TokenType.INT, str(value)), value)


def test_program_string() -> None:
    program = Program(
        [
            LetStatement(
                Token(TokenType.LET, "let"), ident("myVar"), ident("anotherVar")
            ),
        ]
    )
    assert str(program) == "let myVar = anotherVar;"


def test_program_token_literal() -> None:
    assert Program().token_literal() == ""
    program = Program([ReturnStatement(Token(TokenType.RETURN, "return"), integer(5))])
    assert program.token_literal() == "return"


def test_expression_strings() -> None:
    plus = Token(TokenType.PLUS, "+")
    star = Token(TokenType.ASTERISK, "*")
    minus = Token(TokenType.MINUS, "-")
    tree = InfixExpression(
        plus,
        "+",
        PrefixExpression(minus, "-", ident("a")),
        InfixExpression(star, "*", integer(2), integer(3)),
    )
    assert str(tree) == "((-a) + (2 * 3))"
    assert tree.token_literal() == "+"


def test_missing_children_render_empty() -> None:
    stmt = ReturnStatement(Token(TokenType.RETURN, "return"), None)
    assert str(stmt) == "return ;"
    assert str(ExpressionStatement(Token(TokenType.ILLEGAL, "@"), None)) == ""


def test_to_dict_nested() -> None:
    stmt = LetStatement(
        Token(TokenType.LET, "let"),
        ident("x"),
        PrefixExpression(Token(TokenType.BANG, "!"), "!", integer(5)),
    )
    d = stmt.to_dict()
    assert d["kind"] == "let"
    assert d["token"] == "let"
    assert d["name"] == {"kind": "identifier", "token": "x", "value": "x"}
    assert d["value"] == {
        "kind": "prefix",
        "token": "!",
        "operator": "!",
        "right": {"kind": "integer", "token": "5", "value": 5},
    }


def test_program_to_dict() -> None:
    program = Program([ExpressionStatement(Token(TokenType.IDENT, "a"), ident("a"))])
    d = program.to_dict()
    assert d["kind"] == "program"
    assert d["statements"][0]["expression"]["value"] == "a"


def test_eq_ignores_source_positions() -> None:
    a = Identifier(Token(TokenType.IDENT, "x", 1, 1), "x")
    b = Identifier(Token(TokenType.IDENT, "x", 3, 7), "x")
    assert a == b


def test_eq_different_types() -> None:
    assert ident("5") != integer(5)
    assert ident("x") != "x"


def test_repr() -> None:
    assert repr(integer(5)) == "IntegerLiteral('5')"
    assert repr(Program()) == "Program(statements=[])"


@given(st.integers(min_value=-(2**63), max_value=2**63 - 1))  # type: ignore[misc]
def test_integer_literal_token_literal_round_trip(value: int) -> None:
    node = integer(value)
    assert node.token_literal() == str(value)
    assert node.value == value


@given(st.text(min_size=1), st.text(min_size=1))  # type: ignore[misc]
def test_identifier_eq_follows_value(a: str, b: str) -> None:
    assert (ident(a) == ident(b)) == (a == b)


def test_nodes_are_unhashable() -> None:
    with pytest.raises(TypeError):
        hash(ident("x"))
    with pytest.raises(TypeError):
        {Program()}


def test_program_token() -> None:
    assert Program().token == Token(TokenType.EOF, "")
    let = LetStatement(Token(TokenType.LET, "let", 2, 3), ident("x"), integer(1))
    program = Program([let])
    assert program.token is let.token
    assert program.token_literal() == "let"


def test_deep_prefix_chain_renders_and_serializes() -> None:
    depth = 2000
    node: PrefixExpression | IntegerLiteral = integer(7)
    for _ in range(depth):
        node = PrefixExpression(Token(TokenType.BANG, "!"), "!", node)
    assert isinstance(node, PrefixExpression)

    assert str(node) == "(!" * depth + "7" + ")" * depth
    run, operand = node.chain()
    assert len(run) == depth
    assert operand == integer(7)

    d: Any = node.to_dict()
    for _ in range(depth):
        assert d["kind"] == "prefix"
        assert d["operator"] == "!"
        d = d["right"]
    assert d == {"kind": "integer", "token": "7", "value": 7}
