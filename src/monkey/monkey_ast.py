"""
Defines the abstract syntax tree (AST) node structure for the Monkey language.

Classes:
    Node:
        Base of every tree node. Remembers the token that introduced it and exposes
        `token_literal()`, source-like rendering via `str()`, and `to_dict()`.

    Statement / Expression:
        Marker bases separating nodes that produce a value (expressions) from nodes
        that do not (statements).

    Program:
        Root node holding the ordered list of top-level statements.

    LetStatement, ReturnStatement, ExpressionStatement:
        The closed set of statement variants.

    Identifier, IntegerLiteral, PrefixExpression, InfixExpression:
        The expression variants.

    ASTDict:
        TypedDict representation for serializing nodes to plain Python dictionaries,
        suitable for JSON output or debugging.

Nodes are built in one step by the parsing function responsible for their syntactic
category and are not modified afterwards. Optional children are `None` when the parser
recorded a diagnostic instead of building them.

Example:
    node = InfixExpression(plus_token, "+", IntegerLiteral(one, 1), IntegerLiteral(two, 2))
    str(node)  # "(1 + 2)"
"""

from typing import Any, TypedDict

from monkey.monkey_constants import TokenType
from monkey.monkey_lexer import Token


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of a node used for serialization.

    Fields:
        kind (str): The node variant (e.g., "let", "infix", "identifier").
        token (str): Literal text of the token that introduced the node.
        statements (list[ASTDict]): Top-level statements of a program.
        name (ASTDict): Binding name of a let statement.
        value (Any): Bound expression, identifier name, or integer value.
        return_value (ASTDict | None): Value of a return statement.
        expression (ASTDict | None): Wrapped expression of an expression statement.
        operator (str): Operator text of prefix and infix expressions.
        left (ASTDict | None): Left operand of an infix expression.
        right (ASTDict | None): Right operand of prefix and infix expressions.
    """

    kind: str
    token: str
    statements: list["ASTDict"]
    name: "ASTDict"
    value: Any
    return_value: "ASTDict | None"
    expression: "ASTDict | None"
    operator: str
    left: "ASTDict | None"
    right: "ASTDict | None"


def _dump(node: "Node | None") -> ASTDict | None:
    return node.to_dict() if node is not None else None


def _text(node: "Node | None") -> str:
    return str(node) if node is not None else ""


class Node:
    """
    Base class of every AST node.

    Args:
        token (Token): The token that introduced the node.

    Methods:
        token_literal(): Literal text of the introducing token.
        to_dict(): Converts the node (and all descendants) into a nested dictionary.
        __eq__(other): Structural equality; source positions are ignored.

    Nodes compare by structure, so they are unhashable: two equal trees may sit at
    different source positions, and a tree's children are plain lists. Key lookups
    by node should use `id(node)`.
    """

    kind = "node"
    __hash__ = None  # type: ignore[assignment]

    def __init__(self, token: Token) -> None:
        self.token = token

    def token_literal(self) -> str:
        return self.token.literal

    def __str__(self) -> str:
        return self.token_literal()

    def to_dict(self) -> ASTDict:
        return {"kind": self.kind, "token": self.token_literal()}

    def __eq__(self, other: Any) -> bool:
        if type(self) is not type(other):
            return False
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({str(self)!r})"


class Statement(Node):
    pass


class Expression(Node):
    pass


class Program(Node):
    """Root node. Its token is the first statement's token, or an empty EOF token."""

    kind = "program"

    def __init__(self, statements: list[Statement] | None = None) -> None:
        self.statements: list[Statement] = statements or []

    @property  # type: ignore[override]
    def token(self) -> Token:
        if self.statements:
            return self.statements[0].token
        return Token(TokenType.EOF, "")

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)

    def __repr__(self) -> str:
        return f"Program(statements={self.statements!r})"

    def to_dict(self) -> ASTDict:
        return {
            "kind": self.kind,
            "token": self.token_literal(),
            "statements": [s.to_dict() for s in self.statements],
        }


class Identifier(Expression):
    kind = "identifier"

    def __init__(self, token: Token, value: str) -> None:
        super().__init__(token)
        self.value = value

    def __str__(self) -> str:
        return self.value

    def to_dict(self) -> ASTDict:
        d = super().to_dict()
        d["value"] = self.value
        return d


class IntegerLiteral(Expression):
    kind = "integer"

    def __init__(self, token: Token, value: int) -> None:
        super().__init__(token)
        self.value = value

    def __str__(self) -> str:
        return self.token_literal()

    def to_dict(self) -> ASTDict:
        d = super().to_dict()
        d["value"] = self.value
        return d


class PrefixExpression(Expression):
    """Unary operator applied to one operand, e.g. `-x` or `!ok`."""

    kind = "prefix"

    def __init__(self, token: Token, operator: str, right: Expression | None) -> None:
        super().__init__(token)
        self.operator = operator
        self.right = right

    def chain(self) -> tuple[list["PrefixExpression"], Expression | None]:
        """Split a run like `(!(-(-x)))` into its operators, outermost first, and `x`.

        Rendering walks the run with this loop instead of recursing, so deeply
        stacked operators render as easily as they parse.
        """
        run: list[PrefixExpression] = []
        node: Expression | None = self
        while isinstance(node, PrefixExpression):
            run.append(node)
            node = node.right
        return run, node

    def __str__(self) -> str:
        run, operand = self.chain()
        opening = "".join(f"({p.operator}" for p in run)
        return opening + _text(operand) + ")" * len(run)

    def to_dict(self) -> ASTDict:
        run, operand = self.chain()
        result = _dump(operand)
        for p in reversed(run):
            d = Node.to_dict(p)
            d["operator"] = p.operator
            d["right"] = result
            result = d
        assert result is not None  # for mypy
        return result


class InfixExpression(Expression):
    """Binary operator between two operands; the token is the operator itself."""

    kind = "infix"

    def __init__(
        self,
        token: Token,
        operator: str,
        left: Expression | None,
        right: Expression | None,
    ) -> None:
        super().__init__(token)
        self.operator = operator
        self.left = left
        self.right = right

    def __str__(self) -> str:
        return f"({_text(self.left)} {self.operator} {_text(self.right)})"

    def to_dict(self) -> ASTDict:
        d = super().to_dict()
        d["operator"] = self.operator
        d["left"] = _dump(self.left)
        d["right"] = _dump(self.right)
        return d


class LetStatement(Statement):
    kind = "let"

    def __init__(self, token: Token, name: Identifier, value: Expression | None) -> None:
        super().__init__(token)
        self.name = name
        self.value = value

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = {_text(self.value)};"

    def to_dict(self) -> ASTDict:
        d = super().to_dict()
        d["name"] = self.name.to_dict()
        d["value"] = _dump(self.value)
        return d


class ReturnStatement(Statement):
    kind = "return"

    def __init__(self, token: Token, return_value: Expression | None) -> None:
        super().__init__(token)
        self.return_value = return_value

    def __str__(self) -> str:
        return f"{self.token_literal()} {_text(self.return_value)};"

    def to_dict(self) -> ASTDict:
        d = super().to_dict()
        d["return_value"] = _dump(self.return_value)
        return d


class ExpressionStatement(Statement):
    """A bare expression used as a statement, e.g. `x + 10;` typed into the REPL."""

    kind = "expression"

    def __init__(self, token: Token, expression: Expression | None) -> None:
        super().__init__(token)
        self.expression = expression

    def __str__(self) -> str:
        return _text(self.expression)

    def to_dict(self) -> ASTDict:
        d = super().to_dict()
        d["expression"] = _dump(self.expression)
        return d


__all__ = [
    "ASTDict",
    "Expression",
    "ExpressionStatement",
    "Identifier",
    "InfixExpression",
    "IntegerLiteral",
    "LetStatement",
    "Node",
    "PrefixExpression",
    "Program",
    "ReturnStatement",
    "Statement",
]
