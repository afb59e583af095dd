"""
Defines the abstract syntax tree (AST) produced by the Monkey parser.

Classes:
    ASTNode:
        Common base. Tracks the originating token, a value, child nodes and the
        source position, and supports structural equality and dict serialization.

    ASTDict:
        TypedDict representation for serializing ASTNode instances to plain Python
        dictionaries, suitable for JSON output or debugging.

    Program:
        Root of a parse: the ordered list of top-level statements.

    Statement variants:
        LetStatement, ReturnStatement, ExpressionStatement

    Expression variants:
        Identifier, IntegerLiteral, InfixExpression

Each node is created once during parsing and owns its children exclusively, so
the tree is a strict tree with no shared subtrees.

`str(node)` renders the node back to Monkey-like source text, with infix
expressions fully parenthesized so the parsed grouping is visible:

    >>> str(program)
    '((1 * 2) * 3)'
"""

from typing import Any, TypedDict

from monkey.monkey_lexer import Token


class ASTDict(TypedDict, total=False):
    """
    TypedDict representation of an ASTNode used for serialization.

    Fields:
        kind (str): The type of AST node (e.g., "let", "infix", "integer").
        value (Any): The node's value: a name, an integer, an operator, or a nested ASTDict.
        line (int): Line number of the node's first token.
        col (int): Column number of the node's first token.
        children (List[ASTDict]): Child nodes in the AST hierarchy.
    """

    kind: str
    value: Any
    line: int
    col: int
    children: list["ASTDict"]


class ASTNode:
    """
    Base class for every node of the Monkey AST.

    Args:
        token (Token): The token the node starts at.
        value (Any, optional): Name, integer value, operator, or nested node.
        children (list[ASTNode], optional): Child nodes.

    Attributes:
        kind (str): Node type name, fixed per subclass.
        token (Token): Originating token.
        value (Any): Node value.
        children (list[ASTNode]): Child nodes.
        line (int): Line number of the originating token.
        col (int): Column number of the originating token.
    """

    kind = "node"

    def __init__(
        self,
        token: Token,
        value: Any = None,
        children: list["ASTNode"] | None = None,
    ):
        self.token = token
        self.value = value
        self.children: list["ASTNode"] = children or []
        self.line = token.line
        self.col = token.col

    def token_literal(self) -> str:
        return self.token.literal

    def __str__(self) -> str:
        return self.token_literal()

    def __repr__(self) -> str:
        parts = [f"{self.kind}"]
        if self.value is not None:
            parts.append(f"value={repr(self.value)}")
        if self.children:
            preview = ", ".join(repr(c) for c in self.children[:3])
            if len(self.children) > 3:
                preview += ", ..."
            parts.append(f"children=[{preview}]")
        return f"{type(self).__name__}({', '.join(parts)})"

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, ASTNode):
            return False
        return (
            self.kind == other.kind
            and self.value == other.value
            and self.line == other.line
            and self.col == other.col
            and self.children == other.children
        )

    def to_dict(self) -> ASTDict:
        val: Any = self.value
        if isinstance(val, ASTNode):
            val = val.to_dict()

        return {
            "kind": self.kind,
            "value": val,
            "line": self.line,
            "col": self.col,
            "children": [c.to_dict() for c in self.children],
        }


class Statement(ASTNode):
    """Marker base for statement nodes."""


class Expression(ASTNode):
    """Marker base for expression nodes."""


class Program(ASTNode):
    """Root node: top-level statements in source order."""

    kind = "program"

    def __init__(self, statements: list[Statement] | None = None):
        super().__init__(Token("PROGRAM", ""), children=list(statements or []))

    @property
    def statements(self) -> list[ASTNode]:
        return self.children

    def token_literal(self) -> str:
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    def __str__(self) -> str:
        return "".join(str(s) for s in self.statements)


class Identifier(Expression):
    kind = "identifier"

    def __init__(self, token: Token, value: str | None = None):
        super().__init__(token, token.literal if value is None else value)

    def __str__(self) -> str:
        return str(self.value)


class IntegerLiteral(Expression):
    kind = "integer"

    def __init__(self, token: Token, value: int):
        super().__init__(token, value)


class InfixExpression(Expression):
    """A binary operation. `value` holds the operator token type."""

    kind = "infix"

    def __init__(self, token: Token, operator: str, left: Expression, right: Expression):
        super().__init__(token, operator, [left, right])

    @property
    def operator(self) -> str:
        return self.value

    @property
    def left(self) -> ASTNode:
        return self.children[0]

    @property
    def right(self) -> ASTNode:
        return self.children[1]

    def __str__(self) -> str:
        return f"({self.left} {self.operator} {self.right})"


class LetStatement(Statement):
    """`let <name> = ...;` binding.

    The bound value is not retained: the parser skips the tokens between `=` and
    `;`, so only `name` is populated.
    """

    kind = "let"

    def __init__(self, token: Token, name: Identifier):
        super().__init__(token, name)

    @property
    def name(self) -> Identifier:
        return self.value

    def __str__(self) -> str:
        return f"{self.token_literal()} {self.name} = ;"


class ReturnStatement(Statement):
    """`return ...;`. The returned expression is skipped by the parser, not retained."""

    kind = "return"

    return_value = None

    def __str__(self) -> str:
        return f"{self.token_literal()} ;"


class ExpressionStatement(Statement):
    kind = "expr_stmt"

    def __init__(self, token: Token, expression: Expression):
        super().__init__(token, children=[expression])

    @property
    def expression(self) -> ASTNode:
        return self.children[0]

    def __str__(self) -> str:
        return str(self.expression)
