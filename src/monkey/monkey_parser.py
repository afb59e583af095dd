"""
Monkey Language Parser

Parses a stream of Monkey tokens into an abstract syntax tree (AST).

The parser is a Pratt (operator-precedence) parser: expressions are resolved by
looking up a *prefix* parse function for the token an expression starts with,
then repeatedly handing the result to the *infix* parse function of the next
operator for as long as that operator binds tighter than the current level.
Both function tables are plain dicts owned by each `Parser` instance, so
separate parsers never share registrations.

Supported Constructs
--------------------
- Statements:
    * `let <ident> = ...;`  (the bound value is skipped, only the name is kept)
    * `return ...;`         (the returned value is skipped)
    * expression statements, with an optional trailing `;`
- Expressions:
    * identifiers and integer literals
    * infix `+` (SUM) and `*` (PRODUCT); `*` binds tighter. An operator binds only
      when its level is strictly above the current one, so equal levels group
      to the left on purpose:
      `1 * 2 * 3` is `((1 * 2) * 3)`

Parser Behavior
---------------
- Never raises for malformed input. Problems are recorded as messages in
  `Parser.errors`; the offending statement is dropped and parsing resumes with
  the next token.
- `check_errors()` converts collected errors into a `ParseError` for callers
  that prefer to fail fast.
- With `trace=True` the expression engine prints an indented BEGIN/END line for
  each rule it enters, which is handy when working out how a precedence chain
  was grouped.

Entry Points
------------
- `parse_program()`: Parse the whole token stream into a `Program`.
- `parse_statement()`: Parse one statement at the current token.
- `parse_expression(precedence)`: Parse one expression at a minimum precedence.

Example
-------
    >>> from monkey.monkey_lexer import CharacterStream, Lexer
    >>> parser = Parser(Lexer(CharacterStream("1 + 2 * 3;")))
    >>> str(parser.parse_program())
    '(1 + (2 * 3))'
    >>> parser.errors
    []
"""

from __future__ import annotations

from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Protocol, TextIO

from monkey.monkey_ast import (
    Expression,
    ExpressionStatement,
    Identifier,
    InfixExpression,
    IntegerLiteral,
    LetStatement,
    Program,
    ReturnStatement,
    Statement,
)
from monkey.monkey_constants import (
    ASSIGN,
    ASTERISK,
    EOF,
    IDENT,
    INT,
    INT64_MAX,
    INT64_MIN,
    LET,
    LOWEST,
    PLUS,
    RETURN,
    SEMICOLON,
    precedences,
)
from monkey.monkey_lexer import Token

PrefixParseFn = Callable[[], Expression | None]
InfixParseFn = Callable[[Expression], Expression | None]


class TokenSource(Protocol):
    """Anything that hands out tokens one at a time, ending with EOF forever."""

    def next_token(self) -> Token: ...


class ParseError(Exception):
    """Raised by `Parser.check_errors()` when a parse recorded errors.

    Attributes:
        errors (list[str]): The parser's error messages, in the order recorded.
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or []


def parse_int_literal(text: str) -> int:
    """Converts integer literal text to a signed 64-bit value.

    Accepts ASCII digits only, `0x`/`0o`/`0b` prefixes, a leading `0` as
    legacy octal, and `_` between digits.

    Raises:
        ValueError: If the text is not an integer or does not fit in 64 bits.
    """
    if not text or not text.isascii() or text != text.strip():
        raise ValueError(text)
    if text[:2].lower() in ("0x", "0o", "0b"):
        value = int(text, 0)
    elif len(text) > 1 and text[0] == "0":
        value = int(text, 8)
    else:
        value = int(text, 10)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(text)
    return value


class Parser:
    """
    Monkey Parser Class

    Pulls tokens from a `TokenSource` and builds a `Program`.

    Attributes
    ----------
    source : TokenSource
        Where tokens come from (usually a `Lexer`).
    current : Token
        The token under examination.
    peek : Token
        One-token lookahead.
    errors : list[str]
        Messages recorded while parsing, in order.
    prefix_parse_fns : dict[str, PrefixParseFn]
        Token type → parser for expressions starting with that token.
    infix_parse_fns : dict[str, InfixParseFn]
        Operator token type → parser combining a left operand with that operator.
    trace : bool
        Print BEGIN/END lines for each expression rule.
    """

    def __init__(
        self, source: TokenSource, trace: bool = False, out: TextIO | None = None
    ) -> None:
        self.source = source
        self.errors: list[str] = []
        self.trace = trace
        self.out = out
        self._trace_level = 0

        self.current: Token = Token(EOF, "")
        self.peek: Token = Token(EOF, "")

        self.prefix_parse_fns: dict[str, PrefixParseFn] = {}
        self.register_prefix(IDENT, self.parse_identifier)
        self.register_prefix(INT, self.parse_integer_literal)

        self.infix_parse_fns: dict[str, InfixParseFn] = {}
        self.register_infix(PLUS, self.parse_infix_expression)
        self.register_infix(ASTERISK, self.parse_infix_expression)

        # Fill both current and peek
        self.advance()
        self.advance()

    def register_prefix(self, token_type: str, fn: PrefixParseFn) -> None:
        self.prefix_parse_fns[token_type] = fn

    def register_infix(self, token_type: str, fn: InfixParseFn) -> None:
        self.infix_parse_fns[token_type] = fn

    # Token cursor

    def advance(self) -> Token:
        self.current = self.peek
        self.peek = self.source.next_token()
        return self.current

    def current_is(self, token_type: str) -> bool:
        return self.current.type == token_type

    def peek_is(self, token_type: str) -> bool:
        return self.peek.type == token_type

    def expect_peek(self, token_type: str) -> bool:
        """Advances if the next token has `token_type`, otherwise records an error and stays put."""
        if self.peek_is(token_type):
            self.advance()
            return True
        self.peek_error(token_type)
        return False

    def peek_precedence(self) -> int:
        return precedences.get(self.peek.type, LOWEST)

    def current_precedence(self) -> int:
        return precedences.get(self.current.type, LOWEST)

    # Error collector

    def peek_error(self, token_type: str) -> None:
        self.errors.append(
            f"expected next token to be {token_type}, got {self.peek.type} instead"
        )

    def no_prefix_parse_fn_error(self, token_type: str) -> None:
        self.errors.append(f"no prefix parse function for {token_type} found")

    def check_errors(self) -> None:
        """Raises ParseError if any errors were recorded."""
        if self.errors:
            raise ParseError(
                f"parser has {len(self.errors)} error(s): {self.errors[0]}",
                list(self.errors),
            )

    # Tracing

    @contextmanager
    def _traced(self, rule: str) -> Iterator[None]:
        if not self.trace:
            yield
            return
        self._trace_level += 1
        indent = "\t" * (self._trace_level - 1)
        print(f"{indent}BEGIN {rule} ({self.current.literal!r})", file=self.out)
        try:
            yield
        finally:
            print(f"{indent}END {rule}", file=self.out)
            self._trace_level -= 1

    # Statements

    def parse_program(self) -> Program:
        """Parse statements until EOF and return them as a Program."""
        program = Program()
        while not self.current_is(EOF):
            stmt = self.parse_statement()
            if stmt is not None:
                program.statements.append(stmt)
            self.advance()
        return program

    def parse_statement(self) -> Statement | None:
        if self.current.type == LET:
            return self.parse_let_statement()
        if self.current.type == RETURN:
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def skip_to_semicolon(self) -> None:
        while not self.current_is(SEMICOLON) and not self.current_is(EOF):
            self.advance()

    def parse_let_statement(self) -> LetStatement | None:
        token = self.current
        if not self.expect_peek(IDENT):
            return None
        name = Identifier(self.current)
        if not self.expect_peek(ASSIGN):
            return None
        # TODO: parse the bound value once prefix operators and grouping exist
        self.skip_to_semicolon()
        return LetStatement(token, name)

    def parse_return_statement(self) -> ReturnStatement:
        stmt = ReturnStatement(self.current)
        self.advance()
        self.skip_to_semicolon()
        return stmt

    def parse_expression_statement(self) -> ExpressionStatement | None:
        with self._traced("parse_expression_statement"):
            token = self.current
            expression = self.parse_expression(LOWEST)
            if self.peek_is(SEMICOLON):
                self.advance()
            if expression is None:
                return None
            return ExpressionStatement(token, expression)

    # Expressions

    def parse_expression(self, precedence: int) -> Expression | None:
        """Parse an expression whose operators all bind tighter than `precedence`.

        Returns None if the expression could not be built; the reason is in
        `errors`.
        """
        with self._traced("parse_expression"):
            prefix = self.prefix_parse_fns.get(self.current.type)
            if prefix is None:
                self.no_prefix_parse_fn_error(self.current.type)
                return None
            left = prefix()

            while (
                left is not None
                and not self.peek_is(SEMICOLON)
                and precedence < self.peek_precedence()
            ):
                infix = self.infix_parse_fns.get(self.peek.type)
                if infix is None:
                    break
                left = infix(left)

            return left

    def parse_identifier(self) -> Expression:
        with self._traced("parse_identifier"):
            return Identifier(self.current)

    def parse_integer_literal(self) -> Expression | None:
        with self._traced("parse_integer_literal"):
            try:
                value = parse_int_literal(self.current.literal)
            except ValueError:
                self.errors.append(
                    f'could not parse "{self.current.literal}" as integer'
                )
                return None
            return IntegerLiteral(self.current, value)

    def parse_infix_expression(self, left: Expression) -> Expression | None:
        """Consume the operator in `peek` and its right operand, combining them with `left`."""
        with self._traced("parse_infix_expression"):
            token = self.advance()
            precedence = self.current_precedence()
            self.advance()
            right = self.parse_expression(precedence)
            if right is None:
                return None
            return InfixExpression(token, token.type, left, right)
